"""Tests for the data store."""

import pytest
from structlog.testing import capture_logs

from jsonui.core import PathConflictError
from jsonui.data import DataStore


@pytest.mark.unit
def test_get_and_set():
    """Test reads and writes through paths."""
    store = DataStore({"user": {"name": "Ada"}})

    assert store.get("/user/name") == "Ada"
    store.set("/user/email", "ada@example.com")
    assert store.get("/user") == {"name": "Ada", "email": "ada@example.com"}


@pytest.mark.unit
def test_on_change_and_logging():
    """Every write notifies the host and is logged."""
    changes = []
    store = DataStore(on_change=lambda path, value: changes.append((path, value)))

    with capture_logs() as logs:
        store.update({"/a": 1, "/b/c": 2})

    assert changes == [("/a", 1), ("/b/c", 2)]
    assert [log["path"] for log in logs if log["event"] == "data_set"] == ["/a", "/b/c"]


@pytest.mark.unit
def test_data_is_read_only():
    """The data view cannot be written."""
    store = DataStore({"a": 1})
    with pytest.raises(TypeError):
        store.data["a"] = 2


@pytest.mark.unit
def test_snapshot_is_detached():
    """Snapshots do not observe later writes."""
    store = DataStore({"user": {"name": "Ada"}})
    snapshot = store.snapshot()
    store.set("/user/name", "Grace")

    assert snapshot == {"user": {"name": "Ada"}}
    assert store.get("/user/name") == "Grace"


@pytest.mark.unit
def test_strict_store():
    """Strict stores refuse to overwrite scalars mid-path."""
    store = DataStore({"count": 3}, strict=True)
    with pytest.raises(PathConflictError):
        store.set("/count/value", 4)
    assert store.get("/count") == 3
