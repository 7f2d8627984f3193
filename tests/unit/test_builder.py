"""Tests for incremental tree building."""

import pytest
from hypothesis import HealthCheck, given, settings as hypothesis_settings, strategies as st
from structlog.testing import capture_logs

from jsonui.streaming import TreeBuilder, UITree


@pytest.mark.unit
def test_feed_complete_stream(patch_stream):
    """A whole stream builds the whole tree."""
    builder = TreeBuilder()
    snapshots = builder.feed(patch_stream)

    assert len(snapshots) == 4
    tree = builder.tree
    assert tree.root == "main-card"
    assert set(tree.elements) == {"main-card", "greeting", "ok-btn"}
    assert tree.is_complete
    assert [child.key for child in tree.children_of("main-card")] == ["greeting", "ok-btn"]


@pytest.mark.unit
def test_partial_lines_wait_for_newline(patch_lines):
    """Nothing is applied until a line completes."""
    builder = TreeBuilder()
    line = patch_lines[0]

    assert builder.feed(line[:10]) == []
    assert builder.tree.root == ""
    assert builder.feed(line[10:]) == []
    assert len(builder.feed("\n")) == 1
    assert builder.tree.root == "main-card"


@pytest.mark.unit
def test_flush_applies_trailing_line(patch_lines):
    """An unterminated final line is applied on flush."""
    builder = TreeBuilder()
    builder.feed(patch_lines[0])

    assert builder.tree.root == ""
    assert builder.flush().root == "main-card"
    assert builder.flush() is None


@pytest.mark.unit
def test_multibyte_split_across_chunks():
    """UTF-8 characters may be split between byte chunks."""
    line = '{"op":"add","path":"/elements/t","value":{"type":"Text","props":{"content":"café ☕"}}}\n'
    data = line.encode("utf-8")
    split = data.index("☕".encode("utf-8")) + 1

    builder = TreeBuilder()
    builder.feed(data[:split])
    builder.feed(data[split:])

    assert builder.tree.get("t").props["content"] == "café ☕"


@pytest.mark.unit
def test_bad_lines_are_skipped(patch_lines):
    """A bad line is logged and the stream continues."""
    stream = "\n".join([patch_lines[0], "not json", '{"op":"teleport","path":"/root"}', patch_lines[1]]) + "\n"
    builder = TreeBuilder()

    with capture_logs() as logs:
        builder.feed(stream)

    assert builder.tree.root == "main-card"
    assert "main-card" in builder.tree.elements
    assert {log["event"] for log in logs} >= {"patch_parse_failed", "unknown_patch_op"}
    assert builder.counter.skipped == 2


@pytest.mark.unit
def test_subscribe_receives_every_snapshot(patch_stream):
    """Subscribers see each new snapshot in order."""
    builder = TreeBuilder()
    seen = []
    unsubscribe = builder.subscribe(seen.append)

    builder.feed(patch_stream)
    assert len(seen) == 4
    assert seen[0].root == "main-card"
    assert seen[-1] is builder.tree

    unsubscribe()
    builder.feed('{"op":"remove","path":"/elements/greeting"}\n')
    assert len(seen) == 4


@pytest.mark.unit
def test_noop_patch_does_not_publish():
    """Removing an absent element publishes nothing."""
    builder = TreeBuilder()
    seen = []
    builder.subscribe(seen.append)

    assert builder.feed('{"op":"remove","path":"/elements/ghost"}\n') == []
    assert seen == []


@pytest.mark.unit
def test_feed_all_and_reset(patch_lines):
    """feed_all consumes an iterable; reset starts over."""
    builder = TreeBuilder()
    tree = builder.feed_all(line + "\n" for line in patch_lines)
    assert tree.is_complete

    builder.reset()
    assert builder.tree == UITree()
    assert builder.counter.lines == 0


@pytest.mark.unit
def test_incomplete_tree_reports_missing(patch_lines):
    """Children that have not arrived are listed as missing."""
    builder = TreeBuilder()
    builder.feed("\n".join(patch_lines[:2]) + "\n")

    assert not builder.tree.is_complete
    assert builder.tree.missing_keys() == ["greeting", "ok-btn"]
    assert list(builder.tree.children_of("main-card")) == []


@pytest.mark.unit
@hypothesis_settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.lists(st.integers(min_value=0, max_value=2000), max_size=8))
def test_chunking_does_not_change_result(patch_stream, cuts):
    """Any split of the byte stream yields the same final tree."""
    data = patch_stream.encode("utf-8")
    points = sorted({min(cut, len(data)) for cut in cuts})
    chunks = [data[start:end] for start, end in zip([0] + points, points + [len(data)])]

    expected = TreeBuilder().feed_all([data])
    assert TreeBuilder().feed_all(chunks) == expected
