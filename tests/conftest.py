"""Pytest configuration and fixtures."""

import os
from typing import Any

import pytest
import structlog
from pydantic import BaseModel

from jsonui.catalog import ActionDefinition, ComponentDefinition, create_catalog
from jsonui.core import get_settings
from jsonui.logic import AuthState, VisibilityContext


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["JSONUI_LOG_LEVEL"] = "DEBUG"
    os.environ["JSONUI_STREAM_API_URL"] = "http://test.local/api/generate"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Fresh settings for each test."""
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any logging configuration a test installed."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# ============================================================================
# Catalog Fixtures
# ============================================================================

class ButtonProps(BaseModel):
    label: str
    variant: str = "primary"


class TextProps(BaseModel):
    content: str


class CardProps(BaseModel):
    title: str | None = None


class SubmitParams(BaseModel):
    form_id: str


@pytest.fixture
def sample_catalog():
    """Three components and two actions."""
    return create_catalog(
        name="Test",
        components={
            "Card": ComponentDefinition(props=CardProps, has_children=True, description="Container"),
            "Button": ComponentDefinition(props=ButtonProps, description="Clickable button"),
            "Text": ComponentDefinition(props=TextProps),
        },
        actions={
            "submit": ActionDefinition(params=SubmitParams, description="Submit a form"),
            "refresh": ActionDefinition(),
        },
        functions={"even": lambda value, args: isinstance(value, int) and value % 2 == 0},
    )


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_data() -> dict[str, Any]:
    """Nested data model."""
    return {
        "user": {"name": "Ada", "age": 36, "email": "ada@example.com", "admin": False},
        "cart": {"items": [], "total": 0},
        "flags": {"beta": True},
    }


@pytest.fixture
def ctx(sample_data):
    """Signed-out evaluation context over the sample data."""
    return VisibilityContext(data_model=sample_data)


@pytest.fixture
def signed_in_ctx(sample_data):
    """Signed-in evaluation context over the sample data."""
    return VisibilityContext(data_model=sample_data, auth_state=AuthState(isSignedIn=True))


@pytest.fixture
def patch_lines() -> list[str]:
    """A complete patch stream for a card with two children."""
    return [
        '{"op":"set","path":"/root","value":"main-card"}',
        '{"op":"add","path":"/elements/main-card","value":{"key":"main-card","type":"Card",'
        '"props":{"title":"Hi"},"children":["greeting","ok-btn"]}}',
        '{"op":"add","path":"/elements/greeting","value":{"key":"greeting","type":"Text",'
        '"props":{"content":"Hello"},"parentKey":"main-card"}}',
        '{"op":"add","path":"/elements/ok-btn","value":{"key":"ok-btn","type":"Button",'
        '"props":{"label":"OK"},"parentKey":"main-card"}}',
    ]


@pytest.fixture
def patch_stream(patch_lines) -> str:
    """Patch lines joined as a newline-terminated stream."""
    return "\n".join(patch_lines) + "\n"
