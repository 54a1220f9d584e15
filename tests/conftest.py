"""Pytest fixtures for nodestore tests."""
import pytest

from nodestore.core.config import StoreConfig
from nodestore.core.errors import DEFAULT_MESSAGES, ErrorRegistry
from nodestore.core.store import NodeStore


@pytest.fixture
def store():
    """Empty store with default configuration."""
    return NodeStore()


@pytest.fixture
def populated_store():
    """
    Store holding:

        /app/name        = "demo"
        /app/db/host     = "localhost"
        /app/db/port     = "5432"
        /empty/          (directory)
        /flag            = ""
    """
    s = NodeStore()
    s.create("/app/name", value="demo")
    s.create("/app/db/host", value="localhost")
    s.create("/app/db/port", value="5432")
    s.create("/empty", is_dir=True)
    s.create("/flag", value="")
    return s


@pytest.fixture
def registry():
    """Registry loaded with the default messages."""
    return ErrorRegistry(DEFAULT_MESSAGES)


@pytest.fixture
def quiet_config():
    """Configuration with events disabled."""
    return StoreConfig(emit_events=False)
