"""
nodestore - In-memory hierarchical key/value store.

Usage:
    >>> from nodestore import NodeStore
    >>>
    >>> store = NodeStore()
    >>> store.create("/config/db/host", value="localhost")
    >>> store.get("/config", recursive=True).curr_node.to_dict()
"""
import logging

from .core.store import (
    ACTIONS,
    Action,
    AsyncNodeStore,
    Node,
    NodeStore,
    PathResolver,
    Result,
)
from .core.errors import (
    DEFAULT_MESSAGES,
    ErrorCodes,
    ErrorRegistry,
    StoreError,
    is_error,
    is_store_error,
    new_error,
)
from .core.config import StoreConfig
from .core.events import EventEmitter
from .core.logging import LogLevel, configure_logging, get_logger

__version__ = '0.1.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for nodestore modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    for logger_name in ('nodestore', 'nodestore.store', 'nodestore.cli'):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'ACTIONS',
    'Action',
    'AsyncNodeStore',
    'DEFAULT_MESSAGES',
    'ErrorCodes',
    'ErrorRegistry',
    'EventEmitter',
    'LogLevel',
    'Node',
    'NodeStore',
    'PathResolver',
    'Result',
    'StoreConfig',
    'StoreError',
    'configure_logging',
    'get_logger',
    'is_error',
    'is_store_error',
    'new_error',
    'setup_logging',
]
