"""Store module: tree models, path resolution and the store itself."""
from .models import ACTIONS, Action, Node, Result
from .hierarchy import PathResolver, Resolution
from .locking import ReadWriteLock
from .stats import StoreStats
from .store import NodeStore
from .async_store import AsyncNodeStore

__all__ = [
    'ACTIONS',
    'Action',
    'AsyncNodeStore',
    'Node',
    'NodeStore',
    'PathResolver',
    'ReadWriteLock',
    'Resolution',
    'Result',
    'StoreStats',
]
