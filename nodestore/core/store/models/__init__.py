"""Store domain models."""
from .node import Node
from .result import ACTIONS, Action, Result

__all__ = [
    'ACTIONS',
    'Action',
    'Node',
    'Result',
]
