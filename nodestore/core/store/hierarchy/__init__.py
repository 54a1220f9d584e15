"""Hierarchy management."""
from .path_resolver import PathResolver, Resolution

__all__ = [
    'PathResolver',
    'Resolution',
]
