"""Path normalization and resolution in the node tree."""
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import Node

SEPARATOR = '/'


@dataclass
class Resolution:
    """
    Outcome of walking a path from the root.

    Attributes:
        path: Canonical path that was walked
        node: Target node if the whole path resolved
        parent: Deepest existing directory along the path
        missing: Segments below ``parent`` that do not exist
        blocked_by: Leaf met where a directory was needed
    """
    path: str
    node: Optional[Node]
    parent: Optional[Node]
    missing: List[str] = field(default_factory=list)
    blocked_by: Optional[Node] = None

    @property
    def found(self) -> bool:
        return self.node is not None

    @property
    def is_blocked(self) -> bool:
        return self.blocked_by is not None


class PathResolver:
    """Resolves paths in node tree."""

    @staticmethod
    def normalize(key: str) -> str:
        """
        Turns a caller key into a canonical absolute path.

        "a//b/", "/a/./b" and "a/c/../b" all become "/a/b"; ".." never
        climbs above the root.
        """
        parts: List[str] = []
        for part in key.split(SEPARATOR):
            if not part or part == '.':
                continue
            if part == '..':
                if parts:
                    parts.pop()
                continue
            parts.append(part)
        return SEPARATOR + SEPARATOR.join(parts)

    @staticmethod
    def split(path: str) -> List[str]:
        """Segments of a canonical path ([] for the root)."""
        return [p for p in path.split(SEPARATOR) if p]

    @staticmethod
    def join(parent: str, name: str) -> str:
        if parent == SEPARATOR:
            return SEPARATOR + name
        return parent + SEPARATOR + name

    @classmethod
    def resolve(cls, root: Node, key: str) -> Resolution:
        """Walks key from root one segment at a time. Read only."""
        path = cls.normalize(key)
        parts = cls.split(path)
        current = root

        for index, part in enumerate(parts):
            if not current.is_dir:
                return Resolution(
                    path=path,
                    node=None,
                    parent=current.get_parent(),
                    missing=parts[index - 1:],
                    blocked_by=current,
                )
            child = current.get_child(part)
            if child is None:
                return Resolution(path=path, node=None, parent=current, missing=parts[index:])
            current = child

        return Resolution(path=path, node=current, parent=current.get_parent())

    @classmethod
    def resolve_path(cls, root: Node, path: str) -> Optional[Node]:
        """Resolves path from root node."""
        return cls.resolve(root, path).node
