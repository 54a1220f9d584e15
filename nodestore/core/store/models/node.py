"""Tree node using Composite Pattern."""
from typing import Any, Dict, List, Optional


class Node:
    """
    A directory or a leaf in the store tree.

    Directories hold named children and never a value; leaves hold an
    optional value and never children. ``value=None`` and ``value=""``
    are different states.
    """

    def __init__(self, key: str, is_dir: bool = False, value: Optional[str] = None):
        """Initializes node."""
        self.key = key
        self.is_dir = is_dir
        self.value: Optional[str] = None if is_dir else value
        self._children: Optional[Dict[str, 'Node']] = {} if is_dir else None
        self._parent: Optional['Node'] = None

    def __repr__(self) -> str:
        if self.is_dir:
            return f"Node(key={self.key!r}, is_dir=True, children={len(self._children)})"
        return f"Node(key={self.key!r}, is_dir=False, value={self.value!r})"

    @property
    def name(self) -> str:
        """Last path segment ("" for the root)."""
        return self.key.rsplit('/', 1)[-1]

    @property
    def is_root(self) -> bool:
        return self.key == '/'

    @property
    def children(self) -> Optional[Dict[str, 'Node']]:
        """Child mapping of a directory, None on leaves."""
        return self._children

    def get_parent(self) -> Optional['Node']:
        """Gets parent node."""
        return self._parent

    def get_child(self, name: str) -> Optional['Node']:
        """Finds child by name."""
        if not self.is_dir:
            return None
        return self._children.get(name)

    def get_children(self, sorted_children: bool = False) -> List['Node']:
        """Gets child nodes, optionally ordered by name."""
        if not self.is_dir:
            return []
        if sorted_children:
            return [self._children[name] for name in sorted(self._children)]
        return list(self._children.values())

    def has_children(self) -> bool:
        return bool(self._children)

    def add_child(self, child: 'Node'):
        """Adds child node; a child with the same name is replaced in place."""
        if not self.is_dir:
            raise ValueError(f"Cannot add child to leaf {self.key}")
        replaced = self._children.get(child.name)
        if replaced is not None and replaced is not child:
            replaced._parent = None
        self._children[child.name] = child
        child._parent = self

    def remove_child(self, name: str) -> Optional['Node']:
        """Removes child node by name."""
        if not self.is_dir:
            return None
        child = self._children.pop(name, None)
        if child is not None:
            child._parent = None
        return child

    def iter_subtree(self):
        """Yields this node then every descendant, depth first."""
        yield self
        for child in self.get_children():
            yield from child.iter_subtree()

    def clone(self, depth: Optional[int] = None, sorted_children: bool = False) -> 'Node':
        """
        Copies the node without sharing any state.

        Args:
            depth: Levels of children to copy; None copies the whole
                subtree, 0 copies the node alone
            sorted_children: Insert copied children in name order

        Returns:
            Detached copy (its parent is None)
        """
        copy = Node(self.key, self.is_dir, self.value)
        if self.is_dir and (depth is None or depth > 0):
            next_depth = None if depth is None else depth - 1
            for child in self.get_children(sorted_children):
                copy.add_child(child.clone(next_depth, sorted_children))
        return copy

    def to_dict(self) -> Dict[str, Any]:
        """Converts node to dictionary."""
        data: Dict[str, Any] = {
            'key': self.key,
            'dir': self.is_dir,
        }
        if self.is_dir:
            if self._children:
                data['nodes'] = [child.to_dict() for child in self._children.values()]
        else:
            data['value'] = self.value
        return data
