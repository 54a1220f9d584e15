"""In-memory hierarchical key/value store."""
from typing import Callable, Optional

from ..config import StoreConfig
from ..errors import ErrorCodes, ErrorRegistry, StoreError
from ..events import EventEmitter
from ..logging import get_logger
from .hierarchy import PathResolver, Resolution
from .locking import ReadWriteLock
from .models import Action, Node, Result
from .stats import StoreStats

logger = get_logger('store')

ROOT_KEY = '/'


class NodeStore:
    """
    Filesystem-like tree of directories and leaf values.

    Every operation returns a Result holding detached snapshots of the
    node after and before the call, or raises StoreError. Mutations
    validate before they touch the tree, so a failed call changes
    nothing.

    Example:
        >>> store = NodeStore()
        >>> store.create("/app/name", value="demo").curr_node.key
        '/app/name'
        >>> store.get("app", recursive=True).curr_node.is_dir
        True
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        registry: Optional[ErrorRegistry] = None,
    ):
        self.config = config or StoreConfig.default()
        self._errors = registry if registry is not None else ErrorRegistry(self.config.error_messages)
        self._events = EventEmitter()
        self._stats = StoreStats()
        self._lock = ReadWriteLock()
        self._root = Node(ROOT_KEY, is_dir=True)

        # nodestore.store is shared by every store in the process
        if self.config.log_level is not None:
            logger.setLevel(self.config.log_level.value)

    @property
    def errors(self) -> ErrorRegistry:
        """Registry used to build this store's errors."""
        return self._errors

    @property
    def events(self) -> EventEmitter:
        return self._events

    @property
    def stats(self) -> StoreStats:
        return self._stats

    # =========================================================================
    # Public operations
    # =========================================================================

    def get(self, key: str, recursive: bool = False, sorted: Optional[bool] = None) -> Result:
        """
        Reads a node.

        Args:
            key: Path of the node
            recursive: Include the whole subtree of a directory instead of
                its direct children only
            sorted: Order children by name (defaults to config.sorted_listing)

        Raises:
            StoreError: NOT_EXISTS if absent, NOT_DIR if the path crosses a leaf
        """
        sort_children = self.config.sorted_listing if sorted is None else sorted

        def operation() -> Result:
            with self._lock.read_locked():
                node = self._locate(PathResolver.resolve(self._root, key))
                snapshot = node.clone(None if recursive else 1, sort_children)
            return Result(Action.GET, snapshot)

        return self._execute(Action.GET, operation)

    def create(self, key: str, is_dir: bool = False, value: Optional[str] = None) -> Result:
        """
        Creates a node and any missing parent directories.

        Raises:
            StoreError: EXISTS if the path is taken, NOT_DIR if a parent
                is a leaf
        """
        def operation() -> Result:
            with self._lock.write_locked():
                resolution = PathResolver.resolve(self._root, key)
                if resolution.found:
                    raise self._error(ErrorCodes.EXISTS, resolution.path)
                if resolution.is_blocked:
                    raise self._error(ErrorCodes.NOT_DIR, resolution.blocked_by.key)

                node = self._build(resolution, is_dir, value)
                logger.debug("create %s dir=%s", node.key, is_dir)
                return Result(Action.CREATE, node.clone())

        return self._execute(Action.CREATE, operation)

    def set(self, key: str, is_dir: bool = False, value: Optional[str] = None) -> Result:
        """
        Creates or replaces a node.

        An existing node is replaced whatever its kind; a replaced
        directory loses its children.

        Raises:
            StoreError: ROOT_READ_ONLY for "/", NOT_DIR if a parent is a leaf
        """
        def operation() -> Result:
            with self._lock.write_locked():
                resolution = PathResolver.resolve(self._root, key)
                if resolution.path == ROOT_KEY:
                    raise self._error(ErrorCodes.ROOT_READ_ONLY, ROOT_KEY)
                if resolution.is_blocked:
                    raise self._error(ErrorCodes.NOT_DIR, resolution.blocked_by.key)

                if not resolution.found:
                    node = self._build(resolution, is_dir, value)
                    logger.debug("set %s (new) dir=%s", node.key, is_dir)
                    return Result(Action.SET, node.clone())

                old = resolution.node
                prev = old.clone()
                node = Node(old.key, is_dir, value)
                old.get_parent().add_child(node)
                logger.debug("set %s dir=%s (was dir=%s)", node.key, is_dir, prev.is_dir)
                return Result(Action.SET, node.clone(), prev)

        return self._execute(Action.SET, operation)

    def update(self, key: str, value: Optional[str]) -> Result:
        """
        Replaces the value of an existing leaf.

        Raises:
            StoreError: NOT_EXISTS if absent, NOT_FILE on a directory
        """
        def operation() -> Result:
            with self._lock.write_locked():
                node = self._locate(PathResolver.resolve(self._root, key))
                if node.is_dir:
                    raise self._error(ErrorCodes.NOT_FILE, node.key)

                prev = node.clone()
                node.value = value
                logger.debug("update %s", node.key)
                return Result(Action.UPDATE, node.clone(), prev)

        return self._execute(Action.UPDATE, operation)

    def delete(self, key: str, recursive: bool = False, dir: bool = False) -> Result:
        """
        Removes a node.

        Args:
            key: Path of the node
            recursive: Allow removing a non-empty directory with its subtree
            dir: Caller expects a directory; a leaf then fails with NOT_DIR

        Returns:
            Result whose curr_node and prev_node are both the last state
            of the removed node

        Raises:
            StoreError: NOT_EXISTS, NOT_DIR, DIR_NOT_EMPTY or ROOT_READ_ONLY
        """
        def operation() -> Result:
            with self._lock.write_locked():
                resolution = PathResolver.resolve(self._root, key)
                if resolution.path == ROOT_KEY:
                    raise self._error(ErrorCodes.ROOT_READ_ONLY, ROOT_KEY)
                node = self._locate(resolution)
                if dir and not node.is_dir:
                    raise self._error(ErrorCodes.NOT_DIR, node.key)
                if node.has_children() and not recursive:
                    raise self._error(ErrorCodes.DIR_NOT_EMPTY, node.key)

                snapshot = node.clone()
                node.get_parent().remove_child(node.name)
                logger.debug("delete %s recursive=%s", node.key, recursive)
                return Result(Action.DELETE, snapshot, snapshot.clone())

        return self._execute(Action.DELETE, operation)

    def exists(self, key: str) -> bool:
        """Checks a node lives at key."""
        with self._lock.read_locked():
            return PathResolver.resolve_path(self._root, key) is not None

    def __len__(self) -> int:
        """Number of nodes, root excluded."""
        with self._lock.read_locked():
            return sum(1 for _ in self._root.iter_subtree()) - 1

    # =========================================================================
    # Helpers
    # =========================================================================

    def _error(self, code: int, cause: str) -> StoreError:
        return self._errors.new_error(code, cause)

    def _locate(self, resolution: Resolution) -> Node:
        if resolution.is_blocked:
            raise self._error(ErrorCodes.NOT_DIR, resolution.blocked_by.key)
        if not resolution.found:
            raise self._error(ErrorCodes.NOT_EXISTS, resolution.path)
        return resolution.node

    @staticmethod
    def _build(resolution: Resolution, is_dir: bool, value: Optional[str]) -> Node:
        """Creates the missing segments of an unresolved path."""
        parent = resolution.parent
        for name in resolution.missing[:-1]:
            directory = Node(PathResolver.join(parent.key, name), is_dir=True)
            parent.add_child(directory)
            parent = directory

        node = Node(resolution.path, is_dir, value)
        parent.add_child(node)
        return node

    def _execute(self, action: str, operation: Callable[[], Result]) -> Result:
        """Runs operation, then records stats and emits events unlocked."""
        try:
            result = operation()
        except StoreError as err:
            self._stats.record(action, False)
            logger.debug("%s failed: %s", action, err)
            if self.config.emit_events:
                self._events.emit('error', err)
            raise

        self._stats.record(action, True)
        if self.config.emit_events and action != Action.GET:
            self._events.emit(action, result.clone())
        return result
