"""Per-action operation counters."""
import threading
from dataclasses import dataclass, field
from typing import Dict

from .models import ACTIONS


@dataclass
class StoreStats:
    """
    Success and failure counts for each action.

    Example:
        >>> store.stats.to_dict()
        {'getSuccess': 3, 'getFail': 1, ...}
    """
    success: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(ACTIONS, 0))
    fail: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(ACTIONS, 0))
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, action: str, ok: bool) -> None:
        counters = self.success if ok else self.fail
        with self._lock:
            counters[action] += 1

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self.success.values()) + sum(self.fail.values())

    def reset(self) -> None:
        with self._lock:
            for action in ACTIONS:
                self.success[action] = 0
                self.fail[action] = 0

    def to_dict(self) -> Dict[str, int]:
        with self._lock:
            data = {}
            for action in ACTIONS:
                data[f"{action}Success"] = self.success[action]
                data[f"{action}Fail"] = self.fail[action]
            return data
