"""Event emitter implementation using Observer Pattern."""
import threading
from typing import Callable, Dict, List, Optional


class EventEmitter:
    """
    Event emitter using Observer Pattern.

    Handlers are called synchronously, in registration order, on the
    thread that emits.
    """

    def __init__(self):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
        self._lock = threading.Lock()

    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        with self._lock:
            self._events.setdefault(event, []).append(callback)
        return self

    def once(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers a handler that is removed after its first call."""
        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            callback(*args, **kwargs)
        return self.on(event, wrapper)

    def emit(self, event: str, *args, **kwargs) -> int:
        """Emits an event, returns the number of handlers called."""
        with self._lock:
            callbacks = list(self._events.get(event, ()))
        for callback in callbacks:
            callback(*args, **kwargs)
        return len(callbacks)

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes an event handler, or all handlers of event."""
        with self._lock:
            if event not in self._events:
                return self

            if callback is None:
                del self._events[event]
            else:
                self._events[event] = [cb for cb in self._events[event] if cb != callback]

        return self

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._events.get(event, ()))
