"""
Store configuration module.

Provides the settings a NodeStore is built from.
"""
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from .errors import DEFAULT_MESSAGES
from .logging import LogLevel


@dataclass
class StoreConfig:
    """
    Complete store configuration.

    Attributes:
        error_messages: Templates loaded into the store's ErrorRegistry
        sorted_listing: Default for the ``sorted`` flag of get()
        emit_events: Publish results on the store's EventEmitter
        log_level: Level set on the process-wide ``nodestore.store``
            logger when a store is built; the last store built wins

    Example:
        >>> config = StoreConfig.default().with_messages({10000003: "no such key"})
        >>> store = NodeStore(config)
    """
    error_messages: Dict[int, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))
    sorted_listing: bool = False
    emit_events: bool = True
    log_level: Any = None

    def __post_init__(self):
        if isinstance(self.log_level, str):
            try:
                self.log_level = LogLevel[self.log_level.upper()]
            except KeyError:
                raise ValueError(f"Invalid log_level: {self.log_level!r}") from None
        elif self.log_level is not None and not isinstance(self.log_level, LogLevel):
            raise ValueError(f"Invalid log_level: {self.log_level!r}")

    @classmethod
    def default(cls) -> 'StoreConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'StoreConfig':
        """
        Create configuration from a plain dictionary.

        Error message keys may be given as strings (as they are in JSON).

        Raises:
            ValueError: on unknown keys or non-numeric error codes
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        kwargs = dict(data)
        if 'error_messages' in kwargs:
            if not isinstance(kwargs['error_messages'], Mapping):
                raise ValueError("error_messages must be a mapping of code to message")
            messages = {}
            for code, message in kwargs['error_messages'].items():
                try:
                    messages[int(code)] = str(message)
                except (TypeError, ValueError):
                    raise ValueError(f"Invalid error code: {code!r}") from None
            merged = dict(DEFAULT_MESSAGES)
            merged.update(messages)
            kwargs['error_messages'] = merged
        return cls(**kwargs)

    def with_messages(self, overlay: Mapping[int, str]) -> 'StoreConfig':
        """Returns a copy whose messages are merged with overlay."""
        messages = dict(self.error_messages)
        messages.update(overlay)
        return replace(self, error_messages=messages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error_messages': dict(self.error_messages),
            'sorted_listing': self.sorted_listing,
            'emit_events': self.emit_events,
            'log_level': self.log_level.name if self.log_level else None,
        }
