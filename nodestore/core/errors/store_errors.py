"""Store error codes, message registry and exceptions."""
import json
import threading
from typing import Dict, Mapping, Optional


class ErrorCodes:
    """Store error codes."""

    UNKNOWN = 10009999
    NOT_FILE = 10000001  # operation needs a leaf, found a directory
    NOT_DIR = 10000002  # operation needs a directory, found a leaf
    NOT_EXISTS = 10000003
    EXISTS = 10000004
    DIR_NOT_EMPTY = 10000005
    ROOT_READ_ONLY = 10000006


DEFAULT_MESSAGES: Dict[int, str] = {
    ErrorCodes.UNKNOWN: 'Unknown Error',
    ErrorCodes.NOT_FILE: 'Target is Not File',
    ErrorCodes.NOT_DIR: 'Target is Not Dir',
    ErrorCodes.NOT_EXISTS: 'Target is not exists',
    ErrorCodes.EXISTS: 'Target is exists',
    ErrorCodes.DIR_NOT_EMPTY: 'Directory is not empty',
    ErrorCodes.ROOT_READ_ONLY: 'Root is read only',
}

# Swapped out in tests to exercise the fallback encoder
_marshal = json.dumps


_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\b': '\\b',
    '\f': '\\f',
}


def _quote(text: str) -> str:
    """Quotes a string the way the JSON encoder would."""
    escaped = []
    for char in text:
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) > 0x7e:
            if ord(char) > 0xffff:
                high, low = divmod(ord(char) - 0x10000, 0x400)
                escaped.append('\\u%04x\\u%04x' % (0xd800 + high, 0xdc00 + low))
            else:
                escaped.append('\\u%04x' % ord(char))
        else:
            escaped.append(char)
    return '"' + ''.join(escaped) + '"'


class StoreError(Exception):
    """
    Exception raised by store operations.

    Attributes:
        error_code: Numeric classification (see ErrorCodes)
        message: Template message looked up in the registry ("" if unknown)
        cause: Situational detail, usually the offending key
    """

    def __init__(self, error_code: int, message: str = '', cause: str = ''):
        self.error_code = error_code
        self.message = message
        self.cause = cause
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} ({self.cause}) [{self.error_code}]"
        return f"{self.message} [{self.error_code}]"

    def __repr__(self) -> str:
        return (
            f"StoreError(error_code={self.error_code!r}, "
            f"message={self.message!r}, cause={self.cause!r})"
        )

    def to_dict(self) -> Dict[str, object]:
        """Converts error to its wire dictionary."""
        return {
            'ErrorCode': self.error_code,
            'Message': self.message,
            'Cause': self.cause,
        }

    def json_string(self) -> str:
        """
        Serializes the error to compact JSON.

        Never raises: if the encoder fails, an equivalent string is built
        by hand.
        """
        try:
            return _marshal(self.to_dict(), separators=(',', ':'))
        except (TypeError, ValueError):
            return '{"ErrorCode":%d,"Message":%s,"Cause":%s}' % (
                self.error_code,
                _quote(self.message),
                _quote(self.cause),
            )


class ErrorRegistry:
    """
    Thread-safe mapping of error codes to message templates.

    Each store owns one registry, so message sets can differ between
    stores and be reconfigured at runtime.

    Example:
        >>> registry = ErrorRegistry(DEFAULT_MESSAGES)
        >>> registry.set_messages({ErrorCodes.NOT_DIR: 'not a folder'})
        >>> registry.get_message(ErrorCodes.NOT_DIR)
        'not a folder'
    """

    def __init__(self, messages: Optional[Mapping[int, str]] = None):
        self._lock = threading.Lock()
        self._messages: Dict[int, str] = dict(messages or {})

    def get_message(self, code: int) -> str:
        """Gets the template for a code, "" when unregistered."""
        with self._lock:
            return self._messages.get(code, '')

    def set_messages(self, templates: Mapping[int, str]) -> 'ErrorRegistry':
        """
        Merges templates into the registry.

        Codes present in both keep the new message; codes only present
        in the registry are left alone.
        """
        with self._lock:
            merged = dict(self._messages)
            merged.update(templates)
            self._messages = merged
        return self

    def replace(self, templates: Mapping[int, str]) -> 'ErrorRegistry':
        """Replaces the whole mapping."""
        with self._lock:
            self._messages = dict(templates)
        return self

    def snapshot(self) -> Dict[int, str]:
        """Returns a copy of the current mapping."""
        with self._lock:
            return dict(self._messages)

    def new_error(self, code: int, cause: str = '') -> StoreError:
        """Builds a StoreError with this registry's message for code."""
        return StoreError(code, self.get_message(code), cause)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._messages


def new_error(code: int, cause: str = '', registry: Optional[ErrorRegistry] = None) -> StoreError:
    """Creates a StoreError; message is "" without a registry."""
    if registry is None:
        return StoreError(code, '', cause)
    return registry.new_error(code, cause)


def is_error(err: Optional[BaseException], code: int) -> bool:
    """Checks err is a StoreError carrying code."""
    return isinstance(err, StoreError) and err.error_code == code


def is_store_error(err: Optional[BaseException]) -> bool:
    """Checks err is a StoreError (None is not)."""
    return isinstance(err, StoreError)
