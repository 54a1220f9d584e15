"""Logging utilities for nodestore modules."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

ROOT_LOGGER_NAME = 'nodestore'
UNKNOWN_SITE = '-:-:0'


class LogLevel(Enum):
    """Log levels mirroring the logging module."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


@dataclass(frozen=True)
class CallerSite:
    """
    Source location attached to a log record.

    Passed explicitly by the logging call site:
        >>> logger.debug("set %s", key, extra={'caller': CallerSite('store.py', 'set', 42)})
    """
    file: str
    function: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.function}:{self.line}"


class CallerSiteFilter(logging.Filter):
    """Sets ``record.site`` to "file:function:line" on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        caller = getattr(record, 'caller', None)
        if isinstance(caller, CallerSite):
            record.site = str(caller)
        elif record.lineno:
            record.site = str(CallerSite(record.filename, record.funcName, record.lineno))
        else:
            record.site = UNKNOWN_SITE
        return True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the nodestore namespace.

    The logger propagates to the root logger, so basicConfig() works
    without calling configure_logging(). The package logger defaults to
    WARNING only when the root logger has no handlers.

    Args:
        name: Sub-logger name, e.g. 'store' -> 'nodestore.store'

    Returns:
        Logger instance
    """
    full_name = f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME
    logger = logging.getLogger(full_name)
    logger.propagate = True

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not logging.getLogger().handlers and package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.WARNING)

    return logger


class StoreLogger:
    """
    Singleton owning the handlers of the 'nodestore' logger.

    Methods return self so calls can be chained:
        >>> StoreLogger().set_level(LogLevel.DEBUG).enable_console()
    """

    DEFAULT_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
    DEBUG_FORMAT = '%(asctime)s %(levelname)s %(name)s [%(site)s]: %(message)s'

    _instance: Optional['StoreLogger'] = None

    def __new__(cls) -> 'StoreLogger':
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._logger = logging.getLogger(ROOT_LOGGER_NAME)
            instance._handlers = []
            cls._instance = instance
        return cls._instance

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level: LogLevel) -> 'StoreLogger':
        self._logger.setLevel(level.value)
        return self

    def _attach(self, handler: logging.Handler, level: LogLevel) -> 'StoreLogger':
        handler.setLevel(level.value)
        handler.addFilter(CallerSiteFilter())
        fmt = self.DEBUG_FORMAT if level == LogLevel.DEBUG else self.DEFAULT_FORMAT
        handler.setFormatter(logging.Formatter(fmt))
        self._logger.addHandler(handler)
        self._handlers.append(handler)
        return self

    def enable_console(self, level: LogLevel = LogLevel.INFO) -> 'StoreLogger':
        """Adds a stderr handler."""
        return self._attach(logging.StreamHandler(), level)

    def enable_file(self, path: str, level: LogLevel = LogLevel.DEBUG) -> 'StoreLogger':
        """Adds a file handler."""
        return self._attach(logging.FileHandler(path, encoding='utf-8'), level)

    def disable_all(self) -> 'StoreLogger':
        """Removes and closes every handler added by this object."""
        for handler in self._handlers:
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        return self


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    enable_console: bool = True,
    log_file: Optional[str] = None,
) -> StoreLogger:
    """
    Configure logging for nodestore in one call.

    Args:
        level: Level for the nodestore logger and its handlers
        enable_console: Attach a stderr handler
        log_file: Optional path of a log file

    Returns:
        The StoreLogger singleton
    """
    store_logger = StoreLogger().disable_all().set_level(level)
    if enable_console:
        store_logger.enable_console(level)
    if log_file:
        store_logger.enable_file(log_file, level)
    return store_logger
