"""Store errors and the error message registry."""
from .store_errors import (
    DEFAULT_MESSAGES,
    ErrorCodes,
    ErrorRegistry,
    StoreError,
    is_error,
    is_store_error,
    new_error,
)

__all__ = [
    'DEFAULT_MESSAGES',
    'ErrorCodes',
    'ErrorRegistry',
    'StoreError',
    'is_error',
    'is_store_error',
    'new_error',
]
