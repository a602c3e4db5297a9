"""Core modules: configuration format, settings storage and shared I/O."""

from contextlingo.core.exceptions import ConfigError, ContextLingoError, StorageError

__all__ = [
    "ConfigError",
    "ContextLingoError",
    "StorageError",
]
