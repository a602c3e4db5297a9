"""Custom exception hierarchy for contextlingo.

All exceptions raised by contextlingo derive from ContextLingoError so callers
(the CLI in particular) can catch a single base class.

Note: the configuration core (codec, dumper, parser, reconciler) never raises.
Malformed input is absorbed into defaults and reported as diagnostics instead.
These exceptions cover the I/O boundary only.
"""


class ContextLingoError(Exception):
    """Base exception for all contextlingo errors."""


class ConfigError(ContextLingoError):
    """Configuration document could not be read.

    Raised when an import/export file is missing, unreadable, a directory,
    or exceeds the maximum configuration size.
    """


class StorageError(ContextLingoError):
    """Persistent settings store is unusable.

    Raised when the store file contains invalid YAML, has a non-mapping
    root, exceeds the size limit, or cannot be written.
    """
