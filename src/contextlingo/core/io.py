"""Shared I/O utilities for atomic file operations.

This module provides reusable utilities for:
- Atomic file writes (temp file + os.replace pattern)
- Bounded text reads for user-supplied configuration files
- Unified timestamp generation for export headers
"""

import contextlib
import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from contextlingo.core.exceptions import ConfigError

__all__ = [
    "atomic_write",
    "read_text_limited",
    "get_timestamp",
]

logger = logging.getLogger(__name__)


def get_timestamp(dt: datetime | None = None) -> str:
    """Get a human-readable UTC timestamp for export headers.

    Args:
        dt: Optional datetime to format. Defaults to now (UTC).

    Returns:
        Timestamp string like "2026-01-15 14:30:00 UTC".

    """
    if dt is None:
        dt = datetime.now(UTC)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def read_text_limited(path: Path, max_size: int) -> str:
    """Read a text file, refusing anything larger than max_size characters.

    Args:
        path: File to read.
        max_size: Maximum accepted size.

    Returns:
        File content.

    Raises:
        ConfigError: If the file is missing, a directory, unreadable,
            or too large.

    """
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(max_size + 1)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except IsADirectoryError as e:
        raise ConfigError(f"{path} is a directory, not a config file.") from e
    except PermissionError as e:
        raise ConfigError(f"Permission denied reading {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if len(content) > max_size:
        raise ConfigError(f"Config file {path} exceeds the {max_size:,} character limit.")
    return content


def atomic_write(path: Path, content: str) -> None:
    """Write content to path atomically using temp file + os.replace.

    Uses PID in temp filename to prevent collisions when multiple
    processes write simultaneously.

    Args:
        path: Target file path.
        content: Content to write.

    Raises:
        OSError: If write fails.

    """
    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = path.parent / f".{path.name}.{os.getpid()}.tmp"
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(temp_path, path)
    except OSError:
        with contextlib.suppress(OSError):
            if temp_path.exists():
                temp_path.unlink()
        raise
    logger.debug("Wrote %s (%d chars)", path, len(content))
