"""Shared constants for configuration modules.

This module provides constants used across config submodules to avoid
duplication and circular import issues.
"""

from pathlib import Path
from typing import Final

# Fixed export order of the seven configuration sections
SECTION_ORDER: Final[tuple[str, ...]] = (
    "general",
    "styles",
    "scenarios",
    "interaction",
    "pageWidget",
    "engines",
    "anki",
)

# Spaces per nesting level in the exported text format
INDENT_WIDTH: Final[int] = 2

# Deepest block or inline-list nesting the parser and codec will decode
MAX_NESTING_DEPTH: Final[int] = 64

# Persistent store
DEFAULT_STORE_PATH: Final[Path] = Path.home() / ".contextlingo" / "storage.yaml"
STORE_PATH_ENV: Final[str] = "CONTEXTLINGO_STORE"
MAX_CONFIG_SIZE: Final[int] = 1_048_576  # characters
MAX_BACKUPS: Final[int] = 5

# Section name -> key in the persistent store
STORAGE_KEYS: Final[dict[str, str]] = {
    "general": "autoTranslateConfig",
    "styles": "styles",
    "scenarios": "scenarios",
    "interaction": "interactionConfig",
    "pageWidget": "pageWidgetConfig",
    "engines": "engines",
    "anki": "ankiConfig",
}

# Non-section store entries
ENTRIES_KEY: Final[str] = "entries"
DICTIONARIES_KEY: Final[str] = "dictionaries"
