"""Persistent settings store.

Two layers:

- KeyValueStore: a YAML file holding one top-level entry per storage key.
  Writes are atomic and rotate numbered backups (``storage.yaml.1`` is the
  newest). Last writer wins; there are no transactions across keys.
- SettingsStore: maps the seven configuration sections onto their storage
  keys, seeds missing entries, applies legacy data migrations on load and
  runs imports/exports through the config serializer.

Usage:
    from contextlingo.core.storage import SettingsStore

    store = SettingsStore.open()
    document = store.load_document()
    report = store.import_text(text)
"""

from __future__ import annotations

import copy
import logging
import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from contextlingo.core.config.constants import (
    DEFAULT_STORE_PATH,
    DICTIONARIES_KEY,
    ENTRIES_KEY,
    MAX_BACKUPS,
    MAX_CONFIG_SIZE,
    STORAGE_KEYS,
    STORE_PATH_ENV,
)
from contextlingo.core.config.defaults import DEFAULT_ANKI, INITIAL_DICTIONARIES, section_default
from contextlingo.core.config.parser import ParseIssue
from contextlingo.core.config.serializer import (
    generate_config_text,
    import_config_text,
    reconcile_document,
)
from contextlingo.core.config.validation import ValidationProblem, validate_document
from contextlingo.core.exceptions import ConfigError, StorageError
from contextlingo.core.io import atomic_write, read_text_limited
from contextlingo.core.types import ConfigDocument, Value

logger = logging.getLogger(__name__)

# Dictionaries whose priority is fixed by the data migration
_FIXED_DICTIONARY_PRIORITIES: dict[str, int] = {"iciba": 1, "youdao": 2}


def resolve_store_path(path: Path | str | None = None) -> Path:
    """Resolve the store file location.

    Priority: explicit path, then the CONTEXTLINGO_STORE environment
    variable, then ``~/.contextlingo/storage.yaml``.

    Args:
        path: Explicit store path (e.g. from ``--store``).

    Returns:
        Store file path (not required to exist).

    """
    if path is not None:
        return Path(path).expanduser()
    env_path = os.environ.get(STORE_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_STORE_PATH


# =============================================================================
# Legacy data migrations
# =============================================================================


def migrate_dictionary_priorities(dictionaries: Value) -> tuple[Value, bool]:
    """Put iCIBA first and Youdao second when iCIBA is not already first.

    Args:
        dictionaries: Stored dictionary engine list.

    Returns:
        (dictionaries, changed) where changed tells whether to persist.

    """
    if not isinstance(dictionaries, list):
        return dictionaries, False
    iciba = next(
        (d for d in dictionaries if isinstance(d, dict) and d.get("id") == "iciba"),
        None,
    )
    if iciba is None or iciba.get("priority") == 1:
        return dictionaries, False

    migrated = []
    for entry in dictionaries:
        if isinstance(entry, dict) and entry.get("id") in _FIXED_DICTIONARY_PRIORITIES:
            entry = {**entry, "priority": _FIXED_DICTIONARY_PRIORITIES[entry["id"]]}
        migrated.append(entry)
    return migrated, True


def migrate_anki_config(anki: Value) -> tuple[Value, bool]:
    """Upgrade a single-deck Anki config to the want/learning deck pair.

    Older releases stored one ``deckName``; it becomes ``deckNameLearning``.
    Empty deck names and sync scope are filled from the defaults.

    Args:
        anki: Stored Anki section.

    Returns:
        (anki, changed).

    """
    if not isinstance(anki, dict):
        return anki, False
    if anki.get("deckNameWant") and anki.get("deckNameLearning"):
        return anki, False

    migrated = {**copy.deepcopy(DEFAULT_ANKI), **anki}
    legacy_deck = migrated.pop("deckName", None)
    migrated["deckNameWant"] = anki.get("deckNameWant") or DEFAULT_ANKI["deckNameWant"]
    migrated["deckNameLearning"] = (
        anki.get("deckNameLearning") or legacy_deck or DEFAULT_ANKI["deckNameLearning"]
    )
    migrated["syncScope"] = anki.get("syncScope") or list(DEFAULT_ANKI["syncScope"])
    return migrated, True


# =============================================================================
# Key-value store
# =============================================================================


class KeyValueStore:
    """YAML-file-backed key-value store.

    The file is read lazily on first access and cached. Values returned by
    ``get`` are private copies.

    Attributes:
        path: Store file path.

    """

    MAX_BACKUPS = MAX_BACKUPS

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Store file path. A missing file is an empty store.

        """
        self.path = path
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            content = read_text_limited(self.path, MAX_CONFIG_SIZE)
        except ConfigError as e:
            raise StorageError(str(e)) from e

        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise StorageError(f"Invalid YAML in store {self.path}: {e}") from e

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise StorageError(
                f"Store {self.path} must contain a YAML mapping, got {type(parsed).__name__}."
            )
        return parsed

    @property
    def data(self) -> dict[str, Any]:
        """Cached store content, loaded on first access."""
        if self._data is None:
            self._data = self._load()
        return self._data

    def reload(self) -> None:
        """Drop the cache so the next access re-reads the file."""
        self._data = None

    def keys(self) -> list[str]:
        """Return stored keys in file order."""
        return list(self.data)

    def get(self, key: str, default: Value = None) -> Value:
        """Return a copy of the value stored under key, or default."""
        if key not in self.data:
            return default
        return copy.deepcopy(self.data[key])

    def set(self, key: str, value: Value) -> None:
        """Store a single value."""
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Value]) -> None:
        """Store several values in one write.

        Args:
            values: Key -> value. Other keys are left untouched.

        Raises:
            StorageError: If the file cannot be written.

        """
        data = dict(self.data)
        data.update(copy.deepcopy(dict(values)))
        content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False, default_flow_style=False)

        self._rotate_backups()
        try:
            atomic_write(self.path, content)
        except OSError as e:
            raise StorageError(f"Cannot write store {self.path}: {e}") from e
        self._data = data
        logger.debug("Stored %s in %s", ", ".join(values), self.path)

    def _rotate_backups(self) -> None:
        """Rotate backup files before writing.

        Creates backups as: storage.yaml.1 (newest) to storage.yaml.5 (oldest).
        """
        if not self.path.exists():
            return

        try:
            oldest = Path(f"{self.path}.{self.MAX_BACKUPS}")
            if oldest.exists():
                oldest.unlink()

            for i in range(self.MAX_BACKUPS - 1, 0, -1):
                current = Path(f"{self.path}.{i}")
                if current.exists():
                    current.rename(Path(f"{self.path}.{i + 1}"))

            shutil.copy2(self.path, Path(f"{self.path}.1"))
        except OSError as e:
            logger.warning("Backup rotation failed for %s: %s. Continuing with save.", self.path, e)


# =============================================================================
# Settings store
# =============================================================================


@dataclass
class ImportReport:
    """Outcome of importing a document into the store.

    Attributes:
        document: Complete document after the import.
        sections: Sections replaced by the import.
        issues: Lines the parser skipped or recovered.
        problems: Advisory validation problems in the imported document.
        saved: Whether the document was written to the store.

    """

    document: ConfigDocument
    sections: list[str] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)
    problems: list[ValidationProblem] = field(default_factory=list)
    saved: bool = False


class SettingsStore:
    """Configuration sections on top of a KeyValueStore."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @classmethod
    def open(cls, path: Path | str | None = None) -> SettingsStore:
        """Open the store at the resolved location (see resolve_store_path)."""
        return cls(KeyValueStore(resolve_store_path(path)))

    @property
    def path(self) -> Path:
        """Store file path."""
        return self.store.path

    def seed_defaults(self) -> list[str]:
        """Write defaults for every storage key that is missing.

        Returns:
            Storage keys that were seeded.

        """
        missing: dict[str, Value] = {}
        for name, key in STORAGE_KEYS.items():
            if key not in self.store.data:
                missing[key] = section_default(name)
        if ENTRIES_KEY not in self.store.data:
            missing[ENTRIES_KEY] = []
        if DICTIONARIES_KEY not in self.store.data:
            missing[DICTIONARIES_KEY] = copy.deepcopy(INITIAL_DICTIONARIES)

        if missing:
            self.store.set_many(missing)
            logger.info("Seeded %d default store entries in %s", len(missing), self.path)
        return list(missing)

    def load_dictionaries(self) -> list[Any]:
        """Load dictionary engines, fixing legacy priorities in the store."""
        dictionaries, changed = migrate_dictionary_priorities(
            self.store.get(DICTIONARIES_KEY, copy.deepcopy(INITIAL_DICTIONARIES))
        )
        if changed:
            self.store.set(DICTIONARIES_KEY, dictionaries)
            logger.info("Migrated dictionary priorities (iciba=1, youdao=2)")
        return dictionaries if isinstance(dictionaries, list) else []

    def load_document(self) -> ConfigDocument:
        """Load the configuration document from the store.

        Seeds missing entries, applies legacy migrations and reconciles
        every section against its defaults.

        Returns:
            Complete seven-section document.

        Raises:
            StorageError: If the store cannot be read or written.

        """
        self.seed_defaults()
        self.load_dictionaries()

        raw = {name: self.store.get(key) for name, key in STORAGE_KEYS.items()}
        raw["anki"], migrated = migrate_anki_config(raw["anki"])
        if migrated:
            logger.info("Migrated legacy Anki deck settings")
        return reconcile_document(raw)

    def save_document(self, document: Mapping[str, Value]) -> None:
        """Write all sections present in document in a single store write."""
        values = {key: document[name] for name, key in STORAGE_KEYS.items() if name in document}
        self.store.set_many(values)
        logger.info("Saved %d section(s) to %s", len(values), self.path)

    def import_text(self, text: str, *, dry_run: bool = False) -> ImportReport:
        """Import exported text into the store.

        Sections present in the text replace the stored ones after being
        reconciled against their defaults. Other sections are untouched.

        Args:
            text: Exported document text.
            dry_run: Compute the result without writing it.

        Returns:
            ImportReport describing the outcome.

        Raises:
            StorageError: If the store cannot be read or written.

        """
        result = import_config_text(text, base=self.load_document())
        report = ImportReport(
            document=result.document,
            sections=result.sections,
            issues=result.issues,
            problems=validate_document(result.document),
        )
        if dry_run:
            logger.info("Dry run: %d section(s) would be imported", len(result.sections))
        elif result.sections:
            self.save_document({name: result.document[name] for name in result.sections})
            report.saved = True
        else:
            logger.warning("Nothing to import: no configuration sections found")
        return report

    def export_text(self, *, exported_at: datetime | None = None) -> str:
        """Serialize the stored configuration document to exported text."""
        return generate_config_text(self.load_document(), exported_at=exported_at)
