"""Shared type definitions for the configuration core."""

from enum import Enum
from typing import Any, TypeAlias

# Recursive configuration value: None | bool | int | float | str | list | dict.
# Kept as Any because the tree is untyped until it is reconciled.
Value: TypeAlias = Any

# Ordered mapping of section name -> section value.
ConfigDocument: TypeAlias = dict[str, Any]


class SectionKind(str, Enum):
    """Shape of a configuration section.

    Drives the generic dumper and the document-level reconciler.

    Attributes:
        FLAT_MAP: Mapping of field name -> value (general, interaction, ...).
        RECORD_LIST: Ordered list of records with an ``id`` (scenarios, engines).
        DYNAMIC_KEY_MAP: Mapping of runtime category -> record (styles).

    """

    FLAT_MAP = "flat_map"
    RECORD_LIST = "record_list"
    DYNAMIC_KEY_MAP = "dynamic_key_map"
