"""Per-section field metadata used to annotate exported documents.

Metadata is derived from the pydantic section models: a field's alias is
the document key, its ``description`` is the human comment, and the
allowed-values hint comes from ``json_schema_extra["options"]``, the
``Literal`` choices, or ``true | false`` for booleans.

Metadata only drives comments on export. It never constrains parsing and
a key without metadata is still exported (without a comment).
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Literal, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from contextlingo.core.config.constants import SECTION_ORDER
from contextlingo.core.config.models import (
    AnkiConfig,
    GeneralConfig,
    InteractionConfig,
    PageWidgetConfig,
    Scenario,
    StyleConfig,
    TranslationEngine,
)
from contextlingo.core.types import SectionKind

DeclaredType = Literal["string", "boolean", "number", "array", "object"]


@dataclass(frozen=True)
class FieldMetadata:
    """Descriptive metadata for one document key.

    Attributes:
        key: Document key (camelCase alias).
        comment: Human-readable description.
        options: Allowed-values hint, e.g. ``"true | false"``.
        declared_type: Coarse value type, informational only.

    """

    key: str
    comment: str
    options: str | None = None
    declared_type: DeclaredType | None = None


@dataclass(frozen=True)
class SectionMetadata:
    """Export metadata for one configuration section.

    Attributes:
        key: Section name in the document.
        title: Banner title used on export.
        kind: Shape of the section value.
        fields: Field metadata. For RECORD_LIST and DYNAMIC_KEY_MAP
            sections these describe a single item.
        model: Pydantic model of the section (flat maps) or of one item.

    """

    key: str
    title: str
    kind: SectionKind
    fields: tuple[FieldMetadata, ...] = ()
    model: type[BaseModel] | None = None

    def field(self, key: str) -> FieldMetadata | None:
        """Return metadata for key, or None if the key is undocumented."""
        for meta in self.fields:
            if meta.key == key:
                return meta
        return None


def _unwrap_optional(annotation: Any) -> Any:
    """Turn ``T | None`` into ``T``; leave everything else alone."""
    origin = get_origin(annotation)
    if origin is not None and origin not in (list, dict, Literal):
        non_none = [a for a in get_args(annotation) if a is not type(None)]
        if len(non_none) == 1:
            return non_none[0]
    return annotation


def _infer_type(annotation: Any) -> DeclaredType | None:
    """Infer the coarse declared type from a field annotation."""
    annotation = _unwrap_optional(annotation)
    origin = get_origin(annotation)

    # bool before int: bool is a subclass of int
    if annotation is bool:
        return "boolean"
    if annotation in (int, float):
        return "number"
    if annotation is str or origin is Literal:
        return "string"
    if origin is list or annotation is list:
        return "array"
    if origin is dict or annotation is dict:
        return "object"
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return "object"
    return None


def _infer_options(field_info: FieldInfo) -> str | None:
    """Allowed-values hint: explicit option text, Literal choices, or booleans."""
    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and isinstance(extra.get("options"), str):
        return str(extra["options"])

    annotation = _unwrap_optional(field_info.annotation)
    if get_origin(annotation) is Literal:
        return " | ".join(str(choice) for choice in get_args(annotation))
    if annotation is bool:
        return "true | false"
    return None


def _field_key(model: type[BaseModel], name: str, field_info: FieldInfo) -> str:
    if field_info.alias:
        return field_info.alias
    generator = model.model_config.get("alias_generator")
    if callable(generator):
        return str(generator(name))
    return name


def fields_from_model(model: type[BaseModel]) -> tuple[FieldMetadata, ...]:
    """Build ordered field metadata from a pydantic model.

    Args:
        model: Section or item model.

    Returns:
        One FieldMetadata per model field, in declaration order.

    """
    return tuple(
        FieldMetadata(
            key=_field_key(model, name, field_info),
            comment=field_info.description or "",
            options=_infer_options(field_info),
            declared_type=_infer_type(field_info.annotation),
        )
        for name, field_info in model.model_fields.items()
    )


def _section(
    key: str, title: str, kind: SectionKind, model: type[BaseModel]
) -> SectionMetadata:
    return SectionMetadata(
        key=key,
        title=title,
        kind=kind,
        fields=fields_from_model(model),
        model=model,
    )


@lru_cache(maxsize=1)
def get_sections() -> tuple[SectionMetadata, ...]:
    """Get metadata for all sections in export order.

    Returns:
        Tuple of SectionMetadata ordered as SECTION_ORDER.

    """
    sections = {
        "general": _section("general", "General Settings", SectionKind.FLAT_MAP, GeneralConfig),
        "styles": _section("styles", "Visual Styles", SectionKind.DYNAMIC_KEY_MAP, StyleConfig),
        "scenarios": _section("scenarios", "Scenarios", SectionKind.RECORD_LIST, Scenario),
        "interaction": _section(
            "interaction", "Word Bubble Interaction", SectionKind.FLAT_MAP, InteractionConfig
        ),
        "pageWidget": _section("pageWidget", "Page Widget", SectionKind.FLAT_MAP, PageWidgetConfig),
        "engines": _section(
            "engines", "Translation Engines", SectionKind.RECORD_LIST, TranslationEngine
        ),
        "anki": _section("anki", "Anki Integration", SectionKind.FLAT_MAP, AnkiConfig),
    }
    return tuple(sections[name] for name in SECTION_ORDER)


def get_section(key: str) -> SectionMetadata:
    """Look up section metadata by section name.

    Raises:
        KeyError: If key is not one of the seven sections.

    """
    for section in get_sections():
        if section.key == key:
            return section
    raise KeyError(f"Unknown configuration section '{key}'. Valid: {', '.join(SECTION_ORDER)}")
