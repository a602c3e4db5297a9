"""Structured dumper for the exported configuration format.

Walks a configuration document and emits indented, commented text that the
structured parser reads back. Indentation is exactly INDENT_WIDTH spaces per
level; the parser relies on it to find block boundaries.

Section shape decides the layout:
- FLAT_MAP: one line per key, preceded by a metadata comment when known.
- DYNAMIC_KEY_MAP: one quoted key per category, a category comment, then
  the category's fields annotated with the shared per-item metadata.
- RECORD_LIST: dashed records, first field on the dash line, no field
  comments inside records.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from contextlingo.core.config.codec import encode_scalar, is_inline_list
from contextlingo.core.config.constants import INDENT_WIDTH
from contextlingo.core.config.metadata import FieldMetadata, SectionMetadata
from contextlingo.core.types import SectionKind, Value

logger = logging.getLogger(__name__)

BANNER = "# " + "=" * 50

_BARE_KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*")


def indent(level: int) -> str:
    """Leading whitespace for a nesting level."""
    return " " * (INDENT_WIDTH * level)


def format_key(key: Any, *, quote: bool = False) -> str:
    """Format a mapping key, quoting it unless it is a plain identifier."""
    text = str(key)
    if not quote and _BARE_KEY_PATTERN.fullmatch(text):
        return text
    return encode_scalar(text)


def _comment_lines(meta: FieldMetadata, level: int) -> list[str]:
    text = f"# {meta.comment}" if meta.comment else "#"
    if meta.options:
        text += f" (options: {meta.options})"
    return ["", indent(level) + text]


def _comment_text(value: Any) -> str:
    # Escaped body of the quoted form keeps line breaks out of the comment
    return encode_scalar(str(value))[1:-1]


def _needs_block(value: Value) -> bool:
    if isinstance(value, dict):
        return bool(value)
    return isinstance(value, (list, tuple)) and bool(value) and not is_inline_list(value)


def dump_entry(key: Any, value: Value, level: int, *, quote_key: bool = False) -> list[str]:
    """Dump one ``key: value`` entry, recursing into nested blocks.

    Args:
        key: Mapping key.
        value: Any configuration value.
        level: Nesting level of the key.
        quote_key: Always quote the key (dynamic category names).

    Returns:
        Output lines without trailing newlines.

    """
    head = indent(level) + format_key(key, quote=quote_key) + ":"
    if isinstance(value, dict):
        # Empty mapping: bare "key:" reads back as {}
        return [head, *dump_mapping(value, level + 1)]
    if _needs_block(value):
        return [head, *dump_sequence(value, level + 1)]
    return [f"{head} {encode_scalar(value)}"]


def dump_mapping(
    mapping: Mapping[Any, Value],
    level: int,
    fields: Sequence[FieldMetadata] = (),
) -> list[str]:
    """Dump a mapping, one key per line.

    Args:
        mapping: Mapping to dump.
        level: Nesting level of the keys.
        fields: Metadata for first-level keys. Nested values are never
            annotated.

    Returns:
        Output lines.

    """
    lookup = {meta.key: meta for meta in fields}
    lines: list[str] = []
    for key, value in mapping.items():
        meta = lookup.get(str(key))
        if meta is not None and (meta.comment or meta.options):
            lines.extend(_comment_lines(meta, level))
        lines.extend(dump_entry(key, value, level))
    return lines


def dump_sequence(items: Sequence[Value], level: int) -> list[str]:
    """Dump a block sequence of dashed items.

    Records put their first field on the dash line and align the rest
    under it. Field comments are never emitted inside records.

    Args:
        items: Sequence to dump.
        level: Nesting level of the dashes.

    Returns:
        Output lines.

    """
    prefix = indent(level) + "- "
    field_indent = len(indent(level + 1))
    lines: list[str] = []
    for item in items:
        if isinstance(item, dict) and item:
            body = dump_mapping(item, level + 1)
            # "- " is exactly one level wide, so the first field keeps its column
            lines.append(prefix + body[0][field_indent:])
            lines.extend(body[1:])
        elif _needs_block(item):
            lines.append(indent(level) + "-")
            lines.extend(dump_sequence(item, level + 1))
        else:
            lines.append(prefix + encode_scalar(item))
    return lines


def dump_section(section: SectionMetadata, value: Value) -> list[str]:
    """Dump one top-level section according to its kind.

    Values whose shape does not match the section kind fall back to the
    generic entry layout.

    Args:
        section: Section metadata.
        value: Section value.

    Returns:
        Output lines, starting with the section key.

    """
    if section.kind is SectionKind.FLAT_MAP and isinstance(value, dict):
        return [f"{section.key}:", *dump_mapping(value, 1, section.fields)]

    if section.kind is SectionKind.DYNAMIC_KEY_MAP and isinstance(value, dict):
        lines = [f"{section.key}:"]
        for category, item in value.items():
            lines.append(f"{indent(1)}# Category: {_comment_text(category)}")
            if isinstance(item, dict):
                lines.append(indent(1) + format_key(category, quote=True) + ":")
                lines.extend(dump_mapping(item, 2, section.fields))
            else:
                lines.extend(dump_entry(category, item, 1, quote_key=True))
        return lines

    return dump_entry(section.key, value, 0)


def dump(
    document: Mapping[str, Value],
    sections: Sequence[SectionMetadata],
    *,
    header: Sequence[str] = (),
) -> str:
    """Dump a configuration document to text.

    Sections are written in the order of ``sections``, each behind a
    numbered banner. Sections missing from the document are skipped;
    document keys without section metadata are not exported.

    Args:
        document: Section name -> section value.
        sections: Section metadata in export order.
        header: Comment lines written first (already prefixed with ``#``).

    Returns:
        Document text ending with a newline.

    """
    lines = list(header)
    for number, section in enumerate(sections, start=1):
        if section.key not in document:
            logger.debug("Section '%s' missing from document, not exported", section.key)
            continue
        lines.extend(["", BANNER, f"# {number}. {section.title}", BANNER])
        lines.extend(dump_section(section, document[section.key]))

    known = {section.key for section in sections}
    unknown = [key for key in document if key not in known]
    if unknown:
        logger.debug("Not exporting unknown sections: %s", ", ".join(map(str, unknown)))

    return "\n".join(lines) + "\n"
