"""Config serializer: documents to exported text and back.

Ties the dumper, parser and reconciler together with section-aware
reconciliation:

- Flat sections merge key by key against their defaults.
- Styles reconcile built-in categories against their defaults and
  user-defined categories against the shared style template, so a custom
  category survives an import and gains any fields it is missing.
- Record lists stay atomic (an empty list keeps the defaults) but every
  imported record is healed against the record template.

Usage:
    from contextlingo.core.config.serializer import (
        generate_config_text,
        import_config_text,
    )

    text = generate_config_text(document)
    result = import_config_text(text, base=document)
"""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from contextlingo.core.config.constants import SECTION_ORDER
from contextlingo.core.config.defaults import default_document, item_template, section_default
from contextlingo.core.config.dumper import dump
from contextlingo.core.config.merge import reconcile
from contextlingo.core.config.metadata import get_section, get_sections
from contextlingo.core.config.parser import ParseIssue, ParseResult, parse_with_diagnostics
from contextlingo.core.io import get_timestamp
from contextlingo.core.types import ConfigDocument, SectionKind, Value

logger = logging.getLogger(__name__)

HEADER_TITLE = "# ContextLingo configuration"


def generate_config_text(
    document: Mapping[str, Value],
    *,
    exported_at: datetime | None = None,
) -> str:
    """Serialize a configuration document to exported text.

    Args:
        document: Section name -> value. Missing sections are skipped.
        exported_at: Timestamp for the header (defaults to now, UTC).

    Returns:
        Commented document text.

    """
    header = [
        HEADER_TITLE,
        f"# Exported at: {get_timestamp(exported_at)}",
        "# Comments are ignored on import. Sections left out keep their current values.",
    ]
    return dump(document, get_sections(), header=header)


def parse_config_text(text: str) -> ParseResult:
    """Parse exported text without reconciling it."""
    return parse_with_diagnostics(text)


def _reconcile_categories(name: str, default: Value, imported: Value) -> Value:
    merged = reconcile(default, imported)
    template = item_template(name)
    if template is None or not isinstance(imported, dict) or not isinstance(default, dict):
        return merged
    for category, value in imported.items():
        if category not in default:
            merged[category] = reconcile(template, value)
    return merged


def _reconcile_records(name: str, default: Value, imported: Value) -> Value:
    template = item_template(name)
    if template is None or not isinstance(imported, list) or not imported:
        return reconcile(default, imported)
    return [
        reconcile(template, record) if isinstance(record, dict) else copy.deepcopy(record)
        for record in imported
    ]


def reconcile_section(name: str, imported: Value, default: Value = None) -> Value:
    """Reconcile one section value according to its section kind.

    Args:
        name: Section name.
        imported: Imported or stored section value (None when absent).
        default: Default to reconcile against. Uses the registry default
            when None.

    Returns:
        Healed section value.

    Raises:
        KeyError: If name is not a configuration section.

    """
    section = get_section(name)
    base = section_default(name) if default is None else default
    if section.kind is SectionKind.DYNAMIC_KEY_MAP:
        return _reconcile_categories(name, base, imported)
    if section.kind is SectionKind.RECORD_LIST:
        return _reconcile_records(name, base, imported)
    return reconcile(base, imported)


def reconcile_document(
    imported: Mapping[str, Value],
    defaults: Mapping[str, Value] | None = None,
) -> ConfigDocument:
    """Reconcile every section of a document against its defaults.

    Args:
        imported: Parsed or stored document, possibly partial.
        defaults: Per-section defaults overriding the registry.

    Returns:
        Complete seven-section document in export order. Unknown top-level
        keys are dropped.

    """
    unknown = [key for key in imported if key not in SECTION_ORDER]
    if unknown:
        logger.debug("Ignoring unknown sections: %s", ", ".join(map(str, unknown)))
    defaults = defaults or {}
    return {
        name: reconcile_section(name, imported.get(name), defaults.get(name))
        for name in SECTION_ORDER
    }


@dataclass
class ImportResult:
    """Outcome of importing exported text.

    Attributes:
        document: Complete document after the import.
        sections: Sections present in the text, in export order.
        issues: Lines the parser skipped or recovered.

    """

    document: ConfigDocument
    sections: list[str] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)


def import_config_text(text: str, base: Mapping[str, Any] | None = None) -> ImportResult:
    """Import exported text on top of a base document.

    Each section present in the text is reconciled against its default and
    replaces the base section. Sections the text leaves out keep their base
    value.

    Args:
        text: Exported document text.
        base: Current document. Uses the defaults when None.

    Returns:
        ImportResult with the merged document and diagnostics.

    """
    parsed = parse_with_diagnostics(text)
    document = reconcile_document(base) if base is not None else default_document()
    present = [name for name in SECTION_ORDER if name in parsed.document]
    for name in present:
        document[name] = reconcile_section(name, parsed.document[name])
    logger.debug("Imported sections: %s", ", ".join(present) or "none")
    return ImportResult(document=document, sections=present, issues=parsed.issues)
