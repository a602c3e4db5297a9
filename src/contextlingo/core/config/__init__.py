"""Configuration document format.

Public API:
    generate_config_text: Document -> commented export text.
    import_config_text: Export text -> reconciled document with diagnostics.
    parse / parse_with_diagnostics: Export text -> raw document.
    dump: Raw document -> export text.
    reconcile / reconcile_document: Heal a document against the defaults.
    validate_document: Advisory model validation.
    default_document: Fresh copy of the complete default document.
    get_sections / get_section: Per-section export metadata.
"""

from contextlingo.core.config.codec import decode_scalar, encode_scalar
from contextlingo.core.config.constants import SECTION_ORDER
from contextlingo.core.config.defaults import default_document, section_default
from contextlingo.core.config.dumper import dump
from contextlingo.core.config.merge import reconcile
from contextlingo.core.config.metadata import (
    FieldMetadata,
    SectionMetadata,
    get_section,
    get_sections,
)
from contextlingo.core.config.parser import (
    ParseIssue,
    ParseResult,
    parse,
    parse_with_diagnostics,
)
from contextlingo.core.config.serializer import (
    ImportResult,
    generate_config_text,
    import_config_text,
    parse_config_text,
    reconcile_document,
    reconcile_section,
)
from contextlingo.core.config.validation import ValidationProblem, validate_document

__all__ = [
    "SECTION_ORDER",
    "FieldMetadata",
    "ImportResult",
    "ParseIssue",
    "ParseResult",
    "SectionMetadata",
    "ValidationProblem",
    "decode_scalar",
    "default_document",
    "dump",
    "encode_scalar",
    "generate_config_text",
    "get_section",
    "get_sections",
    "import_config_text",
    "parse",
    "parse_config_text",
    "parse_with_diagnostics",
    "reconcile",
    "reconcile_document",
    "reconcile_section",
    "section_default",
    "validate_document",
]
