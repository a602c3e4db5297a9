"""Advisory validation of a reconciled configuration document.

Reconciliation already guarantees every default key is present, so this
step only reports values whose type or range the application would not
accept (a hand-edited ``ttsSpeed: fast``, an engine id written as a bare
number). Problems are returned, never raised; what gets stored is decided
by the reconciler.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from contextlingo.core.config.models import ConfigBundle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationProblem:
    """One field that failed model validation.

    Attributes:
        location: Dotted path, e.g. ``styles.want.fontSize`` or ``scenarios.0.id``.
        message: Pydantic error message.

    """

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


def _format_location(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def validate_document(document: Mapping[str, Any]) -> list[ValidationProblem]:
    """Validate a document against the section models.

    Args:
        document: Reconciled configuration document.

    Returns:
        Problems found, in pydantic's error order. Empty if valid.

    """
    try:
        ConfigBundle.model_validate(dict(document))
    except ValidationError as e:
        problems = [
            ValidationProblem(location=_format_location(err["loc"]), message=err["msg"])
            for err in e.errors()
        ]
        logger.debug("Document failed validation with %d problem(s)", len(problems))
        return problems
    return []
