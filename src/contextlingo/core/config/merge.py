"""Deep-merge reconciler.

``reconcile`` fills the gaps of an imported or stored value from its
canonical default. The shape of the default decides every case: the
default is the schema authority, so fields added in newer releases heal
into older documents without versioned migrations.

Rules, by the shape of ``default``:
- ``imported`` is None: the default.
- list: ``imported`` if it is a non-empty list, else the default. Lists are
  atomic; elements are never merged.
- dict: every default key reconciled recursively; extra imported keys are
  copied through. A non-dict import is a shape mismatch and keeps the
  default.
- scalar: ``imported``, unless the default is not None and ``imported`` is a
  container (shape mismatch keeps the default).

Inputs are never mutated; the result shares no containers with them.
"""

import copy
import logging

from contextlingo.core.types import Value

logger = logging.getLogger(__name__)


def reconcile(default: Value, imported: Value) -> Value:
    """Merge imported over default, healing missing and mistyped parts.

    Args:
        default: Canonical default value (schema authority).
        imported: Imported or stored value, possibly partial.

    Returns:
        New merged value. Every key of a default mapping is present.

    """
    if imported is None:
        return copy.deepcopy(default)

    if isinstance(default, list):
        if isinstance(imported, list) and imported:
            return copy.deepcopy(imported)
        return copy.deepcopy(default)

    if isinstance(default, dict):
        if not isinstance(imported, dict):
            logger.debug("Expected a mapping, got %s; keeping default", type(imported).__name__)
            return copy.deepcopy(default)
        merged = {key: reconcile(value, imported.get(key)) for key, value in default.items()}
        for key, value in imported.items():
            if key not in merged:
                merged[key] = copy.deepcopy(value)
        return merged

    if default is not None and isinstance(imported, (dict, list)):
        logger.debug("Expected a scalar, got %s; keeping default", type(imported).__name__)
        return default

    return copy.deepcopy(imported)
