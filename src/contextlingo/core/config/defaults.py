"""Defaults registry: canonical values for every section.

The registry is the schema authority for reconciliation. Values are
generated from the pydantic model defaults (camelCase keys, plain Python
containers) so the models and the registry cannot drift apart.

Never mutate the module-level constants; use ``default_document()`` or
``section_default()`` to get private copies.
"""

import copy
from typing import Any, Final

from contextlingo.core.config.constants import SECTION_ORDER
from contextlingo.core.config.models import (
    AnkiConfig,
    DictionaryEngine,
    GeneralConfig,
    InteractionConfig,
    PageWidgetConfig,
    Scenario,
    SectionModel,
    StyleConfig,
    TranslationEngine,
)
from contextlingo.core.types import ConfigDocument, Value


def _dump(model: SectionModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True)


DEFAULT_GENERAL: Final[dict[str, Any]] = _dump(GeneralConfig())

# Template for a style category (also used for user-defined categories)
DEFAULT_STYLE: Final[dict[str, Any]] = _dump(StyleConfig())

DEFAULT_STYLES: Final[dict[str, dict[str, Any]]] = {
    "known": _dump(
        StyleConfig(
            color="#15803d",
            underline_style="none",
            density_value=100.0,
        )
    ),
    "want": _dump(
        StyleConfig(
            color="#b91c1c",
            background_color="#fef2f2",
            is_bold=True,
            underline_style="dotted",
            underline_color="#f87171",
        )
    ),
    "learning": _dump(
        StyleConfig(
            color="#1d4ed8",
            background_color="#eff6ff",
            is_bold=True,
            underline_style="dashed",
            underline_color="#60a5fa",
        )
    ),
}

DEFAULT_SCENARIO: Final[dict[str, Any]] = _dump(Scenario())

INITIAL_SCENARIOS: Final[list[dict[str, Any]]] = [
    _dump(Scenario(id="1", name="General", is_active=True)),
    _dump(Scenario(id="2", name="Exam Prep")),
    _dump(Scenario(id="3", name="Business English")),
]

DEFAULT_INTERACTION: Final[dict[str, Any]] = _dump(InteractionConfig())

DEFAULT_PAGE_WIDGET: Final[dict[str, Any]] = _dump(PageWidgetConfig())

DEFAULT_ENGINE: Final[dict[str, Any]] = _dump(TranslationEngine())

INITIAL_ENGINES: Final[list[dict[str, Any]]] = [
    _dump(
        TranslationEngine(
            id="google",
            name="Google Translate",
            is_enabled=True,
            is_web_simulation=True,
        )
    ),
    _dump(TranslationEngine(id="microsoft", name="Microsoft Translator")),
    _dump(
        TranslationEngine(
            id="openai",
            name="OpenAI",
            type="ai",
            endpoint="https://api.openai.com/v1/chat/completions",
            model="gpt-4o-mini",
        )
    ),
]

DEFAULT_ANKI: Final[dict[str, Any]] = _dump(AnkiConfig())

INITIAL_DICTIONARIES: Final[list[dict[str, Any]]] = [
    _dump(DictionaryEngine(id="iciba", name="iCIBA", priority=1)),
    _dump(DictionaryEngine(id="youdao", name="Youdao", priority=2)),
]

_SECTION_DEFAULTS: Final[dict[str, Value]] = {
    "general": DEFAULT_GENERAL,
    "styles": DEFAULT_STYLES,
    "scenarios": INITIAL_SCENARIOS,
    "interaction": DEFAULT_INTERACTION,
    "pageWidget": DEFAULT_PAGE_WIDGET,
    "engines": INITIAL_ENGINES,
    "anki": DEFAULT_ANKI,
}

# Per-item templates for sections whose items are not fixed by the defaults
_ITEM_TEMPLATES: Final[dict[str, dict[str, Any]]] = {
    "styles": DEFAULT_STYLE,
    "scenarios": DEFAULT_SCENARIO,
    "engines": DEFAULT_ENGINE,
}


def section_default(name: str) -> Value:
    """Return a private copy of the default value of one section.

    Raises:
        KeyError: If name is not a configuration section.

    """
    return copy.deepcopy(_SECTION_DEFAULTS[name])


def item_template(name: str) -> dict[str, Any] | None:
    """Return a private copy of the per-item template of a section, if any."""
    template = _ITEM_TEMPLATES.get(name)
    return copy.deepcopy(template) if template is not None else None


def default_document() -> ConfigDocument:
    """Build a complete default document (fresh copy, export order)."""
    return {name: section_default(name) for name in SECTION_ORDER}
