"""Pydantic models for configuration sections."""

from contextlingo.core.config.models.base import SectionModel
from contextlingo.core.config.models.main import ConfigBundle
from contextlingo.core.config.models.records import (
    DictionaryEngine,
    Scenario,
    TranslationEngine,
)
from contextlingo.core.config.models.sections import (
    AnkiConfig,
    GeneralConfig,
    InteractionConfig,
    PageWidgetConfig,
)
from contextlingo.core.config.models.styles import OriginalTextStyle, StyleConfig

__all__ = [
    "AnkiConfig",
    "ConfigBundle",
    "DictionaryEngine",
    "GeneralConfig",
    "InteractionConfig",
    "OriginalTextStyle",
    "PageWidgetConfig",
    "Scenario",
    "SectionModel",
    "StyleConfig",
    "TranslationEngine",
]
