"""Aggregate model for a full configuration document."""

from pydantic import Field

from contextlingo.core.config.models.base import SectionModel
from contextlingo.core.config.models.records import Scenario, TranslationEngine
from contextlingo.core.config.models.sections import (
    AnkiConfig,
    GeneralConfig,
    InteractionConfig,
    PageWidgetConfig,
)
from contextlingo.core.config.models.styles import StyleConfig


class ConfigBundle(SectionModel):
    """All seven exported sections.

    Used to validate a reconciled document. Validation is advisory: the
    reconciler, not this model, decides what ends up in storage.

    Attributes:
        general: General translation behaviour.
        styles: Category name -> style.
        scenarios: Learning scenarios.
        interaction: Word bubble behaviour.
        page_widget: Floating widget options (``pageWidget``).
        engines: Translation engines.
        anki: AnkiConnect integration.

    """

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    styles: dict[str, StyleConfig] = Field(default_factory=dict)
    scenarios: list[Scenario] = Field(default_factory=list)
    interaction: InteractionConfig = Field(default_factory=InteractionConfig)
    page_widget: PageWidgetConfig = Field(default_factory=PageWidgetConfig)
    engines: list[TranslationEngine] = Field(default_factory=list)
    anki: AnkiConfig = Field(default_factory=AnkiConfig)
