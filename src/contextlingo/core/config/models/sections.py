"""Flat-map section models (General, Interaction, Page Widget, Anki)."""

from typing import Literal

from pydantic import Field

from contextlingo.core.config.models.base import SectionModel


class GeneralConfig(SectionModel):
    """General translation behaviour (stored as ``autoTranslateConfig``).

    Attributes:
        enabled: Master switch for page translation.
        translate_whole_page: Scan the whole page instead of the main content.
        bilingual_mode: Append the full paragraph translation.
        aggressive_mode: Use the dictionary API for fuzzy matching.
        match_inflections: Recognise inflected word forms.
        tts_speed: Text-to-speech playback rate.
        blacklist: Domains never translated.
        whitelist: Domains always translated.

    """

    enabled: bool = Field(
        default=True,
        description="Master switch: translate pages by default",
    )
    translate_whole_page: bool = Field(
        default=False,
        description="Scan scope: scan the whole page, sidebars included",
    )
    bilingual_mode: bool = Field(
        default=False,
        description="Bilingual mode: append the full translation after each paragraph",
    )
    aggressive_mode: bool = Field(
        default=False,
        description="Aggressive matching: use the dictionary API for fuzzy matches (expensive)",
    )
    match_inflections: bool = Field(
        default=True,
        description="Inflection matching: recognise inflected forms of saved words",
    )
    tts_speed: float = Field(
        default=1.0,
        ge=0.25,
        le=3.0,
        description="Read-aloud speed: TTS playback rate",
        json_schema_extra={"options": "0.25 - 3.0"},
    )
    blacklist: list[str] = Field(
        default_factory=list,
        description="Domains that are never translated",
    )
    whitelist: list[str] = Field(
        default_factory=list,
        description="Domains that are always translated",
    )


class InteractionConfig(SectionModel):
    """Word bubble behaviour (stored as ``interactionConfig``)."""

    bubble_position: Literal["top", "bottom", "left", "right"] = Field(
        default="bottom",
        description="Where the word bubble appears",
    )
    show_phonetic: bool = Field(default=True, description="Show phonetics in the bubble")
    show_original_text: bool = Field(default=True, description="Show the original text in the bubble")
    show_dict_example: bool = Field(default=True, description="Show example sentences in the bubble")
    show_dict_translation: bool = Field(
        default=True, description="Show dictionary definitions in the bubble"
    )
    auto_pronounce: bool = Field(default=False, description="Pronounce words automatically")
    auto_pronounce_accent: Literal["US", "UK"] = Field(
        default="US",
        description="Pronunciation accent",
    )
    auto_pronounce_count: int = Field(
        default=1,
        ge=1,
        description="How many times a word is pronounced",
    )
    dismiss_delay: int = Field(
        default=300,
        ge=0,
        description="Bubble dismiss delay (ms)",
    )
    allow_multiple_bubbles: bool = Field(
        default=False,
        description="Allow several bubbles to stay open",
    )
    online_dict_url: str = Field(
        default="https://www.youdao.com/result?word={word}&lang=en",
        description="Online dictionary link template ({word} is the placeholder)",
    )


class PageWidgetConfig(SectionModel):
    """Floating page widget (stored as ``pageWidgetConfig``)."""

    enabled: bool = Field(default=True, description="Enable the floating widget")
    show_phonetic: bool = Field(default=True, description="Show phonetics in the word list")
    show_meaning: bool = Field(default=True, description="Show meanings in the word list")
    show_multi_examples: bool = Field(default=False, description="Show several example sentences")
    show_example_translation: bool = Field(
        default=True, description="Show example sentence translations"
    )
    show_context_translation: bool = Field(
        default=True, description="Show the source sentence translation"
    )
    show_part_of_speech: bool = Field(default=True, description="Show part of speech")
    show_tags: bool = Field(default=True, description="Show tags")
    show_importance: bool = Field(default=True, description="Show importance stars")
    show_coca_rank: bool = Field(default=False, description="Show COCA frequency rank")


class AnkiConfig(SectionModel):
    """AnkiConnect integration (stored as ``ankiConfig``).

    Note: ``deckName`` from older releases is migrated to
    ``deck_name_learning`` by the settings store.
    """

    enabled: bool = Field(default=False, description="Enable the Anki integration")
    url: str = Field(
        default="http://127.0.0.1:8765",
        description="AnkiConnect address",
    )
    deck_name_want: str = Field(
        default="ContextLingo::Want",
        description="Deck for words you want to learn",
    )
    deck_name_learning: str = Field(
        default="ContextLingo::Learning",
        description="Deck for words you are learning",
    )
    model_name: str = Field(default="Basic", description="Note type used for new cards")
    sync_interval: int = Field(
        default=90,
        ge=1,
        description="Days after which a reviewed word counts as mastered",
    )
    auto_sync: bool = Field(default=False, description="Synchronise automatically")
    sync_scope: list[str] = Field(
        default_factory=lambda: ["want", "learning"],
        description="Word categories pushed to Anki",
        json_schema_extra={"options": "want, learning, known"},
    )
