"""Record models: items of list-shaped sections, identified by ``id``."""

from typing import Literal

from pydantic import Field

from contextlingo.core.config.models.base import SectionModel


class Scenario(SectionModel):
    """A learning scenario (word list context)."""

    id: str = Field(default="", description="Scenario ID (must be unique)")
    name: str = Field(default="", description="Scenario name")
    is_active: bool = Field(default=False, description="Currently active scenario")
    is_custom: bool = Field(default=False, description="User-defined scenario")


class TranslationEngine(SectionModel):
    """A translation backend.

    Standard engines use a public web API; ``ai`` engines call a chat
    completion endpoint with the configured model.
    """

    id: str = Field(default="", description="Engine ID")
    name: str = Field(default="", description="Engine name")
    type: Literal["standard", "ai"] = Field(default="standard", description="Engine type")
    is_enabled: bool = Field(default=False, description="Engine enabled")
    api_key: str = Field(default="", description="API key (sensitive)")
    endpoint: str = Field(default="", description="API endpoint override")
    model: str = Field(default="", description="Model name for AI engines")
    is_web_simulation: bool = Field(default=False, description="Use web simulation mode")


class DictionaryEngine(SectionModel):
    """A dictionary lookup backend. Lower priority values are tried first."""

    id: str = Field(default="", description="Dictionary ID")
    name: str = Field(default="", description="Dictionary name")
    priority: int = Field(default=1, ge=1, description="Lookup order (1 = first)")
    is_enabled: bool = Field(default=True, description="Dictionary enabled")
