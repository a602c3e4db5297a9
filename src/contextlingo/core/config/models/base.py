"""Common base for configuration section models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SectionModel(BaseModel):
    """Base model for persisted configuration sections.

    Fields are declared in snake_case and (de)serialized under camelCase
    aliases, which is the key style of the stored and exported documents.
    Unknown keys are kept so documents written by newer releases survive
    a round trip through an older one.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        # AnkiConfig.model_name is a real setting, not a pydantic attribute
        protected_namespaces=(),
    )
