"""Visual style models for highlighted words."""

from typing import Literal

from pydantic import Field

from contextlingo.core.config.models.base import SectionModel


class OriginalTextStyle(SectionModel):
    """How the original word is shown next to its translation."""

    show: bool = Field(default=True, description="Show the original word")
    color: str = Field(default="#64748b", description="Original word color (Hex)")
    font_size: str = Field(default="0.85em", description="Original word font size")
    is_italic: bool = Field(default=False, description="Italic original word")


class StyleConfig(SectionModel):
    """Style applied to one word category.

    The styles section maps category name -> StyleConfig. Category names
    are not fixed: users may add their own next to the built-in ones.
    """

    color: str = Field(default="#1e293b", description="Text color (Hex)")
    background_color: str = Field(default="transparent", description="Background color (Hex)")
    is_bold: bool = Field(default=False, description="Bold text")
    is_italic: bool = Field(default=False, description="Italic text")
    underline_style: Literal["none", "solid", "dashed", "dotted", "double", "wavy"] = Field(
        default="none",
        description="Underline style",
    )
    underline_color: str = Field(default="#94a3b8", description="Underline color")
    underline_offset: str = Field(default="2px", description="Underline offset")
    font_size: str = Field(
        default="1em",
        description="Font size",
        json_schema_extra={"options": "e.g. 1em, 0.8em"},
    )
    opacity: float = Field(default=1.0, ge=0.0, le=1.0, description="Opacity")
    layout_mode: Literal["horizontal", "vertical"] = Field(
        default="horizontal",
        description="Layout of translation and original word",
    )
    density_mode: Literal["count", "percent"] = Field(
        default="percent",
        description="How the highlight density is limited",
    )
    density_value: float = Field(default=100.0, ge=0.0, description="Density threshold")
    original_text: OriginalTextStyle = Field(
        default_factory=OriginalTextStyle,
        description="Original word display",
    )
