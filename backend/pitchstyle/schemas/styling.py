"""
Pydantic models for content analysis and resolved slide styling.

Attributes are snake_case in Python and camelCase on the wire, which is the
shape the remote classifier answers in and the shape the slide renderer reads.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

MAX_COLOR_SUGGESTIONS = 3
MAX_KEY_THEMES = 3


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Enumerations ──────────────────────────────────────────────


class Industry(str, Enum):
    technology = "technology"
    healthcare = "healthcare"
    finance = "finance"
    education = "education"
    ecommerce = "ecommerce"
    creative = "creative"
    default = "default"


class BusinessTone(str, Enum):
    professional = "professional"
    creative = "creative"
    technical = "technical"
    friendly = "friendly"
    luxurious = "luxurious"
    modern = "modern"
    traditional = "traditional"


class RecommendedStyle(str, Enum):
    corporate = "corporate"
    playful = "playful"
    innovative = "innovative"
    tech = "tech"
    professional = "professional"
    modern = "modern"
    elegant = "elegant"
    minimal = "minimal"
    bold = "bold"
    classic = "classic"
    creative = "creative"


class Theme(str, Enum):
    light = "light"
    dark = "dark"
    royal_blue = "royal_blue"
    coral = "coral"
    forest = "forest"
    gradient = "gradient"


class Layout(str, Enum):
    full_width_image = "fullWidthImage"
    split_content = "splitContent"
    image_top = "imageTop"
    image_bottom = "imageBottom"
    quote_focus = "quoteFocus"
    data_grid = "dataGrid"
    centered = "centered"
    title_only = "titleOnly"


class Spacing(str, Enum):
    compact = "compact"
    balanced = "balanced"
    spacious = "spacious"


class ImageStyle(str, Enum):
    full_bleed = "fullBleed"
    framed = "framed"
    rounded = "rounded"
    masked = "masked"
    shadowed = "shadowed"


class BrandPosition(str, Enum):
    top_left = "topLeft"
    top_right = "topRight"
    bottom_left = "bottomLeft"
    bottom_right = "bottomRight"
    none = "none"


class AnimationLevel(str, Enum):
    subtle = "subtle"
    moderate = "moderate"
    dynamic = "dynamic"


class SlideType(str, Enum):
    cover = "cover"
    problem = "problem"
    solution = "solution"
    market = "market"
    product = "product"
    business_model = "business_model"
    go_to_market = "go_to_market"
    competition = "competition"
    team = "team"
    financials = "financials"
    closing = "closing"
    content = "content"
    data = "data"
    quote = "quote"
    conclusion = "conclusion"

    @classmethod
    def parse(cls, value: str | SlideType | None) -> SlideType:
        """Map a raw slide type onto a known member; anything else is ``content``."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.content


class StylingStatus(str, Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    complete = "complete"


def _coerce_choice(value: Any, enum_cls: type[Enum], fallback: Enum) -> Enum:
    """Normalise a free-text label onto ``enum_cls``; unknown labels map to ``fallback``.

    Non-string input is rejected so that structurally wrong responses still
    fail validation.
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a string label, got {type(value).__name__}")
    key = value.strip().lower().replace("-", "_").replace(" ", "_")
    for candidate in (key, key.replace("_", "")):
        try:
            return enum_cls(candidate)
        except ValueError:
            continue
    return fallback


# ── Style building blocks ─────────────────────────────────────


class FontPairing(CamelModel):
    model_config = ConfigDict(frozen=True)

    heading: str
    body: str


class ColorPalette(CamelModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    highlights: tuple[str, str, str]


class DesignElementFlags(CamelModel):
    """Flags an industry guide switches on or off."""

    model_config = ConfigDict(frozen=True)

    shapes: bool
    gradients: bool
    icons: bool
    shadows: bool


class DesignElements(CamelModel):
    model_config = ConfigDict(frozen=True)

    shapes: bool
    gradients: bool
    shadows: bool
    icons: bool
    animations: AnimationLevel = AnimationLevel.subtle
    textures: bool = False


class SlideStyle(CamelModel):
    """A complete visual identity; theme table entries share this shape."""

    model_config = ConfigDict(frozen=True)

    font_pairings: FontPairing
    color_palette: ColorPalette
    spacing: Spacing = Spacing.balanced
    image_style: ImageStyle = ImageStyle.shadowed
    design_elements: DesignElements
    brand_position: BrandPosition = BrandPosition.bottom_right


class IndustryStyleGuide(CamelModel):
    model_config = ConfigDict(frozen=True)

    color_themes: tuple[Theme, ...]
    layouts: tuple[Layout, ...]
    design_elements: DesignElementFlags
    image_styles: tuple[str, ...]


# ── Analysis ──────────────────────────────────────────────────


class SlideSpecificStyle(CamelModel):
    model_config = ConfigDict(frozen=True)

    layout: Layout | None = None


class ContentAnalysis(CamelModel):
    model_config = ConfigDict(frozen=True)

    industry: Industry
    business_tone: BusinessTone
    key_themes: list[str]
    color_suggestions: list[str]
    recommended_style: RecommendedStyle
    slide_specific_styles: dict[SlideType, SlideSpecificStyle] | None = None

    @field_validator("industry", mode="before")
    @classmethod
    def _normalise_industry(cls, v: Any) -> Industry:
        return _coerce_choice(v, Industry, Industry.default)

    @field_validator("business_tone", mode="before")
    @classmethod
    def _normalise_tone(cls, v: Any) -> BusinessTone:
        return _coerce_choice(v, BusinessTone, BusinessTone.professional)

    @field_validator("recommended_style", mode="before")
    @classmethod
    def _normalise_style(cls, v: Any) -> RecommendedStyle:
        return _coerce_choice(v, RecommendedStyle, RecommendedStyle.professional)

    @field_validator("key_themes", mode="before")
    @classmethod
    def _trim_themes(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("keyThemes must be a list")
        themes = [t.strip() for t in v if isinstance(t, str) and t.strip()]
        return themes[:MAX_KEY_THEMES]

    @field_validator("color_suggestions", mode="before")
    @classmethod
    def _keep_hex_colors(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("colorSuggestions must be a list")
        colors = [c.strip() for c in v if isinstance(c, str) and HEX_COLOR.match(c.strip())]
        return colors[:MAX_COLOR_SUGGESTIONS]


# ── Emitted design ────────────────────────────────────────────


class DecorativeElement(CamelModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["shape", "gradient"]
    shape: Literal["rectangle", "circle"] | None = None
    color: str | None = None
    colors: tuple[str, ...] | None = None
    position: dict[str, str] | str
    size: dict[str, str] | str | None = None
    rotation: int | None = None
    opacity: float
    z_index: int


class AnimationHints(CamelModel):
    entrance: str = "none"
    emphasis: str = ""
    exit: str = ""
    transitions: str = ""


class DesignSpec(CamelModel):
    style: SlideStyle
    layout: Layout
    css_text: str
    decorative_elements: list[DecorativeElement]
    font_imports: str
    animations: AnimationHints


class StylingStatusRead(CamelModel):
    deck_id: str
    status: StylingStatus
