"""
Turn a ``ContentAnalysis`` into the concrete style and layout of one slide.
"""

from __future__ import annotations

from typing import NamedTuple

from pitchstyle.core.style_tables import (
    DEFAULT_THEME,
    INDUSTRY_COLOR_THEME,
    industry_guide,
    slide_type_layouts,
    theme_style,
    tone_fonts,
)
from pitchstyle.schemas.styling import (
    AnimationLevel,
    BrandPosition,
    ColorPalette,
    ContentAnalysis,
    DesignElements,
    ImageStyle,
    Industry,
    Layout,
    SlideStyle,
    SlideType,
    Spacing,
    Theme,
)

# Slide types whose layout does not depend on the industry
SLIDE_TYPE_LAYOUT_RULES: dict[SlideType, Layout] = {
    SlideType.cover: Layout.full_width_image,
    SlideType.data: Layout.data_grid,
    SlideType.financials: Layout.data_grid,
    SlideType.team: Layout.image_top,
}


class ResolvedStyle(NamedTuple):
    style: SlideStyle
    layout: Layout


def build_palette(color_suggestions: list[str]) -> ColorPalette:
    """Primary, secondary and accent come from the suggestions in order; the
    rest of the palette, and any slot without a suggestion, from the default theme."""
    defaults = theme_style(DEFAULT_THEME).color_palette
    suggested = list(color_suggestions[:3])
    suggested += [None] * (3 - len(suggested))
    primary, secondary, accent = suggested
    return defaults.model_copy(
        update={
            "primary": primary or defaults.primary,
            "secondary": secondary or defaults.secondary,
            "accent": accent or defaults.accent,
        }
    )


def build_style(analysis: ContentAnalysis) -> SlideStyle:
    """The slide-independent style of a deck."""
    flags = industry_guide(analysis.industry).design_elements
    return SlideStyle(
        font_pairings=tone_fonts(analysis.business_tone),
        color_palette=build_palette(analysis.color_suggestions),
        spacing=Spacing.balanced,
        image_style=ImageStyle.shadowed,
        design_elements=DesignElements(
            shapes=flags.shapes,
            gradients=flags.gradients,
            shadows=flags.shadows,
            icons=flags.icons,
            animations=AnimationLevel.subtle,
            textures=False,
        ),
        brand_position=BrandPosition.bottom_right,
    )


def select_layout(analysis: ContentAnalysis, slide_type: SlideType | str | None) -> Layout:
    """Explicit per-type override, then the slide-type rule, then the industry's first layout."""
    parsed = SlideType.parse(slide_type)

    override = (analysis.slide_specific_styles or {}).get(parsed)
    if override is not None and override.layout is not None:
        return override.layout

    if parsed in SLIDE_TYPE_LAYOUT_RULES:
        return SLIDE_TYPE_LAYOUT_RULES[parsed]

    return industry_guide(analysis.industry).layouts[0]


def resolve(analysis: ContentAnalysis, slide_type: SlideType | str | None) -> ResolvedStyle:
    return ResolvedStyle(style=build_style(analysis), layout=select_layout(analysis, slide_type))


def resolve_theme(theme: Theme | str | None, slide_type: SlideType | str | None) -> ResolvedStyle:
    """Style a slide from a manually chosen theme instead of an analysis."""
    return ResolvedStyle(style=theme_style(theme), layout=slide_type_layouts(slide_type)[0])


def color_theme_for(industry: Industry) -> Theme:
    return INDUSTRY_COLOR_THEME.get(industry, Theme.light)


def font_style_for(style: SlideStyle) -> str:
    """``serif`` or ``sans-serif``, from the heading font's generic family."""
    generic = style.font_pairings.heading.rsplit(",", 1)[-1].strip().lower()
    return "serif" if generic == "serif" else "sans-serif"
