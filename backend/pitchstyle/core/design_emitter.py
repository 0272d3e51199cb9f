"""
Generate the stylesheet and decorative elements of a styled slide.

The CSS is plain template substitution: custom properties from the palette,
fonts and spacing, constant base rules, then at most one style-variant block,
one layout block and one slide-type block, in that order.  Every input
produces the custom properties and base rules.
"""

from __future__ import annotations

from typing import NamedTuple

from pitchstyle.core.style_resolver import resolve, resolve_theme
from pitchstyle.schemas.styling import (
    AnimationHints,
    AnimationLevel,
    ColorPalette,
    ContentAnalysis,
    DecorativeElement,
    DesignSpec,
    Layout,
    RecommendedStyle,
    SlideStyle,
    SlideType,
    Spacing,
    Theme,
)

# padding, gap, margin
SPACING_VALUES: dict[Spacing, tuple[str, str, str]] = {
    Spacing.compact: ("30px", "15px", "15px"),
    Spacing.balanced: ("50px", "25px", "25px"),
    Spacing.spacious: ("70px", "35px", "35px"),
}

CUSTOM_PROPERTIES = (
    "--primary-color",
    "--secondary-color",
    "--accent-color",
    "--background-color",
    "--text-color",
    "--highlight-1",
    "--highlight-2",
    "--highlight-3",
    "--heading-font",
    "--body-font",
    "--container-padding",
    "--content-gap",
    "--section-margin",
)

ANIMATION_HINTS: dict[AnimationLevel, AnimationHints] = {
    AnimationLevel.subtle: AnimationHints(entrance="fade", emphasis="highlight", transitions="smooth"),
    AnimationLevel.moderate: AnimationHints(entrance="slide", emphasis="pulse", transitions="reveal"),
    AnimationLevel.dynamic: AnimationHints(entrance="zoom", emphasis="bounce", transitions="dramatic"),
}

BASE_RULES = """
.slide-container {
  font-family: var(--body-font);
  color: var(--text-color);
  padding: var(--container-padding);
  background-color: var(--background-color);
}

h1, h2, h3 {
  font-family: var(--heading-font);
  margin-bottom: var(--content-gap);
  line-height: 1.2;
}

h1 {
  font-size: 48px;
  font-weight: 700;
  color: var(--primary-color);
}

h2 {
  font-size: 36px;
  font-weight: 600;
  color: var(--secondary-color);
}

p {
  font-size: 22px;
  line-height: 1.5;
  margin-bottom: var(--content-gap);
}

ul, ol {
  margin-left: 30px;
  margin-bottom: var(--section-margin);
}

li {
  font-size: 22px;
  margin-bottom: 15px;
  line-height: 1.4;
}
"""

LAYOUT_BLOCKS: dict[Layout, str] = {
    Layout.split_content: """
.content-area {
  display: flex;
  gap: var(--content-gap);
}

.text-content, .media-content {
  flex: 1;
  min-width: 0;
}
""",
    Layout.full_width_image: """
.image-container {
  position: absolute;
  top: 0;
  left: 0;
  width: 100%;
  height: 100%;
  z-index: 1;
}

.content-overlay {
  position: relative;
  z-index: 2;
  background: linear-gradient(rgba(0,0,0,0.4), rgba(0,0,0,0.7));
  color: white;
  padding: var(--container-padding);
  height: 100%;
  display: flex;
  flex-direction: column;
  justify-content: center;
}

.content-overlay h1, .content-overlay h2 {
  color: white;
}
""",
    Layout.data_grid: """
.data-grid {
  display: grid;
  grid-template-columns: repeat(2, 1fr);
  gap: var(--content-gap);
}

.data-card {
  background-color: var(--highlight-1);
  border-radius: 8px;
  padding: 20px;
  box-shadow: 0 4px 8px rgba(0,0,0,0.05);
}

.data-card h3 {
  color: var(--primary-color);
  font-size: 24px;
  margin-bottom: 10px;
}

.metric {
  font-size: 36px;
  font-weight: 700;
  color: var(--secondary-color);
}
""",
}

SLIDE_TYPE_BLOCKS: dict[SlideType, str] = {
    SlideType.cover: """
.title-container {
  max-width: 70%;
}

.slide-container.cover h1 {
  font-size: 64px;
  margin-bottom: 30px;
  position: relative;
}

.title-accent {
  position: absolute;
  height: 8px;
  width: 120px;
  background-color: var(--accent-color);
  bottom: -20px;
  left: 0;
}
""",
}

_CORPORATE_BLOCK = """
.slide-container {
  background-color: #FFFFFF;
}
h1 { color: #1A365D; }
h2 { color: #2C5282; }
"""

_TECH_BLOCK = """
.slide-container {
  background-color: #050A24;
  color: #E2E8F0;
}
h1 { color: #9F7AEA; }
h2 { color: #6B8AF2; }
p, li { color: #CBD5E0; }
"""


class EmittedDesign(NamedTuple):
    css_text: str
    decorative_elements: list[DecorativeElement]


def _as_recommended_style(value: RecommendedStyle | str | None) -> RecommendedStyle | None:
    if value is None:
        return None
    try:
        return RecommendedStyle(value)
    except ValueError:
        return None


def _root_block(style: SlideStyle) -> str:
    palette = style.color_palette
    fonts = style.font_pairings
    padding, gap, margin = SPACING_VALUES[style.spacing]
    values = (
        palette.primary,
        palette.secondary,
        palette.accent,
        palette.background,
        palette.text,
        *palette.highlights,
        fonts.heading,
        fonts.body,
        padding,
        gap,
        margin,
    )
    declarations = "\n".join(f"  {name}: {value};" for name, value in zip(CUSTOM_PROPERTIES, values))
    return f":root {{\n{declarations}\n}}\n"


def _variant_block(recommended: RecommendedStyle | None, palette: ColorPalette) -> str:
    if recommended is RecommendedStyle.corporate:
        return _CORPORATE_BLOCK
    if recommended is RecommendedStyle.playful:
        return f"""
h1 {{
  color: {palette.accent};
  font-weight: 800;
}}
.slide-container {{
  background: linear-gradient(120deg, {palette.background} 0%, {palette.highlights[0]} 100%);
}}
"""
    if recommended in (RecommendedStyle.innovative, RecommendedStyle.tech):
        return _TECH_BLOCK
    return ""


def generate_css(
    style: SlideStyle,
    layout: Layout,
    slide_type: SlideType | str | None,
    recommended_style: RecommendedStyle | str | None = None,
) -> str:
    recommended = _as_recommended_style(recommended_style)
    return "".join(
        (
            _root_block(style),
            BASE_RULES,
            _variant_block(recommended, style.color_palette),
            LAYOUT_BLOCKS.get(layout, ""),
            SLIDE_TYPE_BLOCKS.get(SlideType.parse(slide_type), ""),
        )
    )


def generate_decorative_elements(
    style: SlideStyle,
    recommended_style: RecommendedStyle | str | None = None,
) -> list[DecorativeElement]:
    """Accent shapes for the recommended style, then an optional corner gradient.

    List order is the stacking order and is always the same for the same input.
    """
    recommended = _as_recommended_style(recommended_style)
    palette = style.color_palette
    flags = style.design_elements
    elements: list[DecorativeElement] = []

    if recommended in (RecommendedStyle.innovative, RecommendedStyle.tech):
        elements.append(DecorativeElement(
            type="shape", shape="rectangle", color=palette.primary,
            position={"top": "15%", "right": "5%"}, size={"width": "80px", "height": "5px"},
            opacity=0.8, z_index=1,
        ))
        elements.append(DecorativeElement(
            type="shape", shape="rectangle", color=palette.secondary,
            position={"top": "18%", "right": "5%"}, size={"width": "40px", "height": "5px"},
            opacity=0.8, z_index=1,
        ))
    elif recommended is RecommendedStyle.playful:
        elements.append(DecorativeElement(
            type="shape", shape="circle", color=palette.accent,
            position={"top": "10%", "right": "10%"}, size="80px",
            opacity=0.6, z_index=1,
        ))
        elements.append(DecorativeElement(
            type="shape", shape="circle", color=palette.secondary,
            position={"bottom": "15%", "left": "8%"}, size="120px",
            opacity=0.3, z_index=1,
        ))
    elif flags.shapes:
        elements.append(DecorativeElement(
            type="shape", shape="rectangle", color=palette.primary,
            position={"top": "0", "left": "0"}, size={"width": "100%", "height": "8px"},
            opacity=1, z_index=1,
        ))

    if flags.gradients:
        elements.append(DecorativeElement(
            type="gradient", colors=(palette.primary, palette.accent),
            position="corner", opacity=0.1, z_index=0,
        ))

    return elements


def emit(
    style: SlideStyle,
    layout: Layout,
    slide_type: SlideType | str | None,
    recommended_style: RecommendedStyle | str | None = None,
) -> EmittedDesign:
    return EmittedDesign(
        css_text=generate_css(style, layout, slide_type, recommended_style),
        decorative_elements=generate_decorative_elements(style, recommended_style),
    )


def font_imports(style: SlideStyle) -> str:
    """Google Fonts ``@import`` for the heading and body families."""
    heading = _family(style.font_pairings.heading)
    body = _family(style.font_pairings.body)
    return (
        "@import url('https://fonts.googleapis.com/css2?"
        f"family={heading}:wght@400;600;700&family={body}:wght@400;500&display=swap');"
    )


def _family(font_stack: str) -> str:
    return font_stack.split(",")[0].replace("'", "").strip().replace(" ", "+")


def animations(style: SlideStyle) -> AnimationHints:
    return ANIMATION_HINTS.get(style.design_elements.animations, AnimationHints())


def _design_spec(
    style: SlideStyle,
    layout: Layout,
    slide_type: SlideType | str | None,
    recommended_style: RecommendedStyle | str | None,
) -> DesignSpec:
    emitted = emit(style, layout, slide_type, recommended_style)
    return DesignSpec(
        style=style,
        layout=layout,
        css_text=emitted.css_text,
        decorative_elements=emitted.decorative_elements,
        font_imports=font_imports(style),
        animations=animations(style),
    )


def build_design_spec(analysis: ContentAnalysis, slide_type: SlideType | str | None) -> DesignSpec:
    style, layout = resolve(analysis, slide_type)
    return _design_spec(style, layout, slide_type, analysis.recommended_style)


def build_theme_design_spec(theme: Theme | str | None, slide_type: SlideType | str | None) -> DesignSpec:
    style, layout = resolve_theme(theme, slide_type)
    return _design_spec(style, layout, slide_type, None)
