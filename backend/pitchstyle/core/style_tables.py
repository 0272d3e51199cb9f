"""
Static style data: industry guides, tone fonts, theme styles and the layout
preferences of each slide type.

Every lookup helper here falls back to a documented default, so callers never
have to handle a missing key.
"""

from __future__ import annotations

from pitchstyle.schemas.styling import (
    AnimationLevel,
    BrandPosition,
    BusinessTone,
    ColorPalette,
    DesignElementFlags,
    DesignElements,
    FontPairing,
    ImageStyle,
    Industry,
    IndustryStyleGuide,
    Layout,
    RecommendedStyle,
    SlideStyle,
    SlideType,
    Spacing,
    Theme,
)


# ---------------------------------------------------------------------------
# Industry style guides
# ---------------------------------------------------------------------------

INDUSTRY_STYLE_GUIDES: dict[Industry, IndustryStyleGuide] = {
    Industry.technology: IndustryStyleGuide(
        color_themes=(Theme.gradient, Theme.royal_blue),
        layouts=(Layout.split_content, Layout.data_grid),
        design_elements=DesignElementFlags(shapes=True, gradients=True, icons=True, shadows=True),
        image_styles=("modern", "sleek", "digital"),
    ),
    Industry.healthcare: IndustryStyleGuide(
        color_themes=(Theme.light, Theme.forest),
        layouts=(Layout.centered, Layout.image_top),
        design_elements=DesignElementFlags(shapes=True, gradients=False, icons=True, shadows=False),
        image_styles=("professional", "clean", "caring"),
    ),
    Industry.finance: IndustryStyleGuide(
        color_themes=(Theme.dark, Theme.royal_blue),
        layouts=(Layout.split_content, Layout.data_grid),
        design_elements=DesignElementFlags(shapes=False, gradients=False, icons=True, shadows=True),
        image_styles=("corporate", "professional", "trustworthy"),
    ),
    Industry.education: IndustryStyleGuide(
        color_themes=(Theme.light, Theme.coral),
        layouts=(Layout.image_top, Layout.split_content),
        design_elements=DesignElementFlags(shapes=True, gradients=True, icons=True, shadows=False),
        image_styles=("friendly", "bright", "engaging"),
    ),
    Industry.ecommerce: IndustryStyleGuide(
        color_themes=(Theme.coral, Theme.gradient),
        layouts=(Layout.full_width_image, Layout.split_content),
        design_elements=DesignElementFlags(shapes=True, gradients=True, icons=True, shadows=True),
        image_styles=("vibrant", "product-focused", "lifestyle"),
    ),
    Industry.creative: IndustryStyleGuide(
        color_themes=(Theme.gradient, Theme.coral),
        layouts=(Layout.full_width_image, Layout.centered),
        design_elements=DesignElementFlags(shapes=True, gradients=True, icons=True, shadows=True),
        image_styles=("artistic", "expressive", "bold"),
    ),
    Industry.default: IndustryStyleGuide(
        color_themes=(Theme.light, Theme.royal_blue),
        layouts=(Layout.split_content, Layout.centered),
        design_elements=DesignElementFlags(shapes=True, gradients=False, icons=True, shadows=True),
        image_styles=("professional", "clean", "versatile"),
    ),
}


# ---------------------------------------------------------------------------
# Fonts per business tone
# ---------------------------------------------------------------------------

TONE_FONTS: dict[BusinessTone, FontPairing] = {
    BusinessTone.professional: FontPairing(heading="'Montserrat', sans-serif", body="'Open Sans', sans-serif"),
    BusinessTone.creative: FontPairing(heading="'Playfair Display', serif", body="'Source Sans Pro', sans-serif"),
    BusinessTone.technical: FontPairing(heading="'Roboto', sans-serif", body="'Roboto Mono', monospace"),
    BusinessTone.friendly: FontPairing(heading="'Nunito', sans-serif", body="'Lato', sans-serif"),
    BusinessTone.luxurious: FontPairing(heading="'Cormorant Garamond', serif", body="'Raleway', sans-serif"),
    BusinessTone.modern: FontPairing(heading="'Poppins', sans-serif", body="'Inter', sans-serif"),
    BusinessTone.traditional: FontPairing(heading="'Merriweather', serif", body="'Source Serif Pro', serif"),
}


# ---------------------------------------------------------------------------
# Theme styles
# ---------------------------------------------------------------------------

THEME_STYLES: dict[Theme, SlideStyle] = {
    Theme.light: SlideStyle(
        font_pairings=FontPairing(heading="'Montserrat', sans-serif", body="'Open Sans', sans-serif"),
        color_palette=ColorPalette(
            primary="#4F46E5",
            secondary="#A5B4FC",
            accent="#4338CA",
            background="#FFFFFF",
            text="#1F2937",
            highlights=("#EEF2FF", "#C7D2FE", "#818CF8"),
        ),
        spacing=Spacing.balanced,
        image_style=ImageStyle.shadowed,
        design_elements=DesignElements(
            shapes=True, gradients=False, shadows=True, icons=True,
            animations=AnimationLevel.subtle, textures=False,
        ),
        brand_position=BrandPosition.bottom_right,
    ),
    Theme.dark: SlideStyle(
        font_pairings=FontPairing(heading="'Raleway', sans-serif", body="'Roboto', sans-serif"),
        color_palette=ColorPalette(
            primary="#4B5563",
            secondary="#9CA3AF",
            accent="#1E40AF",
            background="#111827",
            text="#F9FAFB",
            highlights=("#1F2937", "#374151", "#6B7280"),
        ),
        spacing=Spacing.compact,
        image_style=ImageStyle.masked,
        design_elements=DesignElements(
            shapes=True, gradients=True, shadows=True, icons=True,
            animations=AnimationLevel.moderate, textures=True,
        ),
        brand_position=BrandPosition.bottom_right,
    ),
    Theme.royal_blue: SlideStyle(
        font_pairings=FontPairing(heading="'Poppins', sans-serif", body="'Inter', sans-serif"),
        color_palette=ColorPalette(
            primary="#1E40AF",
            secondary="#3B82F6",
            accent="#2563EB",
            background="#EFF6FF",
            text="#1E3A8A",
            highlights=("#DBEAFE", "#93C5FD", "#60A5FA"),
        ),
        spacing=Spacing.balanced,
        image_style=ImageStyle.framed,
        design_elements=DesignElements(
            shapes=True, gradients=True, shadows=True, icons=True,
            animations=AnimationLevel.subtle, textures=False,
        ),
        brand_position=BrandPosition.top_right,
    ),
    Theme.coral: SlideStyle(
        font_pairings=FontPairing(heading="'Playfair Display', serif", body="'Source Sans Pro', sans-serif"),
        color_palette=ColorPalette(
            primary="#F43F5E",
            secondary="#FB7185",
            accent="#BE123C",
            background="#FFF1F2",
            text="#881337",
            highlights=("#FFE4E6", "#FECDD3", "#FDA4AF"),
        ),
        spacing=Spacing.spacious,
        image_style=ImageStyle.rounded,
        design_elements=DesignElements(
            shapes=True, gradients=False, shadows=True, icons=True,
            animations=AnimationLevel.dynamic, textures=False,
        ),
        brand_position=BrandPosition.bottom_left,
    ),
    Theme.forest: SlideStyle(
        font_pairings=FontPairing(heading="'Merriweather', serif", body="'Lato', sans-serif"),
        color_palette=ColorPalette(
            primary="#059669",
            secondary="#34D399",
            accent="#047857",
            background="#ECFDF5",
            text="#064E3B",
            highlights=("#D1FAE5", "#A7F3D0", "#6EE7B7"),
        ),
        spacing=Spacing.spacious,
        image_style=ImageStyle.full_bleed,
        design_elements=DesignElements(
            shapes=True, gradients=False, shadows=True, icons=True,
            animations=AnimationLevel.subtle, textures=True,
        ),
        brand_position=BrandPosition.bottom_right,
    ),
    Theme.gradient: SlideStyle(
        font_pairings=FontPairing(heading="'Outfit', sans-serif", body="'Work Sans', sans-serif"),
        color_palette=ColorPalette(
            primary="#6366F1",
            secondary="#A855F7",
            accent="#EC4899",
            background="#F5F3FF",
            text="#4C1D95",
            highlights=("#EDE9FE", "#DDD6FE", "#C4B5FD"),
        ),
        spacing=Spacing.balanced,
        image_style=ImageStyle.shadowed,
        design_elements=DesignElements(
            shapes=True, gradients=True, shadows=True, icons=True,
            animations=AnimationLevel.dynamic, textures=False,
        ),
        brand_position=BrandPosition.top_left,
    ),
}

# Palette slots the resolver cannot fill from colour suggestions come from here.
DEFAULT_THEME = Theme.light


# ---------------------------------------------------------------------------
# Layout preferences per slide type (manual theme path)
# ---------------------------------------------------------------------------

SLIDE_TYPE_LAYOUTS: dict[SlideType, tuple[Layout, ...]] = {
    SlideType.cover: (Layout.full_width_image, Layout.centered, Layout.split_content),
    SlideType.content: (Layout.split_content, Layout.image_top, Layout.image_bottom),
    SlideType.data: (Layout.data_grid, Layout.split_content),
    SlideType.quote: (Layout.quote_focus, Layout.centered),
    SlideType.team: (Layout.image_top, Layout.split_content),
    SlideType.financials: (Layout.data_grid, Layout.split_content),
    SlideType.conclusion: (Layout.centered, Layout.full_width_image),
}


# ---------------------------------------------------------------------------
# Local classification tables
# ---------------------------------------------------------------------------

# Checked in this order; the first industry with a matching keyword wins.
INDUSTRY_KEYWORDS: tuple[tuple[Industry, frozenset[str]], ...] = (
    (Industry.technology, frozenset({
        "tech", "technology", "software", "digital", "platform", "data", "algorithm", "online",
    })),
    (Industry.healthcare, frozenset({
        "health", "healthcare", "medical", "patient", "doctor", "hospital", "care", "clinic", "wellness",
    })),
    (Industry.finance, frozenset({
        "finance", "banking", "investment", "money", "financial", "bank", "budget", "payment", "loan",
    })),
    (Industry.education, frozenset({
        "school", "education", "student", "learning", "teach", "course", "training",
    })),
)

INDUSTRY_TONE: dict[Industry, BusinessTone] = {
    Industry.technology: BusinessTone.modern,
    Industry.healthcare: BusinessTone.professional,
    Industry.finance: BusinessTone.traditional,
    Industry.education: BusinessTone.friendly,
}

INDUSTRY_RECOMMENDED_STYLE: dict[Industry, RecommendedStyle] = {
    Industry.technology: RecommendedStyle.innovative,
    Industry.finance: RecommendedStyle.corporate,
}

# Coarse theme name written to each slide's ``color_theme`` field
INDUSTRY_COLOR_THEME: dict[Industry, Theme] = {
    Industry.technology: Theme.gradient,
    Industry.finance: Theme.dark,
    Industry.healthcare: Theme.forest,
}

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "for", "nor", "on", "at", "to", "by", "in",
    "this", "that", "with", "from", "have", "your",
})


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def industry_guide(industry: Industry | str | None) -> IndustryStyleGuide:
    """Return the guide for *industry*, or the ``default`` guide."""
    try:
        return INDUSTRY_STYLE_GUIDES[Industry(industry)]
    except (KeyError, ValueError):
        return INDUSTRY_STYLE_GUIDES[Industry.default]


def tone_fonts(tone: BusinessTone | str | None) -> FontPairing:
    try:
        return TONE_FONTS[BusinessTone(tone)]
    except (KeyError, ValueError):
        return TONE_FONTS[BusinessTone.professional]


def theme_style(theme: Theme | str | None) -> SlideStyle:
    try:
        return THEME_STYLES[Theme(theme)]
    except (KeyError, ValueError):
        return THEME_STYLES[DEFAULT_THEME]


def slide_type_layouts(slide_type: SlideType | str | None) -> tuple[Layout, ...]:
    return SLIDE_TYPE_LAYOUTS.get(SlideType.parse(slide_type), SLIDE_TYPE_LAYOUTS[SlideType.content])


def industry_tone(industry: Industry) -> BusinessTone:
    return INDUSTRY_TONE.get(industry, BusinessTone.professional)


def industry_recommended_style(industry: Industry) -> RecommendedStyle:
    return INDUSTRY_RECOMMENDED_STYLE.get(industry, RecommendedStyle.professional)
