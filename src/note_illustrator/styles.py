"""
Visual style catalog.

Styles are grouped into quality tiers:
- S: Flagship quality, suits educational and professional content
- A: High quality, specialized use cases
- B: Specialized looks for specific content types
- C: Niche styles

Each style contributes a prompt prefix (modifier) and a trailing list of
quality enhancers.
"""

from typing import Optional, Sequence

from .models import StyleTemplate, StyleTier


STYLE_TEMPLATES: tuple[StyleTemplate, ...] = (
    # Tier S - Flagship Quality
    StyleTemplate(
        id="hyper_realism",
        name="Hyper-Realism",
        tier="S",
        modifier="In hyper-realistic photographic style with extreme detail and professional lighting,",
        quality_enhancers="professional photography, studio lighting, extreme detail, 8K resolution",
        best_for=("Product mockups", "Technical precision", "Realistic scenes", "Educational accuracy"),
        icon="📸",
    ),
    StyleTemplate(
        id="digital_art",
        name="Digital Art",
        tier="S",
        modifier="In modern digital painting style with rich colors and painterly textures,",
        quality_enhancers="highly detailed, modern digital painting, vibrant colors, professional quality",
        best_for=("Concept visualization", "Artistic scenes", "Landscapes", "Abstract ideas"),
        icon="🎨",
    ),
    StyleTemplate(
        id="illustration",
        name="Illustration",
        tier="S",
        modifier="In clean editorial illustration style with vector-like clarity and modern design,",
        quality_enhancers="vector-like clarity, clean lines, editorial quality, professional illustration",
        best_for=("Infographics", "Educational diagrams", "Process flows", "Clean concepts"),
        icon="✏️",
    ),
    # Tier A - High Quality
    StyleTemplate(
        id="3d_render",
        name="3D Render",
        tier="A",
        modifier="In professional 3D rendered style with realistic materials and lighting,",
        quality_enhancers="professional 3D rendering, realistic materials, raytracing, high quality",
        best_for=("Technical visualization", "Product mockups", "Architectural concepts"),
        icon="🎲",
    ),
    StyleTemplate(
        id="anime",
        name="Anime",
        tier="A",
        modifier="In vibrant anime art style with expressive characters and dynamic composition,",
        quality_enhancers="anime style, expressive, vibrant colors, dynamic poses, high quality",
        best_for=("Characters", "Narrative scenes", "Action sequences", "Engaging visuals"),
        icon="🌸",
    ),
    StyleTemplate(
        id="watercolor",
        name="Watercolor",
        tier="A",
        modifier="In delicate watercolor painting style with soft washes and organic textures,",
        quality_enhancers="watercolor painting, soft washes, organic textures, artistic quality",
        best_for=("Nature", "Abstract concepts", "Gentle scenes", "Artistic presentations"),
        icon="💧",
    ),
    # Tier B - Specialized
    StyleTemplate(
        id="manga",
        name="Manga",
        tier="B",
        modifier="In detailed manga illustration style with dramatic compositions and expressive characters,",
        quality_enhancers="manga style, detailed linework, dramatic composition, expressive",
        best_for=("Storytelling", "Character designs", "Action sequences", "Comics"),
        icon="📖",
    ),
    StyleTemplate(
        id="cinematic",
        name="Cinematic",
        tier="B",
        modifier="In dramatic cinematic style with movie-quality composition and lighting,",
        quality_enhancers="cinematic composition, dramatic lighting, movie quality, epic scale",
        best_for=("Dramatic scenes", "Epic moments", "Movie-poster aesthetic", "Storytelling"),
        icon="🎬",
    ),
    StyleTemplate(
        id="oil_painting",
        name="Oil Painting",
        tier="B",
        modifier="In classical oil painting style with rich textures and masterful brushwork,",
        quality_enhancers="oil painting, classical style, rich textures, masterful brushwork",
        best_for=("Classical art", "Portraits", "Historical recreations", "Timeless scenes"),
        icon="🖼️",
    ),
    # Tier C - Niche
    StyleTemplate(
        id="sketch",
        name="Sketch",
        tier="C",
        modifier="In artistic sketch style with hand-drawn lines and gestural marks,",
        quality_enhancers="pencil sketch, hand-drawn, gestural, artistic",
        best_for=("Rough concepts", "Ideation", "Hand-drawn aesthetic", "Draft visuals"),
        icon="📝",
    ),
    StyleTemplate(
        id="pixel_art",
        name="Pixel Art",
        tier="C",
        modifier="In detailed pixel art style with retro gaming aesthetic,",
        quality_enhancers="pixel art, retro style, detailed pixels, gaming aesthetic",
        best_for=("Retro themes", "Game design", "Nostalgia content", "8-bit aesthetic"),
        icon="👾",
    ),
)

STYLE_TIERS: tuple[StyleTier, ...] = ("S", "A", "B", "C")

TIER_LABELS: dict[str, str] = {
    "S": "Flagship Quality",
    "A": "High Quality",
    "B": "Specialized",
    "C": "Niche",
}

TIER_DESCRIPTIONS: dict[str, str] = {
    "S": "Best for educational and professional content",
    "A": "Excellent for specialized use cases",
    "B": "Strong for specific content types",
    "C": "Use case specific styles",
}

DEFAULT_STYLE_ID = "hyper_realism"

_STYLES_BY_ID: dict[str, StyleTemplate] = {style.id: style for style in STYLE_TEMPLATES}


def get_style_by_id(style_id: str) -> Optional[StyleTemplate]:
    """Look up a style by id; None when the id is unknown."""
    return _STYLES_BY_ID.get(style_id)


def get_default_style() -> StyleTemplate:
    return _STYLES_BY_ID[DEFAULT_STYLE_ID]


def get_styles_by_tier(tier: str) -> list[StyleTemplate]:
    return [style for style in STYLE_TEMPLATES if style.tier == tier]


def get_styles_grouped_by_tier() -> dict[str, list[StyleTemplate]]:
    """Styles keyed by tier, in S, A, B, C order."""
    return {tier: get_styles_by_tier(tier) for tier in STYLE_TIERS}


def recommend_style_for_use_case(best_styles: Sequence[str]) -> StyleTemplate:
    """
    Pick the first known style from a use case's recommendations.

    Args:
        best_styles: Style ids in order of preference.

    Returns:
        The first style found in the catalog, else the default style.
    """
    for style_id in best_styles:
        style = get_style_by_id(style_id)
        if style:
            return style
    return get_default_style()


def get_tier_label(tier: str) -> str:
    return TIER_LABELS[tier]


def get_tier_description(tier: str) -> str:
    return TIER_DESCRIPTIONS[tier]


def format_style_option(style: StyleTemplate) -> str:
    """One-line label such as "[S] 📸 Hyper-Realism"."""
    return f"[{style.tier}] {style.icon} {style.name}"


def get_style_description(style: StyleTemplate) -> str:
    return f"Best for: {', '.join(style.best_for)}"
