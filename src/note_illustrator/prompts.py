"""
Prompt generation for image requests.

This module turns analysis results into prompt text:
- Fill a use-case prompt pattern's named slots from the concept list
- Wrap it with a style prefix, quality enhancers and an aspect hint
- Validate the result (length, unresolved {slot} markers)
- Brief an external prompt writer and clean up what it sends back
"""

import logging
import re
from typing import Optional

from .models import ContentProfile, PromptValidation, StyleTemplate, UseCaseTemplate
from .styles import get_default_style, get_style_by_id
from .use_cases import get_default_use_case, get_use_case_by_id

logger = logging.getLogger(__name__)


AUTO_DETECT = "auto_detect"
MIN_PROMPT_LENGTH = 10
MAX_PROMPT_LENGTH = 4000
MIN_PARSED_PROMPT_LENGTH = 30

PLACEHOLDER_PATTERN = re.compile(r"\{[^}]+\}")

PROMPT_VARIATIONS: tuple[str, ...] = (
    "from a different perspective",
    "with emphasis on details",
    "showing the overall context",
    "focusing on key elements",
    "with dramatic composition",
    "in a minimalist approach",
    "highlighting relationships",
    "with depth and layers",
    "from an aerial view",
)

ENHANCEMENT_SUFFIXES: tuple[str, ...] = (
    ", captured from a unique vantage point with dramatic perspective",
    ", with emphasis on intricate details and fine textures",
    ", bathed in atmospheric lighting that creates depth and dimension",
    ", showcasing the interplay of light and shadow",
    ", rendered with cinematic composition and visual storytelling",
)

# Lines an external writer adds around its prompts
_LABEL_LINE = re.compile(r"^(prompt|image|output|here|═|─|note:|content:)", re.IGNORECASE)
_QUALITY_WORDS = re.compile(r"\b(detailed|quality|resolution|professional|masterful|8k|4k)\b", re.IGNORECASE)
_LIGHTING_WORDS = re.compile(r"\b(light|lighting|illumin|glow|shadow|bright|dark)\b", re.IGNORECASE)


def _join(concepts: list[str]) -> str:
    return ", ".join(concepts)


def fill_slots(pattern: str, concepts: list[str]) -> str:
    """
    Substitute the named slots of a prompt pattern.

    Slots draw on the concept list: the first three concepts are primary,
    the next three secondary. Empty slices fall back to a generic phrase.
    Each slot is replaced once; unknown slots are left in place for
    validate_prompt to report.

    Args:
        pattern: Prompt pattern with {slot} markers.
        concepts: Ranked concepts.

    Returns:
        The pattern with known slots filled.
    """
    primary = _join(concepts[:3])
    secondary = _join(concepts[3:6])
    first = concepts[0] if concepts else ""

    slots = (
        ("{concepts}", primary or "the main subject"),
        ("{relationships}", secondary or "key relationships"),
        ("{elements}", secondary or "supporting elements"),
        ("{process}", primary or "the process"),
        ("{character}", first or "the character"),
        ("{traits}", secondary or "distinctive traits"),
        ("{setting}", primary or "the environment"),
        ("{data}", primary or "the data points"),
        ("{subject}", primary or "the subject"),
        ("{structure}", primary or "the structure"),
        ("{product}", primary or "the product"),
    )

    prompt = pattern
    for slot, value in slots:
        prompt = prompt.replace(slot, value, 1)
    return prompt


def validate_prompt(prompt: str) -> PromptValidation:
    """
    Check a rendered prompt before it is sent to the image service.

    Unresolved {slot} markers are reported as issues, never raised.

    Args:
        prompt: Rendered prompt.

    Returns:
        PromptValidation listing every problem found.
    """
    issues: list[str] = []

    if len(prompt) < MIN_PROMPT_LENGTH:
        issues.append("Prompt is too short")

    if len(prompt) > MAX_PROMPT_LENGTH:
        issues.append("Prompt exceeds maximum length")

    placeholders = PLACEHOLDER_PATTERN.findall(prompt)
    if placeholders:
        issues.append(f"Unresolved placeholders: {', '.join(placeholders)}")
        logger.warning(f"Prompt has unresolved placeholders: {placeholders}")

    return PromptValidation(
        valid=not issues,
        issues=issues,
        unresolved_placeholders=placeholders,
    )


class PromptGenerator:
    """Builds image prompts from a use case, a style and ranked concepts."""

    def __init__(self, aspect_ratio: str = "16:9"):
        self.aspect_ratio = aspect_ratio

    def generate_auto_prompt(
        self,
        concepts: list[str],
        use_case_id: str,
        style_id: str,
        detected_use_case: Optional[UseCaseTemplate] = None,
    ) -> str:
        """
        Build one complete prompt.

        Args:
            concepts: Ranked concepts from the note.
            use_case_id: Template id, or "auto_detect" to use detected_use_case.
            style_id: Style id. Unknown ids fall back to the default style.
            detected_use_case: Template chosen by classification.

        Returns:
            Style prefix + filled pattern + quality enhancers + aspect hint.
        """
        style = get_style_by_id(style_id) or get_default_style()
        use_case = self.resolve_use_case(use_case_id, detected_use_case)

        base_prompt = self.apply_template(use_case, concepts)
        styled_prompt = self.apply_style_modifier(base_prompt, style)
        return self.optimize_prompt(styled_prompt, style)

    def resolve_use_case(
        self,
        use_case_id: str,
        detected_use_case: Optional[UseCaseTemplate] = None,
    ) -> UseCaseTemplate:
        if use_case_id == AUTO_DETECT:
            return detected_use_case or get_default_use_case()
        return get_use_case_by_id(use_case_id) or get_default_use_case()

    def apply_template(self, use_case: UseCaseTemplate, concepts: list[str]) -> str:
        return fill_slots(use_case.prompt_pattern, concepts)

    def apply_style_modifier(self, base_prompt: str, style: StyleTemplate) -> str:
        return f"{style.modifier} {base_prompt}"

    def optimize_prompt(self, prompt: str, style: StyleTemplate) -> str:
        """Append the style's quality enhancers and the aspect ratio hint."""
        aspect_hint = f"optimized for {self.aspect_ratio} aspect ratio"
        return f"{prompt}, {style.quality_enhancers}, {aspect_hint}"

    def validate_prompt(self, prompt: str) -> PromptValidation:
        return validate_prompt(prompt)

    def generate_multiple_prompts(
        self,
        concepts: list[str],
        use_case_id: str,
        style_id: str,
        count: int,
        detected_use_case: Optional[UseCaseTemplate] = None,
    ) -> list[str]:
        """
        Build a base prompt plus variations of it.

        At most len(PROMPT_VARIATIONS) + 1 prompts are produced.

        Args:
            concepts: Ranked concepts from the note.
            use_case_id: Template id or "auto_detect".
            style_id: Style id.
            count: Number of prompts wanted.
            detected_use_case: Template chosen by classification.

        Returns:
            The base prompt followed by "<base>, <variation>" prompts.
        """
        base_prompt = self.generate_auto_prompt(concepts, use_case_id, style_id, detected_use_case)
        prompts = [base_prompt]

        for i in range(1, min(count, len(PROMPT_VARIATIONS) + 1)):
            prompts.append(f"{base_prompt}, {PROMPT_VARIATIONS[i - 1]}")

        return prompts


# =============================================================================
# External prompt writer support
# =============================================================================

_CONTENT_TYPE_RULES = (
    (re.compile(r"\b(learn|teach|explain|concept|theory|principle)\b", re.I), "Educational/Instructional"),
    (re.compile(r"\b(story|character|scene|chapter|narrative)\b", re.I), "Creative/Narrative"),
    (re.compile(r"\b(data|analysis|research|study|experiment)\b", re.I), "Scientific/Analytical"),
    (re.compile(r"\b(code|function|api|system|architecture)\b", re.I), "Technical/Engineering"),
    (re.compile(r"\b(history|ancient|century|era|civilization)\b", re.I), "Historical"),
)

_THEME_RULES = (
    (re.compile(r"nature|forest|ocean|mountain|sky", re.I), "Nature & Landscapes"),
    (re.compile(r"technology|digital|computer|ai|robot", re.I), "Technology"),
    (re.compile(r"human|people|person|character|face", re.I), "Human Elements"),
    (re.compile(r"abstract|concept|idea|theory|philosophy", re.I), "Abstract Concepts"),
    (re.compile(r"space|universe|cosmic|star|planet", re.I), "Cosmic/Space"),
    (re.compile(r"city|urban|building|architecture", re.I), "Urban/Architecture"),
    (re.compile(r"science|biology|chemistry|physics", re.I), "Scientific"),
    (re.compile(r"art|creative|design|aesthetic", re.I), "Artistic/Creative"),
)

_TONE_RULES = (
    (re.compile(r"exciting|amazing|incredible|fantastic|wonderful", re.I), "Enthusiastic & Positive"),
    (re.compile(r"serious|important|critical|essential|crucial", re.I), "Serious & Professional"),
    (re.compile(r"mystery|secret|hidden|unknown|discover", re.I), "Mysterious & Intriguing"),
    (re.compile(r"calm|peace|gentle|soft|quiet", re.I), "Calm & Serene"),
)

_VISUAL_RULES = (
    (re.compile(r"color|red|blue|green|golden|silver", re.I), "Color emphasis"),
    (re.compile(r"light|glow|shine|bright|dark|shadow", re.I), "Lighting dynamics"),
    (re.compile(r"large|huge|tiny|small|vast|miniature", re.I), "Scale contrast"),
    (re.compile(r"moving|flowing|dynamic|static|still", re.I), "Motion elements"),
    (re.compile(r"texture|smooth|rough|soft|hard", re.I), "Textural details"),
)


def build_content_profile(text: str) -> ContentProfile:
    """
    Summarize a note for an external prompt writer.

    Args:
        text: Note content.

    Returns:
        ContentProfile with a content type, up to three themes, a tone and
        up to three visual elements. Every field has a neutral default.
    """
    content_type = next(
        (label for pattern, label in _CONTENT_TYPE_RULES if pattern.search(text)),
        "General Content",
    )
    themes = [label for pattern, label in _THEME_RULES if pattern.search(text)] or ["General Theme"]
    tone = next((label for pattern, label in _TONE_RULES if pattern.search(text)), "Neutral")
    visual_elements = (
        [label for pattern, label in _VISUAL_RULES if pattern.search(text)]
        or ["Standard visual treatment"]
    )

    return ContentProfile(
        content_type=content_type,
        themes=themes[:3],
        tone=tone,
        visual_elements=visual_elements[:3],
    )


def _is_prompt_line(line: str) -> bool:
    if not line or len(line) < MIN_PARSED_PROMPT_LENGTH:
        return False
    if _LABEL_LINE.match(line):
        return False
    if line.startswith("#") or (line.startswith("*") and line.endswith("*")):
        return False
    return True


def _clean_prompt_line(line: str) -> str:
    cleaned = re.sub(r"^\d+[.):\-]\s*", "", line)
    cleaned = re.sub(r"^[-*•]\s*", "", cleaned)
    cleaned = re.sub(r"^[\"'`]|[\"'`]$", "", cleaned)
    cleaned = re.sub(r"^\*\*|\*\*$", "", cleaned)
    return cleaned.strip()


def enhance_prompt(prompt: str, style: StyleTemplate) -> str:
    """Add the style prefix, quality enhancers and lighting when missing."""
    lower_prompt = prompt.lower()
    enhanced = prompt

    if (
        style.name.lower() not in lower_prompt
        and "style" not in lower_prompt
        and "artistic" not in lower_prompt
    ):
        enhanced = f"{style.modifier} {enhanced}"

    if not _QUALITY_WORDS.search(enhanced):
        enhanced = f"{enhanced}, {style.quality_enhancers}"

    if not _LIGHTING_WORDS.search(enhanced):
        enhanced = f"{enhanced}, with professional lighting"

    return enhanced


def fallback_prompts(count: int, style: StyleTemplate) -> list[str]:
    """Generic prompts used when a writer's response has nothing usable."""
    templates = (
        f"{style.modifier} A stunning visual composition showcasing artistic excellence, "
        f"with masterful use of light and shadow, {style.quality_enhancers}",
        f"{style.modifier} An evocative scene with rich atmospheric depth and compelling "
        f"visual narrative, {style.quality_enhancers}",
        f"{style.modifier} A detailed study in form and color, demonstrating technical "
        f"mastery and creative vision, {style.quality_enhancers}",
    )
    return [templates[i % len(templates)] for i in range(count)]


def parse_prompt_response(
    response: str,
    expected_count: int,
    style: Optional[StyleTemplate] = None,
) -> list[str]:
    """
    Extract usable prompts from a free-text list (one prompt per line).

    Drops labels, headings and short lines, strips numbering, bullets and
    quotes, enhances each prompt for the style, then pads or truncates the
    list to expected_count.

    Args:
        response: Text returned by a prompt writer, or edited by a user.
        expected_count: Number of prompts wanted.
        style: Target style. Defaults to the default style.

    Returns:
        Exactly expected_count prompts.
    """
    style = style or get_default_style()

    prompts = [
        _clean_prompt_line(line)
        for line in (raw.strip() for raw in response.split("\n"))
        if _is_prompt_line(line)
    ]
    prompts = [enhance_prompt(p, style) for p in prompts if len(p) > MIN_PARSED_PROMPT_LENGTH]

    if not prompts:
        logger.warning("No usable prompts in response; using fallback prompts")
        return fallback_prompts(expected_count, style)

    parsed_count = len(prompts)
    while len(prompts) < expected_count:
        base_prompt = prompts[len(prompts) % parsed_count]
        suffix = ENHANCEMENT_SUFFIXES[(len(prompts) - 1) % len(ENHANCEMENT_SUFFIXES)]
        prompts.append(base_prompt + suffix)

    return prompts[:expected_count]
