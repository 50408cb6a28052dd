"""Tests for prompt generation, validation and response parsing."""

import pytest

from note_illustrator.prompts import (
    ENHANCEMENT_SUFFIXES,
    PROMPT_VARIATIONS,
    PromptGenerator,
    build_content_profile,
    fallback_prompts,
    fill_slots,
    parse_prompt_response,
    validate_prompt,
)
from note_illustrator.styles import get_style_by_id
from note_illustrator.use_cases import get_use_case_by_id


class TestFillSlots:
    """Tests for named slot substitution."""

    def test_primary_and_secondary_concepts(self):
        """Test that the first three concepts are primary, the next three secondary."""
        result = fill_slots("{concepts} and {relationships}", ["a", "b", "c", "d"])

        assert result == "a, b, c and d"

    def test_fallback_phrases(self):
        """Test generic phrases for empty concept lists."""
        assert fill_slots("{concepts} with {elements}", []) == "the main subject with supporting elements"
        assert fill_slots("{character}", []) == "the character"

    def test_unknown_slot_left_in_place(self):
        """Test that unknown slots survive for validation to report."""
        assert fill_slots("a {mystery} here", ["x"]) == "a {mystery} here"


class TestPromptGenerator:
    """Tests for PromptGenerator."""

    def test_auto_prompt_layout(self):
        """Test style prefix, filled pattern, enhancers and aspect hint."""
        style = get_style_by_id("illustration")
        prompt = PromptGenerator().generate_auto_prompt(["cells", "mitosis"], "educational_diagram", "illustration")

        assert prompt.startswith(style.modifier)
        assert "illustrating cells, mitosis showing key relationships" in prompt
        assert style.quality_enhancers in prompt
        assert prompt.endswith("optimized for 16:9 aspect ratio")

    def test_auto_detect_uses_detected_template(self):
        """Test that auto_detect takes the detected template."""
        detected = get_use_case_by_id("process_flow")

        prompt = PromptGenerator().generate_auto_prompt(["baking"], "auto_detect", "sketch", detected)

        assert "process flow diagram showing baking" in prompt

    def test_auto_detect_without_detection_uses_default(self):
        """Test the default template when nothing was detected."""
        prompt = PromptGenerator().generate_auto_prompt(["ideas"], "auto_detect", "sketch")

        assert "visualize the concept of ideas" in prompt

    def test_unknown_ids_fall_back(self):
        """Test default style and use case for unknown ids."""
        prompt = PromptGenerator().generate_auto_prompt(["ideas"], "nope", "nope")

        assert prompt.startswith(get_style_by_id("hyper_realism").modifier)
        assert "visualize the concept of ideas" in prompt

    def test_custom_aspect_ratio(self):
        """Test the aspect hint."""
        prompt = PromptGenerator(aspect_ratio="1:1").generate_auto_prompt(["x"], "auto_detect", "anime")

        assert prompt.endswith("optimized for 1:1 aspect ratio")

    def test_multiple_prompts(self):
        """Test base prompt plus variations."""
        prompts = PromptGenerator().generate_multiple_prompts(["cells"], "educational_diagram", "illustration", 3)

        assert len(prompts) == 3
        assert prompts[1] == f"{prompts[0]}, {PROMPT_VARIATIONS[0]}"
        assert prompts[2] == f"{prompts[0]}, {PROMPT_VARIATIONS[1]}"

    def test_multiple_prompts_capped(self):
        """Test that at most ten prompts are produced."""
        prompts = PromptGenerator().generate_multiple_prompts(["cells"], "educational_diagram", "illustration", 20)

        assert len(prompts) == len(PROMPT_VARIATIONS) + 1


class TestValidatePrompt:
    """Tests for validate_prompt."""

    def test_valid_prompt(self):
        """Test a normal prompt."""
        result = validate_prompt("A detailed drawing of a cell under a microscope")

        assert result.valid
        assert result.issues == []

    def test_too_short(self):
        """Test the minimum length."""
        result = validate_prompt("short")

        assert not result.valid
        assert "Prompt is too short" in result.issues

    def test_too_long(self):
        """Test the maximum length."""
        result = validate_prompt("x" * 4001)

        assert "Prompt exceeds maximum length" in result.issues

    def test_unresolved_placeholders(self, caplog):
        """Test that leftover slots are reported and logged, not raised."""
        with caplog.at_level("WARNING"):
            result = validate_prompt("A long enough prompt with a {mystery} slot")

        assert not result.valid
        assert result.unresolved_placeholders == ["{mystery}"]
        assert "unresolved placeholders" in caplog.text


class TestContentProfile:
    """Tests for build_content_profile."""

    def test_detects_profile(self):
        """Test type, theme, tone and visual elements."""
        profile = build_content_profile("Learn about the forest and ocean. It is amazing and bright.")

        assert profile.content_type == "Educational/Instructional"
        assert "Nature & Landscapes" in profile.themes
        assert profile.tone == "Enthusiastic & Positive"
        assert "Lighting dynamics" in profile.visual_elements

    def test_defaults(self):
        """Test neutral defaults for empty text."""
        profile = build_content_profile("")

        assert profile.content_type == "General Content"
        assert profile.themes == ["General Theme"]
        assert profile.tone == "Neutral"
        assert profile.visual_elements == ["Standard visual treatment"]

    def test_lists_capped(self):
        """Test that themes and visual elements are capped at three."""
        text = "forest robot person theory planet city biology design red light huge moving smooth"
        profile = build_content_profile(text)

        assert len(profile.themes) == 3
        assert len(profile.visual_elements) == 3


class TestParsePromptResponse:
    """Tests for parse_prompt_response."""

    RESPONSE = (
        "Here are your prompts:\n"
        "1. A majestic lion resting on a rocky outcrop at sunset\n"
        '2. "A quiet library filled with ancient glowing books"\n'
        "short line\n"
    )

    def test_cleans_and_enhances(self):
        """Test removal of labels, numbering and quotes plus style enhancement."""
        style = get_style_by_id("digital_art")

        prompts = parse_prompt_response(self.RESPONSE, 2, style)

        assert len(prompts) == 2
        assert all(p.startswith(style.modifier) for p in prompts)
        assert "A majestic lion resting on a rocky outcrop at sunset" in prompts[0]
        assert "A quiet library filled with ancient glowing books" in prompts[1]
        assert '"' not in prompts[1]
        assert prompts[0].endswith(", with professional lighting")

    def test_pads_to_expected_count(self):
        """Test padding with enhancement suffixes."""
        prompts = parse_prompt_response("A majestic lion resting on a rocky outcrop at sunset", 3)

        assert len(prompts) == 3
        assert prompts[1] == prompts[0] + ENHANCEMENT_SUFFIXES[0]
        assert prompts[2] == prompts[0] + ENHANCEMENT_SUFFIXES[1]

    def test_truncates_to_expected_count(self):
        """Test that extra prompts are dropped."""
        assert len(parse_prompt_response(self.RESPONSE, 1)) == 1

    def test_nothing_usable_uses_fallback(self):
        """Test deterministic fallback prompts."""
        style = get_style_by_id("sketch")

        assert parse_prompt_response("Prompt:\nok\n# heading", 2, style) == fallback_prompts(2, style)
