"""Tests for the style catalog."""

import pytest

from note_illustrator.structure import analyze_structure, parse_structure
from note_illustrator.styles import (
    STYLE_TEMPLATES,
    format_style_option,
    get_default_style,
    get_style_by_id,
    get_style_description,
    get_styles_by_tier,
    get_styles_grouped_by_tier,
    get_tier_description,
    get_tier_label,
    recommend_style_for_use_case,
)


class TestStyleCatalog:
    """Tests for style lookups."""

    def test_eleven_styles(self):
        """Test catalog size and unique ids."""
        assert len({style.id for style in STYLE_TEMPLATES}) == 11

    def test_default_style(self):
        """Test the default style."""
        assert get_default_style().id == "hyper_realism"
        assert get_style_by_id("nope") is None

    def test_grouped_by_tier(self):
        """Test tier grouping order and coverage."""
        grouped = get_styles_grouped_by_tier()

        assert list(grouped) == ["S", "A", "B", "C"]
        assert [s.id for s in grouped["S"]] == ["hyper_realism", "digital_art", "illustration"]
        assert sum(len(styles) for styles in grouped.values()) == 11
        assert get_styles_by_tier("Z") == []

    def test_recommendation(self):
        """Test the first known recommended style wins."""
        assert recommend_style_for_use_case(("missing", "anime", "manga")).id == "anime"
        assert recommend_style_for_use_case(()).id == "hyper_realism"

    def test_labels(self):
        """Test display helpers."""
        style = get_style_by_id("hyper_realism")

        assert format_style_option(style) == "[S] 📸 Hyper-Realism"
        assert get_style_description(style).startswith("Best for: Product mockups")
        assert get_tier_label("S") == "Flagship Quality"
        assert get_tier_description("C") == "Use case specific styles"


class TestStructureAlias:
    """Tests for the parse_structure alias."""

    def test_alias(self):
        """Test that parse_structure is analyze_structure."""
        assert parse_structure is analyze_structure
