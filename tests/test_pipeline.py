"""Tests for the NoteIllustrator planning pipeline."""

import pytest

from note_illustrator.config import AnalysisConfig
from note_illustrator.pipeline import NoteIllustrator
from note_illustrator.use_cases import DEFAULT_USE_CASE_ID, get_use_case_by_id


class TestPlan:
    """Tests for NoteIllustrator.plan."""

    def test_plan_for_study_note(self, biology_note):
        """Test the overall plan shape."""
        plan = NoteIllustrator().plan(biology_note, 3)

        assert len(plan.prompts) == 3
        assert len(plan.validations) == 3
        assert all(v.valid for v in plan.validations)
        assert plan.concepts
        assert plan.language == "en"
        assert plan.heading_count == 3
        assert plan.section_count == 3
        assert all(index < 3 for index in plan.placements)

    def test_image_count_clamped(self, biology_note):
        """Test that counts are bounded by the config."""
        illustrator = NoteIllustrator()

        assert len(illustrator.plan(biology_note, 0).prompts) == 1
        assert len(illustrator.plan(biology_note, 50).prompts) == 10

    def test_explicit_style(self, biology_note):
        """Test an explicitly requested style."""
        plan = NoteIllustrator().plan(biology_note, 1, style_id="anime")

        assert plan.style.id == "anime"
        assert plan.prompts[0].startswith(plan.style.modifier)

    def test_unknown_style_uses_default(self, biology_note):
        """Test the configured default for unknown styles."""
        config = AnalysisConfig(default_style="sketch")

        plan = NoteIllustrator(config).plan(biology_note, 1, style_id="nope")

        assert plan.style.id == "sketch"

    def test_recommended_style(self, biology_note):
        """Test using the use case's first recommended style."""
        config = AnalysisConfig(use_recommended_style=True)

        plan = NoteIllustrator(config).plan(biology_note, 1, use_case_id="process_flow")

        assert plan.use_case.template.id == "process_flow"
        assert plan.style.id == get_use_case_by_id("process_flow").best_styles[0]

    def test_explicit_use_case(self, biology_note):
        """Test that a chosen use case is taken at full confidence."""
        plan = NoteIllustrator().plan(biology_note, 1, use_case_id="scene_setting")

        assert plan.use_case.template.id == "scene_setting"
        assert plan.use_case.confidence == 100
        assert "atmospheric scene" in plan.prompts[0]

    def test_unknown_use_case_detects(self, biology_note):
        """Test that an unknown use case id falls back to detection."""
        plan = NoteIllustrator().plan(biology_note, 1, use_case_id="nope")

        assert get_use_case_by_id(plan.use_case.template.id) is not None

    def test_empty_note(self):
        """Test that an empty note still yields a usable plan."""
        plan = NoteIllustrator().plan("", 1)

        assert plan.concepts == []
        assert plan.use_case.template.id == DEFAULT_USE_CASE_ID
        assert plan.placements == {}
        assert plan.unplaced_images == [0]
        assert "the main subject" in plan.prompts[0]

    def test_to_dict(self, biology_note):
        """Test JSON-ready output."""
        data = NoteIllustrator().plan(biology_note, 2).to_dict()

        assert set(data) >= {"concepts", "use_case", "style", "prompts", "placements", "validations"}
        assert all(isinstance(key, str) for key in data["placements"])
