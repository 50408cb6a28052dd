"""Tests for use-case classification."""

import pytest

from note_illustrator.use_case_detector import (
    FALLBACK_CONFIDENCE,
    FALLBACK_REASONING,
    UseCaseDetector,
    detect_use_case,
    get_context_bonus,
)
from note_illustrator.use_cases import (
    DEFAULT_USE_CASE_ID,
    USE_CASE_TEMPLATES,
    get_use_case_by_id,
    list_use_cases,
)


EDUCATIONAL = "In this tutorial we learn the fundamentals."
PROCESS = "Step 1: the process flow. Then the workflow pipeline has stages."


class TestScoring:
    """Tests for template scoring."""

    def test_photosynthesis_tutorial(self):
        """Test that tutorial wording scores the educational diagram template."""
        detector = UseCaseDetector()
        template = get_use_case_by_id("educational_diagram")
        content = "Learn the fundamentals of photosynthesis through this tutorial"

        assert detector.score_template(template, content, []) >= 30

    def test_keyword_occurrences(self):
        """Test that each keyword occurrence scores 10 points."""
        detector = UseCaseDetector()
        template = get_use_case_by_id("educational_diagram")

        assert detector.score_template(template, EDUCATIONAL, []) == 30

    def test_concept_overlap(self):
        """Test that keyword/concept overlaps add 15 points each."""
        detector = UseCaseDetector()
        template = get_use_case_by_id("educational_diagram")

        assert detector.score_template(template, EDUCATIONAL, ["tutorial", "fundamentals"]) == 60

    def test_context_bonus_included(self):
        """Test that the process bonus applies to numbered steps."""
        detector = UseCaseDetector()
        template = get_use_case_by_id("process_flow")

        assert detector.score_template(template, PROCESS, []) == 90

    def test_raw_score_is_unclamped(self):
        """Test that score_template can exceed 100 while confidence cannot."""
        detector = UseCaseDetector()
        content = " ".join(["data"] * 11)

        assert detector.score_template(get_use_case_by_id("data_visualization"), content, []) == 110
        assert detector.get_all_matches(content, [])[0].confidence == 100


class TestContextBonus:
    """Tests for get_context_bonus."""

    def test_scientific_symbols(self):
        """Test that math symbols earn the larger bonus."""
        assert get_context_bonus("scientific_illustration", "E = ∑ x") == 25
        assert get_context_bonus("scientific_illustration", "the equation holds") == 15

    def test_micro_sign_and_capital_mu(self):
        """Test that the micro sign and capital mu earn the symbol bonus."""
        assert get_context_bonus("scientific_illustration", "a 5 µm cell") == 25
        assert get_context_bonus("scientific_illustration", "ΜΕΓΑ") == 25

    def test_historical_dates(self):
        """Test era-marked years."""
        assert get_context_bonus("historical_recreation", "Rome fell in 476 AD") == 25

    def test_template_without_rule(self):
        """Test that templates without a rule get nothing."""
        assert get_context_bonus("product_mockup", "anything at all") == 0
        assert get_context_bonus("unknown", "step 1") == 0


class TestDetection:
    """Tests for detect_use_case and get_all_matches."""

    def test_strong_match_returned(self):
        """Test that a confident match is returned as-is."""
        match = UseCaseDetector().detect_use_case(PROCESS, [])

        assert match.template.id == "process_flow"
        assert match.confidence == 90

    def test_weak_match_falls_back(self):
        """Test that a top score under the threshold uses the default template."""
        match = detect_use_case(EDUCATIONAL, [])

        assert match.template.id == DEFAULT_USE_CASE_ID
        assert match.confidence == FALLBACK_CONFIDENCE
        assert match.reasoning == FALLBACK_REASONING

    def test_fallback_logs_raw_score(self, caplog):
        """Test that the fallback warning names the best raw score."""
        with caplog.at_level("WARNING"):
            detect_use_case(EDUCATIONAL, [])

        assert "educational_diagram" in caplog.text
        assert "scored 30" in caplog.text

    def test_lower_threshold_accepts_weak_match(self):
        """Test a custom confidence threshold."""
        match = UseCaseDetector(min_confidence_score=20).detect_use_case(EDUCATIONAL, [])

        assert match.template.id == "educational_diagram"
        assert match.confidence == 30

    def test_empty_content_never_raises(self):
        """Test that empty input still yields a use case."""
        match = detect_use_case("", [])

        assert match.template.id == DEFAULT_USE_CASE_ID
        assert match.confidence == FALLBACK_CONFIDENCE

    def test_matches_reasoning_lists_keywords(self):
        """Test reasoning built from matched keywords in catalog order."""
        matches = UseCaseDetector().get_all_matches(EDUCATIONAL, [])

        assert len(matches) == 1
        assert matches[0].reasoning == "Content contains key indicators: learn, fundamentals, tutorial"

    def test_ties_keep_catalog_order(self):
        """Test stable ordering for equal confidence."""
        matches = UseCaseDetector().get_all_matches("model character", [])

        assert [m.template.id for m in matches] == ["concept_visualization", "character_illustration"]
        assert matches[0].confidence == matches[1].confidence == 10

    def test_only_positive_scores(self):
        """Test that zero-score templates are omitted."""
        matches = UseCaseDetector().get_all_matches(PROCESS, [])

        assert all(m.confidence > 0 for m in matches)
        assert matches[0].template.id == "process_flow"


class TestCatalog:
    """Tests for the use-case catalog."""

    def test_ten_templates(self):
        """Test catalog size and unique ids."""
        ids = [t.id for t in USE_CASE_TEMPLATES]

        assert len(ids) == 10
        assert len(set(ids)) == 10
        assert list_use_cases() == list(USE_CASE_TEMPLATES)

    def test_unknown_id(self):
        """Test lookup of an unknown id."""
        assert get_use_case_by_id("nope") is None
