"""
Use-case classification module.

Scores note content against every use-case template using:
- Keyword occurrences in the raw content (10 points each)
- Keyword/concept substring overlaps (15 points each)
- One optional context bonus per template (15-25 points)

Classification always returns a result: weak or missing matches fall back
to the default template.
"""

import logging
import re
from typing import Callable, Optional

from .config import DEFAULT_MIN_CONFIDENCE_SCORE
from .models import UseCaseMatch, UseCaseTemplate
from .use_cases import USE_CASE_TEMPLATES, get_default_use_case

logger = logging.getLogger(__name__)


KEYWORD_OCCURRENCE_POINTS = 10
CONCEPT_OVERLAP_POINTS = 15
FALLBACK_CONFIDENCE = 50
FALLBACK_REASONING = "No strong match found, using default template for concept visualization"


# =============================================================================
# Context bonus rules
# =============================================================================

def _educational_bonus(content: str) -> int:
    if re.search(r"diagram|flowchart|illustration|explain", content, re.I):
        return 20
    return 0


def _scientific_bonus(content: str) -> int:
    if re.search(r"μ|µ|∑|∂|∫|≈|→|←", content, re.I):
        return 25
    if re.search(r"equation|formula|theorem", content, re.I):
        return 15
    return 0


def _character_bonus(content: str) -> int:
    if re.search(r"she said|he said|replied|answered|whispered", content, re.I):
        return 25
    return 0


def _process_bonus(content: str) -> int:
    if re.search(r"step \d|first|then|next|finally", content, re.I):
        return 20
    return 0


def _data_bonus(content: str) -> int:
    if re.search(r"\d+%|\d+\.\d+|increase|decrease|growth", content, re.I):
        return 20
    return 0


def _historical_bonus(content: str) -> int:
    if re.search(r"\d{3,4}\s*(AD|BC|CE|BCE)|century", content, re.I):
        return 25
    return 0


def _architectural_bonus(content: str) -> int:
    if re.search(r"floor|room|building|structure|design", content, re.I):
        return 15
    return 0


# Template id -> bonus predicate. Templates without an entry get no bonus.
CONTEXT_BONUS_RULES: dict[str, Callable[[str], int]] = {
    "educational_diagram": _educational_bonus,
    "scientific_illustration": _scientific_bonus,
    "character_illustration": _character_bonus,
    "process_flow": _process_bonus,
    "data_visualization": _data_bonus,
    "historical_recreation": _historical_bonus,
    "architectural_visualization": _architectural_bonus,
}


def get_context_bonus(template_id: str, content: str) -> int:
    """Return the context bonus a template earns for this content (0 if none)."""
    rule = CONTEXT_BONUS_RULES.get(template_id)
    return rule(content) if rule else 0


class UseCaseDetector:
    """
    Classifies note content into one of the use-case templates.

    The catalog and confidence threshold are fixed per instance; detection
    itself keeps no state between calls.
    """

    def __init__(
        self,
        min_confidence_score: int = DEFAULT_MIN_CONFIDENCE_SCORE,
        templates: Optional[tuple[UseCaseTemplate, ...]] = None,
    ):
        """
        Initialize the detector.

        Args:
            min_confidence_score: Top matches below this confidence are
                replaced by the default template.
            templates: Catalog to score against. Defaults to the built-in
                use-case catalog.
        """
        self.min_confidence_score = min_confidence_score
        self.templates = templates if templates is not None else USE_CASE_TEMPLATES

    def detect_use_case(self, content: str, concepts: list[str]) -> UseCaseMatch:
        """
        Pick the use case for a note.

        Args:
            content: Raw note content.
            concepts: Concepts extracted from the note.

        Returns:
            The top match when its confidence reaches the threshold,
            otherwise the default template with confidence 50.
        """
        matches = self.get_all_matches(content, concepts)

        if matches and matches[0].confidence >= self.min_confidence_score:
            logger.info(
                f"Detected use case '{matches[0].template.id}' "
                f"(confidence {matches[0].confidence})"
            )
            return matches[0]

        if matches:
            best = matches[0]
            raw = self.score_template(best.template, content, concepts)
            logger.warning(
                f"Best use case '{best.template.id}' scored {raw} "
                f"(confidence {best.confidence}), below {self.min_confidence_score}; "
                f"using default template"
            )
        else:
            logger.warning("No use case scored above zero; using default template")

        return UseCaseMatch(
            template=get_default_use_case(),
            confidence=FALLBACK_CONFIDENCE,
            reasoning=FALLBACK_REASONING,
        )

    def get_all_matches(self, content: str, concepts: list[str]) -> list[UseCaseMatch]:
        """
        Score every template and rank the positive ones.

        Args:
            content: Raw note content.
            concepts: Concepts extracted from the note.

        Returns:
            Matches with score > 0, confidence clamped to 100, sorted by
            confidence descending. Equal confidences keep catalog order.
        """
        matches: list[UseCaseMatch] = []

        for template in self.templates:
            score = self.score_template(template, content, concepts)
            if score > 0:
                matches.append(UseCaseMatch(
                    template=template,
                    confidence=min(100, score),
                    reasoning=self._generate_reasoning(template, score, content),
                ))

        return sorted(matches, key=lambda match: match.confidence, reverse=True)

    def score_template(
        self,
        template: UseCaseTemplate,
        content: str,
        concepts: list[str],
    ) -> int:
        """
        Compute the raw (unclamped) score of one template.

        Args:
            template: Use-case template to score.
            content: Raw note content.
            concepts: Concepts extracted from the note.

        Returns:
            Keyword points plus concept overlap points plus context bonus.
        """
        score = 0
        lower_concepts = [concept.lower() for concept in concepts]

        for keyword in template.keywords:
            keyword_lower = keyword.lower()

            occurrences = len(re.findall(re.escape(keyword_lower), content, re.IGNORECASE))
            score += occurrences * KEYWORD_OCCURRENCE_POINTS

            for concept in lower_concepts:
                if keyword_lower in concept or concept in keyword_lower:
                    score += CONCEPT_OVERLAP_POINTS

        score += get_context_bonus(template.id, content)

        return score

    def _generate_reasoning(self, template: UseCaseTemplate, score: int, content: str) -> str:
        """Explain a match by the first few keywords found in the content."""
        lower_content = content.lower()
        matched_keywords: list[str] = []

        for keyword in template.keywords:
            if keyword.lower() in lower_content:
                matched_keywords.append(keyword)
                if len(matched_keywords) >= 3:
                    break

        if matched_keywords:
            return f"Content contains key indicators: {', '.join(matched_keywords)}"

        return f"Best match based on content analysis (score: {score})"


def detect_use_case(
    content: str,
    concepts: list[str],
    min_confidence_score: int = DEFAULT_MIN_CONFIDENCE_SCORE,
) -> UseCaseMatch:
    """Convenience wrapper around UseCaseDetector.detect_use_case."""
    return UseCaseDetector(min_confidence_score=min_confidence_score).detect_use_case(
        content, concepts
    )
