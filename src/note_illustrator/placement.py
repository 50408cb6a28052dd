"""
Smart placement of generated images inside a note.

Given an image prompt, this module ranks the note's sections as insertion
points:
1. Strip style and quality boilerplate from the prompt to get its intent
2. Keep sections that share at least one intent word
3. Score each survivor on content, topic and heading overlap (0-100)
4. Suggest the best sections above the score floor, after their heading

For several images, each one greedily claims the best anchor line no
earlier image has taken.
"""

import logging
import re

from .config import DEFAULT_MIN_PLACEMENT_SCORE, DEFAULT_TOP_PLACEMENT_SUGGESTIONS
from .models import (
    InsertionLocation,
    InsertionPosition,
    NoteStructure,
    PlacementSuggestion,
    Section,
)
from .structure import analyze_structure
from .styles import STYLE_TEMPLATES

logger = logging.getLogger(__name__)


CONTENT_MATCH_POINTS = 15
TOPIC_MATCH_POINTS = 20
HEADING_MATCH_POINTS = 25
MIN_INTENT_WORD_LENGTH = 3  # Words must be longer than this to count as content matches
MIN_HEADING_PARTIAL_LENGTH = 4  # Contained heading/intent word must be longer than this

ANCHOR_MAX_LENGTH = 50
PREVIEW_LINE_MAX_LENGTH = 60
PREVIEW_RADIUS = 2

_STYLE_PREFIX = re.compile(r"^In [\w\s-]+? style[^,]*,?\s*", re.IGNORECASE)
_QUALITY_SUFFIX = re.compile(r",\s*(highly detailed|professional|8K|optimized)[^,]*", re.IGNORECASE)

# Lighting clause added when a prompt names no lighting
_EXTRA_QUALITY_PHRASES = ("with professional lighting",)


def _known_quality_phrases() -> frozenset[str]:
    phrases = set(_EXTRA_QUALITY_PHRASES)
    for style in STYLE_TEMPLATES:
        phrases.update(part.strip().lower() for part in style.quality_enhancers.split(","))
    return frozenset(phrases)


_QUALITY_PHRASES = _known_quality_phrases()


def extract_image_intent(prompt: str) -> str:
    """
    Reduce an image prompt to its subject description.

    Removes a leading style clause (any catalog style modifier, or a
    generic "In <style> style ...," clause), every quality clause starting
    with "highly detailed", "professional", "8K" or "optimized", and any
    clause that is one of the catalog's quality enhancer phrases.

    Args:
        prompt: Raw image-generation prompt.

    Returns:
        The prompt with decorative style language removed.
    """
    clean = prompt.strip()
    for style in STYLE_TEMPLATES:
        if clean.lower().startswith(style.modifier.lower()):
            clean = clean[len(style.modifier):]
            break
    else:
        clean = _STYLE_PREFIX.sub("", clean, count=1)

    clean = _QUALITY_SUFFIX.sub("", clean)
    clauses = [
        clause for clause in clean.split(",")
        if clause.strip().lower() not in _QUALITY_PHRASES
    ]
    return ",".join(clauses).strip()


def _section_text(section: Section) -> str:
    return f"{section.content} {section.heading_text}".lower()


class SmartPlacement:
    """Ranks note sections as insertion points for generated images."""

    def __init__(
        self,
        min_placement_score: int = DEFAULT_MIN_PLACEMENT_SCORE,
        top_suggestions: int = DEFAULT_TOP_PLACEMENT_SUGGESTIONS,
    ):
        """
        Initialize the placement scorer.

        Args:
            min_placement_score: Sections scoring below this are not suggested.
            top_suggestions: Minimum length cap of the suggestion list.
        """
        self.min_placement_score = min_placement_score
        self.top_suggestions = top_suggestions

    def analyze_placement_options(
        self,
        note_content: str,
        image_prompt: str,
        image_count: int = 1,
    ) -> list[PlacementSuggestion]:
        """
        Suggest where an image belongs in a note.

        Args:
            note_content: Full markdown note.
            image_prompt: Prompt (or description) of the image to place.
            image_count: Number of images being placed.

        Returns:
            Suggestions scoring at least min_placement_score, best first,
            at most max(top_suggestions, image_count) of them. Empty when no
            section is relevant enough; callers then insert at the cursor.
        """
        structure = analyze_structure(note_content)
        image_intent = extract_image_intent(image_prompt)
        relevant_sections = self.find_relevant_sections(structure, image_intent)

        lines = note_content.split("\n")
        suggestions: list[PlacementSuggestion] = []

        for section in relevant_sections:
            score = self.score_section(section, image_intent)
            if score < self.min_placement_score:
                continue

            location = self.determine_insertion_location(section)
            suggestions.append(PlacementSuggestion(
                location=location,
                score=score,
                reasoning=self._generate_reasoning(section, score),
                context_preview=get_context_preview(lines, location.line_number),
            ))

        suggestions = sorted(suggestions, key=lambda s: s.score, reverse=True)
        limit = max(self.top_suggestions, image_count)

        logger.debug(
            f"{len(relevant_sections)} candidate section(s), "
            f"{len(suggestions)} above score {self.min_placement_score}, "
            f"returning up to {limit}"
        )

        return suggestions[:limit]

    def score_section(self, section: Section, image_intent: str) -> int:
        """
        Score how well a section matches an image intent.

        Points:
        - 15 per intent word (longer than 3 characters) found in the
          section content or heading
        - 20 per (topic, intent word) pair where one contains the other
        - 25 per (heading word, intent word) pair that is equal, or where
          one contains the other and the contained word is longer than
          4 characters

        Args:
            section: Section to score.
            image_intent: Cleaned intent string.

        Returns:
            Score clamped to 0-100.
        """
        score = 0
        intent_words = image_intent.lower().split()
        section_text = _section_text(section)

        for word in intent_words:
            if len(word) > MIN_INTENT_WORD_LENGTH and word in section_text:
                score += CONTENT_MATCH_POINTS

        for topic in section.topics:
            topic_lower = topic.lower()
            for word in intent_words:
                if word in topic_lower or topic_lower in word:
                    score += TOPIC_MATCH_POINTS

        if section.heading:
            for heading_word in section.heading.text.lower().split():
                for intent_word in intent_words:
                    if (
                        heading_word == intent_word
                        or (len(heading_word) > MIN_HEADING_PARTIAL_LENGTH and heading_word in intent_word)
                        or (len(intent_word) > MIN_HEADING_PARTIAL_LENGTH and intent_word in heading_word)
                    ):
                        score += HEADING_MATCH_POINTS

        return max(0, min(100, score))

    def find_relevant_sections(self, structure: NoteStructure, intent: str) -> list[Section]:
        """
        Coarse pre-filter: sections sharing at least one intent word.

        Args:
            structure: Parsed note.
            intent: Cleaned intent string.

        Returns:
            Sections ordered by the number of distinct intent words they
            contain, most first. Equal counts keep document order.
        """
        intent_words: list[str] = []
        for word in intent.lower().split():
            if len(word) > MIN_INTENT_WORD_LENGTH and word not in intent_words:
                intent_words.append(word)

        scored: list[tuple[Section, int]] = []
        for section in structure.sections:
            section_text = _section_text(section)
            relevance = sum(1 for word in intent_words if word in section_text)
            if relevance > 0:
                scored.append((section, relevance))

        scored = sorted(scored, key=lambda item: item[1], reverse=True)
        return [section for section, _ in scored]

    def determine_insertion_location(self, section: Section) -> InsertionLocation:
        """Place the image after the section heading, or after its first line."""
        if section.heading:
            return InsertionLocation(
                line_number=section.heading.line,
                position=InsertionPosition.AFTER,
                anchor=section.heading.markdown,
            )

        first_line = section.content.split("\n")[0][:ANCHOR_MAX_LENGTH]
        return InsertionLocation(
            line_number=section.start_line,
            position=InsertionPosition.AFTER,
            anchor=first_line or "Section start",
        )

    def _generate_reasoning(self, section: Section, score: int) -> str:
        if section.heading:
            return f'Section "{section.heading.text}" discusses related topics ({score}% relevance)'

        topic_list = ", ".join(section.topics[:3])
        return f"Section contains relevant concepts: {topic_list} ({score}% relevance)"

    def suggest_for_multiple_images(
        self,
        note_content: str,
        image_prompts: list[str],
    ) -> dict[int, PlacementSuggestion]:
        """
        Assign each image its own placement.

        Images are processed in order. Each takes its highest-scoring
        suggestion whose anchor line no earlier image has claimed. When every
        suggestion collides, the image reuses its own top suggestion.

        Args:
            note_content: Full markdown note.
            image_prompts: One prompt per image.

        Returns:
            Mapping of image index to suggestion. Images without any
            suggestion are absent from the mapping.
        """
        assignments: dict[int, PlacementSuggestion] = {}
        used_lines: set[int] = set()

        for index, prompt in enumerate(image_prompts):
            suggestions = self.analyze_placement_options(note_content, prompt, 1)

            for suggestion in suggestions:
                if suggestion.location.line_number not in used_lines:
                    assignments[index] = suggestion
                    used_lines.add(suggestion.location.line_number)
                    break

            if index not in assignments and suggestions:
                logger.info(
                    f"Image {index + 1}: all suggested lines already used, "
                    f"reusing line {suggestions[0].location.line_number}"
                )
                assignments[index] = suggestions[0]

        return assignments


def get_context_preview(lines: list[str], line_number: int, radius: int = PREVIEW_RADIUS) -> str:
    """
    Render the lines around an anchor for review.

    Args:
        lines: Note lines.
        line_number: 1-indexed anchor line, marked with ">>> ".
        radius: Lines shown on either side of the anchor.

    Returns:
        One "N: text" row per line, bodies cut at 60 characters with "...".
    """
    start = max(0, line_number - radius - 1)
    end = min(len(lines), line_number + radius)

    rows = []
    for offset, line in enumerate(lines[start:end]):
        actual_line = start + offset + 1
        marker = ">>> " if actual_line == line_number else "    "
        ellipsis = "..." if len(line) > PREVIEW_LINE_MAX_LENGTH else ""
        rows.append(f"{marker}{actual_line}: {line[:PREVIEW_LINE_MAX_LENGTH]}{ellipsis}")

    return "\n".join(rows)


def analyze_placement_options(
    note_content: str,
    image_prompt: str,
    image_count: int = 1,
    min_placement_score: int = DEFAULT_MIN_PLACEMENT_SCORE,
    top_suggestions: int = DEFAULT_TOP_PLACEMENT_SUGGESTIONS,
) -> list[PlacementSuggestion]:
    """Convenience wrapper around SmartPlacement.analyze_placement_options."""
    placement = SmartPlacement(
        min_placement_score=min_placement_score,
        top_suggestions=top_suggestions,
    )
    return placement.analyze_placement_options(note_content, image_prompt, image_count)


def suggest_for_multiple_images(
    note_content: str,
    image_prompts: list[str],
    min_placement_score: int = DEFAULT_MIN_PLACEMENT_SCORE,
) -> dict[int, PlacementSuggestion]:
    """Convenience wrapper around SmartPlacement.suggest_for_multiple_images."""
    placement = SmartPlacement(min_placement_score=min_placement_score)
    return placement.suggest_for_multiple_images(note_content, image_prompts)
