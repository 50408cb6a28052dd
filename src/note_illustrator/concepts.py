"""
Concept extraction module.

This module derives salient terms from unstructured markdown:
- Weighted term frequency over typographic channels (headings, emphasis,
  plain body text, first paragraph)
- Two-word phrases (bigrams) weighted above single words
- Coarse content-type and language detection
"""

import logging
import re
from typing import Optional

from .config import DEFAULT_MAX_CONCEPTS
from .models import ContentType

logger = logging.getLogger(__name__)


STOPWORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "from", "as", "is", "was", "are", "were", "been", "be", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "must",
    "shall", "can", "need", "dare", "ought", "used", "it", "its", "this", "that",
    "these", "those", "i", "you", "he", "she", "we", "they", "what", "which", "who",
    "when", "where", "why", "how", "all", "each", "every", "both", "few", "more",
    "most", "other", "some", "such", "no", "nor", "not", "only", "own", "same", "so",
    "than", "too", "very", "just", "also", "now", "here", "there", "then", "once",
})

# Channel weights
HEADING_WEIGHT = 3.0
EMPHASIS_WEIGHT = 2.0
BODY_WEIGHT = 1.0
FIRST_PARAGRAPH_WEIGHT = 1.2
BIGRAM_MULTIPLIER = 1.5

# Latin letters and the Hangul syllable block survive cleaning
_NON_TERM_CHARS = re.compile(r"[^a-z가-힣]")
_NON_PHRASE_CHARS = re.compile(r"[^a-z가-힣\s]")
_HANGUL_CHAR = re.compile(r"[가-힣]")

_HEADING_LINE = re.compile(r"^#{1,6}\s+(.+)$", re.MULTILINE)
_BOLD_SPAN = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_SPAN = re.compile(r"\*(.+?)\*")
_LIST_MARKER = re.compile(r"^([-*+]|\d+\.)\s+")

CONTENT_TYPE_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "educational": (
        re.compile(r"learn|teach|explain|concept|principle|theory|fundamentals|introduction|guide|tutorial", re.I),
        re.compile(r"chapter|lesson|module|curriculum|course", re.I),
    ),
    "scientific": (
        re.compile(r"experiment|hypothesis|research|study|analysis|data|result|conclusion", re.I),
        re.compile(r"cell|molecule|atom|chemical|physics|biology|quantum|neural", re.I),
    ),
    "creative_fiction": (
        re.compile(r"character|story|narrative|plot|scene|chapter|protagonist|antagonist", re.I),
        re.compile(r"fiction|novel|tale|adventure|fantasy|mystery", re.I),
    ),
    "technical": (
        re.compile(r"code|function|algorithm|system|architecture|implementation|api|database", re.I),
        re.compile(r"programming|software|development|engineering|technical", re.I),
    ),
    "historical": (
        re.compile(r"history|historical|century|era|period|ancient|medieval|modern", re.I),
        re.compile(r"war|revolution|civilization|empire|dynasty|kingdom", re.I),
    ),
    "business": (
        re.compile(r"business|strategy|market|revenue|profit|growth|startup|enterprise", re.I),
        re.compile(r"management|leadership|team|organization|company", re.I),
    ),
    "philosophical": (
        re.compile(r"philosophy|ethics|moral|existence|consciousness|meaning|truth", re.I),
        re.compile(r"argument|logic|reasoning|metaphysics|epistemology", re.I),
    ),
    "personal_notes": (
        re.compile(r"note|reminder|todo|task|meeting|idea|thought|journal", re.I),
    ),
}


def extract_concepts(text: str, max_concepts: int = DEFAULT_MAX_CONCEPTS) -> list[str]:
    """
    Extract the most salient terms and two-word phrases from markdown.

    Each channel adds its weight to every term it contains, in this order:
    heading texts (3.0), emphasized spans (2.0), markdown-stripped body
    (1.0) and the first paragraph-like line (1.2). Bigrams receive the
    channel weight times 1.5.

    Args:
        text: Markdown text to analyze.
        max_concepts: Maximum number of concepts to return.

    Returns:
        Terms ordered by accumulated weight, heaviest first. Ties keep the
        order in which terms were first seen.
    """
    weighted_terms: dict[str, float] = {}

    for heading in extract_heading_texts(text):
        add_terms_with_weight(heading, weighted_terms, HEADING_WEIGHT)

    for span in extract_emphasized_text(text):
        add_terms_with_weight(span, weighted_terms, EMPHASIS_WEIGHT)

    add_terms_with_weight(strip_markdown(text), weighted_terms, BODY_WEIGHT)
    add_terms_with_weight(get_first_paragraph(text), weighted_terms, FIRST_PARAGRAPH_WEIGHT)

    candidates = [
        (term, weight)
        for term, weight in weighted_terms.items()
        if len(term) > 3 and term.lower() not in STOPWORDS
    ]
    # sorted() is stable, so equal weights keep first-occurrence order
    candidates = sorted(candidates, key=lambda item: item[1], reverse=True)

    return [term for term, _ in candidates[:max(0, max_concepts)]]


def add_terms_with_weight(
    text: str,
    weighted_terms: dict[str, float],
    weight: float,
) -> None:
    """
    Accumulate unigram and bigram weights from one channel into a map.

    Args:
        text: Channel text.
        weighted_terms: Accumulator, updated in place. Insertion order is
            preserved and used for tie-breaking.
        weight: Channel weight.
    """
    words = text.lower().split()

    for word in words:
        clean_word = _NON_TERM_CHARS.sub("", word)
        if len(clean_word) > 2 and clean_word not in STOPWORDS:
            weighted_terms[clean_word] = weighted_terms.get(clean_word, 0.0) + weight

    for first, second in zip(words, words[1:]):
        bigram = _NON_PHRASE_CHARS.sub("", f"{first} {second}").strip()
        if len(bigram.split(" ")) == 2 and len(bigram) > 5:
            weighted_terms[bigram] = weighted_terms.get(bigram, 0.0) + weight * BIGRAM_MULTIPLIER


def extract_heading_texts(text: str) -> list[str]:
    """Return the text of every markdown heading line."""
    return _HEADING_LINE.findall(text)


def extract_emphasized_text(text: str) -> list[str]:
    """
    Return all bold spans followed by all italic spans.

    The italic pattern also matches inside bold markers, so bold text is
    counted by both passes.
    """
    return _BOLD_SPAN.findall(text) + _ITALIC_SPAN.findall(text)


def strip_markdown(text: str) -> str:
    """Reduce markdown to plain text for body-frequency counting."""
    stripped = re.sub(r"#{1,6}\s+", "", text)
    stripped = _BOLD_SPAN.sub(r"\1", stripped)
    stripped = _ITALIC_SPAN.sub(r"\1", stripped)
    stripped = re.sub(r"\[(.+?)\]\(.+?\)", r"\1", stripped)
    stripped = re.sub(r"`{1,3}[^`]*`{1,3}", "", stripped)
    stripped = re.sub(r"^\s*[-*+]\s+", "", stripped, flags=re.MULTILINE)
    stripped = re.sub(r"^\s*\d+\.\s+", "", stripped, flags=re.MULTILINE)
    return stripped


def get_first_paragraph(text: str) -> str:
    """Return the first line longer than 30 characters that is not a heading or list item."""
    for line in text.split("\n"):
        trimmed = line.strip()
        if len(trimmed) > 30 and not trimmed.startswith("#") and not _LIST_MARKER.match(trimmed):
            return trimmed
    return ""


def detect_content_type(text: str) -> ContentType:
    """
    Classify a note into a broad content category.

    Each category scores one point per pattern group that matches anywhere
    in the text. The first category with the highest score wins.

    Args:
        text: Note text.

    Returns:
        The content type, "personal_notes" when nothing matches.
    """
    best_type = "personal_notes"
    best_score = 0

    for content_type, patterns in CONTENT_TYPE_PATTERNS.items():
        score = sum(1 for pattern in patterns if pattern.search(text))
        if score > best_score:
            best_score = score
            best_type = content_type

    return best_type  # type: ignore[return-value]


def detect_language(text: str) -> str:
    """
    Detect whether a note is predominantly Korean.

    Returns:
        "ko" when more than 30% of non-whitespace characters are Hangul
        syllables, otherwise "en".
    """
    total_chars = len(re.sub(r"\s", "", text))
    if total_chars == 0:
        return "en"

    korean_ratio = len(_HANGUL_CHAR.findall(text)) / total_chars
    return "ko" if korean_ratio > 0.3 else "en"


class ConceptExtractor:
    """Concept extraction bound to a default concept count."""

    def __init__(self, max_concepts: int = DEFAULT_MAX_CONCEPTS):
        self.max_concepts = max_concepts

    def extract(self, text: str, max_concepts: Optional[int] = None) -> list[str]:
        limit = self.max_concepts if max_concepts is None else max_concepts
        concepts = extract_concepts(text, limit)
        logger.debug(f"Extracted {len(concepts)} concepts: {concepts}")
        return concepts

    def detect_content_type(self, text: str) -> ContentType:
        return detect_content_type(text)

    def detect_language(self, text: str) -> str:
        return detect_language(text)
