"""
Data models for Note Illustrator.

This module defines the value objects produced by the analysis pipeline:
document structure, catalog entries, classification results and placement
suggestions. All of them are created fresh per analysis call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional


ContentType = Literal[
    "educational",
    "scientific",
    "creative_fiction",
    "technical",
    "historical",
    "business",
    "philosophical",
    "personal_notes",
]

StyleTier = Literal["S", "A", "B", "C"]


class InsertionPosition(Enum):
    """Where an image goes relative to its anchor line."""
    BEFORE = "before"
    AFTER = "after"


# =============================================================================
# Document structure
# =============================================================================

@dataclass(frozen=True)
class Heading:
    """A markdown heading (# through ######)."""
    level: int
    text: str
    line: int

    @property
    def markdown(self) -> str:
        """Render the heading back to markdown."""
        return f"{'#' * self.level} {self.text}"

    def to_dict(self) -> dict:
        return {"level": self.level, "text": self.text, "line": self.line}


@dataclass
class CodeBlock:
    """A fenced code block. Only emitted when both fences are present."""
    language: str
    content: str
    start_line: int
    end_line: int

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "content": self.content,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }


@dataclass
class ListItem:
    """A single ordered or unordered list line."""
    text: str
    line: int
    indent: int = 0  # Count of leading whitespace characters

    def to_dict(self) -> dict:
        return {"text": self.text, "line": self.line, "indent": self.indent}


@dataclass
class Paragraph:
    """A plain text line long enough to carry topics."""
    text: str
    line: int
    topics: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"text": self.text, "line": self.line, "topics": list(self.topics)}


@dataclass
class Section:
    """
    A contiguous span of the document.

    A section starts at a heading (or at line 1 when the document does not
    open with a heading) and ends at the line before the next heading, or at
    the last line of the document.
    """
    heading: Optional[Heading]
    content: str
    start_line: int
    end_line: int
    topics: list[str] = field(default_factory=list)

    @property
    def heading_text(self) -> str:
        """Heading text, or an empty string for a heading-less section."""
        return self.heading.text if self.heading else ""

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def to_dict(self) -> dict:
        return {
            "heading": self.heading.to_dict() if self.heading else None,
            "content": self.content,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "topics": list(self.topics),
        }


@dataclass
class NoteStructure:
    """Aggregate structure of a markdown note, all sequences in document order."""
    headings: list[Heading] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    paragraphs: list[Paragraph] = field(default_factory=list)
    code_blocks: list[CodeBlock] = field(default_factory=list)
    lists: list[ListItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.headings or self.sections or self.paragraphs
            or self.code_blocks or self.lists
        )

    @property
    def title(self) -> Optional[str]:
        """First H1 text, else the first heading text, else None."""
        for heading in self.headings:
            if heading.level == 1:
                return heading.text
        if self.headings:
            return self.headings[0].text
        return None

    def find_section_for_line(self, line: int) -> Optional[Section]:
        """Return the section that covers a 1-indexed line number."""
        for section in self.sections:
            if section.contains_line(line):
                return section
        return None

    def to_dict(self) -> dict:
        return {
            "headings": [h.to_dict() for h in self.headings],
            "sections": [s.to_dict() for s in self.sections],
            "paragraphs": [p.to_dict() for p in self.paragraphs],
            "code_blocks": [c.to_dict() for c in self.code_blocks],
            "lists": [item.to_dict() for item in self.lists],
        }


# =============================================================================
# Catalog entries
# =============================================================================

@dataclass(frozen=True)
class UseCaseTemplate:
    """A content category paired with a prompt pattern and recommended styles."""
    id: str
    name: str
    icon: str
    description: str
    best_styles: tuple[str, ...]
    prompt_pattern: str
    keywords: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "best_styles": list(self.best_styles),
            "prompt_pattern": self.prompt_pattern,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class StyleTemplate:
    """A visual style: a prompt prefix plus trailing quality enhancers."""
    id: str
    name: str
    tier: StyleTier
    modifier: str
    quality_enhancers: str
    best_for: tuple[str, ...]
    icon: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "tier": self.tier,
            "modifier": self.modifier,
            "quality_enhancers": self.quality_enhancers,
            "best_for": list(self.best_for),
            "icon": self.icon,
        }


# =============================================================================
# Analysis results
# =============================================================================

@dataclass
class UseCaseMatch:
    """A scored pairing of content with a use-case template."""
    template: UseCaseTemplate
    confidence: int  # 0 to 100
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "template_id": self.template.id,
            "template_name": self.template.name,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }


@dataclass
class InsertionLocation:
    """A line in the note plus which side of it the image goes."""
    line_number: int
    position: InsertionPosition
    anchor: str

    def to_dict(self) -> dict:
        return {
            "line_number": self.line_number,
            "position": self.position.value,
            "anchor": self.anchor,
        }


@dataclass
class PlacementSuggestion:
    """A candidate insertion point with its relevance score."""
    location: InsertionLocation
    score: int  # 0 to 100
    reasoning: str
    context_preview: str

    def to_dict(self) -> dict:
        return {
            "location": self.location.to_dict(),
            "score": self.score,
            "reasoning": self.reasoning,
            "context_preview": self.context_preview,
        }


@dataclass
class PromptValidation:
    """Result of checking a rendered prompt before it is sent out."""
    valid: bool
    issues: list[str] = field(default_factory=list)
    unresolved_placeholders: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "issues": list(self.issues),
            "unresolved_placeholders": list(self.unresolved_placeholders),
        }


@dataclass
class ContentProfile:
    """Deterministic briefing of a note for an external prompt writer."""
    content_type: str
    themes: list[str] = field(default_factory=list)
    tone: str = "Neutral"
    visual_elements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "content_type": self.content_type,
            "themes": list(self.themes),
            "tone": self.tone,
            "visual_elements": list(self.visual_elements),
        }


@dataclass
class IllustrationPlan:
    """Everything decided for one note before images are requested."""
    concepts: list[str]
    content_type: ContentType
    language: str
    use_case: UseCaseMatch
    style: StyleTemplate
    prompts: list[str]
    validations: list[PromptValidation] = field(default_factory=list)
    placements: dict[int, PlacementSuggestion] = field(default_factory=dict)
    section_count: int = 0
    heading_count: int = 0

    @property
    def unplaced_images(self) -> list[int]:
        """Indexes of prompts with no placement suggestion."""
        return [i for i in range(len(self.prompts)) if i not in self.placements]

    def to_dict(self) -> dict:
        return {
            "concepts": list(self.concepts),
            "content_type": self.content_type,
            "language": self.language,
            "use_case": self.use_case.to_dict(),
            "style": self.style.to_dict(),
            "prompts": list(self.prompts),
            "validations": [v.to_dict() for v in self.validations],
            "placements": {
                str(index): suggestion.to_dict()
                for index, suggestion in sorted(self.placements.items())
            },
            "section_count": self.section_count,
            "heading_count": self.heading_count,
        }
