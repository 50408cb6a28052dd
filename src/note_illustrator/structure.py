"""
Document structure parsing for markdown notes.

Turns raw markdown into headings, sections, paragraphs, code blocks and
list items in a single forward pass over 1-indexed lines. Every other
analysis step reads this structure.

Fenced code:
- A line starting with three backticks opens or closes a block
- Lines inside a block never become headings, list items or paragraphs
- A block that is never closed is dropped; the rest of the document stays
  in code mode, and section line ranges are still closed at the last line
"""

import logging
import re
from typing import Optional

from .concepts import extract_concepts
from .models import (
    CodeBlock,
    Heading,
    ListItem,
    NoteStructure,
    Paragraph,
    Section,
)

logger = logging.getLogger(__name__)


CODE_FENCE = "```"
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
LIST_ITEM_PATTERN = re.compile(r"^(\s*)([-*+]|\d+\.)\s+(.+)$")

MIN_PARAGRAPH_LENGTH = 20  # Stripped length must exceed this
HEADING_TOPIC_COUNT = 3
PARAGRAPH_TOPIC_COUNT = 2
PREAMBLE_TOPIC_COUNT = 3


class DocumentStructureParser:
    """Single-pass markdown structure parser."""

    def parse(self, text: str) -> NoteStructure:
        """
        Parse markdown text into a NoteStructure.

        Args:
            text: Raw markdown.

        Returns:
            NoteStructure whose sections cover every line exactly once.
            Blank input yields an empty structure.
        """
        if not text or not text.strip():
            return NoteStructure()

        lines = text.split("\n")
        last_line = len(lines)

        headings: list[Heading] = []
        sections: list[Section] = []
        paragraphs: list[Paragraph] = []
        code_blocks: list[CodeBlock] = []
        lists: list[ListItem] = []

        current: Optional[Section] = None
        if not _is_heading_line(lines[0]):
            # Lines before the first heading form a heading-less section
            current = Section(heading=None, content="", start_line=1, end_line=last_line)

        in_code_block = False
        code_start = 0
        code_language = ""
        code_lines: list[str] = []

        for line_number, line in enumerate(lines, start=1):
            if line.startswith(CODE_FENCE):
                if not in_code_block:
                    in_code_block = True
                    code_start = line_number
                    code_language = line[len(CODE_FENCE):].strip()
                    code_lines = []
                else:
                    in_code_block = False
                    code_blocks.append(CodeBlock(
                        language=code_language,
                        content="\n".join(code_lines),
                        start_line=code_start,
                        end_line=line_number,
                    ))
                continue

            if in_code_block:
                code_lines.append(line)
                continue

            heading_match = HEADING_PATTERN.match(line)
            if heading_match:
                heading_text = heading_match.group(2).strip()
                heading = Heading(
                    level=len(heading_match.group(1)),
                    text=heading_text,
                    line=line_number,
                )
                headings.append(heading)

                if current is not None:
                    current.end_line = line_number - 1
                    sections.append(_finish_section(current))

                current = Section(
                    heading=heading,
                    content="",
                    start_line=line_number,
                    end_line=last_line,
                    topics=extract_concepts(heading_text, HEADING_TOPIC_COUNT),
                )
                continue

            list_match = LIST_ITEM_PATTERN.match(line)
            if list_match:
                lists.append(ListItem(
                    text=list_match.group(3).strip(),
                    line=line_number,
                    indent=len(list_match.group(1)),
                ))
            elif len(line.strip()) > MIN_PARAGRAPH_LENGTH:
                paragraphs.append(Paragraph(
                    text=line.strip(),
                    line=line_number,
                    topics=extract_concepts(line, PARAGRAPH_TOPIC_COUNT),
                ))

            if current is not None:
                current.content += line + "\n"

        if in_code_block:
            logger.warning(
                f"Unterminated code fence opened at line {code_start}; "
                f"dropping {len(code_lines)} line(s) of code"
            )

        if current is not None:
            current.end_line = last_line
            sections.append(_finish_section(current))

        logger.debug(
            f"Parsed {len(headings)} headings, {len(sections)} sections, "
            f"{len(paragraphs)} paragraphs, {len(code_blocks)} code blocks, "
            f"{len(lists)} list items"
        )

        return NoteStructure(
            headings=headings,
            sections=sections,
            paragraphs=paragraphs,
            code_blocks=code_blocks,
            lists=lists,
        )


def _is_heading_line(line: str) -> bool:
    return not line.startswith(CODE_FENCE) and HEADING_PATTERN.match(line) is not None


def _finish_section(section: Section) -> Section:
    """Give a heading-less section topics drawn from its own content."""
    if section.heading is None and not section.topics:
        section.topics = extract_concepts(section.content, PREAMBLE_TOPIC_COUNT)
    return section


def analyze_structure(text: str) -> NoteStructure:
    """
    Parse markdown text into a NoteStructure.

    Args:
        text: Raw markdown.

    Returns:
        NoteStructure with headings, sections, paragraphs, code blocks and
        list items in document order.
    """
    return DocumentStructureParser().parse(text)


parse_structure = analyze_structure


def get_topics_by_section(text: str, max_topics: int = 5) -> dict[str, list[str]]:
    """
    Extract the main topics of every section.

    Args:
        text: Raw markdown.
        max_topics: Topics per section.

    Returns:
        Mapping of heading text (or "Section at line N" for a heading-less
        section) to that section's concepts, in document order.
    """
    topic_map: dict[str, list[str]] = {}

    for section in analyze_structure(text).sections:
        key = section.heading.text if section.heading else f"Section at line {section.start_line}"
        topic_map[key] = extract_concepts(section.content, max_topics)

    return topic_map
