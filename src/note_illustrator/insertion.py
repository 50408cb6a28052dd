"""
Apply image embeds to note text.

Placements come from SmartPlacement (or from a user who kept only some of
them). Images without a placement go to the cursor line, or to the end of
the note when there is no cursor. Line numbers are 1-indexed and clamped
to the document, so a stale or partial placement map never fails.
"""

import logging
from typing import Optional

from .models import InsertionPosition, PlacementSuggestion

logger = logging.getLogger(__name__)


def _insertion_point(suggestion: PlacementSuggestion) -> int:
    """Number of lines that stay above the image."""
    line_number = suggestion.location.line_number
    if suggestion.location.position == InsertionPosition.BEFORE:
        return line_number - 1
    return line_number


def _clamp(point: int, line_count: int) -> int:
    return max(0, min(line_count, point))


def insert_images(
    document: str,
    embeds: list[str],
    placements: dict[int, PlacementSuggestion],
    cursor_line: Optional[int] = None,
) -> str:
    """
    Insert one embed per image into the document.

    Each embed is preceded by a blank line. Insertions are applied from the
    bottom of the note upward so earlier line numbers stay valid; images
    sharing a line keep their index order.

    Args:
        document: Note text.
        embeds: Embed markup, one per image index.
        placements: Image index -> placement. Missing indexes use the
            cursor line or the end of the note.
        cursor_line: 1-indexed line the cursor is on; the image goes after it.

    Returns:
        The note with every embed inserted.
    """
    lines = document.split("\n")
    line_count = len(lines)
    fallback_point = cursor_line if cursor_line is not None else line_count

    insertions: list[tuple[int, int, str]] = []
    for index, embed in enumerate(embeds):
        suggestion = placements.get(index)
        if suggestion is None:
            point = fallback_point
            logger.debug(f"Image {index + 1}: no placement, inserting after line {point}")
        else:
            point = _insertion_point(suggestion)

        clamped = _clamp(point, line_count)
        if clamped != point:
            logger.warning(f"Image {index + 1}: line {point} out of range, using {clamped}")
        insertions.append((clamped, index, embed))

    for point, _, embed in sorted(insertions, key=lambda item: (item[0], item[1]), reverse=True):
        lines[point:point] = ["", embed]

    return "\n".join(lines)


def insert_at_cursor(document: str, embeds: list[str], cursor_line: Optional[int] = None) -> str:
    """
    Insert all embeds together after the cursor line (or at the end).

    Embeds are separated by blank lines and surrounded by one blank line
    on each side.
    """
    if not embeds:
        return document

    lines = document.split("\n")
    point = _clamp(cursor_line if cursor_line is not None else len(lines), len(lines))

    block = [""]
    for embed in embeds:
        block.extend([embed, ""])

    lines[point:point] = block
    return "\n".join(lines)
