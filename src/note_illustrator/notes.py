"""
Loading and saving markdown notes.
"""

from pathlib import Path
from typing import Union


class NoteLoadError(Exception):
    """Raised when a note cannot be read."""
    pass


def load_note(path: Union[str, Path]) -> str:
    """
    Read a markdown note as UTF-8 text.

    Args:
        path: Path to the note.

    Returns:
        Note content with line endings normalized to "\\n".

    Raises:
        NoteLoadError: If the file is missing, unreadable or not UTF-8.
    """
    path = Path(path)

    if not path.is_file():
        raise NoteLoadError(f"Note not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise NoteLoadError(f"Note is not valid UTF-8: {path} ({e})")
    except OSError as e:
        raise NoteLoadError(f"Failed to read note {path}: {e}")

    return text.replace("\r\n", "\n").replace("\r", "\n")


def note_title(path: Union[str, Path]) -> str:
    """Title used in image filenames: the note's filename without extension."""
    return Path(path).stem


def save_note(path: Union[str, Path], content: str) -> Path:
    """Write a note, creating parent folders as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
