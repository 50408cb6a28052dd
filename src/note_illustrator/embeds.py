"""
Filenames, folders and embed links for generated images.

Pure string helpers; nothing here touches the filesystem:
- Image filenames: "<prefix>_<title>_<style>_<n>[_<timestamp>].png"
- Attachment folders with optional "YYYY-MM" monthly subfolders
- Markdown and wiki-style embed links, with an optional display width
"""

import re
from datetime import datetime
from typing import Optional

IMAGE_FILE_PREFIX = "illustration"
IMAGE_EXTENSION = ".png"
MAX_NAME_PART_LENGTH = 50

IMAGE_SIZES: dict[str, int] = {
    "small": 256,
    "medium": 512,
    "large": 700,
    "extra-large": 1000,
}
DEFAULT_IMAGE_SIZE = "large"


def sanitize_filename(name: str) -> str:
    """
    Make a string safe to use as part of a filename.

    Reserved characters and whitespace become underscores, runs of
    underscores collapse, the result is cut at 50 characters and stripped
    of leading and trailing underscores.

    Examples:
        >>> sanitize_filename('My Note: "Draft"')
        'My_Note_Draft'
    """
    name = re.sub(r'[\\/:*?"<>|]', "_", name)
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"_+", "_", name)
    return name[:MAX_NAME_PART_LENGTH].strip("_")


def format_timestamp(when: datetime) -> str:
    return when.strftime("%Y%m%d_%H%M%S")


def generate_image_filename(
    note_title: str,
    style: str,
    index: int,
    timestamp: Optional[datetime] = None,
    prefix: str = IMAGE_FILE_PREFIX,
) -> str:
    """
    Build the filename for one generated image.

    Args:
        note_title: Title of the note being illustrated.
        style: Style id or name.
        index: 0-based image index; the filename uses index + 1.
        timestamp: When given, appended as "_YYYYMMDD_HHMMSS".
        prefix: Leading filename part.

    Returns:
        Filename with a .png extension.

    Examples:
        >>> generate_image_filename("Cell Biology", "digital_art", 0)
        'illustration_Cell_Biology_digital_art_1.png'
    """
    filename = f"{prefix}_{sanitize_filename(note_title)}_{sanitize_filename(style)}_{index + 1}"

    if timestamp is not None:
        filename = f"{filename}_{format_timestamp(timestamp)}"

    return f"{filename}{IMAGE_EXTENSION}"


def attachment_folder(
    base: str = "",
    monthly_subfolders: bool = False,
    when: Optional[datetime] = None,
) -> str:
    """
    Resolve the folder images are saved into.

    Args:
        base: Base attachment folder ("" for the vault or output root).
        monthly_subfolders: Append a "YYYY-MM" subfolder.
        when: Date used for the monthly subfolder. Defaults to now.

    Returns:
        Folder path using forward slashes, without a trailing slash.
    """
    path = base.replace("\\", "/").strip("/")

    if monthly_subfolders:
        year_month = (when or datetime.now()).strftime("%Y-%m")
        path = f"{path}/{year_month}" if path else year_month

    return path


def _basename(image_path: str) -> str:
    return image_path.split("/")[-1] or image_path


def markdown_image_link(image_path: str, alt: Optional[str] = None) -> str:
    """Standard markdown image link; alt text defaults to the bare filename."""
    if alt is None:
        alt = re.sub(r"\.[^/.]+$", "", _basename(image_path))
    return f"![{alt}]({image_path})"


def wiki_image_link(image_path: str, size: Optional[int] = None) -> str:
    """Wiki-style embed by filename, e.g. "![[image.png|700]]"."""
    filename = _basename(image_path)
    if size is None:
        return f"![[{filename}]]"
    return f"![[{filename}|{size}]]"


def size_value(name: str) -> int:
    """Display width for a named size; unknown names get the large width."""
    return IMAGE_SIZES.get(name, IMAGE_SIZES[DEFAULT_IMAGE_SIZE])
