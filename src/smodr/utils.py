"""
Small formatting and file name helpers.
"""

import os
import re
from urllib.parse import urlparse

MAX_FILENAME_LENGTH = 255
DEFAULT_MEDIA_EXTENSION = ".mp3"

# Characters that are invalid in file names on at least one major platform
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_filename(filename: str) -> str:
    """Replace invalid file name characters and cap the length.

    The extension is preserved when the name has to be shortened.
    """
    filename = _INVALID_FILENAME_CHARS.sub("_", filename)
    if len(filename) <= MAX_FILENAME_LENGTH:
        return filename

    stem, extension = os.path.splitext(filename)
    return stem[: MAX_FILENAME_LENGTH - len(extension)] + extension


def get_file_extension(url: str) -> str:
    """Get the file extension of a URL path, defaulting to .mp3."""
    try:
        path = urlparse(url).path
    except ValueError:
        return DEFAULT_MEDIA_EXTENSION

    extension = os.path.splitext(path)[1]
    return extension or DEFAULT_MEDIA_EXTENSION


def format_bytes(size: int) -> str:
    """Format a byte count in human readable units."""
    if size < 1024:
        return f"{size} B"

    value = float(size)
    for unit in ("KB", "MB"):
        value /= 1024
        if value < 1024:
            return f"{value:.1f} {unit}"
    return f"{value / 1024:.1f} GB"


def format_kilobytes(size: int) -> str:
    """Format a cache size as kilobytes, or 'Unknown' when empty."""
    if size <= 0:
        return "Unknown"
    return f"{size / 1024:.1f} KB"


def extract_episode_number(title: str) -> str:
    """Extract the episode number following the first '#' in a title.

    >>> extract_episode_number("SModcast #123 Something")
    '123'
    """
    if not title:
        return ""

    parts = title.split("#")
    if len(parts) > 1:
        return parts[1].split(" ")[0]
    return ""
