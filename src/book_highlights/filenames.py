"""Derive book titles and authors from note filenames."""
from __future__ import annotations

import re
from typing import Optional

from .config import DEFAULT_FILENAME_FORMAT
from .models import TitleAuthor

TITLE_PLACEHOLDER = "{{title}}"
AUTHOR_PLACEHOLDER = "{{author}}"

NOTE_EXTENSION = re.compile(r"\.(md|markdown|txt)$", re.IGNORECASE)


def strip_extension(filename: str) -> str:
    return NOTE_EXTENSION.sub("", filename)


def build_filename_pattern(filename_format: str) -> Optional["re.Pattern[str]"]:
    """Compile ``filename_format`` into an anchored pattern.

    Every placeholder becomes a greedy ``(.+)`` group; everything else is
    matched literally. Returns ``None`` if the result does not compile.
    """

    pattern = re.escape(filename_format)
    for placeholder in (TITLE_PLACEHOLDER, AUTHOR_PLACEHOLDER):
        pattern = pattern.replace(re.escape(placeholder), "(.+)")
    try:
        return re.compile(f"^{pattern}$")
    except re.error:
        return None


def parse_title_and_author(filename: str, filename_format: str = DEFAULT_FILENAME_FORMAT) -> TitleAuthor:
    """Parse a note filename such as ``Dune by Frank Herbert.md``.

    Falls back to the bare filename as the title when the format does not
    match.
    """

    basename = strip_extension(filename.rsplit("/", 1)[-1])
    filename_format = filename_format or DEFAULT_FILENAME_FORMAT

    pattern = build_filename_pattern(filename_format)
    match = pattern.match(basename) if pattern else None
    if not match:
        return TitleAuthor(basename)

    title_index = filename_format.find(TITLE_PLACEHOLDER)
    author_index = filename_format.find(AUTHOR_PLACEHOLDER)

    if title_index >= 0 and author_index >= 0:
        if title_index < author_index:
            return TitleAuthor(match.group(1), match.group(2))
        return TitleAuthor(match.group(2), match.group(1))
    if title_index >= 0:
        return TitleAuthor(match.group(1))
    if author_index >= 0:
        return TitleAuthor(basename, match.group(1))
    return TitleAuthor(basename)
