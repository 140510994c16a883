"""Data models for book highlights extracted from vault notes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

UNKNOWN_BOOK = "Unknown Book"


@dataclass(frozen=True)
class Highlight:
    """Represents a single highlight callout found in a book note."""

    book_title: str
    author: Optional[str]
    text: str
    source_file: str
    date: str = ""
    page: str = ""
    location: str = ""
    comment: str = ""


class TitleAuthor(NamedTuple):
    """Title and optional author parsed from a note's filename."""

    title: str
    author: Optional[str] = None
