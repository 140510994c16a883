"""Parsers that extract highlights from book notes."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from loguru import logger

from .config import DEFAULT_FILENAME_FORMAT
from .filenames import parse_title_and_author
from .models import UNKNOWN_BOOK, Highlight


@dataclass(frozen=True)
class FieldRule:
    """Extracts one metadata field from a callout and strips it from the text."""

    field: str
    pattern: "re.Pattern[str]"

    def apply(self, block: str, remainder: str) -> tuple[Optional[str], str]:
        match = self.pattern.search(block)
        if not match:
            return None, remainder
        value = (match.group(1) or "").strip()
        return value, self.pattern.sub("", remainder, count=1).strip()


# Applied in order; each rule removes its match before the next one runs.
DEFAULT_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("date", re.compile(r"Highlighted: ([^\n]+)")),
    FieldRule("page", re.compile(r"Page(?: Number)?: (\d+)")),
    FieldRule("location", re.compile(r"Location: (\d+)")),
    FieldRule("comment", re.compile(r"My Comments:(.*?)(?=\n\w+:|\Z)", re.DOTALL | re.ASCII)),
)


class HighlightParser:
    """Base class for highlight parsers."""

    def parse(self, content: str, source_file: str, front_matter: Mapping[str, Any]) -> List[Highlight]:
        raise NotImplementedError


class CalloutHighlightParser(HighlightParser):
    """Parses Obsidian callouts (``> [!quote] ...``) into highlights.

    Any callout type is accepted. A callout runs until the next blank line,
    the next callout or the end of the note.
    """

    CALLOUT_PATTERN = re.compile(r"> \[!([^\]]+)\](.*?)(?=\n\n|\n> \[!|\Z)", re.DOTALL)
    LINK_PREFIX = re.compile(r"^Link: ")
    REF_SUFFIX = re.compile(r"\s*\^ref-\d+$")

    def __init__(
        self,
        filename_format: str = DEFAULT_FILENAME_FORMAT,
        rules: Sequence[FieldRule] = DEFAULT_FIELD_RULES,
    ) -> None:
        self.filename_format = filename_format
        self.rules = tuple(rules)

    @staticmethod
    def clean_block(raw: str) -> str:
        """Drop the blockquote markers from a callout body."""

        if raw.startswith("\n> "):
            raw = raw[3:]
        return raw.replace("\n> ", "\n").strip()

    def extract_fields(self, block: str) -> Dict[str, str]:
        fields = {rule.field: "" for rule in self.rules}
        remainder = block
        for rule in self.rules:
            value, remainder = rule.apply(block, remainder)
            if value is not None:
                fields[rule.field] = value

        remainder = self.LINK_PREFIX.sub("", remainder, count=1)
        remainder = self.REF_SUFFIX.sub("", remainder, count=1)
        fields["text"] = remainder.strip()
        return fields

    def resolve_book(self, source_file: str, front_matter: Mapping[str, Any]) -> tuple[str, Optional[str]]:
        from_name = parse_title_and_author(source_file, self.filename_format)
        title = front_matter.get("title") or from_name.title or UNKNOWN_BOOK
        author = front_matter.get("author") or from_name.author or None
        return str(title), (str(author) if author else None)

    def parse(self, content: str, source_file: str, front_matter: Mapping[str, Any]) -> List[Highlight]:
        book_title, author = self.resolve_book(source_file, front_matter)

        highlights: List[Highlight] = []
        for match in self.CALLOUT_PATTERN.finditer(content):
            callout_type = match.group(1)
            fields = self.extract_fields(self.clean_block(match.group(2) or ""))
            if not fields["text"]:
                continue

            highlights.append(
                Highlight(
                    book_title=book_title,
                    author=author,
                    text=fields["text"],
                    source_file=source_file,
                    date=fields.get("date", ""),
                    page=fields.get("page", ""),
                    location=fields.get("location", ""),
                    comment=fields.get("comment", ""),
                )
            )
            logger.debug(
                f"Found {callout_type} highlight in {source_file}: "
                f"{fields['text'][:50]!r} page={fields.get('page')!r} location={fields.get('location')!r}"
            )

        if not highlights:
            logger.debug(f"No highlights found in {source_file}")
        return highlights
