"""Display formatting for highlights."""
from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import HighlightsConfig
from .models import Highlight

NO_HIGHLIGHTS_MESSAGE = "No highlights found. Add some book highlights to your notes!"
METADATA_SEPARATOR = " • "


@dataclass(frozen=True)
class RenderedHighlight:
    """What a display surface shows for one highlight card.

    ``None`` marks a part that is hidden by the display toggles or has no
    value.
    """

    title: Optional[str]
    author: Optional[str]
    text: str
    comment: Optional[str]
    metadata: Optional[str]
    source_file: str


def format_metadata(highlight: Highlight) -> str:
    parts: List[str] = []
    if highlight.page:
        parts.append(f"Page {highlight.page}")
    if highlight.location:
        parts.append(f"Location {highlight.location}")
    if highlight.date:
        parts.append(highlight.date)
    return METADATA_SEPARATOR.join(parts)


def render_highlight(highlight: Highlight, config: HighlightsConfig) -> RenderedHighlight:
    title = highlight.book_title if config.show_book_title else None
    author = highlight.author if (config.show_book_title and config.show_author and highlight.author) else None
    comment = f"Note: {highlight.comment}" if (config.show_comments and highlight.comment) else None
    metadata = (format_metadata(highlight) or None) if config.show_metadata else None
    return RenderedHighlight(
        title=title,
        author=author,
        text=highlight.text,
        comment=comment,
        metadata=metadata,
        source_file=highlight.source_file,
    )


def format_highlight_text(highlight: Highlight, config: HighlightsConfig, width: int = 80) -> str:
    """Render a highlight as plain text for a terminal."""

    card = render_highlight(highlight, config)
    lines: List[str] = []
    if card.title:
        heading = card.title
        if card.author:
            heading += f" by {card.author}"
        lines.append(heading)
        lines.append("-" * min(len(heading), width))
    for paragraph in card.text.splitlines() or [""]:
        lines.extend(textwrap.wrap(paragraph, width, initial_indent="> ", subsequent_indent="> ") or [">"])
    if card.comment:
        lines.extend(textwrap.wrap(card.comment, width))
    if card.metadata:
        lines.append(card.metadata)
    return "\n".join(lines)


def format_selection(highlights: Sequence[Highlight], config: HighlightsConfig, width: int = 80) -> str:
    if not highlights:
        return NO_HIGHLIGHTS_MESSAGE
    return "\n\n".join(format_highlight_text(highlight, config, width) for highlight in highlights)
