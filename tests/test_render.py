from book_highlights.config import HighlightsConfig
from book_highlights.models import Highlight
from book_highlights.render import (
    NO_HIGHLIGHTS_MESSAGE,
    format_highlight_text,
    format_metadata,
    format_selection,
    render_highlight,
)


def make_highlight(**kwargs) -> Highlight:
    base = {
        "book_title": "Dune",
        "author": "Frank Herbert",
        "text": "Fear is the mind-killer.",
        "source_file": "Books/Dune.md",
        "date": "2023-01-01",
        "page": "42",
        "location": "120",
        "comment": "Litany",
    }
    base.update(kwargs)
    return Highlight(**base)


def test_metadata_line_joins_present_parts() -> None:
    assert format_metadata(make_highlight()) == "Page 42 • Location 120 • 2023-01-01"
    assert format_metadata(make_highlight(page="")) == "Location 120 • 2023-01-01"
    assert format_metadata(make_highlight(page="", location="")) == "2023-01-01"
    assert format_metadata(make_highlight(page="", location="", date="")) == ""


def test_render_respects_toggles() -> None:
    highlight = make_highlight()

    shown = render_highlight(highlight, HighlightsConfig())
    hidden = render_highlight(
        highlight,
        HighlightsConfig(show_author=False, show_comments=False, show_metadata=False),
    )

    assert shown.title == "Dune"
    assert shown.author == "Frank Herbert"
    assert shown.comment == "Note: Litany"
    assert shown.metadata == "Page 42 • Location 120 • 2023-01-01"
    assert (hidden.author, hidden.comment, hidden.metadata) == (None, None, None)
    assert hidden.title == "Dune"


def test_author_only_shown_with_title() -> None:
    rendered = render_highlight(make_highlight(), HighlightsConfig(show_book_title=False))

    assert rendered.title is None
    assert rendered.author is None
    assert rendered.source_file == "Books/Dune.md"


def test_plain_text_rendering() -> None:
    text = format_highlight_text(make_highlight(), HighlightsConfig())

    assert text.splitlines() == [
        "Dune by Frank Herbert",
        "-" * len("Dune by Frank Herbert"),
        "> Fear is the mind-killer.",
        "Note: Litany",
        "Page 42 • Location 120 • 2023-01-01",
    ]


def test_empty_selection_message() -> None:
    assert format_selection([], HighlightsConfig()) == NO_HIGHLIGHTS_MESSAGE
