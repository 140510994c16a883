import re

from book_highlights.models import Highlight
from book_highlights.parsers import CalloutHighlightParser, FieldRule


BOOK_NOTE = """---
title: Dune
author: Frank Herbert
subtopic:
  - Book Highlights
---

# Highlights

> [!quote]
> Link: Some text ^ref-1234
> Highlighted: 2023-01-01
> Page: 42
> My Comments: great quote

> [!quote] Second passage
> Location: 120

> [!note]
> Page: 7
"""


def test_callout_parser_extracts_fields() -> None:
    parser = CalloutHighlightParser()
    highlights = parser.parse(BOOK_NOTE, "Books/Dune.md", {"title": "Dune", "author": "Frank Herbert"})

    assert len(highlights) == 2
    first, second = highlights
    assert first == Highlight(
        book_title="Dune",
        author="Frank Herbert",
        text="Some text",
        source_file="Books/Dune.md",
        date="2023-01-01",
        page="42",
        location="",
        comment="great quote",
    )
    assert second.text == "Second passage"
    assert second.location == "120"
    assert second.page == ""
    assert second.comment == ""


def test_callout_with_only_metadata_is_discarded() -> None:
    content = "> [!quote]\n> Page: 7\n> Location: 12\n"

    assert CalloutHighlightParser().parse(content, "note.md", {}) == []


def test_callouts_stop_at_next_callout() -> None:
    content = "> [!quote]\n> First\n> [!quote]\n> Second"

    highlights = CalloutHighlightParser().parse(content, "note.md", {"title": "Book"})

    assert [h.text for h in highlights] == ["First", "Second"]


def test_page_number_label_and_malformed_page() -> None:
    parser = CalloutHighlightParser()

    labelled = parser.parse("> [!quote]\n> Text\n> Page Number: 15", "n.md", {})
    malformed = parser.parse("> [!quote]\n> Text\n> Page: xv", "n.md", {})

    assert labelled[0].page == "15"
    assert labelled[0].text == "Text"
    assert malformed[0].page == ""
    assert malformed[0].text == "Text\nPage: xv"


def test_comment_stops_at_next_label() -> None:
    content = "> [!quote]\n> Quoted line\n> My Comments: first\n> second\n> Tags: book"

    highlight = CalloutHighlightParser().parse(content, "n.md", {})[0]

    assert highlight.comment == "first\nsecond"
    assert highlight.text == "Quoted line\n\nTags: book"


def test_title_and_author_fall_back_to_filename() -> None:
    content = "> [!quote]\n> Text"
    parser = CalloutHighlightParser("{{title}} by {{author}}")

    from_name = parser.parse(content, "Books/Dune by Frank Herbert.md", {})[0]
    from_front_matter = parser.parse(content, "Books/Dune by Frank Herbert.md", {"title": "Dune Messiah"})[0]

    assert (from_name.book_title, from_name.author) == ("Dune", "Frank Herbert")
    assert (from_front_matter.book_title, from_front_matter.author) == ("Dune Messiah", "Frank Herbert")


def test_filename_without_author_leaves_author_empty() -> None:
    highlight = CalloutHighlightParser().parse("> [!quote]\n> Text", "Reading log.md", {})[0]

    assert highlight.book_title == "Reading log"
    assert highlight.author is None


def test_custom_rules_are_applied_in_order() -> None:
    rules = (FieldRule("page", re.compile(r"p\. (\d+)")),)
    parser = CalloutHighlightParser(rules=rules)

    highlight = parser.parse("> [!quote]\n> Text p. 9", "n.md", {})[0]

    assert highlight.page == "9"
    assert highlight.text == "Text"


def test_comment_continues_past_non_ascii_label() -> None:
    content = "> [!quote]\n> Quoted\n> My Comments: one\n> Überlegung: two"

    highlight = CalloutHighlightParser().parse(content, "n.md", {})[0]

    assert highlight.comment == "one\nÜberlegung: two"
    assert highlight.text == "Quoted"
