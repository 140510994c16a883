"""Utilities for surfacing random book highlights from Obsidian notes."""

from .config import HighlightsConfig
from .models import Highlight, TitleAuthor
from .scanner import HighlightScanner, ScanResult, collect_highlights

__all__ = [
    "HighlightsConfig",
    "Highlight",
    "HighlightScanner",
    "ScanResult",
    "TitleAuthor",
    "collect_highlights",
]
