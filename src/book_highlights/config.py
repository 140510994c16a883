"""Configuration helpers for the book highlights panel."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_FILENAME_FORMAT = "{{title}} by {{author}}"
DEFAULT_REFRESH_INTERVAL = 300


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def normalise_folder(value: str) -> str:
    """Strip leading and trailing slashes from a vault folder setting."""

    return value.strip().strip("/")


@dataclass
class HighlightsConfig:
    """Holds configuration for scanning and displaying highlights."""

    auto_refresh: bool = True
    show_book_title: bool = True
    show_author: bool = True
    show_comments: bool = True
    show_metadata: bool = True

    # 0 means no limit
    max_highlights: int = 50
    random_highlights_count: int = 5
    # Seconds; 0 disables the interval timer
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL

    filter_property: str = "subtopic"
    filter_value: str = "Book Highlights"
    filename_format: str = DEFAULT_FILENAME_FORMAT

    # Empty means the entire vault
    highlights_folder: str = ""

    def __post_init__(self) -> None:
        self.max_highlights = max(0, _as_int(self.max_highlights, 0))
        self.random_highlights_count = max(1, _as_int(self.random_highlights_count, 1))
        self.refresh_interval = max(0, _as_int(self.refresh_interval, DEFAULT_REFRESH_INTERVAL))
        self.filename_format = self.filename_format or DEFAULT_FILENAME_FORMAT
        self.highlights_folder = normalise_folder(self.highlights_folder or "")

    @property
    def filter_enabled(self) -> bool:
        return bool(self.filter_property and self.filter_value)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "HighlightsConfig":
        kwargs: Dict[str, Any] = {}
        for key in ("auto_refresh", "show_book_title", "show_author", "show_comments", "show_metadata"):
            if key in data and data[key] is not None:
                kwargs[key] = _as_bool(data[key])
        for key in ("max_highlights", "random_highlights_count", "refresh_interval"):
            if key in data and data[key] is not None:
                kwargs[key] = data[key]
        for key in ("filter_property", "filter_value", "filename_format", "highlights_folder"):
            if key in data and data[key] is not None:
                kwargs[key] = str(data[key])
        return cls(**kwargs)

    def to_mapping(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """Load a JSON configuration file if provided."""

    if path is None:
        return {}
    with path.expanduser().resolve().open("r", encoding="utf-8") as handle:
        return json.load(handle)


def save_config(path: Path, config: HighlightsConfig, **extra: Any) -> None:
    """Persist ``config`` (plus any ``extra`` keys) as JSON."""

    data = config.to_mapping()
    data.update(extra)
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2)
