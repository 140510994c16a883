"""Scan a vault for book notes and collect their highlights."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from .config import HighlightsConfig
from .filters import matches_filter
from .frontmatter import extract_front_matter
from .models import Highlight
from .parsers import CalloutHighlightParser, HighlightParser
from .sampling import sample_highlights
from .sources import DocumentSource, SourceError, in_folder

ERROR_MESSAGE = "Error loading highlights. Check console for details."


def collect_highlights(
    source: DocumentSource,
    config: HighlightsConfig,
    parser: Optional[HighlightParser] = None,
) -> List[Highlight]:
    """Collect highlights from every matching note, up to ``config.max_highlights``.

    A note that cannot be read or parsed is logged and skipped. Errors from
    listing the vault propagate.
    """

    parser = parser or CalloutHighlightParser(config.filename_format)
    files = [path for path in source.list_documents() if in_folder(path, config.highlights_folder)]
    if config.highlights_folder:
        logger.info(f"Filtering to {len(files)} files in folder: {config.highlights_folder}")
    else:
        logger.info(f"Searching all {len(files)} markdown files in the vault")

    highlights: List[Highlight] = []
    matched_files = 0

    for processed, path in enumerate(files, start=1):
        if processed % 10 == 0:
            logger.debug(f"Processing file {processed}/{len(files)}...")

        try:
            content = source.read_document(path)
            front_matter = extract_front_matter(content)
            if front_matter is None:
                logger.debug(f"Skipping {path} - no front matter found")
                continue
            if not matches_filter(front_matter, config.filter_property, config.filter_value):
                logger.debug(f"Skipping {path} - doesn't match filter")
                continue

            found = parser.parse(content, path, front_matter)
        except (SourceError, OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Error processing file {path}: {exc}")
            continue
        except Exception:
            logger.exception(f"Unexpected error processing file {path}")
            continue

        if found:
            highlights.extend(found)
            matched_files += 1
            logger.debug(f"Added {len(found)} highlights from {path}")

        if config.max_highlights > 0 and len(highlights) >= config.max_highlights:
            logger.info(f"Reached maximum highlights limit ({config.max_highlights})")
            del highlights[config.max_highlights :]
            break

    logger.info(f"Processed {matched_files} files matching the filter; {len(highlights)} highlights found")
    return highlights


@dataclass
class ScanResult:
    """Outcome of one refresh pass."""

    highlights: List[Highlight] = field(default_factory=list)
    selection: List[Highlight] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HighlightScanner:
    """Runs complete refresh passes against a document source."""

    def __init__(
        self,
        source: DocumentSource,
        config: HighlightsConfig,
        *,
        parser: Optional[HighlightParser] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.source = source
        self.config = config
        self.parser = parser
        self.rng = rng

    def refresh(self) -> ScanResult:
        try:
            parser = self.parser or CalloutHighlightParser(self.config.filename_format)
            highlights = collect_highlights(self.source, self.config, parser)
        except Exception:
            logger.exception("Error refreshing highlights")
            return ScanResult(error=ERROR_MESSAGE)

        selection = sample_highlights(highlights, self.config.random_highlights_count, self.rng)
        return ScanResult(highlights=highlights, selection=selection)
