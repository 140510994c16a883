"""Command line entry point for showing random book highlights from an Obsidian vault."""
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Iterable

from loguru import logger

from book_highlights.config import HighlightsConfig, load_config
from book_highlights.render import format_selection
from book_highlights.scanner import HighlightScanner
from book_highlights.sources import DocumentSource, LocalRestApiSource, VaultDirectorySource


def _parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, help="Path to JSON configuration file", default=None)
    parser.add_argument("--vault", type=Path, help="Path to the root of the Obsidian vault", default=None)
    parser.add_argument("--rest-url", help="Read notes through the Local REST API at this URL", default=None)
    parser.add_argument("--api-key", help="API key for the Local REST API", default=None)
    parser.add_argument("--folder", help="Only scan notes inside this vault folder", default=None)
    parser.add_argument("--count", type=int, help="Number of random highlights to show", default=None)
    parser.add_argument("--max", type=int, dest="max_highlights", help="Maximum highlights to load (0 = no limit)", default=None)
    parser.add_argument("--filter-property", help="Front matter property identifying book notes", default=None)
    parser.add_argument("--filter-value", help="Value of the filter property for book notes", default=None)
    parser.add_argument(
        "--filename-format",
        help="Format used to parse title and author from filenames ({{title}} and {{author}})",
        default=None,
    )
    parser.add_argument("--seed", type=int, help="Seed for a repeatable selection", default=None)
    parser.add_argument("--no-title", action="store_true", help="Hide book titles")
    parser.add_argument("--no-author", action="store_true", help="Hide authors")
    parser.add_argument("--no-comments", action="store_true", help="Hide comments")
    parser.add_argument("--no-metadata", action="store_true", help="Hide page, location and date")
    parser.add_argument(
        "--list", action="store_true", dest="list_only", help="List every collected highlight instead of a random selection"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show scan diagnostics")
    return parser.parse_args(argv)


def _read_config_file(path: Path | None) -> dict:
    try:
        return load_config(path)
    except FileNotFoundError as exc:  # pragma: no cover - user error
        raise SystemExit(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - user error
        raise SystemExit(f"Failed to read configuration file: {exc}") from exc


def _combine_config(args: argparse.Namespace, file_config: dict) -> HighlightsConfig:
    data = dict(file_config)

    if args.folder is not None:
        data["highlights_folder"] = args.folder
    if args.count is not None:
        data["random_highlights_count"] = args.count
    if args.max_highlights is not None:
        data["max_highlights"] = args.max_highlights
    if args.filter_property is not None:
        data["filter_property"] = args.filter_property
    if args.filter_value is not None:
        data["filter_value"] = args.filter_value
    if args.filename_format is not None:
        data["filename_format"] = args.filename_format
    if args.no_title:
        data["show_book_title"] = False
    if args.no_author:
        data["show_author"] = False
    if args.no_comments:
        data["show_comments"] = False
    if args.no_metadata:
        data["show_metadata"] = False
    return HighlightsConfig.from_mapping(data)


def _build_source(args: argparse.Namespace, file_config: dict) -> DocumentSource:
    rest_url = args.rest_url or file_config.get("rest_url")
    if rest_url:
        return LocalRestApiSource(base_url=rest_url, api_key=args.api_key or file_config.get("api_key"))
    vault = args.vault or file_config.get("vault_root")
    if not vault:
        raise SystemExit("Provide --vault or --rest-url (or set vault_root/rest_url in the config file).")
    return VaultDirectorySource(Path(vault))


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    file_config = _read_config_file(args.config)
    config = _combine_config(args, file_config)
    source = _build_source(args, file_config)
    rng = random.Random(args.seed) if args.seed is not None else None

    result = HighlightScanner(source, config, rng=rng).refresh()
    if not result.ok:
        print(result.error)
        return 2

    shown = result.highlights if args.list_only else result.selection
    if args.list_only:
        print(f"Found {len(result.highlights)} highlights.")
    print(format_selection(shown, config))
    return 0 if shown else 1


if __name__ == "__main__":
    raise SystemExit(main())
