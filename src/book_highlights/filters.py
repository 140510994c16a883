"""Decide which notes are book notes based on a front matter property."""
from __future__ import annotations

import json
from typing import Any, Mapping

from loguru import logger


def _stringify(value: Any) -> str:
    # YAML spelling for booleans and null; 5.0 reads as 5.
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _any_matches(items: Any, target: str) -> bool:
    return any(_stringify(item).strip() == target for item in items)


def _decode_json_list(value: str) -> Any:
    try:
        decoded = json.loads(value)
    except ValueError:
        return None
    return decoded if isinstance(decoded, list) else None


def matches_filter(front_matter: Mapping[str, Any], filter_property: str, filter_value: str) -> bool:
    """Return ``True`` when ``front_matter[filter_property]`` matches ``filter_value``.

    List values (or strings holding a JSON array) match when any element
    does. Filtering is disabled when either setting is empty.
    """

    if not filter_property or not filter_value:
        return True

    if filter_property not in front_matter:
        logger.debug(f"Property {filter_property!r} not present")
        return False

    value = front_matter[filter_property]
    target = str(filter_value).strip()

    if isinstance(value, (list, tuple)):
        matched = _any_matches(value, target)
    elif isinstance(value, str):
        items = _decode_json_list(value)
        if items is not None:
            matched = _any_matches(items, target)
        else:
            matched = value.strip() == target
    else:
        matched = _stringify(value).strip() == target

    if not matched:
        logger.debug(f"Filter mismatch: {filter_property}: {json.dumps(value, default=str)} != {target!r}")
    return matched
