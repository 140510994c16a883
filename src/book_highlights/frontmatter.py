"""YAML front matter extraction for vault notes."""
from __future__ import annotations

import re
from typing import Any, Dict, Optional

import yaml
from loguru import logger

FRONT_MATTER_PATTERN = re.compile(r"^---\n(.*?)\n---", re.DOTALL)


def extract_front_matter(text: str) -> Optional[Dict[str, Any]]:
    """Return the leading front matter of ``text`` as a mapping.

    ``None`` means the note has no usable front matter: either the ``---``
    delimiters are missing or the block could not be decoded. An empty block
    yields an empty mapping.
    """

    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return None

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        logger.warning(f"Error parsing front matter: {exc}")
        return None

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Front matter is not a mapping (got {type(data).__name__})")
        return None
    return data
