"""Random selection of highlights for display."""
from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .models import Highlight

_default_rng = random.Random()


def sample_highlights(
    pool: Sequence[Highlight], count: int, rng: Optional[random.Random] = None
) -> List[Highlight]:
    """Pick ``min(count, len(pool))`` distinct highlights uniformly at random."""

    if not pool:
        return []
    rng = rng or _default_rng
    size = min(max(1, count), len(pool))
    return rng.sample(list(pool), size)
