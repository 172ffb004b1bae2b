"""Random selection helpers shared by the generative models."""

from __future__ import annotations

import bisect
import itertools
import random
from typing import Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

__all__ = ["weighted_random_choice"]


def weighted_random_choice(
    choices: Sequence[Tuple[int, T]],
    rng: Optional[random.Random] = None,
) -> Optional[T]:
    """Pick an item with probability proportional to its integer weight.

    ``choices`` holds ``(weight, item)`` pairs. A uniform integer is drawn
    from ``[0, total)`` and the first item whose running total exceeds it
    wins. ``None`` is returned when there is nothing to choose from.
    """

    if not choices:
        return None

    weights = [int(weight) for weight, _ in choices]
    if any(weight < 0 for weight in weights):
        raise ValueError("weights must be non-negative")

    cumulative = list(itertools.accumulate(weights))
    total = cumulative[-1]
    if total <= 0:
        return None

    draw = (rng or random).randrange(total)
    index = bisect.bisect_right(cumulative, draw)
    return choices[index][1]
