"""Weighted random selection over labelled outcomes.

Breed profiles express almost every random choice as a mapping from a
label to a non-negative weight (``{"e/e": 0.3, "E/e": 0.4, "E/E": 0.3}``).
This module turns such a mapping into a single label.
"""

from __future__ import annotations

import logging
import math
import random as pyrandom
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from equine.util.rng import require_rng_param

logger = logging.getLogger(__name__)

# Returned when no selection can be made
NO_SELECTION = None


def _valid_weight(weight: Any) -> bool:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return False
    return math.isfinite(weight) and weight >= 0


def valid_entries(weighted_items: Mapping) -> List[Tuple[Any, float]]:
    """Return ``(label, weight)`` pairs with usable weights, in iteration order."""
    return [(label, float(weight)) for label, weight in weighted_items.items() if _valid_weight(weight)]


def select_weighted(
    weighted_items: Any,
    *,
    rng: Optional[pyrandom.Random] = None,
) -> Optional[Any]:
    """Pick one label with probability proportional to its weight.

    Entries with a missing, negative, non-finite or non-numeric weight are
    skipped entirely. When every valid weight is zero the first valid label
    wins without consuming a draw. Otherwise exactly one ``rng.random()``
    draw is taken.

    Args:
        weighted_items: Mapping of label -> weight
        rng: Random number generator

    Returns:
        The chosen label, or ``NO_SELECTION`` for an empty, non-mapping or
        entirely invalid input.
    """
    rng = require_rng_param(rng, "select_weighted")
    if not isinstance(weighted_items, Mapping) or not weighted_items:
        logger.warning("select_weighted: invalid or empty weight map %r", weighted_items)
        return NO_SELECTION

    entries = valid_entries(weighted_items)
    if not entries:
        logger.warning("select_weighted: no valid weights in %r", weighted_items)
        return NO_SELECTION

    total = sum(weight for _, weight in entries)
    if total == 0:
        return entries[0][0]

    draw = rng.random() * total
    for label, weight in entries:
        if draw < weight:
            return label
        draw -= weight

    # Floating point drift: the walk overshot, settle on the last choosable label
    positive = [label for label, weight in entries if weight > 0]
    return positive[-1]
