"""Parlay odds composition.

A parlay pays only if every leg wins, at the product of the legs' decimal
odds (legs assumed independent).
"""

from __future__ import annotations

import math
from typing import Optional

from gridiron_odds.core.odds_math import (
    american_to_decimal,
    coerce_sequence,
    decimal_to_american,
    finite_or_none,
)


def calculate_parlay_decimal(odds: object) -> Optional[float]:
    """Compound decimal odds of a parlay.

    Returns:
        Product of all legs' decimal odds; ``None`` if any leg is invalid,
        there are no legs, or the product overflows.
    """
    legs = coerce_sequence(odds)
    if not legs:
        return None

    decimals = [american_to_decimal(leg) for leg in legs]
    if any(decimal_odds is None for decimal_odds in decimals):
        return None
    return finite_or_none(math.prod(decimals))


def calculate_parlay_odds(odds: object) -> Optional[int]:
    """American odds of a parlay.

    Examples::

        calculate_parlay_odds([+100, +100])   → +300
        calculate_parlay_odds([-110, -110])   → +264
        calculate_parlay_odds([-110, None])   → None
    """
    return decimal_to_american(calculate_parlay_decimal(odds))
