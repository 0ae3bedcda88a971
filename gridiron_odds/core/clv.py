"""Closing Line Value (CLV) — post-hoc quality of a placed price.

CLV measures how much of the closing-implied value a bettor captured by
betting before the market settled.  The formula flips on the favourite /
underdog status of the *placed* price:

* Favourite (placed decimal < 2.0)::

      CLV = (closing − placed) / (closing − 1) · 100

* Underdog (placed decimal ≥ 2.0)::

      CLV = (placed − closing) / (placed − 1) · 100
"""

from __future__ import annotations

from typing import Optional

from gridiron_odds.core.odds_math import EVEN_MONEY_DECIMAL, american_to_decimal


def calculate_clv(placed_odds: object, closing_odds: object) -> Optional[float]:
    """CLV percentage of a bet placed at ``placed_odds``.

    Examples::

        calculate_clv(+150, +130) → 13.33   (underdog, line shortened)
        calculate_clv(+150, +150) →  0.0

    Returns:
        CLV in percent, or ``None`` if either price is invalid.
    """
    placed = american_to_decimal(placed_odds)
    closing = american_to_decimal(closing_odds)
    if placed is None or closing is None:
        return None

    if placed < EVEN_MONEY_DECIMAL:
        return (closing - placed) / (closing - 1.0) * 100.0
    return (placed - closing) / (placed - 1.0) * 100.0
