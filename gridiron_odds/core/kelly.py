"""Kelly criterion sizing — the single source of truth for stake sizing math.

All functions here are **pure**: no I/O, no logging.  Import from this
module; never reimplement Kelly locally in services or routes.

The Kelly criterion maximises the expected logarithm of wealth by solving::

    max_f  E[log(1 + f · X)]

where ``X`` pays ``b`` with probability ``p`` and ``−1`` with probability
``q = 1 − p``, ``b`` being the profit per unit (decimal odds minus the
stake).  The closed form (Kelly 1956) is::

    f*  =  (b · p − q) / b                                       (1)

Outputs are percentages of bankroll.  A non-positive edge always yields
``0.0``: the recommendation is "do not bet", never a negative stake.

Fractional Kelly (a fixed share of full Kelly, half by default) trades some
growth for a large cut in drawdown when the win probability is itself an
estimate.
"""

from __future__ import annotations

from typing import Final, Optional

from gridiron_odds.core.odds_math import (
    american_to_decimal,
    american_to_implied_probability,
    coerce_number,
)

#: Share of full Kelly used when no fraction is given (half-Kelly).
DEFAULT_KELLY_FRACTION: Final[float] = 0.5


def calculate_kelly(odds: object, win_probability: object) -> Optional[float]:
    """Full Kelly stake as a percentage of bankroll.

    Args:
        odds: American price available.
        win_probability: Estimated true win probability, percent in
            ``[0, 100]``.

    Returns:
        ``max(0, f*) · 100`` from equation (1), or ``None`` for invalid odds
        or an out-of-range probability.

    Examples::

        calculate_kelly(+100, 55)  → 10.0
        calculate_kelly(-110, 55)  →  5.5
        calculate_kelly(-110, 45)  →  0.0   (negative edge → no bet)
    """
    decimal_odds = american_to_decimal(odds)
    prob = coerce_number(win_probability)
    if decimal_odds is None or prob is None or not (0.0 <= prob <= 100.0):
        return None

    p = prob / 100.0
    q = 1.0 - p
    b = decimal_odds - 1.0

    kelly = (b * p - q) / b
    return max(0.0, kelly) * 100.0


def calculate_kelly_from_odds(odds: object, fair_odds: object) -> Optional[float]:
    """Full Kelly using the fair price's implied probability as ``p``."""
    fair_prob = american_to_implied_probability(fair_odds)
    if fair_prob is None:
        return None
    return calculate_kelly(odds, fair_prob)


def calculate_fractional_kelly(
    odds: object,
    win_probability: object,
    fraction: object = DEFAULT_KELLY_FRACTION,
) -> Optional[float]:
    """Fractional Kelly: full Kelly scaled by ``fraction``.

    Returns:
        ``calculate_kelly(...) · fraction``; ``None`` when full Kelly is
        undefined or ``fraction`` is not a non-negative number.
    """
    share = coerce_number(fraction)
    if share is None or share < 0.0:
        return None
    kelly = calculate_kelly(odds, win_probability)
    if kelly is None:
        return None
    return kelly * share
