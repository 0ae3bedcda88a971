"""Expected value and edge of a quoted price.

Two reference points are supported:

* a **fair price** (no-vig or consensus American odds), used by
  :func:`calculate_ev` and :func:`calculate_edge`;
* a **win probability** in percent, used by
  :func:`calculate_ev_with_probability`.

EV values are percentages of stake.  Positive EV means the market pays more
than the reference implies.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Optional

from gridiron_odds.core.odds_math import (
    american_to_decimal,
    american_to_implied_probability,
    coerce_number,
    finite_or_none,
)

#: Upper bound (exclusive) of the ``low`` EV bucket, in percent.
LOW_EV_CEILING: Final[float] = 3.0

#: Upper bound (exclusive) of the ``medium`` EV bucket, in percent.
MEDIUM_EV_CEILING: Final[float] = 7.0


class EVCategory(str, Enum):
    """Display bucket for an EV percentage."""

    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


_EV_DESCRIPTIONS: Final[dict[EVCategory, str]] = {
    EVCategory.NEGATIVE: "Negative expected value",
    EVCategory.NEUTRAL: "No clear edge",
    EVCategory.LOW: "Slight edge",
    EVCategory.MEDIUM: "Good value",
    EVCategory.HIGH: "Excellent value",
}

_UNKNOWN_DESCRIPTION: Final[str] = "Unknown value"


def calculate_ev(odds: object, fair_odds: object) -> Optional[float]:
    """EV percentage of ``odds`` measured against ``fair_odds``.

    ``(decimal / fair_decimal − 1) · 100``.  Taking +110 when the fair price
    is +100 gives +5.0%.
    """
    decimal_odds = american_to_decimal(odds)
    decimal_fair = american_to_decimal(fair_odds)
    if decimal_odds is None or decimal_fair is None:
        return None
    return finite_or_none((decimal_odds / decimal_fair - 1.0) * 100.0)


def calculate_ev_with_probability(odds: object, win_probability: object) -> Optional[float]:
    """EV percentage of ``odds`` given a known win probability (percent).

    ``EV = p · (d − 1) − (1 − p)`` with ``p = win_probability / 100``.

    Returns:
        EV in percent, or ``None`` for invalid odds or a probability
        outside ``[0, 100]``.
    """
    decimal_odds = american_to_decimal(odds)
    prob = coerce_number(win_probability)
    if decimal_odds is None or prob is None or not (0.0 <= prob <= 100.0):
        return None
    p = prob / 100.0
    return finite_or_none((p * (decimal_odds - 1.0) - (1.0 - p)) * 100.0)


def calculate_edge(odds: object, fair_odds: object) -> Optional[float]:
    """Probability-space edge: fair implied probability minus market's.

    Measured in percentage points.  Simpler than EV and additive across
    books, but ignores payout size.
    """
    prob = american_to_implied_probability(odds)
    fair_prob = american_to_implied_probability(fair_odds)
    if prob is None or fair_prob is None:
        return None
    return fair_prob - prob


def get_ev_category(ev: object) -> EVCategory:
    """Bucket an EV percentage for colour-coding.

    Missing values and an EV of exactly zero are ``neutral``.
    """
    value = coerce_number(ev)
    if not value:
        return EVCategory.NEUTRAL
    if value < 0.0:
        return EVCategory.NEGATIVE
    if value < LOW_EV_CEILING:
        return EVCategory.LOW
    if value < MEDIUM_EV_CEILING:
        return EVCategory.MEDIUM
    return EVCategory.HIGH


def get_ev_description(ev: object) -> str:
    """Human-readable phrase for an EV percentage.

    Every category has its own phrase, so an EV of exactly ``0`` reads
    "No clear edge" (the ``neutral`` bucket).  Only a missing or
    non-numeric EV gives "Unknown value".
    """
    if coerce_number(ev) is None:
        return _UNKNOWN_DESCRIPTION
    return _EV_DESCRIPTIONS[get_ev_category(ev)]
