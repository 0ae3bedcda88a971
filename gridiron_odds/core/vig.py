"""Bookmaker margin (vig) and fair-price estimation.

Two distinct notions of a "fair" price live here and must not be merged:

* :func:`remove_vig` — *within-market* normalisation.  Both sides of one
  book's two-way market are scaled so their implied probabilities sum to
  exactly 100%.  Proportional normalisation is used: each side keeps its
  share of the overround.
* :func:`calculate_fair_value_odds` — *cross-book consensus*.  Several
  books' prices for the **same** side are averaged in probability space.
  The result still contains the books' average vig; it is a consensus
  price, not a no-vig price.

All functions are pure and return ``None`` on invalid odds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gridiron_odds.core.odds_math import (
    american_to_implied_probability,
    coerce_sequence,
    decimal_to_american,
    implied_probability_to_decimal,
)


@dataclass(frozen=True)
class FairOdds:
    """No-vig American prices for both sides of a two-way market."""

    fair_odds1: int
    fair_odds2: int


def calculate_vig(odds1: object, odds2: object) -> Optional[float]:
    """Overround of a two-way market in percentage points.

    Examples::

        calculate_vig(-110, -110) → 4.76   (the classic "110 vig")
        calculate_vig(+100, -100) → 0.0

    Returns:
        ``prob1 + prob2 − 100``, or ``None`` if either price is invalid.
        Negative values mean the pair is an arbitrage.
    """
    prob1 = american_to_implied_probability(odds1)
    prob2 = american_to_implied_probability(odds2)
    if prob1 is None or prob2 is None:
        return None
    return prob1 + prob2 - 100.0


def remove_vig(odds1: object, odds2: object) -> Optional[FairOdds]:
    """Strip the vig from a two-way market.

    Each side's implied probability is divided by the market total, so the
    fair probabilities sum to 100 and keep their original ratio::

        fair_prob_i = prob_i / (prob1 + prob2) · 100

    The fair probabilities are then converted back to American odds
    (rounded to the nearest integer).

    Examples::

        remove_vig(-110, -110) → FairOdds(+100, +100)
        remove_vig(-150, +130) → FairOdds(-138, +138)
    """
    prob1 = american_to_implied_probability(odds1)
    prob2 = american_to_implied_probability(odds2)
    if prob1 is None or prob2 is None:
        return None

    total = prob1 + prob2
    if total <= 0.0:
        return None

    fair1 = decimal_to_american(implied_probability_to_decimal(prob1 / total * 100.0))
    fair2 = decimal_to_american(implied_probability_to_decimal(prob2 / total * 100.0))
    if fair1 is None or fair2 is None:
        return None
    return FairOdds(fair_odds1=fair1, fair_odds2=fair2)


def calculate_fair_value_odds(market_odds: object) -> Optional[int]:
    """Consensus American price for one side quoted by several books.

    Missing and invalid quotes are dropped; the remaining implied
    probabilities are averaged (arithmetic mean) and converted back to an
    American price.  Averaging in probability space avoids the sign
    discontinuity of averaging American numbers directly (``-105`` and
    ``+105`` are neighbours, not opposites).

    Returns:
        American odds, or ``None`` when no valid quote remains.
    """
    quotes = coerce_sequence(market_odds)
    if not quotes:
        return None

    probabilities = [
        prob
        for prob in (american_to_implied_probability(odds) for odds in quotes)
        if prob is not None
    ]
    if not probabilities:
        return None

    mean_prob = sum(probabilities) / len(probabilities)
    return decimal_to_american(implied_probability_to_decimal(mean_prob))
