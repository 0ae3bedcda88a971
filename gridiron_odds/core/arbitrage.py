"""Arbitrage and middle detection for two-way markets.

An arbitrage exists when the best available prices on the two sides of a
market, possibly at different books, have decimal implied probabilities
summing to strictly less than one::

    1/d1 + 1/d2 < 1

Staking each side in proportion to its implied probability then returns the
same payout whichever side wins, and that payout exceeds the total stake.

All functions are pure.  Invalid odds yield ``None`` (``False`` for the
boolean predicates).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from gridiron_odds.core.odds_math import (
    american_to_decimal,
    coerce_number,
    coerce_sequence,
    finite_or_none,
)


@dataclass(frozen=True)
class ArbitrageStakes:
    """Stake split and guaranteed return for a two-price arbitrage."""

    stake1: float
    stake2: float
    profit: float
    profit_margin: float


@dataclass(frozen=True)
class ArbitrageOpportunity:
    """Best cross-book pairing found by :func:`find_best_arbitrage_opportunity`."""

    home_book: Optional[str]
    home_odds: float
    away_book: Optional[str]
    away_odds: float
    margin: float


def _implied_probabilities(odds1: object, odds2: object) -> Optional[tuple[float, float]]:
    decimal1 = american_to_decimal(odds1)
    decimal2 = american_to_decimal(odds2)
    if decimal1 is None or decimal2 is None:
        return None
    return 1.0 / decimal1, 1.0 / decimal2


def is_arbitrage_opportunity(odds1: object, odds2: object) -> bool:
    """True iff the two prices together guarantee a profit."""
    implied = _implied_probabilities(odds1, odds2)
    if implied is None:
        return False
    return sum(implied) < 1.0


def calculate_arbitrage_margin(odds1: object, odds2: object) -> Optional[float]:
    """Guaranteed return on total stake, in percent.

    Examples::

        calculate_arbitrage_margin(+120, +120) → 9.09
        calculate_arbitrage_margin(-110, -110) → None   (no arbitrage)

    Returns:
        ``(1 − Σ 1/d) · 100``, or ``None`` when no arbitrage exists.
    """
    implied = _implied_probabilities(odds1, odds2)
    if implied is None:
        return None
    total = sum(implied)
    if total >= 1.0:
        return None
    return (1.0 - total) * 100.0


def calculate_arbitrage_stakes(
    odds1: object,
    odds2: object,
    total_stake: object,
) -> Optional[ArbitrageStakes]:
    """Split ``total_stake`` across both legs so the payout is equal.

    Each leg receives its share of the total implied probability::

        stake_i = (1/d_i) / Σ(1/d) · total_stake

    so ``stake_i · d_i = total_stake / Σ(1/d)`` on either outcome.

    Args:
        odds1: American price for side one.
        odds2: American price for side two.
        total_stake: Amount to deploy across both books (> 0).

    Returns:
        :class:`ArbitrageStakes`, or ``None`` when no arbitrage exists or
        the stake is not a positive number.

    Examples::

        calculate_arbitrage_stakes(+120, +120, 100)
            → ArbitrageStakes(stake1=50.0, stake2=50.0, profit=10.0,
                              profit_margin=9.09)
    """
    stake = coerce_number(total_stake)
    if stake is None or stake <= 0.0:
        return None

    implied = _implied_probabilities(odds1, odds2)
    if implied is None:
        return None
    prob1, prob2 = implied
    total = prob1 + prob2
    if total >= 1.0:
        return None

    profit = finite_or_none(stake / total - stake)
    if profit is None:
        return None

    return ArbitrageStakes(
        stake1=prob1 / total * stake,
        stake2=prob2 / total * stake,
        profit=profit,
        profit_margin=(1.0 - total) * 100.0,
    )


def _line_field(line: object, key: str, alias: str) -> object:
    if isinstance(line, Mapping):
        return line.get(key, line.get(alias))
    return getattr(line, key, None)


def find_best_arbitrage_opportunity(lines: object) -> Optional[ArbitrageOpportunity]:
    """Scan every ordered pair of book quotes for the widest arbitrage.

    Book *i*'s home price is paired with book *j*'s away price for all
    ``i != j``, an O(n²) scan over a handful of books.  On an exact
    margin tie the first pair found wins.

    Precondition: every entry quotes the *same* two-sided market; home and
    away labels are taken at face value.

    Args:
        lines: Iterable of mappings (or objects) with ``provider``,
            ``home_odds`` and ``away_odds``.  The front end's camelCase
            ``homeOdds`` / ``awayOdds`` keys are accepted too.

    Returns:
        :class:`ArbitrageOpportunity` with the highest positive margin, or
        ``None`` when no pairing is an arbitrage.
    """
    quotes = coerce_sequence(lines)
    if not quotes:
        return None

    best: Optional[ArbitrageOpportunity] = None
    for i, home_line in enumerate(quotes):
        home_odds = _line_field(home_line, "home_odds", "homeOdds")
        for j, away_line in enumerate(quotes):
            if i == j:
                continue
            away_odds = _line_field(away_line, "away_odds", "awayOdds")
            margin = calculate_arbitrage_margin(home_odds, away_odds)
            if margin is None or margin <= 0.0:
                continue
            if best is None or margin > best.margin:
                best = ArbitrageOpportunity(
                    home_book=_line_field(home_line, "provider", "provider"),
                    home_odds=home_odds,
                    away_book=_line_field(away_line, "provider", "provider"),
                    away_odds=away_odds,
                    margin=margin,
                )
    return best


def is_middle_opportunity(spread1: object, spread2: object) -> bool:
    """Flag a point-spread middle, where both bets can win.

    Detection only; no profit sizing.  Non-numeric spreads are never a
    middle.
    """
    first = coerce_number(spread1)
    second = coerce_number(spread2)
    if first is None or second is None:
        return False
    return first < second
