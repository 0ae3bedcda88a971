"""Monetary staking helpers built on the odds conversions.

Thin arithmetic wrappers; they follow the module-wide contract of returning
``None`` for invalid input rather than raising.
"""

from __future__ import annotations

from typing import Optional

from gridiron_odds.core.ev import calculate_ev
from gridiron_odds.core.odds_math import american_to_decimal, coerce_number, finite_or_none


def calculate_expected_return(odds: object, stake: object) -> Optional[float]:
    """Total return (stake included) if the bet wins."""
    decimal_odds = american_to_decimal(odds)
    amount = coerce_number(stake)
    if decimal_odds is None or amount is None or amount < 0.0:
        return None
    return finite_or_none(amount * decimal_odds)


def calculate_profit(odds: object, stake: object) -> Optional[float]:
    """Net profit if the bet wins (``return − stake``)."""
    expected = calculate_expected_return(odds, stake)
    if expected is None:
        return None
    return expected - float(stake)


def calculate_expected_value(odds: object, fair_odds: object, stake: object) -> Optional[float]:
    """EV in money terms: ``stake · EV% / 100``."""
    ev = calculate_ev(odds, fair_odds)
    amount = coerce_number(stake)
    if ev is None or amount is None:
        return None
    return finite_or_none(amount * (ev / 100.0))


def calculate_roi(profit: object, stake: object) -> Optional[float]:
    """Return on investment in percent; ``None`` for a non-positive stake."""
    amount = coerce_number(stake)
    gain = coerce_number(profit)
    if amount is None or amount <= 0.0 or gain is None:
        return None
    return finite_or_none(gain / amount * 100.0)
