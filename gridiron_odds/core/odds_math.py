"""Fundamental odds conversions — the single source of truth.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement a conversion locally in services
or API routes.

The four price representations handled are:

1. **American** — signed integer price (``+150``, ``-110``).
2. **Decimal** — total payout multiple per unit staked, stake included.
3. **Fractional** — net profit ratio rendered as ``"a/b"``.
4. **Implied probability** — percentage in ``(0, 100)``, vig included.

Design decisions
----------------
* Invalid input never raises.  ``None``, ``0``, ``NaN``, booleans and
  non-numeric objects are all "no price" and propagate as ``None`` (or
  ``"N/A"`` for display helpers).
* Rounding to the nearest American integer is half-up (``floor(x + 0.5)``)
  rather than Python's banker's rounding, so ``-110.5`` becomes ``-110``
  exactly as the sportsbook feeds display it.
* The 2.0 decimal threshold is the favourite/underdog boundary: prices
  ≥ 2.0 are quoted positive, prices below it negative.

Run tests with::

    pytest tests/test_odds_math.py -v
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from numbers import Real
from typing import Final, Optional

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

#: Common fractional quotes checked before the GCD approximation, in lookup
#: order.  Keys are net profit per unit (``decimal − 1``).
_COMMON_FRACTIONS: Final[tuple[tuple[float, str], ...]] = (
    (0.5, "1/2"),
    (0.33, "1/3"),
    (0.25, "1/4"),
    (0.2, "1/5"),
    (0.66, "2/3"),
    (0.75, "3/4"),
    (1.0, "1/1"),
    (1.5, "3/2"),
    (2.0, "2/1"),
    (3.0, "3/1"),
    (4.0, "4/1"),
    (5.0, "5/1"),
)

#: Maximum distance between ``decimal − 1`` and a common fraction for the
#: lookup table to win over the GCD approximation.
_FRACTION_MATCH_TOL: Final[float] = 0.01

#: Denominator used by the GCD rational approximation before reduction.
_FRACTION_PRECISION: Final[int] = 1000

#: Decimal price at which American quotes switch from negative to positive.
EVEN_MONEY_DECIMAL: Final[float] = 2.0

#: Placeholder returned by display helpers for missing or invalid values.
NOT_AVAILABLE: Final[str] = "N/A"


# ---------------------------------------------------------------------------
# Input coercion
# ---------------------------------------------------------------------------


def coerce_number(value: object) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` if it is not one.

    Booleans are rejected even though ``bool`` subclasses ``int``: a
    ``True`` odds value is always an upstream parsing bug.  Zero is *not*
    rejected here; callers that treat zero as missing (odds) check it
    themselves, callers where zero is meaningful (probabilities, spreads)
    do not.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def coerce_sequence(values: object) -> Optional[list]:
    """Materialise an iterable of quotes, or ``None`` for anything else.

    Strings and bytes are iterable but never a list of prices.
    """
    if values is None or isinstance(values, (str, bytes)):
        return None
    if not isinstance(values, Iterable):
        return None
    return list(values)


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """Pass a computed result through only if it is a finite float.

    Arithmetic on odds near the float limits can overflow to ``inf``; such
    results are reported as ``None`` like any other undefined calculation.
    """
    if value is None or not math.isfinite(value):
        return None
    return value


def _round_half_up(value: float) -> Optional[int]:
    if not math.isfinite(value):
        return None
    return math.floor(value + 0.5)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Odds conversion
# ---------------------------------------------------------------------------


def american_to_decimal(american: object) -> Optional[float]:
    """Convert American odds to decimal (European) format.

    Decimal odds represent the total payout per unit staked, **including**
    the return of the stake itself.  Examples::

        american_to_decimal(-110) → 1.9091   (risk 110 to win 100)
        american_to_decimal(+150) → 2.5000   (risk 100 to win 150)
        american_to_decimal(0)    → None

    Args:
        american: American odds.  Negative = favourite (risk more than you
            win), positive = underdog (win more than you risk).

    Returns:
        Decimal odds > 1.0, or ``None`` for zero/missing/non-numeric input
        and for magnitudes whose price rounds to 1.0 or overflows.
    """
    value = coerce_number(american)
    if not value:
        return None
    if value > 0:
        decimal_odds = value / 100.0 + 1.0
    else:
        # Negative: risk |american| to win 100
        decimal_odds = 100.0 / abs(value) + 1.0
    # Extreme magnitudes collapse to 1.0 (no payout) or overflow
    if not math.isfinite(decimal_odds) or decimal_odds <= 1.0:
        return None
    return decimal_odds


def decimal_to_american(decimal_odds: object) -> Optional[int]:
    """Convert decimal odds to the nearest American integer.

    Near-inverse of :func:`american_to_decimal`.  Values ≥ 2.0 come back
    positive (underdog), values below 2.0 negative (favourite).  Even money
    is always reported as ``+100``.

    Returns:
        American odds integer, or ``None`` when ``decimal_odds`` is missing
        or ≤ 1.0 (no profit possible), or when the American price would
        overflow a float.
    """
    value = coerce_number(decimal_odds)
    if not value or value <= 1.0:
        return None
    if value >= EVEN_MONEY_DECIMAL:
        return _round_half_up((value - 1.0) * 100.0)
    return _round_half_up(-100.0 / (value - 1.0))


def decimal_to_fractional(decimal_odds: object) -> Optional[str]:
    """Render decimal odds as a UK-style fractional quote.

    A small table of common quotes is consulted first (within 0.01 of the
    net profit); otherwise the profit is approximated over a denominator of
    1000 and reduced by the greatest common divisor.  Examples::

        decimal_to_fractional(2.5)   → "3/2"
        decimal_to_fractional(1.333) → "1/3"
        decimal_to_fractional(1.8)   → "4/5"
        decimal_to_fractional(1.909) → "909/1000"

    Returns:
        ``"numerator/denominator"`` string, or ``None`` for invalid input
        and for prices whose profit rounds to 0/1000 (``1.0004``).
    """
    value = coerce_number(decimal_odds)
    if not value or value <= 1.0:
        return None

    profit = value - 1.0
    for threshold, fraction in _COMMON_FRACTIONS:
        if abs(profit - threshold) < _FRACTION_MATCH_TOL:
            return fraction

    numerator = _round_half_up(profit * _FRACTION_PRECISION)
    if not numerator:
        return None
    divisor = math.gcd(numerator, _FRACTION_PRECISION)
    return f"{numerator // divisor}/{_FRACTION_PRECISION // divisor}"


def decimal_to_implied_probability(decimal_odds: object) -> Optional[float]:
    """Implied probability (percent, vig-inclusive) of a decimal price.

    Strictly decreasing in ``decimal_odds``::

        decimal_to_implied_probability(2.0)   → 50.0
        decimal_to_implied_probability(1.909) → 52.38
    """
    value = coerce_number(decimal_odds)
    if not value or value <= 1.0:
        return None
    return (1.0 / value) * 100.0


def implied_probability_to_decimal(probability: object) -> Optional[float]:
    """Decimal price implied by a percentage probability in ``(0, 100)``.

    The bounds are exclusive: a 0% outcome has no finite price and a 100%
    outcome pays nothing.
    """
    value = coerce_number(probability)
    if value is None or value <= 0.0 or value >= 100.0:
        return None
    return finite_or_none(100.0 / value)


def american_to_implied_probability(american: object) -> Optional[float]:
    """Raw implied probability (percent) from American odds.

    This is the bookmaker's *stated* probability and includes the vig.  For
    no-vig prices use :func:`gridiron_odds.core.vig.remove_vig`.

    Examples::

        american_to_implied_probability(-110) → 52.38
        american_to_implied_probability(+150) → 40.0
    """
    return decimal_to_implied_probability(american_to_decimal(american))


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def format_american_odds(odds: object) -> str:
    """Signed display string for American odds (``"+150"``, ``"-110"``).

    Zero, missing values and magnitudes with no valid decimal price render
    as ``"N/A"``.
    """
    value = coerce_number(odds)
    if not value or american_to_decimal(value) is None:
        return NOT_AVAILABLE
    text = _format_number(value)
    return f"+{text}" if value > 0 else text
