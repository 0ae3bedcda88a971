"""Display formatting for money and percentages (en-US conventions)."""

from __future__ import annotations

from gridiron_odds.core.odds_math import NOT_AVAILABLE, coerce_number


def format_money(amount: object) -> str:
    """US-dollar string with separators and cents.

    Examples::

        format_money(1234.5)  → "$1,234.50"
        format_money(-20)     → "-$20.00"
        format_money(0)       → "$0.00"
        format_money(None)    → "N/A"
    """
    value = coerce_number(amount)
    if value is None:
        return NOT_AVAILABLE
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(percentage: object) -> str:
    """Percentage string with one or two fraction digits.

    Examples::

        format_percentage(5)        → "5.0%"
        format_percentage(3.14159)  → "3.14%"
        format_percentage(1234.5)   → "1,234.5%"
    """
    value = coerce_number(percentage)
    if value is None:
        return NOT_AVAILABLE
    text = f"{value:,.2f}"
    if text.endswith("0"):
        text = text[:-1]
    return f"{text}%"
