"""
Multi-book market scanning for a single game.

Takes the list of sportsbook lines quoted for one game (as returned by the
college football data API's ``/lines`` endpoint) and runs the cross-book
analyses the betting views display:

  Line shopping:
      best available moneyline per side and the implied probabilities of
      those best prices.  A combined implied probability under 100% is a
      cross-book arbitrage.

  Arbitrage:
      widest home/away pairing across books (core.arbitrage).

  Value bets:
      each book's price compared with the cross-book consensus price for
      the same side (core.vig.calculate_fair_value_odds).  Spread and total
      juice defaults to -110 when a book posts the line without a price.

  Middles:
      pairs of books whose spread or total differ by at least ``min_gap``
      points, so a final score inside the gap wins both legs.

Every price goes through the core engine, so missing or malformed quotes
are skipped rather than raising.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

from gridiron_odds.config import MIDDLE_MIN_GAP, MIDDLE_STAKE, MIN_EV_PCT
from gridiron_odds.core.arbitrage import (
    ArbitrageOpportunity,
    find_best_arbitrage_opportunity,
    is_middle_opportunity,
)
from gridiron_odds.core.ev import calculate_ev, get_ev_category
from gridiron_odds.core.odds_math import (
    american_to_decimal,
    american_to_implied_probability,
    coerce_number,
    finite_or_none,
)
from gridiron_odds.core.vig import calculate_fair_value_odds

logger = logging.getLogger(__name__)

# Standard juice assumed when a book posts a spread/total without a price.
DEFAULT_JUICE = -110

SPREAD = "spread"
TOTAL = "total"
MONEYLINE = "moneyline"


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass
class BookLine:
    """One sportsbook's quotes for a game."""

    provider: str
    spread: Optional[float] = None          # Home spread (negative = home favoured)
    over_under: Optional[float] = None
    home_moneyline: Optional[float] = None
    away_moneyline: Optional[float] = None
    home_spread_odds: Optional[float] = None
    away_spread_odds: Optional[float] = None
    over_odds: Optional[float] = None
    under_odds: Optional[float] = None

    # snake_case field -> camelCase key used by the data API
    _PAYLOAD_KEYS = {
        "spread": "spread",
        "over_under": "overUnder",
        "home_moneyline": "homeMoneyline",
        "away_moneyline": "awayMoneyline",
        "home_spread_odds": "homeSpreadOdds",
        "away_spread_odds": "awaySpreadOdds",
        "over_odds": "overOdds",
        "under_odds": "underOdds",
    }

    @classmethod
    def from_payload(cls, payload: Mapping) -> "BookLine":
        """Build from an API line dict (camelCase or snake_case keys).

        Non-numeric values are dropped to ``None``.
        """
        values = {}
        for name, camel in cls._PAYLOAD_KEYS.items():
            raw = payload.get(name, payload.get(camel))
            values[name] = raw if coerce_number(raw) is not None else None
        return cls(provider=str(payload.get("provider") or "Unknown"), **values)


@dataclass
class MarketSummary:
    """Best moneyline per side and the implied probabilities of those prices."""

    best_home_odds: float
    best_away_odds: float
    home_implied: float
    away_implied: float
    total_implied: float

    def is_arbitrage(self) -> bool:
        """True when the best prices together imply less than 100%."""
        return self.total_implied < 100.0


@dataclass
class ValueBet:
    """A book's price that beats the cross-book consensus."""

    provider: str
    market: str             # moneyline / spread / total
    side: str               # home / away / over / under
    line: Optional[float]   # Spread or total the price applies to
    odds: float
    fair_odds: int
    ev: float
    category: str


@dataclass
class MiddleLeg:
    provider: str
    side: str
    line: float
    odds: float


@dataclass
class MiddleOpportunity:
    """Two books' lines with a window in which both legs win."""

    market: str
    gap: float
    leg1: MiddleLeg
    leg2: MiddleLeg
    low: float              # Window bounds: home margin (spread) or points (total)
    high: float
    estimated_probability: float
    max_loss: float
    max_profit: float
    roi: float


@dataclass
class MarketScan:
    """All cross-book analyses for one game."""

    summary: Optional[MarketSummary]
    arbitrage: Optional[ArbitrageOpportunity]
    value_bets: List[ValueBet] = field(default_factory=list)
    spread_middles: List[MiddleOpportunity] = field(default_factory=list)
    total_middles: List[MiddleOpportunity] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Parsing and line shopping
# ---------------------------------------------------------------------------

def parse_lines(payloads: Iterable) -> List[BookLine]:
    """Convert raw API line dicts to :class:`BookLine` objects."""
    lines = []
    for payload in payloads or []:
        if isinstance(payload, BookLine):
            lines.append(payload)
        elif isinstance(payload, Mapping):
            lines.append(BookLine.from_payload(payload))
        else:
            logger.warning("Skipping malformed line entry of type %s", type(payload).__name__)
    return lines


def best_price(odds: Iterable) -> Optional[float]:
    """Most bettor-favourable American price (highest payout) among quotes.

    Any underdog price beats any favourite price; among favourites the one
    closest to even wins.  Ties keep the first quote.
    """
    valid = [o for o in odds if american_to_decimal(o) is not None]
    if not valid:
        return None
    return max(valid, key=american_to_decimal)


def market_implied_probabilities(lines: List[BookLine]) -> Optional[MarketSummary]:
    """Implied probabilities of the best moneyline on each side."""
    best_home = best_price(line.home_moneyline for line in lines)
    best_away = best_price(line.away_moneyline for line in lines)
    if best_home is None or best_away is None:
        return None

    home_implied = american_to_implied_probability(best_home)
    away_implied = american_to_implied_probability(best_away)
    return MarketSummary(
        best_home_odds=best_home,
        best_away_odds=best_away,
        home_implied=home_implied,
        away_implied=away_implied,
        total_implied=home_implied + away_implied,
    )


def find_moneyline_arbitrage(lines: List[BookLine]) -> Optional[ArbitrageOpportunity]:
    """Widest cross-book moneyline arbitrage, if any."""
    quotes = [
        {
            "provider": line.provider,
            "home_odds": line.home_moneyline,
            "away_odds": line.away_moneyline,
        }
        for line in lines
    ]
    opportunity = find_best_arbitrage_opportunity(quotes)
    if opportunity is not None:
        logger.info(
            "Arbitrage found: %s home %s / %s away %s (margin %.2f%%)",
            opportunity.home_book, opportunity.home_odds,
            opportunity.away_book, opportunity.away_odds,
            opportunity.margin,
        )
    return opportunity


# ---------------------------------------------------------------------------
# Value bets
# ---------------------------------------------------------------------------

def _side_quotes(lines: List[BookLine], market: str, side: str) -> List[Tuple[BookLine, Optional[float], object]]:
    """(line, market line, price) for every book quoting ``market``/``side``."""
    quotes = []
    for line in lines:
        if market == MONEYLINE:
            price = line.home_moneyline if side == "home" else line.away_moneyline
            quotes.append((line, None, price))
        elif market == SPREAD:
            if line.spread is None:
                continue
            if side == "home":
                quotes.append((line, line.spread, line.home_spread_odds or DEFAULT_JUICE))
            else:
                quotes.append((line, -line.spread, line.away_spread_odds or DEFAULT_JUICE))
        else:
            if line.over_under is None:
                continue
            price = line.over_odds if side == "over" else line.under_odds
            quotes.append((line, line.over_under, price or DEFAULT_JUICE))
    return quotes


_MARKET_SIDES = (
    (MONEYLINE, "home"),
    (MONEYLINE, "away"),
    (SPREAD, "home"),
    (SPREAD, "away"),
    (TOTAL, "over"),
    (TOTAL, "under"),
)


def find_value_bets(lines: List[BookLine], min_ev: float = MIN_EV_PCT) -> List[ValueBet]:
    """Prices with positive EV against the cross-book consensus.

    Args:
        lines: All books' lines for one game.
        min_ev: Minimum EV in percent; only strictly positive EV is ever
            reported, whatever this threshold.

    Returns:
        :class:`ValueBet` list sorted by EV, best first.
    """
    bets: List[ValueBet] = []
    for market, side in _MARKET_SIDES:
        quotes = _side_quotes(lines, market, side)
        fair_odds = calculate_fair_value_odds([price for _, _, price in quotes])
        if fair_odds is None:
            continue

        for line, market_line, price in quotes:
            ev = calculate_ev(price, fair_odds)
            if ev is None or ev <= 0.0 or ev < min_ev:
                continue
            bets.append(ValueBet(
                provider=line.provider,
                market=market,
                side=side,
                line=market_line,
                odds=price,
                fair_odds=fair_odds,
                ev=ev,
                category=get_ev_category(ev).value,
            ))

    bets.sort(key=lambda b: b.ev, reverse=True)
    logger.debug("Value scan: %d bets with EV >= %.2f%%", len(bets), min_ev)
    return bets


# ---------------------------------------------------------------------------
# Middles
# ---------------------------------------------------------------------------

def middle_probability(gap: float, market: str) -> float:
    """Heuristic chance (percent) that the final score lands in the gap.

    Spreads are clamped to 5-25%, totals to 8-30%.
    """
    if market == SPREAD:
        return min(25.0, max(5.0, 20.0 - gap * 2.0))
    return min(30.0, max(8.0, 25.0 - gap * 1.5))


def middle_outcome(odds1: object, odds2: object, stake: float = MIDDLE_STAKE) -> Tuple[float, float, float]:
    """Worst case, best case and best-case ROI of a middle.

    ``stake`` is placed on each leg.  Outcomes considered: only leg 1 wins,
    only leg 2 wins, both win (the middle hits), both void.

    Returns:
        ``(max_loss, max_profit, roi)``; all zero when a price is invalid or
        the sizing overflows.
    """
    decimal1 = american_to_decimal(odds1)
    decimal2 = american_to_decimal(odds2)
    if decimal1 is None or decimal2 is None:
        return 0.0, 0.0, 0.0

    win1 = stake * decimal1 - stake
    win2 = stake * decimal2 - stake
    scenarios = (
        win1 - stake,   # only leg 1 wins
        win2 - stake,   # only leg 2 wins
        win1 + win2,    # middle hits
        0.0,            # both void
    )
    max_loss = min(scenarios)
    max_profit = max(scenarios)
    roi = finite_or_none(max_profit / (stake * 2) * 100.0)
    if roi is None or finite_or_none(max_loss) is None:
        return 0.0, 0.0, 0.0
    return max_loss, max_profit, roi


def _spread_middle(first: BookLine, second: BookLine) -> Optional[Tuple[MiddleLeg, MiddleLeg, float, float]]:
    # Home side at the book with the higher home spread, away at the other.
    home_book, away_book = (first, second) if first.spread > second.spread else (second, first)
    if not is_middle_opportunity(away_book.spread, home_book.spread):
        return None
    home_leg = MiddleLeg(
        provider=home_book.provider,
        side="home",
        line=home_book.spread,
        odds=home_book.home_spread_odds or DEFAULT_JUICE,
    )
    away_leg = MiddleLeg(
        provider=away_book.provider,
        side="away",
        line=-away_book.spread,
        odds=away_book.away_spread_odds or DEFAULT_JUICE,
    )
    legs = (home_leg, away_leg) if home_book is first else (away_leg, home_leg)
    # Home margins strictly inside (-home spread, -away-book spread) win both legs.
    return legs[0], legs[1], -home_book.spread, -away_book.spread


def _total_middle(first: BookLine, second: BookLine) -> Tuple[MiddleLeg, MiddleLeg, float, float]:
    def leg(line: BookLine, side: str) -> MiddleLeg:
        price = line.over_odds if side == "over" else line.under_odds
        return MiddleLeg(provider=line.provider, side=side, line=line.over_under,
                         odds=price or DEFAULT_JUICE)

    if first.over_under > second.over_under:
        return leg(first, "under"), leg(second, "over"), second.over_under, first.over_under
    return leg(first, "over"), leg(second, "under"), first.over_under, second.over_under


def find_middles(
    lines: List[BookLine],
    market: str = SPREAD,
    min_gap: float = MIDDLE_MIN_GAP,
    stake: float = MIDDLE_STAKE,
) -> List[MiddleOpportunity]:
    """Middle opportunities between every pair of books.

    Args:
        lines: All books' lines for one game.
        market: ``"spread"`` or ``"total"``.
        min_gap: Minimum difference in points between the two books' lines.
        stake: Stake per leg for the outcome sizing.

    Returns:
        :class:`MiddleOpportunity` list sorted by gap, widest first.

    Raises:
        ValueError: If ``market`` is not ``"spread"`` or ``"total"``.
    """
    if market == SPREAD:
        candidates = [line for line in lines if line.spread]
    elif market == TOTAL:
        candidates = [line for line in lines if line.over_under and line.over_under > 0]
    else:
        raise ValueError(f"market must be 'spread' or 'total', got {market!r}")

    middles: List[MiddleOpportunity] = []
    for first, second in itertools.combinations(candidates, 2):
        if market == SPREAD:
            gap = abs(first.spread - second.spread)
        else:
            gap = abs(first.over_under - second.over_under)
        if gap < min_gap:
            continue

        if market == SPREAD:
            found = _spread_middle(first, second)
            if found is None:
                continue
            leg1, leg2, low, high = found
        else:
            leg1, leg2, low, high = _total_middle(first, second)

        max_loss, max_profit, roi = middle_outcome(leg1.odds, leg2.odds, stake)
        middles.append(MiddleOpportunity(
            market=market,
            gap=gap,
            leg1=leg1,
            leg2=leg2,
            low=low,
            high=high,
            estimated_probability=middle_probability(gap, market),
            max_loss=max_loss,
            max_profit=max_profit,
            roi=roi,
        ))

    middles.sort(key=lambda m: m.gap, reverse=True)
    logger.debug("Middle scan (%s): %d opportunities with gap >= %.1f", market, len(middles), min_gap)
    return middles


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def scan_market(
    payloads: Iterable,
    min_ev: float = MIN_EV_PCT,
    min_gap: float = MIDDLE_MIN_GAP,
) -> MarketScan:
    """Run every cross-book analysis over one game's lines."""
    lines = parse_lines(payloads)
    logger.info("Scanning %d book lines", len(lines))

    return MarketScan(
        summary=market_implied_probabilities(lines),
        arbitrage=find_moneyline_arbitrage(lines),
        value_bets=find_value_bets(lines, min_ev=min_ev),
        spread_middles=find_middles(lines, SPREAD, min_gap=min_gap),
        total_middles=find_middles(lines, TOTAL, min_gap=min_gap),
    )
