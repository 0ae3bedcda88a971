"""
Pydantic request/response schemas for the Gridiron Odds API.

Odds fields are ``Optional[float]`` on purpose: the engine's contract is
that missing or invalid prices produce ``null`` results, not HTTP errors.
Only structurally malformed bodies (wrong JSON types) are rejected with 422.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

class OddsConversionResponse(BaseModel):
    american: Optional[float]
    formatted: str
    decimal: Optional[float]
    fractional: Optional[str]
    implied_probability: Optional[float] = Field(None, description="Percent, vig included")


# ---------------------------------------------------------------------------
# Vig / fair value
# ---------------------------------------------------------------------------

class TwoWayMarketRequest(BaseModel):
    """Both sides of one book's two-way market, American odds."""

    odds1: Optional[float] = None
    odds2: Optional[float] = None

    model_config = {
        "json_schema_extra": {"example": {"odds1": -110, "odds2": -110}}
    }


class VigResponse(BaseModel):
    vig: Optional[float]
    fair_odds1: Optional[int]
    fair_odds2: Optional[int]


class FairValueRequest(BaseModel):
    """Several books' prices for the same side of a market."""

    odds: List[Optional[float]] = Field(..., description="American odds, nulls allowed")


class FairValueResponse(BaseModel):
    fair_odds: Optional[int]
    formatted: str


# ---------------------------------------------------------------------------
# Arbitrage
# ---------------------------------------------------------------------------

class ArbitrageRequest(TwoWayMarketRequest):
    total_stake: Optional[float] = Field(
        None, description="Amount split across both legs (defaults to DEFAULT_ARB_STAKE)"
    )


class ArbitrageResponse(BaseModel):
    is_arbitrage: bool
    margin: Optional[float]
    total_stake: float
    stake1: Optional[float] = None
    stake2: Optional[float] = None
    profit: Optional[float] = None
    profit_margin: Optional[float] = None


class LineQuote(BaseModel):
    """One book's home/away price for the same two-sided market."""

    provider: str
    home_odds: Optional[float] = None
    away_odds: Optional[float] = None


class BestArbitrageRequest(BaseModel):
    lines: List[LineQuote]


class ArbitrageOpportunityOut(BaseModel):
    home_book: Optional[str]
    home_odds: float
    away_book: Optional[str]
    away_odds: float
    margin: float


class BestArbitrageResponse(BaseModel):
    opportunity: Optional[ArbitrageOpportunityOut]


# ---------------------------------------------------------------------------
# EV / Kelly / CLV / parlay
# ---------------------------------------------------------------------------

class EVRequest(BaseModel):
    """Price to evaluate against a fair price and/or a win probability."""

    odds: Optional[float] = None
    fair_odds: Optional[float] = None
    win_probability: Optional[float] = Field(None, description="Percent, 0-100")
    stake: Optional[float] = Field(None, description="Optional stake for money EV")


class EVResponse(BaseModel):
    ev: Optional[float]
    ev_with_probability: Optional[float]
    edge: Optional[float]
    expected_value: Optional[float]
    category: str
    description: str
    formatted: str


class KellyRequest(BaseModel):
    odds: Optional[float] = None
    win_probability: Optional[float] = Field(None, description="Percent, 0-100")
    fair_odds: Optional[float] = Field(
        None, description="Used for the win probability when win_probability is absent"
    )
    fraction: Optional[float] = Field(None, ge=0.0, le=1.0)


class KellyResponse(BaseModel):
    kelly: Optional[float] = Field(None, description="Full Kelly, percent of bankroll")
    fractional_kelly: Optional[float]
    fraction: float


class CLVRequest(BaseModel):
    placed_odds: Optional[float] = None
    closing_odds: Optional[float] = None


class CLVResponse(BaseModel):
    clv: Optional[float]
    formatted: str


class ParlayRequest(BaseModel):
    legs: List[Optional[float]] = Field(..., description="American odds per leg")
    stake: Optional[float] = Field(None, gt=0)

    @field_validator("legs")
    @classmethod
    def validate_leg_count(cls, v: List[Optional[float]]) -> List[Optional[float]]:
        if len(v) > 25:
            raise ValueError("a parlay may have at most 25 legs")
        return v


class ParlayResponse(BaseModel):
    american_odds: Optional[int]
    decimal_odds: Optional[float]
    formatted: str
    payout: Optional[float] = None
    profit: Optional[float] = None


# ---------------------------------------------------------------------------
# Market scan
# ---------------------------------------------------------------------------

class MarketScanRequest(BaseModel):
    """
    One game's sportsbook lines, as returned by the data API.

    Each line is a dict with ``provider`` and any of ``spread``,
    ``overUnder``, ``homeMoneyline``, ``awayMoneyline``, ``homeSpreadOdds``,
    ``awaySpreadOdds``, ``overOdds``, ``underOdds`` (snake_case also works).
    """

    lines: List[Dict[str, Any]]
    min_ev: Optional[float] = None
    min_gap: Optional[float] = Field(None, ge=0.0)


class MarketSummaryOut(BaseModel):
    best_home_odds: float
    best_away_odds: float
    home_implied: float
    away_implied: float
    total_implied: float


class ValueBetOut(BaseModel):
    provider: str
    market: str
    side: str
    line: Optional[float]
    odds: float
    fair_odds: int
    ev: float
    category: str


class MiddleLegOut(BaseModel):
    provider: str
    side: str
    line: float
    odds: float


class MiddleOut(BaseModel):
    market: str
    gap: float
    leg1: MiddleLegOut
    leg2: MiddleLegOut
    low: float
    high: float
    estimated_probability: float
    max_loss: float
    max_profit: float
    roi: float


class MarketScanResponse(BaseModel):
    summary: Optional[MarketSummaryOut]
    arbitrage: Optional[ArbitrageOpportunityOut]
    value_bets: List[ValueBetOut]
    spread_middles: List[MiddleOut]
    total_middles: List[MiddleOut]
