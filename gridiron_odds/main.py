"""
FastAPI application for the Gridiron Odds engine.

Exposes the pure odds/EV/arbitrage/Kelly/CLV/parlay calculators and the
multi-book market scan over HTTP for the game-page front end.  Invalid
prices come back as ``null`` fields with HTTP 200, exactly as the library
returns ``None``, so the UI renders "N/A" instead of handling errors.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gridiron_odds.config import (
    CORS_ORIGINS,
    DEFAULT_ARB_STAKE,
    KELLY_FRACTION,
    LOG_LEVEL,
    MIDDLE_MIN_GAP,
    MIN_EV_PCT,
)
from gridiron_odds.core.arbitrage import (
    calculate_arbitrage_margin,
    calculate_arbitrage_stakes,
    find_best_arbitrage_opportunity,
    is_arbitrage_opportunity,
)
from gridiron_odds.core.clv import calculate_clv
from gridiron_odds.core.ev import (
    calculate_edge,
    calculate_ev,
    calculate_ev_with_probability,
    get_ev_category,
    get_ev_description,
)
from gridiron_odds.core.formatting import format_percentage
from gridiron_odds.core.kelly import (
    calculate_fractional_kelly,
    calculate_kelly,
    calculate_kelly_from_odds,
)
from gridiron_odds.core.odds_math import (
    american_to_decimal,
    american_to_implied_probability,
    decimal_to_fractional,
    finite_or_none,
    format_american_odds,
)
from gridiron_odds.core.parlay import calculate_parlay_decimal, calculate_parlay_odds
from gridiron_odds.core.staking import calculate_expected_value
from gridiron_odds.core.vig import calculate_fair_value_odds, calculate_vig, remove_vig
from gridiron_odds.schemas import (
    ArbitrageRequest,
    ArbitrageResponse,
    BestArbitrageRequest,
    BestArbitrageResponse,
    CLVRequest,
    CLVResponse,
    EVRequest,
    EVResponse,
    FairValueRequest,
    FairValueResponse,
    KellyRequest,
    KellyResponse,
    MarketScanRequest,
    MarketScanResponse,
    OddsConversionResponse,
    ParlayRequest,
    ParlayResponse,
    TwoWayMarketRequest,
    VigResponse,
)
from gridiron_odds.services.market_scan import scan_market

# Logging setup
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

APP_NAME = "Gridiron Odds Engine"
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(
        "🚀 Starting %s (kelly_fraction=%.2f, min_ev=%.2f%%, middle_min_gap=%.1f)",
        APP_NAME, KELLY_FRACTION, MIN_EV_PCT, MIDDLE_MIN_GAP,
    )
    yield
    logger.info("👋 Shutting down %s", APP_NAME)


app = FastAPI(
    title=APP_NAME,
    description="Odds conversion, vig, arbitrage, EV, Kelly, CLV and parlay calculators",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Service info"""
    return {
        "app": APP_NAME,
        "version": APP_VERSION,
        "status": "operational",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health")
async def health_check():
    """Health check endpoint (the engine is stateless; nothing to probe)"""
    return {"status": "healthy"}


# ============================================================================
# ODDS CONVERSION & VIG
# ============================================================================

@app.get("/api/odds/convert", response_model=OddsConversionResponse)
async def convert_odds(american: Optional[float] = Query(None, description="American odds")):
    """All representations of one American price."""
    decimal_odds = american_to_decimal(american)
    return OddsConversionResponse(
        american=american,
        formatted=format_american_odds(american),
        decimal=decimal_odds,
        fractional=decimal_to_fractional(decimal_odds),
        implied_probability=american_to_implied_probability(american),
    )


@app.post("/api/vig", response_model=VigResponse)
async def vig(payload: TwoWayMarketRequest):
    """Overround and no-vig prices for a two-way market."""
    fair = remove_vig(payload.odds1, payload.odds2)
    return VigResponse(
        vig=calculate_vig(payload.odds1, payload.odds2),
        fair_odds1=fair.fair_odds1 if fair else None,
        fair_odds2=fair.fair_odds2 if fair else None,
    )


@app.post("/api/fair-value", response_model=FairValueResponse)
async def fair_value(payload: FairValueRequest):
    """Cross-book consensus price for one side."""
    fair_odds = calculate_fair_value_odds(payload.odds)
    return FairValueResponse(fair_odds=fair_odds, formatted=format_american_odds(fair_odds))


# ============================================================================
# ARBITRAGE
# ============================================================================

@app.post("/api/arbitrage", response_model=ArbitrageResponse)
async def arbitrage(payload: ArbitrageRequest):
    """Arbitrage check and stake split for two prices."""
    total_stake = payload.total_stake if payload.total_stake is not None else DEFAULT_ARB_STAKE
    response = ArbitrageResponse(
        is_arbitrage=is_arbitrage_opportunity(payload.odds1, payload.odds2),
        margin=calculate_arbitrage_margin(payload.odds1, payload.odds2),
        total_stake=total_stake,
    )
    stakes = calculate_arbitrage_stakes(payload.odds1, payload.odds2, total_stake)
    if stakes is not None:
        response.stake1 = stakes.stake1
        response.stake2 = stakes.stake2
        response.profit = stakes.profit
        response.profit_margin = stakes.profit_margin
        logger.info(
            "Arbitrage %s/%s: margin %.2f%%, profit %.2f on %.2f",
            payload.odds1, payload.odds2, stakes.profit_margin, stakes.profit, total_stake,
        )
    return response


@app.post("/api/arbitrage/best", response_model=BestArbitrageResponse)
async def best_arbitrage(payload: BestArbitrageRequest):
    """Widest cross-book arbitrage among the supplied quotes."""
    opportunity = find_best_arbitrage_opportunity(
        [line.model_dump() for line in payload.lines]
    )
    return BestArbitrageResponse(
        opportunity=asdict(opportunity) if opportunity is not None else None
    )


# ============================================================================
# EV / KELLY / CLV / PARLAY
# ============================================================================

@app.post("/api/ev", response_model=EVResponse)
async def expected_value(payload: EVRequest):
    """EV and edge of a price against a fair price and/or win probability."""
    ev = calculate_ev(payload.odds, payload.fair_odds)
    ev_with_probability = calculate_ev_with_probability(payload.odds, payload.win_probability)
    headline = ev if ev is not None else ev_with_probability
    return EVResponse(
        ev=ev,
        ev_with_probability=ev_with_probability,
        edge=calculate_edge(payload.odds, payload.fair_odds),
        expected_value=calculate_expected_value(payload.odds, payload.fair_odds, payload.stake),
        category=get_ev_category(headline).value,
        description=get_ev_description(headline),
        formatted=format_percentage(headline),
    )


@app.post("/api/kelly", response_model=KellyResponse)
async def kelly(payload: KellyRequest):
    """Full and fractional Kelly stake, percent of bankroll."""
    fraction = payload.fraction if payload.fraction is not None else KELLY_FRACTION
    if payload.win_probability is not None:
        win_probability = payload.win_probability
        full = calculate_kelly(payload.odds, win_probability)
    else:
        win_probability = american_to_implied_probability(payload.fair_odds)
        full = calculate_kelly_from_odds(payload.odds, payload.fair_odds)
    return KellyResponse(
        kelly=full,
        fractional_kelly=calculate_fractional_kelly(payload.odds, win_probability, fraction),
        fraction=fraction,
    )


@app.post("/api/clv", response_model=CLVResponse)
async def closing_line_value(payload: CLVRequest):
    """Closing line value of a placed price."""
    clv = calculate_clv(payload.placed_odds, payload.closing_odds)
    return CLVResponse(clv=clv, formatted=format_percentage(clv))


@app.post("/api/parlay", response_model=ParlayResponse)
async def parlay(payload: ParlayRequest):
    """Combined odds and payout of a parlay."""
    decimal_odds = calculate_parlay_decimal(payload.legs)
    american = calculate_parlay_odds(payload.legs)
    response = ParlayResponse(
        american_odds=american,
        decimal_odds=decimal_odds,
        formatted=format_american_odds(american),
    )
    if decimal_odds is not None and payload.stake is not None:
        response.payout = finite_or_none(payload.stake * decimal_odds)
        if response.payout is not None:
            response.profit = response.payout - payload.stake
    return response


# ============================================================================
# MARKET SCAN
# ============================================================================

@app.post("/api/markets/scan", response_model=MarketScanResponse)
async def market_scan(payload: MarketScanRequest):
    """Line shopping, arbitrage, value bets and middles for one game."""
    scan = scan_market(
        payload.lines,
        min_ev=payload.min_ev if payload.min_ev is not None else MIN_EV_PCT,
        min_gap=payload.min_gap if payload.min_gap is not None else MIDDLE_MIN_GAP,
    )
    return asdict(scan)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Catch-all exception handler"""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": type(exc).__name__}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
