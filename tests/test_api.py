"""
Tests for the FastAPI endpoints in main.py

Run with: pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from gridiron_odds.main import app

LINES = [
    {"provider": "DraftKings", "spread": -3.0, "overUnder": 52.5,
     "homeMoneyline": -150, "awayMoneyline": 130},
    {"provider": "FanDuel", "spread": -7.0, "overUnder": 48.5,
     "homeMoneyline": -140, "awayMoneyline": 120},
    {"provider": "Bovada", "spread": -3.5, "overUnder": 51.0,
     "homeMoneyline": -160, "awayMoneyline": 135},
]

ARB_LINES = [
    {"provider": "A", "homeMoneyline": 110, "awayMoneyline": -130},
    {"provider": "B", "homeMoneyline": -130, "awayMoneyline": 115},
]

client = TestClient(app)


class TestServiceEndpoints:

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["app"] == "Gridiron Odds Engine"
        assert data["status"] == "operational"
        assert "timestamp" in data

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestConversionEndpoints:

    def test_convert(self):
        response = client.get("/api/odds/convert", params={"american": 150})
        assert response.status_code == 200
        data = response.json()
        assert data["formatted"] == "+150"
        assert data["decimal"] == pytest.approx(2.5)
        assert data["fractional"] == "3/2"
        assert data["implied_probability"] == pytest.approx(40.0)

    def test_convert_invalid_is_null_not_error(self):
        response = client.get("/api/odds/convert", params={"american": 0})
        assert response.status_code == 200
        data = response.json()
        assert data["formatted"] == "N/A"
        assert data["decimal"] is None
        assert data["fractional"] is None
        assert data["implied_probability"] is None

    def test_vig(self):
        response = client.post("/api/vig", json={"odds1": -150, "odds2": 130})
        data = response.json()
        assert data["vig"] == pytest.approx(3.48, abs=0.01)
        assert data["fair_odds1"] == -138
        assert data["fair_odds2"] == 138

    def test_vig_missing_price(self):
        data = client.post("/api/vig", json={"odds1": -150}).json()
        assert data == {"vig": None, "fair_odds1": None, "fair_odds2": None}

    def test_fair_value(self):
        data = client.post("/api/fair-value", json={"odds": [-110, None, -110]}).json()
        assert data == {"fair_odds": -110, "formatted": "-110"}

    def test_malformed_body_rejected(self):
        response = client.post("/api/fair-value", json={"odds": "lots"})
        assert response.status_code == 422


class TestArbitrageEndpoints:

    def test_arbitrage_with_default_stake(self):
        data = client.post("/api/arbitrage", json={"odds1": 120, "odds2": 120}).json()
        assert data["is_arbitrage"] is True
        assert data["margin"] == pytest.approx(9.09, abs=0.01)
        assert data["total_stake"] == 100
        assert data["stake1"] == pytest.approx(50.0)
        assert data["profit"] == pytest.approx(10.0)

    def test_no_arbitrage(self):
        data = client.post("/api/arbitrage", json={"odds1": -110, "odds2": -110, "total_stake": 500}).json()
        assert data["is_arbitrage"] is False
        assert data["margin"] is None
        assert data["stake1"] is None
        assert data["total_stake"] == 500

    def test_best_arbitrage(self):
        payload = {"lines": [
            {"provider": "A", "home_odds": 150, "away_odds": -180},
            {"provider": "B", "home_odds": -170, "away_odds": 160},
        ]}
        data = client.post("/api/arbitrage/best", json=payload).json()
        assert data["opportunity"]["home_book"] == "A"
        assert data["opportunity"]["away_book"] == "B"
        assert data["opportunity"]["margin"] == pytest.approx(21.54, abs=0.01)

    def test_best_arbitrage_none(self):
        payload = {"lines": [{"provider": "A", "home_odds": -110, "away_odds": -110}]}
        assert client.post("/api/arbitrage/best", json=payload).json() == {"opportunity": None}


class TestBettingEndpoints:

    def test_ev(self):
        data = client.post("/api/ev", json={"odds": 110, "fair_odds": 100, "stake": 100}).json()
        assert data["ev"] == pytest.approx(5.0)
        assert data["edge"] == pytest.approx(2.381, abs=0.001)
        assert data["expected_value"] == pytest.approx(5.0)
        assert data["category"] == "medium"
        assert data["description"] == "Good value"
        assert data["formatted"] == "5.0%"

    def test_ev_from_probability_only(self):
        data = client.post("/api/ev", json={"odds": 100, "win_probability": 55}).json()
        assert data["ev"] is None
        assert data["ev_with_probability"] == pytest.approx(10.0)
        assert data["category"] == "high"

    def test_ev_nothing_valid(self):
        data = client.post("/api/ev", json={"odds": 0}).json()
        assert data["category"] == "neutral"
        assert data["description"] == "Unknown value"
        assert data["formatted"] == "N/A"

    def test_kelly_with_probability(self):
        data = client.post("/api/kelly", json={"odds": 100, "win_probability": 55}).json()
        assert data["kelly"] == pytest.approx(10.0)
        assert data["fraction"] == 0.5
        assert data["fractional_kelly"] == pytest.approx(5.0)

    def test_kelly_from_fair_odds(self):
        data = client.post("/api/kelly", json={"odds": 110, "fair_odds": 100, "fraction": 0.25}).json()
        assert data["kelly"] == pytest.approx(4.545, abs=0.001)
        assert data["fractional_kelly"] == pytest.approx(1.136, abs=0.001)

    def test_kelly_fraction_out_of_range(self):
        response = client.post("/api/kelly", json={"odds": 100, "win_probability": 55, "fraction": 2})
        assert response.status_code == 422

    def test_clv(self):
        data = client.post("/api/clv", json={"placed_odds": 150, "closing_odds": 130}).json()
        assert data["clv"] == pytest.approx(13.33, abs=0.01)
        assert data["formatted"] == "13.33%"

    def test_parlay(self):
        data = client.post("/api/parlay", json={"legs": [100, 100], "stake": 10}).json()
        assert data["american_odds"] == 300
        assert data["decimal_odds"] == pytest.approx(4.0)
        assert data["formatted"] == "+300"
        assert data["payout"] == pytest.approx(40.0)
        assert data["profit"] == pytest.approx(30.0)

    def test_parlay_invalid_leg(self):
        data = client.post("/api/parlay", json={"legs": [100, None], "stake": 10}).json()
        assert data["american_odds"] is None
        assert data["payout"] is None

    def test_parlay_too_many_legs(self):
        response = client.post("/api/parlay", json={"legs": [100] * 26})
        assert response.status_code == 422


class TestMarketScanEndpoint:

    def test_scan(self):
        response = client.post("/api/markets/scan", json={"lines": LINES})
        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["best_home_odds"] == -140
        assert data["arbitrage"] is None
        assert data["value_bets"][0]["provider"] == "Bovada"
        assert len(data["spread_middles"]) == 2
        assert data["total_middles"][0]["leg1"]["side"] == "under"

    def test_scan_finds_arbitrage(self):
        data = client.post("/api/markets/scan", json={"lines": ARB_LINES}).json()
        assert data["arbitrage"]["home_book"] == "A"
        assert data["summary"]["total_implied"] < 100

    def test_scan_min_gap(self):
        data = client.post("/api/markets/scan", json={"lines": LINES, "min_gap": 10}).json()
        assert data["spread_middles"] == []
        assert data["total_middles"] == []


class TestExtremeOddsEndpoints:
    """Finite prices at the float limits come back as nulls with HTTP 200."""

    @pytest.mark.parametrize("odds", [-1e18, 1e-20])
    def test_kelly(self, odds):
        response = client.post("/api/kelly", json={"odds": odds, "win_probability": 50})
        assert response.status_code == 200
        data = response.json()
        assert data["kelly"] is None
        assert data["fractional_kelly"] is None

    def test_clv(self):
        response = client.post("/api/clv", json={"placed_odds": -1e18, "closing_odds": -1e18})
        assert response.status_code == 200
        assert response.json() == {"clv": None, "formatted": "N/A"}

    def test_convert(self):
        response = client.get("/api/odds/convert", params={"american": -1e18})
        assert response.status_code == 200
        data = response.json()
        assert data["formatted"] == "N/A"
        assert data["decimal"] is None

    def test_parlay_overflow(self):
        response = client.post("/api/parlay", json={"legs": [1e200, 1e200], "stake": 10})
        assert response.status_code == 200
        data = response.json()
        assert data["american_odds"] is None
        assert data["decimal_odds"] is None
        assert data["payout"] is None

    def test_parlay_payout_overflow(self):
        response = client.post("/api/parlay", json={"legs": [3e155, 3e155], "stake": 1e300})
        assert response.status_code == 200
        data = response.json()
        assert data["american_odds"] is None
        assert data["formatted"] == "N/A"
        assert data["payout"] is None
        assert data["profit"] is None
