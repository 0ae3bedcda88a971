"""
Environment configuration for the Gridiron Odds service layer and API.

Values are read once at import time from the process environment, after
loading a local ``.env`` file if one exists.  The pure ``core`` package never
reads configuration; defaults flow in through function arguments.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Share of full Kelly recommended by the API when the caller gives none.
KELLY_FRACTION: float = float(os.getenv("KELLY_FRACTION", "0.5"))

# Bankroll split across both legs when an arbitrage request has no stake.
DEFAULT_ARB_STAKE: float = float(os.getenv("DEFAULT_ARB_STAKE", "100"))

# Minimum EV (percent) for a book's price to be reported as a value bet.
MIN_EV_PCT: float = float(os.getenv("MIN_EV_PCT", "0.0"))

# Minimum line gap (points) between two books for a middle to be reported.
MIDDLE_MIN_GAP: float = float(os.getenv("MIDDLE_MIN_GAP", "3.0"))

# Stake per leg used to size middle outcomes.
MIDDLE_STAKE: float = float(os.getenv("MIDDLE_STAKE", "100"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS: list = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
