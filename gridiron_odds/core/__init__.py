"""Core odds mathematics for the Gridiron Odds engine.

This package contains pure, framework-independent building blocks:

- ``odds_math``  — American / decimal / fractional / probability conversion
- ``vig``        — overround, no-vig fair odds, cross-book consensus price
- ``arbitrage``  — arbitrage detection, stake split, multi-book scan, middles
- ``ev``         — expected value, edge and EV display buckets
- ``kelly``      — full and fractional Kelly sizing
- ``clv``        — closing line value
- ``parlay``     — multi-leg odds composition
- ``staking``    — return / profit / ROI helpers
- ``formatting`` — money and percentage display strings

Nothing in this package imports from ``gridiron_odds.services`` or the web
layer.  No module keeps state, logs, or raises on bad odds: invalid input
yields ``None`` (``"N/A"`` for display helpers).
"""
