"""Walk-forward replay of price histories through the signal engine.

Only depends on signalcore/ for business logic; keeps no storage.

Usage:
    python -m replay prices.csv --strategy "Momentum Growth"
"""

from replay.runner import ReplayConfig, ReplayRunner
from replay.stats import ReplayResult, TradeRecord

__all__ = ["ReplayConfig", "ReplayRunner", "ReplayResult", "TradeRecord"]
