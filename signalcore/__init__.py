"""Core signal engine: indicators, strategy catalog, sub-generators and fusion.

This package contains pure business logic with no I/O dependencies
(no database, HTTP or broker access). Every call to the engine is
stateless, so one engine instance can serve many symbols concurrently.
"""

from signalcore.engine import TradingSignalEngine
from signalcore.models import (
    Action,
    MarketConditions,
    PartialSignal,
    PricePoint,
    StrategyConfig,
    TechnicalIndicators,
    TradingSignal,
)
from signalcore.strategy import StrategyCatalog, default_catalog, load_strategy_catalog

__all__ = [
    "TradingSignalEngine",
    "Action",
    "MarketConditions",
    "PartialSignal",
    "PricePoint",
    "StrategyConfig",
    "TechnicalIndicators",
    "TradingSignal",
    "StrategyCatalog",
    "default_catalog",
    "load_strategy_catalog",
]
