"""Data models for the signal engine."""

from signalcore.models.config import (
    CANONICAL_STRATEGIES,
    AverageConfig,
    BollingerConfig,
    MachineLearningConfig,
    MacdConfig,
    MarketFilters,
    MovingAveragesConfig,
    RsiConfig,
    SentimentConfig,
    StopLossConfig,
    StrategyConfig,
    TakeProfitConfig,
)
from signalcore.models.market import (
    BollingerBands,
    Level,
    MacdResult,
    MarketConditions,
    PricePoint,
    TechnicalIndicators,
    Trend,
)
from signalcore.models.signal import Action, PartialSignal, TradingSignal

__all__ = [
    "CANONICAL_STRATEGIES",
    "AverageConfig",
    "BollingerConfig",
    "MachineLearningConfig",
    "MacdConfig",
    "MarketFilters",
    "MovingAveragesConfig",
    "RsiConfig",
    "SentimentConfig",
    "StopLossConfig",
    "StrategyConfig",
    "TakeProfitConfig",
    "BollingerBands",
    "Level",
    "MacdResult",
    "MarketConditions",
    "PricePoint",
    "TechnicalIndicators",
    "Trend",
    "Action",
    "PartialSignal",
    "TradingSignal",
]
