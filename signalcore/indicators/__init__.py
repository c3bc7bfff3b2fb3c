"""Technical indicators (pure math, no I/O)."""

from signalcore.indicators.indicators import (
    rsi,
    ema,
    sma,
    macd,
    bollinger_bands,
    volatility,
    IndicatorCalculator,
)

__all__ = [
    "rsi",
    "ema",
    "sma",
    "macd",
    "bollinger_bands",
    "volatility",
    "IndicatorCalculator",
]
