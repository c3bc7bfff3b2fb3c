"""Market regime classification and the strategy filter gate."""

import logging
from typing import Sequence

from signalcore.indicators import volatility
from signalcore.models import Level, MarketConditions, StrategyConfig, Trend

logger = logging.getLogger(__name__)

TREND_WINDOW = 10
SIDEWAYS_BAND = 0.02  # moves under 2% of the window's first price are sideways

LOW_VOLATILITY = 0.15
HIGH_VOLATILITY = 0.25

LOW_VOLUME_RATIO = 0.8
HIGH_VOLUME_RATIO = 1.2


def classify_trend(prices: Sequence[float]) -> Trend:
    """Classify the direction of the last TREND_WINDOW prices."""
    window = prices[-TREND_WINDOW:]
    if len(window) == 0:
        return Trend.SIDEWAYS

    first, last = float(window[0]), float(window[-1])
    if abs(last - first) < abs(first) * SIDEWAYS_BAND:
        return Trend.SIDEWAYS
    return Trend.BULLISH if last > first else Trend.BEARISH


def classify_volatility(prices: Sequence[float]) -> Level:
    """Bucket annualized volatility into low / medium / high."""
    value = volatility(prices)
    if value < LOW_VOLATILITY:
        return Level.LOW
    if value < HIGH_VOLATILITY:
        return Level.MEDIUM
    return Level.HIGH


def classify_volume(volumes: Sequence[float]) -> Level:
    """Compare the latest volume with the window average."""
    if len(volumes) == 0:
        return Level.MEDIUM

    average = sum(volumes) / len(volumes)
    if average <= 0:
        return Level.MEDIUM

    recent = volumes[-1]
    if recent < average * LOW_VOLUME_RATIO:
        return Level.LOW
    if recent < average * HIGH_VOLUME_RATIO:
        return Level.MEDIUM
    return Level.HIGH


def classify_market(
    prices: Sequence[float],
    volumes: Sequence[float],
    sentiment: float = 0.0,
) -> MarketConditions:
    """
    Derive trend, volatility and volume regimes from raw history.

    Args:
        prices: Closing prices, oldest first
        volumes: Volumes aligned with prices
        sentiment: Market sentiment from an external feed, clamped to [-1, 1]

    Returns:
        MarketConditions for the latest bar
    """
    return MarketConditions(
        trend=classify_trend(prices),
        volatility=classify_volatility(prices),
        volume=classify_volume(volumes),
        sentiment=max(-1.0, min(1.0, sentiment)),
    )


def passes_market_filters(conditions: MarketConditions, strategy: StrategyConfig) -> bool:
    """Return False if any enabled filter of the strategy vetoes the regime."""
    filters = strategy.market_filters

    if filters.volatility_filter and conditions.volatility is Level.HIGH:
        logger.debug("%s: rejected by volatility filter", strategy.name)
        return False

    if filters.volume_filter and conditions.volume is Level.LOW:
        logger.debug("%s: rejected by volume filter", strategy.name)
        return False

    if filters.trend_filter and conditions.trend is Trend.SIDEWAYS:
        logger.debug("%s: rejected by trend filter", strategy.name)
        return False

    return True
