"""Technical indicators for signal generation.

Every function reduces a price series to the latest indicator value and
degrades to a neutral default on short history instead of raising.
All functions are pure: identical input always yields identical output.
"""

import math
from typing import Sequence

import numpy as np

from signalcore.models import (
    BollingerBands,
    MacdResult,
    StrategyConfig,
    TechnicalIndicators,
)

NEUTRAL_RSI = 50.0
TRADING_DAYS_PER_YEAR = 252
# Signal line approximation: a fixed fraction of the MACD line
MACD_SIGNAL_RATIO = 0.8


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def rsi(prices: Sequence[float], period: int = 14) -> float:
    """
    Calculate the Relative Strength Index.

    Averages gains and losses over the first `period` deltas of the
    series (not a rolling average over the whole history).

    Args:
        prices: Sequence of closing prices
        period: Number of deltas to average

    Returns:
        RSI in [0, 100]; 50 when fewer than period + 1 prices exist,
        100 when the window contains no losses
    """
    if len(prices) < period + 1:
        return NEUTRAL_RSI

    deltas = np.diff(_as_array(prices[: period + 1]))
    avg_gain = float(deltas[deltas > 0].sum()) / period
    avg_loss = float(-deltas[deltas < 0].sum()) / period

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def ema(prices: Sequence[float], period: int) -> float:
    """
    Calculate the Exponential Moving Average over the entire series.

    Seeded with the first price and smoothed forward through every point.

    Args:
        prices: Sequence of closing prices
        period: EMA period (sets the smoothing multiplier)

    Returns:
        Latest EMA value (0 for empty input)
    """
    if len(prices) == 0:
        return 0.0
    if len(prices) == 1:
        return float(prices[0])

    multiplier = 2.0 / (period + 1)
    value = float(prices[0])
    for price in prices[1:]:
        value = float(price) * multiplier + value * (1 - multiplier)
    return value


def sma(prices: Sequence[float], period: int) -> float:
    """
    Calculate the Simple Moving Average of the last `period` prices.

    Returns:
        Mean of the window; the last price when history is shorter than
        the period; 0 for empty input
    """
    if len(prices) == 0:
        return 0.0
    if len(prices) < period:
        return float(prices[-1])
    return float(np.mean(_as_array(prices[-period:])))


def macd(
    prices: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MacdResult:
    """
    Calculate MACD with a simplified signal line.

    The signal line is MACD_SIGNAL_RATIO times the MACD line rather than an
    EMA of the MACD series; signal_period is accepted for interface
    compatibility and does not affect the result.
    """
    line = ema(prices, fast_period) - ema(prices, slow_period)
    signal = line * MACD_SIGNAL_RATIO
    return MacdResult(macd=line, signal=signal, histogram=line - signal)


def bollinger_bands(
    prices: Sequence[float],
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerBands:
    """
    Calculate Bollinger Bands around the SMA.

    Uses the population variance of the last `period` prices. With fewer
    points than the period all three bands equal the SMA.
    """
    middle = sma(prices, period)
    if len(prices) < period:
        return BollingerBands(upper=middle, middle=middle, lower=middle)

    window = _as_array(prices[-period:])
    variance = float(np.mean((window - middle) ** 2))
    width = math.sqrt(variance) * std_dev
    return BollingerBands(upper=middle + width, middle=middle, lower=middle - width)


def volatility(prices: Sequence[float]) -> float:
    """
    Calculate annualized volatility of simple returns.

    Standard deviation (population, ddof=0) of bar-to-bar returns scaled
    by sqrt(252). Returns 0 with fewer than two prices.
    """
    if len(prices) < 2:
        return 0.0

    arr = _as_array(prices)
    with np.errstate(divide="ignore", invalid="ignore"):
        returns = np.diff(arr) / arr[:-1]
    returns = returns[np.isfinite(returns)]
    if returns.size == 0:
        return 0.0
    return float(np.std(returns)) * math.sqrt(TRADING_DAYS_PER_YEAR)


# =============================================================================
# IndicatorCalculator class
# =============================================================================

class IndicatorCalculator:
    """Calculator for the indicators a strategy has enabled."""

    def __init__(self, strategy: StrategyConfig):
        self.strategy = strategy

    def calculate(
        self,
        prices: Sequence[float],
        volumes: Sequence[float],
    ) -> TechnicalIndicators:
        """
        Calculate the indicator snapshot for the given history.

        Disabled indicators take neutral values so the snapshot is always
        complete. Volatility is always calculated.

        Args:
            prices: Closing prices, oldest first
            volumes: Volumes aligned with prices

        Returns:
            TechnicalIndicators for the latest bar
        """
        s = self.strategy
        averages = s.moving_averages

        rsi_value = rsi(prices, s.rsi.period) if s.rsi.enabled else NEUTRAL_RSI
        macd_value = (
            macd(prices, s.macd.fast_period, s.macd.slow_period, s.macd.signal_period)
            if s.macd.enabled
            else MacdResult()
        )
        bands = (
            bollinger_bands(prices, s.bollinger.period, s.bollinger.std_dev)
            if s.bollinger.enabled
            else BollingerBands()
        )
        sma_value = sma(prices, averages.sma.period) if averages.sma.enabled else 0.0
        ema_value = ema(prices, averages.ema.period) if averages.ema.enabled else 0.0

        return TechnicalIndicators(
            rsi=min(max(rsi_value, 0.0), 100.0),
            macd=macd_value,
            bollinger=bands,
            sma=sma_value,
            ema=ema_value,
            volume=float(volumes[-1]) if len(volumes) > 0 else 0.0,
            volatility=volatility(prices),
        )
