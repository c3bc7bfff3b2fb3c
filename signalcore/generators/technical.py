"""Technical sub-generator: scores the indicator snapshot.

Score contributions:
- RSI below oversold: +2, above overbought: -2
- MACD bullish crossover: +1.5, bearish crossover: -1.5
- EMA above SMA (both enabled): +1, otherwise -1
- Price below lower Bollinger band: +1, above upper band: -1

BUY when score > 1, SELL when score < -1, HOLD otherwise.
Strength = min(|score| * 20, 100).

This module is pure business logic with no I/O dependencies.
"""

import logging

from signalcore.models import Action, PartialSignal, StrategyConfig, TechnicalIndicators

logger = logging.getLogger(__name__)

RSI_WEIGHT = 2.0
MACD_WEIGHT = 1.5
MOVING_AVERAGE_WEIGHT = 1.0
BOLLINGER_WEIGHT = 1.0

ACTION_THRESHOLD = 1.0
STRENGTH_PER_POINT = 20.0

# Used as the reference price when neither a quote nor an SMA is available
FALLBACK_PRICE = 100.0


def reference_price(indicators: TechnicalIndicators, current_price: float | None = None) -> float:
    """Price used for band comparison and stop/target levels.

    Without an explicit quote the SMA stands in for the current price.
    """
    if current_price is not None:
        return current_price
    return indicators.sma or FALLBACK_PRICE


def technical_score(
    indicators: TechnicalIndicators,
    strategy: StrategyConfig,
    current_price: float | None = None,
) -> tuple[float, list[str]]:
    """Accumulate the signed score and reasoning from enabled indicators."""
    score = 0.0
    reasons: list[str] = []
    price = reference_price(indicators, current_price)

    if strategy.rsi.enabled:
        if indicators.rsi < strategy.rsi.oversold:
            score += RSI_WEIGHT
            reasons.append(f"RSI oversold ({indicators.rsi:.1f})")
        elif indicators.rsi > strategy.rsi.overbought:
            score -= RSI_WEIGHT
            reasons.append(f"RSI overbought ({indicators.rsi:.1f})")

    if strategy.macd.enabled:
        if indicators.macd.is_bullish:
            score += MACD_WEIGHT
            reasons.append("MACD bullish crossover")
        elif indicators.macd.is_bearish:
            score -= MACD_WEIGHT
            reasons.append("MACD bearish crossover")

    averages = strategy.moving_averages
    if averages.sma.enabled and averages.ema.enabled:
        if indicators.ema > indicators.sma:
            score += MOVING_AVERAGE_WEIGHT
            reasons.append("Price above moving averages")
        else:
            score -= MOVING_AVERAGE_WEIGHT
            reasons.append("Price below moving averages")

    if strategy.bollinger.enabled:
        if price < indicators.bollinger.lower:
            score += BOLLINGER_WEIGHT
            reasons.append("Price near lower Bollinger Band")
        elif price > indicators.bollinger.upper:
            score -= BOLLINGER_WEIGHT
            reasons.append("Price near upper Bollinger Band")

    return score, reasons


def technical_signal(
    indicators: TechnicalIndicators,
    strategy: StrategyConfig,
    current_price: float | None = None,
) -> PartialSignal:
    """
    Turn the indicator snapshot into the technical opinion.

    Args:
        indicators: Snapshot from IndicatorCalculator
        strategy: Strategy whose toggles and thresholds apply
        current_price: Latest quote; the SMA is used when omitted

    Returns:
        PartialSignal carrying stop loss / take profit levels
    """
    score, reasons = technical_score(indicators, strategy, current_price)
    price = reference_price(indicators, current_price)

    stop_loss = (
        price * (1 - strategy.stop_loss.percentage / 100)
        if strategy.stop_loss.enabled
        else None
    )
    take_profit = (
        price * (1 + strategy.take_profit.percentage / 100)
        if strategy.take_profit.enabled
        else None
    )

    signal = PartialSignal(
        action=Action.from_score(score, ACTION_THRESHOLD),
        strength=min(abs(score) * STRENGTH_PER_POINT, 100.0),
        reasoning=tuple(reasons),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )
    logger.debug(
        "Technical %s: score=%+.1f action=%s", strategy.name, score, signal.action.value
    )
    return signal
