"""Ensemble fusion of partial signals into one TradingSignal.

Slot weights are fixed by position: technical 0.6, ML 0.3, sentiment 0.1.
An absent slot simply contributes nothing to the total weight; its share
is not redistributed to the slots that are present.
"""

from __future__ import annotations

import logging
import math

from signalcore.models import Action, PartialSignal, StrategyConfig, TradingSignal

logger = logging.getLogger(__name__)

TECHNICAL_WEIGHT = 0.6
ML_WEIGHT = 0.3
SENTIMENT_WEIGHT = 0.1

ACTION_THRESHOLD = 0.2
CONFIDENCE_BONUS = 20.0
MAX_CONFIDENCE = 95.0
MIN_POSITION = 0.01

HOLD_CONFIDENCE = 50.0


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def hold_signal(reason: str) -> TradingSignal:
    """Well-formed HOLD carrying a single explanatory reason."""
    return TradingSignal(
        action=Action.HOLD,
        strength=0.0,
        confidence=HOLD_CONFIDENCE,
        reasoning=(reason,),
        position_size=0.0,
    )


def position_size(max_position: float, strength: float, confidence: float) -> float:
    """
    Kelly-inspired position size as a fraction of capital.

    Scales the strategy's maximum allocation by strength and confidence,
    then bounds the result to [MIN_POSITION, max_position].

    Args:
        max_position: Largest fraction of capital the strategy may commit
        strength: Signal strength in [0, 100]
        confidence: Signal confidence in [0, 100]
    """
    adjusted = max_position * (strength / 100) * (confidence / 100)
    return max(MIN_POSITION, min(adjusted, max_position))


def combine_signals(
    technical: PartialSignal | None,
    ml: PartialSignal | None,
    sentiment: PartialSignal | None,
    strategy: StrategyConfig,
) -> TradingSignal:
    """
    Fuse sub-generator opinions into the final signal.

    Args:
        technical: Technical opinion (the engine always supplies one)
        ml: ML opinion, None when the strategy disables ML
        sentiment: Sentiment opinion, None when the strategy disables it
        strategy: Strategy supplying the risk allocation

    Returns:
        TradingSignal; stop loss / take profit come from the technical slot only
    """
    slots = (
        (technical, TECHNICAL_WEIGHT),
        (ml, ML_WEIGHT),
        (sentiment, SENTIMENT_WEIGHT),
    )

    weighted_score = 0.0
    total_weight = 0.0
    reasons: list[str] = []

    for signal, weight in slots:
        if signal is None:
            continue
        weighted_score += signal.signed_score * weight
        total_weight += weight
        reasons.extend(signal.reasoning)

    if total_weight == 0:
        return hold_signal("No valid signals generated")

    final_score = weighted_score / total_weight
    action = Action.from_score(final_score, ACTION_THRESHOLD)
    strength = abs(final_score) * 100
    confidence = min(strength + CONFIDENCE_BONUS, MAX_CONFIDENCE)
    size = position_size(strategy.max_position, strength, confidence)

    logger.debug(
        "Combined %s: score=%+.3f weight=%.1f action=%s size=%.4f",
        strategy.name, final_score, total_weight, action.value, size,
    )

    return TradingSignal(
        action=action,
        strength=_round_half_up(strength),
        confidence=_round_half_up(confidence),
        reasoning=tuple(reasons),
        stop_loss=technical.stop_loss if technical else None,
        take_profit=technical.take_profit if technical else None,
        position_size=size,
    )
