"""Simulated machine-learning sub-generator.

Stand-in for a real prediction model behind the PartialSignalGenerator
protocol. Draws a model confidence in [60, 90); below the strategy's
threshold it abstains with HOLD, otherwise it predicts BUY or SELL with a
strength in [60, 90). A real model replaces this class without touching
the combiner.
"""

import logging
from typing import Sequence

import numpy as np

from signalcore.models import Action, PartialSignal, PricePoint, StrategyConfig

logger = logging.getLogger(__name__)

CONFIDENCE_RANGE = (60.0, 90.0)
STRENGTH_RANGE = (60.0, 90.0)
ABSTAIN_STRENGTH = 50.0


class SimulatedModelGenerator:
    """Random ML-proxy opinion, reproducible through the injected generator."""

    def __init__(self, rng: np.random.Generator | None = None):
        self._rng = rng if rng is not None else np.random.default_rng()

    @property
    def name(self) -> str:
        return "ml"

    async def score_partial_signal(
        self,
        symbol: str,
        history: Sequence[PricePoint],
        config: StrategyConfig,
    ) -> PartialSignal:
        confidence = float(self._rng.uniform(*CONFIDENCE_RANGE))
        threshold = config.machine_learning.model_confidence

        if confidence < threshold:
            logger.debug(
                "ML %s: confidence %.1f below threshold %.1f", symbol, confidence, threshold
            )
            return PartialSignal(
                action=Action.HOLD,
                strength=ABSTAIN_STRENGTH,
                confidence=confidence,
                reasoning=(f"ML confidence ({confidence:.1f}%) below threshold",),
            )

        action = Action.BUY if self._rng.random() > 0.5 else Action.SELL
        strength = float(self._rng.uniform(*STRENGTH_RANGE))
        return PartialSignal(
            action=action,
            strength=strength,
            confidence=confidence,
            reasoning=(f"ML model prediction with {confidence:.1f}% confidence",),
        )
