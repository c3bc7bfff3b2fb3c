"""Sentiment sub-generator and its score source.

The generator blends news, social and analyst scores with the strategy's
weights. Scores come from a SentimentSource; RandomSentimentSource is the
stand-in used until a real feed is wired in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from signalcore.models import Action, PartialSignal, PricePoint, SentimentConfig, StrategyConfig

logger = logging.getLogger(__name__)

ACTION_THRESHOLD = 0.2


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, float(value)))


@dataclass(frozen=True)
class SentimentScores:
    """Per-channel sentiment, each in [-1, 1]."""

    news: float
    social: float
    analyst: float

    def composite(self, weights: SentimentConfig) -> float:
        """Weighted sum using the strategy's channel weights."""
        return (
            _clamp(self.news) * weights.news_weight
            + _clamp(self.social) * weights.social_weight
            + _clamp(self.analyst) * weights.analyst_weight
        )


@runtime_checkable
class SentimentSource(Protocol):
    """Provider of per-channel sentiment scores for a symbol."""

    async def fetch_scores(self, symbol: str) -> SentimentScores:
        ...


class RandomSentimentSource:
    """Uniform [-1, 1) scores per channel; reproducible through the injected generator."""

    def __init__(self, rng: np.random.Generator | None = None):
        self._rng = rng if rng is not None else np.random.default_rng()

    async def fetch_scores(self, symbol: str) -> SentimentScores:
        news, social, analyst = self._rng.uniform(-1.0, 1.0, size=3)
        return SentimentScores(news=float(news), social=float(social), analyst=float(analyst))


class SentimentSignalGenerator:
    """Sentiment opinion: BUY above +0.2 composite, SELL below -0.2."""

    def __init__(self, source: SentimentSource | None = None):
        self.source = source if source is not None else RandomSentimentSource()

    @property
    def name(self) -> str:
        return "sentiment"

    async def score_partial_signal(
        self,
        symbol: str,
        history: Sequence[PricePoint],
        config: StrategyConfig,
    ) -> PartialSignal:
        scores = await self.source.fetch_scores(symbol)
        composite = scores.composite(config.sentiment)
        tone = "positive" if composite > 0 else "negative"

        logger.debug("Sentiment %s: composite=%+.3f", symbol, composite)
        return PartialSignal(
            action=Action.from_score(composite, ACTION_THRESHOLD),
            strength=min(abs(composite) * 100, 100.0),
            reasoning=(f"Sentiment analysis: {tone} ({composite:.2f})",),
        )
