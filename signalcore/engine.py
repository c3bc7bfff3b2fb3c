"""Trading signal engine: the single entry point of the core.

Pipeline per call:
1. Strategy lookup (unknown or disabled -> HOLD)
2. Indicator snapshot for the strategy's enabled indicators
3. Market regime classification and filter gate (rejected -> HOLD)
4. Technical, ML and sentiment opinions (ML / sentiment only if enabled)
5. Weighted fusion into a TradingSignal

The engine keeps no per-call state, so one instance can be shared by any
number of concurrent callers. generate_trading_signal never raises: every
degenerate path resolves to a HOLD with a human-readable reason.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

import numpy as np
from pydantic import ValidationError

from signalcore.combiner import combine_signals, hold_signal
from signalcore.generators import (
    PartialSignalGenerator,
    RandomSentimentSource,
    SentimentSignalGenerator,
    SimulatedModelGenerator,
    technical_signal,
)
from signalcore.indicators import IndicatorCalculator
from signalcore.market import classify_market, passes_market_filters
from signalcore.models import Action, PartialSignal, PricePoint, StrategyConfig, TradingSignal
from signalcore.settings import EngineSettings, get_settings
from signalcore.strategy import StrategyCatalog, default_catalog, load_strategy_catalog

logger = logging.getLogger(__name__)

HistoryRow = Union[PricePoint, Mapping[str, Any]]
SignalRequest = Union[
    tuple[str, str, Sequence[HistoryRow]],
    tuple[str, str, Sequence[HistoryRow], Optional[float]],
    tuple[str, str, Sequence[HistoryRow], Optional[float], float],
]


def to_price_points(history: Iterable[HistoryRow]) -> list[PricePoint]:
    """Validate raw {price, volume} rows into PricePoints.

    Raises:
        pydantic.ValidationError: If a row lacks a numeric price.
    """
    return [
        row if isinstance(row, PricePoint) else PricePoint.model_validate(row)
        for row in history
    ]


class TradingSignalEngine:
    """Multi-strategy signal engine fusing technical, ML and sentiment opinions."""

    def __init__(
        self,
        catalog: StrategyCatalog | None = None,
        model: PartialSignalGenerator | None = None,
        sentiment: PartialSignalGenerator | None = None,
        settings: EngineSettings | None = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog if catalog is not None else default_catalog()

        # Independent streams for the two stand-ins, reproducible when seeded
        model_seed, sentiment_seed = np.random.SeedSequence(self.settings.random_seed).spawn(2)
        self.model = model if model is not None else SimulatedModelGenerator(
            np.random.default_rng(model_seed)
        )
        self.sentiment = sentiment if sentiment is not None else SentimentSignalGenerator(
            RandomSentimentSource(np.random.default_rng(sentiment_seed))
        )

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> "TradingSignalEngine":
        """Build an engine whose catalog honours settings.strategies_file."""
        settings = settings or get_settings()
        catalog = (
            load_strategy_catalog(settings.strategies_file)
            if settings.strategies_file
            else default_catalog()
        )
        return cls(catalog=catalog, settings=settings)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate_trading_signal(
        self,
        symbol: str,
        strategy_name: str,
        history: Sequence[HistoryRow],
        current_price: float | None = None,
        sentiment: float = 0.0,
    ) -> TradingSignal:
        """
        Generate the fused trading signal for one symbol and strategy.

        Args:
            symbol: Instrument identifier
            strategy_name: Name of a catalog strategy
            history: Chronological bars as PricePoints or {price, volume} rows
            current_price: Latest quote; the SMA stands in when omitted
            sentiment: Market sentiment in [-1, 1] from an external feed

        Returns:
            TradingSignal (HOLD with a reason on every degenerate path)
        """
        try:
            return await self._generate(symbol, strategy_name, history, current_price, sentiment)
        except Exception:
            logger.exception("Signal generation failed for %s (%s)", symbol, strategy_name)
            return hold_signal("Signal generation failed")

    async def generate_many(self, requests: Iterable[SignalRequest]) -> list[TradingSignal]:
        """
        Generate signals for many requests concurrently.

        Each request is (symbol, strategy_name, history), optionally followed
        by current_price and sentiment as in generate_trading_signal.

        Returns:
            Signals in request order
        """
        return list(
            await asyncio.gather(
                *(self.generate_trading_signal(*request) for request in requests)
            )
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _generate(
        self,
        symbol: str,
        strategy_name: str,
        history: Sequence[HistoryRow],
        current_price: float | None,
        sentiment: float,
    ) -> TradingSignal:
        strategy = self.catalog.get(strategy_name)
        if strategy is None or not strategy.enabled:
            logger.debug("Strategy %r unknown or disabled", strategy_name)
            return hold_signal("Strategy not enabled")

        try:
            bars = to_price_points(history)
        except ValidationError as e:
            logger.warning("Invalid market data for %s: %s", symbol, e.errors()[0]["msg"])
            return hold_signal("Invalid market data")

        if not bars:
            return hold_signal("Insufficient market data")

        prices = [b.price for b in bars]
        volumes = [b.volume for b in bars]

        indicators = IndicatorCalculator(strategy).calculate(prices, volumes)
        conditions = classify_market(prices, volumes, sentiment)

        if not passes_market_filters(conditions, strategy):
            logger.info(
                "%s %s: filtered (trend=%s volatility=%s volume=%s)",
                symbol, strategy.name,
                conditions.trend.value, conditions.volatility.value, conditions.volume.value,
            )
            return hold_signal("Market conditions not suitable")

        technical = technical_signal(indicators, strategy, current_price)

        ml_task = (
            self._bounded(self.model, symbol, bars, strategy)
            if strategy.machine_learning.enabled
            else _absent()
        )
        sentiment_task = (
            self._bounded(self.sentiment, symbol, bars, strategy)
            if strategy.sentiment.enabled
            else _absent()
        )
        ml, sentiment_signal = await asyncio.gather(ml_task, sentiment_task)

        signal = combine_signals(technical, ml, sentiment_signal, strategy)
        log = logger.info if signal.is_actionable else logger.debug
        log(
            "%s %s: %s strength=%.0f confidence=%.0f size=%.4f",
            symbol, strategy.name, signal.action.value,
            signal.strength, signal.confidence, signal.position_size,
        )
        return signal

    async def _bounded(
        self,
        generator: PartialSignalGenerator,
        symbol: str,
        bars: list[PricePoint],
        strategy: StrategyConfig,
    ) -> PartialSignal:
        """Run a sub-generator under the configured timeout; degrade to HOLD on failure."""
        try:
            return await asyncio.wait_for(
                generator.score_partial_signal(symbol, bars, strategy),
                timeout=self.settings.generator_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "%s generator timed out after %.1fs for %s",
                generator.name, self.settings.generator_timeout, symbol,
            )
            return _fallback(generator.name, "timed out")
        except Exception as e:
            logger.error("%s generator failed for %s: %s", generator.name, symbol, e)
            return _fallback(generator.name, "unavailable")


async def _absent() -> None:
    return None


def _fallback(name: str, why: str) -> PartialSignal:
    return PartialSignal(
        action=Action.HOLD,
        strength=0.0,
        reasoning=(f"{name} signal {why}",),
    )
