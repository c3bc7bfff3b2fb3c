"""ReplayRunner — walk-forward replay of a price history through the engine.

For every bar after the warmup the engine sees only the history up to and
including that bar, with the bar's price as the current quote. A long-only
book acts on the signals:
- flat + BUY: commit position_size x equity at the bar price
- long: exit at the bar price on stop loss, take profit or a SELL signal
Open positions are marked to market every bar and closed on the last bar.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from signalcore import TradingSignalEngine
from signalcore.engine import to_price_points
from signalcore.models import Action, PricePoint, TradingSignal

from replay.config import get_replay_settings
from replay.stats import ReplayResult, TradeRecord, calculate_statistics

logger = logging.getLogger(__name__)


@dataclass
class ReplayConfig:
    """Configuration for a replay run."""

    symbol: str
    strategy_name: str
    warmup_bars: int = 30
    initial_capital: float = 10_000.0
    periods_per_year: int = 252

    @classmethod
    def from_settings(cls, symbol: str, strategy_name: str) -> "ReplayConfig":
        settings = get_replay_settings()
        return cls(
            symbol=symbol,
            strategy_name=strategy_name,
            warmup_bars=settings.warmup_bars,
            initial_capital=settings.initial_capital,
            periods_per_year=settings.periods_per_year,
        )


@dataclass
class _OpenPosition:
    entry_index: int
    entry_price: float
    quantity: float
    stop_loss: float | None
    take_profit: float | None


class ReplayRunner:
    """Replay one history through one strategy."""

    def __init__(self, engine: TradingSignalEngine, config: ReplayConfig):
        self.engine = engine
        self.config = config

    async def run(self, history: Sequence[PricePoint | dict]) -> ReplayResult:
        """
        Execute the replay.

        Raises:
            KeyError: If the strategy is not in the engine's catalog.
        """
        if self.config.strategy_name not in self.engine.catalog:
            available = ", ".join(self.engine.catalog.names()) or "(none)"
            raise KeyError(
                f"Unknown strategy '{self.config.strategy_name}'. Available: {available}"
            )

        bars = to_price_points(history)
        start_time = time.time()
        logger.info(
            "Starting replay %s/%s: %d bars (%d warmup)",
            self.config.symbol, self.config.strategy_name, len(bars), self.config.warmup_bars,
        )

        cash = self.config.initial_capital
        position: _OpenPosition | None = None
        trades: list[TradeRecord] = []
        equity_curve: list[float] = []
        counts: Counter[str] = Counter()

        for i in range(min(self.config.warmup_bars, len(bars)), len(bars)):
            price = bars[i].price
            signal = await self.engine.generate_trading_signal(
                self.config.symbol,
                self.config.strategy_name,
                bars[: i + 1],
                current_price=price,
            )
            counts[signal.action.value] += 1

            if position is not None:
                reason = self._exit_reason(position, price, signal)
                if reason:
                    cash += position.quantity * price
                    trades.append(self._close(position, i, price, reason))
                    position = None
            elif signal.action is Action.BUY and price > 0:
                committed = cash * signal.position_size
                position = _OpenPosition(
                    entry_index=i,
                    entry_price=price,
                    quantity=committed / price,
                    stop_loss=signal.stop_loss,
                    take_profit=signal.take_profit,
                )
                cash -= committed
                logger.debug("Bar %d: BUY %.4f @ %.4f", i, position.quantity, price)

            held = position.quantity * price if position else 0.0
            equity_curve.append(cash + held)

        if position is not None:
            last = len(bars) - 1
            cash += position.quantity * bars[last].price
            trades.append(self._close(position, last, bars[last].price, "end_of_data"))

        result = ReplayResult(
            symbol=self.config.symbol,
            strategy_name=self.config.strategy_name,
            bars=len(bars),
            initial_capital=self.config.initial_capital,
            final_equity=cash,
            trades=trades,
            equity_curve=equity_curve,
            signal_counts=dict(counts),
        )
        calculate_statistics(result, self.config.periods_per_year)

        logger.info(
            "Replay %s/%s completed in %.1fs: %d trades, return %.2f%%",
            self.config.symbol, self.config.strategy_name,
            time.time() - start_time, len(trades), result.total_return,
        )
        return result

    @staticmethod
    def _exit_reason(position: _OpenPosition, price: float, signal: TradingSignal) -> str | None:
        if position.stop_loss is not None and price <= position.stop_loss:
            return "stop_loss"
        if position.take_profit is not None and price >= position.take_profit:
            return "take_profit"
        if signal.action is Action.SELL:
            return "signal"
        return None

    @staticmethod
    def _close(position: _OpenPosition, index: int, price: float, reason: str) -> TradeRecord:
        logger.debug("Bar %d: exit (%s) @ %.4f", index, reason, price)
        return TradeRecord(
            entry_index=position.entry_index,
            exit_index=index,
            entry_price=position.entry_price,
            exit_price=price,
            quantity=position.quantity,
            exit_reason=reason,
        )
