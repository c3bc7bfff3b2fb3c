"""Statistics calculator for replay results.

Computes total return, annualised Sharpe ratio, maximum drawdown and win
rate from the equity curve and the closed trades.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class TradeRecord:
    """One closed long position."""

    entry_index: int
    exit_index: int
    entry_price: float
    exit_price: float
    quantity: float
    exit_reason: str  # "stop_loss", "take_profit", "signal", "end_of_data"

    @property
    def pnl(self) -> float:
        return (self.exit_price - self.entry_price) * self.quantity

    @property
    def return_pct(self) -> float:
        if self.entry_price == 0:
            return 0.0
        return (self.exit_price / self.entry_price - 1) * 100

    @property
    def is_win(self) -> bool:
        return self.pnl > 0


@dataclass
class ReplayResult:
    """Outcome of replaying one history through one strategy."""

    symbol: str
    strategy_name: str
    bars: int
    initial_capital: float
    final_equity: float
    total_return: float = 0.0  # percent
    sharpe_ratio: float = 0.0
    max_drawdown: float = 0.0  # percent
    win_rate: float = 0.0  # percent of closed trades
    trades: list[TradeRecord] = field(default_factory=list)
    equity_curve: list[float] = field(default_factory=list)
    signal_counts: dict[str, int] = field(default_factory=dict)

    @property
    def wins(self) -> int:
        return sum(1 for t in self.trades if t.is_win)

    @property
    def losses(self) -> int:
        return len(self.trades) - self.wins


def total_return(equity_curve: list[float]) -> float:
    """Percent change from the first to the last equity value."""
    if len(equity_curve) < 2 or equity_curve[0] == 0:
        return 0.0
    return (equity_curve[-1] / equity_curve[0] - 1) * 100


def sharpe_ratio(equity_curve: list[float], periods_per_year: int = 252) -> float:
    """Annualised mean / sample std of per-bar returns (0 when undefined)."""
    if len(equity_curve) < 3:
        return 0.0
    equity = np.asarray(equity_curve, dtype=np.float64)
    returns = np.diff(equity) / equity[:-1]
    std = float(np.std(returns, ddof=1))
    if std == 0 or not math.isfinite(std):
        return 0.0
    return float(np.mean(returns)) / std * math.sqrt(periods_per_year)


def max_drawdown(equity_curve: list[float]) -> float:
    """Largest peak-to-trough decline, in percent of the peak."""
    if not equity_curve:
        return 0.0
    equity = np.asarray(equity_curve, dtype=np.float64)
    peaks = np.maximum.accumulate(equity)
    with np.errstate(divide="ignore", invalid="ignore"):
        drawdowns = np.where(peaks > 0, (peaks - equity) / peaks, 0.0)
    return float(drawdowns.max()) * 100


def win_rate(trades: list[TradeRecord]) -> float:
    """Percent of closed trades with positive P&L."""
    if not trades:
        return 0.0
    return sum(1 for t in trades if t.is_win) / len(trades) * 100


def calculate_statistics(result: ReplayResult, periods_per_year: int = 252) -> ReplayResult:
    """Fill the summary metrics of a result from its curve and trades."""
    result.total_return = total_return(result.equity_curve)
    result.sharpe_ratio = sharpe_ratio(result.equity_curve, periods_per_year)
    result.max_drawdown = max_drawdown(result.equity_curve)
    result.win_rate = win_rate(result.trades)
    logger.debug(
        "Stats %s/%s: return=%.2f%% sharpe=%.2f dd=%.2f%% win=%.1f%%",
        result.symbol, result.strategy_name,
        result.total_return, result.sharpe_ratio, result.max_drawdown, result.win_rate,
    )
    return result
