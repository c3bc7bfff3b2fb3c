"""Tests for the replay runner, statistics, history loading and CLI."""

import json
import logging
import math
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from signalcore import TradingSignalEngine
from signalcore.models import Action, PricePoint, TradingSignal
from signalcore.settings import EngineSettings
from signalcore.strategy import default_catalog

from replay.__main__ import main
from replay.history import load_history
from replay.report import ReportFormatter
from replay.runner import ReplayConfig, ReplayRunner
from replay.stats import (
    ReplayResult,
    TradeRecord,
    max_drawdown,
    sharpe_ratio,
    total_return,
    win_rate,
)


def _buy(size: float, stop_loss=None, take_profit=None) -> TradingSignal:
    return TradingSignal(
        action=Action.BUY,
        strength=60,
        confidence=80,
        position_size=size,
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


SELL = TradingSignal(action=Action.SELL, strength=60, confidence=80, position_size=0.1)
HOLD = TradingSignal(action=Action.HOLD, strength=5, confidence=25, position_size=0.01)


class ScriptedEngine:
    """Engine double returning scripted signals keyed by the latest bar index."""

    def __init__(self, script: dict[int, TradingSignal]):
        self.catalog = default_catalog()
        self.script = script
        self.calls: list[tuple[int, float]] = []

    async def generate_trading_signal(
        self, symbol, strategy_name, history, current_price=None, sentiment=0.0
    ):
        index = len(history) - 1
        self.calls.append((index, current_price))
        return self.script.get(index, HOLD)


def _bars(prices: list[float]) -> list[PricePoint]:
    return [PricePoint(price=p, volume=1000.0) for p in prices]


def _config(warmup: int = 1) -> ReplayConfig:
    return ReplayConfig(symbol="SYM", strategy_name="Momentum Growth", warmup_bars=warmup)


def _trade(entry: float, exit: float) -> TradeRecord:
    return TradeRecord(
        entry_index=0, exit_index=1, entry_price=entry, exit_price=exit,
        quantity=1.0, exit_reason="signal",
    )


# ── Statistics ───────────────────────────────────────────────────────────


class TestStatistics:
    """Tests for replay statistics."""

    def test_total_return(self):
        """Test total return in percent."""
        assert total_return([100.0, 110.0]) == pytest.approx(10.0)
        assert total_return([100.0]) == 0.0
        assert total_return([]) == 0.0

    def test_max_drawdown(self):
        """Test peak-to-trough drawdown."""
        assert max_drawdown([100.0, 120.0, 90.0, 130.0]) == pytest.approx(25.0)
        assert max_drawdown([100.0, 110.0, 120.0]) == 0.0
        assert max_drawdown([]) == 0.0

    def test_sharpe_flat_is_zero(self):
        """Test Sharpe of a flat curve."""
        assert sharpe_ratio([100.0, 100.0, 100.0]) == 0.0

    def test_sharpe_constant_returns_is_zero(self):
        """Test Sharpe with zero return deviation."""
        assert sharpe_ratio([100.0, 110.0, 121.0]) == 0.0

    def test_sharpe_sign(self):
        """Test Sharpe sign follows the trend."""
        assert sharpe_ratio([100.0, 110.0, 105.0, 120.0]) > 0
        assert sharpe_ratio([100.0, 90.0, 95.0, 80.0]) < 0

    def test_sharpe_short_curve(self):
        """Test Sharpe with a single return."""
        assert sharpe_ratio([100.0, 110.0]) == 0.0

    def test_win_rate(self):
        """Test win rate in percent."""
        assert win_rate([_trade(100, 110), _trade(100, 90)]) == pytest.approx(50.0)
        assert win_rate([]) == 0.0

    def test_trade_record(self):
        """Test trade PnL and return."""
        trade = TradeRecord(
            entry_index=1, exit_index=4, entry_price=100.0, exit_price=121.0,
            quantity=50.0, exit_reason="take_profit",
        )
        assert trade.pnl == pytest.approx(1050.0)
        assert trade.return_pct == pytest.approx(21.0)
        assert trade.is_win


# ── ReplayRunner ─────────────────────────────────────────────────────────


class TestReplayRunner:
    """Tests for ReplayRunner."""

    @pytest.mark.asyncio
    async def test_take_profit_exit(self):
        """Test a take-profit exit."""
        engine = ScriptedEngine({1: _buy(0.5, stop_loss=90.0, take_profit=120.0)})
        runner = ReplayRunner(engine, _config())

        result = await runner.run(_bars([100, 100, 105, 110, 121]))

        assert result.equity_curve == pytest.approx([10000.0, 10250.0, 10500.0, 11050.0])
        assert result.final_equity == pytest.approx(11050.0)
        assert result.total_return == pytest.approx(10.5)
        assert result.max_drawdown == 0.0
        assert result.win_rate == pytest.approx(100.0)
        assert result.signal_counts == {"BUY": 1, "HOLD": 3}

        [trade] = result.trades
        assert trade.exit_reason == "take_profit"
        assert (trade.entry_index, trade.exit_index) == (1, 4)
        assert trade.quantity == pytest.approx(50.0)

    @pytest.mark.asyncio
    async def test_stop_loss_exit(self):
        """Test a stop-loss exit."""
        engine = ScriptedEngine({1: _buy(0.5, stop_loss=90.0, take_profit=120.0)})

        result = await ReplayRunner(engine, _config()).run(_bars([100, 100, 95, 85, 90]))

        [trade] = result.trades
        assert trade.exit_reason == "stop_loss"
        assert trade.exit_price == 85
        assert trade.pnl == pytest.approx(-750.0)
        assert result.equity_curve == pytest.approx([10000.0, 9750.0, 9250.0, 9250.0])
        assert result.total_return == pytest.approx(-7.5)
        assert result.max_drawdown == pytest.approx(7.5)
        assert result.win_rate == 0.0

    @pytest.mark.asyncio
    async def test_sell_signal_exit(self):
        """Test a SELL signal closes the position."""
        engine = ScriptedEngine({1: _buy(0.5), 3: SELL})

        result = await ReplayRunner(engine, _config()).run(_bars([100, 100, 102, 104]))

        [trade] = result.trades
        assert trade.exit_reason == "signal"
        assert trade.exit_index == 3
        assert result.final_equity == pytest.approx(10200.0)
        assert result.signal_counts == {"BUY": 1, "HOLD": 1, "SELL": 1}

    @pytest.mark.asyncio
    async def test_open_position_closed_at_end(self):
        """Test open positions close on the last bar."""
        engine = ScriptedEngine({1: _buy(0.5)})

        result = await ReplayRunner(engine, _config()).run(_bars([100, 100, 110]))

        [trade] = result.trades
        assert trade.exit_reason == "end_of_data"
        assert trade.exit_index == 2
        assert result.final_equity == pytest.approx(10500.0)

    @pytest.mark.asyncio
    async def test_hold_never_opens_a_position(self):
        """Test HOLD signals never trade."""
        engine = ScriptedEngine({})

        result = await ReplayRunner(engine, _config()).run(_bars([100, 101, 102]))

        assert result.trades == []
        assert result.final_equity == pytest.approx(10000.0)
        assert result.equity_curve == [10000.0, 10000.0]

    @pytest.mark.asyncio
    async def test_engine_sees_only_past_bars(self):
        """Test the engine never sees future bars."""
        engine = ScriptedEngine({})

        await ReplayRunner(engine, _config(warmup=2)).run(_bars([100, 101, 102, 103]))

        assert engine.calls == [(2, 102.0), (3, 103.0)]

    @pytest.mark.asyncio
    async def test_warmup_longer_than_history(self):
        """Test warmup longer than the history."""
        engine = ScriptedEngine({})

        result = await ReplayRunner(engine, _config(warmup=10)).run(_bars([100, 101]))

        assert engine.calls == []
        assert result.equity_curve == []
        assert result.total_return == 0.0
        assert result.final_equity == pytest.approx(10000.0)

    @pytest.mark.asyncio
    async def test_unknown_strategy(self):
        """Test an unknown strategy is rejected."""
        config = ReplayConfig(symbol="SYM", strategy_name="Nope")

        with pytest.raises(KeyError, match="Unknown strategy"):
            await ReplayRunner(ScriptedEngine({}), config).run(_bars([100, 101]))

    @pytest.mark.asyncio
    async def test_with_real_engine(self):
        """Test a replay through the real engine."""
        engine = TradingSignalEngine(settings=EngineSettings(random_seed=3))
        prices = [100 + 10 * math.sin(i / 5) + i * 0.2 for i in range(120)]
        config = ReplayConfig(
            symbol="SYM", strategy_name="AI Value Discovery", warmup_bars=30
        )

        result = await ReplayRunner(engine, config).run(_bars(prices))

        assert result.bars == 120
        assert len(result.equity_curve) == 90
        assert sum(result.signal_counts.values()) == 90
        assert result.final_equity > 0
        assert 0 <= result.win_rate <= 100


# ── Report ───────────────────────────────────────────────────────────────


class TestReportFormatter:
    """Tests for ReportFormatter."""

    def _result(self) -> ReplayResult:
        return ReplayResult(
            symbol="SYM",
            strategy_name="Momentum Growth",
            bars=5,
            initial_capital=10000.0,
            final_equity=11050.0,
            total_return=10.5,
            win_rate=100.0,
            trades=[
                TradeRecord(
                    entry_index=1, exit_index=4, entry_price=100.0, exit_price=121.0,
                    quantity=50.0, exit_reason="take_profit",
                )
            ],
            equity_curve=[10000.0, 11050.0],
            signal_counts={"BUY": 1, "HOLD": 3},
        )

    def test_to_dict(self):
        """Test dictionary export."""
        data = ReportFormatter.to_dict(self._result())

        assert data["metadata"]["strategy"] == "Momentum Growth"
        assert data["overall"]["trades"] == 1
        assert data["overall"]["wins"] == 1
        assert data["trades"][0]["exit_reason"] == "take_profit"
        assert data["trades"][0]["pnl"] == pytest.approx(1050.0)

    def test_print_console(self, capsys):
        """Test console summary."""
        ReportFormatter.print_console(self._result())

        out = capsys.readouterr().out
        assert "Momentum Growth" in out
        assert "+10.50%" in out
        assert "take_profit" in out

    def test_save_json(self, tmp_path):
        """Test JSON export."""
        path = tmp_path / "result.json"
        ReportFormatter.save_json(self._result(), str(path))

        assert json.loads(path.read_text())["overall"]["final_equity"] == 11050.0


# ── History files ────────────────────────────────────────────────────────


class TestLoadHistory:
    """Tests for history file loading."""

    def test_csv(self, tmp_path):
        """Test CSV loading."""
        path = tmp_path / "prices.csv"
        path.write_text("price,volume\n100.5,10\n101,\n")

        bars = load_history(path)

        assert bars == [PricePoint(price=100.5, volume=10), PricePoint(price=101, volume=0)]

    def test_csv_without_volume_column(self, tmp_path):
        """Test CSV without a volume column."""
        path = tmp_path / "prices.csv"
        path.write_text("price\n100\n101\n")

        assert [b.volume for b in load_history(path)] == [0, 0]

    def test_json(self, tmp_path):
        """Test JSON loading."""
        path = tmp_path / "prices.json"
        path.write_text(json.dumps([{"price": 100, "volume": 5}, {"price": 102}]))

        bars = load_history(path)

        assert [b.price for b in bars] == [100, 102]
        assert bars[1].volume == 0

    def test_unsupported_suffix(self, tmp_path):
        """Test unsupported file types."""
        path = tmp_path / "prices.txt"
        path.write_text("100\n")

        with pytest.raises(ValueError, match="Unsupported"):
            load_history(path)

    def test_non_finite_price_rejected(self, tmp_path):
        """Test NaN prices fail validation."""
        path = tmp_path / "prices.csv"
        path.write_text("price,volume\n100,10\nnan,10\n")

        with pytest.raises(ValidationError):
            load_history(path)


# ── CLI ──────────────────────────────────────────────────────────────────


class TestCli:
    """Tests for the replay CLI."""

    def _write_flat(self, tmp_path, n: int = 60):
        path = tmp_path / "prices.csv"
        path.write_text("price,volume\n" + "100,1000\n" * n)
        return path

    def test_signal_only(self, tmp_path, capsys):
        """Test --signal-only prints one signal."""
        path = self._write_flat(tmp_path)

        code = main([str(path), "--strategy", "Defensive AI Shield", "--signal-only"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["action"] == "HOLD"
        assert data["reasoning"] == ["Market conditions not suitable"]

    def test_unknown_strategy(self, tmp_path, capsys):
        """Test an unknown strategy exits with status 1."""
        path = self._write_flat(tmp_path)

        code = main([str(path), "--strategy", "Nope"])

        assert code == 1
        assert "unknown strategy" in capsys.readouterr().out

    def test_log_level_from_settings(self, tmp_path, monkeypatch, capsys):
        """Test the root log level comes from SIGNALCORE_LOG_LEVEL."""
        path = self._write_flat(tmp_path)
        basic_config = MagicMock()
        monkeypatch.setattr(logging, "basicConfig", basic_config)
        monkeypatch.setattr(
            "replay.__main__.get_settings",
            lambda: EngineSettings(log_level="warning", _env_file=None),
        )

        main([str(path), "--strategy", "Defensive AI Shield", "--signal-only"])

        assert basic_config.call_args.kwargs["level"] == "WARNING"

    def test_verbose_forces_debug(self, tmp_path, monkeypatch, capsys):
        """Test --verbose overrides the configured log level."""
        path = self._write_flat(tmp_path)
        basic_config = MagicMock()
        monkeypatch.setattr(logging, "basicConfig", basic_config)
        monkeypatch.setattr(
            "replay.__main__.get_settings",
            lambda: EngineSettings(log_level="WARNING", _env_file=None),
        )

        main([str(path), "--strategy", "Defensive AI Shield", "--signal-only", "-v"])

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_replay_writes_json(self, tmp_path):
        """Test a replay written to JSON."""
        path = tmp_path / "prices.csv"
        path.write_text(
            "price,volume\n"
            + "".join(f"{100 + i % 7},{1000 + i}\n" for i in range(50))
        )
        output = tmp_path / "out.json"

        code = main([
            str(path), "--strategy", "AI Value Discovery",
            "--seed", "5", "--warmup", "10", "-o", str(output),
        ])

        assert code == 0
        data = json.loads(output.read_text())
        assert data["metadata"]["strategy"] == "AI Value Discovery"
        assert len(data["equity_curve"]) == 40
