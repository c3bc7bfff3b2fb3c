"""Tests for the weighted ensemble combiner."""

import pytest

from signalcore.combiner import combine_signals, hold_signal, position_size
from signalcore.models import Action, PartialSignal
from signalcore.models.config import MOMENTUM_GROWTH


def _partial(action: Action, strength: float, *reasons: str, **kwargs) -> PartialSignal:
    return PartialSignal(action=action, strength=strength, reasoning=reasons, **kwargs)


class TestPositionSize:
    """Tests for position sizing."""

    def test_scales_with_strength_and_confidence(self):
        """Test size scales the maximum by strength and confidence."""
        assert position_size(0.25, 100, 95) == pytest.approx(0.2375)

    def test_floor(self):
        """Test size never drops below 1%."""
        assert position_size(0.25, 0, 50) == pytest.approx(0.01)

    def test_capped_at_allocation(self):
        """Test size never exceeds the maximum position."""
        assert position_size(1.0, 100, 100) == pytest.approx(1.0)
        assert position_size(0.10, 100, 100) == pytest.approx(0.10)

    def test_combiner_uses_strategy_max_position(self):
        """Test the combiner sizes from the strategy's max_position."""
        strategy = MOMENTUM_GROWTH.model_copy(update={"risk_allocation": 50})

        signal = combine_signals(_partial(Action.BUY, 30, "tech"), None, None, strategy)

        assert strategy.max_position == pytest.approx(0.5)
        assert signal.position_size == pytest.approx(position_size(0.5, 30, 50))


class TestHoldSignal:
    """Tests for hold_signal."""

    def test_shape(self):
        """Test HOLD shape."""
        signal = hold_signal("Strategy not enabled")

        assert signal.action == Action.HOLD
        assert signal.strength == 0
        assert signal.confidence == 50
        assert signal.position_size == 0
        assert signal.reasoning == ("Strategy not enabled",)
        assert signal.stop_loss is None


class TestCombineSignals:
    """Tests for combine_signals."""

    def test_technical_only(self):
        """Test a lone technical opinion passes through."""
        technical = _partial(Action.BUY, 30, "tech", stop_loss=92.0, take_profit=115.0)

        signal = combine_signals(technical, None, None, MOMENTUM_GROWTH)

        assert signal.action == Action.BUY
        assert signal.strength == 30
        assert signal.confidence == 50
        assert signal.position_size == pytest.approx(0.0375)
        assert signal.stop_loss == 92.0
        assert signal.take_profit == 115.0

    def test_absent_slot_weight_is_not_redistributed(self):
        """Test the total weight covers only present slots."""
        # (0.5*0.6 - 1.0*0.1) / 0.7
        signal = combine_signals(
            _partial(Action.BUY, 50, "tech"),
            None,
            _partial(Action.SELL, 100, "sentiment"),
            MOMENTUM_GROWTH,
        )

        assert signal.action == Action.BUY
        assert signal.strength == 29
        assert signal.confidence == 49

    def test_opposing_opinions_cancel_to_hold(self):
        """Test opposing opinions below the threshold give HOLD."""
        # 0.4*0.6 - 0.8*0.3 + 0.5*0.1 = 0.05
        signal = combine_signals(
            _partial(Action.BUY, 40, "tech"),
            _partial(Action.SELL, 80, "ml"),
            _partial(Action.BUY, 50, "sentiment"),
            MOMENTUM_GROWTH,
        )

        assert signal.action == Action.HOLD
        assert signal.strength == 5
        assert signal.confidence == 25
        assert signal.position_size == pytest.approx(0.01)

    def test_zero_strength_opinions_dilute(self):
        """Test neutral opinions still count their slot weight."""
        technical = _partial(Action.BUY, 30, "tech")

        alone = combine_signals(technical, None, None, MOMENTUM_GROWTH)
        diluted = combine_signals(
            technical,
            _partial(Action.HOLD, 0, "ml signal timed out"),
            _partial(Action.HOLD, 0, "sentiment signal timed out"),
            MOMENTUM_GROWTH,
        )

        assert alone.action == Action.BUY
        assert diluted.action == Action.HOLD
        assert diluted.strength == 18

    def test_ml_only(self):
        """Test a lone ML opinion has no stop or target."""
        signal = combine_signals(None, _partial(Action.BUY, 80, "ml"), None, MOMENTUM_GROWTH)

        assert signal.action == Action.BUY
        assert signal.strength == 80
        assert signal.confidence == 95
        assert signal.position_size == pytest.approx(0.25 * 0.8 * 0.95)
        assert signal.stop_loss is None
        assert signal.take_profit is None

    def test_levels_only_from_technical(self):
        """Test stop and target come from the technical slot."""
        signal = combine_signals(
            _partial(Action.BUY, 60, "tech", stop_loss=90.0, take_profit=None),
            _partial(Action.BUY, 80, "ml", stop_loss=50.0, take_profit=200.0),
            None,
            MOMENTUM_GROWTH,
        )

        assert signal.stop_loss == 90.0
        assert signal.take_profit is None

    def test_reasoning_in_slot_order(self):
        """Test reasoning is concatenated technical, ML, sentiment."""
        signal = combine_signals(
            _partial(Action.BUY, 40, "rsi", "macd"),
            _partial(Action.SELL, 70, "ml"),
            _partial(Action.BUY, 20, "sentiment"),
            MOMENTUM_GROWTH,
        )

        assert signal.reasoning == ("rsi", "macd", "ml", "sentiment")

    def test_no_opinions(self):
        """Test no opinions give HOLD."""
        signal = combine_signals(None, None, None, MOMENTUM_GROWTH)

        assert signal.action == Action.HOLD
        assert signal.strength == 0
        assert signal.confidence == 50
        assert signal.reasoning == ("No valid signals generated",)

    def test_strength_and_confidence_are_integral(self):
        """Test final strength and confidence are rounded."""
        signal = combine_signals(
            _partial(Action.SELL, 37, "tech"),
            _partial(Action.SELL, 61, "ml"),
            None,
            MOMENTUM_GROWTH,
        )

        assert signal.action == Action.SELL
        assert signal.strength == float(int(signal.strength))
        assert signal.confidence == float(int(signal.confidence))
        # (0.37*0.6 + 0.61*0.3) / 0.9 = 0.45
        assert signal.strength == 45
        assert signal.confidence == 65
