"""Strategy configuration models and the canonical strategy set."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class RsiConfig(_Frozen):
    enabled: bool = True
    period: int = Field(default=14, ge=1)
    overbought: float = 70
    oversold: float = 30


class MacdConfig(_Frozen):
    enabled: bool = True
    fast_period: int = Field(default=12, ge=1)
    slow_period: int = Field(default=26, ge=1)
    signal_period: int = Field(default=9, ge=1)  # accepted, the signal line is simplified


class BollingerConfig(_Frozen):
    enabled: bool = True
    period: int = Field(default=20, ge=1)
    std_dev: float = Field(default=2.0, gt=0)


class AverageConfig(_Frozen):
    enabled: bool = True
    period: int = Field(default=20, ge=1)


class MovingAveragesConfig(_Frozen):
    sma: AverageConfig = AverageConfig(period=50)
    ema: AverageConfig = AverageConfig(period=20)


class StopLossConfig(_Frozen):
    enabled: bool = True
    percentage: float = Field(default=8.0, ge=0, lt=100)
    trailing: bool = False


class TakeProfitConfig(_Frozen):
    enabled: bool = True
    percentage: float = Field(default=15.0, ge=0)
    partial: bool = False


class MarketFilters(_Frozen):
    """Regime gates. Each enabled filter can veto a strategy."""

    volatility_filter: bool = False  # rejects high volatility
    volume_filter: bool = False  # rejects low volume
    trend_filter: bool = False  # rejects sideways trend


class MachineLearningConfig(_Frozen):
    enabled: bool = False
    model_confidence: float = Field(default=70.0, ge=0, le=100)
    ensemble_voting: bool = False
    feature_engineering: bool = False


class SentimentConfig(_Frozen):
    enabled: bool = False
    news_weight: float = Field(default=0.0, ge=0)
    social_weight: float = Field(default=0.0, ge=0)
    analyst_weight: float = Field(default=0.0, ge=0)


class StrategyConfig(_Frozen):
    """Named bundle of indicator, risk, filter and sub-model settings."""

    name: str = Field(min_length=1)
    enabled: bool = True
    risk_allocation: float = Field(default=10.0, gt=0, le=100)  # percent of capital

    rsi: RsiConfig = RsiConfig()
    macd: MacdConfig = MacdConfig()
    bollinger: BollingerConfig = BollingerConfig()
    moving_averages: MovingAveragesConfig = MovingAveragesConfig()

    stop_loss: StopLossConfig = StopLossConfig()
    take_profit: TakeProfitConfig = TakeProfitConfig()

    market_filters: MarketFilters = MarketFilters()
    machine_learning: MachineLearningConfig = MachineLearningConfig()
    sentiment: SentimentConfig = SentimentConfig()

    @model_validator(mode="after")
    def _validate(self):
        if self.rsi.oversold >= self.rsi.overbought:
            raise ValueError(
                f"rsi.oversold ({self.rsi.oversold}) must be below "
                f"rsi.overbought ({self.rsi.overbought})"
            )
        return self

    @property
    def max_position(self) -> float:
        """Largest fraction of capital a single signal may commit."""
        return self.risk_allocation / 100


# =============================================================================
# Canonical strategies
# =============================================================================
MOMENTUM_GROWTH = StrategyConfig(
    name="Momentum Growth",
    risk_allocation=25,
    rsi=RsiConfig(period=14, overbought=70, oversold=30),
    macd=MacdConfig(fast_period=12, slow_period=26, signal_period=9),
    bollinger=BollingerConfig(period=20, std_dev=2),
    moving_averages=MovingAveragesConfig(
        sma=AverageConfig(period=50),
        ema=AverageConfig(period=20),
    ),
    stop_loss=StopLossConfig(percentage=8, trailing=True),
    take_profit=TakeProfitConfig(percentage=15, partial=True),
    market_filters=MarketFilters(
        volatility_filter=True, volume_filter=True, trend_filter=True,
    ),
    machine_learning=MachineLearningConfig(
        enabled=True, model_confidence=70,
        ensemble_voting=True, feature_engineering=True,
    ),
    sentiment=SentimentConfig(
        enabled=False, news_weight=0.2, social_weight=0.1, analyst_weight=0.3,
    ),
)

AI_VALUE_DISCOVERY = StrategyConfig(
    name="AI Value Discovery",
    risk_allocation=30,
    rsi=RsiConfig(period=21, overbought=65, oversold=35),
    macd=MacdConfig(enabled=False),
    bollinger=BollingerConfig(period=20, std_dev=1.5),
    moving_averages=MovingAveragesConfig(
        sma=AverageConfig(period=200),
        ema=AverageConfig(enabled=False, period=20),
    ),
    stop_loss=StopLossConfig(percentage=12),
    take_profit=TakeProfitConfig(percentage=25),
    market_filters=MarketFilters(),
    machine_learning=MachineLearningConfig(
        enabled=True, model_confidence=80,
        ensemble_voting=True, feature_engineering=True,
    ),
    sentiment=SentimentConfig(
        enabled=True, news_weight=0.4, social_weight=0.1, analyst_weight=0.5,
    ),
)

MARKET_SENTIMENT_AI = StrategyConfig(
    name="Market Sentiment AI",
    risk_allocation=20,
    rsi=RsiConfig(enabled=False),
    macd=MacdConfig(fast_period=8, slow_period=21, signal_period=5),
    bollinger=BollingerConfig(enabled=False),
    moving_averages=MovingAveragesConfig(
        sma=AverageConfig(enabled=False, period=50),
        ema=AverageConfig(period=10),
    ),
    stop_loss=StopLossConfig(percentage=6, trailing=True),
    take_profit=TakeProfitConfig(percentage=12, partial=True),
    market_filters=MarketFilters(volatility_filter=True, volume_filter=True),
    machine_learning=MachineLearningConfig(
        enabled=True, model_confidence=65,
        ensemble_voting=True, feature_engineering=True,
    ),
    sentiment=SentimentConfig(
        enabled=True, news_weight=0.6, social_weight=0.3, analyst_weight=0.2,
    ),
)

VOLATILITY_HARVESTING = StrategyConfig(
    name="Volatility Harvesting",
    enabled=False,
    risk_allocation=15,
    rsi=RsiConfig(period=7, overbought=80, oversold=20),
    macd=MacdConfig(fast_period=5, slow_period=13, signal_period=3),
    bollinger=BollingerConfig(period=10, std_dev=2.5),
    moving_averages=MovingAveragesConfig(
        sma=AverageConfig(enabled=False, period=50),
        ema=AverageConfig(period=5),
    ),
    stop_loss=StopLossConfig(percentage=4, trailing=True),
    take_profit=TakeProfitConfig(percentage=8, partial=True),
    market_filters=MarketFilters(volatility_filter=True, volume_filter=True),
    machine_learning=MachineLearningConfig(
        enabled=True, model_confidence=75,
        ensemble_voting=True, feature_engineering=True,
    ),
    sentiment=SentimentConfig(
        enabled=False, news_weight=0.1, social_weight=0.2, analyst_weight=0.1,
    ),
)

STATISTICAL_PAIRS_TRADING = StrategyConfig(
    name="Statistical Pairs Trading",
    risk_allocation=10,
    rsi=RsiConfig(enabled=False),
    macd=MacdConfig(enabled=False),
    bollinger=BollingerConfig(period=20, std_dev=2),
    moving_averages=MovingAveragesConfig(
        sma=AverageConfig(period=30),
        ema=AverageConfig(enabled=False, period=20),
    ),
    stop_loss=StopLossConfig(percentage=3),
    take_profit=TakeProfitConfig(percentage=6),
    market_filters=MarketFilters(),
    machine_learning=MachineLearningConfig(
        enabled=True, model_confidence=85,
        ensemble_voting=False, feature_engineering=True,
    ),
    sentiment=SentimentConfig(
        enabled=False, news_weight=0.1, social_weight=0.0, analyst_weight=0.2,
    ),
)

DEFENSIVE_AI_SHIELD = StrategyConfig(
    name="Defensive AI Shield",
    risk_allocation=35,
    rsi=RsiConfig(period=30, overbought=60, oversold=40),
    macd=MacdConfig(enabled=False),
    bollinger=BollingerConfig(period=50, std_dev=1.5),
    moving_averages=MovingAveragesConfig(
        sma=AverageConfig(period=200),
        ema=AverageConfig(enabled=False, period=20),
    ),
    stop_loss=StopLossConfig(percentage=15),
    take_profit=TakeProfitConfig(enabled=False, percentage=20),
    market_filters=MarketFilters(volatility_filter=True, trend_filter=True),
    machine_learning=MachineLearningConfig(enabled=False, model_confidence=90),
    sentiment=SentimentConfig(
        enabled=True, news_weight=0.3, social_weight=0.1, analyst_weight=0.4,
    ),
)

CANONICAL_STRATEGIES: tuple[StrategyConfig, ...] = (
    MOMENTUM_GROWTH,
    AI_VALUE_DISCOVERY,
    MARKET_SENTIMENT_AI,
    VOLATILITY_HARVESTING,
    STATISTICAL_PAIRS_TRADING,
    DEFENSIVE_AI_SHIELD,
)
