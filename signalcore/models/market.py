"""Market data, indicator snapshot and regime models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """One historical bar: closing price and traded volume.

    NaN and infinite values are rejected.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    price: float
    volume: float = 0.0


class MacdResult(BaseModel):
    """MACD line, signal line and histogram."""

    model_config = ConfigDict(frozen=True)

    macd: float = 0.0
    signal: float = 0.0
    histogram: float = 0.0

    @property
    def is_bullish(self) -> bool:
        return self.macd > self.signal and self.histogram > 0

    @property
    def is_bearish(self) -> bool:
        return self.macd < self.signal and self.histogram < 0


class BollingerBands(BaseModel):
    """Upper, middle and lower Bollinger bands."""

    model_config = ConfigDict(frozen=True)

    upper: float = 0.0
    middle: float = 0.0
    lower: float = 0.0


class TechnicalIndicators(BaseModel):
    """Indicator snapshot for one signal-generation call.

    Disabled indicators carry neutral values (RSI 50, zeros elsewhere).
    """

    model_config = ConfigDict(frozen=True)

    rsi: float = Field(default=50.0, ge=0, le=100)
    macd: MacdResult = MacdResult()
    bollinger: BollingerBands = BollingerBands()
    sma: float = 0.0
    ema: float = 0.0
    volume: float = 0.0
    volatility: float = Field(default=0.0, ge=0)


class Trend(str, Enum):
    """Direction of the recent price window."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"


class Level(str, Enum):
    """Three-bucket classification used for volatility and volume."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MarketConditions(BaseModel):
    """Classified market regime."""

    model_config = ConfigDict(frozen=True)

    trend: Trend
    volatility: Level
    volume: Level
    sentiment: float = Field(default=0.0, ge=-1, le=1)
