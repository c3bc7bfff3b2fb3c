"""Partial and final trading signal models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    """Recommended trade action."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

    @property
    def score(self) -> int:
        """Signed direction: +1 for BUY, -1 for SELL, 0 for HOLD."""
        if self is Action.BUY:
            return 1
        if self is Action.SELL:
            return -1
        return 0

    @classmethod
    def from_score(cls, score: float, threshold: float) -> "Action":
        """Map a signed score to an action using a symmetric threshold."""
        if score > threshold:
            return cls.BUY
        if score < -threshold:
            return cls.SELL
        return cls.HOLD


class PartialSignal(BaseModel):
    """Opinion produced by a single sub-generator (technical, ML or sentiment)."""

    model_config = ConfigDict(frozen=True)

    action: Action
    strength: float = Field(ge=0, le=100)
    confidence: float | None = None
    reasoning: tuple[str, ...] = ()
    stop_loss: float | None = None
    take_profit: float | None = None

    @property
    def signed_score(self) -> float:
        """Direction scaled by strength, in [-1, 1]."""
        return self.action.score * (self.strength / 100)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TradingSignal(BaseModel):
    """Final fused signal returned by the engine.

    A HOLD action means "do nothing" regardless of position_size.
    """

    model_config = ConfigDict(frozen=True)

    action: Action
    strength: float = Field(ge=0, le=100)
    confidence: float = Field(ge=0, le=100)
    reasoning: tuple[str, ...] = ()
    stop_loss: float | None = None
    take_profit: float | None = None
    position_size: float = Field(default=0.0, ge=0, le=1)
    timestamp: datetime = Field(default_factory=_utcnow)

    @property
    def is_actionable(self) -> bool:
        return self.action is not Action.HOLD
