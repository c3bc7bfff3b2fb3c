"""Sub-generator protocol.

Every opinion the combiner fuses comes from a PartialSignalGenerator.
The ML and sentiment slots are async because real implementations call
out to external services; the engine bounds each call with a timeout.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from signalcore.models import PartialSignal, PricePoint, StrategyConfig


@runtime_checkable
class PartialSignalGenerator(Protocol):
    """Protocol that ML and sentiment sub-generators must implement."""

    @property
    def name(self) -> str:
        """Short identifier used in log lines and fallback reasons."""
        ...

    async def score_partial_signal(
        self,
        symbol: str,
        history: Sequence[PricePoint],
        config: StrategyConfig,
    ) -> PartialSignal:
        """Produce an opinion on the symbol.

        Args:
            symbol: Instrument identifier.
            history: Chronological price/volume bars.
            config: Strategy being evaluated.

        Returns:
            PartialSignal with action, strength and reasoning.
        """
        ...
