"""Strategy catalog: an immutable name -> StrategyConfig registry.

Usage:
    catalog = default_catalog()
    config = catalog.get("Momentum Growth")
    names = catalog.names()

A catalog is constructed explicitly and handed to the engine, so tests
and independent configurations never share hidden module state.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator

from signalcore.models.config import CANONICAL_STRATEGIES, StrategyConfig

logger = logging.getLogger(__name__)


class StrategyCatalog:
    """Read-only mapping of strategy name to configuration."""

    __slots__ = ("_strategies",)

    def __init__(self, strategies: Iterable[StrategyConfig]):
        """
        Args:
            strategies: Strategy configurations, each with a unique name.

        Raises:
            ValueError: If two strategies share a name.
        """
        entries: dict[str, StrategyConfig] = {}
        for strategy in strategies:
            if strategy.name in entries:
                raise ValueError(f"Strategy '{strategy.name}' is defined more than once")
            entries[strategy.name] = strategy
            logger.debug("Registered strategy: %s (enabled=%s)", strategy.name, strategy.enabled)
        self._strategies = MappingProxyType(entries)

    def __setattr__(self, name, value):
        if hasattr(self, "_strategies"):
            raise AttributeError("StrategyCatalog is read-only")
        object.__setattr__(self, name, value)

    def get(self, name: str) -> StrategyConfig | None:
        """Look up a strategy by name; None if unknown."""
        return self._strategies.get(name)

    def names(self) -> list[str]:
        """Return strategy names in definition order."""
        return list(self._strategies)

    def enabled(self) -> list[StrategyConfig]:
        """Return the strategies that are allowed to generate signals."""
        return [s for s in self._strategies.values() if s.enabled]

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    def __iter__(self) -> Iterator[StrategyConfig]:
        return iter(self._strategies.values())

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        return f"StrategyCatalog({', '.join(self._strategies)})"


def default_catalog() -> StrategyCatalog:
    """Build a catalog holding the six canonical strategies."""
    return StrategyCatalog(CANONICAL_STRATEGIES)
