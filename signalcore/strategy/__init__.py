"""Strategy catalog.

Public API:
- StrategyCatalog: immutable name -> StrategyConfig registry
- default_catalog: catalog of the six canonical strategies
- load_strategy_catalog: catalog with overrides from strategies.yaml
"""

from signalcore.strategy.catalog import StrategyCatalog, default_catalog
from signalcore.strategy.loader import build_catalog, load_strategy_catalog

__all__ = [
    "StrategyCatalog",
    "default_catalog",
    "build_catalog",
    "load_strategy_catalog",
]
