"""Strategy catalog loaded from strategies.yaml.

Supports:
- Overriding canonical strategies by name (only the listed keys change)
- Adding new strategies (validated as full StrategyConfig entries)
- Backward compatible: no YAML file = the six canonical strategies

Example:
    strategies:
      - name: Momentum Growth
        risk_allocation: 20
        market_filters:
          trend_filter: false
      - name: Short Swing
        risk_allocation: 5
        machine_learning:
          enabled: false
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from signalcore.models.config import CANONICAL_STRATEGIES, StrategyConfig
from signalcore.strategy.catalog import StrategyCatalog

logger = logging.getLogger(__name__)


class StrategiesFile(BaseModel):
    """Top-level strategies.yaml structure."""

    strategies: list[dict[str, Any]] = []


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build_catalog(entries: list[dict[str, Any]]) -> StrategyCatalog:
    """Apply YAML entries on top of the canonical strategies.

    Raises:
        ValueError: If an entry has no name or names repeat.
        pydantic.ValidationError: If a resulting strategy is invalid.
    """
    canonical = {s.name: s for s in CANONICAL_STRATEGIES}
    strategies: dict[str, StrategyConfig] = dict(canonical)
    seen: set[str] = set()

    for entry in entries:
        name = entry.get("name")
        if not name:
            raise ValueError("every strategy entry needs a 'name'")
        if name in seen:
            raise ValueError(f"strategy '{name}' is listed more than once")
        seen.add(name)

        if name in canonical:
            data = _deep_merge(canonical[name].model_dump(), entry)
            strategies[name] = StrategyConfig.model_validate(data)
            logger.debug("Overrode canonical strategy %s", name)
        else:
            strategies[name] = StrategyConfig.model_validate(entry)
            logger.debug("Added strategy %s", name)

    return StrategyCatalog(strategies.values())


# Relative to the working directory
_DEFAULT_PATH = Path("strategies.yaml")


def load_strategy_catalog(path: Path | None = None) -> StrategyCatalog:
    """Load the strategy catalog from a YAML file.

    Falls back to the canonical catalog if the file doesn't exist.
    """
    config_path = Path(path) if path else _DEFAULT_PATH

    load_dotenv(config_path.parent / ".env", override=False)

    if not config_path.exists():
        logger.info(
            "No strategies file found at %s, using the canonical strategies",
            config_path,
        )
        return build_catalog([])

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    parsed = StrategiesFile(**raw)
    catalog = build_catalog(parsed.strategies)
    logger.info(
        "Loaded strategy catalog: %d strategies (%d enabled) from %s",
        len(catalog),
        len(catalog.enabled()),
        config_path,
    )
    return catalog
