"""Load price/volume histories from CSV or JSON files."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

from signalcore.models import PricePoint

logger = logging.getLogger(__name__)


def load_history(path: str | Path) -> list[PricePoint]:
    """Read a chronological history file.

    CSV files need a ``price`` column and may have a ``volume`` column.
    JSON files hold a list of ``{"price": ..., "volume": ...}`` objects.

    Raises:
        ValueError: If the file type is not supported.
        pydantic.ValidationError: If a row has no finite numeric price.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        with open(path, newline="") as f:
            rows = [
                {"price": row["price"], "volume": row.get("volume") or 0}
                for row in csv.DictReader(f)
            ]
    elif suffix == ".json":
        with open(path) as f:
            rows = json.load(f)
    else:
        raise ValueError(f"Unsupported history file type: {path.suffix} (expected .csv or .json)")

    bars = [PricePoint.model_validate(row) for row in rows]
    logger.info("Loaded %d bars from %s", len(bars), path)
    return bars
