"""CLI entry point for the replay system.

Usage:
    python -m replay prices.csv --strategy "Momentum Growth"
    python -m replay prices.json --strategy "AI Value Discovery" --seed 7 -o result.json
    python -m replay prices.csv --strategy "Defensive AI Shield" --signal-only
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from signalcore import TradingSignalEngine
from signalcore.settings import EngineSettings, get_settings
from signalcore.strategy import default_catalog, load_strategy_catalog

from replay.history import load_history
from replay.report import ReportFormatter
from replay.runner import ReplayConfig, ReplayRunner


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay a price history through a signal strategy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m replay prices.csv --strategy "Momentum Growth"
  python -m replay prices.json --strategy "AI Value Discovery" --seed 7 -o result.json
  python -m replay prices.csv --strategy "Defensive AI Shield" --signal-only
        """,
    )
    parser.add_argument(
        "history",
        type=Path,
        help="CSV (price,volume columns) or JSON ([{price, volume}]) history file",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        required=True,
        help="Strategy name from the catalog",
    )
    parser.add_argument(
        "--symbol",
        type=str,
        default="SYMBOL",
        help="Symbol label for logs and reports (default: SYMBOL)",
    )
    parser.add_argument(
        "--strategies-file",
        type=Path,
        default=None,
        help="strategies.yaml with catalog overrides",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the simulated ML and sentiment generators",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=None,
        help="Warmup bars before acting on signals (default: REPLAY_WARMUP_BARS or 30)",
    )
    parser.add_argument(
        "--signal-only",
        action="store_true",
        help="Print the signal for the full history as JSON and exit",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path for JSON results",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def build_engine(args: argparse.Namespace) -> TradingSignalEngine:
    settings = EngineSettings(random_seed=args.seed)
    catalog = (
        load_strategy_catalog(args.strategies_file)
        if args.strategies_file
        else default_catalog()
    )
    return TradingSignalEngine(catalog=catalog, settings=settings)


async def run(args: argparse.Namespace) -> int:
    engine = build_engine(args)

    if args.strategy not in engine.catalog:
        print(f"Error: unknown strategy '{args.strategy}'")
        print(f"Available: {', '.join(engine.catalog.names())}")
        return 1

    history = load_history(args.history)

    if args.signal_only:
        signal = await engine.generate_trading_signal(args.symbol, args.strategy, history)
        print(json.dumps(signal.model_dump(mode="json"), indent=2))
        return 0

    config = ReplayConfig.from_settings(args.symbol, args.strategy)
    if args.warmup is not None:
        config.warmup_bars = args.warmup

    result = await ReplayRunner(engine, config).run(history)
    ReportFormatter.print_console(result)

    if args.output:
        ReportFormatter.save_json(result, args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
