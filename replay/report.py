"""Report formatting for replay results.

Outputs results to console (formatted tables) and JSON files.
"""

from __future__ import annotations

import json

from replay.stats import ReplayResult


class ReportFormatter:
    """Format replay results for display and export."""

    @staticmethod
    def print_console(result: ReplayResult) -> None:
        """Print formatted report to console."""
        print("\n" + "=" * 70)
        print(f"  REPLAY RESULTS — {result.strategy_name}")
        print("=" * 70)
        print(f"  Symbol: {result.symbol}")
        print(f"  Bars:   {result.bars}")

        print("\n" + "-" * 70)
        print("  OVERALL")
        print("-" * 70)
        print(f"  Initial capital: {result.initial_capital:,.2f}")
        print(f"  Final equity:    {result.final_equity:,.2f}")
        print(f"  Total return:    {result.total_return:+.2f}%")
        print(f"  Sharpe ratio:    {result.sharpe_ratio:.2f}")
        print(f"  Max drawdown:    {result.max_drawdown:.2f}%")
        print(f"  Trades:          {len(result.trades)} ({result.wins} wins, {result.losses} losses)")
        print(f"  Win rate:        {result.win_rate:.1f}%")

        if result.signal_counts:
            print("\n" + "-" * 70)
            print("  SIGNALS")
            print("-" * 70)
            for action in ("BUY", "SELL", "HOLD"):
                print(f"  {action:<6} {result.signal_counts.get(action, 0):>6}")

        if result.trades:
            print("\n" + "-" * 70)
            print("  TRADES (last 10)")
            print("-" * 70)
            print(f"  {'Entry':>6} {'Exit':>6} {'Entry px':>12} {'Exit px':>12} {'Return':>9}  Reason")
            for t in result.trades[-10:]:
                print(
                    f"  {t.entry_index:>6} {t.exit_index:>6} {t.entry_price:>12.4f} "
                    f"{t.exit_price:>12.4f} {t.return_pct:>+8.2f}%  {t.exit_reason}"
                )

        print("\n" + "=" * 70)

    @staticmethod
    def to_dict(result: ReplayResult) -> dict:
        """Convert results to JSON-serializable dict."""
        return {
            "metadata": {
                "symbol": result.symbol,
                "strategy": result.strategy_name,
                "bars": result.bars,
            },
            "overall": {
                "initial_capital": result.initial_capital,
                "final_equity": round(result.final_equity, 2),
                "total_return": round(result.total_return, 4),
                "sharpe_ratio": round(result.sharpe_ratio, 4),
                "max_drawdown": round(result.max_drawdown, 4),
                "win_rate": round(result.win_rate, 2),
                "trades": len(result.trades),
                "wins": result.wins,
                "losses": result.losses,
            },
            "signal_counts": result.signal_counts,
            "trades": [
                {
                    "entry_index": t.entry_index,
                    "exit_index": t.exit_index,
                    "entry_price": t.entry_price,
                    "exit_price": t.exit_price,
                    "quantity": t.quantity,
                    "pnl": t.pnl,
                    "exit_reason": t.exit_reason,
                }
                for t in result.trades
            ],
            "equity_curve": result.equity_curve,
        }

    @staticmethod
    def save_json(result: ReplayResult, filepath: str) -> None:
        """Save results to JSON file."""
        data = ReportFormatter.to_dict(result)
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)
        print(f"\nResults saved to {filepath}")
