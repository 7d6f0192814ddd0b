"""Rate a ticker from its recent daily bars.

Fetches daily candles from Yahoo Finance, runs a signal policy and prints
the rating with the notes explaining it. A negative rating reads as
overbought (sell), a positive one as oversold (buy).

Usage:
    python -m scripts.rate_ticker AAPL
    python -m scripts.rate_ticker AAPL --policy reduced
    python -m scripts.rate_ticker ^DJI --days 400
"""

from __future__ import annotations

import argparse
import sys

from src.modules.data.history import PriceHistory
from src.modules.data.protocols import ProviderError
from src.modules.data.providers.yahoo import YahooProvider
from src.modules.features.errors import RatingError
from src.modules.signals.aggregator import POLICIES, SignalAggregator
from src.modules.signals.report import format_report
from src.shared.config import load_config


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    config = load_config()

    parser = argparse.ArgumentParser(description="Rate a security with technical indicators")
    parser.add_argument("ticker", help="Symbol to rate (e.g. AAPL)")
    parser.add_argument(
        "--policy",
        default=config.signal_policy,
        choices=sorted(POLICIES),
        help="Signal policy to run (default: SIGNAL_POLICY or 'full')",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=config.lookback_days,
        help="Calendar days of history to fetch (default: LOOKBACK_DAYS or 300)",
    )
    args = parser.parse_args(argv)

    try:
        bars = PriceHistory(YahooProvider()).load(args.ticker, lookback_days=args.days)
        analysis = SignalAggregator(bars).run(args.policy)
    except (ProviderError, RatingError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_report(analysis, ticker=args.ticker))
    return 0


if __name__ == "__main__":
    sys.exit(main())
