#!/usr/bin/env python3
"""
Daily Stock Picks Generator - combines the screeners into one ranked list.

- CAN SLIM Growth Screener (long-term)
- Technical Momentum (short-term, 7-day and 24h)
- Composite Rating (medium-term)

Output: data/daily-stocks.json and public/data/daily-stocks.json
Usage: python generate_daily_stocks.py
"""

import sys
from typing import List, Optional

from dotenv import load_dotenv

from config_validated import get_config
from picks_writer import build_document, default_output_paths, write_document, print_summary
from stock_scanner import screen_universe, MAX_PICKS
from strategies.scorers import StockPick
from utils.helpers import setup_logging, log_error

ERROR_PREFIX = "❌ Error generating stock picks:"


def generate_daily_picks(symbols: Optional[List[str]] = None, fetcher=None,
                         base_dir: Optional[str] = None) -> List[StockPick]:
    """Screen, write both output files and print the summary. Raises on failure."""
    stocks = screen_universe(
        symbols,
        fetcher=fetcher,
        max_picks=MAX_PICKS,
        verbose=True,
    )

    document = build_document(stocks)
    primary, *mirrors = write_document(document, default_output_paths(base_dir))

    print(f"\n✅ Generated {len(stocks)} stock picks")
    print(f"📁 Saved to: {primary}")
    for path in mirrors:
        print(f"📁 Also saved to: {path}")

    print_summary(stocks)
    return stocks


def main() -> int:
    load_dotenv()
    print("📈 Generating daily stock picks...\n")

    try:
        setup_logging(get_config().log_path)
        generate_daily_picks()
    except Exception as e:
        log_error(f"Daily picks run failed: {e}")
        print(f"{ERROR_PREFIX} {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
