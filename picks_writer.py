#!/usr/bin/env python3
"""
Picks Writer - Serializes the daily picks document and prints the run summary.
"""

import json
import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import pytz

from strategies.scorers import StockPick, STRONG_BUY, BUY, HOLD
from utils.helpers import log_info

SUMMARY_RATINGS = (STRONG_BUY, BUY, HOLD)

# Output locations, relative to the working directory
DATA_DIR = "data"
PUBLIC_DATA_DIR = os.path.join("public", "data")
OUTPUT_FILENAME = "daily-stocks.json"


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix, e.g. 2024-05-01T13:30:00.000Z"""
    now = now or datetime.now(pytz.UTC)
    if now.tzinfo is None:
        now = pytz.UTC.localize(now)
    now = now.astimezone(pytz.UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_document(picks: Sequence[StockPick], now: Optional[datetime] = None) -> Dict:
    return {
        "lastUpdated": iso_timestamp(now),
        "totalPicks": len(picks),
        "stocks": [pick.to_dict() for pick in picks],
    }


def default_output_paths(base_dir: Optional[str] = None) -> List[str]:
    """Primary and public (web) locations of the picks file."""
    base_dir = base_dir or os.getcwd()
    return [
        os.path.join(base_dir, DATA_DIR, OUTPUT_FILENAME),
        os.path.join(base_dir, PUBLIC_DATA_DIR, OUTPUT_FILENAME),
    ]


def write_document(document: Dict, paths: Sequence[str]) -> List[str]:
    """Write the document to every path, creating directories. Errors propagate."""
    written = []
    for path in paths:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        log_info(f"Wrote {document.get('totalPicks', 0)} picks to {path}")
        written.append(path)
    return written


def summarize_picks(picks: Sequence[StockPick]) -> Dict:
    counts = {rating: sum(1 for p in picks if p.rating == rating) for rating in SUMMARY_RATINGS}
    top = picks[0] if picks else None
    return {
        "counts": counts,
        "top_pick": {"symbol": top.symbol, "score": top.score} if top else None,
    }


def print_summary(picks: Sequence[StockPick]):
    summary = summarize_picks(picks)

    print("\n📊 Summary:")
    for rating, count in summary["counts"].items():
        print(f"  • {rating}: {count}")

    top = summary["top_pick"]
    if top:
        print(f"  • Top Pick: {top['symbol']} ({top['score']}/100)")
    else:
        print("  • Top Pick: None")
    return summary
