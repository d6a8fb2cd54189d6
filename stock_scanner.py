#!/usr/bin/env python3
"""
Stock Scanner - Runs the scoring passes over a universe and ranks the picks.

Every pass applies one scorer to every fetched record and keeps results that
clear the pass threshold. Picks from all passes are then deduplicated by
symbol (highest score wins, earlier pass wins ties), sorted best first and
cut to the top N.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from stock_data_fetcher import MarketData, fetch_multiple_stocks
from strategies.scorers import SCORERS, StockPick
from utils.helpers import log_info

MAX_PICKS = 20

# Popular stocks to screen (mix of large cap, mid cap, and some penny stocks)
STOCK_UNIVERSE = [
    # Large Cap Tech
    "AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "TSLA", "NFLX",
    # Growth Stocks
    "AMD", "INTC", "CRM", "ADBE", "PYPL", "NOW", "SNOW", "PLTR",
    # Financials
    "JPM", "BAC", "GS", "MS", "V", "MA",
    # Consumer
    "WMT", "TGT", "HD", "NKE", "SBUX",
    # Energy
    "XOM", "CVX", "SLB",
    # Healthcare
    "JNJ", "PFE", "UNH", "ABBV",
    # Penny/Momentum (for short-term screener)
    "GME", "AMC", "BB", "SNDL", "NAKD",
    # Additional momentum plays
    "RIVN", "LCID", "F", "GM",
]


@dataclass(frozen=True)
class ScoringPass:
    strategy: str  # key into SCORERS
    min_score: float
    timeframe: Optional[str] = None
    label: str = ""

    @property
    def display_name(self) -> str:
        return self.label or (f"{self.strategy} ({self.timeframe})" if self.timeframe else self.strategy)


# Pass order doubles as the tie-break for equal scores
DEFAULT_SCORING_PASSES = (
    ScoringPass("canslim", 50, label="CAN SLIM Growth Screener"),
    ScoringPass("momentum", 50, timeframe="7d", label="Technical Momentum Screener (7-day)"),
    ScoringPass("momentum", 60, timeframe="24h", label="Technical Momentum Screener (24h)"),
    ScoringPass("composite", 55, label="Composite Rating Engine"),
)


def get_stock_universe(user_symbols: Optional[List[str]] = None) -> List[str]:
    """
    Get list of stocks to scan.

    Args:
        user_symbols: User-provided list of symbols, or None for the built-in universe

    Returns:
        List of stock symbols to scan
    """
    if user_symbols is not None:
        return [s.upper() for s in user_symbols]
    return STOCK_UNIVERSE.copy()


def run_scoring_pass(stock_data: Sequence[MarketData], scoring_pass: ScoringPass,
                     scorers: Optional[Dict[str, Callable]] = None,
                     verbose: bool = False) -> List[StockPick]:
    """
    Apply one scorer to every record and keep the picks at or above the threshold.
    NoOpinion results are skipped.
    """
    scorers = scorers if scorers is not None else SCORERS
    if scoring_pass.strategy not in scorers:
        raise ValueError(f"Unknown scoring strategy: {scoring_pass.strategy}")
    scorer = scorers[scoring_pass.strategy]

    if verbose:
        print(f"\n🔍 Running {scoring_pass.display_name}...")

    picks = []
    for data in stock_data:
        if scoring_pass.timeframe is not None:
            result = scorer(data, scoring_pass.timeframe)
        else:
            result = scorer(data)

        if not isinstance(result, StockPick):
            continue
        if result.score >= scoring_pass.min_score:
            picks.append(result)
            if verbose:
                print(f"  ✓ {result.symbol}: {result.score}/100 ({result.rating})")

    log_info(f"{scoring_pass.display_name}: {len(picks)} pick(s) >= {scoring_pass.min_score}")
    return picks


def dedupe_by_symbol(picks: Sequence[StockPick]) -> List[StockPick]:
    """Keep one pick per symbol: the highest score, first seen on ties."""
    best: Dict[str, StockPick] = {}
    for pick in picks:
        existing = best.get(pick.symbol)
        if existing is None or pick.score > existing.score:
            best[pick.symbol] = pick
    return list(best.values())


def rank_picks(picks: Sequence[StockPick], max_picks: int = MAX_PICKS) -> List[StockPick]:
    ranked = sorted(picks, key=lambda p: p.score, reverse=True)
    return ranked[:max_picks]


def generate_stock_picks(stock_data: Sequence[MarketData],
                         passes: Sequence[ScoringPass] = DEFAULT_SCORING_PASSES,
                         max_picks: int = MAX_PICKS,
                         scorers: Optional[Dict[str, Callable]] = None,
                         verbose: bool = False) -> List[StockPick]:
    """
    Score fetched records with every pass and return the ranked top picks.

    Args:
        stock_data: Fetched market data, in fetch order
        passes: Scoring passes, run in order
        max_picks: Maximum number of picks to return
        scorers: Strategy id -> scorer mapping (default: SCORERS)
        verbose: Print per-pass progress

    Returns:
        At most max_picks picks, unique by symbol, sorted best to worst
    """
    all_picks = []
    for scoring_pass in passes:
        all_picks.extend(run_scoring_pass(stock_data, scoring_pass, scorers, verbose=verbose))

    unique_picks = dedupe_by_symbol(all_picks)
    return rank_picks(unique_picks, max_picks)


def screen_universe(symbols: Optional[List[str]] = None,
                    fetcher: Optional[Callable[[List[str]], List[MarketData]]] = None,
                    passes: Sequence[ScoringPass] = DEFAULT_SCORING_PASSES,
                    max_picks: int = MAX_PICKS,
                    scorers: Optional[Dict[str, Callable]] = None,
                    verbose: bool = False) -> List[StockPick]:
    """Fetch the universe, then score and rank it."""
    symbols = get_stock_universe(symbols)
    fetcher = fetcher or fetch_multiple_stocks

    if verbose:
        print("📊 Fetching stock data...")
    stock_data = fetcher(symbols)
    if verbose:
        print(f"✅ Fetched data for {len(stock_data)} stocks")

    return generate_stock_picks(stock_data, passes, max_picks, scorers, verbose=verbose)
