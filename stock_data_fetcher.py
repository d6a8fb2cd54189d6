#!/usr/bin/env python3
"""
Stock Data Fetcher - Bulk daily history plus fundamentals from Yahoo Finance.

One yf.download() call covers price history for the whole universe, then
Ticker.info is queried per symbol for the fundamentals the CAN SLIM and
composite scorers use. Symbols without usable history are dropped.
"""

import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd
import yfinance as yf

from config_validated import get_config
from utils.helpers import log_info, log_warn

# Minimum spacing between Ticker.info requests (seconds)
MIN_REQUEST_INTERVAL_SECONDS = 0.25
_last_info_request = 0.0

# Trading-day offsets used for the change windows
BARS_24H = 1
BARS_7D = 5
BARS_30D = 21
BARS_90D = 63
BARS_52W = 252


@dataclass(frozen=True)
class MarketData:
    symbol: str
    name: str
    price: float
    closes: List[float] = field(default_factory=list)
    volumes: List[float] = field(default_factory=list)
    change_24h_pct: Optional[float] = None
    change_7d_pct: Optional[float] = None
    change_30d_pct: Optional[float] = None
    change_90d_pct: Optional[float] = None
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    avg_volume: Optional[float] = None
    market_cap: Optional[float] = None
    pe_ratio: Optional[float] = None
    earnings_growth: Optional[float] = None  # percent, quarter over quarter
    revenue_growth: Optional[float] = None  # percent
    profit_margin: Optional[float] = None  # percent
    return_on_equity: Optional[float] = None  # percent
    institutional_ownership: Optional[float] = None  # percent of float

    def change_for(self, timeframe: str) -> Optional[float]:
        """Price change for a momentum window ("24h" or "7d")."""
        if timeframe == "24h":
            return self.change_24h_pct
        if timeframe == "7d":
            return self.change_7d_pct
        raise ValueError(f"Unsupported timeframe: {timeframe}")


def yahoo_symbol(symbol: str) -> str:
    # BRK.B -> BRK-B
    return symbol.replace('.', '-')


def percent_change(closes: List[float], bars: int) -> Optional[float]:
    """Percent change of the last close versus the close `bars` bars earlier."""
    if bars < 1 or len(closes) <= bars:
        return None
    prev = closes[-1 - bars]
    if prev == 0:
        return None
    return (closes[-1] - prev) / prev * 100


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _percent(info: Dict[str, Any], key: str) -> Optional[float]:
    # Yahoo reports ratios as fractions (0.25 == 25%)
    value = _number(info.get(key))
    return value * 100 if value is not None else None


def build_market_data(symbol: str, history: Optional[pd.DataFrame],
                      info: Optional[Dict[str, Any]] = None) -> Optional[MarketData]:
    """
    Turn a daily OHLCV frame and a Ticker.info dict into a MarketData record.
    Returns None when the frame has fewer than two valid closes.
    """
    if history is None or history.empty or "Close" not in history.columns:
        return None

    info = info or {}
    frame = history.dropna(subset=["Close"])
    if len(frame) < 2:
        return None

    closes = [float(c) for c in frame["Close"].tolist()]
    if "Volume" in frame.columns:
        volumes = [float(v) for v in frame["Volume"].fillna(0).tolist()]
    else:
        volumes = [0.0] * len(closes)

    year = frame.tail(BARS_52W)
    high_col = year["High"] if "High" in year.columns else year["Close"]
    low_col = year["Low"] if "Low" in year.columns else year["Close"]

    high = _number(info.get("fiftyTwoWeekHigh")) or _number(high_col.max())
    low = _number(info.get("fiftyTwoWeekLow")) or _number(low_col.min())

    avg_volume = _number(info.get("averageVolume"))
    if avg_volume is None and volumes:
        recent = volumes[-50:]
        avg_volume = sum(recent) / len(recent)

    return MarketData(
        symbol=symbol,
        name=info.get("shortName") or info.get("longName") or symbol,
        price=closes[-1],
        closes=closes,
        volumes=volumes,
        change_24h_pct=percent_change(closes, BARS_24H),
        change_7d_pct=percent_change(closes, BARS_7D),
        change_30d_pct=percent_change(closes, BARS_30D),
        change_90d_pct=percent_change(closes, BARS_90D),
        fifty_two_week_high=high,
        fifty_two_week_low=low,
        avg_volume=avg_volume,
        market_cap=_number(info.get("marketCap")),
        pe_ratio=_number(info.get("trailingPE")),
        earnings_growth=_percent(info, "earningsQuarterlyGrowth"),
        revenue_growth=_percent(info, "revenueGrowth"),
        profit_margin=_percent(info, "profitMargins"),
        return_on_equity=_percent(info, "returnOnEquity"),
        institutional_ownership=_percent(info, "heldPercentInstitutions"),
    )


def _history_for(raw: pd.DataFrame, ticker: str) -> Optional[pd.DataFrame]:
    if raw is None or raw.empty:
        return None
    if isinstance(raw.columns, pd.MultiIndex):
        if ticker not in raw.columns.get_level_values(0):
            return None
        frame = raw[ticker]
    else:
        frame = raw
    return frame.dropna(how="all")


def _info_rate_limit():
    """Space out Ticker.info calls to avoid Yahoo throttling."""
    global _last_info_request
    elapsed = time.time() - _last_info_request
    if elapsed < MIN_REQUEST_INTERVAL_SECONDS:
        time.sleep(MIN_REQUEST_INTERVAL_SECONDS - elapsed)
    _last_info_request = time.time()


def fetch_info(ticker: str) -> Dict[str, Any]:
    """Fetch Ticker.info; an unavailable info endpoint yields an empty dict."""
    _info_rate_limit()
    try:
        return yf.Ticker(ticker).info or {}
    except Exception as e:
        log_warn(f"Fundamentals unavailable for {ticker}: {e}")
        return {}


def fetch_multiple_stocks(symbols: List[str], period: Optional[str] = None,
                          include_fundamentals: Optional[bool] = None) -> List[MarketData]:
    """
    Fetch market data for many symbols.

    Args:
        symbols: Symbols to fetch, in the order results should come back
        period: yfinance history period (default: config.history_period)
        include_fundamentals: Query Ticker.info per symbol (default: config value)

    Returns:
        MarketData records in request order. Symbols that fail are omitted.
    """
    if not symbols:
        return []

    config = get_config()
    period = period or config.history_period
    if include_fundamentals is None:
        include_fundamentals = config.include_fundamentals

    tickers = [yahoo_symbol(s) for s in symbols]
    raw = yf.download(
        tickers,
        period=period,
        interval="1d",
        group_by="ticker",
        auto_adjust=True,
        progress=False,
        threads=True,
    )

    records = []
    dropped = []
    for symbol, ticker in zip(symbols, tickers):
        history = _history_for(raw, ticker)
        if history is None or history.empty:
            dropped.append(symbol)
            continue

        info = fetch_info(ticker) if include_fundamentals else {}
        record = build_market_data(symbol, history, info)
        if record is None:
            dropped.append(symbol)
            continue
        records.append(record)

    if dropped:
        log_warn(f"No usable data for {len(dropped)} symbol(s): {', '.join(dropped)}")
    log_info(f"Fetched market data for {len(records)}/{len(symbols)} symbols")
    return records
