#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config_validated
import stock_data_fetcher
from stock_data_fetcher import MarketData, percent_change
from strategies.scorers import StockPick, rating_for_score


def build_market_data(symbol="TEST", closes=None, volumes=None, **overrides):
    """MarketData with change windows derived from the closes"""
    closes = list(closes) if closes is not None else [100.0 + i for i in range(60)]
    volumes = list(volumes) if volumes is not None else [1_000_000.0] * len(closes)
    fields = dict(
        symbol=symbol,
        name=f"{symbol} Inc.",
        price=closes[-1],
        closes=closes,
        volumes=volumes,
        change_24h_pct=percent_change(closes, 1),
        change_7d_pct=percent_change(closes, 5),
        change_30d_pct=percent_change(closes, 21),
        change_90d_pct=percent_change(closes, 63),
        fifty_two_week_high=max(closes),
        fifty_two_week_low=min(closes),
        avg_volume=sum(volumes) / len(volumes),
    )
    fields.update(overrides)
    return MarketData(**fields)


def build_pick(symbol, score, algorithm="Test", timeframe="test"):
    return StockPick(
        symbol=symbol,
        name=symbol,
        score=score,
        rating=rating_for_score(score),
        algorithm=algorithm,
        timeframe=timeframe,
        price=10.0,
    )


@pytest.fixture
def make_market_data():
    return build_market_data


@pytest.fixture
def make_pick():
    return build_pick


@pytest.fixture
def sample_price_data():
    """Provide sample daily closes for testing"""
    return {
        "uptrend": [100 * 1.003 ** i for i in range(260)],
        "downtrend": [100 * 0.997 ** i for i in range(260)],
        "sideways": [100 + (i % 5) for i in range(260)],
        "short": [100 + i for i in range(10)],
    }


@pytest.fixture(autouse=True)
def reset_test_environment(monkeypatch):
    """Reset environment and cached config before each test"""
    for var in ("DAILY_PICKS_HISTORY_PERIOD", "DAILY_PICKS_INCLUDE_FUNDAMENTALS",
                "DAILY_PICKS_LOG_PATH"):
        monkeypatch.delenv(var, raising=False)

    # No log files from test runs
    monkeypatch.setenv("SCHEDULED_TASK_MODE", "1")
    monkeypatch.setattr(stock_data_fetcher, "MIN_REQUEST_INTERVAL_SECONDS", 0.0)
    monkeypatch.setattr(config_validated, "_config", None)
    yield
