#!/usr/bin/env python3
"""
Price/volume indicator helpers shared by the scorers.

All functions take plain lists (oldest first) and degrade to neutral values
when there is not enough data instead of raising.
"""

from typing import List, Optional


def sma(closes: List[float], window: int) -> float:
    if len(closes) < window:
        return closes[-1] if closes else 0.0
    return sum(closes[-window:]) / window


def compute_rsi(closes: List[float], period: int = 14) -> float:
    """
    Calculate Relative Strength Index (RSI).
    Returns value between 0-100.
    - RSI > 70 = Overbought
    - RSI < 30 = Oversold
    - RSI 40-60 = Neutral
    """
    if len(closes) < period + 1:
        return 50.0  # Neutral if insufficient data

    gains = []
    losses = []
    for i in range(len(closes) - period, len(closes)):
        change = closes[i] - closes[i - 1]
        if change > 0:
            gains.append(change)
            losses.append(0.0)
        else:
            gains.append(0.0)
            losses.append(abs(change))

    avg_gain = sum(gains) / period
    avg_loss = sum(losses) / period

    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else 50.0

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def volume_ratio(volumes: List[float], recent: int = 5, lookback: int = 50) -> float:
    """
    Ratio of recent average volume to the longer-term average.
    - > 1.5 = volume surge
    - < 0.8 = drying up
    """
    if len(volumes) < recent + 1:
        return 1.0

    recent_avg = sum(volumes[-recent:]) / recent
    base = volumes[-lookback:-recent] if len(volumes) > recent else []
    if not base:
        return 1.0
    base_avg = sum(base) / len(base)
    if base_avg == 0:
        return 1.0
    return recent_avg / base_avg


def pct_from_high(price: float, high: Optional[float]) -> Optional[float]:
    """Percent below the given high (0.0 at the high, 10.0 = 10% below)."""
    if not high or high <= 0:
        return None
    return max(0.0, (high - price) / high * 100)


def clamp_score(value: float) -> int:
    return int(round(max(0.0, min(100.0, value))))
