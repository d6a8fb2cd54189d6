#!/usr/bin/env python3
"""
Stock Scorers - CAN SLIM, technical momentum and composite rating.

Each scorer takes one MarketData record and returns either a StockPick
(score 0-100 with a rating) or a NoOpinion when the strategy cannot judge
the symbol, e.g. missing fundamentals or too little price history.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Union

from strategies.signals import sma, compute_rsi, volume_ratio, pct_from_high, clamp_score

logger = logging.getLogger("Scorers")

STRONG_BUY = "STRONG BUY"
BUY = "BUY"
HOLD = "HOLD"
SELL = "SELL"
STRONG_SELL = "STRONG SELL"

MOMENTUM_TIMEFRAMES = ("24h", "7d")

CANSLIM_MIN_BARS = 50
MOMENTUM_MIN_BARS = 21
COMPOSITE_MIN_BARS = 50


@dataclass(frozen=True)
class StockPick:
    symbol: str
    name: str
    score: int  # 0 to 100
    rating: str
    algorithm: str
    timeframe: str
    price: float
    change_percent: float = 0.0
    reasons: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "score": self.score,
            "rating": self.rating,
            "algorithm": self.algorithm,
            "timeframe": self.timeframe,
            "price": round(self.price, 2),
            "changePercent": round(self.change_percent, 2),
            "reasons": list(self.reasons),
            "metrics": dict(self.metrics),
        }


@dataclass(frozen=True)
class NoOpinion:
    """A scorer declined to rate this symbol."""
    symbol: str
    strategy: str
    reason: str


ScoreResult = Union[StockPick, NoOpinion]


def rating_for_score(score: float) -> str:
    if score >= 80:
        return STRONG_BUY
    if score >= 65:
        return BUY
    if score >= 50:
        return HOLD
    if score >= 35:
        return SELL
    return STRONG_SELL


def _round_metrics(metrics: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (round(v, 2) if isinstance(v, float) else v) for k, v in metrics.items()}


def score_canslim(data) -> ScoreResult:
    """
    CAN SLIM growth screen.

    Points (max 100):
    - C  quarterly earnings growth      20  (>= 25%, half credit >= 10%)
    - A  revenue growth                 15  (>= 25%, half credit >= 10%)
    - N  within 15% of 52-week high     15
    - S  volume surge (5d vs 50d)       10  (>= 1.5x, half credit >= 1.2x)
    - L  90-day leadership              15  (>= 20%, half credit > 0)
    - I  institutional ownership        10  (20%-90% of float)
    - M  price above 50-day SMA         15
    """
    if data.earnings_growth is None and data.revenue_growth is None:
        return NoOpinion(data.symbol, "canslim", "no earnings or revenue growth data")
    if len(data.closes) < CANSLIM_MIN_BARS:
        return NoOpinion(data.symbol, "canslim", f"only {len(data.closes)} bars of history")

    score = 0.0
    reasons = []

    eps = data.earnings_growth
    if eps is not None and eps >= 25:
        score += 20
        reasons.append(f"C: quarterly earnings +{eps:.0f}%")
    elif eps is not None and eps >= 10:
        score += 10

    rev = data.revenue_growth
    if rev is not None and rev >= 25:
        score += 15
        reasons.append(f"A: revenue growth +{rev:.0f}%")
    elif rev is not None and rev >= 10:
        score += 7.5

    off_high = pct_from_high(data.price, data.fifty_two_week_high)
    if off_high is not None and off_high <= 15:
        score += 15
        reasons.append(f"N: {off_high:.1f}% below 52-week high")

    vol = volume_ratio(data.volumes)
    if vol >= 1.5:
        score += 10
        reasons.append(f"S: volume {vol:.1f}x average")
    elif vol >= 1.2:
        score += 5

    perf = data.change_90d_pct
    if perf is not None and perf >= 20:
        score += 15
        reasons.append(f"L: +{perf:.0f}% over 90 days")
    elif perf is not None and perf > 0:
        score += 7.5

    inst = data.institutional_ownership
    if inst is not None and 20 <= inst <= 90:
        score += 10
        reasons.append(f"I: {inst:.0f}% institutional ownership")

    sma50 = sma(data.closes, 50)
    if data.price > sma50:
        score += 15
        reasons.append("M: trading above 50-day average")

    final = clamp_score(score)
    return StockPick(
        symbol=data.symbol,
        name=data.name,
        score=final,
        rating=rating_for_score(final),
        algorithm="CAN SLIM",
        timeframe="long-term",
        price=data.price,
        change_percent=data.change_24h_pct or 0.0,
        reasons=reasons,
        metrics=_round_metrics({
            "earningsGrowth": eps,
            "revenueGrowth": rev,
            "pctFromHigh": off_high,
            "volumeRatio": vol,
            "change90d": perf,
            "institutionalOwnership": inst,
        }),
    )


def score_technical_momentum(data, timeframe: str = "7d") -> ScoreResult:
    """
    Short-term momentum over a 24h (last bar) or 7d (last 5 bars) window.

    Starts from a neutral 50 and adjusts for:
    - window price change (+/- up to 25)
    - RSI: 50-70 rewarded, > 80 overbought penalty, < 30 oversold penalty
    - volume ratio (up to +15)
    - price vs 20-day SMA (+/- 10)
    """
    if timeframe not in MOMENTUM_TIMEFRAMES:
        raise ValueError(f"timeframe must be one of {MOMENTUM_TIMEFRAMES}, got {timeframe!r}")

    strategy = f"momentum-{timeframe}"
    if len(data.closes) < MOMENTUM_MIN_BARS:
        return NoOpinion(data.symbol, strategy, f"only {len(data.closes)} bars of history")

    change = data.change_for(timeframe)
    if change is None:
        return NoOpinion(data.symbol, strategy, f"no {timeframe} price change")

    # 24h moves are smaller, so weight them more per percent
    per_pct = 5.0 if timeframe == "24h" else 2.5
    score = 50.0 + max(-25.0, min(25.0, change * per_pct))
    reasons = [f"{timeframe} change {change:+.1f}%"]

    rsi = compute_rsi(data.closes)
    if 50 <= rsi <= 70:
        score += 10
        reasons.append(f"RSI {rsi:.0f} (bullish, not overbought)")
    elif rsi > 80:
        score -= 10
        reasons.append(f"RSI {rsi:.0f} (overbought)")
    elif rsi < 30:
        score -= 5
        reasons.append(f"RSI {rsi:.0f} (oversold)")

    vol = volume_ratio(data.volumes)
    if vol >= 2.0:
        score += 15
        reasons.append(f"Volume {vol:.1f}x average")
    elif vol >= 1.3:
        score += 8

    sma20 = sma(data.closes, 20)
    if data.price > sma20:
        score += 10
    else:
        score -= 10

    final = clamp_score(score)
    return StockPick(
        symbol=data.symbol,
        name=data.name,
        score=final,
        rating=rating_for_score(final),
        algorithm="Technical Momentum",
        timeframe=timeframe,
        price=data.price,
        change_percent=change,
        reasons=reasons,
        metrics=_round_metrics({
            "rsi": rsi,
            "volumeRatio": vol,
            "sma20": sma20,
        }),
    )


def _technical_component(data) -> float:
    sma50 = sma(data.closes, 50)
    sma200 = sma(data.closes, 200)
    points = 50.0
    points += 25 if data.price > sma50 else -25
    if len(data.closes) >= 200:
        points += 25 if sma50 > sma200 else -25
    return max(0.0, min(100.0, points))


def _momentum_component(data) -> float:
    change = data.change_30d_pct
    if change is None:
        return 50.0
    return max(0.0, min(100.0, 50.0 + change * 2.5))


def _fundamental_component(data) -> float:
    points = 50.0
    pe = data.pe_ratio
    if pe is not None:
        if 0 < pe <= 25:
            points += 20
        elif pe > 50:
            points -= 15
        elif pe <= 0:
            points -= 20
    if data.earnings_growth is not None:
        points += max(-20.0, min(20.0, data.earnings_growth / 2))
    if data.profit_margin is not None:
        points += 10 if data.profit_margin >= 15 else (-10 if data.profit_margin < 0 else 0)
    return max(0.0, min(100.0, points))


def score_composite(data) -> ScoreResult:
    """Blended medium-term rating: 40% technical, 30% momentum, 30% fundamental."""
    if len(data.closes) < COMPOSITE_MIN_BARS:
        return NoOpinion(data.symbol, "composite", f"only {len(data.closes)} bars of history")

    technical = _technical_component(data)
    momentum = _momentum_component(data)
    fundamental = _fundamental_component(data)
    final = clamp_score(0.4 * technical + 0.3 * momentum + 0.3 * fundamental)

    reasons = [
        f"Technical {technical:.0f}/100",
        f"Momentum {momentum:.0f}/100",
        f"Fundamental {fundamental:.0f}/100",
    ]
    logger.debug(f"{data.symbol} composite: {reasons}")

    return StockPick(
        symbol=data.symbol,
        name=data.name,
        score=final,
        rating=rating_for_score(final),
        algorithm="Composite Rating",
        timeframe="medium-term",
        price=data.price,
        change_percent=data.change_30d_pct or 0.0,
        reasons=reasons,
        metrics=_round_metrics({
            "technical": technical,
            "momentum": momentum,
            "fundamental": fundamental,
            "peRatio": data.pe_ratio,
        }),
    )


# strategy id -> scorer; momentum takes the timeframe as a second argument
SCORERS: Dict[str, Callable[..., ScoreResult]] = {
    "canslim": score_canslim,
    "momentum": score_technical_momentum,
    "composite": score_composite,
}
