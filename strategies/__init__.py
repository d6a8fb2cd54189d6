"""
Scoring strategies module
Contains indicator helpers and the CAN SLIM / momentum / composite scorers
"""

from .signals import (
    sma,
    compute_rsi,
    volume_ratio,
    pct_from_high,
    clamp_score,
)
from .scorers import (
    StockPick,
    NoOpinion,
    ScoreResult,
    SCORERS,
    rating_for_score,
    score_canslim,
    score_technical_momentum,
    score_composite,
)

__all__ = [
    "sma",
    "compute_rsi",
    "volume_ratio",
    "pct_from_high",
    "clamp_score",
    "StockPick",
    "NoOpinion",
    "ScoreResult",
    "SCORERS",
    "rating_for_score",
    "score_canslim",
    "score_technical_momentum",
    "score_composite",
]
