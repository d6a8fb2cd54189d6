#!/usr/bin/env python3
"""
Unit tests for the CAN SLIM, momentum and composite scorers
Run with: pytest test_scorers.py -v
"""

import pytest

from strategies.scorers import (
    StockPick,
    NoOpinion,
    SCORERS,
    rating_for_score,
    score_canslim,
    score_technical_momentum,
    score_composite,
    STRONG_BUY,
    BUY,
    HOLD,
    SELL,
    STRONG_SELL,
)


class TestRatingForScore:

    @pytest.mark.parametrize("score,rating", [
        (100, STRONG_BUY), (80, STRONG_BUY),
        (79, BUY), (65, BUY),
        (64, HOLD), (50, HOLD),
        (49, SELL), (35, SELL),
        (34, STRONG_SELL), (0, STRONG_SELL),
    ])
    def test_boundaries(self, score, rating):
        assert rating_for_score(score) == rating


class TestStockPick:

    def test_to_dict_shape(self, make_pick):
        pick = make_pick("AAPL", 72)
        data = pick.to_dict()
        assert data["symbol"] == "AAPL"
        assert data["score"] == 72
        assert data["rating"] == BUY
        assert "changePercent" in data
        assert data["reasons"] == []

    def test_is_immutable(self, make_pick):
        pick = make_pick("AAPL", 72)
        with pytest.raises(Exception):
            pick.score = 10


class TestCanslim:

    def test_strong_growth_leader(self, make_market_data, sample_price_data):
        data = make_market_data(
            "NVDA", sample_price_data["uptrend"],
            earnings_growth=40.0, revenue_growth=30.0, institutional_ownership=60.0,
        )
        result = score_canslim(data)
        assert isinstance(result, StockPick)
        # C20 + A15 + N15 + L15 + I10 + M15, no volume surge
        assert result.score == 90
        assert result.rating == STRONG_BUY
        assert result.algorithm == "CAN SLIM"

    def test_weak_stock_scores_low(self, make_market_data, sample_price_data):
        data = make_market_data("BAD", sample_price_data["downtrend"],
                                earnings_growth=5.0, revenue_growth=5.0)
        result = score_canslim(data)
        assert isinstance(result, StockPick)
        assert result.score == 0
        assert result.rating == STRONG_SELL

    def test_no_fundamentals_is_no_opinion(self, make_market_data, sample_price_data):
        result = score_canslim(make_market_data("ETF", sample_price_data["uptrend"]))
        assert isinstance(result, NoOpinion)
        assert result.strategy == "canslim"

    def test_short_history_is_no_opinion(self, make_market_data, sample_price_data):
        data = make_market_data("NEW", sample_price_data["short"], earnings_growth=50.0)
        assert isinstance(score_canslim(data), NoOpinion)

    def test_volume_surge_adds_points(self, make_market_data, sample_price_data):
        closes = sample_price_data["uptrend"]
        flat = make_market_data("A", closes, earnings_growth=40.0)
        surge_volumes = [1_000_000.0] * (len(closes) - 5) + [3_000_000.0] * 5
        surging = make_market_data("A", closes, volumes=surge_volumes, earnings_growth=40.0)
        assert score_canslim(surging).score == score_canslim(flat).score + 10


class TestTechnicalMomentum:

    @pytest.mark.parametrize("timeframe", ["24h", "7d"])
    def test_returns_pick_in_range(self, make_market_data, sample_price_data, timeframe):
        result = score_technical_momentum(make_market_data("TSLA", sample_price_data["uptrend"]), timeframe)
        assert isinstance(result, StockPick)
        assert 0 <= result.score <= 100
        assert result.timeframe == timeframe

    def test_default_timeframe_is_7d(self, make_market_data, sample_price_data):
        result = score_technical_momentum(make_market_data("TSLA", sample_price_data["uptrend"]))
        assert result.timeframe == "7d"

    def test_invalid_timeframe_raises(self, make_market_data):
        with pytest.raises(ValueError):
            score_technical_momentum(make_market_data("TSLA"), "1y")

    def test_short_history_is_no_opinion(self, make_market_data, sample_price_data):
        result = score_technical_momentum(make_market_data("NEW", sample_price_data["short"]), "24h")
        assert isinstance(result, NoOpinion)
        assert result.strategy == "momentum-24h"

    def test_missing_change_is_no_opinion(self, make_market_data, sample_price_data):
        data = make_market_data("GME", sample_price_data["uptrend"], change_24h_pct=None)
        assert isinstance(score_technical_momentum(data, "24h"), NoOpinion)

    def test_rising_beats_falling(self, make_market_data, sample_price_data):
        up = score_technical_momentum(make_market_data("UP", sample_price_data["uptrend"]), "7d")
        down = score_technical_momentum(make_market_data("DN", sample_price_data["downtrend"]), "7d")
        assert up.score > down.score


class TestComposite:

    def test_uptrend_is_buy_or_better(self, make_market_data, sample_price_data):
        result = score_composite(make_market_data("MSFT", sample_price_data["uptrend"]))
        assert isinstance(result, StockPick)
        assert result.score == 75
        assert result.rating == BUY

    def test_downtrend_scores_low(self, make_market_data, sample_price_data):
        result = score_composite(make_market_data("F", sample_price_data["downtrend"]))
        assert result.score == 25
        assert result.rating == STRONG_SELL

    def test_fundamentals_move_score(self, make_market_data, sample_price_data):
        closes = sample_price_data["sideways"]
        cheap = score_composite(make_market_data("A", closes, pe_ratio=15.0, earnings_growth=30.0,
                                                 profit_margin=25.0))
        pricey = score_composite(make_market_data("A", closes, pe_ratio=80.0, earnings_growth=-30.0,
                                                  profit_margin=-5.0))
        assert cheap.score > pricey.score

    def test_short_history_is_no_opinion(self, make_market_data, sample_price_data):
        assert isinstance(score_composite(make_market_data("NEW", sample_price_data["short"])), NoOpinion)


def test_scorer_registry():
    assert SCORERS == {
        "canslim": score_canslim,
        "momentum": score_technical_momentum,
        "composite": score_composite,
    }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
