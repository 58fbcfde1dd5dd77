"""
Unit tests for schemas/market.py and schemas/analysis.py
"""

import pytest
from pydantic import ValidationError

from ta_engine.schemas.analysis import (
    AdxReading,
    EmaBundle,
    RsiReading,
    Signal,
    SignalSummary,
    MarketRegime,
)
from ta_engine.schemas.market import (
    AnalysisRequest,
    Candle,
    MultiTimeframeRequest,
    check_candle_order,
)


def candle(**overrides):
    data = {"time": 0, "open": 100, "high": 101, "low": 99, "close": 100.5, "volume": 10}
    data.update(overrides)
    return Candle(**data)


class TestCandle:
    def test_valid(self):
        c = candle()
        assert c.close == 100.5
        assert c.volume == 10

    def test_zero_volume_allowed(self):
        assert candle(volume=0).volume == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"close": 0},
            {"open": -1},
            {"volume": -5},
            {"time": -1},
            {"close": float("nan")},
            {"high": float("inf")},
            {"close": "abc"},
            {"close": True},
            {"time": False},
            {"high": 1e101},
            {"volume": 1e100},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            candle(**overrides)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"high": 98},
            {"high": 100.2},
            {"low": 100.2},
        ],
    )
    def test_inconsistent_ohlc(self, overrides):
        with pytest.raises(ValidationError):
            candle(**overrides)

    def test_numeric_strings_coerced(self):
        assert candle(close="100.5").close == 100.5

    def test_frozen(self):
        c = candle()
        with pytest.raises(ValidationError):
            c.close = 1.0


class TestCandleOrder:
    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            check_candle_order([])

    def test_backwards_rejected(self):
        with pytest.raises(ValueError):
            check_candle_order([candle(time=10), candle(time=5)])

    def test_ascending_and_equal_accepted(self):
        candles = [candle(time=1), candle(time=1), candle(time=2)]
        assert check_candle_order(candles) == candles


class TestRequests:
    def test_analysis_request_from_dicts(self):
        request = AnalysisRequest(
            symbol="ETH/USDT",
            candles=[{"time": 0, "open": 1, "high": 1, "low": 1, "close": 1, "volume": 0}],
        )
        assert request.candles[0].close == 1
        assert request.engine_version is None

    def test_analysis_request_order_enforced(self):
        with pytest.raises(ValidationError):
            AnalysisRequest(candles=[candle(time=2), candle(time=1)])

    def test_multi_timeframe_request_both_checked(self):
        with pytest.raises(ValidationError):
            MultiTimeframeRequest(entry_candles=[candle()], anchor_candles=[])


class TestAnalysisModels:
    def test_reading_defaults(self):
        rsi = RsiReading()
        assert (rsi.name, rsi.value, rsi.signal, rsi.strength) == ("RSI", 50.0, Signal.NEUTRAL, 50)

    def test_strength_bounds(self):
        with pytest.raises(ValidationError):
            RsiReading(strength=101)

    def test_direction_property(self):
        assert AdxReading(signal=Signal.UP).direction == Signal.UP
        bundle = EmaBundle(ema12=2, ema26=1, ema50=1, trend=Signal.UP)
        assert bundle.direction == Signal.UP

    def test_populate_by_alias(self):
        summary = SignalSummary.model_validate(
            {
                "upSignals": 1,
                "downSignals": 0,
                "neutralSignals": 2,
                "upScore": 33,
                "downScore": 0,
                "alignment": 33.3,
                "regime": "RANGING",
            }
        )
        assert summary.up_signals == 1
        assert summary.regime == MarketRegime.RANGING

    def test_alignment_bounds(self):
        with pytest.raises(ValidationError):
            SignalSummary(
                up_signals=0,
                down_signals=0,
                neutral_signals=0,
                up_score=0,
                down_score=0,
                alignment=101,
                regime=MarketRegime.RANGING,
            )
