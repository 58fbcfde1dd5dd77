"""
Candlestick Pattern Detection

Detects reversal shapes on the latest candle (and the one before it).
"""

from dataclasses import dataclass
from typing import Sequence

from ta_engine.schemas.market import Candle


BULLISH_ENGULFING = "Bullish Engulfing"
BEARISH_ENGULFING = "Bearish Engulfing"
BULLISH_HAMMER = "Bullish Hammer"
SHOOTING_STAR = "Shooting Star"

# Current body must exceed the previous body by this factor
ENGULFING_BODY_RATIO = 1.5
# Wick must exceed the body by this factor
PIN_BAR_WICK_RATIO = 2.5


@dataclass(frozen=True)
class CandleShape:
    """Body and wick geometry of one candle."""

    body: float
    upper_wick: float
    lower_wick: float
    bullish: bool
    bearish: bool

    @classmethod
    def of(cls, candle: Candle) -> "CandleShape":
        return cls(
            body=abs(candle.close - candle.open),
            upper_wick=candle.high - max(candle.open, candle.close),
            lower_wick=min(candle.open, candle.close) - candle.low,
            bullish=candle.close > candle.open,
            bearish=candle.close < candle.open,
        )


def detect_engulfing(previous: Candle, current: Candle) -> list[str]:
    """Two-candle engulfing: bigger body, opposite direction."""
    prev_shape = CandleShape.of(previous)
    cur_shape = CandleShape.of(current)

    if cur_shape.body <= prev_shape.body * ENGULFING_BODY_RATIO:
        return []

    if cur_shape.bullish and prev_shape.bearish:
        return [BULLISH_ENGULFING]
    if cur_shape.bearish and prev_shape.bullish:
        return [BEARISH_ENGULFING]
    return []


def detect_pin_bar(candle: Candle) -> list[str]:
    """Single-candle hammer / shooting star from wick-to-body ratio."""
    shape = CandleShape.of(candle)
    found = []

    if shape.lower_wick > shape.body * PIN_BAR_WICK_RATIO:
        found.append(BULLISH_HAMMER)
    if shape.upper_wick > shape.body * PIN_BAR_WICK_RATIO:
        found.append(SHOOTING_STAR)

    return found


def detect_patterns(candles: Sequence[Candle]) -> list[str]:
    """
    Detect patterns on the latest candle.

    Engulfing needs two candles, pin bars need one. Several patterns can
    match at once; names are unique and kept in detection order.
    """
    if not candles:
        return []

    found: list[str] = []
    if len(candles) >= 2:
        found.extend(detect_engulfing(candles[-2], candles[-1]))
    found.extend(detect_pin_bar(candles[-1]))

    return list(dict.fromkeys(found))
