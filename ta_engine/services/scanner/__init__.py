"""
Pattern Scanner

Detects candlestick patterns on the latest candles.
"""

from ta_engine.services.scanner.patterns import (
    BULLISH_ENGULFING,
    BEARISH_ENGULFING,
    BULLISH_HAMMER,
    SHOOTING_STAR,
    detect_patterns,
    detect_engulfing,
    detect_pin_bar,
)

__all__ = [
    "BULLISH_ENGULFING",
    "BEARISH_ENGULFING",
    "BULLISH_HAMMER",
    "SHOOTING_STAR",
    "detect_patterns",
    "detect_engulfing",
    "detect_pin_bar",
]
