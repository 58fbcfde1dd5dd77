"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
NO LLM INVOLVEMENT - All math is deterministic.

Every function reports the value for the latest candle only. When the series
is shorter than the lookback, functions either return a documented fallback
value or ``None`` so the caller can substitute a neutral reading.

Known simplifications kept for output parity:
    - EMA is seeded with the first element, not an SMA of the first period.
    - ADX is the raw DX of the last bar (no second smoothing pass).
    - Stochastic %D equals %K; MACD histogram equals the MACD line.
"""

import numpy as np
from typing import Optional, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class OHLCVData:
    """OHLCV data arrays for calculations."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_candles(cls, candles: Sequence) -> "OHLCVData":
        """Convert a candle list to float64 arrays."""
        return cls(
            timestamps=np.array([c.time for c in candles], dtype=np.int64),
            opens=np.array([c.open for c in candles], dtype=np.float64),
            highs=np.array([c.high for c in candles], dtype=np.float64),
            lows=np.array([c.low for c in candles], dtype=np.float64),
            closes=np.array([c.close for c in candles], dtype=np.float64),
            volumes=np.array([c.volume for c in candles], dtype=np.float64),
        )

    def __len__(self) -> int:
        return len(self.closes)


# =============================================================================
# WINDOWING
# =============================================================================


def tail(data: np.ndarray, size: int) -> Optional[np.ndarray]:
    """Trailing ``size`` values, or None when the series is too short."""
    if size <= 0 or len(data) < size:
        return None
    return data[len(data) - size :]


def value_back(data: np.ndarray, offset: int, default: float = 0.0) -> float:
    """Value ``offset`` steps before the latest one (0 = latest)."""
    index = len(data) - 1 - offset
    if offset < 0 or index < 0:
        return default
    return float(data[index])


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> float:
    """Simple Moving Average of the trailing window.

    Short series fall back to the latest value (0 when empty).
    """
    window = tail(data, period)
    if window is None:
        return value_back(data, 0)
    return float(np.mean(window))


def ema(data: np.ndarray, period: int) -> float:
    """Exponential Moving Average seeded with the first element."""
    if len(data) < period:
        return value_back(data, 0)

    k = 2 / (period + 1)
    result = float(data[0])
    for price in data[1:]:
        result = (float(price) * k) + (result * (1 - k))
    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> Optional[float]:
    """Relative Strength Index over the last ``period`` price changes.

    A zero average loss is replaced by 1 rather than dividing by zero.
    """
    window = tail(closes, period + 1)
    if window is None:
        return None

    deltas = np.diff(window)
    gains = float(np.sum(deltas[deltas >= 0]))
    losses = float(-np.sum(deltas[deltas < 0]))

    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        avg_loss = 1.0

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def stochastic_k(
    closes: np.ndarray,
    highs: np.ndarray,
    lows: np.ndarray,
    period: int = 14,
) -> Optional[float]:
    """Stochastic %K of the latest close within the trailing high/low range."""
    recent_highs = tail(highs, period)
    recent_lows = tail(lows, period)
    if recent_highs is None or recent_lows is None or len(closes) < period:
        return None

    highest_high = float(np.max(recent_highs))
    lowest_low = float(np.min(recent_lows))
    price_range = (highest_high - lowest_low) or 1.0

    return ((value_back(closes, 0) - lowest_low) / price_range) * 100


def momentum(closes: np.ndarray, period: int = 10) -> Optional[float]:
    """Absolute price change over ``period`` candles."""
    if len(closes) < period + 1:
        return None
    return value_back(closes, 0) - value_back(closes, period)


def rate_of_change(closes: np.ndarray, period: int = 14) -> Optional[float]:
    """Percentage price change over ``period`` candles."""
    if len(closes) < period + 1:
        return None
    reference = value_back(closes, period)
    if reference == 0:
        return 0.0
    return ((value_back(closes, 0) - reference) / reference) * 100


def macd(closes: np.ndarray, fast_period: int = 12, slow_period: int = 26) -> float:
    """MACD line (fast EMA - slow EMA). No signal line is computed."""
    return ema(closes, fast_period) - ema(closes, slow_period)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True Range for every candle after the first (length n-1)."""
    if len(closes) < 2:
        return np.zeros(0)

    prev_closes = closes[:-1]
    return np.maximum.reduce(
        [
            highs[1:] - lows[1:],
            np.abs(highs[1:] - prev_closes),
            np.abs(lows[1:] - prev_closes),
        ]
    )


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> float:
    """Average True Range: SMA of True Range. Returns 0 for short series."""
    if len(closes) < period + 1:
        return 0.0
    return sma(true_range(highs, lows, closes), period)


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> Optional[tuple[float, float, float, float]]:
    """
    Bollinger Bands on the latest window.

    Returns: (upper, middle, lower, width_percent) or None for short series
    """
    window = tail(closes, period)
    if window is None:
        return None

    middle = float(np.mean(window))
    std = float(np.std(window))

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)
    width = ((upper - lower) / middle) * 100 if middle != 0 else 0.0

    return upper, middle, lower, width


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_ratio(volumes: np.ndarray, period: int = 20) -> tuple[float, float]:
    """
    Latest volume relative to its moving average.

    Returns: (ratio, vma). Ratio is 1.0 when the average volume is zero.
    """
    vma = sma(volumes, period)
    if vma <= 0:
        return 1.0, vma
    return value_back(volumes, 0) / vma, vma


# =============================================================================
# TREND INDICATORS
# =============================================================================


def adx(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> Optional[tuple[float, float, float]]:
    """
    Average Directional Index (raw DX of the latest bar).

    Returns: (adx, plus_di, minus_di) or None when fewer than 2 * period candles
    """
    if len(closes) < period * 2:
        return None

    up_move = highs[1:] - highs[:-1]
    down_move = lows[:-1] - lows[1:]

    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = true_range(highs, lows, closes)

    # Smooth the values
    smoothed_tr = ema(tr, period)
    smoothed_plus_dm = ema(plus_dm, period)
    smoothed_minus_dm = ema(minus_dm, period)

    if smoothed_tr == 0:
        return 0.0, 0.0, 0.0

    plus_di = (smoothed_plus_dm / smoothed_tr) * 100
    minus_di = (smoothed_minus_dm / smoothed_tr) * 100

    di_sum = plus_di + minus_di
    dx = (abs(plus_di - minus_di) / di_sum) * 100 if di_sum > 0 else 0.0

    return dx, plus_di, minus_di
