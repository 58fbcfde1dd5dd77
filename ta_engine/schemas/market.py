"""
CONTRACT 1: Candle Input

Input: ordered sequence of OHLCV candles for one symbol/timeframe.

Candles are delivered by the data-fetch layer (outside this package) and
validated here before any indicator math runs.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Upper bound on prices and volume; indicator math (sums, squared deviations)
# must stay finite in float64.
MAX_CANDLE_VALUE = 1e100


# =============================================================================
# CANDLE
# =============================================================================


class Candle(BaseModel):
    """Single candlestick data point."""

    model_config = ConfigDict(frozen=True)

    time: int = Field(..., ge=0, description="Bucket start, epoch milliseconds")
    open: float = Field(..., gt=0, lt=MAX_CANDLE_VALUE, allow_inf_nan=False)
    high: float = Field(..., gt=0, lt=MAX_CANDLE_VALUE, allow_inf_nan=False)
    low: float = Field(..., gt=0, lt=MAX_CANDLE_VALUE, allow_inf_nan=False)
    close: float = Field(..., gt=0, lt=MAX_CANDLE_VALUE, allow_inf_nan=False)
    volume: float = Field(..., ge=0, lt=MAX_CANDLE_VALUE, allow_inf_nan=False)

    @field_validator("time", "open", "high", "low", "close", "volume", mode="before")
    @classmethod
    def reject_bool(cls, value):
        """Booleans are not numbers here, even though pydantic would coerce them."""
        if isinstance(value, bool):
            raise ValueError("Boolean is not a valid candle value")
        return value

    @model_validator(mode="after")
    def check_price_range(self) -> "Candle":
        """High/low must bracket the open and close."""
        if self.high < self.low:
            raise ValueError(f"High price {self.high} is below low price {self.low}")
        if self.high < max(self.open, self.close):
            raise ValueError(f"High price {self.high} is below open/close")
        if self.low > min(self.open, self.close):
            raise ValueError(f"Low price {self.low} is above open/close")
        return self


# =============================================================================
# REQUESTS
# =============================================================================


def check_candle_order(candles: list[Candle]) -> list[Candle]:
    """Reject empty sequences and timestamps that step backwards."""
    if not candles:
        raise ValueError("At least one candle is required")
    for prev, cur in zip(candles, candles[1:]):
        if cur.time < prev.time:
            raise ValueError(
                f"Candles must be ascending by time: {cur.time} follows {prev.time}"
            )
    return candles


class AnalysisRequest(BaseModel):
    """
    Request for a technical analysis run.
    Sent by: chat/voice orchestration layer
    Received by: Analysis Service
    """

    symbol: Optional[str] = Field(default=None, description="e.g. BTC/USDT")
    candles: list[Candle] = Field(..., description="Ascending by time")
    engine_version: Optional[str] = Field(
        default=None, description="v1 / v2; defaults to configured version"
    )

    @field_validator("candles")
    @classmethod
    def candles_ordered(cls, value: list[Candle]) -> list[Candle]:
        return check_candle_order(value)


class MultiTimeframeRequest(BaseModel):
    """Entry timeframe candles plus a coarser anchor timeframe (e.g. hourly + daily)."""

    symbol: Optional[str] = None
    entry_candles: list[Candle]
    anchor_candles: list[Candle]
    engine_version: Optional[str] = None

    @field_validator("entry_candles", "anchor_candles")
    @classmethod
    def candles_ordered(cls, value: list[Candle]) -> list[Candle]:
        return check_candle_order(value)
