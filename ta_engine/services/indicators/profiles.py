"""
Engine Profiles

Two indicator sets exist and are kept side by side:

    v1 - simple set. RSI/Stochastic/ADX vote, momentum/ROC/Bollinger are
         placeholders, EMA trend is EMA12 vs EMA50.
    v2 - extended set. Eight indicators vote, scores are strength-weighted,
         volume is gated by price direction, Bollinger width can flag
         consolidation, EMA trend is EMA12 vs EMA26.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ta_engine.core.config import get_settings
from ta_engine.schemas.analysis import EngineVersion

# Shared thresholds
ADX_TREND_THRESHOLD = 25.0
ADX_DEAD_MARKET = 12.0
HIGH_VOLUME_RATIO = 1.2
LOW_VOLUME_RATIO = 0.8

# Lookbacks
RSI_PERIOD = 14
STOCH_PERIOD = 14
ADX_PERIOD = 14
ATR_PERIOD = 14
MOMENTUM_PERIOD = 10
ROC_PERIOD = 14
BOLLINGER_PERIOD = 20
VOLUME_PERIOD = 20

# Placeholder returned when ADX lacks 2 * period candles
ADX_PLACEHOLDER_VALUE = 15.0


@dataclass(frozen=True)
class EngineProfile:
    """Knobs that differ between the indicator sets."""

    version: EngineVersion

    # RSI: fixed strength at extremes, or None to scale by distance past 30/70
    rsi_extreme_strength: Optional[int]
    rsi_round_digits: Optional[int]
    stoch_strength: int

    # Trend bundles
    ema_trend_period: int
    sma_alignment_boost: bool

    # Volume trend follows the last close-to-close move
    volume_price_gate: bool

    # Momentum, ROC and Bollinger are computed (otherwise placeholders)
    extended_indicators: bool

    # Aggregation
    voters: tuple[str, ...]
    weighted_voters: tuple[str, ...]
    signal_weight: float
    score_alignment: bool

    # Regime cascade step 3 (None disables it)
    consolidation_width: Optional[float]


ENGINE_V1 = EngineProfile(
    version=EngineVersion.V1,
    rsi_extreme_strength=85,
    rsi_round_digits=1,
    stoch_strength=80,
    ema_trend_period=50,
    sma_alignment_boost=False,
    volume_price_gate=False,
    extended_indicators=False,
    voters=("rsi", "stoch", "adx"),
    weighted_voters=(),
    signal_weight=33.0,
    score_alignment=False,
    consolidation_width=None,
)

ENGINE_V2 = EngineProfile(
    version=EngineVersion.V2,
    rsi_extreme_strength=None,
    rsi_round_digits=None,
    stoch_strength=90,
    ema_trend_period=26,
    sma_alignment_boost=True,
    volume_price_gate=True,
    extended_indicators=True,
    voters=("rsi", "stoch", "macd", "adx", "momentum", "roc", "bollinger", "sma"),
    weighted_voters=("rsi", "stoch", "adx"),
    signal_weight=10.0,
    score_alignment=True,
    consolidation_width=3.0,
)

PROFILES: dict[EngineVersion, EngineProfile] = {
    EngineVersion.V1: ENGINE_V1,
    EngineVersion.V2: ENGINE_V2,
}


def get_profile(version: Union[EngineVersion, str, None] = None) -> EngineProfile:
    """Resolve an engine version (or the configured default) to its profile."""
    if version is None:
        version = get_settings().default_engine_version
    elif not isinstance(version, EngineVersion):
        version = str(version).strip().lower()

    try:
        return PROFILES[EngineVersion(version)]
    except ValueError:
        raise ValueError(f"Unknown engine version: {version}") from None
