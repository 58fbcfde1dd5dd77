"""
CONTRACT 2: Technical Analysis Output

Input: list[Candle]
Output: TechnicalAnalysis

Every indicator has its own result model. Directional readings share the
``signal`` + ``strength`` pair; bundles that report a ``trend`` instead expose
the same information through ``direction``.

Field names serialize as camelCase (``upSignals``, ``vma20``...) because
downstream prompt templates and the dashboard interpolate them verbatim.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================


class Signal(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    NEUTRAL = "NEUTRAL"


class MarketRegime(str, Enum):
    TRENDING_UP = "TRENDING_UP"
    TRENDING_DOWN = "TRENDING_DOWN"
    RANGING = "RANGING"
    CONSOLIDATION = "CONSOLIDATION"
    VOLATILE = "VOLATILE"


class EngineVersion(str, Enum):
    """Named indicator sets. V1 is the simple set, V2 the extended set."""

    V1 = "v1"
    V2 = "v2"


# =============================================================================
# BASE MODELS
# =============================================================================


class AnalysisModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class DirectionalReading(AnalysisModel):
    """Shared shape of every indicator that votes UP/DOWN/NEUTRAL."""

    signal: Signal = Signal.NEUTRAL
    strength: int = Field(default=50, ge=0, le=100, description="Heuristic, not a probability")

    @property
    def direction(self) -> Signal:
        return self.signal


# =============================================================================
# INDICATOR READINGS
# =============================================================================


class RsiReading(DirectionalReading):
    """Relative Strength Index."""

    name: str = "RSI"
    value: float = Field(default=50.0, ge=0, le=100)


class StochasticReading(DirectionalReading):
    """Stochastic oscillator. ``d`` mirrors ``k`` (no %D smoothing)."""

    k: float = Field(default=50.0, ge=0, le=100)
    d: float = Field(default=50.0, ge=0, le=100)


class MacdReading(DirectionalReading):
    """MACD line. ``histogram`` mirrors ``value`` (no signal-line EMA)."""

    value: float = 0.0
    histogram: float = 0.0


class AdxReading(DirectionalReading):
    """Directional movement index. ``value`` is the raw DX of the last bar."""

    value: float = Field(default=15.0, ge=0, le=100)
    plus_di: float = 0.0
    minus_di: float = 0.0


class AtrReading(DirectionalReading):
    """Average True Range. Never votes."""

    value: float = Field(default=0.0, ge=0)


class EmaBundle(AnalysisModel):
    ema12: float
    ema26: float
    ema50: float
    trend: Signal

    @property
    def direction(self) -> Signal:
        return self.trend


class MomentumReading(DirectionalReading):
    value: float = 0.0


class RocReading(DirectionalReading):
    value: float = Field(default=0.0, description="Percent change over the period")


class BollingerReading(DirectionalReading):
    """Bollinger Bands. ``width`` is band width as % of the middle band."""

    width: float = Field(default=0.0, ge=0)
    upper: float = 0.0
    middle: float = 0.0
    lower: float = 0.0


class SmaBundle(AnalysisModel):
    sma20: float
    sma50: float
    sma200: float
    trend: Signal
    strength: int = Field(..., ge=0, le=100)

    @property
    def direction(self) -> Signal:
        return self.trend


class VolumeReading(AnalysisModel):
    ratio: float = Field(..., ge=0, description="Latest volume / 20-period average")
    trend: Signal
    strength: int = Field(..., ge=0, le=100)
    vma20: float = Field(..., ge=0)

    @property
    def direction(self) -> Signal:
        return self.trend


# =============================================================================
# OUTPUT: TechnicalAnalysis
# =============================================================================


class SignalSummary(AnalysisModel):
    """Aggregated vote over the engine's voter subset."""

    up_signals: int = Field(..., ge=0)
    down_signals: int = Field(..., ge=0)
    neutral_signals: int = Field(..., ge=0)
    up_score: float = Field(..., ge=0)
    down_score: float = Field(..., ge=0)
    alignment: float = Field(..., ge=0, le=100, description="Percent unanimity")
    regime: MarketRegime


class TechnicalAnalysis(AnalysisModel):
    """
    Complete technical analysis for one candle sequence.
    Returned by: Analysis Service
    Consumed by: dashboard rendering, narrative generation
    """

    engine_version: EngineVersion
    data_points: int = Field(..., ge=1, description="Number of candles analysed")

    rsi: RsiReading
    stoch: StochasticReading
    macd: MacdReading
    adx: AdxReading
    atr: AtrReading
    ema: EmaBundle
    momentum: MomentumReading
    roc: RocReading
    bollinger: BollingerReading
    sma: SmaBundle
    volume: VolumeReading

    patterns: tuple[str, ...] = Field(default=(), description="Unique names, latest candle")
    summary: SignalSummary


class MultiTimeframeAnalysis(AnalysisModel):
    """Entry timeframe analysis cross-checked against a coarser anchor timeframe."""

    entry: TechnicalAnalysis
    anchor: TechnicalAnalysis
    trend_conflict: bool = Field(..., description="EMA trends disagree")


# =============================================================================
# OUTPUT: NarrativeContext
# =============================================================================


class NarrativeContext(AnalysisModel):
    """
    Select numeric fields handed to the narrative-generation layer.
    The LLM does no math: every number it mentions comes from here.
    """

    symbol: Optional[str] = None
    price: float
    rsi_value: float
    rsi_signal: Signal
    adx_value: float
    adx_signal: Signal
    ema12: float
    ema26: float
    ema50: float
    ema_trend: Signal
    volume_ratio: float
    vma20: float
    atr: float
    regime: MarketRegime
    patterns: tuple[str, ...] = ()
    anchor_regime: Optional[MarketRegime] = None
    anchor_trend: Optional[Signal] = None
    trend_conflict: bool = False
    dead_market: bool = Field(default=False, description="ADX below 12")
    weak_participation: bool = Field(default=False, description="Volume ratio below 0.8")
    headlines: tuple[str, ...] = ()
