"""
Analysis Engine Service Implementation

Calculates all indicators, patterns and the signal summary from OHLCV data.
NO LLM INVOLVEMENT - Pure Python/NumPy calculations.

The service holds no state between calls: the same candles always produce
the same TechnicalAnalysis.
"""

import logging
from typing import Optional, Sequence

import numpy as np
from pydantic import TypeAdapter, ValidationError

from ta_engine.schemas.market import (
    AnalysisRequest,
    Candle,
    MultiTimeframeRequest,
    check_candle_order,
)
from ta_engine.schemas.analysis import (
    AdxReading,
    AtrReading,
    BollingerReading,
    EmaBundle,
    MacdReading,
    MomentumReading,
    MultiTimeframeAnalysis,
    RocReading,
    RsiReading,
    Signal,
    SmaBundle,
    StochasticReading,
    TechnicalAnalysis,
    VolumeReading,
)
from ta_engine.services.base import MalformedInputError
from ta_engine.services.indicators.interface import (
    AnalysisServiceInterface,
    CandleInput,
    VersionInput,
)
from ta_engine.services.indicators.calculations import (
    OHLCVData,
    sma,
    ema,
    rsi,
    stochastic_k,
    momentum,
    rate_of_change,
    macd,
    atr,
    bollinger_bands,
    volume_ratio,
    adx,
    value_back,
)
from ta_engine.services.indicators.profiles import (
    ADX_PERIOD,
    ADX_PLACEHOLDER_VALUE,
    ADX_TREND_THRESHOLD,
    ATR_PERIOD,
    BOLLINGER_PERIOD,
    HIGH_VOLUME_RATIO,
    MOMENTUM_PERIOD,
    ROC_PERIOD,
    RSI_PERIOD,
    STOCH_PERIOD,
    VOLUME_PERIOD,
    EngineProfile,
    get_profile,
)
from ta_engine.services.scanner.patterns import detect_patterns
from ta_engine.services.signals.aggregator import summarize_signals

logger = logging.getLogger(__name__)

_CANDLE_LIST = TypeAdapter(list[Candle])

# Signal bands
RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0
RSI_BULLISH = 55.0
RSI_BEARISH = 45.0
STOCH_OVERSOLD = 20.0
STOCH_OVERBOUGHT = 80.0
ROC_DEADBAND = 0.5
MOMENTUM_DEADBAND = 0.001


def _clamp_strength(value: float) -> int:
    return int(round(min(100.0, max(0.0, value))))


class AnalysisService(AnalysisServiceInterface):
    """
    Analysis Engine Service.

    Runs the indicator library, the pattern detector and the signal
    aggregator over one candle sequence.
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    async def execute(self, input_data: AnalysisRequest) -> TechnicalAnalysis:
        """Run the analysis for the request's candles."""
        return self.analyze(input_data.candles, input_data.engine_version)

    async def execute_multi_timeframe(
        self, input_data: MultiTimeframeRequest
    ) -> MultiTimeframeAnalysis:
        """Run entry and anchor analyses for a multi-timeframe request."""
        return self.analyze_multi_timeframe(
            input_data.entry_candles,
            input_data.anchor_candles,
            input_data.engine_version,
        )

    def analyze(
        self,
        candles: Sequence[CandleInput],
        version: VersionInput = None,
    ) -> TechnicalAnalysis:
        """Calculate all indicators for a single candle sequence."""
        profile = self._resolve_profile(version)
        validated = self._validate_candles(candles)
        data = OHLCVData.from_candles(validated)
        closes, highs, lows, volumes = data.closes, data.highs, data.lows, data.volumes

        # Core indicators
        rsi_reading = self._calculate_rsi(closes, profile)
        stoch_reading = self._calculate_stochastic(closes, highs, lows, profile)
        adx_reading = self._calculate_adx(highs, lows, closes)
        atr_reading = AtrReading(value=atr(highs, lows, closes, ATR_PERIOD))

        # Trend bundles
        ema_bundle = self._calculate_ema_bundle(closes, profile)
        sma_bundle = self._calculate_sma_bundle(closes, profile)
        macd_reading = self._calculate_macd(closes)

        # Extended set
        momentum_reading = self._calculate_momentum(closes, profile)
        roc_reading = self._calculate_roc(closes, profile)
        bollinger_reading, bands_ready = self._calculate_bollinger(closes, profile)

        volume_reading = self._calculate_volume(closes, volumes, profile)

        summary = summarize_signals(
            {
                "rsi": rsi_reading,
                "stoch": stoch_reading,
                "macd": macd_reading,
                "adx": adx_reading,
                "momentum": momentum_reading,
                "roc": roc_reading,
                "bollinger": bollinger_reading,
                "sma": sma_bundle,
            },
            adx=adx_reading,
            ema=ema_bundle,
            volume=volume_reading,
            bollinger=bollinger_reading if bands_ready else None,
            profile=profile,
        )

        analysis = TechnicalAnalysis(
            engine_version=profile.version,
            data_points=len(data),
            rsi=rsi_reading,
            stoch=stoch_reading,
            macd=macd_reading,
            adx=adx_reading,
            atr=atr_reading,
            ema=ema_bundle,
            momentum=momentum_reading,
            roc=roc_reading,
            bollinger=bollinger_reading,
            sma=sma_bundle,
            volume=volume_reading,
            patterns=tuple(detect_patterns(validated)),
            summary=summary,
        )

        logger.debug(
            f"Analysed {len(data)} candles with {profile.version.value}: "
            f"regime={summary.regime.value} patterns={list(analysis.patterns)}"
        )
        return analysis

    def analyze_multi_timeframe(
        self,
        entry_candles: Sequence[CandleInput],
        anchor_candles: Sequence[CandleInput],
        version: VersionInput = None,
    ) -> MultiTimeframeAnalysis:
        """Analyse both timeframes and flag disagreeing EMA trends."""
        entry = self.analyze(entry_candles, version)
        anchor = self.analyze(anchor_candles, version)

        return MultiTimeframeAnalysis(
            entry=entry,
            anchor=anchor,
            trend_conflict=entry.ema.trend != anchor.ema.trend,
        )

    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        return True

    # -------------------------------------------------------------------------
    # Input handling
    # -------------------------------------------------------------------------

    def _resolve_profile(self, version: VersionInput) -> EngineProfile:
        try:
            return get_profile(version)
        except ValueError as e:
            raise MalformedInputError(self.name, str(e), {"version": str(version)}) from e

    def _validate_candles(self, candles: Optional[Sequence[CandleInput]]) -> list[Candle]:
        """Validate raw candles; any structural problem is fatal."""
        if candles is None:
            raise MalformedInputError(self.name, "No candle sequence supplied")

        try:
            validated = _CANDLE_LIST.validate_python(list(candles))
            return check_candle_order(validated)
        except ValidationError as e:
            logger.warning(f"Rejected candle input: {e.error_count()} validation error(s)")
            raise MalformedInputError(
                self.name,
                "Invalid candle data",
                {"errors": e.errors(include_url=False, include_context=False)},
            ) from e
        except (TypeError, ValueError) as e:
            logger.warning(f"Rejected candle input: {e}")
            raise MalformedInputError(self.name, str(e)) from e

    # -------------------------------------------------------------------------
    # Indicator readings
    # -------------------------------------------------------------------------

    def _calculate_rsi(self, closes: np.ndarray, profile: EngineProfile) -> RsiReading:
        """RSI with band-based signal."""
        value = rsi(closes, RSI_PERIOD)
        if value is None:
            return RsiReading()

        if value < RSI_OVERSOLD:
            signal = Signal.UP
            strength = self._rsi_extreme_strength(RSI_OVERSOLD - value, profile)
        elif value > RSI_OVERBOUGHT:
            signal = Signal.DOWN
            strength = self._rsi_extreme_strength(value - RSI_OVERBOUGHT, profile)
        elif value > RSI_BULLISH:
            signal, strength = Signal.UP, 60
        elif value < RSI_BEARISH:
            signal, strength = Signal.DOWN, 60
        else:
            signal, strength = Signal.NEUTRAL, 50

        if profile.rsi_round_digits is not None:
            value = round(value, profile.rsi_round_digits)

        return RsiReading(value=value, signal=signal, strength=strength)

    @staticmethod
    def _rsi_extreme_strength(distance: float, profile: EngineProfile) -> int:
        if profile.rsi_extreme_strength is not None:
            return profile.rsi_extreme_strength
        return _clamp_strength(70 + distance)

    def _calculate_stochastic(
        self,
        closes: np.ndarray,
        highs: np.ndarray,
        lows: np.ndarray,
        profile: EngineProfile,
    ) -> StochasticReading:
        """Stochastic %K; %D is reported equal to %K."""
        k = stochastic_k(closes, highs, lows, STOCH_PERIOD)
        if k is None:
            return StochasticReading()

        if k < STOCH_OVERSOLD:
            signal = Signal.UP
        elif k > STOCH_OVERBOUGHT:
            signal = Signal.DOWN
        else:
            signal = Signal.NEUTRAL

        return StochasticReading(k=k, d=k, signal=signal, strength=profile.stoch_strength)

    def _calculate_adx(
        self, highs: np.ndarray, lows: np.ndarray, closes: np.ndarray
    ) -> AdxReading:
        """ADX with DI-based direction once the trend is strong enough."""
        result = adx(highs, lows, closes, ADX_PERIOD)
        if result is None:
            return AdxReading(value=ADX_PLACEHOLDER_VALUE, signal=Signal.NEUTRAL, strength=50)

        adx_val, plus_di, minus_di = result
        signal = Signal.NEUTRAL
        if adx_val > ADX_TREND_THRESHOLD:
            signal = Signal.UP if plus_di > minus_di else Signal.DOWN

        return AdxReading(
            value=adx_val,
            plus_di=plus_di,
            minus_di=minus_di,
            signal=signal,
            strength=_clamp_strength(adx_val * 2),
        )

    def _calculate_ema_bundle(self, closes: np.ndarray, profile: EngineProfile) -> EmaBundle:
        ema_12 = ema(closes, 12)
        ema_26 = ema(closes, 26)
        ema_50 = ema(closes, 50)

        reference = ema_26 if profile.ema_trend_period == 26 else ema_50
        return EmaBundle(
            ema12=ema_12,
            ema26=ema_26,
            ema50=ema_50,
            trend=Signal.UP if ema_12 > reference else Signal.DOWN,
        )

    def _calculate_sma_bundle(self, closes: np.ndarray, profile: EngineProfile) -> SmaBundle:
        current = value_back(closes, 0)
        sma_20 = sma(closes, 20)
        sma_50 = sma(closes, 50)
        sma_200 = sma(closes, 200)

        trend = Signal.UP if current > sma_50 else Signal.DOWN
        strength = 70
        if profile.sma_alignment_boost:
            if (trend == Signal.UP and sma_50 > sma_200) or (
                trend == Signal.DOWN and sma_50 < sma_200
            ):
                strength = 80

        return SmaBundle(sma20=sma_20, sma50=sma_50, sma200=sma_200, trend=trend, strength=strength)

    def _calculate_macd(self, closes: np.ndarray) -> MacdReading:
        """MACD line only; histogram mirrors it."""
        macd_val = macd(closes, 12, 26)
        return MacdReading(
            value=macd_val,
            histogram=macd_val,
            signal=Signal.UP if macd_val > 0 else Signal.DOWN,
            strength=75,
        )

    def _calculate_momentum(
        self, closes: np.ndarray, profile: EngineProfile
    ) -> MomentumReading:
        if not profile.extended_indicators:
            return MomentumReading()

        value = momentum(closes, MOMENTUM_PERIOD)
        if value is None:
            return MomentumReading()

        deadband = abs(value_back(closes, MOMENTUM_PERIOD)) * MOMENTUM_DEADBAND
        if value > deadband:
            return MomentumReading(value=value, signal=Signal.UP, strength=65)
        if value < -deadband:
            return MomentumReading(value=value, signal=Signal.DOWN, strength=65)
        return MomentumReading(value=value)

    def _calculate_roc(self, closes: np.ndarray, profile: EngineProfile) -> RocReading:
        if not profile.extended_indicators:
            return RocReading()

        value = rate_of_change(closes, ROC_PERIOD)
        if value is None:
            return RocReading()

        strength = _clamp_strength(50 + abs(value) * 5)
        if value > ROC_DEADBAND:
            return RocReading(value=value, signal=Signal.UP, strength=strength)
        if value < -ROC_DEADBAND:
            return RocReading(value=value, signal=Signal.DOWN, strength=strength)
        return RocReading(value=value)

    def _calculate_bollinger(
        self, closes: np.ndarray, profile: EngineProfile
    ) -> tuple[BollingerReading, bool]:
        """
        Bollinger Bands reading.

        Returns: (reading, bands_ready). bands_ready is False for the
        placeholder so the regime cascade can skip the width check.
        """
        if not profile.extended_indicators:
            return BollingerReading(), False

        current = value_back(closes, 0)
        bands = bollinger_bands(closes, BOLLINGER_PERIOD, 2.0)
        if bands is None:
            return BollingerReading(upper=current, middle=current, lower=current), False

        upper, middle, lower, width = bands
        if current < lower:
            signal, strength = Signal.UP, 75
        elif current > upper:
            signal, strength = Signal.DOWN, 75
        else:
            signal, strength = Signal.NEUTRAL, 50

        reading = BollingerReading(
            width=width,
            upper=upper,
            middle=middle,
            lower=lower,
            signal=signal,
            strength=strength,
        )
        return reading, True

    def _calculate_volume(
        self, closes: np.ndarray, volumes: np.ndarray, profile: EngineProfile
    ) -> VolumeReading:
        """Volume ratio against the 20-period average."""
        ratio, vma_20 = volume_ratio(volumes, VOLUME_PERIOD)

        trend = Signal.NEUTRAL
        if ratio > HIGH_VOLUME_RATIO:
            trend = Signal.UP
            if profile.volume_price_gate:
                change = value_back(closes, 0) - value_back(closes, 1, value_back(closes, 0))
                if change > 0:
                    trend = Signal.UP
                elif change < 0:
                    trend = Signal.DOWN
                else:
                    trend = Signal.NEUTRAL

        return VolumeReading(ratio=ratio, trend=trend, strength=70, vma20=vma_20)


# Shared instance (the service is stateless)
_service_instance: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalysisService()
    return _service_instance


def analyze_market(
    candles: Sequence[CandleInput], version: VersionInput = None
) -> TechnicalAnalysis:
    """Analyse one candle sequence with the shared service."""
    return get_analysis_service().analyze(candles, version)
