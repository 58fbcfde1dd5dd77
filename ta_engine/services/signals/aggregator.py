"""
Signal Aggregation

Turns per-indicator votes into counts, scores, an alignment percentage and a
market regime. Which indicators vote, and how scores are weighted, comes from
the engine profile.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from ta_engine.schemas.analysis import (
    AdxReading,
    BollingerReading,
    EmaBundle,
    MarketRegime,
    Signal,
    SignalSummary,
    VolumeReading,
)
from ta_engine.services.indicators.profiles import (
    ADX_TREND_THRESHOLD,
    LOW_VOLUME_RATIO,
    EngineProfile,
)

logger = logging.getLogger(__name__)

# Denominator floor for score-based alignment
ALIGNMENT_EPSILON = 1.0


@dataclass(frozen=True)
class VoteCount:
    """Raw tally before regime classification."""

    up: int
    down: int
    neutral: int
    up_score: float
    down_score: float
    alignment: float


def count_votes(readings: Mapping[str, object], profile: EngineProfile) -> VoteCount:
    """
    Tally the profile's voters.

    Each reading must expose ``direction`` and ``strength``. Missing voters
    are a programming error and raise KeyError.
    """
    directions = [readings[name].direction for name in profile.voters]

    up = sum(1 for d in directions if d == Signal.UP)
    down = sum(1 for d in directions if d == Signal.DOWN)
    neutral = len(directions) - up - down

    up_score = up * profile.signal_weight
    down_score = down * profile.signal_weight
    for name in profile.weighted_voters:
        reading = readings[name]
        if reading.direction == Signal.UP:
            up_score += reading.strength
        elif reading.direction == Signal.DOWN:
            down_score += reading.strength

    if profile.score_alignment:
        denominator = max(up_score + down_score, ALIGNMENT_EPSILON)
        alignment = max(up_score, down_score) / denominator * 100
    else:
        alignment = max(up, down) / len(directions) * 100 if directions else 0.0

    return VoteCount(
        up=up,
        down=down,
        neutral=neutral,
        up_score=float(up_score),
        down_score=float(down_score),
        alignment=float(min(100.0, alignment)),
    )


def classify_regime(
    adx: AdxReading,
    ema: EmaBundle,
    volume: VolumeReading,
    bollinger: Optional[BollingerReading],
    profile: EngineProfile,
) -> MarketRegime:
    """
    Priority cascade, first match wins:

    1. ADX above 25 -> TRENDING_UP / TRENDING_DOWN by EMA12 vs EMA26
    2. Volume ratio below 0.8 -> CONSOLIDATION
    3. Bollinger width below the profile threshold -> CONSOLIDATION
       (skipped when the profile disables it or bollinger is None)
    4. RANGING
    """
    if adx.value > ADX_TREND_THRESHOLD:
        if ema.ema12 > ema.ema26:
            return MarketRegime.TRENDING_UP
        return MarketRegime.TRENDING_DOWN

    if volume.ratio < LOW_VOLUME_RATIO:
        return MarketRegime.CONSOLIDATION

    if (
        profile.consolidation_width is not None
        and bollinger is not None
        and bollinger.width < profile.consolidation_width
    ):
        return MarketRegime.CONSOLIDATION

    return MarketRegime.RANGING


def summarize_signals(
    readings: Mapping[str, object],
    adx: AdxReading,
    ema: EmaBundle,
    volume: VolumeReading,
    bollinger: Optional[BollingerReading],
    profile: EngineProfile,
) -> SignalSummary:
    """Build the summary block of a TechnicalAnalysis."""
    votes = count_votes(readings, profile)
    regime = classify_regime(adx, ema, volume, bollinger, profile)

    logger.debug(
        f"Votes {profile.version.value}: up={votes.up} down={votes.down} "
        f"neutral={votes.neutral} alignment={votes.alignment:.1f} regime={regime.value}"
    )

    return SignalSummary(
        up_signals=votes.up,
        down_signals=votes.down,
        neutral_signals=votes.neutral,
        up_score=votes.up_score,
        down_score=votes.down_score,
        alignment=votes.alignment,
        regime=regime,
    )
