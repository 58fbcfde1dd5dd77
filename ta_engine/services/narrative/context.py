"""
Narrative Context

Prepares the structured data the narrative-generation layer interpolates
into its prompts, and checks the targets it proposes against volatility.

CRITICAL RULES:
- The LLM does NO math - all numbers come from the TechnicalAnalysis
- Field names and precision here are what prompt templates rely on
"""

from typing import Optional, Sequence

from ta_engine.schemas.analysis import NarrativeContext, TechnicalAnalysis
from ta_engine.services.indicators.profiles import ADX_DEAD_MARKET, LOW_VOLUME_RATIO

# Acceptable target distance, in ATR multiples
MAX_TARGET_ATR = 4.0
MIN_TARGET_ATR = 0.5


# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

MARKET_DATA_TEMPLATE = """MARKET DATA (ENTRY TIMEFRAME):
Price: ${price}
RSI: {rsi_value} ({rsi_signal})
ADX: {adx_value:.1f} ({adx_signal})
EMA 12/26/50: {ema12:.2f} / {ema26:.2f} / {ema50:.2f}
Volume Ratio: {volume_ratio:.2f}x (VMA20: {vma20:.0f})
ATR: {atr:.2f}
Regime: {regime}
Patterns Detected: {patterns}
{anchor_block}
LATEST NEWS SENTIMENT:
{headlines}
"""

ANCHOR_TEMPLATE = """
ANCHOR TIMEFRAME CONTEXT:
Regime: {anchor_regime}
Trend (EMA): {anchor_trend}
"""


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def build_narrative_context(
    analysis: TechnicalAnalysis,
    price: float,
    anchor: Optional[TechnicalAnalysis] = None,
    headlines: Sequence[str] = (),
    symbol: Optional[str] = None,
) -> NarrativeContext:
    """Extract the fields the narrative layer needs from an analysis."""
    return NarrativeContext(
        symbol=symbol,
        price=price,
        rsi_value=analysis.rsi.value,
        rsi_signal=analysis.rsi.signal,
        adx_value=analysis.adx.value,
        adx_signal=analysis.adx.signal,
        ema12=analysis.ema.ema12,
        ema26=analysis.ema.ema26,
        ema50=analysis.ema.ema50,
        ema_trend=analysis.ema.trend,
        volume_ratio=analysis.volume.ratio,
        vma20=analysis.volume.vma20,
        atr=analysis.atr.value,
        regime=analysis.summary.regime,
        patterns=analysis.patterns,
        anchor_regime=anchor.summary.regime if anchor else None,
        anchor_trend=anchor.ema.trend if anchor else None,
        trend_conflict=anchor is not None and anchor.ema.trend != analysis.ema.trend,
        dead_market=analysis.adx.value < ADX_DEAD_MARKET,
        weak_participation=analysis.volume.ratio < LOW_VOLUME_RATIO,
        headlines=tuple(headlines),
    )


def format_market_data_block(context: NarrativeContext) -> str:
    """Render the market-data section of the narrative prompt."""
    anchor_block = ""
    if context.anchor_regime is not None:
        anchor_block = ANCHOR_TEMPLATE.format(
            anchor_regime=context.anchor_regime.value,
            anchor_trend=context.anchor_trend.value if context.anchor_trend else "N/A",
        )

    if context.headlines:
        headlines = "\n".join(f"- {h}" for h in context.headlines)
    else:
        headlines = "No recent headlines."

    return MARKET_DATA_TEMPLATE.format(
        price=context.price,
        rsi_value=context.rsi_value,
        rsi_signal=context.rsi_signal.value,
        adx_value=context.adx_value,
        adx_signal=context.adx_signal.value,
        ema12=context.ema12,
        ema26=context.ema26,
        ema50=context.ema50,
        volume_ratio=context.volume_ratio,
        vma20=context.vma20,
        atr=context.atr,
        regime=context.regime.value,
        patterns=", ".join(context.patterns) or "None",
        anchor_block=anchor_block,
        headlines=headlines,
    )


def check_target_realism(atr: float, entry: float, target: float) -> bool:
    """
    Whether a proposed target is plausible for current volatility.

    Targets further than 4x ATR or closer than 0.5x ATR from the entry are
    rejected; the caller should then stand aside (NEUTRAL).
    """
    distance = abs(target - entry)
    return atr * MIN_TARGET_ATR <= distance <= atr * MAX_TARGET_ATR
