"""
TA Engine Schema Contracts

This module defines the JSON contracts between the engine and its callers.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from ta_engine.schemas.market import (
    Candle,
    AnalysisRequest,
    MultiTimeframeRequest,
)
from ta_engine.schemas.analysis import (
    Signal,
    MarketRegime,
    EngineVersion,
    DirectionalReading,
    RsiReading,
    StochasticReading,
    MacdReading,
    AdxReading,
    AtrReading,
    EmaBundle,
    MomentumReading,
    RocReading,
    BollingerReading,
    SmaBundle,
    VolumeReading,
    SignalSummary,
    TechnicalAnalysis,
    MultiTimeframeAnalysis,
    NarrativeContext,
)

__all__ = [
    # Market
    "Candle",
    "AnalysisRequest",
    "MultiTimeframeRequest",
    # Analysis
    "Signal",
    "MarketRegime",
    "EngineVersion",
    "DirectionalReading",
    "RsiReading",
    "StochasticReading",
    "MacdReading",
    "AdxReading",
    "AtrReading",
    "EmaBundle",
    "MomentumReading",
    "RocReading",
    "BollingerReading",
    "SmaBundle",
    "VolumeReading",
    "SignalSummary",
    "TechnicalAnalysis",
    "MultiTimeframeAnalysis",
    "NarrativeContext",
]
