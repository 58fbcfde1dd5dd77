"""
Analysis Engine Service

CONTRACT:
    Input:  AnalysisRequest (OHLCV candles, engine version)
    Output: TechnicalAnalysis

RESPONSIBILITIES:
    - Calculate indicators (RSI, Stochastic, ADX, ATR, EMA/SMA, MACD,
      Momentum, ROC, Bollinger, volume ratio)
    - Detect candlestick patterns on the latest candles
    - Aggregate indicator votes into a summary and market regime

PURE PYTHON - No LLM involvement.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from ta_engine.services.indicators.interface import AnalysisServiceInterface
from ta_engine.services.indicators.profiles import (
    ENGINE_V1,
    ENGINE_V2,
    EngineProfile,
    get_profile,
)
from ta_engine.services.indicators.service import (
    AnalysisService,
    analyze_market,
    get_analysis_service,
)

__all__ = [
    "AnalysisServiceInterface",
    "AnalysisService",
    "analyze_market",
    "get_analysis_service",
    "ENGINE_V1",
    "ENGINE_V2",
    "EngineProfile",
    "get_profile",
]
