"""
TA Engine

Deterministic technical-analysis engine: OHLCV candles in, indicator
readings, candlestick patterns and a market-regime summary out.
"""

from ta_engine.schemas.analysis import (
    EngineVersion,
    MarketRegime,
    Signal,
    TechnicalAnalysis,
)
from ta_engine.schemas.market import Candle
from ta_engine.services.base import MalformedInputError, ServiceError
from ta_engine.services.indicators import (
    AnalysisService,
    analyze_market,
    get_analysis_service,
)

__version__ = "0.1.0"

__all__ = [
    "Candle",
    "EngineVersion",
    "MarketRegime",
    "Signal",
    "TechnicalAnalysis",
    "MalformedInputError",
    "ServiceError",
    "AnalysisService",
    "analyze_market",
    "get_analysis_service",
]
