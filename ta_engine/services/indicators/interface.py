"""
Analysis Engine Service Interface

Defines the contract for the technical-analysis layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence, Union

from ta_engine.services.base import BaseService
from ta_engine.schemas.market import AnalysisRequest, Candle
from ta_engine.schemas.analysis import (
    EngineVersion,
    MultiTimeframeAnalysis,
    TechnicalAnalysis,
)

CandleInput = Union[Candle, dict]
VersionInput = Union[EngineVersion, str, None]


class AnalysisServiceInterface(BaseService[AnalysisRequest, TechnicalAnalysis]):
    """
    Analysis Engine Service Contract.

    INPUT: AnalysisRequest
        - candles: OHLCV candles for one symbol/timeframe, ascending by time
        - engine_version: which indicator set to run (optional)

    OUTPUT: TechnicalAnalysis
        - Indicator readings, detected patterns and the signal summary
    """

    @abstractmethod
    async def execute(self, input_data: AnalysisRequest) -> TechnicalAnalysis:
        """Run the analysis for the request's candles."""
        pass

    @abstractmethod
    def analyze(
        self,
        candles: Sequence[CandleInput],
        version: VersionInput = None,
    ) -> TechnicalAnalysis:
        """
        Analyse a single candle sequence.

        Args:
            candles: Candle models or plain dicts with time/open/high/low/close/volume
            version: Engine version; defaults to the configured one

        Returns:
            A fresh, immutable TechnicalAnalysis

        Raises:
            MalformedInputError: If the candles are empty or structurally invalid
        """
        pass

    @abstractmethod
    def analyze_multi_timeframe(
        self,
        entry_candles: Sequence[CandleInput],
        anchor_candles: Sequence[CandleInput],
        version: VersionInput = None,
    ) -> MultiTimeframeAnalysis:
        """Analyse an entry timeframe and a coarser anchor timeframe side by side."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        pass
