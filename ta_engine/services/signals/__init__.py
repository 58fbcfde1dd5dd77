"""
Signal Aggregation Service

Counts indicator votes and classifies the market regime.
"""

from ta_engine.services.signals.aggregator import (
    VoteCount,
    count_votes,
    classify_regime,
    summarize_signals,
)

__all__ = [
    "VoteCount",
    "count_votes",
    "classify_regime",
    "summarize_signals",
]
