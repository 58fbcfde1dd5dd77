"""
Narrative Context Service

Structured inputs for the (external) narrative-generation layer.
"""

from ta_engine.services.narrative.context import (
    build_narrative_context,
    format_market_data_block,
    check_target_realism,
)

__all__ = [
    "build_narrative_context",
    "format_market_data_block",
    "check_target_realism",
]
