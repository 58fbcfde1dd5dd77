"""
Candle builders and assertion helpers shared by the test modules.
"""

import math
from typing import Optional, Sequence

import numpy as np

from ta_engine.schemas.market import Candle

HOUR_MS = 3_600_000
START_MS = 1_700_000_000_000


def make_candles(
    closes: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    spread: float = 0.5,
) -> list[Candle]:
    """
    Build hourly candles from closes.

    Each candle opens at the previous close; high/low extend ``spread``
    beyond the body (default 0.5).
    """
    if volumes is None:
        volumes = [1000.0] * len(closes)

    candles = []
    prev_close = closes[0]
    for i, (close, volume) in enumerate(zip(closes, volumes)):
        open_ = prev_close
        candles.append(
            Candle(
                time=START_MS + i * HOUR_MS,
                open=open_,
                high=max(open_, close) + spread,
                low=min(open_, close) - spread,
                close=close,
                volume=volume,
            )
        )
        prev_close = close
    return candles


def random_walk_closes(size: int, seed: int = 42) -> list[float]:
    rng = np.random.default_rng(seed)
    returns = rng.normal(0, 0.01, size)
    return [float(c) for c in 100 * np.exp(np.cumsum(returns))]


def collect_numbers(node, path="") -> list[tuple[str, float]]:
    """Every int/float leaf of a model_dump() tree, with its path."""
    found = []
    if isinstance(node, dict):
        for key, value in node.items():
            found.extend(collect_numbers(value, f"{path}.{key}"))
    elif isinstance(node, (list, tuple)):
        for i, value in enumerate(node):
            found.extend(collect_numbers(value, f"{path}[{i}]"))
    elif isinstance(node, (int, float)) and not isinstance(node, bool):
        found.append((path, node))
    return found


def assert_all_finite(analysis) -> None:
    for path, value in collect_numbers(analysis.model_dump()):
        assert math.isfinite(value), f"{path} is {value}"

