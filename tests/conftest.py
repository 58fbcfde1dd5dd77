"""
Pytest fixtures for the TA Engine tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ta_engine.core.config import get_settings  # noqa: E402
from tests.helpers import make_candles, random_walk_closes  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; reset around every test so env overrides apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def uptrend_candles():
    """300 candles rising 0.5 per candle with flat volume."""
    return make_candles([100 + i * 0.5 for i in range(300)])


@pytest.fixture
def downtrend_candles():
    """300 candles falling 0.5 per candle with flat volume."""
    return make_candles([400 - i * 0.5 for i in range(300)])


@pytest.fixture
def flat_candles():
    """300 identical-range candles at 100."""
    return make_candles([100.0] * 300)


@pytest.fixture
def random_walk_candles():
    closes = random_walk_closes(300)
    rng = np.random.default_rng(7)
    volumes = [float(v) for v in rng.uniform(500, 1500, 300)]
    return make_candles(closes, volumes, spread=0.2)
