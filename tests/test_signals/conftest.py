"""Shared fixtures for signal rule and aggregator tests.

All data is static and deterministic. No network calls, no randomness.
Every dataset has 46 bars: enough for the full policy (Aroon needs 40,
MACD 34, ADX 28) while keeping hand-checked expectations simple.
"""

from datetime import date

import pandas as pd
import pytest

from src.modules.features.bars import PriceBars

QUIET_BARS = 40
MOVE_BARS = 6


def _make_date_index(n: int) -> pd.DatetimeIndex:
    """Create a DatetimeIndex of n business days."""
    start = date(2024, 1, 2)  # A Tuesday
    dates = pd.bdate_range(start=start, periods=n)
    return dates


def _bars_from_close(closes: list[float]) -> PriceBars:
    """Build bars with a fixed 1-point range around each close."""
    close = pd.Series(closes, index=_make_date_index(len(closes)), dtype=float)
    return PriceBars(
        open=close - 0.2,
        high=close + 0.5,
        low=close - 0.5,
        close=close,
        volume=pd.Series(1_000_000.0, index=close.index),
    )


def _quiet_closes(n: int = QUIET_BARS) -> list[float]:
    """Closes alternating 0.2 either side of 100 (even bars above)."""
    return [100.0 + 0.2 * (-1) ** i for i in range(n)]


@pytest.fixture
def quiet_bars() -> PriceBars:
    """46 bars of range-bound noise: no signal should fire.

    RSI hovers near 50, price stays inside the Bollinger Bands and
    every 12-bar ROC is zero.
    """
    return _bars_from_close(_quiet_closes(QUIET_BARS + MOVE_BARS))


@pytest.fixture
def rally_bars() -> PriceBars:
    """40 quiet bars, then 6 bars rising 3 points each (103 to 118).

    At the last bar the close (118) is above the upper band (~114.3) and
    RSI is ~90, so the security reads as overbought. The 30-bar ROC bias
    is positive (~2.1), so no ROC level fires.
    """
    closes = _quiet_closes() + [103.0 + 3.0 * i for i in range(MOVE_BARS)]
    return _bars_from_close(closes)


@pytest.fixture
def selloff_bars() -> PriceBars:
    """40 quiet bars, then 6 bars falling 3 points each (97 to 82).

    Mirror of rally_bars: close below the lower band (~85.7), RSI ~9.
    """
    closes = _quiet_closes() + [97.0 - 3.0 * i for i in range(MOVE_BARS)]
    return _bars_from_close(closes)


@pytest.fixture
def uptrend_bars() -> PriceBars:
    """46 bars rising exactly 1 point per bar from 100."""
    return _bars_from_close([100.0 + i for i in range(QUIET_BARS + MOVE_BARS)])


@pytest.fixture
def short_bars() -> PriceBars:
    """30 quiet bars: enough for the reduced policy, too few for the full one."""
    return _bars_from_close(_quiet_closes(30))
