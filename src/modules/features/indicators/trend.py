"""Trend indicators: Aroon, Parabolic SAR, ADX.

Pure functions operating on pandas Series. No state or side effects.
"""

from dataclasses import dataclass, replace

import numpy as np
import pandas as pd

from src.modules.features.errors import InvalidArgumentError
from src.modules.features.indicators.base import (
    as_series,
    check_period,
    require_aligned,
    require_length,
    safe_divide,
)
from src.modules.features.indicators.smoothing import wilder
from src.modules.features.indicators.volatility import true_range

# Bars Aroon needs beyond its period so the signal rule can look back 20 bars
AROON_EXTRA_BARS = 15


@dataclass(frozen=True)
class AroonResult:
    """Aroon Up, Aroon Down and the Aroon Oscillator (Up - Down)."""

    up: pd.Series
    down: pd.Series
    oscillator: pd.Series


@dataclass(frozen=True)
class AdxResult:
    """+DI, -DI and the Average Directional Index."""

    plus_di: pd.Series
    minus_di: pd.Series
    adx: pd.Series


@dataclass(frozen=True)
class TrendState:
    """Parabolic SAR state carried from one bar to the next.

    Attributes:
        uptrend: True while the SAR trails below price.
        extreme_point: Highest high of the uptrend or lowest low of the
            downtrend so far.
        acceleration: Current acceleration factor.
    """

    uptrend: bool
    extreme_point: float
    acceleration: float


def aroon(close: pd.Series, period: int = 25) -> AroonResult:
    """Calculate the Aroon indicator.

    Aroon Up = (period - bars since highest close) / period * 100
    Aroon Down = (period - bars since lowest close) / period * 100
    Ties resolve to the most recent bar.

    Args:
        close: Closing price series.
        period: Lookback window (default 25).

    Returns:
        AroonResult, each series ``len(close) - period + 1`` long.

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If fewer than period + 15 bars are given.
    """
    check_period(period)
    close = as_series(close)
    require_length(close, period + AROON_EXTRA_BARS, "Aroon")

    windows = close.rolling(window=period)
    # argmax on the reversed window = bars since the latest extreme
    since_high = windows.apply(lambda w: np.argmax(w[::-1]), raw=True).iloc[period - 1 :]
    since_low = windows.apply(lambda w: np.argmin(w[::-1]), raw=True).iloc[period - 1 :]

    up = (period - since_high) / period * 100.0
    down = (period - since_low) / period * 100.0

    return AroonResult(up=up, down=down, oscillator=up - down)


def _next_state(
    state: TrendState,
    prior_sar: float,
    high: np.ndarray,
    low: np.ndarray,
    i: int,
    step: float,
    maximum: float,
) -> tuple[TrendState, float]:
    """Advance the Parabolic SAR by one bar.

    Returns:
        The new trend state and the SAR for bar ``i``.
    """
    candidate = prior_sar + state.acceleration * (state.extreme_point - prior_sar)
    before = max(i - 2, 0)

    if state.uptrend:
        # SAR may not rise above the prior two lows
        candidate = min(candidate, low[i - 1], low[before])
        if low[i] <= candidate:
            return TrendState(False, low[i], step), state.extreme_point
        if high[i] > state.extreme_point:
            state = replace(
                state,
                extreme_point=high[i],
                acceleration=min(state.acceleration + step, maximum),
            )
        return state, candidate

    # SAR may not fall below the prior two highs
    candidate = max(candidate, high[i - 1], high[before])
    if high[i] >= candidate:
        return TrendState(True, high[i], step), state.extreme_point
    if low[i] < state.extreme_point:
        state = replace(
            state,
            extreme_point=low[i],
            acceleration=min(state.acceleration + step, maximum),
        )
    return state, candidate


def parabolic_sar(
    high: pd.Series,
    low: pd.Series,
    step: float = 0.02,
    maximum: float = 0.20,
) -> pd.Series:
    """Calculate the Parabolic SAR (stop and reverse).

    SAR(t) = SAR(t-1) + AF * (EP - SAR(t-1)). AF starts at ``step`` and
    grows by ``step`` each time the extreme point makes a new high (or
    low), capped at ``maximum``. The trend reverses when price crosses the
    SAR; the new SAR is the old extreme point and AF resets.

    The series starts in a downtrend with SAR = first high and EP = first low.

    Args:
        high: High price series.
        low: Low price series.
        step: Acceleration factor increment (default 0.02).
        maximum: Acceleration factor cap (default 0.20).

    Returns:
        SAR value for every bar.

    Raises:
        InvalidArgumentError: If step/maximum are not positive or lengths differ.
        InsufficientDataError: If fewer than 2 bars are given.
    """
    if step <= 0 or maximum < step:
        raise InvalidArgumentError(
            f"Need 0 < step <= maximum, got step={step}, maximum={maximum}"
        )
    high, low = as_series(high), as_series(low)
    require_aligned(high, low)
    require_length(high, 2, "Parabolic SAR")

    highs = high.to_numpy()
    lows = low.to_numpy()

    state = TrendState(uptrend=False, extreme_point=lows[0], acceleration=step)
    sar = np.empty(len(highs))
    sar[0] = highs[0]
    for i in range(1, len(highs)):
        state, sar[i] = _next_state(state, sar[i - 1], highs, lows, i, step, maximum)

    return pd.Series(sar, index=high.index)


def adx(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    period: int = 14,
) -> AdxResult:
    """Calculate the Average Directional Index with +DI and -DI.

    +DM = up move when it exceeds the down move and is positive, else 0
    (and vice versa for -DM). TR, +DM and -DM are Wilder-smoothed; then
    DI = 100 * smoothed DM / smoothed TR, DX = 100 * |+DI - -DI| / (+DI + -DI)
    and ADX = Wilder-smoothed DX.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        period: Smoothing period (default 14).

    Returns:
        AdxResult. DI series start at bar ``period``, ADX at ``2 * period - 1``.
        A flat market (+DI + -DI = 0) yields DX = 0.

    Raises:
        InvalidArgumentError: If period < 1 or series lengths differ.
        InsufficientDataError: If fewer than 2 * period bars are given.
    """
    check_period(period)
    high, low, close = as_series(high), as_series(low), as_series(close)
    require_aligned(high, low, close)
    require_length(close, 2 * period, "ADX")

    up_move = high.diff()
    down_move = low.shift(1) - low
    plus_dm = up_move.where((up_move > down_move) & (up_move > 0), 0.0).iloc[1:]
    minus_dm = down_move.where((down_move > up_move) & (down_move > 0), 0.0).iloc[1:]
    tr = true_range(high, low, close).iloc[1:]

    tr_smooth = wilder(tr, period)
    plus_di = 100.0 * safe_divide(wilder(plus_dm, period), tr_smooth)
    minus_di = 100.0 * safe_divide(wilder(minus_dm, period), tr_smooth)

    di_sum = plus_di + minus_di
    dx = (100.0 * (plus_di - minus_di).abs() / di_sum).where(di_sum != 0, 0.0)

    return AdxResult(plus_di=plus_di, minus_di=minus_di, adx=wilder(dx, period))
