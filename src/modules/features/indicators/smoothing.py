"""Smoothing primitives: SMA, EMA and Wilder's running average.

Pure functions operating on pandas Series. No state or side effects.
Outputs drop the warm-up instead of padding it with NaN: a smoother over
``period`` bars returns ``len(values) - period + 1`` values, each labelled
with the index of the last bar in its window.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from src.modules.features.indicators.base import as_series, check_period, require_length


def sma(values: Sequence[float] | np.ndarray | pd.Series, period: int) -> pd.Series:
    """Calculate Simple Moving Average.

    Args:
        values: Input series, oldest first.
        period: Window length.

    Returns:
        Arithmetic mean of every full window, oldest to newest.

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If period > len(values).
    """
    check_period(period)
    series = as_series(values)
    require_length(series, period, "SMA")

    return series.rolling(window=period).mean().iloc[period - 1 :]


def _seeded_ewm(series: pd.Series, seed: float, period: int, alpha: float) -> pd.Series:
    """Exponential smoothing whose first output is ``seed``.

    With adjust=False pandas computes y[t] = (1 - alpha) * y[t-1] + alpha * x[t]
    and starts from the first input, so the seed is placed in front of the
    values that follow the seeding window.
    """
    head = pd.Series([seed], index=series.index[period - 1 : period], dtype=float)
    seeded = pd.concat([head, series.iloc[period:]])
    return seeded.ewm(alpha=alpha, adjust=False).mean()


def ema(values: Sequence[float] | np.ndarray | pd.Series, period: int) -> pd.Series:
    """Calculate Exponential Moving Average seeded with the first SMA value.

    Formula: EMA = 2 / (period + 1) * (price - prev EMA) + prev EMA.

    Args:
        values: Input series, oldest first.
        period: EMA period.

    Returns:
        EMA series, same length and offset as sma(values, period).

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If period > len(values).
    """
    series = as_series(values)
    seed = sma(series, period).iloc[0]
    return _seeded_ewm(series, seed, period, alpha=2.0 / (period + 1))


def wilder(values: Sequence[float] | np.ndarray | pd.Series, period: int = 14) -> pd.Series:
    """Calculate Wilder's running average (used by ATR, RSI and ADX).

    First value is the mean of the first ``period`` inputs, then
    avg = (prev_avg * (period - 1) + value) / period.

    Args:
        values: Input series, oldest first.
        period: Smoothing period (default 14).

    Returns:
        Smoothed series, same length and offset as sma(values, period).

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If period > len(values).
    """
    series = as_series(values)
    seed = sma(series, period).iloc[0]
    return _seeded_ewm(series, seed, period, alpha=1.0 / period)
