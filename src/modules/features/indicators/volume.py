"""Volume indicators: Accumulation/Distribution, On-Balance Volume, Money Flow Index.

Pure functions operating on pandas Series. No state or side effects.
"""

import numpy as np
import pandas as pd

from src.modules.features.indicators.base import (
    as_series,
    check_period,
    require_aligned,
    require_length,
    safe_divide,
)


def accumulation_distribution(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    volume: pd.Series,
) -> pd.Series:
    """Calculate the Accumulation/Distribution line.

    Money Flow Multiplier = ((Close - Low) - (High - Close)) / (High - Low)
    A/D = cumulative sum of Multiplier * Volume.
    Edge case: if High == Low the bar adds nothing (multiplier = 0.0).

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        volume: Volume series.

    Returns:
        A/D line, same length as the input.

    Raises:
        InvalidArgumentError: If series lengths differ.
        InsufficientDataError: If series are empty.
    """
    high, low, close, volume = (as_series(s) for s in (high, low, close, volume))
    require_aligned(high, low, close, volume)
    require_length(close, 1, "Accumulation/Distribution")

    multiplier = safe_divide((close - low) - (high - close), high - low).fillna(0.0)

    return (multiplier * volume).cumsum()


def obv(close: pd.Series, volume: pd.Series) -> pd.Series:
    """Calculate On-Balance Volume.

    Cumulative volume: add on up days, subtract on down days, zero on flat.

    Args:
        close: Closing price series.
        volume: Volume series (must be same length as close).

    Returns:
        OBV series. First value is the first volume value.

    Raises:
        InvalidArgumentError: If series lengths don't match.
        InsufficientDataError: If series are empty.
    """
    close, volume = as_series(close), as_series(volume)
    require_aligned(close, volume)
    require_length(close, 1, "OBV")

    direction = np.sign(close.diff())
    # First bar has no direction; its volume is the starting point
    direction.iloc[0] = 1.0

    return (direction * volume).cumsum()


def mfi(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    volume: pd.Series,
    period: int = 14,
) -> pd.Series:
    """Calculate the Money Flow Index.

    Raw Money Flow = Typical Price * Volume. A bar's flow is positive when
    the typical price rose from the previous bar, negative when it fell,
    and counts toward neither when unchanged.
    MFI = 100 - 100 / (1 + positive flow / negative flow) over ``period`` bars.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        volume: Volume series.
        period: Lookback period (default 14).

    Returns:
        MFI between 0 and 100, starting at bar ``period``. 100 when there is
        no negative flow; NaN when there is no flow at all.

    Raises:
        InvalidArgumentError: If period < 1 or series lengths differ.
        InsufficientDataError: If fewer than period + 1 bars are given.
    """
    check_period(period)
    high, low, close, volume = (as_series(s) for s in (high, low, close, volume))
    require_aligned(high, low, close, volume)
    require_length(close, period + 1, "MFI")

    typical_price = (high + low + close) / 3.0
    raw_flow = typical_price * volume
    change = typical_price.diff()

    positive = raw_flow.where(change > 0, 0.0).iloc[1:]
    negative = raw_flow.where(change < 0, 0.0).iloc[1:]
    positive_sum = positive.rolling(window=period).sum().iloc[period - 1 :]
    negative_sum = negative.rolling(window=period).sum().iloc[period - 1 :]

    result = 100.0 - 100.0 / (1.0 + safe_divide(positive_sum, negative_sum))
    result = result.where(negative_sum > 0, 100.0)
    result = result.where((positive_sum > 0) | (negative_sum > 0), np.nan)

    return result
