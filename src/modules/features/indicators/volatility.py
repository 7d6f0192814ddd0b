"""Volatility indicators: True Range, ATR, Bollinger Bands.

Pure functions operating on pandas Series. No state or side effects.
"""

from dataclasses import dataclass

import pandas as pd

from src.modules.features.indicators.base import (
    as_series,
    check_period,
    require_aligned,
    require_length,
)
from src.modules.features.indicators.smoothing import sma, wilder
from src.modules.features.stats import standard_deviation


@dataclass(frozen=True)
class AtrResult:
    """True Range and Average True Range series."""

    true_range: pd.Series
    atr: pd.Series


@dataclass(frozen=True)
class BollingerBands:
    """Lower, middle (SMA) and upper Bollinger Bands."""

    lower: pd.Series
    middle: pd.Series
    upper: pd.Series


def true_range(high: pd.Series, low: pd.Series, close: pd.Series) -> pd.Series:
    """Calculate True Range.

    Formula: max(High - Low, |High - prev Close|, |Low - prev Close|).
    The first bar has no previous close, so its TR is High - Low.

    Raises:
        InvalidArgumentError: If series lengths differ.
        InsufficientDataError: If series are empty.
    """
    high, low, close = as_series(high), as_series(low), as_series(close)
    require_aligned(high, low, close)
    require_length(close, 1, "True Range")

    prev_close = close.shift(1)
    tr1 = high - low
    tr2 = (high - prev_close).abs()
    tr3 = (low - prev_close).abs()
    # max() skips the NaN from shift(1) on the first bar
    return pd.concat([tr1, tr2, tr3], axis=1).max(axis=1)


def atr(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    period: int = 14,
) -> AtrResult:
    """Calculate Average True Range.

    ATR measures volatility without regard to direction, so it is not a
    signal on its own. ATR(t) = (ATR(t-1) * (period - 1) + TR(t)) / period,
    seeded with the mean of the first ``period`` true ranges.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        period: ATR period (default 14).

    Returns:
        AtrResult with the full TR series and the ATR series, which starts
        at bar ``period - 1``.

    Raises:
        InvalidArgumentError: If period < 1 or series lengths differ.
        InsufficientDataError: If fewer than ``period`` bars are given.
    """
    check_period(period)
    tr = true_range(high, low, close)
    require_length(tr, period, "ATR")

    return AtrResult(true_range=tr, atr=wilder(tr, period))


def bollinger_bands(
    close: pd.Series,
    period: int = 20,
    width: float = 2.0,
) -> BollingerBands:
    """Calculate Bollinger Bands.

    Middle band = SMA(period); upper/lower = middle ± width * population
    standard deviation of the same window.

    Args:
        close: Closing price series.
        period: Window length (default 20).
        width: Band width in standard deviations (default 2).

    Returns:
        BollingerBands, each ``len(close) - period + 1`` long.

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If fewer than ``period`` bars are given.
    """
    check_period(period)
    close = as_series(close)
    require_length(close, period, "Bollinger Bands")

    middle = sma(close, period)
    deviation = close.rolling(window=period).apply(standard_deviation, raw=True)
    deviation = deviation.iloc[period - 1 :]

    return BollingerBands(
        lower=middle - width * deviation,
        middle=middle,
        upper=middle + width * deviation,
    )
