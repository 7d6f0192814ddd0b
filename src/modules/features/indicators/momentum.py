"""Momentum indicators: MACD, Stochastic Oscillator, RSI, CCI, Rate of Change.

Pure functions operating on pandas Series. No state or side effects.
Where a formula divides by zero (flat price ranges) the value is NaN,
or the mathematical limit where one exists (RSI = 100 with no losses).
"""

from dataclasses import dataclass

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
from src.modules.features.indicators.smoothing import ema, sma, wilder


@dataclass(frozen=True)
class MacdResult:
    """MACD line, signal line and histogram (MACD - signal)."""

    macd: pd.Series
    signal: pd.Series
    histogram: pd.Series


@dataclass(frozen=True)
class StochasticResult:
    """Stochastic %K and its moving average %D."""

    k: pd.Series
    d: pd.Series


def macd(
    close: pd.Series,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MacdResult:
    """Calculate Moving Average Convergence Divergence.

    MACD = EMA(fast) - EMA(slow); Signal = EMA(signal) of MACD;
    Histogram = MACD - Signal. The fast EMA is trimmed by ``slow - fast``
    values so both EMAs cover the same bars.

    Args:
        close: Closing price series.
        fast: Fast EMA period (default 12).
        slow: Slow EMA period (default 26).
        signal: Signal line EMA period (default 9).

    Returns:
        MacdResult. The MACD line starts at bar ``slow - 1``, the signal
        line and histogram at bar ``slow + signal - 2``.

    Raises:
        InvalidArgumentError: If fast >= slow or any period < 1.
        InsufficientDataError: If fewer than slow + signal - 1 bars are given.
    """
    if fast < 1 or slow < 1 or signal < 1:
        raise InvalidArgumentError(
            f"All periods must be >= 1, got fast={fast}, slow={slow}, signal={signal}"
        )
    if fast >= slow:
        raise InvalidArgumentError(
            f"Fast period must be < slow period, got fast={fast}, slow={slow}"
        )
    close = as_series(close)
    require_length(close, slow + signal - 1, "MACD")

    ema_slow = ema(close, slow)
    ema_fast = ema(close, fast).iloc[slow - fast :]
    macd_line = ema_fast - ema_slow
    signal_line = ema(macd_line, signal)
    histogram = macd_line.iloc[signal - 1 :] - signal_line

    return MacdResult(macd=macd_line, signal=signal_line, histogram=histogram)


def stochastic(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    k_period: int = 14,
    d_period: int = 3,
) -> StochasticResult:
    """Calculate the Stochastic Oscillator.

    %K = (Close - Lowest Low) / (Highest High - Lowest Low) * 100 over
    ``k_period`` bars; %D = SMA(d_period) of %K. A window whose high equals
    its low has an undefined %K (NaN).

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        k_period: %K lookback (default 14).
        d_period: %D smoothing (default 3).

    Returns:
        StochasticResult with %K (from bar ``k_period - 1``) and %D.

    Raises:
        InvalidArgumentError: If a period < 1 or series lengths differ.
        InsufficientDataError: If fewer than k_period + d_period - 1 bars.
    """
    check_period(k_period, "K period")
    check_period(d_period, "D period")
    high, low, close = as_series(high), as_series(low), as_series(close)
    require_aligned(high, low, close)
    require_length(close, k_period + d_period - 1, "Stochastic")

    lowest = low.rolling(window=k_period).min()
    highest = high.rolling(window=k_period).max()
    k = (100.0 * safe_divide(close - lowest, highest - lowest)).iloc[k_period - 1 :]

    return StochasticResult(k=k, d=sma(k, d_period))


def rsi(close: pd.Series, period: int = 14) -> pd.Series:
    """Calculate Relative Strength Index (Wilder's smoothing).

    RSI = 100 - 100 / (1 + avg gain / avg loss). The first averages are
    plain means of the first ``period`` price changes.

    Args:
        close: Closing price series.
        period: Lookback period (default 14).

    Returns:
        RSI values between 0 and 100, starting at bar ``period``.
        RSI is 100 when there are no losses and NaN when price is flat.

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If fewer than period + 1 bars are given.
    """
    check_period(period)
    close = as_series(close)
    require_length(close, period + 1, "RSI")

    delta = close.diff().iloc[1:]
    gains = delta.clip(lower=0.0)
    losses = (-delta).clip(lower=0.0)

    avg_gain = wilder(gains, period)
    avg_loss = wilder(losses, period)

    result = 100.0 - 100.0 / (1.0 + safe_divide(avg_gain, avg_loss))
    # No losses: RS is infinite and RSI tends to 100
    result = result.where(avg_loss > 0, 100.0)
    # No movement at all: undefined
    result = result.where((avg_gain > 0) | (avg_loss > 0), np.nan)

    return result


def cci(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    period: int = 20,
    constant: float = 0.015,
) -> pd.Series:
    """Calculate the Commodity Channel Index.

    Typical Price = (High + Low + Close) / 3;
    CCI = (TP - SMA(TP)) / (constant * mean absolute deviation of TP).

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        period: Lookback period (default 20).
        constant: Lambert's scaling constant (default 0.015).

    Returns:
        CCI series starting at bar ``period - 1``. NaN where the mean
        deviation is zero (flat typical price).

    Raises:
        InvalidArgumentError: If period < 1 or series lengths differ.
        InsufficientDataError: If fewer than ``period`` bars are given.
    """
    check_period(period)
    high, low, close = as_series(high), as_series(low), as_series(close)
    require_aligned(high, low, close)
    require_length(close, period, "CCI")

    typical_price = (high + low + close) / 3.0
    tp_sma = sma(typical_price, period)
    mean_deviation = typical_price.rolling(window=period).apply(
        lambda w: np.abs(w - w.mean()).mean(), raw=True
    ).iloc[period - 1 :]

    return safe_divide(typical_price.iloc[period - 1 :] - tp_sma, constant * mean_deviation)


def roc(prices: pd.Series, period: int = 12) -> pd.Series:
    """Calculate Rate of Change.

    Formula: (price - price n periods ago) / (price n periods ago) * 100.

    Args:
        prices: Price series (usually closes).
        period: Lookback n (default 12).

    Returns:
        ROC in percent, starting at bar ``period``. NaN where the base
        price is zero.

    Raises:
        InvalidArgumentError: If period < 1.
        InsufficientDataError: If fewer than period + 1 bars are given.
    """
    check_period(period)
    prices = as_series(prices)
    require_length(prices, period + 1, "ROC")

    base = prices.shift(period)
    return (100.0 * safe_divide(prices - base, base)).iloc[period:]
