"""Candlestick patterns: Three Black Crows, Three White Soldiers.

Pure functions over the last three bars. No state or side effects.
"""

import pandas as pd

from src.modules.features.indicators.base import as_series, require_aligned, require_length

# Minimum body of each candle, as a fraction of the first candle's close
MIN_BODY_RATIO = 0.003

PATTERN_BARS = 3


def _last_candles(open_: pd.Series, close: pd.Series, name: str) -> tuple[list, list, float]:
    open_, close = as_series(open_), as_series(close)
    require_aligned(open_, close)
    require_length(close, PATTERN_BARS, name)

    opens = open_.iloc[-PATTERN_BARS:].tolist()
    closes = close.iloc[-PATTERN_BARS:].tolist()
    return opens, closes, closes[0] * MIN_BODY_RATIO


def three_black_crows(open_: pd.Series, close: pd.Series) -> bool:
    """Detect the Three Black Crows pattern on the last three bars.

    Each open and each close is lower than the previous one, and every
    candle is bearish with a body larger than 0.3% of the first close.

    Args:
        open_: Opening price series.
        close: Closing price series.

    Returns:
        True if the pattern is present.

    Raises:
        InvalidArgumentError: If series lengths differ.
        InsufficientDataError: If fewer than 3 bars are given.
    """
    opens, closes, min_body = _last_candles(open_, close, "Three Black Crows")

    return (
        opens[0] > opens[1] > opens[2]
        and closes[0] > closes[1] > closes[2]
        and all(o - c > min_body for o, c in zip(opens, closes))
    )


def three_white_soldiers(open_: pd.Series, close: pd.Series) -> bool:
    """Detect the Three White Soldiers pattern on the last three bars.

    Mirror of Three Black Crows: rising opens and closes, every candle
    bullish with a body larger than 0.3% of the first close.

    Args:
        open_: Opening price series.
        close: Closing price series.

    Returns:
        True if the pattern is present.

    Raises:
        InvalidArgumentError: If series lengths differ.
        InsufficientDataError: If fewer than 3 bars are given.
    """
    opens, closes, min_body = _last_candles(open_, close, "Three White Soldiers")

    return (
        opens[0] < opens[1] < opens[2]
        and closes[0] < closes[1] < closes[2]
        and all(c - o > min_body for o, c in zip(opens, closes))
    )
