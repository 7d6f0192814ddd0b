"""Technical indicators for the rating engine.

All indicators are pure functions: Series in, Series (or a frozen result
of Series) out. Warm-up bars are dropped, not padded.
"""

from src.modules.features.indicators.candle import three_black_crows, three_white_soldiers
from src.modules.features.indicators.momentum import cci, macd, roc, rsi, stochastic
from src.modules.features.indicators.smoothing import ema, sma, wilder
from src.modules.features.indicators.trend import adx, aroon, parabolic_sar
from src.modules.features.indicators.volatility import atr, bollinger_bands, true_range
from src.modules.features.indicators.volume import accumulation_distribution, mfi, obv

__all__ = [
    "sma",
    "ema",
    "wilder",
    "true_range",
    "atr",
    "bollinger_bands",
    "macd",
    "stochastic",
    "rsi",
    "cci",
    "roc",
    "aroon",
    "parabolic_sar",
    "adx",
    "accumulation_distribution",
    "obv",
    "mfi",
    "three_black_crows",
    "three_white_soldiers",
]
