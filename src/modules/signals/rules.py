"""Signal rules — one per indicator family.

Each rule reads an indicator's latest values and short trailing windows,
applies its thresholds, and returns a new Analysis with the rating
adjusted and a note appended for every condition that fired. Rules never
mutate their inputs, so each one can be tested on its own.

References:
    - Appel — MACD crossovers
    - Lane — Stochastic divergences and bull/bear setups
    - Wilder (1978) — RSI, Parabolic SAR, ADX
    - Chande (1995) — Aroon
    - Bollinger (1980s) — Bollinger Bands
"""

import math
from collections.abc import Callable
from typing import Any

import pandas as pd

from src.modules.features.bars import PriceBars
from src.modules.features.indicators.momentum import cci, macd, roc, rsi, stochastic
from src.modules.features.indicators.trend import adx, aroon, parabolic_sar
from src.modules.features.indicators.volatility import bollinger_bands
from src.modules.features.indicators.volume import accumulation_distribution, mfi, obv
from src.modules.features.stats import is_divergence, pearson, slope
from src.modules.signals.analysis import Analysis
from src.modules.signals.thresholds import (
    AroonThresholds,
    BollingerThresholds,
    CciThresholds,
    DivergenceThresholds,
    MacdThresholds,
    MfiThresholds,
    PsarAdxThresholds,
    RocThresholds,
    RsiThresholds,
    StochasticThresholds,
)
from src.shared.logger import get_logger

logger = get_logger(__name__)

SignalRule = Callable[[PriceBars, Analysis, Any], Analysis]


def _latest(series: pd.Series, label: str) -> float:
    """Return the newest value, logging when it is undefined (NaN)."""
    value = float(series.iloc[-1])
    if math.isnan(value):
        logger.warning(f"{label} is undefined at the latest bar; rule cannot fire")
    return value


def macd_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: MacdThresholds = MacdThresholds(),
) -> Analysis:
    """MACD signal-line and zero-line crossovers.

    A crossover needs the trailing window to trend strongly, to change
    sign from its first to its last value, and to be steep enough.
    MACD divergences are not evaluated.
    """
    t = thresholds
    result = macd(bars.close)
    histogram = result.histogram.iloc[-t.window :]
    line = result.macd.iloc[-t.window :]

    # Signal-line crossover: histogram passes through 0
    histogram_r = pearson(histogram)
    if (
        histogram_r > t.min_correlation
        and histogram.iloc[0] < 0 < histogram.iloc[-1]
        and slope(histogram) > t.signal_cross_slope
    ):
        analysis = analysis.adjust(t.points, "Bullish signal line crossover found")
    elif (
        histogram_r < -t.min_correlation
        and histogram.iloc[0] > 0 > histogram.iloc[-1]
        and slope(histogram) < -t.signal_cross_slope
    ):
        analysis = analysis.adjust(-t.points, "Bearish signal line crossover found")

    # Zero-line crossover: MACD line passes through 0
    line_r = pearson(line)
    if (
        line_r > t.min_correlation
        and line.iloc[0] < 0 < line.iloc[-1]
        and slope(line) > t.zero_cross_slope
    ):
        analysis = analysis.adjust(t.points, "Bullish zero line crossover found")
    elif (
        line_r < -t.min_correlation
        and line.iloc[0] > 0 > line.iloc[-1]
        and slope(line) < -t.zero_cross_slope
    ):
        analysis = analysis.adjust(-t.points, "Bearish zero line crossover found")

    return analysis


def stochastic_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: StochasticThresholds = StochasticThresholds(),
) -> Analysis:
    """Stochastic overbought/oversold levels, divergences and bull/bear setups.

    Setups (price and %K converging) only add a note; they do not move
    the rating.
    """
    t = thresholds
    result = stochastic(bars.high, bars.low, bars.close)
    k, d = result.k, result.d
    close = bars.close
    curr_k = _latest(k, "Stochastic %K")
    curr_d = _latest(d, "Stochastic %D")

    # Overbought/oversold levels
    if curr_k > t.overbought and curr_d > t.overbought:
        points = ((curr_k - t.overbought) / t.scale) ** t.exponent + t.base_points
        analysis = analysis.adjust(
            -points, f"Bearish Stochastic reading (%K at {curr_k:.2f}, %D at {curr_d:.2f})"
        )
    if curr_k < t.oversold and curr_d < t.oversold:
        points = ((t.oversold - curr_k) / t.scale) ** t.exponent + t.base_points
        analysis = analysis.adjust(
            points, f"Bullish Stochastic reading (%K at {curr_k:.2f}, %D at {curr_d:.2f})"
        )

    # Divergences
    w = t.divergence_window
    if is_divergence(k.iloc[-w:], close.iloc[-w:], t.divergence_r):
        analysis = analysis.adjust(t.divergence_points, "Bullish Stochastic divergence found")
    elif is_divergence(close.iloc[-w:], k.iloc[-w:], t.divergence_r):
        analysis = analysis.adjust(-t.divergence_points, "Bearish Stochastic divergence found")

    # Bull/bear setups
    price_r = pearson(close.iloc[-t.setup_window :])
    k_r = pearson(k.iloc[-t.setup_window :])
    if price_r < -t.setup_r and k_r > t.setup_r:
        analysis = analysis.note(
            "Stochastic Oscillator found a bull set up. Momentum is changing; "
            "expect price to soon make a new low before rebounding."
        )
    elif price_r > t.setup_r and k_r < -t.setup_r:
        analysis = analysis.note(
            "Stochastic Oscillator found a bear set up. Momentum is changing; "
            "expect price to soon make a new high before falling."
        )

    return analysis


def rsi_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: RsiThresholds = RsiThresholds(),
) -> Analysis:
    """RSI overbought/oversold levels and divergences."""
    t = thresholds
    values = rsi(bars.close)
    last_rsi = _latest(values, "RSI")

    if last_rsi > t.overbought:
        points = ((last_rsi - t.overbought) / t.scale) ** t.exponent + t.base_points
        analysis = analysis.adjust(-points, f"Bearish RSI reading ({last_rsi:.2f})")
    if last_rsi < t.oversold:
        points = ((t.oversold - last_rsi) / t.scale) ** t.exponent + t.base_points
        analysis = analysis.adjust(points, f"Bullish RSI reading ({last_rsi:.2f})")

    w = t.divergence_window
    if is_divergence(values.iloc[-w:], bars.close.iloc[-w:], t.divergence_r):
        analysis = analysis.adjust(t.divergence_points, "Bullish RSI divergence found")
    elif is_divergence(bars.close.iloc[-w:], values.iloc[-w:], t.divergence_r):
        analysis = analysis.adjust(-t.divergence_points, "Bearish RSI divergence found")

    return analysis


def aroon_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: AroonThresholds = AroonThresholds(),
) -> Analysis:
    """Aroon trend spotting, consolidation periods and oscillator strength.

    A new trend needs one line to hit 100 recently while the other stays
    weak, after an earlier stretch where the oscillator leaned the other
    way. Consolidation pulls the whole rating toward zero.
    """
    t = thresholds
    result = aroon(bars.close, t.period)
    up, down, oscillator = result.up, result.down, result.oscillator

    recent_up = up.iloc[-t.hit_window :]
    recent_down = down.iloc[-t.hit_window :]
    # Short histories clamp the window to the first bar, keeping its width
    start = max(len(oscillator) - t.confirm_start, 0)
    earlier = oscillator.iloc[start : start + t.confirm_start - t.confirm_end]

    # Trend spotting
    if (recent_up >= 100.0).any() and recent_down.mean() < t.weak_level and (earlier < 0).any():
        analysis = analysis.adjust(t.trend_points, "Bullish Aroon trend found")
    if (recent_down >= 100.0).any() and recent_up.mean() < t.weak_level and (earlier > 0).any():
        analysis = analysis.adjust(-t.trend_points, "Bearish Aroon trend found")

    # Consolidation periods
    w = t.consolidation_window
    if (
        up.iloc[-1] < t.weak_level
        and down.iloc[-1] < t.weak_level
        and pearson(up.iloc[-w:]) < 0
        and pearson(down.iloc[-w:]) < 0
    ):
        analysis = analysis.dampen(
            t.consolidation_divisor,
            "Aroon found consolidation period; expect prices to not make large moves",
        )

    # Oscillator strength (lags heavily)
    last_oscillator = float(oscillator.iloc[-1])
    if last_oscillator > t.strong_level:
        analysis = analysis.adjust(
            last_oscillator / t.strength_divisor,
            f"Aroon oscillator found strong uptrend (at {last_oscillator:.2f})",
        )
    elif last_oscillator < -t.strong_level:
        analysis = analysis.adjust(
            -abs(last_oscillator) / t.strength_divisor,
            f"Aroon oscillator found strong downtrend (at {last_oscillator:.2f})",
        )

    return analysis


def psar_adx_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: PsarAdxThresholds = PsarAdxThresholds(),
) -> Analysis:
    """Parabolic SAR confirmed by the directional indicators.

    The SAR alone whipsaws; a signal needs +DI/-DI to agree with the side
    of price the SAR is on.
    """
    t = thresholds
    sar = _latest(parabolic_sar(bars.high, bars.low, t.step, t.maximum), "Parabolic SAR")
    directional = adx(bars.high, bars.low, bars.close, t.period)
    plus_di = _latest(directional.plus_di, "+DI")
    minus_di = _latest(directional.minus_di, "-DI")
    close = float(bars.close.iloc[-1])

    if plus_di > minus_di and sar < close:
        analysis = analysis.adjust(
            t.points, "Bullish Parabolic SAR/ADX signal (+DI above -DI and PSAR below price)"
        )
    elif plus_di < minus_di and sar > close:
        analysis = analysis.adjust(
            -t.points, "Bearish Parabolic SAR/ADX signal (+DI below -DI and PSAR above price)"
        )

    return analysis


def accumulation_distribution_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: DivergenceThresholds = DivergenceThresholds(window=7),
) -> Analysis:
    """Divergence between the A/D line and price."""
    t = thresholds
    line = accumulation_distribution(bars.high, bars.low, bars.close, bars.volume)
    close = bars.close

    if is_divergence(line.iloc[-t.window :], close.iloc[-t.window :], t.r):
        analysis = analysis.adjust(
            t.points,
            "Bullish A/D divergence found. "
            "Expect price to rise sometime in the (possibly distant) future",
        )
    elif is_divergence(close.iloc[-t.window :], line.iloc[-t.window :], t.r):
        analysis = analysis.adjust(
            -t.points,
            "Bearish A/D divergence found. "
            "Expect price to fall sometime in the (possibly distant) future",
        )

    return analysis


def bollinger_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: BollingerThresholds = BollingerThresholds(),
) -> Analysis:
    """Close outside the Bollinger Bands marks an oversold/overbought security."""
    t = thresholds
    bands = bollinger_bands(bars.close, t.period, t.width)
    close = float(bars.close.iloc[-1])

    if close < float(bands.lower.iloc[-1]):
        analysis = analysis.adjust(t.points, "Price moved below lower Bollinger Band")
    elif close > float(bands.upper.iloc[-1]):
        analysis = analysis.adjust(-t.points, "Price moved above upper Bollinger Band")

    return analysis


def cci_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: CciThresholds = CciThresholds(),
) -> Analysis:
    """CCI below -level is oversold, above +level overbought."""
    t = thresholds
    curr_cci = _latest(cci(bars.high, bars.low, bars.close, t.period), "CCI")

    if curr_cci < -t.level:
        analysis = analysis.adjust(t.points, f"Bullish CCI signal ({curr_cci:.2f})")
    elif curr_cci > t.level:
        analysis = analysis.adjust(-t.points, f"Bearish CCI signal ({curr_cci:.2f})")

    return analysis


def mfi_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: MfiThresholds = MfiThresholds(),
) -> Analysis:
    """MFI overbought/oversold levels and divergences."""
    t = thresholds
    values = mfi(bars.high, bars.low, bars.close, bars.volume, t.period)
    curr_mfi = _latest(values, "MFI")

    if curr_mfi > t.overbought:
        points = ((curr_mfi - t.overbought) / t.scale) ** t.exponent + t.base_points
        analysis = analysis.adjust(-points, f"Bearish MFI reading (MFI at {curr_mfi:.2f})")
    if curr_mfi < t.oversold:
        points = ((t.oversold - curr_mfi) / t.scale) ** t.exponent + t.base_points
        analysis = analysis.adjust(points, f"Bullish MFI reading (MFI at {curr_mfi:.2f})")

    w = t.divergence_window
    if is_divergence(values.iloc[-w:], bars.close.iloc[-w:], t.divergence_r):
        analysis = analysis.adjust(t.divergence_points, "Bullish MFI divergence found")
    elif is_divergence(bars.close.iloc[-w:], values.iloc[-w:], t.divergence_r):
        analysis = analysis.adjust(-t.divergence_points, "Bearish MFI divergence found")

    return analysis


def obv_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: DivergenceThresholds = DivergenceThresholds(window=15),
) -> Analysis:
    """Divergence between On-Balance Volume and price."""
    t = thresholds
    line = obv(bars.close, bars.volume)
    close = bars.close

    if is_divergence(line.iloc[-t.window :], close.iloc[-t.window :], t.r):
        analysis = analysis.adjust(t.points, "Bullish OBV divergence found")
    elif is_divergence(close.iloc[-t.window :], line.iloc[-t.window :], t.r):
        analysis = analysis.adjust(-t.points, "Bearish OBV divergence found")

    return analysis


def roc_signal(
    bars: PriceBars,
    analysis: Analysis,
    thresholds: RocThresholds = RocThresholds(),
) -> Analysis:
    """ROC extremes, only counted when the trailing bias is directional.

    ROC divergences whipsaw too often to be useful, so only levels are
    read: an oversold ROC inside an uptrend, or an overbought ROC inside
    a downtrend.
    """
    t = thresholds
    values = roc(bars.close, t.period)
    trend = float(values.iloc[-t.trend_window :].mean())
    latest = _latest(values, "ROC")

    if trend > t.min_trend and latest < -t.level:
        analysis = analysis.adjust(t.points, "ROC identified oversold level")
    elif trend < -t.min_trend and latest > t.level:
        analysis = analysis.adjust(-t.points, "ROC identified overbought level")

    return analysis


# Rule name → rule, in the order the full policy evaluates them
SIGNAL_RULES: dict[str, SignalRule] = {
    "macd": macd_signal,
    "stochastic": stochastic_signal,
    "rsi": rsi_signal,
    "aroon": aroon_signal,
    "psar_adx": psar_adx_signal,
    "accumulation_distribution": accumulation_distribution_signal,
    "bollinger": bollinger_signal,
    "cci": cci_signal,
    "mfi": mfi_signal,
    "obv": obv_signal,
    "roc": roc_signal,
}
