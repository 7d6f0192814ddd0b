"""Signal rule thresholds, windows and point weights.

One frozen dataclass per indicator family. Defaults reproduce the stock
rating policy; pass modified copies (``dataclasses.replace``) to the
aggregator to tune a rule without touching its logic.

Sign convention for every rule: points are added for bullish (buy)
readings and subtracted for bearish (sell) readings.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MacdThresholds:
    """MACD crossover detection over a trailing window.

    Attributes:
        window: Trailing bars of histogram / MACD line inspected.
        min_correlation: |Pearson r| the window must exceed.
        signal_cross_slope: Minimum |slope| of the histogram window.
        zero_cross_slope: Minimum |slope| of the MACD line window.
        points: Rating change per crossover.
    """

    window: int = 15
    min_correlation: float = 0.6
    signal_cross_slope: float = 0.035
    zero_cross_slope: float = 0.05
    points: float = 5.0


@dataclass(frozen=True)
class StochasticThresholds:
    """Stochastic overbought/oversold bands, divergence and setups.

    Reading points = ((distance past the band) / scale) ** exponent + base_points,
    which ranges from 5 to 21 with the defaults.
    """

    overbought: float = 80.0
    oversold: float = 20.0
    scale: float = 10.0
    exponent: float = 4.0
    base_points: float = 5.0
    divergence_window: int = 5
    divergence_r: float = 0.3
    divergence_points: float = 5.0
    setup_window: int = 15
    setup_r: float = 0.3


@dataclass(frozen=True)
class RsiThresholds:
    """RSI overbought/oversold bands (30 to 46 points) and divergence."""

    overbought: float = 70.0
    oversold: float = 30.0
    scale: float = 15.0
    exponent: float = 4.0
    base_points: float = 30.0
    divergence_window: int = 5
    divergence_r: float = 0.4
    divergence_points: float = 15.0


@dataclass(frozen=True)
class AroonThresholds:
    """Aroon trend spotting, consolidation and oscillator strength.

    Attributes:
        period: Aroon lookback.
        hit_window: Recent bars in which one line must touch 100 while the
            other averages below ``weak_level``.
        confirm_start: First bar (from the end) of the oscillator window
            that must show the opposite bias.
        confirm_end: Bar (from the end) where that window stops.
        trend_points: Rating change for a new trend.
        consolidation_window: Bars over which both lines must decline.
        consolidation_divisor: Rating is divided by this on consolidation.
        strong_level: |oscillator| above which a strong trend is reported.
        strength_divisor: Rating change is |oscillator| / strength_divisor.
    """

    period: int = 25
    hit_window: int = 5
    weak_level: float = 50.0
    confirm_start: int = 20
    confirm_end: int = 5
    trend_points: float = 5.0
    consolidation_window: int = 10
    consolidation_divisor: float = 20.0 / 15.0
    strong_level: float = 70.0
    strength_divisor: float = 17.0


@dataclass(frozen=True)
class PsarAdxThresholds:
    """Parabolic SAR filtered by the directional indicators."""

    step: float = 0.02
    maximum: float = 0.20
    period: int = 14
    points: float = 10.0


@dataclass(frozen=True)
class DivergenceThresholds:
    """Price-vs-indicator divergence over a trailing window."""

    window: int = 7
    r: float = 0.4
    points: float = 10.0


@dataclass(frozen=True)
class BollingerThresholds:
    """Close outside the Bollinger Bands (the largest single fixed weight)."""

    period: int = 20
    width: float = 2.0
    points: float = 20.0


@dataclass(frozen=True)
class CciThresholds:
    """CCI overbought/oversold levels."""

    period: int = 20
    level: float = 100.0
    points: float = 10.0


@dataclass(frozen=True)
class MfiThresholds:
    """MFI overbought/oversold bands (quadratic scaling) and divergence."""

    period: int = 14
    overbought: float = 80.0
    oversold: float = 20.0
    scale: float = 15.0
    exponent: float = 2.0
    base_points: float = 5.0
    divergence_window: int = 10
    divergence_r: float = 0.4
    divergence_points: float = 5.0


@dataclass(frozen=True)
class RocThresholds:
    """ROC extremes, recognised only against a directional 30-bar bias.

    Attributes:
        period: ROC lookback.
        trend_window: Trailing ROC values averaged into the bias.
        min_trend: Bias magnitude required before a level counts.
        level: ROC percentage treated as overbought/oversold.
        points: Rating change.
    """

    period: int = 12
    trend_window: int = 30
    min_trend: float = 1.0
    level: float = 10.0
    points: float = 50.0


@dataclass(frozen=True)
class SignalThresholds:
    """Thresholds for every signal rule, keyed by rule name."""

    macd: MacdThresholds = field(default_factory=MacdThresholds)
    stochastic: StochasticThresholds = field(default_factory=StochasticThresholds)
    rsi: RsiThresholds = field(default_factory=RsiThresholds)
    aroon: AroonThresholds = field(default_factory=AroonThresholds)
    psar_adx: PsarAdxThresholds = field(default_factory=PsarAdxThresholds)
    accumulation_distribution: DivergenceThresholds = field(
        default_factory=lambda: DivergenceThresholds(window=7)
    )
    bollinger: BollingerThresholds = field(default_factory=BollingerThresholds)
    cci: CciThresholds = field(default_factory=CciThresholds)
    mfi: MfiThresholds = field(default_factory=MfiThresholds)
    obv: DivergenceThresholds = field(default_factory=lambda: DivergenceThresholds(window=15))
    roc: RocThresholds = field(default_factory=RocThresholds)

    def for_rule(self, rule: str) -> object:
        """Return the thresholds of one rule by name."""
        return getattr(self, rule)
