"""Signal Aggregator — runs a policy of signal rules over one security.

A policy is a named, ordered selection of rules. Two ship by default:

    full     every rule, in the order MACD → ... → ROC
    reduced  RSI, Bollinger Bands and ROC only, the subset held to be
             the most reliable indicators

Each run starts from an empty Analysis, so repeated runs on the same
aggregator return identical results.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.modules.features.bars import PriceBars
from src.modules.features.errors import InvalidArgumentError
from src.modules.signals import rules as signal_rules
from src.modules.signals.analysis import Analysis
from src.modules.signals.thresholds import SignalThresholds
from src.shared.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SignalPolicy:
    """Named, ordered selection of signal rules.

    Attributes:
        name: Policy identifier (e.g. "full", "reduced").
        rules: Rule names, evaluated in this order.
    """

    name: str
    rules: tuple[str, ...]

    def __post_init__(self) -> None:
        unknown = [rule for rule in self.rules if rule not in signal_rules.SIGNAL_RULES]
        if unknown:
            raise InvalidArgumentError(
                f"Unknown signal rules in policy '{self.name}': {unknown}. "
                f"Known rules: {sorted(signal_rules.SIGNAL_RULES)}"
            )


FULL_POLICY = SignalPolicy("full", tuple(signal_rules.SIGNAL_RULES))
REDUCED_POLICY = SignalPolicy("reduced", ("rsi", "bollinger", "roc"))

POLICIES: dict[str, SignalPolicy] = {
    FULL_POLICY.name: FULL_POLICY,
    REDUCED_POLICY.name: REDUCED_POLICY,
}


def register_policy(policy: SignalPolicy) -> None:
    """Make a custom policy available by name (replaces any existing one)."""
    POLICIES[policy.name] = policy
    logger.info(f"Registered signal policy '{policy.name}': {', '.join(policy.rules)}")


def get_policy(name: str) -> SignalPolicy:
    """Look up a policy by name.

    Raises:
        InvalidArgumentError: If no policy has that name.
    """
    try:
        return POLICIES[name]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown signal policy '{name}'. Known policies: {sorted(POLICIES)}"
        ) from None


class SignalAggregator:
    """Combines per-indicator signal rules into one rating with notes.

    Usage:
        bars = PriceBars(open_, high, low, close, volume)
        aggregator = SignalAggregator(bars)
        analysis = aggregator.run_all()
        print(analysis.rating, analysis.notes)
    """

    def __init__(
        self,
        bars: PriceBars,
        thresholds: SignalThresholds | None = None,
    ) -> None:
        """Initialize SignalAggregator.

        Args:
            bars: Price bars of the security, oldest first.
            thresholds: Rule thresholds (defaults to SignalThresholds()).
        """
        self._bars = bars
        self._thresholds = thresholds or SignalThresholds()

    @property
    def bars(self) -> PriceBars:
        """Price bars being analysed."""
        return self._bars

    def run(
        self,
        policy: str | SignalPolicy = REDUCED_POLICY,
        initial: Analysis | None = None,
    ) -> Analysis:
        """Run every rule of a policy, in order.

        Args:
            policy: Policy object or registered policy name.
            initial: Analysis to continue from (defaults to an empty one).

        Returns:
            Analysis with the composite rating and the notes of every
            condition that fired.

        Raises:
            InvalidArgumentError: If the policy name is unknown.
            InsufficientDataError: If the bars are too short for a rule.
        """
        if isinstance(policy, str):
            policy = get_policy(policy)

        analysis = initial or Analysis()
        for name in policy.rules:
            rule = signal_rules.SIGNAL_RULES[name]
            before = analysis
            analysis = rule(self._bars, analysis, self._thresholds.for_rule(name))
            if analysis.notes != before.notes:
                logger.debug(
                    f"Rule '{name}' fired: rating {before.rating:.2f} -> {analysis.rating:.2f}"
                )

        logger.info(
            f"Evaluated '{policy.name}' policy: {len(policy.rules)} rules, "
            f"{len(self._bars)} bars, rating={analysis.rating:.2f}, "
            f"notes={len(analysis.notes)}"
        )
        return analysis

    def run_all(self) -> Analysis:
        """Run the full rule set."""
        return self.run(FULL_POLICY)

    def run_reduced(self) -> Analysis:
        """Run only the RSI, Bollinger Bands and ROC rules."""
        return self.run(REDUCED_POLICY)


def analyze(
    open_: Sequence[float] | np.ndarray | pd.Series,
    high: Sequence[float] | np.ndarray | pd.Series,
    low: Sequence[float] | np.ndarray | pd.Series,
    close: Sequence[float] | np.ndarray | pd.Series,
    volume: Sequence[float] | np.ndarray | pd.Series,
    policy: str | SignalPolicy = REDUCED_POLICY,
    thresholds: SignalThresholds | None = None,
) -> Analysis:
    """Build price bars from five sequences and run a signal policy.

    Raises:
        InvalidInputError: If the sequences are not valid price bars.
        InvalidArgumentError: If the policy name is unknown.
        InsufficientDataError: If the bars are too short for a rule.
    """
    bars = PriceBars(open_, high, low, close, volume)
    return SignalAggregator(bars, thresholds).run(policy)
