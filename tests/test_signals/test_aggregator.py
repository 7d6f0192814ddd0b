"""Tests for SignalAggregator and signal policies.

End-to-end cases run the real indicators on the conftest bars; the
ordering and plumbing cases swap the rule table for mocks.
"""

from unittest.mock import MagicMock, patch

import pytest

from src.modules.features.bars import PriceBars
from src.modules.features.errors import (
    InsufficientDataError,
    InvalidArgumentError,
    InvalidInputError,
)
from src.modules.signals import aggregator
from src.modules.signals.aggregator import (
    FULL_POLICY,
    REDUCED_POLICY,
    SignalAggregator,
    SignalPolicy,
    analyze,
    get_policy,
    register_policy,
)
from src.modules.signals.analysis import Analysis
from src.modules.signals.thresholds import BollingerThresholds, SignalThresholds

RULE_TABLE = "src.modules.signals.rules.SIGNAL_RULES"


def _recording_rule(name: str) -> MagicMock:
    """Mock rule that adds one point and notes its own name."""
    rule = MagicMock(name=name)
    rule.side_effect = lambda bars, analysis, thresholds: analysis.adjust(1.0, name)
    return rule


class TestPolicies:
    """Tests for policy definitions and lookup."""

    def test_full_policy_runs_every_rule(self) -> None:
        """The full policy lists all eleven rules, MACD first, ROC last."""
        assert len(FULL_POLICY.rules) == 11
        assert FULL_POLICY.rules[0] == "macd"
        assert FULL_POLICY.rules[-1] == "roc"

    def test_reduced_policy(self) -> None:
        """The reduced policy is RSI, Bollinger Bands, ROC."""
        assert REDUCED_POLICY.rules == ("rsi", "bollinger", "roc")

    def test_get_policy(self) -> None:
        """Registered policies are found by name."""
        assert get_policy("full") is FULL_POLICY
        assert get_policy("reduced") is REDUCED_POLICY

    def test_unknown_policy(self) -> None:
        """Should raise InvalidArgumentError for an unknown name."""
        with pytest.raises(InvalidArgumentError, match="Unknown signal policy 'everything'"):
            get_policy("everything")

    def test_unknown_rule_in_policy(self) -> None:
        """Policies may only name registered rules."""
        with pytest.raises(InvalidArgumentError, match="vwap"):
            SignalPolicy("custom", ("rsi", "vwap"))

    @patch.dict(aggregator.POLICIES)
    def test_register_policy(self, rally_bars: PriceBars) -> None:
        """A custom policy can be registered and run by name."""
        register_policy(SignalPolicy("bands", ("bollinger",)))

        result = SignalAggregator(rally_bars).run("bands")

        assert result.notes == ("Price moved above upper Bollinger Band",)
        assert result.rating == -20.0


class TestSignalAggregator:
    """Tests for running policies over price bars."""

    def test_reduced_on_rally(self, rally_bars: PriceBars) -> None:
        """Overbought rally: bearish RSI reading and an upper band break."""
        result = SignalAggregator(rally_bars).run_reduced()

        assert len(result.notes) == 2
        assert result.notes[0].startswith("Bearish RSI reading (")
        assert result.notes[1] == "Price moved above upper Bollinger Band"
        # At least 30 points from RSI plus 20 from the band break
        assert result.rating < -50.0

    def test_reduced_on_selloff(self, selloff_bars: PriceBars) -> None:
        """Oversold selloff mirrors the rally."""
        result = SignalAggregator(selloff_bars).run_reduced()

        assert result.notes[0].startswith("Bullish RSI reading (")
        assert result.notes[1] == "Price moved below lower Bollinger Band"
        assert result.rating > 50.0

    def test_quiet_market_has_no_recommendation(self, quiet_bars: PriceBars) -> None:
        """Range-bound noise fires nothing."""
        result = SignalAggregator(quiet_bars).run_reduced()
        assert result == Analysis()
        assert not result.has_recommendation

    def test_default_policy_is_reduced(self, rally_bars: PriceBars) -> None:
        """run() without a policy runs the reduced set."""
        agg = SignalAggregator(rally_bars)
        assert agg.run() == agg.run_reduced()
        assert agg.run("reduced") == agg.run_reduced()

    def test_runs_are_idempotent(self, rally_bars: PriceBars) -> None:
        """Each run starts from an empty analysis."""
        agg = SignalAggregator(rally_bars)
        assert agg.run_all() == agg.run_all()

    def test_full_on_rally(self, rally_bars: PriceBars) -> None:
        """The full policy keeps the reduced findings, in rule order."""
        result = SignalAggregator(rally_bars).run_all()

        assert "Price moved above upper Bollinger Band" in result.notes
        rsi_index = next(i for i, n in enumerate(result.notes) if n.startswith("Bearish RSI"))
        assert rsi_index < result.notes.index("Price moved above upper Bollinger Band")
        assert result.rating < 0

    def test_full_needs_more_bars(self, short_bars: PriceBars) -> None:
        """30 bars are enough for the reduced policy only."""
        agg = SignalAggregator(short_bars)

        agg.run_reduced()
        with pytest.raises(InsufficientDataError, match="MACD"):
            agg.run_all()

    def test_initial_analysis(self, quiet_bars: PriceBars) -> None:
        """A run can continue from an existing analysis."""
        start = Analysis(rating=5.0, notes=("earlier",))
        assert SignalAggregator(quiet_bars).run(initial=start) == start

    def test_custom_thresholds(self, rally_bars: PriceBars) -> None:
        """Per-rule thresholds flow into the rules."""
        thresholds = SignalThresholds(bollinger=BollingerThresholds(width=10.0))
        result = SignalAggregator(rally_bars, thresholds).run_reduced()
        assert "Price moved above upper Bollinger Band" not in result.notes

    def test_bars_property(self, rally_bars: PriceBars) -> None:
        """The aggregator exposes the bars it was built with."""
        assert SignalAggregator(rally_bars).bars is rally_bars

    def test_rules_run_in_policy_order(self, quiet_bars: PriceBars) -> None:
        """Rules run in policy order with their own thresholds."""
        mocks = {name: _recording_rule(name) for name in ("rsi", "bollinger", "roc")}
        thresholds = SignalThresholds()

        with patch.dict(RULE_TABLE, mocks):
            result = SignalAggregator(quiet_bars, thresholds).run(
                SignalPolicy("reordered", ("roc", "rsi", "bollinger"))
            )

        assert result.notes == ("roc", "rsi", "bollinger")
        assert result.rating == 3.0
        mocks["rsi"].assert_called_once()
        assert mocks["rsi"].call_args.args[2] is thresholds.rsi
        assert mocks["bollinger"].call_args.args[0] is quiet_bars

    def test_reduced_invokes_only_its_rules(self, quiet_bars: PriceBars) -> None:
        """run_reduced never calls the eight rules outside its subset."""
        mocks = {name: _recording_rule(name) for name in FULL_POLICY.rules}

        with patch.dict(RULE_TABLE, mocks):
            result = SignalAggregator(quiet_bars).run_reduced()

        assert result.notes == ("rsi", "bollinger", "roc")
        for name, rule in mocks.items():
            if name in REDUCED_POLICY.rules:
                rule.assert_called_once()
            else:
                rule.assert_not_called()


class TestAnalyze:
    """Tests for the analyze convenience function."""

    def test_matches_aggregator(self, rally_bars: PriceBars) -> None:
        """Plain lists give the same result as prebuilt bars."""
        frame = rally_bars.to_frame()
        result = analyze(*(frame[column].tolist() for column in frame.columns))
        assert result == SignalAggregator(rally_bars).run_reduced()

    def test_policy_by_name(self, rally_bars: PriceBars) -> None:
        """The policy may be passed by name."""
        frame = rally_bars.to_frame()
        result = analyze(*(frame[column] for column in frame.columns), policy="full")
        assert result == SignalAggregator(rally_bars).run_all()

    def test_invalid_bars(self) -> None:
        """Should raise InvalidInputError for mismatched sequences."""
        with pytest.raises(InvalidInputError):
            analyze([1.0, 2.0], [1.0, 2.0], [1.0, 2.0], [1.0], [1.0, 2.0])
