"""Errors raised by the indicator library and the signal aggregator.

All errors subclass ValueError so callers that already guard indicator
calls with ``except ValueError`` keep working.
"""


class RatingError(ValueError):
    """Base class for all rating engine errors."""


class InvalidInputError(RatingError):
    """Raised when price bars are built from non-sequence or mismatched input."""


class InsufficientDataError(RatingError):
    """Raised when a series is shorter than an indicator's lookback."""

    def __init__(self, indicator: str, required: int, actual: int) -> None:
        """Initialize InsufficientDataError.

        Args:
            indicator: Name of the indicator that was called.
            required: Minimum number of values the indicator needs.
            actual: Number of values it was given.
        """
        self.indicator = indicator
        self.required = required
        self.actual = actual
        super().__init__(
            f"{indicator} needs at least {required} values, got {actual}"
        )


class InvalidArgumentError(RatingError):
    """Raised for out-of-range parameters (periods, divergence strength, names)."""
