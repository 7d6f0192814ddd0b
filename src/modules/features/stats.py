"""Statistical primitives: slope, Pearson's r, standard deviation, divergence.

Pure functions over numeric sequences. Used by the signal rules to read
the direction of short trailing windows of price and indicator values.
"""

import math
from collections.abc import Sequence

import numpy as np
import pandas as pd

from src.modules.features.errors import InvalidArgumentError

Values = Sequence[float] | np.ndarray | pd.Series


def _as_array(values: Values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def slope(values: Values) -> float:
    """Slope of the line from the first to the last value.

    The two points are (0, first) and (len, last). This is a crude
    steepness filter, not a least-squares fit.

    Args:
        values: Non-empty numeric sequence.

    Returns:
        (first - last) / (0 - len).

    Raises:
        InvalidArgumentError: If values is empty.
    """
    arr = _as_array(values)
    if arr.size == 0:
        raise InvalidArgumentError("Cannot compute slope of an empty sequence")

    return float((arr[0] - arr[-1]) / (0 - arr.size))


def pearson(values: Values) -> float:
    """Pearson correlation of values (Y) against time 1..N (X).

    Args:
        values: Numeric sequence, oldest first.

    Returns:
        r in [-1, 1]. NaN when values is constant or has fewer than two
        elements (the denominator is zero).
    """
    y = _as_array(values)
    n = y.size
    if n < 2:
        return math.nan

    x = np.arange(1, n + 1, dtype=float)
    numerator = n * np.dot(x, y) - x.sum() * y.sum()
    spread_y = n * np.dot(y, y) - y.sum() ** 2
    spread_x = n * np.dot(x, x) - x.sum() ** 2
    # Constant input: spread_y is zero, or a tiny negative from rounding
    if spread_y <= 0:
        return math.nan

    return float(numerator / math.sqrt(spread_x * spread_y))


def standard_deviation(values: Values) -> float:
    """Population standard deviation (divides by N, not N - 1).

    Raises:
        InvalidArgumentError: If values is empty.
    """
    arr = _as_array(values)
    if arr.size == 0:
        raise InvalidArgumentError("Cannot compute deviation of an empty sequence")

    return float(np.sqrt(np.mean((arr - arr.mean()) ** 2)))


def is_divergence(up: Values, down: Values, r: float = 0.5) -> bool:
    """Check whether ``up`` trends upward while ``down`` trends downward.

    Args:
        up: Sequence expected to trend up.
        down: Sequence expected to trend down.
        r: Minimum correlation strength of both trends, in [0, 1].

    Returns:
        True if pearson(up) > r and pearson(down) < -r. Undefined (NaN)
        correlations never count as a trend.

    Raises:
        InvalidArgumentError: If r is outside [0, 1].
    """
    if r < 0 or r > 1:
        raise InvalidArgumentError(
            f"Divergence strength must be in range 0-1, got {r}"
        )

    return pearson(up) > r and pearson(down) < -r
