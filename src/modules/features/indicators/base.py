"""Input handling shared by all indicator functions."""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from src.modules.features.errors import InsufficientDataError, InvalidArgumentError


def as_series(values: Sequence[float] | np.ndarray | pd.Series) -> pd.Series:
    """Return values as a float Series."""
    if isinstance(values, pd.Series):
        return values.astype(float)
    return pd.Series(values, dtype=float)


def check_period(period: int, name: str = "Period") -> None:
    """Raise InvalidArgumentError if period < 1."""
    if period < 1:
        raise InvalidArgumentError(f"{name} must be >= 1, got {period}")


def require_length(series: pd.Series, minimum: int, indicator: str) -> None:
    """Raise InsufficientDataError if series has fewer than minimum values."""
    if len(series) < minimum:
        raise InsufficientDataError(indicator, minimum, len(series))


def require_aligned(*series: pd.Series) -> None:
    """Raise InvalidArgumentError if the series differ in length."""
    lengths = [len(s) for s in series]
    if len(set(lengths)) > 1:
        raise InvalidArgumentError(f"All price series must have the same length, got {lengths}")


def safe_divide(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Element-wise division that yields NaN (never inf) where denominator is 0."""
    return (numerator / denominator).where(denominator != 0, np.nan)
