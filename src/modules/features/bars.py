"""Price bar series: five aligned OHLCV sequences, oldest first."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from src.modules.features.errors import InvalidInputError

# Column order used everywhere OHLCV data is exchanged as a DataFrame
OHLCV_COLUMNS = ("open", "high", "low", "close", "volume")


def _to_series(name: str, values: object, index: pd.Index | None) -> pd.Series:
    """Copy one input sequence into a float Series.

    Raises:
        InvalidInputError: If values is not a sequence or not numeric.
    """
    if values is None or isinstance(values, (str, bytes, Mapping)):
        raise InvalidInputError(f"{name} must be a sequence, got {type(values).__name__}")
    if not isinstance(values, (pd.Series, np.ndarray, Sequence)):
        raise InvalidInputError(f"{name} must be a sequence, got {type(values).__name__}")

    try:
        if isinstance(values, pd.Series):
            series = values.astype(float).copy()
        else:
            series = pd.Series(values, dtype=float, index=index)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must contain only numbers: {e}") from e

    series.name = name
    return series


@dataclass(frozen=True, eq=False)
class PriceBars:
    """Open/high/low/close/volume series for one security.

    All five series have the same length and index, ordered oldest to
    newest. Inputs are copied on construction, so indicators can never
    mutate the caller's data.

    Attributes:
        open: Opening prices.
        high: High prices.
        low: Low prices.
        close: Closing prices.
        volume: Traded volume.
    """

    open: pd.Series
    high: pd.Series
    low: pd.Series
    close: pd.Series
    volume: pd.Series
    index: pd.Index = field(init=False, repr=False)

    def __post_init__(self) -> None:
        raw = {name: getattr(self, name) for name in OHLCV_COLUMNS}

        lengths = {}
        for name, values in raw.items():
            if values is None or isinstance(values, (str, bytes, Mapping)) or not hasattr(
                values, "__len__"
            ):
                raise InvalidInputError(
                    f"{name} must be a sequence, got {type(values).__name__}"
                )
            lengths[name] = len(values)

        if len(set(lengths.values())) != 1:
            raise InvalidInputError(f"OHLCV series must have equal lengths, got {lengths}")

        # Series inputs keep their index; plain sequences get a positional one
        index = next(
            (v.index for v in raw.values() if isinstance(v, pd.Series)),
            pd.RangeIndex(lengths["close"]),
        )
        for name, values in raw.items():
            series = _to_series(name, values, index)
            if not series.index.equals(index):
                raise InvalidInputError(f"{name} index is not aligned with the other series")
            object.__setattr__(self, name, series)
        object.__setattr__(self, "index", index)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> PriceBars:
        """Build price bars from a DataFrame with OHLCV columns.

        Args:
            df: DataFrame with columns open, high, low, close, volume.
                The index (typically dates) is preserved.

        Returns:
            PriceBars built from the frame, sorted oldest first.

        Raises:
            InvalidInputError: If required columns are missing.
        """
        missing = set(OHLCV_COLUMNS) - set(df.columns)
        if missing:
            raise InvalidInputError(f"Missing required columns: {sorted(missing)}")

        df = df.sort_index()
        return cls(*(df[column] for column in OHLCV_COLUMNS))

    def __len__(self) -> int:
        return len(self.close)

    def to_frame(self) -> pd.DataFrame:
        """Return the bars as a DataFrame with OHLCV columns."""
        return pd.DataFrame({name: getattr(self, name) for name in OHLCV_COLUMNS})
