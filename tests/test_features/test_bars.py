"""Tests for PriceBars construction and validation."""

import pandas as pd
import pytest

from src.modules.features.bars import OHLCV_COLUMNS, PriceBars
from src.modules.features.errors import InvalidInputError, RatingError


class TestPriceBars:
    """Tests for building PriceBars from sequences."""

    def test_from_lists(self) -> None:
        """Plain lists become float Series on a positional index."""
        bars = PriceBars([1, 2], [3, 4], [0, 1], [2, 3], [100, 200])
        assert len(bars) == 2
        assert bars.close.dtype == float
        assert bars.close.tolist() == [2.0, 3.0]
        assert isinstance(bars.index, pd.RangeIndex)

    def test_from_ranges(self) -> None:
        """Any sequence type is accepted, not only lists and tuples."""
        bars = PriceBars(range(50), range(1, 51), range(50), range(50), range(50))
        assert len(bars) == 50
        assert bars.high.dtype == float
        assert bars.high.iloc[-1] == 50.0
        assert isinstance(bars.index, pd.RangeIndex)

    def test_series_index_is_kept(self, sample_ohlcv: pd.DataFrame) -> None:
        """A date index on Series input carries through to every field."""
        bars = PriceBars(*(sample_ohlcv[c] for c in OHLCV_COLUMNS))
        assert bars.index.equals(sample_ohlcv.index)
        assert bars.volume.index.equals(sample_ohlcv.index)

    def test_mixed_series_and_lists(self, sample_ohlcv: pd.DataFrame) -> None:
        """Lists adopt the index of the Series inputs."""
        volume = [1.0] * len(sample_ohlcv)
        bars = PriceBars(
            sample_ohlcv["open"],
            sample_ohlcv["high"],
            sample_ohlcv["low"],
            sample_ohlcv["close"],
            volume,
        )
        assert bars.volume.index.equals(sample_ohlcv.index)

    def test_input_is_copied(self) -> None:
        """Mutating the caller's data does not change the bars."""
        close = pd.Series([1.0, 2.0, 3.0])
        bars = PriceBars(close, close, close, close, close)
        close.iloc[0] = 99.0
        assert bars.close.iloc[0] == 1.0

    def test_unequal_lengths(self) -> None:
        """Should raise InvalidInputError for mismatched lengths."""
        with pytest.raises(InvalidInputError, match="equal lengths"):
            PriceBars([1.0, 2.0], [1.0, 2.0], [1.0], [1.0, 2.0], [1.0, 2.0])

    @pytest.mark.parametrize("bad", [None, "12345", {"a": 1.0}, 5.0])
    def test_non_sequence_input(self, bad: object) -> None:
        """Should raise InvalidInputError for anything that is not a sequence."""
        with pytest.raises(InvalidInputError, match="must be a sequence"):
            PriceBars([1.0], [1.0], [1.0], bad, [1.0])

    def test_non_numeric_values(self) -> None:
        """Should raise InvalidInputError for non-numeric values."""
        with pytest.raises(InvalidInputError, match="only numbers"):
            PriceBars([1.0], [1.0], [1.0], ["abc"], [1.0])

    def test_misaligned_index(self) -> None:
        """Series with different indexes cannot be combined."""
        first = pd.Series([1.0, 2.0], index=[0, 1])
        shifted = pd.Series([1.0, 2.0], index=[1, 2])
        with pytest.raises(InvalidInputError, match="not aligned"):
            PriceBars(first, first, first, shifted, first)

    def test_errors_are_value_errors(self) -> None:
        """Rating errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            PriceBars([1.0], [1.0], [1.0], None, [1.0])
        assert issubclass(InvalidInputError, RatingError)

    def test_empty_bars_are_valid(self) -> None:
        """Empty input builds; indicators reject it later."""
        bars = PriceBars([], [], [], [], [])
        assert len(bars) == 0


class TestPriceBarsFrame:
    """Tests for DataFrame conversion."""

    def test_from_frame(self, sample_ohlcv: pd.DataFrame) -> None:
        """A frame with OHLCV columns converts column by column."""
        bars = PriceBars.from_frame(sample_ohlcv)
        assert len(bars) == 60
        assert bars.high.iloc[-1] == sample_ohlcv["high"].iloc[-1]

    def test_from_frame_sorts_oldest_first(self, sample_ohlcv: pd.DataFrame) -> None:
        """Reverse-ordered frames are sorted by index."""
        bars = PriceBars.from_frame(sample_ohlcv.iloc[::-1])
        assert bars.index.is_monotonic_increasing
        assert bars.close.iloc[0] == sample_ohlcv["close"].iloc[0]

    def test_from_frame_missing_columns(self, sample_ohlcv: pd.DataFrame) -> None:
        """Should raise InvalidInputError naming the missing columns."""
        with pytest.raises(InvalidInputError, match="volume"):
            PriceBars.from_frame(sample_ohlcv.drop(columns=["volume"]))

    def test_to_frame_round_trip(self, sample_ohlcv: pd.DataFrame) -> None:
        """to_frame returns the same OHLCV columns and values."""
        frame = PriceBars.from_frame(sample_ohlcv).to_frame()
        assert list(frame.columns) == list(OHLCV_COLUMNS)
        pd.testing.assert_frame_equal(frame, sample_ohlcv, check_freq=False)
