"""Series model: immutability and fail-loud invariants."""

import math

import pytest

from src.capacity_index.series import ObservationPoint, Series


@pytest.mark.fail_loud
class TestSeriesInvariants:
    """Construction must reject unsorted, duplicated or missing values"""

    def test_unsorted_years_raise(self):
        """Years out of order should raise, not be silently sorted"""
        with pytest.raises(ValueError, match="strictly increasing"):
            Series.from_pairs([(2001, 1.0), (2000, 2.0)])

    def test_duplicate_years_raise(self):
        """A repeated year should raise"""
        with pytest.raises(ValueError, match="strictly increasing"):
            Series.from_pairs([(2000, 1.0), (2000, 2.0)])

    def test_nan_value_raises(self):
        """NaN values should be rejected at construction"""
        with pytest.raises(ValueError, match="finite"):
            Series.from_pairs([(2000, math.nan)])

    def test_infinite_value_raises(self):
        """Infinite values should be rejected at construction"""
        with pytest.raises(ValueError, match="finite"):
            Series.from_pairs([(2000, math.inf)])


class TestSeriesAccessors:
    def test_years_and_values(self):
        """Accessors should expose years and float values in order"""
        s = Series.from_pairs([(2000, 50), (2001, 60)])

        assert s.years() == [2000, 2001]
        assert s.values() == [50.0, 60.0]
        assert s[0] == ObservationPoint(2000, 50.0)
        assert len(s) == 2

    def test_value_at(self):
        """value_at should return None for a year not in the series"""
        s = Series.from_pairs([(2000, 50), (2001, 60)])

        assert s.value_at(2001) == 60.0
        assert s.value_at(1999) is None

    def test_empty_is_falsy(self):
        """Empty series should be falsy with zero length"""
        assert not Series.empty()
        assert len(Series.empty()) == 0

    def test_points_are_frozen(self):
        """Observation points must be immutable"""
        p = ObservationPoint(2000, 1.0)
        with pytest.raises(AttributeError):
            p.value = 2.0

    def test_list_input_stored_as_tuple(self):
        """A list of points should be stored as a tuple"""
        s = Series([ObservationPoint(2000, 1.0)])
        assert isinstance(s.points, tuple)

    def test_to_frame(self):
        """to_frame should give a year/value DataFrame"""
        df = Series.from_pairs([(2000, 50), (2001, 60)]).to_frame()

        assert list(df.columns) == ["year", "value"]
        assert df["year"].tolist() == [2000, 2001]
        assert df["value"].tolist() == [50.0, 60.0]
