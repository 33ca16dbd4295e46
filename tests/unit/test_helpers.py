"""
Unit tests for building-block indicators.
"""

import pytest

from indicore.errors import ConfigurationError
from indicore.indicators.helpers import (
    ClosePriceDifferenceIndicator, ClosePriceIndicator, CombineIndicator, ConstantIndicator,
    HighPriceIndicator, HighestValueIndicator, LowPriceIndicator, LowestValueIndicator,
    MedianPriceIndicator, OpenPriceIndicator, PreviousValueIndicator, TransformIndicator,
    VolumeIndicator, _WindowExtremeIndicator,
)
from indicore.num.base import NaN


class TestPriceIndicators:
    """Bar field readers."""

    def test_fields(self, make_series, num_factory):
        series = make_series([11, 12], opens=[10, 13], highs=[12, 14], lows=[9, 11], num_factory=num_factory)

        assert OpenPriceIndicator(series).value(0) == 10
        assert HighPriceIndicator(series).value(1) == 14
        assert LowPriceIndicator(series).value(1) == 11
        assert ClosePriceIndicator(series).value(0) == 11
        assert MedianPriceIndicator(series).value(0) == num_factory.num_of("10.5")

    def test_values_use_series_backing(self, make_series, num_factory):
        series = make_series([10], num_factory=num_factory)
        assert ClosePriceIndicator(series).value(0).name == num_factory.name


class TestVolumeIndicator:
    """Windowed volume sums."""

    def test_partial_and_full_window(self, make_series):
        series = make_series([1, 1, 1, 1], volumes=[10, 20, 30, 40])
        volume = VolumeIndicator(series, 3)

        assert [volume.value(i) for i in range(4)] == [10, 30, 60, 90]
        assert volume.unstable_bars == 2

    def test_default_is_bar_volume(self, make_series):
        series = make_series([1, 1], volumes=[10, 20])
        assert VolumeIndicator(series).value(1) == 20


class TestConstantIndicator:
    """Constant values."""

    def test_constant(self, make_series):
        series = make_series([1, 2, 3])
        constant = ConstantIndicator(series, "2.5")

        assert constant.values() == [constant.num_of("2.5")] * 3
        assert constant.unstable_bars == 0
        assert str(constant) == "ConstantIndicator value: 2.5"


class TestTransformAndCombine:
    """Arithmetic over indicators."""

    def test_transforms(self, make_series):
        series = make_series([4, 9])
        close = ClosePriceIndicator(series)

        assert TransformIndicator.multiply(close, 2).value(1) == 18
        assert TransformIndicator.divide(close, 2).value(0) == 2
        assert TransformIndicator.plus(close, 1).value(0) == 5
        assert TransformIndicator.minus(close, 10).value(0) == -6
        assert TransformIndicator.abs(TransformIndicator.minus(close, 10)).value(0) == 6
        assert TransformIndicator.sqrt(close).value(1) == 3
        assert TransformIndicator.log(TransformIndicator.divide(close, 4)).value(0).is_zero()

    def test_combine(self, make_series):
        series = make_series([10, 20], opens=[12, 15])
        close = ClosePriceIndicator(series)
        open_ = OpenPriceIndicator(series)

        assert CombineIndicator.plus(close, open_).value(0) == 22
        assert CombineIndicator.minus(close, open_).value(1) == 5
        assert CombineIndicator.multiply(close, open_).value(0) == 120
        assert CombineIndicator.divide(close, open_).value(1) == close.num_of(20) / 15
        assert CombineIndicator.min(close, open_).value(0) == 10
        assert CombineIndicator.max(close, open_).value(0) == 12

    def test_combine_requires_same_series(self, make_series):
        first = ClosePriceIndicator(make_series([1]))
        second = ClosePriceIndicator(make_series([1]))

        with pytest.raises(ConfigurationError):
            CombineIndicator.plus(first, second)

    def test_nan_propagates(self, make_series):
        series = make_series([10, 12])
        difference = ClosePriceDifferenceIndicator(series)

        assert difference.value(0) is NaN
        assert TransformIndicator.multiply(difference, 3).value(0).is_nan()
        assert CombineIndicator.max(difference, ClosePriceIndicator(series)).value(0).is_nan()
        assert TransformIndicator.multiply(difference, 3).value(1) == 6


class TestPreviousAndDifference:
    """Lagged values."""

    def test_previous_value(self, make_series):
        series = make_series([10, 11, 12, 13])
        previous = PreviousValueIndicator(ClosePriceIndicator(series), 2)

        assert previous.value(0).is_nan()
        assert previous.value(1).is_nan()
        assert previous.value(3) == 11
        assert previous.unstable_bars == 2

    def test_difference(self, make_series):
        series = make_series([10, 11, 9])
        difference = ClosePriceDifferenceIndicator(series)

        assert difference.value(0).is_nan()
        assert difference.value(1) == 1
        assert difference.value(2) == -2
        assert difference.unstable_bars == 1

    def test_difference_after_eviction(self, make_series):
        series = make_series([10, 11, 9, 15], max_bar_count=2)
        difference = ClosePriceDifferenceIndicator(series)

        assert difference.value(2).is_nan()
        assert difference.value(3) == 6


class TestWindowExtremes:
    """Highest and lowest values."""

    def test_highest_lowest(self, make_series):
        series = make_series([3, 7, 5, 1, 4])
        close = ClosePriceIndicator(series)
        highest = HighestValueIndicator(close, 3)
        lowest = LowestValueIndicator(close, 3)

        assert [highest.value(i) for i in range(5)] == [3, 7, 7, 7, 5]
        assert [lowest.value(i) for i in range(5)] == [3, 3, 3, 1, 1]
        assert highest.unstable_bars == 3

    def test_window_extreme_requires_pick(self, make_series):
        series = make_series([3, 7])
        with pytest.raises(TypeError):
            _WindowExtremeIndicator(ClosePriceIndicator(series), 2)

    def test_nan_in_window(self, make_series):
        series = make_series([3, 7, 5])
        highest = HighestValueIndicator(ClosePriceDifferenceIndicator(series), 2)

        assert highest.value(1).is_nan()
        assert highest.value(2) == 4
