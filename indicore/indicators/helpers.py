"""
Building-block indicators: bar fields, constants, arithmetic transforms and
windowed extremes.
"""

from abc import abstractmethod
from typing import Any, Callable, Dict

from ..models.ohlcv import Bar, BarSource
from ..num.base import Num, NaN
from .base import CachedIndicator, Indicator, require_positive, require_same_series


class PriceIndicator(CachedIndicator[Num]):
    """Reads one field of each bar."""

    def __init__(self, series: BarSource, extractor: Callable[[Bar], Num]):
        super().__init__(series)
        self._extractor = extractor

    def calculate(self, index: int) -> Num:
        price = self._extractor(self._series.get_bar(index))
        return NaN if price is None else price

    @property
    def unstable_bars(self) -> int:
        return 0


class ClosePriceIndicator(PriceIndicator):
    def __init__(self, series: BarSource):
        super().__init__(series, lambda bar: bar.close)


class OpenPriceIndicator(PriceIndicator):
    def __init__(self, series: BarSource):
        super().__init__(series, lambda bar: bar.open)


class HighPriceIndicator(PriceIndicator):
    def __init__(self, series: BarSource):
        super().__init__(series, lambda bar: bar.high)


class LowPriceIndicator(PriceIndicator):
    def __init__(self, series: BarSource):
        super().__init__(series, lambda bar: bar.low)


class MedianPriceIndicator(PriceIndicator):
    """(high + low) / 2"""

    def __init__(self, series: BarSource):
        super().__init__(series, self._median)

    @staticmethod
    def _median(bar: Bar) -> Num:
        if bar.high is None or bar.low is None:
            return NaN
        return (bar.high + bar.low) / 2


class VolumeIndicator(CachedIndicator[Num]):
    """Sum of volume over the last bar_count bars (partial window at the start)."""

    def __init__(self, series: BarSource, bar_count: int = 1):
        super().__init__(series)
        self.bar_count = require_positive("bar_count", bar_count)

    def calculate(self, index: int) -> Num:
        start = max(self._series.begin_index, index - self.bar_count + 1)
        total = self.num_factory.zero()
        for i in range(start, index + 1):
            total = total + self._series.get_bar(i).volume
        return total

    @property
    def unstable_bars(self) -> int:
        return self.bar_count - 1

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count}


class ConstantIndicator(Indicator[Num]):
    """Same value at every index."""

    def __init__(self, series: BarSource, value):
        super().__init__(series)
        self._value = self.num_of(value)

    def value(self, index: int) -> Num:
        self._check_bounds(index, self._series.end_index)
        return self._value

    @property
    def unstable_bars(self) -> int:
        return 0

    def _label_params(self) -> Dict[str, Any]:
        return {"value": self._value}


class TransformIndicator(CachedIndicator[Num]):
    """Applies a unary function to another indicator's values."""

    def __init__(self, indicator: Indicator[Num], transform: Callable[[Num], Num], label: str = "transform"):
        super().__init__(indicator.series)
        self.indicator = indicator
        self._transform = transform
        self.label = label

    def calculate(self, index: int) -> Num:
        return self._transform(self.indicator.value(index))

    @property
    def unstable_bars(self) -> int:
        return self.indicator.unstable_bars

    def _label_params(self) -> Dict[str, Any]:
        return {"op": self.label, "of": self.indicator}

    @classmethod
    def multiply(cls, indicator: Indicator[Num], coefficient) -> 'TransformIndicator':
        factor = indicator.num_of(coefficient)
        return cls(indicator, lambda v: v * factor, f"multiply {factor}")

    @classmethod
    def divide(cls, indicator: Indicator[Num], coefficient) -> 'TransformIndicator':
        divisor = indicator.num_of(coefficient)
        return cls(indicator, lambda v: v / divisor, f"divide {divisor}")

    @classmethod
    def plus(cls, indicator: Indicator[Num], coefficient) -> 'TransformIndicator':
        addend = indicator.num_of(coefficient)
        return cls(indicator, lambda v: v + addend, f"plus {addend}")

    @classmethod
    def minus(cls, indicator: Indicator[Num], coefficient) -> 'TransformIndicator':
        subtrahend = indicator.num_of(coefficient)
        return cls(indicator, lambda v: v - subtrahend, f"minus {subtrahend}")

    @classmethod
    def abs(cls, indicator: Indicator[Num]) -> 'TransformIndicator':
        return cls(indicator, lambda v: v.abs(), "abs")

    @classmethod
    def sqrt(cls, indicator: Indicator[Num]) -> 'TransformIndicator':
        return cls(indicator, lambda v: v.sqrt(), "sqrt")

    @classmethod
    def log(cls, indicator: Indicator[Num]) -> 'TransformIndicator':
        return cls(indicator, lambda v: v.log(), "log")


class CombineIndicator(CachedIndicator[Num]):
    """Combines two indicators over the same series with a binary function."""

    def __init__(
        self,
        left: Indicator[Num],
        right: Indicator[Num],
        combine: Callable[[Num, Num], Num],
        label: str = "combine",
    ):
        super().__init__(require_same_series("CombineIndicator", left, right))
        self.left = left
        self.right = right
        self._combine = combine
        self.label = label

    def calculate(self, index: int) -> Num:
        return self._combine(self.left.value(index), self.right.value(index))

    @property
    def unstable_bars(self) -> int:
        return max(self.left.unstable_bars, self.right.unstable_bars)

    def _label_params(self) -> Dict[str, Any]:
        return {"op": self.label, "left": self.left, "right": self.right}

    @classmethod
    def plus(cls, left: Indicator[Num], right: Indicator[Num]) -> 'CombineIndicator':
        return cls(left, right, lambda a, b: a + b, "plus")

    @classmethod
    def minus(cls, left: Indicator[Num], right: Indicator[Num]) -> 'CombineIndicator':
        return cls(left, right, lambda a, b: a - b, "minus")

    @classmethod
    def multiply(cls, left: Indicator[Num], right: Indicator[Num]) -> 'CombineIndicator':
        return cls(left, right, lambda a, b: a * b, "multiply")

    @classmethod
    def divide(cls, left: Indicator[Num], right: Indicator[Num]) -> 'CombineIndicator':
        return cls(left, right, lambda a, b: a / b, "divide")

    @classmethod
    def min(cls, left: Indicator[Num], right: Indicator[Num]) -> 'CombineIndicator':
        return cls(left, right, lambda a, b: a.min(b), "min")

    @classmethod
    def max(cls, left: Indicator[Num], right: Indicator[Num]) -> 'CombineIndicator':
        return cls(left, right, lambda a, b: a.max(b), "max")


class PreviousValueIndicator(CachedIndicator[Num]):
    """Value of another indicator n bars earlier; NaN before the series start."""

    def __init__(self, indicator: Indicator[Num], n: int = 1):
        super().__init__(indicator.series)
        self.indicator = indicator
        self.n = require_positive("n", n)

    def calculate(self, index: int) -> Num:
        previous = index - self.n
        if previous < max(self._series.begin_index, 0):
            return NaN
        return self.indicator.value(previous)

    @property
    def unstable_bars(self) -> int:
        return self.indicator.unstable_bars + self.n

    def _label_params(self) -> Dict[str, Any]:
        return {"n": self.n, "of": self.indicator}


class DifferenceIndicator(CachedIndicator[Num]):
    """value(i) - value(i - 1); NaN at the first available index."""

    def __init__(self, indicator: Indicator[Num]):
        super().__init__(indicator.series)
        self.indicator = indicator

    def calculate(self, index: int) -> Num:
        if index <= max(self._series.begin_index, 0):
            return NaN
        return self.indicator.value(index) - self.indicator.value(index - 1)

    @property
    def unstable_bars(self) -> int:
        return self.indicator.unstable_bars + 1

    def _label_params(self) -> Dict[str, Any]:
        return {"of": self.indicator}


class ClosePriceDifferenceIndicator(DifferenceIndicator):
    """close(i) - close(i - 1)"""

    def __init__(self, series: BarSource):
        super().__init__(ClosePriceIndicator(series))

    def _label_params(self) -> Dict[str, Any]:
        return {}


class _WindowExtremeIndicator(CachedIndicator[Num]):
    def __init__(self, indicator: Indicator[Num], bar_count: int):
        super().__init__(indicator.series)
        self.indicator = indicator
        self.bar_count = require_positive("bar_count", bar_count)

    @abstractmethod
    def _pick(self, current: Num, candidate: Num) -> Num:
        """Keep the extreme of the two values."""
        pass

    def calculate(self, index: int) -> Num:
        start = max(self._series.begin_index, index - self.bar_count + 1)
        result = self.indicator.value(index)
        for i in range(start, index):
            result = self._pick(result, self.indicator.value(i))
        return result

    @property
    def unstable_bars(self) -> int:
        return self.indicator.unstable_bars + self.bar_count

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count, "of": self.indicator}


class HighestValueIndicator(_WindowExtremeIndicator):
    """Highest value over the last bar_count bars (partial window at the start)."""

    def _pick(self, current: Num, candidate: Num) -> Num:
        return current.max(candidate)


class LowestValueIndicator(_WindowExtremeIndicator):
    """Lowest value over the last bar_count bars (partial window at the start)."""

    def _pick(self, current: Num, candidate: Num) -> Num:
        return current.min(candidate)
