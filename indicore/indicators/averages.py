"""
Moving averages.
"""

from typing import Any, Dict

from ..num.base import Num
from .base import (
    CachedIndicator, Indicator, RecursiveCachedIndicator,
    composed_unstable_bars, require_positive,
)


class SMAIndicator(CachedIndicator[Num]):
    """Simple moving average; averages the available bars while the window fills."""

    def __init__(self, indicator: Indicator[Num], bar_count: int):
        super().__init__(indicator.series)
        self.indicator = indicator
        self.bar_count = require_positive("bar_count", bar_count)

    def calculate(self, index: int) -> Num:
        start = max(self._series.begin_index, index - self.bar_count + 1)
        total = self.num_factory.zero()
        for i in range(start, index + 1):
            total = total + self.indicator.value(i)
        return total / (index - start + 1)

    @property
    def unstable_bars(self) -> int:
        return composed_unstable_bars(self.bar_count, self.indicator)

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count}


class AbstractEMAIndicator(RecursiveCachedIndicator[Num]):
    """
    Exponentially smoothed average: prev + (current - prev) * multiplier.

    Seeded with the source value at the first index. A NaN previous value
    (source still warming up) re-seeds from the current source value.
    """

    def __init__(self, indicator: Indicator[Num], bar_count: int, multiplier: Num):
        super().__init__(indicator.series)
        self.indicator = indicator
        self.bar_count = require_positive("bar_count", bar_count)
        self.multiplier = multiplier

    def calculate(self, index: int) -> Num:
        current = self.indicator.value(index)
        if index <= max(self._series.begin_index, 0):
            return current
        previous = self.value(index - 1)
        if previous.is_nan():
            return current
        return (current - previous) * self.multiplier + previous

    @property
    def unstable_bars(self) -> int:
        return composed_unstable_bars(self.bar_count, self.indicator)

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count}


class EMAIndicator(AbstractEMAIndicator):
    """Exponential moving average, multiplier 2 / (bar_count + 1)."""

    def __init__(self, indicator: Indicator[Num], bar_count: int):
        require_positive("bar_count", bar_count)
        super().__init__(indicator, bar_count, indicator.num_of(2) / (bar_count + 1))


class MMAIndicator(AbstractEMAIndicator):
    """Modified (Wilder) moving average, multiplier 1 / bar_count."""

    def __init__(self, indicator: Indicator[Num], bar_count: int):
        require_positive("bar_count", bar_count)
        super().__init__(indicator, bar_count, indicator.num_factory.one() / bar_count)
