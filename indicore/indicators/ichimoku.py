"""
Ichimoku cloud lines.

Each line is the midpoint of the highest high and lowest low over its window.
A line needs a full window: with fewer bars available it is NaN.
"""

from typing import Any, Dict

from ..models.ohlcv import BarSource
from ..num.base import Num, NaN
from .base import CachedIndicator, composed_unstable_bars, require_positive
from .helpers import HighPriceIndicator, LowPriceIndicator, HighestValueIndicator, LowestValueIndicator


class IchimokuLineIndicator(CachedIndicator[Num]):
    """(highest high + lowest low) / 2 over bar_count bars."""

    def __init__(self, series: BarSource, bar_count: int):
        super().__init__(series)
        self.bar_count = require_positive("bar_count", bar_count)
        self.highest_high = HighestValueIndicator(HighPriceIndicator(series), bar_count)
        self.lowest_low = LowestValueIndicator(LowPriceIndicator(series), bar_count)

    def calculate(self, index: int) -> Num:
        if index - max(self._series.begin_index, 0) + 1 < self.bar_count:
            return NaN
        return (self.highest_high.value(index) + self.lowest_low.value(index)) / 2

    @property
    def unstable_bars(self) -> int:
        return self.bar_count

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count}


class IchimokuTenkanSenIndicator(IchimokuLineIndicator):
    """Conversion line (usually 9 bars)."""

    def __init__(self, series: BarSource, bar_count: int = 9):
        super().__init__(series, bar_count)


class IchimokuKijunSenIndicator(IchimokuLineIndicator):
    """Base line (usually 26 bars)."""

    def __init__(self, series: BarSource, bar_count: int = 26):
        super().__init__(series, bar_count)


class IchimokuSenkouSpanAIndicator(CachedIndicator[Num]):
    """
    Leading span A: (conversion line + base line) / 2, displaced forward.

    The value at index is computed from the lines at index - offset.
    """

    def __init__(
        self,
        series: BarSource,
        conversion_bar_count: int = 9,
        base_bar_count: int = 26,
        offset: int = 26,
    ):
        super().__init__(series)
        self.offset = require_positive("offset", offset)
        self.conversion_line = IchimokuTenkanSenIndicator(series, conversion_bar_count)
        self.base_line = IchimokuKijunSenIndicator(series, base_bar_count)

    def calculate(self, index: int) -> Num:
        source = index - self.offset
        if source < max(self._series.begin_index, 0):
            return NaN
        return (self.conversion_line.value(source) + self.base_line.value(source)) / 2

    @property
    def unstable_bars(self) -> int:
        return composed_unstable_bars(self.offset, self.conversion_line, self.base_line)

    def _label_params(self) -> Dict[str, Any]:
        return {
            "conversion": self.conversion_line.bar_count,
            "base": self.base_line.bar_count,
            "offset": self.offset,
        }


class IchimokuSenkouSpanBIndicator(CachedIndicator[Num]):
    """Leading span B: the 52-bar line, displaced forward by offset."""

    def __init__(self, series: BarSource, bar_count: int = 52, offset: int = 26):
        super().__init__(series)
        self.offset = require_positive("offset", offset)
        self.line = IchimokuLineIndicator(series, bar_count)

    def calculate(self, index: int) -> Num:
        source = index - self.offset
        if source < max(self._series.begin_index, 0):
            return NaN
        return self.line.value(source)

    @property
    def unstable_bars(self) -> int:
        return composed_unstable_bars(self.offset, self.line)

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.line.bar_count, "offset": self.offset}
