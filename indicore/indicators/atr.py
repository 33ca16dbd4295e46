"""
Average True Range (ATR) indicator.
"""

from typing import Any, Dict

from ..models.ohlcv import BarSource
from ..num.base import Num, NaN
from .averages import MMAIndicator
from .base import CachedIndicator, Indicator, composed_unstable_bars, require_positive


class TRIndicator(CachedIndicator[Num]):
    """
    True range.

    max(high - low, |high - previous close|, |low - previous close|); the first
    available bar has no previous close and uses high - low.
    """

    def calculate(self, index: int) -> Num:
        bar = self._series.get_bar(index)
        if bar.high is None or bar.low is None:
            return NaN
        tr = bar.high - bar.low
        if index <= max(self._series.begin_index, 0):
            return tr

        prev_close = self._series.get_bar(index - 1).close
        if prev_close is None:
            return NaN
        tr2 = (bar.high - prev_close).abs()
        tr3 = (bar.low - prev_close).abs()
        return tr.max(tr2).max(tr3)

    @property
    def unstable_bars(self) -> int:
        return 1


class ATRIndicator(Indicator[Num]):
    """
    Average true range: Wilder (modified) moving average of the true range.

    Delegates to its own MMA, which carries the cache.
    """

    def __init__(self, series: BarSource, bar_count: int = 14):
        super().__init__(series)
        self.bar_count = require_positive("bar_count", bar_count)
        self.true_range = TRIndicator(series)
        self.average = MMAIndicator(self.true_range, bar_count)

    def value(self, index: int) -> Num:
        return self.average.value(index)

    @property
    def unstable_bars(self) -> int:
        return composed_unstable_bars(0, self.average)

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count}
