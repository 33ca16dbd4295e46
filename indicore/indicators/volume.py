"""
Time Segmented Volume (TSV) indicator.
"""

from typing import Any, Dict, Optional

from ..models.ohlcv import BarSource
from ..num.base import Num
from .base import CachedIndicator, Indicator, composed_unstable_bars, require_positive, require_same_series
from .helpers import ClosePriceDifferenceIndicator


class TimeSegmentedVolumeIndicator(CachedIndicator[Num]):
    """
    Sum over the last bar_count bars of price difference times volume.

    The window is re-summed at every index instead of keeping a running total,
    so the result does not depend on evaluation order and decimal rounding is
    identical whichever index is requested first. While the window fills, the
    available bars are summed.
    """

    def __init__(self, series: BarSource, bar_count: int = 18, difference: Optional[Indicator[Num]] = None):
        """
        Initialize TSV.

        Args:
            series: Bar series providing volumes
            bar_count: Window length
            difference: Per-bar price delta (default: close price difference)
        """
        super().__init__(series)
        self.bar_count = require_positive("bar_count", bar_count)
        self.difference = difference or ClosePriceDifferenceIndicator(series)
        require_same_series("TimeSegmentedVolumeIndicator", self, self.difference)

    def calculate(self, index: int) -> Num:
        tsv = self.num_factory.zero()
        start = max(self._series.begin_index, index - self.bar_count + 1)
        for i in range(start, index + 1):
            delta = self.difference.value(i)
            volume = self._series.get_bar(i).volume
            tsv = tsv + delta * volume
        return tsv

    @property
    def unstable_bars(self) -> int:
        return composed_unstable_bars(self.bar_count, self.difference)

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count}
