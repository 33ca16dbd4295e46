"""
STARC bands (Stoller Average Range Channel).

The middle band is a simple moving average of the close; the upper and lower
bands add/subtract a multiple of a volatility indicator (ATR by default).
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from ..errors import ConfigurationError
from ..models.ohlcv import BarSource
from ..num.base import Num
from .atr import ATRIndicator
from .averages import SMAIndicator
from .base import (
    CachedIndicator, Indicator,
    composed_unstable_bars, require_positive, require_same_series,
)
from .helpers import ClosePriceIndicator


class StarcBandsMiddleIndicator(SMAIndicator):
    """SMA of the close price."""

    def __init__(self, series: BarSource, bar_count: int = 6):
        super().__init__(ClosePriceIndicator(series), bar_count)


class _StarcBandIndicator(CachedIndicator[Num]):
    """middle(i) + direction * multiplier * volatility(i)"""

    direction = 1

    def __init__(
        self,
        middle: Indicator[Num],
        bar_count: int = 15,
        multiplier=2,
        volatility: Optional[Indicator[Num]] = None,
    ):
        self.bar_count = require_positive("bar_count", bar_count)
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float, str, Decimal, Num)):
            raise ConfigurationError(f"multiplier must be numeric, got {multiplier!r}")
        volatility = volatility or ATRIndicator(middle.series, bar_count)
        super().__init__(require_same_series(self.__class__.__name__, middle, volatility))

        self.multiplier = self.num_of(multiplier)
        if self.multiplier.is_nan() or self.multiplier.is_negative():
            raise ConfigurationError(f"multiplier must be non-negative, got {multiplier!r}")
        self.middle = middle
        self.volatility = volatility

    def calculate(self, index: int) -> Num:
        offset = self.multiplier * self.volatility.value(index)
        if self.direction < 0:
            return self.middle.value(index) - offset
        return self.middle.value(index) + offset

    @property
    def unstable_bars(self) -> int:
        return max(
            composed_unstable_bars(0, self.middle, self.volatility),
            self.bar_count,
        )

    def _label_params(self) -> Dict[str, Any]:
        return {"bar_count": self.bar_count, "multiplier": self.multiplier}


class StarcBandsUpperIndicator(_StarcBandIndicator):
    """Middle band plus a multiple of the volatility."""

    direction = 1


class StarcBandsLowerIndicator(_StarcBandIndicator):
    """Middle band minus a multiple of the volatility."""

    direction = -1
