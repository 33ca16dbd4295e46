"""
Base indicator classes.

An indicator maps a bar index to a value and may read other indicators it
holds references to. CachedIndicator adds compute-once memoization for closed
bars; the series' terminal bar is still open and is always recomputed.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ..errors import ConfigurationError, EvictedIndexError, OutOfBoundsError
from ..models.ohlcv import BarSource
from ..num.base import Num, NumFactory
from .cache import EvaluationCache, MISSING

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Maximum gap between the highest cached index and a requested index before a
# recursive indicator fills the gap iteratively
RECURSION_THRESHOLD = 100


class Indicator(ABC, Generic[T]):
    """Abstract base class for all indicators."""

    def __init__(self, series: BarSource):
        """
        Initialize indicator.

        Args:
            series: Bar source the indicator is computed over
        """
        if series is None:
            raise ConfigurationError(f"{self.__class__.__name__} requires a bar series")
        self._series = series

    @property
    def series(self) -> BarSource:
        return self._series

    @property
    def num_factory(self) -> NumFactory:
        return self._series.num_factory

    def num_of(self, value) -> Num:
        return self._series.num_factory.num_of(value)

    @abstractmethod
    def value(self, index: int) -> T:
        """
        Get the indicator value at a bar index.

        Args:
            index: Bar index, 0 <= index <= series.end_index

        Returns:
            Indicator value at index

        Raises:
            OutOfBoundsError: If index is outside [0, series.end_index]
        """
        pass

    @property
    @abstractmethod
    def unstable_bars(self) -> int:
        """Number of leading indices inside the warm-up window."""
        pass

    def is_stable_at(self, index: int) -> bool:
        """True once index is past the warm-up window."""
        return index - max(self._series.begin_index, 0) >= self.unstable_bars

    def values(self, start: Optional[int] = None, end: Optional[int] = None) -> List[T]:
        """Values for indices [start, end] (defaults to the whole retained series)."""
        if self._series.is_empty:
            return []
        start = self._series.begin_index if start is None else start
        end = self._series.end_index if end is None else end
        return [self.value(i) for i in range(start, end + 1)]

    def _check_bounds(self, index: int, end_index: int) -> None:
        begin_index = self._series.begin_index
        if index < 0 or index > end_index:
            raise OutOfBoundsError(index, begin_index, end_index)
        # Checked before any cache lookup: pruning lags behind eviction
        if index < begin_index:
            raise EvictedIndexError(index, begin_index, end_index)

    def _label_params(self) -> Dict[str, Any]:
        """Key parameters shown in the indicator label."""
        return {}

    def __str__(self) -> str:
        params = self._label_params()
        if not params:
            return self.__class__.__name__
        rendered = " ".join(f"{key}: {value}" for key, value in params.items())
        return f"{self.__class__.__name__} {rendered}"

    def __repr__(self) -> str:
        return f"<{self}>"


def require_positive(name: str, value: int) -> int:
    """Validate a window-like construction parameter."""
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


def composed_unstable_bars(lookback: int, *dependencies: Indicator) -> int:
    """Unstable bars of a composite: the largest dependency's plus its own lookback."""
    return max((d.unstable_bars for d in dependencies), default=0) + lookback


def require_same_series(owner: str, *indicators: Indicator) -> BarSource:
    """Validate that composed indicators share one series and return it."""
    series = indicators[0].series
    for indicator in indicators[1:]:
        if indicator.series is not series:
            raise ConfigurationError(f"{owner}: composed indicators must share one bar series")
    return series


class CachedIndicator(Indicator[T]):
    """
    Indicator with per-index memoization.

    Subclasses implement calculate(index). A formula may request dependency
    values at indices <= index, never above it.
    """

    def __init__(self, series: BarSource):
        super().__init__(series)
        self._cache = EvaluationCache()

    @property
    def cache(self) -> EvaluationCache:
        return self._cache

    @abstractmethod
    def calculate(self, index: int) -> T:
        """Compute the value at index (no caching)."""
        pass

    def value(self, index: int) -> T:
        series = self._series
        end_index = series.end_index
        self._check_bounds(index, end_index)

        # The terminal bar is open: never trust nor persist its value
        if index < end_index:
            cached = self._cache.lookup(index)
            if cached is not MISSING:
                return cached

        result = self.calculate(index)

        if index < end_index:
            result = self._cache.store(index, result)
            self._cache.prune_below(series.begin_index)
        return result


class RecursiveCachedIndicator(CachedIndicator[T]):
    """
    Cached indicator whose value at index depends on its own value at index - 1.

    A request far above the highest cached index first evaluates the closed
    indices in between in ascending order, keeping the call depth bounded.
    """

    def value(self, index: int) -> T:
        series = self._series
        end_index = series.end_index
        self._check_bounds(index, end_index)

        start = max(self._cache.highest_index + 1, series.begin_index)
        if index - start > RECURSION_THRESHOLD:
            logger.debug("recursive_prefill", extra={
                "indicator": str(self),
                "from_index": start,
                "to_index": index,
            })
            for i in range(start, index):
                super().value(i)
        return super().value(index)
