"""
Exception taxonomy.

NaN propagation is not an error: insufficient lookback is represented by the
NaN sentinel value and never raised.
"""


class IndicoreError(Exception):
    """Base class for all library errors."""


class OutOfBoundsError(IndicoreError, IndexError):
    """Index negative or beyond the series' current end index."""

    def __init__(self, index: int, begin_index: int, end_index: int, message: str = None):
        self.index = index
        self.begin_index = begin_index
        self.end_index = end_index
        super().__init__(
            message or f"Index {index} out of bounds [0, {end_index}] (begin_index={begin_index})"
        )


class EvictedIndexError(OutOfBoundsError):
    """Index was removed from the series by its retention bound."""

    def __init__(self, index: int, begin_index: int, end_index: int):
        super().__init__(
            index, begin_index, end_index,
            f"Index {index} was evicted (begin_index={begin_index}, end_index={end_index})"
        )


class ConfigurationError(IndicoreError, ValueError):
    """Invalid construction parameters or configuration files."""


class BarClosedError(IndicoreError):
    """Attempt to mutate a finalized bar."""


class NumericTypeMismatchError(IndicoreError, TypeError):
    """Two different numeric backings combined in one operation."""
