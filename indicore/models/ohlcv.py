"""
OHLCV data models for price bars and bar series.
"""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List, Optional

from ..errors import BarClosedError, EvictedIndexError, OutOfBoundsError
from ..num.base import Num, NumFactory
from ..num.decimal_num import DecimalNumFactory

logger = logging.getLogger(__name__)


class Bar:
    """
    Single OHLCV bar.

    A bar stays open (mutable through add_trade/add_price) until finalize() is
    called. The owning series finalizes its terminal bar when a new bar is
    appended.
    """

    def __init__(
        self,
        end_time: datetime,
        time_period: timedelta,
        num_factory: NumFactory,
        open=None,
        high=None,
        low=None,
        close=None,
        volume=0,
        amount=0,
        trades: int = 0,
    ):
        if time_period is None or time_period <= timedelta(0):
            raise ValueError("Time period must be positive")
        self.end_time = end_time
        self.time_period = time_period
        self.num_factory = num_factory
        self.open = self._num(open)
        self.high = self._num(high)
        self.low = self._num(low)
        self.close = self._num(close)
        self.volume = num_factory.num_of(volume)
        self.amount = num_factory.num_of(amount)
        self.trades = trades
        self._closed = False
        self._validate()

    def _num(self, value) -> Optional[Num]:
        return None if value is None else self.num_factory.num_of(value)

    def _validate(self) -> None:
        if None in (self.open, self.high, self.low, self.close):
            return
        if self.high < self.low:
            raise ValueError("High must be >= Low")
        if self.high < self.open or self.high < self.close:
            raise ValueError("High must be >= Open and Close")
        if self.low > self.open or self.low > self.close:
            raise ValueError("Low must be <= Open and Close")

    @property
    def begin_time(self) -> datetime:
        return self.end_time - self.time_period

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def is_bullish(self) -> bool:
        return self.open is not None and self.close is not None and self.open < self.close

    @property
    def is_bearish(self) -> bool:
        return self.open is not None and self.close is not None and self.open > self.close

    def in_period(self, timestamp: datetime) -> bool:
        """True if timestamp falls in [begin_time, end_time)."""
        return self.begin_time <= timestamp < self.end_time

    def finalize(self) -> None:
        """Close the bar; later mutations raise BarClosedError."""
        self._closed = True

    def add_trade(self, trade_volume, trade_price) -> None:
        """
        Record a trade in the open bar.

        Args:
            trade_volume: Traded volume
            trade_price: Trade price
        """
        self._ensure_open()
        volume = self.num_factory.num_of(trade_volume)
        price = self.num_factory.num_of(trade_price)
        self.add_price(price)
        self.volume = self.volume + volume
        self.amount = self.amount + volume * price
        self.trades += 1

    def add_price(self, price) -> None:
        """Update open/high/low/close with a new price observation."""
        self._ensure_open()
        price = self.num_factory.num_of(price)
        if self.open is None:
            self.open = price
        if self.high is None or price > self.high:
            self.high = price
        if self.low is None or price < self.low:
            self.low = price
        self.close = price

    def _ensure_open(self) -> None:
        if self._closed:
            raise BarClosedError(f"Bar ending {self.end_time.isoformat()} is finalized")

    def __repr__(self) -> str:
        return (
            f"Bar(end_time={self.end_time.isoformat()}, open={self.open}, high={self.high}, "
            f"low={self.low}, close={self.close}, volume={self.volume}, closed={self._closed})"
        )


class BarSource(ABC):
    """Ordered access to bars by logical index."""

    @abstractmethod
    def get_bar(self, index: int) -> Bar:
        pass

    @property
    @abstractmethod
    def begin_index(self) -> int:
        pass

    @property
    @abstractmethod
    def end_index(self) -> int:
        pass

    @property
    @abstractmethod
    def bar_count(self) -> int:
        pass

    @property
    @abstractmethod
    def num_factory(self) -> NumFactory:
        pass

    @property
    def is_empty(self) -> bool:
        return self.bar_count == 0

    def num_of(self, value) -> Num:
        return self.num_factory.num_of(value)


class BarSeries(BarSource):
    """
    Append-only in-memory bar series with optional bounded retention.

    Indices are logical: once bars are evicted, begin_index advances and the
    remaining bars keep their original indices.
    """

    def __init__(
        self,
        name: str = "unnamed",
        num_factory: NumFactory = None,
        max_bar_count: Optional[int] = None,
        bars: Optional[List[Bar]] = None,
    ):
        if max_bar_count is not None and max_bar_count <= 0:
            raise ValueError("max_bar_count must be positive")
        self.name = name
        self._num_factory = num_factory or DecimalNumFactory()
        self._max_bar_count = max_bar_count
        self._bars: List[Bar] = []
        self._removed_bars_count = 0
        self._lock = threading.RLock()
        for bar in bars or []:
            self.add_bar(bar)

    @property
    def num_factory(self) -> NumFactory:
        return self._num_factory

    @property
    def max_bar_count(self) -> Optional[int]:
        return self._max_bar_count

    @property
    def removed_bars_count(self) -> int:
        return self._removed_bars_count

    @property
    def bar_count(self) -> int:
        return len(self._bars)

    @property
    def begin_index(self) -> int:
        return -1 if not self._bars else self._removed_bars_count

    @property
    def end_index(self) -> int:
        return -1 if not self._bars else self._removed_bars_count + len(self._bars) - 1

    @property
    def first_bar(self) -> Bar:
        return self.get_bar(self.begin_index)

    @property
    def last_bar(self) -> Bar:
        return self.get_bar(self.end_index)

    def get_bar(self, index: int) -> Bar:
        """
        Get a bar by logical index.

        Raises:
            OutOfBoundsError: If index < 0 or index > end_index
            EvictedIndexError: If the bar was removed by the retention bound
        """
        with self._lock:
            end_index = self.end_index
            if index < 0 or index > end_index:
                raise OutOfBoundsError(index, self.begin_index, end_index)
            inner_index = index - self._removed_bars_count
            if inner_index < 0:
                raise EvictedIndexError(index, self.begin_index, end_index)
            return self._bars[inner_index]

    def bar_data(self) -> List[Bar]:
        """Snapshot of the retained bars."""
        with self._lock:
            return list(self._bars)

    def create_bar(self, end_time: datetime, open, high, low, close, volume=0,
                   amount=0, time_period: timedelta = timedelta(days=1)) -> Bar:
        """Build a bar using this series' numeric backing."""
        return Bar(
            end_time=end_time,
            time_period=time_period,
            num_factory=self._num_factory,
            open=open,
            high=high,
            low=low,
            close=close,
            volume=volume,
            amount=amount,
        )

    def add_bar(self, bar: Bar, replace: bool = False) -> None:
        """
        Append a bar (or replace the terminal bar).

        Appending finalizes the previous terminal bar. Bars must be added in
        strictly increasing end_time order.

        Args:
            bar: Bar to add (must use this series' numeric backing)
            replace: Replace the current terminal bar instead of appending
        """
        if not self._num_factory.produces(bar.num_factory.zero()):
            raise ValueError(
                f"Bar uses {bar.num_factory.name}, series uses {self._num_factory.name}"
            )
        with self._lock:
            if replace and self._bars:
                self._bars[-1] = bar
                return

            if self._bars:
                last = self._bars[-1]
                if bar.end_time <= last.end_time:
                    raise ValueError(
                        f"Cannot add a bar ending {bar.end_time.isoformat()} before or at "
                        f"{last.end_time.isoformat()}"
                    )
                last.finalize()

            self._bars.append(bar)
            self._remove_exceeding_bars()

    def add_trade(self, trade_volume, trade_price) -> None:
        """Record a trade in the open terminal bar."""
        self.last_bar.add_trade(trade_volume, trade_price)

    def add_price(self, price) -> None:
        """Record a price observation in the open terminal bar."""
        self.last_bar.add_price(price)

    def _remove_exceeding_bars(self) -> None:
        if self._max_bar_count is None:
            return
        excess = len(self._bars) - self._max_bar_count
        if excess > 0:
            del self._bars[:excess]
            self._removed_bars_count += excess
            logger.debug("series_bars_evicted", extra={
                "series": self.name,
                "evicted": excess,
                "begin_index": self.begin_index,
            })

    def get_sub_series(self, start_index: int, end_index: int) -> 'BarSeries':
        """
        Copy bars [start_index, end_index) into a new series.

        Bars are re-created so the copy shares no mutable state with this series.
        """
        if start_index < 0 or start_index >= end_index:
            raise ValueError(f"Invalid sub-series range [{start_index}, {end_index})")
        start = max(start_index, self.begin_index)
        end = min(end_index, self.end_index + 1)
        sub = BarSeries(f"{self.name}[{start}:{end}]", self._num_factory)
        for index in range(start, end):
            bar = self.get_bar(index)
            sub.add_bar(Bar(
                end_time=bar.end_time,
                time_period=bar.time_period,
                num_factory=self._num_factory,
                open=bar.open,
                high=bar.high,
                low=bar.low,
                close=bar.close,
                volume=bar.volume,
                amount=bar.amount,
                trades=bar.trades,
            ))
        return sub

    def __len__(self) -> int:
        return self.bar_count

    def __repr__(self) -> str:
        return f"BarSeries(name={self.name!r}, begin={self.begin_index}, end={self.end_index})"
