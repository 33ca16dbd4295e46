"""
Synthetic bar generation for demos, determinism checks and tests.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from ..num.base import NumFactory
from .ohlcv import BarSeries

logger = logging.getLogger(__name__)

# Fixed anchor so generated series are identical between runs
DEFAULT_START = datetime(2024, 1, 2, tzinfo=timezone.utc)


def synthetic_series(
    count: int,
    num_factory: Optional[NumFactory] = None,
    name: str = "SYNTHETIC",
    base_price: str = "1.0950",
    period: timedelta = timedelta(minutes=15),
    start: datetime = DEFAULT_START,
    max_bar_count: Optional[int] = None,
) -> BarSeries:
    """
    Generate a deterministic OHLCV series.

    Args:
        count: Number of bars
        num_factory: Numeric backing (default: decimal)
        name: Series name
        base_price: Starting price
        period: Bar duration
        start: End time of the first bar
        max_bar_count: Optional retention bound

    Returns:
        BarSeries whose last bar is still open
    """
    series = BarSeries(name, num_factory, max_bar_count=max_bar_count)
    price = Decimal(base_price)

    for i in range(count):
        # Simulate price movement
        price_change = Decimal((i % 20 - 10) * 5) / Decimal(100000)
        open_price = price + price_change
        close_price = open_price + Decimal((i % 5 - 2) * 3) / Decimal(10000)

        high_price = max(open_price, close_price) + Decimal("0.0008")
        low_price = min(open_price, close_price) - Decimal("0.0005")

        series.add_bar(series.create_bar(
            end_time=start + period * i,
            open=open_price,
            high=high_price,
            low=low_price,
            close=close_price,
            volume=1000000 + (i % 7) * 25000,
            time_period=period,
        ))
        price = close_price

    logger.debug("Synthetic data generated", extra={"series": name, "bars": count})
    return series
