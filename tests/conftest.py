"""Shared fixtures for indicator tests."""

from datetime import datetime, timedelta, timezone

import pytest

from indicore.models.ohlcv import BarSeries
from indicore.num.decimal_num import DecimalNumFactory
from indicore.num.double_num import DoubleNumFactory

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build_series(closes, volumes=None, highs=None, lows=None, opens=None,
                 num_factory=None, max_bar_count=None, name="TEST"):
    """Daily bars; open defaults to close, high/low default to max/min of open and close."""
    series = BarSeries(name, num_factory or DecimalNumFactory(), max_bar_count=max_bar_count)
    for i, close in enumerate(closes):
        open_price = opens[i] if opens else close
        series.add_bar(series.create_bar(
            end_time=START + timedelta(days=i + 1),
            open=open_price,
            high=highs[i] if highs else max(open_price, close),
            low=lows[i] if lows else min(open_price, close),
            close=close,
            volume=volumes[i] if volumes else 0,
        ))
    return series


@pytest.fixture
def make_series():
    return build_series


@pytest.fixture(params=[DecimalNumFactory, DoubleNumFactory], ids=["decimal", "double"])
def num_factory(request):
    return request.param()
