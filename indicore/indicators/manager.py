"""Indicator manager - builds a named indicator graph from configuration."""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..errors import ConfigurationError
from ..models.ohlcv import BarSource
from ..num.base import Num
from .atr import ATRIndicator, TRIndicator
from .averages import EMAIndicator, MMAIndicator, SMAIndicator
from .base import Indicator
from .helpers import (
    ClosePriceDifferenceIndicator, ClosePriceIndicator, HighestValueIndicator, HighPriceIndicator,
    LowestValueIndicator, LowPriceIndicator, MedianPriceIndicator, OpenPriceIndicator, VolumeIndicator,
)
from .ichimoku import (
    IchimokuKijunSenIndicator, IchimokuSenkouSpanAIndicator, IchimokuSenkouSpanBIndicator,
    IchimokuTenkanSenIndicator,
)
from .starc import StarcBandsLowerIndicator, StarcBandsMiddleIndicator, StarcBandsUpperIndicator
from .volume import TimeSegmentedVolumeIndicator

logger = logging.getLogger(__name__)

# Price fields usable as a "source" without defining them in the config
PRICE_SOURCES: Dict[str, Callable[[BarSource], Indicator[Num]]] = {
    'close': ClosePriceIndicator,
    'open': OpenPriceIndicator,
    'high': HighPriceIndicator,
    'low': LowPriceIndicator,
    'median': MedianPriceIndicator,
    'volume': VolumeIndicator,
}


class IndicatorManager:
    """
    Builds and owns a set of named indicators over one bar series.

    Config format:
        {"<name>": {"type": "<type>", "enabled": true, ...parameters}}

    Entries are built in order; "source"/"middle" parameters may reference a
    price field or an indicator defined earlier in the same config.
    """

    def __init__(self, series: BarSource, config: Optional[Dict[str, Any]] = None):
        self.series = series
        self.config = config or {}
        self.indicators: Dict[str, Indicator] = {}
        self._builders: Dict[str, Callable[[Dict[str, Any]], Indicator]] = {
            'close_price': lambda p: ClosePriceIndicator(self.series),
            'close_price_difference': lambda p: ClosePriceDifferenceIndicator(self.series),
            'volume': lambda p: VolumeIndicator(self.series, p.get('bar_count', 1)),
            'sma': lambda p: SMAIndicator(self._source(p), self._bar_count(p)),
            'ema': lambda p: EMAIndicator(self._source(p), self._bar_count(p)),
            'mma': lambda p: MMAIndicator(self._source(p), self._bar_count(p)),
            'highest': lambda p: HighestValueIndicator(self._source(p), self._bar_count(p)),
            'lowest': lambda p: LowestValueIndicator(self._source(p), self._bar_count(p)),
            'tr': lambda p: TRIndicator(self.series),
            'atr': lambda p: ATRIndicator(self.series, p.get('bar_count', 14)),
            'starc_middle': lambda p: StarcBandsMiddleIndicator(self.series, p.get('bar_count', 6)),
            'starc_upper': lambda p: self._starc_band(StarcBandsUpperIndicator, p),
            'starc_lower': lambda p: self._starc_band(StarcBandsLowerIndicator, p),
            'tsv': lambda p: TimeSegmentedVolumeIndicator(self.series, p.get('bar_count', 18)),
            'ichimoku_tenkan': lambda p: IchimokuTenkanSenIndicator(self.series, p.get('bar_count', 9)),
            'ichimoku_kijun': lambda p: IchimokuKijunSenIndicator(self.series, p.get('bar_count', 26)),
            'ichimoku_senkou_a': lambda p: IchimokuSenkouSpanAIndicator(
                self.series,
                p.get('conversion_bar_count', 9),
                p.get('base_bar_count', 26),
                p.get('offset', 26),
            ),
            'ichimoku_senkou_b': lambda p: IchimokuSenkouSpanBIndicator(
                self.series, p.get('bar_count', 52), p.get('offset', 26)
            ),
        }
        self._initialize_indicators()

    def _initialize_indicators(self) -> None:
        """Build all enabled indicators."""
        for name, params in self.config.items():
            params = params or {}
            if not params.get('enabled', True):
                logger.warning("indicator_disabled", extra={"indicator": name})
                continue
            indicator_type = params.get('type')
            builder = self._builders.get(indicator_type)
            if builder is None:
                raise ConfigurationError(f"Unknown indicator type {indicator_type!r} for {name!r}")
            if name in self.indicators or name in PRICE_SOURCES:
                raise ConfigurationError(f"Duplicate or reserved indicator name: {name!r}")
            self.indicators[name] = builder(params)

        logger.info(f"Initialized {len(self.indicators)} indicators: {list(self.indicators)}", extra={
            "series": getattr(self.series, 'name', None),
            "numeric": self.series.num_factory.name,
        })

    def _bar_count(self, params: Dict[str, Any]) -> int:
        if 'bar_count' not in params:
            raise ConfigurationError(f"{params.get('type')} requires bar_count")
        return params['bar_count']

    def _resolve(self, reference: str) -> Indicator:
        if reference in self.indicators:
            return self.indicators[reference]
        if reference in PRICE_SOURCES:
            return PRICE_SOURCES[reference](self.series)
        raise ConfigurationError(
            f"Unknown indicator reference {reference!r} (must be a price field or defined earlier)"
        )

    def _source(self, params: Dict[str, Any]) -> Indicator:
        return self._resolve(params.get('source', 'close'))

    def _starc_band(self, band_class, params: Dict[str, Any]) -> Indicator:
        bar_count = params.get('bar_count', 15)
        if 'middle' in params:
            middle = self._resolve(params['middle'])
        else:
            middle = StarcBandsMiddleIndicator(self.series, params.get('middle_bar_count', 6))
        return band_class(middle, bar_count, params.get('multiplier', 2))

    def get(self, name: str) -> Indicator:
        try:
            return self.indicators[name]
        except KeyError:
            raise KeyError(f"No indicator named {name!r}") from None

    @property
    def names(self) -> List[str]:
        return list(self.indicators)

    @property
    def unstable_bars(self) -> int:
        """Warm-up length after which every managed indicator is stable."""
        return max((i.unstable_bars for i in self.indicators.values()), default=0)

    def snapshot(self, index: Optional[int] = None) -> Dict[str, Any]:
        """
        Values of every indicator at one index.

        Args:
            index: Bar index (default: the series' end index)

        Returns:
            Dict of indicator name to value
        """
        if index is None:
            index = self.series.end_index
        return {name: indicator.value(index) for name, indicator in self.indicators.items()}

    def cache_summary(self) -> Dict[str, Dict[str, Any]]:
        """Cache statistics per cached indicator."""
        summary = {}
        for name, indicator in self.indicators.items():
            cache = getattr(indicator, 'cache', None)
            if cache is None:
                # Delegating indicators (e.g. ATR) keep the cache on their average
                cache = getattr(getattr(indicator, 'average', None), 'cache', None)
            if cache is None:
                continue
            summary[name] = {"label": str(indicator), "size": len(cache), **cache.stats.as_dict()}

        for name, stats in summary.items():
            logger.info(
                f"cache_summary {name} hits={stats['hits']} misses={stats['misses']} stored={stats['stored']}"
            )
        return summary

    def __contains__(self, name: str) -> bool:
        return name in self.indicators

    def __len__(self) -> int:
        return len(self.indicators)
