"""
indicore Demo

Builds the configured indicator graph over synthetic bars, then streams trades
into the open bar to show that its values are recomputed while closed bars are
served from the cache.
"""

import json
import logging

from configs import config_loader
from indicore.indicators.manager import IndicatorManager
from indicore.models.synthetic import synthetic_series
from indicore.utils.json_logging import setup_logging
from indicore.utils.numeric import num_factory_for

logger = logging.getLogger(__name__)


def main():
    """Main demo function."""
    setup_logging(console_level=logging.WARNING)

    print("indicore Demo")
    print("=" * 50)

    numeric_config = config_loader.get_config('numeric')
    num_factory = num_factory_for(numeric_config)
    print(f"Numeric backing: {num_factory!r}")

    series = synthetic_series(120, num_factory, name='EURUSD')
    print(f"Generated {series.bar_count} bars for {series.name}")

    manager = IndicatorManager(series, config_loader.get_config('indicators').get('indicators', {}))
    print(f"Indicators: {', '.join(manager.names)}")
    print(f"Warm-up: {manager.unstable_bars} bars")

    # Full pass over closed bars fills the caches
    for index in range(series.begin_index, series.end_index):
        manager.snapshot(index)

    print("\nOpen bar values:")
    for name, value in manager.snapshot().items():
        print(f"  {name}: {value}")

    # New trades arrive within the open bar's period
    last_close = series.last_bar.close
    series.add_trade(50000, last_close + num_factory.num_of("0.0015"))
    series.add_trade(25000, last_close - num_factory.num_of("0.0010"))

    print("\nOpen bar values after trades:")
    for name, value in manager.snapshot().items():
        print(f"  {name}: {value}")

    print("\nCache statistics:")
    print(json.dumps(manager.cache_summary(), indent=2, default=str))

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
