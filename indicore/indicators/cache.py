"""
Per-indicator evaluation cache.

Holds results for closed bar indices only. The owning indicator decides when a
result may be stored; the cache enforces first-writer-wins under concurrent
stores so every caller observes the same value for an index.
"""

import logging
import threading
from dataclasses import dataclass, asdict
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Marker for "no cached result" (None is a legitimate indicator result)
MISSING = object()


@dataclass
class CacheStats:
    """Statistics for cache effectiveness tracking."""
    hits: int = 0  # Lookups answered from the cache
    misses: int = 0  # Lookups that required a computation
    stored: int = 0  # Results persisted
    pruned: int = 0  # Results dropped after series eviction

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class EvaluationCache:
    """Mapping of bar index to computed result, owned by one indicator."""

    def __init__(self):
        self._results: Dict[int, Any] = {}
        self._lock = threading.Lock()
        self._lowest_index = None
        self.highest_index = -1
        self.stats = CacheStats()

    def lookup(self, index: int) -> Any:
        """Return the cached result for index, or MISSING."""
        result = self._results.get(index, MISSING)
        if result is MISSING:
            self.stats.misses += 1
        else:
            self.stats.hits += 1
        return result

    def store(self, index: int, result: Any) -> Any:
        """
        Store result for index unless another caller stored one first.

        Returns:
            The stored result (the first writer's value wins)
        """
        with self._lock:
            existing = self._results.get(index, MISSING)
            if existing is not MISSING:
                return existing
            self._results[index] = result
            self.stats.stored += 1
            if index > self.highest_index:
                self.highest_index = index
            if self._lowest_index is None or index < self._lowest_index:
                self._lowest_index = index
            return result

    def prune_below(self, begin_index: int) -> int:
        """
        Drop results for indices below begin_index.

        Returns:
            Number of results removed
        """
        if self._lowest_index is None or self._lowest_index >= begin_index:
            return 0
        with self._lock:
            stale = [i for i in self._results if i < begin_index]
            for i in stale:
                del self._results[i]
            self._lowest_index = min(self._results) if self._results else None
            if not self._results:
                self.highest_index = -1
            self.stats.pruned += len(stale)
        logger.debug("cache_pruned", extra={"removed": len(stale), "begin_index": begin_index})
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
            self._lowest_index = None
            self.highest_index = -1

    def __contains__(self, index: int) -> bool:
        return index in self._results

    def __len__(self) -> int:
        return len(self._results)
