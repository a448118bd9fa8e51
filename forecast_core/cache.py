from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Optional, Tuple

from .entities import CacheEntry, ForecastData


logger = logging.getLogger(__name__)


class ForecastCache:
    """Thread-safe TTL cache of forecasts keyed by postal code.

    Expired entries are dropped lazily on lookup, and every
    ``SWEEP_INTERVAL`` puts the whole map is swept so keys that are never
    looked up again do not accumulate. Entries are kept in store order, so
    the expired ones always form a prefix of the map.
    """

    TTL = 30 * 60
    SWEEP_INTERVAL = 100

    def __init__(self, time_func=time.monotonic, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._time_func = time_func
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self._puts_since_sweep = 0
        self._storage: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def get(self, key: str) -> Tuple[Optional[ForecastData], bool]:
        with self._lock:
            entry = self._storage.get(key)
            if entry is None:
                return None, False
            if self._is_expired(entry, self._time_func()):
                del self._storage[key]
                logger.debug("Evicted expired forecast for %s", key)
                return None, False
            return entry.value, True

    def put(self, key: str, value: ForecastData) -> None:
        with self._lock:
            # Re-insert so that ordering reflects the latest store time.
            self._storage.pop(key, None)
            now = self._time_func()
            self._storage[key] = CacheEntry(key=key, value=value, stored_at=now)
            self._puts_since_sweep += 1
            if self._puts_since_sweep >= self.SWEEP_INTERVAL:
                self._purge_expired(now)
            if self._max_entries is not None:
                while len(self._storage) > self._max_entries:
                    evicted, _ = self._storage.popitem(last=False)
                    logger.debug("Evicted forecast for %s (cache full)", evicted)

    def sweep(self) -> int:
        with self._lock:
            return self._purge_expired(self._time_func())

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

    def _purge_expired(self, now: float) -> int:
        removed = 0
        while self._storage:
            oldest = next(iter(self._storage.values()))
            if not self._is_expired(oldest, now):
                break
            self._storage.popitem(last=False)
            removed += 1
        self._puts_since_sweep = 0
        if removed:
            logger.debug("Swept %d expired forecasts", removed)
        return removed

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at >= self.TTL


__all__ = ["ForecastCache"]
