"""Bounded LRU map with per-entry TTL, used for view states and renders."""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUStore(Generic[K, V]):
    """
    LRU map with TTL-based expiry.

    Provides:
    - Thread-safe access
    - Expiry refreshed on read
    - Memory-bounded storage
    - Hit/miss statistics
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._data: OrderedDict[K, Tuple[V, float]] = OrderedDict()
        self._lock = threading.RLock()
        self._clock = clock
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds

        self.hits = 0
        self.misses = 0

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            if key not in self._data:
                self.misses += 1
                return None

            value, stamp = self._data[key]
            now = self._clock()
            if now - stamp > self.ttl_seconds:
                del self._data[key]
                self.misses += 1
                return None

            self._data[key] = (value, now)
            self._data.move_to_end(key)
            self.hits += 1
            return value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            if key in self._data:
                del self._data[key]
            while len(self._data) >= self.max_size:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("Evicted %s", evicted)
            self._data[key] = (value, self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            total = self.hits + self.misses
            return {
                "size": len(self._data),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": self.hits / total if total > 0 else 0.0,
                "ttl_seconds": self.ttl_seconds,
            }
