"""Read-through cache for per-token market facts.

Tick size, fee rate, and neg-risk classification change rarely, so they are
cached by token ID with an explicit TTL.  Each key has its own lock so two
threads building orders for the same token trigger a single lookup, while
different tokens never contend.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from clob_orders.orders.models import OrderBook
from clob_orders.orders.protocols import MarketDataSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class _Entry(Generic[T]):
    value: T
    expires_at: float


class TTLCache(Generic[T]):
    """Thread-safe read-through cache with a per-key lock and fixed TTL.

    ``invalidate`` drops per-key locks together with the entries.  A load
    that was in flight when ``invalidate`` ran returns its value but does
    not store it.

    Args:
        ttl_seconds: Lifetime of an entry; ``0`` disables caching.
        clock: Monotonic time source, injectable for tests.

    """

    def __init__(
        self,
        ttl_seconds: float = _DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache."""
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry[T]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._generation = 0
        self._guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def get_or_load(self, key: str, loader: Callable[[str], T]) -> T:
        """Return the cached value for ``key``, loading it on a miss.

        Loader exceptions propagate and leave the cache untouched.
        """
        with self._lock_for(key):
            now = self._clock()
            with self._guard:
                entry = self._entries.get(key)
                generation = self._generation
            if entry is not None and entry.expires_at > now:
                return entry.value
            logger.debug("Cache miss for %s", key)
            value = loader(key)
            with self._guard:
                if generation == self._generation:
                    self._entries[key] = _Entry(value=value, expires_at=now + self._ttl)
            return value

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is ``None``."""
        with self._guard:
            self._generation += 1
            if key is None:
                self._entries.clear()
                self._locks.clear()
                return
            self._entries.pop(key, None)
            self._locks.pop(key, None)

    def __len__(self) -> int:
        """Return the number of cached entries, expired ones included."""
        with self._guard:
            return len(self._entries)


class CachedMarketData:
    """Wrap a ``MarketDataSource`` with read-through caches.

    Tick size, fee rate, and neg-risk are cached per token.  Order books are
    always fetched live.

    Args:
        source: Underlying market data source.
        ttl_seconds: Lifetime of each cached value.
        clock: Monotonic time source, injectable for tests.

    """

    def __init__(
        self,
        source: MarketDataSource,
        ttl_seconds: float = _DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the three per-field caches."""
        self._source = source
        self._tick_sizes: TTLCache[str] = TTLCache(ttl_seconds, clock)
        self._fee_rates: TTLCache[int] = TTLCache(ttl_seconds, clock)
        self._neg_risk: TTLCache[bool] = TTLCache(ttl_seconds, clock)

    def get_tick_size(self, token_id: str) -> str:
        """Return the cached or freshly fetched tick size."""
        return self._tick_sizes.get_or_load(token_id, self._source.get_tick_size)

    def get_fee_rate_bps(self, token_id: str) -> int:
        """Return the cached or freshly fetched fee rate."""
        return self._fee_rates.get_or_load(token_id, self._source.get_fee_rate_bps)

    def get_neg_risk(self, token_id: str) -> bool:
        """Return the cached or freshly fetched neg-risk flag."""
        return self._neg_risk.get_or_load(token_id, self._source.get_neg_risk)

    def get_order_book(self, token_id: str) -> OrderBook:
        """Return a live order book from the underlying source."""
        return self._source.get_order_book(token_id)

    def invalidate(self, token_id: str | None = None) -> None:
        """Forget cached facts for one token, or for all tokens."""
        self._tick_sizes.invalidate(token_id)
        self._fee_rates.invalidate(token_id)
        self._neg_risk.invalidate(token_id)
