"""Thread-safe memoization of values keyed by sample size.

A :class:`LoadingCache` computes the value for a missing key with its loader and keeps it for
later lookups. Concurrent lookups of the same missing key wait for a single computation;
lookups of other keys are not blocked by it.
"""
import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from typing import Callable, Dict, Generic, Hashable, NamedTuple, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CacheStats(NamedTuple):
    """Statistics of a :class:`LoadingCache`.

    Args:
        hits: lookups that found a present entry.
        misses: lookups that had to load (or wait for the load of) an entry.
        load_failures: loads that raised.
        evictions: entries removed to honor `maxsize`.
    """

    hits: int = 0
    misses: int = 0
    load_failures: int = 0
    evictions: int = 0


class LoadingCache(Generic[K, V]):
    """Key-value cache that loads missing entries on demand.

    Args:
        loader: function computing the value for a key. Exceptions raised by the loader are
            propagated unchanged to every caller waiting for that key, and nothing is stored.
        maxsize: maximum number of entries. If None (the default), entries are never evicted;
            otherwise the least recently used entry is evicted.

    Notes:
        Entries are never modified once stored. An evicted entry is loaded again on the next
        lookup.
    """

    def __init__(self, loader: Callable[[K], V], maxsize: Optional[int] = None):
        if maxsize is not None and maxsize <= 0:
            raise ValueError("maxsize should be a positive integer or None: %s" % maxsize)
        self._loader = loader
        self.maxsize = maxsize
        self._entries: "OrderedDict[K, V]" = OrderedDict()
        self._loading: Dict[K, Future] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def get(self, key: K) -> V:
        "Return the value for `key`, loading it if it is not present."
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._stats = self._stats._replace(hits=self._stats.hits + 1)
                return self._entries[key]
            self._stats = self._stats._replace(misses=self._stats.misses + 1)
            future = self._loading.get(key)
            loads = future is None
            if loads:
                future = self._loading[key] = Future()
        if loads:
            return self._load(key, future)
        return future.result()

    def _load(self, key: K, future: Future) -> V:
        logger.debug("Loading cache entry for %r", key)
        try:
            value = self._loader(key)
        except BaseException as e:
            with self._lock:
                del self._loading[key]
                self._stats = self._stats._replace(
                    load_failures=self._stats.load_failures + 1
                )
            future.set_exception(e)
            raise
        with self._lock:
            self._entries[key] = value
            del self._loading[key]
            self._evict()
        future.set_result(value)
        return value

    def _evict(self) -> None:
        # called with the lock held
        if self.maxsize is None:
            return
        while len(self._entries) > self.maxsize:
            evicted, _ = self._entries.popitem(last=False)
            self._stats = self._stats._replace(evictions=self._stats.evictions + 1)
            logger.debug("Evicted cache entry for %r", evicted)

    def invalidate(self, key: K) -> None:
        "Discard the entry for `key`, if present."
        with self._lock:
            self._entries.pop(key, None)

    def stats(self) -> CacheStats:
        with self._lock:
            return self._stats

    def __contains__(self, key) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
