"""
Shared query cache keyed by endpoint path.
"""
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

DEFAULT_STALE_SECONDS = 30.0


class QueryCache:
    """
    Endpoint path -> last fetched payload.

    Entries older than ``stale_seconds`` are refetched on the next read.
    Mutations invalidate by path prefix, so invalidating
    ``/api/tokens/balance/`` also drops any query-string variants of it.
    """

    def __init__(self, stale_seconds: float = DEFAULT_STALE_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.stale_seconds = stale_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self):
        return len(self._entries)

    def set(self, key: str, value: Any):
        self._entries[key] = (self._clock(), value)

    def is_stale(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return True
        fetched_at, _ = entry
        return self._clock() - fetched_at >= self.stale_seconds

    def get(self, key: str) -> Optional[Any]:
        """Fresh cached value, or None."""
        if self.is_stale(key):
            return None
        return self._entries[key][1]

    async def fetch(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the fresh cached value or load, store and return a new one."""
        if not self.is_stale(key):
            return self._entries[key][1]
        value = await loader()
        self.set(key, value)
        return value

    def invalidate(self, prefix: str) -> int:
        """Drop every entry whose key starts with prefix; returns how many."""
        doomed = [key for key in self._entries if key.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self):
        self._entries.clear()
