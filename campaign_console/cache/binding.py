"""
Key-addressed client cache with revalidation.

Each cache key (a request path plus query) owns one entry. Reading a key
schedules a background fetch when the key is new or differs from the key
read last; ``revalidate`` forces a fresh fetch and waits for it.

Ordering rules:
- At most one fetch is in flight per key
- A result is applied only if its key is still the most recently
  requested key; otherwise it is dropped as stale
- A failed fetch keeps the previous data and records the error
- With ``max_entries`` set, the least recently read idle entries are
  evicted once the bound is exceeded; otherwise every key read is kept
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")

Fetcher = Callable[[str], Awaitable[Any]]
Listener = Callable[["CacheEntry"], None]


@dataclass
class CacheEntry(Generic[T]):
    """
    Last known state for one cache key.

    ``data is None`` means the first load is pending (or failed) and must be
    shown as loading, never as an empty result.
    """
    key: str
    data: Optional[T] = None
    error: Optional[Exception] = None
    is_validating: bool = False
    fetch_count: int = 0
    updated_at: Optional[datetime] = None

    @property
    def is_loading(self) -> bool:
        return self.data is None


@dataclass
class _Inflight:
    task: "asyncio.Task[bool]"
    started_at: datetime = field(default_factory=datetime.now)


class CacheBinding(Generic[T]):
    """
    Binding between cache keys and an async fetcher.

    Usage:
        binding = CacheBinding(transport.fetch_campaigns)
        entry = binding.get("/api/campaigns?search=")   # schedules a fetch
        await binding.settle()
        entry = binding.get("/api/campaigns?search=")   # data is loaded
        await binding.revalidate("/api/campaigns?search=")

    ``get`` must be called from inside a running event loop.

    Without ``max_entries`` one entry is kept per distinct key ever read,
    which for a search box means one per distinct search text.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        name: str = "default",
        max_entries: Optional[int] = None,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.name = name
        self.max_entries = max_entries
        self._fetcher = fetcher
        self._entries: dict[str, CacheEntry[T]] = {}
        self._inflight: dict[str, _Inflight] = {}
        self._latest_key: Optional[str] = None
        self._listeners: list[Listener] = []

    @property
    def active_key(self) -> Optional[str]:
        """The most recently requested key."""
        return self._latest_key

    @property
    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def is_fetching(self, key: str) -> bool:
        return key in self._inflight

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def peek(self, key: str) -> Optional[CacheEntry[T]]:
        """Read an entry without scheduling anything."""
        return self._entries.get(key)

    def get(self, key: str) -> CacheEntry[T]:
        """
        Synchronously read the entry for a key.

        Schedules a background fetch when the key has never been requested
        or when it differs from the previously requested key.
        """
        # Re-inserting keeps dict order least recently read first
        entry = self._entries.pop(key, None)
        is_new = entry is None
        if entry is None:
            entry = CacheEntry(key=key)
        self._entries[key] = entry

        key_changed = key != self._latest_key
        self._latest_key = key
        self._evict()

        if is_new or key_changed:
            logger.debug(
                "cache.key_activated",
                cache=self.name,
                key=key,
                cached=not entry.is_loading,
            )
            self._start_fetch(key)

        return entry

    async def revalidate(self, key: str) -> bool:
        """
        Force a fresh fetch for a key and wait for it to settle.

        The key becomes the most recently requested key, so its result is
        applied. An in-flight fetch for the same key is awaited first so the
        new request is issued after it; only one request per key is ever open.

        Returns:
            True if the fetch succeeded, False if it failed. Never raises
            for fetch errors.
        """
        self._latest_key = key

        while key in self._inflight:
            await asyncio.shield(self._inflight[key].task)

        if key not in self._entries:
            self._entries[key] = CacheEntry(key=key)
        logger.debug("cache.revalidate", cache=self.name, key=key)
        return await self._start_fetch(key)

    async def settle(self) -> None:
        """Wait until no fetch is in flight."""
        while self._inflight:
            tasks = [inflight.task for inflight in self._inflight.values()]
            await asyncio.gather(*tasks, return_exceptions=True)

    def _evict(self) -> None:
        if self.max_entries is None:
            return
        for key in list(self._entries):
            if len(self._entries) <= self.max_entries:
                break
            if key == self._latest_key or key in self._inflight:
                continue
            del self._entries[key]
            logger.debug("cache.entry_evicted", cache=self.name, key=key)

    def _start_fetch(self, key: str) -> "asyncio.Task[bool]":
        existing = self._inflight.get(key)
        if existing is not None:
            logger.debug("cache.fetch_deduplicated", cache=self.name, key=key)
            return existing.task

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run_fetch(key))
        self._inflight[key] = _Inflight(task=task)

        entry = self._entries[key]
        entry.is_validating = True
        entry.fetch_count += 1
        logger.debug("cache.fetch_started", cache=self.name, key=key, attempt=entry.fetch_count)
        self._notify(entry)
        return task

    async def _run_fetch(self, key: str) -> bool:
        entry = self._entries[key]
        try:
            data = await self._fetcher(key)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            entry.error = e
            logger.warning("cache.fetch_failed", cache=self.name, key=key, error=str(e))
            return False
        else:
            if key != self._latest_key:
                logger.debug(
                    "cache.stale_result_discarded",
                    cache=self.name,
                    key=key,
                    latest_key=self._latest_key,
                )
                return True

            entry.data = data
            entry.error = None
            entry.updated_at = datetime.now()
            logger.debug("cache.fetch_applied", cache=self.name, key=key)
            return True
        finally:
            current = self._inflight.get(key)
            if current is not None and current.task is asyncio.current_task():
                del self._inflight[key]
            entry.is_validating = False
            self._notify(entry)

    def _notify(self, entry: CacheEntry[T]) -> None:
        for listener in list(self._listeners):
            listener(entry)
