"""Short-lived cache of decoded real-time feeds."""

import logging
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional

from .feed_decoder import decode_feed
from .models import CachedFeed

logger = logging.getLogger(__name__)

FEED_TTL_SECONDS = 20  # A cached feed is usable while now - created_at <= this
DEFAULT_MAX_ENTRIES = 16


class FeedCache:
    """
    Memoizes decoded feeds per URL for FEED_TTL_SECONDS.

    Concurrent callers for the same URL share one fetch: the first caller
    fetches and decodes, the others wait on its Future. Failures reach
    every waiter and are not cached.
    """

    def __init__(
        self,
        fetch: Callable[[str], bytes],
        decode: Callable[[bytes], Any] = decode_feed,
        clock: Callable[[], float] = time.time,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        """
        Initialize an empty cache.

        Args:
            fetch: Downloads the raw payload for a URL.
            decode: Turns a raw payload into a feed message.
            clock: Returns the current Unix time.
            max_entries: Oldest entries are evicted beyond this size.
        """
        self._fetch = fetch
        self._decode = decode
        self._clock = clock
        self._max_entries = max_entries
        self._lock = threading.Lock()
        self._entries: Dict[str, CachedFeed] = {}
        self._in_flight: Dict[str, Future] = {}

    def _now(self) -> int:
        return int(self._clock())

    def get_feed(self, url: str) -> Any:
        """
        Get the decoded feed for a URL, fetching it if missing or stale.

        Raises:
            FeedFetchError: If the download fails.
            FeedDecodeError: If the payload cannot be decoded.
        """
        with self._lock:
            entry = self._entries.get(url)
            if entry is not None:
                if self._now() - entry.created_at <= FEED_TTL_SECONDS:
                    logger.debug(f"Using cached feed for {url}")
                    return entry.value
                del self._entries[url]

            future = self._in_flight.get(url)
            owner = future is None
            if owner:
                future = Future()
                self._in_flight[url] = future

        if not owner:
            logger.debug(f"Waiting on in-flight fetch of {url}")
            return future.result()

        logger.debug(f"Feed cache miss for {url}")
        try:
            value = self._decode(self._fetch(url))
        except Exception as e:
            with self._lock:
                del self._in_flight[url]
            future.set_exception(e)
            raise

        with self._lock:
            self._store(CachedFeed(url=url, value=value, created_at=self._now()))
            del self._in_flight[url]
        future.set_result(value)
        return value

    def _store(self, entry: CachedFeed) -> None:
        if entry.url not in self._entries and len(self._entries) >= self._max_entries:
            oldest = min(self._entries, key=lambda k: self._entries[k].created_at)
            del self._entries[oldest]
            logger.debug(f"Evicted {oldest} from feed cache")
        self._entries[entry.url] = entry

    def peek(self, url: str) -> Optional[CachedFeed]:
        """Get the stored entry for a URL without fetching, fresh or not."""
        with self._lock:
            return self._entries.get(url)

    def clear(self) -> None:
        """Drop every cached feed. In-flight fetches still complete."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
