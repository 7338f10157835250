"""HTTP transport for MTA real-time feeds."""

import logging
from typing import Optional

import requests

from .exceptions import FeedFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # Seconds per fetch


class MTAClient:
    """Downloads raw GTFS-Realtime payloads."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        """
        Initialize the MTA client.

        Args:
            timeout: Per-request timeout in seconds. A timeout is a fetch failure.
            session: Optional requests session to reuse connections from.
        """
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, feed_url: str) -> bytes:
        """
        Fetch a feed.

        Args:
            feed_url: Full URL to the feed.

        Returns:
            Raw protobuf bytes.

        Raises:
            FeedFetchError: On network errors, timeouts and non-success statuses.
        """
        logger.debug(f"Fetching {feed_url}")
        try:
            response = self._session.get(feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {feed_url}: {e}")
            raise FeedFetchError(feed_url, str(e)) from e
        return response.content

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
