"""Main departures client."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Mapping, Optional, Sequence, Union

from .config import ClientConfig
from .destinations import DESTINATION_LOCATION_TO_COMPLEX_ID
from .extractor import extract
from .feed_cache import FeedCache
from .feeds import feed_urls
from .models import ComplexResponse
from .mta_client import MTAClient
from .station_index import StationIndex, StationLoader

logger = logging.getLogger(__name__)


class DeparturesClient:
    """
    Real-time subway departures for station complexes.

    This class:
    - Works out which feeds cover the lines serving the requested complexes
    - Fetches each feed once, concurrently, through a 20 second cache
    - Reports per-line, per-direction departures sorted by time
    """

    def __init__(
        self,
        api_key: str,
        station_index: Optional[StationIndex] = None,
        config: Optional[ClientConfig] = None,
        feed_cache: Optional[FeedCache] = None,
        destinations: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: MTA API key, passed through in feed URLs.
            station_index: Station reference data. If None, it is downloaded
                from config.stations_url now.
            config: Client settings. Defaults to ClientConfig().
            feed_cache: Cache to share with other clients. If None, the client
                creates its own around an MTAClient.
            destinations: Destination code -> complex id table.
        """
        self.api_key = api_key
        self.config = config or ClientConfig()
        self.destinations = (
            destinations if destinations is not None else DESTINATION_LOCATION_TO_COMPLEX_ID
        )

        if station_index is None:
            station_index = StationLoader(self.config.stations_url).load_from_url()
        self.station_index = station_index

        self.mta_client: Optional[MTAClient] = None
        if feed_cache is None:
            self.mta_client = MTAClient(timeout=self.config.request_timeout)
            feed_cache = FeedCache(self.mta_client.fetch)
        self.feed_cache = feed_cache

    def departures(
        self, complex_ids: Union[int, str, Sequence[Union[int, str]]]
    ) -> Union[ComplexResponse, List[ComplexResponse]]:
        """
        Get departures for one or more complexes.

        Args:
            complex_ids: A complex id, or a list of them.

        Returns:
            A ComplexResponse for a single id, otherwise a list of responses
            in the order requested.

        Raises:
            UnknownComplexError: If a complex id is not in the station data.
            UnknownLineError: If a complex is served by a line with no feed.
            FeedFetchError: If any feed cannot be downloaded.
            FeedDecodeError: If any feed cannot be decoded.
        """
        single = isinstance(complex_ids, (int, str))
        ids = [complex_ids] if single else list(complex_ids)
        if not ids:
            raise ValueError("At least one complex id is required")

        complexes = [self.station_index.complex(complex_id) for complex_id in ids]
        lines = list(dict.fromkeys(line for c in complexes for line in c.daytime_routes))
        feeds = self._fetch_feeds(feed_urls(self.api_key, lines, self.config.feed_url_template))

        now = int(time.time())
        responses = []
        for complex_id, station_complex in zip(ids, complexes):
            response = ComplexResponse(complex_id=complex_id, name=station_complex.name)
            extract(
                feeds,
                complex_id,
                response,
                self.station_index,
                destinations=self.destinations,
                now=now,
            )
            for line in response.lines:
                line.sort()
            responses.append(response)

        if len(responses) == 1:
            return responses[0]
        return responses

    def _fetch_feeds(self, urls: List[str]) -> list:
        """Fetch every feed concurrently. Any failure fails the whole batch."""
        if not urls:
            return []
        logger.info(f"Fetching {len(urls)} feed(s)")
        workers = min(len(urls), self.config.max_workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.feed_cache.get_feed, urls))

    def close(self) -> None:
        """Release the HTTP session, if this client owns one."""
        if self.mta_client:
            self.mta_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def create_client(api_key: str, **kwargs) -> DeparturesClient:
    """Create a DeparturesClient. Keyword arguments go to its constructor."""
    return DeparturesClient(api_key, **kwargs)
