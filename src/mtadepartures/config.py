"""Client configuration."""

import os
from dataclasses import dataclass

from .feeds import FEED_URL_TEMPLATE
from .mta_client import DEFAULT_TIMEOUT
from .station_index import MTA_STATIONS_URL

DEFAULT_MAX_WORKERS = 8


@dataclass
class ClientConfig:
    """Settings for a DeparturesClient."""
    feed_url_template: str = FEED_URL_TEMPLATE  # Needs {api_key} and {feed_id}
    request_timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS  # Concurrent feed fetches
    stations_url: str = MTA_STATIONS_URL

    def __post_init__(self):
        if "{api_key}" not in self.feed_url_template or "{feed_id}" not in self.feed_url_template:
            raise ValueError("feed_url_template must contain {api_key} and {feed_id}")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from MTA_* environment variables, falling back to defaults."""
        env = os.environ
        return cls(
            feed_url_template=env.get("MTA_FEED_URL_TEMPLATE", FEED_URL_TEMPLATE),
            request_timeout=float(env.get("MTA_REQUEST_TIMEOUT", DEFAULT_TIMEOUT)),
            max_workers=int(env.get("MTA_MAX_WORKERS", DEFAULT_MAX_WORKERS)),
            stations_url=env.get("MTA_STATIONS_URL", MTA_STATIONS_URL),
        )
