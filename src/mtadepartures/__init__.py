"""mtadepartures - Real-time MTA subway departures per station complex."""

__version__ = "0.1.0"

from .models import (
    StationComplex,
    Station,
    CachedFeed,
    Departure,
    LineDepartures,
    ComplexResponse,
)
from .exceptions import (
    DeparturesError,
    UnknownLineError,
    UnknownComplexError,
    FeedFetchError,
    FeedDecodeError,
)
from .config import ClientConfig
from .station_index import StationIndex, StationLoader
from .feed_cache import FeedCache
from .mta_client import MTAClient
from .client import DeparturesClient, create_client

__all__ = [
    "DeparturesClient",
    "create_client",
    "ClientConfig",
    "StationIndex",
    "StationLoader",
    "FeedCache",
    "MTAClient",
    "StationComplex",
    "Station",
    "CachedFeed",
    "Departure",
    "LineDepartures",
    "ComplexResponse",
    "DeparturesError",
    "UnknownLineError",
    "UnknownComplexError",
    "FeedFetchError",
    "FeedDecodeError",
]
