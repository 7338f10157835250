"""Exceptions raised by mtadepartures."""


class DeparturesError(Exception):
    """Base class for all departure lookup failures."""


class UnknownLineError(DeparturesError, ValueError):
    """Raised when a line code has no real-time feed."""

    def __init__(self, line: str):
        super().__init__(f"Unknown subway line '{line}'")
        self.line = line


class UnknownComplexError(DeparturesError, ValueError):
    """Raised when a complex id is not in the station reference data."""

    def __init__(self, complex_id):
        super().__init__(f"Complex {complex_id} not found")
        self.complex_id = complex_id


class FeedFetchError(DeparturesError):
    """Raised when a feed cannot be downloaded (network, timeout or HTTP status)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class FeedDecodeError(DeparturesError):
    """Raised when a feed payload is not a valid GTFS-Realtime message."""
