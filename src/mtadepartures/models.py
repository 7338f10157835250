"""Data models for MTA subway departures."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

DIRECTIONS = ("N", "S")


@dataclass(frozen=True)
class StationComplex:
    """A group of stations sharing a name and location."""
    id: str
    name: str
    daytime_routes: Tuple[str, ...]  # Line codes, first-seen order


@dataclass(frozen=True)
class Station:
    """A single GTFS stop from the station reference data."""
    gtfs_stop_id: str
    line: str  # Line name, e.g. "Broadway - 7Av"
    complex_id: str
    stop_name: str = ""


@dataclass(frozen=True)
class CachedFeed:
    """A decoded feed held by the feed cache."""
    url: str
    value: Any  # gtfs_realtime_pb2.FeedMessage
    created_at: int  # Unix seconds


@dataclass(frozen=True)
class Departure:
    """A predicted train departure from a complex."""
    route_id: str
    time: int  # Unix timestamp
    destination_complex_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "routeId": self.route_id,
            "time": self.time,
            "destinationStationId": self.destination_complex_id,
        }


def _empty_buckets() -> Dict[str, List[Departure]]:
    return {direction: [] for direction in DIRECTIONS}


@dataclass
class LineDepartures:
    """Departures for one line, bucketed by direction ("N" or "S")."""
    line_name: str
    departures: Dict[str, List[Departure]] = field(default_factory=_empty_buckets)

    def sort(self) -> None:
        """Order every direction bucket by departure time."""
        for direction in self.departures:
            self.departures[direction].sort(key=lambda d: d.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.line_name,
            "departures": {
                direction: [d.to_dict() for d in departures]
                for direction, departures in self.departures.items()
            },
        }


@dataclass
class ComplexResponse:
    """Departures for one requested complex."""
    complex_id: Any  # As requested by the caller
    name: str
    lines: List[LineDepartures] = field(default_factory=list)

    def line(self, line_name: str) -> LineDepartures:
        """Get the bucket for a line, appending a new one if not seen yet."""
        for line in self.lines:
            if line.line_name == line_name:
                return line
        line = LineDepartures(line_name=line_name)
        self.lines.append(line)
        return line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "complexId": self.complex_id,
            "name": self.name,
            "lines": [line.to_dict() for line in self.lines],
        }
