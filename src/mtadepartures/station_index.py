"""Station reference data loader and lookup index."""

import io
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd
import requests

from .exceptions import UnknownComplexError
from .models import Station, StationComplex

logger = logging.getLogger(__name__)

# MTA station reference data
MTA_STATIONS_URL = "http://web.mta.info/developers/data/nyct/subway/Stations.csv"

# Stations.csv column -> field name
STATION_COLUMNS = {
    "GTFS Stop ID": "gtfs_stop_id",
    "Complex ID": "complex_id",
    "Line": "line",
    "Stop Name": "stop_name",
    "Daytime Routes": "daytime_routes",
}


class StationIndex:
    """
    Read-only lookup tables over the station reference data.

    Built once, then shared freely: the tables are exposed as read-only
    mappings and never change after construction.
    """

    def __init__(self, stations: Iterable[Station], complexes: Iterable[StationComplex]):
        stations_by_stop: Dict[str, Station] = {}
        for station in stations:
            stations_by_stop[station.gtfs_stop_id] = station

        self._stations = MappingProxyType(stations_by_stop)
        self._complex_ids = MappingProxyType(
            {stop_id: station.complex_id for stop_id, station in stations_by_stop.items()}
        )
        self._complexes = MappingProxyType({str(c.id): c for c in complexes})

    def complex_id_for_stop(self, gtfs_stop_id: str) -> Optional[str]:
        return self._complex_ids.get(gtfs_stop_id)

    def station_for_stop(self, gtfs_stop_id: str) -> Optional[Station]:
        return self._stations.get(gtfs_stop_id)

    def complex(self, complex_id) -> StationComplex:
        """
        Get a complex by id.

        Args:
            complex_id: Complex id, as int or str.

        Raises:
            UnknownComplexError: If the complex is not in the reference data.
        """
        key = str(complex_id)
        if key not in self._complexes:
            raise UnknownComplexError(complex_id)
        return self._complexes[key]

    @property
    def stations(self) -> Mapping[str, Station]:
        return self._stations

    @property
    def complexes(self) -> Mapping[str, StationComplex]:
        return self._complexes

    def __len__(self) -> int:
        return len(self._stations)


class StationLoader:
    """Loads the MTA Stations.csv file into a StationIndex."""

    def __init__(self, stations_url: str = MTA_STATIONS_URL, timeout: float = 30.0):
        self.stations_url = stations_url
        self.timeout = timeout

    def load_from_url(self) -> StationIndex:
        """Download and index the station reference data."""
        logger.info(f"Downloading station data from {self.stations_url}")
        try:
            response = requests.get(self.stations_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to load station data: {e}")
            raise
        return self.load_from_csv(response.text)

    def load_from_file(self, path: str) -> StationIndex:
        """Index station reference data from a local Stations.csv."""
        logger.info(f"Loading station data from {path}")
        return self.load_from_frame(_read_stations(path))

    def load_from_csv(self, csv_content: str) -> StationIndex:
        """Index station reference data from CSV text."""
        return self.load_from_frame(_read_stations(io.StringIO(csv_content)))

    def load_from_frame(self, frame: pd.DataFrame) -> StationIndex:
        """Build the index from a Stations.csv data frame."""
        missing = [column for column in STATION_COLUMNS if column not in frame.columns]
        if missing:
            raise ValueError(f"Station data is missing columns: {', '.join(missing)}")

        frame = frame[list(STATION_COLUMNS)].rename(columns=STATION_COLUMNS)

        stations: List[Station] = []
        names: Dict[str, List[str]] = {}
        routes: Dict[str, List[str]] = {}

        for row in frame.itertuples(index=False):
            stop_id = row.gtfs_stop_id.strip()
            complex_id = row.complex_id.strip()
            if not stop_id or not complex_id:
                continue

            stations.append(
                Station(
                    gtfs_stop_id=stop_id,
                    line=row.line.strip(),
                    complex_id=complex_id,
                    stop_name=row.stop_name.strip(),
                )
            )

            # Complex name and routes come from its member stations
            complex_names = names.setdefault(complex_id, [])
            if row.stop_name.strip() and row.stop_name.strip() not in complex_names:
                complex_names.append(row.stop_name.strip())
            complex_routes = routes.setdefault(complex_id, [])
            for route in row.daytime_routes.split():
                if route not in complex_routes:
                    complex_routes.append(route)

        complexes = [
            StationComplex(
                id=complex_id,
                name=" / ".join(names[complex_id]),
                daytime_routes=tuple(routes[complex_id]),
            )
            for complex_id in names
        ]

        index = StationIndex(stations, complexes)
        logger.info(f"Loaded {len(index)} stations in {len(complexes)} complexes")
        return index


def _read_stations(source: Union[str, io.StringIO]) -> pd.DataFrame:
    return pd.read_csv(source, dtype=str, keep_default_na=False)
