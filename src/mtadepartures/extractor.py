"""Extraction of per-complex departures from decoded feeds."""

import logging
import time
from typing import Iterable, Mapping, Optional

from .destinations import DESTINATION_LOCATION_TO_COMPLEX_ID, destination_complex_id
from .feed_decoder import train_id
from .models import DIRECTIONS, ComplexResponse, Departure
from .parsing import split_stop_id
from .station_index import StationIndex

logger = logging.getLogger(__name__)


def extract(
    feeds: Iterable,
    complex_id,
    into: ComplexResponse,
    station_index: StationIndex,
    destinations: Mapping[str, str] = DESTINATION_LOCATION_TO_COMPLEX_ID,
    now: Optional[int] = None,
) -> ComplexResponse:
    """
    Add departures from a complex to a response.

    Feeds are shared between lines and complexes, so every stop time
    update is checked against the target complex. Departures before
    `now` are dropped. New lines are appended in the order they are first
    seen; departure buckets are left unsorted.

    Args:
        feeds: Decoded FeedMessages.
        complex_id: Complex to collect departures for.
        into: Response to add lines and departures to.
        station_index: Stop lookups.
        destinations: Destination code -> complex id table.
        now: Unix time to drop past departures against. Defaults to now.

    Returns:
        The updated response.
    """
    complex_id = str(complex_id)
    now = int(time.time()) if now is None else now

    for feed in feeds:
        for entity in feed.entity:
            # Skip heartbeats, alerts and vehicle positions
            if not entity.HasField("trip_update") or not entity.trip_update.HasField("trip"):
                continue

            trip_update = entity.trip_update
            route_id = trip_update.trip.route_id
            destination = destination_complex_id(train_id(trip_update.trip), destinations)

            for stop_time_update in trip_update.stop_time_update:
                if not stop_time_update.HasField("departure"):
                    continue
                if not stop_time_update.departure.HasField("time"):
                    continue

                gtfs_stop_id, direction = split_stop_id(stop_time_update.stop_id)
                if station_index.complex_id_for_stop(gtfs_stop_id) != complex_id:
                    continue

                departure_time = stop_time_update.departure.time
                if departure_time < now:
                    continue

                if direction not in DIRECTIONS:
                    logger.debug(f"Skipping stop {stop_time_update.stop_id} with no direction")
                    continue

                station = station_index.station_for_stop(gtfs_stop_id)
                into.line(station.line).departures[direction].append(
                    Departure(
                        route_id=route_id,
                        time=departure_time,
                        destination_complex_id=destination,
                    )
                )

    return into
