"""Shared fixtures for mtadepartures tests."""

import sys
from pathlib import Path

# Add src to path so we can import mtadepartures
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from google.transit import gtfs_realtime_pb2

from mtadepartures.feed_decoder import NYCT_TRIP_DESCRIPTOR
from mtadepartures.station_index import StationLoader

API_KEY = "KEY"

# Trimmed Stations.csv: complex 100 has two stops on different lines,
# complex 300 shares feed 1 with complex 100.
STATIONS_CSV = """Station ID,Complex ID,GTFS Stop ID,Division,Line,Stop Name,Borough,Daytime Routes,Structure,GTFS Latitude,GTFS Longitude
1,100,101,IRT,Broadway - 7Av,Times Sq-42 St,M,1 2 3,Subway,40.75529,-73.987495
2,100,102,IRT,Flushing,Times Sq-42 St,M,7,Subway,40.755477,-73.987691
3,200,201,IND,8th Av - Fulton St,42 St-Port Authority Bus Terminal,M,A C E,Subway,40.757308,-73.989735
4,300,301,IRT,Lexington Av,Grand Central-42 St,M,4 5 6,Subway,40.751776,-73.976848
"""

FEED_1_URL = "http://datamine.mta.info/mta_esi.php?key=KEY&feed_id=1"
FEED_26_URL = "http://datamine.mta.info/mta_esi.php?key=KEY&feed_id=26"
FEED_51_URL = "http://datamine.mta.info/mta_esi.php?key=KEY&feed_id=51"


def load_index():
    """Index the trimmed station data."""
    return StationLoader().load_from_csv(STATIONS_CSV)


def build_feed(trips, heartbeat=False) -> gtfs_realtime_pb2.FeedMessage:
    """
    Build a feed message.

    Args:
        trips: Dicts with route_id, optional train_id and stops, a list of
            (stop_id, departure_time or None) pairs.
        heartbeat: Also add an entity with no trip update.
    """
    feed = gtfs_realtime_pb2.FeedMessage()
    feed.header.gtfs_realtime_version = "1.0"
    feed.header.timestamp = 1

    if heartbeat:
        entity = feed.entity.add()
        entity.id = "heartbeat"
        entity.vehicle.current_stop_sequence = 1

    for i, trip in enumerate(trips):
        entity = feed.entity.add()
        entity.id = str(i)
        trip_update = entity.trip_update
        trip_update.trip.trip_id = f"trip-{i}"
        trip_update.trip.route_id = trip["route_id"]
        if trip.get("train_id") is not None:
            trip_update.trip.Extensions[NYCT_TRIP_DESCRIPTOR].train_id = trip["train_id"]

        for stop_id, departure_time in trip["stops"]:
            stop_time_update = trip_update.stop_time_update.add()
            stop_time_update.stop_id = stop_id
            if departure_time is None:
                stop_time_update.arrival.time = 1
            else:
                stop_time_update.departure.time = departure_time

    return feed


def build_payload(trips, heartbeat=False) -> bytes:
    return build_feed(trips, heartbeat).SerializeToString()
