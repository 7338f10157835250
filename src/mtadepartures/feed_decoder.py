"""GTFS-Realtime decoding with the NYCT subway extension."""

import logging
from typing import Optional

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from .exceptions import FeedDecodeError

logger = logging.getLogger(__name__)

NYCT_PROTO_NAME = "nyct-subway.proto"
NYCT_TRIP_DESCRIPTOR_FIELD = 1001

_Field = descriptor_pb2.FieldDescriptorProto


def _nyct_subway_file() -> descriptor_pb2.FileDescriptorProto:
    """
    Describe the NYCT extension to TripDescriptor.

    Equivalent to the published nyct-subway.proto:

        message NyctTripDescriptor {
            optional string train_id = 1;
            optional bool is_assigned = 2;
            enum Direction { NORTH = 1; EAST = 2; SOUTH = 3; WEST = 4; }
            optional Direction direction = 3;
        }
        extend TripDescriptor {
            optional NyctTripDescriptor nyct_trip_descriptor = 1001;
        }
    """
    proto = descriptor_pb2.FileDescriptorProto(
        name=NYCT_PROTO_NAME,
        package="transit_realtime",
        syntax="proto2",
        dependency=[gtfs_realtime_pb2.DESCRIPTOR.name],
    )

    message = proto.message_type.add(name="NyctTripDescriptor")
    direction = message.enum_type.add(name="Direction")
    for name, number in (("NORTH", 1), ("EAST", 2), ("SOUTH", 3), ("WEST", 4)):
        direction.value.add(name=name, number=number)

    message.field.add(
        name="train_id", number=1, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL
    )
    message.field.add(
        name="is_assigned", number=2, type=_Field.TYPE_BOOL, label=_Field.LABEL_OPTIONAL
    )
    message.field.add(
        name="direction",
        number=3,
        type=_Field.TYPE_ENUM,
        label=_Field.LABEL_OPTIONAL,
        type_name=".transit_realtime.NyctTripDescriptor.Direction",
    )

    proto.extension.add(
        name="nyct_trip_descriptor",
        number=NYCT_TRIP_DESCRIPTOR_FIELD,
        type=_Field.TYPE_MESSAGE,
        label=_Field.LABEL_OPTIONAL,
        type_name=".transit_realtime.NyctTripDescriptor",
        extendee=".transit_realtime.TripDescriptor",
    )
    return proto


def _register_nyct_extension():
    pool = descriptor_pool.Default()
    try:
        pool.FindFileByName(NYCT_PROTO_NAME)
    except KeyError:
        pool.AddSerializedFile(_nyct_subway_file().SerializeToString())

    extension = pool.FindExtensionByName("transit_realtime.nyct_trip_descriptor")
    # Extension values need a concrete message class
    message_factory.GetMessageClass(extension.message_type)
    return extension


# Field descriptor for trip.Extensions[...] / trip.HasExtension(...)
NYCT_TRIP_DESCRIPTOR = _register_nyct_extension()


def decode_feed(raw: bytes) -> gtfs_realtime_pb2.FeedMessage:
    """
    Decode a GTFS-Realtime payload.

    Args:
        raw: Raw protobuf bytes.

    Returns:
        FeedMessage, with NYCT trip descriptors readable through train_id().

    Raises:
        FeedDecodeError: If the payload is not a valid feed message.
    """
    feed = gtfs_realtime_pb2.FeedMessage()
    try:
        feed.ParseFromString(raw)
    except DecodeError as e:
        logger.error(f"Failed to decode feed ({len(raw)} bytes): {e}")
        raise FeedDecodeError(f"Malformed feed payload: {e}") from e
    logger.debug(f"Decoded feed with {len(feed.entity)} entities")
    return feed


def train_id(trip: gtfs_realtime_pb2.TripDescriptor) -> Optional[str]:
    """Get the NYCT train id of a trip, or None if the trip has no NYCT descriptor."""
    if not trip.HasExtension(NYCT_TRIP_DESCRIPTOR):
        return None
    return trip.Extensions[NYCT_TRIP_DESCRIPTOR].train_id
