"""Parsers for identifiers found in NYCT real-time feeds."""

from typing import Optional, Tuple


def split_stop_id(stop_id: str) -> Tuple[str, str]:
    """
    Split a feed stop id into its GTFS stop id and direction.

    The last character is the direction ("N" or "S"), the rest is the
    GTFS stop id: "101N" -> ("101", "N").

    Args:
        stop_id: Stop id as it appears in a stop time update.

    Returns:
        (gtfs_stop_id, direction) tuple. Both are empty for an empty stop id.
    """
    return stop_id[:-1], stop_id[-1:]


def destination_location(train_id: Optional[str]) -> Optional[str]:
    """
    Extract the destination location code from an NYCT train id.

    Train ids are space separated tokens whose last token is
    "origin/destination", e.g. "01 1234+ 242/SFT" -> "SFT".

    Args:
        train_id: The train_id from the NYCT trip descriptor.

    Returns:
        The destination code, or None if the train id has no "/" part.
    """
    if not train_id:
        return None
    parts = train_id.split(" ")[-1].split("/")
    if len(parts) < 2:
        return None
    return parts[1]
