"""Destination location codes used in NYCT train ids."""

import json
from typing import Dict, Mapping, Optional

from .parsing import destination_location

# Train id destination code -> complex id (partial)
DESTINATION_LOCATION_TO_COMPLEX_ID: Dict[str, str] = {
    "SFT": "635",  # South Ferry
    "242": "293",  # Van Cortlandt Park-242 St
}


def load_destinations(path: str) -> Dict[str, str]:
    """Load a destination code -> complex id table from a JSON object file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Destination table must be a JSON object")
    return {str(code): str(complex_id) for code, complex_id in data.items()}


def destination_complex_id(
    train_id: Optional[str],
    destinations: Mapping[str, str] = DESTINATION_LOCATION_TO_COMPLEX_ID,
) -> Optional[str]:
    """Resolve a train id to its destination complex id, or None if unmapped."""
    code = destination_location(train_id)
    if code is None:
        return None
    return destinations.get(code)
