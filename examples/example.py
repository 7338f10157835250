"""Example usage of DeparturesClient."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

# Add src to path so we can import mtadepartures
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mtadepartures import ClientConfig, DeparturesError, create_client

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_response(response):
    """
    Display departures for one complex.

    Args:
        response: ComplexResponse from DeparturesClient.departures().
    """
    print(f"\n{'='*70}")
    print(f"{response.name} (complex {response.complex_id})")
    print(f"{'='*70}")

    if not response.lines:
        print("  No departures found")
        return

    for line in response.lines:
        print(f"\n{line.line_name}:")
        for direction, departures in line.departures.items():
            upcoming = ", ".join(
                f"{d.route_id} {datetime.fromtimestamp(d.time).strftime('%H:%M')}"
                for d in departures[:5]
            )
            print(f"  {direction}: {upcoming or '-'}")


def main(argv):
    api_key = os.environ.get("MTA_API_KEY")
    if not api_key:
        print("Set MTA_API_KEY to your MTA API key")
        sys.exit(1)
    if not argv:
        print("Usage: example.py COMPLEX_ID [COMPLEX_ID ...]")
        sys.exit(1)

    try:
        with create_client(api_key, config=ClientConfig.from_env()) as client:
            result = client.departures(argv[0] if len(argv) == 1 else argv)
    except DeparturesError as e:
        logger.error(f"Failed to fetch departures: {e}")
        sys.exit(1)

    for response in result if isinstance(result, list) else [result]:
        print_response(response)


if __name__ == "__main__":
    main(sys.argv[1:])
