"""Real-time feed resolution for subway lines."""

import logging
from typing import Iterable, List

from .exceptions import UnknownLineError

logger = logging.getLogger(__name__)

# MTA real-time feed URL, parameterized by API key and feed id
FEED_URL_TEMPLATE = "http://datamine.mta.info/mta_esi.php?key={api_key}&feed_id={feed_id}"

# Subway line -> real-time feed id
LINE_TO_FEED_ID = {
    "1": "1",
    "2": "1",
    "3": "1",
    "4": "1",
    "5": "1",
    "6": "1",
    "GS": "1",  # 42 St Shuttle
    "S": "1",
    "A": "26",
    "C": "26",
    "E": "26",
    "H": "26",  # Rockaway Park Shuttle
    "FS": "26",  # Franklin Av Shuttle
    "N": "16",
    "Q": "16",
    "R": "16",
    "W": "16",
    "B": "21",
    "D": "21",
    "F": "21",
    "M": "21",
    "L": "2",
    "SI": "11",
    "SIR": "11",
    "G": "31",
    "J": "36",
    "Z": "36",
    "7": "51",
}


def feed_id_for_line(line: str) -> str:
    """
    Get the real-time feed id covering a line.

    Raises:
        UnknownLineError: If no feed covers the line.
    """
    try:
        return LINE_TO_FEED_ID[line]
    except KeyError:
        raise UnknownLineError(line) from None


def feed_url(api_key: str, line: str, template: str = FEED_URL_TEMPLATE) -> str:
    """
    Build the feed URL for a line.

    Args:
        api_key: MTA API key.
        line: Line code (e.g. "A", "7").
        template: URL template with {api_key} and {feed_id} fields.

    Returns:
        Feed URL.

    Raises:
        UnknownLineError: If no feed covers the line.
    """
    return template.format(api_key=api_key, feed_id=feed_id_for_line(line))


def feed_urls(api_key: str, lines: Iterable[str], template: str = FEED_URL_TEMPLATE) -> List[str]:
    """Resolve lines to distinct feed URLs, in first-seen order."""
    urls = list(dict.fromkeys(feed_url(api_key, line, template) for line in lines))
    logger.debug(f"Resolved lines to {len(urls)} feed(s)")
    return urls
