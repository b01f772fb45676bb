"""Discovery of genre links on the flat ``/stations/`` index page."""

import logging

from bs4 import BeautifulSoup

from radio_scraper.discovery.base import collect_links
from radio_scraper.errors import DiscoveryError
from radio_scraper.models import CategoryLinks

logger = logging.getLogger(__name__)

STATION_INDEX_PATH = "/stations/"
GENRE_LABEL_SELECTOR = "dt.text-capitalize"


def discover_station_index(soup: BeautifulSoup) -> CategoryLinks:
    """Return genre name -> link for every genre label on the index page."""
    labels = soup.select(GENRE_LABEL_SELECTOR)
    if not labels:
        raise DiscoveryError(
            f"No genre labels matching '{GENRE_LABEL_SELECTOR}' on station index"
        )
    links = collect_links(labels)
    logger.debug("Discovered %d genres from %d labels", len(links), len(labels))
    return links
