"""Discovery of category links on directory listing pages."""

from radio_scraper.discovery.menu import item_label, item_links, menu_items
from radio_scraper.discovery.station_index import (
    STATION_INDEX_PATH,
    discover_station_index,
)

__all__ = [
    "STATION_INDEX_PATH",
    "discover_station_index",
    "item_label",
    "item_links",
    "menu_items",
]
