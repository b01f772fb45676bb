"""Discovery of the top-level navigation menu and its submenus."""

from bs4 import BeautifulSoup, Tag

from radio_scraper.discovery.base import clean_text, collect_links, list_items
from radio_scraper.errors import DiscoveryError, MalformedMenuItemError
from radio_scraper.models import CategoryLinks

MENU_SELECTOR = "ul.nav.navbar-nav"
# Submenu entries linking to the full genre index rather than a genre
EXCLUDED_LINK_TEXT = "more genres"


def menu_items(soup: BeautifulSoup) -> list[Tag]:
    """Return the ``<li>`` entries of the primary navigation list."""
    menu = soup.select_one(MENU_SELECTOR)
    if menu is None:
        raise DiscoveryError(f"No navigation menu matching '{MENU_SELECTOR}'")
    return list_items(menu)


def item_label(item: Tag) -> str:
    """Return the first non-blank label among the item's direct anchors."""
    for anchor in item.find_all("a", recursive=False):
        label = clean_text(anchor)
        if label:
            return label
    raise MalformedMenuItemError("Unable to find non-empty menu item label")


def item_links(item: Tag) -> CategoryLinks:
    """Return name -> link for the item's nested sublist, if it has one."""
    sublist = item.find("ul", recursive=False)
    if sublist is None:
        return {}
    return collect_links(list_items(sublist), exclude=EXCLUDED_LINK_TEXT)
