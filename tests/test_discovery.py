import pytest
from bs4 import BeautifulSoup

from radio_scraper.discovery import discover_station_index, item_label, item_links, menu_items
from radio_scraper.errors import DiscoveryError, MalformedMenuItemError
from tests.conftest import read_fixture


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def test_station_index_maps_genre_labels_to_links():
    links = discover_station_index(soup_of(read_fixture("station_index.html")))
    assert links == {
        "Jazz": "/stations/jazz/",
        "Smooth Jazz": "/stations/smooth%20jazz/",
        "Pop": "/stations/pop/",
    }
    # Page order is kept
    assert list(links) == ["Jazz", "Smooth Jazz", "Pop"]


def test_station_index_duplicate_labels_last_wins():
    html = """
    <dl>
      <dt class="text-capitalize"><a href="/stations/rock/">Rock</a></dt>
      <dt class="text-capitalize"><a href="/stations/rock-2/">Rock</a></dt>
    </dl>
    """
    assert discover_station_index(soup_of(html)) == {"Rock": "/stations/rock-2/"}


def test_station_index_only_uses_direct_anchor_children():
    html = '<dl><dt class="text-capitalize"><span><a href="/x/">Nested</a></span></dt></dl>'
    assert discover_station_index(soup_of(html)) == {}


def test_station_index_without_labels_is_a_discovery_error():
    with pytest.raises(DiscoveryError):
        discover_station_index(soup_of("<html><body><p>Maintenance</p></body></html>"))


def test_menu_items_and_labels():
    items = menu_items(soup_of(read_fixture("home.html")))
    assert [item_label(item) for item in items] == ["Home", "Listen", "Broadcast"]


def test_menu_links_exclude_more_genres_and_skip_dividers():
    listen = menu_items(soup_of(read_fixture("home.html")))[1]
    assert item_links(listen) == {
        "Jazz": "/stations/jazz/",
        "Smooth Jazz": "/stations/smooth%20jazz/",
        "Pop": "/stations/pop/",
    }


@pytest.mark.parametrize("text", ["More Genres", "MORE GENRES...", "Even more genres here"])
def test_more_genres_filter_is_case_insensitive(text):
    html = f"""
    <ul class="nav navbar-nav">
      <li><a href="#">Listen</a>
        <ul><li><a href="/stations/">{text}</a></li><li><a href="/stations/ska/">Ska</a></li></ul>
      </li>
    </ul>
    """
    item = menu_items(soup_of(html))[0]
    assert item_links(item) == {"Ska": "/stations/ska/"}


def test_menu_item_without_sublist_has_no_links():
    home = menu_items(soup_of(read_fixture("home.html")))[0]
    assert item_links(home) == {}


def test_missing_navigation_menu_is_a_discovery_error():
    with pytest.raises(DiscoveryError):
        menu_items(soup_of(read_fixture("station_index.html")))


@pytest.mark.parametrize(
    "item_html",
    [
        "<li><span>No anchor</span></li>",
        "<li><a href='#'>\n\t  </a></li>",
    ],
)
def test_menu_item_without_label_is_malformed(item_html):
    item = soup_of(f'<ul class="nav navbar-nav">{item_html}</ul>').select_one("li")
    with pytest.raises(MalformedMenuItemError):
        item_label(item)
