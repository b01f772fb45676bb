import asyncio

import pytest

from radio_scraper.errors import ExtractionError, FetchError
from radio_scraper.extractor import RadioCategoryExtractor, match_genres
from radio_scraper.utils.rate_limiter import RateLimiter
from tests.conftest import BASE_URL, FakeFetcher, read_fixture

GENRES = ["Smooth Jazz", "Jazz", "Pop"]
JAZZ_PAGES = {
    f"{BASE_URL}/stations/jazz/": read_fixture("jazz_page1.html"),
    f"{BASE_URL}/stations/jazz/page2": read_fixture("jazz_page2.html"),
}


def make_extractor(pages, genres=GENRES):
    fetcher = FakeFetcher(pages)
    extractor = RadioCategoryExtractor(
        fetcher, BASE_URL, genres, rate_limiter=RateLimiter(0.0), max_retries=0
    )
    return extractor, fetcher


def test_extract_follows_pagination():
    extractor, fetcher = make_extractor(JAZZ_PAGES)
    jazz = asyncio.run(extractor.extract("Jazz", "/stations/jazz/"))

    assert jazz.name == "Jazz"
    assert [s.name for s in jazz.stations] == ["Blue Note Radio", "Jazz Corner", "Late Night Pop Jazz"]
    assert fetcher.requested == list(JAZZ_PAGES)


def test_extract_station_details():
    extractor, _ = make_extractor(JAZZ_PAGES)
    blue_note = asyncio.run(extractor.extract("Jazz", "/stations/jazz/")).stations[0]

    assert blue_note.website == "http://www.bluenoteradio.example/"
    assert blue_note.genres == ["Smooth Jazz", "Jazz"]
    assert blue_note.listeners == 1204
    assert blue_note.bitrate == 128
    assert [p.format for p in blue_note.playlists] == [".pls", ".m3u", ".xspf"]
    assert blue_note.playlists[0].url.startswith(f"{BASE_URL}/servers/tools/playlistgenerator/")
    assert blue_note.playlists[2].url == "http://stream.bluenote.example:8000/listen.xspf"


def test_extract_tolerates_missing_fields():
    extractor, _ = make_extractor(JAZZ_PAGES)
    stations = asyncio.run(extractor.extract("Jazz", "/stations/jazz/")).stations

    corner, late_night = stations[1], stations[2]
    assert corner.website is None
    assert corner.genres == ["Jazz"]
    assert late_night.bitrate is None
    assert late_night.listeners == 3
    assert late_night.genres == ["Pop", "Jazz"]
    assert [p.format for p in late_night.playlists] == [".m3u"]


def test_page_without_station_table_is_an_extraction_error():
    extractor, _ = make_extractor({f"{BASE_URL}/stations/empty/": "<html><body></body></html>"})
    with pytest.raises(ExtractionError):
        asyncio.run(extractor.extract("Empty", "/stations/empty/"))


def test_fetch_failure_propagates():
    extractor, _ = make_extractor({})
    with pytest.raises(FetchError):
        asyncio.run(extractor.extract("Jazz", "/stations/jazz/"))


def test_pagination_stops_on_revisited_page():
    page = read_fixture("jazz_page1.html").replace("/stations/jazz/page2", "/stations/jazz/")
    extractor, fetcher = make_extractor({f"{BASE_URL}/stations/jazz/": page})
    jazz = asyncio.run(extractor.extract("Jazz", "/stations/jazz/"))

    assert len(jazz.stations) == 2
    assert fetcher.requested == [f"{BASE_URL}/stations/jazz/"]


def test_match_genres_prefers_longer_names():
    assert match_genres("smooth jazz jazz lounge", ["Smooth Jazz", "Jazz"]) == ["Smooth Jazz", "Jazz"]
    assert match_genres("smooth jazz", ["Smooth Jazz", "Jazz"]) == ["Smooth Jazz"]


def test_match_genres_requires_whole_words():
    assert match_genres("jazzy popcorn", ["Jazz", "Pop"]) == []


def test_match_genres_ignores_blank_names():
    # A genre label with blank anchor text is discovered as ""
    assert match_genres("jazz, rock", ["Jazz", ""]) == ["Jazz"]


def test_match_genres_depends_on_order():
    # Shorter name first lets it claim part of the longer one
    assert match_genres("smooth jazz", ["Jazz", "Smooth Jazz"]) == ["Jazz"]
