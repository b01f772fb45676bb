"""Extraction of stations and playlists from genre pages."""

import logging
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from radio_scraper.discovery.base import clean_text
from radio_scraper.errors import ExtractionError, FetchError
from radio_scraper.fetcher import BaseFetcher
from radio_scraper.models import Playlist, RadioCategory, RadioStation
from radio_scraper.utils.rate_limiter import RateLimiter
from radio_scraper.utils.url_utils import is_external, make_absolute

logger = logging.getLogger(__name__)

PLAYLIST_FORMATS = (".pls", ".m3u", ".xspf")

_LISTENERS_RE = re.compile(r"(\d[\d,]*)\s+listeners", re.IGNORECASE)
_BITRATE_RE = re.compile(r"(\d+)\s*kbps", re.IGNORECASE)
_GENRES_RE = re.compile(r"genres?:\s*(.*)", re.IGNORECASE | re.DOTALL)


def match_genres(text: str, genres: list[str]) -> list[str]:
    """Find known genre names in free text.

    ``genres`` must be ordered longest first: each match is blanked out of
    the text before shorter names are tried, so "smooth jazz" claims its
    words before "jazz" can. Results are returned in text order.
    """
    remaining = text.lower()
    found: list[tuple[int, str]] = []
    for genre in genres:
        if not genre:
            continue
        pattern = re.compile(rf"(?<!\w){re.escape(genre.lower())}(?!\w)")
        match = pattern.search(remaining)
        if match is None:
            continue
        found.append((match.start(), genre))
        start, end = match.span()
        remaining = remaining[:start] + " " * (end - start) + remaining[end:]
    return [genre for _, genre in sorted(found)]


class RadioCategoryExtractor:
    """Build a RadioCategory from a genre's paginated station listing."""

    def __init__(
        self,
        fetcher: BaseFetcher,
        base_url: str,
        genres: list[str],
        rate_limiter: RateLimiter | None = None,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/") + "/"
        # Longest first; see match_genres
        self.genres = list(genres)
        self.rate_limiter = rate_limiter or RateLimiter()
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def extract(self, name: str, link: str) -> RadioCategory:
        """Fetch every page of the genre listing at ``link``."""
        url: str | None = make_absolute(self.base_url, link)
        visited: set[str] = set()
        stations: list[RadioStation] = []

        while url and url not in visited:
            visited.add(url)
            soup = await self._fetch(url)
            rows = self._station_rows(soup)
            if rows is None:
                if len(visited) == 1:
                    raise ExtractionError(f"No station table for genre '{name}' at {url}")
                break
            for row in rows:
                station = self._parse_station(row, url)
                if station is not None:
                    stations.append(station)
            url = self._next_page(soup, url)

        logger.debug(
            "Extracted %d stations for %s (%d pages)", len(stations), name, len(visited)
        )
        return RadioCategory(name=name, stations=stations)

    async def _fetch(self, url: str) -> BeautifulSoup:
        await self.rate_limiter.wait()
        try:
            soup = await self.fetcher.fetch_document(
                url, self.max_retries, self.retry_base_delay
            )
        except FetchError as e:
            if e.status_code == 429:
                self.rate_limiter.back_off()
                logger.warning(
                    "Rate limited on %s; delay raised to %.1fs",
                    url, self.rate_limiter.delay_seconds,
                )
            raise
        self.rate_limiter.ease_off()
        return soup

    @staticmethod
    def _station_rows(soup: BeautifulSoup) -> list[Tag] | None:
        table = soup.select_one("table.table")
        if table is None:
            return None
        return table.select("tbody tr") or table.find_all("tr")

    def _parse_station(self, row: Tag, page_url: str) -> RadioStation | None:
        """Parse one table row; rows without a station heading are skipped."""
        heading = row.find("h4")
        if heading is None:
            return None
        name = clean_text(heading)
        if not name:
            return None

        description = heading.find_parent("td") or row
        row_text = row.get_text(" ", strip=True)

        return RadioStation(
            name=name,
            website=self._website(description, page_url),
            genres=self._genres(description),
            listeners=_first_int(_LISTENERS_RE, row_text),
            bitrate=_first_int(_BITRATE_RE, row_text),
            playlists=self._playlists(row, page_url),
        )

    def _website(self, cell: Tag, page_url: str) -> str | None:
        for anchor in cell.find_all("a", href=True):
            href = make_absolute(page_url, anchor["href"])
            if is_external(href, self.base_url):
                return href
        return None

    def _genres(self, cell: Tag) -> list[str]:
        match = _GENRES_RE.search(cell.get_text(" ", strip=True))
        if match is None:
            return []
        return match_genres(match.group(1), self.genres)

    @staticmethod
    def _playlists(row: Tag, page_url: str) -> list[Playlist]:
        playlists: list[Playlist] = []
        seen: set[str] = set()
        for anchor in row.find_all("a", href=True):
            href = make_absolute(page_url, anchor["href"])
            fmt = _playlist_format(clean_text(anchor), href)
            if fmt is None or fmt in seen:
                continue
            seen.add(fmt)
            playlists.append(Playlist(format=fmt, url=href))
        return playlists

    @staticmethod
    def _next_page(soup: BeautifulSoup, page_url: str) -> str | None:
        anchor = soup.select_one("ul.pagination li.next a[href]")
        if anchor is None:
            return None
        return make_absolute(page_url, anchor["href"])


def _playlist_format(text: str, href: str) -> str | None:
    """Return the playlist suffix named by the link text or URL, if any."""
    text = text.lower()
    parsed = urlparse(href)
    path = parsed.path.lower()
    query = parsed.query.lower()
    for fmt in PLAYLIST_FORMATS:
        if text.endswith(fmt) or path.endswith(fmt) or query.endswith(fmt):
            return fmt
    return None


def _first_int(pattern: re.Pattern[str], text: str) -> int | None:
    match = pattern.search(text)
    if match is None:
        return None
    return int(match.group(1).replace(",", ""))
