"""JSON-file store for crawled categories and downloaded playlists."""

import logging
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import TypeAdapter, ValidationError

from radio_scraper.errors import StoreError
from radio_scraper.fetcher import BaseFetcher
from radio_scraper.models import RadioCategory
from radio_scraper.storage.base import BaseStore
from radio_scraper.utils.rate_limiter import RateLimiter
from radio_scraper.utils.url_utils import slugify

logger = logging.getLogger(__name__)

CATEGORIES_FILE = "categories.json"
PLAYLISTS_DIR = "playlists"

_categories = TypeAdapter(list[RadioCategory])


class JsonStore(BaseStore):
    """Keep the category list in ``<base_directory>/categories.json``.

    Playlist files live under ``<base_directory>/playlists/<category>/``,
    one ``<station><format>`` file per station and playlist format. With a
    fetcher, ``enrich`` downloads the ones that are missing; without one it
    only attaches files already on disk.
    """

    def __init__(
        self,
        base_directory: Path,
        fetcher: BaseFetcher | None = None,
        rate_limiter: RateLimiter | None = None,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ):
        self.base_directory = Path(base_directory)
        self.categories_path = self.base_directory / CATEGORIES_FILE
        self.playlists_dir = self.base_directory / PLAYLISTS_DIR
        self.fetcher = fetcher
        self.rate_limiter = rate_limiter or RateLimiter()
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def load(self) -> list[RadioCategory]:
        """Read persisted categories; a missing file means a fresh crawl."""
        if not await aiofiles.os.path.exists(self.categories_path):
            return []
        try:
            async with aiofiles.open(self.categories_path, "rb") as f:
                content = await f.read()
        except OSError as e:
            raise StoreError(f"Cannot read {self.categories_path}: {e}") from e
        try:
            categories = _categories.validate_json(content)
        except ValidationError as e:
            raise StoreError(f"Corrupt category file {self.categories_path}: {e}") from e
        logger.debug("Loaded %d categories from %s", len(categories), self.categories_path)
        return categories

    async def save(self, categories: list[RadioCategory]) -> None:
        """Overwrite the category file with the full list."""
        tmp_path = self.categories_path.with_name(CATEGORIES_FILE + ".tmp")
        try:
            await aiofiles.os.makedirs(self.base_directory, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(_categories.dump_json(categories, indent=2))
            # Readers see either the previous file or the new one
            await aiofiles.os.replace(tmp_path, self.categories_path)
        except OSError as e:
            raise StoreError(f"Cannot write {self.categories_path}: {e}") from e
        logger.debug("Saved %d categories to %s", len(categories), self.categories_path)

    async def enrich(self, category: RadioCategory) -> RadioCategory:
        """Return a copy whose playlists point at their files on disk.

        Files already present are reused. Missing ones are downloaded when
        the store has a fetcher; a playlist whose download fails keeps
        ``local_path`` unset.
        """
        enriched = category.model_copy(deep=True)
        for station in enriched.stations:
            for playlist in station.playlists:
                path = self.playlist_path(category.name, station.name, playlist.format)
                if not await aiofiles.os.path.isfile(path):
                    if self.fetcher is None or not await self._download(playlist.url, path):
                        continue
                playlist.local_path = str(path)
        return enriched

    def playlist_path(self, category_name: str, station_name: str, fmt: str) -> Path:
        """Location of a downloaded playlist file."""
        return self.playlists_dir / slugify(category_name) / f"{slugify(station_name)}{fmt}"

    async def _download(self, url: str, path: Path) -> bool:
        await self.rate_limiter.wait()
        result = await self.fetcher.fetch_with_retry(url, self.max_retries, self.retry_base_delay)
        if not result.success:
            logger.warning(
                "Could not download playlist %s: %s", url, result.error or f"HTTP {result.status_code}"
            )
            return False
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(result.html)
        except OSError as e:
            raise StoreError(f"Cannot write playlist {path}: {e}") from e
        logger.debug("Downloaded playlist %s to %s", url, path)
        return True
