"""Resumable crawl of the genre index into persisted radio categories."""

import logging
from collections.abc import Callable

from radio_scraper.config import AppConfig
from radio_scraper.discovery import STATION_INDEX_PATH, discover_station_index
from radio_scraper.extractor import RadioCategoryExtractor
from radio_scraper.fetcher import BaseFetcher
from radio_scraper.models import CategoryLinks, RadioCategory, find_category
from radio_scraper.storage import BaseStore, NullStore
from radio_scraper.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# Builds an extractor for genre names ordered longest first
ExtractorFactory = Callable[[list[str]], RadioCategoryExtractor]


def genres_longest_first(links: CategoryLinks) -> list[str]:
    """Order discovered names so longer genres are matched before substrings."""
    return sorted(links, key=len, reverse=True)


def default_extractor_factory(config: AppConfig, fetcher: BaseFetcher) -> ExtractorFactory:
    """Return a factory producing extractors that share one rate limiter."""
    rate_limiter = RateLimiter(config.rate_limit.delay_seconds)

    def factory(genres: list[str]) -> RadioCategoryExtractor:
        return RadioCategoryExtractor(
            fetcher,
            config.root_url,
            genres,
            rate_limiter=rate_limiter,
            max_retries=config.rate_limit.max_retries,
            retry_base_delay=config.rate_limit.retry_base_delay,
        )

    return factory


class CategoryCrawler:
    """Fetch every genre listed on the station index, resuming prior runs.

    Categories already present in the store (matched by name, ignoring
    case) are never fetched again. After each newly fetched category the
    whole list is saved, so an interrupted run loses at most the category
    in flight.
    """

    def __init__(
        self,
        config: AppConfig,
        fetcher: BaseFetcher,
        store: BaseStore | None = None,
        extractor_factory: ExtractorFactory | None = None,
    ):
        self.config = config
        self.fetcher = fetcher
        self.store = store if store is not None else NullStore()
        self.extractor_factory = extractor_factory or default_extractor_factory(config, fetcher)

    async def get_all_radio_categories(self) -> list[RadioCategory]:
        """Discover genres on the ``/stations/`` index and crawl them."""
        soup = await self.fetcher.fetch_document(
            self.config.root_url + STATION_INDEX_PATH,
            self.config.rate_limit.max_retries,
            self.config.rate_limit.retry_base_delay,
        )
        return await self.crawl(discover_station_index(soup))

    async def crawl(self, links: CategoryLinks) -> list[RadioCategory]:
        """Merge ``links`` into the stored categories, fetching only missing ones."""
        categories = await self.store.load()
        genres = genres_longest_first(links)
        extractor = self.extractor_factory(genres)
        logger.debug("Loaded radio categories: %d/%d", len(categories), len(genres))

        for name, link in links.items():
            if find_category(categories, name) is not None:
                continue
            logger.info(
                "Retrieving radio category %d/%d: %s", len(categories) + 1, len(genres), name
            )
            category = await extractor.extract(name, link)
            categories.append(await self.store.enrich(category))
            await self.store.save(categories)

        return categories
