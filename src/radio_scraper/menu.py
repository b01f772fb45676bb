"""Crawl of the site's top-level navigation menu."""

import logging

from bs4 import Tag

from radio_scraper.config import AppConfig
from radio_scraper.discovery import item_label, item_links, menu_items
from radio_scraper.errors import MalformedMenuItemError, NotFoundError
from radio_scraper.fetcher import BaseFetcher
from radio_scraper.models import CategoryLinks, MenuCategory, RadioCategory, find_category
from radio_scraper.orchestrator import (
    ExtractorFactory,
    default_extractor_factory,
    genres_longest_first,
)
from radio_scraper.storage import BaseStore, NullStore

logger = logging.getLogger(__name__)

LISTEN = "Listen"


class MenuCrawler:
    """Build one MenuCategory per navigation menu entry.

    Only the "Listen" entry fetches genres; every other entry is filled
    with whatever the store already holds.
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

    async def get_all_categories(self, skip_malformed: bool = False) -> list[MenuCategory]:
        """Return every menu entry in page order.

        A menu entry without a label raises MalformedMenuItemError unless
        ``skip_malformed`` is set, in which case it is logged and left out.
        """
        result: list[MenuCategory] = []
        for item in await self._menu_items():
            try:
                result.append(await self._build_menu_category(item))
            except MalformedMenuItemError:
                if not skip_malformed:
                    raise
                logger.warning("Skipping menu item without a label")
        return result

    async def get_listen_category(self) -> MenuCategory:
        return await self.get_menu_category(LISTEN)

    async def get_menu_category(self, name: str) -> MenuCategory:
        """Return the menu entry labelled ``name`` (case-insensitive)."""
        for item in await self._menu_items():
            if item_label(item).lower() == name.lower():
                return await self._build_menu_category(item)
        raise NotFoundError(f"No '{name}' entry in navigation menu")

    async def _menu_items(self) -> list[Tag]:
        soup = await self.fetcher.fetch_document(
            self.config.root_url,
            self.config.rate_limit.max_retries,
            self.config.rate_limit.retry_base_delay,
        )
        return menu_items(soup)

    async def _build_menu_category(self, item: Tag) -> MenuCategory:
        name = item_label(item)
        links = item_links(item)
        subcategories = await self.store.load()
        if name.lower() == LISTEN.lower():
            await self._merge_subcategories(subcategories, links)
        return MenuCategory(name=name, subcategories=subcategories)

    async def _merge_subcategories(
        self, subcategories: list[RadioCategory], links: CategoryLinks
    ) -> None:
        extractor = self.extractor_factory(genres_longest_first(links))
        for name, link in links.items():
            category = find_category(subcategories, name)
            if category is None:
                logger.info("Retrieving Listen subcategory: %s", name)
                category = await extractor.extract(name, link)
            # Reused entries are appended again, so the saved list can hold duplicates
            subcategories.append(await self.store.enrich(category))
            await self.store.save(subcategories)
