from pathlib import Path

import pytest

from radio_scraper.config import AppConfig, FetcherConfig, RateLimitConfig
from radio_scraper.errors import ExtractionError
from radio_scraper.fetcher import BaseFetcher, FetchResult
from radio_scraper.models import RadioCategory, RadioStation
from radio_scraper.storage import BaseStore

BASE_URL = "https://radio.test"
FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def category(name: str, *stations: str) -> RadioCategory:
    return RadioCategory(name=name, stations=[RadioStation(name=s) for s in stations])


class FakeFetcher(BaseFetcher):
    """Serves canned HTML by URL; anything else is a 404."""

    def __init__(self, pages: dict[str, str]):
        super().__init__(FetcherConfig())
        self.pages = pages
        self.requested: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.requested.append(url)
        if url in self.pages:
            return FetchResult(url=url, final_url=url, html=self.pages[url], status_code=200)
        return FetchResult(url=url, final_url=url, html="", status_code=404)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


class FakeExtractor:
    """Extractor factory and extractor in one; records every call."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.genres: list[list[str]] = []
        self.calls: list[tuple[str, str]] = []

    def __call__(self, genres: list[str]) -> "FakeExtractor":
        self.genres.append(genres)
        return self

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def extract(self, name: str, link: str) -> RadioCategory:
        if name == self.fail_on:
            raise ExtractionError(f"boom: {name}")
        self.calls.append((name, link))
        return category(name, f"{name} FM")


class MemoryStore(BaseStore):
    """In-memory store that records each save as a list of names."""

    def __init__(self, categories: list[RadioCategory] | None = None):
        self.categories = list(categories or [])
        self.loads = 0
        self.saves: list[list[str]] = []
        self.enriched: list[str] = []

    async def load(self) -> list[RadioCategory]:
        self.loads += 1
        return [c.model_copy(deep=True) for c in self.categories]

    async def save(self, categories: list[RadioCategory]) -> None:
        self.categories = [c.model_copy(deep=True) for c in categories]
        self.saves.append([c.name for c in categories])

    async def enrich(self, category: RadioCategory) -> RadioCategory:
        self.enriched.append(category.name)
        return category

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.categories]


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        base_url=BASE_URL,
        rate_limit=RateLimitConfig(delay_seconds=0.0, max_retries=0),
    )


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()
