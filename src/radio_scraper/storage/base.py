"""Base class for persisted crawl state."""

from abc import ABC, abstractmethod

from radio_scraper.models import RadioCategory


class BaseStore(ABC):
    """Durable list of completed categories."""

    @abstractmethod
    async def load(self) -> list[RadioCategory]:
        """Return the persisted categories in stored order."""
        ...

    @abstractmethod
    async def save(self, categories: list[RadioCategory]) -> None:
        """Replace the persisted state with ``categories``."""
        ...

    @abstractmethod
    async def enrich(self, category: RadioCategory) -> RadioCategory:
        """Attach previously downloaded playlist files to a fresh category."""
        ...


class NullStore(BaseStore):
    """Store used when no storage directory is configured.

    Every crawl starts empty and nothing is written, so runs are not
    resumable.
    """

    async def load(self) -> list[RadioCategory]:
        return []

    async def save(self, categories: list[RadioCategory]) -> None:
        pass

    async def enrich(self, category: RadioCategory) -> RadioCategory:
        return category
