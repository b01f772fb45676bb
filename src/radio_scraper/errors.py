"""Exceptions raised while crawling and persisting radio categories."""


class RadioScraperError(Exception):
    """Base class for all radio-scraper errors."""


class DiscoveryError(RadioScraperError):
    """A listing page lacks the container the discovery step relies on."""


class MalformedMenuItemError(RadioScraperError):
    """A navigation menu item has no usable label."""


class NotFoundError(RadioScraperError):
    """A requested menu branch does not exist."""


class FetchError(RadioScraperError):
    """A page could not be retrieved."""

    def __init__(self, url: str, message: str, status_code: int = 0):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.status_code = status_code


class ExtractionError(RadioScraperError):
    """A genre page could not be turned into a category."""


class StoreError(RadioScraperError):
    """Persisted categories could not be read or written."""
