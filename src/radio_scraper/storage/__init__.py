"""Persistence of crawled categories."""

from pathlib import Path

from radio_scraper.config import RateLimitConfig
from radio_scraper.fetcher import BaseFetcher
from radio_scraper.storage.base import BaseStore, NullStore
from radio_scraper.storage.json_store import JsonStore
from radio_scraper.utils.rate_limiter import RateLimiter


def create_store(
    directory: Path | None,
    fetcher: BaseFetcher | None = None,
    rate_limit: RateLimitConfig | None = None,
) -> BaseStore:
    """Return a JsonStore for ``directory``, or a NullStore when unset.

    Given a fetcher, the store downloads missing playlist files, paced and
    retried according to ``rate_limit``.
    """
    if directory is None:
        return NullStore()
    rate_limit = rate_limit or RateLimitConfig()
    return JsonStore(
        directory,
        fetcher,
        rate_limiter=RateLimiter(rate_limit.delay_seconds),
        max_retries=rate_limit.max_retries,
        retry_base_delay=rate_limit.retry_base_delay,
    )


__all__ = [
    "BaseStore",
    "JsonStore",
    "NullStore",
    "create_store",
]
