"""Page fetching for the station directory."""

from radio_scraper.fetcher.base import BaseFetcher, FetchResult
from radio_scraper.fetcher.http_fetcher import HttpFetcher

__all__ = [
    "BaseFetcher",
    "FetchResult",
    "HttpFetcher",
]
