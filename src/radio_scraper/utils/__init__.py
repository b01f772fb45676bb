"""Utility functions and classes."""

from radio_scraper.utils.rate_limiter import RateLimiter
from radio_scraper.utils.url_utils import is_external, make_absolute, slugify

__all__ = [
    "RateLimiter",
    "is_external",
    "make_absolute",
    "slugify",
]
