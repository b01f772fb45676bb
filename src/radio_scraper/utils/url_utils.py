"""URL and filename helpers."""

import re
from urllib.parse import urljoin, urlparse


def make_absolute(base_url: str, href: str) -> str:
    """Convert a potentially relative URL to absolute."""
    return urljoin(base_url, href)


def is_external(url: str, base_url: str) -> bool:
    """Check if an absolute URL points away from the directory site."""
    netloc = urlparse(url).netloc.lower()
    return bool(netloc) and netloc != urlparse(base_url).netloc.lower()


def slugify(name: str) -> str:
    """Turn a display name into a filesystem-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "unnamed"
