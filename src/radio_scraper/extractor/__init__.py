"""Station extraction from genre pages."""

from radio_scraper.extractor.category import RadioCategoryExtractor, match_genres

__all__ = [
    "RadioCategoryExtractor",
    "match_genres",
]
