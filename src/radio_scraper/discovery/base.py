"""Helpers shared by the listing-page discovery steps."""

from bs4 import Tag

from radio_scraper.models import CategoryLinks


def clean_text(element: Tag) -> str:
    """Return the element's text without tabs, line breaks or edge whitespace."""
    text = element.get_text()
    for ch in ("\t", "\n", "\r"):
        text = text.replace(ch, "")
    return text.strip()


def first_anchor(element: Tag) -> Tag | None:
    """Return the first direct ``<a>`` child, or None."""
    return element.find("a", recursive=False)


def list_items(ul: Tag) -> list[Tag]:
    """Return the direct ``<li>`` children of a list."""
    return ul.find_all("li", recursive=False)


def collect_links(elements: list[Tag], exclude: str | None = None) -> CategoryLinks:
    """Map anchor text to href for every element that has an anchor child.

    Elements without an anchor are skipped. When two anchors share the same
    text the later one wins. Anchors whose text contains ``exclude``
    (case-insensitive) are dropped.
    """
    links: CategoryLinks = {}
    for element in elements:
        anchor = first_anchor(element)
        if anchor is None:
            continue
        name = clean_text(anchor)
        if exclude and exclude.lower() in name.lower():
            continue
        links[name] = anchor.get("href", "")
    return links
