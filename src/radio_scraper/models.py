"""Data model for the crawled station hierarchy."""

from pydantic import BaseModel, Field

# Ordered name -> href pairs produced by discovery; never persisted.
CategoryLinks = dict[str, str]


class Playlist(BaseModel):
    """A downloadable playlist for a station stream."""

    format: str  # File suffix, e.g. ".pls"
    url: str
    local_path: str | None = None


class RadioStation(BaseModel):
    """A single station listed under a genre."""

    name: str
    website: str | None = None
    genres: list[str] = Field(default_factory=list)
    listeners: int | None = None
    bitrate: int | None = None  # kbps
    playlists: list[Playlist] = Field(default_factory=list)


class RadioCategory(BaseModel):
    """A genre and every station crawled for it."""

    name: str
    stations: list[RadioStation] = Field(default_factory=list)

    def matches(self, name: str) -> bool:
        """Case-insensitive name identity used for merging."""
        return self.name.lower() == name.lower()


class MenuCategory(BaseModel):
    """A top-level navigation menu entry and its categories."""

    name: str
    subcategories: list[RadioCategory] = Field(default_factory=list)


def find_category(categories: list[RadioCategory], name: str) -> RadioCategory | None:
    """Return the first category whose name matches ``name`` ignoring case."""
    for category in categories:
        if category.matches(name):
            return category
    return None
