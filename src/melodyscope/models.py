from typing import TypedDict


class Image(TypedDict):
    """Represents one size variant of an album or track image."""

    url: str
    size: str  # e.g., "small", "medium", "large", "extralarge"


class TrackSummary(TypedDict):
    """Represents a track, either in an album's tracklist or in search results."""

    name: str
    duration_seconds: int | None
    url: str
    playcount: int | None
    artist: str | None  # Only set for cross-artist search results


class AlbumSummary(TypedDict):
    """Represents an album as listed by top-albums and album search."""

    name: str
    artist: str
    playcount: int | None
    url: str
    images: list[Image]
    year: int | None


class AlbumDetails(TypedDict):
    """Represents a full album with its tracklist."""

    name: str
    artist: str
    url: str
    images: list[Image]
    listeners: str | None  # Kept as the raw string from the API
    playcount: str | None  # Kept as the raw string from the API
    tracks: list[TrackSummary]
    wiki_summary: str | None  # Raw text, may contain markup
    year: int | None


class FavouriteTrack(TypedDict):
    """Represents a track the user marked as a favourite.

    Identity is the (name, artist) pair.
    """

    name: str
    artist: str
    album: str
    duration_seconds: int | None
    url: str
    playcount: int | None


class StoreState(TypedDict):
    """The persisted part of the favourites store."""

    favourites: list[FavouriteTrack]
    artist: str
