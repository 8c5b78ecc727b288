from collections.abc import Mapping
from typing import Any

from melodyscope.exceptions import ValidationError
from melodyscope.models import AlbumDetails, AlbumSummary, TrackSummary
from melodyscope.services.base import BaseService
from melodyscope.utils import (
    as_mapping,
    ensure_list,
    normalize_duration,
    normalize_images,
    normalize_playcount,
    parse_year,
)

METHOD_TOP_ALBUMS = "artist.gettopalbums"
METHOD_ALBUM_INFO = "album.getinfo"
METHOD_ALBUM_SEARCH = "album.search"


def _artist_name(raw: Any, default: str = "") -> str:
    # artist.gettopalbums nests the artist as {"name": ...}; album.search gives a plain string
    if isinstance(raw, Mapping):
        return raw.get("name") or default
    if isinstance(raw, str) and raw:
        return raw
    return default


def _raw_count(value: Any) -> str | None:
    return None if value is None else str(value)


class AlbumService(BaseService):
    """Service for Last.fm album lookups."""

    async def fetch_artist_top_albums(self, artist: str) -> list[AlbumSummary]:
        """
        Fetches an artist's most played albums.

        Raises:
            ValidationError: If ``artist`` is blank.
        """
        if not artist or not artist.strip():
            raise ValidationError("Artist name cannot be empty")
        artist = artist.strip()

        data = await self._call_api(METHOD_TOP_ALBUMS, {"artist": artist})
        top_albums = as_mapping(data.get("topalbums"))
        return [
            self._parse_album_summary(raw, artist)
            for raw in ensure_list(top_albums.get("album"))
            if isinstance(raw, Mapping)
        ]

    async def fetch_album_details(self, artist: str, album: str) -> AlbumDetails | None:
        """
        Fetches an album's details and tracklist.

        Returns:
            AlbumDetails | None: The album, or None if the API has no such album.

        Raises:
            ValidationError: If ``artist`` or ``album`` is blank.
        """
        if not artist or not artist.strip():
            raise ValidationError("Artist name cannot be empty")
        if not album or not album.strip():
            raise ValidationError("Album name cannot be empty")

        data = await self._call_api(
            METHOD_ALBUM_INFO,
            {"artist": artist.strip(), "album": album.strip()},
        )
        raw_album = data.get("album")
        if not isinstance(raw_album, Mapping):
            return None
        return self._parse_album_details(raw_album)

    async def search_albums(self, query: str) -> list[AlbumSummary]:
        """Searches albums by free text. A blank query returns [] without a request."""
        if not query or not query.strip():
            return []

        data = await self._call_api(METHOD_ALBUM_SEARCH, {"album": query})
        matches = as_mapping(as_mapping(data.get("results")).get("albummatches"))
        return [
            self._parse_album_summary(raw)
            for raw in ensure_list(matches.get("album"))
            if isinstance(raw, Mapping)
        ]

    def _parse_album_summary(self, raw: Mapping[str, Any], artist: str = "") -> AlbumSummary:
        return {
            "name": raw.get("name") or "",
            "artist": _artist_name(raw.get("artist"), artist),
            "playcount": normalize_playcount(raw.get("playcount")),
            "url": raw.get("url") or "",
            "images": normalize_images(raw.get("image")),
            "year": None,
        }

    def _parse_album_details(self, raw: Mapping[str, Any]) -> AlbumDetails:
        tracks = raw.get("tracks")
        tracks_raw = tracks.get("track") if isinstance(tracks, Mapping) else None
        parsed_tracks: list[TrackSummary] = [
            {
                "name": track.get("name") or "",
                "duration_seconds": normalize_duration(track.get("duration")),
                "url": track.get("url") or "",
                "playcount": normalize_playcount(track.get("playcount")),
                "artist": None,
            }
            for track in ensure_list(tracks_raw)
            if isinstance(track, Mapping)
        ]

        wiki = raw.get("wiki")
        if not isinstance(wiki, Mapping):
            wiki = {}
        return {
            "name": raw.get("name") or "",
            "artist": _artist_name(raw.get("artist")),
            "url": raw.get("url") or "",
            "images": normalize_images(raw.get("image")),
            "listeners": _raw_count(raw.get("listeners")),
            "playcount": _raw_count(raw.get("playcount")),
            "tracks": parsed_tracks,
            "wiki_summary": wiki.get("summary"),
            "year": parse_year(wiki.get("published")),
        }
