import asyncio
import logging

from melodyscope.config import MAX_ALBUMS_TO_FETCH_YEARS, MAX_TRACKS_TO_FETCH_PLAYCOUNTS
from melodyscope.exceptions import ApiError
from melodyscope.models import AlbumDetails, AlbumSummary, TrackSummary
from melodyscope.services.album import AlbumService
from melodyscope.services.track import TrackService

logger = logging.getLogger(__name__)


class MelodyScopeClient:
    """
    Main client for the Melody Scope API, providing high-level functions to retrieve data.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initializes the MelodyScopeClient.

        All arguments default to the values in :mod:`melodyscope.config`.
        """
        self._album_service = AlbumService(api_key=api_key, base_url=base_url, timeout=timeout)
        self._track_service = TrackService(api_key=api_key, base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "MelodyScopeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch_artist_top_albums(self, artist: str) -> list[AlbumSummary]:
        """
        Retrieves an artist's top albums.
        """
        return await self._album_service.fetch_artist_top_albums(artist)

    async def fetch_album_details(self, artist: str, album: str) -> AlbumDetails | None:
        """
        Retrieves album details, or None if the album does not exist.
        """
        return await self._album_service.fetch_album_details(artist, album)

    async def search_tracks(self, query: str) -> list[TrackSummary]:
        return await self._track_service.search_tracks(query)

    async def search_albums(self, query: str) -> list[AlbumSummary]:
        return await self._album_service.search_albums(query)

    async def fetch_track_info(self, artist: str, track: str) -> int | None:
        """
        Retrieves a track's play count. Never raises.
        """
        return await self._track_service.fetch_track_info(artist, track)

    async def fetch_track_playcounts(
        self,
        artist: str,
        tracks: list[TrackSummary],
        limit: int = MAX_TRACKS_TO_FETCH_PLAYCOUNTS,
    ) -> dict[int, int | None]:
        """
        Looks up play counts for the first ``limit`` tracks concurrently.

        Args:
            artist (str): Artist to look the tracks up under.
            tracks (list[TrackSummary]): The tracklist, usually from album details.
            limit (int): Maximum number of lookups to issue.

        Returns:
            dict[int, int | None]: Play count keyed by each track's index in ``tracks``.
                A failed lookup maps to None and does not affect the others.
        """
        selected = tracks[:limit]
        playcounts = await asyncio.gather(
            *(self._track_service.fetch_track_info(artist, track["name"]) for track in selected)
        )
        return dict(enumerate(playcounts))

    async def fetch_album_years(
        self,
        albums: list[AlbumSummary],
        limit: int = MAX_ALBUMS_TO_FETCH_YEARS,
    ) -> list[AlbumSummary]:
        """
        Fills in the release year of the first ``limit`` albums from their details.

        Returns:
            list[AlbumSummary]: New album records in the same order. Albums whose
                details could not be fetched, or have no year, are left as they were.
        """

        async def _with_year(album: AlbumSummary) -> AlbumSummary:
            try:
                details = await self._album_service.fetch_album_details(album["artist"], album["name"])
            except ApiError as e:
                logger.debug("[fetch_album_years] %s - %s: %s", album["artist"], album["name"], e)
                return album
            if details and details["year"]:
                return {**album, "year": details["year"]}
            return album

        with_years = await asyncio.gather(*(_with_year(album) for album in albums[:limit]))
        return list(with_years) + list(albums[limit:])

    async def close(self) -> None:
        """
        Closes the underlying HTTP client sessions for all services.
        """
        await self._album_service.close()
        await self._track_service.close()
