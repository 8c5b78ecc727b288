import logging
from collections.abc import Mapping

from melodyscope.models import TrackSummary
from melodyscope.services.base import BaseService
from melodyscope.utils import as_mapping, ensure_list, normalize_playcount

METHOD_TRACK_SEARCH = "track.search"
METHOD_TRACK_INFO = "track.getinfo"

logger = logging.getLogger(__name__)


class TrackService(BaseService):
    """Service for Last.fm track lookups."""

    async def search_tracks(self, query: str) -> list[TrackSummary]:
        """Searches tracks by free text. A blank query returns [] without a request."""
        if not query or not query.strip():
            return []

        data = await self._call_api(METHOD_TRACK_SEARCH, {"track": query})
        matches = as_mapping(as_mapping(data.get("results")).get("trackmatches"))
        return [
            {
                "name": raw.get("name") or "",
                "duration_seconds": None,
                "url": raw.get("url") or "",
                "playcount": None,
                "artist": raw.get("artist"),
            }
            for raw in ensure_list(matches.get("track"))
            if isinstance(raw, Mapping)
        ]

    async def fetch_track_info(self, artist: str, track: str) -> int | None:
        """
        Fetches a single track's play count.

        This lookup is best-effort: it is run for many tracks at once, so any
        failure is logged and reported as None instead of being raised.

        Returns:
            int | None: The play count, or None if it is unavailable for any reason.
        """
        try:
            data = await self._call_api(METHOD_TRACK_INFO, {"artist": artist, "track": track})
            raw_track = data.get("track")
            if not isinstance(raw_track, Mapping):
                return None
            return normalize_playcount(raw_track.get("playcount"))
        except Exception as e:
            logger.debug("[fetch_track_info] %s - %s: %s", artist, track, e)
            return None
