"""Favourites store: the user's favourite tracks and last selected artist."""

import json
import logging
import threading
from collections.abc import Mapping
from typing import Any

from melodyscope import config
from melodyscope.models import FavouriteTrack, StoreState
from melodyscope.storage import FileStorage, Storage
from melodyscope.utils import normalize_duration, normalize_playcount

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("name", "artist", "album", "url")


def serialize_state(favourites: list[FavouriteTrack], artist: str) -> str:
    """Serializes the persisted state as the ``{"state": ..., "version": ...}`` envelope."""
    envelope = {
        "state": {"favourites": favourites, "artist": artist},
        "version": config.STORE_VERSION,
    }
    return json.dumps(envelope)


def _parse_favourite(raw: Any) -> FavouriteTrack | None:
    if not isinstance(raw, Mapping):
        return None
    if not all(isinstance(raw.get(field), str) for field in _REQUIRED_FIELDS):
        return None
    return {
        "name": raw["name"],
        "artist": raw["artist"],
        "album": raw["album"],
        "duration_seconds": normalize_duration(raw.get("duration_seconds")),
        "url": raw["url"],
        "playcount": normalize_playcount(raw.get("playcount")),
    }


def deserialize_state(raw: str | None) -> StoreState | None:
    """
    Parses a persisted envelope.

    Args:
        raw (str | None): The stored JSON string.

    Returns:
        StoreState | None: The state, or None if ``raw`` is missing, malformed
            or written by a different store version. Malformed and duplicate
            favourites are dropped, keeping the first of each key.
    """
    if raw is None:
        return None
    try:
        envelope = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(envelope, Mapping) or envelope.get("version") != config.STORE_VERSION:
        return None
    state = envelope.get("state")
    if not isinstance(state, Mapping):
        return None

    favourites: list[FavouriteTrack] = []
    seen: set[tuple[str, str]] = set()
    raw_favourites = state.get("favourites")
    for item in raw_favourites if isinstance(raw_favourites, list) else []:
        favourite = _parse_favourite(item)
        if favourite is None:
            continue
        key = (favourite["name"], favourite["artist"])
        if key in seen:
            continue
        seen.add(key)
        favourites.append(favourite)

    artist = state.get("artist")
    return {
        "favourites": favourites,
        "artist": artist if isinstance(artist, str) else config.DEFAULT_ARTIST,
    }


class FavouritesStore:
    """
    Favourite tracks plus the current artist, mirrored to storage on every change.

    Favourites are identified by their exact (name, artist) pair; matching is
    case-sensitive and nothing is trimmed. The collection keeps insertion order.
    """

    def __init__(self, storage: Storage | None = None, key: str = config.STORAGE_KEY) -> None:
        self._storage = storage if storage is not None else FileStorage(config.STORAGE_PATH)
        self._key = key
        self._lock = threading.Lock()
        self._favourites: list[FavouriteTrack] = []
        self._artist: str = config.DEFAULT_ARTIST
        self._rehydrate()

    def _rehydrate(self) -> None:
        state = deserialize_state(self._storage.get_item(self._key))
        if state is None:
            logger.debug("No usable persisted state under %r, starting from defaults", self._key)
            return
        self._favourites = state["favourites"]
        self._artist = state["artist"]

    def _persist(self) -> None:
        self._storage.set_item(self._key, serialize_state(self._favourites, self._artist))

    @property
    def favourites(self) -> list[FavouriteTrack]:
        return [dict(f) for f in self._favourites]

    @property
    def artist(self) -> str:
        return self._artist

    def set_artist(self, artist: str) -> None:
        with self._lock:
            self._artist = artist
            self._persist()

    def _index_of(self, name: str, artist: str) -> int | None:
        for index, favourite in enumerate(self._favourites):
            if favourite["name"] == name and favourite["artist"] == artist:
                return index
        return None

    def add_favourite(self, track: FavouriteTrack) -> None:
        """
        Appends ``track`` unless a favourite with the same name and artist already exists.

        The stored entry is normalized the same way persisted entries are on load.

        Raises:
            ValueError: If ``name``, ``artist``, ``album`` or ``url`` is not a string.
        """
        favourite = _parse_favourite(track)
        if favourite is None:
            raise ValueError(f"Favourite track needs string {', '.join(_REQUIRED_FIELDS)}: {track!r}")
        with self._lock:
            if self._index_of(favourite["name"], favourite["artist"]) is not None:
                return
            self._favourites = [*self._favourites, favourite]
            self._persist()

    def remove_favourite(self, name: str, artist: str) -> None:
        """Removes the favourite with exactly this name and artist, if there is one."""
        with self._lock:
            self._favourites = [
                f for f in self._favourites if not (f["name"] == name and f["artist"] == artist)
            ]
            self._persist()

    def is_favourite(self, name: str, artist: str) -> bool:
        return self._index_of(name, artist) is not None

    def clear_favourites(self) -> None:
        with self._lock:
            self._favourites = []
            self._persist()
