"""
Melody Scope - A Python library for browsing albums, tracks and favourites
through the Last.fm web API.
"""

import logging

from melodyscope.client import MelodyScopeClient
from melodyscope.exceptions import (
    ApiError,
    ConfigurationError,
    EnvelopeError,
    ErrorKind,
    HttpStatusError,
    TransportError,
    ValidationError,
    handle_api_error,
)
from melodyscope.models import AlbumDetails, AlbumSummary, FavouriteTrack, Image, TrackSummary
from melodyscope.storage import FileStorage, MemoryStorage
from melodyscope.store import FavouritesStore

__all__ = [
    "MelodyScopeClient",
    "FavouritesStore",
    "FileStorage",
    "MemoryStorage",
    "ApiError",
    "ConfigurationError",
    "EnvelopeError",
    "ErrorKind",
    "HttpStatusError",
    "TransportError",
    "ValidationError",
    "handle_api_error",
    "AlbumDetails",
    "AlbumSummary",
    "FavouriteTrack",
    "Image",
    "TrackSummary",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
