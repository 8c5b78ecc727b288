"""
This package contains the service modules for the different groups
of Last.fm API methods.
"""

from melodyscope.services.album import AlbumService
from melodyscope.services.base import BaseService
from melodyscope.services.track import TrackService

__all__ = [
    "AlbumService",
    "BaseService",
    "TrackService",
]
