import os
from pathlib import Path

# Base URL for the Last.fm web service
LASTFM_BASE_URL = "https://ws.audioscrobbler.com/2.0/"

# Read once at import; a client instance may override it
LASTFM_API_KEY = os.getenv("LASTFM_API_KEY")

# Request timeout in seconds
REQUEST_TIMEOUT_SECONDS = int(os.getenv("MELODYSCOPE_REQUEST_TIMEOUT_SECONDS", 10))

# Persisted favourites state
STORAGE_PATH = Path(
    os.getenv("MELODYSCOPE_STORAGE_PATH", Path.home() / ".melodyscope" / "storage.json")
)
STORAGE_KEY = "melody-scope-storage"
STORE_VERSION = 0
DEFAULT_ARTIST = os.getenv("MELODYSCOPE_DEFAULT_ARTIST", "The Beatles")

# Fan-out limits
MAX_ALBUMS_TO_FETCH_YEARS = 20
MAX_TRACKS_TO_FETCH_PLAYCOUNTS = 20

# Wiki summaries are cut to this many characters
WIKI_SUMMARY_LENGTH = 500
