import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from selectolax.parser import HTMLParser

from melodyscope.config import WIKI_SUMMARY_LENGTH
from melodyscope.models import AlbumSummary, Image

# Leading integer the way parseInt reads it: optional whitespace and sign, then digits
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")
_NAME_YEAR_RE = re.compile(r"\((\d{4})\)")

# Last.fm wiki dates look like "26 Sep 1969, 00:00"
_PUBLISHED_FORMATS = ("%d %b %Y, %H:%M", "%Y-%m-%d", "%Y-%m-%dT%H:%M:%S")

_ALBUM_SORT_KEYS = ("default", "name", "year")


def _normalize_count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        number = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if not match:
            return None
        number = int(match.group(1))
    else:
        return None
    return number if number >= 0 else None


def normalize_playcount(value: str | int | float | None) -> int | None:
    """
    Converts a playcount field from the API into an integer.

    Args:
        value (str | int | float | None): The raw value, often a numeric string.

    Returns:
        int | None: A non-negative integer, or None if the value is absent or not numeric.
            ``"0"`` and ``0`` both give ``0``.
    """
    return _normalize_count(value)


def normalize_duration(value: str | int | float | None) -> int | None:
    """
    Converts a duration-in-seconds field from the API into an integer.

    Same contract as :func:`normalize_playcount`.
    """
    return _normalize_count(value)


def ensure_list(value: Any) -> list:
    """Normalizes a field the API returns as either one object or a list of them."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def as_mapping(value: Any) -> Mapping:
    """Returns ``value`` if it is a JSON object, otherwise an empty one."""
    return value if isinstance(value, Mapping) else {}


def parse_year(published: str | None) -> int | None:
    """
    Extracts the calendar year from an album's publish date.

    Args:
        published (str | None): The date string, e.g. "26 Sep 1969, 00:00" or "1969-09-26".

    Returns:
        int | None: The year, or None if the string is empty or has no year in it.
    """
    if not published:
        return None
    published = published.strip()
    for fmt in _PUBLISHED_FORMATS:
        try:
            return datetime.strptime(published, fmt).year
        except ValueError:
            continue
    match = _YEAR_RE.search(published)
    return int(match.group(1)) if match else None


def normalize_images(raw: Any) -> list[Image]:
    """Converts Last.fm's ``[{"#text": url, "size": ...}]`` image list into Image records."""
    images: list[Image] = []
    for entry in ensure_list(raw):
        if not isinstance(entry, Mapping):
            continue
        images.append({"url": entry.get("#text") or "", "size": entry.get("size") or ""})
    return images


def get_album_cover(images: list[Image]) -> str:
    """Gets the best available cover URL: large first, then medium, then whatever comes first."""
    for image in images:
        if image["size"] in ("large", "extralarge") and image["url"]:
            return image["url"]
    for image in images:
        if image["size"] == "medium" and image["url"]:
            return image["url"]
    if images and images[0]["url"]:
        return images[0]["url"]
    return ""


def format_duration(duration_seconds: int | None) -> str:
    """Formats a duration in seconds as M:SS, or "-" when unknown."""
    if not duration_seconds:
        return "-"
    minutes, seconds = divmod(duration_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def strip_markup(text: str | None) -> str:
    """Removes HTML tags and decodes entities in a wiki summary."""
    if not text:
        return ""
    return HTMLParser(text).text(separator="").strip()


def summarize_wiki(text: str | None, limit: int = WIKI_SUMMARY_LENGTH) -> str:
    """Strips markup from a wiki summary and truncates it to ``limit`` characters."""
    plain = strip_markup(text)
    if len(plain) > limit:
        return plain[:limit] + "..."
    return plain


def extract_year(album: AlbumSummary) -> int | None:
    """Returns the album's year, falling back to a "(YYYY)" suffix in its name."""
    if album.get("year"):
        return album["year"]
    match = _NAME_YEAR_RE.search(album["name"])
    return int(match.group(1)) if match else None


def _display_name(album: AlbumSummary) -> str:
    year = extract_year(album)
    name = album["name"]
    if year and f"({year})" in name:
        name = name.replace(f"({year})", "").strip()
    return name


def sort_albums(albums: list[AlbumSummary], by: str = "default") -> list[AlbumSummary]:
    """
    Sorts albums for display.

    Args:
        albums (list[AlbumSummary]): Albums in API order.
        by (str): "default" keeps API order, "year" puts the newest first
            (ties by name, unknown years last), "name" sorts alphabetically
            ignoring any "(YYYY)" in the name.

    Returns:
        list[AlbumSummary]: A new sorted list.

    Raises:
        ValueError: If ``by`` is not a known sort key.
    """
    if by not in _ALBUM_SORT_KEYS:
        raise ValueError(f"Unknown album sort key: {by!r}")
    if by == "year":
        return sorted(albums, key=lambda a: (-(extract_year(a) or 0), a["name"].lower()))
    if by == "name":
        return sorted(albums, key=lambda a: _display_name(a).lower())
    return list(albums)
