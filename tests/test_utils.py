import pytest

from melodyscope.utils import (
    as_mapping,
    ensure_list,
    extract_year,
    format_duration,
    get_album_cover,
    normalize_duration,
    normalize_images,
    normalize_playcount,
    parse_year,
    sort_albums,
    strip_markup,
    summarize_wiki,
)


def make_album(name, year=None):
    return {"name": name, "artist": "Artist", "playcount": None, "url": "", "images": [], "year": year}


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1234567", 1234567),
        (987654, 987654),
        ("0", 0),
        (0, 0),
        ("  42", 42),
        ("12abc", 12),
        (259.9, 259),
    ],
)
def test_normalize_playcount_valid_input(value, expected):
    """Test normalize_playcount with numeric strings and numbers."""
    assert normalize_playcount(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, "invalid", "", "   ", "-5", -5, float("nan"), float("inf"), True, [], {}],
)
def test_normalize_playcount_invalid_input(value):
    """Test normalize_playcount returns None for absent or non-numeric values."""
    assert normalize_playcount(value) is None


@pytest.mark.parametrize("value", [0, 1, 259, 1_000_000])
def test_normalize_playcount_string_and_number_agree(value):
    assert normalize_playcount(value) == normalize_playcount(str(value)) == value


def test_normalize_zero_is_not_missing():
    """Zero is a valid value, distinct from absent."""
    assert normalize_playcount("0") == 0
    assert normalize_duration(0) == 0
    assert normalize_duration("0") is not None


def test_normalize_duration():
    assert normalize_duration("300") == 300
    assert normalize_duration("invalid") is None
    assert normalize_duration(None) is None


def test_ensure_list():
    assert ensure_list(None) == []
    assert ensure_list({"name": "Single"}) == [{"name": "Single"}]
    tracks = [{"name": "A"}, {"name": "B"}]
    assert ensure_list(tracks) is tracks


@pytest.mark.parametrize(
    "published, expected",
    [
        ("26 Sep 1969, 00:00", 1969),
        ("1969-09-26", 1969),
        ("2020-01-15T10:00:00", 2020),
        ("Released in 1997", 1997),
        ("", None),
        (None, None),
        ("no date here", None),
        ("12345", None),
    ],
)
def test_parse_year(published, expected):
    assert parse_year(published) == expected


def test_normalize_images():
    raw = [
        {"#text": "https://img/small.png", "size": "small"},
        {"#text": "", "size": "large"},
        "garbage",
    ]
    assert normalize_images(raw) == [
        {"url": "https://img/small.png", "size": "small"},
        {"url": "", "size": "large"},
    ]
    assert normalize_images(None) == []


def test_get_album_cover_prefers_large():
    images = [
        {"url": "s", "size": "small"},
        {"url": "m", "size": "medium"},
        {"url": "xl", "size": "extralarge"},
    ]
    assert get_album_cover(images) == "xl"


def test_get_album_cover_falls_back():
    assert get_album_cover([{"url": "s", "size": "small"}, {"url": "m", "size": "medium"}]) == "m"
    assert get_album_cover([{"url": "s", "size": "small"}]) == "s"
    assert get_album_cover([{"url": "", "size": "large"}]) == ""
    assert get_album_cover([]) == ""


@pytest.mark.parametrize(
    "seconds, expected",
    [(259, "4:19"), (60, "1:00"), (5, "0:05"), (0, "-"), (None, "-")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_strip_markup():
    text = 'Great <b>album</b> &amp; more. <a href="https://www.last.fm/music/x">Read more on Last.fm</a>'
    assert strip_markup(text) == "Great album & more. Read more on Last.fm"
    assert strip_markup(None) == ""


def test_summarize_wiki_truncates():
    text = "<p>" + "a" * 600 + "</p>"
    summary = summarize_wiki(text)
    assert summary == "a" * 500 + "..."
    assert summarize_wiki("short <i>text</i>") == "short text"
    assert summarize_wiki("abcdef", limit=3) == "abc..."


def test_extract_year():
    assert extract_year(make_album("Abbey Road", 1969)) == 1969
    assert extract_year(make_album("Live at the BBC (1994)")) == 1994
    assert extract_year(make_album("Help!")) is None


def test_sort_albums_by_year():
    albums = [
        make_album("B", 1965),
        make_album("Unknown"),
        make_album("A (1969)"),
        make_album("C", 1969),
    ]
    result = sort_albums(albums, "year")
    assert [a["name"] for a in result] == ["A (1969)", "C", "B", "Unknown"]


def test_sort_albums_by_name_ignores_year_suffix():
    albums = [make_album("help! (1965)"), make_album("Abbey Road"), make_album("Let It Be")]
    result = sort_albums(albums, "name")
    assert [a["name"] for a in result] == ["Abbey Road", "help! (1965)", "Let It Be"]


def test_sort_albums_default_keeps_order():
    albums = [make_album("Z"), make_album("A")]
    result = sort_albums(albums)
    assert result == albums
    assert result is not albums


def test_sort_albums_unknown_key():
    with pytest.raises(ValueError) as excinfo:
        sort_albums([], "rating")
    assert "Unknown album sort key" in str(excinfo.value)


def test_as_mapping():
    assert as_mapping({"a": 1}) == {"a": 1}
    assert as_mapping(["x"]) == {}
    assert as_mapping(None) == {}
