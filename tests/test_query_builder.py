from urllib.parse import parse_qs, urlsplit

import pytest

from core.errors import BuildError
from core.query_builder import build_search_url


def _term(url: str) -> str:
    return parse_qs(urlsplit(url).query, keep_blank_values=True)["term"][0]


def test_daft_punk_url():
    assert build_search_url("daft punk") == "https://itunes.apple.com/search?term=daft%20punk&media=music"


def test_empty_term_still_builds():
    assert build_search_url("") == "https://itunes.apple.com/search?term=&media=music"


@pytest.mark.parametrize("term", [
    "AC/DC & Friends",
    "a=b?c#d+e%f",
    "Björk 日本語 🎵",
    "  leading and trailing  ",
    "tab\tand\nnewline",
])
def test_term_decodes_back(term):
    url = build_search_url(term)
    assert _term(url) == term
    assert urlsplit(url).path == "/search"
    assert parse_qs(urlsplit(url).query)["media"] == ["music"]


def test_reserved_characters_do_not_leak_into_query():
    url = build_search_url("rock&media=movie")
    assert parse_qs(urlsplit(url).query)["media"] == ["music"]


def test_unencodable_term_raises():
    with pytest.raises(BuildError) as excinfo:
        build_search_url("bad \ud800 surrogate")
    assert excinfo.value.user_message == "Invalid search term or URL"


@pytest.mark.parametrize("base", ["", "itunes.apple.com/search", "ftp://x/search", "https://x/search?a=1"])
def test_bad_endpoint_raises(base):
    with pytest.raises(BuildError):
        build_search_url("x", base_url=base)


def test_custom_base_and_media():
    url = build_search_url("x", base_url="http://localhost:8080/search", media="podcast")
    assert url == "http://localhost:8080/search?term=x&media=podcast"
