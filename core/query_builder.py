from __future__ import annotations
from urllib.parse import quote, urlencode, urlsplit

from core.errors import BuildError

DEFAULT_SEARCH_URL = "https://itunes.apple.com/search"


def build_search_url(term: str, base_url: str = DEFAULT_SEARCH_URL, media: str = "music") -> str:
    """
    "daft punk" -> https://itunes.apple.com/search?term=daft%20punk&media=music

    Every reserved character of the term is encoded so the query value
    always decodes back to the original text.
    """
    parts = urlsplit(base_url or "")
    if parts.scheme not in ("http", "https") or not parts.netloc or parts.query:
        raise BuildError(f"bad endpoint: {base_url!r}")

    params = [("term", term or ""), ("media", media)]
    try:
        query = urlencode(params, quote_via=quote, safe="")
    except UnicodeEncodeError as e:
        raise BuildError(f"cannot encode term: {e.reason}") from e

    return f"{base_url}?{query}"
