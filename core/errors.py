from __future__ import annotations


class SearchError(Exception):
    """Base for everything that ends a search attempt with an alert."""

    user_message = "Search failed"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.user_message)
        self.detail = detail


class BuildError(SearchError):
    user_message = "Invalid search term or URL"


class NetworkError(SearchError):
    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause
        self.user_message = f"Network error: {cause}"


class DecodeError(SearchError):
    user_message = "Data decoding error"
