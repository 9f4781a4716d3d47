from __future__ import annotations
import logging
from typing import Optional

import requests

from core.errors import NetworkError

logger = logging.getLogger(__name__)


class ITunesClient:
    """One GET per call, no retry. Transport problems become NetworkError."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 60.0,
        user_agent: str = "itunes-lookup/0.1",
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def search(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(_describe(e)) from e
        return r.content


def _describe(e: requests.RequestException) -> str:
    if isinstance(e, requests.Timeout):
        return "the request timed out"
    if isinstance(e, requests.HTTPError) and e.response is not None:
        return f"server responded {e.response.status_code} {e.response.reason or ''}".strip()
    if isinstance(e, requests.ConnectionError):
        return f"could not connect ({e})"
    return str(e) or e.__class__.__name__
