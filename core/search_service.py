from __future__ import annotations
import logging
from typing import Callable, List, Optional

from core.config import Settings
from core.decoder import decode_results
from core.providers.itunes_client import ITunesClient
from core.query_builder import build_search_url
from models.dto import SearchPhase, Track

logger = logging.getLogger(__name__)

PhaseCallback = Callable[[SearchPhase], None]


class SearchService:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[ITunesClient] = None):
        self.settings = settings or Settings()
        self.client = client or ITunesClient(timeout=self.settings.timeout)

    def search(self, term: str, on_phase: Optional[PhaseCallback] = None) -> List[Track]:
        """
        Build -> fetch -> decode for a single attempt.
        Raises BuildError / NetworkError / DecodeError; nothing is retried.
        """
        report = on_phase or (lambda phase: None)

        report(SearchPhase.BUILDING)
        url = build_search_url(term, base_url=self.settings.search_url, media=self.settings.media)

        report(SearchPhase.IN_FLIGHT)
        body = self.client.search(url)

        report(SearchPhase.DECODING)
        tracks = decode_results(body)
        logger.info("Search %r returned %d track(s)", term, len(tracks))
        return tracks
