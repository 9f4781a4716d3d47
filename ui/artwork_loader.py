from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Optional, Set
from urllib.parse import urlsplit

import requests
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot
from PySide6.QtGui import QImage

from utils.cache import LRUCache

logger = logging.getLogger(__name__)

ARTWORK_TIMEOUT = 10


class ArtworkState(Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def fetch_artwork(url: str) -> QImage:
    r = requests.get(url, timeout=ARTWORK_TIMEOUT)
    r.raise_for_status()
    image = QImage()
    if not image.loadFromData(r.content):
        raise ValueError("response is not an image")
    return image


def is_fetchable(url: str) -> bool:
    parts = urlsplit(url or "")
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class _ArtworkSignals(QObject):
    loaded = Signal(str, object)   # url, QImage
    failed = Signal(str, str)      # url, reason


class _ArtworkJob(QRunnable):
    """Fetches one URL on the thread pool and reports back through signals."""

    def __init__(self, url: str, fetch: Callable[[str], QImage], signals: _ArtworkSignals):
        super().__init__()
        self.url = url
        self.fetch = fetch
        self.signals = signals

    @Slot()
    def run(self):
        try:
            image = self.fetch(self.url)
        except Exception as e:
            self.signals.failed.emit(self.url, str(e) or e.__class__.__name__)
            return
        self.signals.loaded.emit(self.url, image)


class ArtworkLoader(QObject):
    """
    Keyed async image loader. Each URL is LOADING, LOADED or FAILED.

    Loaded images go to a bounded LRU cache, and one fetch serves every row
    that asks for the same URL while it is pending. Failed URLs are fetched
    again the next time they are requested; the set of failed URLs is bounded
    like the image cache.
    """

    state_changed = Signal(str, object)   # url, ArtworkState

    def __init__(
        self,
        cache_size: int = 200,
        fetch: Optional[Callable[[str], QImage]] = None,
        pool: Optional[QThreadPool] = None,
    ):
        super().__init__()
        self.cache = LRUCache(max_items=cache_size)
        self._fetch = fetch or fetch_artwork
        self._pool = pool or QThreadPool.globalInstance()
        self._pending: Set[str] = set()
        self._failed = LRUCache(max_items=cache_size)  # url -> reason

        self._signals = _ArtworkSignals(self)
        self._signals.loaded.connect(self.complete)
        self._signals.failed.connect(self.fail)

    def state(self, url: str) -> Optional[ArtworkState]:
        if url in self.cache:
            return ArtworkState.LOADED
        if url in self._pending:
            return ArtworkState.LOADING
        if url in self._failed:
            return ArtworkState.FAILED
        return None

    def image(self, url: str) -> Optional[QImage]:
        return self.cache.get(url)

    def request(self, url: str) -> ArtworkState:
        if url in self.cache:
            return ArtworkState.LOADED
        if url in self._pending:
            return ArtworkState.LOADING
        if not is_fetchable(url):
            self._failed.set(url, "not an http(s) url")
            return ArtworkState.FAILED

        self._failed.pop(url)
        self._pending.add(url)
        self._pool.start(_ArtworkJob(url, self._fetch, self._signals))
        return ArtworkState.LOADING

    @Slot(str, object)
    def complete(self, url: str, image: QImage):
        self._pending.discard(url)
        if image is None or image.isNull():
            self.fail(url, "empty image")
            return
        self._failed.pop(url)
        self.cache.set(url, image)
        self.state_changed.emit(url, ArtworkState.LOADED)

    @Slot(str, str)
    def fail(self, url: str, reason: str):
        logger.debug("Artwork %s failed: %s", url, reason)
        self._pending.discard(url)
        self._failed.set(url, reason)
        self.state_changed.emit(url, ArtworkState.FAILED)
