from __future__ import annotations
import logging
from typing import Dict, Optional

from PySide6.QtCore import QCoreApplication, QObject, QThread, Signal, Slot

from core.errors import SearchError
from core.search_service import SearchService
from models.dto import SearchPhase

logger = logging.getLogger(__name__)


class SearchWorker(QObject):
    finished = Signal(int, list)    # seq, list[Track]
    error = Signal(int, str)        # seq, alert message
    phase = Signal(int, object)     # seq, SearchPhase

    def __init__(self, service: SearchService, seq: int, text: str):
        super().__init__()
        self.service = service
        self.seq = seq
        self.text = text

    def _report(self, phase: SearchPhase):
        self.phase.emit(self.seq, phase)

    @Slot()
    def run(self):
        logger.info("Search #%d started: %r", self.seq, self.text)
        try:
            tracks = self.service.search(self.text, on_phase=self._report)
        except SearchError as e:
            logger.warning("Search #%d failed: %s (%s)", self.seq, e.user_message, e.detail)
            self.error.emit(self.seq, e.user_message)
            return
        except Exception as e:
            logger.exception("Search #%d crashed", self.seq)
            self.error.emit(self.seq, str(e) or e.__class__.__name__)
            return
        self.finished.emit(self.seq, tracks)


class SearchReaper(QObject):
    """
    Keeps search threads alive after their window is gone. A thread blocked
    inside requests cannot be interrupted, so it is held here until it stops
    on its own (or until the application quits and waits for it).
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._threads: Dict[QThread, SearchWorker] = {}

    def adopt(self, thread: QThread, worker: SearchWorker) -> bool:
        if thread.isFinished():
            return False
        thread.setParent(None)
        self._threads[thread] = worker
        thread.finished.connect(self._on_thread_finished)
        logger.debug("Search #%d still running, detached from its window", worker.seq)
        return True

    def pending(self) -> int:
        return len(self._threads)

    @Slot()
    def _on_thread_finished(self):
        self._release(self.sender())

    @Slot()
    def wait_all(self):
        for thread in list(self._threads):
            thread.wait()
            self._release(thread)

    def _release(self, thread: Optional[QThread]):
        if thread is not None and self._threads.pop(thread, None) is not None:
            thread.deleteLater()


_reaper: Optional[SearchReaper] = None


def search_reaper() -> SearchReaper:
    global _reaper
    if _reaper is None:
        app = QCoreApplication.instance()
        _reaper = SearchReaper(app)
        if app is not None:
            app.aboutToQuit.connect(_reaper.wait_all)
    return _reaper
