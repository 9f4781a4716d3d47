from __future__ import annotations
import logging
from typing import Dict, List, Optional

from PySide6.QtCore import Qt, QThread, Slot
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLineEdit, QPushButton, QLabel, QListWidget, QListWidgetItem, QMessageBox
)
from PySide6.QtWidgets import QAbstractItemView

from core.config import Settings
from core.search_service import SearchService
from core.store import ResultStore
from models.dto import SearchPhase, Track
from ui.artwork_loader import ArtworkLoader, ArtworkState
from ui.track_row import TrackRowWidget
from ui.workers import SearchWorker, search_reaper

logger = logging.getLogger(__name__)

PHASE_TEXT = {
    SearchPhase.IDLE: "Ready",
    SearchPhase.BUILDING: "Preparing search...",
    SearchPhase.IN_FLIGHT: "Searching... (network)",
    SearchPhase.DECODING: "Reading results...",
    SearchPhase.FAILED: "Error",
}


class MainWindow(QMainWindow):
    def __init__(
        self,
        settings: Optional[Settings] = None,
        service: Optional[SearchService] = None,
        artwork_loader: Optional[ArtworkLoader] = None,
    ):
        super().__init__()
        self.setWindowTitle("iTunes Store Lookup")
        self.resize(480, 720)

        self.settings = settings or Settings()
        self.service = service or SearchService(self.settings)
        self.store = ResultStore()
        self.artwork = artwork_loader or ArtworkLoader(cache_size=self.settings.artwork_cache_size)

        # running searches; a superseded one finishes in the background
        self._searches: Dict[QThread, SearchWorker] = {}
        self._rows_by_url: Dict[str, List[TrackRowWidget]] = {}

        self._setup_ui()

    # =========================
    # UI
    # =========================
    def _setup_ui(self):
        root = QWidget()
        self.setCentralWidget(root)
        outer = QVBoxLayout(root)

        top = QHBoxLayout()
        self.input = QLineEdit()
        self.input.setPlaceholderText("Search by artist, album, song...")
        self.input.setClearButtonEnabled(True)
        self.btn_search = QPushButton("Search")
        self.btn_search.setStyleSheet(
            "QPushButton { background: #007aff; color: white; border-radius: 10px; padding: 6px 14px; }"
        )
        top.addWidget(self.input, 1)
        top.addWidget(self.btn_search)
        outer.addLayout(top)

        self.status = QLabel(PHASE_TEXT[SearchPhase.IDLE])
        self.status.setStyleSheet("color: gray;")
        outer.addWidget(self.status)

        self.list = QListWidget()
        self.list.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.list.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        outer.addWidget(self.list, 1)

        # Signals
        self.input.textChanged.connect(self.store.set_query)
        self.input.returnPressed.connect(self.on_search_clicked)
        self.btn_search.clicked.connect(self.on_search_clicked)

        self.store.results_changed.connect(self.on_results_changed)
        self.store.alert_changed.connect(self.on_alert_changed)
        self.store.phase_changed.connect(self.on_phase_changed)

        self.artwork.state_changed.connect(self.on_artwork_state_changed)

    # =========================
    # Search flow (QThread)
    # =========================
    @Slot()
    def on_search_clicked(self):
        seq = self.store.begin_search()
        text = self.store.state.query

        # give the keyboard back right away, not when results land
        self.input.clearFocus()

        thread = QThread(self)
        worker = SearchWorker(self.service, seq, text)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.phase.connect(self.store.set_phase)
        worker.finished.connect(self.store.apply_results)
        worker.error.connect(self.store.apply_failure)

        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        worker.error.connect(worker.deleteLater)
        thread.finished.connect(self._on_search_thread_finished)

        self._searches[thread] = worker
        thread.start()

    @Slot()
    def _on_search_thread_finished(self):
        thread = self.sender()
        self._searches.pop(thread, None)
        if thread is not None:
            thread.deleteLater()

    def has_running_searches(self) -> bool:
        return bool(self._searches)

    @Slot(object)
    def on_phase_changed(self, phase: SearchPhase):
        if phase == SearchPhase.POPULATED:
            n = len(self.store.state.results)
            self.status.setText(f"{n} result(s)" if n else "No results")
            return
        self.status.setText(PHASE_TEXT.get(phase, ""))

    @Slot(bool, str)
    def on_alert_changed(self, visible: bool, message: str):
        if not visible:
            return
        QMessageBox.critical(self, "Error", message)
        self.store.dismiss_alert()

    # =========================
    # List
    # =========================
    @Slot(list)
    def on_results_changed(self, tracks: List[Track]):
        self.list.clear()
        self._rows_by_url = {}

        for track in tracks:
            row = TrackRowWidget(track)
            item = QListWidgetItem()
            item.setData(Qt.UserRole, track.id)
            item.setSizeHint(row.sizeHint())
            self.list.addItem(item)
            self.list.setItemWidget(item, row)

            self._rows_by_url.setdefault(track.artwork_url, []).append(row)
            self.artwork.request(track.artwork_url)
            self._apply_artwork(row)

        self.list.scrollToTop()

    def row_widgets(self) -> List[TrackRowWidget]:
        return [self.list.itemWidget(self.list.item(i)) for i in range(self.list.count())]

    @Slot(str, object)
    def on_artwork_state_changed(self, url: str, state: ArtworkState):
        for row in self._rows_by_url.get(url, []):
            self._apply_artwork(row)

    def _apply_artwork(self, row: TrackRowWidget):
        url = row.track.artwork_url
        state = self.artwork.state(url)
        if state is None:
            # evicted since the row asked for it
            state = self.artwork.request(url)

        if state == ArtworkState.LOADED:
            row.show_image(self.artwork.image(url))
        elif state == ArtworkState.FAILED:
            row.show_placeholder()
        else:
            row.show_loading()

    # =========================
    # Shutdown
    # =========================
    def closeEvent(self, event):
        # threads are children of this window; any still blocked in the
        # network call must outlive it
        reaper = search_reaper()
        for thread, worker in list(self._searches.items()):
            if reaper.adopt(thread, worker):
                thread.finished.disconnect(self._on_search_thread_finished)
                self._searches.pop(thread, None)
        super().closeEvent(event)
