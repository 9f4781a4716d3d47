from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterable, List

from PySide6.QtCore import QObject, Signal, Slot

from models.dto import SearchPhase, SearchState, Track

logger = logging.getLogger(__name__)


class ResultStore(QObject):
    """
    Owns the SearchState shown by the window. Only the transition methods
    below change it, and they are called on the UI thread.

    Every attempt gets a sequence number from begin_search(); completions
    carrying an older number are dropped, so the latest trigger wins no
    matter which response arrives last.
    """

    results_changed = Signal(list)      # list[Track]
    alert_changed = Signal(bool, str)   # visible, message
    phase_changed = Signal(object)      # SearchPhase

    def __init__(self):
        super().__init__()
        self._state = SearchState()
        self._phase = SearchPhase.IDLE
        self._seq = 0

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def phase(self) -> SearchPhase:
        return self._phase

    @property
    def latest_seq(self) -> int:
        return self._seq

    @property
    def results(self) -> List[Track]:
        return list(self._state.results)

    def is_current(self, seq: int) -> bool:
        return seq == self._seq

    # =========================
    # Transitions
    # =========================
    @Slot(str)
    def set_query(self, text: str):
        self._state = replace(self._state, query=text)

    def begin_search(self) -> int:
        self._seq += 1
        self._set_phase(SearchPhase.BUILDING)
        return self._seq

    @Slot(int, object)
    def set_phase(self, seq: int, phase: SearchPhase):
        if not self.is_current(seq):
            return
        self._set_phase(phase)

    @Slot(int, list)
    def apply_results(self, seq: int, tracks: Iterable[Track]) -> bool:
        if not self.is_current(seq):
            logger.debug("Dropping results of superseded search #%d (latest #%d)", seq, self._seq)
            return False

        had_alert = self._state.is_alert_visible
        self._state = replace(
            self._state,
            results=tuple(tracks),
            is_alert_visible=False,
            alert_message="",
        )
        self._set_phase(SearchPhase.POPULATED)
        self.results_changed.emit(self.results)
        if had_alert:
            self.alert_changed.emit(False, "")
        return True

    @Slot(int, str)
    def apply_failure(self, seq: int, message: str) -> bool:
        if not self.is_current(seq):
            logger.debug("Dropping failure of superseded search #%d: %s", seq, message)
            return False

        # previous results stay on screen
        self._state = replace(self._state, is_alert_visible=True, alert_message=message)
        self._set_phase(SearchPhase.FAILED)
        self.alert_changed.emit(True, message)
        return True

    @Slot()
    def dismiss_alert(self):
        if not self._state.is_alert_visible:
            return
        self._state = replace(self._state, is_alert_visible=False)
        self.alert_changed.emit(False, self._state.alert_message)

    def _set_phase(self, phase: SearchPhase):
        if phase == self._phase:
            return
        self._phase = phase
        self.phase_changed.emit(phase)
