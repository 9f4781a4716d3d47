import json
import os
import time

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
import requests
from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import QApplication


def track_json(track_id=1, name="One More Time", artist="Daft Punk",
               album="Discovery", artwork="https://is1.example.com/a/60x60bb.jpg", **extra):
    item = {
        "wrapperType": "track",
        "kind": "song",
        "trackId": track_id,
        "trackName": name,
        "artistName": artist,
        "collectionName": album,
        "artworkUrl60": artwork,
    }
    item.update(extra)
    return item


def payload(*items) -> bytes:
    return json.dumps({"resultCount": len(items), "results": list(items)}).encode("utf-8")


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200, reason: str = "OK"):
        self.content = content
        self.status_code = status_code
        self.reason = reason

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)


class FakeSession:
    """Stand-in for requests.Session; each get() consumes the next outcome."""

    def __init__(self, *outcomes):
        self.headers = {}
        self.outcomes = list(outcomes)
        self.calls = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakePool:
    """Collects QRunnables instead of running them on a thread pool."""

    def __init__(self):
        self.jobs = []

    def start(self, job):
        self.jobs.append(job)

    def run_all(self):
        jobs, self.jobs = self.jobs, []
        for job in jobs:
            job.run()


def solid_image(color="#ff3b30", side=64) -> QImage:
    image = QImage(side, side, QImage.Format.Format_ARGB32)
    image.fill(QColor(color))
    return image


def wait_until(app, predicate, timeout=5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        app.processEvents()
        if predicate():
            return True
        time.sleep(0.01)
    app.processEvents()
    return predicate()


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def fake_pool():
    return FakePool()
