from __future__ import annotations
import html

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath, QPixmap
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QProgressBar, QStackedWidget, QStyle, QVBoxLayout, QWidget
)

from models.dto import Track
from ui.artwork_loader import ArtworkState

ARTWORK_SIZE = 60
CORNER_RADIUS = 8


def rounded_pixmap(image: QImage, side: int = ARTWORK_SIZE, radius: int = CORNER_RADIUS) -> QPixmap:
    """Scale to fill a side x side square, center-crop, clip the corners."""
    scaled = QPixmap.fromImage(image).scaled(
        QSize(side, side),
        Qt.AspectRatioMode.KeepAspectRatioByExpanding,
        Qt.TransformationMode.SmoothTransformation,
    )
    x = (scaled.width() - side) // 2
    y = (scaled.height() - side) // 2
    cropped = scaled.copy(x, y, side, side)

    out = QPixmap(side, side)
    out.fill(Qt.GlobalColor.transparent)
    painter = QPainter(out)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    path = QPainterPath()
    path.addRoundedRect(0, 0, side, side, radius, radius)
    painter.setClipPath(path)
    painter.drawPixmap(0, 0, cropped)
    painter.end()
    return out


class TrackRowWidget(QWidget):
    """Artwork thumbnail + title (and artist / album underneath)."""

    def __init__(self, track: Track, parent=None):
        super().__init__(parent)
        self.track = track
        self.artwork_state = ArtworkState.LOADING

        outer = QHBoxLayout(self)
        outer.setContentsMargins(6, 4, 6, 4)

        self.artwork = QStackedWidget()
        self.artwork.setFixedSize(ARTWORK_SIZE, ARTWORK_SIZE)

        self.spinner = QProgressBar()
        self.spinner.setRange(0, 0)  # busy indicator
        self.spinner.setTextVisible(False)
        self.spinner.setFixedHeight(6)

        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setFixedSize(ARTWORK_SIZE, ARTWORK_SIZE)

        self.artwork.addWidget(self.spinner)
        self.artwork.addWidget(self.image_label)
        outer.addWidget(self.artwork)

        text = QVBoxLayout()
        self.title_label = QLabel(f"<b>{html.escape(track.title or '', quote=False)}</b>")
        self.title_label.setTextFormat(Qt.TextFormat.RichText)
        self.subtitle_label = QLabel(" · ".join(x for x in (track.artist_name, track.album_name) if x))
        self.subtitle_label.setTextFormat(Qt.TextFormat.PlainText)
        self.subtitle_label.setStyleSheet("color: gray;")
        text.addWidget(self.title_label)
        text.addWidget(self.subtitle_label)
        outer.addLayout(text, 1)

        self.show_loading()

    def show_loading(self):
        self.artwork_state = ArtworkState.LOADING
        self.artwork.setCurrentWidget(self.spinner)

    def show_image(self, image: QImage):
        self.artwork_state = ArtworkState.LOADED
        self.image_label.setPixmap(rounded_pixmap(image))
        self.artwork.setCurrentWidget(self.image_label)

    def show_placeholder(self):
        self.artwork_state = ArtworkState.FAILED
        glyph = self.style().standardIcon(QStyle.StandardPixmap.SP_FileDialogContentsView)
        base = QImage(ARTWORK_SIZE, ARTWORK_SIZE, QImage.Format.Format_ARGB32)
        base.fill(QColor("#e5e5ea"))
        painter = QPainter(base)
        icon_side = ARTWORK_SIZE // 2
        offset = (ARTWORK_SIZE - icon_side) // 2
        painter.drawPixmap(offset, offset, glyph.pixmap(icon_side, icon_side))
        painter.end()
        self.image_label.setPixmap(rounded_pixmap(base))
        self.artwork.setCurrentWidget(self.image_label)
