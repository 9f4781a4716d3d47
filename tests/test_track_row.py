from PySide6.QtGui import QColor, QImage

from conftest import solid_image
from models.dto import Track
from ui.artwork_loader import ArtworkState
from ui.track_row import ARTWORK_SIZE, TrackRowWidget, rounded_pixmap


def _row():
    return TrackRowWidget(Track(1, "Tom & Jerry <live>", "Artist", "Album", "https://x/1.jpg"))


def test_row_texts(qapp):
    row = _row()
    assert "Tom &amp; Jerry &lt;live&gt;" in row.title_label.text()
    assert row.subtitle_label.text() == "Artist · Album"
    assert row.artwork_state == ArtworkState.LOADING
    assert row.artwork.currentWidget() is row.spinner


def test_row_states(qapp):
    row = _row()
    row.show_image(solid_image(side=300))
    assert row.artwork_state == ArtworkState.LOADED
    assert row.artwork.currentWidget() is row.image_label

    row.show_placeholder()
    assert row.artwork_state == ArtworkState.FAILED
    assert not row.image_label.pixmap().isNull()

    row.show_loading()
    assert row.artwork.currentWidget() is row.spinner


def test_rounded_pixmap_is_square(qapp):
    wide = QImage(200, 100, QImage.Format.Format_ARGB32)
    wide.fill(QColor("#336699"))
    pix = rounded_pixmap(wide)
    assert (pix.width(), pix.height()) == (ARTWORK_SIZE, ARTWORK_SIZE)
    # corner is clipped away, center is not
    image = pix.toImage()
    assert image.pixelColor(0, 0).alpha() == 0
    assert image.pixelColor(ARTWORK_SIZE // 2, ARTWORK_SIZE // 2).alpha() == 255
