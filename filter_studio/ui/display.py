"""Qt implementation of the pipeline's display collaborator."""

from __future__ import annotations

from typing import Optional

from PyQt5 import QtCore, QtGui  # type: ignore


class QtDisplaySink(QtCore.QObject):
    """Turn published PNG bytes into a Qt signal.

    ``publish`` is called on the worker thread; receivers living on the UI
    thread get the payload through a queued connection.
    """

    imagesPublished = QtCore.pyqtSignal(object, object)

    def publish(self, source_png: bytes, working_png: bytes) -> None:
        self.imagesPublished.emit(source_png, working_png)


def pixmap_from_png(payload: bytes) -> Optional[QtGui.QPixmap]:
    """Decode ``payload`` into a pixmap, returning ``None`` when Qt rejects it."""

    pixmap = QtGui.QPixmap()
    if not pixmap.loadFromData(payload, "PNG"):
        return None
    return pixmap


__all__ = ["QtDisplaySink", "pixmap_from_png"]
