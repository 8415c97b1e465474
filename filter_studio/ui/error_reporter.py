"""Qt implementation of the pipeline's error-reporting collaborator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt5 import QtCore, QtWidgets  # type: ignore

from filter_studio.errors import ErrorCategory

from .error_dialog import ErrorDialog


LOGGER = logging.getLogger(__name__)


class QtErrorReporter(QtCore.QObject):
    """Forward pipeline failures to the UI thread and present them.

    :meth:`report` may be called from any thread; the ``errorReported``
    signal carries the message to the thread owning this object, where an
    :class:`ErrorDialog` is shown when ``present_dialogs`` is enabled.
    """

    errorReported = QtCore.pyqtSignal(str, str)

    def __init__(
        self,
        parent_widget: Optional[QtWidgets.QWidget] = None,
        *,
        present_dialogs: bool = True,
    ) -> None:
        super().__init__(parent_widget)
        self._parent_widget = parent_widget
        self.present_dialogs = present_dialogs
        self.last_dialog: Optional[ErrorDialog] = None
        self.errorReported.connect(self._present)

    def report(self, message: str, category: ErrorCategory) -> None:
        self.errorReported.emit(message, category.value)

    @QtCore.pyqtSlot(str, str)
    def _present(self, message: str, category: str) -> None:
        LOGGER.debug("Presenting error", extra={"component": "QtErrorReporter", "category": category})
        if not self.present_dialogs:
            return
        metadata: dict[str, object] = {"Category": category}
        log_file = _discover_log_file()
        if log_file is not None:
            metadata["Log file"] = log_file.name
        dialog = ErrorDialog(
            message,
            parent=self._parent_widget,
            metadata=metadata,
            window_title=self.tr("Filter Studio error"),
        )
        dialog.setAttribute(QtCore.Qt.WA_DeleteOnClose, True)
        self.last_dialog = dialog
        dialog.open()


def _discover_log_file() -> Optional[Path]:
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


__all__ = ["QtErrorReporter"]
