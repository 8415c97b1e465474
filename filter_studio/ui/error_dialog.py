"""Shared Qt dialog for presenting recoverable errors to the user."""

from __future__ import annotations

from typing import Mapping, Optional

from PyQt5 import QtCore, QtWidgets  # type: ignore


class ErrorDialog(QtWidgets.QDialog):
    """Modal dialog that displays an error message and optional details."""

    def __init__(
        self,
        message: str,
        details: str = "",
        *,
        parent: Optional[QtWidgets.QWidget] = None,
        metadata: Optional[Mapping[str, object]] = None,
        window_title: Optional[str] = None,
    ) -> None:
        super().__init__(parent)
        self.setModal(True)
        self._message = message
        self._details = details
        self._metadata = dict(metadata or {})

        if window_title is None:
            window_title = self.tr("Error")
        self.setWindowTitle(window_title)

        self._build_ui()

    @property
    def message(self) -> str:
        return self._message

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        icon_label = QtWidgets.QLabel(self)
        icon = self.style().standardIcon(QtWidgets.QStyle.SP_MessageBoxCritical)
        icon_label.setPixmap(icon.pixmap(32, 32))

        text_layout = QtWidgets.QHBoxLayout()
        text_layout.setSpacing(10)
        text_layout.addWidget(icon_label, 0, QtCore.Qt.AlignTop)

        self._message_label = QtWidgets.QLabel(self._message, self)
        self._message_label.setWordWrap(True)
        self._message_label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
        text_layout.addWidget(self._message_label, 1)

        layout.addLayout(text_layout)

        if self._metadata:
            metadata_group = QtWidgets.QGroupBox(self.tr("Details"), self)
            metadata_layout = QtWidgets.QFormLayout(metadata_group)
            metadata_layout.setLabelAlignment(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
            metadata_layout.setSpacing(6)
            for key, value in sorted(self._metadata.items(), key=lambda item: str(item[0])):
                label = QtWidgets.QLabel(str(key), metadata_group)
                value_label = QtWidgets.QLabel(str(value), metadata_group)
                value_label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
                value_label.setWordWrap(True)
                metadata_layout.addRow(label, value_label)
            layout.addWidget(metadata_group)

        if self._details:
            details_group = QtWidgets.QGroupBox(self.tr("Technical information"), self)
            details_layout = QtWidgets.QVBoxLayout(details_group)
            details_layout.setContentsMargins(6, 6, 6, 6)
            self._details_edit = QtWidgets.QPlainTextEdit(details_group)
            self._details_edit.setReadOnly(True)
            self._details_edit.setLineWrapMode(QtWidgets.QPlainTextEdit.NoWrap)
            self._details_edit.setPlainText(self._details)
            self._details_edit.setMinimumHeight(120)
            details_layout.addWidget(self._details_edit)
            layout.addWidget(details_group, 1)

        self._button_box = QtWidgets.QDialogButtonBox(self)
        copy_button = self._button_box.addButton(
            self.tr("Copy details"), QtWidgets.QDialogButtonBox.ActionRole
        )
        copy_button.clicked.connect(self.copy_to_clipboard)
        close_button = self._button_box.addButton(QtWidgets.QDialogButtonBox.Close)
        close_button.clicked.connect(self.accept)
        layout.addWidget(self._button_box)

    @QtCore.pyqtSlot()
    def copy_to_clipboard(self) -> None:
        """Copy the dialog contents to the system clipboard."""

        clipboard = QtWidgets.QApplication.clipboard()
        sections = [self._message]
        if self._metadata:
            sections.append("\n".join(f"{key}: {value}" for key, value in self._metadata.items()))
        sections.append(self._details)
        clipboard.setText("\n\n".join(section for section in sections if section))


__all__ = ["ErrorDialog"]
