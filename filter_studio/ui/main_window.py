"""Main window: image previews, filter controls and a folder browser."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt5 import QtCore, QtGui, QtWidgets  # type: ignore

from filter_studio.core.settings_manager import SettingsManager
from filter_studio.data import PathValidationError, file_dialog_filter, list_image_files
from filter_studio.processing import ColorName, FilterConfiguration, FilterMode, FilterPipeline
from filter_studio.processing.config import BLUR_RANGE, EDGE_THRESHOLD_RANGE

from .display import QtDisplaySink, pixmap_from_png
from .error_reporter import QtErrorReporter
from .pipeline_controller import PipelineController


_GRAYSCALE_STEPS = 100
_NO_COLOR = "None"


class MainWindow(QtWidgets.QMainWindow):
    """Primary application window.

    The window acts as the configuration source for the pipeline: every
    control change takes a :meth:`snapshot` on the UI thread and asks the
    controller for a new run.
    """

    statusMessageRequested = QtCore.pyqtSignal(str, int)

    def __init__(
        self,
        settings: Optional[SettingsManager] = None,
        parent: Optional[QtWidgets.QWidget] = None,
        *,
        error_reporter: Optional[QtErrorReporter] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._source_pixmap: Optional[QtGui.QPixmap] = None
        self._working_pixmap: Optional[QtGui.QPixmap] = None

        self.setWindowTitle(self.tr("Filter Studio"))

        self.display_sink = QtDisplaySink(self)
        self.error_reporter = error_reporter or QtErrorReporter(self)
        self.pipeline = FilterPipeline(self.display_sink, self.error_reporter)
        self.controller = PipelineController(
            self.pipeline, self, self.error_reporter, parent=self
        )

        self._build_actions()
        self._build_menus()
        self._build_central_widget()
        self._build_controls_dock()
        self._build_folder_dock()
        self.setStatusBar(QtWidgets.QStatusBar(self))

        self.display_sink.imagesPublished.connect(self._show_images)
        self.controller.imageLoaded.connect(self._on_image_loaded)
        self.error_reporter.errorReported.connect(self._on_error_reported)
        self.statusMessageRequested.connect(self.show_status_message)

        if self._settings is not None:
            self.set_configuration(self._settings.load_filter_configuration(), apply=False)
        self._update_control_state()
        self.resize(1100, 700)

    # ------------------------------------------------------------------
    # Configuration source
    # ------------------------------------------------------------------
    def snapshot(self) -> FilterConfiguration:
        """Return the filter configuration currently shown by the controls."""

        color_text = self.color_combo.currentData()
        return FilterConfiguration(
            mode=FilterMode.parse(self.mode_combo.currentData()),
            grayscale_intensity=self.grayscale_slider.value() / _GRAYSCALE_STEPS,
            blur_intensity=self.blur_slider.value(),
            edge_threshold=self.edge_slider.value(),
            color=ColorName.parse(color_text),
        )

    def set_configuration(self, config: FilterConfiguration, *, apply: bool = True) -> None:
        """Move the controls to ``config`` and trigger a single run."""

        widgets = (
            self.mode_combo,
            self.grayscale_slider,
            self.blur_slider,
            self.edge_slider,
            self.color_combo,
        )
        for widget in widgets:
            widget.blockSignals(True)
        try:
            self.mode_combo.setCurrentIndex(self.mode_combo.findData(config.mode.value))
            self.grayscale_slider.setValue(round(config.grayscale_intensity * _GRAYSCALE_STEPS))
            self.blur_slider.setValue(config.blur_intensity)
            self.edge_slider.setValue(config.edge_threshold)
            color_value = config.color.value if config.color is not None else _NO_COLOR
            self.color_combo.setCurrentIndex(self.color_combo.findData(color_value))
        finally:
            for widget in widgets:
                widget.blockSignals(False)
        self._update_control_state()
        if apply:
            self.controller.request_apply()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def open_image(self, path: str | Path) -> None:
        """Start loading ``path``; previews update once the load completes."""

        self.statusMessageRequested.emit(self.tr("Loading {name}…").format(name=Path(path).name), 0)
        self.controller.request_load(path)

    def open_folder(self, directory: str | Path) -> list[Path]:
        """List the supported images of ``directory`` in the folder dock."""

        try:
            files = list_image_files(directory)
        except PathValidationError as exc:
            self._logger.warning("Folder rejected: %s", exc, extra={"component": "MainWindow"})
            self.statusMessageRequested.emit(str(exc), 5000)
            return []
        self.folder_list.clear()
        for path in files:
            item = QtWidgets.QListWidgetItem(path.name, self.folder_list)
            item.setData(QtCore.Qt.UserRole, str(path))
        self.folder_dock.show()
        if self._settings is not None:
            self._settings.set_last_directory(directory)
        self.statusMessageRequested.emit(
            self.tr("{count} images found").format(count=len(files)), 5000
        )
        return files

    @QtCore.pyqtSlot(str, int)
    def show_status_message(self, message: str, timeout_ms: int = 0) -> None:
        self.statusBar().showMessage(message, timeout_ms)

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802 - Qt API
        if self._settings is not None:
            self._settings.save_filter_configuration(self.snapshot())
        self.controller.shutdown()
        super().closeEvent(event)

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: N802 - Qt API
        super().resizeEvent(event)
        self._refresh_previews()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    def _build_actions(self) -> None:
        self.open_image_action = QtWidgets.QAction(self.tr("&Open Image…"), self)
        self.open_image_action.setShortcut(QtGui.QKeySequence.Open)
        self.open_image_action.setStatusTip(self.tr("Load an image from disk"))
        self.open_image_action.triggered.connect(self._on_open_image)

        self.open_folder_action = QtWidgets.QAction(self.tr("Open &Folder…"), self)
        self.open_folder_action.setStatusTip(self.tr("Browse the images of a folder"))
        self.open_folder_action.triggered.connect(self._on_open_folder)

        self.save_action = QtWidgets.QAction(self.tr("&Save Processed Image…"), self)
        self.save_action.setShortcut(QtGui.QKeySequence.Save)
        self.save_action.setStatusTip(self.tr("Write the processed image to disk"))
        self.save_action.triggered.connect(self._on_save)

        self.exit_action = QtWidgets.QAction(self.tr("E&xit"), self)
        self.exit_action.setShortcut(QtGui.QKeySequence.Quit)
        self.exit_action.triggered.connect(self.close)

    def _build_menus(self) -> None:
        file_menu = self.menuBar().addMenu(self.tr("&File"))
        file_menu.addAction(self.open_image_action)
        file_menu.addAction(self.open_folder_action)
        file_menu.addSeparator()
        file_menu.addAction(self.save_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

    def _build_central_widget(self) -> None:
        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal, self)
        self.source_label = self._build_preview_label(self.tr("Original"))
        self.working_label = self._build_preview_label(self.tr("Processed"))
        splitter.addWidget(self.source_label)
        splitter.addWidget(self.working_label)
        self.setCentralWidget(splitter)

    def _build_preview_label(self, placeholder: str) -> QtWidgets.QLabel:
        label = QtWidgets.QLabel(placeholder, self)
        label.setAlignment(QtCore.Qt.AlignCenter)
        label.setMinimumSize(200, 200)
        label.setSizePolicy(QtWidgets.QSizePolicy.Ignored, QtWidgets.QSizePolicy.Ignored)
        label.setFrameShape(QtWidgets.QFrame.StyledPanel)
        return label

    def _build_controls_dock(self) -> None:
        self.controls_dock = QtWidgets.QDockWidget(self.tr("Filters"), self)
        self.controls_dock.setObjectName("filtersDock")
        container = QtWidgets.QWidget(self.controls_dock)
        form = QtWidgets.QFormLayout(container)

        self.mode_combo = QtWidgets.QComboBox(container)
        for mode in FilterMode:
            self.mode_combo.addItem(self.tr(mode.value), mode.value)
        form.addRow(self.tr("Filter"), self.mode_combo)

        self.grayscale_slider = self._build_slider(container, 0, _GRAYSCALE_STEPS)
        form.addRow(self.tr("Grayscale intensity"), self.grayscale_slider)
        self.blur_slider = self._build_slider(container, *BLUR_RANGE)
        form.addRow(self.tr("Blur intensity"), self.blur_slider)
        self.edge_slider = self._build_slider(container, *EDGE_THRESHOLD_RANGE)
        form.addRow(self.tr("Edge threshold"), self.edge_slider)

        self.color_combo = QtWidgets.QComboBox(container)
        self.color_combo.addItem(self.tr(_NO_COLOR), _NO_COLOR)
        for color in ColorName:
            self.color_combo.addItem(self.tr(color.value), color.value)
        form.addRow(self.tr("Color"), self.color_combo)

        self.mode_combo.currentIndexChanged.connect(self._on_controls_changed)
        self.color_combo.currentIndexChanged.connect(self._on_controls_changed)
        for slider in (self.grayscale_slider, self.blur_slider, self.edge_slider):
            slider.valueChanged.connect(self._on_controls_changed)

        self.controls_dock.setWidget(container)
        self.addDockWidget(QtCore.Qt.LeftDockWidgetArea, self.controls_dock)

    @staticmethod
    def _build_slider(parent: QtWidgets.QWidget, minimum: int, maximum: int) -> QtWidgets.QSlider:
        slider = QtWidgets.QSlider(QtCore.Qt.Horizontal, parent)
        slider.setRange(minimum, maximum)
        slider.setTracking(True)
        return slider

    def _build_folder_dock(self) -> None:
        self.folder_dock = QtWidgets.QDockWidget(self.tr("Folder"), self)
        self.folder_dock.setObjectName("folderDock")
        self.folder_list = QtWidgets.QListWidget(self.folder_dock)
        self.folder_list.currentItemChanged.connect(self._on_folder_item_changed)
        self.folder_dock.setWidget(self.folder_list)
        self.addDockWidget(QtCore.Qt.RightDockWidgetArea, self.folder_dock)
        self.folder_dock.hide()

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    @QtCore.pyqtSlot()
    def _on_open_image(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, self.tr("Open Image"), self._start_directory(), file_dialog_filter()
        )
        if path:
            self.open_image(path)

    @QtCore.pyqtSlot()
    def _on_open_folder(self) -> None:
        directory = QtWidgets.QFileDialog.getExistingDirectory(
            self, self.tr("Open Folder"), self._start_directory()
        )
        if directory:
            self.open_folder(directory)

    @QtCore.pyqtSlot()
    def _on_save(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            self.tr("Save Processed Image"),
            self._start_directory(),
            self.tr("PNG (*.png);;JPEG (*.jpg *.jpeg);;Bitmap (*.bmp)"),
        )
        if not path:
            return
        destination = self.controller.save_working(path)
        if destination is not None:
            self.statusMessageRequested.emit(
                self.tr("Saved {name}").format(name=destination.name), 5000
            )

    def _on_controls_changed(self, *_args: object) -> None:
        self._update_control_state()
        self.controller.request_apply()

    def _on_folder_item_changed(
        self,
        current: Optional[QtWidgets.QListWidgetItem],
        _previous: Optional[QtWidgets.QListWidgetItem],
    ) -> None:
        if current is None:
            return
        self.open_image(current.data(QtCore.Qt.UserRole))

    @QtCore.pyqtSlot(str)
    def _on_image_loaded(self, path: str) -> None:
        self.statusMessageRequested.emit(self.tr("Loaded {name}").format(name=Path(path).name), 5000)
        self._update_control_state()
        self.controller.request_apply()

    @QtCore.pyqtSlot(object, object)
    def _show_images(self, source_png: bytes, working_png: bytes) -> None:
        source = pixmap_from_png(source_png)
        working = pixmap_from_png(working_png)
        if source is None or working is None:
            self._logger.warning("Published image could not be rendered", extra={"component": "MainWindow"})
            return
        self._source_pixmap = source
        self._working_pixmap = working
        self._refresh_previews()

    @QtCore.pyqtSlot(str, str)
    def _on_error_reported(self, message: str, _category: str) -> None:
        self.statusBar().showMessage(message, 5000)
        self._update_control_state()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _update_control_state(self) -> None:
        mode = FilterMode.parse(self.mode_combo.currentData())
        self.grayscale_slider.setEnabled(mode is FilterMode.GRAYSCALE)
        self.blur_slider.setEnabled(mode is FilterMode.GAUSSIAN_BLUR)
        self.edge_slider.setEnabled(mode is FilterMode.EDGE_DETECTION)
        self.color_combo.setEnabled(mode is FilterMode.COLOR_DETECTION)
        self.save_action.setEnabled(self.pipeline.has_image)

    def _refresh_previews(self) -> None:
        for label, pixmap in (
            (self.source_label, self._source_pixmap),
            (self.working_label, self._working_pixmap),
        ):
            if pixmap is None:
                continue
            label.setPixmap(
                pixmap.scaled(label.size(), QtCore.Qt.KeepAspectRatio, QtCore.Qt.SmoothTransformation)
            )

    def _start_directory(self) -> str:
        if self._settings is not None:
            directory = self._settings.last_directory()
            if directory is not None and directory.is_dir():
                return str(directory)
        return str(Path.home())


__all__ = ["MainWindow"]
