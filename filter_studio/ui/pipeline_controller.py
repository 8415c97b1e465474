"""Controller wiring UI requests to a :class:`FilterPipeline`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from PyQt5 import QtCore  # type: ignore

from filter_studio.core.threading import ThreadController
from filter_studio.errors import ErrorCategory, FilterStudioError
from filter_studio.processing import ConfigurationSource, ErrorReporter, FilterPipeline


LOGGER = logging.getLogger(__name__)


class PipelineController(QtCore.QObject):
    """Offload pipeline operations to worker threads.

    The filter configuration is snapshotted from the configuration source on
    the calling (UI) thread and handed to the worker by value, so widgets are
    never read off the UI thread. Failures have already been forwarded to the
    error reporter by the pipeline; the completion callbacks here only log.
    """

    imageLoaded = QtCore.pyqtSignal(str)
    filtersApplied = QtCore.pyqtSignal()

    def __init__(
        self,
        pipeline: FilterPipeline,
        config_source: ConfigurationSource,
        errors: ErrorReporter,
        *,
        thread_controller: Optional[ThreadController] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.pipeline = pipeline
        self._config_source = config_source
        self._errors = errors
        self.thread_controller = thread_controller or ThreadController(parent=self)

    def request_load(self, path: str | Path) -> None:
        """Load ``path`` in the background and publish it when ready."""

        path = Path(path)

        def _on_finished(_result: Any) -> None:
            self.imageLoaded.emit(str(path))

        self.thread_controller.run_task(
            lambda: self.pipeline.load_source(path),
            description=f"load {path.name}",
            on_finished=_on_finished,
            on_failed=self._on_failed,
        )

    def request_apply(self) -> bool:
        """Run the filters with the current configuration.

        Returns ``False`` when no image is loaded or a run is already in
        flight; in the latter case the request is dropped.
        """

        if not self.pipeline.has_image:
            return False
        if self.pipeline.is_processing:
            LOGGER.debug("Apply request dropped, pipeline busy", extra={"component": "PipelineController"})
            return False
        config = self._config_source.snapshot()

        def _on_finished(result: Any) -> None:
            if result is not None:
                self.filtersApplied.emit()

        self.thread_controller.run_task(
            lambda: self.pipeline.apply_filters(config),
            description=f"apply {config.mode.value}",
            on_finished=_on_finished,
            on_failed=self._on_failed,
        )
        return True

    def save_working(self, path: str | Path) -> Optional[Path]:
        """Save the processed image, reporting failures instead of raising."""

        try:
            destination = self.pipeline.save_working(path)
        except FilterStudioError as exc:
            message = f"Error saving image: {exc}"
            LOGGER.error(message, extra={"component": "PipelineController"})
            self._errors.report(message, ErrorCategory.PROCESSING_ERROR)
            return None
        return destination

    def shutdown(self) -> None:
        """Wait for outstanding work and release the loaded images."""

        self.thread_controller.shutdown()
        self.pipeline.close()

    def _on_failed(self, error: Exception, stack: str) -> None:
        LOGGER.debug(
            "Background task failed: %s\n%s", error, stack, extra={"component": "PipelineController"}
        )


__all__ = ["PipelineController"]
