"""Single-flight filter pipeline owning the source and working images.

The pipeline holds one decoded *source* image and the *working* image derived
from it by the most recent run. Each run starts from a fresh clone of the
source, so filter changes never accumulate.

Runs are guarded by a non-blocking lock: a call to
:meth:`FilterPipeline.apply_filters` that arrives while another run is in
flight returns ``None`` straight away and is not queued. A configuration
change made during a run is therefore only picked up by the next triggering
event.

Results are published as PNG bytes to a :class:`DisplaySink` and failures are
forwarded once to an :class:`ErrorReporter` before being raised to the
caller. Nothing is published when an operation fails.
"""

from __future__ import annotations

import logging
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

import numpy as np

from filter_studio.data import decode_image, encode_png, save_image
from filter_studio.errors import DecodeError, ErrorCategory, ProcessingError

from . import filters
from .config import FilterConfiguration


LOGGER = logging.getLogger(__name__)


class ProcessingState(Enum):
    IDLE = "Idle"
    RUNNING = "Running"


class DisplaySink(Protocol):
    """Receives the rendered images after every successful operation."""

    def publish(self, source_png: bytes, working_png: bytes) -> None:
        ...


class ErrorReporter(Protocol):
    """Receives a human readable message for every failed operation."""

    def report(self, message: str, category: ErrorCategory) -> None:
        ...


class ConfigurationSource(Protocol):
    """Supplies the current filter configuration on demand."""

    def snapshot(self) -> FilterConfiguration:
        ...


class FilterPipeline:
    """Load an image, run one filter at a time, and publish the results."""

    def __init__(self, display: DisplaySink, errors: ErrorReporter) -> None:
        self._display = display
        self._errors = errors
        self._busy = threading.Lock()
        self._source: Optional[np.ndarray] = None
        self._working: Optional[np.ndarray] = None
        self._source_path: Optional[Path] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> ProcessingState:
        return ProcessingState.RUNNING if self._busy.locked() else ProcessingState.IDLE

    @property
    def is_processing(self) -> bool:
        return self._busy.locked()

    @property
    def has_image(self) -> bool:
        return self._source is not None

    @property
    def source(self) -> Optional[np.ndarray]:
        return self._source

    @property
    def working(self) -> Optional[np.ndarray]:
        return self._working

    @property
    def source_path(self) -> Optional[Path]:
        return self._source_path

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def load_source(self, path: os.PathLike[str] | str) -> np.ndarray:
        """Replace the loaded image with the one decoded from ``path``.

        Previously held images are released before decoding, so a failed load
        leaves the pipeline empty. Waits for an in-flight run to complete.
        """

        with self._busy:
            self._release()
            try:
                source = decode_image(path)
                working = source.copy()
                source_png = encode_png(source)
            except DecodeError as exc:
                self._report(f"Error loading image: {exc}", ErrorCategory.DECODE_ERROR)
                raise
            except Exception as exc:
                self._report(f"Error loading image: {exc}", ErrorCategory.DECODE_ERROR)
                raise DecodeError(str(exc)) from exc
            self._source = source
            self._working = working
            self._source_path = Path(path)

        height, width = source.shape[:2]
        LOGGER.info(
            "Image loaded (%dx%d)", width, height, extra={"component": "FilterPipeline"}
        )
        self._display.publish(source_png, source_png)
        return working

    def apply_filters(self, config: FilterConfiguration) -> Optional[np.ndarray]:
        """Run the filter selected by ``config`` against a clone of the source.

        Returns the new working image, or ``None`` when a run was already in
        flight and this request was dropped.
        """

        if not self._busy.acquire(blocking=False):
            LOGGER.debug("Filter run dropped while busy", extra={"component": "FilterPipeline"})
            return None
        try:
            source = self._source
            if source is None:
                raise ProcessingError("No image is loaded")
            settings = config.clamped()
            working = filters.apply_filter(source, settings)
            source_png = encode_png(source)
            working_png = encode_png(working)
            self._working = working
        except ProcessingError as exc:
            self._report(f"Error applying filter: {exc}", ErrorCategory.PROCESSING_ERROR)
            raise
        except Exception as exc:
            self._report(f"Error applying filter: {exc}", ErrorCategory.PROCESSING_ERROR)
            raise ProcessingError(str(exc)) from exc
        finally:
            self._busy.release()

        LOGGER.debug(
            "Filter applied: %s", settings.mode.value, extra={"component": "FilterPipeline"}
        )
        self._display.publish(source_png, working_png)
        return working

    def save_working(self, path: os.PathLike[str] | str) -> Path:
        """Write the current working image to ``path``."""

        working = self._working
        if working is None:
            raise ProcessingError("There is no processed image to save")
        return save_image(working, path)

    def close(self) -> None:
        """Release the held images at the end of a session."""

        with self._busy:
            self._release()
        LOGGER.debug("Pipeline closed", extra={"component": "FilterPipeline"})

    def __enter__(self) -> "FilterPipeline":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _release(self) -> None:
        self._source = None
        self._working = None
        self._source_path = None

    def _report(self, message: str, category: ErrorCategory) -> None:
        LOGGER.error(message, extra={"component": "FilterPipeline", "category": category.value})
        self._errors.report(message, category)


__all__ = [
    "ConfigurationSource",
    "DisplaySink",
    "ErrorReporter",
    "FilterPipeline",
    "ProcessingState",
]
