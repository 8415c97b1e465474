"""Qt-aware thread controller for running pipeline work off the UI thread.

Work is executed on a :class:`QtCore.QThreadPool`. Each task gets its own
signal object created on the calling (UI) thread; the worker emits on it and
Qt queues delivery back to the thread that owns the receiver, so completion
callbacks always run on the UI thread.

There is no cancellation: a submitted task runs to completion.
"""

from __future__ import annotations

import logging
import threading
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Optional

from PyQt5 import QtCore


LOGGER = logging.getLogger(__name__)


class _WorkerSignals(QtCore.QObject):
    """Signals emitted from worker threads and forwarded to the UI."""

    finished = QtCore.pyqtSignal(object)
    failed = QtCore.pyqtSignal(Exception, str)


class _FunctionRunnable(QtCore.QRunnable):
    """Wrap a callable for execution in a :class:`QThreadPool`."""

    def __init__(self, function: Callable[[], Any], signals: _WorkerSignals) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._function = function
        self._signals = signals

    @QtCore.pyqtSlot()
    def run(self) -> None:  # pragma: no cover - executed on worker thread
        try:
            result = self._function()
        except Exception as exc:
            self._signals.failed.emit(exc, traceback.format_exc())
        else:
            self._signals.finished.emit(result)


@dataclass
class _TaskCallbacks:
    finished: Optional[Callable[[Any], None]] = None
    failed: Optional[Callable[[Exception, str], None]] = None


class ThreadController(QtCore.QObject):
    """Coordinate background work and forward results to the Qt event loop."""

    task_started = QtCore.pyqtSignal(str)
    task_finished = QtCore.pyqtSignal(object)
    task_failed = QtCore.pyqtSignal(Exception, str)

    def __init__(
        self,
        *,
        parent: Optional[QtCore.QObject] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        super().__init__(parent)
        self._thread_pool = QtCore.QThreadPool(self)
        if max_workers is not None:
            self._thread_pool.setMaxThreadCount(max_workers)
        self._task_lock = threading.Lock()
        self._active: dict[_WorkerSignals, _TaskCallbacks] = {}

    # ------------------------------------------------------------------
    # Public API
    def is_running(self) -> bool:
        """Return ``True`` while any submitted task has not reported back."""

        with self._task_lock:
            return bool(self._active)

    def active_count(self) -> int:
        with self._task_lock:
            return len(self._active)

    def run_task(
        self,
        function: Callable[[], Any],
        *,
        description: str = "",
        on_finished: Optional[Callable[[Any], None]] = None,
        on_failed: Optional[Callable[[Exception, str], None]] = None,
    ) -> _WorkerSignals:
        """Execute ``function`` on a worker thread."""

        signals = _WorkerSignals()
        with self._task_lock:
            self._active[signals] = _TaskCallbacks(finished=on_finished, failed=on_failed)

        signals.finished.connect(self._on_task_finished)
        signals.failed.connect(self._on_task_failed)

        self.task_started.emit(description)
        LOGGER.debug("Task submitted: %s", description, extra={"component": "ThreadController"})
        self._thread_pool.start(_FunctionRunnable(function, signals))
        return signals

    def wait_for_done(self, timeout_ms: int = -1) -> bool:
        """Block until every queued task has run; returns ``False`` on timeout."""

        return self._thread_pool.waitForDone(timeout_ms)

    def shutdown(self) -> None:
        """Drain the underlying thread pool."""

        self._thread_pool.waitForDone()
        LOGGER.debug("Thread controller shutdown", extra={"component": "ThreadController"})

    # ------------------------------------------------------------------
    # Internal slots
    @QtCore.pyqtSlot(object)
    def _on_task_finished(self, result: Any) -> None:
        callbacks = self._finalise_task(self.sender())
        self.task_finished.emit(result)
        if callbacks.finished is not None:
            callbacks.finished(result)

    @QtCore.pyqtSlot(Exception, str)
    def _on_task_failed(self, error: Exception, stack: str) -> None:
        callbacks = self._finalise_task(self.sender())
        self.task_failed.emit(error, stack)
        if callbacks.failed is not None:
            callbacks.failed(error, stack)

    def _finalise_task(self, signals: Optional[QtCore.QObject]) -> _TaskCallbacks:
        with self._task_lock:
            callbacks = self._active.pop(signals, _TaskCallbacks())  # type: ignore[arg-type]
        return callbacks


__all__ = ["ThreadController"]
