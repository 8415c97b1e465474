"""Recording collaborators shared by the pipeline tests."""

from __future__ import annotations

import cv2
import numpy as np

from filter_studio.errors import ErrorCategory


class RecordingDisplay:
    """Display collaborator that keeps every published payload."""

    def __init__(self) -> None:
        self.published: list[tuple[bytes, bytes]] = []

    def publish(self, source_png: bytes, working_png: bytes) -> None:
        self.published.append((source_png, working_png))


class RecordingErrors:
    """Error collaborator that keeps every reported failure."""

    def __init__(self) -> None:
        self.reports: list[tuple[str, ErrorCategory]] = []

    def report(self, message: str, category: ErrorCategory) -> None:
        self.reports.append((message, category))

    @property
    def categories(self) -> list[ErrorCategory]:
        return [category for _message, category in self.reports]


def decode_png(payload: bytes) -> np.ndarray:
    return cv2.imdecode(np.frombuffer(payload, dtype=np.uint8), cv2.IMREAD_COLOR)
