from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure the project root is on ``sys.path`` so tests can import
# ``filter_studio`` without requiring the package to be installed.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

import cv2  # noqa: E402
import numpy as np  # noqa: E402

from tests._recorders import RecordingDisplay, RecordingErrors  # noqa: E402


@pytest.fixture()
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture()
def errors() -> RecordingErrors:
    return RecordingErrors()


@pytest.fixture()
def four_pixel_image() -> np.ndarray:
    """2x2 BGR image: blue, green, red and white."""

    return np.array(
        [[[255, 0, 0], [0, 255, 0]], [[0, 0, 255], [255, 255, 255]]],
        dtype=np.uint8,
    )


@pytest.fixture()
def gradient_image() -> np.ndarray:
    """A 32x32 image with strong horizontal and vertical structure."""

    ramp = np.linspace(0, 255, 32).astype(np.uint8)
    image = np.zeros((32, 32, 3), dtype=np.uint8)
    image[:, :, 0] = ramp[np.newaxis, :]
    image[:, :, 1] = ramp[:, np.newaxis]
    image[8:24, 8:24, 2] = 255
    return image


@pytest.fixture()
def write_image(tmp_path: Path) -> Callable[..., Path]:
    """Write ``image`` losslessly to ``tmp_path`` and return the file path."""

    def _write(image: np.ndarray, name: str = "image.png") -> Path:
        path = tmp_path / name
        assert cv2.imwrite(str(path), image)
        return path

    return _write
