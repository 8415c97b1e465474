"""Filter implementations built on OpenCV primitives.

Every function takes ``uint8`` BGR images and returns a new three channel
image of the same size. :func:`apply_filter` is the single entry point used by
the pipeline; the individual functions are public so they can be reused and
tested in isolation.
"""

from __future__ import annotations

from typing import Optional

import cv2
import numpy as np

from .config import ColorName, FilterConfiguration, FilterMode


HsvBound = tuple[tuple[int, int, int], tuple[int, int, int]]

# Inclusive HSV bounds, OpenCV hue scale (0..180). Red straddles the wrap
# point of the hue circle and therefore needs two ranges.
COLOR_RANGES: dict[ColorName, tuple[HsvBound, ...]] = {
    ColorName.RED: (
        ((0, 100, 100), (10, 255, 255)),
        ((170, 100, 100), (180, 255, 255)),
    ),
    ColorName.GREEN: (((35, 100, 100), (85, 255, 255)),),
    ColorName.BLUE: (((100, 100, 100), (130, 255, 255)),),
}


def apply_grayscale(source: np.ndarray, intensity: float) -> np.ndarray:
    """Blend ``source`` with its desaturated version.

    ``intensity`` 0 returns the source pixels, 1 returns pure gray.
    """

    gray = cv2.cvtColor(source, cv2.COLOR_BGR2GRAY)
    gray_bgr = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
    return cv2.addWeighted(source, 1.0 - intensity, gray_bgr, intensity, 0)


def blur_kernel_size(intensity: int) -> int:
    """Map a blur intensity onto the odd kernel size required by Gaussian blur."""

    return 2 * int(intensity) + 1


def apply_gaussian_blur(working: np.ndarray, intensity: int) -> np.ndarray:
    """Smooth ``working`` in place and return it."""

    ksize = blur_kernel_size(intensity)
    working[...] = cv2.GaussianBlur(working, (ksize, ksize), 0)
    return working


def apply_edge_detection(working: np.ndarray, threshold: int) -> np.ndarray:
    """Return the Canny edge map of ``working`` expanded to three channels."""

    gray = cv2.cvtColor(working, cv2.COLOR_BGR2GRAY)
    edges = cv2.Canny(gray, threshold, threshold * 2)
    return cv2.cvtColor(edges, cv2.COLOR_GRAY2BGR)


def color_ranges(color: ColorName) -> tuple[HsvBound, ...]:
    return COLOR_RANGES[color]


def color_mask(source: np.ndarray, color: ColorName) -> np.ndarray:
    """Binary mask of the pixels of ``source`` inside any range of ``color``."""

    hsv = cv2.cvtColor(source, cv2.COLOR_BGR2HSV)
    mask: Optional[np.ndarray] = None
    for lower, upper in color_ranges(color):
        current = cv2.inRange(hsv, np.array(lower, dtype=np.uint8), np.array(upper, dtype=np.uint8))
        mask = current if mask is None else cv2.bitwise_or(mask, current)
    assert mask is not None
    return mask


def apply_color_detection(source: np.ndarray, color: Optional[ColorName]) -> np.ndarray:
    """Keep the pixels of ``source`` matching ``color`` and zero the rest.

    With no colour selected a full copy of ``source`` is returned.
    """

    if color is None:
        return source.copy()
    mask = color_mask(source, color)
    return cv2.bitwise_and(source, source, mask=mask)


def apply_filter(source: np.ndarray, config: FilterConfiguration) -> np.ndarray:
    """Clone ``source`` and apply the filter selected by ``config``."""

    working = source.copy()
    mode = config.mode
    if mode is FilterMode.NONE:
        return working
    if mode is FilterMode.GRAYSCALE:
        return apply_grayscale(source, config.grayscale_intensity)
    if mode is FilterMode.GAUSSIAN_BLUR:
        return apply_gaussian_blur(working, config.blur_intensity)
    if mode is FilterMode.EDGE_DETECTION:
        return apply_edge_detection(working, config.edge_threshold)
    if mode is FilterMode.COLOR_DETECTION:
        return apply_color_detection(source, config.color)
    raise ValueError(f"Unhandled filter mode: {mode!r}")


__all__ = [
    "COLOR_RANGES",
    "apply_color_detection",
    "apply_edge_detection",
    "apply_filter",
    "apply_gaussian_blur",
    "apply_grayscale",
    "blur_kernel_size",
    "color_mask",
    "color_ranges",
]
