"""Unit tests for :mod:`filter_studio.processing.filters`."""

from __future__ import annotations

import cv2
import numpy as np
import pytest

from filter_studio.processing import ColorName, FilterConfiguration, FilterMode
from filter_studio.processing import filters


def _hsv_pixel(hue: int, saturation: int = 255, value: int = 255) -> np.ndarray:
    hsv = np.array([[[hue, saturation, value]]], dtype=np.uint8)
    return cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)


@pytest.mark.parametrize("intensity", [0, 1, 7, 25, 50])
def test_blur_kernel_size_is_odd(intensity: int) -> None:
    ksize = filters.blur_kernel_size(intensity)

    assert ksize == 2 * intensity + 1
    assert ksize % 2 == 1


def test_grayscale_zero_intensity_returns_source(gradient_image) -> None:
    result = filters.apply_grayscale(gradient_image, 0.0)

    np.testing.assert_array_equal(result, gradient_image)


def test_grayscale_full_intensity_has_no_channel_variance(gradient_image) -> None:
    result = filters.apply_grayscale(gradient_image, 1.0)

    assert result.shape == gradient_image.shape
    assert np.all(result[:, :, 0] == result[:, :, 1])
    assert np.all(result[:, :, 1] == result[:, :, 2])


def test_grayscale_partial_intensity_blends(four_pixel_image) -> None:
    gray = filters.apply_grayscale(four_pixel_image, 1.0).astype(np.float64)
    half = filters.apply_grayscale(four_pixel_image, 0.5).astype(np.float64)
    expected = 0.5 * four_pixel_image.astype(np.float64) + 0.5 * gray

    assert np.max(np.abs(half - expected)) <= 1.0


def test_gaussian_blur_zero_is_identity(gradient_image) -> None:
    working = gradient_image.copy()

    result = filters.apply_gaussian_blur(working, 0)

    np.testing.assert_array_equal(result, gradient_image)


def test_gaussian_blur_runs_in_place(gradient_image) -> None:
    working = gradient_image.copy()

    result = filters.apply_gaussian_blur(working, 3)

    assert result is working
    assert not np.array_equal(result, gradient_image)


def test_edge_detection_uniform_image_is_empty() -> None:
    uniform = np.full((16, 16, 3), 128, dtype=np.uint8)

    result = filters.apply_edge_detection(uniform.copy(), 0)

    assert result.shape == uniform.shape
    assert not result.any()


def test_edge_detection_finds_square_outline() -> None:
    square = np.zeros((32, 32, 3), dtype=np.uint8)
    square[8:24, 8:24] = 255

    result = filters.apply_edge_detection(square, 50)

    assert result.ndim == 3 and result.shape[2] == 3
    assert result.any()
    assert np.all(result[:, :, 0] == result[:, :, 2])
    assert not result[14:18, 14:18].any()


def test_red_ranges_cover_both_ends_of_the_hue_circle() -> None:
    hues = set()
    for lower, upper in filters.color_ranges(ColorName.RED):
        hues.update(range(lower[0], upper[0] + 1))

    assert set(range(0, 11)) | set(range(170, 181)) <= hues
    assert len(filters.color_ranges(ColorName.RED)) == 2
    assert len(filters.color_ranges(ColorName.GREEN)) == 1
    assert len(filters.color_ranges(ColorName.BLUE)) == 1


@pytest.mark.parametrize("hue", [0, 5, 10, 170, 175, 179])
def test_red_mask_accepts_wrapped_hues(hue: int) -> None:
    pixel = _hsv_pixel(hue)

    mask = filters.color_mask(pixel, ColorName.RED)

    assert mask[0, 0] == 255


def test_red_mask_rejects_green_hue() -> None:
    assert filters.color_mask(_hsv_pixel(60), ColorName.RED)[0, 0] == 0


@pytest.mark.parametrize("color", list(ColorName))
def test_color_detection_keeps_or_zeros_each_pixel(four_pixel_image, color: ColorName) -> None:
    result = filters.apply_color_detection(four_pixel_image, color)

    for row in range(four_pixel_image.shape[0]):
        for col in range(four_pixel_image.shape[1]):
            pixel = result[row, col]
            assert np.array_equal(pixel, four_pixel_image[row, col]) or not pixel.any()


def test_color_detection_isolates_selected_color(four_pixel_image) -> None:
    result = filters.apply_color_detection(four_pixel_image, ColorName.GREEN)

    np.testing.assert_array_equal(result[0, 1], four_pixel_image[0, 1])
    assert not result[0, 0].any()
    assert not result[1, 0].any()
    # White has no saturation and therefore matches no colour.
    assert not result[1, 1].any()


def test_color_detection_without_selection_copies_source(four_pixel_image) -> None:
    result = filters.apply_color_detection(four_pixel_image, None)

    np.testing.assert_array_equal(result, four_pixel_image)
    assert result is not four_pixel_image


def test_apply_filter_never_mutates_source(gradient_image) -> None:
    original = gradient_image.copy()
    for mode in FilterMode:
        config = FilterConfiguration(
            mode=mode,
            grayscale_intensity=0.7,
            blur_intensity=5,
            edge_threshold=40,
            color=ColorName.BLUE,
        )
        filters.apply_filter(gradient_image, config)

    np.testing.assert_array_equal(gradient_image, original)


def test_apply_filter_none_returns_clone(gradient_image) -> None:
    result = filters.apply_filter(gradient_image, FilterConfiguration(mode=FilterMode.NONE))

    np.testing.assert_array_equal(result, gradient_image)
    assert result is not gradient_image
