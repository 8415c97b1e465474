"""Unit tests for the :mod:`filter_studio.data.image_io` helpers."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

PIL_Image = pytest.importorskip("PIL.Image", reason="Pillow is required for image tests")

from filter_studio.data import image_io
from filter_studio.errors import DecodeError, EncodeError
from tests._recorders import decode_png


def test_decode_png_round_trips_pixels(write_image, four_pixel_image) -> None:
    path = write_image(four_pixel_image)

    image = image_io.decode_image(path)

    assert image.dtype == np.uint8
    np.testing.assert_array_equal(image, four_pixel_image)


def test_decode_expands_grayscale_to_three_channels(write_image) -> None:
    gray = np.arange(16, dtype=np.uint8).reshape(4, 4)
    path = write_image(gray, "gray.png")

    image = image_io.decode_image(path)

    assert image.shape == (4, 4, 3)
    np.testing.assert_array_equal(image[:, :, 0], gray)
    np.testing.assert_array_equal(image[:, :, 2], gray)


def test_decode_gif_through_pillow(tmp_path: Path) -> None:
    rgb = np.zeros((4, 4, 3), dtype=np.uint8)
    rgb[:, :, 0] = 255  # pure red in RGB order
    path = tmp_path / "red.gif"
    PIL_Image.fromarray(rgb).save(path)

    image = image_io.decode_image(path)

    assert image.shape == (4, 4, 3)
    np.testing.assert_array_equal(image[0, 0], [0, 0, 255])


def test_decode_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DecodeError):
        image_io.decode_image(tmp_path / "missing.png")


def test_decode_corrupt_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")

    with pytest.raises(DecodeError):
        image_io.decode_image(path)


def test_decode_empty_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "empty.jpg"
    path.write_bytes(b"")

    with pytest.raises(DecodeError):
        image_io.decode_image(path)


def test_decode_unsupported_suffix_raises(tmp_path: Path, four_pixel_image) -> None:
    path = tmp_path / "image.tiff"
    assert cv2.imwrite(str(path), four_pixel_image)

    with pytest.raises(DecodeError):
        image_io.decode_image(path)


def test_to_bgr_drops_alpha() -> None:
    bgra = np.zeros((2, 2, 4), dtype=np.uint8)
    bgra[..., 1] = 200
    bgra[..., 3] = 17

    image = image_io.to_bgr(bgra)

    assert image.shape == (2, 2, 3)
    assert np.all(image[..., 1] == 200)


def test_to_bgr_rejects_non_uint8() -> None:
    with pytest.raises(DecodeError):
        image_io.to_bgr(np.zeros((2, 2, 3), dtype=np.float32))


def test_encode_png_is_lossless(four_pixel_image) -> None:
    payload = image_io.encode_png(four_pixel_image)

    assert payload.startswith(b"\x89PNG")
    np.testing.assert_array_equal(decode_png(payload), four_pixel_image)


def test_encode_rejects_unknown_format(four_pixel_image) -> None:
    with pytest.raises(EncodeError):
        image_io.encode_image(four_pixel_image, ".webp")


def test_save_image_writes_by_suffix(tmp_path: Path, four_pixel_image) -> None:
    destination = image_io.save_image(four_pixel_image, tmp_path / "out" / "saved.bmp")

    assert destination.exists()
    np.testing.assert_array_equal(image_io.decode_image(destination), four_pixel_image)
