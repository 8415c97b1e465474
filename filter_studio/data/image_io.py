"""Image decode and encode helpers.

Images are handled as ``uint8`` :class:`numpy.ndarray` buffers in OpenCV's
BGR channel order. Decoding goes through :func:`cv2.imdecode` so that paths
with non-ASCII characters work on every platform; files the OpenCV build
cannot decode (GIF on most wheels) are handed to :mod:`Pillow` instead.

Every decoded image is normalised to three channels so the rest of the
application only ever deals with one source layout.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from filter_studio.errors import DecodeError, EncodeError

from .paths import PathValidationError, validate_image_path


LOGGER = logging.getLogger(__name__)

_ENCODABLE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp"}


def decode_image(path: os.PathLike[str] | str) -> np.ndarray:
    """Decode ``path`` into a three channel BGR image.

    Raises :class:`DecodeError` when the file is missing, unreadable, or not
    an image either decoder understands.
    """

    try:
        resolved = validate_image_path(path)
    except PathValidationError as exc:
        raise DecodeError(str(exc)) from exc

    try:
        raw = np.fromfile(resolved, dtype=np.uint8)
    except OSError as exc:
        raise DecodeError(f"Unable to read {resolved.name}: {exc}") from exc
    if raw.size == 0:
        raise DecodeError(f"{resolved.name} is empty")

    image = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    if image is None:
        LOGGER.debug(
            "OpenCV could not decode file, trying Pillow",
            extra={"component": "image_io", "suffix": resolved.suffix},
        )
        image = _decode_with_pillow(resolved)
    return to_bgr(image)


def _decode_with_pillow(path: Path) -> np.ndarray:
    try:
        with Image.open(path) as img:
            rgb = np.array(img.convert("RGB"))
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeError(f"{path.name} is not a decodable image") from exc
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def to_bgr(image: np.ndarray) -> np.ndarray:
    """Return ``image`` as a contiguous three channel ``uint8`` array."""

    if image.dtype != np.uint8:
        raise DecodeError(f"Unsupported pixel type: {image.dtype}")
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.ndim == 3 and image.shape[2] == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2BGR)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    if image.ndim == 3 and image.shape[2] == 3:
        return np.ascontiguousarray(image)
    raise DecodeError(f"Unsupported image shape: {image.shape}")


def encode_png(image: np.ndarray) -> bytes:
    """Encode ``image`` as PNG bytes for the display layer."""

    return encode_image(image, ".png")


def encode_image(image: np.ndarray, suffix: str) -> bytes:
    """Encode ``image`` using the codec selected by ``suffix``."""

    suffix = suffix.lower() if suffix.startswith(".") else f".{suffix.lower()}"
    if suffix not in _ENCODABLE_SUFFIXES:
        raise EncodeError(f"Unsupported image format for saving: {suffix}")
    try:
        ok, buffer = cv2.imencode(suffix, image)
    except cv2.error as exc:
        raise EncodeError(f"Failed to encode image as {suffix}: {exc}") from exc
    if not ok:
        raise EncodeError(f"Failed to encode image as {suffix}")
    return buffer.tobytes()


def save_image(image: np.ndarray, path: os.PathLike[str] | str) -> Path:
    """Encode ``image`` according to the suffix of ``path`` and write it."""

    destination = Path(path).expanduser()
    payload = encode_image(image, destination.suffix or ".png")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(payload)
    except OSError as exc:
        raise EncodeError(f"Unable to write {destination.name}: {exc}") from exc
    LOGGER.info("Image saved", extra={"component": "image_io", "bytes": len(payload)})
    return destination


__all__ = ["decode_image", "encode_image", "encode_png", "save_image", "to_bgr"]
