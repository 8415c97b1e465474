"""Data layer utilities for image file input and output."""

from . import image_io
from .image_io import decode_image, encode_image, encode_png, save_image, to_bgr
from .paths import (
    SUPPORTED_EXTENSIONS,
    PathValidationError,
    file_dialog_filter,
    has_supported_extension,
    list_image_files,
    validate_image_path,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "PathValidationError",
    "decode_image",
    "encode_image",
    "encode_png",
    "file_dialog_filter",
    "has_supported_extension",
    "image_io",
    "list_image_files",
    "save_image",
    "to_bgr",
    "validate_image_path",
]
