"""Exception taxonomy shared by the data and processing layers."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """Category attached to every failure forwarded to an error reporter."""

    DECODE_ERROR = "DecodeError"
    PROCESSING_ERROR = "ProcessingError"


class FilterStudioError(Exception):
    """Base class for all application specific failures."""


class DecodeError(FilterStudioError):
    """Raised when a file is missing, corrupt, or not a supported image."""


class EncodeError(FilterStudioError):
    """Raised when an image cannot be encoded to an interchange format."""


class ProcessingError(FilterStudioError):
    """Raised when a filter primitive rejects its inputs."""


__all__ = [
    "DecodeError",
    "EncodeError",
    "ErrorCategory",
    "FilterStudioError",
    "ProcessingError",
]
