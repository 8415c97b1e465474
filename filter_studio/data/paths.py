"""Validation and enumeration helpers for user supplied image paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({"png", "jpg", "jpeg", "bmp", "gif"})


class PathValidationError(ValueError):
    """Raised when a user-supplied path cannot be accepted."""


def _normalise_path(path: os.PathLike[str] | str) -> Path:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    try:
        resolved = candidate.resolve(strict=False)
    except RuntimeError as exc:  # pragma: no cover - symlink loops
        raise PathValidationError(f"Unable to resolve path '{candidate}': {exc}") from exc
    return resolved


def has_supported_extension(
    path: os.PathLike[str] | str, extensions: Iterable[str] = SUPPORTED_EXTENSIONS
) -> bool:
    """Return ``True`` when the suffix of ``path`` is one of ``extensions``."""

    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix in {ext.lower().lstrip(".") for ext in extensions}


def validate_image_path(path: os.PathLike[str] | str) -> Path:
    """Normalise ``path`` and ensure it names an existing, supported image file."""

    resolved = _normalise_path(path)
    if not resolved.exists():
        raise PathValidationError(f"Path does not exist: {resolved}")
    if resolved.is_dir():
        raise PathValidationError("A directory path was supplied where files are required")
    if not has_supported_extension(resolved):
        raise PathValidationError(f"Unsupported image format: {resolved.suffix or '<none>'}")
    return resolved


def list_image_files(directory: os.PathLike[str] | str) -> list[Path]:
    """Return the supported image files directly inside ``directory``, sorted by name.

    Subdirectories are not traversed.
    """

    resolved = _normalise_path(directory)
    if not resolved.is_dir():
        raise PathValidationError(f"Not a directory: {resolved}")
    files = [
        entry
        for entry in resolved.iterdir()
        if entry.is_file() and has_supported_extension(entry)
    ]
    return sorted(files, key=lambda entry: entry.name.lower())


def file_dialog_filter() -> str:
    """Return a Qt file dialog filter string for the supported extensions."""

    patterns = " ".join(f"*.{ext}" for ext in sorted(SUPPORTED_EXTENSIONS))
    return f"Image files ({patterns});;All files (*)"


__all__ = [
    "SUPPORTED_EXTENSIONS",
    "PathValidationError",
    "file_dialog_filter",
    "has_supported_extension",
    "list_image_files",
    "validate_image_path",
]
