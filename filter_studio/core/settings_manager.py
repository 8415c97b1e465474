"""Settings manager built on top of QSettings with JSON import/export support."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from PyQt5.QtCore import QSettings

from filter_studio.errors import ProcessingError
from filter_studio.processing.config import FilterConfiguration


DEFAULT_SETTINGS: Dict[str, Any] = {
    "filters/mode": "None",
    "filters/grayscale_intensity": 0.0,
    "filters/blur_intensity": 0,
    "filters/edge_threshold": 100,
    "filters/color": "None",
    "paths/last_directory": "",
}

_FILTER_PREFIX = "filters/"


class SettingsManager:
    """High level interface around QSettings supporting JSON serialisation.

    Passing ``path`` stores the settings in an INI file instead of the
    platform's native location.
    """

    def __init__(
        self,
        organization: str = "FilterStudio",
        application: str = "FilterStudio",
        *,
        path: Optional[os.PathLike] = None,
    ) -> None:
        if path is not None:
            self._settings = QSettings(str(path), QSettings.IniFormat)
        else:
            self._settings = QSettings(organization, application)
        self.organization = organization
        self.application = application

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        if default is None:
            default = DEFAULT_SETTINGS.get(key)
        value = self._settings.value(key, default)
        if default is not None and value is not None and not isinstance(value, type(default)):
            value = self._coerce(value, type(default), default)
        return value

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def remove(self, key: str) -> None:
        self._settings.remove(key)
        self._settings.sync()

    def clear(self) -> None:
        self._settings.clear()
        self._settings.sync()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key in self._all_keys():
            result[key] = self.get(key)
        return result

    def from_dict(self, values: Dict[str, Any], *, clear: bool = False) -> None:
        if clear:
            self.clear()
        for key, value in values.items():
            self._settings.setValue(key, value)
        self._settings.sync()

    @property
    def backend(self) -> QSettings:
        """Return the underlying :class:`QSettings` object."""

        return self._settings

    # ------------------------------------------------------------------
    # Typed accessors
    def load_filter_configuration(self) -> FilterConfiguration:
        """Return the stored filter controls, falling back to defaults when invalid."""

        values = {
            key[len(_FILTER_PREFIX):]: self.get(key)
            for key in DEFAULT_SETTINGS
            if key.startswith(_FILTER_PREFIX)
        }
        try:
            return FilterConfiguration.from_dict(values)
        except ProcessingError:
            return FilterConfiguration()

    def save_filter_configuration(self, config: FilterConfiguration) -> None:
        for name, value in config.to_dict().items():
            self._settings.setValue(f"{_FILTER_PREFIX}{name}", value)
        self._settings.sync()

    def last_directory(self) -> Optional[Path]:
        value = self.get("paths/last_directory")
        return Path(value) if value else None

    def set_last_directory(self, directory: os.PathLike) -> None:
        self.set("paths/last_directory", str(directory))

    # ------------------------------------------------------------------
    # JSON import/export
    def export_json(self, path: Path) -> None:
        path = Path(path)
        data = self.to_dict()
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)

    def import_json(self, path: Path, *, clear: bool = False) -> None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("Settings JSON must describe an object")
        self.from_dict(data, clear=clear)

    def _all_keys(self) -> List[str]:
        return list(self._settings.allKeys())

    @staticmethod
    def _coerce(value: Any, target: type, default: Any) -> Any:
        # INI backed settings hand every scalar back as a string.
        try:
            if target is bool:
                return str(value).lower() in ("true", "1")
            return target(value)
        except (TypeError, ValueError):
            return default
