"""Value types describing a single filter run."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from filter_studio.errors import ProcessingError


GRAYSCALE_RANGE = (0.0, 1.0)
BLUR_RANGE = (0, 50)
EDGE_THRESHOLD_RANGE = (0, 255)


class FilterMode(Enum):
    """Filter applied to the working image."""

    NONE = "None"
    GRAYSCALE = "Grayscale"
    GAUSSIAN_BLUR = "GaussianBlur"
    EDGE_DETECTION = "EdgeDetection"
    COLOR_DETECTION = "ColorDetection"

    @classmethod
    def parse(cls, value: Any) -> "FilterMode":
        if isinstance(value, cls):
            return value
        for member in cls:
            if value in (member.value, member.name):
                return member
        raise ProcessingError(f"Unknown filter mode: {value!r}")


class ColorName(Enum):
    """Named colour ranges available to colour detection."""

    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"

    @classmethod
    def parse(cls, value: Any) -> Optional["ColorName"]:
        """Return the matching member, or ``None`` for an empty selection."""

        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip()
        if not text or text.lower() == "none":
            return None
        for member in cls:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ProcessingError(f"Unknown colour selection: {value!r}")


def _clamp(value: Any, low: float, high: float, cast: type) -> Any:
    try:
        number = cast(value)
    except (TypeError, ValueError) as exc:
        raise ProcessingError(f"Invalid numeric parameter: {value!r}") from exc
    if number != number:  # NaN
        raise ProcessingError("Parameters may not be NaN")
    return cast(min(high, max(low, number)))


@dataclass(frozen=True)
class FilterConfiguration:
    """Snapshot of the controls taken when a run starts."""

    mode: FilterMode = FilterMode.NONE
    grayscale_intensity: float = 0.0
    blur_intensity: int = 0
    edge_threshold: int = 100
    color: Optional[ColorName] = None

    def clamped(self) -> "FilterConfiguration":
        """Return a copy with every parameter coerced into its domain."""

        return replace(
            self,
            mode=FilterMode.parse(self.mode),
            grayscale_intensity=_clamp(self.grayscale_intensity, *GRAYSCALE_RANGE, float),
            blur_intensity=_clamp(self.blur_intensity, *BLUR_RANGE, int),
            edge_threshold=_clamp(self.edge_threshold, *EDGE_THRESHOLD_RANGE, int),
            color=ColorName.parse(self.color),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "grayscale_intensity": self.grayscale_intensity,
            "blur_intensity": self.blur_intensity,
            "edge_threshold": self.edge_threshold,
            "color": self.color.value if self.color is not None else "None",
        }

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "FilterConfiguration":
        defaults = cls()
        config = cls(
            mode=values.get("mode", defaults.mode),
            grayscale_intensity=values.get("grayscale_intensity", defaults.grayscale_intensity),
            blur_intensity=values.get("blur_intensity", defaults.blur_intensity),
            edge_threshold=values.get("edge_threshold", defaults.edge_threshold),
            color=values.get("color", defaults.color),
        )
        return config.clamped()


__all__ = [
    "BLUR_RANGE",
    "EDGE_THRESHOLD_RANGE",
    "GRAYSCALE_RANGE",
    "ColorName",
    "FilterConfiguration",
    "FilterMode",
]
