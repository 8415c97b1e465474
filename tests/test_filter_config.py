from __future__ import annotations

import dataclasses

import pytest

from filter_studio.errors import ProcessingError
from filter_studio.processing import ColorName, FilterConfiguration, FilterMode


def test_configuration_is_immutable() -> None:
    config = FilterConfiguration()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.blur_intensity = 3  # type: ignore[misc]


def test_clamped_limits_every_parameter() -> None:
    config = FilterConfiguration(
        mode=FilterMode.GAUSSIAN_BLUR,
        grayscale_intensity=1.7,
        blur_intensity=80,
        edge_threshold=-4,
    ).clamped()

    assert config.grayscale_intensity == 1.0
    assert config.blur_intensity == 50
    assert config.edge_threshold == 0


def test_clamped_parses_textual_values() -> None:
    config = FilterConfiguration(
        mode="ColorDetection",  # type: ignore[arg-type]
        grayscale_intensity="0.25",  # type: ignore[arg-type]
        blur_intensity="4",  # type: ignore[arg-type]
        color="red",  # type: ignore[arg-type]
    ).clamped()

    assert config.mode is FilterMode.COLOR_DETECTION
    assert config.grayscale_intensity == pytest.approx(0.25)
    assert config.blur_intensity == 4
    assert config.color is ColorName.RED


@pytest.mark.parametrize("value", [None, "", "None", "none"])
def test_color_parse_treats_empty_selection_as_none(value) -> None:
    assert ColorName.parse(value) is None


def test_unknown_mode_is_a_processing_error() -> None:
    with pytest.raises(ProcessingError):
        FilterConfiguration(mode="Sepia").clamped()  # type: ignore[arg-type]


def test_nan_intensity_is_rejected() -> None:
    with pytest.raises(ProcessingError):
        FilterConfiguration(grayscale_intensity=float("nan")).clamped()


def test_dict_round_trip() -> None:
    config = FilterConfiguration(
        mode=FilterMode.EDGE_DETECTION,
        grayscale_intensity=0.5,
        blur_intensity=9,
        edge_threshold=60,
        color=ColorName.BLUE,
    )

    assert FilterConfiguration.from_dict(config.to_dict()) == config
    assert config.to_dict()["mode"] == "EdgeDetection"
    assert FilterConfiguration().to_dict()["color"] == "None"
