import os

import pytest

from heartvolume.config import (
    DEFAULT_GRID_SIZE,
    DEFAULT_HEIGHT,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_THRESHOLD,
    DEFAULT_WIDTH,
    RenderSettings,
)
from heartvolume.errors import ParameterError


def test_defaults():
    settings = RenderSettings.from_arguments()
    assert settings == RenderSettings()
    assert settings.grid_size == DEFAULT_GRID_SIZE == 256
    assert (settings.width, settings.height) == (DEFAULT_WIDTH, DEFAULT_HEIGHT) == (512, 512)
    assert settings.threshold == DEFAULT_THRESHOLD == 0.0
    assert settings.output_path == DEFAULT_OUTPUT_PATH == "result.tiff"


def test_partial_arguments_fall_back_independently():
    settings = RenderSettings.from_arguments(grid_size="64")
    assert settings.grid_size == 64
    assert settings.width == DEFAULT_WIDTH
    assert settings.height == DEFAULT_HEIGHT

    settings = RenderSettings.from_arguments(grid_size="64", width="100")
    assert (settings.width, settings.height) == (100, DEFAULT_HEIGHT)


def test_parses_all_arguments():
    settings = RenderSettings.from_arguments("32", "640", "480", "0.25", "out.png")
    assert settings == RenderSettings(32, 640, 480, 0.25, "out.png")
    assert settings.scale == pytest.approx(4.0 / 31.0)
    assert settings.absolute_output_path == os.path.abspath("out.png")


@pytest.mark.parametrize("kwargs", [
    {"grid_size": "abc"},
    {"grid_size": "3.5"},
    {"grid_size": "1"},
    {"grid_size": "0"},
    {"width": "wide"},
    {"width": "0"},
    {"height": "-2"},
    {"threshold": "low"},
    {"threshold": "nan"},
    {"threshold": "inf"},
])
def test_invalid_arguments(kwargs):
    with pytest.raises(ParameterError):
        RenderSettings.from_arguments(**kwargs)


def test_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        RenderSettings(grid_size=1).validate()


def test_settings_are_frozen():
    settings = RenderSettings()
    with pytest.raises(AttributeError):
        settings.grid_size = 10
