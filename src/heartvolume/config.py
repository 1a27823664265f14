"""
Configuration & Defaults
========================
This module serves as the central registry for default parameters and global
constants of the renderer.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (grid size, gradient step, shading
   scale) from being scattered throughout the numerical code.
2. Validation: It owns the single settings object handed from the command line
   to the core, and rejects parameters the core cannot handle.

Exports:
    DEFAULT_GRID_SIZE (int): Lattice side length used when none is given.
    DEFAULT_OUTPUT_PATH (str): File name of the rendered image.
    RenderSettings: Frozen bundle of all parameters of one invocation.
"""
from __future__ import annotations

import math
import numbers
import os
from dataclasses import dataclass
from typing import Optional

from heartvolume.errors import ParameterError


# Global Constants
DEFAULT_GRID_SIZE: int = 256
DEFAULT_WIDTH: int = 512
DEFAULT_HEIGHT: int = 512
DEFAULT_THRESHOLD: float = 0.0
DEFAULT_OUTPUT_PATH: str = "result.tiff"

# Half the side of the world cube [-2, 2]^3 sampled by the lattice
WORLD_EXTENT: float = 2.0

# Central-difference step of the field gradient
GRADIENT_EPSILON: float = 0.01

# Gradient magnitude that maps to full (black) shading intensity
SHADING_GRADIENT_SCALE: float = 10.0


def grid_scale(grid_size: int) -> float:
    """World units per lattice step for a grid of side `grid_size`."""
    return 2.0 * WORLD_EXTENT / (grid_size - 1)


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ParameterError(f"Invalid value for '{name}': {raw!r} is not an integer.") from None


def _parse_float(name: str, raw: Optional[str], default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ParameterError(f"Invalid value for '{name}': {raw!r} is not a number.") from None


@dataclass(frozen=True)
class RenderSettings:
    """
    All parameters of a single grid build + render + write.

    Attributes:
        grid_size: Side length of the cubic occupancy lattice (> 1).
        width: Output image width in pixels (> 0).
        height: Output image height in pixels (> 0).
        threshold: Isosurface cutoff, used both for the grid and the ray march.
        output_path: Destination of the encoded image.
    """
    grid_size: int = DEFAULT_GRID_SIZE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    threshold: float = DEFAULT_THRESHOLD
    output_path: str = DEFAULT_OUTPUT_PATH

    @classmethod
    def from_arguments(
        cls,
        grid_size: Optional[str] = None,
        width: Optional[str] = None,
        height: Optional[str] = None,
        threshold: Optional[str] = None,
        output_path: Optional[str] = None,
    ) -> RenderSettings:
        """
        Build validated settings from raw command-line strings.

        Any argument left as None falls back to its default.

        Raises:
            ParameterError: If a value is malformed or out of range.
        """
        settings = cls(
            grid_size=_parse_int("grid_size", grid_size, DEFAULT_GRID_SIZE),
            width=_parse_int("width", width, DEFAULT_WIDTH),
            height=_parse_int("height", height, DEFAULT_HEIGHT),
            threshold=_parse_float("threshold", threshold, DEFAULT_THRESHOLD),
            output_path=output_path or DEFAULT_OUTPUT_PATH,
        )
        settings.validate()
        return settings

    @property
    def scale(self) -> float:
        return grid_scale(self.grid_size)

    @property
    def absolute_output_path(self) -> str:
        return os.path.abspath(self.output_path)

    def validate(self) -> None:
        """
        Check the invariants the numerical core relies on.

        Raises:
            ParameterError: If any parameter is out of range.
        """
        validate_grid_size(self.grid_size)
        validate_image_size(self.width, self.height)
        if not math.isfinite(self.threshold):
            raise ParameterError(f"Threshold must be a finite number, got {self.threshold}.")


def validate_grid_size(grid_size: int) -> None:
    """Reject lattice sizes for which the world scale is undefined."""
    if isinstance(grid_size, bool) or not isinstance(grid_size, numbers.Integral):
        raise ParameterError(f"Grid size must be an integer, got {grid_size!r}.")
    if grid_size <= 1:
        raise ParameterError(f"Grid size must be greater than 1, got {grid_size}.")


def validate_image_size(width: int, height: int) -> None:
    """Reject empty or negative image dimensions."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ParameterError(f"Image {name} must be an integer, got {value!r}.")
        if value <= 0:
            raise ParameterError(f"Image {name} must be positive, got {value}.")
