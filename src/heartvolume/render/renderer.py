"""
Volume Renderer
===============
Orthographic ray caster for the heart occupancy grid.

Every pixel marches one ray along world +y through the lattice, one voxel layer
per step. The first step whose trilinearly smoothed occupancy exceeds the
threshold is the hit; the pixel is then shaded by the magnitude of the field
gradient at that point (steeper field -> darker grey).

Note: This module is pure NumPy/numba and does not touch the filesystem.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numba as nb

from heartvolume.config import (
    DEFAULT_HEIGHT,
    DEFAULT_THRESHOLD,
    DEFAULT_WIDTH,
    SHADING_GRADIENT_SCALE,
    WORLD_EXTENT,
    validate_image_size,
)
from heartvolume.dev import timer
from heartvolume.field import gradient_magnitude
from heartvolume.render.image import RenderedImage
from heartvolume.volume.grid import VolumeGrid
from heartvolume.volume.interpolation import trilinear

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MISS = -1


@nb.njit(cache=True)
def _ray_cast(
    data: npt.NDArray[np.uint8],
    n: int,
    scale: float,
    x: float,
    z: float,
    threshold: float
) -> int:
    """
    March a single ray at grid-index column (x, z).

    Returns:
        The 8-bit grey level of the hit, or MISS if the ray leaves the volume.
    """
    center = n // 2
    y = -WORLD_EXTENT
    while y <= WORLD_EXTENT:
        y_idx = center + y / scale
        if y_idx >= 0.0 and y_idx < n and trilinear(data, n, x, y_idx, z) > threshold:
            magnitude = gradient_magnitude(x * scale - WORLD_EXTENT, y, z * scale - WORLD_EXTENT)
            intensity = min(1.0, magnitude / SHADING_GRADIENT_SCALE)
            return int((1.0 - intensity) * 255.0 + 0.5)
        y += scale
    return MISS


@nb.njit(cache=True, parallel=True)
def _render_rows(
    data: npt.NDArray[np.uint8],
    n: int,
    scale: float,
    threshold: float,
    out: npt.NDArray[np.uint8]
) -> None:
    """
    Fill every pixel of `out` (height, width, 4).

    Each parallel iteration writes only its own image row.
    """
    height = out.shape[0]
    width = out.shape[1]
    dx = n / width
    dz = n / height
    for i in nb.prange(height):
        pz = np.int64(i)
        # World z grows upwards, image rows grow downwards
        row = height - 1 - pz
        z = pz * dz
        for px in range(width):
            grey = _ray_cast(data, n, scale, px * dx, z, threshold)
            if grey == MISS:
                grey = 0
            out[row, px, 0] = grey
            out[row, px, 1] = grey
            out[row, px, 2] = grey
            out[row, px, 3] = 255


class VolumeRenderer:
    """
    Renders images of a :class:`VolumeGrid` isosurface.
    """

    def __init__(self, grid: VolumeGrid) -> None:
        """
        Initialize the renderer with a populated grid.

        Args:
            grid: The occupancy lattice to render. It is only ever read.
        """
        self.grid = grid

    @classmethod
    def from_parameters(cls, grid_size: int, threshold: float = DEFAULT_THRESHOLD) -> VolumeRenderer:
        """Build the occupancy grid and wrap it in a renderer."""
        return cls(VolumeGrid.build(grid_size=grid_size, threshold=threshold))

    def __repr__(self) -> str:
        """String representation of the renderer."""
        return f"{self.__class__.__name__}(grid={self.grid!r})"

    @timer
    def render(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> RenderedImage:
        """
        Ray cast the grid into a width × height RGBA frame.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            threshold: A ray hits once smoothed occupancy exceeds this value.

        Raises:
            ParameterError: If width or height is not a positive integer.

        Returns:
            The fully written frame.
        """
        validate_image_size(width, height)
        grid = self.grid

        logger.info(f"Rendering {width}x{height} image from {grid.grid_size}^3 grid (threshold={threshold})...")
        pixels = np.empty((int(height), int(width), 4), dtype=np.uint8)
        _render_rows(grid.data, grid.grid_size, grid.scale, float(threshold), pixels)

        image = RenderedImage(pixels=pixels)
        logger.debug(f"Rendered {image.non_black_count} non-black pixels.")
        return image
