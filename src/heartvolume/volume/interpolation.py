from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import numba as nb

if TYPE_CHECKING:
    import numpy.typing as npt

    from heartvolume.volume.grid import VolumeGrid


@nb.njit(cache=True)
def _lerp(a: float, b: float, t: float) -> float:
    return a * (1.0 - t) + b * t


@nb.njit(cache=True)
def trilinear(
    data: npt.NDArray[np.uint8],
    n: int,
    x: float,
    y: float,
    z: float
) -> float:
    """
    Trilinearly interpolate a flat (z, y, x) occupancy buffer.

    Coordinates are in grid-index space. Queries whose base cell touches the
    upper faces of the lattice (base index >= n - 1), or lies below zero, are
    empty space and return 0.

    Args:
        data: Flat buffer of length n**3, offset ((z*n + y)*n + x).
        n: Lattice side length.
        x, y, z: Fractional grid-index coordinates.

    Returns:
        Smoothed occupancy in [0, 1].
    """
    x_base = int(math.floor(x))
    y_base = int(math.floor(y))
    z_base = int(math.floor(z))

    if x_base >= n - 1 or y_base >= n - 1 or z_base >= n - 1:
        return 0.0
    if x_base < 0 or y_base < 0 or z_base < 0:
        return 0.0

    fx = x - x_base
    fy = y - y_base
    fz = z - z_base

    plane = n * n
    i000 = (z_base * n + y_base) * n + x_base
    i010 = i000 + n
    i100 = i000 + plane
    i110 = i100 + n

    # Along x on the four edges of the cell
    c00 = _lerp(data[i000], data[i000 + 1], fx)
    c01 = _lerp(data[i010], data[i010 + 1], fx)
    c10 = _lerp(data[i100], data[i100 + 1], fx)
    c11 = _lerp(data[i110], data[i110 + 1], fx)

    # Then along y, then along z
    c0 = _lerp(c00, c01, fy)
    c1 = _lerp(c10, c11, fy)

    return _lerp(c0, c1, fz)


def sample(grid: VolumeGrid, x: float, y: float, z: float) -> float:
    """
    Smoothed occupancy of `grid` at fractional grid-index coordinates.

    Args:
        grid: The occupancy lattice to sample.
        x, y, z: Grid-index coordinates (not world coordinates).

    Returns:
        A value in [0, 1]; exactly the stored 0/1 at in-bounds lattice points.
    """
    return trilinear(grid.data, grid.grid_size, float(x), float(y), float(z))
