from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numba as nb

from heartvolume.config import grid_scale, validate_grid_size
from heartvolume.dev import timer
from heartvolume.field import scalar_field

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@nb.njit(cache=True, parallel=True)
def _fill_occupancy(
    n: int,
    scale: float,
    threshold: float,
    out: npt.NDArray[np.uint8]
) -> None:
    """
    Binarize the heart field over an n×n×n lattice into `out`.

    Each z-layer writes its own contiguous slab of the flat buffer.
    """
    # Integer center, so odd sizes are shifted by half a cell
    center = n // 2
    plane = n * n
    for i in nb.prange(n):
        z = np.int64(i)
        zs = (z - center) * scale
        for y in range(n):
            ys = (y - center) * scale
            row = z * plane + y * n
            for x in range(n):
                xs = (x - center) * scale
                if scalar_field(xs, ys, zs) <= threshold:
                    out[row + x] = 1
                else:
                    out[row + x] = 0


class VolumeGrid:
    """
    Dense cubic occupancy lattice of the heart surface.

    Cell (z, y, x) is 1 when the field at its world position is at or below
    the threshold, 0 otherwise. Storage is a single flat, read-only uint8
    buffer with offset ((z*N + y)*N + x).
    """

    def __init__(
        self,
        grid_size: int,
        threshold: float,
        data: npt.NDArray[np.uint8],
    ) -> None:
        """
        Wrap an already populated occupancy buffer.

        Use :meth:`build` to sample the field; this constructor only takes
        ownership of `data` and freezes it.

        Args:
            grid_size: Lattice side length N (> 1).
            threshold: Isosurface cutoff the buffer was built with.
            data: Flat buffer of N**3 occupancy values.
        """
        validate_grid_size(grid_size)
        data = np.ascontiguousarray(data, dtype=np.uint8).reshape(-1)
        if data.size != grid_size ** 3:
            raise ValueError(
                f"Occupancy buffer holds {data.size} cells, expected {grid_size ** 3} "
                f"for a grid of size {grid_size}."
            )
        data.flags.writeable = False

        self.grid_size = int(grid_size)
        self.threshold = float(threshold)
        self.scale = grid_scale(self.grid_size)
        self.data = data

    @classmethod
    @timer
    def build(cls, grid_size: int, threshold: float = 0.0) -> VolumeGrid:
        """
        Sample the heart field over the lattice and binarize it.

        Args:
            grid_size: Lattice side length N (> 1).
            threshold: Field values at or below this are inside.

        Raises:
            ParameterError: If `grid_size` is not an integer greater than 1.

        Returns:
            A fully populated, immutable grid.
        """
        validate_grid_size(grid_size)
        n = int(grid_size)
        scale = grid_scale(n)

        logger.info(f"Building {n}^3 occupancy grid (threshold={threshold}, scale={scale:.6f})...")
        data = np.empty(n * n * n, dtype=np.uint8)
        _fill_occupancy(n, scale, float(threshold), data)

        grid = cls(grid_size=n, threshold=threshold, data=data)
        logger.debug(f"Grid built: {grid.occupied_count} of {data.size} cells inside the surface.")
        return grid

    def __repr__(self) -> str:
        """String representation of the grid."""
        return (f"{self.__class__.__name__}(grid_size={self.grid_size}, "
                f"threshold={self.threshold}, scale={self.scale:.6f})")

    @property
    def shape(self) -> tuple[int, int, int]:
        """Lattice shape in (z, y, x) order."""
        return self.grid_size, self.grid_size, self.grid_size

    @property
    def occupied_count(self) -> int:
        """Number of cells inside the surface."""
        return int(np.count_nonzero(self.data))

    @property
    def center_index(self) -> int:
        """Lattice index that maps to world coordinate 0."""
        return self.grid_size // 2

    def offset(self, x: int, y: int, z: int) -> int:
        """Flat buffer offset of cell (z, y, x)."""
        n = self.grid_size
        for name, value in (("x", x), ("y", y), ("z", z)):
            if not 0 <= value < n:
                raise IndexError(f"Index {name}={value} out of range for grid of size {n}.")
        return (z * n + y) * n + x

    def occupancy(self, x: int, y: int, z: int) -> int:
        """Stored 0/1 value of cell (z, y, x)."""
        return int(self.data[self.offset(x, y, z)])

    def world_coordinate(self, index: int) -> float:
        """World coordinate of a lattice index along any axis."""
        return (index - self.center_index) * self.scale

    def as_array(self) -> npt.NDArray[np.uint8]:
        """Read-only (z, y, x) view of the occupancy buffer."""
        return self.data.reshape(self.shape)
