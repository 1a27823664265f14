import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from heartvolume.render.renderer import VolumeRenderer
from heartvolume.volume.grid import VolumeGrid


@pytest.fixture(scope="session")
def heart_grid() -> VolumeGrid:
    return VolumeGrid.build(grid_size=16, threshold=0.0)


@pytest.fixture(scope="session")
def heart_renderer(heart_grid: VolumeGrid) -> VolumeRenderer:
    return VolumeRenderer(heart_grid)


@pytest.fixture
def full_grid() -> VolumeGrid:
    """4x4x4 grid with every cell inside."""
    return VolumeGrid(grid_size=4, threshold=0.0, data=np.ones(4 ** 3, dtype=np.uint8))


@pytest.fixture
def single_cell_grid():
    """Factory for an n^3 grid with only cell (z, y, x) inside."""
    def make(n: int, x: int, y: int, z: int) -> VolumeGrid:
        data = np.zeros(n ** 3, dtype=np.uint8)
        data[(z * n + y) * n + x] = 1
        return VolumeGrid(grid_size=n, threshold=0.0, data=data)
    return make
