import numpy as np
import pytest

from heartvolume.errors import ParameterError
from heartvolume.field import scalar_field
from heartvolume.volume.grid import VolumeGrid


def test_build_attributes(heart_grid):
    assert heart_grid.grid_size == 16
    assert heart_grid.threshold == 0.0
    assert heart_grid.scale == pytest.approx(4.0 / 15.0)
    assert heart_grid.data.shape == (16 ** 3,)
    assert heart_grid.data.dtype == np.uint8
    assert set(np.unique(heart_grid.data)) <= {0, 1}


def test_grid_is_read_only(heart_grid):
    with pytest.raises(ValueError):
        heart_grid.data[0] = 1
    with pytest.raises(ValueError):
        heart_grid.as_array()[0, 0, 0] = 1


def test_center_inside_and_corner_outside(heart_grid):
    c = heart_grid.center_index
    assert heart_grid.world_coordinate(c) == 0.0
    assert heart_grid.occupancy(c, c, c) == 1
    assert heart_grid.occupancy(0, 0, 0) == 0
    assert 0 < heart_grid.occupied_count < heart_grid.data.size


@pytest.mark.parametrize("n", [9, 12])
def test_occupancy_matches_field(n):
    grid = VolumeGrid.build(grid_size=n, threshold=0.0)
    c = n // 2
    for z in range(n):
        for y in range(n):
            for x in range(n):
                inside = scalar_field((x - c) * grid.scale, (y - c) * grid.scale, (z - c) * grid.scale) <= 0.0
                assert grid.occupancy(x, y, z) == int(inside)


def test_flat_layout_is_z_y_x(heart_grid):
    n = heart_grid.grid_size
    volume = heart_grid.as_array()
    assert volume.shape == (n, n, n)
    for x, y, z in [(1, 2, 3), (8, 5, 11), (15, 0, 7)]:
        assert volume[z, y, x] == heart_grid.data[(z * n + y) * n + x]
        assert heart_grid.offset(x, y, z) == (z * n + y) * n + x


@pytest.mark.parametrize("n", [15, 16])
def test_mirror_symmetry_in_x_and_y(n):
    volume = VolumeGrid.build(grid_size=n, threshold=0.0).as_array()
    c = n // 2
    for k in range(0, min(c, n - 1 - c) + 1):
        np.testing.assert_array_equal(volume[:, :, c + k], volume[:, :, c - k])
        np.testing.assert_array_equal(volume[:, c + k, :], volume[:, c - k, :])


def test_higher_threshold_grows_the_volume():
    low = VolumeGrid.build(grid_size=12, threshold=0.0)
    high = VolumeGrid.build(grid_size=12, threshold=0.5)
    assert high.occupied_count >= low.occupied_count
    # Every inside cell stays inside
    assert np.all(high.data >= low.data)


def test_build_is_deterministic():
    a = VolumeGrid.build(grid_size=10, threshold=0.0)
    b = VolumeGrid.build(grid_size=10, threshold=0.0)
    assert a.data.tobytes() == b.data.tobytes()


@pytest.mark.parametrize("grid_size", [1, 0, -4, 2.5, True])
def test_invalid_grid_size(grid_size):
    with pytest.raises(ParameterError):
        VolumeGrid.build(grid_size=grid_size)


def test_buffer_size_must_match():
    with pytest.raises(ValueError):
        VolumeGrid(grid_size=4, threshold=0.0, data=np.zeros(10, dtype=np.uint8))


def test_offset_out_of_range(heart_grid):
    with pytest.raises(IndexError):
        heart_grid.offset(16, 0, 0)
    with pytest.raises(IndexError):
        heart_grid.occupancy(0, -1, 0)


def test_repr(heart_grid):
    assert "grid_size=16" in repr(heart_grid)
