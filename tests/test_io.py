import os

import numpy as np
import pytest
import pyvista as pv
from PIL import Image

from heartvolume.errors import EncodingError
from heartvolume.io import ImageWriter


@pytest.fixture(scope="module")
def small_image(heart_renderer):
    return heart_renderer.render(width=32, height=24)


def test_save_tiff_round_trip(small_image, tmp_path):
    path = ImageWriter.save(small_image, str(tmp_path / "result.tiff"))

    assert os.path.isabs(path)
    assert os.path.exists(path)
    with Image.open(path) as written:
        assert written.format == "TIFF"
        assert written.mode == "RGBA"
        assert written.size == (32, 24)
        assert np.array_equal(np.asarray(written), small_image.pixels)


def test_save_with_explicit_format(small_image, tmp_path):
    path = ImageWriter.save(small_image, str(tmp_path / "frame.img"), image_format="PNG")
    with Image.open(path) as written:
        assert written.format == "PNG"


def test_save_relative_path_returns_absolute(small_image, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = ImageWriter.save(small_image, "relative.png")
    assert path == str(tmp_path / "relative.png")


def test_save_to_missing_directory(small_image, tmp_path):
    with pytest.raises(EncodingError) as excinfo:
        ImageWriter.save(small_image, str(tmp_path / "missing" / "result.tiff"))
    assert isinstance(excinfo.value, OSError)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_save_unknown_format(small_image, tmp_path):
    with pytest.raises(EncodingError):
        ImageWriter.save(small_image, str(tmp_path / "result.notanimage"))
    assert not (tmp_path / "result.notanimage").exists()


def test_export_volume(heart_grid, tmp_path):
    path = ImageWriter.export_volume(heart_grid, str(tmp_path / "heart.vti"))

    volume = pv.read(path)
    n = heart_grid.grid_size
    assert tuple(volume.dimensions) == (n, n, n)
    assert volume.spacing[0] == pytest.approx(heart_grid.scale)
    assert volume.origin[0] == pytest.approx(heart_grid.world_coordinate(0))
    occupancy = np.asarray(volume.point_data["occupancy"])
    assert np.array_equal(occupancy, heart_grid.data)


@pytest.mark.parametrize("name", ["heart.tiff", os.path.join("missing", "heart.vti")])
def test_export_volume_rejects_bad_targets(heart_grid, tmp_path, name):
    with pytest.raises(EncodingError):
        ImageWriter.export_volume(heart_grid, str(tmp_path / name))
