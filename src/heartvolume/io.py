"""
Input/Output Manager
Writes rendered images (Pillow) and occupancy volumes (pyvista) to disk.
"""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Optional

import pyvista as pv

from heartvolume.errors import EncodingError

if TYPE_CHECKING:
    from heartvolume.render.image import RenderedImage
    from heartvolume.volume.grid import VolumeGrid

# Get module logger
logger = logging.getLogger(__name__)

VOLUME_EXTENSIONS = (".vti", ".vtk")


class ImageWriter:

    @staticmethod
    def save(image: RenderedImage, filepath: str, image_format: Optional[str] = None) -> str:
        """
        Encode a rendered frame to a raster file.

        Args:
            image: The frame to write.
            filepath: Destination path. The format is taken from the extension
                      unless `image_format` is given (e.g. "TIFF", "PNG").
            image_format: Optional explicit Pillow format name.

        Raises:
            EncodingError: If the file cannot be written or the format is unknown.

        Returns:
            Absolute path of the written file.
        """
        abs_path = os.path.abspath(filepath)
        logger.info(f"Saving {image.width}x{image.height} image to: {abs_path}")
        try:
            image.to_pil().save(abs_path, format=image_format)
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to save image '{abs_path}': {e}")
            raise EncodingError(
                f"Unable to save the image file '{abs_path}'. Check the file path and permissions. ({e})"
            ) from e

        logger.debug(f"Image written ({os.path.getsize(abs_path)} bytes).")
        return abs_path

    @staticmethod
    def export_volume(grid: VolumeGrid, filepath: str) -> str:
        """
        Export the occupancy lattice as a VTK image for inspection in ParaView.

        Point data "occupancy" holds the 0/1 cells; spacing and origin place the
        lattice in the same world coordinates the grid was sampled in.

        Raises:
            EncodingError: If the extension is not a VTK image format or the
                           file cannot be written.

        Returns:
            Absolute path of the written file.
        """
        abs_path = os.path.abspath(filepath)
        ext = os.path.splitext(abs_path)[1].lower()
        if ext not in VOLUME_EXTENSIONS:
            raise EncodingError(
                f"Unsupported volume format '{ext}'. Use one of: {', '.join(VOLUME_EXTENSIONS)}."
            )

        parent = os.path.dirname(abs_path)
        if not os.path.isdir(parent):
            raise EncodingError(f"Output directory does not exist: {parent}")

        n = grid.grid_size
        origin = grid.world_coordinate(0)
        volume = pv.ImageData(
            dimensions=(n, n, n),
            spacing=(grid.scale, grid.scale, grid.scale),
            origin=(origin, origin, origin),
        )
        # VTK image points run x fastest, then y, then z: the same order as the flat buffer
        volume.point_data["occupancy"] = grid.data.copy()
        volume.field_data["threshold"] = [grid.threshold]

        logger.info(f"Exporting {n}^3 occupancy volume to: {abs_path}")
        try:
            volume.save(abs_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to export volume '{abs_path}': {e}")
            raise EncodingError(f"Unable to export the volume to '{abs_path}'. ({e})") from e

        return abs_path
