"""
Command-Line Interface
======================
Builds the heart volume, renders it and writes the image.

Usage:
    $ heartvolume [grid_size [width [height]]] [--threshold T] [-o result.tiff]

Exit codes:
    0: Image written.
    1: An output or log file could not be written.
    2: Invalid parameters.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from heartvolume.config import (
    DEFAULT_GRID_SIZE,
    DEFAULT_HEIGHT,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_WIDTH,
    RenderSettings,
)
from heartvolume.errors import EncodingError, ParameterError
from heartvolume.io import ImageWriter
from heartvolume.logging_config import setup_logging
from heartvolume.render.renderer import VolumeRenderer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ENCODING_ERROR = 1
EXIT_PARAMETER_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heartvolume",
        description="Render the isosurface of the heart equation by ray marching a voxel grid.",
    )
    # Positionals stay strings so malformed values surface as ParameterError
    parser.add_argument("grid_size", nargs="?", default=None,
                        help=f"Side length of the voxel grid (default {DEFAULT_GRID_SIZE})")
    parser.add_argument("width", nargs="?", default=None,
                        help=f"Image width in pixels (default {DEFAULT_WIDTH})")
    parser.add_argument("height", nargs="?", default=None,
                        help=f"Image height in pixels (default {DEFAULT_HEIGHT})")
    parser.add_argument("--threshold", "-t", default=None,
                        help="Isosurface threshold (default 0.0)")
    parser.add_argument("--output", "-o", default=DEFAULT_OUTPUT_PATH,
                        help=f"Output image path (default {DEFAULT_OUTPUT_PATH})")
    parser.add_argument("--export-volume", default=None, metavar="PATH",
                        help="Also write the occupancy grid as a VTK image (.vti)")
    parser.add_argument("--show", action="store_true",
                        help="Preview the rendered image with matplotlib")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--log-file", default=None,
                        help="Also write the log to this file")
    return parser


def run(settings: RenderSettings, export_volume: Optional[str] = None, show: bool = False) -> str:
    """
    Build, render and write one image.

    Raises:
        EncodingError: If the image or volume cannot be written.

    Returns:
        Absolute path of the written image.
    """
    renderer = VolumeRenderer.from_parameters(grid_size=settings.grid_size, threshold=settings.threshold)
    image = renderer.render(width=settings.width, height=settings.height, threshold=settings.threshold)

    output_path = ImageWriter.save(image, settings.output_path)
    if export_volume:
        ImageWriter.export_volume(renderer.grid, export_volume)
    if show:
        image.plot()
    return output_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        setup_logging(verbose=args.verbose, log_file=args.log_file)
    except EncodingError as e:
        logger.error(f"Error: {e}")
        return EXIT_ENCODING_ERROR

    try:
        settings = RenderSettings.from_arguments(
            grid_size=args.grid_size,
            width=args.width,
            height=args.height,
            threshold=args.threshold,
            output_path=args.output,
        )
    except ParameterError as e:
        logger.error(f"Invalid input for parameters: {e}")
        return EXIT_PARAMETER_ERROR

    try:
        output_path = run(settings, export_volume=args.export_volume, show=args.show)
    except EncodingError as e:
        logger.error(f"Error: {e}")
        return EXIT_ENCODING_ERROR

    logger.info(f"Isosurface image saved to {output_path}")
    return EXIT_OK
