from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.figure import Figure


@dataclass(frozen=True)
class RenderedImage:
    """
    A complete RGBA frame produced by the volume renderer.

    Attributes:
        pixels: (height, width, 4) uint8 array, row 0 at the top of the image.
    """
    pixels: npt.NDArray[np.uint8]

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) pixel array, got shape {self.pixels.shape}.")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}.")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def non_black_count(self) -> int:
        """Number of pixels whose color channels are not all zero."""
        return int(np.count_nonzero(self.pixels[..., :3].any(axis=2)))

    def to_bytes(self) -> bytes:
        """Raw RGBA bytes, row-major from the top row."""
        return self.pixels.tobytes()

    def to_pil(self) -> Image.Image:
        """Convert the frame to a Pillow image in RGBA mode."""
        return Image.fromarray(self.pixels)

    def plot(self, title: str = "Heart isosurface", show: bool = True) -> Figure:
        """
        Preview the frame with matplotlib.

        Args:
            title: Figure title.
            show: Call ``plt.show()`` before returning.

        Returns:
            The created figure.
        """
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots(figsize=(6, 6 * self.height / self.width))

        ax.imshow(self.pixels, interpolation="nearest")
        ax.set_title(title)
        ax.set_axis_off()

        if show:
            plt.show()
        return fig
