from heartvolume.render.image import RenderedImage
from heartvolume.render.renderer import VolumeRenderer

__all__ = ["RenderedImage", "VolumeRenderer"]
