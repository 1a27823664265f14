"""
Heart isosurface volume renderer.

Samples the implicit heart equation into a binary voxel grid and ray marches
it into a greyscale image shaded by the field gradient.
"""
from heartvolume.errors import EncodingError, HeartVolumeError, ParameterError
from heartvolume.field import gradient, scalar_field
from heartvolume.render import RenderedImage, VolumeRenderer
from heartvolume.volume import VolumeGrid, sample

__all__ = [
    "EncodingError",
    "HeartVolumeError",
    "ParameterError",
    "RenderedImage",
    "VolumeGrid",
    "VolumeRenderer",
    "gradient",
    "sample",
    "scalar_field",
]
