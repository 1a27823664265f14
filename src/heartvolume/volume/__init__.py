from heartvolume.volume.grid import VolumeGrid
from heartvolume.volume.interpolation import sample, trilinear

__all__ = ["VolumeGrid", "sample", "trilinear"]
