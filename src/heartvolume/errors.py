"""
Error Types
===========
Exceptions raised at the boundary of the renderer.

The numerical core (field, grid, interpolation, ray marching) never raises once
it is handed valid parameters. Failures can only come from bad input or from
writing the result to disk.

Classes:
    HeartVolumeError: Base class for all package errors.
    ParameterError: Malformed or out-of-range parameters.
    EncodingError: The image (or volume) could not be written.
"""


class HeartVolumeError(Exception):
    """Base class for errors raised by heartvolume."""


class ParameterError(HeartVolumeError, ValueError):
    """Raised when a construction or render parameter is invalid."""


class EncodingError(HeartVolumeError, OSError):
    """Raised when a rendered image or volume cannot be written to a file."""
