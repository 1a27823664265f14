"""
Field Evaluator
===============
The implicit "heart" surface and its numerical gradient.

Both kernels are compiled with numba so the grid builder and the ray marcher
can call them from inside their own compiled loops. They are also plain
callables from Python: ``scalar_field(0.0, 0.0, 0.0)`` returns ``-1.0``.

The field is even in x and in y, but not in z (it carries z**3 terms).
"""
from __future__ import annotations

import math

import numba as nb

from heartvolume.config import GRADIENT_EPSILON

# Coefficients of the heart equation
Y2_COEFF = 9.0 / 4.0
Y2Z3_COEFF = 9.0 / 80.0


@nb.njit(cache=True)
def scalar_field(x: float, y: float, z: float) -> float:
    """
    Evaluate the heart equation at a world-space point.

        (x² + 9/4·y² + z² − 1)³ − x²·z³ − 9/80·y²·z³

    Negative values are inside the surface, positive values outside.

    Args:
        x, y, z: World coordinates.

    Returns:
        The scalar field value.
    """
    x2 = x * x
    y2 = y * y
    z3 = z * z * z
    term1 = x2 + Y2_COEFF * y2 + z * z - 1.0
    return term1 * term1 * term1 - x2 * z3 - Y2Z3_COEFF * y2 * z3


@nb.njit(cache=True)
def gradient(x: float, y: float, z: float) -> tuple[float, float, float]:
    """
    Central-difference gradient of :func:`scalar_field`.

    The vector is NOT normalized. The renderer uses its magnitude directly
    as a measure of local steepness.

    Args:
        x, y, z: World coordinates.

    Returns:
        (gx, gy, gz)
    """
    eps = GRADIENT_EPSILON
    two_eps = 2.0 * eps
    gx = (scalar_field(x + eps, y, z) - scalar_field(x - eps, y, z)) / two_eps
    gy = (scalar_field(x, y + eps, z) - scalar_field(x, y - eps, z)) / two_eps
    gz = (scalar_field(x, y, z + eps) - scalar_field(x, y, z - eps)) / two_eps
    return gx, gy, gz


@nb.njit(cache=True)
def gradient_magnitude(x: float, y: float, z: float) -> float:
    """Euclidean length of :func:`gradient` at a world-space point."""
    gx, gy, gz = gradient(x, y, z)
    return math.sqrt(gx * gx + gy * gy + gz * gz)
