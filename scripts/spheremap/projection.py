"""Spheremap projection: output image coordinates to 3D directions.

With r = s - s^2 + t - t^2 (largest, 0.5, at the image centre):

    p = 16r - 4
    p < 0   ->  (0, 0, -1)            outside the disk: back pole
    p >= 0  ->  (sqrt(p)(2s - 1), -sqrt(p)(2t - 1), 8r - 3)

The centre maps to +Z, the disk edge to -Z.  Directions are not unit
length; only their signs and relative magnitudes are used for face lookup.
"""

import math

import numpy as np

# Returned for every pixel outside the projected disk
BACK_POLE = (0.0, 0.0, -1.0)


def output_coord_to_direction(s, t):
    """Direction for normalized output coordinates (s, t) in [0, 1)."""
    r = s - s * s + t - t * t
    p = 16.0 * r - 4.0
    if p < 0.0:
        return BACK_POLE
    q = math.sqrt(p)
    return (q * (2.0 * s - 1.0), -q * (2.0 * t - 1.0), 8.0 * r - 3.0)


def pixel_centers(size):
    """Normalized pixel-centre coordinates (i + 0.5) / size for i in [0, size)."""
    return (np.arange(size, dtype=np.float64) + 0.5) / size


def output_directions(size):
    """(size, size, 3) directions for every output pixel, indexed [row, column]."""
    coords = pixel_centers(size)
    # s varies across columns, t down rows
    s, t = np.meshgrid(coords, coords)

    r = s - s * s + t - t * t
    p = 16.0 * r - 4.0
    inside = p >= 0.0
    q = np.sqrt(np.where(inside, p, 0.0))

    dirs = np.empty((size, size, 3), dtype=np.float64)
    dirs[..., 0] = np.where(inside, q * (2.0 * s - 1.0), BACK_POLE[0])
    dirs[..., 1] = np.where(inside, -q * (2.0 * t - 1.0), BACK_POLE[1])
    dirs[..., 2] = np.where(inside, 8.0 * r - 3.0, BACK_POLE[2])
    return dirs
