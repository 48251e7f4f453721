"""
Cube map faces, direction-to-face lookup and nearest-neighbour sampling.

Face order matches the usual GPU cube map enum:
  +X  right
  -X  left
  +Y  top
  -Y  bottom
  +Z  front
  -Z  back

Face-local coordinates for a direction (x, y, z) whose major axis selects
the face, before dividing by the major-axis magnitude m:

  face   s     t
  +X    -z    -y
  -X    +z    -y
  +Y    +x    +z
  -Y    +x    -z
  +Z    +x    -y
  -Z    -x    -y

s and t are then remapped from [-1, 1] to [0, 1].
"""

import math
import os
from enum import IntEnum

import numpy as np

from .image import PixelBuffer


class CubeFace(IntEnum):
    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5

    @property
    def label(self):
        return ("+X", "-X", "+Y", "-Y", "+Z", "-Z")[self]


# File name suffix for each face, in CubeFace order
FACE_SUFFIXES = {
    CubeFace.POS_X: "right",
    CubeFace.NEG_X: "left",
    CubeFace.POS_Y: "top",
    CubeFace.NEG_Y: "bottom",
    CubeFace.POS_Z: "front",
    CubeFace.NEG_Z: "back",
}

# Per face: (s axis, s sign, t axis, t sign); axis 0=x, 1=y, 2=z
FACE_COORDS = {
    CubeFace.POS_X: (2, -1.0, 1, -1.0),
    CubeFace.NEG_X: (2, 1.0, 1, -1.0),
    CubeFace.POS_Y: (0, 1.0, 2, 1.0),
    CubeFace.NEG_Y: (0, 1.0, 2, -1.0),
    CubeFace.POS_Z: (0, 1.0, 1, -1.0),
    CubeFace.NEG_Z: (0, -1.0, 1, -1.0),
}

# The same table as arrays indexed by face, for the vectorized path
_S_AXIS = np.array([FACE_COORDS[f][0] for f in CubeFace])
_S_SIGN = np.array([FACE_COORDS[f][1] for f in CubeFace])
_T_AXIS = np.array([FACE_COORDS[f][2] for f in CubeFace])
_T_SIGN = np.array([FACE_COORDS[f][3] for f in CubeFace])


class FaceSizeMismatchError(ValueError):
    """Cube faces are not square or do not share one resolution."""


def face_path(prefix, extension, face):
    """File name of one face image, e.g. ``sky_right.png``."""
    return f"{prefix}_{FACE_SUFFIXES[face]}.{extension}"


def major_axis(ax, ay, az):
    """Index of the largest magnitude; X beats ties with Y and Z, Y beats Z."""
    if ax >= ay and ax >= az:
        return 0
    if ay >= ax and ay >= az:
        return 1
    return 2


class Cubemap:
    """Six equally sized square faces, indexed by CubeFace."""

    def __init__(self, faces):
        faces = list(faces)
        if len(faces) != len(CubeFace):
            raise ValueError(f"A cube map needs {len(CubeFace)} faces, got {len(faces)}")

        width, height = faces[0].size
        if width != height:
            raise FaceSizeMismatchError(
                f"Face {CubeFace(0).label} is {width}x{height}, faces must be square"
            )
        for face, buf in zip(CubeFace, faces):
            if buf.size != (width, height):
                raise FaceSizeMismatchError(
                    f"Face {face.label} is {buf.width}x{buf.height}, "
                    f"expected {width}x{height} like face {CubeFace(0).label}"
                )

        self.faces = faces
        self.face_size = width
        # (6, size, size, 4) view used for gathering many texels at once
        self._stack = np.stack([buf.pixels for buf in faces])

    @classmethod
    def load(cls, prefix, extension, verbose=False):
        """Load ``{prefix}_{right,left,top,bottom,front,back}.{extension}``.

        The first face that fails to decode raises DecodeError and no
        cube map is built.
        """
        faces = []
        for face in CubeFace:
            path = face_path(prefix, extension, face)
            buf = PixelBuffer.load(path)
            if verbose:
                print(f"  {face.label} {os.path.basename(path)}: {buf.width}x{buf.height}")
            faces.append(buf)
        return cls(faces)

    @staticmethod
    def resolve_direction(x, y, z):
        """Return (face, s, t) for the face pierced by the ray through (x, y, z)."""
        v = (x, y, z)
        a = (abs(x), abs(y), abs(z))
        axis = major_axis(*a)
        m = a[axis]
        if m == 0.0:
            raise ValueError("The zero vector does not point at any cube face")

        face = CubeFace(axis * 2 + (1 if v[axis] < 0.0 else 0))
        s_axis, s_sign, t_axis, t_sign = FACE_COORDS[face]
        s = 0.5 * (s_sign * v[s_axis] / m + 1.0)
        t = 0.5 * (t_sign * v[t_axis] / m + 1.0)
        return face, s, t

    def sample_face(self, face, s, t):
        """Point sample a face at normalized (s, t) in [0, 1]."""
        buf = self.faces[face]
        x = min(int(math.floor(s * buf.width)), buf.width - 1)
        y = min(int(math.floor(t * buf.height)), buf.height - 1)
        return buf.read_texel(x, y)

    @staticmethod
    def resolve_directions(dirs):
        """Vectorized resolve_direction over an (..., 3) array.

        Returns (faces, s, t) arrays shaped like ``dirs[..., 0]``.
        """
        dirs = np.asarray(dirs, dtype=np.float64)
        a = np.abs(dirs)
        ax, ay, az = a[..., 0], a[..., 1], a[..., 2]

        axis = np.where(
            (ax >= ay) & (ax >= az), 0, np.where((ay >= ax) & (ay >= az), 1, 2)
        )
        component = np.take_along_axis(dirs, axis[..., np.newaxis], axis=-1)[..., 0]
        faces = axis * 2 + (component < 0.0)
        m = np.abs(component)
        if np.any(m == 0.0):
            raise ValueError("The zero vector does not point at any cube face")

        s_val = np.take_along_axis(dirs, _S_AXIS[faces][..., np.newaxis], axis=-1)[..., 0]
        t_val = np.take_along_axis(dirs, _T_AXIS[faces][..., np.newaxis], axis=-1)[..., 0]
        s = 0.5 * (_S_SIGN[faces] * s_val / m + 1.0)
        t = 0.5 * (_T_SIGN[faces] * t_val / m + 1.0)
        return faces, s, t

    def sample(self, faces, s, t):
        """Vectorized sample_face; returns an (..., 4) uint8 array."""
        size = self.face_size
        x = np.minimum(np.floor(np.asarray(s) * size).astype(np.intp), size - 1)
        y = np.minimum(np.floor(np.asarray(t) * size).astype(np.intp), size - 1)
        return self._stack[np.asarray(faces), y, x]
