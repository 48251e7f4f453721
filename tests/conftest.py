import numpy as np
import pytest
from PIL import Image

from spheremap.cubemap import CubeFace, face_path

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
YELLOW = (255, 255, 0, 255)
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)

FACE_COLORS = {
    CubeFace.POS_X: RED,
    CubeFace.NEG_X: GREEN,
    CubeFace.POS_Y: BLUE,
    CubeFace.NEG_Y: YELLOW,
    CubeFace.POS_Z: WHITE,
    CubeFace.NEG_Z: BLACK,
}


def write_face(path, size, color):
    Image.new("RGBA", size, color).save(path)


@pytest.fixture
def solid_cubemap(tmp_path):
    """Writes six solid-colour 2x2 PNG faces; returns their prefix."""
    prefix = str(tmp_path / "sky")
    for face, color in FACE_COLORS.items():
        write_face(face_path(prefix, "png", face), (2, 2), color)
    return prefix


@pytest.fixture
def gradient_pixels():
    """A 4x4 RGBA array where every texel is distinct."""
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    for y in range(4):
        for x in range(4):
            pixels[y, x] = (x * 60, y * 60, x * 16 + y, 200 + x + y)
    return pixels
