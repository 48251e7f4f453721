"""RGBA8 pixel buffers backed by numpy, decoded and encoded with Pillow."""

import numpy as np
from PIL import Image


class DecodeError(Exception):
    """An input image is missing, unreadable, or not a valid image."""

    def __init__(self, path, reason):
        super().__init__(f"Cannot decode {path}: {reason}")
        self.path = path


class PixelBuffer:
    """Immutable (height, width, 4) uint8 image.

    The buffer owns its array; it is marked read-only on construction so
    faces shared between lookups can't be modified by accident.
    """

    def __init__(self, pixels):
        pixels = np.array(pixels, dtype=np.uint8, copy=True)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) pixels, got shape {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Pixel buffer must not be empty")
        pixels.flags.writeable = False
        self.pixels = pixels

    @classmethod
    def from_array(cls, array):
        return cls(array)

    @classmethod
    def load(cls, path):
        """Decode an image file, expanding it to RGBA regardless of its
        native channel count."""
        try:
            with Image.open(path) as img:
                converted = img.convert("RGBA")
                pixels = np.asarray(converted)
        except OSError as exc:
            # Covers missing files and PIL.UnidentifiedImageError
            raise DecodeError(path, exc.strerror or exc) from exc
        except (ValueError, SyntaxError, Image.DecompressionBombError) as exc:
            # Malformed headers, or images over Image.MAX_IMAGE_PIXELS
            raise DecodeError(path, exc) from exc
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self):
        return self.width, self.height

    def read_texel(self, x: int, y: int):
        """Return the (r, g, b, a) texel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Texel ({x}, {y}) outside {self.width}x{self.height} buffer"
            )
        return tuple(int(c) for c in self.pixels[y, x])

    def save(self, path):
        """Encode to a file; the format follows the file extension.

        BMP output keeps alpha in its 32-bit pixels, but Pillow decodes such
        files as RGB, so loading one back yields opaque texels.
        """
        Image.fromarray(self.pixels.copy()).save(path)
