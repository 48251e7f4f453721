"""Render a loaded cube map into a spheremap and write it to disk."""

from .cubemap import Cubemap
from .image import PixelBuffer
from .projection import output_directions

OUTPUT_SUFFIX = "spheremap"
OUTPUT_EXTENSION = "bmp"


def output_path(prefix):
    return f"{prefix}_{OUTPUT_SUFFIX}.{OUTPUT_EXTENSION}"


def render_spheremap(cubemap, size):
    """Build the size x size spheremap for a cube map.

    Every pixel is independent: the projection, face lookup and sampling are
    evaluated for the whole grid at once.
    """
    if size <= 0:
        raise ValueError(f"Output size must be a positive integer, got: {size}")

    dirs = output_directions(size)
    faces, s, t = cubemap.resolve_directions(dirs)
    return PixelBuffer.from_array(cubemap.sample(faces, s, t))


def convert(prefix, extension, size, face_map=None, quiet=False):
    """Convert ``{prefix}_*.{extension}`` faces to ``{prefix}_spheremap.bmp``.

    Returns the path of the written spheremap.  Loading errors propagate
    before anything is written.
    """
    log = (lambda *args, **kwargs: None) if quiet else print

    log(f"Loading: {prefix}_*.{extension}")
    cubemap = Cubemap.load(prefix, extension, verbose=not quiet)
    log(f"  Face size: {cubemap.face_size}x{cubemap.face_size}")

    out_path = output_path(prefix)
    log(f"  Rendering {out_path} ({size}x{size})...", end="", flush=True)
    spheremap = render_spheremap(cubemap, size)
    spheremap.save(out_path)
    log(" done")

    if face_map is not None:
        # matplotlib is only needed for the diagram
        from .diagrams import diagram_face_regions

        diagram_face_regions(size, face_map, quiet=quiet)

    log(f"\nSpheremap written to {out_path}")
    return out_path
