import os

import pytest

from conftest import BLACK, BLUE, FACE_COLORS, GREEN, RED, WHITE, YELLOW, write_face
from spheremap.__main__ import main
from spheremap.convert import convert, output_path, render_spheremap
from spheremap.cubemap import Cubemap, CubeFace, face_path
from spheremap.image import DecodeError, PixelBuffer
from spheremap.projection import output_coord_to_direction, pixel_centers

# Expected 4x4 spheremap of the solid colour cube, rows top to bottom
EXPECTED_4X4 = [
    [BLACK, BLUE, BLUE, BLACK],
    [GREEN, WHITE, WHITE, RED],
    [GREEN, WHITE, WHITE, RED],
    [BLACK, YELLOW, YELLOW, BLACK],
]


def rows(buf):
    return [[buf.read_texel(x, y) for x in range(buf.width)] for y in range(buf.height)]


def test_render_solid_cubemap(solid_cubemap):
    spheremap = render_spheremap(Cubemap.load(solid_cubemap, "png"), 4)

    assert spheremap.size == (4, 4)
    assert rows(spheremap) == EXPECTED_4X4


def test_render_matches_per_pixel_lookup(gradient_pixels):
    faces = []
    for face in CubeFace:
        pixels = gradient_pixels.copy()
        pixels[..., 3] = face
        faces.append(PixelBuffer(pixels))
    cubemap = Cubemap(faces)
    size = 12
    coords = pixel_centers(size)

    spheremap = render_spheremap(cubemap, size)

    for y in range(size):
        for x in range(size):
            direction = output_coord_to_direction(coords[x], coords[y])
            face, s, t = cubemap.resolve_direction(*direction)
            assert spheremap.read_texel(x, y) == cubemap.sample_face(face, s, t)


def test_render_rejects_bad_size(solid_cubemap):
    with pytest.raises(ValueError):
        render_spheremap(Cubemap.load(solid_cubemap, "png"), 0)


def test_convert_writes_bmp(solid_cubemap, capsys):
    out = convert(solid_cubemap, "png", 4)

    assert out == output_path(solid_cubemap) == solid_cubemap + "_spheremap.bmp"
    written = PixelBuffer.load(out)
    assert rows(written) == EXPECTED_4X4
    assert "Spheremap written to" in capsys.readouterr().out


def test_convert_quiet(solid_cubemap, capsys):
    convert(solid_cubemap, "png", 2, quiet=True)
    assert capsys.readouterr().out == ""


def test_convert_missing_face_writes_nothing(solid_cubemap):
    os.remove(face_path(solid_cubemap, "png", CubeFace.NEG_X))

    with pytest.raises(DecodeError):
        convert(solid_cubemap, "png", 4, quiet=True)
    assert not os.path.exists(output_path(solid_cubemap))


def test_main_success(solid_cubemap):
    assert main([solid_cubemap, "png", "8", "--quiet"]) == 0

    written = PixelBuffer.load(output_path(solid_cubemap))
    assert written.size == (8, 8)
    assert written.read_texel(0, 0) == FACE_COLORS[CubeFace.NEG_Z]
    assert written.read_texel(4, 4) == FACE_COLORS[CubeFace.POS_Z]


@pytest.mark.parametrize(
    "argv", [[], ["sky", "png"], ["sky", "png", "4", "extra"], ["sky", "png", "four"]]
)
def test_main_usage_errors_exit_1(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    assert "usage:" in capsys.readouterr().err


@pytest.mark.parametrize("size", ["0", "-3"])
def test_main_rejects_non_positive_size(solid_cubemap, size, capsys):
    assert main([solid_cubemap, "png", size]) == 1
    assert "positive integer" in capsys.readouterr().err
    assert not os.path.exists(output_path(solid_cubemap))


def test_main_reports_decode_error(tmp_path, capsys):
    prefix = str(tmp_path / "nothing")
    assert main([prefix, "png", "4"]) == 1
    assert "nothing_right.png" in capsys.readouterr().err
    assert not os.path.exists(output_path(prefix))


def test_main_reports_face_mismatch(solid_cubemap, capsys):
    write_face(face_path(solid_cubemap, "png", CubeFace.POS_Y), (3, 3), BLUE)

    assert main([solid_cubemap, "png", "4"]) == 1
    assert "+Y" in capsys.readouterr().err
    assert not os.path.exists(output_path(solid_cubemap))


def test_main_accepts_dotted_extension(solid_cubemap):
    assert main([solid_cubemap, ".png", "4", "--quiet"]) == 0
    assert os.path.exists(output_path(solid_cubemap))

