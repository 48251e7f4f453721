"""CLI entry point for the spheremap package.

Invoke as:  python scripts/spheremap <prefix> <extension> <output_size>
"""

# Bootstrap: when run as `python scripts/spheremap` (directory path),
# re-execute through runpy so the package machinery resolves relative imports
# correctly and without DeprecationWarning.
if __name__ == "__main__" and not __package__:
    import os
    import runpy
    import sys

    _scripts_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _scripts_dir not in sys.path:
        sys.path.insert(0, _scripts_dir)
    runpy.run_module("spheremap", run_name="__main__", alter_sys=True)
    raise SystemExit(0)  # unreachable, run_module already calls sys.exit()

import argparse
import sys

try:
    import numpy  # noqa: F401
except ImportError:
    sys.exit("Missing dependency: numpy — install with: pip install numpy")

try:
    import PIL  # noqa: F401
except ImportError:
    sys.exit("Missing dependency: Pillow — install with: pip install Pillow")

from .cubemap import FaceSizeMismatchError
from .convert import convert
from .image import DecodeError


class _ArgumentParser(argparse.ArgumentParser):
    """argparse with usage errors reported as exit code 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = _ArgumentParser(
        prog="spheremap",
        description="Convert a six-face cube map into a spheremap BMP.",
    )
    parser.add_argument(
        "prefix",
        help="File name stem shared by the faces and the output "
        "({prefix}_right.{ext} ... {prefix}_spheremap.bmp)",
    )
    parser.add_argument(
        "extension", help="Extension of the face images, without the dot (e.g. png)"
    )
    parser.add_argument("output_size", type=int, help="Output width and height in pixels")
    parser.add_argument(
        "--face-map",
        metavar="PATH",
        help="Also write a PNG diagram of the face each output pixel samples "
        "(requires matplotlib)",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only report errors"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.output_size <= 0:
        print(
            f"Output size must be a positive integer, got: {args.output_size}",
            file=sys.stderr,
        )
        return 1

    extension = args.extension.lstrip(".")

    try:
        convert(
            args.prefix,
            extension,
            args.output_size,
            face_map=args.face_map,
            quiet=args.quiet,
        )
    except DecodeError as exc:
        print(exc, file=sys.stderr)
        return 1
    except FaceSizeMismatchError as exc:
        print(f"Cube map faces don't match: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
