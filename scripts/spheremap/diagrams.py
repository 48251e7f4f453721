"""Face-region diagram: which cube face each spheremap pixel samples."""

import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.patheffects as pe  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import ListedColormap  # noqa: E402
from matplotlib.patches import Circle, Patch  # noqa: E402

from .cubemap import Cubemap, CubeFace, FACE_SUFFIXES  # noqa: E402
from .projection import output_directions  # noqa: E402

DPI = 200

# ---------------------------------------------------------------------------
# Dark theme style
# ---------------------------------------------------------------------------

STYLE = {
    "bg": "#1a1a2e",  # Dark blue-gray background
    "grid": "#2a2a4a",  # Subtle grid lines
    "axis": "#8888aa",  # Axis lines and labels
    "text": "#e0e0f0",  # Primary text
    "warn": "#ffd54f",  # Yellow annotations
}

# One colour per face, in CubeFace order
FACE_COLORS = [
    "#ff7043",  # +X orange
    "#ab47bc",  # -X purple
    "#4fc3f7",  # +Y cyan
    "#66bb6a",  # -Y green
    "#e0e0f0",  # +Z light
    "#252545",  # -Z dark surface
]

FACE_CMAP = ListedColormap(FACE_COLORS, name="faces")


def setup_axes(ax, title=None):
    """Apply consistent dark styling to image axes."""
    ax.set_facecolor(STYLE["bg"])
    ax.set_aspect("equal")
    ax.tick_params(colors=STYLE["axis"], labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(STYLE["grid"])
        spine.set_linewidth(0.5)
    if title:
        ax.set_title(title, color=STYLE["text"], fontsize=13, fontweight="bold")


def save(fig, out_path, quiet=False):
    """Save a figure as PNG and close it."""
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(
        out_path,
        dpi=DPI,
        bbox_inches="tight",
        facecolor=STYLE["bg"],
        pad_inches=0.2,
    )
    plt.close(fig)
    if not quiet:
        print(f"  {out_path}")


def face_region_map(size):
    """(size, size) array of CubeFace indices, one per spheremap pixel."""
    faces, _s, _t = Cubemap.resolve_directions(output_directions(size))
    return faces


def diagram_face_regions(size, out_path, quiet=False):
    """Spheremap face layout: each output pixel coloured by the cube face it
    samples.

    The projected disk is outlined; everything outside it falls back to the
    back pole and samples the -Z face.
    """
    regions = face_region_map(size)

    fig = plt.figure(figsize=(7, 7), facecolor=STYLE["bg"])
    ax = fig.add_subplot(111)
    setup_axes(ax, title=f"Spheremap face regions ({size}x{size})")

    ax.imshow(
        regions,
        cmap=FACE_CMAP,
        vmin=-0.5,
        vmax=len(CubeFace) - 0.5,
        interpolation="nearest",
        extent=(0.0, 1.0, 1.0, 0.0),
    )

    # p = 16(s - s^2 + t - t^2) - 4 >= 0 is the disk of radius 1/2 at the centre
    ax.add_patch(
        Circle(
            (0.5, 0.5),
            0.5,
            fill=False,
            edgecolor=STYLE["warn"],
            linestyle="--",
            lw=1.5,
        )
    )
    ax.text(
        0.5,
        0.5,
        "+Z",
        color=STYLE["bg"],
        fontsize=12,
        fontweight="bold",
        ha="center",
        va="center",
        path_effects=[pe.withStroke(linewidth=3, foreground=FACE_COLORS[CubeFace.POS_Z])],
    )
    ax.set_xlabel("s", color=STYLE["axis"])
    ax.set_ylabel("t", color=STYLE["axis"])

    handles = [
        Patch(
            facecolor=FACE_COLORS[face],
            edgecolor=STYLE["axis"],
            label=f"{face.label} ({FACE_SUFFIXES[face]})",
        )
        for face in CubeFace
    ]
    legend = ax.legend(
        handles=handles,
        loc="upper left",
        bbox_to_anchor=(1.02, 1.0),
        facecolor=STYLE["bg"],
        edgecolor=STYLE["grid"],
        fontsize=9,
    )
    for text in legend.get_texts():
        text.set_color(STYLE["text"])

    save(fig, out_path, quiet=quiet)
    return regions
