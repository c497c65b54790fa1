"""Scatter diagrams of generated sequences.

Produces PNG diagrams at 200 DPI.  Only reads ``points01()`` from the
sequences; nothing here feeds back into generation.

Requires: pip install numpy matplotlib
"""

import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from ._common import DEFAULT_SEED, level_side, next_power_of_4  # noqa: E402
from .jittered import JitteredSequence  # noqa: E402
from .multi_jittered import MultiJitteredSequence  # noqa: E402
from .sequences import UniformSequence  # noqa: E402

# ---------------------------------------------------------------------------
# Paths and settings
# ---------------------------------------------------------------------------

DEFAULT_OUT_DIR = "diagrams"
DPI = 200

# ---------------------------------------------------------------------------
# Dark theme style
# ---------------------------------------------------------------------------

STYLE = {
    "bg": "#1a1a2e",  # Dark blue-gray background
    "grid": "#2a2a4a",  # Subtle grid lines
    "axis": "#8888aa",  # Axis lines and labels
    "text": "#e0e0f0",  # Primary text
    "text_dim": "#8888aa",  # Secondary/dim text
    "accent1": "#4fc3f7",  # Cyan, PMJ
    "accent2": "#ff7043",  # Orange, uniform
    "accent3": "#66bb6a",  # Green, PJ
    "accent4": "#ab47bc",  # Purple
    "warn": "#ffd54f",  # Yellow, cell grid
}

# Colour per refinement round, first point first
ROUND_COLORS = ["text", "warn", "accent2", "accent3", "accent1", "accent4"]


def setup_axes(ax, title=None, grid=True):
    """Dark styling on a unit-square axes."""
    ax.set_facecolor(STYLE["bg"])
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.tick_params(colors=STYLE["axis"], labelsize=7)
    for spine in ax.spines.values():
        spine.set_color(STYLE["grid"])
        spine.set_linewidth(0.5)
    if grid:
        ax.grid(True, color=STYLE["grid"], linewidth=0.3, alpha=0.4)
    ax.set_axisbelow(True)
    if title:
        ax.set_title(title, color=STYLE["text"], fontsize=11, fontweight="bold", pad=8)


def draw_cells(ax, side, color=None, lw=0.6):
    """Overlay the side x side cell grid."""
    color = color or STYLE["warn"]
    for k in range(1, side):
        ax.axvline(k / side, color=color, linewidth=lw, alpha=0.35)
        ax.axhline(k / side, color=color, linewidth=lw, alpha=0.35)


def save(fig, out_dir, filename):
    """Save a figure into ``out_dir`` (created if needed) and return its path."""
    os.makedirs(out_dir, exist_ok=True)
    out = os.path.join(out_dir, filename)
    fig.savefig(
        out,
        dpi=DPI,
        bbox_inches="tight",
        facecolor=STYLE["bg"],
        pad_inches=0.2,
    )
    plt.close(fig)
    print(f"  {os.path.relpath(out)}")
    return out


def _coarsest_full_level(count):
    """Largest power of 4 <= count (1 for count < 4)."""
    level = next_power_of_4(count)
    return level if level == count else max(level // 4, 1)


# ---------------------------------------------------------------------------
# sequence.png
# ---------------------------------------------------------------------------


def diagram_sequence(sequence, count, out_dir=DEFAULT_OUT_DIR, filename="sequence.png"):
    """Single sequence with the grid of its last complete level."""
    sequence.extend(count)
    pts = sequence.points01()[:count]
    side = level_side(_coarsest_full_level(count))

    fig = plt.figure(figsize=(6, 6), facecolor=STYLE["bg"])
    ax = fig.add_subplot(111)
    setup_axes(ax, f"{type(sequence).__name__}: {count} points", grid=False)
    draw_cells(ax, side)
    ax.scatter(pts[:, 0], pts[:, 1], s=8, c=STYLE["accent1"], alpha=0.9, edgecolors="none")
    fig.tight_layout()
    return save(fig, out_dir, filename)


# ---------------------------------------------------------------------------
# comparison.png
# ---------------------------------------------------------------------------


def diagram_comparison(count=256, seed=DEFAULT_SEED, out_dir=DEFAULT_OUT_DIR):
    """Three-panel scatter plot: uniform, PJ, PMJ."""
    datasets = [
        ("Uniform", UniformSequence(seed), STYLE["accent2"]),
        ("Progressive Jittered", JitteredSequence(seed), STYLE["accent3"]),
        ("Progressive Multi-Jittered", MultiJitteredSequence(seed), STYLE["accent1"]),
    ]

    fig, axes = plt.subplots(1, 3, figsize=(13, 4.5), facecolor=STYLE["bg"])
    for ax, (title, sequence, color) in zip(axes, datasets):
        sequence.extend(count)
        pts = sequence.points01()
        setup_axes(ax, title)
        ax.scatter(pts[:, 0], pts[:, 1], s=6, c=color, alpha=0.8, edgecolors="none")

    fig.suptitle(
        f"Sampling Distributions: {count} Points in [0, 1)²",
        color=STYLE["text"],
        fontsize=14,
        fontweight="bold",
        y=1.02,
    )
    fig.tight_layout()
    return save(fig, out_dir, "comparison.png")


# ---------------------------------------------------------------------------
# progressive.png
# ---------------------------------------------------------------------------


def diagram_progressive(count=256, seed=DEFAULT_SEED, out_dir=DEFAULT_OUT_DIR, kind=None):
    """Prefixes 4, 16, 64, ... of one sequence, coloured by producing round."""
    sequence = (kind or MultiJitteredSequence)(seed)
    sequence.extend(count)
    pts = sequence.points01()

    levels = []
    level = 4
    while level <= count:
        levels.append(level)
        level *= 4
    if not levels:
        levels = [count]

    fig, axes = plt.subplots(
        1, len(levels), figsize=(4.2 * len(levels), 4.5), facecolor=STYLE["bg"], squeeze=False
    )
    for ax, level in zip(axes[0], levels):
        setup_axes(ax, f"first {level}", grid=False)
        draw_cells(ax, level_side(_coarsest_full_level(level)))
        start = 0
        end = 1
        r = 0
        while start < level:
            color = STYLE[ROUND_COLORS[min(r, len(ROUND_COLORS) - 1)]]
            chunk = pts[start:min(end, level)]
            ax.scatter(chunk[:, 0], chunk[:, 1], s=10, c=color, alpha=0.9, edgecolors="none")
            start, end, r = end, end * 4, r + 1

    fig.suptitle(
        f"{type(sequence).__name__}: refinement rounds",
        color=STYLE["text"],
        fontsize=14,
        fontweight="bold",
        y=1.02,
    )
    fig.tight_layout()
    return save(fig, out_dir, "progressive.png")


# ---------------------------------------------------------------------------
# strata.png
# ---------------------------------------------------------------------------


def diagram_strata(count=64, seed=DEFAULT_SEED, out_dir=DEFAULT_OUT_DIR):
    """PMJ points with their x and y strata marked along the axes."""
    sequence = MultiJitteredSequence(seed)
    sequence.extend(count)
    pts = sequence.points01()

    fig = plt.figure(figsize=(6.5, 6.5), facecolor=STYLE["bg"])
    ax = fig.add_subplot(111)
    setup_axes(ax, f"Multi-jittered strata ({count} points, width 1/{count})", grid=False)
    for k in range(1, count):
        ax.axvline(k / count, ymax=0.03, color=STYLE["axis"], linewidth=0.4)
        ax.axhline(k / count, xmax=0.03, color=STYLE["axis"], linewidth=0.4)

    # project each point onto both axes
    ax.scatter(pts[:, 0], np.full(len(pts), 0.015), s=6, c=STYLE["accent2"], marker="|")
    ax.scatter(np.full(len(pts), 0.015), pts[:, 1], s=6, c=STYLE["accent3"], marker="_")
    ax.scatter(pts[:, 0], pts[:, 1], s=10, c=STYLE["accent1"], alpha=0.9, edgecolors="none")
    fig.tight_layout()
    return save(fig, out_dir, "strata.png")
