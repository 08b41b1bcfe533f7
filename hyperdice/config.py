"""
Engine Constants & Per-Polytope Tuning
--------------------------------------
Global constants shared by the engine and the viewer, plus the tuning table
that sets size, fade and wireframe look for each polytope kind.

The table is keyed by the polytope kind's string value ("5-cell", "8-cell",
"16-cell", "24-cell"); ``PolytopeKind`` is a ``str`` enum so its members index
the table directly.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

RGB = Tuple[int, int, int]

# -------------------------------
# Projection
# -------------------------------
VIEWER_DISTANCE = 5.0     # distance of the 4D eye from the origin along W
PROJECTION_EPSILON = 0.1  # lower bound on (w + d)

# -------------------------------
# Rotation
# -------------------------------
TWO_PI = 2 * math.pi

# -------------------------------
# Mesh / wireframe
# -------------------------------
WIRE_MIN_LENGTH = 1e-3          # projected edges shorter than this are skipped
OUTLINE_DARKEN = 0.7            # outline edges use base color * this factor
OUTLINE_THICKNESS_FACTOR = 2.0  # outline prisms are thicker than wire prisms
TRIANGLE_UV = ((0.0, 0.0), (1.0, 0.0), (0.5, 0.866))
QUAD_UV = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))

# -------------------------------
# Controls
# -------------------------------
DRAG_DEADZONE = 0.1         # pixels
DRAG_ROTATION_SCALE = 0.01  # radians per pixel
SCROLL_ROTATION_STEP = 120 / 1200.0  # radians per wheel notch
SPIN_TICK_SECONDS = 0.1
SPIN_STEP_SCALE = 0.1       # radians per tick per unit step
SPIN_DURATION_RANGE = (1, 60)
SPIN_DEFAULT_DURATION = 10

DEFAULT_COLOR: RGB = (220, 20, 60)  # crimson


@dataclass(frozen=True)
class PolytopeTuning:
    """Size, fade and wireframe settings for one polytope kind.

    Opacity is ``clamp(opacity_base + opacity_spread * (1 + v) / 2,
    opacity_min, opacity_max)`` for a cell with visibility ``v``. Cells with
    ``v <= cull_below`` are skipped when ``cull_below`` is set.
    """
    size: float
    opacity_base: float
    opacity_spread: float
    opacity_min: float
    opacity_max: float
    cull_below: Optional[float]
    wire_thickness: float
    wire_color: Optional[RGB]      # None: use the die's base color
    wire_opacity_factor: float
    outline_edges: bool


def normalized_fade_tuning(size: float, wire_thickness: float) -> PolytopeTuning:
    """Tuning for kinds that fade by ``(w + s) / (2s)`` and cull the far cells.

    Rewrites the normalized visibility ``(w + s) / (2s)`` clamped to
    ``[0.1, 1]`` in the shared ``base + spread * (1 + w) / 2`` form, and culls
    cells whose normalized visibility is at most 0.05.
    """
    spread = 1.0 / size
    return PolytopeTuning(
        size=size,
        opacity_base=0.5 - spread / 2,
        opacity_spread=spread,
        opacity_min=0.1,
        opacity_max=1.0,
        cull_below=-0.9 * size,
        wire_thickness=wire_thickness,
        wire_color=(0, 0, 0),
        wire_opacity_factor=1.0,
        outline_edges=True,
    )


TUNINGS = {
    "5-cell": normalized_fade_tuning(0.7, wire_thickness=0.005),
    "8-cell": normalized_fade_tuning(0.4, wire_thickness=0.005),
    "16-cell": PolytopeTuning(
        size=0.6,
        opacity_base=0.3,
        opacity_spread=0.7,
        opacity_min=0.3,
        opacity_max=1.0,
        cull_below=None,
        wire_thickness=0.01,
        wire_color=None,
        wire_opacity_factor=1.0,
        outline_edges=False,
    ),
    # many small overlapping cells, so everything is dimmed by 0.8
    "24-cell": PolytopeTuning(
        size=0.4,
        opacity_base=0.16,
        opacity_spread=0.56,
        opacity_min=0.16,
        opacity_max=0.72,
        cull_below=None,
        wire_thickness=0.006,
        wire_color=None,
        wire_opacity_factor=0.6,
        outline_edges=False,
    ),
}
