"""
Wireframe Emitter
-----------------
Emits each unique polytope edge once, as a thin square prism between its two
projected endpoints.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from hyperdice.colors import darken
from hyperdice.config import (OUTLINE_DARKEN, OUTLINE_THICKNESS_FACTOR, RGB,
                              WIRE_MIN_LENGTH, PolytopeTuning)
from hyperdice.polytopes import Cell, CellShape

logger = logging.getLogger(__name__)

TETRA_EDGES = ((0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3))
CUBE_EDGES = (
    (0, 1), (1, 3), (3, 2), (2, 0),  # front face
    (4, 5), (5, 7), (7, 6), (6, 4),  # back face
    (0, 4), (1, 5), (2, 6), (3, 7),  # connecting
)
# center and opposite to every ring vertex, plus the ring itself
OCTA_EDGES = (
    tuple((0, 2 + k) for k in range(4))
    + tuple((1, 2 + k) for k in range(4))
    + tuple((2 + k, 2 + (k + 1) % 4) for k in range(4))
)
EDGE_TABLES = {
    CellShape.TETRAHEDRON: TETRA_EDGES,
    CellShape.CUBE: CUBE_EDGES,
    CellShape.OCTAHEDRON: OCTA_EDGES,
}

# four sides then the two end caps, as quads over the 8 prism corners
PRISM_QUADS = ((0, 1, 5, 4), (1, 2, 6, 5), (2, 3, 7, 6), (3, 0, 4, 7), (0, 3, 2, 1), (4, 5, 6, 7))
PRISM_TRIANGLES = np.array(
    [tri for a, b, c, d in PRISM_QUADS for tri in ((a, b, c), (a, c, d))], dtype=np.int64)


@dataclass(eq=False)
class WirePrism:
    vertices: np.ndarray    # (8, 3)
    triangles: np.ndarray   # (12, 3)
    color: RGB
    opacity: float
    edge: tuple             # (i, j) polytope vertex indices, i < j


def cell_edges(cell: Cell):
    for a, b in EDGE_TABLES[cell.shape]:
        i, j = cell.indices[a], cell.indices[b]
        yield (min(i, j), max(i, j))


def edge_prism(p1, p2, thickness):
    """8 corners of a square prism around p1-p2, or None for a degenerate edge."""
    p1 = np.asarray(p1, dtype=np.float64)
    p2 = np.asarray(p2, dtype=np.float64)
    direction = p2 - p1
    length = np.linalg.norm(direction)
    if length < WIRE_MIN_LENGTH:
        return None
    direction = direction / length
    # reference vector that is not nearly parallel to the edge
    ref = np.array([1.0, 0.0, 0.0]) if abs(direction[2]) > 0.9 else np.array([0.0, 0.0, 1.0])
    perp1 = np.cross(direction, ref)
    perp1 = perp1 / np.linalg.norm(perp1) * thickness
    perp2 = np.cross(direction, perp1)
    perp2 = perp2 / np.linalg.norm(perp2) * thickness
    square = np.array([perp1 + perp2, perp1 - perp2, -perp1 - perp2, -perp1 + perp2])
    return np.vstack([p1 + square, p2 + square])


def emit_wireframe(scored_cells, projected, tuning: PolytopeTuning, base_color: RGB,
                   out: list, outline: bool = False) -> list:
    """Append one ``WirePrism`` per unique edge of the scored cells to ``out``.

    With ``outline`` the edges are drawn as cell outlines for the solid view:
    darker base color, thicker, faded with the cell.
    """
    seen = set()
    skipped = 0
    if outline:
        color = darken(base_color, OUTLINE_DARKEN)
        thickness = tuning.wire_thickness * OUTLINE_THICKNESS_FACTOR
    else:
        color = tuple(tuning.wire_color or base_color)
        thickness = tuning.wire_thickness
    for scored in scored_cells:
        if outline:
            opacity = scored.opacity
        elif tuning.cull_below is not None:
            opacity = 1.0
        else:
            opacity = min(1.0, scored.opacity * tuning.wire_opacity_factor)
        for edge in cell_edges(scored.cell):
            if edge in seen:
                continue
            seen.add(edge)
            corners = edge_prism(projected[edge[0]], projected[edge[1]], thickness)
            if corners is None:
                skipped += 1
                continue
            out.append(WirePrism(corners, PRISM_TRIANGLES, color, opacity, edge))
    logger.debug("Emitted %d edges, skipped %d degenerate", len(seen) - skipped, skipped)
    return out
