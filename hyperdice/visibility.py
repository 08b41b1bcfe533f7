"""
Visibility Sorter
-----------------
Scores every cell by its position along W after rotation, assigns the fade
opacity and orders cells for blending.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from hyperdice.config import PolytopeTuning
from hyperdice.polytopes import Cell, CellShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredCell:
    cell: Cell
    visibility: float
    opacity: float


def cell_visibility(cell: Cell, current_vertices) -> float:
    """Mean W of the cell's rotated vertices; octahedral cells use their center's W."""
    if cell.shape is CellShape.OCTAHEDRON:
        return float(current_vertices[cell.center, 3])
    return float(np.mean(current_vertices[list(cell.indices), 3]))


def cell_opacity(visibility: float, tuning: PolytopeTuning) -> float:
    opacity = tuning.opacity_base + tuning.opacity_spread * (1.0 + visibility) / 2.0
    return min(tuning.opacity_max, max(tuning.opacity_min, opacity))


def is_culled(visibility: float, tuning: PolytopeTuning) -> bool:
    return tuning.cull_below is not None and visibility <= tuning.cull_below


def sort_cells(cells, current_vertices, tuning: PolytopeTuning) -> List[ScoredCell]:
    """Score, cull and sort cells by descending visibility.

    The sort is stable, so cells with equal scores keep their build order.
    """
    scored = []
    culled = 0
    for cell in cells:
        visibility = cell_visibility(cell, current_vertices)
        if is_culled(visibility, tuning):
            culled += 1
            continue
        scored.append(ScoredCell(cell, visibility, cell_opacity(visibility, tuning)))
    scored.sort(key=lambda sc: sc.visibility, reverse=True)
    logger.debug("Sorted %d cells, culled %d", len(scored), culled)
    return scored
