"""
Polytope Model
--------------
Reference geometry for the four regular 4-polytopes the dice are built from.

Each builder returns immutable vertex coordinates plus the 3D cells that bound
the polytope. Cells only hold vertex indices and a numbering label; anything
that changes per frame (rotation, visibility, opacity) lives elsewhere.
"""
from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Set, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from hyperdice.config import TUNINGS

logger = logging.getLogger(__name__)


class PolytopeKind(str, Enum):
    PENTACHORON = "5-cell"
    TESSERACT = "8-cell"
    HEXADECACHORON = "16-cell"
    OCTAPLEX = "24-cell"

    @classmethod
    def parse(cls, value) -> "PolytopeKind":
        """Accept a member, its value, or a common name ("tesseract", ...)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        if key in _KIND_ALIASES:
            return _KIND_ALIASES[key]
        raise ValueError(f"Unknown polytope kind: {value!r}")


_KIND_ALIASES = {
    "5-cell": PolytopeKind.PENTACHORON,
    "5cell": PolytopeKind.PENTACHORON,
    "pentachoron": PolytopeKind.PENTACHORON,
    "simplex": PolytopeKind.PENTACHORON,
    "8-cell": PolytopeKind.TESSERACT,
    "8cell": PolytopeKind.TESSERACT,
    "tesseract": PolytopeKind.TESSERACT,
    "hypercube": PolytopeKind.TESSERACT,
    "16-cell": PolytopeKind.HEXADECACHORON,
    "16cell": PolytopeKind.HEXADECACHORON,
    "hexadecachoron": PolytopeKind.HEXADECACHORON,
    "orthoplex": PolytopeKind.HEXADECACHORON,
    "24-cell": PolytopeKind.OCTAPLEX,
    "24cell": PolytopeKind.OCTAPLEX,
    "octaplex": PolytopeKind.OCTAPLEX,
    "icositetrachoron": PolytopeKind.OCTAPLEX,
}


class CellShape(Enum):
    TETRAHEDRON = 4
    OCTAHEDRON = 6
    CUBE = 8

    @property
    def vertex_count(self) -> int:
        return self.value

    @property
    def facet_size(self) -> int:
        """Vertices on one 2D face of the cell."""
        return 4 if self is CellShape.CUBE else 3


@dataclass(frozen=True)
class Cell:
    """One 3D cell of a 4-polytope.

    Octahedral cells are stored as ``(center, opposite, r0, r1, r2, r3)``:
    the defining center vertex, the cell vertex across from it and the ring
    of four vertices around them in cyclic order.
    """
    indices: Tuple[int, ...]
    label: int
    shape: CellShape

    @property
    def center(self) -> Optional[int]:
        return self.indices[0] if self.shape is CellShape.OCTAHEDRON else None


@dataclass(frozen=True, eq=False)
class Polytope:
    kind: PolytopeKind
    size: float
    original_vertices: np.ndarray
    cells: Tuple[Cell, ...]

    @property
    def vertex_count(self) -> int:
        return len(self.original_vertices)

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def cell_shape(self) -> CellShape:
        return self.cells[0].shape


# -------------------------------
# Polytope Generation Functions
# -------------------------------
def generate_tesseract(s):
    # bit k of the vertex index is set when axis k (x, y, z, w) is positive
    vertices = np.array([bits[::-1] for bits in itertools.product((-1, 1), repeat=4)],
                        dtype=np.float64) * s
    cells = []
    for axis in (3, 0, 1, 2):  # w, x, y, z
        for sign in (-1, 1):
            indices = tuple(i for i in range(16) if np.sign(vertices[i, axis]) == sign)
            cells.append(Cell(indices, len(cells), CellShape.CUBE))
    return vertices, cells


def generate_pentachoron(s):
    # regular tetrahedron at w = -s/4 plus the apex at w = s, circumradius s
    k = s * math.sqrt(5) / 4
    vertices = np.array([
        [k,   k,   k,  -s / 4],
        [k,  -k,  -k,  -s / 4],
        [-k,  k,  -k,  -s / 4],
        [-k, -k,   k,  -s / 4],
        [0.0, 0.0, 0.0, s],
    ], dtype=np.float64)
    cells = []
    for omitted in range(5):
        indices = tuple(i for i in range(5) if i != omitted)
        cells.append(Cell(indices, omitted, CellShape.TETRAHEDRON))
    return vertices, cells


def generate_16cell(s):
    vertices = []
    for i in range(4):
        for sign in (1, -1):
            v = [0.0, 0.0, 0.0, 0.0]
            v[i] = sign * s
            vertices.append(v)
    vertices = np.array(vertices, dtype=np.float64)
    # one vertex from each opposite pair (2i, 2i + 1); labels follow the 8-cell's
    cells = []
    for choice in itertools.product((0, 1), repeat=4):
        indices = tuple(2 * axis + pick for axis, pick in enumerate(choice))
        cells.append(Cell(indices, 8 + len(cells), CellShape.TETRAHEDRON))
    return vertices, cells


def _octaplex_cell_center(vertex, s):
    """Center of the octahedral cell assigned to ``vertex``.

    Every vertex lies on six cells; this picks one of them so that the 24
    vertices map onto the 24 cells one to one. Cells facing +/-e_k take the
    vertices on the (x, y) and (z, w) axis pairs, cells facing
    (+/-1, +/-1, +/-1, +/-1) / 2 take the mixed pairs.
    """
    (i, j) = np.flatnonzero(vertex)
    a, b = np.sign(vertex[i]), np.sign(vertex[j])
    center = np.zeros(4)
    if (i, j) in ((0, 1), (2, 3)):
        if a == b:
            center[i] = a * s
        else:
            center[j] = b * s
        return center
    signs = np.zeros(4)
    signs[i], signs[j] = a, b
    signs[1 - i] = a if i == 0 else -a
    signs[5 - j] = b if j == 2 else -b
    return signs * s / 2


def generate_24cell(s):
    vertices = []
    for i, j in itertools.combinations(range(4), 2):
        for si, sj in itertools.product((1, -1), repeat=2):
            v = [0.0, 0.0, 0.0, 0.0]
            v[i] = si * s
            v[j] = sj * s
            vertices.append(v)
    vertices = np.array(vertices, dtype=np.float64)

    distances = cdist(vertices, vertices)
    edge = s * math.sqrt(2)
    tol = 1e-6 * max(s, 1.0)

    cells = []
    for center_idx, vertex in enumerate(vertices):
        facing = vertices @ _octaplex_cell_center(vertex, s)
        members = np.flatnonzero(facing > facing.max() - tol)
        if len(members) != 6 or center_idx not in members:
            raise RuntimeError(f"24-cell cell for vertex {center_idx} is malformed: {members}")
        opposite = next(int(m) for m in members
                        if math.isclose(distances[center_idx, m], 2 * s, abs_tol=tol))
        ring = [int(m) for m in members if m not in (center_idx, opposite)]
        # cyclic order: each ring vertex is joined by an edge to the next one
        ordered = [ring.pop(0)]
        while ring:
            nxt = next(m for m in ring if math.isclose(distances[ordered[-1], m], edge, abs_tol=tol))
            ring.remove(nxt)
            ordered.append(nxt)
        indices = (center_idx, opposite, *ordered)
        cells.append(Cell(indices, center_idx, CellShape.OCTAHEDRON))
    return vertices, cells


POLYTOPE_GENERATORS = {
    PolytopeKind.PENTACHORON: generate_pentachoron,
    PolytopeKind.TESSERACT: generate_tesseract,
    PolytopeKind.HEXADECACHORON: generate_16cell,
    PolytopeKind.OCTAPLEX: generate_24cell,
}


def build_polytope(kind, size: Optional[float] = None) -> Polytope:
    """Build the reference geometry for ``kind``.

    ``size`` defaults to the kind's tuned size. Unknown kinds raise
    ``ValueError``.
    """
    kind = PolytopeKind.parse(kind)
    if size is None:
        size = TUNINGS[kind.value].size
    vertices, cells = POLYTOPE_GENERATORS[kind](size)
    vertices.setflags(write=False)
    logger.debug("Built %s: %d vertices, %d cells", kind.value, len(vertices), len(cells))
    return Polytope(kind=kind, size=size, original_vertices=vertices, cells=tuple(cells))


def cell_adjacency(polytope: Polytope) -> Dict[int, Set[int]]:
    """Cells sharing a 2D face, keyed by cell label.

    Derived from the size of the shared vertex-index sets, so nothing on the
    cells themselves points at their neighbours.
    """
    facet_size = polytope.cell_shape.facet_size
    index_sets = [(cell.label, set(cell.indices)) for cell in polytope.cells]
    adjacency = {label: set() for label, _ in index_sets}
    for (la, sa), (lb, sb) in itertools.combinations(index_sets, 2):
        if len(sa & sb) >= facet_size:
            adjacency[la].add(lb)
            adjacency[lb].add(la)
    return adjacency
