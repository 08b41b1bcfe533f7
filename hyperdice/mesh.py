"""
Mesh Emitter
------------
Turns the sorted cells into textured triangle batches, one batch per cell face.

Normals are oriented away from the origin; when the winding gives an inward
normal the normal is negated and the texture is mirrored horizontally so the
face label still reads the right way round from outside. Faces shared by two
cells carry both cells' labels (own label on top).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from hyperdice.colors import optimal_text_color
from hyperdice.config import QUAD_UV, RGB, TRIANGLE_UV
from hyperdice.labels import face_label
from hyperdice.polytopes import Cell, CellShape, Polytope, cell_adjacency

logger = logging.getLogger(__name__)

# -------------------------------
# Face tables (offsets into Cell.indices)
# -------------------------------
TETRA_FACES = ((0, 1, 2), (0, 2, 3), (0, 3, 1), (1, 3, 2))
CUBE_FACES = (
    (0, 1, 3, 2),
    (4, 6, 7, 5),
    (0, 4, 5, 1),
    (2, 3, 7, 6),
    (0, 2, 6, 4),
    (1, 5, 7, 3),
)
# two four-triangle fans around the ring: center on top, opposite below
OCTA_FACES = (
    tuple((0, 2 + k, 2 + (k + 1) % 4) for k in range(4))
    + tuple((1, 2 + (k + 1) % 4, 2 + k) for k in range(4))
)
FACE_TABLES = {
    CellShape.TETRAHEDRON: TETRA_FACES,
    CellShape.CUBE: CUBE_FACES,
    CellShape.OCTAHEDRON: OCTA_FACES,
}

TRIANGLE_INDICES = np.array([[0, 1, 2]], dtype=np.int64)
QUAD_INDICES = np.array([[0, 1, 2], [0, 2, 3]], dtype=np.int64)

FacetKey = FrozenSet[int]


@dataclass(frozen=True)
class FaceTexture:
    """What a renderer paints on a square face texture.

    ``labels`` holds one label, or two for a face shared with a neighbouring
    cell (drawn top then bottom).
    """
    labels: Tuple[str, ...]
    base_color: RGB
    text_color: RGB


@dataclass(frozen=True)
class FaceMaterial:
    texture: FaceTexture
    opacity: float
    mirrored: bool


@dataclass(eq=False)
class TriangleBatch:
    positions: np.ndarray   # (n, 3)
    uvs: np.ndarray         # (n, 2)
    normals: np.ndarray     # (n, 3)
    triangles: np.ndarray   # (m, 3) indices into positions
    material: FaceMaterial
    cell_label: int
    face_index: int


def cell_faces(cell: Cell) -> List[Tuple[int, ...]]:
    """Polytope vertex indices of every face of ``cell``, in face order."""
    return [tuple(cell.indices[offset] for offset in face) for face in FACE_TABLES[cell.shape]]


def build_facet_lookup(polytope: Polytope) -> Dict[Tuple[int, FacetKey], Tuple[int, int]]:
    """Map ``(cell label, face vertex set)`` to the neighbour's ``(cell label, face index)``.

    Walks ``cell_adjacency`` and keeps each neighbour face that lies inside
    the cell's own vertex set.
    """
    cells = {cell.label: cell for cell in polytope.cells}
    lookup: Dict[Tuple[int, FacetKey], Tuple[int, int]] = {}
    for label, neighbours in cell_adjacency(polytope).items():
        own = set(cells[label].indices)
        for other in neighbours:
            for face_index, face in enumerate(cell_faces(cells[other])):
                key = frozenset(face)
                if key <= own:
                    lookup[(label, key)] = (other, face_index)
    return lookup


def face_orientation(points):
    """Return ``(normal, centroid, outward)`` for a planar polygon.

    The normal comes from the first edge and the closing edge; ``outward``
    tells whether it points away from the origin.
    """
    points = np.asarray(points, dtype=np.float64)
    normal = np.cross(points[1] - points[0], points[-1] - points[0])
    norm_val = np.linalg.norm(normal)
    if norm_val > 0:
        normal = normal / norm_val
    centroid = points.mean(axis=0)
    outward = bool(np.dot(normal, centroid) > 0)
    return normal, centroid, outward


def face_uvs(vertex_count: int, mirrored: bool) -> np.ndarray:
    uvs = np.array(QUAD_UV if vertex_count == 4 else TRIANGLE_UV, dtype=np.float64)
    if mirrored:
        uvs[:, 0] = 1.0 - uvs[:, 0]
    return uvs


def face_texture(polytope: Polytope, cell: Cell, face_index: int, face, color: RGB,
                 facet_lookup) -> FaceTexture:
    labels = [face_label(polytope.kind, cell.label, face_index)]
    neighbour = facet_lookup.get((cell.label, frozenset(face)))
    if neighbour is not None:
        labels.append(face_label(polytope.kind, *neighbour))
    return FaceTexture(tuple(labels), tuple(color), optimal_text_color(color))


def emit_mesh(scored_cells, projected, polytope: Polytope, color: RGB, out: list,
              facet_lookup: Optional[dict] = None) -> list:
    """Append one ``TriangleBatch`` per face of every scored cell to ``out``."""
    if facet_lookup is None:
        facet_lookup = build_facet_lookup(polytope)
    flipped = 0
    emitted = 0
    for scored in scored_cells:
        cell = scored.cell
        for face_index, face in enumerate(cell_faces(cell)):
            positions = projected[list(face)]
            normal, _, outward = face_orientation(positions)
            if not outward:
                normal = -normal
                flipped += 1
            texture = face_texture(polytope, cell, face_index, face, color, facet_lookup)
            out.append(TriangleBatch(
                positions=positions,
                uvs=face_uvs(len(face), mirrored=not outward),
                normals=np.tile(normal, (len(face), 1)),
                triangles=QUAD_INDICES if len(face) == 4 else TRIANGLE_INDICES,
                material=FaceMaterial(texture, scored.opacity, mirrored=not outward),
                cell_label=cell.label,
                face_index=face_index,
            ))
            emitted += 1
    logger.debug("Emitted %d faces (%d normals flipped)", emitted, flipped)
    return out
