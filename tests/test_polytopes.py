import itertools
import math

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.distance import cdist, pdist

from hyperdice.mesh import cell_faces
from hyperdice.polytopes import (CellShape, PolytopeKind, build_polytope, cell_adjacency,
                                 generate_24cell)

ALL_KINDS = list(PolytopeKind)


@pytest.mark.parametrize("kind, vertices, cells, shape", [
    (PolytopeKind.PENTACHORON, 5, 5, CellShape.TETRAHEDRON),
    (PolytopeKind.TESSERACT, 16, 8, CellShape.CUBE),
    (PolytopeKind.HEXADECACHORON, 8, 16, CellShape.TETRAHEDRON),
    (PolytopeKind.OCTAPLEX, 24, 24, CellShape.OCTAHEDRON),
])
def test_counts(kind, vertices, cells, shape):
    polytope = build_polytope(kind)
    assert polytope.vertex_count == vertices
    assert polytope.cell_count == cells
    assert all(cell.shape is shape for cell in polytope.cells)
    assert all(len(cell.indices) == shape.vertex_count for cell in polytope.cells)


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_indices_in_range_and_distinct(kind):
    polytope = build_polytope(kind)
    for cell in polytope.cells:
        assert len(set(cell.indices)) == len(cell.indices)
        assert all(0 <= i < polytope.vertex_count for i in cell.indices)


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_vertices_are_read_only(kind):
    polytope = build_polytope(kind)
    with pytest.raises(ValueError):
        polytope.original_vertices[0, 0] = 1.0


def test_kind_parse_aliases():
    assert PolytopeKind.parse("tesseract") is PolytopeKind.TESSERACT
    assert PolytopeKind.parse("24-cell") is PolytopeKind.OCTAPLEX
    assert PolytopeKind.parse("5 cell") is PolytopeKind.PENTACHORON
    with pytest.raises(ValueError):
        PolytopeKind.parse("120-cell")


def test_default_size_follows_tuning():
    assert build_polytope("8-cell").size == 0.4
    assert build_polytope("8-cell", size=1.0).original_vertices.max() == 1.0


def test_pentachoron_is_regular():
    s = 0.7
    polytope = build_polytope(PolytopeKind.PENTACHORON, s)
    assert_allclose(pdist(polytope.original_vertices), s * math.sqrt(2.5))
    assert_allclose(np.linalg.norm(polytope.original_vertices, axis=1), s)
    # cell k leaves out vertex k
    for cell in polytope.cells:
        assert cell.label not in cell.indices


def test_tesseract_index_bits():
    polytope = build_polytope(PolytopeKind.TESSERACT, 1.0)
    for i, vertex in enumerate(polytope.original_vertices):
        for axis in range(4):
            assert (vertex[axis] > 0) == bool(i >> axis & 1)


def test_tesseract_adjacent_cells_share_a_square():
    polytope = build_polytope(PolytopeKind.TESSERACT)
    adjacency = cell_adjacency(polytope)
    cells = {cell.label: set(cell.indices) for cell in polytope.cells}
    for label, neighbours in adjacency.items():
        # every cube touches all cubes except its opposite
        assert len(neighbours) == 6
        for other in neighbours:
            assert len(cells[label] & cells[other]) == 4


@pytest.mark.parametrize("kind", [PolytopeKind.PENTACHORON, PolytopeKind.HEXADECACHORON])
def test_tetrahedral_cells_have_four_neighbours(kind):
    adjacency = cell_adjacency(build_polytope(kind))
    assert all(len(neighbours) == 4 for neighbours in adjacency.values())


def test_16cell_labels_and_opposite_pairs():
    polytope = build_polytope(PolytopeKind.HEXADECACHORON)
    assert [cell.label for cell in polytope.cells] == list(range(8, 24))
    for cell in polytope.cells:
        # exactly one vertex from each pair (2i, 2i + 1)
        assert sorted(i // 2 for i in cell.indices) == [0, 1, 2, 3]


def test_24cell_vertices_and_neighbours():
    s = 0.4
    polytope = build_polytope(PolytopeKind.OCTAPLEX, s)
    vertices = polytope.original_vertices
    assert len({tuple(v) for v in vertices}) == 24
    assert all(np.count_nonzero(v) == 2 for v in vertices)
    distances = cdist(vertices, vertices)
    neighbours = np.isclose(distances, s * math.sqrt(2)).sum(axis=1)
    assert (neighbours == 8).all()


def test_24cell_cell_structure():
    s = 0.4
    polytope = build_polytope(PolytopeKind.OCTAPLEX, s)
    vertices = polytope.original_vertices
    assert sorted(cell.label for cell in polytope.cells) == list(range(24))
    assert len({frozenset(cell.indices) for cell in polytope.cells}) == 24
    for cell in polytope.cells:
        center, opposite, *ring = cell.indices
        assert cell.center == center == cell.label
        assert_allclose(np.linalg.norm(vertices[center] - vertices[opposite]), 2 * s)
        for k, r in enumerate(ring):
            assert_allclose(np.linalg.norm(vertices[center] - vertices[r]), s * math.sqrt(2))
            nxt = ring[(k + 1) % 4]
            assert_allclose(np.linalg.norm(vertices[r] - vertices[nxt]), s * math.sqrt(2))


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_every_face_is_shared_by_two_cells(kind):
    polytope = build_polytope(kind)
    owners = {}
    for cell in polytope.cells:
        for face in cell_faces(cell):
            owners.setdefault(frozenset(face), []).append(cell.label)
    assert all(len(labels) == 2 for labels in owners.values())


def test_24cell_adjacency_is_symmetric():
    adjacency = cell_adjacency(build_polytope(PolytopeKind.OCTAPLEX))
    for label, neighbours in adjacency.items():
        assert len(neighbours) == 8
        for other in neighbours:
            assert label in adjacency[other]


def test_24cell_generator_scales():
    small, _ = generate_24cell(1.0)
    large, _ = generate_24cell(2.0)
    assert_allclose(large, 2 * small)


def test_cube_cells_cover_all_axes():
    polytope = build_polytope(PolytopeKind.TESSERACT, 1.0)
    vertices = polytope.original_vertices
    fixed = []
    for cell in polytope.cells:
        block = vertices[list(cell.indices)]
        axis = next(a for a in range(4) if np.all(block[:, a] == block[0, a]))
        fixed.append((axis, block[0, axis]))
    assert fixed == list(itertools.product((3, 0, 1, 2), (-1.0, 1.0)))
