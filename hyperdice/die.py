"""
4D Die
------
Ties the engine together: one die instance owns a polytope and its rotation
state, and every update runs Apply -> Project -> Sort -> Emit from scratch.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from hyperdice.colors import ColorLike, parse_color
from hyperdice.config import TUNINGS, VIEWER_DISTANCE, PolytopeTuning
from hyperdice.mesh import build_facet_lookup, emit_mesh
from hyperdice.polytopes import PolytopeKind, build_polytope
from hyperdice.projection import project_4d_to_3d
from hyperdice.rotation import RotationState
from hyperdice.visibility import sort_cells
from hyperdice.wireframe import emit_wireframe

logger = logging.getLogger(__name__)


class Die4D:
    def __init__(self, kind, tuning: Optional[PolytopeTuning] = None,
                 viewer_distance: float = VIEWER_DISTANCE):
        self.kind = PolytopeKind.parse(kind)
        self.tuning = tuning or TUNINGS[self.kind.value]
        self.viewer_distance = viewer_distance
        self.polytope = build_polytope(self.kind, self.tuning.size)
        self.rotation = RotationState()
        self._facet_lookup = build_facet_lookup(self.polytope)
        self.current_vertices = self.polytope.original_vertices.copy()
        self.projected = project_4d_to_3d(self.current_vertices, self.viewer_distance)
        self.scored_cells = []

    def __repr__(self):
        xw, yw, zw = self.rotation.angles
        return f"Die4D({self.kind.value!r}, xw={xw:.3f}, yw={yw:.3f}, zw={zw:.3f})"

    @property
    def w_angle(self) -> float:
        return self.rotation.w_angle

    def rotate(self, dxw=0.0, dyw=0.0, dzw=0.0):
        self.rotation.rotate(dxw, dyw, dzw)

    def update(self):
        """Recompute rotated vertices, projection and cell order."""
        self.current_vertices = self.rotation.apply(self.polytope.original_vertices)
        self.projected = project_4d_to_3d(self.current_vertices, self.viewer_distance)
        self.scored_cells = sort_cells(self.polytope.cells, self.current_vertices, self.tuning)
        return self.scored_cells

    def create_geometry(self, color: ColorLike, wireframe: bool = False,
                        out: Optional[list] = None) -> List:
        """Run one full pass and append the drawable primitives to ``out``.

        Solid mode emits a ``TriangleBatch`` per visible cell face (followed by
        outline prisms for kinds that use them); wireframe mode emits one
        ``WirePrism`` per unique edge.
        """
        if out is None:
            out = []
        rgb = parse_color(color)
        self.update()
        if wireframe:
            emit_wireframe(self.scored_cells, self.projected, self.tuning, rgb, out)
        else:
            emit_mesh(self.scored_cells, self.projected, self.polytope, rgb, out,
                      facet_lookup=self._facet_lookup)
            if self.tuning.outline_edges:
                emit_wireframe(self.scored_cells, self.projected, self.tuning, rgb, out,
                               outline=True)
        return out


def switch_die(current, kind, preserve_rotation: bool = True) -> Die4D:
    """Build a die of ``kind``, keeping the W-plane angles of ``current`` if it is 4D."""
    die = Die4D(kind)
    if preserve_rotation and isinstance(current, Die4D):
        die.rotation = RotationState(*current.rotation.angles)
        logger.debug("Carried 4D angles from %s to %s", current.kind.value, die.kind.value)
    return die
