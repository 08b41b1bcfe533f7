"""Four-dimensional dice: regular 4-polytopes rotated in 4D and drawn in 3D."""
from hyperdice.config import TUNINGS, PolytopeTuning
from hyperdice.die import Die4D, switch_die
from hyperdice.polytopes import Cell, CellShape, Polytope, PolytopeKind, build_polytope
from hyperdice.rotation import RotationState

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "CellShape",
    "Die4D",
    "Polytope",
    "PolytopeKind",
    "PolytopeTuning",
    "RotationState",
    "TUNINGS",
    "build_polytope",
    "switch_die",
]
