"""
Rotation Engine
---------------
Accumulated XW/YW/ZW angles and the plane rotations that apply them.

Rotated vertices are always rebuilt from the original vertices; the angles are
the only state carried from one frame to the next.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from hyperdice.config import TWO_PI

logger = logging.getLogger(__name__)

# plane name -> (axis rotated into w, w axis); applied in this order
W_PLANES = (("xw", (0, 3)), ("yw", (1, 3)), ("zw", (2, 3)))


def wrap_angle(theta: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    theta = theta % TWO_PI
    if theta > math.pi:
        theta -= TWO_PI
    return theta


def plane_rotation(i, j, theta):
    """4x4 rotation in the (i, j) plane: i' = i cos - j sin, j' = i sin + j cos."""
    M = np.eye(4, dtype=np.float64)
    c, s = math.cos(theta), math.sin(theta)
    M[i, i] = c
    M[j, j] = c
    M[i, j] = -s
    M[j, i] = s
    return M


def rotate_vertices(original, xw=0.0, yw=0.0, zw=0.0):
    """Fresh copy of ``original`` rotated in XW, then YW, then ZW."""
    current = np.array(original, dtype=np.float64, copy=True)
    for (_, (i, j)), theta in zip(W_PLANES, (xw, yw, zw)):
        if theta:
            current = current @ plane_rotation(i, j, theta).T
    return current


@dataclass
class RotationState:
    xw: float = 0.0
    yw: float = 0.0
    zw: float = 0.0

    def rotate(self, dxw=0.0, dyw=0.0, dzw=0.0):
        self.xw = wrap_angle(self.xw + dxw)
        self.yw = wrap_angle(self.yw + dyw)
        self.zw = wrap_angle(self.zw + dzw)
        logger.debug("4D angles xw=%.4f yw=%.4f zw=%.4f", self.xw, self.yw, self.zw)

    def apply(self, original):
        return rotate_vertices(original, self.xw, self.yw, self.zw)

    @property
    def angles(self):
        return (self.xw, self.yw, self.zw)

    @property
    def w_angle(self) -> float:
        """Mean of the three W-plane angles, in degrees, for display."""
        return math.degrees((self.xw + self.yw + self.zw) / 3.0)
