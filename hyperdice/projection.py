"""Perspective projection from 4D to 3D."""
import numpy as np

from hyperdice.config import PROJECTION_EPSILON, VIEWER_DISTANCE


def perspective_scale(w, d=VIEWER_DISTANCE, eps=PROJECTION_EPSILON):
    """``d / max(w + d, eps)``: points further along +W shrink."""
    return d / np.maximum(np.asarray(w, dtype=np.float64) + d, eps)


def project_4d_to_3d(vertices, d=VIEWER_DISTANCE, eps=PROJECTION_EPSILON):
    vertices = np.asarray(vertices, dtype=np.float64)
    factor = perspective_scale(vertices[:, 3:4], d, eps)
    return vertices[:, :3] * factor
