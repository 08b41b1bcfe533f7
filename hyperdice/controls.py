"""
Pointer, wheel and auto-spin input mapped to 4D rotation deltas.

All functions return ``(dxw, dyw, dzw)`` in radians, ready for
``Die4D.rotate``.
"""
from __future__ import annotations

import logging

import numpy as np

from hyperdice.config import (DRAG_DEADZONE, DRAG_ROTATION_SCALE, SCROLL_ROTATION_STEP,
                              SPIN_DEFAULT_DURATION, SPIN_DURATION_RANGE, SPIN_STEP_SCALE,
                              SPIN_TICK_SECONDS)

logger = logging.getLogger(__name__)

NO_ROTATION = (0.0, 0.0, 0.0)


def drag_to_rotation(dx, dy, shift=False):
    """Middle-button drag: XW/YW from the two screen axes, ZW with shift held."""
    if abs(dx) < DRAG_DEADZONE and abs(dy) < DRAG_DEADZONE:
        return NO_ROTATION
    if shift:
        return (0.0, 0.0, dx * DRAG_ROTATION_SCALE)
    # screen y grows downwards
    return (-dy * DRAG_ROTATION_SCALE, dx * DRAG_ROTATION_SCALE, 0.0)


def scroll_to_rotation(step, ctrl=False, shift=False):
    """Wheel: ZW by default, XW with ctrl, YW with shift."""
    delta = step * SCROLL_ROTATION_STEP
    if ctrl:
        return (delta, 0.0, 0.0)
    if shift:
        return (0.0, delta, 0.0)
    return (0.0, 0.0, delta)


class RandomSpin:
    """Random tumbling: a step in {-1, 0, 1} held for ``direction_duration`` seconds.

    ``tick()`` is meant to be called every ``SPIN_TICK_SECONDS``.
    """

    def __init__(self, direction_duration=SPIN_DEFAULT_DURATION, seed=None):
        lo, hi = SPIN_DURATION_RANGE
        self.direction_duration = int(min(hi, max(lo, direction_duration)))
        self.rng = np.random.default_rng(seed)
        self.elapsed = 0.0
        self.step = 0
        self.new_direction()

    def new_direction(self):
        self.step = int(self.rng.integers(-1, 2))
        self.elapsed = 0.0
        logger.debug("Auto-spin step %+d", self.step)

    def tick(self, dt=SPIN_TICK_SECONDS):
        self.elapsed += dt
        if self.elapsed >= self.direction_duration:
            self.new_direction()
        increment = self.step * SPIN_STEP_SCALE * dt / SPIN_TICK_SECONDS
        return (increment, increment, increment)
