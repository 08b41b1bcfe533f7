"""
Interactive 4D Dice Viewer
--------------------------
Matplotlib front end for the polytope engine. The 3D view itself is rotated
with the left mouse button as usual; the 4D rotation is driven by the middle
button, the scroll wheel and the auto-spin timer.

Hotkeys:
    1-4         : Select 5-cell / 8-cell / 16-cell / 24-cell
    W           : Toggle wireframe
    A           : Toggle auto-spin
    T           : Cycle through visual themes
    N           : Toggle face labels
    M           : Toggle on-screen menu
    + / -       : Zoom in / out
    Middle drag : XW / YW rotation (Shift: ZW)
    Scroll      : ZW rotation (Ctrl: XW, Shift: YW)
"""
from __future__ import annotations

import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.backend_bases import MouseButton
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from hyperdice.colors import parse_color, to_unit_rgba
from hyperdice.config import DEFAULT_COLOR, SPIN_TICK_SECONDS
from hyperdice.controls import RandomSpin, drag_to_rotation, scroll_to_rotation
from hyperdice.die import Die4D, switch_die
from hyperdice.mesh import TriangleBatch
from hyperdice.polytopes import PolytopeKind
from hyperdice.wireframe import WirePrism

logger = logging.getLogger(__name__)

KIND_KEYS = {
    "1": PolytopeKind.PENTACHORON,
    "2": PolytopeKind.TESSERACT,
    "3": PolytopeKind.HEXADECACHORON,
    "4": PolytopeKind.OCTAPLEX,
}

# -------------------------------
# Theme Definitions
# -------------------------------
themes = [
    {"name": "Classic", "bg_color": "whitesmoke", "menu_color": "black", "label_color": "black"},
    {"name": "Dark", "bg_color": "black", "menu_color": "white", "label_color": "white"},
    {"name": "Midnight", "bg_color": "#0d0d2b", "menu_color": "#fff", "label_color": "#ffcc00"},
]


def primitive_polygons(primitives):
    """Split engine primitives into (polygons, RGBA face colors) for Poly3DCollection."""
    polys = []
    facecolors = []
    for prim in primitives:
        if isinstance(prim, TriangleBatch):
            rgba = to_unit_rgba(prim.material.texture.base_color, prim.material.opacity)
            for tri in prim.triangles:
                polys.append(prim.positions[tri])
                facecolors.append(rgba)
        elif isinstance(prim, WirePrism):
            rgba = to_unit_rgba(prim.color, prim.opacity)
            for tri in prim.triangles:
                polys.append(prim.vertices[tri])
                facecolors.append(rgba)
    return polys, facecolors


class DiceViewer:
    def __init__(self, kind=PolytopeKind.TESSERACT, color=DEFAULT_COLOR, wireframe=False,
                 auto_spin=False, seed=None):
        self.die = Die4D(kind)
        self.color = parse_color(color)
        self.wireframe = wireframe
        self.auto_spin = auto_spin
        self.spin = RandomSpin(seed=seed)
        self.show_labels = False
        self.show_menu = True
        self.theme_index = 0
        self.zoom_scale = 1.0
        self._drag_origin = None
        self._dirty = True
        self.primitives = []

        self.fig = plt.figure("4D Dice")
        self.ax = self.fig.add_subplot(111, projection='3d')
        # middle button belongs to the 4D drag
        self.ax.mouse_init(rotate_btn=1, pan_btn=[], zoom_btn=3)
        self.ax.set_box_aspect([1, 1, 1])
        self.fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        self.set_axis_limits()

        self.fig.canvas.mpl_connect('key_press_event', self.on_key)
        self.fig.canvas.mpl_connect('scroll_event', self.on_scroll)
        self.fig.canvas.mpl_connect('button_press_event', self.on_press)
        self.fig.canvas.mpl_connect('motion_notify_event', self.on_motion)
        self.fig.canvas.mpl_connect('button_release_event', self.on_release)
        self.animation = None

    def set_axis_limits(self):
        lim = 1.2 * self.zoom_scale
        self.ax.set_xlim(-lim, lim)
        self.ax.set_ylim(-lim, lim)
        self.ax.set_zlim(-lim, lim)

    # -------------------------------
    # Rotation
    # -------------------------------
    def rotate(self, deltas):
        if any(deltas):
            self.die.rotate(*deltas)
            self._dirty = True

    def select(self, kind):
        self.die = switch_die(self.die, kind)
        self._dirty = True
        logger.info("Selected %s", self.die.kind.value)

    # -------------------------------
    # Update Function (Animation)
    # -------------------------------
    def update(self, frame=None):
        if self.auto_spin:
            self.rotate(self.spin.tick(SPIN_TICK_SECONDS))
        if not self._dirty:
            return []
        self._dirty = False

        for coll in self.ax.collections[:]:
            coll.remove()
        for txt in self.ax.texts[:]:
            txt.remove()

        theme = themes[self.theme_index]
        self.ax.set_facecolor(theme["bg_color"])
        for axis in (self.ax.xaxis, self.ax.yaxis, self.ax.zaxis):
            axis.pane.set_facecolor(theme["bg_color"])

        self.primitives = self.die.create_geometry(self.color, wireframe=self.wireframe)
        polys, facecolors = primitive_polygons(self.primitives)
        artists = []
        if polys:
            coll = Poly3DCollection(polys, facecolors=facecolors, edgecolors='none', linewidths=0)
            self.ax.add_collection3d(coll)
            artists.append(coll)

        if self.show_labels and not self.wireframe:
            for prim in self.primitives:
                if isinstance(prim, TriangleBatch):
                    x, y, z = np.mean(prim.positions, axis=0)
                    self.ax.text(x, y, z, "/".join(prim.material.texture.labels),
                                 color=theme["label_color"], fontsize=7)

        self.ax.set_title(f"4D Die: {self.die.kind.value}   W: {self.die.w_angle:+.1f}°")
        if self.show_menu:
            self.ax.text2D(0.02, 0.80, __doc__.split("Hotkeys:")[1].strip("\n"),
                           transform=self.ax.transAxes, color=theme["menu_color"], fontsize=8,
                           family="monospace")
        return artists

    # -------------------------------
    # Event Handlers
    # -------------------------------
    def on_key(self, event):
        key = event.key
        if key in KIND_KEYS:
            self.select(KIND_KEYS[key])
        elif key == 'w':
            self.wireframe = not self.wireframe
            logger.info("Wireframe toggled: %s", "On" if self.wireframe else "Off")
        elif key == 'a':
            self.auto_spin = not self.auto_spin
            if self.auto_spin:
                self.spin.new_direction()
            logger.info("Auto-spin toggled: %s", "On" if self.auto_spin else "Off")
        elif key == 't':
            self.theme_index = (self.theme_index + 1) % len(themes)
            logger.info("Switched to theme: %s", themes[self.theme_index]["name"])
        elif key == 'n':
            self.show_labels = not self.show_labels
        elif key == 'm':
            self.show_menu = not self.show_menu
        elif key in ('+', '='):
            self.zoom_scale *= 0.9
            self.set_axis_limits()
        elif key in ('-', '_'):
            self.zoom_scale *= 1.1
            self.set_axis_limits()
        else:
            return
        self._dirty = True

    def on_scroll(self, event):
        step = getattr(event, 'step', 1 if event.button == 'up' else -1)
        key = event.key or ""
        self.rotate(scroll_to_rotation(step, ctrl="control" in key or "ctrl" in key,
                                       shift="shift" in key))

    def on_press(self, event):
        if event.button == MouseButton.MIDDLE:
            self._drag_origin = (event.x, event.y)

    def on_motion(self, event):
        if self._drag_origin is None or event.x is None:
            return
        dx = event.x - self._drag_origin[0]
        # matplotlib's pixel y grows upwards
        dy = self._drag_origin[1] - event.y
        deltas = drag_to_rotation(dx, dy, shift="shift" in (event.key or ""))
        if any(deltas):
            self._drag_origin = (event.x, event.y)
            self.rotate(deltas)

    def on_release(self, event):
        if event.button == MouseButton.MIDDLE:
            self._drag_origin = None

    def show(self):
        self.animation = FuncAnimation(self.fig, self.update, frames=None,
                                       interval=int(SPIN_TICK_SECONDS * 1000),
                                       blit=False, cache_frame_data=False)
        plt.show()

