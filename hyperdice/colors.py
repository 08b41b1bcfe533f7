"""Color helpers: parsing, contrast and shading for die textures and edges."""
from __future__ import annotations

import numbers
from typing import Sequence, Union

from matplotlib import colors as mcolors

from hyperdice.config import RGB

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)

ColorLike = Union[str, Sequence[float], Sequence[int]]


def parse_color(value: ColorLike) -> RGB:
    """Turn a color name, hex string or RGB triple into 0-255 integers.

    Triples whose components are all integers (numpy integers included) are
    read as 0-255; anything else is handed to matplotlib, so "crimson",
    "#dc143c" and (0.86, 0.08, 0.24) all work.
    """
    if (not isinstance(value, str) and len(value) == 3
            and all(isinstance(c, numbers.Integral) for c in value)):
        if any(c < 0 or c > 255 for c in value):
            raise ValueError(f"RGB components must be within 0-255: {tuple(value)!r}")
        return tuple(int(c) for c in value)
    try:
        r, g, b = mcolors.to_rgb(value)
    except ValueError as exc:
        raise ValueError(f"Invalid color: {value!r}") from exc
    return (round(r * 255), round(g * 255), round(b * 255))


def to_unit_rgba(color: RGB, alpha: float = 1.0):
    """0-255 RGB plus alpha -> matplotlib's 0-1 RGBA tuple."""
    return (color[0] / 255.0, color[1] / 255.0, color[2] / 255.0, alpha)


def relative_luminance(color: RGB) -> float:
    # https://www.w3.org/TR/WCAG20/#relativeluminancedef
    def channel(c):
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(c1: RGB, c2: RGB) -> float:
    l1, l2 = relative_luminance(c1), relative_luminance(c2)
    if l1 < l2:
        l1, l2 = l2, l1
    return (l1 + 0.05) / (l2 + 0.05)


def optimal_text_color(background: RGB) -> RGB:
    """Black or white, whichever contrasts more with the background."""
    if contrast_ratio(background, BLACK) > contrast_ratio(background, WHITE):
        return BLACK
    return WHITE


def darken(color: RGB, factor: float) -> RGB:
    return tuple(max(0, min(255, int(c * factor))) for c in color)
