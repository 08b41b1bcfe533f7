import numpy as np
import pytest

from hyperdice.colors import (BLACK, WHITE, contrast_ratio, darken, optimal_text_color,
                              parse_color, to_unit_rgba)


def test_parse_named_and_hex():
    assert parse_color("crimson") == (220, 20, 60)
    assert parse_color("#dc143c") == (220, 20, 60)
    assert parse_color("white") == WHITE


def test_parse_integer_triple():
    assert parse_color((1, 2, 3)) == (1, 2, 3)
    assert parse_color([0, 128, 255]) == (0, 128, 255)


def test_parse_numpy_integer_triple():
    rgb = parse_color(np.array([220, 20, 60]))
    assert rgb == (220, 20, 60)
    assert all(type(c) is int for c in rgb)
    assert parse_color(np.array([0, 0, 255], dtype=np.uint8)) == (0, 0, 255)
    with pytest.raises(ValueError):
        parse_color(np.array([300, 0, 0]))


def test_parse_unit_float_triple():
    assert parse_color((1.0, 0.0, 0.0)) == (255, 0, 0)


@pytest.mark.parametrize("value", ["not-a-color", (256, 0, 0), (-1, 0, 0)])
def test_parse_rejects(value):
    with pytest.raises(ValueError):
        parse_color(value)


def test_to_unit_rgba():
    assert to_unit_rgba((255, 0, 51), 0.5) == pytest.approx((1.0, 0.0, 0.2, 0.5))


def test_text_color_contrast():
    assert optimal_text_color(WHITE) == BLACK
    assert optimal_text_color(BLACK) == WHITE
    assert optimal_text_color((220, 20, 60)) == WHITE
    assert optimal_text_color((255, 255, 0)) == BLACK
    assert contrast_ratio(BLACK, WHITE) == pytest.approx(21.0)


def test_darken():
    assert darken((220, 20, 60), 0.5) == (110, 10, 30)
    assert darken((200, 200, 200), 2.0) == (255, 255, 255)
