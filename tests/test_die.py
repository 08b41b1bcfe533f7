import pytest
from numpy.testing import assert_allclose

from hyperdice.config import TUNINGS
from hyperdice.die import Die4D, switch_die
from hyperdice.polytopes import PolytopeKind


def test_defaults():
    die = Die4D("tesseract")
    assert die.kind is PolytopeKind.TESSERACT
    assert die.tuning is TUNINGS["8-cell"]
    assert die.rotation.angles == (0.0, 0.0, 0.0)
    assert die.w_angle == 0.0
    assert "8-cell" in repr(die)


def test_unknown_kind():
    with pytest.raises(ValueError):
        Die4D("dodecahedron")


def test_invalid_color():
    with pytest.raises(ValueError):
        Die4D(PolytopeKind.PENTACHORON).create_geometry("not-a-color")


def test_update_tracks_rotation():
    die = Die4D(PolytopeKind.HEXADECACHORON)
    die.rotate(0.5, 0.0, 0.0)
    die.update()
    # x+ vertex swings into +w
    assert die.current_vertices[0, 3] > 0
    assert_allclose(die.polytope.original_vertices[0], [0.6, 0.0, 0.0, 0.0])
    assert die.projected.shape == (8, 3)


def test_create_geometry_appends_to_out():
    die = Die4D(PolytopeKind.PENTACHORON)
    out = ["existing"]
    result = die.create_geometry((10, 20, 30), out=out)
    assert result is out
    assert out[0] == "existing"
    assert len(out) > 1


def test_custom_tuning():
    tuning = TUNINGS["16-cell"]
    die = Die4D(PolytopeKind.HEXADECACHORON, tuning=tuning, viewer_distance=10.0)
    assert die.polytope.size == tuning.size
    assert_allclose(die.projected[0], [0.6, 0.0, 0.0])


def test_switch_die_keeps_angles():
    die = Die4D(PolytopeKind.TESSERACT)
    die.rotate(0.1, 0.2, 0.3)
    switched = switch_die(die, PolytopeKind.OCTAPLEX)
    assert switched.kind is PolytopeKind.OCTAPLEX
    assert switched.rotation.angles == pytest.approx((0.1, 0.2, 0.3))
    switched.rotate(0.1)
    assert die.rotation.xw == pytest.approx(0.1)


def test_switch_die_from_nothing():
    assert switch_die(None, "16-cell").rotation.angles == (0.0, 0.0, 0.0)
    die = Die4D(PolytopeKind.TESSERACT)
    die.rotate(0.5)
    assert switch_die(die, "5-cell", preserve_rotation=False).rotation.angles == (0.0, 0.0, 0.0)
