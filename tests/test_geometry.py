import itertools
import math

import numpy as np
import pytest

from teastri.geometry import (
    Fractions,
    TernaryGeometry,
    normalize,
    to_fractions,
    to_plane,
)


@pytest.mark.parametrize(
    "triple",
    [(50, 30, 20), (1, 1, 1), (80, 10, 10), (0.2, 0.5, 0.3), (12.5, 7.0, 3.2)],
)
def test_round_trip_preserves_ratios(triple):
    geo = TernaryGeometry(size=6)
    back = geo.to_fractions(*geo.to_plane(*triple))
    expected = [100 * v for v in normalize(*triple)]
    assert list(back) == pytest.approx(expected, rel=1e-9, abs=1e-9)
    assert sum(back) == pytest.approx(100.0)


def test_plane_round_trip():
    geo = TernaryGeometry(size=4)
    for x, y in [(0.0, 0.0), (0.3, -0.1), (5.0, 5.0), (-3.0, 1.0)]:
        p = geo.to_plane(*geo.to_fractions(x, y))
        assert p.x == pytest.approx(x, abs=1e-9)
        assert p.y == pytest.approx(y, abs=1e-9)


@pytest.mark.parametrize("size", [1.0, 6.0, 10.5])
def test_vertices_form_equilateral_triangle(size):
    geo = TernaryGeometry(size=size)
    vd, vp, vh = geo.vertices()
    for a, b in itertools.combinations((vd, vp, vh), 2):
        assert math.dist(a, b) == pytest.approx(size)
    assert vd.y == pytest.approx(vh.y)
    assert vp.x == pytest.approx(0.0)


def test_triangle_is_centred_at_origin():
    geo = TernaryGeometry(size=6)
    centre = geo.to_plane(1, 1, 1)
    assert centre.x == pytest.approx(0.0, abs=1e-12)
    assert centre.y == pytest.approx(0.0, abs=1e-12)
    assert list(geo.to_fractions(0.0, 0.0)) == pytest.approx([100 / 3] * 3)


def test_zero_sum_maps_to_fixed_point():
    geo = TernaryGeometry(size=6)
    assert normalize(0, 0, 0) == Fractions(0.0, 0.0, 0.0)
    p = geo.to_plane(0, 0, 0)
    assert tuple(p) == pytest.approx((-3.0, -math.sqrt(3)))
    back = geo.to_plane(*geo.to_fractions(*p))
    assert back.x == pytest.approx(p.x)
    assert back.y == pytest.approx(p.y)


def test_outside_point_has_negative_fraction():
    geo = TernaryGeometry(size=6)
    f = geo.to_fractions(0.0, -5.0)
    assert min(f) < 0
    assert not geo.is_inside(f)
    assert geo.locate(0.0, -5.0) is None


def test_boundary_rounding_is_tolerated():
    geo = TernaryGeometry(size=6)
    assert geo.is_inside(Fractions(-0.0005, 50.0005, 50.0))
    assert not geo.is_inside(Fractions(-0.01, 50.01, 50.0))
    vd = geo.vertices()[0]
    assert list(geo.locate(vd.x, vd.y)) == pytest.approx([100.0, 0.0, 0.0], abs=1e-9)


def test_to_plane_many_matches_scalar():
    geo = TernaryGeometry(size=6)
    triples = np.array([[50, 30, 20], [0, 0, 0], [10, 10, 80]], dtype=float)
    points = geo.to_plane_many(triples)
    assert points.shape == (3, 2)
    for row, p in zip(triples, points):
        assert tuple(p) == pytest.approx(tuple(geo.to_plane(*row)))


def test_module_helpers_use_default_size():
    p = to_plane(100, 0, 0)
    assert p.x == pytest.approx(3.0)
    assert list(to_fractions(*p)) == pytest.approx([100, 0, 0], abs=1e-9)


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        TernaryGeometry(size=0)
