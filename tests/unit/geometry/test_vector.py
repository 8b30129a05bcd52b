"""
Tests for the Point value type and vector helpers.
"""

import math

import numpy as np
import pytest

from decaminx.core.exceptions import GeometryError
from decaminx.geometry.vector import Point, cross, dist_pl, dot


@pytest.mark.unit
@pytest.mark.geometry
class TestPointArithmetic:
    def test_add_sub_neg(self):
        a = Point(1.0, 2.0, 3.0)
        b = Point(0.5, -1.0, 2.0)
        assert a + b == Point(1.5, 1.0, 5.0)
        assert a - b == Point(0.5, 3.0, 1.0)
        assert -a == Point(-1.0, -2.0, -3.0)

    def test_length(self):
        p = Point(3.0, 4.0, 12.0)
        assert p.sqr_length() == 169.0
        assert p.length() == 13.0
        assert abs(p) == 13.0

    def test_scale_and_norm(self):
        p = Point(0.0, 3.0, 4.0)
        assert p.scale(2.0) == Point(0.0, 6.0, 8.0)
        n = p.norm()
        assert n.length() == pytest.approx(1.0)
        assert n.y == pytest.approx(0.6)

    def test_norm_of_zero_raises(self):
        with pytest.raises(GeometryError):
            Point.zero().norm()

    def test_immutable(self):
        p = Point(1.0, 2.0, 3.0)
        with pytest.raises(AttributeError):
            p.x = 5.0

    def test_array_conversion(self):
        p = Point.from_array(np.array([1.0, -2.0, 0.5]))
        assert p == Point(1.0, -2.0, 0.5)
        np.testing.assert_array_equal(p.to_array(), [1.0, -2.0, 0.5])
        assert tuple(p) == (1.0, -2.0, 0.5)

    def test_from_array_wrong_shape(self):
        with pytest.raises(GeometryError):
            Point.from_array([1.0, 2.0])


@pytest.mark.unit
@pytest.mark.geometry
class TestProducts:
    def test_dot(self):
        assert dot(Point(1.0, 2.0, 3.0), Point(4.0, -5.0, 6.0)) == 12.0

    def test_cross_right_handed(self):
        assert cross(Point(1.0, 0.0, 0.0), Point(0.0, 1.0, 0.0)) == Point(0.0, 0.0, 1.0)

    def test_cross_perpendicular(self):
        a = Point(1.0, 2.0, 3.0)
        b = Point(-2.0, 0.5, 1.0)
        c = cross(a, b)
        assert dot(c, a) == pytest.approx(0.0)
        assert dot(c, b) == pytest.approx(0.0)


@pytest.mark.unit
@pytest.mark.geometry
class TestAnyPerp:
    @pytest.mark.parametrize(
        "v, expected",
        [
            (Point(0.1, 2.0, 3.0), Point(0.0, 3.0, -2.0)),
            (Point(2.0, 0.1, 3.0), Point(-3.0, 0.0, 2.0)),
            (Point(2.0, 3.0, 0.1), Point(3.0, -2.0, 0.0)),
            (Point(0.0, 0.0, 1.0), Point(-1.0, 0.0, 0.0)),
        ],
    )
    def test_zeroes_smallest_component(self, v, expected):
        assert v.any_perp() == expected

    @pytest.mark.parametrize(
        "v",
        [Point(1.0, 1.0, 1.0), Point(-0.3, 0.8, 0.2), Point(5.0, 0.0, 0.0)],
    )
    def test_is_perpendicular(self, v):
        assert dot(v, v.any_perp()) == pytest.approx(0.0)


@pytest.mark.unit
@pytest.mark.geometry
class TestRotate:
    def test_quarter_turn_about_z(self):
        p = Point(1.0, 0.0, 0.0).rotate(Point(0.0, 0.0, 1.0), math.pi / 2)
        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.y == pytest.approx(1.0)
        assert p.z == pytest.approx(0.0)

    def test_negative_angle_reverses(self):
        axle = Point(1.0, 2.0, 2.0).norm()
        p = Point(0.3, -4.0, 7.0)
        back = p.rotate(axle, 0.7).rotate(axle, -0.7)
        np.testing.assert_allclose(back.to_array(), p.to_array(), atol=1e-12)

    def test_preserves_length_and_axle_component(self):
        axle = Point(0.0, 1.0, 1.0).norm()
        p = Point(2.0, -1.0, 5.0)
        q = p.rotate(axle, 1.234)
        assert q.length() == pytest.approx(p.length())
        assert dot(q, axle) == pytest.approx(dot(p, axle))


@pytest.mark.unit
@pytest.mark.geometry
class TestDistPl:
    def test_perpendicular_inside_span(self):
        d = dist_pl(Point(1.0, 2.0, 0.0), Point(0.0, 0.0, 0.0), Point(4.0, 0.0, 0.0))
        assert d == pytest.approx(2.0)

    def test_clamps_before_start(self):
        d = dist_pl(Point(-3.0, 4.0, 0.0), Point(0.0, 0.0, 0.0), Point(4.0, 0.0, 0.0))
        assert d == pytest.approx(5.0)

    def test_clamps_past_end(self):
        d = dist_pl(Point(7.0, 4.0, 0.0), Point(0.0, 0.0, 0.0), Point(4.0, 0.0, 0.0))
        assert d == pytest.approx(5.0)

    def test_zero_length_segment(self):
        p1 = Point(1.0, 1.0, 1.0)
        d = dist_pl(Point(1.0, 1.0, 4.0), p1, p1)
        assert d == pytest.approx(3.0)
