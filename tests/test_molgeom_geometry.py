"""Tests for the 2D point helpers."""

# Standard Library
import math

import pytest

# Local repo modules
import conftest


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import geometry


#============================================
def test_rotate_around():
	point = geometry.rotate_around((2.0, 1.0), math.pi / 2.0, (1.0, 1.0))
	assert point == pytest.approx((1.0, 2.0))


#============================================
def test_unit_normals():
	first, second = geometry.units((0.0, 0.0), (30.0, 0.0))
	assert first == pytest.approx((0.0, 1.0))
	assert second == pytest.approx((0.0, -1.0))


#============================================
def test_same_side_as():
	a = (0.0, 0.0)
	b = (10.0, 0.0)
	assert geometry.same_side_as((3.0, 4.0), a, b, (7.0, 1.0))
	assert not geometry.same_side_as((3.0, -4.0), a, b, (7.0, 1.0))
	assert geometry.same_side_as((5.0, 0.0), a, b, (2.0, 0.0))


#============================================
def test_clockwise():
	assert geometry.clockwise((1.0, 0.0), (0.0, 1.0)) == 1
	assert geometry.clockwise((0.0, 1.0), (1.0, 0.0)) == -1
	assert geometry.clockwise((1.0, 0.0), (2.0, 0.0)) == 0
	assert geometry.relative_clockwise((2.0, 1.0), (1.0, 1.0), (1.0, 2.0)) == 1


#============================================
def test_shorten_segment():
	start, end = geometry.shorten_segment((0.0, 0.0), (30.0, 0.0), 6.0)
	assert start == pytest.approx((3.0, 0.0))
	assert end == pytest.approx((27.0, 0.0))


#============================================
def test_polygon_helpers():
	assert geometry.poly_circumradius(30.0, 6) == pytest.approx(30.0)
	assert geometry.apothem_from_side_length(30.0, 6) == pytest.approx(15.0 * math.sqrt(3.0))
	assert geometry.central_angle(4) == pytest.approx(math.pi / 2.0)


#============================================
def test_three_point_angle():
	assert geometry.three_point_angle((0.0, 0.0), (1.0, 0.0), (2.0, 0.0)) == pytest.approx(0.0)
	assert geometry.three_point_angle((0.0, 0.0), (1.0, 0.0), (1.0, 1.0)) == pytest.approx(math.pi / 2.0)


#============================================
@pytest.mark.parametrize("order,expected", [
	([0, 1, 2, 3], 1),
	([1, 0, 2, 3], -1),
	([1, 2, 0, 3], 1),
	([3, 2, 0, 1], -1),
])
def test_parity_of_permutation(order, expected):
	assert geometry.parity_of_permutation(order) == expected


#============================================
def test_is_finite_point():
	assert geometry.is_finite_point((0.0, 1.0))
	assert not geometry.is_finite_point((math.nan, 1.0))
	assert not geometry.is_finite_point(None)
