"""Tests for solid and dashed wedge geometry helpers."""

# Standard Library
import math

import pytest

# Local repo modules
import conftest


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import wedge_geometry


#============================================
def test_horizontal_wedge_corners():
	corners = wedge_geometry.wedge_corners((0.0, 0.0), (10.0, 0.0), 0.0, 4.0)
	narrow_left, narrow_right, wide_left, wide_right, angle = corners
	assert narrow_left == (0.0, 0.0)
	assert narrow_right == (0.0, 0.0)
	assert wide_left == (10.0, 2.0)
	assert wide_right == (10.0, -2.0)
	assert angle == 0.0


#============================================
def test_vertical_wedge_corners():
	corners = wedge_geometry.wedge_corners((0.0, 0.0), (0.0, 10.0), 0.0, 4.0)
	assert corners[2] == pytest.approx((-2.0, 10.0))
	assert corners[3] == pytest.approx((2.0, 10.0))
	assert corners[4] == pytest.approx(math.pi / 2.0)


#============================================
def test_solid_wedge_area_invariance():
	length = 10.0
	# narrow end 1.0 wide, wide end 4.0 wide
	expected = length * (1.0 + 4.0) / 2.0
	for angle in (0, 45, 90, 135, 180, 225, 270, 315):
		rad = math.radians(angle)
		base = (length * math.cos(rad), length * math.sin(rad))
		polygon = wedge_geometry.solid_wedge_polygon((0.0, 0.0), base, 0.5)
		assert len(polygon) == 4
		assert wedge_geometry.wedge_area(polygon) == pytest.approx(expected, rel=1e-6)


#============================================
def test_solid_wedge_is_narrow_at_tip():
	polygon = wedge_geometry.solid_wedge_polygon((0.0, 0.0), (30.0, 0.0), 0.5)
	narrow_left, wide_left, wide_right, narrow_right = polygon
	assert math.dist(narrow_left, narrow_right) == pytest.approx(1.0)
	assert math.dist(wide_left, wide_right) == pytest.approx(4.0)
	assert narrow_left[0] == pytest.approx(0.0)
	assert wide_left[0] == pytest.approx(30.0)


#============================================
def test_dashed_wedge_segments():
	segments, switch_index = wedge_geometry.dashed_wedge_segments((0.0, 0.0), (30.0, 0.0), 1.0)
	assert len(segments) == 8
	assert switch_index == 5
	widths = [math.dist(start, end) for start, end in segments]
	assert widths[0] == pytest.approx(0.0)
	assert widths == sorted(widths)
	assert widths[-1] == pytest.approx(2.0 * 1.5 * 0.875)
	# every dash is centred on the bond axis
	for start, end in segments:
		assert (start[1] + end[1]) / 2.0 == pytest.approx(0.0)


#============================================
def test_dashed_wedge_denser_for_longer_bonds():
	short, _ = wedge_geometry.dashed_wedge_segments((0.0, 0.0), (20.0, 0.0), 1.0)
	long, _ = wedge_geometry.dashed_wedge_segments((0.0, 0.0), (40.0, 0.0), 1.0)
	assert len(long) > len(short)


#============================================
def test_wedge_input_validation():
	with pytest.raises(ValueError):
		wedge_geometry.wedge_corners((0.0, 0.0), (0.0, 0.0), 0.0, 4.0)
	with pytest.raises(ValueError):
		wedge_geometry.wedge_corners((0.0, 0.0), (1.0, 0.0), 0.0, 0.0)
	with pytest.raises(ValueError):
		wedge_geometry.wedge_corners((0.0, 0.0), (1.0, 0.0), -1.0, 4.0)
	with pytest.raises(ValueError):
		wedge_geometry.dashed_wedge_segments((1.0, 1.0), (1.0, 1.0), 1.0)
	with pytest.raises(ValueError):
		wedge_geometry.dashed_wedge_segments((0.0, 0.0), (1.0, 0.0), 0.0)
