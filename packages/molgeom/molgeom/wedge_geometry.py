#--------------------------------------------------------------------------
#     This file is part of MolGeom - a free 2D molecule geometry library
#
#     This program is free software; you can redistribute it and/or modify
#     it under the terms of the GNU General Public License as published by
#     the Free Software Foundation; either version 2 of the License, or
#     (at your option) any later version.
#
#     This program is distributed in the hope that it will be useful,
#     but WITHOUT ANY WARRANTY; without even the implied warranty of
#     MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#     GNU General Public License for more details.
#
#     Complete text of GNU GPL can be found in the file LICENSE in the
#     main directory of the program
#
#--------------------------------------------------------------------------

"""Pure geometry helpers for solid and dashed wedge bonds."""

# Standard Library
import math

# extra width added on each side at the wide end of a wedge
WEDGE_SPREAD = 1.5
# spacing of the dashes, in multiples of the bond thickness
DASH_SPACING = 1.25


#============================================
def wedge_corners(tip_point, base_point, narrow_width, wide_width):
	"""Compute the four corners of a wedge from its endpoints.

	The wedge is directional: it expands from tip_point (narrow) to base_point
	(wide). The left side lies along the normal (-dy, dx) of tip -> base.

	Args:
		tip_point: (x, y) center of the narrow end.
		base_point: (x, y) center of the wide end.
		narrow_width: Width at the narrow end (0.0 for pointed tip).
		wide_width: Width at the wide end.

	Returns:
		tuple: (narrow_left, narrow_right, wide_left, wide_right, angle)
	"""
	_tx, _ty = tip_point
	_bx, _by = base_point
	dx = _bx - _tx
	dy = _by - _ty
	length = math.hypot(dx, dy)
	if length == 0:
		raise ValueError("tip_point and base_point must be different")
	if wide_width <= 0:
		raise ValueError("wide_width must be positive")
	if narrow_width < 0:
		raise ValueError("narrow_width must be non-negative")
	ux = dx / length
	uy = dy / length
	px = -uy
	py = ux
	narrow_half = narrow_width / 2.0
	wide_half = wide_width / 2.0
	narrow_left = (_tx + px * narrow_half, _ty + py * narrow_half)
	narrow_right = (_tx - px * narrow_half, _ty - py * narrow_half)
	wide_left = (_bx + px * wide_half, _by + py * wide_half)
	wide_right = (_bx - px * wide_half, _by - py * wide_half)
	angle = math.atan2(dy, dx)
	return (narrow_left, narrow_right, wide_left, wide_right, angle)


#============================================
def solid_wedge_polygon(tip_point, base_point, half_bond_thickness, spread=WEDGE_SPREAD):
	"""Return the wedge outline as four points walked around the shape.

	The narrow end is one bond thickness wide and the wide end adds
	spread on either side.
	"""
	narrow_left, narrow_right, wide_left, wide_right, _angle = wedge_corners(
		tip_point,
		base_point,
		2.0 * half_bond_thickness,
		2.0 * (spread + half_bond_thickness),
	)
	return (narrow_left, wide_left, wide_right, narrow_right)


#============================================
def wedge_area(polygon):
	"""Shoelace area of a wedge outline."""
	area = 0.0
	count = len(polygon)
	for index in range(count):
		x1, y1 = polygon[index]
		x2, y2 = polygon[(index + 1) % count]
		area += x1 * y2 - x2 * y1
	return abs(area) / 2.0


#============================================
def dashed_wedge_segments(tip_point, base_point, bond_thickness, spread=WEDGE_SPREAD):
	"""Compute the dashes of a hashed wedge.

	Dashes are laid out from the tip towards the base and grow linearly
	from zero to 2 * spread wide.

	Args:
		tip_point: (x, y) of the stereo centre end.
		base_point: (x, y) of the far end.
		bond_thickness: stroke width of a single dash.

	Returns:
		tuple: (segments, switch_index) where segments is a tuple of
		((x1, y1), (x2, y2)) dashes and switch_index is the first dash past
		the middle of the bond.
	"""
	_tx, _ty = tip_point
	_bx, _by = base_point
	dx = _bx - _tx
	dy = _by - _ty
	length = math.hypot(dx, dy)
	if length == 0:
		raise ValueError("tip_point and base_point must be different")
	if bond_thickness <= 0:
		raise ValueError("bond_thickness must be positive")
	ux = dx / length
	uy = dy / length
	px = -uy
	py = ux
	step = DASH_SPACING / (length / (bond_thickness * 3.0))
	segments = []
	switch_index = None
	t = 0.0
	while t < 1.0:
		if switch_index is None and t > 0.5:
			switch_index = len(segments)
		cx = _tx + ux * t * length
		cy = _ty + uy * t * length
		half = spread * t
		segments.append(((cx - px * half, cy - py * half), (cx + px * half, cy + py * half)))
		t += step
	if switch_index is None:
		switch_index = len(segments)
	return (tuple(segments), switch_index)
