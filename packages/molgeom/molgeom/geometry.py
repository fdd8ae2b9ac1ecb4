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

"""Plane geometry helpers working on (x, y) tuples."""

# Standard Library
import math


#============================================
def add(a, b):
	return (a[0] + b[0], a[1] + b[1])


#============================================
def subtract(a, b):
	return (a[0] - b[0], a[1] - b[1])


#============================================
def scale(a, factor):
	return (a[0] * factor, a[1] * factor)


#============================================
def midpoint(a, b):
	return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


#============================================
def length(a):
	return math.hypot(a[0], a[1])


#============================================
def distance_sq(a, b):
	dx = a[0] - b[0]
	dy = a[1] - b[1]
	return dx * dx + dy * dy


#============================================
def normalize(a):
	"""Return the unit vector of a, or (0.0, 0.0) for the zero vector."""
	magnitude = math.hypot(a[0], a[1])
	if magnitude == 0:
		return (0.0, 0.0)
	return (a[0] / magnitude, a[1] / magnitude)


#============================================
def angle_of(a):
	"""Angle of the vector a against the positive x axis, in radians."""
	return math.atan2(a[1], a[0])


#============================================
def rotate(a, angle):
	c = math.cos(angle)
	s = math.sin(angle)
	return (a[0] * c - a[1] * s, a[0] * s + a[1] * c)


#============================================
def rotate_around(point, angle, center):
	"""Rotate point by angle radians around center."""
	c = math.cos(angle)
	s = math.sin(angle)
	x = point[0] - center[0]
	y = point[1] - center[1]
	return (x * c - y * s + center[0], x * s + y * c + center[1])


#============================================
def normals(a, b):
	"""The two (unnormalized) normals of the segment a -> b."""
	dx = b[0] - a[0]
	dy = b[1] - a[1]
	return ((-dy, dx), (dy, -dx))


#============================================
def units(a, b):
	"""The two unit normals of the segment a -> b."""
	first, second = normals(a, b)
	return (normalize(first), normalize(second))


#============================================
def which_side(point, a, b):
	"""Signed area test of point against the line a -> b."""
	return (point[0] - a[0]) * (b[1] - a[1]) - (point[1] - a[1]) * (b[0] - a[0])


#============================================
def same_side_as(point, a, b, reference):
	"""True when point and reference lie on the same side of the line a -> b.

	Two points exactly on the line count as being on the same side.
	"""
	d = which_side(point, a, b)
	d_ref = which_side(reference, a, b)
	if d < 0 and d_ref < 0:
		return True
	if d == 0 and d_ref == 0:
		return True
	return d > 0 and d_ref > 0


#============================================
def clockwise(a, b):
	"""Orientation of b relative to a seen from the origin.

	Returns:
		int: -1 when b is clockwise of a, 0 when collinear, 1 otherwise.
	"""
	left = a[1] * b[0]
	right = a[0] * b[1]
	if left > right:
		return -1
	if left == right:
		return 0
	return 1


#============================================
def relative_clockwise(a, center, b):
	"""Like clockwise() but with both vectors taken relative to center."""
	left = (a[1] - center[1]) * (b[0] - center[0])
	right = (a[0] - center[0]) * (b[1] - center[1])
	if left > right:
		return -1
	if left == right:
		return 0
	return 1


#============================================
def three_point_angle(a, b, c):
	"""Angle between the segments a -> b and b -> c."""
	ab = subtract(b, a)
	bc = subtract(c, b)
	denominator = length(ab) * length(bc)
	if denominator == 0:
		return 0.0
	cosine = (ab[0] * bc[0] + ab[1] * bc[1]) / denominator
	return math.acos(max(-1.0, min(1.0, cosine)))


#============================================
def rotate_away_from_angle(point, away_from, center, angle):
	"""Pick +angle or -angle so that rotating point moves it away from away_from."""
	rotated = rotate_around(point, angle, center)
	dist_a = distance_sq(rotated, away_from)
	rotated = rotate_around(rotated, -2.0 * angle, center)
	dist_b = distance_sq(rotated, away_from)
	if dist_b < dist_a:
		return angle
	return -angle


#============================================
def rotate_away_from(point, away_from, center, angle):
	"""Rotate point around center by +-angle, whichever ends farther from away_from."""
	return rotate_around(point, rotate_away_from_angle(point, away_from, center, angle), center)


#============================================
def shorten_segment(start, end, by):
	"""Pull both ends of a segment inward by by / 2."""
	direction = normalize(subtract(start, end))
	offset = scale(direction, by / 2.0)
	return (subtract(start, offset), add(end, offset))


#============================================
def is_finite_point(point):
	if point is None:
		return False
	return math.isfinite(point[0]) and math.isfinite(point[1])


#============================================
def poly_circumradius(side_length, side_count):
	"""Circumradius of a regular polygon."""
	return side_length / (2.0 * math.sin(math.pi / side_count))


#============================================
def apothem(circumradius, side_count):
	"""Apothem of a regular polygon from its circumradius."""
	return circumradius * math.cos(math.pi / side_count)


#============================================
def apothem_from_side_length(side_length, side_count):
	return apothem(poly_circumradius(side_length, side_count), side_count)


#============================================
def central_angle(side_count):
	return math.radians(360.0 / side_count)


#============================================
def parity_of_permutation(order):
	"""Return 1 for an even permutation of range(len(order)) and -1 for an odd one."""
	visited = [False] * len(order)
	even_cycles = 0
	for start in range(len(order)):
		if visited[start]:
			continue
		cycle_length = 0
		index = start
		while not visited[index]:
			visited[index] = True
			cycle_length += 1
			index = order[index]
		even_cycles += 1 - cycle_length % 2
	if even_cycles % 2:
		return -1
	return 1
