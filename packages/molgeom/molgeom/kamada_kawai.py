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

"""Kamada-Kawai spring layout for bridged ring systems.

T. Kamada, S. Kawai, "An Algorithm for Drawing General Undirected Graphs",
Information Processing Letters 31(1), 1989, pp. 7-15.

Only the vertices of one bridged ring take part. Every pair of vertices is
joined by a spring whose rest length is the graph distance times the bond
length. One vertex at a time, the one with the largest gradient, is moved
by Newton steps until the whole system is below the threshold.
"""

# Standard Library
import logging
import math

# local repo modules
from molgeom import errors
from molgeom import geometry


logger = logging.getLogger(__name__)

# side length of the polygon used for the initial circle
INITIAL_POLYGON_SIDE = 500.0


#============================================
def _pair_force(sx, sy, tx, ty, strength, desired_length):
	if strength == 0:
		return (0.0, 0.0)
	dx = sx - tx
	dy = sy - ty
	distance_sq = dx * dx + dy * dy
	if distance_sq == 0:
		return (0.0, 0.0)
	inv_distance = 1.0 / math.sqrt(distance_sq)
	return (
		strength * (dx - desired_length * dx * inv_distance),
		strength * (dy - desired_length * dy * inv_distance),
	)


#============================================
def _initial_positions(graph, vertex_ids, center):
	"""Fixed vertices keep their position, the others go on a large circle."""
	length = len(vertex_ids)
	radius = geometry.poly_circumradius(INITIAL_POLYGON_SIDE, length)
	step = geometry.central_angle(length)
	xs = [0.0] * length
	ys = [0.0] * length
	fixed = [False] * length
	angle = 0.0
	# walk backwards so the last vertex sits at angle zero
	for index in range(length - 1, -1, -1):
		vertex = graph.vertices[vertex_ids[index]]
		if vertex.positioned:
			xs[index], ys[index] = vertex.position
		else:
			xs[index] = center[0] + math.cos(angle) * radius
			ys[index] = center[1] + math.sin(angle) * radius
		fixed[index] = vertex.positioned
		angle += step
	return xs, ys, fixed


#============================================
def layout(graph, vertex_ids, center, start_vertex_id, ring, bond_length,
		threshold=0.1, inner_threshold=0.1, max_iteration=2000,
		max_inner_iteration=50, max_energy=1e9):
	"""Position vertex_ids of graph with the Kamada-Kawai algorithm.

	start_vertex_id and ring are accepted so callers can pass the context
	of the layout; the computation itself does not need them.

	Raises:
		LayoutDivergenceError: when the residual energy becomes non-finite or
			ends above max_energy. Positions are left untouched in that case.
	"""
	length = len(vertex_ids)
	if length == 0:
		return
	distances = graph.get_subgraph_distance_matrix(vertex_ids)
	edge_strength = bond_length
	xs, ys, fixed = _initial_positions(graph, vertex_ids, center)
	movable = [index for index in range(length) if not fixed[index]]

	lengths = [[bond_length * d for d in row] for row in distances]
	strengths = []
	for row in distances:
		strengths.append([0.0 if d == 0 else edge_strength / (d * d) for d in row])

	energy = [[(0.0, 0.0)] * length for _ in range(length)]
	sum_x = [0.0] * length
	sum_y = [0.0] * length
	for row in range(length - 1, -1, -1):
		gx = 0.0
		gy = 0.0
		for col in range(length):
			if row == col:
				force = (0.0, 0.0)
			else:
				force = _pair_force(xs[row], ys[row], xs[col], ys[col],
					strengths[row][col], lengths[row][col])
			energy[row][col] = force
			energy[col][row] = force
			gx += force[0]
			gy += force[1]
		sum_x[row] = gx
		sum_y[row] = gy

	def highest_energy():
		if not movable:
			return 0, 0.0, 0.0, 0.0
		best = movable[0]
		best_magnitude = sum_x[best] * sum_x[best] + sum_y[best] * sum_y[best]
		for index in movable[1:]:
			magnitude = sum_x[index] * sum_x[index] + sum_y[index] * sum_y[index]
			if magnitude > best_magnitude:
				best = index
				best_magnitude = magnitude
		return best, best_magnitude, sum_x[best], sum_y[best]

	def newton_update(index, gradient_x, gradient_y):
		ux = xs[index]
		uy = ys[index]
		row_lengths = lengths[index]
		row_strengths = strengths[index]
		dxx = 0.0
		dyy = 0.0
		dxy = 0.0
		for other in range(length):
			if other == index:
				continue
			dx = ux - xs[other]
			dy = uy - ys[other]
			distance_sq = dx * dx + dy * dy
			if distance_sq == 0:
				continue
			inv_distance = 1.0 / math.sqrt(distance_sq)
			denom = inv_distance * inv_distance * inv_distance
			k = row_strengths[other]
			l = row_lengths[other]
			dxx += k * (1 - l * dy * dy * denom)
			dyy += k * (1 - l * dx * dx * denom)
			dxy += k * (l * dx * dy * denom)
		# a zero entry would make the 2x2 solve blow up
		if dxx == 0:
			dxx = 0.1
		if dyy == 0:
			dyy = 0.1
		if dxy == 0:
			dxy = 0.1
		step_y = (gradient_x / dxx + gradient_y / dxy) / (dxy / dxx - dyy / dxy)
		step_x = -(dxy * step_y + gradient_x) / dxx
		xs[index] += step_x
		ys[index] += step_y

		ux = xs[index]
		uy = ys[index]
		row_energy = energy[index]
		gx = 0.0
		gy = 0.0
		for other in range(length):
			if other == index:
				continue
			dx = ux - xs[other]
			dy = uy - ys[other]
			distance_sq = dx * dx + dy * dy
			if distance_sq == 0:
				continue
			denom = row_lengths[other] / math.sqrt(distance_sq)
			local_x = row_strengths[other] * (dx - dx * denom)
			local_y = row_strengths[other] * (dy - dy * denom)
			previous_x, previous_y = row_energy[other]
			row_energy[other] = (local_x, local_y)
			sum_x[other] += local_x - previous_x
			sum_y[other] += local_y - previous_y
			gx += local_x
			gy += local_y
		sum_x[index] = gx
		sum_y[index] = gy

	residual = math.inf
	iteration = 0
	while residual > threshold and iteration < max_iteration:
		index, residual, gradient_x, gradient_y = highest_energy()
		if not math.isfinite(residual):
			raise errors.LayoutDivergenceError(
				"force layout diverged after %d iteration(s)" % iteration,
				energy=residual, iterations=iteration)
		delta = residual
		inner = 0
		while delta > inner_threshold and inner < max_inner_iteration:
			newton_update(index, gradient_x, gradient_y)
			gradient_x = sum_x[index]
			gradient_y = sum_y[index]
			delta = gradient_x * gradient_x + gradient_y * gradient_y
			inner += 1
		iteration += 1

	if movable:
		_, residual, _, _ = highest_energy()
	else:
		residual = 0.0
	finite = all(math.isfinite(value) for value in xs + ys)
	if not finite or not math.isfinite(residual) or residual > max_energy:
		raise errors.LayoutDivergenceError(
			"force layout energy %r above limit %r" % (residual, max_energy),
			energy=residual, iterations=iteration)
	if iteration >= max_iteration:
		logger.debug("force layout stopped at the iteration limit %d, residual %.4g",
			max_iteration, residual)
	else:
		logger.debug("force layout settled after %d iteration(s)", iteration)

	for index, vertex_id in enumerate(vertex_ids):
		vertex = graph.vertices[vertex_id]
		vertex.position = (xs[index], ys[index])
		vertex.positioned = True
		vertex.force_positioned = True
