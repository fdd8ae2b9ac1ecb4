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

"""Tetrahedral stereo centres: neighbour priorities, R/S and wedge choice."""

# Standard Library
import logging

# local repo modules
from molgeom import geometry


logger = logging.getLogger(__name__)

# depth of the priority walk away from a stereo centre
MAX_PRIORITY_DEPTH = 10


#============================================
def annotate_stereochemistry(graph, ring_manager):
	"""Assign chirality and wedges for every stereo centre of a placed graph.

	Args:
		graph: the molgeom Graph, already positioned.
		ring_manager: RingManager used for the same-ring test.

	Returns:
		int: number of stereo centres annotated.
	"""
	count = 0
	for vertex in graph.vertices:
		if not vertex.value.is_stereo_center:
			continue
		if len(vertex.neighbours) < 3:
			logger.debug("stereo centre %d has fewer than three neighbours", vertex.id)
			continue
		_annotate_center(graph, ring_manager, vertex)
		count += 1
	return count


#============================================
def get_neighbour_priorities(graph, vertex):
	"""Order the neighbours of vertex by descending CIP-like priority.

	Returns:
		list: indices into vertex.get_neighbours(), highest priority first.
	"""
	neighbours = vertex.get_neighbours()
	priorities = []
	for index, neighbour_id in enumerate(neighbours):
		visited = bytearray(len(graph.vertices))
		visited[vertex.id] = 1
		levels = [[]]
		visit_stereochemistry(graph, neighbour_id, vertex.id, visited, levels, MAX_PRIORITY_DEPTH, 0)
		for level in levels:
			level.sort(reverse=True)
		priorities.append((index, levels))

	max_levels = max(len(levels) for _, levels in priorities)
	max_entries = max(len(level) for _, levels in priorities for level in levels)
	for index, levels in priorities:
		levels.extend([] for _ in range(max_levels - len(levels)))
		# written order breaks remaining ties
		levels.append([neighbours[index]])
		for level in levels:
			level.extend([0] * (max_entries - len(level)))

	priorities.sort(key=lambda item: item[1], reverse=True)
	return [index for index, _ in priorities]


#============================================
def visit_stereochemistry(graph, vertex_id, previous_vertex_id, visited, priority, max_depth, depth,
		parent_atomic_number=0):
	"""Collect parent-weighted atomic numbers per depth, filling free valences with hydrogen."""
	visited[vertex_id] = 1
	vertex = graph.vertices[vertex_id]
	atomic_number = vertex.value.get_atomic_number()
	if len(priority) <= depth:
		priority.append([])
	# multiple bonds count their atom once per bond order
	weight = graph.get_edge(vertex_id, previous_vertex_id).weight
	for _ in range(weight):
		priority[depth].append(parent_atomic_number * 1000 + atomic_number)

	neighbours = vertex.neighbours
	for neighbour_id in neighbours:
		if visited[neighbour_id] != 1 and depth < max_depth - 1:
			visit_stereochemistry(graph, neighbour_id, vertex_id, bytearray(visited), priority,
				max_depth, depth + 1, atomic_number)

	if depth < max_depth - 1:
		bonds = 0
		for neighbour_id in neighbours:
			bonds += graph.get_edge(vertex_id, neighbour_id).weight
		for _ in range(vertex.value.get_max_bonds() - bonds):
			if len(priority) <= depth + 1:
				priority.append([])
			priority[depth + 1].append(atomic_number * 1000 + 1)


#============================================
def _wedge_score(ring_manager, vertex, neighbour):
	score = 0 if neighbour.value.is_stereo_center else 100000
	score += 0 if ring_manager.are_vertices_in_same_ring(neighbour, vertex) else 10000
	score += 1000 if neighbour.value.is_hetero_atom() else 0
	score -= 1000 if neighbour.value.subtree_depth == 0 else 0
	score += 1000 - neighbour.value.subtree_depth
	return score


#============================================
def _annotate_center(graph, ring_manager, vertex):
	neighbours = vertex.get_neighbours()
	order = get_neighbour_priorities(graph, vertex)
	vertex.value.priority = len(neighbours) - 1

	position_a = graph.vertices[neighbours[order[0]]].position
	position_b = graph.vertices[neighbours[order[1]]].position
	# second priority clockwise of the first means the ligands are drawn clockwise
	is_clockwise = geometry.relative_clockwise(position_a, vertex.position, position_b) == -1

	bracket = vertex.value.bracket
	rotation = -1 if bracket is not None and bracket.chirality == "@" else 1
	rs = "R" if geometry.parity_of_permutation(order) * rotation == 1 else "S"

	wedge_a = "down"
	wedge_b = "up"
	if (is_clockwise and rs != "R") or (not is_clockwise and rs != "S"):
		vertex.value.hydrogen_direction = "up"
		wedge_a = "up"
		wedge_b = "down"

	has_hydrogen = vertex.value.has_hydrogen
	if has_hydrogen:
		graph.get_edge(vertex.id, neighbours[order[-1]]).wedge = wedge_a

	# the lowest priority hydrogen already carries its own wedge
	offset = 1 if has_hydrogen else 0
	wedge_order = []
	for index in order[:len(order) - offset]:
		neighbour = graph.vertices[neighbours[index]]
		wedge_order.append((_wedge_score(ring_manager, vertex, neighbour), neighbour.id))
	wedge_order.sort(key=lambda item: item[0], reverse=True)

	# a hydrogen shared by two rings is drawn instead of a wedge
	show_hydrogen = len(vertex.value.rings) > 1 and has_hydrogen
	if not show_hydrogen and wedge_order:
		wedge_id = wedge_order[0][1]
		if has_hydrogen:
			wedge = wedge_b
		else:
			# alternate down the priority order until the chosen neighbour
			wedge = wedge_b
			for index in reversed(order):
				wedge = wedge_b if wedge == wedge_a else wedge_a
				if neighbours[index] == wedge_id:
					break
		graph.get_edge(vertex.id, wedge_id).wedge = wedge

	vertex.value.chirality = rs
	logger.debug("stereo centre %d is %s", vertex.id, rs)
