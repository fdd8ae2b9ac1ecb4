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

"""Decide the lines, wedges and aromatic circles drawn for each bond."""

# Standard Library
import logging
import math

# local repo modules
from molgeom import geometry
from molgeom import render_ops
from molgeom import wedge_geometry


logger = logging.getLogger(__name__)

# distance of the side probes from the first bond atom
SIDE_PROBE_DISTANCE = 10.0


#============================================
def build_bond_geometry(graph, ring_manager, overlap_resolver, options):
	"""Build geometry for every bond of a placed graph.

	Bonds are visited breadth-first from vertex 0, each once.

	Args:
		graph: positioned molgeom Graph.
		ring_manager: RingManager with restored ring information.
		overlap_resolver: OverlapResolver used for the side tally.
		options (dict): resolved drawing options.

	Returns:
		list: render_ops geometry descriptors.
	"""
	result = []
	if not graph.vertices:
		return result
	done = [False] * len(graph.edges)

	def visit(vertex):
		for edge_id in graph.get_edges(vertex.id):
			if done[edge_id]:
				continue
			done[edge_id] = True
			result.extend(edge_geometry(graph, ring_manager, overlap_resolver, options, edge_id))

	graph.traverse_bf(0, visit)
	result.extend(aromatic_circles(ring_manager, options))
	return result


#============================================
def aromatic_circles(ring_manager, options):
	"""One circle per aromatic ring, unless the molecule has a bridged ring."""
	circles = []
	if ring_manager.has_bridged_ring():
		return circles
	for ring in ring_manager.rings:
		if not ring_manager.is_ring_aromatic(ring):
			continue
		radius = geometry.apothem_from_side_length(options["bond_length"], ring.get_size())
		circles.append(render_ops.AromaticCircle(
			center=ring.center,
			radius=radius - options["bond_spacing"],
			ring_id=ring.id,
		))
	return circles


#============================================
def _is_degenerate(a, b):
	if not geometry.is_finite_point(a) or not geometry.is_finite_point(b):
		return True
	return a[0] == b[0] and a[1] == b[1]


#============================================
def _line(start, end, element_start, element_end, edge_id, aromatic=False):
	# left/right follow the x order of the two ends
	if start[0] < end[0]:
		left_element, right_element = element_start, element_end
	else:
		left_element, right_element = element_end, element_start
	return render_ops.LineGeometry(
		from_point=start,
		to_point=end,
		left_element=left_element,
		right_element=right_element,
		is_dashed=aromatic,
		is_aromatic_shadow=aromatic,
		edge_id=edge_id,
	)


#============================================
def _offset_line(a, b, normal, distance, element_a, element_b, edge_id):
	offset = geometry.scale(normal, distance)
	return _line(geometry.add(a, offset), geometry.add(b, offset), element_a, element_b, edge_id)


#============================================
def _short_line(a, b, normal, options, element_a, element_b, edge_id, aromatic=False):
	"""Second line of a double bond: offset by bond_spacing and shortened."""
	offset = geometry.scale(normal, options["bond_spacing"])
	start, end = geometry.shorten_segment(
		geometry.add(a, offset),
		geometry.add(b, offset),
		options["bond_length"] - options["short_bond_length"] * options["bond_length"],
	)
	return _line(start, end, element_a, element_b, edge_id, aromatic=aromatic)


#============================================
def is_double_bond(edge, ring_manager, vertex_a, vertex_b):
	"""True when the edge is drawn with two lines."""
	if edge.bond_type == "=":
		return True
	if ring_manager.get_ringbond_type(vertex_a, vertex_b) == "=":
		return True
	return edge.is_part_of_aromatic_ring and ring_manager.has_bridged_ring()


#============================================
def edge_geometry(graph, ring_manager, overlap_resolver, options, edge_id):
	"""Geometry descriptors for one edge, possibly none."""
	edge = graph.edges[edge_id]
	vertex_a = graph.vertices[edge.source_id]
	vertex_b = graph.vertices[edge.target_id]
	if not vertex_a.value.is_drawn or not vertex_b.value.is_drawn:
		return []
	a = vertex_a.position
	b = vertex_b.position
	if _is_degenerate(a, b):
		logger.warning("GeometryDegenerate: edge %d between %d and %d has no usable length",
			edge_id, vertex_a.id, vertex_b.id)
		return []
	element_a = vertex_a.value.element
	element_b = vertex_b.value.element
	normals = geometry.units(a, b)

	if is_double_bond(edge, ring_manager, vertex_a, vertex_b):
		return _double_bond(graph, ring_manager, overlap_resolver, options, edge, normals)

	if edge.bond_type == "#":
		spacing = options["bond_spacing"] / 1.5
		return [
			_offset_line(a, b, normals[0], spacing, element_a, element_b, edge_id),
			_offset_line(a, b, normals[1], spacing, element_a, element_b, edge_id),
			_line(a, b, element_a, element_b, edge_id),
		]

	if edge.bond_type == ".":
		return []

	if edge.wedge in ("up", "down"):
		return [_wedge(vertex_a, vertex_b, edge, options)]
	return [_line(a, b, element_a, element_b, edge_id)]


#============================================
def _double_bond(graph, ring_manager, overlap_resolver, options, edge, normals):
	vertex_a = graph.vertices[edge.source_id]
	vertex_b = graph.vertices[edge.target_id]
	a = vertex_a.position
	b = vertex_b.position
	element_a = vertex_a.value.element
	element_b = vertex_b.value.element
	edge_id = edge.id
	sides = (
		geometry.add(geometry.scale(normals[0], SIDE_PROBE_DISTANCE), a),
		geometry.add(geometry.scale(normals[1], SIDE_PROBE_DISTANCE), a),
	)
	choice = overlap_resolver.choose_side(vertex_a, vertex_b, sides)
	center_line = _line(a, b, element_a, element_b, edge_id)

	ring = None
	if ring_manager.are_vertices_in_same_ring(vertex_a, vertex_b):
		ring = ring_manager.get_largest_or_aromatic_common_ring(vertex_a, vertex_b)
	if ring is not None:
		# second line goes inside the ring
		probe = geometry.add(a, geometry.scale(normals[0], options["bond_spacing"]))
		normal = normals[1]
		if geometry.same_side_as(ring.center, a, b, probe):
			normal = normals[0]
		shadow = _short_line(a, b, normal, options, element_a, element_b, edge_id,
			aromatic=edge.is_part_of_aromatic_ring)
		return [shadow, center_line]

	if ((edge.center or (vertex_a.is_terminal() and vertex_b.is_terminal()))
			or (choice.an_count == 0 and choice.bn_count > 1)
			or (choice.bn_count == 0 and choice.an_count > 1)):
		half = options["half_bond_spacing"]
		return [
			_offset_line(a, b, normals[0], half, element_a, element_b, edge_id),
			_offset_line(a, b, normals[1], half, element_a, element_b, edge_id),
		]

	if choice.side_count[0] > choice.side_count[1]:
		normal = normals[0]
	elif choice.side_count[0] < choice.side_count[1]:
		normal = normals[1]
	elif choice.total_side_count[0] > choice.total_side_count[1]:
		normal = normals[0]
	else:
		# ties fall to the second normal
		normal = normals[1]
	return [_short_line(a, b, normal, options, element_a, element_b, edge_id), center_line]


#============================================
def _wedge(vertex_a, vertex_b, edge, options):
	"""Solid or dashed wedge with its narrow end on the stereo centre."""
	a = vertex_a.position
	b = vertex_b.position
	left, right = vertex_a, vertex_b
	if not a[0] < b[0]:
		left, right = vertex_b, vertex_a
	tip, base = left, right
	if right.value.is_stereo_center:
		tip, base = right, left
	if edge.wedge == "up":
		polygon = wedge_geometry.solid_wedge_polygon(
			tip.position, base.position, options["half_bond_thickness"])
		return render_ops.WedgeGeometry(
			polygon=polygon,
			edge_id=edge.id,
			tip=tip.position,
			base=base.position,
			left_element=left.value.element,
			right_element=right.value.element,
		)
	segments, switch_index = wedge_geometry.dashed_wedge_segments(
		tip.position, base.position, options["bond_thickness"])
	return render_ops.DashedWedgeGeometry(
		dash_segments=segments,
		edge_id=edge.id,
		tip=tip.position,
		base=base.position,
		left_element=left.value.element,
		right_element=right.value.element,
		switch_index=switch_index,
	)


#============================================
def bond_length_deviation(graph, options):
	"""Largest relative deviation of a drawn bond from bond_length."""
	worst = 0.0
	for edge in graph.edges:
		vertex_a = graph.vertices[edge.source_id]
		vertex_b = graph.vertices[edge.target_id]
		if not vertex_a.value.is_drawn or not vertex_b.value.is_drawn:
			continue
		distance = math.sqrt(geometry.distance_sq(vertex_a.position, vertex_b.position))
		worst = max(worst, abs(distance - options["bond_length"]) / options["bond_length"])
	return worst
