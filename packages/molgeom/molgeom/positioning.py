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

"""Deterministic placement of atoms: chains, branches and ring entry."""

# Standard Library
import math

# local repo modules
from molgeom import geometry


# 60 degrees, the zig-zag turn of a chain
CHAIN_ANGLE = 1.0472
# 30 degree rotation snapping, and half of it
SNAP_STEP = 0.523599
SNAP_HALF_STEP = 0.2617995


#============================================
class Positioner(object):
	"""Lays out a graph whose rings are already analysed.

	Args:
		graph: the molgeom Graph to place.
		ring_manager: the RingManager of the same graph.
		options (dict): resolved drawing options.
	"""

	#============================================
	def __init__(self, graph, ring_manager, options):
		self.graph = graph
		self.ring_manager = ring_manager
		self.options = options
		self.double_bond_config_count = 0
		self.double_bond_config = None
		ring_manager.positioner = self

	#============================================
	def position(self):
		"""Place every vertex, starting from a bridged ring, a ring or vertex 0."""
		vertices = self.graph.vertices
		if not vertices:
			return
		start_vertex = None
		for ring in self.ring_manager.rings:
			if ring.is_bridged:
				start_vertex = vertices[ring.members[0]]
				break
		if start_vertex is None and self.ring_manager.rings:
			start_vertex = vertices[self.ring_manager.rings[0].members[0]]
		if start_vertex is None:
			start_vertex = vertices[0]
		self.create_next_bond(start_vertex, None, 0.0)

	#============================================
	def _track_double_bond_config(self, vertex, previous_vertex):
		"""Remember the first directional bond of a / ... / pair.

		Returns True when this call set the configuration.
		"""
		edge = self.graph.get_edge(vertex.id, previous_vertex.id)
		if edge.bond_type not in ("/", "\\"):
			return False
		self.double_bond_config_count += 1
		if self.double_bond_config_count % 2 != 1 or self.double_bond_config is not None:
			return False
		self.double_bond_config = edge.bond_type
		# a branch bond off the very first atom reads the other way round
		if previous_vertex.parent_vertex_id is None and vertex.value.branch_bond:
			self.double_bond_config = _flip_direction(self.double_bond_config)
		return True

	#============================================
	def _place(self, vertex, previous_vertex, angle):
		bond_length = self.options["bond_length"]
		if previous_vertex is None:
			# dummy previous position so the first bond has a direction
			vertex.previous_position = geometry.rotate((bond_length, 0.0), math.radians(-60))
			vertex.set_position(bond_length, 0.0)
			vertex.angle = math.radians(-60)
			# a bridged ring start is placed by the force layout
			if vertex.value.bridged_ring is None:
				vertex.positioned = True
		elif previous_vertex.value.rings:
			neighbours = previous_vertex.neighbours
			joined_vertex = None
			if previous_vertex.value.bridged_ring is None and len(previous_vertex.value.rings) > 1:
				for neighbour_id in neighbours:
					neighbour = self.graph.vertices[neighbour_id]
					if all(r in neighbour.value.rings for r in previous_vertex.value.rings):
						joined_vertex = neighbour
						break
			if joined_vertex is None:
				total = (0.0, 0.0)
				for neighbour_id in neighbours:
					neighbour = self.graph.vertices[neighbour_id]
					if neighbour.positioned and self.ring_manager.are_vertices_in_same_ring(
							neighbour, previous_vertex):
						total = geometry.add(total, geometry.subtract(
							neighbour.position, previous_vertex.position))
				direction = geometry.normalize(geometry.scale(total, -1.0))
				position = geometry.add(geometry.scale(direction, bond_length), previous_vertex.position)
			else:
				position = geometry.rotate_around(
					joined_vertex.position, math.pi, previous_vertex.position)
			vertex.previous_position = previous_vertex.position
			vertex.position = position
			vertex.positioned = True
		else:
			offset = geometry.rotate((bond_length, 0.0), angle)
			vertex.position = geometry.add(offset, previous_vertex.position)
			vertex.previous_position = previous_vertex.position
			vertex.positioned = True

	#============================================
	def _enter_ring(self, vertex, ring):
		"""Open ring away from the bond that led into vertex."""
		direction = geometry.normalize(geometry.subtract(vertex.position, vertex.previous_position))
		radius = geometry.poly_circumradius(self.options["bond_length"], ring.get_size())
		next_center = geometry.add(geometry.scale(direction, radius), vertex.position)
		self.ring_manager.create_ring(ring, next_center, vertex)

	#============================================
	def create_next_bond(self, vertex, previous_vertex=None, angle=0.0,
			origin_shortest=False, skip_positioning=False):
		"""Place vertex next to previous_vertex and continue into its neighbours.

		Args:
			vertex (Vertex): vertex to place.
			previous_vertex (Vertex): already placed vertex it hangs off.
			angle (float): global direction of the new bond, in radians.
			origin_shortest (bool): the branch we came from is the shortest.
			skip_positioning (bool): only continue, do not move vertex.
		"""
		if vertex.positioned and not skip_positioning:
			return
		config_set = False
		if previous_vertex is not None:
			config_set = self._track_double_bond_config(vertex, previous_vertex)
		if not skip_positioning:
			self._place(vertex, previous_vertex, angle)

		if vertex.value.bridged_ring is not None:
			next_ring = self.ring_manager.get_ring(vertex.value.bridged_ring)
			if next_ring is not None and not next_ring.positioned:
				self._enter_ring(vertex, next_ring)
			return
		if vertex.value.rings:
			next_ring = self.ring_manager.get_ring(vertex.value.rings[0])
			if next_ring is not None and not next_ring.positioned:
				self._enter_ring(vertex, next_ring)
			return

		neighbours = [
			n for n in vertex.get_neighbours()
			if self.graph.vertices[n].value.is_drawn]
		if previous_vertex is not None:
			neighbours = [n for n in neighbours if n != previous_vertex.id]
		previous_angle = vertex.get_angle()

		if len(neighbours) == 1:
			self._continue_chain(vertex, previous_vertex, neighbours[0], previous_angle,
				origin_shortest, config_set)
		elif len(neighbours) == 2:
			self._split_two(vertex, previous_vertex, neighbours, previous_angle)
		elif len(neighbours) > 2:
			self._fan_out(vertex, previous_vertex, neighbours, previous_angle)

	#============================================
	def _continue_chain(self, vertex, previous_vertex, next_id, previous_angle,
			origin_shortest, config_set):
		next_vertex = self.graph.vertices[next_id]
		previous_edge = None
		if previous_vertex is not None:
			previous_edge = self.graph.get_edge(vertex.id, previous_vertex.id)
		next_edge = self.graph.get_edge(vertex.id, next_vertex.id)

		# triple bonds and cumulated double bonds stay straight
		if previous_edge is not None and previous_edge.weight + next_edge.weight >= 4:
			previous_edge.center = True
			next_edge.center = True
			vertex.value.draw_explicit = False
			next_vertex.value.draw_explicit = True
			next_vertex.angle = 0.0
			self.create_next_bond(next_vertex, vertex, previous_angle + next_vertex.angle)
			return

		if previous_vertex is not None and previous_vertex.value.rings:
			# leaving a ring: bend away from what is already drawn
			proposed_a = math.radians(60)
			proposed_b = -proposed_a
			bond_length = self.options["bond_length"]
			vector_a = geometry.add(geometry.rotate((bond_length, 0.0), proposed_a), vertex.position)
			vector_b = geometry.add(geometry.rotate((bond_length, 0.0), proposed_b), vertex.position)
			center_of_mass = self.get_current_center_of_mass()
			if geometry.distance_sq(vector_a, center_of_mass) < geometry.distance_sq(vector_b, center_of_mass):
				next_vertex.angle = proposed_b
			else:
				next_vertex.angle = proposed_a
			self.create_next_bond(next_vertex, vertex, previous_angle + next_vertex.angle)
			return

		a = vertex.angle
		if previous_vertex is not None and len(previous_vertex.neighbours) > 3:
			if a and a > 0:
				a = min(CHAIN_ANGLE, a)
			elif a and a < 0:
				a = max(-CHAIN_ANGLE, a)
			else:
				a = CHAIN_ANGLE
		elif not a:
			a = self.get_last_angle(vertex.id)
			if not a:
				a = CHAIN_ANGLE

		if previous_vertex is not None and not config_set:
			bond_type = next_edge.bond_type
			if bond_type == "/":
				if self.double_bond_config == "\\":
					a = -a
				self.double_bond_config = None
			elif bond_type == "\\":
				if self.double_bond_config == "/":
					a = -a
				self.double_bond_config = None

		if origin_shortest:
			next_vertex.angle = a
		else:
			next_vertex.angle = -a
		self.create_next_bond(next_vertex, vertex, previous_angle + next_vertex.angle)

	#============================================
	def _split_two(self, vertex, previous_vertex, neighbours, previous_angle):
		a = vertex.angle
		if not a:
			a = CHAIN_ANGLE
		depth_a = self.graph.get_tree_depth(neighbours[0], vertex.id)
		depth_b = self.graph.get_tree_depth(neighbours[1], vertex.id)
		left = self.graph.vertices[neighbours[0]]
		right = self.graph.vertices[neighbours[1]]
		left.value.subtree_depth = depth_a
		right.value.subtree_depth = depth_b

		previous_id = previous_vertex.id if previous_vertex is not None else None
		depth_c = self.graph.get_tree_depth(previous_id, vertex.id)
		if previous_vertex is not None:
			previous_vertex.value.subtree_depth = depth_c

		cis = 0
		trans = 1
		# carbon chains go cis
		if (right.value.element == "C" and left.value.element != "C"
				and depth_b > 1 and depth_a < 5):
			cis = 1
			trans = 0
		elif (right.value.element != "C" and left.value.element == "C"
				and depth_a > 1 and depth_b < 5):
			cis = 0
			trans = 1
		elif depth_b > depth_a:
			cis = 1
			trans = 0

		cis_vertex = self.graph.vertices[neighbours[cis]]
		trans_vertex = self.graph.vertices[neighbours[trans]]
		origin_shortest = depth_c < depth_a and depth_c < depth_b

		trans_vertex.angle = a
		cis_vertex.angle = -a
		if self.double_bond_config is not None and trans_vertex.value.branch_bond == self.double_bond_config:
			trans_vertex.angle = -a
			cis_vertex.angle = a

		self.create_next_bond(trans_vertex, vertex, previous_angle + trans_vertex.angle, origin_shortest)
		self.create_next_bond(cis_vertex, vertex, previous_angle + cis_vertex.angle, origin_shortest)

	#============================================
	def _fan_out(self, vertex, previous_vertex, neighbours, previous_angle):
		"""Spread three or more branches around vertex, deepest subtrees first."""
		placed = []
		for neighbour_id in neighbours:
			neighbour = self.graph.vertices[neighbour_id]
			neighbour.value.subtree_depth = self.graph.get_tree_depth(neighbour_id, vertex.id)
			placed.append(neighbour)
		placed.sort(key=lambda v: v.value.subtree_depth, reverse=True)

		if (len(neighbours) == 3 and previous_vertex is not None
				and not previous_vertex.value.rings
				and not placed[0].value.rings
				and not placed[1].value.rings
				and not placed[2].value.rings
				and placed[2].value.subtree_depth == 1
				and placed[1].value.subtree_depth == 1
				and placed[0].value.subtree_depth > 1):
			# one long branch straight on, two short ones pinched to the side
			vertex_angle = vertex.angle or 0.0
			placed[0].angle = -vertex_angle
			if vertex_angle >= 0:
				placed[1].angle = math.radians(30)
				placed[2].angle = math.radians(90)
			else:
				placed[1].angle = -math.radians(30)
				placed[2].angle = -math.radians(90)
			for neighbour in placed:
				self.create_next_bond(neighbour, vertex, previous_angle + neighbour.angle)
			return

		total = len(neighbours) + (1 if previous_vertex is not None else 0)
		angle_delta = 2.0 * math.pi / total
		angle = angle_delta
		index = 0
		if len(neighbours) % 2 != 0:
			# odd count: the deepest branch goes straight across
			placed[0].angle = 0.0
			self.create_next_bond(placed[0], vertex, previous_angle)
			index = 1
		else:
			angle /= 2.0
		while index + 1 < len(placed):
			placed[index].angle = angle
			placed[index + 1].angle = -angle
			self.create_next_bond(placed[index], vertex, previous_angle + angle)
			self.create_next_bond(placed[index + 1], vertex, previous_angle - angle)
			angle += angle_delta
			index += 2

	#============================================
	def get_last_angle(self, vertex_id):
		"""Angle of the nearest ancestor that has one; 0 when a ring is met first."""
		while vertex_id:
			vertex = self.graph.vertices[vertex_id]
			if vertex.value.rings:
				return 0
			if vertex.angle:
				return vertex.angle
			vertex_id = vertex.parent_vertex_id
		return 0

	#============================================
	def get_closest_vertex(self, vertex):
		min_distance = 99999
		closest = None
		for other in self.graph.vertices:
			if other.id == vertex.id:
				continue
			distance = geometry.distance_sq(vertex.position, other.position)
			if distance < min_distance:
				min_distance = distance
				closest = other
		return closest

	#============================================
	def get_non_ring_neighbours(self, vertex_id):
		"""Neighbours sharing no ring with vertex_id that are not bridge atoms."""
		vertex = self.graph.vertices[vertex_id]
		result = []
		for neighbour_id in vertex.neighbours:
			neighbour = self.graph.vertices[neighbour_id]
			shared = [r for r in vertex.value.rings if r in neighbour.value.rings]
			if not shared and not neighbour.value.is_bridge:
				result.append(neighbour)
		return result

	#============================================
	def get_current_center_of_mass(self):
		total = (0.0, 0.0)
		count = 0
		for vertex in self.graph.vertices:
			if vertex.positioned:
				total = geometry.add(total, vertex.position)
				count += 1
		if count == 0:
			return total
		return geometry.scale(total, 1.0 / count)

	#============================================
	def rotate_drawing(self):
		"""Align the two most distant drawn vertices, snapped to 30 degrees."""
		vertices = self.graph.vertices
		a = 0
		b = 0
		max_distance = 0
		for i in range(len(vertices)):
			if not vertices[i].value.is_drawn:
				continue
			for j in range(i + 1, len(vertices)):
				if not vertices[j].value.is_drawn:
					continue
				distance = geometry.distance_sq(vertices[i].position, vertices[j].position)
				if distance > max_distance:
					max_distance = distance
					a = i
					b = j
		if not vertices:
			return
		angle = -geometry.angle_of(geometry.subtract(vertices[a].position, vertices[b].position))
		if math.isnan(angle):
			return
		remainder = math.fmod(angle, SNAP_STEP)
		if remainder < SNAP_HALF_STEP:
			angle -= remainder
		else:
			angle += SNAP_STEP - remainder
		pivot = vertices[b].position
		for i, vertex in enumerate(vertices):
			if i == b:
				continue
			vertex.position = geometry.rotate_around(vertex.position, angle, pivot)
		for ring in self.ring_manager.rings:
			ring.center = geometry.rotate_around(ring.center, angle, pivot)


#============================================
def _flip_direction(symbol):
	if symbol == "/":
		return "\\"
	if symbol == "\\":
		return "/"
	return symbol
