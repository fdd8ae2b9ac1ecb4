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

"""Ring perception results, ring connections and bridged ring handling.

RingManager turns the SSSR into Ring objects, records which rings share
vertices, and merges bridged systems (rings sharing more than one bond)
into a single super ring that is laid out with the force directed
layout. It also places rings during positioning, see create_ring().
"""

# Standard Library
import logging
import math

# local repo modules
from molgeom import errors
from molgeom import geometry
from molgeom import graph as graph_module
from molgeom import kamada_kawai
from molgeom import sssr
from molgeom.ring import Ring
from molgeom.ring import RingConnection


logger = logging.getLogger(__name__)


#============================================
class RingManager(object):
	"""Owns the rings and ring connections of one graph.

	Args:
		graph: the molgeom Graph being drawn.
		options (dict): resolved drawing options.
	"""

	#============================================
	def __init__(self, graph, options):
		self.graph = graph
		self.options = options
		self.rings = []
		self.ring_connections = []
		self.original_rings = []
		self.original_ring_connections = []
		self.ring_id_counter = 0
		self.ring_connection_id_counter = 0
		self.bridged_ring = False
		# set by the Positioner, used to grow substituents off placed rings
		self.positioner = None

	#============================================
	def get_ring_count(self):
		return len(self.rings)

	#============================================
	def has_bridged_ring(self):
		return self.bridged_ring

	#============================================
	def get_bridged_rings(self):
		return [ring for ring in self.rings if ring.is_bridged]

	#============================================
	def edge_ring_count(self, edge_id):
		edge = self.graph.get_edge_by_id(edge_id)
		a = self.graph.vertices[edge.source_id]
		b = self.graph.vertices[edge.target_id]
		return min(len(a.value.rings), len(b.value.rings))

	#============================================
	def get_ringbond_type(self, vertex_a, vertex_b):
		"""Bond symbol of the ring closure joining two vertices, or None.

		When the two ends disagree the explicit (non '-') symbol wins.
		"""
		if not vertex_a.value.ringbonds or not vertex_b.value.ringbonds:
			return None
		for ringbond_a in vertex_a.value.ringbonds:
			for ringbond_b in vertex_b.value.ringbonds:
				if ringbond_a.id != ringbond_b.id:
					continue
				if ringbond_a.bond in (None, "-"):
					return ringbond_b.bond
				return ringbond_a.bond
		return None

	#============================================
	def close_ring_bonds(self):
		"""Turn pairs of ring bond labels into graph edges.

		Vertices are scanned from last to first, the first vertex seen with
		a label keeps it open until its partner shows up.
		"""
		open_bonds = {}
		for vertex in reversed(self.graph.vertices):
			for index, ringbond in enumerate(vertex.value.ringbonds):
				if ringbond.id not in open_bonds:
					open_bonds[ringbond.id] = (vertex.id, ringbond.bond)
					continue
				target_id, target_bond = open_bonds.pop(ringbond.id)
				target = self.graph.vertices[target_id]
				edge = graph_module.Edge(vertex.id, target_id, 1)
				edge.set_bond_type(target_bond or ringbond.bond or "-")
				self.graph.add_edge(edge)
				vertex.add_ring_bond_child(target_id, index)
				vertex.value.add_neighbouring_element(target.value.element)
				target.add_ring_bond_child(vertex.id, index)
				target.value.add_neighbouring_element(vertex.value.element)
		if open_bonds:
			logger.warning("unmatched ring bond label(s): %s",
				", ".join(str(label) for label in sorted(open_bonds)))

	#============================================
	def init_rings(self):
		"""Close ring bonds, find the SSSR and build the ring bookkeeping."""
		self.close_ring_bonds()
		found = sssr.get_rings(self.graph)
		if found is None:
			return
		for members in found:
			ring_id = self.add_ring(Ring(members))
			for member in members:
				self.graph.vertices[member].value.rings.append(ring_id)

		for i in range(len(self.rings) - 1):
			for j in range(i + 1, len(self.rings)):
				connection = RingConnection(self.rings[i], self.rings[j])
				if connection.vertices:
					self.add_ring_connection(connection)

		for ring in self.rings:
			ring.neighbours = RingConnection.get_neighbours(self.ring_connections, ring.id)
		# the ring centre follows its first member when things get moved
		for ring in self.rings:
			self.graph.vertices[ring.members[0]].value.add_anchored_ring(ring.id)

		self.backup_ring_information()
		self.process_bridged_rings()
		logger.debug("ring analysis: %d ring(s), %d connection(s), bridged=%s",
			len(self.rings), len(self.ring_connections), self.bridged_ring)

	#============================================
	def is_part_of_bridged_ring(self, ring_id):
		for connection in self.ring_connections:
			if connection.contains_ring(ring_id) and connection.is_bridge(self.graph.vertices):
				return True
		return False

	#============================================
	def get_bridged_ring_rings(self, ring_id):
		"""All ring ids reachable from ring_id through bridge connections."""
		involved = []

		def recurse(current_id):
			ring = self.get_ring(current_id)
			involved.append(current_id)
			for neighbour_id in ring.neighbours:
				if neighbour_id in involved or neighbour_id == current_id:
					continue
				if RingConnection.is_bridge_between(
						self.ring_connections, self.graph.vertices, current_id, neighbour_id):
					recurse(neighbour_id)

		recurse(ring_id)
		unique = []
		for item in involved:
			if item not in unique:
				unique.append(item)
		return unique

	#============================================
	def create_bridged_ring(self, ring_ids, source_vertex_id):
		"""Merge the rings ring_ids into one bridged ring and return it."""
		vertex_ids = []
		neighbours = []
		for ring_id in ring_ids:
			ring = self.get_ring(ring_id)
			ring.is_part_of_bridged = True
			for member in ring.members:
				if member not in vertex_ids:
					vertex_ids.append(member)
			for neighbour_id in ring.neighbours:
				if neighbour_id not in ring_ids and neighbour_id not in neighbours:
					neighbours.append(neighbour_id)

		# vertices in only one of the merged rings lie on the outline
		ring_members = []
		leftovers = []
		for vertex_id in vertex_ids:
			atom = self.graph.vertices[vertex_id].value
			shared = [r for r in ring_ids if r in atom.rings]
			if len(atom.rings) == 1 or len(shared) == 1:
				ring_members.append(vertex_id)
			else:
				leftovers.append(vertex_id)

		for vertex_id in leftovers:
			vertex = self.graph.vertices[vertex_id]
			on_ring = False
			for edge_id in vertex.edges:
				if self.edge_ring_count(edge_id) == 1:
					on_ring = True
			if on_ring:
				vertex.value.is_bridge_node = True
			else:
				vertex.value.is_bridge = True
			ring_members.append(vertex_id)

		ring = Ring(ring_members)
		self.add_ring(ring)
		ring.is_bridged = True
		ring.neighbours = list(neighbours)
		for ring_id in ring_ids:
			ring.rings.append(self.get_ring(ring_id).clone())
		for member in ring.members:
			self.graph.vertices[member].value.bridged_ring = ring.id
		for member in ring_members:
			atom = self.graph.vertices[member].value
			atom.rings = [r for r in atom.rings if r not in ring_ids]
			atom.rings.append(ring.id)

		for i in range(len(ring_ids)):
			for j in range(i + 1, len(ring_ids)):
				self.remove_ring_connections_between(ring_ids[i], ring_ids[j])
		for neighbour_id in neighbours:
			for connection_id in self.get_ring_connections(neighbour_id, ring_ids):
				self.get_ring_connection(connection_id).update_other(ring.id, neighbour_id)
			self.get_ring(neighbour_id).neighbours.append(ring.id)
		return ring

	#============================================
	def process_bridged_rings(self):
		"""Replace every bridged ring system by one bridged super ring."""
		while self.rings:
			candidate_id = None
			for ring in self.rings:
				if self.is_part_of_bridged_ring(ring.id) and not ring.is_bridged:
					candidate_id = ring.id
			if candidate_id is None:
				break
			ring = self.get_ring(candidate_id)
			involved = self.get_bridged_ring_rings(ring.id)
			self.bridged_ring = True
			self.create_bridged_ring(involved, ring.members[0])
			for ring_id in involved:
				self.remove_ring(ring_id)

	#============================================
	def are_vertices_in_same_ring(self, vertex_a, vertex_b):
		for ring_id in vertex_a.value.rings:
			if ring_id in vertex_b.value.rings:
				return True
		return False

	#============================================
	def get_common_rings(self, vertex_a, vertex_b):
		common = []
		for ring_id in vertex_a.value.rings:
			for other_id in vertex_b.value.rings:
				if ring_id == other_id:
					common.append(ring_id)
		return common

	#============================================
	def get_largest_or_aromatic_common_ring(self, vertex_a, vertex_b):
		"""First benzene-like common ring, else the largest common ring."""
		largest = None
		max_size = 0
		for ring_id in self.get_common_rings(vertex_a, vertex_b):
			ring = self.get_ring(ring_id)
			if ring.is_benzene_like(self.graph.vertices):
				return ring
			if ring.get_size() > max_size:
				max_size = ring.get_size()
				largest = ring
		return largest

	#============================================
	def add_ring(self, ring):
		ring.id = self.ring_id_counter
		self.ring_id_counter += 1
		self.rings.append(ring)
		return ring.id

	#============================================
	def remove_ring(self, ring_id):
		self.rings = [ring for ring in self.rings if ring.id != ring_id]
		self.ring_connections = [
			connection for connection in self.ring_connections
			if not connection.contains_ring(ring_id)]
		for ring in self.rings:
			ring.neighbours = [n for n in ring.neighbours if n != ring_id]

	#============================================
	def get_ring(self, ring_id):
		for ring in self.rings:
			if ring.id == ring_id:
				return ring
		return None

	#============================================
	def add_ring_connection(self, connection):
		connection.id = self.ring_connection_id_counter
		self.ring_connection_id_counter += 1
		self.ring_connections.append(connection)
		return connection.id

	#============================================
	def remove_ring_connection(self, connection_id):
		self.ring_connections = [c for c in self.ring_connections if c.id != connection_id]

	#============================================
	def remove_ring_connections_between(self, ring_id_a, ring_id_b):
		doomed = [c.id for c in self.ring_connections if c.joins(ring_id_a, ring_id_b)]
		for connection_id in doomed:
			self.remove_ring_connection(connection_id)

	#============================================
	def get_ring_connection(self, connection_id):
		for connection in self.ring_connections:
			if connection.id == connection_id:
				return connection
		return None

	#============================================
	def get_ring_connections(self, ring_id, ring_ids):
		"""Ids of the connections between ring_id and any ring of ring_ids."""
		result = []
		for connection in self.ring_connections:
			for other_id in ring_ids:
				if connection.joins(ring_id, other_id):
					result.append(connection.id)
		return result

	#============================================
	def set_ring_center(self, ring):
		total_x = 0.0
		total_y = 0.0
		for member in ring.members:
			x, y = self.graph.vertices[member].position
			total_x += x
			total_y += y
		size = len(ring.members)
		ring.center = (total_x / size, total_y / size)

	#============================================
	def backup_ring_information(self):
		self.original_rings = list(self.rings)
		self.original_ring_connections = list(self.ring_connections)
		for vertex in self.graph.vertices:
			vertex.value.backup_rings()

	#============================================
	def restore_ring_information(self):
		"""Put the SSSR rings back in place of the bridged super rings.

		Sub ring centres computed while placing a bridged ring are copied
		onto the restored rings.
		"""
		originals = {ring.id: ring for ring in self.original_rings}
		for bridged in self.get_bridged_rings():
			for subring in bridged.rings:
				if subring.id in originals:
					originals[subring.id].center = subring.center
		self.rings = list(self.original_rings)
		self.ring_connections = list(self.original_ring_connections)
		for vertex in self.graph.vertices:
			vertex.value.restore_rings()

	#============================================
	def create_ring(self, ring, center=None, start_vertex=None, previous_vertex=None):
		"""Place ring and, recursively, its neighbour rings and substituents.

		Args:
			ring (Ring): the ring to place.
			center (tuple): ring centre, the origin when None.
			start_vertex (Vertex): member to start the walk from.
			previous_vertex (Vertex): member the walk must not go back to.
		"""
		if ring.positioned:
			return
		if center is None:
			center = (0.0, 0.0)
		bond_length = self.options["bond_length"]
		ordered_neighbours = ring.get_ordered_neighbours(self.ring_connections)
		starting_angle = 0.0
		if start_vertex is not None:
			starting_angle = geometry.angle_of(geometry.subtract(start_vertex.position, center))
		radius = geometry.poly_circumradius(bond_length, ring.get_size())
		step = geometry.central_angle(ring.get_size())
		ring.central_angle = step

		start_vertex_id = start_vertex.id if start_vertex is not None else None
		if start_vertex_id not in ring.members:
			if start_vertex is not None:
				start_vertex.positioned = False
			start_vertex_id = ring.members[0]

		if ring.is_bridged:
			center = self._place_bridged_ring(ring, center, start_vertex_id, starting_angle)
		else:
			angle = [starting_angle]
			previous_id = previous_vertex.id if previous_vertex is not None else None

			def place(vertex_id):
				vertex = self.graph.vertices[vertex_id]
				if not vertex.positioned:
					vertex.set_position(
						center[0] + math.cos(angle[0]) * radius,
						center[1] + math.sin(angle[0]) * radius)
				angle[0] += step
				vertex.angle = angle[0]
				vertex.positioned = True

			ring.each_member(self.graph.vertices, place, start_vertex_id, previous_id)

		ring.positioned = True
		ring.center = center

		for neighbour_id in ordered_neighbours:
			neighbour = self.get_ring(neighbour_id)
			if neighbour is None or neighbour.positioned:
				continue
			shared = RingConnection.get_vertices(self.ring_connections, ring.id, neighbour.id)
			if len(shared) == 2:
				self._place_fused_ring(ring, neighbour, center, shared)
			elif len(shared) == 1:
				self._place_spiro_ring(ring, neighbour, center, shared[0])

		for member in ring.members:
			ring_member = self.graph.vertices[member]
			for neighbour_id in ring_member.neighbours:
				neighbour = self.graph.vertices[neighbour_id]
				if neighbour.positioned:
					continue
				neighbour.value.is_connected_to_ring = True
				self.positioner.create_next_bond(neighbour, ring_member, 0.0)

	#============================================
	def _place_bridged_ring(self, ring, center, start_vertex_id, starting_angle):
		options = self.options
		try:
			kamada_kawai.layout(
				self.graph, list(ring.members), center, start_vertex_id, ring,
				options["bond_length"],
				threshold=options["kk_threshold"],
				inner_threshold=options["kk_inner_threshold"],
				max_iteration=options["kk_max_iteration"],
				max_inner_iteration=options["kk_max_inner_iteration"],
				max_energy=options["kk_max_energy"])
		except errors.LayoutDivergenceError as error:
			logger.warning("bridged ring %d: %s; placing it as a regular polygon", ring.id, error)
			self._place_polygon(ring, center, starting_angle)
		ring.positioned = True
		self.set_ring_center(ring)
		for subring in ring.rings:
			self.set_ring_center(subring)
		return ring.center

	#============================================
	def _place_polygon(self, ring, center, starting_angle):
		# crude fallback: bridge atoms land on the outer polygon, so bond
		# lengths across the bridge are only roughly right
		radius = geometry.poly_circumradius(self.options["bond_length"], ring.get_size())
		step = geometry.central_angle(ring.get_size())
		angle = starting_angle
		for member in ring.members:
			vertex = self.graph.vertices[member]
			if not vertex.positioned:
				vertex.set_position(
					center[0] + math.cos(angle) * radius,
					center[1] + math.sin(angle) * radius)
			angle += step
			vertex.positioned = True

	#============================================
	def _place_fused_ring(self, ring, neighbour, center, shared):
		ring.is_fused = True
		neighbour.is_fused = True
		vertex_a = self.graph.vertices[shared[0]]
		vertex_b = self.graph.vertices[shared[1]]
		middle = geometry.midpoint(vertex_a.position, vertex_b.position)
		normal_a, normal_b = geometry.units(vertex_a.position, vertex_b.position)
		r = geometry.poly_circumradius(self.options["bond_length"], neighbour.get_size())
		apothem = geometry.apothem(r, neighbour.get_size())
		candidate_a = geometry.add(geometry.scale(normal_a, apothem), middle)
		candidate_b = geometry.add(geometry.scale(normal_b, apothem), middle)
		# away from the ring we came from
		next_center = candidate_a
		if geometry.distance_sq(center, candidate_b) > geometry.distance_sq(center, candidate_a):
			next_center = candidate_b
		pos_a = geometry.subtract(vertex_a.position, next_center)
		pos_b = geometry.subtract(vertex_b.position, next_center)
		if geometry.clockwise(pos_a, pos_b) == -1:
			self.create_ring(neighbour, next_center, vertex_a, vertex_b)
		else:
			self.create_ring(neighbour, next_center, vertex_b, vertex_a)

	#============================================
	def _place_spiro_ring(self, ring, neighbour, center, shared_id):
		ring.is_spiro = True
		neighbour.is_spiro = True
		vertex_a = self.graph.vertices[shared_id]
		direction = geometry.normalize(geometry.subtract(vertex_a.position, center))
		r = geometry.poly_circumradius(self.options["bond_length"], neighbour.get_size())
		next_center = geometry.add(geometry.scale(direction, r), vertex_a.position)
		self.create_ring(neighbour, next_center, vertex_a)

	#============================================
	def is_ring_aromatic(self, ring):
		for member in ring.members:
			if not self.graph.vertices[member].value.is_part_of_aromatic_ring:
				return False
		return True
