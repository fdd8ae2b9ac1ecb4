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

"""Ring and ring connection records."""

# Standard Library
import math


# ring walks give up after this many steps
MAX_RING_WALK = 100


#============================================
class Ring(object):
	"""A ring of the SSSR, or a bridged super ring made of several of them.

	Attributes:
		members (list[int]): vertex ids in ring order.
		neighbours (list[int]): ids of rings sharing at least one vertex.
		rings (list[Ring]): clones of the sub rings of a bridged ring.
	"""

	#============================================
	def __init__(self, members):
		self.id = None
		self.members = list(members)
		self.neighbours = []
		self.positioned = False
		self.center = (0.0, 0.0)
		self.rings = []
		self.is_bridged = False
		self.is_part_of_bridged = False
		self.is_spiro = False
		self.is_fused = False
		self.central_angle = 0.0
		self.can_flip = True

	#============================================
	def __repr__(self):
		return "Ring(%r, %r)" % (self.id, self.members)

	#============================================
	def clone(self):
		duplicate = Ring(self.members)
		duplicate.id = self.id
		duplicate.neighbours = list(self.neighbours)
		duplicate.positioned = self.positioned
		duplicate.center = self.center
		duplicate.rings = list(self.rings)
		duplicate.is_bridged = self.is_bridged
		duplicate.is_part_of_bridged = self.is_part_of_bridged
		duplicate.is_spiro = self.is_spiro
		duplicate.is_fused = self.is_fused
		duplicate.central_angle = self.central_angle
		duplicate.can_flip = self.can_flip
		return duplicate

	#============================================
	def get_size(self):
		return len(self.members)

	#============================================
	def get_angle(self):
		"""Interior angle of the regular polygon drawn for this ring."""
		return math.pi - self.central_angle

	#============================================
	def each_member(self, vertices, callback, start_vertex_id=None, previous_vertex_id=None):
		"""Walk the ring from start_vertex_id, calling callback with each vertex id.

		The walk follows ring membership on the atoms, so it needs the
		current ring ids, not the ones saved for restoring.
		"""
		if start_vertex_id is None:
			start_vertex_id = self.members[0]
		current = start_vertex_id
		steps = 0
		while current is not None and steps < MAX_RING_WALK:
			previous = current
			callback(previous)
			current = vertices[current].get_next_in_ring(vertices, self.id, previous_vertex_id)
			previous_vertex_id = previous
			if current == start_vertex_id:
				current = None
			steps += 1

	#============================================
	def get_ordered_neighbours(self, ring_connections):
		"""Neighbour ring ids, the ones sharing the most vertices first."""
		ordered = []
		for neighbour_id in self.neighbours:
			shared = RingConnection.get_vertices(ring_connections, self.id, neighbour_id)
			ordered.append((len(shared), neighbour_id))
		ordered.sort(key=lambda item: item[0], reverse=True)
		return [neighbour_id for _, neighbour_id in ordered]

	#============================================
	def get_double_bond_count(self, vertices):
		count = 0
		for member in self.members:
			atom = vertices[member].value
			if atom.bond_type == "=" or atom.branch_bond == "=":
				count += 1
		return count

	#============================================
	def is_benzene_like(self, vertices):
		double_bonds = self.get_double_bond_count(vertices)
		size = len(self.members)
		return (double_bonds == 3 and size == 6) or (double_bonds == 2 and size == 5)


#============================================
class RingConnection(object):
	"""The vertices shared between two rings."""

	#============================================
	def __init__(self, first_ring, second_ring):
		self.id = None
		self.first_ring_id = first_ring.id
		self.second_ring_id = second_ring.id
		second_members = set(second_ring.members)
		self.vertices = [m for m in first_ring.members if m in second_members]

	#============================================
	def __repr__(self):
		return "RingConnection(%r, %r-%r)" % (self.id, self.first_ring_id, self.second_ring_id)

	#============================================
	def add_vertex(self, vertex_id):
		if vertex_id not in self.vertices:
			self.vertices.append(vertex_id)

	#============================================
	def update_other(self, ring_id, other_ring_id):
		"""Point the side that is not other_ring_id at ring_id."""
		if self.first_ring_id == other_ring_id:
			self.second_ring_id = ring_id
		else:
			self.first_ring_id = ring_id

	#============================================
	def contains_ring(self, ring_id):
		return self.first_ring_id == ring_id or self.second_ring_id == ring_id

	#============================================
	def joins(self, ring_id_a, ring_id_b):
		return (
			(self.first_ring_id == ring_id_a and self.second_ring_id == ring_id_b)
			or (self.first_ring_id == ring_id_b and self.second_ring_id == ring_id_a))

	#============================================
	def is_bridge(self, vertices):
		if len(self.vertices) > 2:
			return True
		for vertex_id in self.vertices:
			if len(vertices[vertex_id].value.rings) > 2:
				return True
		return False

	#============================================
	@staticmethod
	def is_bridge_between(ring_connections, vertices, first_ring_id, second_ring_id):
		for connection in ring_connections:
			if connection.joins(first_ring_id, second_ring_id):
				return connection.is_bridge(vertices)
		return False

	#============================================
	@staticmethod
	def get_neighbours(ring_connections, ring_id):
		neighbours = []
		for connection in ring_connections:
			if connection.first_ring_id == ring_id:
				neighbours.append(connection.second_ring_id)
			elif connection.second_ring_id == ring_id:
				neighbours.append(connection.first_ring_id)
		return neighbours

	#============================================
	@staticmethod
	def get_vertices(ring_connections, first_ring_id, second_ring_id):
		for connection in ring_connections:
			if connection.joins(first_ring_id, second_ring_id):
				return list(connection.vertices)
		return []
