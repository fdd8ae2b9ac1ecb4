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

"""Molecular graph: vertices, edges, adjacency and construction."""

# Standard Library
import math

# local repo modules
from molgeom import atom as atom_module
from molgeom import errors
from molgeom import geometry
from molgeom import graph_algorithms
from molgeom import parse_tree


# bond symbol -> bond order
BOND_WEIGHTS = {
	".": 0,
	"-": 1,
	"/": 1,
	"\\": 1,
	"=": 2,
	"#": 3,
	"$": 4,
}
DIRECTIONAL_BONDS = ("/", "\\")


#============================================
class Vertex(object):
	"""A graph vertex holding one Atom and its 2D position."""

	#============================================
	def __init__(self, value, x=0.0, y=0.0):
		self.id = None
		self.value = value
		self.position = (float(x), float(y))
		self.previous_position = (0.0, 0.0)
		self.parent_vertex_id = None
		self.children = []
		self.spanning_tree_children = []
		self.edges = []
		self.neighbours = []
		self.positioned = False
		self.force_positioned = False
		self.angle = None

	#============================================
	def __repr__(self):
		return "Vertex(%r, %s)" % (self.id, self.value.element)

	#============================================
	@property
	def x(self):
		return self.position[0]

	#============================================
	@property
	def y(self):
		return self.position[1]

	#============================================
	def set_position(self, x, y):
		self.position = (float(x), float(y))

	#============================================
	def set_parent_vertex_id(self, parent_vertex_id):
		self.parent_vertex_id = parent_vertex_id
		self.neighbours.append(parent_vertex_id)

	#============================================
	def add_child(self, vertex_id):
		self.children.append(vertex_id)
		self.neighbours.append(vertex_id)

	#============================================
	def add_ring_bond_child(self, vertex_id, ring_bond_index):
		"""Attach a ring closure partner.

		Bracket atoms insert the partner at the position it was written in,
		which keeps the neighbour order usable for @/@@ interpretation.
		"""
		self.children.append(vertex_id)
		bracket = self.value.bracket
		if bracket is None:
			self.neighbours.append(vertex_id)
			return
		hcount = bracket.hcount
		index = 1
		if self.id == 0 and hcount == 0:
			index = 0
		if hcount == 1 and ring_bond_index == 0:
			index = 2
		if hcount == 1 and ring_bond_index == 1:
			index = 2 if len(self.neighbours) < 3 else 3
		if hcount is None and ring_bond_index == 0:
			index = 1
		if hcount is None and ring_bond_index == 1:
			index = 1 if len(self.neighbours) < 3 else 2
		self.neighbours.insert(index, vertex_id)

	#============================================
	def get_neighbours(self, except_id=None):
		if except_id is None:
			return list(self.neighbours)
		return [n for n in self.neighbours if n != except_id]

	#============================================
	def get_spanning_tree_neighbours(self, except_id=None):
		result = [n for n in self.spanning_tree_children if n != except_id]
		if self.parent_vertex_id is not None and self.parent_vertex_id != except_id:
			result.append(self.parent_vertex_id)
		return result

	#============================================
	def get_neighbour_count(self):
		return len(self.neighbours)

	#============================================
	def get_drawn_neighbours(self, vertices):
		return [n for n in self.neighbours if vertices[n].value.is_drawn]

	#============================================
	def is_terminal(self):
		return (self.parent_vertex_id is None and len(self.children) < 2) or len(self.children) == 0

	#============================================
	def get_angle(self, reference=None, return_as_degrees=False):
		"""Angle of the vector from reference (or the previous position) to this vertex."""
		if reference is None:
			reference = self.previous_position
		angle = geometry.angle_of(geometry.subtract(self.position, reference))
		if return_as_degrees:
			return math.degrees(angle)
		return angle

	#============================================
	def get_next_in_ring(self, vertices, ring_id, previous_id):
		"""Return the neighbour that continues ring ring_id, or None."""
		for neighbour_id in self.get_neighbours():
			if neighbour_id == previous_id:
				continue
			if ring_id in vertices[neighbour_id].value.rings:
				return neighbour_id
		return None


#============================================
class Edge(object):
	"""A bond between two vertices."""

	#============================================
	def __init__(self, source_id, target_id, weight=1):
		self.id = None
		self.source_id = source_id
		self.target_id = target_id
		self.weight = weight
		self.bond_type = "-"
		self.is_part_of_aromatic_ring = False
		self.center = False
		self.wedge = None
		self.stereo_symbol = None

	#============================================
	def __repr__(self):
		return "Edge(%r, %r-%r, %r)" % (self.id, self.source_id, self.target_id, self.bond_type)

	#============================================
	def set_bond_type(self, bond_type):
		if bond_type not in BOND_WEIGHTS:
			raise ValueError("unknown bond type %r" % bond_type)
		self.bond_type = bond_type
		self.weight = BOND_WEIGHTS[bond_type]
		if bond_type in DIRECTIONAL_BONDS:
			self.stereo_symbol = bond_type
		else:
			self.stereo_symbol = None

	#============================================
	def get_other_vertex_id(self, vertex_id):
		if vertex_id == self.source_id:
			return self.target_id
		return self.source_id


#============================================
class _AtomIndexCounter(object):
	"""Hands out heavy atom indices during one graph construction."""

	def __init__(self):
		self.value = 0

	def take(self):
		index = self.value
		self.value += 1
		return index


#============================================
class Graph(object):
	"""Append-only molecular graph.

	Vertex and edge ids are their positions in the vertex and edge lists.
	Each edge is reachable from both (source, target) and (target, source)
	through the pair map.
	"""

	#============================================
	def __init__(self, isomeric=False):
		self.vertices = []
		self.edges = []
		self.atom_idx_to_vertex_id = []
		self.vertex_ids_to_edge_id = {}
		self.isomeric = isomeric

	#============================================
	@classmethod
	def from_parse_tree(cls, tree, isomeric=False):
		"""Build the spanning tree of a molecule from its parse tree.

		Ring closures stay unresolved in atom.ringbonds; the ring analysis
		step turns them into edges.
		"""
		graph = cls(isomeric=isomeric)
		tree = parse_tree.coerce_tree(tree)
		graph._add_node(tree, None, False, _AtomIndexCounter())
		return graph

	#============================================
	def _add_node(self, node, parent_vertex_id, is_branch, counter):
		element = node.element
		atom = atom_module.Atom(element, node.bond or "-")
		if element != "H" or (node.next is None and parent_vertex_id is None):
			atom.idx = counter.take()
		atom.branch_bond = node.branch_bond
		atom.ringbonds = list(node.ringbonds)
		atom.bracket = node.bracket
		if node.bracket is not None:
			atom.atom_class = node.bracket.atom_class

		vertex = Vertex(atom)
		self.add_vertex(vertex)
		if atom.idx is not None:
			self.atom_idx_to_vertex_id.append(vertex.id)

		if parent_vertex_id is not None:
			parent = self.vertices[parent_vertex_id]
			vertex.set_parent_vertex_id(parent_vertex_id)
			atom.add_neighbouring_element(parent.value.element)
			parent.add_child(vertex.id)
			parent.value.add_neighbouring_element(atom.element)
			parent.spanning_tree_children.append(vertex.id)
			edge = Edge(parent_vertex_id, vertex.id, 1)
			if is_branch:
				edge.set_bond_type(atom.branch_bond or "-")
			else:
				edge.set_bond_type(parent.value.bond_type or "-")
			self.add_edge(edge)

		bracket = node.bracket
		if bracket is not None and bracket.chirality:
			atom.is_stereo_center = True
			for _ in range(bracket.hcount or 0):
				hydrogen = parse_tree.ParseNode(atom="H", bond="-")
				self._add_node(hydrogen, vertex.id, True, counter)
		for branch in node.branches:
			self._add_node(branch, vertex.id, True, counter)
		if node.next is not None:
			self._add_node(node.next, vertex.id, False, counter)

	#============================================
	def add_vertex(self, vertex):
		vertex.id = len(self.vertices)
		self.vertices.append(vertex)
		return vertex.id

	#============================================
	def add_edge(self, edge):
		source = self.get_vertex(edge.source_id)
		target = self.get_vertex(edge.target_id)
		edge.id = len(self.edges)
		self.edges.append(edge)
		self.vertex_ids_to_edge_id[(edge.source_id, edge.target_id)] = edge.id
		self.vertex_ids_to_edge_id[(edge.target_id, edge.source_id)] = edge.id
		edge.is_part_of_aromatic_ring = (
			source.value.is_part_of_aromatic_ring and target.value.is_part_of_aromatic_ring)
		source.value.bond_count += edge.weight
		target.value.bond_count += edge.weight
		source.edges.append(edge.id)
		target.edges.append(edge.id)
		return edge.id

	#============================================
	def get_vertex(self, vertex_id):
		if vertex_id is None or not 0 <= vertex_id < len(self.vertices):
			raise errors.StructuralViolationError("vertex id %r out of range" % (vertex_id,))
		return self.vertices[vertex_id]

	#============================================
	def get_edge_by_id(self, edge_id):
		if edge_id is None or not 0 <= edge_id < len(self.edges):
			raise errors.StructuralViolationError("edge id %r out of range" % (edge_id,))
		return self.edges[edge_id]

	#============================================
	def get_edge(self, vertex_id_a, vertex_id_b):
		"""Return the edge between two vertices or None."""
		edge_id = self.vertex_ids_to_edge_id.get((vertex_id_a, vertex_id_b))
		if edge_id is None:
			return None
		return self.edges[edge_id]

	#============================================
	def has_edge(self, vertex_id_a, vertex_id_b):
		return (vertex_id_a, vertex_id_b) in self.vertex_ids_to_edge_id

	#============================================
	def get_edges(self, vertex_id):
		vertex = self.get_vertex(vertex_id)
		return [self.vertex_ids_to_edge_id[(vertex_id, n)] for n in vertex.neighbours]

	#============================================
	def get_vertex_by_atom_idx(self, atom_idx):
		if not 0 <= atom_idx < len(self.atom_idx_to_vertex_id):
			raise errors.StructuralViolationError("atom index %r out of range" % (atom_idx,))
		return self.vertices[self.atom_idx_to_vertex_id[atom_idx]]

	#============================================
	def get_adjacency_matrix(self):
		length = len(self.vertices)
		matrix = [[0] * length for _ in range(length)]
		for edge in self.edges:
			matrix[edge.source_id][edge.target_id] = 1
			matrix[edge.target_id][edge.source_id] = 1
		return matrix

	#============================================
	def get_component_adjacency_matrix(self):
		"""Adjacency matrix with every bridge removed, leaving the ring systems."""
		matrix = self.get_adjacency_matrix()
		for u, v in self.get_bridges():
			matrix[u][v] = 0
			matrix[v][u] = 0
		return matrix

	#============================================
	def get_subgraph_adjacency_matrix(self, vertex_ids):
		length = len(vertex_ids)
		matrix = [[0] * length for _ in range(length)]
		for i in range(length):
			for j in range(length):
				if i != j and self.has_edge(vertex_ids[i], vertex_ids[j]):
					matrix[i][j] = 1
		return matrix

	#============================================
	def get_distance_matrix(self):
		return _floyd_warshall(self.get_adjacency_matrix())

	#============================================
	def get_subgraph_distance_matrix(self, vertex_ids):
		return _floyd_warshall(self.get_subgraph_adjacency_matrix(vertex_ids))

	#============================================
	def get_adjacency_list(self):
		return _matrix_to_list(self.get_adjacency_matrix())

	#============================================
	def get_bridges(self):
		return graph_algorithms.get_bridges(self)

	#============================================
	def traverse_bf(self, start_vertex_id, visitor):
		graph_algorithms.traverse_bf(self, start_vertex_id, visitor)

	#============================================
	def get_tree_depth(self, vertex_id, parent_vertex_id):
		return graph_algorithms.get_tree_depth(self, vertex_id, parent_vertex_id)

	#============================================
	def traverse_tree(self, vertex_id, parent_vertex_id, callback, max_depth=999999, ignore_first=False):
		graph_algorithms.traverse_tree(
			self, vertex_id, parent_vertex_id, callback, max_depth, ignore_first)


#============================================
def _floyd_warshall(adjacency):
	length = len(adjacency)
	dist = [[math.inf] * length for _ in range(length)]
	for i in range(length):
		dist[i][i] = 0
		for j in range(length):
			if adjacency[i][j] == 1:
				dist[i][j] = 1
	for k in range(length):
		row_k = dist[k]
		for i in range(length):
			row_i = dist[i]
			d_ik = row_i[k]
			if d_ik == math.inf:
				continue
			for j in range(length):
				if row_i[j] > d_ik + row_k[j]:
					row_i[j] = d_ik + row_k[j]
	return dist


#============================================
def _matrix_to_list(matrix):
	result = []
	for i, row in enumerate(matrix):
		result.append([j for j, value in enumerate(row) if value and i != j])
	return result
