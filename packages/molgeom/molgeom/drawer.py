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

"""Run the layout pipeline from a parse tree to bond geometry."""

# Standard Library
import logging

# local repo modules
from molgeom import bond_geometry
from molgeom import errors
from molgeom import graph as graph_module
from molgeom import options as options_module
from molgeom import overlap
from molgeom import parse_tree
from molgeom import positioning
from molgeom import ring_analysis
from molgeom import stereo


logger = logging.getLogger(__name__)

POSITION_DATA_VERSION = 1


#============================================
class MoleculeDrawer(object):
	"""Lay out one molecule at a time and keep the result for inspection.

	Args:
		options (dict): option overrides, see molgeom.options.
	"""

	#============================================
	def __init__(self, options=None):
		self.options = options_module.resolve_options(options)
		self.graph = None
		self.ring_manager = None
		self.positioner = None
		self.overlap_resolver = None
		self.geometry = []
		# name -> default, in registration order
		self._annotation_defaults = {}
		self._annotation_names = {}

	#============================================
	def process(self, tree):
		"""Lay out a molecule and build its bond geometry.

		Args:
			tree: a ParseNode or the equivalent plain dict.

		Returns:
			list: render_ops geometry descriptors.
		"""
		tree = parse_tree.coerce_tree(tree)
		self.graph = graph_module.Graph.from_parse_tree(tree, isomeric=self.options["isomeric"])
		logger.debug("built graph: %d vertices, %d edges",
			len(self.graph.vertices), len(self.graph.edges))
		self.ring_manager = ring_analysis.RingManager(self.graph, self.options)
		self.ring_manager.init_rings()
		self._apply_annotation_defaults()
		self.init_hydrogens()
		self.positioner = positioning.Positioner(self.graph, self.ring_manager, self.options)
		self.overlap_resolver = overlap.OverlapResolver(
			self.graph, self.ring_manager, self.positioner, self.options)
		self.process_graph()
		self.geometry = bond_geometry.build_bond_geometry(
			self.graph, self.ring_manager, self.overlap_resolver, self.options)
		logger.debug("emitted %d geometry descriptor(s), worst bond length deviation %.3f",
			len(self.geometry), bond_geometry.bond_length_deviation(self.graph, self.options))
		return self.geometry

	#============================================
	def init_hydrogens(self):
		"""Hide hydrogens unless they sit on a stereo centre shared by two rings."""
		if self.options["explicit_hydrogens"]:
			return
		for vertex in self.graph.vertices:
			if vertex.value.element != "H" or not vertex.neighbours:
				continue
			neighbour = self.graph.vertices[vertex.neighbours[0]]
			neighbour.value.has_hydrogen = True
			if (not neighbour.value.is_stereo_center
					or (len(neighbour.value.rings) < 2 and neighbour.value.bridged_ring is None)
					or (neighbour.value.bridged_ring is not None
						and len(neighbour.value.original_rings) < 2)):
				vertex.value.is_drawn = False

	#============================================
	def process_graph(self):
		"""Position, untangle, annotate stereo and rotate the graph."""
		resolver = self.overlap_resolver
		self.positioner.position()
		self.ring_manager.restore_ring_information()
		resolver.resolve_primary_overlaps()
		overlap_score = resolver.resolve_rotatable_edges()
		if self.options["finetune_overlap"]:
			resolver.resolve_finetune_overlaps()
			overlap_score = resolver.get_overlap_score()
		resolver.resolve_secondary_overlaps(overlap_score.scores)
		if self.options["isomeric"] and any(v.value.is_stereo_center for v in self.graph.vertices):
			stereo.annotate_stereochemistry(self.graph, self.ring_manager)
		self.positioner.rotate_drawing()

	#============================================
	def _require_graph(self):
		if self.graph is None:
			raise errors.MolGeomError("no molecule has been processed yet")
		return self.graph

	#============================================
	def get_total_overlap_score(self):
		if self.overlap_resolver is None:
			return 0.0
		return self.overlap_resolver.total_overlap_score

	#============================================
	def get_ring_count(self):
		if self.ring_manager is None:
			return 0
		return self.ring_manager.get_ring_count()

	#============================================
	def has_bridged_ring(self):
		if self.ring_manager is None:
			return False
		return self.ring_manager.has_bridged_ring()

	#============================================
	def get_heavy_atom_count(self):
		graph = self._require_graph()
		return len([v for v in graph.vertices if v.value.element != "H"])

	#============================================
	def get_molecular_formula(self):
		"""Hill-ordered formula including implicit and bracket hydrogens."""
		graph = self._require_graph()
		counts = {}
		for vertex in graph.vertices:
			atom = vertex.value
			counts[atom.element] = counts.get(atom.element, 0) + 1
			# chiral bracket hydrogens are already vertices
			if atom.bracket is not None and atom.bracket.chirality:
				continue
			hydrogens = atom.get_implicit_hydrogen_count()
			if hydrogens:
				counts["H"] = counts.get("H", 0) + hydrogens
		elements = sorted(counts)
		if "C" in counts:
			# C and H lead only when carbon is present
			elements = ["C", "H"] + [e for e in elements if e not in ("C", "H")]
		formula = ""
		for element in elements:
			count = counts.get(element, 0)
			if count:
				formula += element + (str(count) if count > 1 else "")
		return formula

	#============================================
	def get_position_data(self):
		"""Return a versioned plain-dict snapshot of the laid out molecule."""
		if self.graph is None:
			return {
				"version": POSITION_DATA_VERSION,
				"vertices": [],
				"edges": [],
				"rings": [],
				"metadata": {
					"vertex_count": 0,
					"edge_count": 0,
					"ring_count": 0,
					"atom_idx_to_vertex_id": [],
					"isomeric": False,
				},
			}
		vertices = [_vertex_to_dict(vertex) for vertex in self.graph.vertices]
		edges = []
		for edge in self.graph.edges:
			edges.append({
				"id": edge.id,
				"source_id": edge.source_id,
				"target_id": edge.target_id,
				"weight": edge.weight,
				"bond_type": edge.bond_type,
				"is_part_of_aromatic_ring": edge.is_part_of_aromatic_ring,
				"center": edge.center,
				"wedge": edge.wedge,
				"stereo_symbol": edge.stereo_symbol,
			})
		rings = []
		for ring in self.ring_manager.rings:
			rings.append({
				"id": ring.id,
				"members": list(ring.members),
				"is_bridged": ring.is_bridged,
				"is_part_of_bridged": ring.is_part_of_bridged,
				"is_fused": ring.is_fused,
				"is_spiro": ring.is_spiro,
				"neighbours": list(ring.neighbours),
				"center": _point_to_dict(ring.center),
			})
		return {
			"version": POSITION_DATA_VERSION,
			"vertices": vertices,
			"edges": edges,
			"rings": rings,
			"metadata": {
				"vertex_count": len(self.graph.vertices),
				"edge_count": len(self.graph.edges),
				"ring_count": len(self.ring_manager.rings),
				"atom_idx_to_vertex_id": list(self.graph.atom_idx_to_vertex_id),
				"isomeric": self.graph.isomeric,
			},
		}

	#============================================
	def register_atom_annotation(self, name, default=None):
		"""Register name on every atom, now and for molecules processed later."""
		self._annotation_defaults[name] = default
		self._annotation_names[name] = True
		if self.graph is None:
			return
		for vertex in self.graph.vertices:
			if not vertex.value.annotations.has_annotation(name):
				vertex.value.annotations.add_annotation(name, default)

	#============================================
	def _apply_annotation_defaults(self):
		for name, default in self._annotation_defaults.items():
			for vertex in self.graph.vertices:
				if not vertex.value.annotations.has_annotation(name):
					vertex.value.annotations.add_annotation(name, default)

	#============================================
	def set_atom_annotation(self, vertex_id, name, value):
		"""Set an annotation, registering it on this atom first if needed."""
		vertex = self._require_graph().get_vertex(vertex_id)
		self._annotation_names[name] = True
		annotations = vertex.value.annotations
		if not annotations.has_annotation(name):
			annotations.add_annotation(name, self._annotation_defaults.get(name))
		annotations.set_annotation(name, value)

	#============================================
	def get_atom_annotation(self, vertex_id, name):
		vertex = self._require_graph().get_vertex(vertex_id)
		return vertex.value.annotations.get_annotation(name)

	#============================================
	def set_atom_annotation_by_atom_index(self, atom_idx, name, value):
		vertex = self._require_graph().get_vertex_by_atom_idx(atom_idx)
		self.set_atom_annotation(vertex.id, name, value)

	#============================================
	def get_atom_annotation_by_atom_index(self, atom_idx, name):
		vertex = self._require_graph().get_vertex_by_atom_idx(atom_idx)
		return self.get_atom_annotation(vertex.id, name)

	#============================================
	def get_atom_annotations(self, vertex_id):
		vertex = self._require_graph().get_vertex(vertex_id)
		return vertex.value.annotations.to_dict()

	#============================================
	def list_atom_annotation_names(self):
		return list(self._annotation_names)


#============================================
def _point_to_dict(point):
	if point is None:
		return None
	return {"x": point[0], "y": point[1]}


#============================================
def _vertex_to_dict(vertex):
	atom = vertex.value
	bracket = None
	if atom.bracket is not None:
		bracket = {
			"hcount": atom.bracket.hcount,
			"charge": atom.bracket.charge,
			"isotope": atom.bracket.isotope,
			"class": atom.bracket.atom_class,
			"chirality": atom.bracket.chirality,
		}
	return {
		"id": vertex.id,
		"parent_vertex_id": vertex.parent_vertex_id,
		"children": list(vertex.children),
		"spanning_tree_children": list(vertex.spanning_tree_children),
		"edges": list(vertex.edges),
		"neighbours": list(vertex.neighbours),
		"neighbour_count": vertex.get_neighbour_count(),
		"position": _point_to_dict(vertex.position),
		"previous_position": _point_to_dict(vertex.previous_position),
		"positioned": vertex.positioned,
		"force_positioned": vertex.force_positioned,
		"angle": vertex.angle,
		"value": {
			"idx": atom.idx,
			"element": atom.element,
			"draw_explicit": atom.draw_explicit,
			"is_drawn": atom.is_drawn,
			"bond_type": atom.bond_type,
			"branch_bond": atom.branch_bond,
			"ringbonds": [{"id": rb.id, "bond": rb.bond} for rb in atom.ringbonds],
			"rings": list(atom.rings),
			"original_rings": list(atom.original_rings),
			"anchored_rings": list(atom.anchored_rings),
			"bond_count": atom.bond_count,
			"class": atom.atom_class,
			"neighbouring_elements": list(atom.neighbouring_elements),
			"is_bridge": atom.is_bridge,
			"is_bridge_node": atom.is_bridge_node,
			"bridged_ring": atom.bridged_ring,
			"is_connected_to_ring": atom.is_connected_to_ring,
			"is_part_of_aromatic_ring": atom.is_part_of_aromatic_ring,
			"bracket": bracket,
			"chirality": atom.chirality,
			"is_stereo_center": atom.is_stereo_center,
			"priority": atom.priority,
			"main_chain": atom.main_chain,
			"hydrogen_direction": atom.hydrogen_direction,
			"has_hydrogen": atom.has_hydrogen,
			"subtree_depth": atom.subtree_depth,
			"annotations": atom.annotations.to_dict(),
		},
	}


#============================================
def molecule_to_geometry(tree, options=None):
	"""Lay out a parse tree and return its bond geometry in one call."""
	return MoleculeDrawer(options).process(tree)
