"""Tests for the molgeom graph model."""

# Standard Library
import math

import pytest

# Local repo modules
import conftest
import tree_builders


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import atom as atom_module
from molgeom import errors
from molgeom import graph as graph_module
from molgeom import options as options_module
from molgeom import ring_analysis


#============================================
def _graph(smiles, close_rings=False):
	graph = graph_module.Graph.from_parse_tree(tree_builders.smiles_tree(smiles), isomeric=True)
	if close_rings:
		ring_analysis.RingManager(graph, options_module.default_options()).close_ring_bonds()
	return graph


#============================================
def test_chain_construction():
	graph = _graph("CCO")
	assert [v.value.element for v in graph.vertices] == ["C", "C", "O"]
	assert len(graph.edges) == 2
	assert graph.vertices[1].neighbours == [0, 2]
	assert graph.atom_idx_to_vertex_id == [0, 1, 2]
	assert graph.vertices[0].parent_vertex_id is None
	assert graph.vertices[2].parent_vertex_id == 1


#============================================
def test_branch_bond_type():
	graph = _graph("CC(=O)O")
	assert graph.get_edge(1, 2).bond_type == "="
	assert graph.get_edge(1, 2).weight == 2
	assert graph.get_edge(1, 3).bond_type == "-"
	assert graph.vertices[1].children == [2, 3]


#============================================
def test_pair_map_is_symmetric():
	graph = _graph("CC(C)(C)C=CC#N")
	for edge in graph.edges:
		assert graph.get_edge(edge.source_id, edge.target_id) is edge
		assert graph.get_edge(edge.target_id, edge.source_id) is edge
		assert graph.has_edge(edge.target_id, edge.source_id)


#============================================
def test_bond_count_sums_match_edge_weights():
	graph = _graph("C=CC#N", close_rings=True)
	total_weight = sum(edge.weight for edge in graph.edges)
	assert sum(v.value.bond_count for v in graph.vertices) == 2 * total_weight
	assert graph.vertices[0].value.bond_count == 2
	assert graph.vertices[2].value.bond_count == 4


#============================================
def test_ring_closure_adds_edge():
	graph = _graph("C1CCCCC1", close_rings=True)
	assert len(graph.edges) == 6
	assert graph.has_edge(0, 5)
	assert 5 in graph.vertices[0].neighbours
	assert 0 in graph.vertices[5].neighbours


#============================================
def test_ring_closure_bond_symbol():
	graph = _graph("C=1CCCCC1", close_rings=True)
	assert graph.get_edge(0, 5).bond_type == "="


#============================================
def test_stereo_hydrogen_becomes_vertex():
	graph = _graph("[C@@H](F)(Cl)Br")
	assert [v.value.element for v in graph.vertices] == ["C", "H", "F", "Cl", "Br"]
	assert graph.vertices[0].value.is_stereo_center
	# the added hydrogen gets no heavy atom index
	assert graph.atom_idx_to_vertex_id == [0, 2, 3, 4]
	assert graph.get_vertex_by_atom_idx(1).value.element == "F"


#============================================
def test_out_of_range_ids_raise():
	graph = _graph("CC")
	with pytest.raises(errors.StructuralViolationError):
		graph.get_vertex(5)
	with pytest.raises(IndexError):
		graph.get_edge_by_id(3)
	with pytest.raises(errors.StructuralViolationError):
		graph.get_vertex_by_atom_idx(2)


#============================================
def test_set_bond_type_rejects_unknown_symbol():
	edge = graph_module.Edge(0, 1)
	with pytest.raises(ValueError):
		edge.set_bond_type("~")
	edge.set_bond_type("#")
	assert edge.weight == 3


#============================================
def test_edge_other_vertex():
	edge = graph_module.Edge(3, 7)
	assert edge.get_other_vertex_id(3) == 7
	assert edge.get_other_vertex_id(7) == 3


#============================================
def test_distance_matrix():
	graph = _graph("CCCC")
	distances = graph.get_distance_matrix()
	assert distances[0] == [0, 1, 2, 3]
	assert distances[3][1] == 2
	assert graph.get_adjacency_list() == [[1], [0, 2], [1, 3], [2]]


#============================================
def test_distance_matrix_disconnected():
	graph = graph_module.Graph()
	for _ in range(3):
		graph.add_vertex(graph_module.Vertex(atom_module.Atom("C")))
	graph.add_edge(graph_module.Edge(0, 1))
	distances = graph.get_distance_matrix()
	assert distances[0][1] == 1
	assert distances[0][2] == math.inf


#============================================
def test_terminal_vertices():
	graph = _graph("CC(C)C")
	assert graph.vertices[0].is_terminal()
	assert not graph.vertices[1].is_terminal()
	assert graph.vertices[2].is_terminal()


#============================================
def test_atom_element_normalisation():
	assert atom_module.Atom("c").element == "C"
	assert atom_module.Atom("c").is_aromatic
	assert not atom_module.Atom("Cl").is_aromatic
	assert atom_module.Atom("se").element == "Se"
	assert atom_module.Atom("se").is_aromatic


#============================================
def test_implicit_hydrogens():
	graph = _graph("CCO")
	counts = [v.value.get_implicit_hydrogen_count() for v in graph.vertices]
	assert counts == [3, 2, 1]
