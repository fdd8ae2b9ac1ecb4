"""Tests for stereo centre priorities, R/S and wedge placement."""

import pytest

# Local repo modules
import conftest
import tree_builders


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import drawer
from molgeom import render_ops
from molgeom import stereo


WEDGE_TYPES = (render_ops.WedgeGeometry, render_ops.DashedWedgeGeometry)


#============================================
def _process(smiles, options=None):
	mol_drawer = drawer.MoleculeDrawer(options)
	mol_drawer.process(tree_builders.smiles_tree(smiles))
	return mol_drawer


#============================================
def _wedges(mol_drawer):
	return [item for item in mol_drawer.geometry if isinstance(item, WEDGE_TYPES)]


#============================================
def test_priorities_by_atomic_number():
	mol_drawer = _process("F[C@H](Cl)Br")
	center = mol_drawer.graph.vertices[1]
	assert center.get_neighbours() == [0, 2, 3, 4]
	assert stereo.get_neighbour_priorities(mol_drawer.graph, center) == [3, 2, 0, 1]


#============================================
def test_priorities_look_past_first_sphere():
	mol_drawer = _process("[C@@H](O)(C)CC")
	center = mol_drawer.graph.vertices[0]
	# O, then ethyl over methyl, then H
	assert stereo.get_neighbour_priorities(mol_drawer.graph, center) == [1, 3, 2, 0]


#============================================
@pytest.mark.parametrize("smiles,expected", [
	("F[C@H](Cl)Br", "R"),
	("F[C@@H](Cl)Br", "S"),
])
def test_chirality_label(smiles, expected):
	mol_drawer = _process(smiles)
	center = mol_drawer.graph.vertices[1]
	assert center.value.chirality == expected
	assert center.value.priority == 3


#============================================
def test_single_wedge_tipped_on_centre():
	mol_drawer = _process("F[C@H](Cl)Br")
	wedges = _wedges(mol_drawer)
	assert len(wedges) == 1
	assert wedges[0].tip == pytest.approx(mol_drawer.graph.vertices[1].position)
	wedged_edges = [edge for edge in mol_drawer.graph.edges if edge.wedge is not None]
	assert len(wedged_edges) == 1
	assert wedges[0].edge_id == wedged_edges[0].id


#============================================
def test_mirror_images_flip_the_wedge():
	first = _process("F[C@H](Cl)Br")
	second = _process("F[C@@H](Cl)Br")
	first_wedge = [edge.wedge for edge in first.graph.edges if edge.wedge is not None]
	second_wedge = [edge.wedge for edge in second.graph.edges if edge.wedge is not None]
	assert first_wedge != second_wedge


#============================================
def test_hidden_hydrogen_keeps_one_wedge():
	mol_drawer = _process("F[C@H](Cl)Br", {"explicit_hydrogens": False})
	graph = mol_drawer.graph
	assert not graph.vertices[2].value.is_drawn
	assert graph.vertices[1].value.has_hydrogen
	assert graph.get_edge(1, 2).wedge in ("up", "down")
	assert len(_wedges(mol_drawer)) == 1


#============================================
def test_non_isomeric_drawing_has_no_wedges():
	mol_drawer = _process("F[C@H](Cl)Br", {"isomeric": False})
	assert _wedges(mol_drawer) == []
	assert mol_drawer.graph.vertices[1].value.chirality == ""


#============================================
def test_centre_with_two_neighbours_is_skipped():
	mol_drawer = _process("[C@H]F")
	assert mol_drawer.graph.vertices[0].value.chirality == ""
	assert _wedges(mol_drawer) == []
	assert stereo.annotate_stereochemistry(mol_drawer.graph, mol_drawer.ring_manager) == 0
