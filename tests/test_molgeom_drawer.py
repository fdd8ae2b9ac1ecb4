"""Tests for the layout pipeline and its inspection helpers."""

# Standard Library
import json
import math

import pytest

# Local repo modules
import conftest
import tree_builders


conftest.add_molgeom_to_sys_path()

# local repo modules
import molgeom
from molgeom import drawer
from molgeom import errors
from molgeom import parse_tree


#============================================
def _process(smiles, options=None):
	mol_drawer = drawer.MoleculeDrawer(options)
	mol_drawer.process(tree_builders.smiles_tree(smiles))
	return mol_drawer


#============================================
@pytest.mark.parametrize("smiles,formula", [
	("CCO", "C2H6O"),
	("c1ccccc1", "C6H6"),
	("F[C@H](Cl)Br", "CHBrClF"),
	("C[NH3+]", "CH6N"),
	("OBr", "BrHO"),
	("NN", "H4N2"),
])
def test_molecular_formula(smiles, formula):
	assert _process(smiles).get_molecular_formula() == formula


#============================================
def test_heavy_atom_count_ignores_stereo_hydrogen():
	mol_drawer = _process("F[C@H](Cl)Br")
	assert len(mol_drawer.graph.vertices) == 5
	assert mol_drawer.get_heavy_atom_count() == 4


#============================================
def test_queries_before_process():
	mol_drawer = drawer.MoleculeDrawer()
	assert mol_drawer.get_ring_count() == 0
	assert not mol_drawer.has_bridged_ring()
	assert mol_drawer.get_total_overlap_score() == 0.0
	with pytest.raises(errors.MolGeomError):
		mol_drawer.get_heavy_atom_count()
	with pytest.raises(errors.MolGeomError):
		mol_drawer.get_molecular_formula()


#============================================
def test_empty_position_data():
	data = drawer.MoleculeDrawer().get_position_data()
	assert data["version"] == drawer.POSITION_DATA_VERSION
	assert data["vertices"] == []
	assert data["metadata"]["vertex_count"] == 0


#============================================
def test_position_data():
	mol_drawer = _process("CCO")
	data = mol_drawer.get_position_data()
	assert data["metadata"]["vertex_count"] == 3
	assert data["metadata"]["edge_count"] == 2
	assert data["metadata"]["ring_count"] == 0
	assert data["metadata"]["atom_idx_to_vertex_id"] == [0, 1, 2]
	first = data["vertices"][0]
	assert set(first["position"]) == {"x", "y"}
	assert first["value"]["element"] == "C"
	assert data["edges"][1]["source_id"] == 1
	assert data["edges"][1]["target_id"] == 2
	# plain data all the way down
	assert json.loads(json.dumps(data)) == data


#============================================
def test_position_data_rings():
	data = _process("c1ccccc1").get_position_data()
	assert len(data["rings"]) == 1
	ring = data["rings"][0]
	assert sorted(ring["members"]) == list(range(6))
	assert not ring["is_bridged"]


#============================================
def test_every_vertex_is_placed():
	mol_drawer = _process("CC(C)(C)c1ccc(cc1)C(=O)N")
	for vertex in mol_drawer.graph.vertices:
		assert vertex.positioned
		assert math.isfinite(vertex.position[0])
		assert math.isfinite(vertex.position[1])


#============================================
def test_drawer_accepts_dict_trees():
	tree = parse_tree.to_dict(tree_builders.smiles_tree("CC=O"))
	items = molgeom.molecule_to_geometry(tree)
	assert len(items) == 3


#============================================
def test_bad_tree_raises():
	mol_drawer = drawer.MoleculeDrawer()
	with pytest.raises(errors.ParseTreeError):
		mol_drawer.process({"atom": ""})
	assert mol_drawer.graph is None


#============================================
def test_drawer_reuse_replaces_molecule():
	mol_drawer = _process("c1ccccc1")
	mol_drawer.process(tree_builders.smiles_tree("CC"))
	assert mol_drawer.get_ring_count() == 0
	assert len(mol_drawer.graph.vertices) == 2


#============================================
def test_bond_length_option_scales_drawing():
	mol_drawer = _process("CC", {"bond_length": 50.0})
	a, b = [vertex.position for vertex in mol_drawer.graph.vertices]
	assert math.dist(a, b) == pytest.approx(50.0)


#============================================
def test_package_exports():
	assert molgeom.MoleculeDrawer is drawer.MoleculeDrawer
	assert molgeom.resolve_options(None)["bond_length"] == 30.0
	assert molgeom.geometry_to_json_dict([]) == []
