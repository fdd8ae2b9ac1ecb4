"""Tests for per atom annotations."""

import pytest

# Local repo modules
import conftest
import tree_builders


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import annotations
from molgeom import drawer
from molgeom import errors


#============================================
def test_store_requires_registration():
	store = annotations.AtomAnnotations()
	with pytest.raises(errors.AnnotationNotRegisteredError):
		store.set_annotation("label", "x")
	store.add_annotation("label", "none")
	store.set_annotation("label", "x")
	assert store.get_annotation("label") == "x"
	assert store.get_annotation("missing") is None
	assert "label" in store
	assert len(store) == 1


#============================================
def test_store_rejects_duplicates():
	store = annotations.AtomAnnotations()
	store.add_annotation("label")
	with pytest.raises(errors.DuplicateAnnotationError):
		store.add_annotation("label")


#============================================
def test_annotation_errors_are_key_errors():
	store = annotations.AtomAnnotations()
	with pytest.raises(KeyError):
		store.set_annotation("label", 1)


#============================================
def test_defaults_are_copied_per_atom():
	store = annotations.AtomAnnotations()
	default = []
	store.add_annotation("tags", default)
	store.get_annotation("tags").append("x")
	assert default == []
	duplicate = store.copy()
	duplicate.get_annotation("tags").append("y")
	assert store.get_annotation("tags") == ["x"]


#============================================
def test_drawer_registers_before_process():
	mol_drawer = drawer.MoleculeDrawer()
	mol_drawer.register_atom_annotation("tags", [])
	mol_drawer.process(tree_builders.smiles_tree("CCO"))
	mol_drawer.get_atom_annotation(0, "tags").append("methyl")
	assert mol_drawer.get_atom_annotation(0, "tags") == ["methyl"]
	assert mol_drawer.get_atom_annotation(1, "tags") == []


#============================================
def test_drawer_annotations_by_atom_index():
	mol_drawer = drawer.MoleculeDrawer()
	mol_drawer.process(tree_builders.smiles_tree("[C@@H](F)(Cl)Br"))
	mol_drawer.set_atom_annotation_by_atom_index(1, "label", "fluoro")
	# atom index 1 is vertex 2, after the added hydrogen
	assert mol_drawer.get_atom_annotation(2, "label") == "fluoro"
	assert mol_drawer.get_atom_annotation_by_atom_index(1, "label") == "fluoro"
	assert mol_drawer.get_atom_annotations(2) == {"label": "fluoro"}
	assert mol_drawer.get_atom_annotation(0, "label") is None


#============================================
def test_drawer_annotation_names_in_order():
	mol_drawer = drawer.MoleculeDrawer()
	mol_drawer.register_atom_annotation("b")
	mol_drawer.process(tree_builders.ethene())
	mol_drawer.set_atom_annotation(0, "a", 1)
	mol_drawer.register_atom_annotation("b", 2)
	assert mol_drawer.list_atom_annotation_names() == ["b", "a"]


#============================================
def test_drawer_annotation_errors():
	mol_drawer = drawer.MoleculeDrawer()
	with pytest.raises(errors.MolGeomError):
		mol_drawer.get_atom_annotation(0, "label")
	mol_drawer.process(tree_builders.ethene())
	with pytest.raises(errors.StructuralViolationError):
		mol_drawer.get_atom_annotation(5, "label")
	with pytest.raises(errors.StructuralViolationError):
		mol_drawer.set_atom_annotation_by_atom_index(9, "label", 1)
