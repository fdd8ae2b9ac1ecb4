"""Tests for parse tree records and dict validation."""

import pytest

# Local repo modules
import conftest
import tree_builders


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import errors
from molgeom import parse_tree


#============================================
def _camel_case_propanol():
	return {
		"atom": "C",
		"branchCount": 0,
		"ringbondCount": 0,
		"hasNext": True,
		"branches": [],
		"ringbonds": [],
		"next": {
			"atom": "C",
			"branchCount": 1,
			"ringbondCount": False,
			"hasNext": True,
			"branches": [
				{"atom": "O", "branchBond": "=", "branchCount": 0, "hasNext": False},
			],
			"next": {
				"atom": {"element": "C", "hcount": 3, "charge": 0, "class": 7},
				"hasNext": False,
			},
		},
	}


#============================================
def test_from_dict_camel_case():
	tree = parse_tree.from_dict(_camel_case_propanol())
	assert tree.element == "C"
	middle = tree.next
	assert middle.branches[0].element == "O"
	assert middle.branches[0].branch_bond == "="
	last = middle.next
	assert last.bracket.hcount == 3
	assert last.bracket.atom_class == 7
	assert last.next is None
	assert parse_tree.count_nodes(tree) == 4


#============================================
def test_branch_count_mismatch_raises():
	data = _camel_case_propanol()
	data["next"]["branchCount"] = 2
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict(data)


#============================================
def test_parse_tree_error_is_value_error():
	with pytest.raises(ValueError):
		parse_tree.from_dict({"atom": "C", "bond": "~"})


#============================================
def test_has_next_mismatch_raises():
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict({"atom": "C", "hasNext": True})


#============================================
def test_missing_atom_raises():
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict({"bond": "-"})
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict(["C"])


#============================================
def test_bad_bracket_fields_raise():
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict({"atom": {"element": "C", "chirality": "@TH1"}})
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict({"atom": {"element": "C", "hcount": "2"}})
	with pytest.raises(errors.ParseTreeError):
		parse_tree.from_dict({"atom": "C", "ringbonds": [{"bond": "="}]})


#============================================
def test_to_dict_round_trip():
	tree = tree_builders.smiles_tree("C1=CC([C@@H](F)Cl)CCC1")
	assert parse_tree.from_dict(parse_tree.to_dict(tree)) == tree


#============================================
def test_coerce_tree_passes_nodes_through():
	tree = tree_builders.ethene()
	assert parse_tree.coerce_tree(tree) is tree
	assert parse_tree.coerce_tree({"atom": "C"}).element == "C"
