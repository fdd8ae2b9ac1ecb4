"""Tests for the dump_geometry command line tool."""

# Standard Library
import json

# Local repo modules
import conftest
import tree_builders


conftest.add_tools_to_sys_path()

# local repo modules
import dump_geometry
from molgeom import parse_tree


#============================================
def _write_tree(tmp_path, smiles):
	path = tmp_path / "tree.json"
	tree = parse_tree.to_dict(tree_builders.smiles_tree(smiles))
	path.write_text(json.dumps(tree), encoding="utf-8")
	return path


#============================================
def test_parse_args_defaults():
	args = dump_geometry.parse_args(["-i", "tree.json"])
	assert args.input_file == "tree.json"
	assert args.output_file is None
	assert args.explicit_hydrogens
	assert not args.positions
	assert args.bond_length is None


#============================================
def test_geometry_output(tmp_path):
	input_path = _write_tree(tmp_path, "CC(=O)O")
	output_path = tmp_path / "geometry.json"
	assert dump_geometry.main(["-i", str(input_path), "-o", str(output_path)]) == 0
	text = output_path.read_text(encoding="utf-8")
	assert text.endswith("\n")
	entries = json.loads(text)
	assert len(entries) == 4
	assert all(entry["kind"] == "line" for entry in entries)


#============================================
def test_positions_output(tmp_path):
	input_path = _write_tree(tmp_path, "c1ccccc1")
	output_path = tmp_path / "positions.json"
	argv = ["-i", str(input_path), "-o", str(output_path), "--positions", "--bond-length", "40"]
	assert dump_geometry.main(argv) == 0
	data = json.loads(output_path.read_text(encoding="utf-8"))
	assert data["version"] == 1
	assert data["metadata"]["vertex_count"] == 6
	assert data["metadata"]["ring_count"] == 1


#============================================
def test_stdout_output(tmp_path, capsys):
	input_path = _write_tree(tmp_path, "CC")
	assert dump_geometry.main(["-i", str(input_path), "-q"]) == 0
	entries = json.loads(capsys.readouterr().out)
	assert entries[0]["kind"] == "line"
	assert entries[0]["edge_id"] == 0
