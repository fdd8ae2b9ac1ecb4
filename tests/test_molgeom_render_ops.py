"""Tests for geometry descriptor serialization."""

# Standard Library
import json

import pytest

# Local repo modules
import conftest


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import render_ops


#============================================
def _sample():
	return [
		render_ops.LineGeometry(
			from_point=(0.0, 0.0),
			to_point=(29.99999, 0.123456),
			left_element="C",
			right_element="O",
			edge_id=0,
		),
		render_ops.WedgeGeometry(
			polygon=((0.0, 0.5), (30.0, 2.0), (30.0, -2.0), (0.0, -0.5)),
			edge_id=1,
			tip=(0.0, 0.0),
			base=(30.0, 0.0),
			left_element="C",
			right_element="Br",
		),
		render_ops.DashedWedgeGeometry(
			dash_segments=(((0.0, 0.0), (0.0, 0.0)), ((15.0, -1.5), (15.0, 1.5))),
			edge_id=2,
			tip=(0.0, 0.0),
			base=(30.0, 0.0),
			left_element="C",
			right_element="F",
			switch_index=1,
		),
		render_ops.AromaticCircle(center=(1.0 / 3.0, 2.0), radius=20.8807621, ring_id=0),
	]


#============================================
def test_kinds_in_order():
	serialized = render_ops.geometry_to_json_dict(_sample())
	assert [entry["kind"] for entry in serialized] == [
		"line", "wedge", "dashed_wedge", "aromatic_circle"]


#============================================
def test_line_entry():
	entry = render_ops.geometry_to_json_dict(_sample())[0]
	assert entry == {
		"kind": "line",
		"from": [0.0, 0.0],
		"to": [30.0, 0.123],
		"left_element": "C",
		"right_element": "O",
		"is_dashed": False,
		"is_aromatic_shadow": False,
		"edge_id": 0,
	}


#============================================
def test_rounding_digits():
	circle = render_ops.geometry_to_json_dict(_sample(), round_digits=1)[3]
	assert circle["center"] == [0.3, 2.0]
	assert circle["radius"] == 20.9
	assert circle["ring_id"] == 0
	assert "edge_id" not in circle


#============================================
def test_dashed_wedge_entry():
	entry = render_ops.geometry_to_json_dict(_sample())[2]
	assert entry["switch_index"] == 1
	assert entry["dash_segments"][1] == [[15.0, -1.5], [15.0, 1.5]]
	assert entry["tip"] == [0.0, 0.0]


#============================================
def test_line_without_edge_id():
	line = render_ops.LineGeometry(from_point=(0.0, 0.0), to_point=(1.0, 0.0))
	entry = render_ops.geometry_to_json_dict([line])[0]
	assert "edge_id" not in entry
	assert entry["left_element"] is None


#============================================
def test_json_text_is_stable():
	text = render_ops.geometry_to_json_text(_sample())
	assert text == render_ops.geometry_to_json_text(_sample())
	assert json.loads(text) == render_ops.geometry_to_json_dict(_sample())
	first = json.loads(text)[0]
	assert list(first.keys()) == sorted(first.keys())


#============================================
def test_descriptors_are_frozen():
	line = render_ops.LineGeometry(from_point=(0.0, 0.0), to_point=(1.0, 0.0))
	with pytest.raises(AttributeError):
		line.is_dashed = True


#============================================
def test_unknown_item_raises():
	with pytest.raises(TypeError):
		render_ops.geometry_to_json_dict([(0.0, 0.0)])
