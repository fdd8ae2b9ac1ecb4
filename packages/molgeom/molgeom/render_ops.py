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

"""Geometry descriptors handed to an external renderer, and their JSON form."""

# Standard Library
import dataclasses
import json


#============================================
@dataclasses.dataclass(frozen=True)
class LineGeometry:
	from_point: tuple[float, float]
	to_point: tuple[float, float]
	left_element: str | None = None
	right_element: str | None = None
	is_dashed: bool = False
	is_aromatic_shadow: bool = False
	edge_id: int | None = None


#============================================
@dataclasses.dataclass(frozen=True)
class WedgeGeometry:
	"""Solid wedge, narrow at tip and wide at base."""
	polygon: tuple[tuple[float, float], ...]
	edge_id: int | None = None
	tip: tuple[float, float] | None = None
	base: tuple[float, float] | None = None
	left_element: str | None = None
	right_element: str | None = None


#============================================
@dataclasses.dataclass(frozen=True)
class DashedWedgeGeometry:
	"""Hashed wedge. Dashes from switch_index on take the base atom colour."""
	dash_segments: tuple[tuple[tuple[float, float], tuple[float, float]], ...]
	edge_id: int | None = None
	tip: tuple[float, float] | None = None
	base: tuple[float, float] | None = None
	left_element: str | None = None
	right_element: str | None = None
	switch_index: int = 0


#============================================
@dataclasses.dataclass(frozen=True)
class AromaticCircle:
	center: tuple[float, float]
	radius: float
	ring_id: int | None = None


#============================================
def _serialize_number(value, digits):
	if isinstance(value, bool) or isinstance(value, int):
		return value
	if isinstance(value, float):
		return round(value, digits)
	return value


#============================================
def _serialize_point(value, digits):
	if value is None:
		return None
	return [ _serialize_number(item, digits) for item in value ]


#============================================
def geometry_to_json_dict(geometry, round_digits=3):
	"""Convert geometry descriptors to a list of plain dicts.

	Args:
		geometry: iterable of LineGeometry, WedgeGeometry,
			DashedWedgeGeometry and AromaticCircle records.
		round_digits (int): digits kept on every float.

	Returns:
		list: one dict per descriptor, in input order.
	"""
	serialized = []
	for item in geometry:
		if isinstance(item, LineGeometry):
			entry = {
				"kind": "line",
				"from": _serialize_point(item.from_point, round_digits),
				"to": _serialize_point(item.to_point, round_digits),
				"left_element": item.left_element,
				"right_element": item.right_element,
				"is_dashed": item.is_dashed,
				"is_aromatic_shadow": item.is_aromatic_shadow,
			}
		elif isinstance(item, WedgeGeometry):
			entry = {
				"kind": "wedge",
				"polygon": [ _serialize_point(point, round_digits) for point in item.polygon ],
				"tip": _serialize_point(item.tip, round_digits),
				"base": _serialize_point(item.base, round_digits),
				"left_element": item.left_element,
				"right_element": item.right_element,
			}
		elif isinstance(item, DashedWedgeGeometry):
			entry = {
				"kind": "dashed_wedge",
				"dash_segments": [
					[ _serialize_point(point, round_digits) for point in segment ]
					for segment in item.dash_segments
				],
				"tip": _serialize_point(item.tip, round_digits),
				"base": _serialize_point(item.base, round_digits),
				"left_element": item.left_element,
				"right_element": item.right_element,
				"switch_index": item.switch_index,
			}
		elif isinstance(item, AromaticCircle):
			entry = {
				"kind": "aromatic_circle",
				"center": _serialize_point(item.center, round_digits),
				"radius": _serialize_number(item.radius, round_digits),
			}
			if item.ring_id is not None:
				entry["ring_id"] = item.ring_id
			serialized.append(entry)
			continue
		else:
			raise TypeError("not a geometry descriptor: %r" % (item,))
		if item.edge_id is not None:
			entry["edge_id"] = item.edge_id
		serialized.append(entry)
	return serialized


#============================================
def geometry_to_json_text(geometry, round_digits=3):
	return json.dumps(geometry_to_json_dict(geometry, round_digits=round_digits), indent=2, sort_keys=True)
