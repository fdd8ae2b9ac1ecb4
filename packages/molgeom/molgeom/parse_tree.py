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

"""Typed parse tree records and their validation.

The records mirror what a SMILES parser hands over: a chain of nodes, each
with an atom, the bond to the next node, branches, and ring bond labels.
Plain dicts are accepted through from_dict() in either snake_case or the
camelCase used by JavaScript style parsers.
"""

# Standard Library
import dataclasses

# local repo modules
from molgeom import errors


BOND_SYMBOLS = (".", "-", "/", "\\", "=", "#", "$")
CHIRALITY_MARKERS = ("@", "@@")


#============================================
@dataclasses.dataclass(frozen=True)
class BracketAtom:
	element: str
	charge: int = 0
	isotope: int | None = None
	hcount: int | None = None
	chirality: str | None = None
	atom_class: int | None = None


#============================================
@dataclasses.dataclass(frozen=True)
class RingBond:
	id: int
	bond: str | None = None


#============================================
@dataclasses.dataclass
class ParseNode:
	atom: object
	bond: str | None = None
	branch_bond: str | None = None
	branches: list = dataclasses.field(default_factory=list)
	ringbonds: list = dataclasses.field(default_factory=list)
	next: object | None = None

	#============================================
	@property
	def element(self):
		if isinstance(self.atom, BracketAtom):
			return self.atom.element
		return self.atom

	#============================================
	@property
	def bracket(self):
		if isinstance(self.atom, BracketAtom):
			return self.atom
		return None


#============================================
def _pick(data, *names, default=None):
	"""Return the first present key among names."""
	for name in names:
		if name in data:
			return data[name]
	return default


#============================================
def _check_bond(value, where):
	if not value:
		return None
	if value not in BOND_SYMBOLS:
		raise errors.ParseTreeError("%s: unknown bond symbol %r" % (where, value))
	return value


#============================================
def _check_int(value, where, name, allow_none=True):
	if value is None and allow_none:
		return None
	if isinstance(value, bool) or not isinstance(value, int):
		raise errors.ParseTreeError("%s: %s must be an integer, got %r" % (where, name, value))
	return value


#============================================
def bracket_atom_from_dict(data, where="atom"):
	if not isinstance(data, dict):
		raise errors.ParseTreeError("%s: bracket atom must be a dict" % where)
	element = data.get("element")
	if not isinstance(element, str) or not element:
		raise errors.ParseTreeError("%s: bracket atom needs an element" % where)
	charge = data.get("charge") or 0
	chirality = data.get("chirality") or None
	if chirality is not None and chirality not in CHIRALITY_MARKERS:
		raise errors.ParseTreeError("%s: unsupported chirality %r" % (where, chirality))
	return BracketAtom(
		element=element,
		charge=_check_int(charge, where, "charge"),
		isotope=_check_int(data.get("isotope"), where, "isotope"),
		hcount=_check_int(data.get("hcount"), where, "hcount"),
		chirality=chirality,
		atom_class=_check_int(_pick(data, "atom_class", "class"), where, "atom_class"),
	)


#============================================
def ring_bond_from_dict(data, where="ringbond"):
	if not isinstance(data, dict):
		raise errors.ParseTreeError("%s: ring bond must be a dict" % where)
	ring_id = _check_int(data.get("id"), where, "id", allow_none=False)
	return RingBond(id=ring_id, bond=_check_bond(data.get("bond"), where))


#============================================
def from_dict(data, where="root"):
	"""Build a ParseNode tree from nested dicts.

	Args:
		data (dict): parser output for one node.
		where (str): location used in error messages.

	Returns:
		ParseNode: the validated tree.

	Raises:
		ParseTreeError: when a field is missing, mistyped, or inconsistent.
	"""
	if not isinstance(data, dict):
		raise errors.ParseTreeError("%s: node must be a dict, got %s" % (where, type(data).__name__))
	raw_atom = data.get("atom")
	if isinstance(raw_atom, dict):
		atom = bracket_atom_from_dict(raw_atom, where + ".atom")
	elif isinstance(raw_atom, str) and raw_atom:
		atom = raw_atom
	else:
		raise errors.ParseTreeError("%s: node has no atom" % where)

	raw_branches = data.get("branches") or []
	raw_ringbonds = data.get("ringbonds") or []
	raw_next = data.get("next")
	# counts from the parser must agree with what is actually there
	branch_count = _pick(data, "branch_count", "branchCount")
	if branch_count is not None and branch_count != len(raw_branches):
		raise errors.ParseTreeError(
			"%s: branchCount %r does not match %d branches" % (where, branch_count, len(raw_branches)))
	ringbond_count = _pick(data, "ringbond_count", "ringbondCount")
	if ringbond_count not in (None, False) and ringbond_count != len(raw_ringbonds):
		raise errors.ParseTreeError(
			"%s: ringbondCount %r does not match %d ring bonds" % (where, ringbond_count, len(raw_ringbonds)))
	has_next = _pick(data, "has_next", "hasNext")
	if has_next is not None and bool(has_next) != (raw_next is not None):
		raise errors.ParseTreeError("%s: hasNext disagrees with next" % where)

	branches = []
	for index, branch in enumerate(raw_branches):
		branches.append(from_dict(branch, "%s.branches[%d]" % (where, index)))
	ringbonds = []
	for index, ringbond in enumerate(raw_ringbonds):
		ringbonds.append(ring_bond_from_dict(ringbond, "%s.ringbonds[%d]" % (where, index)))
	next_node = None
	if raw_next is not None:
		next_node = from_dict(raw_next, where + ".next")
	return ParseNode(
		atom=atom,
		bond=_check_bond(data.get("bond"), where),
		branch_bond=_check_bond(_pick(data, "branch_bond", "branchBond"), where),
		branches=branches,
		ringbonds=ringbonds,
		next=next_node,
	)


#============================================
def to_dict(node):
	"""Inverse of from_dict(), using snake_case keys."""
	if isinstance(node.atom, BracketAtom):
		atom = dataclasses.asdict(node.atom)
	else:
		atom = node.atom
	data = {
		"atom": atom,
		"bond": node.bond,
		"branch_bond": node.branch_bond,
		"branches": [to_dict(branch) for branch in node.branches],
		"ringbonds": [dataclasses.asdict(ringbond) for ringbond in node.ringbonds],
		"next": None,
	}
	if node.next is not None:
		data["next"] = to_dict(node.next)
	return data


#============================================
def coerce_tree(tree):
	"""Accept a ParseNode or a dict and return a ParseNode."""
	if isinstance(tree, ParseNode):
		return tree
	return from_dict(tree)


#============================================
def count_nodes(node):
	count = 0
	stack = [node]
	while stack:
		current = stack.pop()
		count += 1
		stack.extend(current.branches)
		if current.next is not None:
			stack.append(current.next)
	return count
