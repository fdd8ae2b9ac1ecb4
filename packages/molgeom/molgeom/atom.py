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

"""Atom payload carried by every graph vertex."""

# local repo modules
from molgeom import annotations


ATOMIC_NUMBERS = {
	"H": 1, "He": 2, "Li": 3, "Be": 4, "B": 5, "C": 6, "N": 7, "O": 8,
	"F": 9, "Ne": 10, "Na": 11, "Mg": 12, "Al": 13, "Si": 14, "P": 15,
	"S": 16, "Cl": 17, "Ar": 18, "K": 19, "Ca": 20, "Sc": 21, "Ti": 22,
	"V": 23, "Cr": 24, "Mn": 25, "Fe": 26, "Co": 27, "Ni": 28, "Cu": 29,
	"Zn": 30, "Ga": 31, "Ge": 32, "As": 33, "Se": 34, "Br": 35, "Kr": 36,
	"Rb": 37, "Sr": 38, "Y": 39, "Zr": 40, "Nb": 41, "Mo": 42, "Tc": 43,
	"Ru": 44, "Rh": 45, "Pd": 46, "Ag": 47, "Cd": 48, "In": 49, "Sn": 50,
	"Sb": 51, "Te": 52, "I": 53, "Xe": 54, "Cs": 55, "Ba": 56, "La": 57,
	"Ce": 58, "Pr": 59, "Nd": 60, "Pm": 61, "Sm": 62, "Eu": 63, "Gd": 64,
	"Tb": 65, "Dy": 66, "Ho": 67, "Er": 68, "Tm": 69, "Yb": 70, "Lu": 71,
	"Hf": 72, "Ta": 73, "W": 74, "Re": 75, "Os": 76, "Ir": 77, "Pt": 78,
	"Au": 79, "Hg": 80, "Tl": 81, "Pb": 82, "Bi": 83, "Po": 84, "At": 85,
	"Rn": 86, "Fr": 87, "Ra": 88, "Ac": 89, "Th": 90, "Pa": 91, "U": 92,
}

# typical valence used for implicit hydrogen counts
MAX_BONDS = {
	"H": 1, "C": 4, "N": 3, "O": 2, "P": 3, "S": 2, "B": 3,
	"F": 1, "I": 1, "Cl": 1, "Br": 1,
}


#============================================
def normalize_element(element):
	"""Capitalize an element symbol, so 'c' -> 'C' and 'cl' -> 'Cl'."""
	if not element:
		return element
	return element[0].upper() + element[1:].lower()


#============================================
class Atom(object):
	"""Chemical payload of a vertex.

	Ring membership is kept as lists of ring ids. Ring analysis rewrites
	them when bridged systems are merged and puts them back afterwards
	from the backup.
	"""

	#============================================
	def __init__(self, element, bond_type="-"):
		self.is_aromatic = bool(element) and element[0].islower()
		self.element = normalize_element(element)
		self.bond_type = bond_type
		self.branch_bond = None
		self.ringbonds = []
		self.rings = []
		self.original_rings = []
		self.anchored_rings = []
		self.original_anchored_rings = []
		self.bond_count = 0
		self.is_bridge = False
		self.is_bridge_node = False
		self.bridged_ring = None
		self.is_drawn = True
		self.draw_explicit = False
		self.is_connected_to_ring = False
		self.has_hydrogen = False
		self.is_stereo_center = False
		self.is_partof_bridged_ring = False
		self.is_part_of_aromatic_ring = self.is_aromatic
		self.bracket = None
		self.idx = None
		self.atom_class = None
		self.chirality = ""
		self.priority = 0
		self.main_chain = False
		self.hydrogen_direction = "down"
		self.subtree_depth = 1
		self.neighbouring_elements = []
		self.annotations = annotations.AtomAnnotations()

	#============================================
	def __repr__(self):
		return "Atom(%r)" % self.element

	#============================================
	def add_neighbouring_element(self, element):
		self.neighbouring_elements.append(element)

	#============================================
	def add_anchored_ring(self, ring_id):
		if ring_id not in self.anchored_rings:
			self.anchored_rings.append(ring_id)

	#============================================
	def backup_rings(self):
		self.original_rings = list(self.rings)
		self.original_anchored_rings = list(self.anchored_rings)

	#============================================
	def restore_rings(self):
		self.rings = list(self.original_rings)
		self.anchored_rings = list(self.original_anchored_rings)

	#============================================
	def is_hetero_atom(self):
		return self.element not in ("C", "H")

	#============================================
	def get_atomic_number(self):
		return ATOMIC_NUMBERS.get(self.element, 0)

	#============================================
	def get_max_bonds(self):
		return MAX_BONDS.get(self.element, 0)

	#============================================
	def get_implicit_hydrogen_count(self):
		"""Hydrogens needed to saturate the atom, 0 for bracket atoms."""
		if self.bracket is not None:
			return self.bracket.hcount or 0
		missing = self.get_max_bonds() - self.bond_count
		if self.is_aromatic:
			missing -= 1
		return max(0, missing)
