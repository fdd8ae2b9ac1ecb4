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

"""Default drawing options and override resolution."""


_DEFAULT_OPTIONS = {
	"bond_thickness": 1.0,
	"bond_length": 30.0,
	"short_bond_length": 0.8,
	# derived from bond_length unless given explicitly
	"bond_spacing": None,
	"half_bond_spacing": None,
	"isomeric": True,
	"explicit_hydrogens": True,
	"overlap_sensitivity": 0.42,
	"overlap_resolution_iterations": 1,
	"finetune_overlap": False,
	"kk_threshold": 0.1,
	"kk_inner_threshold": 0.1,
	"kk_max_iteration": 20000,
	"kk_max_inner_iteration": 50,
	"kk_max_energy": 1e9,
}

BOND_SPACING_FACTOR = 0.17

# recomputed on every resolve, ignored when passed back in
_DERIVED_KEYS = ("half_bond_thickness", "bond_length_sq")


#============================================
def default_options():
	"""Return a fresh copy of the fully resolved default options."""
	return resolve_options(None)


#============================================
def resolve_options(options):
	"""Merge user overrides onto the defaults.

	Args:
		options: dict of overrides or None.

	Returns:
		dict: resolved options with derived spacing values filled in.
	"""
	resolved = dict(_DEFAULT_OPTIONS)
	if options:
		options = {key: value for key, value in options.items() if key not in _DERIVED_KEYS}
		unknown = sorted(set(options) - set(_DEFAULT_OPTIONS))
		if unknown:
			raise ValueError("unknown option(s): %s" % ", ".join(unknown))
		resolved.update(options)
	bond_length = float(resolved["bond_length"])
	if bond_length <= 0:
		raise ValueError("bond_length must be positive")
	resolved["bond_length"] = bond_length
	if resolved["bond_spacing"] is None:
		resolved["bond_spacing"] = BOND_SPACING_FACTOR * bond_length
	if resolved["half_bond_spacing"] is None:
		resolved["half_bond_spacing"] = resolved["bond_spacing"] / 2.0
	resolved["half_bond_thickness"] = resolved["bond_thickness"] / 2.0
	resolved["bond_length_sq"] = bond_length * bond_length
	return resolved
