"""Tests for option defaults and override resolution."""

import pytest

# Local repo modules
import conftest


conftest.add_molgeom_to_sys_path()

# local repo modules
from molgeom import options


#============================================
def test_default_spacing_follows_bond_length():
	resolved = options.default_options()
	assert resolved["bond_length"] == 30.0
	assert resolved["bond_spacing"] == pytest.approx(5.1)
	assert resolved["half_bond_spacing"] == pytest.approx(2.55)
	assert resolved["half_bond_thickness"] == pytest.approx(0.5)
	assert resolved["bond_length_sq"] == pytest.approx(900.0)


#============================================
def test_spacing_scales_with_override():
	resolved = options.resolve_options({"bond_length": 40})
	assert resolved["bond_length"] == 40.0
	assert resolved["bond_spacing"] == pytest.approx(6.8)


#============================================
def test_explicit_spacing_is_kept():
	resolved = options.resolve_options({"bond_spacing": 4.0})
	assert resolved["bond_spacing"] == 4.0
	assert resolved["half_bond_spacing"] == 2.0


#============================================
def test_unknown_option_raises():
	with pytest.raises(ValueError):
		options.resolve_options({"bond_colour": "red"})


#============================================
def test_derived_keys_are_recomputed():
	resolved = options.resolve_options({"half_bond_thickness": 99.0, "bond_thickness": 2.0})
	assert resolved["half_bond_thickness"] == 1.0


#============================================
def test_non_positive_bond_length_raises():
	with pytest.raises(ValueError):
		options.resolve_options({"bond_length": 0})
	with pytest.raises(ValueError):
		options.resolve_options({"bond_length": -5.0})


#============================================
def test_resolve_does_not_mutate_input():
	overrides = {"bond_length": 20.0}
	options.resolve_options(overrides)
	assert overrides == {"bond_length": 20.0}
