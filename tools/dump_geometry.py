#!/usr/bin/env python3
"""Lay out a JSON parse tree and dump its bond geometry as JSON.

The input is the parse tree a SMILES parser produces, with either
snake_case or camelCase keys.
"""

# Standard Library
import argparse
import json
import logging
import os
import sys

# Ensure packages/molgeom is on sys.path when run from a checkout.
_MOLGEOM_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "packages", "molgeom"))
if _MOLGEOM_DIR not in sys.path:
	sys.path.insert(0, _MOLGEOM_DIR)

from molgeom import drawer
from molgeom import render_ops


#============================================
def parse_args(argv=None) -> argparse.Namespace:
	"""Parse command-line arguments."""
	parser = argparse.ArgumentParser(
		description="Dump molgeom bond geometry for a JSON parse tree.",
	)
	parser.add_argument(
		"-i", "--input",
		dest="input_file",
		type=str,
		required=True,
		help="JSON parse tree file, or - for stdin.",
	)
	parser.add_argument(
		"-o", "--output",
		dest="output_file",
		type=str,
		default=None,
		help="Output JSON path (default: stdout).",
	)
	parser.add_argument(
		"--no-explicit-hydrogens",
		dest="explicit_hydrogens",
		action="store_false",
		help="Hide hydrogens that are not needed for stereo.",
	)
	parser.add_argument(
		"--bond-length",
		dest="bond_length",
		type=float,
		default=None,
		help="Bond length in drawing units.",
	)
	parser.add_argument(
		"--positions",
		dest="positions",
		action="store_true",
		help="Write the position data export instead of the geometry.",
	)
	parser.add_argument(
		"-v", "--verbose",
		dest="verbosity",
		action="count",
		default=0,
		help="More logging, repeat for debug output.",
	)
	parser.add_argument(
		"-q", "--quiet",
		dest="quiet",
		action="store_true",
		help="Only log errors.",
	)
	parser.set_defaults(explicit_hydrogens=True)
	return parser.parse_args(argv)


#============================================
def _log_level(args) -> int:
	if args.quiet:
		return logging.ERROR
	if args.verbosity >= 2:
		return logging.DEBUG
	if args.verbosity == 1:
		return logging.INFO
	return logging.WARNING


#============================================
def _read_tree(path):
	if path == "-":
		return json.load(sys.stdin)
	with open(path, "r", encoding="utf-8") as handle:
		return json.load(handle)


#============================================
def main(argv=None) -> int:
	"""Read the parse tree, run the layout and write the JSON result."""
	args = parse_args(argv)
	logging.basicConfig(level=_log_level(args), format="%(levelname)s %(name)s: %(message)s")
	options = {"explicit_hydrogens": args.explicit_hydrogens}
	if args.bond_length is not None:
		options["bond_length"] = args.bond_length
	mol_drawer = drawer.MoleculeDrawer(options)
	geometry = mol_drawer.process(_read_tree(args.input_file))
	if args.positions:
		text = json.dumps(mol_drawer.get_position_data(), indent=2, sort_keys=True)
	else:
		text = render_ops.geometry_to_json_text(geometry)
	if args.output_file:
		with open(args.output_file, "w", encoding="utf-8") as handle:
			handle.write(text + "\n")
		logging.getLogger(__name__).info("wrote %s", args.output_file)
	else:
		sys.stdout.write(text + "\n")
	return 0


if __name__ == "__main__":
	sys.exit(main())
