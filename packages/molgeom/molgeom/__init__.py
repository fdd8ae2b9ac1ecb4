"""MolGeom: deterministic 2D layout and bond geometry for parsed molecules."""

# local repo modules
from molgeom.drawer import MoleculeDrawer
from molgeom.drawer import molecule_to_geometry
from molgeom.options import resolve_options
from molgeom.render_ops import geometry_to_json_dict
from molgeom.render_ops import geometry_to_json_text

__version__ = "0.1.0"
