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

"""Exception types raised by the layout and geometry pipeline."""


#============================================
class MolGeomError(Exception):
	"""Base class for all molgeom errors."""


#============================================
class StructuralViolationError(MolGeomError, IndexError):
	"""A vertex or edge id outside the bounds of the current graph."""


#============================================
class LayoutDivergenceError(MolGeomError, RuntimeError):
	"""The force directed layout did not settle into a usable result.

	Callers are expected to catch this and fall back to a simpler placement.
	"""

	def __init__(self, message, energy=None, iterations=None):
		super().__init__(message)
		self.energy = energy
		self.iterations = iterations


#============================================
class ParseTreeError(MolGeomError, ValueError):
	"""A parse tree record failed validation."""


#============================================
class AnnotationError(MolGeomError, KeyError):
	"""Base class for atom annotation misuse."""

	def __str__(self):
		# plain message, not the quoted KeyError form
		return str(self.args[0]) if self.args else ""


#============================================
class DuplicateAnnotationError(AnnotationError):
	"""An annotation name was registered twice on the same atom."""


#============================================
class AnnotationNotRegisteredError(AnnotationError):
	"""An annotation name was used before being registered."""
