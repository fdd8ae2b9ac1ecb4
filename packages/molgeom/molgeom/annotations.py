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

"""Explicitly keyed per-atom annotation store."""

# Standard Library
import copy

# local repo modules
from molgeom import errors


#============================================
class AtomAnnotations(object):
	"""Ordered name -> value store with registration before use."""

	#============================================
	def __init__(self):
		self._values = {}

	#============================================
	def add_annotation(self, name, default=None):
		if name in self._values:
			raise errors.DuplicateAnnotationError(
				"annotation %r is already registered" % name)
		self._values[name] = copy.deepcopy(default)

	#============================================
	def set_annotation(self, name, value):
		if name not in self._values:
			raise errors.AnnotationNotRegisteredError(
				"annotation %r is not registered" % name)
		self._values[name] = value

	#============================================
	def get_annotation(self, name):
		"""Return the value of name, or None when it is not registered."""
		return self._values.get(name)

	#============================================
	def has_annotation(self, name):
		return name in self._values

	#============================================
	def keys(self):
		return list(self._values.keys())

	#============================================
	def to_dict(self):
		return {name: copy.deepcopy(value) for name, value in self._values.items()}

	#============================================
	def copy(self):
		duplicate = AtomAnnotations()
		duplicate._values = self.to_dict()
		return duplicate

	#============================================
	def __len__(self):
		return len(self._values)

	#============================================
	def __contains__(self, name):
		return name in self._values
