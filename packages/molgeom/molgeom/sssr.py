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

"""Smallest set of smallest rings (SSSR) perception.

Rings are searched separately in every ring system, that is in every
connected component of the graph once all bridges are removed. The search
uses path-included distance matrices: for every vertex pair the shortest
paths (pe) and the paths one bond longer (pe_prime). Pairs of such paths
close even and odd ring candidates, which are accepted smallest first.
"""

# Standard Library
import logging
import math

# local repo modules
from molgeom import graph_algorithms


logger = logging.getLogger(__name__)


#============================================
def get_rings(graph):
	"""Return the SSSR of graph as lists of vertex ids in ring order.

	Args:
		graph: a molgeom Graph.

	Returns:
		list[list[int]] | None: rings, or None for an empty graph.
	"""
	matrix = graph.get_component_adjacency_matrix()
	if not matrix:
		return None
	rings = []
	for component in graph_algorithms.get_connected_components(matrix):
		cc_matrix = graph.get_subgraph_adjacency_matrix(component)
		size = len(cc_matrix)
		bond_counts = [sum(row) for row in cc_matrix]
		ring_counts = [0] * size
		edge_count = 0
		for index, row in enumerate(cc_matrix):
			edge_count += sum(row[index + 1:])
		sssr_count = edge_count - size + 1
		# Euler correction for graphs where every vertex has three bonds
		if all(count == 3 for count in bond_counts):
			sssr_count = 2 + edge_count - size
		if sssr_count == 1:
			rings.append(list(component))
			continue
		d, pe, pe_prime = get_path_included_distance_matrices(cc_matrix)
		candidates = get_ring_candidates(d, pe, pe_prime)
		found = get_sssr(candidates, cc_matrix, bond_counts, ring_counts, sssr_count)
		for atoms in found[:sssr_count]:
			ordered = order_ring_vertices(atoms, cc_matrix)
			rings.append([component[local] for local in ordered])
	logger.debug("found %d ring(s)", len(rings))
	return rings


#============================================
def _bond_key(bond):
	a, b = bond
	if a < b:
		return (a, b)
	return (b, a)


#============================================
def _path_key(path):
	return tuple(_bond_key(bond) for bond in path)


#============================================
def _add_combinations(target, keys, left_paths, right_paths):
	for left in left_paths:
		for right in right_paths:
			combined = left + right
			if not combined:
				continue
			key = _path_key(combined)
			if key not in keys:
				keys.add(key)
				target.append(combined)


#============================================
def get_path_included_distance_matrices(matrix):
	"""Return (d, pe, pe_prime) for a 0/1 adjacency matrix.

	Paths are tuples of (a, b) bonds.
	"""
	length = len(matrix)
	d = [[math.inf] * length for _ in range(length)]
	pe = [[[] for _ in range(length)] for _ in range(length)]
	pe_keys = [[set() for _ in range(length)] for _ in range(length)]
	pe_prime = [[[] for _ in range(length)] for _ in range(length)]
	pe_prime_keys = [[set() for _ in range(length)] for _ in range(length)]
	for i in range(length):
		for j in range(length):
			if i == j:
				d[i][j] = 0
			elif matrix[i][j] == 1:
				d[i][j] = 1
				path = ((i, j),)
				pe[i][j].append(path)
				pe_keys[i][j].add(_path_key(path))

	for k in range(length):
		for i in range(length):
			if d[i][k] == math.inf:
				continue
			for j in range(length):
				if d[k][j] == math.inf:
					continue
				previous = d[i][j]
				through_k = d[i][k] + d[k][j]
				left_paths = _paths_or_empty(pe, i, k)
				right_paths = _paths_or_empty(pe, k, j)
				if not left_paths or not right_paths:
					continue
				if through_k < previous:
					d[i][j] = through_k
					pe[i][j] = []
					pe_keys[i][j] = set()
					_add_combinations(pe[i][j], pe_keys[i][j], left_paths, right_paths)
				elif through_k == previous:
					_add_combinations(pe[i][j], pe_keys[i][j], left_paths, right_paths)

	for k in range(length):
		for i in range(length):
			if d[i][k] == math.inf:
				continue
			for j in range(length):
				if d[k][j] == math.inf:
					continue
				if d[i][k] + d[k][j] - 1 != d[i][j]:
					continue
				left_paths = _paths_or_empty(pe, i, k)
				right_paths = _paths_or_empty(pe, k, j)
				if not left_paths or not right_paths:
					continue
				_add_combinations(pe_prime[i][j], pe_prime_keys[i][j], left_paths, right_paths)
	return d, pe, pe_prime


#============================================
def _paths_or_empty(pe, i, j):
	"""Paths from i to j, or a single empty path when i == j."""
	if pe[i][j]:
		return pe[i][j]
	if i == j:
		return [()]
	return []


#============================================
def get_ring_candidates(d, pe, pe_prime):
	"""Return (size, paths, extended_paths) candidates, smallest first."""
	length = len(d)
	candidates = []
	for i in range(length):
		for j in range(length):
			if d[i][j] == 0 or (len(pe[i][j]) == 1 and not pe_prime[i][j]):
				continue
			if len(pe[i][j]) > 1:
				cycle_size = 2 * d[i][j]
			elif pe_prime[i][j]:
				cycle_size = 2 * d[i][j] + 1
			else:
				cycle_size = 2 * d[i][j]
			if not math.isfinite(cycle_size):
				continue
			candidates.append((cycle_size, list(pe[i][j]), list(pe_prime[i][j])))
	# stable, so ties keep matrix order
	candidates.sort(key=lambda candidate: candidate[0])
	return candidates


#============================================
def get_sssr(candidates, matrix, bond_counts, ring_counts, sssr_count):
	"""Pick rings from the candidates until sssr_count rings are known."""
	found = []
	all_bond_counts = {}
	for size, paths, extended_paths in candidates:
		if size % 2 != 0:
			if not paths:
				continue
			combinations = [paths[0] + extended for extended in extended_paths]
		else:
			if len(paths) < 2:
				continue
			combinations = [paths[j] + paths[j + 1] for j in range(len(paths) - 1)]
		for bonds in combinations:
			atoms = bonds_to_atoms(bonds)
			if get_bond_count(atoms, matrix) == len(atoms) and not path_sets_contain(
					found, atoms, bonds, all_bond_counts, bond_counts, ring_counts):
				found.append(atoms)
				for bond in bonds:
					key = _bond_key(bond)
					all_bond_counts[key] = all_bond_counts.get(key, 0) + 1
			if len(found) > sssr_count:
				return found[:sssr_count]
	return found[:sssr_count]


#============================================
def bonds_to_atoms(bonds):
	atoms = set()
	for a, b in bonds:
		atoms.add(a)
		atoms.add(b)
	return frozenset(atoms)


#============================================
def get_bond_count(atoms, matrix):
	count = 0
	for u in atoms:
		for v in atoms:
			if u != v:
				count += matrix[u][v]
	return count // 2


#============================================
def path_sets_contain(path_sets, path_set, bonds, all_bond_counts, bond_counts, ring_counts):
	"""True when path_set adds nothing new to the rings already found.

	On a False return the ring counts of the members are incremented.
	"""
	for existing in reversed(path_sets):
		if path_set >= existing:
			return True
		if len(existing) == len(path_set) and existing == path_set:
			return True
	required = {}
	for bond in bonds:
		key = _bond_key(bond)
		required[key] = required.get(key, 0) + 1
	all_contained = True
	for key, count in required.items():
		if all_bond_counts.get(key, 0) < count:
			all_contained = False
			break
	special_case = False
	if all_contained:
		for element in path_set:
			if ring_counts[element] < bond_counts[element]:
				special_case = True
				break
	if all_contained and not special_case:
		return True
	for element in path_set:
		ring_counts[element] += 1
	return False


#============================================
def order_ring_vertices(vertices, matrix):
	"""Walk a ring from its smallest member, lowest neighbour first."""
	if not vertices:
		return []
	ordered = []
	start = min(vertices)
	current = start
	previous = -1
	while True:
		ordered.append(current)
		neighbours = sorted(
			candidate for candidate in vertices
			if candidate != current and matrix[current][candidate] == 1)
		following = None
		for neighbour in neighbours:
			if neighbour != previous:
				following = neighbour
				break
		if following is None:
			for neighbour in neighbours:
				if neighbour not in ordered:
					following = neighbour
					break
		if following is None:
			break
		previous = current
		current = following
		if current == start or len(ordered) > len(vertices):
			break
	return ordered
