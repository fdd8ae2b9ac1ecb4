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

"""Graph algorithms over a molgeom Graph: bridges, traversals, components."""

# Standard Library
import collections


#============================================
def get_bridges(graph):
	"""Find every bridge of the graph with Tarjan's algorithm.

	Args:
		graph: a molgeom Graph.

	Returns:
		list[tuple[int, int]]: (parent, child) vertex id pairs in DFS order.
	"""
	adjacency = graph.get_adjacency_list()
	length = len(adjacency)
	visited = [False] * length
	disc = [0] * length
	low = [0] * length
	parent = [None] * length
	bridges = []
	time = 0
	for root in range(length):
		if visited[root]:
			continue
		visited[root] = True
		time += 1
		disc[root] = low[root] = time
		# (vertex, index of the next neighbour to look at)
		stack = [(root, 0)]
		while stack:
			u, index = stack[-1]
			if index < len(adjacency[u]):
				stack[-1] = (u, index + 1)
				v = adjacency[u][index]
				if not visited[v]:
					parent[v] = u
					visited[v] = True
					time += 1
					disc[v] = low[v] = time
					stack.append((v, 0))
				elif v != parent[u]:
					low[u] = min(low[u], disc[v])
				continue
			stack.pop()
			if not stack:
				continue
			p = stack[-1][0]
			low[p] = min(low[p], low[u])
			if low[u] > disc[p]:
				bridges.append((p, u))
	return bridges


#============================================
def traverse_bf(graph, start_vertex_id, visitor):
	"""Call visitor once per reachable vertex in breadth-first order."""
	visited = [False] * len(graph.vertices)
	visited[start_vertex_id] = True
	queue = collections.deque([start_vertex_id])
	while queue:
		vertex = graph.vertices[queue.popleft()]
		visitor(vertex)
		for neighbour_id in vertex.neighbours:
			if not visited[neighbour_id]:
				visited[neighbour_id] = True
				queue.append(neighbour_id)


#============================================
def get_tree_depth(graph, vertex_id, parent_vertex_id):
	"""Depth of the spanning subtree rooted at vertex_id, seen from parent_vertex_id."""
	if vertex_id is None or parent_vertex_id is None:
		return 0
	neighbours = graph.vertices[vertex_id].get_spanning_tree_neighbours(parent_vertex_id)
	deepest = 0
	for child_id in neighbours:
		depth = get_tree_depth(graph, child_id, vertex_id)
		if depth > deepest:
			deepest = depth
	return deepest + 1


#============================================
def traverse_tree(graph, vertex_id, parent_vertex_id, callback, max_depth=999999,
		ignore_first=False, depth=1, visited=None):
	"""Depth-first walk away from parent_vertex_id, calling callback per vertex."""
	if visited is None:
		visited = bytearray(len(graph.vertices))
	if depth > max_depth + 1 or visited[vertex_id]:
		return
	visited[vertex_id] = 1
	vertex = graph.vertices[vertex_id]
	if not ignore_first or depth > 1:
		callback(vertex)
	for neighbour_id in vertex.get_neighbours(parent_vertex_id):
		traverse_tree(graph, neighbour_id, vertex_id, callback, max_depth,
			ignore_first, depth + 1, visited)


#============================================
def _component_from(matrix, start, visited):
	"""Depth-first collect the component of start, in visit order."""
	component = [start]
	visited[start] = True
	stack = [(start, 0)]
	length = len(matrix)
	while stack:
		u, v = stack[-1]
		while v < length and (not matrix[u][v] or visited[v] or u == v):
			v += 1
		if v >= length:
			stack.pop()
			continue
		stack[-1] = (u, v + 1)
		visited[v] = True
		component.append(v)
		stack.append((v, 0))
	return component


#============================================
def get_connected_components(matrix):
	"""Components with more than one vertex of a 0/1 adjacency matrix."""
	visited = [False] * len(matrix)
	components = []
	for u in range(len(matrix)):
		if visited[u]:
			continue
		component = _component_from(matrix, u, visited)
		if len(component) > 1:
			components.append(component)
	return components


#============================================
def get_connected_component_count(matrix):
	visited = [False] * len(matrix)
	count = 0
	for u in range(len(matrix)):
		if visited[u]:
			continue
		_component_from(matrix, u, visited)
		count += 1
	return count
