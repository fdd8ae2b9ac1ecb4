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

"""Overlap scoring and resolution for a placed molecule."""

# Standard Library
import collections
import dataclasses
import logging
import math

# local repo modules
from molgeom import geometry


logger = logging.getLogger(__name__)

# finetune pass: rotation step and clash distance (fraction of bond_length squared)
FINETUNE_STEP = math.radians(30)
FINETUNE_CLASH_FACTOR = 0.8


#============================================
@dataclasses.dataclass(frozen=True)
class OverlapScore:
	total: float
	# (vertex_id, score) pairs, highest score first
	scores: list
	vertex_scores: list


#============================================
@dataclasses.dataclass(frozen=True)
class SideChoice:
	"""Tally of the atoms on either side of a bond."""
	an_count: int
	bn_count: int
	side_count: tuple
	total_side_count: tuple
	position: int
	total_position: int


#============================================
class OverlapResolver(object):
	"""Finds and reduces atoms drawn closer than one bond length.

	Args:
		graph: the molgeom Graph being drawn.
		ring_manager: the RingManager of the same graph.
		positioner: the Positioner that placed the graph.
		options (dict): resolved drawing options.
	"""

	#============================================
	def __init__(self, graph, ring_manager, positioner, options):
		self.graph = graph
		self.ring_manager = ring_manager
		self.positioner = positioner
		self.options = options
		self.total_overlap_score = 0.0

	#============================================
	def get_overlap_score(self):
		"""Score every pair of drawn atoms closer than bond_length.

		A pair at distance d adds (bond_length - d) / bond_length to the
		total and to both of its atoms.
		"""
		vertices = self.graph.vertices
		bond_length = self.options["bond_length"]
		bond_length_sq = bond_length * bond_length
		total = 0.0
		vertex_scores = [0.0] * len(vertices)
		for i in range(len(vertices)):
			a = vertices[i]
			if not a.value.is_drawn:
				continue
			for j in range(len(vertices) - 1, i, -1):
				b = vertices[j]
				if not b.value.is_drawn:
					continue
				distance_sq = geometry.distance_sq(a.position, b.position)
				if distance_sq < bond_length_sq:
					weighted = (bond_length - math.sqrt(distance_sq)) / bond_length
					total += weighted
					vertex_scores[i] += weighted
					vertex_scores[j] += weighted
		scores = sorted(enumerate(vertex_scores), key=lambda item: item[1], reverse=True)
		return OverlapScore(total=total, scores=scores, vertex_scores=vertex_scores)

	#============================================
	def choose_side(self, vertex_a, vertex_b, sides):
		"""Count neighbours on each side of the bond a-b.

		sides[0] is a point on the side of the first normal.
		"""
		an = vertex_a.get_neighbours(vertex_b.id)
		bn = vertex_b.get_neighbours(vertex_a.id)
		merged = list(an)
		for neighbour_id in bn:
			if neighbour_id not in merged:
				merged.append(neighbour_id)
		side_count = [0, 0]
		for neighbour_id in merged:
			position = self.graph.vertices[neighbour_id].position
			if geometry.same_side_as(position, vertex_a.position, vertex_b.position, sides[0]):
				side_count[0] += 1
			else:
				side_count[1] += 1
		# every atom, to break ties in the count above
		total_side_count = [0, 0]
		for vertex in self.graph.vertices:
			if geometry.same_side_as(vertex.position, vertex_a.position, vertex_b.position, sides[0]):
				total_side_count[0] += 1
			else:
				total_side_count[1] += 1
		return SideChoice(
			an_count=len(an),
			bn_count=len(bn),
			side_count=tuple(side_count),
			total_side_count=tuple(total_side_count),
			position=0 if side_count[0] > side_count[1] else 1,
			total_position=0 if total_side_count[0] > total_side_count[1] else 1,
		)

	#============================================
	def rotate_subtree(self, vertex_id, parent_vertex_id, angle, center):
		"""Rotate the subtree behind vertex_id, and the rings anchored in it."""
		def rotate(vertex):
			vertex.position = geometry.rotate_around(vertex.position, angle, center)
			for ring_id in vertex.value.anchored_rings:
				ring = self.ring_manager.get_ring(ring_id)
				if ring is not None:
					ring.center = geometry.rotate_around(ring.center, angle, center)

		self.graph.traverse_tree(vertex_id, parent_vertex_id, rotate)

	#============================================
	def get_subtree_overlap_score(self, vertex_id, parent_vertex_id, vertex_scores):
		"""Mean score of the clashing atoms in a subtree and their weighted centre."""
		sensitivity = self.options["overlap_sensitivity"]
		state = {"score": 0.0, "count": 0, "center": (0.0, 0.0)}

		def visit(vertex):
			if not vertex.value.is_drawn:
				return
			score = vertex_scores[vertex.id]
			if score > sensitivity:
				state["score"] += score
				state["count"] += 1
			state["center"] = geometry.add(state["center"], geometry.scale(vertex.position, score))

		self.graph.traverse_tree(vertex_id, parent_vertex_id, visit)
		if state["count"] == 0:
			return 0.0, state["center"]
		center = geometry.scale(state["center"], 1.0 / state["score"])
		return state["score"] / state["count"], center

	#============================================
	def resolve_primary_overlaps(self):
		"""Fan apart two substituents leaving the same ring atom."""
		overlaps = []
		done = set()
		for ring in self.ring_manager.rings:
			for member in ring.members:
				if member in done:
					continue
				done.add(member)
				vertex = self.graph.vertices[member]
				non_ring = self.positioner.get_non_ring_neighbours(member)
				if len(non_ring) > 1 or (len(non_ring) == 1 and len(vertex.value.rings) == 2):
					overlaps.append((vertex, list(vertex.value.rings), non_ring))

		for common, rings, substituents in overlaps:
			if len(substituents) != 2:
				continue
			a, b = substituents
			if not a.value.is_drawn or not b.value.is_drawn:
				continue
			ring = self.ring_manager.get_ring(rings[0])
			angle = (2.0 * math.pi - ring.get_angle()) / 6.0
			center = common.position
			self.rotate_subtree(a.id, common.id, angle, center)
			self.rotate_subtree(b.id, common.id, -angle, center)
			total = self._pair_subtree_score(a, b, common)
			self.rotate_subtree(a.id, common.id, -2.0 * angle, center)
			self.rotate_subtree(b.id, common.id, 2.0 * angle, center)
			if self._pair_subtree_score(a, b, common) > total:
				self.rotate_subtree(a.id, common.id, 2.0 * angle, center)
				self.rotate_subtree(b.id, common.id, -2.0 * angle, center)

	#============================================
	def _pair_subtree_score(self, a, b, common):
		vertex_scores = self.get_overlap_score().vertex_scores
		score_a, _ = self.get_subtree_overlap_score(a.id, common.id, vertex_scores)
		score_b, _ = self.get_subtree_overlap_score(b.id, common.id, vertex_scores)
		return score_a + score_b

	#============================================
	def is_edge_rotatable(self, edge):
		"""Single bonds between non terminal atoms that do not close a ring."""
		vertex_a = self.graph.vertices[edge.source_id]
		vertex_b = self.graph.vertices[edge.target_id]
		if edge.bond_type != "-":
			return False
		if vertex_a.is_terminal() or vertex_b.is_terminal():
			return False
		if (vertex_a.value.rings and vertex_b.value.rings
				and self.ring_manager.are_vertices_in_same_ring(vertex_a, vertex_b)):
			return False
		return True

	#============================================
	def resolve_rotatable_edges(self):
		"""Flip substituents across rotatable bonds where that lowers the score.

		Returns:
			OverlapScore: the score after the last pass.
		"""
		overlap_score = self.get_overlap_score()
		self.total_overlap_score = overlap_score.total
		sensitivity = self.options["overlap_sensitivity"]
		turn = math.radians(120)
		for _ in range(self.options["overlap_resolution_iterations"]):
			if self.total_overlap_score <= sensitivity:
				break
			for edge in self.graph.edges:
				if not self.is_edge_rotatable(edge):
					continue
				depth_a = self.graph.get_tree_depth(edge.source_id, edge.target_id)
				depth_b = self.graph.get_tree_depth(edge.target_id, edge.source_id)
				# rotate the shorter side
				a = edge.target_id
				b = edge.source_id
				if depth_a > depth_b:
					a = edge.source_id
					b = edge.target_id
				subtree_score, _ = self.get_subtree_overlap_score(b, a, overlap_score.vertex_scores)
				if subtree_score <= sensitivity:
					continue
				vertex_a = self.graph.vertices[a]
				vertex_b = self.graph.vertices[b]
				neighbours_b = vertex_b.get_neighbours(a)
				if len(neighbours_b) == 1:
					neighbour = self.graph.vertices[neighbours_b[0]]
					angle = geometry.rotate_away_from_angle(
						neighbour.position, vertex_a.position, vertex_b.position, turn)
					self._try_rotations([(neighbour.id, angle)], vertex_b)
				elif len(neighbours_b) == 2:
					if vertex_b.value.rings and vertex_a.value.rings:
						continue
					neighbour_a = self.graph.vertices[neighbours_b[0]]
					neighbour_b = self.graph.vertices[neighbours_b[1]]
					if neighbour_a.value.rings or neighbour_b.value.rings:
						continue
					angle_a = geometry.rotate_away_from_angle(
						neighbour_a.position, vertex_a.position, vertex_b.position, turn)
					angle_b = geometry.rotate_away_from_angle(
						neighbour_b.position, vertex_a.position, vertex_b.position, turn)
					self._try_rotations([(neighbour_a.id, angle_a), (neighbour_b.id, angle_b)], vertex_b)
				overlap_score = self.get_overlap_score()
		logger.debug("overlap score after rotations: %.4f", self.total_overlap_score)
		return overlap_score

	#============================================
	def _try_rotations(self, rotations, pivot):
		"""Apply rotations around pivot and undo them if the total score got worse."""
		for vertex_id, angle in rotations:
			self.rotate_subtree(vertex_id, pivot.id, angle, pivot.position)
		new_total = self.get_overlap_score().total
		if new_total > self.total_overlap_score:
			for vertex_id, angle in rotations:
				self.rotate_subtree(vertex_id, pivot.id, -angle, pivot.position)
		else:
			self.total_overlap_score = new_total

	#============================================
	def resolve_secondary_overlaps(self, scores):
		"""Turn clashing terminal atoms 20 degrees away from their closest atom."""
		sensitivity = self.options["overlap_sensitivity"]
		vertices = self.graph.vertices
		for vertex_id, score in scores:
			if score <= sensitivity:
				continue
			vertex = vertices[vertex_id]
			if not vertex.is_terminal():
				continue
			closest = self.positioner.get_closest_vertex(vertex)
			if closest is None:
				continue
			# vertex 0 only has a dummy previous position
			if closest.id == 0 and len(vertices) > 1:
				closest_position = vertices[1].position
			elif closest.is_terminal():
				closest_position = closest.previous_position
			else:
				closest_position = closest.position
			if vertex.id == 0 and len(vertices) > 1:
				pivot = vertices[1].position
			else:
				pivot = vertex.previous_position
			vertex.position = geometry.rotate_away_from(
				vertex.position, closest_position, pivot, math.radians(20))

	#============================================
	def resolve_finetune_overlaps(self):
		"""Try 30 degree steps around the bond best placed between clashing atoms."""
		if self.total_overlap_score <= self.options["overlap_sensitivity"]:
			return
		bond_length = self.options["bond_length"]
		threshold = FINETUNE_CLASH_FACTOR * bond_length * bond_length
		candidates = []
		for vertex_a, vertex_b in self._find_clashing_vertices(threshold):
			path = self._find_shortest_path(vertex_a.id, vertex_b.id)
			if not path:
				continue
			average = len(path) / 2.0
			best_edge = None
			best_metric = math.inf
			for index, edge in enumerate(path):
				if not self.is_edge_rotatable(edge):
					continue
				metric = abs(average - index) + abs(average - (len(path) - index))
				if metric < best_metric:
					best_metric = metric
					best_edge = edge
			if best_edge is not None and best_edge.id not in candidates:
				candidates.append(best_edge.id)

		for edge_id in candidates:
			if self.total_overlap_score <= self.options["overlap_sensitivity"]:
				break
			edge = self.graph.edges[edge_id]
			size_source = self._get_subgraph_size(edge.source_id, {edge.target_id})
			size_target = self._get_subgraph_size(edge.target_id, {edge.source_id})
			rotating_id = edge.source_id
			parent_id = edge.target_id
			if size_source >= size_target:
				rotating_id = edge.target_id
				parent_id = edge.source_id
			parent = self.graph.vertices[parent_id]
			if not self.graph.vertices[rotating_id].value.is_drawn:
				continue
			best_score = self.get_overlap_score().total
			best_step = 0
			for step in range(12):
				self.rotate_subtree(rotating_id, parent_id, FINETUNE_STEP, parent.position)
				candidate_score = self.get_overlap_score().total
				if candidate_score < best_score:
					best_score = candidate_score
					best_step = step + 1
			# twelve steps is a full turn, so only the best step is left to apply
			self.rotate_subtree(rotating_id, parent_id, -FINETUNE_STEP * 12, parent.position)
			self.rotate_subtree(rotating_id, parent_id, FINETUNE_STEP * best_step, parent.position)
			self.total_overlap_score = self.get_overlap_score().total
		logger.debug("overlap score after finetuning: %.4f", self.total_overlap_score)

	#============================================
	def _find_clashing_vertices(self, threshold):
		vertices = self.graph.vertices
		clashing = []
		for i in range(len(vertices)):
			vertex_a = vertices[i]
			if not vertex_a.value.is_drawn:
				continue
			for j in range(i + 1, len(vertices)):
				vertex_b = vertices[j]
				if not vertex_b.value.is_drawn or self.graph.has_edge(i, j):
					continue
				if geometry.distance_sq(vertex_a.position, vertex_b.position) < threshold:
					clashing.append((vertex_a, vertex_b))
		return clashing

	#============================================
	def _find_shortest_path(self, start_id, target_id):
		"""Edges of a breadth-first shortest path, empty when unreachable."""
		if start_id == target_id:
			return []
		previous = {start_id: None}
		queue = collections.deque([start_id])
		while queue:
			current = queue.popleft()
			if current == target_id:
				break
			for neighbour_id in self.graph.vertices[current].get_neighbours():
				if neighbour_id not in previous:
					previous[neighbour_id] = current
					queue.append(neighbour_id)
		if target_id not in previous:
			return []
		path = []
		current = target_id
		while previous[current] is not None:
			parent = previous[current]
			edge = self.graph.get_edge(parent, current)
			if edge is not None:
				path.insert(0, edge)
			current = parent
		return path

	#============================================
	def _get_subgraph_size(self, vertex_id, masked):
		visited = set(masked)
		start_size = len(visited)
		stack = [vertex_id]
		while stack:
			current = stack.pop()
			if current in visited:
				continue
			visited.add(current)
			for neighbour_id in self.graph.vertices[current].get_drawn_neighbours(self.graph.vertices):
				if neighbour_id not in visited:
					stack.append(neighbour_id)
		return len(visited) - start_size
