# dijkstra.py is part of DisjointPaths
#
# DisjointPaths is free software; you may redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option)
# any later version. You should have received a copy of the GNU General Pu-
# blic License along with this program. If not, see
# <https://www.gnu.org/licenses/>.
#
# (C) 2020 Athanasios Mattas
# ==========================================================================
"""Dijkstra's algorithm, with a label-correcting mode for graphs that hold
negative edge weights but no negative cycles.
"""

import logging
from typing import Callable, Hashable, Union

from disjointpaths.exceptions import NoPathError
from disjointpaths.priorityq import PriorityQueue


logger = logging.getLogger(__name__)


def _target_predicate(sink):
  if callable(sink):
    return sink
  return lambda u: u == sink


def dijkstra(source: Hashable,
             successors: Callable,
             sink: Union[Hashable, Callable],
             negative_weights: bool = False):
  """Dijkstra's algorithm

  The search frontier is a PriorityQueue of [path_cost, prev_node, node]
  entries. Upon visiting a node, each successor is relaxed.

  When negative_weights is set, a visited node may be reached again with a
  lower cost; it is then re-queued (label-correcting search) and the search
  runs until the queue is exhausted. This yields the shortest path as long as
  the graph holds no negative cycle, which is NOT checked here.

  Nodes satisfying the sink predicate are not expanded.

  Args:
    source (hashable)       : the source node
    successors (callable)   : u -> [(v, uv_weight),]
    sink (hashable|callable): the sink node or a predicate u -> bool
    negative_weights (bool) : whether the graph may hold negative weights
                              (default: False)

  Returns:
    path (list)             : [source, ..., sink]
    path_cost (number)

  Raises:
    NoPathError             : if no node satisfying the sink predicate is
                              reachable from the source
  """
  is_sink = _target_predicate(sink)
  # {node: [path_cost, prev_node]}
  visited = {source: [0, None]}
  to_visit = PriorityQueue([[0, None, source]])
  # The sink nodes reached, in order of first visit.
  reached = {}
  pops = 0

  while to_visit:
    u_path_cost, _, u = to_visit.pop_low()
    pops += 1

    if is_sink(u):
      reached[u] = None
      if not negative_weights:
        break
      continue

    for v, uv_weight in successors(u):
      v_path_cost = u_path_cost + uv_weight
      if (v not in visited) or (v_path_cost < visited[v][0]):
        visited[v] = [v_path_cost, u]
        to_visit.relax_priority([v_path_cost, u, v])

  logger.debug("dijkstra: %d pops, %d labeled nodes", pops, len(visited))

  if not reached:
    raise NoPathError(f"The source ({source}) is not connected to the sink.")
  sink = min(reached, key=lambda u: visited[u][0])
  return extract_path(source, sink, visited), visited[sink][0]


def extract_path(source, sink, visited):
  """Extracts the shortest-path from a Dijkstra's algorithm output, by jumping
  through the previous nodes from the sink back to the source.

  Args:
    source, sink (hashable) : the ids of source and sink nodes
    visited (dict)          : {node: [path_cost, prev_node]}

  Returns:
    path (list)             : list of the consecutive nodes in the path
  """
  path = [sink]
  u = sink
  while u != source:
    u = visited[u][1]
    path.append(u)
  path.reverse()
  return path
