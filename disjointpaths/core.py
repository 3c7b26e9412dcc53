# core.py is part of DisjointPaths
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
"""Suurballe-Bhandari algorithm for the k link-disjoint shortest paths.

Each iteration:
  1. Builds the working graph: the original graph, where each link of the
     paths found so far is replaced by its reverse link, of negated weight.
  2. Finds the shortest path on the working graph. It may use reversed links,
     thus cost less than zero.
  3. Uncrosses the paths: the links traversed in opposite directions by two
     paths cancel out.
  4. Reconstructs the paths, walking the surviving links from the source to
     the sink.

The sum of the path costs of all the iterations is the minimum total cost of
the k link-disjoint paths.
"""

from collections import deque
import logging
import math
import warnings

from disjointpaths import dijkstra
from disjointpaths.exceptions import (InsufficientPathsError,
                                      NoPathError,
                                      ReconstructionError)
from disjointpaths.utils import are_link_disjoint, path_links


logger = logging.getLogger(__name__)


def first_shortest_path(init_config):
  """The absolute shortest path, on the original graph.

  Returns:
    path, path_cost
  """
  graph = init_config["graph"]
  return dijkstra.dijkstra(init_config["source"],
                           graph.successors,
                           init_config["sink"])


def working_graph(graph, paths):
  """Replaces each link of the paths with its reverse, of negated weight.

  The working graph is built anew from the original graph, so it is never
  shared among iterations.

  Args:
    graph (Graph)  : the original graph
    paths (list)   : the link-disjoint paths found so far

  Returns:
    weights (dict) : {(tail, head): weight}
  """
  weights = dict(graph.weights)
  for path in paths:
    for u, v in path_links(path):
      if ((u, v) not in weights) or ((u, v) not in graph.weights):
        raise ReconstructionError(f"Link ({u}, {v}) of path {path} cannot be"
                                  " reversed, because it is not an edge of"
                                  " the working graph.")
      del weights[(u, v)]
      weights[(v, u)] = -graph.weights[(u, v)]
  return weights


def successors_of(weights):
  """Indexes the working graph links by tail.

  Returns:
    successors (callable) : u -> [(v, uv_weight),]
  """
  adj = {}
  for (u, v), uv_weight in weights.items():
    adj.setdefault(u, []).append((v, uv_weight))
  return lambda u: adj.get(u, ())


def uncross_links(link_lists):
  """Cancels out the links traversed in both directions.

  Starting from the links of the 1st list, each link of the subsequent lists
  either cancels out an already kept link, (tail, head) or (head, tail), or is
  kept.

  Args:
    link_lists (iterable) : [[(tail, head),],]

  Returns:
    unique_links (list)   : [(tail, head),], in order of insertion
  """
  link_lists = iter(link_lists)
  # A dict as an ordered set
  unique_links = dict.fromkeys(next(link_lists, []))
  for links in link_lists:
    for u, v in links:
      if (u, v) in unique_links:
        del unique_links[(u, v)]
      elif (v, u) in unique_links:
        del unique_links[(v, u)]
      else:
        unique_links[(u, v)] = None
  return list(unique_links)


def uncross(paths):
  return uncross_links(map(path_links, paths))


def reconstruct_paths(links, source, sink):
  """Walks the links into paths.

  Each link leaving the source starts a path. From the current node, the first
  link leaving it is consumed, until the sink is reached.

  Args:
    links (list)           : [(tail, head),]
    source, sink (int)

  Returns:
    paths (list)           : [[source, ..., sink],]

  Raises:
    ReconstructionError    : if a walk gets stuck before reaching the sink
  """
  # {tail: deque([head,])}
  out_links = {}
  for u, v in links:
    out_links.setdefault(u, deque()).append(v)

  paths = []
  for head in out_links.pop(source, ()):
    path = [source, head]
    u = head
    while u != sink:
      if not out_links.get(u):
        raise ReconstructionError(f"The walk {path} got stuck at node {u},"
                                  f" before reaching the sink ({sink}).")
      u = out_links[u].popleft()
      path.append(u)
    paths.append(path)

  leftover = [(u, v) for u, heads in out_links.items() for v in heads]
  if leftover:
    warnings.warn(f"Dropping the links {leftover}, that do not lie on any"
                  " source-sink path.")
  return paths


def bhandari(K, init_config, mode=None):
  """Generates K link-disjoint paths of minimum total cost.

  Args:
    K (int)                : number of paths
    init_config (dict)     : {"graph": Graph, "source": int, "sink": int}
    mode (dict)            : the configuration of the problem
                             check (bool): verify the solution
                             (default: None)

  Returns:
    k_paths (list)         : [(path, path_cost),], sorted by path_cost
    iteration_costs (list) : the cost of the shortest path of each iteration

  Raises:
    ValueError             : if K < 1
    NoPathError            : if the sink is not reachable from the source
    InsufficientPathsError : if less than K link-disjoint paths exist
    ReconstructionError    : if the uncrossed links do not form K paths
  """
  if K < 1:
    raise ValueError(f"Expected at least 1 path. Instead got K: {K}")
  mode = mode or {}
  graph = init_config["graph"]
  source = init_config["source"]
  sink = init_config["sink"]
  for node in (source, sink):
    if node not in graph:
      raise ValueError(f"Node {node} is not in [0, {len(graph)}).")

  if source == sink:
    return [([source], 0) for _ in range(K)], [0] * K

  path, path_cost = first_shortest_path(init_config)
  logger.info("path 1: %s   cost: %s", path, path_cost)
  paths = [path]
  iteration_costs = [path_cost]

  for k in range(2, K + 1):
    weights = working_graph(graph, paths)
    logger.debug("working graph: %d links, %d reversed",
                 len(weights),
                 sum(len(p) - 1 for p in paths))
    try:
      path, path_cost = dijkstra.dijkstra(source,
                                          successors_of(weights),
                                          sink,
                                          negative_weights=True)
    except NoPathError:
      raise InsufficientPathsError(_costed(graph, paths), K) from None
    logger.info("path %d: %s   cost: %s", k, path, path_cost)
    iteration_costs.append(path_cost)

    unique_links = uncross(paths + [path])
    paths = reconstruct_paths(unique_links, source, sink)
    if len(paths) != k:
      raise ReconstructionError(f"Expected {k} paths after uncrossing, but"
                                f" {len(paths)} links leave the source.")

  k_paths = _costed(graph, paths)
  logger.info("total cost: %s", sum(iteration_costs))
  if mode.get("check"):
    _check(k_paths, iteration_costs)
  return k_paths, iteration_costs


def k_disjoint_paths(K, mode, init_config):
  """Generates the K link-disjoint paths of minimum total cost.

  Args:
    K (int)            : number of paths
    mode (dict)        : the configuration of the problem
    init_config (dict) : {"graph": Graph, "source": int, "sink": int}

  Returns:
    k_paths (list)     : [(path, path_cost),]
  """
  k_paths, _ = bhandari(K, init_config, mode)
  return k_paths


def _costed(graph, paths):
  return sorted(((p, graph.path_cost(p)) for p in paths),
                key=lambda p: p[1])


def _check(k_paths, iteration_costs):
  """Verifies that the paths are link-disjoint and that their total cost
  matches the sum of the iteration costs."""
  paths = [p for p, _ in k_paths]
  if not are_link_disjoint(paths):
    raise ReconstructionError(f"The paths {paths} share links.")
  total_cost = sum(c for _, c in k_paths)
  if not math.isclose(total_cost, sum(iteration_costs), abs_tol=1e-9):
    raise ReconstructionError(f"The paths cost {total_cost} in total, but the"
                              f" iterations {sum(iteration_costs)}.")
