# core_test.py is part of DisjointPaths
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
"""Houses all the tests for the core module."""

import math

import networkx as nx
import pytest

from disjointpaths import core, dijkstra, graph
from disjointpaths.exceptions import (InsufficientPathsError,
                                      NoPathError,
                                      ReconstructionError)
from disjointpaths.utils import are_link_disjoint, path_links


def _config(edges, source, sink, n=None):
  return {"graph": graph.Graph(edges, n=n), "source": source, "sink": sink}


def brute_force(g, source, sink, K):
  """The minimum total cost of K link-disjoint simple paths, or None."""
  G = nx.DiGraph()
  G.add_nodes_from(range(g.number_of_nodes()))
  G.add_weighted_edges_from(g.edges())
  paths = [(g.path_cost(p), set(path_links(p)))
           for p in nx.all_simple_paths(G, source, sink)]
  best = math.inf

  def search(start, k, used_links, cost):
    nonlocal best
    if k == K:
      best = min(best, cost)
      return
    for i in range(start, len(paths)):
      path_cost, links = paths[i]
      if (cost + path_cost < best) and not (links & used_links):
        search(i + 1, k + 1, used_links | links, cost + path_cost)

  search(0, 0, set(), 0)
  return None if best == math.inf else best


class TestBhandari():

  def setup_method(self):
    # Nodes 1-5, with 3 parallel routes from 1 to 5.
    self.routes = _config([(1, 2, 1), (2, 5, 1), (1, 3, 2), (3, 5, 2),
                           (1, 4, 5), (4, 5, 5)], 1, 5)
    # The 2 link-disjoint paths (0-1-5-3 and 0-4-2-3) cannot be found without
    # cancelling the 1-2 link of the shortest path 0-1-2-3.
    self.trap = _config([(0, 1, 1), (1, 2, 1), (2, 3, 1), (1, 5, 3),
                         (5, 3, 1), (0, 4, 3), (4, 2, 1)], 0, 3)

  def test_parallel_routes(self):
    k_paths, iteration_costs = core.bhandari(3, self.routes)
    assert k_paths == [([1, 2, 5], 2), ([1, 3, 5], 4), ([1, 4, 5], 10)]
    assert iteration_costs == [2, 4, 10]
    assert sum(iteration_costs) == 16
    assert sum(iteration_costs) == brute_force(self.routes["graph"], 1, 5, 3)

  def test_trap_topology(self):
    k_paths, iteration_costs = core.bhandari(2, self.trap)
    assert k_paths == [([0, 1, 5, 3], 5), ([0, 4, 2, 3], 5)]
    # The 2nd iteration uses the reversed 2->1 link, of weight -1.
    assert iteration_costs == [3, 7]
    assert sum(iteration_costs) == sum(c for _, c in k_paths) == 10

  def test_k_1_equals_dijkstra(self):
    g = self.trap["graph"]
    expected = dijkstra.dijkstra(0, g.successors, 3)
    k_paths, iteration_costs = core.bhandari(1, self.trap)
    assert k_paths == [expected]
    assert iteration_costs == [expected[1]]

  def test_insufficient_paths(self):
    with pytest.raises(InsufficientPathsError) as e:
      core.bhandari(3, self.trap)
    assert e.value.K == 3
    assert e.value.paths == [([0, 1, 5, 3], 5), ([0, 4, 2, 3], 5)]
    # Callers that only care about a solution existing can catch NoPathError.
    assert isinstance(e.value, NoPathError)

  def test_no_path(self):
    config = _config([(0, 1, 1), (2, 1, 1)], 0, 2)
    with pytest.raises(NoPathError) as e:
      core.bhandari(2, config)
    assert not isinstance(e.value, InsufficientPathsError)

  def test_source_is_sink(self):
    config = dict(self.trap, sink=0)
    k_paths, iteration_costs = core.bhandari(3, config)
    assert k_paths == [([0], 0)] * 3
    assert iteration_costs == [0, 0, 0]

  @pytest.mark.parametrize("K", [0, -2])
  def test_invalid_K(self, K):
    with pytest.raises(ValueError):
      core.bhandari(K, self.trap)

  def test_invalid_source(self):
    with pytest.raises(ValueError):
      core.bhandari(1, dict(self.trap, source=9))

  def test_parallel_edges__first_occurrence_wins(self):
    with pytest.warns(UserWarning):
      config = _config([(0, 1, 5), (0, 1, 1), (1, 2, 1), (0, 2, 10)], 0, 2)
    k_paths, _ = core.bhandari(2, config)
    assert k_paths == [([0, 1, 2], 6), ([0, 2], 10)]

  def test_undirected(self):
    # A square with a diagonal; each edge in both directions.
    edges = graph.undirected_edges([(0, 1, 1), (1, 3, 1), (0, 2, 2),
                                    (2, 3, 2), (1, 2, 1)])
    config = _config(edges, 0, 3)
    k_paths, iteration_costs = core.bhandari(2, config, {"check": True})
    assert are_link_disjoint([p for p, _ in k_paths])
    assert sum(iteration_costs) == 6

  def test_k_disjoint_paths(self):
    k_paths = core.k_disjoint_paths(2, {}, self.trap)
    assert [p for p, _ in k_paths] == [[0, 1, 5, 3], [0, 4, 2, 3]]

  @pytest.mark.parametrize(
    "n, K, directed, seed",
    [[n, K, d, s]
     for n in [5, 6]
     for K in [2, 3]
     for d in [True, False]
     for s in range(4)]
  )
  def test_against_brute_force(self, n, K, directed, seed):
    edges = graph.random_graph(n,
                               max_edge_weight=10,
                               p=0.5,
                               directed=directed,
                               random_seed=seed)
    config = _config(edges, 0, n - 1, n=n)
    expected = brute_force(config["graph"], 0, n - 1, K)
    if expected is None:
      with pytest.raises(NoPathError):
        core.bhandari(K, config)
      return
    k_paths, iteration_costs = core.bhandari(K, config, {"check": True})
    assert len(k_paths) == K
    assert are_link_disjoint([p for p, _ in k_paths])
    for path, _ in k_paths:
      assert (path[0], path[-1]) == (0, n - 1)
    assert sum(iteration_costs) == expected
    assert sum(c for _, c in k_paths) == expected


class TestWorkingGraph():

  def setup_method(self):
    self.g = graph.Graph([(0, 1, 1), (1, 2, 2), (0, 2, 5), (2, 1, 7)])

  def test_reverses_and_negates(self):
    weights = core.working_graph(self.g, [[0, 1, 2]])
    assert weights == {(1, 0): -1, (2, 1): -2, (0, 2): 5}

  def test_rebuilt_from_the_original(self):
    core.working_graph(self.g, [[0, 1, 2]])
    assert core.working_graph(self.g, [[0, 2]]) == {(0, 1): 1,
                                                    (1, 2): 2,
                                                    (2, 0): -5,
                                                    (2, 1): 7}
    assert self.g.weight(0, 2) == 5

  def test_missing_link(self):
    with pytest.raises(ReconstructionError):
      core.working_graph(self.g, [[0, 1], [0, 1]])
    with pytest.raises(ReconstructionError):
      core.working_graph(self.g, [[1, 0]])

  def test_successors_of(self):
    successors = core.successors_of({(1, 0): -1, (0, 2): 5, (1, 2): 3})
    assert list(successors(1)) == [(0, -1), (2, 3)]
    assert list(successors(2)) == []


class TestUncross():

  def test_opposite_links_cancel_out(self):
    paths = [[0, 1, 2, 3], [0, 4, 2, 1, 5, 3]]
    assert core.uncross(paths) == [(0, 1), (2, 3), (0, 4), (4, 2), (1, 5),
                                   (5, 3)]

  def test_disjoint_paths_are_kept(self):
    paths = [[0, 1, 3], [0, 2, 3]]
    assert core.uncross(paths) == [(0, 1), (1, 3), (0, 2), (2, 3)]

  def test_idempotent(self):
    paths = [[0, 1, 2, 3], [0, 4, 2, 1, 5, 3]]
    links = core.uncross(paths)
    assert core.uncross_links([links]) == links
    assert core.uncross_links([core.uncross_links([links])]) == links

  def test_empty(self):
    assert core.uncross_links([]) == []
    assert core.uncross([[0]]) == []


class TestReconstructPaths():

  def test_reconstruct(self):
    links = [(0, 1), (2, 3), (0, 4), (4, 2), (1, 5), (5, 3)]
    assert core.reconstruct_paths(links, 0, 3) == [[0, 1, 5, 3],
                                                   [0, 4, 2, 3]]

  def test_shared_node(self):
    links = [(0, 1), (1, 3), (0, 2), (2, 1), (1, 4), (4, 3)]
    paths = core.reconstruct_paths(links, 0, 3)
    assert paths == [[0, 1, 3], [0, 2, 1, 4, 3]]
    assert are_link_disjoint(paths)

  def test_stuck_walk(self):
    with pytest.raises(ReconstructionError):
      core.reconstruct_paths([(0, 1), (1, 2)], 0, 3)

  def test_leftover_links(self):
    with pytest.warns(UserWarning, match="Dropping"):
      paths = core.reconstruct_paths([(0, 1), (1, 3), (4, 5), (5, 4)], 0, 3)
    assert paths == [[0, 1, 3]]

  def test_no_links_leave_the_source(self):
    assert core.reconstruct_paths([], 0, 3) == []


class TestCheck():

  def test_shared_links(self):
    with pytest.raises(ReconstructionError):
      core._check([([0, 1, 2], 2), ([0, 1, 2], 2)], [2, 2])

  def test_cost_mismatch(self):
    with pytest.raises(ReconstructionError):
      core._check([([0, 1, 2], 2), ([0, 2], 3)], [2, 2])
