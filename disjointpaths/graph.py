# graph.py is part of DisjointPaths
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
"""The graph model, conversions from and to named nodes and random graphs.

The algorithms operate on nodes encoded as the integers [0, n). Converting the
user's node names (or NetworkX nodes) to indexes and back happens here.
"""

from itertools import permutations
import random
from types import MappingProxyType
from typing import Hashable, Iterable, Union
import warnings

import networkx as nx

from disjointpaths.exceptions import InvalidGraphError


class Graph:
  """Immutable weighted digraph over the nodes [0, n).

  The edges are indexed by tail, so that successors(u) is a list lookup. When
  the same (tail, head) pair appears more than once, the first occurrence wins
  and the rest are dropped with a warning.

  Args:
    edges (iterable) : [(tail, head, weight),]
    n (int)          : number of nodes; defaults to the max node index + 1

  Raises:
    InvalidGraphError : if a node is out of [0, n) or a weight is negative
  """

  def __init__(self, edges: Iterable, n: int = None):
    edges = list(edges)
    for tail, head, _ in edges:
      for node in (tail, head):
        if (not isinstance(node, int)) or (node < 0):
          raise InvalidGraphError(f"Node {node!r} of edge ({tail}, {head})"
                                  " is not a non-negative integer.")
    if n is None:
      n = max((max(u, v) for u, v, _ in edges), default=-1) + 1
    self._n = n

    weights = {}
    adj_list = [[] for _ in range(n)]
    for tail, head, weight in edges:
      if max(tail, head) >= n:
        raise InvalidGraphError(f"Edge ({tail}, {head}) is not in [0, {n}).")
      if weight < 0:
        raise InvalidGraphError(f"Edge ({tail}, {head}) has negative weight"
                                f" {weight}. Only non-negative weighted"
                                " graphs are supported.")
      if (tail, head) in weights:
        warnings.warn(f"Dropping parallel edge ({tail}, {head}) of weight"
                      f" {weight}; keeping the first one, of weight"
                      f" {weights[(tail, head)]}.")
        continue
      weights[(tail, head)] = weight
      adj_list[tail].append((head, weight))

    self._weights = MappingProxyType(weights)
    self._adj_list = tuple(tuple(neighbors) for neighbors in adj_list)

  def __repr__(self):
    return (f"Graph(n={self._n}, m={len(self._weights)})")

  def __len__(self):
    return self._n

  def __contains__(self, node):
    return isinstance(node, int) and (0 <= node < self._n)

  @property
  def weights(self):
    """Read-only {(tail, head): weight} mapping."""
    return self._weights

  @property
  def adj_list(self):
    """[((head, weight),),] indexed by tail."""
    return self._adj_list

  def number_of_nodes(self):
    return self._n

  def number_of_edges(self):
    return len(self._weights)

  def successors(self, u):
    return self._adj_list[u]

  def weight(self, u, v):
    """Raises KeyError if (u, v) is not an edge."""
    return self._weights[(u, v)]

  def edges(self):
    return [(u, v, w) for (u, v), w in self._weights.items()]

  def path_cost(self, path):
    """The sum of the edge weights along the path."""
    try:
      return sum(self._weights[link] for link in zip(path, path[1:]))
    except KeyError as e:
      raise InvalidGraphError(f"Path {path} uses the non-existent edge"
                              f" {e.args[0]}.") from None


def undirected_edges(edges: Iterable) -> list:
  """Inserts the opposite direction of each edge, with the same weight."""
  both_ways = []
  for u, v, w in edges:
    both_ways.append((u, v, w))
    both_ways.append((v, u, w))
  return both_ways


def encode_edges(named_edges: Iterable) -> tuple:
  """Encodes the node names of the edges to the indexes [0, n).

  The names are sorted, so the encoding does not depend on the edge order.

  Args:
    named_edges (iterable) : [(tail_name, head_name, weight),]

  Returns:
    edges (list)           : [(tail, head, weight),]
    encoder (dict)         : {name: index}
    decoder (dict)         : {index: name}
  """
  named_edges = list(named_edges)
  names = sorted({u for u, _, _ in named_edges} | {v for _, v, _ in named_edges})
  encoder = dict(zip(names, range(len(names))))
  decoder = dict(zip(range(len(names)), names))
  edges = [(encoder[u], encoder[v], w) for u, v, w in named_edges]
  return edges, encoder, decoder


def nx_to_edges(G: Union[nx.Graph, nx.DiGraph]) -> tuple:
  """Converts a NetworkX graph to an edge list over [0, n).

  - G.nodes are encoded in their iteration order.
  - Undirected edges break into two edges with opposite directions.
  - Unweighted edges get weight 1.

  Args:
    G (Graph or DiGraph)

  Returns:
    edges (list)   : [(tail, head, weight),]
    encoder (dict) : {G node: index}
    decoder (dict) : {index: G node}

  Raises:
    InvalidGraphError : if G is negatively weighted or a multigraph
  """
  if G.is_multigraph():
    raise InvalidGraphError("Multigraphs are not supported. Keep the minimum"
                            " weight edge of each node pair instead.")
  if nx.is_negatively_weighted(G):
    raise InvalidGraphError("Only non-negative weighted graphs are"
                            " supported.")

  n = G.number_of_nodes()
  encoder = dict(zip(G.nodes, range(n)))
  decoder = dict(zip(range(n), G.nodes))

  edges = [(encoder[u], encoder[v], w)
           for u, v, w in G.edges.data("weight", default=1)]
  if not nx.is_directed(G):
    edges = undirected_edges(edges)
  return edges, encoder, decoder


def graph_to_nx(graph: Graph, decoder: dict = None) -> nx.DiGraph:
  """Builds the NetworkX digraph of a Graph, used for plotting."""
  decode = decoder.get if decoder else (lambda u: u)
  G = nx.DiGraph()
  G.add_nodes_from(map(decode, range(graph.number_of_nodes())))
  G.add_weighted_edges_from((decode(u), decode(v), w)
                            for u, v, w in graph.edges())
  return G


def decode_path_nodes(paths: list, decoder: dict) -> list:
  """Maps the nodes of each (path, path_cost) back to their names."""
  decoded_paths = []
  for p in paths:
    decoded_paths.append(
      (list(map(decoder.get, p[0])),) + tuple(p[1:])
    )
  return decoded_paths


def encode_node(node: Hashable, encoder: dict) -> int:
  try:
    return encoder[node]
  except KeyError:
    raise InvalidGraphError(f"Node {node!r} is not in the graph.") from None


def random_graph(n,
                 max_edge_weight=100,
                 p=0.4,
                 directed=True,
                 random_seed=None):
  """Generates a Gilbert G(n, p) random graph, with uniform integer weights in
  [1, max_edge_weight].

  Args:
    n (int)               : number of nodes
    max_edge_weight (int) : (default: 100)
    p (float)             : the probability that each edge exists
                            (default: 0.4)
    directed (bool)       : if not directed, each edge is inserted in both
                            directions with the same weight (default: True)
    random_seed (int)     : in case of fixed random graph (default: None)

  Returns:
    edges (list)          : [(tail, head, weight),] over [0, n)
  """
  rng = random.Random(random_seed)
  edges = []
  for u, v in permutations(range(n), 2):
    if (not directed) and (u > v):
      continue
    if rng.random() < p:
      edges.append((u, v, rng.randint(1, max_edge_weight)))
  if not directed:
    edges = undirected_edges(edges)
  return edges
