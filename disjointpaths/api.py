# api.py is part of DisjointPaths
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
"""Provides dot delimited symbols to the disjointpaths API (dp.func)."""

from typing import Hashable, Union

import networkx as nx

from disjointpaths import core, graph
from disjointpaths.exceptions import InsufficientPathsError


def _make_config(G: Union[nx.Graph, nx.DiGraph, list, graph.Graph],
                 s: Hashable,
                 t: Hashable,
                 **kwargs):
  """Generates the configuration of the problem.

  Args:
    G (nx.Graph, nx.DiGraph, list or Graph)
                       : the graph
                         list format: [(tail, head, weight),] with any
                         hashable, sortable node names
    s, t (hashable)    : source, target
    kwargs:
      undirected (bool): insert the edges of a list in both directions
                         [default: False]
      check (bool)     : verify the solution [default: False]
      verbose (int)    : [default: 0]

  Returns:
    mode (dict)        : the configuration of the problem
    init_config (dict) : kwargs for core.bhandari()
    decoder (dict)     : maps the graph nodes with 0-(n-1) integers, to be used
                         as indexes of the adj_list (None for a Graph)
  """
  if isinstance(G, graph.Graph):
    g, decoder = G, None
  else:
    if isinstance(G, nx.Graph):
      edges, encoder, decoder = graph.nx_to_edges(G)
    else:
      if kwargs.get("undirected"):
        G = graph.undirected_edges(G)
      edges, encoder, decoder = graph.encode_edges(G)
    g = graph.Graph(edges, n=len(encoder))
    s = graph.encode_node(s, encoder)
    t = graph.encode_node(t, encoder)

  init_config = {
      "graph": g,
      "source": s,
      "sink": t
  }
  mode = {
      "check": kwargs.get("check", False),
      "verbose": kwargs.get("verbose", 0)
  }
  return mode, init_config, decoder


def disjoint_paths(G: Union[nx.Graph, nx.DiGraph, list, graph.Graph],
                   s: Hashable,
                   t: Hashable,
                   k: int,
                   undirected: bool = False,
                   check: bool = False):
  """Generates k link-disjoint s->t paths of minimum total cost.

  Args:
    G (nx.Graph, nx.DiGraph, list or Graph)
                      : the graph
                        list format: [(tail, head, weight),]
    s, t (hashable)   : source, target
    k (int)           : number of paths
    undirected (bool) : insert the edges of a list in both directions
                        [default: False]
    check (bool)      : verify the solution [default: False]

  Returns:
    k_paths (list)    : [(path: list, cost),]
  """
  mode, init_config, decoder = _make_config(G,
                                            s,
                                            t,
                                            undirected=undirected,
                                            check=check)

  try:
    k_paths = core.k_disjoint_paths(k, mode, init_config)
  except InsufficientPathsError as e:
    if decoder:
      e.paths = graph.decode_path_nodes(e.paths, decoder)
    raise

  if decoder:
    k_paths = graph.decode_path_nodes(k_paths, decoder)

  return k_paths
