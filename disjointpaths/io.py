# io.py is part of DisjointPaths
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
"""Reads graphs from files and exports distance matrices for LP solvers."""

import os

import networkx as nx
import numpy as np

from disjointpaths import graph
from disjointpaths.exceptions import EdgeFormatError


NX_FORMATS = ["edgelist", "adjlist", "gexf", "gml"]


def parse_edge(line, undirected=False):
  """Parses a <tail> <weight> <head> line.

  Returns:
    edges (list) : [(tail, head, weight),], holding both directions when
                   undirected

  Raises:
    EdgeFormatError : if a field is missing or the weight is not a number
  """
  fields = line.split()
  if len(fields) < 3:
    missing = ["starting node", "weight", "finish node"][len(fields)]
    raise EdgeFormatError(f"No {missing} in line: {line!r}")
  tail, weight, head = fields[:3]
  try:
    weight = int(weight)
  except ValueError:
    try:
      weight = float(weight)
    except ValueError:
      raise EdgeFormatError(f"Invalid weight {weight!r} in line:"
                            f" {line!r}") from None
  if undirected:
    return [(tail, head, weight), (head, tail, weight)]
  return [(tail, head, weight)]


def read_edges(path, undirected=False, comments="//"):
  """Reads the edges of a graph from a text file.

  Each line holds an edge as "<tail> <weight> <head>", separated by whitespace.
  Empty lines and lines starting with the comments marker are skipped.

  Args:
    path (str)        : the file path
    undirected (bool) : insert each edge in both directions (default: False)
    comments (str)    : marker for comment lines (default: '//')

  Returns:
    named_edges (list): [(tail_name, head_name, weight),]
  """
  named_edges = []
  with open(path, encoding="utf-8") as f:
    for line_number, line in enumerate(f, 1):
      line = line.strip()
      if (not line) or line.startswith(comments):
        continue
      try:
        named_edges.extend(parse_edge(line, undirected))
      except EdgeFormatError as e:
        raise EdgeFormatError(str(e), path, line_number) from None
  return named_edges


def read_graph(path, directed=True, weighted=True, nodetype=str):
  """Reads a graph from a file and encodes its nodes.

  NetworkX formats are recognized by the extension (.edgelist, .adjlist,
  .gexf, .gml). Any other file is read as an edges file (see read_edges()).

  Args:
    path (str)        : the file path
    directed (bool)   : when False, edges are inserted in both directions
                        (default: True)
    weighted (bool)   : whether a NetworkX edgelist holds weights
                        (default: True)
    nodetype (type)   : convert the nodes to this type
                        (default: str)

  Returns:
    graph (Graph)
    encoder (dict)    : {node_name: index}
    decoder (dict)    : {index: node_name}
  """
  exte = os.path.splitext(path)[1][1:]
  if exte in NX_FORMATS:
    G = _read_nx(path, exte, directed, weighted, nodetype)
    edges, encoder, decoder = graph.nx_to_edges(G)
  else:
    named_edges = [(nodetype(u), nodetype(v), w)
                   for u, v, w in read_edges(path, undirected=not directed)]
    edges, encoder, decoder = graph.encode_edges(named_edges)
  return graph.Graph(edges, n=len(encoder)), encoder, decoder


def _read_nx(path, exte, directed, weighted, nodetype):
  create_using = nx.DiGraph if directed else nx.Graph
  if exte == "edgelist":
    if weighted:
      return nx.read_weighted_edgelist(path,
                                       create_using=create_using,
                                       nodetype=nodetype)
    return nx.read_edgelist(path, create_using=create_using, nodetype=nodetype)
  elif exte == "adjlist":
    return nx.read_adjlist(path, create_using=create_using, nodetype=nodetype)
  elif exte == "gexf":
    G = nx.read_gexf(path, node_type=nodetype)
  else:
    G = nx.read_gml(path)
  return create_using(G)


def distance_matrix(g, no_edge=999):
  """The n x n matrix of the edge weights.

  Args:
    g (Graph)
    no_edge (number) : the entry for node pairs without an edge
                       (default: 999)

  Returns:
    distance (np.ndarray)
  """
  weights = list(g.weights.values())
  dtype = int if all(isinstance(w, int) for w in weights) else float
  n = g.number_of_nodes()
  distance = np.full((n, n), no_edge, dtype=dtype)
  for (u, v), uv_weight in g.weights.items():
    distance[u, v] = uv_weight
  return distance


def format_opl_dat(distance, source, sink, K):
  """Formats the problem in the OPL (CPLEX) data-file dialect."""
  lines = [f"n = {len(distance)};",
           f"source = {source};",
           f"target = {sink};",
           f"K = {K};",
           '',
           "distance=["]
  for row in distance:
    lines.append(f"[{', '.join(str(d) for d in row.tolist())}],")
  lines.append("];")
  return '\n'.join(lines) + '\n'


def write_opl_dat(path, distance, source, sink, K):
  """Writes the problem to an OPL (CPLEX) .dat file."""
  with open(path, 'w', encoding="utf-8") as wf:
    wf.write(format_opl_dat(distance, source, sink, K))
