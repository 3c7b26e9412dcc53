#!/usr/bin/env python3
import os

import disjointpaths as dp
from disjointpaths import graph, io


def main():
  path = os.path.join(os.path.dirname(__file__), "routes.edges")
  g, encoder, decoder = io.read_graph(path)
  init_config = {
    "graph": g,
    "source": encoder["ATH"],
    "sink": encoder["THE"]
  }
  k_paths = dp.k_disjoint_paths(3, {"check": True}, init_config)
  k_paths = graph.decode_path_nodes(k_paths, decoder)
  dp.print_paths(k_paths)
  dp.plot_paths(k_paths, graph.graph_to_nx(g, decoder))


if __name__ == '__main__':
  main()
