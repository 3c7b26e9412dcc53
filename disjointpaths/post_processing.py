# post_processing.py is part of DisjointPaths
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
"""Handles the post processing."""

from datetime import datetime
from math import sqrt
import os
from warnings import warn

import click
import matplotlib.pyplot as plt
import networkx as nx


COLORS = [
    "mediumblue",
    "#c71585",  # redviolet
    "aqua",
    'k',
    "r",
    "darkorange",
    "#bf00ff",  # electric purple
    "limegreen"
]


def path_label(path, path_number):
  return f"path_{path_number}: {str(path[0])}\ncost: {path[1]}"


def _node_sizes(G):
  if G.number_of_nodes() < 400:
    node_size = 550
    path_node_size = 1200
  elif G.number_of_nodes() < 2200:
    node_size = 550 - G.number_of_nodes() // 5
    path_node_size = 1200 - G.number_of_nodes() // 10
  else:
    node_size = 10
    path_node_size = 350
  return node_size, path_node_size


def plot_paths(paths_data,
               G,
               save_graph=False,
               show_graph=True,
               layout_seed=None,
               draw_edge_weights=False,
               save_dir=None):
  """Plots the graph and the link-disjoint paths (up to 8) in spring_layout.

  Args:
    paths_data (list)       : [(path, path_cost),]
    G (nx.DiGraph)          : the graph, with the same node names as the paths
    save_graph (bool)       : save the figure as a png (default: False)
    show_graph (bool)       : (default: True)
    layout_seed (int)       : fixes the spring_layout (default: None)
    draw_edge_weights (bool): (default: False)
    save_dir (str)          : where to save the figure (default: cwd)

  Returns:
    file_name (str | None)  : the path of the saved figure
  """
  if save_graph:
    figsize = (10 * 1.8, 10)
    dpi = 200
    title_fontsize = 22
    legend_fontsize = 20
  else:
    figsize = (8 * 1.8, 8)
    dpi = 100
    title_fontsize = 18
    legend_fontsize = 16

  fig = plt.figure(figsize=figsize, dpi=dpi)
  pos = nx.spring_layout(G,
                         seed=layout_seed,
                         k=5 / sqrt(max(G.number_of_nodes(), 1)))

  # 1. Draw the graph
  node_size, path_node_size = _node_sizes(G)
  nx.draw_networkx(G, pos, node_size=node_size, width=0.3, alpha=0.3,
                   with_labels=False, arrows=False)
  if draw_edge_weights:
    edge_labels = nx.get_edge_attributes(G, "weight")
    nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels)

  # 2. Draw the nodes of all the paths
  all_paths_nodes = set()
  for path in paths_data:
    all_paths_nodes.update(path[0])
  for node, (x, y) in pos.items():
    if node in all_paths_nodes:
      plt.text(x, y, node, fontsize=19, ha='center', va='center')
  nx.draw_networkx_nodes(G, pos=pos,
                         nodelist=list(all_paths_nodes),
                         node_size=path_node_size,
                         edgecolors='k', node_color="deepskyblue", alpha=0.9)

  # 3. Draw the paths
  colors = iter(COLORS)
  width_step = 6.5
  last_path_width = 4
  first_path_width = max(last_path_width + (len(paths_data) - 1) * width_step,
                         8)
  for i, path in enumerate(paths_data):
    try:
      color = next(colors)
    except StopIteration:
      warn("Up to 8 paths can be plotted. Try the -v option, to print all the"
           " generated paths.")
      break
    path_edges_sequence = list(zip(path[0], path[0][1:]))
    nx.draw_networkx_edges(G, pos=pos, edgelist=path_edges_sequence,
                           edge_color=color, alpha=0.8, arrows=False,
                           width=first_path_width - i * width_step,
                           label=path_label(path, i + 1))

  frame_title = ("\nlink-disjoint paths"
                 f"\n#nodes: {G.number_of_nodes()}   "
                 f"#edges: {G.number_of_edges()}   "
                 f"#paths: {len(paths_data)}   "
                 f"total cost: {sum(p[1] for p in paths_data)}")
  plt.title(frame_title, fontsize=title_fontsize)
  leg = plt.legend(fontsize=legend_fontsize)
  leg.get_frame().set_alpha(None)
  leg.get_frame().set_facecolor((1, 1, 1, 0.5))
  plt.tight_layout()

  file_name = None
  if save_graph:
    date_n_time = str(datetime.now())[:19]
    date_n_time = date_n_time.replace(':', '-').replace(' ', '_')
    file_name = os.path.join(save_dir or os.getcwd(),
                             f"graph_vis_{date_n_time}.png")
    plt.savefig(file_name, dpi=fig.dpi)
  if show_graph:
    plt.show()
  plt.close(fig)
  return file_name


def print_paths(paths):
  path_str_len = 0
  cost_str_len = 0
  num_paths_str_len = len(str(len(paths)))
  for path in paths:
    path_str_len = max(path_str_len, len(str(path[0])))
    cost_str_len = max(cost_str_len, len(str(path[1])))

  for k, path in enumerate(paths):
    click.echo(f"path {k + 1:>{num_paths_str_len}}:"
               f" {str(path[0]):{path_str_len}}   "
               f"cost: {path[1]:>{cost_str_len}}")
  if paths:
    click.echo(f"total cost: {sum(path[1] for path in paths)}")
