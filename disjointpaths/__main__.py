#!/usr/bin/env python3
#
# __main__.py is part of DisjointPaths
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
"""Solves the k link-disjoint paths problem from the command line."""

import logging

import click

from disjointpaths import core, graph, io, post_processing, utils
from disjointpaths.exceptions import DisjointPathsError, InsufficientPathsError


def _set_verbosity(verbose):
  if verbose >= 2:
    logging.basicConfig(
      level=logging.DEBUG if verbose >= 3 else logging.INFO,
      format="%(name)s::%(levelname)s:: %(message)s"
    )


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--path", type=click.Path(exists=True, dir_okay=False),
              default=None, show_default=True,
              help=("The file to read the graph from. If not provided, a"
                    " random graph of n nodes will be generated.\n"
                    "NetworkX formats: [.edgelist, .adjlist, .gexf, .gml]\n"
                    "Any other file is read as lines of"
                    " '<tail> <weight> <head>', skipping '//' comments."))
@click.option("--nodetype", default="str", show_default=True,
              type=click.Choice(["int", "float", "str"]),
              help="convert the node names to this type")
@click.option('-s', "--source", default=None, show_default=True,
              help="If a graph is not provided, the source defaults to node 0")
@click.option('-t', "--target", default=None, show_default=True,
              help=("If a graph is not provided, the target defaults to node"
                    " n - 1"))
@click.option('-k', 'K', type=click.IntRange(min=1), default=2,
              show_default=True, help="number of link-disjoint paths")
@click.option('-u', "--undirected", is_flag=True,
              help="Treat links as undirected, inserting both directions.")
@click.option('-n', type=click.IntRange(min=1), default=20, show_default=True,
              help="number of nodes (used when path is None)")
@click.option("--max-edge-weight", type=click.IntRange(min=1), default=100,
              show_default=True)
@click.option("--seed", "random_seed", type=click.INT,
              default=None, show_default=True,
              help="If provided, a fixed random graph will be generated.")
@click.option("--check", is_flag=True,
              help=("Verify that the paths are link-disjoint and cost as much"
                    " as the iterations."))
@click.option("--layout-seed", type=click.INT, default=1, show_default=True,
              help="Fixes the random initialization of the spring_layout.")
@click.option("--show-graph", is_flag=True, help="plots up to 8 paths")
@click.option("--save-graph", is_flag=True, help="format: png")
@click.option('-v', "--verbose", count=True,
              help="-v: print the paths, -vv: log the iterations, -vvv: debug")
def main(ctx,
         path,
         nodetype,
         source,
         target,
         K,
         undirected,
         n,
         max_edge_weight,
         random_seed,
         check,
         layout_seed,
         show_graph,
         save_graph,
         verbose):
  _set_verbosity(verbose)

  # 1. Preprocessing
  try:
    if path is None:
      decoder = None
      source = int(source) if source is not None else 0
      target = int(target) if target is not None else n - 1
      edges = graph.random_graph(n,
                                 max_edge_weight=max_edge_weight,
                                 directed=not undirected,
                                 random_seed=random_seed)
      g = graph.Graph(edges, n=n)
    else:
      if (source is None) or (target is None):
        raise click.UsageError("Both source and target should be defined via"
                               " the -s and -t options.")
      nodetype = utils.str_to_type(nodetype)
      g, encoder, decoder = io.read_graph(path,
                                          directed=not undirected,
                                          nodetype=nodetype)
      source = graph.encode_node(nodetype(source), encoder)
      target = graph.encode_node(nodetype(target), encoder)
  except (DisjointPathsError, ValueError) as e:
    raise click.ClickException(str(e))

  init_config = {
      "graph": g,
      "source": source,
      "sink": target
  }
  mode = {
      "check": check,
      "verbose": verbose
  }
  if ctx.invoked_subcommand is not None:
    ctx.ensure_object(dict)
    ctx.obj.update({"init_config": init_config, "K": K})
    return

  # 2. Paths generation
  solve = core.k_disjoint_paths
  if verbose >= 3:
    solve = utils.time_this(solve)
  try:
    k_paths = solve(K, mode, init_config)
  except InsufficientPathsError as e:
    paths = e.paths
    if decoder:
      paths = graph.decode_path_nodes(paths, decoder)
    if verbose and paths:
      post_processing.print_paths(paths)
    raise click.ClickException(str(e))
  except (DisjointPathsError, ValueError) as e:
    raise click.ClickException(str(e))

  if decoder:
    k_paths = graph.decode_path_nodes(k_paths, decoder)

  # 3. Post-processing
  if verbose:
    post_processing.print_paths(k_paths)
  if save_graph or show_graph:
    post_processing.plot_paths(paths_data=k_paths,
                               G=graph.graph_to_nx(g, decoder),
                               save_graph=save_graph,
                               show_graph=show_graph,
                               layout_seed=layout_seed)


@main.command()
@click.pass_context
@click.argument("outfile", type=click.Path(dir_okay=False, writable=True))
@click.option("--no-edge-cost", type=click.INT, default=999, show_default=True,
              help="The distance of the node pairs without an edge.")
def export_dat(ctx, outfile, no_edge_cost):
  """Writes the distance matrix, source, target and K to an OPL .dat file,
  for an LP solver.

  Args:
    ctx(click.core.Context) : has obj dict with the parameters of the group
    outfile (str)           : the .dat file
    no_edge_cost (int)      : the distance of the unconnected pairs
  """
  init_config = ctx.obj["init_config"]
  distance = io.distance_matrix(init_config["graph"], no_edge=no_edge_cost)
  io.write_opl_dat(outfile,
                   distance,
                   init_config["source"],
                   init_config["sink"],
                   ctx.obj["K"])
  if ctx.parent.params["verbose"]:
    click.echo(f"n: {len(distance)}   written to: {outfile}")


if __name__ == "__main__":
  main(obj={})
