# utils.py is part of DisjointPaths
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
"""Houses some utility functions."""

from datetime import timedelta
from functools import wraps
from itertools import combinations
from timeit import default_timer as timer

import click


def time_this(f):
    """function timer decorator

    - Uses wraps to preserve the metadata of the decorated function
      (__name__ and __doc__)
    - echoes the wall time to stderr

    usage:
      @time_this
      def a_func(): pass

    Args:
        f(funtion)      : the function to be decorated

    Returns:
        wrap (callable) : returns the result of the decorated function
    """
    assert callable(f)

    @wraps(f)
    def wrap(*args, **kwargs):
      start = timer()
      result = f(*args, **kwargs)
      end = timer()
      duration = timedelta(seconds=round(end - start, 3))
      click.echo(f"{f.__name__:-<30}{duration}"[:45], err=True)
      return result
    return wrap


def path_links(path):
  """[(tail, head),] of the consecutive nodes of the path."""
  return list(zip(path, path[1:]))


def are_link_disjoint(paths):
  """Checks that no (tail, head) link is shared among the paths."""
  for p1, p2 in combinations(paths, 2):
    if set(path_links(p1)) & set(path_links(p2)):
      return False
  return True


def str_to_type(type_str):
  types = {
    "int": int,
    "float": float,
    "str": str
  }
  try:
    return types[type_str]
  except KeyError:
    return None
