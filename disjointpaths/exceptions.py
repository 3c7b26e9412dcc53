# exceptions.py is part of DisjointPaths
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
"""Exception types raised across disjointpaths."""


class DisjointPathsError(Exception):
  """Base class for all package-specific errors."""


class InvalidGraphError(DisjointPathsError, ValueError):
  """Raised upon graph construction, for malformed edges."""


class EdgeFormatError(InvalidGraphError):
  """Raised when an edge-file line cannot be parsed."""

  def __init__(self, msg, file=None, line_number=None):
    if file is not None:
      msg = f"{file}:{line_number}: {msg}"
    super().__init__(msg)
    self.file = file
    self.line_number = line_number


class NoPathError(DisjointPathsError):
  """Raised when the sink cannot be reached from the source."""


class InsufficientPathsError(NoPathError):
  """Raised when fewer than K link-disjoint paths exist.

  Args:
    paths (list) : the [(path, path_cost),] found before the failing iteration
    K (int)      : the number of paths that was requested
  """

  def __init__(self, paths, K):
    super().__init__(f"Only {len(paths)} link-disjoint paths exist, but {K}"
                     " were requested.")
    self.paths = paths
    self.K = K


class ReconstructionError(DisjointPathsError, RuntimeError):
  """Raised when the uncrossed links do not decompose into source-sink paths.
  """


__all__ = [
    "DisjointPathsError",
    "InvalidGraphError",
    "EdgeFormatError",
    "NoPathError",
    "InsufficientPathsError",
    "ReconstructionError",
]
