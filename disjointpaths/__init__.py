# __init__.py is part of DisjointPaths
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
"""Special project variables & API"""

from disjointpaths.api import disjoint_paths
from disjointpaths.core import bhandari, k_disjoint_paths
from disjointpaths.exceptions import (DisjointPathsError,
                                      EdgeFormatError,
                                      InsufficientPathsError,
                                      InvalidGraphError,
                                      NoPathError,
                                      ReconstructionError)
from disjointpaths.graph import Graph, random_graph
from disjointpaths.post_processing import print_paths, plot_paths


__name__ = 'disjointpaths'
__version__ = '0.1.0'
__author__ = 'Athanasios Mattas'
__author_email__ = 'thanasismatt@gmail.gr'
__description__ = "Minimum-cost link-disjoint paths with the Suurballe-Bhandari algorithm"
__license__ = 'GNU General Public License v3'
__copyright__ = 'Copyright 2020 Athanasios Mattas'
