"""
Cell Census
===========

Count i-cells of an n-Gmap two ways:

    1. BFS:    one NGMap.i_cell() walk per unvisited dart
    2. Sparse: connected components of sum_{j != i} A_j
               (scipy.sparse.csgraph)

Both must agree; verify_topology cross-checks them.

EULER CHARACTERISTIC:
    chi = sum_i (-1)^i n_i
    2-Gmap: chi = V - E + F
"""

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components
from typing import Dict, Iterable, Iterator, List

from ..core import Dart, NGMap
from ..operators.involution_matrix import dart_index, build_alpha_matrix


def iter_cells(gmap: NGMap, i: int) -> Iterator[List[Dart]]:
    """
    Yield each i-cell once, as a list of darts.

    Cells are discovered from darts in increasing id order, so the
    first dart of each cell is its smallest id.
    """
    seen = set()
    for dart in sorted(gmap.darts()):
        if dart in seen:
            continue
        cell = gmap.i_cell(dart, i)
        seen.update(cell)
        yield cell


def count_cells(gmap: NGMap, i: int) -> int:
    return sum(1 for _ in iter_cells(gmap, i))


def cell_counts(gmap: NGMap) -> Dict[int, int]:
    """{i: number of i-cells} for i in 0..n."""
    return {i: count_cells(gmap, i) for i in range(gmap.dimension() + 1)}


def euler_characteristic(gmap: NGMap) -> int:
    return sum((-1) ** i * n_i for i, n_i in cell_counts(gmap).items())


def count_orbits_sparse(gmap: NGMap, dimensions: Iterable[int]) -> int:
    """
    Number of orbits under the alphas in dimensions, via connected components.

    Args:
        gmap: the map
        dimensions: alpha indices spanning the orbits

    Returns:
        number of connected components of the graph sum_j A_j
        (each dart is its own orbit when dimensions is empty)
    """
    index = dart_index(gmap)
    D = len(index)
    if D == 0:
        return 0

    M = np.zeros((D, D))
    for j in dimensions:
        M += build_alpha_matrix(gmap, j, index)

    n_components, _ = connected_components(csr_matrix(M), directed=False)
    return int(n_components)
