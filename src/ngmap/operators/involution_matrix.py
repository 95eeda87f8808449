"""
Involution Matrices
===================

Pure combinatorics - a matrix view of the alphas.

DEFINITION:
    Index darts 0..D-1 by increasing id. For each dimension i:

        A_i[a, b] = 1 if alpha_i(a) = b
        A_i[a, b] = 0 otherwise

PROPERTIES (partial involution without fixed point):
    1. A_i = A_iᵀ              (symmetry)
    2. diag(A_i) = 0           (no fixed point)
    3. row sums in {0, 1}      (at most one partner)
    4. A_i² = diag(row sums)   (alpha_i alpha_i = identity where defined)

TRACE IDENTITY:
    Tr(A_i²) = number of i-sewn darts
    For a closed map Tr(A_i²) = D for every i.

gmap CONDITION (|i - j| >= 2):
    alpha_i alpha_j is an involution where defined,
    i.e. (A_i A_j)² restricted to darts sewn at both i and j is the identity.
"""

import numpy as np
from typing import Dict, List, Optional

from ..core import Dart, NGMap


def dart_index(gmap: NGMap) -> Dict[Dart, int]:
    """Dense index: darts sorted by id -> 0..D-1."""
    return {dart: idx for idx, dart in enumerate(sorted(gmap.darts()))}


def build_alpha_matrix(gmap: NGMap, i: int,
                       index: Optional[Dict[Dart, int]] = None) -> np.ndarray:
    """
    Build A_i, the (D, D) matrix of alpha_i.

    Args:
        gmap: the map
        i: dimension in [0, gmap.dimension()]
        index: dart -> row index (default: dart_index(gmap))

    Returns:
        A: (D, D) dense 0/1 matrix

    FAIL-FAST:
        Raises ValueError if alpha_i maps a dart outside the index.
    """
    if index is None:
        index = dart_index(gmap)

    D = len(index)
    A = np.zeros((D, D))

    for dart, row in index.items():
        partner = gmap.alpha(dart, i)
        if partner is None:
            continue
        if partner not in index:
            raise ValueError(f"alpha_{i}({dart}) = {partner} is not an indexed dart")
        A[row, index[partner]] = 1

    return A


def build_alpha_matrices(gmap: NGMap) -> List[np.ndarray]:
    """[A_0, ..., A_n] over a shared dart index."""
    index = dart_index(gmap)
    return [build_alpha_matrix(gmap, i, index) for i in range(gmap.dimension() + 1)]


def alpha_trace(A: np.ndarray) -> int:
    """Tr(A²): number of sewn darts in this dimension."""
    return int(round(np.trace(A @ A)))
