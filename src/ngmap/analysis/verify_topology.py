"""
Topology Verification Functions
===============================

Verify n-Gmap invariants using the alpha matrices.

These functions are in analysis/ layer because they depend on operators.
They report; they never raise on a broken map.
"""

import numpy as np
from typing import Dict

from ..core import NGMap
from ..operators.involution_matrix import dart_index, build_alpha_matrix, alpha_trace
from ..spec.constants import SPECIAL_RANGE_GAP
from .cell_census import cell_counts, count_orbits_sparse


def is_closed(gmap: NGMap) -> bool:
    """True iff no dart is i-free for any i."""
    return all(gmap.alpha(dart, i) is not None
               for dart in gmap.darts()
               for i in range(gmap.dimension() + 1))


def _composition_is_involution(A_i: np.ndarray, A_j: np.ndarray) -> bool:
    # B[d, f] = 1 iff f = alpha_i(alpha_j(d)); (B²) must only hit the diagonal
    B = A_j @ A_i
    B2 = B @ B
    off_diag = B2 - np.diag(np.diag(B2))
    return not np.any(off_diag)


def verify_gmap(gmap: NGMap) -> Dict:
    """
    Verify the algebraic invariants of an n-Gmap.

    Args:
        gmap: the map to check

    Returns:
        dict with verification results:
            'dimension', 'n_darts', 'closed'
            'alphas': {i: {symmetric, no_fixed_points, at_most_one_partner,
                           membership (alpha_i's domain is every dart),
                           n_sewn, trace_identity_holds}}
            'gmap_condition': {(i, j): bool} for |i - j| >= 2
            'census_bfs', 'census_sparse': {i: n_i}
            'census_agrees': bool
            'is_valid': all of the above hold
    """
    n = gmap.dimension()
    index = dart_index(gmap)
    mats = [build_alpha_matrix(gmap, i, index) for i in range(n + 1)]
    darts = gmap.darts()

    alphas = {}
    for i, A in enumerate(mats):
        n_sewn = int(A.sum())
        alphas[i] = {
            'symmetric': bool(np.array_equal(A, A.T)),
            'no_fixed_points': bool(np.all(np.diag(A) == 0)),
            # rows: one image per dart; columns: one preimage per dart
            'at_most_one_partner': bool(np.all(A.sum(axis=1) <= 1) and np.all(A.sum(axis=0) <= 1)),
            'membership': gmap.domain(i) == darts,
            'n_sewn': n_sewn,
            'trace_identity_holds': alpha_trace(A) == n_sewn,
        }

    gmap_condition = {}
    for i in range(n + 1):
        for j in range(i + SPECIAL_RANGE_GAP, n + 1):
            gmap_condition[(i, j)] = _composition_is_involution(mats[i], mats[j])

    census_bfs = cell_counts(gmap)
    census_sparse = {i: count_orbits_sparse(gmap, gmap.excluded_range(i)) for i in range(n + 1)}
    census_agrees = census_bfs == census_sparse

    is_valid = (all(all(v for k, v in checks.items() if k != 'n_sewn') for checks in alphas.values())
                and all(gmap_condition.values())
                and census_agrees)

    return {
        'dimension': n,
        'n_darts': len(index),
        'closed': is_closed(gmap),
        'alphas': alphas,
        'gmap_condition': gmap_condition,
        'census_bfs': census_bfs,
        'census_sparse': census_sparse,
        'census_agrees': census_agrees,
        'is_valid': is_valid,
    }
