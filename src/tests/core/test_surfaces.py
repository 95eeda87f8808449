"""
Surface Builders, Operators and Analysis
========================================

Builds 2-Gmaps from face tables and checks them against known topology:
- Census (V, E, F) and Euler characteristic
- Trace identity Tr(A_i²) = number of i-sewn darts
- BFS vs sparse connected-components cell counts
- gmap condition alpha_i alpha_j involution for |i - j| >= 2

Run: python -m pytest tests/core/test_surfaces.py -v
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import numpy as np
import pytest

from ngmap import NGMap
from ngmap.builders import (
    add_edge,
    add_convex_polygon,
    build_surface_gmap,
    tetrahedron_faces,
    cube_faces,
    octahedron_faces,
)
from ngmap.operators import dart_index, build_alpha_matrix, build_alpha_matrices, alpha_trace
from ngmap.analysis import (
    iter_cells,
    count_cells,
    cell_counts,
    euler_characteristic,
    count_orbits_sparse,
    verify_gmap,
    is_closed,
)
from ngmap.spec import VERTEX, EDGE, FACE


# ═══════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════

@pytest.fixture(scope="module")
def cube():
    return build_surface_gmap(cube_faces())


@pytest.fixture(scope="module")
def cube_report(cube):
    gmap, _ = cube
    return verify_gmap(gmap)


# =============================================================================
# TEST A: Closed polyhedra
# =============================================================================

@pytest.mark.parametrize("faces_fn, expected", [
    (tetrahedron_faces, {VERTEX: 4, EDGE: 6, FACE: 4}),
    (cube_faces, {VERTEX: 8, EDGE: 12, FACE: 6}),
    (octahedron_faces, {VERTEX: 6, EDGE: 12, FACE: 8}),
])
def test_polyhedron_census(faces_fn, expected):
    faces = faces_fn()
    gmap, _ = build_surface_gmap(faces)

    assert len(gmap) == 2 * sum(len(f) for f in faces)
    assert cell_counts(gmap) == expected
    assert euler_characteristic(gmap) == 2
    assert is_closed(gmap)
    print(f"✓ {faces_fn.__name__}: census {expected}, χ = 2")


def test_cube_dart_count(cube):
    gmap, corners = cube

    assert len(gmap) == 48
    assert len(corners) == 24  # 6 faces × 4 corners


def test_cube_vertex_has_three_faces(cube):
    """Each cube corner is shared by 3 faces: 2 darts per face."""
    gmap, corners = cube

    vertex = gmap.i_cell(corners[(0, 0)], VERTEX)
    assert len(vertex) == 6
    faces_at_vertex = {frozenset(gmap.i_cell(d, FACE)) for d in vertex}
    assert len(faces_at_vertex) == 3


def test_cube_corners_share_vertex(cube):
    """Corners of different faces at the same vertex index lie in one 0-cell."""
    gmap, corners = cube
    faces = cube_faces()

    for v in range(8):
        darts = [corners[(f_idx, v)] for f_idx, face in enumerate(faces) if v in face]
        cells = {frozenset(gmap.i_cell(d, VERTEX)) for d in darts}
        assert len(darts) == 3
        assert len(cells) == 1, f"vertex {v} split into {len(cells)} 0-cells"


def test_cube_report_valid(cube_report):
    assert cube_report['is_valid']
    assert cube_report['closed']
    assert cube_report['dimension'] == 2
    assert cube_report['n_darts'] == 48
    assert cube_report['gmap_condition'] == {(0, 2): True}
    assert cube_report['census_agrees']


def test_cube_trace_identity(cube):
    """Closed map: every dart sewn in every dimension → Tr(A_i²) = D."""
    gmap, _ = cube
    mats = build_alpha_matrices(gmap)

    for i, A in enumerate(mats):
        assert A.shape == (48, 48)
        assert np.array_equal(A, A.T), f"A_{i} not symmetric"
        assert np.all(np.diag(A) == 0), f"A_{i} has fixed points"
        assert alpha_trace(A) == 48
        assert np.array_equal(A @ A, np.eye(48))


# =============================================================================
# TEST B: Open surfaces
# =============================================================================

def test_single_square_open():
    gmap, corners = build_surface_gmap([[0, 1, 2, 3]])

    assert len(gmap) == 8
    assert cell_counts(gmap) == {VERTEX: 4, EDGE: 4, FACE: 1}
    assert euler_characteristic(gmap) == 1
    assert not is_closed(gmap)
    assert all(gmap.is_i_free(d, 2) for d in gmap.darts())
    assert verify_gmap(gmap)['is_valid']


def test_two_squares_sharing_edge():
    """Disk of two quads glued along (0, 1): V=6, E=7, F=2, χ=1."""
    gmap, corners = build_surface_gmap([[0, 1, 2, 3], [1, 0, 4, 5]])

    assert len(gmap) == 16
    assert cell_counts(gmap) == {VERTEX: 6, EDGE: 7, FACE: 2}
    assert euler_characteristic(gmap) == 1

    shared = gmap.i_cell(corners[(0, 0)], EDGE)
    assert len(shared) == 4
    assert gmap.alpha(corners[(0, 0)], 2) is not None
    assert len(gmap.i_cell(corners[(0, 0)], VERTEX)) == 4
    assert verify_gmap(gmap)['is_valid']


def test_build_into_existing_3gmap():
    gmap = NGMap(3)
    gmap, _ = build_surface_gmap(tetrahedron_faces(), gmap)

    assert gmap.dimension() == 3
    assert len(gmap) == 24
    assert all(gmap.is_i_free(d, 3) for d in gmap.darts())
    report = verify_gmap(gmap)
    assert report['is_valid']
    assert set(report['gmap_condition']) == {(0, 2), (0, 3), (1, 3)}


# =============================================================================
# TEST C: Builder guards
# =============================================================================

def test_non_manifold_edge_raises_before_mutation():
    gmap = NGMap(2)

    with pytest.raises(ValueError, match="non-manifold"):
        build_surface_gmap([[0, 1, 2], [1, 0, 3], [0, 1, 4]], gmap)
    assert len(gmap) == 0


def test_short_face_raises():
    with pytest.raises(ValueError, match="at least 3 vertices"):
        build_surface_gmap([[0, 1]])


def test_repeated_vertex_raises():
    with pytest.raises(ValueError, match="repeats a vertex"):
        build_surface_gmap([[0, 1, 2, 1]])


def test_low_dimension_map_raises():
    with pytest.raises(ValueError, match=r"dimension >= 2"):
        build_surface_gmap(cube_faces(), NGMap(1))


# =============================================================================
# TEST D: Operators and census details
# =============================================================================

def test_dart_index_sorted_by_id():
    gmap = NGMap(2)
    add_convex_polygon(gmap, 3)
    index = dart_index(gmap)

    assert sorted(index.values()) == list(range(6))
    assert [d.id for d in sorted(index, key=index.get)] == sorted(d.id for d in gmap.darts())


def test_polygon_alpha_traces():
    gmap = NGMap(2)
    add_convex_polygon(gmap, 4)
    index = dart_index(gmap)

    assert alpha_trace(build_alpha_matrix(gmap, 0, index)) == 8
    assert alpha_trace(build_alpha_matrix(gmap, 1, index)) == 8
    assert alpha_trace(build_alpha_matrix(gmap, 2, index)) == 0


def test_alpha_matrix_rejects_partial_index():
    gmap = NGMap(1)
    add_convex_polygon(gmap, 2)
    entry = min(gmap.darts())

    with pytest.raises(ValueError, match="not an indexed dart"):
        build_alpha_matrix(gmap, 0, {entry: 0})


def test_sparse_and_bfs_counts_agree():
    gmap, _ = build_surface_gmap(octahedron_faces())
    add_convex_polygon(gmap, 5)

    for i in range(3):
        assert count_orbits_sparse(gmap, gmap.excluded_range(i)) == count_cells(gmap, i)
    assert count_orbits_sparse(gmap, []) == len(gmap)


def test_iter_cells_partitions_darts():
    gmap, _ = build_surface_gmap(cube_faces())

    for i in range(3):
        cells = list(iter_cells(gmap, i))
        flat = [d for cell in cells for d in cell]
        assert len(flat) == len(set(flat)) == len(gmap)
        assert all(cell[0] == min(cell) for cell in cells)


def test_empty_map_census():
    gmap = NGMap(2)

    assert cell_counts(gmap) == {0: 0, 1: 0, 2: 0}
    assert count_orbits_sparse(gmap, [0, 1]) == 0
    assert verify_gmap(gmap)['is_valid']


def test_face_attributes_on_cube():
    """One attribute per face; every dart of a face sees it."""
    fresh, _ = build_surface_gmap(cube_faces())

    for k, cell in enumerate(iter_cells(fresh, FACE)):
        fresh.put_attribute(cell[0], FACE, f"face-{k}")

    labels = {fresh.get_attribute(d, FACE) for d in fresh.darts()}
    assert labels == {f"face-{k}" for k in range(6)}


# =============================================================================
# TEST E: Broken maps
# =============================================================================
# The public API cannot produce these; corrupt the alphas directly.

def _three_darts():
    gmap = NGMap(1)
    return gmap, [gmap.add_isolated_dart() for _ in range(3)]


def test_one_way_entry_reported():
    gmap, (a, b, c) = _three_darts()
    gmap._alphas[0]._partner[a] = c

    checks = verify_gmap(gmap)['alphas'][0]
    assert not checks['symmetric']
    assert not checks['trace_identity_holds']
    assert not verify_gmap(gmap)['is_valid']


def test_shared_partner_reported():
    gmap, (a, b, c) = _three_darts()
    gmap._alphas[0]._partner[a] = c
    gmap._alphas[0]._partner[b] = c

    report = verify_gmap(gmap)
    assert not report['alphas'][0]['at_most_one_partner']
    assert not report['is_valid']


def test_fixed_point_reported():
    gmap, (a, b, c) = _three_darts()
    gmap._alphas[0]._partner[c] = c

    report = verify_gmap(gmap)
    assert not report['alphas'][0]['no_fixed_points']
    assert report['alphas'][0]['symmetric']
    assert not report['is_valid']


def test_missing_domain_entry_reported():
    gmap = NGMap(2)
    edge = add_edge(gmap)
    gmap._alphas[1].remove(edge.first)

    report = verify_gmap(gmap)
    assert not report['alphas'][1]['membership']
    assert report['alphas'][0]['membership']
    assert not report['is_valid']


def test_gmap_condition_violation_reported():
    """alpha_0 alpha_2 of order 3 on a 6-cycle."""
    gmap = NGMap(2)
    a, b, c, d, e, f = (gmap.add_isolated_dart() for _ in range(6))
    for x, y in [(a, b), (c, d), (e, f)]:
        gmap._alphas[0].pair(x, y)
    for x, y in [(b, c), (d, e), (f, a)]:
        gmap._alphas[2].pair(x, y)

    report = verify_gmap(gmap)
    assert report['gmap_condition'] == {(0, 2): False}
    assert all(checks['symmetric'] for checks in report['alphas'].values())
    assert not report['is_valid']


def test_census_disagreement_reported():
    """A one-way entry splits BFS cells but not undirected components."""
    gmap, (a, b, c) = _three_darts()
    gmap._alphas[0]._partner[b] = a

    report = verify_gmap(gmap)
    assert report['census_bfs'][1] == 3
    assert report['census_sparse'][1] == 2
    assert not report['census_agrees']
    assert not report['is_valid']
    print("✓ census cross-check catches a one-way alpha_0 entry")
