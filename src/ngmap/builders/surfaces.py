"""
Surface 2-Gmaps from Face Cycles
================================

Build a 2-Gmap from polygonal faces given as vertex-index cycles, the
same F format the mesh dicts use (e.g. [[0, 1, 3, 2], ...]).

CONSTRUCTION:
    face side (v_k, v_k+1)   -> one edge: 2 darts, 0-sewn
    consecutive sides        -> 1-sewn at the shared corner
    side shared by 2 faces   -> 2-sewn, dart at u <-> dart at u

    Sides used by a single face stay 2-free (border).

DART COUNT:
    D = 2 * sum(len(face) for face in faces)

POLYHEDRA INCLUDED (face tables only, no coordinates):
    - Tetrahedron (V=4, E=6, F=4)
    - Cube (V=8, E=12, F=6)
    - Octahedron (V=6, E=12, F=8)
    All three have chi = V - E + F = 2.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from ..core import Dart, NGMap
from ..spec.constants import MIN_FACE_VERTICES, MAX_FACES_PER_EDGE, SURFACE_DIMENSION
from .edges import add_edge


def _side_usage(faces: Sequence[Sequence[int]]) -> Dict[Tuple[int, int], List[Tuple[int, int]]]:
    """
    Validate face cycles and map each undirected side to its (face_idx, k) uses.

    FAIL-FAST:
        Raises ValueError on short faces, repeated vertices, or sides
        shared by more than MAX_FACES_PER_EDGE faces.
    """
    usage = defaultdict(list)

    for f_idx, face in enumerate(faces):
        n = len(face)
        if n < MIN_FACE_VERTICES:
            raise ValueError(f"Face {f_idx} must have at least {MIN_FACE_VERTICES} vertices, got {n}")
        if len(set(face)) != n:
            raise ValueError(f"Face {f_idx} repeats a vertex: {list(face)}")

        for k in range(n):
            v1, v2 = face[k], face[(k + 1) % n]
            usage[(min(v1, v2), max(v1, v2))].append((f_idx, k))

    for key, sides in usage.items():
        if len(sides) > MAX_FACES_PER_EDGE:
            raise ValueError(
                f"Edge {key} is shared by {len(sides)} faces; a 2-Gmap allows at most "
                f"{MAX_FACES_PER_EDGE} (non-manifold edge)"
            )

    return dict(usage)


def build_surface_gmap(faces: Sequence[Sequence[int]],
                       gmap: Optional[NGMap] = None) -> Tuple[NGMap, Dict[Tuple[int, int], Dart]]:
    """
    Build (or extend) a 2-Gmap from face cycles.

    Args:
        faces: list of faces, each a cycle of vertex indices
        gmap: existing map of dimension >= 2 to add to (default: fresh 2-Gmap)

    Returns:
        gmap: the map holding the surface
        corners: dict (face_idx, vertex) -> dart at that corner, on the
                 side leaving the vertex

    Faces are validated before any dart is created.
    """
    if gmap is None:
        gmap = NGMap(SURFACE_DIMENSION)
    elif gmap.dimension() < SURFACE_DIMENSION:
        raise ValueError(f"Surfaces need dimension >= {SURFACE_DIMENSION}, map has {gmap.dimension()}")

    usage = _side_usage(faces)

    corners = {}
    side_darts = {}
    for f_idx, face in enumerate(faces):
        n = len(face)
        edges = [add_edge(gmap) for _ in range(n)]
        for k in range(n):
            side_darts[(f_idx, k)] = edges[k]
            corners[(f_idx, face[k])] = edges[k].first
        for k in range(n):
            gmap.sew(edges[k].second, edges[(k + 1) % n].first, 1)

    def dart_at(f_idx, k, vertex):
        edge = side_darts[(f_idx, k)]
        return edge.first if faces[f_idx][k] == vertex else edge.second

    for (u, _), sides in usage.items():
        if len(sides) == 2:
            (fa, ka), (fb, kb) = sides
            gmap.sew(dart_at(fa, ka, u), dart_at(fb, kb, u), 2)

    return gmap, corners


def tetrahedron_faces() -> List[List[int]]:
    """
    Tetrahedron face cycles.

    TOPOLOGY:
        V = 4, E = 6, F = 4 (triangles)
        chi = 4 - 6 + 4 = 2
    """
    return [[0, 1, 2], [0, 3, 1], [1, 3, 2], [0, 2, 3]]


def cube_faces() -> List[List[int]]:
    """
    Cube face cycles.

    Vertex index = 4x + 2y + z for corners (x, y, z) in {0, 1}^3.

    TOPOLOGY:
        V = 8, E = 12, F = 6 (squares)
        chi = 8 - 12 + 6 = 2
    """
    return [
        [0, 1, 3, 2],  # x = 0
        [4, 6, 7, 5],  # x = 1
        [0, 4, 5, 1],  # y = 0
        [2, 3, 7, 6],  # y = 1
        [0, 2, 6, 4],  # z = 0
        [1, 5, 7, 3],  # z = 1
    ]


def octahedron_faces() -> List[List[int]]:
    """
    Octahedron face cycles.

    Vertices: 0 = +x, 1 = -x, 2 = +y, 3 = -y, 4 = +z, 5 = -z.

    TOPOLOGY:
        V = 6, E = 12, F = 8 (triangles)
        chi = 6 - 12 + 8 = 2
    """
    return [
        [0, 2, 4], [2, 1, 4], [1, 3, 4], [3, 0, 4],
        [2, 0, 5], [1, 2, 5], [3, 1, 5], [0, 3, 5],
    ]
