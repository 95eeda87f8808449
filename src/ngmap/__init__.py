"""
NGMAP - Combinatorial n-dimensional generalized maps
====================================================

NO geometry. NO coordinates. NO rendering.

Structure:
    spec/        - Constants and error hierarchy
    structures/  - Partial involution, BFS traversal, attribute store
    core/        - Dart and the NGMap engine (sew / unsew / cells)
    builders/    - Edges, convex polygons, surfaces from face lists
    operators/   - Dense involution matrices (alpha_i)
    analysis/    - Cell census, Euler characteristic, topology checks

Every public NGMap operation leaves the map a valid n-Gmap:
each alpha_i is a partial involution without fixed point, and
i-sewing only ever pairs isomorphic orbits.
"""

from .spec import (
    GMapError,
    InvalidDimension,
    IllegalDimensionChange,
    NotIsolated,
    NotSewable,
    DuplicateAttribute,
)
from .core import Dart, NGMap
from .builders import Edge, add_edge, add_convex_polygon, build_surface_gmap

__version__ = "0.1.0"
