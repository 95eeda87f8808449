"""
Builders - compose NGMap operations into shapes, no invariant logic of their own.

EXPORTS:
- Edges and polygons: Edge, add_edge, add_convex_polygon
- Surfaces from face cycles: build_surface_gmap
- Polyhedra (face tables only): tetrahedron_faces, cube_faces, octahedron_faces
"""

from .edges import Edge, add_edge, add_convex_polygon
from .surfaces import build_surface_gmap, tetrahedron_faces, cube_faces, octahedron_faces
