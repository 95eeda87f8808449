"""
Edge and polygon builders.

Pure consumers of the NGMap contract: every check is done by sew().
"""

from dataclasses import dataclass

from ..core import Dart, NGMap
from ..spec.constants import MIN_POLYGON_EDGES
from ..spec.errors import InvalidDimension


@dataclass(frozen=True)
class Edge:
    """Two darts 0-sewn together."""
    first: Dart
    second: Dart


def add_edge(gmap: NGMap) -> Edge:
    """Add an isolated edge: two fresh darts sewn at dimension 0."""
    first = gmap.add_isolated_dart()
    second = gmap.add_isolated_dart()
    gmap.sew(first, second, 0)
    return Edge(first, second)


def add_convex_polygon(gmap: NGMap, edge_count: int) -> Dart:
    """
    Add a closed polygon of edge_count edges.

    Each edge's second dart is 1-sewn to the next edge's first dart,
    and the last edge closes back onto the first.

    Args:
        gmap: map of dimension >= 1
        edge_count: number of edges (1 gives a monogon)

    Returns:
        the first dart of the first edge (entry dart)

    Dart count: 2 * edge_count.
    """
    if edge_count < MIN_POLYGON_EDGES:
        raise ValueError(f"edge_count must be >= {MIN_POLYGON_EDGES}, got {edge_count}")
    if gmap.dimension() < 1:
        raise InvalidDimension(f"Polygons need dimension >= 1, map has {gmap.dimension()}")

    source = add_edge(gmap)
    curr = source
    for _ in range(edge_count - 1):
        nxt = add_edge(gmap)
        gmap.sew(curr.second, nxt.first, 1)
        curr = nxt
    gmap.sew(curr.second, source.first, 1)
    return source.first
