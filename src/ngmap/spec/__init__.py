"""Constants and error hierarchy - imported by every other layer."""

from .constants import (
    FIRST_DART_ID,
    SPECIAL_RANGE_GAP,
    VERTEX,
    EDGE,
    FACE,
    VOLUME,
    CELL_NAMES,
    MIN_POLYGON_EDGES,
    MIN_FACE_VERTICES,
    MAX_FACES_PER_EDGE,
    SURFACE_DIMENSION,
)
from .errors import (
    GMapError,
    InvalidDimension,
    IllegalDimensionChange,
    NotIsolated,
    NotSewable,
    DuplicateAttribute,
)
