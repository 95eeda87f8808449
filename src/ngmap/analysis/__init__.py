"""
Analysis functions - depend on operators layer.

Separated from builders to maintain clean layering:
    builders → core → spec
    analysis → operators → core → spec

Includes:
- cell_census: i-cell enumeration, counts, Euler characteristic
- verify_topology: involution / gmap-condition / census checks
"""

from .cell_census import (
    iter_cells,
    count_cells,
    cell_counts,
    euler_characteristic,
    count_orbits_sparse,
)
from .verify_topology import verify_gmap, is_closed
