"""
n-Dimensional Generalized Map (n-Gmap)
======================================

Pure combinatorics - NO coordinates, NO geometry.

DEFINITIONS:
    Dart:    atomic element, identified by an integer id
    alpha_i: partial involution without fixed point, one per i in [0, n]
    Orbit:   darts reachable from d through a chosen subset of alphas
    i-cell:  orbit of d under every alpha except alpha_i
             (2-Gmap: 0-cell = vertex, 1-cell = edge, 2-cell = face)

i-SEWING:
    Two darts d, d' are i-sewable iff
        1. d != d'
        2. d and d' are both i-free
        3. the orbits of d and d' under the special range for i
               S(i) = {j : j <= i - 2  or  j >= i + 2}
           are isomorphic (lockstep BFS) and not equal as sets.

    Degenerate cases skip condition 3 (S(i) is empty):
        n <= 1
        n == 2 and i == 1

    Sewing pairs every corresponding dart of the two orbits in alpha_i,
    which keeps alpha_i alpha_j an involution for |i - j| >= 2.

INVARIANTS (hold after every public call):
    1. every alpha_i is symmetric and fixed-point-free
    2. every dart is in the domain of every alpha_i
    3. dimension() >= 0; the top alpha pairs nothing when it is dropped
    4. darts are only paired at i if they were i-sewable
    5. at most one attribute value per i-cell

FAIL-FAST:
    All preconditions are checked before any mutation. A rejected call
    leaves the alphas and the attribute store untouched.

REFERENCE: Lienhardt, "N-dimensional generalized combinatorial maps and
cellular quasi-manifolds" (1994)
"""

import numbers
import warnings
from dataclasses import dataclass
from itertools import zip_longest
from typing import Callable, FrozenSet, Generic, Iterable, Iterator, List, Optional, Set, Tuple, TypeVar

from ..spec.constants import FIRST_DART_ID, SPECIAL_RANGE_GAP
from ..spec.errors import (
    InvalidDimension,
    IllegalDimensionChange,
    NotIsolated,
    NotSewable,
    DuplicateAttribute,
)
from ..structures import Involution, AttributeStore, breadth_first

A = TypeVar("A")


@dataclass(frozen=True, order=True)
class Dart:
    """Opaque dart identity. Equality, hash and order by id."""
    id: int

    def __repr__(self):
        return f"Dart({self.id})"


class NGMap(Generic[A]):
    """
    n-Gmap over darts, with attributes attached to i-cells.

    Args:
        n: initial dimension (n + 1 alphas are created)

    The attribute payload type A is unconstrained; None means "no value".
    """

    def __init__(self, n: int):
        if not _is_index(n) or n < 0:
            raise InvalidDimension(f"Dimension must be an integer >= 0, got {n!r}")

        self._alphas: List[Involution[Dart]] = [Involution() for _ in range(int(n) + 1)]
        self._attributes: AttributeStore[A] = AttributeStore()
        self._next_id = FIRST_DART_ID

    def __repr__(self):
        return f"NGMap(dimension={self.dimension()}, darts={len(self)})"

    def __len__(self):
        return len(self.darts())

    def __contains__(self, dart):
        return self.contains_dart(dart)

    # ============ Dimension management ===========

    def dimension(self) -> int:
        return len(self._alphas) - 1

    def increase_dimension(self) -> int:
        """Append alpha_{n+1}, with every existing dart entered free. Returns the new dimension."""
        alpha = Involution()
        for dart in self.darts():
            alpha.insert_unpaired(dart)
        self._alphas.append(alpha)
        return self.dimension()

    def decrease_dimension(self) -> int:
        """
        Drop the top alpha. Returns the new dimension.

        Rejected if the map is 0-dimensional or if any dart is still
        sewn in the top alpha. Attributes attached to the dropped
        dimension go with it.
        """
        top = self.dimension()
        if top == 0:
            raise IllegalDimensionChange("Can't decrease dimension below 0")
        n_paired = self._alphas[top].paired_count()
        if n_paired > 0:
            raise IllegalDimensionChange(
                f"Can't drop alpha_{top}: {n_paired} darts are still {top}-sewn"
            )

        self._alphas.pop()
        dropped = self._attributes.discard_where(lambda key: key[1] == top)
        if dropped:
            warnings.warn(
                f"decrease_dimension dropped {len(dropped)} attribute(s) attached to {top}-cells",
                UserWarning,
            )
        return self.dimension()

    def _check_dimension(self, i) -> None:
        if not _is_index(i) or not 0 <= i <= self.dimension():
            raise InvalidDimension(f"Dimension index must satisfy 0 <= i <= {self.dimension()}, got {i!r}")

    # ============ Dart lifecycle ===========

    def add_isolated_dart(self) -> Dart:
        """Create a fresh dart, free in every alpha."""
        dart = Dart(self._next_id)
        self._next_id += 1
        for alpha in self._alphas:
            alpha.insert_unpaired(dart)
        return dart

    def remove_isolated_dart(self, dart: Dart) -> None:
        """
        Remove a dart that is free in every alpha.

        Attribute entries keyed to the dart are purged as well. A dart
        unknown to the map is isolated by definition; removing it is a no-op.
        """
        if not self.is_isolated(dart):
            raise NotIsolated(f"{dart} is not isolated")

        for alpha in self._alphas:
            alpha.remove(dart)

        dropped = self._attributes.discard_where(lambda key: key[0] == dart)
        if dropped:
            warnings.warn(
                f"Removing {dart} dropped {len(dropped)} attribute(s) it carried",
                UserWarning,
            )

    def contains_dart(self, dart: Dart) -> bool:
        return any(alpha.contains(dart) for alpha in self._alphas)

    def darts(self) -> Set[Dart]:
        """The set of darts present in this map."""
        result = set()
        for alpha in self._alphas:
            result.update(alpha.domain())
        return result

    def domain(self, i: int) -> FrozenSet[Dart]:
        """Darts entered in alpha_i, paired or free. Equals darts() on a consistent map."""
        self._check_dimension(i)
        return self._alphas[i].domain()

    def alpha(self, dart: Dart, i: int) -> Optional[Dart]:
        """alpha_i(dart), or None if the dart is i-free."""
        self._check_dimension(i)
        return self._alphas[i].lookup(dart)

    def is_i_free(self, dart: Dart, i: int) -> bool:
        """A dart absent from alpha_i counts as i-free."""
        self._check_dimension(i)
        return not self._alphas[i].is_paired(dart)

    def is_isolated(self, dart: Dart) -> bool:
        return all(not alpha.is_paired(dart) for alpha in self._alphas)

    # ============ Orbits ===========

    def _dart_neighbors(self, dimensions: List[int]) -> Callable[[Dart], List[Dart]]:
        alphas = [self._alphas[j] for j in dimensions]

        def neighbors(dart):
            images = (alpha.lookup(dart) for alpha in alphas)
            return [image for image in images if image is not None]

        return neighbors

    def orbit(self, dart: Dart, dimensions: Iterable[int]) -> Iterator[Dart]:
        """
        Lazy BFS over the orbit of dart under the alphas in dimensions.

        Dimensions are validated eagerly; the returned generator is fresh
        on every call.
        """
        dimensions = list(dimensions)
        for j in dimensions:
            self._check_dimension(j)
        return breadth_first(dart, self._dart_neighbors(dimensions))

    def special_range(self, i: int) -> List[int]:
        """Dimensions j with |i - j| >= 2: the alphas that constrain i-sewing."""
        self._check_dimension(i)
        return [j for j in range(self.dimension() + 1)
                if j <= i - SPECIAL_RANGE_GAP or i + SPECIAL_RANGE_GAP <= j]

    def excluded_range(self, i: int) -> List[int]:
        """Every dimension except i: the alphas spanning an i-cell."""
        self._check_dimension(i)
        return [j for j in range(self.dimension() + 1) if j != i]

    # ============ Sewing ===========

    def _is_degenerate(self, i: int) -> bool:
        # special_range(i) is empty: no orbit to keep consistent
        n = self.dimension()
        return n <= 1 or (n == 2 and i == 1)

    def _free_and_distinct(self, left: Dart, right: Dart, i: int) -> bool:
        return (left != right
                and self.contains_dart(left) and self.contains_dart(right)
                and not self._alphas[i].is_paired(left)
                and not self._alphas[i].is_paired(right))

    def _orbit_correspondence(self, left: Dart, right: Dart, i: int) -> Optional[List[Tuple[Dart, Dart]]]:
        """
        Walk both special-range orbits in lockstep and build iso: left -> right.

        Returns the list of (left, right) pairs to sew at i, or None if
        the orbits are not isomorphic, have different sizes, are the same
        orbit, or contain a dart already i-sewn.

        The k-th BFS dart of one orbit is matched with the k-th of the
        other. For each constraining alpha, the images must be defined on
        both sides or on neither, and an image already matched must map
        to the counterpart's image.
        """
        dimensions = self.special_range(i)
        alphas = [self._alphas[j] for j in dimensions]
        alpha_i = self._alphas[i]

        iso = {}
        pairs = []
        for left_curr, right_curr in zip_longest(self.orbit(left, dimensions),
                                                 self.orbit(right, dimensions)):
            if left_curr is None or right_curr is None:
                return None  # orbit sizes differ
            if alpha_i.is_paired(left_curr) or alpha_i.is_paired(right_curr):
                return None

            iso[left_curr] = right_curr
            pairs.append((left_curr, right_curr))

            for alpha in alphas:
                left_image = alpha.lookup(left_curr)
                right_image = alpha.lookup(right_curr)
                if (left_image is None) != (right_image is None):
                    return None
                if left_image in iso and iso[left_image] != right_image:
                    return None

        # Orbits are equivalence classes: equal as sets or disjoint
        if set(iso) == set(iso.values()):
            return None
        return pairs

    def is_sewable(self, left: Dart, right: Dart, i: int) -> bool:
        """
        True iff left and right can be i-sewn.

        Both darts must belong to the map, differ, and be i-free; in the
        general case their special-range orbits must also correspond.
        """
        self._check_dimension(i)
        if not self._free_and_distinct(left, right, i):
            return False
        if self._is_degenerate(i):
            return True
        return self._orbit_correspondence(left, right, i) is not None

    def sew(self, left: Dart, right: Dart, i: int) -> None:
        """
        i-sew left and right.

        Degenerate case: pair the two darts in alpha_i.
        General case: pair every corresponding dart of their
        special-range orbits, validated and collected in one walk.

        Raises NotSewable (nothing mutated) if is_sewable() is False.
        Raises DuplicateAttribute (nothing mutated) if the sew would merge
        two j-cells (j != i) that each carry a j-attribute.
        """
        self._check_dimension(i)
        if not self._free_and_distinct(left, right, i):
            raise NotSewable(f"{left} and {right} are not {i}-sewable (equal, unknown, or not {i}-free)")

        if self._is_degenerate(i):
            pairs = [(left, right)]
        else:
            pairs = self._orbit_correspondence(left, right, i)
            if pairs is None:
                raise NotSewable(
                    f"{left} and {right} are not {i}-sewable: orbits under "
                    f"alpha_{self.special_range(i)} do not correspond"
                )

        clash = self._merged_attribute_clash(pairs, i)
        if clash is not None:
            raise DuplicateAttribute(
                f"{i}-sewing {left} and {right} would merge two {clash}-cells that both carry an attribute"
            )

        alpha_i = self._alphas[i]
        for left_curr, right_curr in pairs:
            alpha_i.pair(left_curr, right_curr)

    def _merged_attribute_clash(self, pairs: List[Tuple[Dart, Dart]], i: int) -> Optional[int]:
        """
        First j != i for which sewing pairs would join two valued j-cells, or None.

        Every j-cell touched by pairs is keyed by its smallest dart;
        union-find over the pairs gives the j-cells after the sew.
        """
        for j in self.excluded_range(i):
            cell_key = {}
            parent = {}

            def key_of(dart):
                if dart not in cell_key:
                    cell = self.i_cell(dart, j)
                    smallest = min(cell)
                    for curr in cell:
                        cell_key[curr] = smallest
                return cell_key[dart]

            def find(key):
                while parent.get(key, key) != key:
                    key = parent[key]
                return key

            for left_curr, right_curr in pairs:
                a, b = find(key_of(left_curr)), find(key_of(right_curr))
                if a != b:
                    parent[a] = b

            valued_roots = set()
            for key in set(cell_key.values()):
                if self.get_attribute(key, j) is None:
                    continue
                root = find(key)
                if root in valued_roots:
                    return j
                valued_roots.add(root)
        return None

    def unsew(self, dart: Dart, i: int) -> None:
        """
        Undo an i-sewing: free every dart of dart's special-range orbit at i.

        Partners are freed with them, and every dart stays in alpha_i's
        domain. Darts already i-free are skipped, so unsewing a free
        orbit is a no-op.
        """
        self._check_dimension(i)
        alpha_i = self._alphas[i]
        for curr in list(self.orbit(dart, self.special_range(i))):
            alpha_i.unpair(curr)

    # ============ Cells and attributes ===========

    def i_cell(self, dart: Dart, i: int) -> List[Dart]:
        """Darts of the i-cell containing dart, in BFS order from dart."""
        return list(self.orbit(dart, self.excluded_range(i)))

    def put_attribute(self, dart: Dart, i: int, attribute: A) -> A:
        """
        Attach attribute to the i-cell of dart.

        The value is stored on dart alone; get_attribute() finds it from
        any dart of the cell. Raises DuplicateAttribute if the cell
        already carries a value.
        """
        if attribute is None:
            raise ValueError("None is the empty attribute; use remove_attribute() to clear a cell")
        if not self.contains_dart(dart):
            raise KeyError(f"{dart} is not in this map")

        for curr in self.i_cell(dart, i):
            existing = self._attributes.get((curr, i))
            if existing is not None:
                raise DuplicateAttribute(
                    f"{i}-cell of {dart} already carries {existing!r} (stored on {curr})"
                )
        self._attributes.set((dart, i), attribute)
        return attribute

    def get_attribute(self, dart: Dart, i: int) -> Optional[A]:
        """First value found in the i-cell of dart, or None."""
        for curr in self.i_cell(dart, i):
            value = self._attributes.get((curr, i))
            if value is not None:
                return value
        return None

    def remove_attribute(self, dart: Dart, i: int) -> None:
        """Clear every attribute entry of the i-cell of dart."""
        for curr in self.i_cell(dart, i):
            self._attributes.set((curr, i), None)


def _is_index(i) -> bool:
    # numpy integers count; bool does not
    return isinstance(i, numbers.Integral) and not isinstance(i, bool)
