"""
Partial Involution Without Fixed Point
======================================

DEFINITION:
    A partial involution alpha over a domain D is a partial map
    alpha: D -> D such that

        alpha(x) = y  =>  alpha(y) = x     (symmetry)
        alpha(x) != x                      (no fixed point)

    A domain element with no image is "free".

The domain is explicit: an element can be known (inserted) and unpaired.
That distinction matters to NGMap, which keeps every dart in every alpha.

FAIL-FAST:
    pair() raises ValueError on fixed points and on unknown elements.
"""

from typing import Dict, FrozenSet, Generic, Hashable, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


class Involution(Generic[T]):
    """
    Symmetric, fixed-point-free partial pairing over a known domain.

    Internally one dict element -> Optional[partner]; both directions
    are always written together.
    """

    def __init__(self):
        self._partner: Dict[T, Optional[T]] = {}

    def __repr__(self):
        return f"Involution({len(self._partner)} elements, {self.paired_count()} paired)"

    def __len__(self):
        return len(self._partner)

    def __contains__(self, element):
        return element in self._partner

    def contains(self, element: T) -> bool:
        return element in self._partner

    def domain(self) -> FrozenSet[T]:
        return frozenset(self._partner)

    def insert_unpaired(self, element: T) -> None:
        """Add element to the domain, free. No-op if already known and free."""
        if self._partner.get(element) is not None:
            raise ValueError(f"{element} is already paired with {self._partner[element]}")
        self._partner[element] = None

    def lookup(self, element: T) -> Optional[T]:
        """Partner of element, or None if free or unknown."""
        return self._partner.get(element)

    def is_paired(self, element: T) -> bool:
        return self._partner.get(element) is not None

    def pair(self, a: T, b: T) -> None:
        """
        Pair a <-> b.

        Any previous partner of a or b is freed first, so symmetry
        survives re-pairing.
        """
        if a == b:
            raise ValueError(f"Cannot pair {a} with itself (fixed point)")
        for element in (a, b):
            if element not in self._partner:
                raise ValueError(f"{element} is not in the involution domain")

        self.unpair(a)
        self.unpair(b)
        self._partner[a] = b
        self._partner[b] = a

    def unpair(self, element: T) -> Optional[T]:
        """
        Free element and its partner (both stay in the domain).

        Returns the former partner, or None if element was already free.
        """
        partner = self._partner.get(element)
        if partner is None:
            return None
        self._partner[element] = None
        self._partner[partner] = None
        return partner

    def remove(self, element: T) -> None:
        """Drop element from the domain, freeing its partner if any."""
        if element not in self._partner:
            return
        self.unpair(element)
        del self._partner[element]

    def paired_count(self) -> int:
        """Number of paired elements (twice the number of pairs)."""
        return sum(1 for partner in self._partner.values() if partner is not None)
