"""
Optional-value attribute store.

Keys are (dart, dimension) tuples. Setting None clears the entry, so
get() never distinguishes "never set" from "cleared".
"""

from typing import Callable, Dict, Generic, Hashable, List, Optional, TypeVar

A = TypeVar("A")


class AttributeStore(Generic[A]):

    def __init__(self):
        self._values: Dict[Hashable, A] = {}

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"AttributeStore({len(self._values)} entries)"

    def get(self, key: Hashable) -> Optional[A]:
        return self._values.get(key)

    def set(self, key: Hashable, value: Optional[A]) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value

    def discard_where(self, predicate: Callable[[Hashable], bool]) -> List[A]:
        """Drop every entry whose key matches predicate; return the dropped values."""
        doomed = [key for key in self._values if predicate(key)]
        return [self._values.pop(key) for key in doomed]
