"""
Breadth-First Traversal
=======================

Generic BFS driven by a neighbor function. NGMap builds orbits with it
by passing "images under the selected alphas" as neighbors.
"""

from collections import deque
from typing import Callable, Hashable, Iterable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


def breadth_first(start: T, neighbors: Callable[[T], Iterable[T]]) -> Iterator[T]:
    """
    Lazily yield every element reachable from start, in BFS order.

    Args:
        start: first element yielded
        neighbors: element -> iterable of adjacent elements

    Returns:
        generator visiting each reachable element exactly once.
        Each call returns a fresh, independently consumable generator.

    Terminates as soon as the reachable set is exhausted.
    """
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        yield current
        for nb in neighbors(current):
            if nb not in visited:
                visited.add(nb)
                queue.append(nb)
