"""Collaborator structures - involution, BFS traversal, attribute store."""

from .involution import Involution
from .traversal import breadth_first
from .attributes import AttributeStore
