"""Map engine - Dart and NGMap."""

from .gmap import Dart, NGMap
