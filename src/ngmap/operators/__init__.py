"""Operators - dense alpha_i matrices over an indexed dart set."""

from .involution_matrix import (
    dart_index,
    build_alpha_matrix,
    build_alpha_matrices,
    alpha_trace,
)
