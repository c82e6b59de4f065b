"""
imaging_filters - classic edition
================================================
Dense float32 matrix plus a small set of 3x3 image filters, organized as:
    core (Matrix) → filters → scenes / utils (io, metrics)
Each subpackage contains well-documented, modular code suitable for both
learning and experimentation.

© 2025 Ali Pouya - Imaging Filters Classic
"""

from imaging_filters.core.matrix import Matrix
from imaging_filters.errors import (
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidDimensionsError,
    MatrixError,
    QuantizationError,
    StreamReadError,
)
from imaging_filters.filters.filter_model import blur, convolution, normalize, quantization, sobel
from imaging_filters.filters.pipeline import FilterParams, apply_filter

__all__ = [
    "DivisionByZeroError",
    "FilterParams",
    "IndexOutOfRangeError",
    "InvalidDimensionsError",
    "Matrix",
    "MatrixError",
    "QuantizationError",
    "StreamReadError",
    "apply_filter",
    "blur",
    "convolution",
    "normalize",
    "quantization",
    "sobel",
]
