"""
filter_model.py - 3x3 stencil filters on 0..255 intensity images

WHAT THIS MODULE DOES
---------------------
Stateless image operators built on ``Matrix``:
  • normalize     clamp intensities into the displayable range [0, 255]
  • convolution   3x3 stencil applied at every pixel, boundary terms omitted,
                  result rounded to integer intensities
  • quantization  reduce the image to ``levels`` equal-width intensity buckets
  • blur          Gaussian-like smoothing with the binomial 3x3 kernel
  • sobel         edge response as the sum of horizontal + vertical gradients

HOW THE STENCIL HANDLES EDGES
-----------------------------
Every output pixel (i, j) accumulates

    out(i, j) = Σ_k Σ_l  image(i+k, j+l) · kernel(1+k, 1+l),   k, l ∈ {-1, 0, 1}

Samples that fall outside the image are simply skipped (same result as zero
padding). The nine terms are evaluated as shifted whole-image slices, in
k-major / l-minor order and in float32, so each pixel sees exactly the same
sequence of single-precision additions as a per-pixel loop would. The sum is
then rounded to the nearest integer (ties to even), because intensities are
integers even though storage is float.

NOTE ON THE KERNEL ORIENTATION
------------------------------
The kernel is *not* flipped (this is a cross-correlation in signal-processing
terms). For the symmetric blur kernel it makes no difference; for Sobel it
fixes the sign of the gradient, which then matters for the clamping step.

LEARNING NOTES
--------------
• Blur weights sum to 1, so flat regions keep their value away from borders.
  Near borders the omitted taps lose weight and the output darkens.
• Sobel weights sum to 0: flat regions give 0, borders respond like edges.

© 2025 Ali Pouya - Imaging Filters (classic edition)
"""

from __future__ import annotations
import logging
from numbers import Integral
from typing import Sequence
import numpy as np

from imaging_filters.core.matrix import DTYPE, Matrix
from imaging_filters.errors import InvalidDimensionsError, QuantizationError

logger = logging.getLogger(__name__)

# Intensity table limits
TOTAL_COLORS = 256
LAST_COLOR = 255
FIRST_COLOR = 0

KERNEL_SIZE = 3
KERNEL_CENTER = 1

BLUR_WEIGHTS = (1, 2, 1, 2, 4, 2, 1, 2, 1)
BLUR_DIVISOR = 16
SOBEL_X_WEIGHTS = (1, 0, -1, 2, 0, -2, 1, 0, -1)
SOBEL_Y_WEIGHTS = (1, 2, 1, 0, 0, 0, -1, -2, -1)
SOBEL_DIVISOR = 8


# -----------------------------------------------------------------------------
# Fixed kernels
# -----------------------------------------------------------------------------
def _build_kernel(weights: Sequence[int], divisor: int) -> Matrix:
    # float32(1 / divisor) * w, cell by cell, row-major
    scale = DTYPE(1) / DTYPE(divisor)
    cells = scale * np.asarray(weights, dtype=DTYPE)
    return Matrix.from_array(cells.reshape(KERNEL_SIZE, KERNEL_SIZE))


def blur_kernel() -> Matrix:
    """Binomial smoothing kernel ``[[1,2,1],[2,4,2],[1,2,1]] / 16``."""
    return _build_kernel(BLUR_WEIGHTS, BLUR_DIVISOR)


def sobel_x_kernel() -> Matrix:
    """Horizontal-gradient kernel ``[[1,0,-1],[2,0,-2],[1,0,-1]] / 8``."""
    return _build_kernel(SOBEL_X_WEIGHTS, SOBEL_DIVISOR)


def sobel_y_kernel() -> Matrix:
    """Vertical-gradient kernel ``[[1,2,1],[0,0,0],[-1,-2,-1]] / 8``."""
    return _build_kernel(SOBEL_Y_WEIGHTS, SOBEL_DIVISOR)


# -----------------------------------------------------------------------------
# Intensity clamping
# -----------------------------------------------------------------------------
def normalize(image: Matrix, out: Matrix | None = None) -> Matrix:
    """
    Clamp intensities: values < 0 become 0, values >= 256 become 255.

    Values in [255, 256) are kept as they are, and so is NaN.

    Parameters
    ----------
    image : Matrix
        Input image; left untouched unless passed again as ``out``.
    out : Matrix | None
        Destination of the same shape. Pass ``out=image`` to clamp in place.

    Returns
    -------
    clamped : Matrix
        ``out`` when given, otherwise a new matrix.
    """
    if out is not None and out.shape != image.shape:
        raise InvalidDimensionsError()

    values = image.to_array()
    values[values < FIRST_COLOR] = FIRST_COLOR
    values[values >= TOTAL_COLORS] = LAST_COLOR
    clamped = Matrix.from_array(values)

    if out is None:
        return clamped
    return out.assign(clamped)


# -----------------------------------------------------------------------------
# 3x3 stencil
# -----------------------------------------------------------------------------
def convolution(image: Matrix, kernel: Matrix) -> Matrix:
    """
    Apply a 3x3 kernel at every pixel, skipping out-of-image samples.

    Parameters
    ----------
    image : Matrix
        Input image (any shape >= 1x1).
    kernel : Matrix
        3x3 weights; ``kernel[1, 1]`` is the center tap.

    Returns
    -------
    result : Matrix
        Same shape as ``image``; every cell rounded to the nearest integer.

    Raises
    ------
    InvalidDimensionsError
        If ``kernel`` is not 3x3.
    """
    if kernel.shape != (KERNEL_SIZE, KERNEL_SIZE):
        raise InvalidDimensionsError()

    src = image.to_array()
    weights = kernel.to_array()
    rows, cols = src.shape
    acc = np.zeros((rows, cols), dtype=DTYPE)

    for k in (-1, 0, 1):
        # Output rows i with 0 <= i + k < rows, and the input rows they read
        out_r = slice(max(0, -k), rows - max(0, k))
        in_r = slice(max(0, k), rows - max(0, -k))
        for l in (-1, 0, 1):
            out_c = slice(max(0, -l), cols - max(0, l))
            in_c = slice(max(0, l), cols - max(0, -l))
            acc[out_r, out_c] += src[in_r, in_c] * weights[KERNEL_CENTER + k, KERNEL_CENTER + l]

    logger.debug("convolution: %dx%d image", rows, cols)
    return Matrix.from_array(np.rint(acc))


# -----------------------------------------------------------------------------
# Quantization
# -----------------------------------------------------------------------------
def quantization(image: Matrix, levels: int) -> Matrix:
    """
    Map every pixel to the representative value of its intensity bucket.

    The range [0, 256) is split into ``levels`` buckets of width
    ``step = 256 // levels``. Bucket i spans [i*step, (i+1)*step) and is
    represented by ``(i*step + (i+1)*step - 1) // 2``, the floor of its
    midpoint biased down by one. A pixel goes to bucket ``trunc(value / step)``.

    When 256 is not a multiple of ``levels`` the step is truncated, so the
    buckets stop short of 256 (e.g. levels=3 gives step 85 and buckets ending
    at 255). Indices past the last bucket, and indices of negative pixels, are
    clamped to the nearest existing bucket.

    Parameters
    ----------
    image : Matrix
        Input image, normally already in [0, 255].
    levels : int
        Number of buckets, 1..256.

    Returns
    -------
    quantized : Matrix
        New matrix holding only bucket representatives.

    Raises
    ------
    QuantizationError
        If ``levels`` is out of range or the image holds NaN / inf.
    """
    if isinstance(levels, bool) or not isinstance(levels, Integral) or not 1 <= levels <= TOTAL_COLORS:
        raise QuantizationError(f"levels must be an integer in [1, {TOTAL_COLORS}], got {levels!r}")
    levels = int(levels)

    values = image.to_array()
    if not np.all(np.isfinite(values)):
        raise QuantizationError("quantization requires finite pixel values")

    step = TOTAL_COLORS // levels
    boundaries = np.arange(levels + 1, dtype=np.int64) * step
    representatives = (boundaries[:-1] + boundaries[1:] - 1) // 2

    buckets = np.clip(np.trunc(values / DTYPE(step)), 0, levels - 1).astype(np.intp)

    logger.debug("quantization: %d levels, step %d", levels, step)
    return Matrix.from_array(representatives[buckets])


# -----------------------------------------------------------------------------
# Composite filters
# -----------------------------------------------------------------------------
def blur(image: Matrix) -> Matrix:
    """Binomial 3x3 blur followed by clamping into [0, 255]."""
    result = convolution(image, blur_kernel())
    return normalize(result, out=result)


def sobel(image: Matrix) -> Matrix:
    """
    Sobel edge response: horizontal + vertical gradient, clamped to [0, 255].

    The two gradient images are added elementwise (signed), not combined as
    a magnitude, so edges with a negative summed response clamp to 0.
    """
    gx = convolution(image, sobel_x_kernel())
    gy = convolution(image, sobel_y_kernel())
    result = gx + gy
    return normalize(result, out=result)
