"""
image_io.py - moving matrices between disk and memory

Text files use the Matrix text format (row-major, space between cells,
newline between rows). Image files go through ``matplotlib.image``; color
images are converted to a single gray channel on load because the filters
work on one intensity plane.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Tuple
import numpy as np
import matplotlib.image as mpimg

from imaging_filters.core.matrix import Matrix

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


# -----------------------------------------------------------------------------
# Text matrices
# -----------------------------------------------------------------------------
def infer_text_shape(text: str) -> Tuple[int, int]:
    """Shape of a text matrix: non-empty lines x tokens on the first one."""
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return 0, 0
    return len(lines), len(lines[0].split())


def load_matrix_text(path: str | Path, rows: int | None = None, cols: int | None = None) -> Matrix:
    """
    Read a text matrix file.

    If ``rows`` or ``cols`` is omitted the shape is taken from the file's
    line structure. With an explicit shape the file is read as a flat token
    stream, exactly like ``Matrix.read_from``.
    """
    path = Path(path)
    if rows is None or cols is None:
        text = path.read_text(encoding="utf-8")
        inferred_rows, inferred_cols = infer_text_shape(text)
        rows = inferred_rows if rows is None else rows
        cols = inferred_cols if cols is None else cols
        logger.debug("Inferred %dx%d matrix from %s", rows, cols, path)

    with path.open("r", encoding="utf-8") as fh:
        matrix = Matrix(rows, cols).read_from(fh)
    logger.info("Loaded %dx%d matrix from %s", matrix.rows, matrix.cols, path)
    return matrix


def save_matrix_text(matrix: Matrix, path: str | Path) -> Path:
    """Write ``matrix`` in text form (no trailing newline) and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        matrix.write_to(fh)
    logger.info("Saved %dx%d matrix to %s", matrix.rows, matrix.cols, path)
    return path


# -----------------------------------------------------------------------------
# Image files
# -----------------------------------------------------------------------------
def image_array_to_matrix(img: np.ndarray) -> Matrix:
    """
    Convert an image array as returned by ``matplotlib.image.imread``.

    • (H, W, 3|4) color is reduced to luma; alpha is ignored.
    • Float arrays are taken to be in [0, 1] and scaled to [0, 255].
    • The result is rounded to integer intensities.
    """
    arr = np.asarray(img)
    is_float = np.issubdtype(arr.dtype, np.floating)
    arr = arr.astype(np.float32)

    if arr.ndim == 3:
        arr = arr[..., :3] @ LUMA_WEIGHTS
    if is_float:
        arr = arr * 255.0

    return Matrix.from_array(np.rint(np.clip(arr, 0.0, 255.0)))


def load_image(path: str | Path) -> Matrix:
    """Read an image file into a gray 0..255 matrix."""
    path = Path(path)
    matrix = image_array_to_matrix(mpimg.imread(path))
    logger.info("Loaded %dx%d image from %s", matrix.rows, matrix.cols, path)
    return matrix


def save_image(matrix: Matrix, path: str | Path) -> Path:
    """Write ``matrix`` as a grayscale image; cells are clipped to [0, 255]."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pixels = np.clip(matrix.to_array(), 0.0, 255.0)
    mpimg.imsave(path, pixels, cmap="gray", vmin=0, vmax=255)
    logger.info("Saved image to %s", path)
    return path
