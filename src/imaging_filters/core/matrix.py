"""
matrix.py - dense single-precision matrix used as the image container

WHAT THIS MODULE DOES
---------------------
Implements ``Matrix``, a fixed-shape 2-D buffer of float32 cells:
  • One contiguous row-major numpy buffer of ``rows * cols`` cells.
  • Two views of the same storage: flat access ``m[k]`` and cell access
    ``m[i, j]``, both resolving to offset ``k = i * cols + j``.
  • Arithmetic operators (matrix product, scalar scale/divide, addition),
    exact equality and a plain-text format.

CONTRACTS
---------
• Shapes are always >= 1x1 and the buffer length always equals rows * cols.
• No aliasing: copies are deep, arrays are copied on the way in and out.
• Indices are bounds-checked; negative indices are out of range (there is no
  Python-style wrap-around).
• Contract violations raise the exceptions from ``imaging_filters.errors``.

TEXT FORMAT
-----------
Row-major values, one space between cells of a row, one newline between
rows, nothing after the last cell. Cells are rendered with ``%g`` (six
significant digits), the same way a C++ stream prints a float by default, so
``"1 2\\n3 4"`` round-trips exactly.

© 2025 Ali Pouya - Imaging Filters (classic edition)
"""

from __future__ import annotations
import operator
import re
import sys
from io import StringIO
from numbers import Real
from typing import IO, Iterator, Tuple
import numpy as np

from imaging_filters.errors import (
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidDimensionsError,
    StreamReadError,
)

DTYPE = np.float32
MINIMAL_MATRIX_SIZE = 1

# Plain decimal / scientific notation only (no "nan", "inf" or "1_0")
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _format_cell(value: float) -> str:
    return format(float(value), "g")


def _is_readable(stream) -> bool:
    if getattr(stream, "closed", False):
        return False
    readable = getattr(stream, "readable", None)
    if readable is not None:
        return bool(readable())
    return callable(getattr(stream, "read", None))


class Matrix:
    """
    Row-major float32 matrix with bounds-checked flat and cell access.

    Parameters
    ----------
    rows, cols : int
        Dimensions (both >= 1). ``Matrix()`` builds a 1x1 zero matrix.

    Raises
    ------
    InvalidDimensionsError
        If ``rows < 1`` or ``cols < 1``.
    """

    __slots__ = ("_rows", "_cols", "_data")

    # Mutable container: no hashing. Numpy must defer binary ops to us.
    __hash__ = None
    __array_ufunc__ = None

    def __init__(self, rows: int = MINIMAL_MATRIX_SIZE, cols: int = MINIMAL_MATRIX_SIZE) -> None:
        rows, cols = operator.index(rows), operator.index(cols)
        if rows < MINIMAL_MATRIX_SIZE or cols < MINIMAL_MATRIX_SIZE:
            raise InvalidDimensionsError()
        self._rows = rows
        self._cols = cols
        self._data = np.zeros(rows * cols, dtype=DTYPE)

    # -------------------------------------------------------------------------
    # Alternate constructors & numpy interop
    # -------------------------------------------------------------------------
    @classmethod
    def _wrap(cls, rows: int, cols: int, data: np.ndarray) -> "Matrix":
        """Adopt ``data`` (flat, float32, exclusively owned) without copying."""
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._cols = cols
        matrix._data = data
        return matrix

    @classmethod
    def from_array(cls, array) -> "Matrix":
        """
        Build a matrix from a 2-D array-like (1-D input becomes a single row).

        The values are copied and cast to float32.
        """
        arr = np.asarray(array, dtype=DTYPE)
        if arr.ndim == 1:
            arr = arr[np.newaxis, :]
        if arr.ndim != 2 or arr.size == 0:
            raise InvalidDimensionsError()
        rows, cols = arr.shape
        return cls._wrap(int(rows), int(cols), arr.reshape(-1).copy())

    @classmethod
    def from_text(cls, text: str, rows: int, cols: int) -> "Matrix":
        """Zero ``rows x cols`` matrix filled from whitespace-separated text."""
        return cls(rows, cols).read_from(StringIO(text))

    def to_array(self) -> np.ndarray:
        """Return a ``(rows, cols)`` float32 copy of the cells."""
        return self._grid().copy()

    def _grid(self) -> np.ndarray:
        # 2-D view over the flat buffer (no copy)
        return self._data.reshape(self._rows, self._cols)

    def _assign(self, other: "Matrix") -> None:
        # Take over a freshly computed result; ``other`` is a temporary.
        self._rows = other._rows
        self._cols = other._cols
        self._data = other._data

    def assign(self, other: "Matrix") -> "Matrix":
        """
        Copy-assign: take the shape and a deep copy of the cells of ``other``.

        Assigning a matrix to itself is a no-op. Returns ``self``.
        """
        if other is not self:
            self._assign(other.copy())
        return self

    def copy(self) -> "Matrix":
        """Deep copy."""
        return Matrix._wrap(self._rows, self._cols, self._data.copy())

    __copy__ = copy

    def __deepcopy__(self, memo) -> "Matrix":
        return self.copy()

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def get_rows(self) -> int:
        return self._rows

    def get_cols(self) -> int:
        return self._cols

    def vectorize(self) -> "Matrix":
        """
        Reshape in place into a ``(rows * cols, 1)`` column vector.

        Metadata only: the buffer is untouched and the previous shape is lost.
        Returns the same matrix so calls can be chained.
        """
        self._rows = int(self._data.size)
        self._cols = 1
        return self

    def __len__(self) -> int:
        return int(self._data.size)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------
    def _offset(self, key) -> int:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexOutOfRangeError()
            i, j = operator.index(key[0]), operator.index(key[1])
            if 0 <= i < self._rows and 0 <= j < self._cols:
                return i * self._cols + j
            raise IndexOutOfRangeError()
        k = operator.index(key)
        if 0 <= k < self._data.size:
            return k
        raise IndexOutOfRangeError()

    def __getitem__(self, key) -> float:
        """``m[k]`` reads flat cell k, ``m[i, j]`` reads row i, column j."""
        return float(self._data[self._offset(key)])

    def __setitem__(self, key, value: float) -> None:
        self._data[self._offset(key)] = value

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------
    def _scale(self, scalar) -> "Matrix":
        # Zero test on the float32 value: 1e-50 scales like 0
        scalar = DTYPE(scalar)
        if scalar == 0:
            return Matrix(self._rows, self._cols)
        return Matrix._wrap(self._rows, self._cols, self._data * scalar)

    def __mul__(self, other):
        """
        Matrix product (``self.cols == other.rows``) or scalar scale.

        The product goes through ``np.matmul``, which may sum the float32 terms
        in a different order than a plain row-by-column loop, so individual
        cells can differ from such a loop in the last bit.
        """
        if isinstance(other, Matrix):
            if self._cols != other._rows:
                raise InvalidDimensionsError()
            product = np.matmul(self._grid(), other._grid())
            return Matrix._wrap(self._rows, other._cols, product.reshape(-1))
        if isinstance(other, Real):
            return self._scale(other)
        return NotImplemented

    def __rmul__(self, scalar):
        if isinstance(scalar, Real):
            return self._scale(scalar)
        return NotImplemented

    def __imul__(self, other):
        result = self.__mul__(other)
        if result is NotImplemented:
            return NotImplemented
        self._assign(result)
        return self

    def __truediv__(self, scalar):
        """
        Scale by ``1 / scalar``.

        Dividing by zero is only allowed when every cell is already exactly 0,
        in which case an unchanged copy is returned. The zero test applies to
        the scalar after conversion to float32.
        """
        if not isinstance(scalar, Real):
            return NotImplemented
        scalar = DTYPE(scalar)
        if scalar == 0:
            if np.any(self._data != 0):
                raise DivisionByZeroError()
            return self.copy()
        return self._scale(DTYPE(1) / scalar)

    def __itruediv__(self, scalar):
        result = self.__truediv__(scalar)
        if result is NotImplemented:
            return NotImplemented
        self._assign(result)
        return self

    def __add__(self, other):
        """Elementwise sum of two matrices of identical shape."""
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            raise InvalidDimensionsError()
        return Matrix._wrap(self._rows, self._cols, self._data + other._data)

    def __iadd__(self, other):
        if isinstance(other, Matrix):
            self._assign(self + other)
            return self
        if isinstance(other, Real):
            self._data += DTYPE(other)
            return self
        return NotImplemented

    def __eq__(self, other) -> bool:
        """Exact comparison: same shape and every cell equal (no tolerance)."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    # -------------------------------------------------------------------------
    # Text serialization
    # -------------------------------------------------------------------------
    def __str__(self) -> str:
        return "\n".join(" ".join(_format_cell(v) for v in row) for row in self._grid())

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols})"

    def write_to(self, stream: IO[str]) -> IO[str]:
        """Write the text form to ``stream`` and return the stream."""
        stream.write(str(self))
        return stream

    def print(self, file: IO[str] | None = None) -> None:
        """Print the text form (no trailing newline) to ``file`` or stdout."""
        self.write_to(file if file is not None else sys.stdout)

    def read_from(self, stream: IO[str]) -> "Matrix":
        """
        Fill the flat buffer from whitespace-separated float tokens.

        Numbers are stored in arrival order starting at cell 0. Only plain
        decimal or scientific notation is accepted. Reading stops quietly at
        the first text that is not a number; a token like ``"1abc"`` still
        stores its leading ``1`` before the read stops. Fewer numbers than
        cells leave the trailing cells unchanged; more tokens than cells raise
        ``IndexOutOfRangeError`` once the buffer is full.

        Raises
        ------
        StreamReadError
            If the stream is closed or not readable.
        """
        if not _is_readable(stream):
            raise StreamReadError()
        index = 0
        for line in stream:
            for token in line.split():
                # A token may hold several numbers back to back ("1.5.3");
                # anything else that is left over ends the read.
                pos = 0
                while pos < len(token):
                    match = _NUMBER.match(token, pos)
                    if match is None:
                        return self
                    self[index] = float(match.group())
                    index += 1
                    pos = match.end()
        return self


__all__ = ["DTYPE", "MINIMAL_MATRIX_SIZE", "Matrix"]
