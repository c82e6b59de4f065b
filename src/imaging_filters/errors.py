"""
errors.py - exception hierarchy for matrix and filter contract violations

Every violation is raised where it is detected and propagated to the caller.
Each class also derives from the closest built-in exception so that generic
handlers (``except IndexError``, ``except ZeroDivisionError``) keep working.
"""

from __future__ import annotations


class MatrixError(Exception):
    """Base class for all errors raised by imaging_filters."""

    default_message = "Matrix error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidDimensionsError(MatrixError, ValueError):
    """Bad constructor shape, mismatched operand shapes or a non-3x3 kernel."""

    default_message = "Invalid matrix dimensions."


class IndexOutOfRangeError(MatrixError, IndexError):
    """Flat or (row, col) access outside the matrix buffer."""

    default_message = "Index out of range."


class DivisionByZeroError(MatrixError, ZeroDivisionError):
    """Division by a zero scalar of a matrix holding a nonzero cell."""

    default_message = "Division by zero."


class StreamReadError(MatrixError, OSError):
    """Text input requested from a closed or unreadable stream."""

    default_message = "Error loading from input stream."


class QuantizationError(MatrixError, ValueError):
    """Invalid number of quantization levels or a non-finite pixel."""

    default_message = "Invalid quantization request."
