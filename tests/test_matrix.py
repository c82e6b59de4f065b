"""
Tests for core/matrix.py - construction, access, operators, text format.
"""
import copy
import io
import math

import numpy as np
import pytest

from imaging_filters.core.matrix import Matrix
from imaging_filters.errors import (
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidDimensionsError,
    MatrixError,
    StreamReadError,
)


def _m(rows):
    """Matrix from a nested list."""
    return Matrix.from_array(np.array(rows, dtype=np.float32))


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:

    @pytest.mark.parametrize("rows, cols", [(1, 1), (2, 3), (7, 1), (1, 9)])
    def test_new_matrix_is_all_zero(self, rows, cols):
        m = Matrix(rows, cols)
        assert m.shape == (rows, cols)
        assert len(m) == rows * cols
        assert all(v == 0.0 for v in m)

    def test_default_is_one_by_one_zero(self):
        m = Matrix()
        assert m.shape == (1, 1)
        assert m[0] == 0.0

    @pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 2), (0, 0)])
    def test_invalid_dimensions(self, rows, cols):
        with pytest.raises(InvalidDimensionsError, match="Invalid matrix dimensions"):
            Matrix(rows, cols)

    def test_invalid_dimensions_is_a_value_error(self):
        with pytest.raises(ValueError):
            Matrix(0, 1)

    def test_non_integer_dimensions_rejected(self):
        with pytest.raises(TypeError):
            Matrix(2.5, 3)

    def test_getters(self):
        m = Matrix(4, 5)
        assert (m.get_rows(), m.get_cols()) == (4, 5)
        assert (m.rows, m.cols) == (4, 5)

    def test_from_array_copies_input(self):
        src = np.array([[1.0, 2.0], [3.0, 4.0]])
        m = Matrix.from_array(src)
        src[0, 0] = 99.0
        assert m[0, 0] == 1.0

    def test_from_array_one_dimensional_is_a_row(self):
        m = Matrix.from_array([1, 2, 3])
        assert m.shape == (1, 3)

    @pytest.mark.parametrize("bad", [[], np.zeros((2, 2, 2)), [[]]])
    def test_from_array_rejects_bad_shapes(self, bad):
        with pytest.raises(InvalidDimensionsError):
            Matrix.from_array(bad)

    def test_to_array_is_a_copy(self):
        m = _m([[1, 2], [3, 4]])
        arr = m.to_array()
        arr[0, 0] = 42.0
        assert arr.dtype == np.float32
        assert m[0, 0] == 1.0

    def test_repr(self):
        assert repr(Matrix(2, 3)) == "Matrix(rows=2, cols=3)"


# ---------------------------------------------------------------------------
# Copies never alias
# ---------------------------------------------------------------------------

class TestCopies:

    @pytest.mark.parametrize("make_copy", [Matrix.copy, copy.copy, copy.deepcopy])
    def test_copy_is_equal_and_isolated(self, make_copy):
        a = _m([[1, 2, 3], [4, 5, 6]])
        b = make_copy(a)
        assert b == a
        assert b is not a
        b[0, 0] = 100.0
        assert a[0, 0] == 1.0
        assert b != a

    def test_assign_copies_shape_and_cells(self):
        a = Matrix(1, 1)
        b = _m([[1, 2], [3, 4]])
        assert a.assign(b) is a
        assert a == b
        b[0] = 7.0
        assert a[0] == 1.0

    def test_self_assign_is_noop(self):
        a = _m([[1, 2], [3, 4]])
        before = a.to_array()
        assert a.assign(a) is a
        np.testing.assert_array_equal(a.to_array(), before)


# ---------------------------------------------------------------------------
# Element access
# ---------------------------------------------------------------------------

class TestElementAccess:

    def test_cell_and_flat_views_share_storage(self):
        m = Matrix(2, 3)
        m[1, 2] = 5.0
        assert m[5] == 5.0
        m[3] = -2.0
        assert m[1, 0] == -2.0

    def test_values_are_stored_as_float32(self):
        m = Matrix(1, 1)
        m[0] = 0.1
        assert m[0] == float(np.float32(0.1))

    @pytest.mark.parametrize("key", [(2, 0), (0, 3), (-1, 0), (0, -1), (5, 5)])
    def test_cell_out_of_range(self, key):
        m = Matrix(2, 3)
        with pytest.raises(IndexOutOfRangeError, match="Index out of range"):
            m[key]
        with pytest.raises(IndexOutOfRangeError):
            m[key] = 1.0

    def test_read_checks_column_upper_bound(self):
        # (0, 3) on a 2x3 matrix would land on flat cell 3 without the check
        m = Matrix(2, 3)
        with pytest.raises(IndexError):
            m[0, 3]

    @pytest.mark.parametrize("k", [-1, 6, 100])
    def test_flat_out_of_range(self, k):
        m = Matrix(2, 3)
        with pytest.raises(IndexOutOfRangeError):
            m[k]
        with pytest.raises(IndexOutOfRangeError):
            m[k] = 0.0

    def test_wrong_arity_key(self):
        with pytest.raises(IndexOutOfRangeError):
            Matrix(2, 2)[0, 0, 0]

    def test_iteration_is_row_major(self):
        assert list(_m([[1, 2], [3, 4]])) == [1.0, 2.0, 3.0, 4.0]


# ---------------------------------------------------------------------------
# vectorize
# ---------------------------------------------------------------------------

class TestVectorize:

    def test_reshape_to_column_in_place(self):
        m = _m([[1, 2, 3], [4, 5, 6]])
        assert m.vectorize() is m
        assert m.shape == (6, 1)
        assert m[4, 0] == 5.0
        assert list(m) == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_vectorized_matrix_differs_from_original_shape(self):
        a = _m([[1, 2], [3, 4]])
        b = a.copy().vectorize()
        assert a != b


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

class TestMultiplication:

    def test_product_values(self):
        a = _m([[1, 2], [3, 4]])
        b = _m([[5, 6], [7, 8]])
        assert a * b == _m([[19, 22], [43, 50]])

    def test_product_shape(self):
        assert (Matrix(2, 3) * Matrix(3, 4)).shape == (2, 4)

    def test_identity_on_the_right(self):
        a = _m([[1.5, -2, 3], [4, 5, 6.25]])
        eye = Matrix(3, 3)
        for i in range(3):
            eye[i, i] = 1.0
        assert a * eye == a

    def test_associativity(self):
        a = _m([[1, 2, 3], [4, 5, 6]])
        b = _m([[0.5, -1], [2, 0.25], [1, 1]])
        c = _m([[3, -2], [1, 4]])
        np.testing.assert_allclose(((a * b) * c).to_array(), (a * (b * c)).to_array(), rtol=1e-6)

    def test_dimension_mismatch(self):
        with pytest.raises(InvalidDimensionsError):
            Matrix(2, 3) * Matrix(2, 3)

    def test_scalar_both_sides(self):
        a = _m([[1, -2], [3, 4]])
        expected = _m([[2, -4], [6, 8]])
        assert a * 2 == expected
        assert 2 * a == expected
        assert a * 2.0 == expected

    def test_scalar_zero_gives_fresh_zero_matrix(self):
        a = _m([[1, 2], [3, 4]])
        a[0] = math.inf
        z = a * 0
        assert z == Matrix(2, 2)
        assert 0 * a == Matrix(2, 2)
        assert a[0] == math.inf

    def test_scalar_below_float32_range_counts_as_zero(self):
        a = _m([[1, 2]])
        a[1] = math.inf
        assert a * 1e-50 == Matrix(1, 2)
        assert 1e-50 * a == Matrix(1, 2)

    def test_scale_does_not_mutate_operand(self):
        a = _m([[1, 2]])
        _ = a * 3
        assert a == _m([[1, 2]])

    def test_in_place_matrix_product_changes_shape(self):
        a = _m([[1, 2, 3], [4, 5, 6]])
        handle = a
        a *= _m([[1], [0], [1]])
        assert a is handle
        assert a == _m([[4], [10]])

    def test_in_place_scalar(self):
        a = _m([[1, 2]])
        a *= 0.5
        assert a == _m([[0.5, 1]])

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            Matrix(1, 1) * "2"


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

class TestDivision:

    def test_divide_by_scalar(self):
        assert _m([[2, 4], [-6, 8]]) / 2 == _m([[1, 2], [-3, 4]])

    def test_divide_by_zero_with_nonzero_cell(self):
        a = Matrix(2, 2)
        a[3] = 1e-6
        with pytest.raises(DivisionByZeroError, match="Division by zero"):
            a / 0

    def test_divide_by_zero_is_a_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            _m([[1]]) / 0.0

    def test_zero_matrix_divided_by_zero_is_unchanged_copy(self):
        a = Matrix(2, 3)
        b = a / 0
        assert b == a
        assert b is not a

    def test_divisor_below_float32_range_counts_as_zero(self):
        with pytest.raises(DivisionByZeroError):
            _m([[1.0, 2.0]]) / 1e-50
        assert Matrix(1, 2) / 1e-50 == Matrix(1, 2)

    def test_in_place_division(self):
        a = _m([[3, 6]])
        a /= 3
        assert a == _m([[1, 2]])

    def test_in_place_division_by_zero_leaves_operand(self):
        a = _m([[3, 6]])
        with pytest.raises(DivisionByZeroError):
            a /= 0
        assert a == _m([[3, 6]])


# ---------------------------------------------------------------------------
# Addition
# ---------------------------------------------------------------------------

class TestAddition:

    def test_add(self):
        assert _m([[1, 2], [3, 4]]) + _m([[10, 20], [30, 40]]) == _m([[11, 22], [33, 44]])

    @pytest.mark.parametrize("other_shape", [(3, 2), (2, 2), (1, 6)])
    def test_shape_mismatch(self, other_shape):
        with pytest.raises(InvalidDimensionsError):
            Matrix(2, 3) + Matrix(*other_shape)

    def test_in_place_matrix(self):
        a = _m([[1, 2]])
        a += _m([[1, 1]])
        assert a == _m([[2, 3]])

    def test_in_place_scalar(self):
        a = _m([[1, 2], [3, 4]])
        a += 1.5
        assert a == _m([[2.5, 3.5], [4.5, 5.5]])

    def test_plain_scalar_add_not_supported(self):
        with pytest.raises(TypeError):
            Matrix(1, 1) + 1


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------

class TestEquality:

    def test_exact_comparison(self):
        a = _m([[1, 2]])
        b = _m([[1, 2.0001]])
        assert a != b
        assert not a == b

    def test_shape_matters(self):
        assert Matrix(2, 3) != Matrix(3, 2)

    def test_nan_is_never_equal(self):
        a = _m([[math.nan]])
        assert a != a.copy()

    def test_other_types(self):
        assert Matrix(1, 1) != 0
        assert (Matrix(1, 1) == "x") is False

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix(1, 1))


# ---------------------------------------------------------------------------
# Text format
# ---------------------------------------------------------------------------

class TestTextFormat:

    def test_round_trip(self):
        text = "1 2\n3 4"
        m = Matrix.from_text(text, 2, 2)
        assert m == _m([[1, 2], [3, 4]])
        assert str(m) == text

    def test_no_trailing_separator(self):
        assert str(_m([[1, 2, 3]])) == "1 2 3"
        assert str(_m([[1], [2]])) == "1\n2"

    def test_cell_rendering(self):
        assert str(_m([[0.5, -3, 1e-7, 2.25]])) == "0.5 -3 1e-07 2.25"

    def test_write_to_returns_stream(self):
        buf = io.StringIO()
        assert _m([[1, 2], [3, 4]]).write_to(buf) is buf
        assert buf.getvalue() == "1 2\n3 4"

    def test_print(self):
        buf = io.StringIO()
        _m([[7, 8]]).print(file=buf)
        assert buf.getvalue() == "7 8"

    def test_print_defaults_to_stdout(self, capsys):
        _m([[1, 2]]).print()
        assert capsys.readouterr().out == "1 2"

    def test_tokens_may_span_lines_arbitrarily(self):
        m = Matrix(2, 3).read_from(io.StringIO("1 2\n3\n\n 4 5 6 "))
        assert list(m) == [1, 2, 3, 4, 5, 6]

    def test_fewer_tokens_keep_prior_values(self):
        m = Matrix(2, 2)
        m += 9
        m.read_from(io.StringIO("1 2"))
        assert list(m) == [1, 2, 9, 9]

    def test_more_tokens_overflow(self):
        m = Matrix(1, 2)
        with pytest.raises(IndexOutOfRangeError):
            m.read_from(io.StringIO("1 2 3"))
        assert list(m) == [1, 2]

    def test_reading_stops_at_non_number(self):
        m = Matrix(1, 4).read_from(io.StringIO("1 x 3 4"))
        assert list(m) == [1, 0, 0, 0]

    @pytest.mark.parametrize("text, expected", [
        ("1_0 2", [1, 0]),
        ("1abc 2", [1, 0]),
        ("nan 1", [0, 0]),
        ("inf 1", [0, 0]),
        ("1.5.25", [1.5, 0.25]),
        ("-2e1 +.5", [-20, 0.5]),
    ])
    def test_only_plain_numbers_are_read(self, text, expected):
        assert list(Matrix.from_text(text, 1, 2)) == expected

    def test_closed_stream(self):
        stream = io.StringIO("1 2")
        stream.close()
        with pytest.raises(StreamReadError):
            Matrix(1, 2).read_from(stream)

    def test_unreadable_stream(self, tmp_path):
        with open(tmp_path / "out.txt", "w") as fh:
            with pytest.raises(StreamReadError, match="input stream"):
                Matrix(1, 1).read_from(fh)

    def test_all_errors_share_a_base(self):
        for exc in (DivisionByZeroError, IndexOutOfRangeError, InvalidDimensionsError, StreamReadError):
            assert issubclass(exc, MatrixError)
