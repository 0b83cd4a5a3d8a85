import os
import sys
import numpy as np
import pytest

# Add the src directory to Python path to import local sparse_coo
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_coo import SparseMatrix, MatrixConfig, DimensionError, MatrixEntry, multiply
from sparse_coo.multiplication import distinct_indices, sparse_dot
from test_utils import build_diagonal, validate_dense



def test_identity_product_has_999_points():
    matrix_a = build_diagonal(SparseMatrix, 1000)
    matrix_b = build_diagonal(SparseMatrix, 1000)

    result = matrix_a.multiply(matrix_b)

    assert result.get_number_of_points() == 999
    assert result.shape == (1000, 1000)
    for row, col, value in result.iterate_entries():
        assert row == col
        assert value == 1.0
    for i in range(1, 1000):
        assert result.get_value_at_coordinate(i, i) == 1.0
    assert result.get_value_at_coordinate(1000, 1000) == 0


def test_dimension_mismatch_raises_without_touching_operands():
    left = SparseMatrix()
    left.set_value_at_coordinate(2, 3, 1.0)
    left.set_value_at_coordinate(1, 1, 0.0)
    right = SparseMatrix()
    right.set_value_at_coordinate(3, 4, 1.0)

    with pytest.raises(DimensionError) as exc_info:
        left.multiply(right)

    assert exc_info.value.left_shape == (2, 3)
    assert exc_info.value.right_shape == (3, 4)
    assert exc_info.value.rule == 'declared'
    assert not left.is_sorted
    assert left.get_number_of_points() == 2


def test_declared_rule_compares_left_rows_with_right_cols():
    # 2x3 times 4x2 passes the declared check even though inner sizes differ
    left = SparseMatrix.from_entries([(1, 1, 1.0), (2, 3, 2.0)])
    right = SparseMatrix.from_entries([(1, 1, 3.0), (4, 2, 4.0)])
    result = left @ right
    assert result.shape == (2, 2)


def test_conventional_rule():
    config = MatrixConfig(dimension_rule='conventional')
    left = SparseMatrix.from_entries([(1, 1, 1.0), (1, 3, 2.0), (2, 2, 3.0)], config=config)
    right = SparseMatrix.from_entries([(1, 4, 4.0), (2, 1, 5.0), (3, 2, 6.0)], config=config)

    result = left.multiply(right)

    assert result.shape == (2, 4)
    assert result.get_value_at_coordinate(1, 4) == 4.0
    assert result.get_number_of_points() == 1

    with pytest.raises(DimensionError):
        SparseMatrix.from_entries([(2, 3, 1.0)]).multiply(right)


def test_multiply_skips_trailing_row_run():
    a = SparseMatrix.from_dense([[1, 2], [3, 4]])
    b = SparseMatrix.from_dense([[1, 2], [3, 4]])

    result = a.multiply(b)

    # row 2 closes the scan of the left operand and is not reported
    validate_dense(result, [[7, 10], [0, 0]])
    assert result.get_number_of_points() == 2


def test_self_multiplication():
    a = SparseMatrix.from_dense([[1, 2], [3, 4]])
    result = a.multiply(a)

    validate_dense(result, [[7, 10], [0, 0]])
    validate_dense(a, [[1, 2], [3, 4]])


def test_zero_sums_are_not_inserted():
    left = SparseMatrix.from_entries([(1, 1, 1.0), (1, 2, -1.0), (2, 1, 1.0)])
    right = SparseMatrix.from_entries([(1, 1, 1.0), (1, 2, 5.0), (2, 1, 1.0)])

    result = left.multiply(right)

    assert (1, 1) not in result
    assert result.get_value_at_coordinate(1, 2) == 5.0
    assert result.get_number_of_points() == 1
    assert result.is_clean


def test_multiply_cleans_and_sorts_operands():
    left = SparseMatrix()
    left.set_value_at_coordinate(2, 2, 1.0)
    left.set_value_at_coordinate(1, 1, 2.0)
    left.set_value_at_coordinate(1, 2, 0.0)
    left.set_value_at_coordinate(3, 1, 0.0)
    left.set_value_at_coordinate(3, 3, 1.0)

    right = SparseMatrix()
    right.set_value_at_coordinate(1, 1, 1.0)
    right.set_value_at_coordinate(3, 3, 0.0)

    multiply(left, right)

    assert left.is_sorted and left.is_clean
    assert right.is_sorted and right.is_clean
    # (3, 3) is the dimension corner of right and survives cleaning
    assert right.get_number_of_points() == 2
    assert (3, 3) in right


def test_matmul_operator_matches_multiply():
    a = SparseMatrix.from_dense([[0, 1, 0], [2, 0, 0], [0, 0, 3]])
    b = SparseMatrix.from_dense([[1, 0, 0], [0, 0, 4], [0, 5, 0]])
    assert list((a @ b).iterate_entries()) == list(a.multiply(b).iterate_entries())
    assert list(a.matrix_multiplication(b).iterate_entries()) == list(a.multiply(b).iterate_entries())


def test_matches_scipy_on_reported_rows_and_cols():
    rng = np.random.default_rng(42)
    n = 25
    dense_a = np.where(rng.random((n, n)) < 0.15, rng.uniform(0.5, 2.0, (n, n)), 0.0)
    dense_b = np.where(rng.random((n, n)) < 0.15, rng.uniform(0.5, 2.0, (n, n)), 0.0)
    dense_a[-1, -1] = 1.0
    dense_b[-1, -1] = 1.0

    a = SparseMatrix.from_dense(dense_a)
    b = SparseMatrix.from_dense(dense_b)
    expected = (a.to_coo() @ b.to_coo()).toarray()

    result = a.multiply(b)

    rows = distinct_indices(list(a.iterate_entries()), lambda e: e[0])
    cols = distinct_indices(list(b.iterate_entries()), lambda e: e[1])
    mask = np.zeros((n, n), dtype=bool)
    mask[np.ix_([r - 1 for r in rows], [c - 1 for c in cols])] = True
    validate_dense(result, np.where(mask, expected, 0.0))


def test_distinct_indices_drops_trailing_run():
    rows = [MatrixEntry(1, 1, 1.0), MatrixEntry(1, 2, 1.0), MatrixEntry(2, 1, 1.0), MatrixEntry(3, 3, 1.0)]
    assert distinct_indices(rows, lambda e: e.row) == [1, 2]
    assert distinct_indices(rows, lambda e: e.col) == [1, 2]
    assert distinct_indices(rows[:1], lambda e: e.row) == []
    assert distinct_indices([], lambda e: e.row) == []


def test_sparse_dot_skips_missing_inner_indices():
    row_entries = [MatrixEntry(1, 1, 2.0), MatrixEntry(1, 3, 4.0)]
    assert sparse_dot(row_entries, {1: 0.5, 2: 100.0}) == 1.0
    assert sparse_dot(row_entries, {}) == 0.0
