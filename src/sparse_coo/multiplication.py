from typing import Callable
from dataclasses import replace

from .entry import MatrixEntry
from .matrix_errors import DimensionError
from .sparse_matrix import SparseMatrix


def check_dimensions(left: SparseMatrix, right: SparseMatrix, rule: str = 'declared') -> None:
    """
    Check that left and right can be multiplied.

    Args:
        left: Left operand
        right: Right operand
        rule: 'declared' compares left.rows with right.cols,
            'conventional' compares left.cols with right.rows

    Raises:
        DimensionError: If the check fails
    """
    if rule == 'conventional':
        compatible = left.cols == right.rows
    else:
        compatible = left.rows == right.cols
    if not compatible:
        raise DimensionError(left.shape, right.shape, rule)


def distinct_indices(entries: list[MatrixEntry], key: Callable[[MatrixEntry], int]) -> list[int]:
    """
    Distinct indices of a sorted entry list, in order of first occurrence.

    An index is collected at a run boundary, i.e. where the next entry carries
    a different index. The trailing run of the scan has no boundary after it
    and is not collected.
    """
    seen = set()
    indices = []
    for current, following in zip(entries, entries[1:]):
        idx = key(current)
        if idx != key(following) and idx not in seen:
            seen.add(idx)
            indices.append(idx)
    return indices


def group_by_row(entries: list[MatrixEntry]) -> dict[int, list[MatrixEntry]]:
    groups: dict[int, list[MatrixEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.row, []).append(entry)
    return groups


def group_by_col(entries: list[MatrixEntry]) -> dict[int, dict[int, float]]:
    # col -> {row: value}, so a left entry finds its partner by a.col
    groups: dict[int, dict[int, float]] = {}
    for entry in entries:
        groups.setdefault(entry.col, {})[entry.row] = entry.value
    return groups


def sparse_dot(row_entries: list[MatrixEntry], col_values: dict[int, float]) -> float:
    """Sum a.value * b.value over the pairs that share the inner index (a.col == b.row)."""
    total = 0.0
    for a in row_entries:
        b_value = col_values.get(a.col)
        if b_value is not None:
            total += a.value * b_value
    return total


def multiply(left: SparseMatrix, right: SparseMatrix) -> SparseMatrix:
    """
    Multiply two sparse matrices without building the dense form.

    Both operands are cleaned and sorted in place before the product is
    computed. left and right may be the same matrix.

    Args:
        left: Left operand, its config is used for the check and the result
        right: Right operand

    Returns:
        New SparseMatrix with rows = left.rows and cols = right.cols

    Raises:
        DimensionError: If the operands fail the configured dimension check
    """
    check_dimensions(left, right, left.config.dimension_rule)

    for operand in (left, right):
        operand.ensure_clean()
        operand.ensure_sorted()

    result = SparseMatrix(config=replace(left.config))
    result._rows = left.rows
    result._cols = right.cols

    left_entries = left._entries
    right_entries = right._entries

    row_indices = distinct_indices(left_entries, lambda e: e.row)
    col_indices = distinct_indices(right_entries, lambda e: e.col)

    rows = group_by_row(left_entries)
    cols = group_by_col(right_entries)

    for row in row_indices:
        row_entries = rows[row]
        for col in col_indices:
            total = sparse_dot(row_entries, cols[col])
            if total != 0:
                result.set_value_at_coordinate(row, col, total)

    return result
