from dataclasses import dataclass


def compare(a: 'MatrixEntry', b: 'MatrixEntry') -> int:
    """Compare two entries by coordinate only.

    Returns:
        -1 if a sorts before b, 0 if both share (row, col), 1 otherwise.
        The value is never looked at.
    """
    if a.row == b.row and a.col == b.col:
        return 0
    if a.row < b.row or (a.row == b.row and a.col < b.col):
        return -1
    return 1


def equals(a: 'MatrixEntry', b: 'MatrixEntry') -> bool:
    """True iff a and b sit at the same (row, col), regardless of value."""
    return compare(a, b) == 0


@dataclass(eq=False)
class MatrixEntry:
    """A single (row, col, value) element of a SparseMatrix.

    Ordering and equality use the coordinate alone, so a probe entry with any
    value can be used to binary search for a coordinate. Every rich comparison
    goes through compare() so sorting and searching never disagree.
    """
    row: int
    col: int
    value: float

    def __eq__(self, other) -> bool:
        if not isinstance(other, MatrixEntry):
            return NotImplemented
        return compare(self, other) == 0

    def __ne__(self, other) -> bool:
        if not isinstance(other, MatrixEntry):
            return NotImplemented
        return compare(self, other) != 0

    def __lt__(self, other: 'MatrixEntry') -> bool:
        if not isinstance(other, MatrixEntry):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: 'MatrixEntry') -> bool:
        if not isinstance(other, MatrixEntry):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: 'MatrixEntry') -> bool:
        if not isinstance(other, MatrixEntry):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: 'MatrixEntry') -> bool:
        if not isinstance(other, MatrixEntry):
            return NotImplemented
        return compare(self, other) >= 0

    def __hash__(self) -> int:
        return hash((self.row, self.col))

    def as_tuple(self) -> tuple[int, int, float]:
        return self.row, self.col, self.value
