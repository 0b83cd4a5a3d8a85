import bisect
from dataclasses import replace
import numpy as np
import pandas as pd
from scipy import sparse as sp
from typing import Iterable, Iterator, Optional

from .config import MatrixConfig
from .constants import DEFAULT_DTYPE, EntryColumn
from .entry import MatrixEntry
from .matrix_errors import InvalidCoordinateError


class SparseMatrix:
    """
    Coordinate-list (COO) sparse matrix with 1-based coordinates.

    Entries are appended unordered on write and sorted lazily. Two dirty flags
    record whether the entry list may be out of order (``sorted``) or may
    hold explicit zeros (``clean``); ensure_sorted() and ensure_clean() repair
    them only when an operation needs it.

    ``rows`` and ``cols`` are high-water marks of every coordinate ever
    inserted and never shrink. The entry at (rows, cols) is kept by
    clean_zeros() even when its value is zero so the declared dimensions are
    always witnessed by a stored element.
    """

    def __init__(self, config: Optional[MatrixConfig] = None):
        """
        Initialize an empty SparseMatrix

        Args:
            config: MatrixConfig object defining the dimension rule used by multiplication
        """
        self._config = config if config is not None else MatrixConfig()
        self._config.validate()

        self._entries: list[MatrixEntry] = []
        self._rows = 0
        self._cols = 0
        self._num_points = 0
        self._sorted = True
        self._clean = True

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------
    @property
    def config(self) -> MatrixConfig:
        return self._config

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    @property
    def is_clean(self) -> bool:
        return self._clean

    def get_number_of_points(self) -> int:
        """Number of stored entries, including explicit zeros not yet cleaned."""
        return self._num_points

    def __len__(self) -> int:
        return self._num_points

    # ------------------------------------------------------------------
    # storage and invariant maintenance
    # ------------------------------------------------------------------
    def insert_new(self, row: int, col: int, value: float) -> None:
        """Append a new entry without searching for an existing one.

        Only the current last entry is inspected to downgrade the flags: an
        entry sorting before it marks the list unsorted, otherwise a zero value
        marks it unclean.
        """
        entry = MatrixEntry(row, col, value)
        if self._entries:
            if entry < self._entries[-1]:
                self._sorted = False
            elif value == 0:
                self._clean = False

        self._rows = max(self._rows, row)
        self._cols = max(self._cols, col)
        self._entries.append(entry)
        self._num_points += 1

    def ensure_sorted(self) -> None:
        if not self._sorted:
            self._entries.sort()
            self._sorted = True

    def ensure_clean(self) -> None:
        if not self._clean:
            self.clean_zeros()
            self._clean = True

    def clean_zeros(self) -> None:
        """Drop every zero-valued entry except the dimension corner (rows, cols)."""
        self._entries = [e for e in self._entries
                         if e.value != 0 or (e.row == self._rows and e.col == self._cols)]
        self._num_points = len(self._entries)

    def remove_zeros(self) -> None:
        """Alias of clean_zeros()."""
        self.clean_zeros()

    # ------------------------------------------------------------------
    # lookup / update
    # ------------------------------------------------------------------
    @staticmethod
    def _is_coordinate(row, col) -> bool:
        for idx in (row, col):
            if isinstance(idx, (bool, np.bool_)) or not isinstance(idx, (int, np.integer)) or idx < 1:
                return False
        return True

    def _check_coordinate(self, row, col) -> tuple[int, int]:
        if not self._is_coordinate(row, col):
            raise InvalidCoordinateError(row, col)
        return int(row), int(col)

    def _find_index(self, row: int, col: int) -> Optional[int]:
        # callers must have called ensure_sorted()
        probe = MatrixEntry(row, col, 0.0)
        idx = bisect.bisect_left(self._entries, probe)
        if idx < len(self._entries) and self._entries[idx] == probe:
            return idx
        return None

    def set_value_at_coordinate(self, row: int, col: int, value: float) -> None:
        """Set the value at (row, col), overwriting an existing entry in place.

        An overwrite never re-marks the matrix unclean, even when the new value
        is zero; call clean_zeros() to drop such entries.
        """
        row, col = self._check_coordinate(row, col)
        value = float(value)
        self.ensure_sorted()

        idx = self._find_index(row, col)
        if idx is not None:
            self._entries[idx].value = value
        else:
            self.insert_new(row, col, value)

    def get_value_at_coordinate(self, row: int, col: int) -> float:
        """Returns the value at (row, col), or 0.0 when no entry is stored there."""
        row, col = self._check_coordinate(row, col)
        self.ensure_sorted()

        idx = self._find_index(row, col)
        if idx is None:
            return 0.0
        return self._entries[idx].value

    def __getitem__(self, key) -> float:
        """Returns the value at position (row, col).

        Args:
            key: A tuple (row, col)

        Returns:
            The value at position (row, col), or 0.0 if not found.
        """
        if isinstance(key, tuple) and len(key) == 2:
            row, col = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        return self.get_value_at_coordinate(row, col)

    def __setitem__(self, key, value: float) -> None:
        """Sets the value at position (row, col).

        Args:
            key: A tuple (row, col)
            value: The value to set.
        """
        if isinstance(key, tuple) and len(key) == 2:
            row, col = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        self.set_value_at_coordinate(row, col, value)

    def __contains__(self, key) -> bool:
        """Checks if an entry is stored at position (row, col).

        Explicit zeros that have not been cleaned count as stored.
        """
        if isinstance(key, tuple) and len(key) == 2:
            row, col = key
        else:
            return False
        if not self._is_coordinate(row, col):
            return False
        self.ensure_sorted()
        return self._find_index(int(row), int(col)) is not None

    # ------------------------------------------------------------------
    # multiplication
    # ------------------------------------------------------------------
    def multiply(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Multiply this matrix by other. Both operands are cleaned and sorted as a side effect.

        Raises:
            DimensionError: If the operands fail the configured dimension check
        """
        from .multiplication import multiply
        return multiply(self, other)

    def matrix_multiplication(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Alias of multiply()."""
        return self.multiply(other)

    def __matmul__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.multiply(other)

    # ------------------------------------------------------------------
    # iteration / printing
    # ------------------------------------------------------------------
    def iterate_entries(self) -> Iterator[tuple[int, int, float]]:
        """Yield (row, col, value) for every stored entry in (row, col) order."""
        self.ensure_sorted()
        for entry in self._entries:
            yield entry.as_tuple()

    def __iter__(self):
        return self.iterate_entries()

    def print_entries(self) -> None:
        for row, col, value in self.iterate_entries():
            print(f"{row} {col} {value}")

    def print_as_matrix(self) -> None:
        """Print the dense grid. Only meant for small matrices."""
        for dense_row in self.to_dense():
            print(" ".join(f"{v:.2f}" for v in dense_row))

    def __repr__(self) -> str:
        return f"SparseMatrix(rows={self._rows}, cols={self._cols}, points={self._num_points})"

    def copy(self) -> 'SparseMatrix':
        """Returns a copy of the matrix sharing no entries with the original."""
        result = SparseMatrix(config=replace(self._config))
        result._entries = [MatrixEntry(e.row, e.col, e.value) for e in self._entries]
        result._rows = self._rows
        result._cols = self._cols
        result._num_points = self._num_points
        result._sorted = self._sorted
        result._clean = self._clean
        return result

    # ------------------------------------------------------------------
    # conversions
    # ------------------------------------------------------------------
    def _witness_shape(self, n_rows: int, n_cols: int) -> None:
        # stores an explicit zero at the corner so the dimensions survive cleaning
        if n_rows > 0 and n_cols > 0 and (n_rows, n_cols) not in self:
            self.set_value_at_coordinate(n_rows, n_cols, 0.0)

    def to_dense(self) -> np.ndarray:
        dense = np.zeros((self._rows, self._cols), dtype=DEFAULT_DTYPE)
        for entry in self._entries:
            dense[entry.row - 1, entry.col - 1] = entry.value
        return dense

    def to_coo(self) -> sp.coo_matrix:
        """Returns a scipy COO matrix of shape (rows, cols) with 0-based indices."""
        n = len(self._entries)
        row_idx = np.fromiter((e.row - 1 for e in self._entries), dtype=np.int64, count=n)
        col_idx = np.fromiter((e.col - 1 for e in self._entries), dtype=np.int64, count=n)
        data = np.fromiter((e.value for e in self._entries), dtype=DEFAULT_DTYPE, count=n)
        return sp.coo_matrix((data, (row_idx, col_idx)), shape=(self._rows, self._cols))

    def to_dataframe(self) -> pd.DataFrame:
        """Returns the stored entries as a DataFrame with row, col and value columns."""
        return pd.DataFrame(list(self.iterate_entries()), columns=EntryColumn.ALL)

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[int, int, float]],
                     config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        matrix = cls(config=config)
        for row, col, value in entries:
            matrix.set_value_at_coordinate(row, col, value)
        return matrix

    @classmethod
    def from_dense(cls, array, config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        """
        Build a SparseMatrix from a 2D array-like, storing only the nonzero cells.

        The shape of the array is kept: if its last cell is zero an explicit zero
        is stored there.
        """
        array = np.asarray(array)
        assert array.ndim == 2, f"array must be 2 dimensional, got {array.ndim} dimensions"

        matrix = cls(config=config)
        nz_rows, nz_cols = np.nonzero(array)
        for r, c in zip(nz_rows, nz_cols):
            matrix.set_value_at_coordinate(int(r) + 1, int(c) + 1, float(array[r, c]))
        matrix._witness_shape(*array.shape)
        return matrix

    @classmethod
    def from_coo(cls, coo, config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        """Build a SparseMatrix from any scipy sparse matrix. Duplicate coordinates are summed."""
        coo = sp.coo_matrix(coo, copy=True)
        coo.sum_duplicates()

        matrix = cls(config=config)
        for r, c, v in zip(coo.row, coo.col, coo.data):
            if v != 0:
                matrix.set_value_at_coordinate(int(r) + 1, int(c) + 1, float(v))
        matrix._witness_shape(*coo.shape)
        return matrix

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        for col in EntryColumn.ALL:
            assert col in df.columns, f"Column \"{col}\" not found in df"

        matrix = cls(config=config)
        for row, col, value in df[EntryColumn.ALL].itertuples(index=False):
            matrix.set_value_at_coordinate(row, col, value)
        return matrix
