"""
Coordinate-list (COO) sparse matrices.

Point lookup/update and sparsity-aware matrix multiplication over lazily sorted
coordinate lists, without ever materializing the dense form.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrix
from .entry import MatrixEntry, compare, equals
from .multiplication import multiply
from .config import MatrixConfig
from .matrix_errors import (
    SparseMatrixConfigError,
    SparseMatrixRuntimeError,
    InvalidDimensionRuleError,
    DimensionError,
    InvalidCoordinateError,
)

__all__ = [
    "SparseMatrix",
    "MatrixEntry",
    "compare",
    "equals",
    "multiply",
    "MatrixConfig",
    "SparseMatrixConfigError",
    "SparseMatrixRuntimeError",
    "InvalidDimensionRuleError",
    "DimensionError",
    "InvalidCoordinateError",
]
