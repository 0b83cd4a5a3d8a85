

class SparseMatrixConfigError(ValueError):
    """Base class for sparse matrix configuration errors."""
    pass

class SparseMatrixRuntimeError(ValueError):
    """Base class for sparse matrix runtime errors."""
    pass



class InvalidDimensionRuleError(SparseMatrixConfigError):
    """Raised when an invalid dimension compatibility rule is provided."""

    def __init__(self, rule: str, valid_rules: list):
        self.rule = rule
        self.valid_rules = valid_rules
        message = f"Invalid dimension rule '{rule}'. Must be one of: {valid_rules}"
        super().__init__(message)


class DimensionError(SparseMatrixRuntimeError):
    """Raised when two matrices cannot be multiplied under the configured dimension rule."""

    def __init__(self, left_shape: tuple[int, int], right_shape: tuple[int, int], rule: str = 'declared'):
        self.left_shape = left_shape
        self.right_shape = right_shape
        self.rule = rule

        if rule == 'conventional':
            check_txt = f"left cols ({left_shape[1]}) != right rows ({right_shape[0]})"
        else:
            check_txt = f"left rows ({left_shape[0]}) != right cols ({right_shape[1]})"

        message = (
            f"Matrix multiplication not possible for shapes {left_shape} and {right_shape}: "
            f"{check_txt} under the '{rule}' dimension rule"
        )
        super().__init__(message)


class InvalidCoordinateError(SparseMatrixRuntimeError):
    """Raised when a coordinate is not a positive integer (coordinates are 1-based)."""

    def __init__(self, row, col):
        self.row = row
        self.col = col
        message = f"Invalid coordinate ({row}, {col}). Row and column must be integers >= 1"
        super().__init__(message)
