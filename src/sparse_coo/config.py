from typing import Literal
from dataclasses import dataclass

from .matrix_errors import InvalidDimensionRuleError


DIMENSION_RULES = ['declared', 'conventional']


@dataclass
class MatrixConfig:
    """
    Configuration for a SparseMatrix.

    This class defines which dimension check multiplication applies.
    Coordinates are always checked to be integers >= 1.
    """

    dimension_rule: Literal['declared', 'conventional'] = 'declared'
    """Dimension compatibility check applied by multiplication:
    - 'declared': the left operand's row count must equal the right operand's column count
    - 'conventional': the left operand's column count must equal the right operand's row count
    """

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.dimension_rule not in DIMENSION_RULES:
            raise InvalidDimensionRuleError(self.dimension_rule, DIMENSION_RULES)
