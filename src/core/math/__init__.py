"""
Core math modules

Скалярные примитивы с IEEE-семантикой и матричные операции над ResultTree.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    ieee_pow,
    is_exact_zero,
    is_valid_float,
    sum_of_products,
)

# Matrix Ops
from src.core.math.matrix_ops import (
    is_column_vector,
    map_matrix,
    matrix_from_cells,
    matrix_product,
    negate,
    scalar_product,
    shape_label,
)

__all__ = [
    # Numerical Safeguards
    "ieee_pow",
    "is_exact_zero",
    "is_valid_float",
    "sum_of_products",
    # Matrix Ops: Construction
    "matrix_from_cells",
    "shape_label",
    "is_column_vector",
    # Matrix Ops: Functions
    "map_matrix",
    "negate",
    "scalar_product",
    "matrix_product",
]
