"""
Equation resolver

Бинарные операторы над ResultTree (OPERATORS), центральный диспетчер
handle_cases и вычисление разобранного дерева уравнения (resolve).
"""

from src.resolver.case_handler import Shape, handle_cases, shape_of
from src.resolver.operators import (
    OPERATORS,
    divide,
    minus,
    multiply,
    multiply_implied,
    plus,
    plus_minus,
    power,
)
from src.resolver.resolve import BINARY_NODE_OPERATORS, resolve, resolve_unit

__all__ = [
    # Case handler
    "Shape",
    "handle_cases",
    "shape_of",
    # Operators
    "OPERATORS",
    "plus",
    "minus",
    "plus_minus",
    "multiply",
    "multiply_implied",
    "divide",
    "power",
    # Resolve
    "BINARY_NODE_OPERATORS",
    "resolve",
    "resolve_unit",
]
