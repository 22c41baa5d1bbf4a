"""
Contract Validation Module

Модуль для валидации JSON-формы результатов вычисления.
"""

from .validators import (
    ContractValidator,
    ResultTreeValidator,
    SchemaLoader,
    result_tree_from_json,
    result_tree_to_json,
    validate_result_tree,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ResultTreeValidator",
    # Functions
    "validate_result_tree",
    "result_tree_from_json",
    "result_tree_to_json",
]
