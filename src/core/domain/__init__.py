"""
Domain models and value objects.

Contains the result tree variants, unit utilities, typed errors and the
variable table.
"""

from src.core.domain.errors import ERROR_PREFIX, EquationResolveError, ResolveErrorType
from src.core.domain.result_tree import (
    RESULT_TREE_ADAPTER,
    ResultMatrix,
    ResultNumber,
    ResultTree,
    ResultUnit,
    UnitLookup,
    value_wrap,
)
from src.core.domain.units import (
    get_unit,
    get_unitless,
    is_empty_unit,
    is_same_unit,
    map_unit,
    map_units,
    wrap_unit,
)
from src.core.domain.variables import (
    DEFAULT_CONSTANTS,
    VariableLookup,
    build_variable_lookup,
    default_variables,
)

__all__ = [
    # Errors
    "ERROR_PREFIX",
    "EquationResolveError",
    "ResolveErrorType",
    # Result tree
    "RESULT_TREE_ADAPTER",
    "ResultMatrix",
    "ResultNumber",
    "ResultTree",
    "ResultUnit",
    "UnitLookup",
    "value_wrap",
    # Units
    "get_unit",
    "get_unitless",
    "is_empty_unit",
    "is_same_unit",
    "map_unit",
    "map_units",
    "wrap_unit",
    # Variables
    "DEFAULT_CONSTANTS",
    "VariableLookup",
    "build_variable_lookup",
    "default_variables",
]
