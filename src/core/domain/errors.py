"""
Errors: Типизированные ошибки вычисления уравнений

Единственная категория ошибок ядра: EquationResolveError, параметризованная
видом ошибки (ResolveErrorType) и сообщением.

Ошибки никогда не перехватываются внутри ядра: частичный результат
отбрасывается, исключение уходит к вызывающему коду.
"""

from enum import Enum
from typing import Final

# Префикс всех сообщений об ошибках вычисления
ERROR_PREFIX: Final[str] = "Equation resolve"


class ResolveErrorType(str, Enum):
    """Вид ошибки вычисления"""

    DIFFERENT_UNITS = "plusDifferentUnits"
    MATRIX_SIZE_MISMATCH = "plusMatrixMismatch"
    MATRIX_PRODUCT_MISMATCH = "multiplyMatrixMismatch"
    SCALAR_PRODUCT_UNBALANCED = "scalarProductUnbalanced"
    IMPLICIT_SCALAR_PRODUCT = "multiplyImplicitNoVectors"
    DIVIDE_BY_ZERO = "divideByZero"
    EXPONENT_UNITLESS = "powerUnitlessExponent"
    EXPONENT_NOT_NUMBER = "powerScalarExponent"
    PLUS_MINUS_UNHANDLED = "plusminusUnhandled"
    OPERATOR_UNSUPPORTED = "operatorInvalidArguments"
    MATRIX_CELL_INVALID = "matrixCellInvalid"
    VARIABLE_UNKNOWN = "variableUnknown"
    NODE_UNSUPPORTED = "nodeUnsupported"
    INVALID_NUMBER = "invalidNumber"


class EquationResolveError(Exception):
    """
    Ошибка вычисления уравнения.

    Attributes:
        error_type: Вид ошибки (для выбора диагностики на стороне вызывающего кода)
        message: Человекочитаемое описание без префикса
    """

    def __init__(self, error_type: ResolveErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(f"{ERROR_PREFIX}: {message}")
