"""
Operators: Реализации бинарных операторов и таблица диспетчеризации

| Оператор | Функция          | Правило единиц                     |
|----------|------------------|------------------------------------|
| +        | plus             | единицы должны совпадать           |
| -        | minus            | plus(a, negate(b))                 |
| ±        | plus_minus       | всегда ошибка                      |
| *        | multiply         | показатели складываются            |
| **       | multiply_implied | как *, без скалярного произведения |
| /        | divide           | показатели вычитаются              |
| ^        | power            | показатели умножаются на степень   |

OPERATORS: единственная функциональная поверхность для вызывающего кода.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, Final

from src.core.domain.errors import EquationResolveError, ResolveErrorType
from src.core.domain.result_tree import (
    ResultMatrix,
    ResultNumber,
    ResultTree,
    ResultUnit,
    UnitLookup,
    value_wrap,
)
from src.core.domain.units import get_unitless, map_unit, map_units
from src.core.math.matrix_ops import (
    is_column_vector,
    map_matrix,
    matrix_product,
    negate,
    scalar_product,
    shape_label,
)
from src.core.math.numerical_safeguards import ieee_pow, is_exact_zero
from src.resolver.case_handler import handle_cases

BinaryOperator = Callable[[ResultTree, ResultTree], ResultTree]


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def _require_same_units(a: UnitLookup, b: UnitLookup) -> UnitLookup:
    if a != b:
        raise EquationResolveError(
            ResolveErrorType.DIFFERENT_UNITS, "cannot add different units"
        )
    return a


def _add_matrices(a: ResultMatrix, b: ResultMatrix) -> ResultMatrix:
    if a.m != b.m or a.n != b.n:
        raise EquationResolveError(
            ResolveErrorType.MATRIX_SIZE_MISMATCH,
            f"cannot add {shape_label(a)} matrix to {shape_label(b)} matrix",
        )
    return ResultMatrix(
        m=a.m,
        n=a.n,
        values=tuple(
            tuple(plus(cell, b_cell) for cell, b_cell in zip(row, b_row))
            for row, b_row in zip(a.values, b.values)
        ),
    )


def plus(a: ResultTree, b: ResultTree) -> ResultTree:
    """
    Сложение.

    Скаляр + матрица прибавляет скаляр к каждой ячейке.
    Сумма, равная скалярному нулю, возвращается без единиц:
    3[m] - 3[m] == 0.
    """
    result = handle_cases(
        a,
        b,
        _require_same_units,
        number_number=lambda x, y: value_wrap(x.value + y.value),
        number_matrix=lambda x, y: map_matrix(y, lambda cell: plus(x, cell)),
        matrix_number=lambda x, y: map_matrix(x, lambda cell: plus(cell, y)),
        matrix_matrix=_add_matrices,
    )

    if (
        isinstance(result, ResultUnit)
        and isinstance(result.value, ResultNumber)
        and is_exact_zero(result.value.value)
    ):
        return result.value
    return result


def minus(a: ResultTree, b: ResultTree) -> ResultTree:
    """Вычитание: a + (-b)"""
    return plus(a, negate(b))


def plus_minus(a: ResultTree, b: ResultTree) -> ResultTree:
    raise EquationResolveError(
        ResolveErrorType.PLUS_MINUS_UNHANDLED, "cannot handle ± operator"
    )


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def _add_exponents(a: UnitLookup, b: UnitLookup) -> UnitLookup:
    return map_units(a, b, lambda x, y, _key: x + y)


def _multiply_matrices(a: ResultMatrix, b: ResultMatrix) -> ResultNumber | ResultMatrix:
    if is_column_vector(a) and is_column_vector(b):
        return scalar_product(a, b)
    return matrix_product(a, b)


def _multiply_matrices_implied(a: ResultMatrix, b: ResultMatrix) -> ResultMatrix:
    if is_column_vector(a) and is_column_vector(b):
        raise EquationResolveError(
            ResolveErrorType.IMPLICIT_SCALAR_PRODUCT,
            "cannot use implied multiplication for scalar product",
        )
    return matrix_product(a, b)


def multiply(a: ResultTree, b: ResultTree) -> ResultTree:
    """
    Умножение.

    Матрица × матрица:
    - оба операнда столбцы (n == 1) → скалярное произведение (ResultNumber)
    - иначе → произведение матриц
    """
    return handle_cases(
        a,
        b,
        _add_exponents,
        number_number=lambda x, y: value_wrap(x.value * y.value),
        number_matrix=lambda x, y: map_matrix(y, lambda cell: multiply(x, cell)),
        matrix_number=lambda x, y: map_matrix(x, lambda cell: multiply(cell, y)),
        matrix_matrix=_multiply_matrices,
    )


def multiply_implied(a: ResultTree, b: ResultTree) -> ResultTree:
    """
    Неявное умножение (2x, 3[m], AB).

    Совпадает с multiply, кроме двух столбцов-векторов: скалярное
    произведение через неявное умножение запрещено.
    """
    return handle_cases(
        a,
        b,
        _add_exponents,
        number_number=lambda x, y: value_wrap(x.value * y.value),
        number_matrix=lambda x, y: map_matrix(y, lambda cell: multiply(x, cell)),
        matrix_number=lambda x, y: map_matrix(x, lambda cell: multiply(cell, y)),
        matrix_matrix=_multiply_matrices_implied,
    )


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divide(a: ResultTree, b: ResultTree) -> ResultTree:
    """
    Деление.

    Скалярный делитель, точно равный 0, отклоняется до диспетчеризации
    независимо от единиц. Скаляр / матрица делит скаляр на каждую ячейку,
    матрица / скаляр: каждую ячейку на скаляр. Деление на матрицу
    не поддерживается.

    Raises:
        EquationResolveError: Деление на 0 или на матрицу
    """
    divisor = get_unitless(b)
    if isinstance(divisor, ResultNumber) and is_exact_zero(divisor.value):
        raise EquationResolveError(ResolveErrorType.DIVIDE_BY_ZERO, "cannot divide by 0")

    return handle_cases(
        a,
        b,
        lambda x, y: map_units(x, y, lambda factor_a, factor_b, _key: factor_a - factor_b),
        number_number=lambda x, y: value_wrap(x.value / y.value),
        number_matrix=lambda x, y: map_matrix(y, lambda cell: divide(x, cell)),
        matrix_number=lambda x, y: map_matrix(x, lambda cell: divide(cell, y)),
    )


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def power(a: ResultTree, b: ResultTree) -> ResultTree:
    """
    Возведение в степень.

    Показатель обязан быть безразмерным скаляром. Единицы основания
    умножаются на показатель: (2[m])^3 == 8[m^3]. Матрица возводится
    в степень поэлементно.

    Raises:
        EquationResolveError: Показатель с единицами, показатель-матрица,
            скаляр в степени матрицы
    """
    if isinstance(b, ResultUnit):
        raise EquationResolveError(
            ResolveErrorType.EXPONENT_UNITLESS, "exponent must be unitless"
        )
    if not isinstance(b, ResultNumber):
        raise EquationResolveError(
            ResolveErrorType.EXPONENT_NOT_NUMBER, "exponent must be a number"
        )
    exponent = b.value

    return handle_cases(
        a,
        b,
        lambda x, _y: map_unit(x, lambda factor, _key: factor * exponent),
        number_number=lambda x, y: value_wrap(ieee_pow(x.value, y.value)),
        matrix_number=lambda x, y: map_matrix(
            x, lambda cell: value_wrap(ieee_pow(cell.value, y.value))
        ),
    )


# =============================================================================
# ТАБЛИЦА ОПЕРАТОРОВ
# =============================================================================

OPERATORS: Final[Mapping[str, BinaryOperator]] = MappingProxyType(
    {
        "+": plus,
        "-": minus,
        "±": plus_minus,
        "*": multiply,
        "**": multiply_implied,
        "/": divide,
        "^": power,
    }
)
