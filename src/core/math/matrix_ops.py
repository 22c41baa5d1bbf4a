"""
Matrix Ops: Матричные примитивы вычисления уравнений

- map_matrix: поэлементное применение скалярной операции с сохранением формы
- negate: смена знака каждого скалярного листа (единицы и форма сохраняются)
- scalar_product: скалярное произведение двух столбцов-векторов
- matrix_product: стандартное произведение строк на столбцы

Все функции чистые: операнды не изменяются, возвращается новое дерево.
"""

from collections.abc import Sequence
from typing import Callable

from src.core.domain.errors import EquationResolveError, ResolveErrorType
from src.core.domain.result_tree import (
    ResultMatrix,
    ResultNumber,
    ResultTree,
    ResultUnit,
    value_wrap,
)
from src.core.math.numerical_safeguards import sum_of_products


# =============================================================================
# ПОСТРОЕНИЕ И ФОРМА
# =============================================================================


def matrix_from_cells(rows: Sequence[Sequence[ResultNumber]]) -> ResultMatrix:
    """
    Построение матрицы по строкам; m и n берутся из данных.

    Raises:
        pydantic.ValidationError: Если матрица пустая или строки разной длины
    """
    m = len(rows)
    n = len(rows[0]) if rows else 0
    return ResultMatrix(m=m, n=n, values=tuple(tuple(row) for row in rows))


def shape_label(x: ResultMatrix) -> str:
    """Размер матрицы в виде 'RxC' для сообщений об ошибках"""
    return f"{x.m}x{x.n}"


def is_column_vector(x: ResultMatrix) -> bool:
    return x.n == 1


# =============================================================================
# ПОЭЛЕМЕНТНЫЕ ОПЕРАЦИИ
# =============================================================================


def map_matrix(
    matrix: ResultMatrix,
    mapper: Callable[[ResultNumber], ResultNumber],
) -> ResultMatrix:
    """
    Применение mapper к каждой ячейке матрицы.

    Args:
        matrix: Исходная матрица
        mapper: Скалярная операция над ячейкой

    Returns:
        Новая матрица той же формы

    Исключения, брошенные mapper, пробрасываются без изменений.
    """
    return ResultMatrix(
        m=matrix.m,
        n=matrix.n,
        values=tuple(tuple(mapper(cell) for cell in row) for row in matrix.values),
    )


def negate(x: ResultTree) -> ResultTree:
    """
    Смена знака результата.

    Эквивалентно умножению на -1, но без участия алгебры единиц:
    единицы и форма матрицы сохраняются как есть.
    """
    if isinstance(x, ResultUnit):
        return ResultUnit(units=x.units, value=negate(x.value))
    if isinstance(x, ResultMatrix):
        return map_matrix(x, negate)
    return value_wrap(-x.value)


# =============================================================================
# ПРОИЗВЕДЕНИЯ
# =============================================================================


def scalar_product(a: ResultMatrix, b: ResultMatrix) -> ResultNumber:
    """
    Скалярное произведение двух столбцов-векторов.

    Args:
        a: Столбец m×1
        b: Столбец m×1

    Returns:
        Σ a_i * b_i

    Raises:
        EquationResolveError: Если длины векторов различаются
    """
    if a.m != b.m:
        raise EquationResolveError(
            ResolveErrorType.SCALAR_PRODUCT_UNBALANCED,
            "scalar product requires balanced vectors",
        )
    return value_wrap(
        sum_of_products((a_row[0].value, b_row[0].value) for a_row, b_row in zip(a.values, b.values))
    )


def matrix_product(a: ResultMatrix, b: ResultMatrix) -> ResultMatrix:
    """
    Произведение матриц: (m×k) · (k×n) → m×n.

    Raises:
        EquationResolveError: Если a.n != b.m
    """
    if a.n != b.m:
        raise EquationResolveError(
            ResolveErrorType.MATRIX_PRODUCT_MISMATCH,
            f"cannot multiply {shape_label(a)} matrix with {shape_label(b)} matrix",
        )

    columns = [[row[col].value for row in b.values] for col in range(b.n)]
    return ResultMatrix(
        m=a.m,
        n=b.n,
        values=tuple(
            tuple(
                value_wrap(sum_of_products(zip((cell.value for cell in row), column)))
                for column in columns
            )
            for row in a.values
        ),
    )
