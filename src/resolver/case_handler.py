"""
Case Handler: Центральный диспетчер бинарных операторов

Объединяет в одном месте:
1. Алгебру единиц: снятие обёртки единиц, комбинирование UnitLookup
   (ровно один раз на вызов), повторная обёртка результата
2. Диспетчеризацию по форме операндов: закрытое множество пар
   (NUMBER|MATRIX) × (NUMBER|MATRIX)

Каждый оператор: лишь декларация четырёх shape-комбинаторов
и правила комбинирования единиц.

ИНВАРИАНТ: результат содержит не более одного уровня ResultUnit.
"""

from enum import Enum
from typing import Any, Callable, Optional

from src.core.domain.errors import EquationResolveError, ResolveErrorType
from src.core.domain.result_tree import (
    ResultMatrix,
    ResultNumber,
    ResultTree,
    ResultUnit,
    UnitLookup,
)
from src.core.domain.units import get_unit, get_unitless, wrap_unit

# Комбинатор для одной пары форм; None означает «не поддерживается»
ShapeCombinator = Callable[[Any, Any], ResultTree]
UnitCombiner = Callable[[UnitLookup, UnitLookup], UnitLookup]


class Shape(str, Enum):
    """Форма безразмерного операнда"""

    NUMBER = "number"
    MATRIX = "matrix"


def shape_of(x: ResultTree) -> Shape:
    """
    Форма безразмерного операнда.

    Raises:
        EquationResolveError: Если операнд не ResultNumber/ResultMatrix
    """
    if isinstance(x, ResultNumber):
        return Shape.NUMBER
    if isinstance(x, ResultMatrix):
        return Shape.MATRIX
    raise EquationResolveError(ResolveErrorType.OPERATOR_UNSUPPORTED, "cannot handle operator")


def handle_cases(
    a: ResultTree,
    b: ResultTree,
    combine_units: UnitCombiner,
    number_number: Optional[ShapeCombinator] = None,
    number_matrix: Optional[ShapeCombinator] = None,
    matrix_number: Optional[ShapeCombinator] = None,
    matrix_matrix: Optional[ShapeCombinator] = None,
) -> ResultTree:
    """
    Вычисление бинарного оператора по его декларации.

    Алгоритм:
    1. Если хотя бы один операнд ResultUnit:
       units = combine_units(get_unit(a), get_unit(b)), затем рекурсия
       на безразмерных значениях с теми же комбинаторами и обёртка
       результата units (без обёртки, если units пуст).
    2. Иначе: вызов комбинатора для пары форм (a, b).

    Args:
        a: Левый операнд
        b: Правый операнд
        combine_units: Правило комбинирования единиц оператора
        number_number: Комбинатор (скаляр, скаляр)
        number_matrix: Комбинатор (скаляр, матрица)
        matrix_number: Комбинатор (матрица, скаляр)
        matrix_matrix: Комбинатор (матрица, матрица)

    Returns:
        Результат оператора

    Raises:
        EquationResolveError: Если комбинатор для пары форм отсутствует,
            либо ошибку бросил combine_units или сам комбинатор
    """
    if isinstance(a, ResultUnit) or isinstance(b, ResultUnit):
        units = combine_units(get_unit(a), get_unit(b))

        result = handle_cases(
            get_unitless(a),
            get_unitless(b),
            combine_units,
            number_number,
            number_matrix,
            matrix_number,
            matrix_matrix,
        )

        return wrap_unit(units, result)

    combinators: dict[tuple[Shape, Shape], Optional[ShapeCombinator]] = {
        (Shape.NUMBER, Shape.NUMBER): number_number,
        (Shape.NUMBER, Shape.MATRIX): number_matrix,
        (Shape.MATRIX, Shape.NUMBER): matrix_number,
        (Shape.MATRIX, Shape.MATRIX): matrix_matrix,
    }
    combinator = combinators[(shape_of(a), shape_of(b))]
    if combinator is None:
        raise EquationResolveError(ResolveErrorType.OPERATOR_UNSUPPORTED, "cannot handle operator")

    return combinator(a, b)
