"""
Resolve: Вычисление разобранного дерева уравнения

Точка входа для вызывающего кода: принимает дерево узлов в JSON-форме
(как его выдаёт парсер) и явно построенную таблицу переменных,
возвращает единственный ResultTree.

Узлы:
- number:             {"type": "number", "value": "3.5"}
- variable:           {"type": "variable", "name": "x"}
- block:              {"type": "block", "child": node}
- positive/negative:  {"type": "negative", "value": node}
- positive-negative:  всегда ошибка ±
- matrix:             {"type": "matrix", "m": 2, "n": 1, "values": [[node], [node]]}
- operator-unit:      {"type": "operator-unit", "a": node, "b": unit-node}
- бинарные:           {"type": "plus", "a": node, "b": node} (см. BINARY_NODE_OPERATORS)

В поддереве единиц (operator-unit.b) каждое имя переменной: символ
единицы со значением 1: [m/s^2] → ResultUnit({m: 1, s: -2}, 1).
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Final

from src.core.domain.errors import EquationResolveError, ResolveErrorType
from src.core.domain.result_tree import ResultNumber, ResultTree, ResultUnit, value_wrap
from src.core.domain.variables import VariableLookup, default_variables
from src.core.math.matrix_ops import matrix_from_cells, negate
from src.resolver.operators import OPERATORS, multiply

logger = logging.getLogger(__name__)

EquationNode = Mapping[str, Any]

# Тип бинарного узла → символ оператора в OPERATORS
BINARY_NODE_OPERATORS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "plus": "+",
        "minus": "-",
        "plus-minus": "±",
        "multiply-dot": "*",
        "multiply-cross": "*",
        "multiply-implicit": "**",
        "divide-fraction": "/",
        "divide-inline": "/",
        "power": "^",
    }
)


def resolve(node: EquationNode, variables: VariableLookup | None = None) -> ResultTree:
    """
    Вычисление дерева уравнения.

    Args:
        node: Корневой узел дерева
        variables: Таблица переменных (default: default_variables())

    Returns:
        Результат вычисления

    Raises:
        EquationResolveError: Любая ошибка вычисления (первая встреченная)
    """
    lookup = default_variables() if variables is None else variables
    logger.debug("Resolving equation tree, root node type %r", node.get("type"))

    def resolve_variable(name: str) -> ResultTree:
        if name not in lookup:
            raise EquationResolveError(
                ResolveErrorType.VARIABLE_UNKNOWN, f"unknown variable {name}"
            )
        return lookup[name]

    try:
        return _resolve_node(node, resolve_variable)
    except EquationResolveError as error:
        logger.debug("Equation resolve failed (%s): %s", error.error_type.value, error.message)
        raise


def resolve_unit(node: EquationNode) -> ResultTree:
    """
    Вычисление поддерева единиц.

    Каждая переменная: символ единицы: name → ResultUnit({name: 1}, 1).
    """
    return _resolve_node(node, _unit_symbol)


def _unit_symbol(name: str) -> ResultTree:
    return ResultUnit(units={name: 1}, value=value_wrap(1.0))


def _resolve_node(
    node: EquationNode,
    resolve_variable: Callable[[str], ResultTree],
) -> ResultTree:
    node_type = node.get("type")

    if node_type == "number":
        return _resolve_number(node["value"])

    if node_type == "variable":
        return resolve_variable(node["name"])

    if node_type == "block":
        return _resolve_node(node["child"], resolve_variable)

    if node_type == "positive":
        return _resolve_node(node["value"], resolve_variable)

    if node_type == "negative":
        return negate(_resolve_node(node["value"], resolve_variable))

    if node_type == "positive-negative":
        raise EquationResolveError(
            ResolveErrorType.PLUS_MINUS_UNHANDLED, "cannot handle ± operator"
        )

    if node_type == "matrix":
        return _resolve_matrix(node, resolve_variable)

    if node_type == "operator-unit":
        return multiply(
            _resolve_node(node["a"], resolve_variable),
            resolve_unit(node["b"]),
        )

    if node_type in BINARY_NODE_OPERATORS:
        operator = OPERATORS[BINARY_NODE_OPERATORS[node_type]]
        return operator(
            _resolve_node(node["a"], resolve_variable),
            _resolve_node(node["b"], resolve_variable),
        )

    raise EquationResolveError(
        ResolveErrorType.NODE_UNSUPPORTED, f"cannot resolve node of type {node_type}"
    )


def _resolve_number(raw: str | float) -> ResultNumber:
    try:
        return value_wrap(float(raw))
    except (TypeError, ValueError):
        raise EquationResolveError(
            ResolveErrorType.INVALID_NUMBER, f"invalid number {raw!r}"
        ) from None


def _resolve_matrix(
    node: EquationNode,
    resolve_variable: Callable[[str], ResultTree],
) -> ResultTree:
    rows: list[list[ResultNumber]] = []
    for row in node["values"]:
        cells: list[ResultNumber] = []
        for cell_node in row:
            cell = _resolve_node(cell_node, resolve_variable)
            if not isinstance(cell, ResultNumber):
                raise EquationResolveError(
                    ResolveErrorType.MATRIX_CELL_INVALID,
                    "matrix cells must be unitless numbers",
                )
            cells.append(cell)
        rows.append(cells)
    return matrix_from_cells(rows)
