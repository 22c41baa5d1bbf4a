"""
Variables: Таблица переменных для вычисления уравнений

Таблица строится явно и передаётся в точку входа вычисления;
глобального изменяемого состояния нет. Все таблицы read-only (MappingProxyType).
"""

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from src.core.domain.result_tree import ResultTree, value_wrap

# Имя переменной → значение
VariableLookup = Mapping[str, ResultTree]

# Константы, доступные по умолчанию (стандартные double-приближения)
DEFAULT_CONSTANTS: Final[Mapping[str, float]] = MappingProxyType(
    {
        "e": math.e,
        "pi": math.pi,
        "π": math.pi,
    }
)


def default_variables() -> VariableLookup:
    """
    Таблица переменных по умолчанию: e, pi, π.

    Returns:
        Read-only таблица со скалярами DEFAULT_CONSTANTS
    """
    return MappingProxyType({name: value_wrap(value) for name, value in DEFAULT_CONSTANTS.items()})


def build_variable_lookup(
    variables: Mapping[str, ResultTree] | None = None,
    include_defaults: bool = True,
) -> VariableLookup:
    """
    Построение read-only таблицы переменных.

    Пользовательские переменные перекрывают константы по умолчанию.

    Args:
        variables: Пользовательские переменные (optional)
        include_defaults: Добавить e, pi, π (default: True)

    Returns:
        Read-only таблица переменных
    """
    table: dict[str, ResultTree] = {}
    if include_defaults:
        table.update(default_variables())
    if variables is not None:
        table.update(variables)
    return MappingProxyType(table)
