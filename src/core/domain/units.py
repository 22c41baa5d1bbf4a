"""
Units: Утилиты единиц измерения и алгебра показателей

Единственный допустимый способ:
- извлечь/снять аннотацию единиц с результата (get_unit, get_unitless)
- снова обернуть результат единицами (wrap_unit)
- комбинировать UnitLookup (map_unit, map_units)

ИНВАРИАНТ: ни одна функция модуля не возвращает UnitLookup
с нулевым показателем степени.
"""

from typing import Callable

from src.core.domain.result_tree import (
    ResultMatrix,
    ResultNumber,
    ResultTree,
    ResultUnit,
    UnitLookup,
)


# =============================================================================
# ИЗВЛЕЧЕНИЕ ЕДИНИЦ
# =============================================================================


def get_unit(x: ResultTree) -> UnitLookup:
    """
    Единицы результата.

    Args:
        x: Любой результат

    Returns:
        Копия x.units для ResultUnit, иначе пустой словарь
    """
    if isinstance(x, ResultUnit):
        return dict(x.units)
    return {}


def get_unitless(x: ResultTree) -> ResultNumber | ResultMatrix:
    """
    Результат без единиц.

    Args:
        x: Любой результат

    Returns:
        x.value для ResultUnit, иначе сам x
    """
    if isinstance(x, ResultUnit):
        return x.value
    return x


def is_empty_unit(units: UnitLookup) -> bool:
    """True если в UnitLookup нет ни одной единицы"""
    return len(units) == 0


def is_same_unit(a: ResultTree, b: ResultTree) -> bool:
    """
    Совпадение единиц двух результатов.

    Совпадают набор символов и показатель каждого символа.
    Безразмерный скаляр и безразмерная матрица имеют одинаковые (пустые) единицы.
    """
    return get_unit(a) == get_unit(b)


def wrap_unit(units: UnitLookup, value: ResultNumber | ResultMatrix) -> ResultTree:
    """
    Обёртка результата единицами.

    Args:
        units: Единицы (уже скомбинированные)
        value: Безразмерный результат

    Returns:
        value без обёртки при пустых единицах, иначе ResultUnit(units, value)
    """
    if is_empty_unit(units):
        return value
    return ResultUnit(units=units, value=value)


# =============================================================================
# АЛГЕБРА ПОКАЗАТЕЛЕЙ
# =============================================================================


def map_unit(
    lookup: UnitLookup,
    mapper: Callable[[float, str], float],
) -> UnitLookup:
    """
    Отображение показателей одного UnitLookup.

    Args:
        lookup: Исходные единицы
        mapper: f(exponent, symbol) → новый показатель

    Returns:
        Новый UnitLookup; символы с нулевым результатом опущены

    Examples:
        >>> map_unit({"m": 1, "s": -2}, lambda e, _k: e * 2)
        {'m': 2, 's': -4}
        >>> map_unit({"m": 1}, lambda e, _k: 0)
        {}
    """
    result: UnitLookup = {}
    for key, exponent in lookup.items():
        new_exponent = mapper(exponent, key)
        if new_exponent != 0:
            result[key] = new_exponent
    return result


def map_units(
    a: UnitLookup,
    b: UnitLookup,
    mapper: Callable[[float, float, str], float],
) -> UnitLookup:
    """
    Попарное отображение показателей двух UnitLookup.

    Каждый символ, присутствующий хотя бы в одном из входов, посещается
    ровно один раз; отсутствующий показатель считается равным 0.

    Args:
        a: Единицы левого операнда
        b: Единицы правого операнда
        mapper: f(exponent_a, exponent_b, symbol) → новый показатель

    Returns:
        Новый UnitLookup без нулевых показателей

    Examples:
        >>> map_units({"m": 1}, {"m": 2, "s": 1}, lambda x, y, _k: x + y)
        {'m': 3, 's': 1}
        >>> map_units({"m": 1}, {"m": 1}, lambda x, y, _k: x - y)
        {}
    """
    result = map_unit(a, lambda exponent, key: mapper(exponent, b.get(key, 0), key))

    for key, exponent in b.items():
        if key in a:
            continue
        new_exponent = mapper(0, exponent, key)
        if new_exponent != 0:
            result[key] = new_exponent

    return result
