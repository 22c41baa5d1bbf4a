"""
Numerical Safeguards: Скалярные примитивы для вычисления уравнений

Все значения: стандартные IEEE double. Модуль гарантирует, что скалярные
операции ведут себя как IEEE-арифметика, а не бросают исключения Python:
- Проверка точного нуля делителя (единственный случай, когда деление запрещено)
- Возведение в степень с IEEE-семантикой (NaN/Inf вместо ValueError/OverflowError)
- Сумма попарных произведений (скалярное/матричное произведение)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сравнение с нулём делителя: точное, без epsilon
2. ieee_pow никогда не бросает исключение для float-аргументов
3. Все операции детерминированы и воспроизводимы
"""

import math
from collections.abc import Iterable


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float конечным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def is_exact_zero(value: float) -> bool:
    """
    Точная проверка на ноль (0.0 и -0.0).

    Без epsilon: делитель 1e-300 допустим, делитель 0 запрещён.
    """
    return value == 0.0


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and float(value).is_integer() and int(value) % 2 == 1


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def ieee_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень с IEEE-семантикой.

    math.pow бросает ValueError/OverflowError там, где IEEE pow
    возвращает NaN или ±Inf. Функция восстанавливает IEEE-результат.

    Args:
        base: Основание
        exponent: Показатель

    Returns:
        base ** exponent

    Examples:
        >>> ieee_pow(2.0, 3.0)
        8.0
        >>> ieee_pow(-8.0, 1 / 3)
        nan
        >>> ieee_pow(0.0, -1.0)
        inf
        >>> ieee_pow(-10.0, 401.0)
        -inf
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        magnitude = math.inf
    except ValueError:
        # Отрицательное основание с дробным показателем
        if base != 0.0:
            return math.nan
        # 0 в отрицательной степени
        magnitude = math.inf

    negative_base = base < 0 or math.copysign(1.0, base) < 0
    if negative_base and _is_odd_integer(exponent):
        return -magnitude
    return magnitude


# =============================================================================
# СУММЫ
# =============================================================================


def sum_of_products(pairs: Iterable[tuple[float, float]]) -> float:
    """
    Сумма попарных произведений.

    Накопление слева направо, начиная с 0: как в наивном inner product.

    Args:
        pairs: Пары (x_i, y_i)

    Returns:
        Σ x_i * y_i
    """
    total = 0.0
    for x, y in pairs:
        total += x * y
    return total
