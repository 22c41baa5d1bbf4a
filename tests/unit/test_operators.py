"""
Тесты для операторов и таблицы OPERATORS

Проверяет:
1. Коммутативность + и * на скалярах
2. Сохранение и отклонение единиц при сложении/вычитании
3. Проверки размеров матриц
4. Скалярное произведение через * и запрет через неявное умножение
5. Деление на ноль и деление на матрицу
6. Масштабирование единиц при возведении в степень
7. Отсутствие нулевых показателей в результатах
"""

import math

import pytest

from src.core.domain import EquationResolveError, ResolveErrorType
from src.core.domain.result_tree import ResultMatrix, ResultNumber, ResultTree, ResultUnit
from src.core.math.matrix_ops import matrix_from_cells
from src.resolver.operators import (
    OPERATORS,
    divide,
    minus,
    multiply,
    multiply_implied,
    plus,
    plus_minus,
    power,
)


def num(x: float) -> ResultNumber:
    return ResultNumber(value=x)


def mat(rows: list[list[float]]) -> ResultMatrix:
    return matrix_from_cells([[num(x) for x in row] for row in rows])


def with_units(value: ResultNumber | ResultMatrix, **units: float) -> ResultUnit:
    return ResultUnit(units=units, value=value)


def column(*xs: float) -> ResultMatrix:
    return mat([[x] for x in xs])


SCALAR_PAIRS = [(3.0, 4.0), (-1.5, 2.25), (0.0, 7.0), (1e10, -3e-5)]


# =============================================================================
# ТАБЛИЦА ОПЕРАТОРОВ
# =============================================================================


class TestOperatorTable:
    """Тесты для OPERATORS"""

    def test_symbols(self) -> None:
        assert set(OPERATORS) == {"+", "-", "±", "*", "**", "/", "^"}

    def test_functions(self) -> None:
        assert OPERATORS["+"] is plus
        assert OPERATORS["-"] is minus
        assert OPERATORS["±"] is plus_minus
        assert OPERATORS["*"] is multiply
        assert OPERATORS["**"] is multiply_implied
        assert OPERATORS["/"] is divide
        assert OPERATORS["^"] is power

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            OPERATORS["%"] = plus  # type: ignore[index]


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


class TestPlus:
    """Тесты для plus"""

    @pytest.mark.parametrize("a, b", SCALAR_PAIRS)
    def test_commutative(self, a: float, b: float) -> None:
        """a + b == b + a"""
        assert plus(num(a), num(b)) == plus(num(b), num(a))

    def test_sum(self) -> None:
        assert plus(num(3), num(4)) == num(7)

    def test_same_units_preserved(self) -> None:
        """3[m] + 4[m] = 7[m]"""
        result = plus(with_units(num(3), m=1), with_units(num(4), m=1))
        assert result == with_units(num(7), m=1)

    def test_different_units_rejected(self) -> None:
        """3[m] + 4[s]: ошибка"""
        with pytest.raises(EquationResolveError, match="cannot add different units") as exc:
            plus(with_units(num(3), m=1), with_units(num(4), s=1))
        assert exc.value.error_type == ResolveErrorType.DIFFERENT_UNITS

    def test_unit_and_unitless_rejected(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot add different units"):
            plus(with_units(num(3), m=1), num(4))

    def test_different_exponent_rejected(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot add different units"):
            plus(with_units(num(3), m=1), with_units(num(4), m=2))

    def test_number_plus_matrix(self) -> None:
        """Скаляр прибавляется к каждой ячейке"""
        assert plus(num(1), mat([[1, 2], [3, 4]])) == mat([[2, 3], [4, 5]])
        assert plus(mat([[1, 2], [3, 4]]), num(1)) == mat([[2, 3], [4, 5]])

    def test_matrix_plus_matrix(self) -> None:
        result = plus(mat([[1, 2], [3, 4]]), mat([[10, 20], [30, 40]]))
        assert result == mat([[11, 22], [33, 44]])

    def test_matrix_shape_mismatch(self) -> None:
        """2×2 + 3×3: ошибка"""
        a = mat([[1, 2], [3, 4]])
        b = mat([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        with pytest.raises(EquationResolveError, match="cannot add 2x2 matrix to 3x3 matrix") as exc:
            plus(a, b)
        assert exc.value.error_type == ResolveErrorType.MATRIX_SIZE_MISMATCH

    def test_transposed_shape_mismatch(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot add 1x2 matrix to 2x1 matrix"):
            plus(mat([[1, 2]]), column(1, 2))

    def test_unit_matrices(self) -> None:
        result = plus(with_units(mat([[1, 2]]), m=1), with_units(mat([[3, 4]]), m=1))
        assert result == with_units(mat([[4, 6]]), m=1)

    def test_operands_unchanged(self) -> None:
        a = with_units(mat([[1, 2]]), m=1)
        b = with_units(mat([[3, 4]]), m=1)
        plus(a, b)
        assert a == with_units(mat([[1, 2]]), m=1)
        assert b == with_units(mat([[3, 4]]), m=1)


class TestMinus:
    """Тесты для minus"""

    def test_difference(self) -> None:
        assert minus(num(10), num(4)) == num(6)

    def test_same_units(self) -> None:
        assert minus(with_units(num(5), m=1), with_units(num(3), m=1)) == with_units(num(2), m=1)

    def test_cancelled_quantity_is_bare_zero(self) -> None:
        """3[m] - 3[m] = 0 без единиц"""
        result = minus(with_units(num(3), m=1), with_units(num(3), m=1))
        assert result == num(0)
        assert isinstance(result, ResultNumber)

    def test_different_units_rejected(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot add different units"):
            minus(with_units(num(3), m=1), with_units(num(3), s=1))

    def test_matrices(self) -> None:
        assert minus(mat([[5, 5]]), mat([[1, 2]])) == mat([[4, 3]])

    def test_matrix_shape_mismatch(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot add 2x2 matrix to 3x3 matrix"):
            minus(mat([[1, 2], [3, 4]]), mat([[1, 2, 3], [4, 5, 6], [7, 8, 9]]))


class TestPlusMinus:
    """Тесты для plus_minus"""

    @pytest.mark.parametrize(
        "a, b",
        [
            (num(1), num(2)),
            (mat([[1]]), num(2)),
            (with_units(num(1), m=1), with_units(num(1), m=1)),
        ],
    )
    def test_always_rejected(self, a: ResultTree, b: ResultTree) -> None:
        with pytest.raises(EquationResolveError, match="cannot handle ± operator") as exc:
            plus_minus(a, b)
        assert exc.value.error_type == ResolveErrorType.PLUS_MINUS_UNHANDLED


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


class TestMultiply:
    """Тесты для multiply"""

    @pytest.mark.parametrize("a, b", SCALAR_PAIRS)
    def test_commutative(self, a: float, b: float) -> None:
        """a * b == b * a"""
        assert multiply(num(a), num(b)) == multiply(num(b), num(a))

    def test_product(self) -> None:
        assert multiply(num(3), num(4)) == num(12)

    def test_exponents_added(self) -> None:
        """2[m] * 3[s] = 6[m s]"""
        result = multiply(with_units(num(2), m=1), with_units(num(3), s=1))
        assert result == with_units(num(6), m=1, s=1)

    def test_same_unit_squared(self) -> None:
        result = multiply(with_units(num(2), m=1), with_units(num(3), m=1))
        assert result == with_units(num(6), m=2)

    def test_cancelled_units_dropped(self) -> None:
        """2[m] * 3[m^-1] = 6 без единиц"""
        result = multiply(with_units(num(2), m=1), with_units(num(3), m=-1))
        assert result == num(6)

    def test_unit_times_unitless(self) -> None:
        assert multiply(num(2), with_units(num(3), kg=1)) == with_units(num(6), kg=1)

    def test_number_times_matrix(self) -> None:
        assert multiply(num(2), mat([[1, 2], [3, 4]])) == mat([[2, 4], [6, 8]])
        assert multiply(mat([[1, 2], [3, 4]]), num(2)) == mat([[2, 4], [6, 8]])

    def test_matrix_product(self) -> None:
        """2×3 · 3×2 → 2×2"""
        result = multiply(mat([[1, 2, 3], [4, 5, 6]]), mat([[7, 8], [9, 10], [11, 12]]))
        assert result == mat([[58, 64], [139, 154]])

    def test_matrix_product_mismatch(self) -> None:
        """2×3 · 2×2: ошибка"""
        with pytest.raises(EquationResolveError, match="cannot multiply 2x3 matrix with 2x2 matrix"):
            multiply(mat([[1, 2, 3], [4, 5, 6]]), mat([[1, 2], [3, 4]]))

    def test_scalar_product(self) -> None:
        """[1,2,3]ᵗ * [4,5,6]ᵗ = 32"""
        assert multiply(column(1, 2, 3), column(4, 5, 6)) == num(32)

    def test_scalar_product_unbalanced(self) -> None:
        with pytest.raises(EquationResolveError, match="scalar product requires balanced vectors"):
            multiply(column(1, 2, 3), column(4, 5))

    def test_scalar_product_with_units(self) -> None:
        result = multiply(with_units(column(1, 2, 3), m=1), with_units(column(4, 5, 6), m=1))
        assert result == with_units(num(32), m=2)

    def test_row_times_column_is_matrix(self) -> None:
        """1×2 · 2×1: произведение матриц, не скалярное"""
        assert multiply(mat([[1, 2]]), column(3, 4)) == mat([[11]])


class TestMultiplyImplied:
    """Тесты для multiply_implied"""

    def test_same_as_multiply_for_scalars(self) -> None:
        assert multiply_implied(num(3), with_units(num(1), m=1)) == with_units(num(3), m=1)

    def test_matrix_product(self) -> None:
        result = multiply_implied(mat([[1, 2, 3], [4, 5, 6]]), mat([[7, 8], [9, 10], [11, 12]]))
        assert result == mat([[58, 64], [139, 154]])

    def test_number_times_matrix(self) -> None:
        assert multiply_implied(num(3), mat([[1, 2]])) == mat([[3, 6]])

    def test_scalar_product_rejected(self) -> None:
        """Скалярное произведение через неявное умножение запрещено"""
        with pytest.raises(
            EquationResolveError,
            match="cannot use implied multiplication for scalar product",
        ) as exc:
            multiply_implied(column(1, 2, 3), column(4, 5, 6))
        assert exc.value.error_type == ResolveErrorType.IMPLICIT_SCALAR_PRODUCT

    def test_scalar_product_with_units_rejected(self) -> None:
        with pytest.raises(EquationResolveError, match="implied multiplication"):
            multiply_implied(with_units(column(1, 2), m=1), column(3, 4))


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


class TestDivide:
    """Тесты для divide"""

    def test_quotient(self) -> None:
        assert divide(num(6), num(3)) == num(2)

    @pytest.mark.parametrize(
        "a, b",
        [
            (num(5), num(0)),
            (num(5), num(-0.0)),
            (with_units(num(5), m=1), num(0)),
            (num(5), with_units(num(0), s=1)),
            (with_units(num(5), m=1), with_units(num(0), m=1)),
            (mat([[1, 2]]), num(0)),
        ],
    )
    def test_divide_by_zero(self, a: ResultTree, b: ResultTree) -> None:
        """Деление на 0: ошибка независимо от единиц"""
        with pytest.raises(EquationResolveError, match="cannot divide by 0") as exc:
            divide(a, b)
        assert exc.value.error_type == ResolveErrorType.DIVIDE_BY_ZERO

    def test_number_by_matrix_with_zero_cell(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot divide by 0"):
            divide(num(1), mat([[1, 0]]))

    def test_exponents_subtracted(self) -> None:
        """6[m] / 2[s] = 3[m s^-1]"""
        result = divide(with_units(num(6), m=1), with_units(num(2), s=1))
        assert result == with_units(num(3), m=1, s=-1)

    def test_same_units_cancel(self) -> None:
        assert divide(with_units(num(6), m=1), with_units(num(2), m=1)) == num(3)

    def test_unitless_by_unit(self) -> None:
        assert divide(num(1), with_units(num(4), s=1)) == with_units(num(0.25), s=-1)

    def test_matrix_by_number(self) -> None:
        assert divide(mat([[2, 4], [6, 8]]), num(2)) == mat([[1, 2], [3, 4]])

    def test_number_by_matrix(self) -> None:
        """Скаляр делится на каждую ячейку"""
        assert divide(num(12), mat([[2, 3]])) == mat([[6, 4]])

    def test_matrix_by_matrix_rejected(self) -> None:
        with pytest.raises(EquationResolveError, match="cannot handle operator") as exc:
            divide(mat([[1]]), mat([[1]]))
        assert exc.value.error_type == ResolveErrorType.OPERATOR_UNSUPPORTED


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


class TestPower:
    """Тесты для power"""

    def test_scalar(self) -> None:
        assert power(num(2), num(3)) == num(8)

    def test_unit_scaling(self) -> None:
        """(2[m])^3 = 8[m^3]"""
        assert power(with_units(num(2), m=1), num(3)) == with_units(num(8), m=3)

    def test_compound_unit_scaling(self) -> None:
        result = power(with_units(num(3), m=1, s=-1), num(2))
        assert result == with_units(num(9), m=2, s=-2)

    def test_fractional_exponent(self) -> None:
        """(4[m^2])^0.5 = 2[m]"""
        assert power(with_units(num(4), m=2), num(0.5)) == with_units(num(2), m=1)

    def test_zero_exponent_drops_units(self) -> None:
        assert power(with_units(num(2), m=1), num(0)) == num(1)

    def test_unit_exponent_rejected(self) -> None:
        """2[m]^2[s]: ошибка"""
        with pytest.raises(EquationResolveError, match="exponent must be unitless") as exc:
            power(with_units(num(2), m=1), with_units(num(2), s=1))
        assert exc.value.error_type == ResolveErrorType.EXPONENT_UNITLESS

    def test_matrix_exponent_rejected(self) -> None:
        with pytest.raises(EquationResolveError, match="exponent must be a number") as exc:
            power(num(2), mat([[1, 2]]))
        assert exc.value.error_type == ResolveErrorType.EXPONENT_NOT_NUMBER

    def test_matrix_elementwise(self) -> None:
        assert power(mat([[1, 2], [3, 4]]), num(2)) == mat([[1, 4], [9, 16]])

    def test_unit_matrix(self) -> None:
        result = power(with_units(mat([[1, 2]]), m=1), num(2))
        assert result == with_units(mat([[1, 4]]), m=2)

    def test_negative_base_fractional_exponent(self) -> None:
        """IEEE-семантика: NaN вместо исключения"""
        result = power(num(-8), num(0.5))
        assert isinstance(result, ResultNumber)
        assert math.isnan(result.value)


# =============================================================================
# ИНВАРИАНТЫ
# =============================================================================


class TestInvariants:
    """Сквозные инварианты результатов"""

    @pytest.mark.parametrize(
        "operator, a, b",
        [
            (multiply, with_units(num(2), m=1, s=1), with_units(num(3), s=-1)),
            (divide, with_units(num(2), m=1, s=1), with_units(num(3), s=1)),
            (power, with_units(num(2), m=1, s=2), num(0)),
            (minus, with_units(num(2), m=1), with_units(num(1), m=1)),
        ],
    )
    def test_no_zero_exponents(self, operator, a: ResultTree, b: ResultTree) -> None:
        """Сократившийся показатель никогда не остаётся в UnitLookup"""
        result = operator(a, b)
        if isinstance(result, ResultUnit):
            assert all(exponent != 0 for exponent in result.units.values())
            assert "s" not in result.units

    @pytest.mark.parametrize(
        "operator, a, b",
        [
            (plus, with_units(num(1), m=1), with_units(num(2), m=1)),
            (multiply, with_units(mat([[1, 2]]), m=1), with_units(num(2), s=1)),
            (divide, with_units(mat([[1, 2]]), m=1), with_units(num(2), s=1)),
            (power, with_units(mat([[1, 2]]), m=1), num(2)),
        ],
    )
    def test_single_unit_level(self, operator, a: ResultTree, b: ResultTree) -> None:
        """ResultUnit никогда не оборачивает ResultUnit"""
        result = operator(a, b)
        assert isinstance(result, ResultUnit)
        assert not isinstance(result.value, ResultUnit)
