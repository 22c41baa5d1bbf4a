"""
ResultTree: Модель результата вычисления

Immutable Pydantic модели для трёх вариантов результата:
- ResultNumber: безразмерный скаляр
- ResultMatrix: матрица m×n из ResultNumber
- ResultUnit: скаляр или матрица с единицами измерения

ИНВАРИАНТЫ:
1. Ячейки матрицы всегда ResultNumber (единицы не вкладываются в ячейки)
2. ResultUnit никогда не оборачивает другой ResultUnit (один уровень единиц)
3. Размеры m, n совпадают с фактическим числом строк/столбцов values
4. UnitLookup не содержит нулевых показателей степени
"""

from typing import Annotated, Final, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

# Символ единицы → показатель степени (нулевые показатели всегда удалены).
# Показатель может быть дробным после возведения в дробную степень.
UnitLookup = dict[str, float]


# =============================================================================
# VARIANTS
# =============================================================================


class ResultNumber(BaseModel):
    """Безразмерный скаляр (IEEE double)"""

    type: Literal["number"] = "number"
    value: float = Field(..., description="Значение скаляра")

    model_config = {"frozen": True}


class ResultMatrix(BaseModel):
    """
    Матрица m×n из безразмерных скаляров.

    values хранится как кортеж строк, каждая строка: кортеж из n ячеек.
    """

    type: Literal["matrix"] = "matrix"
    m: int = Field(..., ge=1, description="Число строк")
    n: int = Field(..., ge=1, description="Число столбцов")
    values: tuple[tuple[ResultNumber, ...], ...] = Field(..., description="Ячейки по строкам")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_shape(self) -> "ResultMatrix":
        """Проверка, что values действительно имеет размер m×n"""
        if len(self.values) != self.m:
            raise ValueError(f"matrix declares {self.m} rows but has {len(self.values)}")
        for row_idx, row in enumerate(self.values):
            if len(row) != self.n:
                raise ValueError(
                    f"matrix row {row_idx} has {len(row)} cells, expected {self.n}"
                )
        return self


class ResultUnit(BaseModel):
    """
    Скаляр или матрица, помеченные единицами измерения.

    value ограничен типами ResultNumber | ResultMatrix: вложенный
    ResultUnit отклоняется при валидации.
    """

    type: Literal["unit"] = "unit"
    units: UnitLookup = Field(..., description="Единицы измерения и их показатели")
    value: Annotated[Union[ResultNumber, ResultMatrix], Field(discriminator="type")]

    model_config = {"frozen": True}

    @field_validator("units")
    @classmethod
    def prune_zero_exponents(cls, v: UnitLookup) -> UnitLookup:
        """Удаление единиц с нулевым показателем"""
        return {key: exponent for key, exponent in v.items() if exponent != 0}


ResultTree = Annotated[
    Union[ResultNumber, ResultMatrix, ResultUnit],
    Field(discriminator="type"),
]

# Валидатор/сериализатор для дерева произвольного варианта
RESULT_TREE_ADAPTER: Final[TypeAdapter] = TypeAdapter(ResultTree)


# =============================================================================
# CONSTRUCTORS
# =============================================================================


def value_wrap(x: float) -> ResultNumber:
    """
    Построение скалярного результата.

    Args:
        x: Значение

    Returns:
        ResultNumber(value=x)
    """
    return ResultNumber(value=x)
