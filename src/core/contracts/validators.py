"""
JSON Schema Contract Validators

Модуль для валидации JSON-формы ResultTree согласно формальному JSON Schema
контракту. Использует библиотеку jsonschema для проверки соответствия данных
схеме, затем pydantic для построения immutable дерева.

Схемы (каталог schema/ рядом с модулем):
- result_tree.json

JSON Schema проверяет структуру; согласованность m/n с values
проверяет модель ResultMatrix.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.result_tree import RESULT_TREE_ADAPTER, ResultTree


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    По умолчанию ищет схемы в каталоге schema/ пакета contracts.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'result_tree')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика (схемы read-only)
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        """
        Args:
            schema_name: Имя схемы для валидации
            loader: Загрузчик схем (default: загрузчик пакета)
        """
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception"""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации (jsonschema.ValidationError)"""
        return self.validator.iter_errors(data)


class ResultTreeValidator(ContractValidator):
    """Валидатор JSON-формы ResultTree"""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("result_tree", loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_result_tree(data: Dict[str, Any]) -> None:
    """
    Валидация JSON-формы ResultTree.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    ResultTreeValidator().validate(data)


def result_tree_from_json(data: Dict[str, Any]) -> ResultTree:
    """
    Построение ResultTree из JSON-формы.

    Args:
        data: JSON-форма дерева (dict)

    Returns:
        Immutable ResultTree

    Raises:
        jsonschema.ValidationError: Нарушение контракта
        pydantic.ValidationError: Нарушение инвариантов модели (размер матрицы)
    """
    validate_result_tree(data)
    return RESULT_TREE_ADAPTER.validate_python(data)


def result_tree_to_json(tree: ResultTree) -> Dict[str, Any]:
    """JSON-форма ResultTree (соответствует result_tree.json)"""
    return RESULT_TREE_ADAPTER.dump_python(tree, mode="json")
