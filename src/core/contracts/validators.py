"""
JSON Schema Contract Validators

Модуль для валидации входных JSON документов согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- share_request.json (запрос на восстановление секрета: параметры keys)
- share_record.json (одна закодированная запись share)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
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
            schema_name: Имя схемы без расширения (например, 'share_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если схема не проходит meta-validation
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


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class ShareRequestValidator(ContractValidator):
    """Валидатор для share_request контракта."""

    def __init__(self):
        super().__init__("share_request")


class ShareRecordValidator(ContractValidator):
    """Валидатор для share_record контракта."""

    def __init__(self):
        super().__init__("share_record")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_share_request(data: Dict[str, Any]) -> None:
    """
    Валидация share_request документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ShareRequestValidator().validate(data)


def validate_share_record(data: Dict[str, Any]) -> None:
    """
    Валидация одной записи share.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ShareRecordValidator().validate(data)


def describe_validation_error(error: ValidationError, root: str | None = None) -> str:
    """Короткое описание ошибки: путь в документе и сообщение jsonschema.

    root — ключ, под которым проверенный фрагмент лежит во внешнем документе.
    """
    parts = [str(p) for p in error.absolute_path]
    if root is not None:
        parts.insert(0, root)
    path = "/".join(parts) or "<root>"
    return f"{path}: {error.message}"
