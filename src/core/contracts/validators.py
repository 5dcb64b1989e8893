"""
JSON Schema Contract Validators

Контракт машиночитаемого вывода: каждая запись render_record
проверяется схемой до того, как попадёт в JSON отчёт.

Схемы (src/core/contracts/schema/):
- numeric_value.json: одно tagged value (кодировка, значение, биты хранения)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Схема проходит meta-validation (Draft 2020-12) до первого использования
2. Файл схемы читается один раз на загрузчик
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Final, Optional

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-validation схем из каталога (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: Нет файла <schema_name>.json
            json.JSONDecodeError: Файл не является JSON
            ValueError: Файл не является корректной JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка данных одной схемой."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Данные нарушают схему (первая найденная ошибка)
        """
        self.validator.validate(data)


class NumericValueRecordValidator(ContractValidator):
    """Контракт numeric_value."""

    def __init__(self):
        super().__init__("numeric_value")


@lru_cache(maxsize=1)
def _numeric_value_validator() -> NumericValueRecordValidator:
    return NumericValueRecordValidator()


def validate_numeric_value_record(data: Dict[str, Any]) -> None:
    """
    Проверка записи контрактом numeric_value.

    Raises:
        ValidationError: Запись нарушает схему
    """
    _numeric_value_validator().validate(data)
