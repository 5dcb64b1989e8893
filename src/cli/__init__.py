"""SeeBiNum CLI — разбор текста, вывод значений и точка входа.

- config: режимы вывода, состояние сессии, ключевые слова
- parsing: текст → NumericValue
- formatting: NumericValue → текст / JSON запись
- sequence: построение последовательности операций
- observability: настройка логирования
- main: точка входа seebinum
"""

from .config import FloatFormat, RawBitsFormat, RenderMode, SessionConfig
from .formatting import render, render_record
from .parsing import parse_float_prefix, parse_int_prefix, parse_number
from .sequence import OperationSequence, OperationSequenceBuilder

__all__ = [
    # Config
    "FloatFormat",
    "RawBitsFormat",
    "RenderMode",
    "SessionConfig",
    # Parsing
    "parse_float_prefix",
    "parse_int_prefix",
    "parse_number",
    # Formatting
    "render",
    "render_record",
    # Sequence
    "OperationSequence",
    "OperationSequenceBuilder",
]
