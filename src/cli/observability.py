"""Structured Logging — JSON formatter и настройка логирования CLI.

Invariants:
    - Каждая запись содержит timestamp, level, logger и message
    - Дополнительные поля (element_type, operation, token) выводятся, если заданы
    - Логи пишутся в stderr, stdout остаётся только для результатов
    - Повторный вызов setup_logging заменяет ранее установленный handler
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

_EXTRA_FIELDS = ("element_type", "operation", "token", "operand_count")

_handler: Optional[logging.Handler] = None


class JSONFormatter(logging.Formatter):
    """Форматирование записей лога как JSON (одна строка на запись)."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "WARNING", fmt: str = "text") -> logging.Handler:
    """Настройка корневого логгера: text или json в stderr."""
    global _handler

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    if _handler is not None:
        logging.root.removeHandler(_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    _handler = handler
    return handler
