"""Formatters de logging estruturado.

Logs JSON com campos obrigatórios (asctime, level, logger, message,
correlation_id, service). Campos de `extra` são serializados no topo do
objeto; valores não serializáveis (enums, datetimes) viram string.
"""

from __future__ import annotations

from enum import Enum

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def _json_default(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    return str(value)


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-18 10:30:00,123",
            "level": "INFO",
            "logger": "app.use_cases.send_gate",
            "message": "send_gate_completed",
            "correlation_id": "TX-1760783400000-42",
            "service": "dlp_send_gate",
            "allow": true,
            "reason": "allowed"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        json_default=_json_default,
    )
