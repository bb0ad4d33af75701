"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="dlp_send_gate")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("agent_ping_ok", extra={"status_code": 200})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import GATE_VERSION, CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)
from config.logging.handlers import LogSinkHandler

__all__ = [
    "FIELD_RENAME_MAP",
    "GATE_VERSION",
    "REQUIRED_LOG_FIELDS",
    # Filters / handlers
    "CorrelationIdFilter",
    "LogSinkHandler",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
