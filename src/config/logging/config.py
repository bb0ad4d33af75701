"""Configuração centralizada de logging.

Funções para configurar logging estruturado JSON com:
- Campos obrigatórios (correlation_id, service, level, logger, message)
- Espelhamento opcional no log sink externo (ring buffer de diagnóstico)
- Níveis configuráveis por ambiente

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (app/bootstrap/)
    configure_logging(level="INFO", log_sink=ring_buffer)

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("agent_ping_ok", extra={"elapsed_ms": 42})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter
from config.logging.handlers import LogSinkHandler

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.log_sink import LogSinkProtocol

# Níveis de log válidos
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Nome padrão do serviço
DEFAULT_SERVICE_NAME = "dlp_send_gate"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    log_sink: LogSinkProtocol | None = None,
) -> None:
    """Configura logging JSON estruturado para o gate.

    Deve ser chamada uma vez na inicialização (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual (ex: de ContextVar).
        log_sink: Sink externo opcional que recebe cada entrada (ring buffer).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    correlation_filter = CorrelationIdFilter(service_name, correlation_id_getter)

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(correlation_filter)
    handlers: list[logging.Handler] = [handler]

    if log_sink is not None:
        sink_handler = LogSinkHandler(log_sink)
        sink_handler.setLevel(level_upper)
        sink_handler.addFilter(correlation_filter)
        handlers.append(sink_handler)

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = handlers


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service e correlation_id.
    """
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log observável de fallback usado (sem PII).

    Registra quando a política de falha (fail-open/fail-closed) ou um
    valor padrão foi aplicado no lugar de um resultado real.

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "agent_pinger").
        reason: Razão do fallback (ex: "timeout").
        elapsed_ms: Tempo decorrido em ms (quando aplicável).

    Exemplo:
        log_fallback(logger, "classifier", reason="timeout", elapsed_ms=120004.1)
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
