"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
a partir do ring buffer de diagnóstico ou do stdout JSON.

Métricas suportadas:
- Latência: tempo de cada estágio do fluxo (ping, collect, classify)
- Decisão: allow/block final com motivo
- Coleta: contagem de campos que caíram no valor padrão

Uso:
    start = time.perf_counter()
    # ... estágio ...
    record_latency("agent_pinger", "ping", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de um estágio.

    Args:
        component: Nome do componente (ex: "agent_pinger", "classifier")
        operation: Nome da operação (ex: "ping", "classify")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_decision(
    allow: bool,
    reason: str,
    elapsed_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra a decisão final entregue ao host."""
    logger.info(
        "metric_decision",
        extra={
            "metric_type": "decision",
            "component": "send_gate",
            "allow": allow,
            "reason": reason,
            "elapsed_ms": round(elapsed_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_collection_defaults(
    defaulted_fields: list[str],
    dropped_attachments: int,
    correlation_id: str | None = None,
) -> None:
    """Registra degradação da coleta (campos no padrão, anexos descartados)."""
    logger.info(
        "metric_collection",
        extra={
            "metric_type": "collection",
            "component": "content_collector",
            "defaulted_fields": defaulted_fields,
            "dropped_attachments": dropped_attachments,
            "correlation_id": correlation_id,
        },
    )
