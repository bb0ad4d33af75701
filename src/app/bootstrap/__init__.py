"""Bootstrap do gate — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas (httpx, coletor, interpretador) ao
use case SendGate.

Uso:
    from app.bootstrap import initialize_gate, handle_send_event

    # Na carga do add-in
    initialize_gate()

    # A cada envio
    await handle_send_event(event)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from api.connectors.dlp_agent import (
    AgentHttpClient,
    AgentHttpConfig,
    AgentPinger,
    ClassifierClient,
    create_agent_async_client,
)
from app.infra.stores import MemoryLogSink
from app.observability import get_correlation_id
from app.services.content_collector import ContentCollector
from app.services.decision_interpreter import interpret
from app.use_cases import SendGate
from config.logging import configure_logging
from config.settings import get_agent_settings, get_base_settings, get_policy_config

if TYPE_CHECKING:
    import httpx

    from app.domain.verdict import Decision
    from app.protocols.host import SendEvent
    from config.settings import AgentSettings, BaseSettings, PolicyConfig

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_gate(log_sink: MemoryLogSink | None = None) -> MemoryLogSink:
    """Inicializa logging e valida settings.

    Deve ser chamada uma vez na carga do add-in.

    Args:
        log_sink: Ring buffer de diagnóstico (criado se None)

    Returns:
        O ring buffer que recebe os logs.
    """
    base = get_base_settings()
    sink = log_sink or get_log_sink()
    configure_logging(
        level=base.effective_log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        log_sink=sink,
    )
    validate_runtime_settings()
    return sink


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir carga inválida.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    policy = get_policy_config()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS

    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"policy: {error}" for error in policy.validate())
    errors.extend(f"agent: {error}" for error in get_agent_settings().validate())

    if policy.watchdog_preempts_stages:
        logger.warning(
            "watchdog_shorter_than_stages",
            extra={
                "watchdog_timeout_ms": policy.watchdog_timeout_ms,
                "latency_budget_ms": policy.latency_budget_ms,
            },
        )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


def create_send_gate(
    agent_settings: AgentSettings | None = None,
    base_settings: BaseSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> SendGate:
    """Monta o SendGate com as implementações concretas.

    Args:
        agent_settings: Endereços do agente (env se None)
        base_settings: Settings base, para o toggle de debug (env se None)
        client: httpx.AsyncClient compartilhado (criado se None)

    Returns:
        SendGate pronto para uso.
    """
    agent = agent_settings or get_agent_settings()
    base = base_settings or get_base_settings()
    http = AgentHttpClient(
        client or create_agent_async_client(AgentHttpConfig(verify_ssl=agent.verify_ssl))
    )

    gate = SendGate(
        pinger=AgentPinger(http, ping_path=agent.ping_path),
        collector=ContentCollector(),
        classifier=ClassifierClient(http),
        agent_settings=agent,
        interpreter=interpret,
        debug=base.debug,
    )
    logger.info(
        "send_gate_created",
        extra={"component": "bootstrap", "debug": base.debug, "verify_ssl": agent.verify_ssl},
    )
    return gate


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_log_sink() -> MemoryLogSink:
    """Obtém o ring buffer de diagnóstico (singleton)."""
    return MemoryLogSink(max_entries=get_base_settings().log_buffer_size)


@lru_cache(maxsize=1)
def get_send_gate() -> SendGate:
    """Obtém o SendGate (singleton)."""
    return create_send_gate()


async def handle_send_event(
    event: SendEvent,
    policy: PolicyConfig | None = None,
) -> Decision:
    """Entry point do host para cada tentativa de envio.

    Args:
        event: Evento de envio do host
        policy: Política a aplicar (env se None)

    Returns:
        Decisão entregue ao host.
    """
    return await get_send_gate().handle(event, policy or get_policy_config())


__all__ = [
    "create_send_gate",
    "get_log_sink",
    "get_send_gate",
    "handle_send_event",
    "initialize_gate",
    "validate_runtime_settings",
]
