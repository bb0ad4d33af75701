"""Connector do agente DLP local (health-check e classificação)."""

from api.connectors.dlp_agent.classifier import ClassifierClient
from api.connectors.dlp_agent.http_base import (
    AgentHttpClient,
    AgentHttpConfig,
    create_agent_async_client,
)
from api.connectors.dlp_agent.pinger import AgentPinger, PingErrorKind, PingResult

__all__ = [
    "AgentHttpClient",
    "AgentHttpConfig",
    "AgentPinger",
    "ClassifierClient",
    "PingErrorKind",
    "PingResult",
    "create_agent_async_client",
]
