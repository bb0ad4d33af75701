"""Cliente HTTP base para o agente DLP local.

Cada requisição tem um limite rígido de tempo total (asyncio.wait_for),
além dos timeouts por operação do httpx. Falhas sem resposta HTTP viram
AgentRequestError com kind "timeout" ou "network"; respostas com qualquer
status são devolvidas ao chamador. Não há retry aqui: o agente pode ter
efeitos colaterais (diálogo de confirmação ao usuário).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from utils.errors import AgentRequestError

logger = logging.getLogger(__name__)


@dataclass
class AgentHttpConfig:
    """Configuração do transporte HTTP até o agente."""

    verify_ssl: bool = True
    follow_redirects: bool = True
    default_headers: dict[str, str] = field(
        default_factory=lambda: {"Cache-Control": "no-cache"}
    )


def create_agent_async_client(config: AgentHttpConfig | None = None) -> httpx.AsyncClient:
    """Cria o httpx.AsyncClient compartilhado pelos conectores do agente."""
    cfg = config or AgentHttpConfig()
    return httpx.AsyncClient(
        verify=cfg.verify_ssl,
        follow_redirects=cfg.follow_redirects,
        headers=cfg.default_headers,
    )


class AgentHttpClient:
    """Executa requisições ao agente com prazo total por chamada."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        *,
        timeout_ms: int,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Envia a requisição e devolve a resposta (qualquer status).

        Raises:
            AgentRequestError: Timeout ou falha de transporte.
        """
        timeout_seconds = timeout_ms / 1000
        try:
            return await asyncio.wait_for(
                self._client.request(
                    method,
                    url,
                    content=content,
                    headers=headers,
                    timeout=timeout_seconds,
                ),
                timeout=timeout_seconds,
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning(
                "agent_request_timeout",
                extra={"method": method, "timeout_ms": timeout_ms},
            )
            raise AgentRequestError("agent_request_timeout", kind="timeout") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "agent_request_failed",
                extra={"method": method, "error_type": type(exc).__name__},
            )
            raise AgentRequestError("agent_request_failed", kind="network") from exc

    async def aclose(self) -> None:
        """Fecha o cliente subjacente."""
        await self._client.aclose()
