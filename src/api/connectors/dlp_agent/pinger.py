"""Health-check do agente DLP local."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Literal

from api.connectors.dlp_agent.http_base import AgentHttpClient
from config.settings.agent import PING_PATH
from utils.errors import AgentRequestError

logger = logging.getLogger(__name__)

PingErrorKind = Literal["timeout", "network", "http_status"]


@dataclass(frozen=True, slots=True)
class PingResult:
    """Resultado do ping.

    Attributes:
        ok: True se o agente respondeu 2xx
        error: Classe da falha quando ok=False
        status_code: Status HTTP (quando houve resposta)
        elapsed_ms: Duração do ping
    """

    ok: bool
    error: PingErrorKind | None = None
    status_code: int | None = None
    elapsed_ms: float = 0.0


class AgentPinger:
    """GET no caminho fixo de health-check do agente."""

    def __init__(self, http: AgentHttpClient, ping_path: str = PING_PATH) -> None:
        self._http = http
        self._ping_path = ping_path

    async def ping(self, base_url: str, timeout_ms: int) -> PingResult:
        """Verifica se o agente está acessível.

        Args:
            base_url: URL base do agente (com barra final)
            timeout_ms: Prazo total do ping

        Returns:
            PingResult; nunca levanta exceção por falha do agente.
        """
        logger.info("agent_ping_started")
        started = time.perf_counter()
        try:
            response = await self._http.request(
                "GET", f"{base_url}{self._ping_path}", timeout_ms=timeout_ms
            )
        except AgentRequestError as exc:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.error("agent_unreachable", extra={"error": exc.kind, "elapsed_ms": elapsed_ms})
            return PingResult(ok=False, error=exc.kind, elapsed_ms=elapsed_ms)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        if not response.is_success:
            logger.error(
                "agent_down",
                extra={"status_code": response.status_code, "elapsed_ms": elapsed_ms},
            )
            return PingResult(
                ok=False,
                error="http_status",
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
            )

        logger.info("agent_up", extra={"status_code": response.status_code, "elapsed_ms": elapsed_ms})
        return PingResult(ok=True, status_code=response.status_code, elapsed_ms=elapsed_ms)
