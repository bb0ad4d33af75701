"""Envio do snapshot ao agente para classificação.

O POST pode demorar: o agente às vezes exibe um diálogo de confirmação
ao usuário antes de responder. Por isso este é o maior timeout do fluxo
e, enquanto a resposta não chega, um heartbeat é registrado em log.

Fallback de Content-Type: alguns agentes locais rejeitam o preflight
cross-origin provocado por `Content-Type: application/json`. Numa falha
de rede (não status HTTP, não timeout) a requisição é repetida uma única
vez sem o header.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from api.connectors.dlp_agent.http_base import AgentHttpClient
from app.domain.verdict import RawResponse
from app.observability.metrics import record_latency
from utils.errors import AgentRequestError, ClassifyRequestError

if TYPE_CHECKING:
    from app.domain.snapshot import MessageSnapshot
    from config.settings.policy import PolicyConfig

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

HEARTBEAT_GRACE_SECONDS = 1.5
HEARTBEAT_INTERVAL_SECONDS = 1.0


class ClassifierClient:
    """POST do MessageSnapshot no endpoint de classificação."""

    def __init__(
        self,
        http: AgentHttpClient,
        heartbeat_grace_seconds: float = HEARTBEAT_GRACE_SECONDS,
        heartbeat_interval_seconds: float = HEARTBEAT_INTERVAL_SECONDS,
    ) -> None:
        self._http = http
        self._heartbeat_grace = heartbeat_grace_seconds
        self._heartbeat_interval = heartbeat_interval_seconds

    async def classify(
        self,
        url: str,
        snapshot: MessageSnapshot,
        config: PolicyConfig,
    ) -> RawResponse:
        """Envia o snapshot e devolve a resposta HTTP bruta.

        Args:
            url: URL completa do endpoint de classificação
            snapshot: Conteúdo do item
            config: Política (timeout e omissão do Content-Type)

        Returns:
            RawResponse com qualquer status HTTP recebido.

        Raises:
            ClassifyRequestError: Timeout ou falha de rede (após o fallback).
        """
        body = snapshot.to_wire()
        with_content_type = not config.omit_content_type_header
        logger.info("classify_started", extra={"payload_bytes": len(body)})

        started = time.perf_counter()
        heartbeat = asyncio.create_task(self._heartbeat(started))
        try:
            return await self._post_with_fallback(url, body, with_content_type, config)
        finally:
            heartbeat.cancel()
            record_latency("classifier", "classify", (time.perf_counter() - started) * 1000)

    async def _post_with_fallback(
        self,
        url: str,
        body: bytes,
        with_content_type: bool,
        config: PolicyConfig,
    ) -> RawResponse:
        try:
            return await self._post(url, body, with_content_type, config.classify_timeout_ms)
        except AgentRequestError as exc:
            if exc.kind != "network" or not with_content_type:
                raise ClassifyRequestError(str(exc), kind=exc.kind) from exc

        logger.warning("classify_retry_without_content_type")
        try:
            return await self._post(url, body, False, config.classify_timeout_ms)
        except AgentRequestError as exc:
            raise ClassifyRequestError(str(exc), kind=exc.kind) from exc

    async def _post(
        self,
        url: str,
        body: bytes,
        with_content_type: bool,
        timeout_ms: int,
    ) -> RawResponse:
        response = await self._http.request(
            "POST",
            url,
            timeout_ms=timeout_ms,
            content=body,
            headers=dict(JSON_HEADERS) if with_content_type else None,
        )
        logger.info(
            "classify_http_status",
            extra={"status_code": response.status_code, "content_type_sent": with_content_type},
        )
        raw = RawResponse(status_code=response.status_code, text=response.text)
        logger.debug("classify_raw_response", extra={"response_text": raw.text[:1000]})
        return raw

    async def _heartbeat(self, started: float) -> None:
        """Log periódico enquanto o classify está pendente (só diagnóstico)."""
        await asyncio.sleep(self._heartbeat_grace)
        while True:
            logger.info(
                "classify_waiting_for_decision",
                extra={
                    "waited_ms": round((time.perf_counter() - started) * 1000, 2),
                    "hint": "confirm_popup_may_be_active",
                },
            )
            await asyncio.sleep(self._heartbeat_interval)
