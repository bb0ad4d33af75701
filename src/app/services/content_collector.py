"""Coleta do conteúdo do item (fan-out/fan-in).

Cada leitura no host (campo, corpo, lista de anexos, conteúdo de cada
anexo) tem seu próprio timeout e degrada para um valor padrão em caso de
timeout ou falha reportada pelo host. Todas rodam em paralelo e a coleta
espera todas terminarem: nenhuma leitura aborta as demais e a coleta em
si nunca falha, só degrada.

Leituras que respondem depois do timeout são ignoradas: o await é
cancelado e adapters por callback descartam resultados tardios.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from api.normalizers.email.html import normalize_html
from app.domain.sendable import LIST_FIELDS, resolve_field_map
from app.domain.snapshot import (
    AttachmentPayload,
    MessageSnapshot,
    coerce_recipient,
    coerce_recipient_list,
)
from app.observability.metrics import record_collection_defaults, record_latency
from app.protocols.host import AttachmentContent, AttachmentDetails, HostResult

if TYPE_CHECKING:
    from app.protocols.host import HostItemProtocol
    from config.settings.policy import PolicyConfig

logger = logging.getLogger(__name__)

CANONICAL_FIELDS: tuple[str, ...] = ("subject", "from", "to", "cc", "bcc", "location")

BASE64_FORMAT = "base64"


def encode_attachment_data(content: AttachmentContent) -> str | None:
    """Garante conteúdo em base64.

    Conteúdo em outro formato é codificado na hora com codificador
    ASCII-only; se o texto tiver caracteres fora de ASCII a codificação
    falha e o anexo deve ser descartado (retorna None).
    """
    raw: Any = content.content
    if content.format == BASE64_FORMAT and isinstance(raw, str):
        return raw
    if isinstance(raw, bytes):
        return base64.b64encode(raw).decode("ascii")
    if not isinstance(raw, str):
        return None
    try:
        encoded = raw.encode("ascii")
    except UnicodeEncodeError:
        return None
    return base64.b64encode(encoded).decode("ascii")


def _coerce_details(value: Any) -> AttachmentDetails | None:
    if isinstance(value, AttachmentDetails):
        return value
    if isinstance(value, Mapping) and value.get("id"):
        return AttachmentDetails(
            id=str(value["id"]),
            name=str(value.get("name", "")),
            content_type=str(value.get("contentType", value.get("content_type", "")) or ""),
            size=int(value.get("size", 0) or 0),
            is_inline=bool(value.get("isInline", value.get("is_inline", False))),
        )
    return None


def _coerce_content(value: Any) -> AttachmentContent | None:
    if isinstance(value, AttachmentContent):
        return value
    if isinstance(value, Mapping) and "content" in value:
        return AttachmentContent(format=str(value.get("format", "")), content=value["content"])
    return None


class ContentCollector:
    """Monta o MessageSnapshot de um item a partir dos getters do host."""

    def __init__(self, html_normalizer: Callable[[str], str] = normalize_html) -> None:
        self._normalize_html = html_normalizer

    async def collect(self, item: HostItemProtocol, config: PolicyConfig) -> MessageSnapshot:
        """Coleta todos os campos, corpo e anexos do item.

        Args:
            item: Item do host (mensagem ou compromisso)
            config: Política com os timeouts de cada leitura

        Returns:
            MessageSnapshot com valores reais ou padrão ("" / []).

        Raises:
            ValueError: Se o tipo do item não tem mapeamento de campos.
        """
        field_map = resolve_field_map(item.item_type)
        if field_map is None:
            raise ValueError(f"Tipo de item não suportado: {item.item_type!r}")

        started = time.perf_counter()
        fields, (body, body_defaulted), (attachments, dropped) = await asyncio.gather(
            asyncio.gather(
                *(
                    self._read_field(item, field_map.host_field(name), name, config.field_timeout_ms)
                    for name in CANONICAL_FIELDS
                )
            ),
            self._read_body(item, config.body_timeout_ms),
            self._read_attachments(item, config),
        )

        values = {name: value for name, (value, _) in zip(CANONICAL_FIELDS, fields, strict=True)}
        defaulted = [
            name for name, (_, was_defaulted) in zip(CANONICAL_FIELDS, fields, strict=True)
            if was_defaulted
        ]
        if body_defaulted:
            defaulted.append("body")

        snapshot = MessageSnapshot(
            subject=values["subject"],
            sender=values["from"],
            to=values["to"],
            cc=values["cc"],
            bcc=values["bcc"],
            location=values["location"],
            body=body,
            attachments=attachments,
        )

        record_latency("content_collector", "collect", (time.perf_counter() - started) * 1000)
        if defaulted or dropped:
            record_collection_defaults(defaulted, dropped)
        logger.debug("snapshot_collected", extra=snapshot.stats())
        return snapshot

    async def _bounded(
        self,
        call: Awaitable[HostResult],
        timeout_ms: int,
        label: str,
    ) -> HostResult | None:
        """Aguarda uma leitura do host com timeout; None em timeout/erro."""
        try:
            result = await asyncio.wait_for(call, timeout=timeout_ms / 1000)
        except TimeoutError:
            logger.warning("host_read_timeout", extra={"field": label, "timeout_ms": timeout_ms})
            return None
        except Exception as exc:
            logger.warning(
                "host_read_failed",
                extra={"field": label, "error_type": type(exc).__name__},
            )
            return None

        if not isinstance(result, HostResult) or not result.succeeded:
            error = result.error if isinstance(result, HostResult) else "invalid_result"
            logger.info("host_read_unsuccessful", extra={"field": label, "host_error": error})
            return None
        return result

    async def _read_field(
        self,
        item: HostItemProtocol,
        host_field: str | None,
        canonical: str,
        timeout_ms: int,
    ) -> tuple[Any, bool]:
        """Lê um campo; devolve (valor, caiu_no_padrao)."""
        default: Any = [] if canonical in LIST_FIELDS else ""
        if host_field is None:
            return default, False

        result = await self._bounded(item.get_field(host_field), timeout_ms, canonical)
        if result is None:
            return default, True

        if canonical in LIST_FIELDS:
            return coerce_recipient_list(result.value), False
        if canonical == "from":
            sender = coerce_recipient(result.value)
            return (sender, False) if sender is not None else (default, True)
        if isinstance(result.value, str):
            return result.value, False
        return default, True

    async def _read_body(self, item: HostItemProtocol, timeout_ms: int) -> tuple[str, bool]:
        """Lê o corpo como HTML e normaliza para texto."""
        result = await self._bounded(item.get_body("html"), timeout_ms, "body")
        if result is None or not isinstance(result.value, str):
            return "", True

        html = result.value
        logger.debug("body_raw_html", extra={"html": html})
        try:
            text = self._normalize_html(html)
        except Exception:
            logger.warning("body_normalize_failed", exc_info=True)
            return "", True
        logger.debug("body_normalized", extra={"text": text, "html_len": len(html)})
        return text, False

    async def _read_attachments(
        self,
        item: HostItemProtocol,
        config: PolicyConfig,
    ) -> tuple[list[AttachmentPayload], int]:
        """Lista anexos e busca o conteúdo de todos em paralelo.

        Returns:
            (anexos resolvidos, quantidade descartada)
        """
        if not item.supports_attachments:
            logger.debug("attachments_unsupported")
            return [], 0

        result = await self._bounded(
            item.get_attachments(), config.attachments_list_timeout_ms, "attachments"
        )
        if result is None or not isinstance(result.value, list | tuple):
            return [], 0

        details = [d for d in (_coerce_details(v) for v in result.value) if d is not None]
        if not details:
            return [], 0

        payloads = await asyncio.gather(
            *(
                self._read_attachment(item, detail, config.attachment_content_timeout_ms)
                for detail in details
            )
        )
        resolved = [p for p in payloads if p is not None]
        logger.debug(
            "attachments_collected",
            extra={"listed": len(details), "resolved": len(resolved)},
        )
        return resolved, len(details) - len(resolved)

    async def _read_attachment(
        self,
        item: HostItemProtocol,
        detail: AttachmentDetails,
        timeout_ms: int,
    ) -> AttachmentPayload | None:
        """Busca e codifica um anexo; None se não resolveu."""
        result = await self._bounded(
            item.get_attachment_content(detail.id), timeout_ms, "attachment_content"
        )
        if result is None:
            return None

        content = _coerce_content(result.value)
        if content is None:
            return None

        data = encode_attachment_data(content)
        if data is None:
            logger.warning(
                "attachment_encoding_failed",
                extra={"attachment_id": detail.id, "format": content.format},
            )
            return None
        if content.format != BASE64_FORMAT:
            logger.debug("attachment_encoded_base64", extra={"attachment_id": detail.id})

        return AttachmentPayload(
            file_name=detail.name,
            data=data,
            content_type=detail.content_type,
        )
