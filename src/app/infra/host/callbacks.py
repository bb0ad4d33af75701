"""Conversão de getters por callback em futures.

Hosts de composição entregam resultados via callback, às vezes depois
que o gate já desistiu (timeout) e às vezes mais de uma vez. O adapter
resolve o future apenas na primeira chamada; chamadas tardias ou
repetidas são ignoradas. O callback pode vir de outra thread: a
resolução é sempre agendada no loop que criou o future.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from app.protocols.host import BodyCoercion, HostItemProtocol, HostResult

logger = logging.getLogger(__name__)

HostCallback = Callable[[HostResult], None]


def await_callback(start: Callable[[HostCallback], Any]) -> asyncio.Future[HostResult]:
    """Inicia uma chamada por callback e devolve um future com o resultado.

    Args:
        start: Função que dispara a chamada no host recebendo o callback

    Returns:
        Future resolvido com o primeiro HostResult entregue. Se `start`
        levantar exceção, o future resolve com HostResult.failed.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[HostResult] = loop.create_future()

    def _set(result: HostResult) -> None:
        if future.done():
            logger.debug("host_callback_ignored", extra={"cancelled": future.cancelled()})
            return
        future.set_result(result)

    def _callback(result: HostResult) -> None:
        loop.call_soon_threadsafe(_set, result)

    try:
        start(_callback)
    except Exception as exc:
        logger.warning("host_getter_raised", extra={"error_type": type(exc).__name__})
        _set(HostResult.failed(type(exc).__name__))

    return future


class CallbackItemProtocol(Protocol):
    """Item do host com API por callback."""

    item_type: str

    def get_field_async(self, name: str, callback: HostCallback) -> None: ...

    def get_body_async(self, coercion: str, callback: HostCallback) -> None: ...

    def get_attachments_async(self, callback: HostCallback) -> None: ...

    def get_attachment_content_async(self, attachment_id: str, callback: HostCallback) -> None: ...


class CallbackHostItem(HostItemProtocol):
    """Expõe um item por callback como HostItemProtocol assíncrono."""

    def __init__(self, item: CallbackItemProtocol) -> None:
        self._item = item

    @property
    def item_type(self) -> str:
        return self._item.item_type

    @property
    def supports_attachments(self) -> bool:
        return callable(getattr(self._item, "get_attachments_async", None))

    async def get_field(self, name: str) -> HostResult:
        return await await_callback(lambda cb: self._item.get_field_async(name, cb))

    async def get_body(self, coercion: BodyCoercion = "html") -> HostResult:
        return await await_callback(lambda cb: self._item.get_body_async(coercion, cb))

    async def get_attachments(self) -> HostResult:
        return await await_callback(self._item.get_attachments_async)

    async def get_attachment_content(self, attachment_id: str) -> HostResult:
        return await await_callback(
            lambda cb: self._item.get_attachment_content_async(attachment_id, cb)
        )
