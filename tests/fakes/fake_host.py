"""Fakes em memória do host de composição para testes."""

from __future__ import annotations

import asyncio
from typing import Any

from app.protocols.host import HostItemProtocol, HostResult, NotificationPort

# Valor especial: getter nunca responde
NEVER = object()


class FakeHostItem(HostItemProtocol):
    """Item do host com respostas e atrasos configuráveis.

    `fields` mapeia nome do campo no host → valor. Um valor `NEVER` faz o
    getter ficar pendente para sempre; um HostResult é devolvido como está.
    `delays` mapeia a chave (nome do campo, "body", "attachments" ou
    "attachment:<id>") → atraso em segundos.
    """

    def __init__(
        self,
        item_type: str = "message",
        fields: dict[str, Any] | None = None,
        body: Any = "",
        attachments: Any = None,
        contents: dict[str, Any] | None = None,
        delays: dict[str, float] | None = None,
        supports_attachments: bool = True,
    ) -> None:
        self._item_type = item_type
        self._fields = fields or {}
        self._body = body
        self._attachments = attachments if attachments is not None else []
        self._contents = contents or {}
        self._delays = delays or {}
        self._supports_attachments = supports_attachments
        self.calls: list[str] = []

    @property
    def item_type(self) -> str:
        return self._item_type

    @property
    def supports_attachments(self) -> bool:
        return self._supports_attachments

    async def _respond(self, key: str, value: Any) -> HostResult:
        self.calls.append(key)
        delay = self._delays.get(key)
        if delay:
            await asyncio.sleep(delay)
        if value is NEVER:
            await asyncio.Event().wait()
        if isinstance(value, HostResult):
            return value
        return HostResult.ok(value)

    async def get_field(self, name: str) -> HostResult:
        if name not in self._fields:
            return await self._respond(name, HostResult.failed("field_not_found"))
        return await self._respond(name, self._fields[name])

    async def get_body(self, coercion: str = "html") -> HostResult:
        return await self._respond("body", self._body)

    async def get_attachments(self) -> HostResult:
        return await self._respond("attachments", self._attachments)

    async def get_attachment_content(self, attachment_id: str) -> HostResult:
        key = f"attachment:{attachment_id}"
        if attachment_id not in self._contents:
            return await self._respond(key, HostResult.failed("attachment_not_found"))
        return await self._respond(key, self._contents[attachment_id])


class FakeNotifications(NotificationPort):
    """Registra notificações enviadas ao host."""

    def __init__(self, fail: bool = False) -> None:
        self.errors: list[tuple[str, str]] = []
        self.progress: list[tuple[str, str]] = []
        self._fail = fail

    def add_error(self, key: str, message: str) -> None:
        if self._fail:
            raise RuntimeError("notification_failed")
        self.errors.append((key, message))

    def replace_progress(self, key: str, message: str) -> None:
        if self._fail:
            raise RuntimeError("notification_failed")
        self.progress.append((key, message))


class CompletionRecorder:
    """Sink `complete(allow)` que registra todas as chamadas."""

    def __init__(self) -> None:
        self.calls: list[bool] = []

    def __call__(self, allow: bool) -> None:
        self.calls.append(allow)
