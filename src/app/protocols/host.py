"""Contratos do host de composição (Outlook e afins).

O host expõe getters assíncronos por campo que sempre devolvem um
HostResult (sucesso/falha). O gate nunca assume que um getter responde:
todo await é limitado por timeout no chamador.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

BodyCoercion = Literal["html", "text"]


@dataclass(frozen=True, slots=True)
class HostResult:
    """Resultado de uma chamada assíncrona do host.

    Attributes:
        succeeded: True se o host reportou sucesso
        value: Valor devolvido (apenas quando succeeded)
        error: Descrição do erro do host (apenas quando falhou)
    """

    succeeded: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, value: Any) -> HostResult:
        return cls(succeeded=True, value=value)

    @classmethod
    def failed(cls, error: str) -> HostResult:
        return cls(succeeded=False, error=error)


@dataclass(frozen=True, slots=True)
class AttachmentDetails:
    """Metadados de um anexo listado pelo host."""

    id: str
    name: str
    content_type: str = ""
    size: int = 0
    is_inline: bool = False


@dataclass(frozen=True, slots=True)
class AttachmentContent:
    """Conteúdo de um anexo.

    Attributes:
        format: "base64" quando já codificado; outros valores (ex: "url",
            "eml", "iCalendar") indicam texto que ainda precisa de base64
        content: Conteúdo no formato indicado
    """

    format: str
    content: str


class HostItemProtocol(ABC):
    """Item sendo enviado (mensagem ou compromisso)."""

    @property
    @abstractmethod
    def item_type(self) -> str: ...

    @property
    def supports_attachments(self) -> bool:
        """Hosts antigos não expõem a API de anexos."""
        return True

    @abstractmethod
    async def get_field(self, name: str) -> HostResult: ...

    @abstractmethod
    async def get_body(self, coercion: BodyCoercion = "html") -> HostResult: ...

    @abstractmethod
    async def get_attachments(self) -> HostResult: ...

    @abstractmethod
    async def get_attachment_content(self, attachment_id: str) -> HostResult: ...


class NotificationPort(ABC):
    """Banner/notificações do host (opcional)."""

    @abstractmethod
    def add_error(self, key: str, message: str) -> None: ...

    @abstractmethod
    def replace_progress(self, key: str, message: str) -> None: ...


@dataclass(slots=True)
class SendEvent:
    """Um envio em andamento.

    Attributes:
        item: Item sendo enviado
        complete: Sink de conclusão do host; chamar exatamente uma vez
        platform: Plataforma do host (ex: "PC", "Mac", "OfficeOnline")
        notifications: Porta de notificações (opcional)
    """

    item: HostItemProtocol
    complete: Callable[[bool], None]
    platform: str = "PC"
    notifications: NotificationPort | None = field(default=None)
