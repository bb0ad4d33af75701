"""Snapshot do item enviado ao agente para classificação.

O formato JSON é o contrato do agente: chaves `from/to/cc/bcc` com
destinatários como string simples ou objeto `{emailAddress, displayName}`
(o host pode devolver qualquer um dos dois) e anexos com chaves
`file_name/data/content_type`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class EmailAddressDetails(BaseModel):
    """Destinatário detalhado como devolvido pelo host.

    Chaves extras do host (ex: recipientType) são preservadas.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    email_address: str = Field(default="", alias="emailAddress")
    display_name: str = Field(default="", alias="displayName")


Recipient = str | EmailAddressDetails


class AttachmentPayload(BaseModel):
    """Anexo resolvido, com conteúdo em base64."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    file_name: str = Field(..., description="Nome do arquivo anexado.")
    data: str = Field(..., description="Conteúdo codificado em base64.")
    content_type: str = Field(default="", description="MIME type informado pelo host.")


class MessageSnapshot(BaseModel):
    """Conteúdo completo do item no momento do envio."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    subject: str = ""
    sender: Recipient = Field(default="", alias="from")
    to: list[Recipient] = Field(default_factory=list)
    cc: list[Recipient] = Field(default_factory=list)
    bcc: list[Recipient] = Field(default_factory=list)
    location: str = ""
    body: str = ""
    attachments: list[AttachmentPayload] = Field(default_factory=list)

    def to_wire(self) -> bytes:
        """Serializa no formato JSON esperado pelo agente."""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    def stats(self) -> dict[str, int]:
        """Tamanhos seguros para log (sem conteúdo)."""
        return {
            "subject_len": len(self.subject),
            "body_len": len(self.body),
            "to_count": len(self.to),
            "cc_count": len(self.cc),
            "bcc_count": len(self.bcc),
            "attachment_count": len(self.attachments),
        }


def coerce_recipient(value: Any) -> Recipient | None:
    """Aceita string ou mapping do host; qualquer outra coisa é descartada."""
    if isinstance(value, str):
        return value
    if isinstance(value, EmailAddressDetails):
        return value
    if isinstance(value, Mapping):
        try:
            return EmailAddressDetails.model_validate(dict(value))
        except ValidationError:
            return None
    return None


def coerce_recipient_list(value: Any) -> list[Recipient]:
    """Normaliza uma lista de destinatários; valor não-lista vira []."""
    if not isinstance(value, list | tuple):
        return []
    recipients = (coerce_recipient(v) for v in value)
    return [r for r in recipients if r is not None]


__all__ = [
    "AttachmentPayload",
    "EmailAddressDetails",
    "MessageSnapshot",
    "Recipient",
    "coerce_recipient",
    "coerce_recipient_list",
]
