"""Mapeamento uniforme de campos por tipo de item ("Sendable").

Mensagem e compromisso expõem os mesmos campos canônicos; a única
diferença entre os dois é esta tabela. Campo mapeado para None não existe
naquele tipo de item e assume o valor padrão sem consultar o host.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ItemKind(StrEnum):
    """Tipos de item suportados pelo gate."""

    MESSAGE = "message"
    APPOINTMENT = "appointment"


# Campos canônicos do snapshot
SCALAR_FIELDS: tuple[str, ...] = ("subject", "from", "location")
LIST_FIELDS: tuple[str, ...] = ("to", "cc", "bcc")


@dataclass(frozen=True, slots=True)
class SendableFieldMap:
    """Nome do campo no host para cada campo canônico."""

    subject: str | None
    sender: str | None
    to: str | None
    cc: str | None
    bcc: str | None
    location: str | None

    def host_field(self, canonical: str) -> str | None:
        """Nome no host do campo canônico (None se não existe no item)."""
        attr = "sender" if canonical == "from" else canonical
        return getattr(self, attr)


FIELD_MAPS: dict[ItemKind, SendableFieldMap] = {
    ItemKind.MESSAGE: SendableFieldMap(
        subject="subject",
        sender="from",
        to="to",
        cc="cc",
        bcc="bcc",
        location=None,
    ),
    ItemKind.APPOINTMENT: SendableFieldMap(
        subject="subject",
        sender="organizer",
        to="requiredAttendees",
        cc="optionalAttendees",
        bcc=None,
        location="location",
    ),
}


def resolve_field_map(item_type: str) -> SendableFieldMap | None:
    """Retorna o mapeamento para o tipo de item, ou None se não suportado."""
    try:
        return FIELD_MAPS[ItemKind(item_type)]
    except ValueError:
        return None
