"""Filters de logging para injeção de contexto.

Campos injetados em todo record:
- correlation_id: ID da transação de envio (TX-...)
- service: Nome do serviço (ex: dlp_send_gate)
- gate_version: Versão do gate (facilita correlacionar logs de clientes)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

GATE_VERSION = "1.3.0"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id, service e gate_version em cada record.

    Se correlation_id já foi passado via `extra`, preserva o valor.
    Nunca filtra: apenas enriquece.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        gate_version: str = GATE_VERSION,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._gate_version = gate_version
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        record.gate_version = self._gate_version
        return True
