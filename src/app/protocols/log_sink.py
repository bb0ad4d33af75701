"""Protocolo do sink de logs de diagnóstico (colaborador externo)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LogSinkProtocol(ABC):
    """Contrato mínimo: append-only de entradas estruturadas.

    Cada entrada contém ts, level, correlation_id, message e metadata.
    """

    @abstractmethod
    def append(self, entry: dict[str, Any]) -> None: ...
