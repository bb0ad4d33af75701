"""Contexto de uma transação de envio."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime

from app.observability.correlation import generate_tx_id


@dataclass(frozen=True, slots=True)
class TxContext:
    """Identidade e relógio de um envio.

    Attributes:
        correlation_id: Id da transação (TX-...)
        started_at: Momento do gatilho (UTC)
        started_monotonic: Relógio monotônico no gatilho (para elapsed)
    """

    correlation_id: str = field(default_factory=generate_tx_id)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    started_monotonic: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> float:
        """Milissegundos desde o gatilho."""
        return round((time.monotonic() - self.started_monotonic) * 1000, 2)
