"""Entrega única da decisão ao host.

O host trata uma segunda chamada de conclusão como erro. Todos os
caminhos do fluxo (sucesso, falha de estágio, watchdog) passam por aqui;
a primeira chamada vence e as demais são no-op silenciosos.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.domain.verdict import Decision

logger = logging.getLogger(__name__)


class CompletionGuard:
    """Wrapper idempotente do sink `complete(allow)` do host."""

    __slots__ = ("_decision", "_sink")

    def __init__(self, sink: Callable[[bool], None]) -> None:
        self._sink = sink
        self._decision: Decision | None = None

    @property
    def is_completed(self) -> bool:
        """True após a primeira conclusão."""
        return self._decision is not None

    @property
    def decision(self) -> Decision | None:
        """Decisão entregue (None enquanto pendente)."""
        return self._decision

    def complete(self, allow: bool, reason: str) -> bool:
        """Entrega a decisão ao host se ainda não entregue.

        Args:
            allow: True libera o envio
            reason: Motivo da decisão (para logs)

        Returns:
            True se esta chamada entregou a decisão; False se foi ignorada.
        """
        if self._decision is not None:
            logger.debug(
                "completion_ignored",
                extra={"reason": reason, "delivered_reason": self._decision.reason},
            )
            return False

        self._decision = Decision(allow=allow, reason=reason)
        try:
            self._sink(allow)
        except Exception:
            # Não há segunda tentativa: repetir arriscaria conclusão dupla
            logger.exception("host_completion_failed", extra={"allow": allow, "reason": reason})

        logger.info("completed", extra={"allow": allow, "reason": reason})
        return True
