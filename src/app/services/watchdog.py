"""Prazo global de um envio.

Timer do event loop (nunca espera ativa). Se não for cancelado antes do
prazo, `on_expire` dispara exatamente uma vez.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Watchdog:
    """Timer de prazo único, cancelável."""

    __slots__ = ("_deadline_ms", "_fired", "_handle")

    def __init__(self) -> None:
        self._handle: asyncio.TimerHandle | None = None
        self._fired = False
        self._deadline_ms = 0

    @property
    def fired(self) -> bool:
        """True se o prazo expirou."""
        return self._fired

    def start(self, deadline_ms: int, on_expire: Callable[[], None]) -> Callable[[], None]:
        """Arma o watchdog.

        Args:
            deadline_ms: Prazo em milissegundos
            on_expire: Chamado uma vez ao expirar

        Returns:
            Função `cancel()` que desarma o timer.

        Raises:
            RuntimeError: Se já estiver armado.
        """
        if self._handle is not None or self._fired:
            raise RuntimeError("Watchdog já foi armado")

        self._deadline_ms = deadline_ms

        def _expire() -> None:
            self._handle = None
            self._fired = True
            logger.warning("watchdog_expired", extra={"deadline_ms": self._deadline_ms})
            try:
                on_expire()
            except Exception:
                logger.exception("watchdog_on_expire_failed")

        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(deadline_ms / 1000, _expire)
        logger.debug("watchdog_armed", extra={"deadline_ms": deadline_ms})
        return self.cancel

    def cancel(self) -> None:
        """Desarma o timer (no-op se já expirou ou foi cancelado)."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("watchdog_cancelled")
