"""Indicador de progresso no host (apenas com debug ligado)."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.host import NotificationPort

logger = logging.getLogger(__name__)

PROGRESS_KEY = "dlpProgress"
MIN_INTERVAL_SECONDS = 0.8
MAX_MESSAGE_LENGTH = 250


class ProgressNotifier:
    """Espelha etapas do fluxo como banner de progresso, com throttle.

    Atualizações mais próximas que `min_interval_seconds` são descartadas
    para não travar a UI do host.
    """

    def __init__(
        self,
        port: NotificationPort | None,
        enabled: bool,
        min_interval_seconds: float = MIN_INTERVAL_SECONDS,
    ) -> None:
        self._port = port
        self._enabled = enabled and port is not None
        self._min_interval = min_interval_seconds
        self._last_update: float | None = None

    def update(self, message: str) -> bool:
        """Publica a mensagem se habilitado e fora da janela de throttle.

        Returns:
            True se a mensagem foi enviada ao host.
        """
        if not self._enabled or self._port is None:
            return False
        now = time.monotonic()
        if self._last_update is not None and now - self._last_update < self._min_interval:
            return False
        self._last_update = now
        try:
            self._port.replace_progress(PROGRESS_KEY, message[:MAX_MESSAGE_LENGTH])
        except Exception:
            logger.warning("progress_notification_failed", exc_info=True)
            return False
        return True
