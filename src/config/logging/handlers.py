"""Handler que espelha logs no sink externo de diagnóstico.

O sink é um colaborador externo (ring buffer limitado) que só expõe
`append(entry)`. Cada LogRecord vira uma entrada estruturada:
ts, level, correlation_id, message e metadata (campos de `extra`).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.log_sink import LogSinkProtocol

# Atributos padrão de LogRecord que não são metadata do chamador
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "correlation_id", "service", "gate_version", "taskName"}


def _extract_metadata(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class LogSinkHandler(logging.Handler):
    """Encaminha cada record para `LogSinkProtocol.append`."""

    def __init__(self, sink: LogSinkProtocol) -> None:
        super().__init__()
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
                "level": record.levelname,
                "correlation_id": getattr(record, "correlation_id", ""),
                "message": record.getMessage(),
                "metadata": _extract_metadata(record),
            }
            self._sink.append(entry)
        except Exception:
            self.handleError(record)
