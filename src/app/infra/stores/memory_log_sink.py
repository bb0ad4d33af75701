"""Ring buffer de logs em memória para a tela de diagnóstico.

Mantém as últimas N entradas (padrão 2000); entradas antigas são
descartadas na ordem de chegada. Formato de exportação compatível com o
visualizador de diagnóstico: `ts [LEVEL] message {metadata-json}`.
"""

from __future__ import annotations

import json
from collections import deque
from typing import Any

from app.protocols.log_sink import LogSinkProtocol

DEFAULT_MAX_ENTRIES = 2000


def format_entry(entry: dict[str, Any]) -> str:
    """Formata uma entrada como linha de texto."""
    metadata = entry.get("metadata")
    meta = ""
    if metadata:
        try:
            meta = " " + json.dumps(metadata, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            meta = ' "<unserializable>"'
    return f"{entry.get('ts', '')} [{entry.get('level', '')}] {entry.get('message', '')}{meta}"


class MemoryLogSink(LogSinkProtocol):
    """Sink de logs limitado em memória."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries deve ser >= 1")
        self._entries: deque[dict[str, Any]] = deque(maxlen=max_entries)

    def append(self, entry: dict[str, Any]) -> None:
        """Adiciona entrada (descarta a mais antiga se cheio)."""
        self._entries.append(entry)

    def entries(self, correlation_id: str | None = None) -> list[dict[str, Any]]:
        """Retorna cópia das entradas, opcionalmente filtradas por transação."""
        if correlation_id is None:
            return list(self._entries)
        return [e for e in self._entries if e.get("correlation_id") == correlation_id]

    def clear(self) -> None:
        """Remove todas as entradas."""
        self._entries.clear()

    def export_text(self) -> str:
        """Exporta o buffer inteiro como texto (uma entrada por linha)."""
        return "".join(f"{format_entry(e)}\n" for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)
