"""Stores — implementações concretas de armazenamento.

Módulos disponíveis:
    - memory_log_sink: Ring buffer de logs em memória (diagnóstico)
"""

from __future__ import annotations

from app.infra.stores.memory_log_sink import (
    DEFAULT_MAX_ENTRIES,
    MemoryLogSink,
    format_entry,
)

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "MemoryLogSink",
    "format_entry",
]
