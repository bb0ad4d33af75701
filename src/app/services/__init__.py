"""Serviços de aplicação.

Unidades reutilizáveis de orquestração do gate.
Implementações concretas de IO ficam em app/infra/ e api/connectors/.
"""

from app.services.completion_guard import CompletionGuard
from app.services.content_collector import ContentCollector, encode_attachment_data
from app.services.decision_interpreter import interpret
from app.services.progress import ProgressNotifier
from app.services.watchdog import Watchdog

__all__ = [
    "CompletionGuard",
    "ContentCollector",
    "ProgressNotifier",
    "Watchdog",
    "encode_attachment_data",
    "interpret",
]
