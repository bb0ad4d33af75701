"""Correlation id da transação de envio (TX).

Cada evento de envio recebe um id `TX-<epoch ms>-<aleatório>` propagado
via ContextVar, para que todo log emitido durante o fluxo (inclusive em
tasks filhas do asyncio) carregue o mesmo correlation_id.

Uso:
    token = set_correlation_id(generate_tx_id())
    try:
        ...  # processar envio
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import random
import time
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_tx_id() -> str:
    """Gera um novo id de transação (TX-<epoch ms>-<0..999999>)."""
    return f"TX-{int(time.time() * 1000)}-{random.randrange(1_000_000)}"  # noqa: S311


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo TX id.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_tx_id())


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)
