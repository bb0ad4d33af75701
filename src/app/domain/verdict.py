"""Veredito do agente e decisão final allow/block.

Contrato binário: `action == 1` é o único sentinela de bloqueio. Qualquer
outro valor (inclusive ausente ou malformado) libera o envio. Não existe
estado "pendente": uma decisão pendente é a chamada de classify ainda
não ter retornado.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

BLOCK_ACTION = 1

# Motivos de decisão
REASON_ALLOWED = "allowed"
REASON_BLOCKED = "blocked"
REASON_WATCHDOG = "watchdog"
REASON_AGENT_UNREACHABLE = "agent_unreachable"
REASON_UNSUPPORTED_PLATFORM = "unsupported_platform"
REASON_UNSUPPORTED_ITEM = "unsupported_item"
REASON_CLASSIFY_ERROR = "classify_error"
REASON_CLASSIFY_HTTP_ERROR = "classify_http_error"
REASON_INVALID_RESPONSE = "invalid_response"
REASON_INTERNAL_ERROR = "internal_error"

FAIL_OPEN_SUFFIX = "_fail_open"


@dataclass(frozen=True, slots=True)
class Decision:
    """Decisão única entregue ao host.

    Attributes:
        allow: True libera o envio
        reason: Motivo (ex: 'blocked', 'agent_unreachable_fail_open')
    """

    allow: bool
    reason: str


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Resposta HTTP bruta do classify."""

    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        """True para status 2xx."""
        return 200 <= self.status_code < 300


class ClassificationVerdict(BaseModel):
    """Corpo JSON devolvido pelo agente.

    Campos extras (ex: mensagem para o usuário) são preservados.
    """

    model_config = ConfigDict(extra="allow")

    action: Any = None
    message: Any = None

    @property
    def is_block(self) -> bool:
        """True somente para o sentinela 1 (número ou string "1")."""
        return is_block_action(self.action)


def is_block_action(action: Any) -> bool:
    """Compara com o sentinela de bloqueio; bool nunca é sentinela."""
    if isinstance(action, bool):
        return False
    if isinstance(action, int | float):
        return action == BLOCK_ACTION
    if isinstance(action, str):
        return action.strip() == str(BLOCK_ACTION)
    return False


def apply_fail_policy(fail_closed: bool, reason: str) -> Decision:
    """Traduz uma falha do mecanismo de segurança em decisão.

    fail_closed=True bloqueia com o motivo original; caso contrário libera
    com o sufixo `_fail_open`.
    """
    if fail_closed:
        return Decision(allow=False, reason=reason)
    return Decision(allow=True, reason=f"{reason}{FAIL_OPEN_SUFFIX}")


__all__ = [
    "BLOCK_ACTION",
    "REASON_AGENT_UNREACHABLE",
    "REASON_ALLOWED",
    "REASON_BLOCKED",
    "REASON_CLASSIFY_ERROR",
    "REASON_CLASSIFY_HTTP_ERROR",
    "REASON_INTERNAL_ERROR",
    "REASON_INVALID_RESPONSE",
    "REASON_UNSUPPORTED_ITEM",
    "REASON_UNSUPPORTED_PLATFORM",
    "REASON_WATCHDOG",
    "ClassificationVerdict",
    "Decision",
    "RawResponse",
    "apply_fail_policy",
    "is_block_action",
]
