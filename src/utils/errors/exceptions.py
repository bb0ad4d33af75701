"""Exceções para falhas de comunicação com o agente DLP local."""

from __future__ import annotations

from typing import Literal

RequestErrorKind = Literal["timeout", "network"]


class AgentRequestError(RuntimeError):
    """Base para falhas de requisição ao agente (sem status HTTP).

    Attributes:
        kind: Classe da falha ("timeout" ou "network")
    """

    def __init__(self, message: str, kind: RequestErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class ClassifyRequestError(AgentRequestError):
    """Falha de rede/timeout na chamada de classificação."""
