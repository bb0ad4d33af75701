"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AgentRequestError,
    ClassifyRequestError,
    RequestErrorKind,
)

__all__ = [
    "AgentRequestError",
    "ClassifyRequestError",
    "RequestErrorKind",
]
