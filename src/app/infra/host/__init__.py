"""Adapters para hosts com API baseada em callbacks."""

from app.infra.host.callbacks import CallbackHostItem, CallbackItemProtocol, await_callback

__all__ = [
    "CallbackHostItem",
    "CallbackItemProtocol",
    "await_callback",
]
