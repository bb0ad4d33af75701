"""Protocolos e contratos do core da aplicação."""

from .host import (
    AttachmentContent,
    AttachmentDetails,
    BodyCoercion,
    HostItemProtocol,
    HostResult,
    NotificationPort,
    SendEvent,
)
from .log_sink import LogSinkProtocol

__all__ = [
    "AttachmentContent",
    "AttachmentDetails",
    "BodyCoercion",
    "HostItemProtocol",
    "HostResult",
    "LogSinkProtocol",
    "NotificationPort",
    "SendEvent",
]
