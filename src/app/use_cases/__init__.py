"""Use cases do gate de envio."""

from app.use_cases.send_gate import SendGate

__all__ = ["SendGate"]
