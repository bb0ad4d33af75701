"""Exports públicos do módulo fsm/manager."""

from fsm.manager.machine import GateStateMachine, create_gate_fsm

__all__ = [
    "GateStateMachine",
    "create_gate_fsm",
]
