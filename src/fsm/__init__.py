"""
Módulo FSM — Máquina de estados de uma transação de envio.

Estrutura:
    - states/: Estados do gate (GateState enum)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - rules/: Guards
    - manager/: Máquina de estados (GateStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import GateStateMachine, create_gate_fsm
from fsm.rules import GuardResult, evaluate_guards
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    GateState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "GateState",
    "GateStateMachine",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "create_gate_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
