"""Guards para transições de estado do gate.

Guards são regras adicionais ao mapa de transições: mesmo uma transição
presente em VALID_TRANSITIONS pode ser negada por um guard.
"""

from __future__ import annotations

from collections.abc import Callable

from fsm.states.gate import TERMINAL_STATES, GateState


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> GuardResult:
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> GuardResult:
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[GateState, GateState], GuardResult]


def guard_valid_state(from_state: GateState, to_state: GateState) -> GuardResult:
    """Guard: ambos os estados devem ser GateState."""
    if not isinstance(from_state, GateState):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")
    if not isinstance(to_state, GateState):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(from_state: GateState, to_state: GateState) -> GuardResult:
    """Guard: decisão já entregue não admite nova transição."""
    del to_state
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} é terminal, não permite transição"
        )
    return GuardResult.allow()


def guard_same_state(from_state: GateState, to_state: GateState) -> GuardResult:
    """Guard: o fluxo é linear, nenhum estado repete (sem retry de estágio)."""
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )
    return GuardResult.allow()


# Aplicados em ordem; o primeiro deny interrompe
DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
]


def evaluate_guards(
    from_state: GateState,
    to_state: GateState,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result

    return GuardResult.allow()
