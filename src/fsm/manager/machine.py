"""
Máquina de estados de uma transação de envio.

Valida cada transição contra o mapa e os guards e mantém o histórico
para o log de conclusão. Uma instância por SendEvent.
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.gate import DEFAULT_INITIAL_STATE, GateState, is_terminal
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class GateStateMachine:
    """
    Máquina de estados do gate.

    Attributes:
        current_state: Estado atual
        history: Transições realizadas
        tx_id: Id da transação (para logs)
    """

    __slots__ = ("_current_state", "_history", "_tx_id")

    def __init__(
        self,
        initial_state: GateState | None = None,
        tx_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._tx_id = tx_id

    @property
    def current_state(self) -> GateState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia)."""
        return list(self._history)

    @property
    def tx_id(self) -> str:
        """Id da transação."""
        return self._tx_id

    @property
    def is_terminal(self) -> bool:
        """Verifica se a decisão já foi entregue."""
        return is_terminal(self._current_state)

    def transition(
        self,
        target: GateState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'ping_ok', 'watchdog')
            metadata: Dados adicionais para auditoria

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        guard_result: GuardResult = evaluate_guards(self._current_state, target)
        if not guard_result.allowed:
            return TransitionResult(
                success=False,
                error_reason=guard_result.reason,
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_valid_targets(self) -> frozenset[GateState]:
        """Retorna estados de destino válidos a partir do estado atual."""
        return get_valid_targets(self._current_state)

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]


def create_gate_fsm(tx_id: str) -> GateStateMachine:
    """Factory para criar a FSM de uma transação."""
    return GateStateMachine(tx_id=tx_id)
