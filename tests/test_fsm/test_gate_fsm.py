"""
Testes do módulo FSM do gate.

Cobre estados, mapa de transições, guards e a máquina de estados
de uma transação de envio.
"""

import pytest

from fsm import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    GateState,
    GateStateMachine,
    GuardResult,
    StateTransition,
    TransitionResult,
    create_gate_fsm,
    evaluate_guards,
    get_valid_targets,
    is_terminal,
    is_transition_valid,
    is_valid_state,
    validate_transition_map,
)
from fsm.rules.guards import guard_same_state, guard_terminal_state, guard_valid_state


class TestGateStates:
    """GateState, TERMINAL_STATES, is_terminal e is_valid_state."""

    def test_enum_has_six_states_and_single_terminal(self) -> None:
        assert len(GateState) == 6
        assert TERMINAL_STATES == frozenset({GateState.COMPLETED})
        assert DEFAULT_INITIAL_STATE == GateState.IDLE

    def test_is_terminal(self) -> None:
        assert is_terminal(GateState.COMPLETED) is True
        for state in GateState:
            if state != GateState.COMPLETED:
                assert is_terminal(state) is False

    def test_is_valid_state(self) -> None:
        assert is_valid_state(GateState.PINGING) is True
        assert is_valid_state("PINGING") is False  # type: ignore[arg-type]

    def test_str_is_value(self) -> None:
        assert str(GateState.CLASSIFYING) == "CLASSIFYING"


class TestTransitionMap:
    """VALID_TRANSITIONS e helpers."""

    def test_map_is_consistent(self) -> None:
        assert validate_transition_map() == []

    def test_linear_flow_is_valid(self) -> None:
        flow = [
            GateState.IDLE,
            GateState.PINGING,
            GateState.COLLECTING,
            GateState.CLASSIFYING,
            GateState.DECIDING,
            GateState.COMPLETED,
        ]
        for current, nxt in zip(flow, flow[1:], strict=False):
            assert is_transition_valid(current, nxt)

    def test_every_active_state_can_complete(self) -> None:
        for state in (
            GateState.PINGING,
            GateState.COLLECTING,
            GateState.CLASSIFYING,
            GateState.DECIDING,
        ):
            assert GateState.COMPLETED in get_valid_targets(state)

    def test_idle_cannot_skip_to_completed(self) -> None:
        assert is_transition_valid(GateState.IDLE, GateState.COMPLETED) is False

    def test_completed_has_no_targets(self) -> None:
        assert VALID_TRANSITIONS[GateState.COMPLETED] == frozenset()

    def test_no_backwards_transitions(self) -> None:
        assert is_transition_valid(GateState.CLASSIFYING, GateState.COLLECTING) is False
        assert is_transition_valid(GateState.DECIDING, GateState.CLASSIFYING) is False


class TestGuards:
    """Guards individuais e evaluate_guards."""

    def test_guard_result_factories(self) -> None:
        assert GuardResult.allow().allowed is True
        denied = GuardResult.deny("motivo")
        assert denied.allowed is False
        assert denied.reason == "motivo"

    def test_guard_valid_state_rejects_non_enum(self) -> None:
        result = guard_valid_state("PINGING", GateState.COLLECTING)  # type: ignore[arg-type]
        assert result.allowed is False

    def test_guard_terminal_state(self) -> None:
        assert guard_terminal_state(GateState.COMPLETED, GateState.PINGING).allowed is False
        assert guard_terminal_state(GateState.PINGING, GateState.COMPLETED).allowed is True

    def test_guard_same_state(self) -> None:
        assert guard_same_state(GateState.PINGING, GateState.PINGING).allowed is False

    def test_evaluate_guards_custom_list(self) -> None:
        always_deny = lambda a, b: GuardResult.deny("negado")  # noqa: E731
        result = evaluate_guards(GateState.IDLE, GateState.PINGING, [always_deny])
        assert result.allowed is False
        assert result.reason == "negado"


class TestTypes:
    """StateTransition e TransitionResult."""

    def test_state_transition_requires_trigger(self) -> None:
        with pytest.raises(ValueError, match="trigger"):
            StateTransition(from_state=GateState.IDLE, to_state=GateState.PINGING, trigger=" ")

    def test_to_log_dict(self) -> None:
        transition = StateTransition(
            from_state=GateState.PINGING,
            to_state=GateState.COMPLETED,
            trigger="ping_failed",
            metadata={"reason": "agent_unreachable"},
        )
        data = transition.to_log_dict()
        assert data["from_state"] == "PINGING"
        assert data["to_state"] == "COMPLETED"
        assert data["metadata"] == {"reason": "agent_unreachable"}

    def test_transition_result_invariants(self) -> None:
        with pytest.raises(ValueError):
            TransitionResult(success=True)
        with pytest.raises(ValueError):
            TransitionResult(success=False)


class TestGateStateMachine:
    """GateStateMachine: fluxo completo, recusas e histórico."""

    def test_full_flow_records_history(self) -> None:
        fsm = create_gate_fsm("TX-1-1")
        assert fsm.current_state == GateState.IDLE
        assert fsm.tx_id == "TX-1-1"

        for target, trigger in (
            (GateState.PINGING, "send_triggered"),
            (GateState.COLLECTING, "ping_ok"),
            (GateState.CLASSIFYING, "snapshot_ready"),
            (GateState.DECIDING, "classify_response"),
            (GateState.COMPLETED, "decided"),
        ):
            assert fsm.transition(target, trigger).success

        assert fsm.is_terminal
        summary = fsm.get_history_summary()
        assert [h["trigger"] for h in summary] == [
            "send_triggered",
            "ping_ok",
            "snapshot_ready",
            "classify_response",
            "decided",
        ]

    def test_invalid_transition_is_rejected(self) -> None:
        fsm = GateStateMachine()
        result = fsm.transition(GateState.CLASSIFYING, "skip")
        assert result.success is False
        assert "inválida" in (result.error_reason or "")
        assert fsm.current_state == GateState.IDLE
        assert fsm.history == []

    def test_completed_refuses_everything(self) -> None:
        fsm = GateStateMachine(initial_state=GateState.PINGING)
        assert fsm.transition(GateState.COMPLETED, "watchdog").success
        assert fsm.transition(GateState.COMPLETED, "decided").success is False
        assert fsm.get_valid_targets() == frozenset()

    def test_history_is_a_copy(self) -> None:
        fsm = GateStateMachine()
        fsm.transition(GateState.PINGING, "send_triggered")
        fsm.history.clear()
        assert len(fsm.history) == 1
