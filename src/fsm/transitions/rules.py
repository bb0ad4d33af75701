"""Regras de transição válidas entre estados do gate.

COMPLETED é alcançável de qualquer estado não-terminal posterior ao
gatilho: é o destino de falhas de estágio e da expiração do watchdog.
"""

from fsm.states.gate import TERMINAL_STATES, GateState

TransitionMap = dict[GateState, frozenset[GateState]]

VALID_TRANSITIONS: TransitionMap = {
    # IDLE: gatilho arma o watchdog e inicia o ping
    GateState.IDLE: frozenset({GateState.PINGING}),

    # PINGING: agente OK → coleta; agente inacessível/watchdog → fim
    GateState.PINGING: frozenset({
        GateState.COLLECTING,
        GateState.COMPLETED,
    }),

    # COLLECTING: coleta nunca falha, só degrada; watchdog → fim
    GateState.COLLECTING: frozenset({
        GateState.CLASSIFYING,
        GateState.COMPLETED,
    }),

    # CLASSIFYING: qualquer resposta HTTP → decidir; rede/timeout → fim
    GateState.CLASSIFYING: frozenset({
        GateState.DECIDING,
        GateState.COMPLETED,
    }),

    GateState.DECIDING: frozenset({GateState.COMPLETED}),

    GateState.COMPLETED: frozenset(),
}


def get_valid_targets(state: GateState) -> frozenset[GateState]:
    """Retorna os estados de destino válidos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: GateState, to_state: GateState) -> bool:
    """Verifica se uma transição é permitida pelo mapa."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Estados terminais têm conjunto vazio
    - Todo estado não-terminal alcança COMPLETED

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in GateState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        if VALID_TRANSITIONS.get(state):
            errors.append(f"Estado terminal {state.name} não deveria ter transições")

    for state in GateState:
        if state in TERMINAL_STATES or state == GateState.IDLE:
            continue
        if GateState.COMPLETED not in VALID_TRANSITIONS.get(state, frozenset()):
            errors.append(f"Estado {state.name} não alcança COMPLETED")

    return errors
