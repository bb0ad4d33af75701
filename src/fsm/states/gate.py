"""Estados do fluxo de um envio interceptado.

Referência: ciclo de vida de um SendEvent, do gatilho até a entrega
única da decisão ao host.
"""

from enum import StrEnum


class GateState(StrEnum):
    """Estados de uma transação de envio.

    Estados não-terminais:
        - IDLE: Evento recebido, watchdog ainda não armado
        - PINGING: Verificando se o agente local responde
        - COLLECTING: Coletando campos, corpo e anexos do item
        - CLASSIFYING: Snapshot enviado, aguardando veredito
        - DECIDING: Resposta HTTP recebida, interpretando veredito

    Estado terminal:
        - COMPLETED: Decisão entregue ao host (uma única vez)
    """

    IDLE = "IDLE"
    PINGING = "PINGING"
    COLLECTING = "COLLECTING"
    CLASSIFYING = "CLASSIFYING"
    DECIDING = "DECIDING"
    COMPLETED = "COMPLETED"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[GateState] = frozenset({GateState.COMPLETED})

DEFAULT_INITIAL_STATE: GateState = GateState.IDLE


def is_terminal(state: GateState) -> bool:
    """Verifica se o estado é terminal."""
    return state in TERMINAL_STATES


def is_valid_state(state: GateState) -> bool:
    """Verifica se o valor é um GateState válido."""
    return isinstance(state, GateState)
