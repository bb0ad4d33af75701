"""Observabilidade — correlation id, contexto de transação, métricas.

Uso:
    from app.observability import TxContext, set_correlation_id
    from app.observability import record_latency, record_decision
"""

from app.observability.correlation import (
    generate_tx_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_collection_defaults,
    record_decision,
    record_latency,
)
from app.observability.tx_context import TxContext

__all__ = [
    "TxContext",
    "generate_tx_id",
    "get_correlation_id",
    "record_collection_defaults",
    "record_decision",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
