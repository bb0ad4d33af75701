"""Use case: decidir um envio interceptado.

Fluxo por SendEvent:
1. IDLE → PINGING: watchdog armado junto com o gatilho
2. PINGING: resolve URL do agente, valida tipo do item, ping
3. COLLECTING: snapshot do item (leituras em paralelo, degradam para padrão)
4. CLASSIFYING: POST do snapshot ao agente
5. DECIDING: resposta HTTP → allow/block
6. COMPLETED: decisão entregue ao host exatamente uma vez

Falhas de mecanismo (agente fora, classify com erro, resposta inválida)
seguem a política fail_closed. O watchdog sempre libera o envio.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from app.domain.sendable import resolve_field_map
from app.domain.verdict import (
    REASON_AGENT_UNREACHABLE,
    REASON_CLASSIFY_ERROR,
    REASON_INTERNAL_ERROR,
    REASON_UNSUPPORTED_ITEM,
    REASON_UNSUPPORTED_PLATFORM,
    REASON_WATCHDOG,
    Decision,
    RawResponse,
    apply_fail_policy,
)
from app.observability import (
    TxContext,
    record_decision,
    reset_correlation_id,
    set_correlation_id,
)
from app.services.completion_guard import CompletionGuard
from app.services.decision_interpreter import interpret
from app.services.progress import ProgressNotifier
from app.services.watchdog import Watchdog
from config.logging import log_fallback
from fsm.manager import GateStateMachine, create_gate_fsm
from fsm.states import GateState
from utils.errors import ClassifyRequestError

if TYPE_CHECKING:
    from api.connectors.dlp_agent import AgentPinger, ClassifierClient
    from app.protocols.host import SendEvent
    from app.services.content_collector import ContentCollector
    from config.settings.agent import AgentSettings
    from config.settings.policy import PolicyConfig

logger = logging.getLogger(__name__)

BLOCK_NOTIFICATION_KEY = "NoSend"
BLOCK_NOTIFICATION_MESSAGE = "Blocked by DLP engine"


class SendGate:
    """Orquestra ping, coleta, classificação e decisão de um envio.

    Uma instância atende vários envios; o estado de cada envio (FSM,
    guard de conclusão, watchdog) vive apenas dentro de `handle()`.
    """

    def __init__(
        self,
        pinger: AgentPinger,
        collector: ContentCollector,
        classifier: ClassifierClient,
        agent_settings: AgentSettings,
        interpreter: Callable[[RawResponse, PolicyConfig], Decision] = interpret,
        debug: bool = False,
    ) -> None:
        self._pinger = pinger
        self._collector = collector
        self._classifier = classifier
        self._agent = agent_settings
        self._interpret = interpreter
        self._debug = debug

    async def handle(self, event: SendEvent, policy: PolicyConfig) -> Decision:
        """Decide o envio e entrega a decisão ao host.

        Args:
            event: Item, sink de conclusão e plataforma do host
            policy: Política ativa (timeouts e fail_closed)

        Returns:
            Decisão entregue ao host (a primeira, se houve concorrência).
        """
        tx = TxContext()
        token = set_correlation_id(tx.correlation_id)
        try:
            return await self._run(tx, event, policy)
        finally:
            reset_correlation_id(token)

    async def _run(self, tx: TxContext, event: SendEvent, policy: PolicyConfig) -> Decision:
        fsm = create_gate_fsm(tx.correlation_id)
        guard = CompletionGuard(event.complete)
        progress = ProgressNotifier(event.notifications, self._debug)
        watchdog = Watchdog()

        logger.info(
            "send_event_received",
            extra={"platform": event.platform, "fail_closed": policy.fail_closed},
        )

        self._advance(fsm, progress, GateState.PINGING, "send_triggered")
        pipeline = asyncio.create_task(self._pipeline(event, policy, fsm, progress))

        def _on_watchdog() -> None:
            self._finish(
                event, fsm, guard, progress, Decision(allow=True, reason=REASON_WATCHDOG), "watchdog"
            )
            pipeline.cancel()

        watchdog.start(policy.watchdog_timeout_ms, _on_watchdog)
        try:
            decision, trigger = await pipeline
        except asyncio.CancelledError:
            if not watchdog.fired:
                raise
            decision, trigger = Decision(allow=True, reason=REASON_WATCHDOG), "watchdog"
        except Exception:
            logger.exception("send_gate_internal_error", extra={"state": str(fsm.current_state)})
            log_fallback(logger, "send_gate", reason=REASON_INTERNAL_ERROR)
            decision = apply_fail_policy(policy.fail_closed, REASON_INTERNAL_ERROR)
            trigger = "internal_error"
        finally:
            watchdog.cancel()

        self._finish(event, fsm, guard, progress, decision, trigger)
        delivered = guard.decision or decision

        elapsed_ms = tx.elapsed_ms()
        record_decision(delivered.allow, delivered.reason, elapsed_ms)
        logger.info(
            "send_gate_finished",
            extra={
                "allow": delivered.allow,
                "reason": delivered.reason,
                "elapsed_ms": elapsed_ms,
                "history": fsm.get_history_summary(),
            },
        )
        return delivered

    async def _pipeline(
        self,
        event: SendEvent,
        policy: PolicyConfig,
        fsm: GateStateMachine,
        progress: ProgressNotifier,
    ) -> tuple[Decision, str]:
        """Executa os estágios; devolve (decisão, gatilho da conclusão)."""
        base_url = self._agent.base_url_for(event.platform)
        if base_url is None:
            logger.warning("unsupported_platform", extra={"platform": event.platform})
            log_fallback(logger, "send_gate", reason=REASON_UNSUPPORTED_PLATFORM)
            return (
                apply_fail_policy(policy.fail_closed, REASON_UNSUPPORTED_PLATFORM),
                "unsupported_platform",
            )

        item_type = event.item.item_type
        if resolve_field_map(item_type) is None:
            logger.warning("unsupported_item", extra={"item_type": item_type})
            log_fallback(logger, "send_gate", reason=REASON_UNSUPPORTED_ITEM)
            return (
                apply_fail_policy(policy.fail_closed, REASON_UNSUPPORTED_ITEM),
                "unsupported_item",
            )

        ping = await self._pinger.ping(base_url, policy.ping_timeout_ms)
        if not ping.ok:
            log_fallback(
                logger,
                "agent_pinger",
                reason=f"{REASON_AGENT_UNREACHABLE}:{ping.error}",
                elapsed_ms=ping.elapsed_ms,
            )
            return apply_fail_policy(policy.fail_closed, REASON_AGENT_UNREACHABLE), "ping_failed"

        self._advance(fsm, progress, GateState.COLLECTING, "ping_ok")
        snapshot = await self._collector.collect(event.item, policy)

        self._advance(fsm, progress, GateState.CLASSIFYING, "snapshot_ready")
        classify_url = f"{base_url}{self._agent.classify_path}"
        try:
            raw = await self._classifier.classify(classify_url, snapshot, policy)
        except ClassifyRequestError as exc:
            logger.error("classify_failed", extra={"error": exc.kind})
            log_fallback(logger, "classifier", reason=f"{REASON_CLASSIFY_ERROR}:{exc.kind}")
            return apply_fail_policy(policy.fail_closed, REASON_CLASSIFY_ERROR), "classify_failed"

        self._advance(fsm, progress, GateState.DECIDING, "classify_response")
        return self._interpret(raw, policy), "decided"

    def _advance(
        self,
        fsm: GateStateMachine,
        progress: ProgressNotifier,
        target: GateState,
        trigger: str,
    ) -> bool:
        result = fsm.transition(target, trigger)
        if not result.success:
            logger.warning(
                "transition_rejected",
                extra={
                    "from_state": str(fsm.current_state),
                    "to_state": str(target),
                    "error": result.error_reason,
                },
            )
            return False
        logger.debug("state_changed", extra={"state": str(target), "trigger": trigger})
        progress.update(f"DLP: {target.value.lower()}")
        return True

    def _finish(
        self,
        event: SendEvent,
        fsm: GateStateMachine,
        guard: CompletionGuard,
        progress: ProgressNotifier,
        decision: Decision,
        trigger: str,
    ) -> None:
        """Transita para COMPLETED e entrega a decisão (no-op se já entregue)."""
        if guard.is_completed:
            return
        self._advance(fsm, progress, GateState.COMPLETED, trigger)
        guard.complete(decision.allow, decision.reason)
        if not decision.allow:
            self._notify_block(event)

    def _notify_block(self, event: SendEvent) -> None:
        if event.notifications is None:
            return
        try:
            event.notifications.add_error(BLOCK_NOTIFICATION_KEY, BLOCK_NOTIFICATION_MESSAGE)
        except Exception:
            logger.warning("block_notification_failed", exc_info=True)
