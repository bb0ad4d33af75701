"""Interpretação da resposta do classify em allow/block."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from app.domain.verdict import (
    REASON_ALLOWED,
    REASON_BLOCKED,
    REASON_CLASSIFY_HTTP_ERROR,
    REASON_INVALID_RESPONSE,
    ClassificationVerdict,
    Decision,
    RawResponse,
    apply_fail_policy,
)
from config.logging import log_fallback

if TYPE_CHECKING:
    from config.settings.policy import PolicyConfig

logger = logging.getLogger(__name__)

_JSON_BODY: TypeAdapter[Any] = TypeAdapter(Any)


def interpret(raw_response: RawResponse, config: PolicyConfig) -> Decision:
    """Mapeia a resposta bruta do agente para a decisão final.

    - status não-2xx → política de falha (classify_http_error)
    - corpo que não é JSON, ou JSON null → política de falha (invalid_response)
    - objeto com action == 1 (ou "1") → bloqueia
    - qualquer outro JSON (outro action, sem action, lista, número) → libera

    Args:
        raw_response: Status e corpo da resposta HTTP
        config: Política ativa (fail_closed)

    Returns:
        Decision(allow, reason)
    """
    if not raw_response.is_success:
        logger.warning(
            "classify_http_error",
            extra={"status_code": raw_response.status_code},
        )
        log_fallback(logger, "decision_interpreter", reason=REASON_CLASSIFY_HTTP_ERROR)
        return apply_fail_policy(config.fail_closed, REASON_CLASSIFY_HTTP_ERROR)

    try:
        body = _JSON_BODY.validate_json(raw_response.text)
    except ValidationError:
        body = None
    if body is None:
        logger.warning(
            "classify_response_unparseable",
            extra={"response_len": len(raw_response.text)},
        )
        log_fallback(logger, "decision_interpreter", reason=REASON_INVALID_RESPONSE)
        return apply_fail_policy(config.fail_closed, REASON_INVALID_RESPONSE)

    if not isinstance(body, Mapping):
        logger.info("classify_response_not_object", extra={"body_type": type(body).__name__})
        logger.info("dlp_allow")
        return Decision(allow=True, reason=REASON_ALLOWED)

    verdict = ClassificationVerdict.model_validate(dict(body))
    logger.debug("classify_verdict", extra={"action": repr(verdict.action)})

    if verdict.is_block:
        logger.info("dlp_block")
        return Decision(allow=False, reason=REASON_BLOCKED)

    logger.info("dlp_allow")
    return Decision(allow=True, reason=REASON_ALLOWED)
