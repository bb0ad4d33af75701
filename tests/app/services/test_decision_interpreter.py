"""Testes da interpretação do veredito do agente."""

from __future__ import annotations

import pytest

from app.domain.verdict import RawResponse
from app.services import interpret
from config.settings import PolicyConfig

FAIL_OPEN = PolicyConfig(fail_closed=False)
FAIL_CLOSED = PolicyConfig(fail_closed=True)


class TestVerdictMapping:
    """action == 1 bloqueia; qualquer outro valor libera."""

    @pytest.mark.parametrize("body", ['{"action": 1}', '{"action": "1"}', '{"action": 1.0}'])
    def test_sentinel_blocks(self, body: str) -> None:
        decision = interpret(RawResponse(200, body), FAIL_OPEN)
        assert decision.allow is False
        assert decision.reason == "blocked"

    @pytest.mark.parametrize(
        "body",
        [
            '{"action": 0}',
            '{"action": 2}',
            '{"action": true}',
            '{"action": null}',
            '{"message": "sem action"}',
            '{"action": "block"}',
        ],
    )
    def test_anything_else_allows(self, body: str) -> None:
        decision = interpret(RawResponse(200, body), FAIL_CLOSED)
        assert decision.allow is True
        assert decision.reason == "allowed"

    def test_any_2xx_is_interpreted(self) -> None:
        assert interpret(RawResponse(201, '{"action": 1}'), FAIL_OPEN).allow is False


class TestFailurePolicy:
    """Status não-2xx e corpo inválido seguem fail_closed."""

    def test_http_error_fail_open(self) -> None:
        decision = interpret(RawResponse(500, '{"action": 1}'), FAIL_OPEN)
        assert decision.allow is True
        assert decision.reason == "classify_http_error_fail_open"

    def test_http_error_fail_closed(self) -> None:
        decision = interpret(RawResponse(404, ""), FAIL_CLOSED)
        assert decision.allow is False
        assert decision.reason == "classify_http_error"

    @pytest.mark.parametrize("body", ["not json", "", "null", '{"action": 1'])
    def test_invalid_body_fail_open(self, body: str) -> None:
        decision = interpret(RawResponse(200, body), FAIL_OPEN)
        assert decision.allow is True
        assert decision.reason == "invalid_response_fail_open"

    def test_invalid_body_fail_closed(self) -> None:
        decision = interpret(RawResponse(200, "<html>"), FAIL_CLOSED)
        assert decision.allow is False
        assert decision.reason == "invalid_response"

    @pytest.mark.parametrize("body", ["null", "{truncado"])
    def test_unparseable_or_null_body_fail_closed(self, body: str) -> None:
        decision = interpret(RawResponse(200, body), FAIL_CLOSED)
        assert decision.allow is False
        assert decision.reason == "invalid_response"


class TestNonObjectJson:
    """JSON válido que não é objeto não tem action: libera."""

    @pytest.mark.parametrize("body", ["[1, 2]", "1", '"x"', "true", '[{"action": 1}]'])
    def test_non_object_allows_even_when_fail_closed(self, body: str) -> None:
        decision = interpret(RawResponse(200, body), FAIL_CLOSED)
        assert decision.allow is True
        assert decision.reason == "allowed"
