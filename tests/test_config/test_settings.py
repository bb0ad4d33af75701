"""Testes para config.settings (base, policy, agent)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from config.settings import (
    AgentSettings,
    BaseSettings,
    PolicyConfig,
    get_agent_settings,
    get_base_settings,
    get_policy_config,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    for getter in (get_agent_settings, get_base_settings, get_policy_config):
        getter.cache_clear()
    yield
    for getter in (get_agent_settings, get_base_settings, get_policy_config):
        getter.cache_clear()


class TestPolicyConfig:
    """Defaults, orçamento de latência e carga do ambiente."""

    def test_defaults(self) -> None:
        policy = PolicyConfig()
        assert policy.fail_closed is False
        assert policy.ping_timeout_ms == 30_000
        assert policy.field_timeout_ms == 3_000
        assert policy.body_timeout_ms == 5_000
        assert policy.attachments_list_timeout_ms == 5_000
        assert policy.attachment_content_timeout_ms == 30_000
        assert policy.classify_timeout_ms == 120_000
        assert policy.watchdog_timeout_ms == 200_000
        assert policy.omit_content_type_header is False
        assert policy.validate() == []

    def test_latency_budget(self) -> None:
        policy = PolicyConfig()
        # coleta: max(3000, 5000, 5000 + 30000)
        assert policy.collect_budget_ms == 35_000
        assert policy.latency_budget_ms == 30_000 + 35_000 + 120_000
        assert policy.watchdog_preempts_stages is False

    def test_short_watchdog_preempts_stages(self) -> None:
        assert PolicyConfig(watchdog_timeout_ms=1_000).watchdog_preempts_stages is True

    def test_validate_rejects_non_positive(self) -> None:
        errors = PolicyConfig(ping_timeout_ms=0).validate()
        assert errors == ["DLP_PING_TIMEOUT_MS deve ser > 0"]

    def test_is_frozen(self) -> None:
        policy = PolicyConfig()
        with pytest.raises(AttributeError):
            policy.fail_closed = True  # type: ignore[misc]

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DLP_FAIL_CLOSED", "true")
        monkeypatch.setenv("DLP_PING_TIMEOUT_MS", "1500")
        monkeypatch.setenv("DLP_CLASSIFY_TIMEOUT_MS", "abc")
        monkeypatch.setenv("DLP_WATCHDOG_TIMEOUT_MS", "-5")
        monkeypatch.setenv("DLP_OMIT_CONTENT_TYPE", "1")

        policy = get_policy_config()
        assert policy.fail_closed is True
        assert policy.ping_timeout_ms == 1500
        # valores inválidos caem no padrão
        assert policy.classify_timeout_ms == 120_000
        assert policy.watchdog_timeout_ms == 200_000
        assert policy.omit_content_type_header is True


class TestAgentSettings:
    """Roteamento por plataforma e validação."""

    @pytest.mark.parametrize(
        ("platform", "expected"),
        [
            ("Mac", "https://localhost:55296/"),
            ("PC", "https://localhost:55299/"),
            ("OfficeOnline", "https://localhost:55299/"),
        ],
    )
    def test_base_url_for_supported_platforms(self, platform: str, expected: str) -> None:
        assert AgentSettings().base_url_for(platform) == expected

    def test_unknown_platform_has_no_url(self) -> None:
        assert AgentSettings().base_url_for("iOS") is None

    def test_validate_ports(self) -> None:
        errors = AgentSettings(mac_port=70_000).validate()
        assert len(errors) == 1
        assert "DLP_AGENT_MAC_PORT" in errors[0]

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DLP_AGENT_WINDOWS_PORT", "60000")
        monkeypatch.setenv("DLP_AGENT_VERIFY_SSL", "false")
        agent = get_agent_settings()
        assert agent.base_url_for("PC") == "https://localhost:60000/"
        assert agent.verify_ssl is False

    def test_malformed_ports_fall_back_to_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DLP_AGENT_WINDOWS_PORT", "abc")
        monkeypatch.setenv("DLP_AGENT_MAC_PORT", "")
        monkeypatch.delenv("DLP_AGENT_VERIFY_SSL", raising=False)
        agent = get_agent_settings()
        assert agent.windows_port == 55299
        assert agent.mac_port == 55296
        assert agent.verify_ssl is True


class TestBaseSettings:
    """BaseSettings e nível efetivo de log."""

    def test_debug_forces_debug_level(self) -> None:
        assert BaseSettings(debug=True, log_level="WARNING").effective_log_level == "DEBUG"
        assert BaseSettings(log_level="warning").effective_log_level == "WARNING"

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("DEBUG", "yes")
        base = get_base_settings()
        assert base.is_production is True
        assert base.debug is True
        assert base.validate() == []
