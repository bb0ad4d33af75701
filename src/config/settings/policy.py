"""Política de envio (PolicyConfig).

Valor imutável com a política de falha e todos os timeouts do fluxo.
É carregado uma vez e passado explicitamente a cada invocação do gate;
nenhum componente lê configuração global durante o fluxo.

Todos os timeouts estão em milissegundos.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.env import env_bool, env_int


@dataclass(frozen=True, slots=True)
class PolicyConfig:
    """Política de falha e orçamento de latência de um envio.

    Attributes:
        fail_closed: Se True, falhas do agente bloqueiam o envio
        ping_timeout_ms: Timeout do health-check do agente
        field_timeout_ms: Timeout de cada campo escalar/lista do item
        body_timeout_ms: Timeout da leitura do corpo (HTML)
        attachments_list_timeout_ms: Timeout da listagem de anexos
        attachment_content_timeout_ms: Timeout do conteúdo de cada anexo
        classify_timeout_ms: Timeout do POST de classificação (o maior do
            sistema: o agente pode aguardar confirmação do usuário)
        watchdog_timeout_ms: Prazo global; ao expirar, o envio é liberado
        omit_content_type_header: Não enviar Content-Type no classify
    """

    fail_closed: bool = False
    ping_timeout_ms: int = 30_000
    field_timeout_ms: int = 3_000
    body_timeout_ms: int = 5_000
    attachments_list_timeout_ms: int = 5_000
    attachment_content_timeout_ms: int = 30_000
    classify_timeout_ms: int = 120_000
    watchdog_timeout_ms: int = 200_000
    omit_content_type_header: bool = False

    @property
    def collect_budget_ms(self) -> int:
        """Pior caso da coleta (campos, corpo e anexos rodam em paralelo)."""
        return max(
            self.field_timeout_ms,
            self.body_timeout_ms,
            self.attachments_list_timeout_ms + self.attachment_content_timeout_ms,
        )

    @property
    def latency_budget_ms(self) -> int:
        """Soma ping + coleta + classificação."""
        return self.ping_timeout_ms + self.collect_budget_ms + self.classify_timeout_ms

    @property
    def watchdog_preempts_stages(self) -> bool:
        """True se o watchdog pode expirar antes dos timeouts dos estágios."""
        return self.watchdog_timeout_ms <= self.latency_budget_ms

    def validate(self) -> list[str]:
        """Valida timeouts.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        timeouts = {
            "DLP_PING_TIMEOUT_MS": self.ping_timeout_ms,
            "DLP_FIELD_TIMEOUT_MS": self.field_timeout_ms,
            "DLP_BODY_TIMEOUT_MS": self.body_timeout_ms,
            "DLP_ATTACHMENTS_LIST_TIMEOUT_MS": self.attachments_list_timeout_ms,
            "DLP_ATTACHMENT_CONTENT_TIMEOUT_MS": self.attachment_content_timeout_ms,
            "DLP_CLASSIFY_TIMEOUT_MS": self.classify_timeout_ms,
            "DLP_WATCHDOG_TIMEOUT_MS": self.watchdog_timeout_ms,
        }
        for name, value in timeouts.items():
            if value <= 0:
                errors.append(f"{name} deve ser > 0")
        return errors


def _load_policy_from_env() -> PolicyConfig:
    """Carrega PolicyConfig de variáveis de ambiente."""
    defaults = PolicyConfig()
    return PolicyConfig(
        fail_closed=env_bool("DLP_FAIL_CLOSED", defaults.fail_closed),
        ping_timeout_ms=env_int("DLP_PING_TIMEOUT_MS", defaults.ping_timeout_ms),
        field_timeout_ms=env_int("DLP_FIELD_TIMEOUT_MS", defaults.field_timeout_ms),
        body_timeout_ms=env_int("DLP_BODY_TIMEOUT_MS", defaults.body_timeout_ms),
        attachments_list_timeout_ms=env_int(
            "DLP_ATTACHMENTS_LIST_TIMEOUT_MS", defaults.attachments_list_timeout_ms
        ),
        attachment_content_timeout_ms=env_int(
            "DLP_ATTACHMENT_CONTENT_TIMEOUT_MS", defaults.attachment_content_timeout_ms
        ),
        classify_timeout_ms=env_int("DLP_CLASSIFY_TIMEOUT_MS", defaults.classify_timeout_ms),
        watchdog_timeout_ms=env_int("DLP_WATCHDOG_TIMEOUT_MS", defaults.watchdog_timeout_ms),
        omit_content_type_header=env_bool(
            "DLP_OMIT_CONTENT_TYPE", defaults.omit_content_type_header
        ),
    )


@lru_cache(maxsize=1)
def get_policy_config() -> PolicyConfig:
    """Retorna instância cacheada de PolicyConfig."""
    return _load_policy_from_env()
