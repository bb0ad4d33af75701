"""Settings do agente DLP local.

O agente escuta em localhost com porta dependente da plataforma do host:
- Mac: 55296
- Windows desktop (PC) e OfficeOnline: 55299
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.env import env_bool, env_int

PING_PATH = "FirefoxExt/_1"
CLASSIFY_PATH = "OutlookAddin"

PLATFORM_MAC = "Mac"
PLATFORM_PC = "PC"
PLATFORM_OFFICE_ONLINE = "OfficeOnline"


@dataclass(frozen=True)
class AgentSettings:
    """Endereços e transporte do agente local.

    Attributes:
        host: Host do agente (sempre local)
        windows_port: Porta usada por PC e OfficeOnline
        mac_port: Porta usada no Mac
        ping_path: Caminho do health-check
        classify_path: Caminho da classificação
        verify_ssl: Validar certificado TLS do agente
    """

    host: str = "localhost"
    windows_port: int = 55299
    mac_port: int = 55296
    ping_path: str = PING_PATH
    classify_path: str = CLASSIFY_PATH
    verify_ssl: bool = True

    def base_url_for(self, platform: str) -> str | None:
        """Resolve a URL base do agente para a plataforma do host.

        Returns:
            URL com barra final, ou None se a plataforma não é suportada.
        """
        if platform == PLATFORM_MAC:
            port = self.mac_port
        elif platform in (PLATFORM_PC, PLATFORM_OFFICE_ONLINE):
            port = self.windows_port
        else:
            return None
        return f"https://{self.host}:{port}/"

    def validate(self) -> list[str]:
        """Valida configurações do agente."""
        errors: list[str] = []
        for name, port in (("DLP_AGENT_WINDOWS_PORT", self.windows_port),
                           ("DLP_AGENT_MAC_PORT", self.mac_port)):
            if not 0 < port < 65536:
                errors.append(f"{name} fora do intervalo: {port}")
        if not self.host:
            errors.append("DLP_AGENT_HOST não pode ser vazio")
        return errors


def _load_agent_from_env() -> AgentSettings:
    """Carrega AgentSettings de variáveis de ambiente."""
    return AgentSettings(
        host=os.getenv("DLP_AGENT_HOST", "localhost"),
        windows_port=env_int("DLP_AGENT_WINDOWS_PORT", 55299),
        mac_port=env_int("DLP_AGENT_MAC_PORT", 55296),
        ping_path=os.getenv("DLP_AGENT_PING_PATH", PING_PATH),
        classify_path=os.getenv("DLP_AGENT_CLASSIFY_PATH", CLASSIFY_PATH),
        verify_ssl=env_bool("DLP_AGENT_VERIFY_SSL", True),
    )


@lru_cache(maxsize=1)
def get_agent_settings() -> AgentSettings:
    """Retorna instância cacheada de AgentSettings."""
    return _load_agent_from_env()
