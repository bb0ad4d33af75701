"""Settings base do gate de envio.

Configurações comuns: ambiente, nome do serviço, nível de log e o
toggle de debug (logs verbosos + indicador de progresso no host).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs
        debug: Modo debug (nível DEBUG + progresso visível no host)
        log_level: Nível de log quando debug está desligado
        log_buffer_size: Capacidade do ring buffer de diagnóstico
    """

    environment: Environment = "development"
    service_name: str = "dlp_send_gate"
    debug: bool = False
    log_level: str = "INFO"
    log_buffer_size: int = 2000

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        """Nível de log efetivo (debug força DEBUG)."""
        return "DEBUG" if self.debug else self.log_level.upper()

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.log_buffer_size < 1:
            errors.append("LOG_BUFFER_SIZE deve ser >= 1")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "dlp_send_gate"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_buffer_size=int(os.getenv("LOG_BUFFER_SIZE", "2000")),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
