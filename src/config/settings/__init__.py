"""Agregador de settings do gate de envio.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

from config.settings.agent import (
    CLASSIFY_PATH,
    PING_PATH,
    PLATFORM_MAC,
    PLATFORM_OFFICE_ONLINE,
    PLATFORM_PC,
    AgentSettings,
    get_agent_settings,
)
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.policy import (
    PolicyConfig,
    get_policy_config,
)

__all__ = [
    # Constants
    "CLASSIFY_PATH",
    "PING_PATH",
    "PLATFORM_MAC",
    "PLATFORM_OFFICE_ONLINE",
    "PLATFORM_PC",
    # Agent
    "AgentSettings",
    # Base
    "BaseSettings",
    "Environment",
    # Policy
    "PolicyConfig",
    "get_agent_settings",
    "get_base_settings",
    "get_policy_config",
]
