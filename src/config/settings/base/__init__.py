"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.env import env_bool, env_int

__all__ = [
    "BaseSettings",
    "Environment",
    "env_bool",
    "env_int",
    "get_base_settings",
]
