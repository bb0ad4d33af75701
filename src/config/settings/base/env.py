"""Leitura tolerante de variáveis de ambiente.

Valor ausente, vazio ou malformado cai no padrão; nunca levanta exceção
na carga das settings.
"""

from __future__ import annotations

import os


def env_bool(name: str, default: bool) -> bool:
    """Lê booleano ("true", "1", "yes" → True)."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def env_int(name: str, default: int) -> int:
    """Lê inteiro positivo; qualquer outro valor devolve o padrão."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
