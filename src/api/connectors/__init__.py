"""Connectors — adapters de borda para serviços externos.

Estrutura:
- dlp_agent/: agente DLP local (health-check e classificação)
"""

__all__: list[str] = []
