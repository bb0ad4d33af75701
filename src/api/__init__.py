"""API — camada de borda e adapters externos.

Responsabilidades:
- Falar HTTP com o agente DLP local (ping e classificação)
- Normalizar conteúdo do host para o formato enviado ao agente

Subpastas:
- connectors/: adapters HTTP (agente DLP)
- normalizers/: conversão de conteúdo do host → texto enviado ao agente

NÃO PODE conter: FSM, política de falha, orquestração de use cases.
"""
