"""App — coração do gate: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: caso de uso SendGate (decisão de um envio)
- services/: serviços de aplicação (coleta, watchdog, conclusão, veredito)
- domain/: modelos de snapshot, campos por tipo de item e decisão
- infra/: implementações concretas (adapters de host, ring buffer)
- protocols/: contratos/interfaces (host, notificações, log sink)
- observability/: correlation id, contexto da transação, métricas

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
