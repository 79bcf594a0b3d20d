# src/node_dataflow/core/__init__.py
"""
Core do Node DataFlow.

Este pacote reúne a coordenação de uma execução: fila limitada e ciclo de
vida produtor/consumidor, resolução de componentes por nome, guard de
read-only sobre o repositório, lock de instância única e o Engine.

Componentes principais:
    - config     → resolução de configuração (merge, validação, hashing)
    - pipeline   → WorkQueue, ProcessedCounter, RunContext, registry
    - repository → capability, guard de read-only e cliente REST
    - engine     → execução coordenada de collector e workers
    - lock       → lock de instância única
    - logging    → configuração do sink de log
    - errors / exceptions → payloads e exceções tipadas

Limites explícitos:
    - Não contém transformações concretas (ver `processors`)
    - Não depende da CLI
"""
