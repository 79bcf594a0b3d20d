# src/node_dataflow/core/engine/__init__.py
"""
Engine do Node DataFlow.

Componentes principais:
    - engine  → `Engine` e `RunResult`: coordenação de collector e workers
    - builder → `build_registry`: collectors e processors embutidos
    - stats   → `StatsReporter`: log periódico de fila e contador

O Engine é o único ponto que fecha (fim dos produtores) ou aborta
(interrupção) a WorkQueue de uma execução.
"""
