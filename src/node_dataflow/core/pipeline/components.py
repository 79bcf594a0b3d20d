# src/node_dataflow/core/pipeline/components.py
"""
Contratos canônicos de collector e processor.

Um collector enumera identificadores de uma fonte e os enfileira na
WorkQueue da execução. Um processor consome identificadores da fila e
aplica uma transformação a cada node.

Princípios fundamentais:
    - Componentes não conhecem o Engine
    - Toda comunicação ocorre via RunContext (fila, contador, eventos)
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define política de saída dos workers (ver `processors.base`)
    - Não resolve nomes (ver `ComponentRegistry`)
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Protocol, runtime_checkable

from .types import CollectorConfig, ProcessorConfig


@runtime_checkable
class NodeCollector(Protocol):
    """Fonte de identificadores; `collect` devolve a tarefa de enumeração."""

    def collect(self, config: CollectorConfig) -> "Future[Any]":
        ...


@runtime_checkable
class NodeProcessor(Protocol):
    """
    Transformação por node.

    `process` inicia um worker (loop de consumo) e devolve sua tarefa;
    `process_node` transforma um único identificador de forma síncrona,
    sendo o ponto de composição usado pelo ChainingNodeProcessor.
    """

    def process(self, config: ProcessorConfig) -> "Future[Any]":
        ...

    def process_node(self, node_id: str, config: ProcessorConfig) -> None:
        ...
