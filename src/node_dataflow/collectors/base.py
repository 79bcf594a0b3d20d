# src/node_dataflow/collectors/base.py
"""
Base dos collectors: execução assíncrona da enumeração.

Um collector enumera identificadores de uma fonte e os enfileira na
WorkQueue da execução. `collect(config)` submete `collect_nodes(config)` ao
executor do RunContext e devolve a Future, concluída quando a fonte se
esgota.

Decisões arquiteturais:
    - Collectors recebem o repositório cru (leituras apenas)
    - Falha da fonte é registrada (log + evento) e encerra apenas este
      collector; não é fatal para a execução
    - Interrupção da fila (`QueueInterruptedError`) é propagada: é fatal

Limites explícitos:
    - Não enfileira marcador de fim de fluxo (o Engine fecha a fila)
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Iterable, Optional

from node_dataflow.core.errors import collector_source_error
from node_dataflow.core.exceptions import QueueInterruptedError
from node_dataflow.core.pipeline.context import RunContext
from node_dataflow.core.pipeline.types import CollectorConfig
from node_dataflow.core.repository.base import NodeId, Repository

DEFAULT_BATCH_SIZE = 100


def batch_size_of(config: CollectorConfig) -> int:
    raw = config.get_arg("batch-size", "batchSize", default=DEFAULT_BATCH_SIZE)
    if isinstance(raw, bool):
        raise ValueError(f"'batch-size' must be a positive integer, got {raw!r}")
    size = int(raw)
    if size < 1:
        raise ValueError(f"'batch-size' must be a positive integer, got {raw!r}")
    return size


class AbstractNodeCollector:
    """Collector base; subclasses implementam `collect_nodes`."""

    name: str = ""
    aliases: Iterable[str] = ()

    def __init__(self, ctx: RunContext, repository: Optional[Repository] = None):
        self.ctx = ctx
        self.repository = repository

    def collect(self, config: CollectorConfig) -> "Future[Any]":
        return self.ctx.submit(self._run, config)

    def collect_nodes(self, config: CollectorConfig) -> None:
        raise NotImplementedError

    def enqueue(self, node_id: NodeId) -> None:
        self.ctx.queue.put(node_id)

    def source_of(self, config: CollectorConfig) -> Optional[str]:
        """Descrição curta da fonte, usada nos diagnósticos."""
        return None

    def _run(self, config: CollectorConfig) -> None:
        try:
            self.collect_nodes(config)
        except QueueInterruptedError:
            raise
        except Exception as e:
            error = collector_source_error(
                collector=self.name,
                source=self.source_of(config),
                exc_type=e.__class__.__name__,
                exc_message=str(e),
            )
            self.ctx.log(
                component=self.name,
                level="WARNING",
                message=f"Collector {self.name} stopped: {e}",
                error=error.to_dict(),
            )
