# src/node_dataflow/processors/base.py
"""
Base dos processors: o loop de consumo (worker) e o acesso guardado ao
repositório.

Loop do worker:
    - `poll` na WorkQueue com timeout T (`consumer_timeout`)
    - id recebido → `process_node`; sucesso incrementa o ProcessedCounter,
      falha vira ErrorPayload no RunContext (log com o node id) e o item é
      ignorado
    - fila vazia → o worker encerra conforme a política de saída:
        - `close`: somente depois que o Engine fechou a fila
        - `idle`:  na primeira espera vazia

Decisões arquiteturais:
    - Processors acessam o repositório apenas via `nodes(config)`, que
      devolve o guard de read-only com o flag efetivo da invocação
    - `read_only` da configuração vence; ausente, vale o default global
    - `QueueInterruptedError` é fatal para o worker e propaga na Future

Invariantes:
    - O contador só incrementa após `process_node` retornar sem erro
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Iterable, List, Optional

from node_dataflow.core.config.settings import CONSUMER_EXIT_IDLE
from node_dataflow.core.exceptions import QueueInterruptedError
from node_dataflow.core.pipeline.context import RunContext
from node_dataflow.core.pipeline.registry import ComponentRegistry
from node_dataflow.core.pipeline.types import ProcessorConfig
from node_dataflow.core.repository.base import Node, NodeId, Repository
from node_dataflow.core.repository.guard import ReadOnlyRepository


class AbstractNodeProcessor:
    """Processor base; subclasses implementam `process_node`."""

    name: str = ""
    aliases: Iterable[str] = ()

    def __init__(
        self,
        ctx: RunContext,
        repository: Optional[Repository] = None,
        registry: Optional[ComponentRegistry] = None,
    ):
        self.ctx = ctx
        self.repository = repository
        self.registry = registry

    # -----------------------------
    # Read-only
    # -----------------------------
    def effective_read_only(self, config: ProcessorConfig) -> bool:
        if config.read_only is not None:
            return bool(config.read_only)
        return bool(self.ctx.settings.read_only)

    def nodes(self, config: ProcessorConfig) -> ReadOnlyRepository:
        return ReadOnlyRepository(self.repository, self.effective_read_only(config))

    def get_node(
        self,
        node_id: NodeId,
        config: ProcessorConfig,
        include: Optional[List[str]] = None,
    ) -> Node:
        node = self.nodes(config).get_node(node_id, include=include)
        if node is None:
            raise LookupError(f"Node {node_id} not returned by repository")
        return node

    # -----------------------------
    # Worker
    # -----------------------------
    def process(self, config: ProcessorConfig) -> "Future[Any]":
        return self.ctx.submit(self.consume, config)

    def consume(self, config: ProcessorConfig) -> int:
        """Loop de consumo; devolve quantos nodes este worker processou."""
        queue = self.ctx.queue
        settings = self.ctx.settings
        processed = 0
        while True:
            node_id = queue.poll(settings.consumer_timeout)
            if node_id is None:
                if settings.consumer_exit == CONSUMER_EXIT_IDLE or queue.closed:
                    break
                continue
            try:
                self.process_node(node_id, config)
            except QueueInterruptedError:
                raise
            except Exception as e:
                self.ctx.record_failure(component=self.name, node_id=node_id, exc=e)
                continue
            self.ctx.counter.increment()
            processed += 1
        return processed

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        raise NotImplementedError
