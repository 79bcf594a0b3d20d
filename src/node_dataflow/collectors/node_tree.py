# src/node_dataflow/collectors/node_tree.py
"""
Collector que percorre uma árvore de pastas a partir de um node raiz.

A raiz vem de `node-id` ou é resolvida a partir de `path` (relativo à raiz
do repositório). O percurso é iterativo, com pilha explícita: pastas são
empilhadas, demais nodes são enfileirados. Children são paginados em lotes
de `batch-size` (default 100).

Uma falha ao listar um ramo é registrada e o percurso continua nos demais.
"""

from __future__ import annotations

from typing import List, Optional

from node_dataflow.core.exceptions import QueueInterruptedError
from node_dataflow.core.pipeline.types import CollectorConfig
from node_dataflow.core.repository.base import ROOT_NODE_ID, NodeId

from .base import AbstractNodeCollector, batch_size_of


class NodeTreeCollector(AbstractNodeCollector):
    name = "NodeTreeCollector"

    def source_of(self, config: CollectorConfig) -> Optional[str]:
        return config.get_arg("node-id", "nodeId") or config.get_arg("path")

    def collect_nodes(self, config: CollectorConfig) -> None:
        batch_size = batch_size_of(config)
        root_id = self._resolve_root(config)
        if root_id is None:
            self.ctx.log(component=self.name, level="ERROR", message="Root node ID not found")
            return
        self.walk(root_id, batch_size)

    def _resolve_root(self, config: CollectorConfig) -> Optional[NodeId]:
        node_id = config.get_arg("node-id", "nodeId")
        if node_id:
            return str(node_id)

        path = config.get_arg("path")
        if not path:
            return None
        try:
            node = self.repository.get_node(ROOT_NODE_ID, relative_path=str(path))
        except QueueInterruptedError:
            raise
        except Exception as e:
            self.ctx.log(
                component=self.name,
                level="ERROR",
                message=f"Error resolving path {path}: {e}",
            )
            return None
        if node is None:
            self.ctx.log(component=self.name, level="ERROR", message=f"No node found for path: {path}")
            return None
        return node.id

    def walk(self, root_id: NodeId, batch_size: int) -> None:
        stack: List[NodeId] = [root_id]
        while stack:
            node_id = stack.pop()
            try:
                self._visit_children(node_id, stack, batch_size)
            except QueueInterruptedError:
                raise
            except Exception as e:
                self.ctx.log(
                    component=self.name,
                    level="ERROR",
                    message=f"Error processing node {node_id}: {e}",
                    node_id=node_id,
                )

    def _visit_children(self, node_id: NodeId, stack: List[NodeId], batch_size: int) -> None:
        skip = 0
        while True:
            page = self.repository.list_children(node_id, skip, batch_size)
            if page is None:
                return
            for child in page.entries:
                if child.is_folder:
                    stack.append(child.id)
                else:
                    self.enqueue(child.id)
            if not page.has_more_items:
                return
            skip += batch_size
