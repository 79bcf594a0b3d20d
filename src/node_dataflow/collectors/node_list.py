# src/node_dataflow/collectors/node_list.py
"""Collector de identificadores lidos de um arquivo texto (um id por linha)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from node_dataflow.core.pipeline.types import CollectorConfig

from .base import AbstractNodeCollector

NODE_LIST_ARG = "node-list-file"


class NodeListCollector(AbstractNodeCollector):
    """
    Enfileira cada linha não vazia do arquivo em `node-list-file`, na ordem.

    Argumento ausente ou vazio → nada a fazer. Erro de leitura → warning no
    log, sem propagar.
    """

    name = "NodeListCollector"

    def source_of(self, config: CollectorConfig) -> Optional[str]:
        return config.get_arg(NODE_LIST_ARG, "nodeListFile")

    def collect_nodes(self, config: CollectorConfig) -> None:
        path = self.source_of(config)
        if not isinstance(path, str) or not path.strip():
            self.ctx.log(component=self.name, level="DEBUG", message="No node list file configured")
            return

        try:
            with Path(path).open("r", encoding="utf-8") as f:
                for line in f:
                    node_id = line.strip()
                    if node_id:
                        self.enqueue(node_id)
        except OSError as e:
            self.ctx.log(
                component=self.name,
                level="WARNING",
                message=f"Unable to read node list {path}: {e}",
            )
