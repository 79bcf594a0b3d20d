# src/node_dataflow/collectors/query.py
"""Collector baseado em busca (AFTS) no repositório."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from node_dataflow.core.pipeline.types import CollectorConfig

from .base import AbstractNodeCollector, batch_size_of


class QueryNodeCollector(AbstractNodeCollector):
    """
    Executa `query` paginando em lotes de `batch-size` (default 100) e
    enfileira cada resultado, enquanto o repositório indicar mais itens.
    """

    name = "QueryNodeCollector"

    def source_of(self, config: CollectorConfig) -> Optional[str]:
        return config.get_arg("query")

    def collect_nodes(self, config: CollectorConfig) -> None:
        query = self.source_of(config)
        if not isinstance(query, str) or not query.strip():
            raise ValueError("QueryNodeCollector requires a non-empty 'query' argument")
        batch_size = batch_size_of(config)

        skip = 0
        while True:
            logger.debug("skipCount --> {}", skip)
            page = self.repository.search(query, skip, batch_size)
            for node in page.entries:
                self.enqueue(node.id)
            if not page.has_more_items:
                return
            skip += batch_size
