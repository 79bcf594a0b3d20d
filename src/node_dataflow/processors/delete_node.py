# src/node_dataflow/processors/delete_node.py
"""Remoção de nodes (lixeira ou definitiva, via `permanent`)."""

from __future__ import annotations

from loguru import logger

from node_dataflow.core.pipeline.types import ProcessorConfig, parse_bool
from node_dataflow.core.repository.base import NodeId

from .base import AbstractNodeProcessor


class DeleteNodeProcessor(AbstractNodeProcessor):
    name = "DeleteNodeProcessor"

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        permanent = parse_bool(config.get_arg("permanent", default=False), "permanent")
        logger.debug("deleting node --> {} (permanent={})", node_id, permanent)
        self.nodes(config).delete_node(node_id, permanent=permanent)
