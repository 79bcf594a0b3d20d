# src/node_dataflow/processors/basic.py
"""Processors triviais: úteis para medir vazão e validar collectors."""

from __future__ import annotations

from loguru import logger

from node_dataflow.core.pipeline.types import ProcessorConfig
from node_dataflow.core.repository.base import NodeId

from .base import AbstractNodeProcessor


class VoidProcessor(AbstractNodeProcessor):
    name = "VoidProcessor"

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        return None


class LogNodeNameProcessor(AbstractNodeProcessor):
    """Lê o node e registra seu nome."""

    name = "LogNodeNameProcessor"

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        node = self.get_node(node_id, config)
        logger.bind(node_id=node_id).info("node name --> {}", node.name)
