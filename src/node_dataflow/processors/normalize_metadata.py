# src/node_dataflow/processors/normalize_metadata.py
"""
Normalização de metadados por node.

Lê as propriedades atuais, aplica a cadeia de operações configurada
(`args`: propriedade → lista de operações) e envia um único update com o
mapa pendente completo, mesmo que vazio.
"""

from __future__ import annotations

from node_dataflow.core.pipeline.types import ProcessorConfig
from node_dataflow.core.repository.base import NodeId
from node_dataflow.normalization.engine import NormalizationEngine

from .base import AbstractNodeProcessor


class NormalizeMetadataProcessor(AbstractNodeProcessor):
    name = "NormalizeMetadataProcessor"
    aliases = ("MetadataNormalizationProcessor",)

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        engine = NormalizationEngine.from_args(config.args)
        node = self.get_node(node_id, config, include=["properties"])
        pending = engine.apply(node.properties)
        self.nodes(config).update_node(node_id, {"properties": pending})
