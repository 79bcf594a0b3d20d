# src/node_dataflow/processors/add_aspects.py
"""
Adição de aspects e definição de propriedades.

Os aspects enviados são a união dos atuais do node com os configurados
(ordem preservada, sem duplicatas). `properties`, quando configurado, é
enviado como está no mesmo update.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from loguru import logger

from node_dataflow.core.pipeline.types import ProcessorConfig
from node_dataflow.core.repository.base import NodeId

from .base import AbstractNodeProcessor


def _as_str_list(raw: Any, key: str) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if not isinstance(raw, list):
        raise ValueError(f"'{key}' must be a list of strings, got {type(raw).__name__}")
    return [str(v) for v in raw]


class AddAspectsAndSetPropertiesProcessor(AbstractNodeProcessor):
    name = "AddAspectsAndSetPropertiesProcessor"
    aliases = ("AddAspectAndSetPropertiesProcessor",)

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        configured = _as_str_list(config.get_arg("aspects"), "aspects")
        properties = config.get_arg("properties")
        if properties is not None and not isinstance(properties, Mapping):
            raise ValueError(f"'properties' must be a mapping, got {type(properties).__name__}")

        node = self.get_node(node_id, config, include=["aspectNames"])
        aspects = list(node.aspect_names)
        for aspect in configured:
            if aspect not in aspects:
                aspects.append(aspect)

        fields: Dict[str, Any] = {"aspectNames": aspects}
        if properties is not None:
            fields["properties"] = dict(properties)
        logger.debug("updating node --> {} with --> {}", node_id, fields)
        self.nodes(config).update_node(node_id, fields)
