# src/node_dataflow/processors/chaining.py
"""
Composição ordenada de processors sobre o mesmo node.

`args.processors` é uma lista de `{name, args?, readOnly?}`. Cada passo é
resolvido pelo nome no ComponentRegistry e executado de forma síncrona,
em ordem, sobre o mesmo identificador.

Política:
    - `readOnly` ausente no passo herda o valor efetivo da cadeia
    - Falha (resolução ou execução) de um passo interrompe a cadeia:
      é registrada com o nome do passo e relançada como `ChainStepError`
    - Lista vazia → warning, nenhuma ação

Limites explícitos:
    - Sem transação: passos já concluídos não são desfeitos
"""

from __future__ import annotations

from typing import Any, List

from loguru import logger

from node_dataflow.core.exceptions import ChainStepError
from node_dataflow.core.pipeline.types import ProcessorConfig
from node_dataflow.core.repository.base import NodeId

from .base import AbstractNodeProcessor


class ChainingNodeProcessor(AbstractNodeProcessor):
    name = "ChainingNodeProcessor"

    def _steps(self, config: ProcessorConfig) -> List[Any]:
        raw = config.get_arg("processors", default=[])
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ValueError(f"'processors' must be a list, got {type(raw).__name__}")
        return raw

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        steps = self._steps(config)
        if not steps:
            logger.warning("no processors configured for chaining")
            return

        inherited = self.effective_read_only(config)
        for index, raw in enumerate(steps):
            step_name = raw.get("name") if isinstance(raw, dict) else None
            try:
                if not isinstance(raw, dict):
                    raise ValueError(f"chain step #{index} must be a mapping")
                step_config = ProcessorConfig.from_dict(raw, inherited_read_only=inherited)
                processor = self.registry.get(step_config.name)
                processor.process_node(node_id, step_config)
            except Exception as e:
                logger.bind(node_id=node_id).error(
                    "Chain step #{} ({}) failed on node {}: {}", index, step_name, node_id, e
                )
                raise ChainStepError(
                    f"Chain step '{step_name}' failed: {e}",
                    details={
                        "node_id": node_id,
                        "step": step_name,
                        "index": index,
                        "exc_type": e.__class__.__name__,
                    },
                ) from e
