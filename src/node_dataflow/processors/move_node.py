# src/node_dataflow/processors/move_node.py
"""
Movimentação de nodes para uma pasta de destino.

O destino vem de `target-parent` (ou `target-parent-id`): um UUID é usado
diretamente; qualquer outro valor é tratado como caminho relativo à raiz
do repositório e resolvido uma única vez.

Colisão de nomes (`rename-on-collision`, default true):
    - Os nomes já existentes no destino são lidos uma única vez, dentro da
      seção crítica do `MoveState`
    - Um nome já ocupado recebe sufixo numérico: `nome (1).ext`,
      `nome (2).ext`, ...
    - O estado é compartilhado por todos os workers e protegido por lock

Um 409 do repositório (nome já existente) é registrado como warning e o
node não é contado como falha.
"""

from __future__ import annotations

import os
import re
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Set

from loguru import logger

from node_dataflow.core.pipeline.types import ProcessorConfig, parse_bool
from node_dataflow.core.repository.base import ROOT_NODE_ID, NodeConflictError, NodeId

from .base import AbstractNodeProcessor

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")

CHILDREN_BATCH_SIZE = 100


def renamed(name: str, counter: int) -> str:
    base, ext = os.path.splitext(name)
    return f"{base} ({counter}){ext}"


@dataclass
class _TargetState:
    target_id: Optional[NodeId] = None
    loaded: bool = False
    taken: Set[str] = field(default_factory=set)
    counters: Dict[str, int] = field(default_factory=dict)


class MoveState:
    """Estado de colisão compartilhado entre workers, por destino configurado."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._targets: Dict[str, _TargetState] = {}

    def target_id(self, target: str, resolve: Callable[[str], NodeId]) -> NodeId:
        with self._lock:
            state = self._targets.setdefault(target, _TargetState())
            if state.target_id is None:
                state.target_id = resolve(target)
            return state.target_id

    def claim_name(
        self,
        target: str,
        name: str,
        existing: Callable[[], Iterable[str]],
    ) -> str:
        """Reserva `name` no destino; devolve o nome livre a ser usado."""
        with self._lock:
            state = self._targets.setdefault(target, _TargetState())
            if not state.loaded:
                state.taken.update(existing())
                state.loaded = True

            if name not in state.taken:
                state.taken.add(name)
                return name

            counter = state.counters.get(name, 1)
            candidate = renamed(name, counter)
            while candidate in state.taken:
                counter += 1
                candidate = renamed(name, counter)
            state.counters[name] = counter + 1
            state.taken.add(candidate)
            return candidate


class MoveNodeProcessor(AbstractNodeProcessor):
    name = "MoveNodeProcessor"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = MoveState()

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        target = config.get_arg("target-parent", "target-parent-id", "targetParent")
        if not target:
            logger.warning("target-parent must be set")
            return
        target = str(target)
        nodes = self.nodes(config)

        def resolve(value: str) -> NodeId:
            if UUID_PATTERN.match(value):
                return value
            return nodes.get_node(ROOT_NODE_ID, relative_path=value).id

        target_id = self.state.target_id(target, resolve)
        node = self.get_node(node_id, config)

        new_name = None
        if parse_bool(config.get_arg("rename-on-collision", default=True), "rename-on-collision"):
            claimed = self.state.claim_name(
                target, node.name, lambda: self._children_names(nodes, target_id)
            )
            if claimed != node.name:
                new_name = claimed

        logger.debug("moving node --> {} to --> {} (name={})", node_id, target_id, new_name or node.name)
        try:
            nodes.move_node(node_id, target_id, new_name=new_name)
        except NodeConflictError:
            logger.warning("a node named {} already exists in destination folder", node.name)

    @staticmethod
    def _children_names(nodes, parent_id: NodeId) -> Iterable[str]:
        skip = 0
        while True:
            page = nodes.list_children(parent_id, skip, CHILDREN_BATCH_SIZE)
            for child in page.entries:
                yield child.name
            if not page.has_more_items:
                return
            skip += CHILDREN_BATCH_SIZE
