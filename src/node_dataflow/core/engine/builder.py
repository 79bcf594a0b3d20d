# src/node_dataflow/core/engine/builder.py
"""
Montagem do ComponentRegistry com os collectors e processors embutidos.

Cada execução monta seu próprio registry: as instâncias são ligadas ao
RunContext da execução (fila, contador, executor) e ao repositório.
"""

from __future__ import annotations

from typing import Optional

from node_dataflow.collectors import NodeListCollector, NodeTreeCollector, QueryNodeCollector
from node_dataflow.core.pipeline.context import RunContext
from node_dataflow.core.pipeline.registry import ComponentRegistry
from node_dataflow.core.repository.base import Repository
from node_dataflow.processors import (
    AddAspectsAndSetPropertiesProcessor,
    ChainingNodeProcessor,
    DeleteNodeProcessor,
    DownloadNodeProcessor,
    LogNodeNameProcessor,
    MoveNodeProcessor,
    NormalizeMetadataProcessor,
    SetPermissionsProcessor,
    VoidProcessor,
)

BUILTIN_COLLECTORS = (NodeListCollector, NodeTreeCollector, QueryNodeCollector)

BUILTIN_PROCESSORS = (
    VoidProcessor,
    LogNodeNameProcessor,
    DeleteNodeProcessor,
    MoveNodeProcessor,
    AddAspectsAndSetPropertiesProcessor,
    SetPermissionsProcessor,
    NormalizeMetadataProcessor,
    DownloadNodeProcessor,
    ChainingNodeProcessor,
)


def build_registry(
    ctx: RunContext,
    repository: Repository,
    registry: Optional[ComponentRegistry] = None,
) -> ComponentRegistry:
    registry = registry if registry is not None else ComponentRegistry()
    for collector_cls in BUILTIN_COLLECTORS:
        registry.add(collector_cls.name, collector_cls(ctx, repository), collector_cls.aliases)
    for processor_cls in BUILTIN_PROCESSORS:
        processor = processor_cls(ctx, repository, registry)
        registry.add(processor_cls.name, processor, processor_cls.aliases)
    return registry
