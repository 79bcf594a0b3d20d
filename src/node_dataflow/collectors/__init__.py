# src/node_dataflow/collectors/__init__.py
"""
Collectors do Node DataFlow: fontes de identificadores.

    - NodeListCollector  → arquivo texto, um id por linha
    - NodeTreeCollector  → percurso de árvore a partir de um node/caminho
    - QueryNodeCollector → resultados paginados de uma busca
"""

from .base import AbstractNodeCollector
from .node_list import NodeListCollector
from .node_tree import NodeTreeCollector
from .query import QueryNodeCollector

__all__ = [
    "AbstractNodeCollector",
    "NodeListCollector",
    "NodeTreeCollector",
    "QueryNodeCollector",
]
