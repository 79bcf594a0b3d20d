"""
Camada de acesso ao repositório do Node DataFlow.

Componentes:
    - base  → protocolo `Repository`, tipos `Node`/`Page` e erros
    - guard → `ReadOnlyRepository`, decorator que suprime chamadas mutantes
    - rest  → `RestRepository`, cliente HTTP fino (API pública v1 do Alfresco)

O core consome apenas o protocolo; o cliente concreto é escolhido pela CLI.
"""

from .base import (
    ROOT_NODE_ID,
    Node,
    NodeConflictError,
    NodeId,
    NodeNotFoundError,
    Page,
    Repository,
    RepositoryError,
)
from .guard import ReadOnlyRepository, is_mutating_call

__all__ = [
    "ROOT_NODE_ID",
    "Node",
    "NodeConflictError",
    "NodeId",
    "NodeNotFoundError",
    "Page",
    "ReadOnlyRepository",
    "Repository",
    "RepositoryError",
    "is_mutating_call",
]
