# src/node_dataflow/core/repository/base.py
"""
Contrato canônico de acesso ao repositório de conteúdo.

Este módulo define a *capability* consumida (e não implementada) pelo core:
o conjunto mínimo de operações sobre nodes de um repositório documental
no estilo Alfresco.

Responsabilidades do módulo:
    - Definir o protocolo `Repository` (duck typing, @runtime_checkable)
    - Definir os tipos de dados trocados com o repositório (`Node`, `Page`)
    - Definir a hierarquia de erros do repositório

Princípios fundamentais:
    - O core depende apenas deste contrato, nunca de um cliente concreto
    - Operações mutantes são identificáveis pelo nome do método
      (ver `core.repository.guard`)

Limites explícitos:
    - Não implementa transporte (HTTP, SDK)
    - Não aplica política de read-only
    - Não faz retry nem backoff
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

NodeId = str

ROOT_NODE_ID = "-root-"


@dataclass(frozen=True)
class Node:
    """Visão imutável de um node do repositório."""

    id: NodeId
    name: str = ""
    is_folder: bool = False
    node_type: Optional[str] = None
    parent_id: Optional[NodeId] = None
    aspect_names: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class Page:
    """Página de resultados (children ou search)."""

    entries: List[Node] = field(default_factory=list)
    has_more_items: bool = False


class RepositoryError(Exception):
    """Erro retornado pelo repositório (status HTTP quando disponível)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class NodeNotFoundError(RepositoryError):
    """Node inexistente (404)."""

    def __init__(self, message: str):
        super().__init__(message, status=404)


class NodeConflictError(RepositoryError):
    """Conflito de nome no destino (409)."""

    def __init__(self, message: str):
        super().__init__(message, status=409)


@runtime_checkable
class Repository(Protocol):
    """
    Capability mínima do repositório consumida por collectors e processors.

    Métodos mutantes: update_node, delete_node, move_node.
    Métodos de leitura: get_node, list_children, search, get_content,
    get_version_content.
    """

    def get_node(
        self,
        node_id: NodeId,
        include: Optional[List[str]] = None,
        relative_path: Optional[str] = None,
    ) -> Node:
        ...

    def update_node(self, node_id: NodeId, fields: Dict[str, Any]) -> Optional[Node]:
        ...

    def delete_node(self, node_id: NodeId, permanent: bool = False) -> None:
        ...

    def move_node(
        self,
        node_id: NodeId,
        target_parent_id: NodeId,
        new_name: Optional[str] = None,
    ) -> Optional[Node]:
        ...

    def list_children(self, node_id: NodeId, skip: int, page_size: int) -> Page:
        ...

    def search(self, query: str, skip: int, page_size: int) -> Page:
        ...

    def get_content(self, node_id: NodeId) -> bytes:
        ...

    def get_version_content(self, node_id: NodeId, version_id: str) -> bytes:
        ...
