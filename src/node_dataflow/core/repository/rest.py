# src/node_dataflow/core/repository/rest.py
"""
Cliente REST fino para a API pública v1 do Alfresco.

Implementa a capability `Repository` sobre HTTP (requests), sem lógica de
coordenação: cada método é uma chamada, mapeada para os tipos `Node`/`Page`.

Mapeamento de erros:
    - 404 → NodeNotFoundError
    - 409 → NodeConflictError
    - demais status >= 400 → RepositoryError
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from .base import (
    Node,
    NodeConflictError,
    NodeId,
    NodeNotFoundError,
    Page,
    RepositoryError,
)

CORE_API = "/alfresco/api/-default-/public/alfresco/versions/1"
SEARCH_API = "/alfresco/api/-default-/public/search/versions/1"

DEFAULT_INCLUDE = ["properties", "aspectNames"]


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _to_node(entry: Dict[str, Any]) -> Node:
    return Node(
        id=entry["id"],
        name=entry.get("name", ""),
        is_folder=bool(entry.get("isFolder", False)),
        node_type=entry.get("nodeType"),
        parent_id=entry.get("parentId"),
        aspect_names=list(entry.get("aspectNames") or []),
        properties=dict(entry.get("properties") or {}),
        path=(entry.get("path") or {}).get("name"),
        created_at=entry.get("createdAt"),
    )


def _to_page(body: Dict[str, Any]) -> Page:
    lst = body.get("list") or {}
    entries = [_to_node(e["entry"]) for e in lst.get("entries") or []]
    pagination = lst.get("pagination") or {}
    return Page(entries=entries, has_more_items=bool(pagination.get("hasMoreItems", False)))


class RestRepository:
    """Repository sobre a API REST do Alfresco (basic auth)."""

    def __init__(
        self,
        *,
        url: str,
        username: str,
        password: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (username, password)

    # -----------------------------
    # Transporte
    # -----------------------------
    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        if "json" in kwargs:
            # datetimes (parse-date-to) precisam de serialização ISO-8601
            kwargs["data"] = json.dumps(kwargs.pop("json"), default=_json_default)
            kwargs.setdefault("headers", {})["Content-Type"] = "application/json"
        logger.trace("{} {}", method, url)
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if response.status_code == 404:
            raise NodeNotFoundError(f"{method} {path}: not found")
        if response.status_code == 409:
            raise NodeConflictError(f"{method} {path}: conflict")
        if response.status_code >= 400:
            raise RepositoryError(
                f"{method} {path}: HTTP {response.status_code}", status=response.status_code
            )
        return response

    # -----------------------------
    # Leitura
    # -----------------------------
    def get_node(
        self,
        node_id: NodeId,
        include: Optional[List[str]] = None,
        relative_path: Optional[str] = None,
    ) -> Node:
        params: Dict[str, Any] = {"include": ",".join(include or DEFAULT_INCLUDE)}
        if relative_path:
            params["relativePath"] = relative_path
        body = self._request("GET", f"{CORE_API}/nodes/{node_id}", params=params).json()
        return _to_node(body["entry"])

    def list_children(self, node_id: NodeId, skip: int, page_size: int) -> Page:
        params = {"skipCount": skip, "maxItems": page_size}
        body = self._request("GET", f"{CORE_API}/nodes/{node_id}/children", params=params).json()
        return _to_page(body)

    def search(self, query: str, skip: int, page_size: int) -> Page:
        payload = {
            "query": {"query": query, "language": "afts"},
            "paging": {"maxItems": page_size, "skipCount": skip},
        }
        body = self._request("POST", f"{SEARCH_API}/search", json=payload).json()
        return _to_page(body)

    def get_content(self, node_id: NodeId) -> bytes:
        return self._request("GET", f"{CORE_API}/nodes/{node_id}/content").content

    def get_version_content(self, node_id: NodeId, version_id: str) -> bytes:
        path = f"{CORE_API}/nodes/{node_id}/versions/{version_id}/content"
        return self._request("GET", path).content

    # -----------------------------
    # Escrita
    # -----------------------------
    def update_node(self, node_id: NodeId, fields: Dict[str, Any]) -> Optional[Node]:
        body = self._request("PUT", f"{CORE_API}/nodes/{node_id}", json=fields).json()
        return _to_node(body["entry"])

    def delete_node(self, node_id: NodeId, permanent: bool = False) -> None:
        params = {"permanent": "true" if permanent else "false"}
        self._request("DELETE", f"{CORE_API}/nodes/{node_id}", params=params)

    def move_node(
        self,
        node_id: NodeId,
        target_parent_id: NodeId,
        new_name: Optional[str] = None,
    ) -> Optional[Node]:
        payload: Dict[str, Any] = {"targetParentId": target_parent_id}
        if new_name:
            payload["name"] = new_name
        body = self._request("POST", f"{CORE_API}/nodes/{node_id}/move", json=payload).json()
        return _to_node(body["entry"])
