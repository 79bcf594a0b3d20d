# src/node_dataflow/processors/set_permissions.py
"""Definição de permissões (herança e permissões locais) de um node."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from loguru import logger

from node_dataflow.core.pipeline.types import ProcessorConfig, parse_bool
from node_dataflow.core.repository.base import NodeId

from .base import AbstractNodeProcessor

ACCESS_STATUSES = ("ALLOWED", "DENIED")


def build_permissions_body(permissions: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Converte o bloco `permissions` da configuração no corpo do update.

    Raises:
        ValueError: entrada local incompleta ou `accessStatus` inválido.
    """
    locally_set: List[Dict[str, Any]] = []
    for entry in permissions.get("locallySet") or []:
        if not isinstance(entry, Mapping):
            raise ValueError("each 'locallySet' entry must be a mapping")
        authority = entry.get("authorityId")
        name = entry.get("name")
        if not authority or not name:
            raise ValueError("'locallySet' entries require 'authorityId' and 'name'")
        status = str(entry.get("accessStatus", "ALLOWED")).upper()
        if status not in ACCESS_STATUSES:
            raise ValueError(f"Invalid accessStatus {entry.get('accessStatus')!r}")
        locally_set.append({"authorityId": authority, "name": name, "accessStatus": status})

    body: Dict[str, Any] = {"locallySet": locally_set}
    if permissions.get("isInheritanceEnabled") is not None:
        body["isInheritanceEnabled"] = parse_bool(permissions["isInheritanceEnabled"], "isInheritanceEnabled")
    return body


class SetPermissionsProcessor(AbstractNodeProcessor):
    name = "SetPermissionsProcessor"

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        permissions = config.get_arg("permissions")
        if permissions is None:
            logger.warning("permissions not set in config file")
            return
        if not isinstance(permissions, Mapping):
            raise ValueError(f"'permissions' must be a mapping, got {type(permissions).__name__}")

        fields = {"permissions": build_permissions_body(permissions)}
        logger.debug("updating node --> {} with --> {}", node_id, fields)
        self.nodes(config).update_node(node_id, fields)
