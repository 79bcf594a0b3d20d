# src/node_dataflow/processors/__init__.py
"""
Processors do Node DataFlow: transformações aplicadas a cada node.

Todos herdam o loop de consumo de `AbstractNodeProcessor` e acessam o
repositório apenas pelo guard de read-only (`nodes(config)`).
"""

from .add_aspects import AddAspectsAndSetPropertiesProcessor
from .base import AbstractNodeProcessor
from .basic import LogNodeNameProcessor, VoidProcessor
from .chaining import ChainingNodeProcessor
from .delete_node import DeleteNodeProcessor
from .download_node import DownloadNodeProcessor
from .move_node import MoveNodeProcessor, MoveState
from .normalize_metadata import NormalizeMetadataProcessor
from .set_permissions import SetPermissionsProcessor

__all__ = [
    "AbstractNodeProcessor",
    "AddAspectsAndSetPropertiesProcessor",
    "ChainingNodeProcessor",
    "DeleteNodeProcessor",
    "DownloadNodeProcessor",
    "LogNodeNameProcessor",
    "MoveNodeProcessor",
    "MoveState",
    "NormalizeMetadataProcessor",
    "SetPermissionsProcessor",
    "VoidProcessor",
]
