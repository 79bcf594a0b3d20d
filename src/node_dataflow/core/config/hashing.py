# src/node_dataflow/core/config/hashing.py
"""
Hash canônico da configuração efetiva.

O hash identifica a configuração usada em uma execução e é registrado no
log de início do Engine e no `RunResult`. Credenciais do repositório são
removidas antes do cálculo para que o hash possa ser compartilhado.
"""

import hashlib
import json
from copy import deepcopy
from typing import Any, Dict

REDACTED_KEYS = ("password",)


def _redact(config: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = deepcopy(config)
    repo = cleaned.get("repository")
    if isinstance(repo, dict):
        for key in REDACTED_KEYS:
            repo.pop(key, None)
    return cleaned


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva.

    Política de hashing (v1):
        - Remoção de credenciais (`repository.password`)
        - Serialização JSON canônica (chaves ordenadas, separadores compactos)
        - Codificação UTF-8, algoritmo SHA-256

    Args:
        config (Dict[str, Any]): Configuração efetiva.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"compute_config_hash expects dict, got: {type(config).__name__}"
        )

    canonical = json.dumps(
        _redact(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
