# src/node_dataflow/core/config/merge.py
"""
Deep-merge dos defaults embutidos com o arquivo do operador.

Política de merge (v1):
    - mapping sobre mapping → merge recursivo por chave
    - lista ou escalar → o valor do operador substitui o default inteiro
    - `None` em qualquer dos lados → substituição direta (desliga o default)
    - int e float são intercambiáveis; bool não conta como número
    - qualquer outra mudança de tipo → `ConfigTypeConflictError`, com o
      caminho completo da chave (ex.: `application.stats.enabled`)

Invariantes:
    - Nenhum input é mutado; o resultado é sempre um novo dicionário
    - Chaves ausentes no override são preservadas da base
"""

from copy import deepcopy
from typing import Any, Dict, Mapping, Tuple

from .errors import ConfigTypeConflictError

_NUMBER = (int, float)


def _is_number(value: Any) -> bool:
    return isinstance(value, _NUMBER) and not isinstance(value, bool)


def _same_kind(default: Any, given: Any) -> bool:
    if default is None or given is None:
        return True
    if _is_number(default) and _is_number(given):
        return True
    return type(default) is type(given)


def _merge_into(target: Dict[str, Any], override: Mapping[str, Any], path: Tuple[str, ...]) -> None:
    for key, given in override.items():
        if key not in target:
            target[key] = deepcopy(given)
            continue

        default = target[key]
        if isinstance(default, dict) and isinstance(given, Mapping):
            _merge_into(default, given, path + (str(key),))
        elif _same_kind(default, given):
            target[key] = deepcopy(given)
        else:
            dotted = ".".join(path + (str(key),))
            raise ConfigTypeConflictError(
                f"Type conflict on key '{dotted}': "
                f"{type(default).__name__} vs {type(given).__name__}"
            )


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Resolve `override` sobre `base` e devolve a configuração efetiva.

    Raises:
        ConfigTypeConflictError: raiz que não é mapping, ou tipo incompatível
            em alguma chave.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise ConfigTypeConflictError(
            f"Deep-merge requires mappings at root level, got: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    result = deepcopy(dict(base))
    _merge_into(result, override, ())
    return result
