# src/node_dataflow/core/pipeline/registry.py
"""
Registro de componentes (collectors e processors) por nome canônico.

Este módulo define o `ComponentRegistry`, responsável por resolver o nome
declarado na configuração para a instância construída do componente.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada componente possua um nome válido
    - não existam nomes canônicos duplicados
    - nomes desconhecidos falhem de forma explícita e tipada

Decisões arquiteturais:
    - Nome canônico = minúsculas sem caracteres não alfanuméricos, de modo
      que `MoveNodeProcessor`, `moveNodeProcessor` e `move-node-processor`
      são equivalentes
    - Aliases apontam para a mesma instância
    - O registry é apenas leitura após a montagem (startup)

Invariantes:
    - Cada nome canônico resolve para exatamente um componente
    - A ordem de registro é preservada em `names()`

Limites explícitos:
    - Não constrói componentes (ver `core.engine.build_registry`)
    - Não executa collectors nem processors
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from node_dataflow.core.exceptions import DuplicateComponentError, UnknownComponentError

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def canonical_name(name: str) -> str:
    """Normaliza um nome de componente para a chave do registry."""
    return _NON_ALNUM.sub("", str(name).lower())


@dataclass
class ComponentRegistry:
    """
    Registro canônico de collectors e processors.

    Decisões arquiteturais:
        - Duplicidade é erro fatal de montagem (`DuplicateComponentError`)
        - Nome não resolvido é erro tipado (`UnknownComponentError`), fatal
          para a invocação que o pediu
    """

    _components: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, name: str, component: Any, aliases: Iterable[str] = ()) -> None:
        keys = [canonical_name(name), *(canonical_name(a) for a in aliases)]
        for key in keys:
            if not key:
                raise ValueError("component name must contain at least one alphanumeric character")
            if key in self._components:
                raise DuplicateComponentError(
                    f"Duplicate component name: {key}",
                    details={"name": name, "canonical": key},
                )
        for key in keys:
            self._components[key] = component
            self._order.append(key)

    def get(self, name: str) -> Any:
        key = canonical_name(name)
        try:
            return self._components[key]
        except KeyError:
            raise UnknownComponentError(
                f"No component registered with name '{name}'",
                details={"name": name, "canonical": key, "available": list(self._order)},
                hint="Verifique o `name` declarado na configuração",
            ) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._components

    def names(self) -> List[str]:
        return list(self._order)
