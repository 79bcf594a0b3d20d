# src/node_dataflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Node DataFlow.

Este módulo define as configurações imutáveis passadas a collectors e
processors em cada invocação.

Componentes principais:
    - CollectorConfig → {name, args}
    - ProcessorConfig → {name, args, read_only}

Princípios fundamentais:
    - Configurações são imutáveis por invocação (frozen)
    - `args` é um mapa aberto; cada componente lê as chaves que conhece
    - `read_only=None` significa "herdar" (do pai na cadeia ou do default global)

Invariantes:
    - `name` é sempre uma string não vazia
    - `args` é sempre um dicionário (nunca None)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

READ_ONLY_KEYS = ("readOnly", "read-only", "read_only")

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def parse_bool(value: Any, key: str) -> bool:
    """
    Interpreta um flag vindo de YAML, JSON ou linha de comando.

    Aceita bool, os inteiros 0/1 e as strings `true/false`, `yes/no`,
    `on/off` (sem diferenciar caixa). Qualquer outro valor é rejeitado
    em vez de cair na veracidade do Python (`bool("false")` é True).

    Raises:
        ValueError: valor que não representa um booleano.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValueError(f"'{key}' must be a boolean, got {value!r}")


def _require_name(data: Mapping[str, Any], kind: str) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"{kind} config requires a non-empty 'name'")
    return name.strip()


def _args_of(data: Mapping[str, Any]) -> Dict[str, Any]:
    args = data.get("args")
    if args is None:
        return {}
    if not isinstance(args, Mapping):
        raise ValueError(f"'args' must be a mapping, got {type(args).__name__}")
    return dict(args)


@dataclass(frozen=True)
class CollectorConfig:
    """Configuração de uma invocação de collector."""

    name: str
    args: Dict[str, Any] = field(default_factory=dict)

    def get_arg(self, key: str, *aliases: str, default: Any = None) -> Any:
        for k in (key, *aliases):
            if k in self.args:
                return self.args[k]
        return default

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CollectorConfig":
        return cls(name=_require_name(data, "collector"), args=_args_of(data))


@dataclass(frozen=True)
class ProcessorConfig:
    """
    Configuração de uma invocação de processor.

    `read_only` explícito sempre vence; quando ausente, o valor efetivo é
    resolvido por quem invoca (`AbstractNodeProcessor.effective_read_only`).
    """

    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    read_only: Optional[bool] = None

    def get_arg(self, key: str, *aliases: str, default: Any = None) -> Any:
        for k in (key, *aliases):
            if k in self.args:
                return self.args[k]
        return default

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        inherited_read_only: Optional[bool] = None,
    ) -> "ProcessorConfig":
        read_only = inherited_read_only
        for key in READ_ONLY_KEYS:
            if data.get(key) is not None:
                read_only = parse_bool(data[key], key)
                break
        return cls(
            name=_require_name(data, "processor"),
            args=_args_of(data),
            read_only=read_only,
        )
