# src/node_dataflow/normalization/engine.py
"""
Interpretador da cadeia de operações de normalização.

Entrada: mapa ordenado propriedade → lista ordenada de `OperationDescriptor`.
Saída: mapa de valores pendentes, enviado como um único update do node.

Regras de avaliação:
    - Valor pendente = última saída da propriedade nesta execução
      (inclusive `None` explícito); senão, o valor original do node
    - Pendente `None` interrompe as operações restantes da propriedade
    - `copy-to` e `parse-date-to` escrevem na propriedade indicada em `value`
      sem alterar o pendente da origem
    - Operação desconhecida ou descritor incompleto → warning e ignorado

Limites explícitos:
    - Não acessa o repositório
    - Não valida nomes de propriedades
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from . import operations

OP_TRIM = "trim"
OP_COLLAPSE_WHITESPACE = "collapse-whitespace"
OP_CASE = "case"
OP_REGEX = "regex"
OP_COPY_TO = "copy-to"
OP_DELETE = "delete"
OP_PARSE_DATE_TO = "parse-date-to"

# nome legado aceito como sinônimo
OP_ALIASES = {"parse-date": OP_PARSE_DATE_TO}


@dataclass(frozen=True)
class OperationDescriptor:
    """Uma operação: `op` e os campos que ela exige."""

    op: str
    value: Optional[str] = None
    pattern: Optional[str] = None
    replace: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OperationDescriptor":
        if not isinstance(data, Mapping):
            raise ValueError(f"operation descriptor must be a mapping, got {type(data).__name__}")
        op = str(data.get("op") or "").strip()
        op = OP_ALIASES.get(op, op)

        def _opt(key: str) -> Optional[str]:
            raw = data.get(key)
            return None if raw is None else str(raw)

        return cls(op=op, value=_opt("value"), pattern=_opt("pattern"), replace=_opt("replace"))


def parse_operations(args: Mapping[str, Any]) -> Dict[str, List[OperationDescriptor]]:
    """
    Converte os `args` do processor em mapa ordenado de operações.

    Entradas que não são listas de mapeamentos são ignoradas com warning.
    """
    plan: Dict[str, List[OperationDescriptor]] = {}
    for prop, raw_ops in (args or {}).items():
        if not isinstance(raw_ops, list):
            logger.warning("Ignoring normalization entry for '{}': expected a list of operations", prop)
            continue
        descriptors = []
        for raw in raw_ops:
            try:
                descriptors.append(OperationDescriptor.from_dict(raw))
            except ValueError as e:
                logger.warning("Ignoring normalization operation for '{}': {}", prop, e)
        plan[str(prop)] = descriptors
    return plan


class NormalizationEngine:
    """Aplica as operações configuradas sobre as propriedades de um node."""

    def __init__(self, plan: Mapping[str, List[OperationDescriptor]]):
        self.plan = dict(plan)

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "NormalizationEngine":
        return cls(parse_operations(args))

    def apply(self, properties: Mapping[str, Any]) -> Dict[str, Any]:
        pending: Dict[str, Any] = {}
        for prop, descriptors in self.plan.items():
            for descriptor in descriptors:
                value = pending[prop] if prop in pending else properties.get(prop)
                if value is None:
                    break
                self._apply_one(descriptor, prop, value, pending)
        return pending

    def _apply_one(
        self,
        descriptor: OperationDescriptor,
        prop: str,
        value: Any,
        pending: Dict[str, Any],
    ) -> None:
        op = descriptor.op
        if op == OP_TRIM:
            pending[prop] = operations.trim(value)
        elif op == OP_COLLAPSE_WHITESPACE:
            pending[prop] = operations.collapse_whitespace(value)
        elif op == OP_CASE:
            pending[prop] = operations.fix_case(value, descriptor.value)
        elif op == OP_REGEX:
            if descriptor.pattern is None:
                logger.warning("Ignoring 'regex' on '{}': missing 'pattern'", prop)
                return
            pending[prop] = operations.regex_replace(value, descriptor.pattern, descriptor.replace)
        elif op == OP_DELETE:
            pending[prop] = None
        elif op in (OP_COPY_TO, OP_PARSE_DATE_TO):
            if not descriptor.value:
                logger.warning("Ignoring '{}' on '{}': missing target 'value'", op, prop)
                return
            result = value if op == OP_COPY_TO else operations.parse_date(value)
            pending[descriptor.value] = result
        else:
            logger.warning(
                "Unsupported metadata normalization operation '{}' for property '{}'", op, prop
            )
