"""
Node DataFlow: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Node DataFlow.

Objetivo:
- Permitir que collectors, processors e Engine levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos em pontos críticos de coordenação

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Cada classe expõe um `code` estável do catálogo de `core.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from node_dataflow.core import errors


@dataclass(frozen=True)
class NodeDataflowException(Exception):
    """Base class para exceções internas do Node DataFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    code: ClassVar[str] = errors.ENGINE_EXECUTION_ERROR

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnknownComponentError(NodeDataflowException):
    """Nenhum collector/processor registrado com o nome solicitado."""

    code: ClassVar[str] = errors.COMPONENT_NOT_FOUND


@dataclass(frozen=True)
class DuplicateComponentError(NodeDataflowException):
    """Dois componentes registrados com o mesmo nome canônico."""

    code: ClassVar[str] = errors.COMPONENT_DUPLICATED


# ---------------------------------------------------------------------------
# Processors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChainStepError(NodeDataflowException):
    """Um passo da cadeia falhou; os passos restantes não foram executados."""

    code: ClassVar[str] = errors.CHAIN_STEP_ERROR


# ---------------------------------------------------------------------------
# Engine / Fila
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QueueInterruptedError(NodeDataflowException):
    """Espera na fila interrompida (fila abortada). Fatal para o worker."""

    code: ClassVar[str] = errors.QUEUE_INTERRUPTED


@dataclass(frozen=True)
class EngineConfigurationError(NodeDataflowException):
    """Configuração inválida ou inconsistente para execução."""

    code: ClassVar[str] = errors.ENGINE_CONFIGURATION_ERROR


@dataclass(frozen=True)
class EngineExecutionError(NodeDataflowException):
    """Erro fatal durante execução do Engine (encapsulado)."""

    code: ClassVar[str] = errors.ENGINE_EXECUTION_ERROR


# ---------------------------------------------------------------------------
# Instância única
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LockAlreadyHeldError(NodeDataflowException):
    """Outra instância já detém o lock; saída limpa."""


@dataclass(frozen=True)
class LockAcquisitionError(NodeDataflowException):
    """Falha de I/O ao tentar obter o lock; saída com erro."""
