"""
Node DataFlow: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Node DataFlow.
Falhas por item (processors), falhas de fonte (collectors) e falhas
fatais do Engine são convertidas em payloads que devem ser:

- explícitos
- serializáveis
- rastreáveis (sempre associados a um componente e, quando houver, a um node)

Nenhuma falha por item é silenciosa: ela vira payload no RunContext e linha de log.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do Node DataFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Componentes (registry)
COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
COMPONENT_DUPLICATED = "COMPONENT_DUPLICATED"

# Collectors / Processors
COLLECTOR_SOURCE_ERROR = "COLLECTOR_SOURCE_ERROR"
PROCESSOR_EXECUTION_ERROR = "PROCESSOR_EXECUTION_ERROR"
CHAIN_STEP_ERROR = "CHAIN_STEP_ERROR"

# Repositório
REPOSITORY_ERROR = "REPOSITORY_ERROR"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"
QUEUE_INTERRUPTED = "QUEUE_INTERRUPTED"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------


def collector_source_error(
    *,
    collector: str,
    source: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "O collector foi encerrado com os ids já enfileirados; verifique a fonte configurada.",
) -> ErrorPayload:
    return ErrorPayload(
        type=COLLECTOR_SOURCE_ERROR,
        message="Falha ao ler a fonte do collector",
        details={
            "collector": collector,
            "source": source,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def exception_to_error(exc: BaseException, **details: Any) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - NodeDataflowException: já vem com message/details/hint e código próprio.
    - RepositoryError: código REPOSITORY_ERROR com status HTTP.
    - Outras exceções: encapsuladas como PROCESSOR_EXECUTION_ERROR sem stack trace.
    """
    # import local: exceptions depende deste módulo
    from node_dataflow.core.exceptions import NodeDataflowException
    from node_dataflow.core.repository.base import RepositoryError

    if isinstance(exc, NodeDataflowException):
        merged = dict(exc.details or {})
        merged.update(details)
        return ErrorPayload(
            type=exc.code,
            message=exc.message or "Erro de execução",
            details=merged,
            hint=exc.hint,
        )

    if isinstance(exc, RepositoryError):
        return ErrorPayload(
            type=REPOSITORY_ERROR,
            message=str(exc) or "Erro no repositório",
            details={"status": exc.status, **details},
            hint="Verifique permissões e existência do node no repositório",
        )

    return ErrorPayload(
        type=PROCESSOR_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado",
        details={"exc_type": exc.__class__.__name__, **details},
        hint="Verifique o log técnico e a configuração do processor",
    )
