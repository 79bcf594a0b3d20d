# src/node_dataflow/core/repository/guard.py
"""
Guard de read-only sobre a capability do repositório.

Este módulo define o `ReadOnlyRepository`, um decorator explícito em torno
de um `Repository` que é entregue à camada de processamento no lugar do
cliente cru.

Política:
    - Chamada guardada (`guarded(nome_do_método)` verdadeiro) com
      `read_only=True` → warning no log e retorno `None`, sem encaminhar
    - Qualquer outra chamada → encaminhada sem alteração

Decisões arquiteturais:
    - A decisão depende apenas do flag e do predicado, nunca de quem chama
    - Collectors recebem o repositório cru; processors recebem o guard
    - Cada passo de uma cadeia recebe seu próprio guard (flag efetivo do passo)

Limites explícitos:
    - Não altera argumentos nem resultados de chamadas encaminhadas
    - Não bloqueia leituras
"""

from __future__ import annotations

from typing import Any, Callable

from loguru import logger

MUTATING_PREFIXES = ("copy", "create", "delete", "lock", "move", "unlock", "update")


def is_mutating_call(method_name: str) -> bool:
    return method_name.startswith(MUTATING_PREFIXES)


class ReadOnlyRepository:
    """Decorator de `Repository` que suprime chamadas mutantes em read-only."""

    def __init__(
        self,
        delegate: Any,
        read_only: bool,
        guarded: Callable[[str], bool] = is_mutating_call,
    ):
        self._delegate = delegate
        self._read_only = bool(read_only)
        self._guarded = guarded

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def delegate(self) -> Any:
        return self._delegate

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._delegate, name)
        if not callable(attr) or not self._read_only or not self._guarded(name):
            return attr

        def _suppressed(*args: Any, **kwargs: Any) -> None:
            logger.warning(
                "Read-only mode - skipping call to {} with args {} {}",
                name,
                list(args),
                kwargs,
            )
            return None

        return _suppressed

    def __repr__(self) -> str:
        return f"ReadOnlyRepository(read_only={self._read_only}, delegate={self._delegate!r})"
