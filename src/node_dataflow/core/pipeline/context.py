# src/node_dataflow/core/pipeline/context.py
"""
Contexto de execução compartilhado de uma run.

Este módulo define o `RunContext`, a estrutura canônica passada a todos os
collectors e processors de uma execução.

O RunContext consolida:
    - identidade da execução (run_id, created_at)
    - knobs de execução resolvidos (`Settings`)
    - a WorkQueue e o ProcessedCounter compartilhados
    - o executor de tarefas (threads) onde collectors e workers rodam
    - o event log estruturado e as falhas por item (histórico limitado)

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Acesso concorrente seguro: eventos e falhas são protegidos por lock
    - Todo evento é também emitido no log (loguru)

Invariantes:
    - Eventos sempre incluem `run_id` e `component`
    - Falhas por item sempre incluem `node_id`
    - `events` e `failures` guardam apenas as entradas mais recentes
      (`EVENT_HISTORY` / `FAILURE_HISTORY`); `failed_count` conta todas

Limites explícitos:
    - Não executa collectors nem processors
    - Não decide políticas de saída dos workers
"""

from __future__ import annotations

import threading
import uuid
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, Optional

from loguru import logger

from node_dataflow.core.config.settings import Settings
from node_dataflow.core.errors import ErrorPayload, exception_to_error

from .work_queue import ProcessedCounter, WorkQueue

EVENT_HISTORY = 1000
FAILURE_HISTORY = 1000


@dataclass
class RunContext:
    """
    Contexto de execução compartilhado por collectors e processors.

    Decisões arquiteturais:
        - WorkQueue e ProcessedCounter são criados uma vez por run e
          compartilhados por referência
        - Tarefas são submetidas a um único ThreadPoolExecutor
        - `log` registra o evento e o emite via loguru com `component`/`node_id`
    """

    run_id: str
    created_at: datetime
    settings: Settings
    queue: WorkQueue
    counter: ProcessedCounter
    executor: ThreadPoolExecutor
    config: Dict[str, Any] = field(default_factory=dict)

    events: Deque[Dict[str, Any]] = field(
        default_factory=lambda: deque(maxlen=EVENT_HISTORY), init=False
    )
    failures: Deque[Dict[str, Any]] = field(
        default_factory=lambda: deque(maxlen=FAILURE_HISTORY), init=False
    )
    _failed: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def create(
        cls,
        settings: Settings,
        *,
        config: Optional[Dict[str, Any]] = None,
        max_workers: Optional[int] = None,
    ) -> "RunContext":
        # 1 collector + N workers + folga para invocações extras
        workers = max_workers or settings.consumer_threads + 4
        return cls(
            run_id=f"run-{uuid.uuid4().hex[:12]}",
            created_at=datetime.now(timezone.utc),
            settings=settings,
            queue=WorkQueue(settings.queue_size),
            counter=ProcessedCounter(),
            executor=ThreadPoolExecutor(max_workers=workers, thread_name_prefix="node-dataflow"),
            config=dict(config or {}),
        )

    # -----------------------------
    # Tarefas
    # -----------------------------
    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> "Future[Any]":
        return self.executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)

    # -----------------------------
    # Logging & falhas
    # -----------------------------
    def log(self, *, component: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "component": component,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)
        bound = logger.bind(component=component, **{k: v for k, v in extra.items() if k == "node_id"})
        bound.log(level, message)

    def record_failure(self, *, component: str, node_id: str, exc: BaseException) -> ErrorPayload:
        error = exception_to_error(exc, node_id=node_id, component=component)
        with self._lock:
            self._failed += 1
            self.failures.append({"node_id": node_id, "component": component, "error": error.to_dict()})
        self.log(
            component=component,
            level="ERROR",
            message=f"Error processing node {node_id}: {error.message}",
            node_id=node_id,
            error=error.to_dict(),
        )
        return error

    @property
    def failed_count(self) -> int:
        with self._lock:
            return self._failed
