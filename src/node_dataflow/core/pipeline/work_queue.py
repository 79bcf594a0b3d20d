# src/node_dataflow/core/pipeline/work_queue.py
"""
Fila de trabalho limitada e contador de nodes processados.

Este módulo define as duas estruturas compartilhadas por referência entre
todas as tarefas de uma execução:

    - WorkQueue        → FIFO limitada (capacidade C) de identificadores
    - ProcessedCounter → contagem de transformações concluídas sem erro

Semântica da WorkQueue:
    - `put` bloqueia enquanto a fila está cheia (nunca descarta, nunca falha)
    - `poll(timeout)` bloqueia até `timeout` segundos e devolve `None` se vazia
    - `close()` sinaliza "não há mais produtores"; não descarta itens pendentes
    - `abort()` interrompe esperas: `put`/`poll` passam a levantar
      `QueueInterruptedError`

Invariantes:
    - O tamanho da fila nunca excede a capacidade
    - A ordem é FIFO dentro da fila; não há ordem entre workers
    - O contador é monotônico dentro de uma execução
"""

from __future__ import annotations

import queue
import threading
from typing import Optional

from node_dataflow.core.exceptions import QueueInterruptedError
from node_dataflow.core.repository.base import NodeId

# granularidade das esperas bloqueantes para reagir a abort()
_WAIT_SLICE = 0.1


class WorkQueue:
    """FIFO limitada multi-produtor/multi-consumidor de identificadores."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("WorkQueue capacity must be >= 1")
        self._capacity = capacity
        self._queue: "queue.Queue[NodeId]" = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()
        self._aborted = threading.Event()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def aborted(self) -> bool:
        return self._aborted.is_set()

    def qsize(self) -> int:
        return self._queue.qsize()

    def _check_aborted(self) -> None:
        if self._aborted.is_set():
            raise QueueInterruptedError("Work queue aborted while waiting")

    def put(self, node_id: NodeId) -> None:
        """Enfileira `node_id`, bloqueando enquanto a fila estiver cheia."""
        while True:
            self._check_aborted()
            try:
                self._queue.put(node_id, timeout=_WAIT_SLICE)
                return
            except queue.Full:
                continue

    def poll(self, timeout: float) -> Optional[NodeId]:
        """Próximo id, ou `None` se nada chegar em `timeout` segundos."""
        remaining = max(0.0, float(timeout))
        while True:
            self._check_aborted()
            wait = min(_WAIT_SLICE, remaining)
            try:
                return self._queue.get(timeout=wait) if wait > 0 else self._queue.get_nowait()
            except queue.Empty:
                remaining -= wait
                if remaining <= 0:
                    return None

    def close(self) -> None:
        self._closed.set()

    def abort(self) -> None:
        self._aborted.set()


class ProcessedCounter:
    """Contador thread-safe de nodes processados com sucesso."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0
