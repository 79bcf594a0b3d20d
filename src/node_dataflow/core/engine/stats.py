# src/node_dataflow/core/engine/stats.py
"""Reporter periódico do tamanho da fila e do contador de processados."""

from __future__ import annotations

import threading
from typing import Optional

from loguru import logger

from node_dataflow.core.pipeline.context import RunContext


class StatsReporter:
    """
    Thread que loga, a cada `stats_print_interval` segundos, o tamanho da
    fila (debug) e o número de nodes processados (info), até `stop()`.
    """

    def __init__(self, ctx: RunContext, interval: Optional[float] = None):
        self.ctx = ctx
        self.interval = float(interval if interval is not None else ctx.settings.stats_print_interval)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def report(self) -> None:
        logger.debug("queued nodes --> {}", self.ctx.queue.qsize())
        logger.info("processed nodes --> {}", self.ctx.counter.value)

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.report()
            self._stop.wait(self.interval)

    def start(self) -> "StatsReporter":
        if self._thread is None:
            self._thread = threading.Thread(target=self._loop, name="stats-reporter", daemon=True)
            self._thread.start()
        return self

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
