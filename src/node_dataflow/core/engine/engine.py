# src/node_dataflow/core/engine/engine.py
"""
Engine de execução do Node DataFlow.

O Engine coordena uma execução produtor/consumidor:
    - resolve collector e processor pelo nome (ComponentRegistry)
    - registra o modo (READ-ONLY / READ-WRITE)
    - inicia 1 tarefa de collector e N tarefas de worker do processor
    - aguarda os collectors, fecha a fila, aguarda os workers
    - consolida o resultado (processados, falhas, tempo, hash da config)

Política de falhas:
    - Falhas por item ficam no RunContext e não interrompem a execução
    - Qualquer exceção que escape de uma tarefa (ex.: fila interrompida)
      aborta a fila e é relançada como `EngineExecutionError`
    - KeyboardInterrupt aborta a fila e também vira `EngineExecutionError`

Invariantes:
    - O contador é zerado no início de cada execução
    - A fila só é fechada depois que todos os collectors terminaram
"""

from __future__ import annotations

import time
from concurrent.futures import Future, wait
from dataclasses import dataclass
from typing import Any, List, Optional

from loguru import logger

from node_dataflow.core.config.hashing import compute_config_hash
from node_dataflow.core.config.settings import Settings
from node_dataflow.core.errors import exception_to_error
from node_dataflow.core.exceptions import EngineConfigurationError, EngineExecutionError
from node_dataflow.core.pipeline.components import NodeCollector, NodeProcessor
from node_dataflow.core.pipeline.context import RunContext
from node_dataflow.core.pipeline.registry import ComponentRegistry
from node_dataflow.core.pipeline.types import CollectorConfig, ProcessorConfig

from .stats import StatsReporter


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução."""

    processed: int
    failed: int
    elapsed_seconds: float
    config_hash: Optional[str] = None


class Engine:
    """Orquestrador canônico: 1 collector, N workers, uma fila compartilhada."""

    def __init__(self, settings: Settings, registry: ComponentRegistry, ctx: RunContext):
        self.settings = settings
        self.registry = registry
        self.ctx = ctx

    def _resolve(self, collector_config: CollectorConfig, processor_config: ProcessorConfig):
        collector = self.registry.get(collector_config.name)
        processor = self.registry.get(processor_config.name)
        if not isinstance(collector, NodeCollector):
            raise EngineConfigurationError(
                f"'{collector_config.name}' is not a collector",
                details={"name": collector_config.name},
            )
        if not isinstance(processor, NodeProcessor):
            raise EngineConfigurationError(
                f"'{processor_config.name}' is not a processor",
                details={"name": processor_config.name},
            )
        return collector, processor

    def _config_hash(self) -> Optional[str]:
        if not self.ctx.config:
            return None
        return compute_config_hash(self.ctx.config)

    @staticmethod
    def _await(futures: List["Future[Any]"]) -> None:
        for future in futures:
            future.result()

    def _abort(self, tasks: List["Future[Any]"]) -> None:
        self.ctx.queue.abort()
        wait(tasks)

    def run(self, collector_config: CollectorConfig, processor_config: ProcessorConfig) -> RunResult:
        start = time.monotonic()
        collector, processor = self._resolve(collector_config, processor_config)
        config_hash = self._config_hash()

        if self.settings.read_only:
            logger.warning("READ-ONLY mode")
        else:
            logger.warning("READ-WRITE mode")
        if config_hash:
            logger.debug("config hash --> {}", config_hash)

        self.ctx.counter.reset()
        stats = StatsReporter(self.ctx).start() if self.settings.stats_enabled else None

        collectors: List["Future[Any]"] = []
        workers: List["Future[Any]"] = []
        try:
            collectors.append(collector.collect(collector_config))
            for _ in range(self.settings.consumer_threads):
                workers.append(processor.process(processor_config))

            self._await(collectors)
            self.ctx.queue.close()
            self._await(workers)
        except KeyboardInterrupt as e:
            self._abort(collectors + workers)
            raise EngineExecutionError(
                "Execution interrupted",
                details={"processed": self.ctx.counter.value},
            ) from e
        except Exception as e:
            self._abort(collectors + workers)
            error = exception_to_error(e)
            logger.error("Execution failed: {}", error.message)
            raise EngineExecutionError(
                f"Execution failed: {error.message}",
                details={"cause": error.to_dict(), "processed": self.ctx.counter.value},
                hint="A execução foi interrompida; nenhum retry é aplicado automaticamente.",
            ) from e
        finally:
            if stats is not None:
                stats.stop()

        elapsed = time.monotonic() - start
        result = RunResult(
            processed=self.ctx.counter.value,
            failed=self.ctx.failed_count,
            elapsed_seconds=elapsed,
            config_hash=config_hash,
        )
        logger.info("{} nodes processed", result.processed)
        if result.failed:
            logger.warning("{} nodes failed", result.failed)
        logger.debug("total time --> {:.2f}", elapsed)
        return result
