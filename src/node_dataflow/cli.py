# src/node_dataflow/cli.py
"""
Ponto de entrada de linha de comando do Node DataFlow.

    node-dataflow -c/--config PATH [--log-level LEVEL]

Sequência:
    1. configura o log (loguru)
    2. carrega e interpreta a configuração (defaults + arquivo)
    3. obtém o lock de instância única
    4. monta repositório, RunContext e registry; executa o Engine

Códigos de saída:
    - 0 → execução concluída (mesmo com falhas por item) ou outra instância
          já em execução
    - 1 → configuração com valores inválidos, componente desconhecido,
          falha de lock ou falha fatal de execução
    - 2 → uso incorreto: `--log-level` inválido, ou arquivo de configuração
          que não pode ser lido como mapping YAML/JSON
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from node_dataflow.core.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from node_dataflow.core.config.loader import load_config
from node_dataflow.core.config.settings import (
    RepositorySettings,
    parse_job,
    parse_repository_settings,
    parse_settings,
)
from node_dataflow.core.engine.builder import build_registry
from node_dataflow.core.engine.engine import Engine
from node_dataflow.core.exceptions import (
    LockAcquisitionError,
    LockAlreadyHeldError,
    NodeDataflowException,
)
from node_dataflow.core.lock import InstanceLock
from node_dataflow.core.logging import configure_logging
from node_dataflow.core.pipeline.context import RunContext
from node_dataflow.core.repository.base import Repository
from node_dataflow.core.repository.rest import RestRepository

app = typer.Typer(add_completion=False, help="Move node ids from a collector through processors.")


def make_repository(settings: RepositorySettings) -> Repository:
    return RestRepository(
        url=settings.url,
        username=settings.username,
        password=settings.password,
        timeout=settings.timeout,
    )


@app.command()
def main(
    config: Annotated[
        Path,
        typer.Option("-c", "--config", help="Path to the YAML or JSON config file."),
    ],
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)."),
    ] = "INFO",
) -> None:
    """Run one collector and N processor workers until the source is exhausted."""
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    try:
        resolved = load_config(str(config))
    except (ConfigFileNotFoundError, UnsupportedConfigFormatError, InvalidConfigRootTypeError) as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e
    except ConfigError as e:
        logger.error("Invalid configuration: {}", e)
        raise typer.Exit(code=1)

    try:
        settings = parse_settings(resolved)
        repository_settings = parse_repository_settings(resolved)
        collector_config, processor_config = parse_job(resolved)
    except ConfigError as e:
        logger.error("Invalid configuration: {}", e)
        raise typer.Exit(code=1)

    lock = InstanceLock(settings.lock_file)
    try:
        lock.acquire()
    except LockAlreadyHeldError as e:
        logger.warning("{}", e)
        raise typer.Exit(code=0)
    except LockAcquisitionError as e:
        logger.error("{}", e)
        raise typer.Exit(code=1)

    ctx: Optional[RunContext] = None
    try:
        repository = make_repository(repository_settings)
        ctx = RunContext.create(settings, config=resolved)
        registry = build_registry(ctx, repository)
        result = Engine(settings, registry, ctx).run(collector_config, processor_config)
    except NodeDataflowException as e:
        logger.error("{} ({})", e, e.code)
        raise typer.Exit(code=1)
    finally:
        if ctx is not None:
            ctx.shutdown(wait=True)
        lock.release()

    logger.info(
        "run {} finished: processed={} failed={} elapsed={:.2f}s",
        ctx.run_id,
        result.processed,
        result.failed,
        result.elapsed_seconds,
    )


if __name__ == "__main__":
    app()
