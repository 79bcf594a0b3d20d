# tests/conftest.py
"""
Fixtures compartilhados para testes do Node DataFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- knobs de execução rápidos e determinísticos (`Settings`)
- contexto de execução controlado (RunContext)
- repositório em memória (sem rede)
- registry montado com os componentes embutidos
- captura das mensagens emitidas via loguru

Decisões arquiteturais:
    - Timeouts curtos para que workers encerrem rapidamente nos testes
    - O executor do RunContext é sempre encerrado ao final do teste
    - A captura de log usa um sink loguru dedicado, removido no teardown

Invariantes:
    - Nenhuma fixture acessa a rede
    - Cada teste recebe fila, contador e executor próprios

Limites explícitos:
    - Não substituir testes de integração contra um repositório real
"""

import pytest
from loguru import logger

from tests.fixtures.repository import FakeRepository


@pytest.fixture
def fast_settings():
    """
    Settings com timeouts curtos e fila pequena.

    Returns:
        Settings: 2 workers, fila de 10, timeout de 0.2s, saída por `close`.
    """
    from node_dataflow.core.config.settings import Settings

    return Settings(
        consumer_threads=2,
        queue_size=10,
        consumer_timeout=0.2,
        consumer_exit="close",
        read_only=False,
        lock_file="/tmp/node-dataflow-test.lock",
        stats_enabled=False,
        stats_print_interval=1.0,
    )


@pytest.fixture
def make_ctx(fast_settings):
    """
    Factory de RunContext; todos os contextos criados são encerrados no teardown.

    Aceita overrides de Settings via kwargs (ex.: `make_ctx(read_only=True)`).
    """
    from dataclasses import replace

    from node_dataflow.core.pipeline.context import RunContext

    created = []

    def _make(config=None, **overrides):
        settings = replace(fast_settings, **overrides) if overrides else fast_settings
        ctx = RunContext.create(settings, config=config)
        created.append(ctx)
        return ctx

    yield _make

    for ctx in created:
        ctx.queue.abort()
        ctx.shutdown(wait=True)


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def registry(ctx, repository):
    from node_dataflow.core.engine.builder import build_registry

    return build_registry(ctx, repository)


@pytest.fixture
def log_records():
    """
    Captura os registros emitidos via loguru durante o teste.

    Returns:
        list: registros (`message.record`) na ordem de emissão.
    """
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    try:
        logger.remove(sink_id)
    except ValueError:
        # a CLI pode ter reconfigurado os sinks
        pass
