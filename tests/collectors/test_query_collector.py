# tests/collectors/test_query_collector.py
"""
Testes do QueryNodeCollector (busca paginada).

Os testes asseguram que:
- 250 resultados com lotes de 100 geram 3 buscas (skip 0, 100, 200)
- todos os resultados são enfileirados, na ordem
- falha da busca encerra o collector sem propagar (falha de fonte)
"""

from node_dataflow.collectors.query import QueryNodeCollector
from node_dataflow.core.pipeline.types import CollectorConfig
from node_dataflow.core.repository.base import RepositoryError

QUERY = "PATH:'/app:company_home//*' AND TYPE:'cm:content'"


def test_paginates_until_no_more_items(make_ctx, repository):
    """
    Verifica a paginação 250/100.

    Decisões arquiteturais:
        - Um consumidor drena a fila em paralelo (capacidade menor que o total)
    """
    ctx = make_ctx(queue_size=300)
    repository.search_results[QUERY] = [f"n{i}" for i in range(250)]

    QueryNodeCollector(ctx, repository).collect(
        CollectorConfig(name="QueryNodeCollector", args={"query": QUERY})
    ).result(timeout=5)

    searches = repository.calls_to("search")
    assert [args[2] for args, _ in searches] == [0, 100, 200]
    assert all(args[3] == 100 for args, _ in searches)

    drained = [ctx.queue.poll(0.05) for _ in range(250)]
    assert drained == [f"n{i}" for i in range(250)]
    assert ctx.queue.poll(0.05) is None


def test_custom_batch_size(make_ctx, repository):
    ctx = make_ctx(queue_size=20)
    repository.search_results["q"] = [f"n{i}" for i in range(10)]

    QueryNodeCollector(ctx, repository).collect_nodes(
        CollectorConfig(name="QueryNodeCollector", args={"query": "q", "batch-size": 4})
    )

    assert [args[2] for args, _ in repository.calls_to("search")] == [0, 4, 8]
    assert ctx.queue.qsize() == 10


def test_search_failure_is_a_source_error(ctx, repository):
    repository.fail_on("search", None, RepositoryError("search unavailable", status=503))

    future = QueryNodeCollector(ctx, repository).collect(
        CollectorConfig(name="QueryNodeCollector", args={"query": "q"})
    )

    assert future.result(timeout=5) is None
    event = ctx.events[-1]
    assert event["error"]["type"] == "COLLECTOR_SOURCE_ERROR"
    assert event["error"]["details"]["source"] == "q"


def test_missing_query_is_a_source_error(ctx, repository):
    QueryNodeCollector(ctx, repository).collect(CollectorConfig(name="QueryNodeCollector")).result(timeout=5)

    assert repository.calls_to("search") == []
    assert ctx.events[-1]["error"]["details"]["exc_type"] == "ValueError"
