# tests/core/engine/test_stats_reporter.py
"""Testes do StatsReporter (log periódico de fila e contador)."""

import time

from node_dataflow.core.engine.stats import StatsReporter

from tests.fixtures.logs import messages_at


def test_reports_queue_size_and_counter(ctx, log_records):
    ctx.queue.put("a")
    ctx.counter.increment()

    reporter = StatsReporter(ctx, interval=0.05).start()
    time.sleep(0.2)
    reporter.stop()

    assert "queued nodes --> 1" in messages_at(log_records, "DEBUG")
    assert "processed nodes --> 1" in messages_at(log_records, "INFO")

    emitted = len(log_records)
    time.sleep(0.15)
    assert len(log_records) == emitted


def test_stop_without_start_is_safe(ctx):
    StatsReporter(ctx).stop()
