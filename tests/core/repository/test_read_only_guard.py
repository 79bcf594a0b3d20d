# tests/core/repository/test_read_only_guard.py
"""
Testes do guard de read-only (`ReadOnlyRepository`).

Os testes asseguram que:
- em read-only, chamadas mutantes não chegam ao delegate e devolvem None
- a supressão gera um warning com o nome do método e os argumentos
- leituras sempre são encaminhadas
- com read-only desligado, tudo é encaminhado sem alteração
- o predicado de chamadas guardadas é configurável
"""

import pytest

from node_dataflow.core.repository.guard import ReadOnlyRepository, is_mutating_call

from tests.fixtures.logs import messages_at


@pytest.mark.parametrize(
    "name",
    ["copyNode", "create_node", "delete_node", "lock_node", "move_node", "unlock_node", "update_node"],
)
def test_mutating_prefixes(name):
    assert is_mutating_call(name)


@pytest.mark.parametrize("name", ["get_node", "list_children", "search", "get_content"])
def test_read_calls_are_not_mutating(name):
    assert not is_mutating_call(name)


def test_read_only_suppresses_mutations(repository, log_records):
    repository.add_node("n1", "doc.txt")
    guard = ReadOnlyRepository(repository, read_only=True)

    assert guard.update_node("n1", {"properties": {"cm:title": "x"}}) is None
    assert guard.delete_node("n1", permanent=True) is None
    assert guard.move_node("n1", "target") is None

    assert repository.calls_to("update_node") == []
    assert repository.calls_to("delete_node") == []
    assert repository.calls_to("move_node") == []
    warnings = messages_at(log_records, "WARNING")
    assert len(warnings) == 3
    assert "update_node" in warnings[0]
    assert "n1" in warnings[0]


def test_read_only_forwards_reads(repository):
    repository.add_node("n1", "doc.txt")
    guard = ReadOnlyRepository(repository, read_only=True)

    assert guard.get_node("n1").name == "doc.txt"
    assert len(repository.calls_to("get_node")) == 1


def test_read_write_forwards_everything(repository):
    repository.add_node("n1", "doc.txt")
    guard = ReadOnlyRepository(repository, read_only=False)

    guard.update_node("n1", {"properties": {"cm:title": "x"}})
    guard.delete_node("n1")

    assert len(repository.calls_to("update_node")) == 1
    assert len(repository.calls_to("delete_node")) == 1


def test_custom_predicate(repository):
    repository.add_node("n1")
    guard = ReadOnlyRepository(repository, read_only=True, guarded=lambda name: name == "get_node")

    assert guard.get_node("n1") is None
    assert repository.calls_to("get_node") == []


def test_exposes_flag_and_delegate(repository):
    guard = ReadOnlyRepository(repository, read_only=1)
    assert guard.read_only is True
    assert guard.delegate is repository
