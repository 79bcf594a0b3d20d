# tests/test_cli.py
"""
Testes da CLI (`node-dataflow -c PATH`).

Os testes asseguram que:
- execução concluída termina com código 0, mesmo com falhas por item
- arquivo de configuração ausente ou ilegível é erro de uso (código 2)
- configuração com valores inválidos termina com código 1
- outra instância em execução (lock detido) termina com código 0
- componente desconhecido termina com código 1

Decisões arquiteturais:
    - O repositório REST é substituído via monkeypatch de `make_repository`
    - O sink do loguru é restaurado ao final de cada teste (a CLI o reconfigura)
"""

import sys

import pytest
import yaml
from loguru import logger
from typer.testing import CliRunner

from node_dataflow import cli
from node_dataflow.core.lock import InstanceLock
from tests.fixtures.repository import FakeRepository

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def fake_repository(monkeypatch):
    repository = FakeRepository()
    for node_id in ("n1", "n2", "n3"):
        repository.add_node(node_id, f"{node_id}.txt")
    monkeypatch.setattr(cli, "make_repository", lambda settings: repository)
    return repository


def _write_config(tmp_path, processor=None, **application):
    ids = tmp_path / "ids.txt"
    ids.write_text("n1\nn2\nmissing\nn3\n", encoding="utf-8")
    config = {
        "application": {
            "consumer-threads": 2,
            "queue-size": 10,
            "consumer-timeout": 100,
            "lock-file": str(tmp_path / "run.lock"),
            **application,
        },
        "repository": {"url": "http://repository.test"},
        "collector": {"name": "NodeListCollector", "args": {"node-list-file": str(ids)}},
        "processor": processor or {"name": "LogNodeNameProcessor"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_successful_run_exits_zero(tmp_path, fake_repository):
    """
    Verifica uma execução completa via CLI.

    Invariantes:
        - O id inexistente é uma falha por item e não altera o código de saída
        - Cada id listado é lido exatamente uma vez
    """
    path = _write_config(tmp_path)

    result = runner.invoke(cli.app, ["-c", str(path)])

    assert result.exit_code == 0
    fetched = sorted(args[0] for args, _ in fake_repository.calls_to("get_node"))
    assert fetched == ["missing", "n1", "n2", "n3"]


def test_lock_is_released_after_run(tmp_path, fake_repository):
    path = _write_config(tmp_path)

    assert runner.invoke(cli.app, ["-c", str(path)]).exit_code == 0

    with InstanceLock(str(tmp_path / "run.lock")) as lock:
        assert lock.held


def test_missing_config_file_is_a_usage_error(tmp_path, fake_repository):
    result = runner.invoke(cli.app, ["-c", str(tmp_path / "absent.yaml")])

    assert result.exit_code == 2
    assert fake_repository.calls == []


@pytest.mark.parametrize(
    "filename, content",
    [
        ("config.yaml", "collector: [unclosed"),
        ("config.yaml", "- just\n- a list\n"),
        ("config.toml", "name = 1"),
    ],
)
def test_unreadable_config_file_is_a_usage_error(tmp_path, fake_repository, filename, content):
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")

    result = runner.invoke(cli.app, ["-c", str(path)])

    assert result.exit_code == 2
    assert fake_repository.calls == []


def test_invalid_setting_exits_one(tmp_path, fake_repository):
    path = _write_config(tmp_path, **{"consumer-exit": "never"})

    assert runner.invoke(cli.app, ["-c", str(path)]).exit_code == 1


def test_missing_job_section_exits_one(tmp_path, fake_repository):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"collector": {"name": "NodeListCollector"}}), encoding="utf-8")

    assert runner.invoke(cli.app, ["-c", str(path)]).exit_code == 1


def test_lock_held_exits_zero(tmp_path, fake_repository):
    path = _write_config(tmp_path)

    with InstanceLock(str(tmp_path / "run.lock")):
        result = runner.invoke(cli.app, ["-c", str(path)])

    assert result.exit_code == 0
    assert fake_repository.calls == []


def test_unknown_processor_exits_one(tmp_path, fake_repository):
    path = _write_config(tmp_path, processor={"name": "NoSuchProcessor"})

    assert runner.invoke(cli.app, ["-c", str(path)]).exit_code == 1


def test_invalid_log_level_is_a_usage_error(tmp_path, fake_repository):
    path = _write_config(tmp_path)

    result = runner.invoke(cli.app, ["-c", str(path), "--log-level", "LOUD"])

    assert result.exit_code == 2
