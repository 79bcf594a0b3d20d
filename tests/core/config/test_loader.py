# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Este módulo valida o comportamento do loader responsável por:
- carregar o arquivo do operador em YAML ou JSON
- mesclar o arquivo sobre os defaults embutidos
- rejeitar formatos e estruturas inválidas

Decisões arquiteturais:
    - Defaults embutidos formam a base canônica
    - O arquivo do operador é obrigatório e sempre tem prioridade
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - A configuração final é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não valida hashing (ver test_hashing.py)
    - Não valida interpretação tipada (ver test_settings.py)
"""

from pathlib import Path

import pytest

try:
    from node_dataflow.core.config.loader import load_config
    from node_dataflow.core.config.errors import (
        ConfigFileNotFoundError,
        ConfigTypeConflictError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    ConfigFileNotFoundError = None
    ConfigTypeConflictError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader e suas exceções tipadas estejam disponíveis.

    Falha imediatamente, com mensagem orientada, quando o módulo `loader`
    ou as exceções de `errors` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/node_dataflow/core/config/loader.py (load_config)\n"
            "- src/node_dataflow/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _write(path: Path, text: str) -> str:
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_missing_file_raises(tmp_path: Path):
    """
    Verifica que a ausência do arquivo informado na CLI é erro fatal.

    Invariantes:
        - A exceção é específica (`ConfigFileNotFoundError`)
        - Nenhuma configuração parcial é retornada
    """
    _require_imports()
    with pytest.raises(ConfigFileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_yaml_is_merged_over_defaults(tmp_path: Path):
    """
    Verifica que o YAML do operador sobrescreve apenas as chaves declaradas.

    Decisões arquiteturais:
        - Defaults não sobrescritos permanecem (ex.: queue-size)
        - Seções novas (collector/processor) são adicionadas como estão
    """
    _require_imports()
    path = _write(
        tmp_path / "job.yaml",
        """\
application:
  consumer-threads: 8
  read-only: false
collector:
  name: NodeListCollector
  args:
    node-list-file: /tmp/ids.txt
processor:
  name: VoidProcessor
""",
    )

    cfg = load_config(path)

    assert cfg["application"]["consumer-threads"] == 8
    assert cfg["application"]["read-only"] is False
    assert cfg["application"]["queue-size"] == 1000
    assert cfg["application"]["stats"]["enabled"] is False
    assert cfg["collector"]["args"]["node-list-file"] == "/tmp/ids.txt"
    assert cfg["processor"] == {"name": "VoidProcessor"}


def test_json_is_supported(tmp_path: Path):
    _require_imports()
    path = _write(tmp_path / "job.json", '{"application": {"queue-size": 5}}')
    cfg = load_config(path)
    assert cfg["application"]["queue-size"] == 5


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    path = _write(tmp_path / "job.toml", "a = 1")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(path)


def test_non_mapping_root_raises(tmp_path: Path):
    """
    Verifica que uma raiz que não é mapping é rejeitada.

    Limites explícitos:
        - Não valida a mensagem exata da exceção
    """
    _require_imports()
    path = _write(tmp_path / "job.yaml", "- a\n- b\n")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(path)


def test_unparseable_yaml_raises(tmp_path: Path):
    _require_imports()
    path = _write(tmp_path / "job.yaml", "application: [unclosed\n")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(path)


def test_non_utf8_file_raises(tmp_path: Path):
    _require_imports()
    path = tmp_path / "job.json"
    path.write_bytes(b"\xff\xfe{\"a\": 1}")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(str(path))


def test_empty_file_yields_defaults(tmp_path: Path):
    _require_imports()
    path = _write(tmp_path / "job.yaml", "")
    cfg = load_config(path)
    assert cfg["application"]["consumer-exit"] == "close"
    assert cfg["repository"]["url"] == "http://localhost:8080"


def test_type_conflict_with_defaults_raises(tmp_path: Path):
    _require_imports()
    path = _write(tmp_path / "job.yaml", "application: fast\n")
    with pytest.raises(ConfigTypeConflictError):
        load_config(path)


def test_custom_defaults_are_not_mutated(tmp_path: Path):
    _require_imports()
    defaults = {"application": {"queue-size": 1}}
    path = _write(tmp_path / "job.yaml", "application:\n  queue-size: 2\n")
    cfg = load_config(path, defaults=defaults)
    assert cfg == {"application": {"queue-size": 2}}
    assert defaults == {"application": {"queue-size": 1}}
