# src/node_dataflow/core/config/loader.py
"""
Carregamento da configuração efetiva de uma execução.

A configuração efetiva é o arquivo do operador (obrigatório, informado na
CLI) resolvido por deep-merge sobre os defaults embutidos
(`settings.DEFAULTS`).

Responsabilidades do módulo:
    - Escolher o parser pela extensão (YAML via PyYAML, JSON)
    - Rejeitar arquivo ausente, formato desconhecido, conteúdo não parseável
      ou raiz que não seja um mapping
    - Devolver a configuração resolvida como dicionário puro

Limites explícitos:
    - Não interpreta seções (ver `settings.parse_settings` / `parse_job`)
    - Não valida os `args` de collectors e processors
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, TextIO

import yaml  # PyYAML
from loguru import logger

from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .settings import DEFAULTS

_PARSERS: Dict[str, Callable[[TextIO], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Lê o arquivo do operador sem aplicar defaults.

    Arquivo vazio equivale a `{}`.

    Raises:
        ConfigFileNotFoundError, UnsupportedConfigFormatError,
        InvalidConfigRootTypeError
    """
    if not path.is_file():
        raise ConfigFileNotFoundError(f"Config file not found: {path}")

    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(f"Unsupported config format: {path.suffix}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = parser(f)
    except OSError as e:
        raise ConfigFileNotFoundError(f"Unable to read config file {path}: {e}") from e
    except (yaml.YAMLError, ValueError) as e:
        # json.JSONDecodeError e UnicodeDecodeError são ValueError
        raise InvalidConfigRootTypeError(f"Unable to parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root must be a mapping, got: {type(data).__name__}"
        )
    return data


def load_config(path: str, *, defaults: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva: arquivo do operador sobre os defaults.

    Args:
        path (str): Caminho do arquivo YAML ou JSON.
        defaults (Optional[Mapping]): Base alternativa; default `DEFAULTS`.

    Raises:
        ConfigFileNotFoundError, UnsupportedConfigFormatError,
        InvalidConfigRootTypeError, ConfigTypeConflictError
    """
    operator = read_config_file(Path(path))
    resolved = deep_merge(DEFAULTS if defaults is None else defaults, operator)
    logger.debug("Loaded configuration from {}", path)
    return resolved
