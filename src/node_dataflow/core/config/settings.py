# src/node_dataflow/core/config/settings.py
"""
Interpretação tipada da configuração efetiva.

A configuração resolvida pelo loader é um dicionário puro. Este módulo
converte as seções conhecidas em estruturas imutáveis consumidas pelo core:

    - application → Settings (knobs de execução)
    - repository  → RepositorySettings (cliente REST)
    - collector   → CollectorConfig
    - processor   → ProcessorConfig

Decisões arquiteturais:
    - Os defaults embutidos (`DEFAULTS`) são a base do deep-merge
    - `consumer-timeout` é declarado em milissegundos e exposto em segundos
    - `read-only` é `true` por default: escrever exige decisão explícita

Invariantes:
    - consumer_threads >= 1, queue_size >= 1, consumer_timeout > 0
    - consumer_exit ∈ {"close", "idle"}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from node_dataflow.core.pipeline.types import (
    READ_ONLY_KEYS,
    CollectorConfig,
    ProcessorConfig,
    parse_bool,
)

from .errors import InvalidConfigValueError, MissingConfigSectionError

CONSUMER_EXIT_CLOSE = "close"
CONSUMER_EXIT_IDLE = "idle"

DEFAULTS: Dict[str, Any] = {
    "application": {
        "consumer-threads": 4,
        "queue-size": 1000,
        "consumer-timeout": 5000,
        "consumer-exit": CONSUMER_EXIT_CLOSE,
        "read-only": True,
        "lock-file": "/tmp/anp.lock",
        "stats": {
            "enabled": False,
            "print-interval": 10,
        },
    },
    "repository": {
        "url": "http://localhost:8080",
        "username": "admin",
        "password": "admin",
        "timeout": 30,
    },
}


@dataclass(frozen=True)
class Settings:
    """Knobs de execução consumidos pelo Engine e pelos workers."""

    consumer_threads: int = 4
    queue_size: int = 1000
    consumer_timeout: float = 5.0
    consumer_exit: str = CONSUMER_EXIT_CLOSE
    read_only: bool = True
    lock_file: str = "/tmp/anp.lock"
    stats_enabled: bool = False
    stats_print_interval: float = 10.0


@dataclass(frozen=True)
class RepositorySettings:
    url: str
    username: str
    password: str
    timeout: float = 30.0


def _section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = config.get(key)
    if section is None:
        raise MissingConfigSectionError(f"Missing required config section: '{key}'")
    if not isinstance(section, Mapping):
        raise MissingConfigSectionError(
            f"Config section '{key}' must be a mapping, got {type(section).__name__}"
        )
    return section


def _positive(value: Any, key: str, cast: type) -> Any:
    try:
        number = cast(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigValueError(f"Invalid value for '{key}': {value!r}") from e
    if isinstance(value, bool) or number <= 0:
        raise InvalidConfigValueError(f"'{key}' must be a positive number, got {value!r}")
    return number


def _flag(value: Any, key: str) -> bool:
    try:
        return parse_bool(value, key)
    except ValueError as e:
        raise InvalidConfigValueError(str(e)) from e


def parse_settings(config: Mapping[str, Any]) -> Settings:
    app = dict(config.get("application") or {})
    stats = dict(app.get("stats") or {})

    consumer_exit = str(app.get("consumer-exit", CONSUMER_EXIT_CLOSE)).strip().lower()
    if consumer_exit not in (CONSUMER_EXIT_CLOSE, CONSUMER_EXIT_IDLE):
        raise InvalidConfigValueError(
            f"'consumer-exit' must be '{CONSUMER_EXIT_CLOSE}' or '{CONSUMER_EXIT_IDLE}', "
            f"got {consumer_exit!r}"
        )

    return Settings(
        consumer_threads=_positive(app.get("consumer-threads", 4), "consumer-threads", int),
        queue_size=_positive(app.get("queue-size", 1000), "queue-size", int),
        consumer_timeout=_positive(app.get("consumer-timeout", 5000), "consumer-timeout", float)
        / 1000.0,
        consumer_exit=consumer_exit,
        read_only=_flag(app.get("read-only", True), "read-only"),
        lock_file=str(app.get("lock-file", "/tmp/anp.lock")),
        stats_enabled=_flag(stats.get("enabled", False), "stats.enabled"),
        stats_print_interval=_positive(
            stats.get("print-interval", 10), "stats.print-interval", float
        ),
    )


def parse_repository_settings(config: Mapping[str, Any]) -> RepositorySettings:
    repo = _section(config, "repository")
    url = repo.get("url")
    if not isinstance(url, str) or not url.strip():
        raise InvalidConfigValueError("'repository.url' must be a non-empty string")
    return RepositorySettings(
        url=url.strip(),
        username=str(repo.get("username", "")),
        password=str(repo.get("password", "")),
        timeout=_positive(repo.get("timeout", 30), "repository.timeout", float),
    )


def parse_job(config: Mapping[str, Any]) -> Tuple[CollectorConfig, ProcessorConfig]:
    """
    Extrai as configurações de collector e processor.

    Raises:
        MissingConfigSectionError: seção ausente ou sem `name`.
        InvalidConfigValueError: flag `readOnly` que não é booleano.
    """
    collector_section = _section(config, "collector")
    processor_section = _section(config, "processor")
    for key in READ_ONLY_KEYS:
        if processor_section.get(key) is not None:
            _flag(processor_section[key], f"processor.{key}")
    try:
        collector = CollectorConfig.from_dict(collector_section)
        processor = ProcessorConfig.from_dict(processor_section)
    except ValueError as e:
        raise MissingConfigSectionError(str(e)) from e
    return collector, processor
