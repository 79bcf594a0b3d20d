# src/node_dataflow/core/logging.py
"""
Configuração do sink de log (loguru).

Componentes logam diretamente via `from loguru import logger`; apenas a
CLI chama `configure_logging`, que troca o sink padrão por um único sink
em stderr com formato fixo (inclui a thread, útil com N workers).
"""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{thread.name}</cyan> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)

LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str = "INFO", sink: Optional[TextIO] = None) -> int:
    """Remove os sinks existentes e instala um único sink; devolve seu id."""
    normalized = str(level).strip().upper()
    if normalized not in LEVELS:
        raise ValueError(f"Unknown log level: {level!r} (expected one of {', '.join(LEVELS)})")

    logger.remove()
    target: Any = sink if sink is not None else sys.stderr
    return logger.add(target, level=normalized, format=LOG_FORMAT, enqueue=False)
