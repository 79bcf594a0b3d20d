# src/node_dataflow/core/lock.py
"""
Lock de instância única (advisory lock em arquivo).

Garante que apenas um processo do Node DataFlow execute por vez no host,
usando `fcntl.flock` exclusivo e não bloqueante sobre um arquivo de lock.

Política:
    - Lock já detido por outro processo → `LockAlreadyHeldError`
      (a CLI encerra com código 0: não é uma falha)
    - Qualquer outra falha de I/O → `LockAcquisitionError` (código 1)

Invariantes:
    - O lock vale pelo tempo de vida do processo (ou até `release`)
    - `release` é idempotente

Limites explícitos:
    - Lock local ao host; não coordena execuções distribuídas
    - Não remove o arquivo de lock ao liberar
"""

from __future__ import annotations

import fcntl
from pathlib import Path
from typing import IO, Optional

from loguru import logger

from .exceptions import LockAcquisitionError, LockAlreadyHeldError


class InstanceLock:
    """Lock exclusivo sobre `path`; utilizável como context manager."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._handle: Optional[IO[str]] = None

    @property
    def held(self) -> bool:
        return self._handle is not None

    def acquire(self) -> "InstanceLock":
        if self._handle is not None:
            return self
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            handle = self.path.open("a+")
        except OSError as e:
            raise LockAcquisitionError(
                f"Unable to open lock file {self.path}: {e}",
                details={"path": str(self.path)},
            ) from e

        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            handle.close()
            raise LockAlreadyHeldError(
                f"Another instance is already running (lock {self.path})",
                details={"path": str(self.path)},
            ) from e
        except OSError as e:
            handle.close()
            raise LockAcquisitionError(
                f"Unable to lock {self.path}: {e}",
                details={"path": str(self.path)},
            ) from e

        self._handle = handle
        logger.debug("Acquired instance lock {}", self.path)
        return self

    def release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        finally:
            handle.close()
        logger.debug("Released instance lock {}", self.path)

    def __enter__(self) -> "InstanceLock":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
