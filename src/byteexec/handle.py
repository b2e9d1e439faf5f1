"""Handles bound to a materialized executable."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from byteexec.errors import DisposalFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """An argv ready to be handed to :mod:`subprocess`. Building one does no I/O."""

    argv: tuple[str, ...]

    @property
    def executable(self) -> str:
        return self.argv[0]

    @property
    def args(self) -> tuple[str, ...]:
        return self.argv[1:]

    def run(self, **kwargs: Any) -> subprocess.CompletedProcess:
        return subprocess.run(list(self.argv), **kwargs)

    def popen(self, **kwargs: Any) -> subprocess.Popen:
        return subprocess.Popen(list(self.argv), **kwargs)


@dataclass(frozen=True)
class ByteExec:
    """Persistent executable. The file outlives the handle."""

    filename: Path

    def command(self, *args: str) -> Command:
        return Command(argv=(str(self.filename), *(str(a) for a in args)))


@dataclass(frozen=True)
class TemporaryByteExec(ByteExec):
    """Executable backed by a throwaway file that :meth:`dispose` removes.

    Usable as a context manager. ``command`` keeps working after disposal,
    but running the result will fail because the file is gone.
    """

    _disposed: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Remove the backing file. Safe to call more than once."""
        if self._disposed:
            return
        try:
            os.unlink(self.filename)
        except FileNotFoundError:
            logger.debug("%s already removed", self.filename)
        except OSError as exc:
            raise DisposalFailure(self.filename, exc) from exc
        object.__setattr__(self, "_disposed", True)

    def __enter__(self) -> "TemporaryByteExec":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
