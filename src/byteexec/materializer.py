"""Idempotent, lock-serialized materialization of executable payloads.

A :class:`Materializer` reconciles what is on disk with the bytes the caller
holds:

- the file is created exclusively when absent,
- an existing file whose SHA-256 matches is reused (only its mode is fixed),
- an existing file with different content is truncated and rewritten.

All persistent materializations through one instance are serialized by its
lock. Separate processes are not coordinated; exclusive creation followed by
the digest check keeps them convergent.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from contextlib import AbstractContextManager, contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

from opentelemetry import trace

from byteexec.errors import (
    DigestMismatchOverwriteFailure,
    UnexpectedFilesystemError,
    WriteFailure,
)
from byteexec.file_io import FILE_MODE, content_matches, ensure_mode, remove_quietly, write_payload
from byteexec.handle import ByteExec, TemporaryByteExec
from byteexec.paths import resolve
from byteexec.platforms import Platform, current_platform

logger = logging.getLogger(__name__)

_O_BINARY = getattr(os, "O_BINARY", 0)
_TEMP_PREFIX = "byteexec_"


class Outcome(str, Enum):
    CREATED = "created"
    REUSED = "reused"
    OVERWRITTEN = "overwritten"
    TEMPORARY = "temporary"


class Materializer:
    """Writes payloads to disk as executables and hands back handles.

    Construct one per process and share it; its lock is what keeps two
    threads from racing on the same path.
    """

    def __init__(
        self,
        platform: Platform | None = None,
        *,
        mode: int = FILE_MODE,
        temp_dir: str | Path | None = None,
        lock: AbstractContextManager | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        self.platform = platform or current_platform()
        self.mode = mode
        self.temp_dir = Path(temp_dir) if temp_dir else None
        self._lock = lock if lock is not None else threading.Lock()
        self._tracer = tracer or trace.get_tracer(__name__)

    @classmethod
    def from_config(cls, config: dict[str, Any], platform: Platform | None = None) -> "Materializer":
        """Build a materializer from a merged config (see :func:`byteexec.config.load_config`)."""
        return cls(
            platform,
            mode=config.get("file_mode", FILE_MODE),
            temp_dir=config.get("temp_dir"),
        )

    def new(self, payload: bytes, filename: str | Path) -> ByteExec:
        """Materialize *payload* at *filename* and return a persistent handle.

        Relative filenames are placed in the platform's standard directory.
        If a file with different content already exists there it is
        overwritten.
        """
        path = resolve(filename, self.platform)
        self.materialize(path, payload)
        return ByteExec(filename=path)

    def new_temporary(self, payload: bytes) -> TemporaryByteExec:
        """Materialize *payload* to a uniquely named file removed by ``dispose()``."""
        try:
            fd, name = tempfile.mkstemp(
                prefix=_TEMP_PREFIX,
                suffix=self.platform.executable_suffix,
                dir=self.temp_dir,
            )
        except OSError as exc:
            raise UnexpectedFilesystemError(self.temp_dir or tempfile.gettempdir(), exc) from exc

        path = Path(name)
        with self._span(path, payload) as span:
            logger.debug("Creating temporary executable at %s", path)
            try:
                write_payload(fd, path, payload)
            except OSError as exc:
                raise WriteFailure(path, exc) from exc
            try:
                self._chmod(path, self.mode)
            except UnexpectedFilesystemError:
                remove_quietly(path)
                raise
            span.set_attribute("byteexec.outcome", Outcome.TEMPORARY.value)
        return TemporaryByteExec(filename=path)

    def materialize(self, path: str | Path, payload: bytes, mode: int | None = None) -> Outcome:
        """Make sure *path* holds *payload* and is executable.

        *path* is used as given; callers wanting standard-directory placement
        go through :meth:`new`.

        :raises UnexpectedFilesystemError: open/stat/chmod failed for a reason
            other than the file already existing.
        :raises WriteFailure: writing a freshly created file failed; the
            partial file has been removed.
        :raises DigestMismatchOverwriteFailure: rewriting a file with stale
            content failed.
        """
        path = Path(path)
        mode = self.mode if mode is None else mode
        with self._lock, self._span(path, payload) as span:
            outcome = self._reconcile(path, payload, mode)
            span.set_attribute("byteexec.outcome", outcome.value)
        logger.debug("Materialized %s (%s)", path, outcome.value)
        return outcome

    def _reconcile(self, path: Path, payload: bytes, mode: int) -> Outcome:
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_EXCL | _O_BINARY, mode)
        except FileExistsError:
            pass
        except OSError as exc:
            raise UnexpectedFilesystemError(path, exc) from exc
        else:
            logger.debug("Creating new file at %s", path)
            try:
                write_payload(fd, path, payload)
            except OSError as exc:
                raise WriteFailure(path, exc) from exc
            self._chmod(path, mode)
            return Outcome.CREATED

        logger.debug("%s already exists, checking that its contents match", path)
        if content_matches(path, payload):
            logger.debug("Data in %s matches expected, using existing", path)
            try:
                ensure_mode(path, mode)
            except OSError as exc:
                raise UnexpectedFilesystemError(path, exc) from exc
            return Outcome.REUSED

        logger.debug("Data in %s doesn't match expected, truncating file", path)
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_TRUNC | _O_BINARY, mode)
            write_payload(fd, path, payload)
        except OSError as exc:
            raise DigestMismatchOverwriteFailure(path, exc) from exc
        self._chmod(path, mode)
        return Outcome.OVERWRITTEN

    @staticmethod
    def _chmod(path: Path, mode: int) -> None:
        try:
            os.chmod(path, mode)
        except OSError as exc:
            raise UnexpectedFilesystemError(path, exc) from exc

    @contextmanager
    def _span(self, path: Path, payload: bytes) -> Iterator[trace.Span]:
        with self._tracer.start_as_current_span(
            "byteexec.materialize",
            attributes={
                "byteexec.path": str(path),
                "byteexec.payload.size": len(payload),
            },
        ) as span:
            yield span
