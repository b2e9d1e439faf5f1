"""File primitives for writing and verifying executable payloads."""

from __future__ import annotations

import hashlib
import logging
import os
import stat
from pathlib import Path

logger = logging.getLogger(__name__)

FILE_MODE = 0o755
_CHUNK = 1024 * 1024


def sha256_file(path: Path) -> bytes:
    """Stream *path* through SHA-256 and return the raw digest."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        while True:
            chunk = f.read(_CHUNK)
            if not chunk:
                break
            h.update(chunk)
    return h.digest()


def content_matches(path: Path, payload: bytes) -> bool:
    """True if the file at *path* holds exactly *payload*.

    An unreadable file counts as a mismatch so the caller falls through to
    overwriting it.
    """
    try:
        on_disk = sha256_file(path)
    except OSError:
        logger.debug("Unable to read existing file at %s for hashing", path, exc_info=True)
        return False
    return on_disk == hashlib.sha256(payload).digest()


def remove_quietly(path: Path) -> None:
    """Best-effort removal of a partially written file."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("Failed to remove partial file %s", path, exc_info=True)


def write_payload(fd: int, path: Path, payload: bytes) -> None:
    """Write *payload* through *fd*, sync it to storage and close it.

    Takes ownership of *fd*. If anything fails the partial file at *path* is
    removed before the error propagates, so a corrupt executable never stays
    behind.
    """
    try:
        try:
            view = memoryview(payload)
            while view:
                written = os.write(fd, view)
                view = view[written:]
            os.fsync(fd)
        finally:
            os.close(fd)
    except BaseException:
        remove_quietly(path)
        raise


def ensure_mode(path: Path, mode: int = FILE_MODE) -> bool:
    """Apply *mode* to *path* unless it already has it. Returns True if changed."""
    try:
        current = stat.S_IMODE(os.stat(path).st_mode)
    except OSError:
        current = None
    if current == mode:
        return False
    logger.debug("Chmodding %s to %o", path, mode)
    os.chmod(path, mode)
    return True
