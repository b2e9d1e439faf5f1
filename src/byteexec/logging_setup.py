"""Unified logging configuration for byteexec."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

_PACKAGE = "byteexec"
_LOG_BYTES = 1 * 1024 * 1024  # 1 MiB per file
_LOG_BACKUPS = 3


def configure(log_file: Path | None, *, debug: bool = False, reconfigure: bool = False) -> None:
    """Attach handlers to the byteexec package logger.

    Meant for the host application's entrypoint. Idempotent unless
    *reconfigure* is True. With no *log_file* only the stderr handler is
    attached.
    """
    pkg_logger = logging.getLogger(_PACKAGE)
    if pkg_logger.handlers and not reconfigure:
        return
    if reconfigure:
        pkg_logger.handlers.clear()

    pkg_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=_LOG_BYTES,
                backupCount=_LOG_BACKUPS,
                encoding="utf-8",
            )
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            pkg_logger.addHandler(fh)
        except OSError as exc:
            print(
                f"byteexec: WARNING: could not open log file {log_file}: {exc}",
                file=sys.stderr,
            )

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(logging.WARNING)
    sh.setFormatter(logging.Formatter("byteexec: %(message)s"))
    pkg_logger.addHandler(sh)

    pkg_logger.propagate = False


def configure_from(config: dict, *, reconfigure: bool = False) -> None:
    """Configure logging from a merged config (``log_file``, ``debug``)."""
    log_file = config.get("log_file")
    configure(
        Path(log_file).expanduser() if log_file else None,
        debug=bool(config.get("debug", False)),
        reconfigure=reconfigure,
    )
