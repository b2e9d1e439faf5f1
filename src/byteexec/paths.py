"""Turn caller-supplied filenames into absolute executable paths."""

from __future__ import annotations

import logging
from pathlib import Path

from byteexec.errors import DirectoryUnavailable
from byteexec.platforms import Platform, current_platform

logger = logging.getLogger(__name__)


def resolve(filename: str | Path, platform: Platform | None = None) -> Path:
    """Resolve *filename* to an absolute, platform-adapted path.

    Absolute paths are returned as-is after adaptation. Relative ones land in
    the platform's per-user standard directory, which is created if missing.

    :raises DirectoryUnavailable: If the standard directory cannot be
        determined or created, or a leading ``~`` cannot be expanded.
    """
    platform = platform or current_platform()
    try:
        expanded = Path(filename).expanduser()
    except RuntimeError as exc:
        raise DirectoryUnavailable("~", exc) from exc
    path = platform.adapt(expanded)
    if path.is_absolute():
        return path

    base = platform.standard_dir()
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryUnavailable(base, exc) from exc
    logger.debug("Placing %s in %s", path, base)
    return base / path
