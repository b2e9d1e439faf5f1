"""Linux and other XDG-style platforms."""

from __future__ import annotations

import os
from pathlib import Path

from . import APP_DIR_NAME, home_dir, register_platform


@register_platform
class PosixPlatform:
    @property
    def name(self) -> str:
        return "posix"

    @property
    def executable_suffix(self) -> str:
        return ""

    def adapt(self, path: Path) -> Path:
        return path

    def standard_dir(self) -> Path:
        # Relative XDG_CONFIG_HOME values are invalid per the XDG spec
        xdg = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg and Path(xdg).is_absolute():
            return Path(xdg) / APP_DIR_NAME
        return home_dir() / ".config" / APP_DIR_NAME
