"""macOS: files go under ``~/Library/Application Support``.

Inside an app sandbox the home directory is the container's.
"""

from __future__ import annotations

from pathlib import Path

from . import APP_DIR_NAME, home_dir, register_platform


@register_platform
class DarwinPlatform:
    @property
    def name(self) -> str:
        return "darwin"

    @property
    def executable_suffix(self) -> str:
        return ""

    def adapt(self, path: Path) -> Path:
        return path

    def standard_dir(self) -> Path:
        return home_dir() / "Library" / "Application Support" / APP_DIR_NAME
