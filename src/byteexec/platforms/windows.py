"""Windows: executables need an ``.exe`` suffix and live under %APPDATA%."""

from __future__ import annotations

import os
from pathlib import Path

from byteexec.errors import DirectoryUnavailable

from . import APP_DIR_NAME, register_platform


@register_platform
class WindowsPlatform:
    @property
    def name(self) -> str:
        return "windows"

    @property
    def executable_suffix(self) -> str:
        return ".exe"

    def adapt(self, path: Path) -> Path:
        if path.name.lower().endswith(self.executable_suffix):
            return path
        return path.with_name(path.name + self.executable_suffix)

    def standard_dir(self) -> Path:
        appdata = os.environ.get("APPDATA", "")
        if not appdata:
            raise DirectoryUnavailable("%APPDATA%", KeyError("APPDATA is not defined"))
        return Path(appdata) / APP_DIR_NAME
