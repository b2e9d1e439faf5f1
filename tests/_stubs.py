from __future__ import annotations

from pathlib import Path

from byteexec.errors import DirectoryUnavailable


class StubPlatform:
    """Platform whose standard directory lives under a test-owned root."""

    def __init__(self, root: Path | None, *, suffix: str = "") -> None:
        self._root = root
        self._suffix = suffix

    @property
    def name(self) -> str:
        return "stub"

    @property
    def executable_suffix(self) -> str:
        return self._suffix

    def adapt(self, path: Path) -> Path:
        if self._suffix and not path.name.endswith(self._suffix):
            return path.with_name(path.name + self._suffix)
        return path

    def standard_dir(self) -> Path:
        if self._root is None:
            raise DirectoryUnavailable("~", RuntimeError("no home directory"))
        return self._root / "byteexec"


class CountingLock:
    def __init__(self) -> None:
        self.entered = 0

    def __enter__(self) -> "CountingLock":
        self.entered += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None
