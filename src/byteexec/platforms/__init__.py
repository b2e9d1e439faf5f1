"""Platform capability registry.

Each supported platform provides the executable filename convention and the
per-user standard directory used for relative filenames. The implementation
is selected once from ``sys.platform`` rather than branched on at every call.
"""

from __future__ import annotations

import importlib
import pkgutil
import sys
from functools import lru_cache
from pathlib import Path
from typing import Dict, Protocol, runtime_checkable

from byteexec.errors import DirectoryUnavailable

APP_DIR_NAME = "byteexec"


@runtime_checkable
class Platform(Protocol):
    """Protocol for platform-specific naming and directory policy."""

    @property
    def name(self) -> str: ...

    @property
    def executable_suffix(self) -> str: ...

    def adapt(self, path: Path) -> Path: ...
    def standard_dir(self) -> Path: ...


PLATFORM_REGISTRY: Dict[str, type[Platform]] = {}


def register_platform(cls: type[Platform]) -> type[Platform]:
    """Class decorator to register a platform implementation."""
    instance = cls()
    PLATFORM_REGISTRY[instance.name] = cls
    return cls


def get_platform(name: str) -> Platform:
    """Get a platform instance by name."""
    _ensure_registered()
    if name not in PLATFORM_REGISTRY:
        raise ValueError(f"Unknown platform: {name}. Available: {list(PLATFORM_REGISTRY.keys())}")
    return PLATFORM_REGISTRY[name]()


def available_platforms() -> list[str]:
    """Return names of all registered platforms."""
    _ensure_registered()
    return sorted(PLATFORM_REGISTRY.keys())


def platform_name_for(sys_platform: str) -> str:
    if sys_platform.startswith("win") or sys_platform == "cygwin":
        return "windows"
    if sys_platform == "darwin":
        return "darwin"
    return "posix"


@lru_cache(maxsize=1)
def current_platform() -> Platform:
    """Platform implementation for the running interpreter."""
    return get_platform(platform_name_for(sys.platform))


def _ensure_registered() -> None:
    """Import all platform modules to trigger @register_platform decorators."""
    if PLATFORM_REGISTRY:
        return
    package_name = __name__
    for module in pkgutil.iter_modules(__path__):
        if module.name.startswith("_"):
            continue
        importlib.import_module(f"{package_name}.{module.name}")


def home_dir() -> Path:
    """``Path.home()`` with lookup failures mapped to DirectoryUnavailable."""
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise DirectoryUnavailable("~", exc) from exc
