"""byteexec configuration.

Config file:
  - Global: <standard dir>/config.json (e.g. ~/.config/byteexec/config.json)

Merge order: global file → environment variables (highest priority).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .errors import DirectoryUnavailable
from .platforms import Platform, current_platform

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"

_ENV_OVERRIDES: list[tuple[str, str]] = [
    ("debug", "BYTEEXEC_DEBUG"),
    ("log_file", "BYTEEXEC_LOG_FILE"),
    ("file_mode", "BYTEEXEC_FILE_MODE"),
    ("temp_dir", "BYTEEXEC_TEMP_DIR"),
]


def config_path(platform: Platform | None = None) -> Path:
    return (platform or current_platform()).standard_dir() / CONFIG_FILENAME


def _read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def load_config(platform: Platform | None = None) -> Dict[str, Any]:
    """Load merged config: global file → env vars."""
    try:
        merged: Dict[str, Any] = _read_json(config_path(platform))
    except DirectoryUnavailable:
        logger.debug("No standard directory; skipping config file", exc_info=True)
        merged = {}

    if "file_mode" in merged:
        mode = parse_mode(merged["file_mode"])
        if mode is None:
            logger.warning("Invalid file_mode %r in config; ignoring", merged["file_mode"])
            del merged["file_mode"]
        else:
            merged["file_mode"] = mode

    _apply_env_overrides(merged)
    return merged


def parse_mode(value: Any) -> int | None:
    """Parse an octal permission string such as ``"755"``; ints pass through."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        mode = value
    else:
        try:
            mode = int(str(value), 8)
        except ValueError:
            return None
    if not 0 <= mode <= 0o7777:
        return None
    return mode


def _apply_env_overrides(merged: Dict[str, Any]) -> None:
    """Environment variables override the config file."""
    for config_key, env_var in _ENV_OVERRIDES:
        val = os.environ.get(env_var)
        if val:
            if config_key == "file_mode":
                mode = parse_mode(val)
                if mode is None:
                    logger.warning("Invalid %s value %r; ignoring", env_var, val)
                else:
                    merged[config_key] = mode
            elif config_key == "debug":
                merged[config_key] = val.lower() == "true"
            else:
                merged[config_key] = val
