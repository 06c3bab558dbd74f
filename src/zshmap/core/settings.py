#!/usr/bin/env python3
"""
ZSHMAP SETTINGS
---------------
The configuration surface of the scan: built-in grammar toggle, the
optional user marker patterns and the read limits of the file collaborator.

Settings files are YAML. Keys may be written either with the option names
in camelCase (``enableDefaults``,
``customHeaderPattern``...) or in snake_case.

Author: ZshMap Team
Date: 2026-10-18
"""

import logging
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ruamel.yaml import YAML, YAMLError

from zshmap.core.errors import ConfigError

logger = logging.getLogger("zshmap.settings")

DEFAULT_MAX_FILE_SIZE = 1024 * 1024
DEFAULT_MAX_CONTENT_LENGTH = 500_000
DEFAULT_MAX_LINE_LENGTH = 2_000


@dataclass(frozen=True)
class ScanSettings:
    """Options that shape marker detection and file reading."""
    enable_defaults: bool = True
    enable_custom_header_pattern: bool = False
    custom_header_pattern: Optional[str] = None
    enable_custom_start_end_patterns: bool = False
    custom_start_pattern: Optional[str] = None
    custom_end_pattern: Optional[str] = None
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ScanSettings":
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for raw_key, value in (data or {}).items():
            key = _snake_case(str(raw_key))
            if key not in known:
                logger.warning(f"Ignoring unknown setting '{raw_key}'")
                continue
            values[key] = _coerce(key, value, known[key].default)
        return cls(**values)


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _coerce(key: str, value: Any, default: Any) -> Any:
    if value is None:
        return None if default is None else default
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Setting '{key}' expects an integer, got {value!r}. Using {default}.")
            return default
    return str(value)


def load_settings(path: Optional[Union[str, Path]]) -> ScanSettings:
    """
    Loads settings from a YAML file. A missing path or file yields the
    defaults; a file that cannot be read or is not valid YAML raises
    ConfigError.
    """
    if not path:
        return ScanSettings()

    config_path = Path(path).expanduser()
    if not config_path.exists():
        logger.info(f"No settings file at {config_path}, using defaults")
        return ScanSettings()

    yaml = YAML(typ="safe")
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Unable to read settings file {config_path}: {e}")
        raise ConfigError(f"{config_path}: {e}", str(config_path)) from e

    try:
        data = yaml.load(text)
    except YAMLError as e:
        logger.error(f"Unable to parse settings file {config_path}")
        raise ConfigError(f"{config_path}: {e}", str(config_path)) from e

    if data is None:
        return ScanSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping", str(config_path))
    return ScanSettings.from_mapping(data)
