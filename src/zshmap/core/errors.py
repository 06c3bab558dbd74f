#!/usr/bin/env python3
"""
ZSHMAP ERRORS
-------------
Error hierarchy for the collaborators around the scan core (file access
and configuration). The scan core itself never raises on user content.

Author: ZshMap Team
Date: 2026-10-18
"""

from typing import Optional


class ZshmapError(Exception):
    """Base class for every error raised by zshmap."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ZshrcFileNotFoundError(ZshmapError):
    def __init__(self, path: str):
        super().__init__(f"zshrc file not found: {path}", path)


class ZshrcPermissionError(ZshmapError):
    def __init__(self, path: str):
        super().__init__(f"Permission denied reading {path}", path)


class FileTooLargeError(ZshmapError):
    def __init__(self, path: str, size: int, limit: int):
        super().__init__(f"{path} is {size} bytes, above the {limit} byte limit", path)
        self.size = size
        self.limit = limit


class ReadError(ZshmapError):
    def __init__(self, path: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to read {path}{detail}", path)
        self.cause = cause


class ConfigError(ZshmapError):
    """Raised when a settings file cannot be parsed."""


def user_friendly_message(exc: BaseException) -> str:
    """Short, human-facing text for the CLI."""
    if isinstance(exc, ZshrcFileNotFoundError):
        return "Could not find your zshrc file. Check the path or your config."
    if isinstance(exc, ZshrcPermissionError):
        return "Permission denied. Make sure the file is readable."
    if isinstance(exc, FileTooLargeError):
        return f"File is too large to scan ({exc.size} bytes, limit {exc.limit})."
    if isinstance(exc, ReadError):
        return "Failed to read the zshrc file."
    if isinstance(exc, ConfigError):
        return f"Invalid configuration: {exc}"
    return f"Unexpected error: {exc}"
