#!/usr/bin/env python3
"""
ZSHMAP ENGINE - The High Orchestrator
-------------------------------------
ZshrcEngine manages the lifecycle of one zshrc scan: path resolution,
size-guarded reading, the scan pipeline itself, and the read-only review
passes (content validation and organization advice). It never writes.

Author: ZshMap Team
Date: 2026-10-18
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from zshmap.core.errors import (
    FileTooLargeError,
    ReadError,
    ZshmapError,
    ZshrcFileNotFoundError,
    ZshrcPermissionError,
)
from zshmap.core.settings import ScanSettings
from zshmap.parsing.pipeline import ScanPipeline, ScanResult
from zshmap.rules.advisor import SectionAdvisor
from zshmap.validator.validator import ContentValidator

logger = logging.getLogger("zshmap.engine")

ZSHRC_FILENAME = ".zshrc"


def resolve_zshrc_path(custom_path: Optional[Union[str, Path]] = None) -> Path:
    """The user-supplied path with ~ expanded, or ~/.zshrc."""
    if custom_path and str(custom_path).strip():
        return Path(str(custom_path).strip()).expanduser()
    return Path.home() / ZSHRC_FILENAME


def truncate_content(content: str, max_length: int) -> Tuple[str, bool]:
    """
    Cuts content to at most ``max_length`` characters, at the last line
    break that fits. Returns (text, was_truncated).
    """
    if len(content) <= max_length:
        return content, False
    cut = content.rfind("\n", 0, max_length + 1)
    if cut > 0:
        return content[:cut], True
    # A single overlong first line
    return content[:max_length], True


class ZshrcEngine:
    """
    Principal orchestrator. Holds one ScanSettings and builds every
    component from it, so all passes agree on the active grammar set.
    """

    def __init__(self, settings: Optional[ScanSettings] = None):
        self.settings = settings or ScanSettings()
        self.pipeline = ScanPipeline(self.settings)
        self.advisor = SectionAdvisor(self.pipeline.scanner)
        self.validator = ContentValidator(self.settings.max_line_length)

    def read(self, path: Union[str, Path]) -> str:
        """
        Reads a zshrc as UTF-8 (BOM tolerated). Files above the size limit
        are refused; content above the length limit is truncated.
        """
        return self.read_with_status(path)[0]

    def read_with_status(self, path: Union[str, Path]) -> Tuple[str, bool]:
        """Like ``read``, also reporting whether the content was truncated."""
        target = Path(path)
        try:
            size = target.stat().st_size
        except FileNotFoundError:
            raise ZshrcFileNotFoundError(str(target))
        except PermissionError:
            raise ZshrcPermissionError(str(target))
        except OSError as e:
            logger.error(f"Unable to stat {target}: {e}")
            raise ReadError(str(target), e) from e

        if size > self.settings.max_file_size:
            raise FileTooLargeError(str(target), size, self.settings.max_file_size)

        try:
            text = target.read_text(encoding='utf-8-sig')
        except PermissionError:
            raise ZshrcPermissionError(str(target))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Unable to read {target}: {e}")
            raise ReadError(str(target), e) from e

        text, truncated = truncate_content(text, self.settings.max_content_length)
        if truncated:
            logger.warning(
                f"{target} exceeds {self.settings.max_content_length} characters, "
                f"scanning a truncated copy"
            )
        return text, truncated

    def scan_content(self, content: str) -> ScanResult:
        return self.pipeline.run(content)

    def load(self, path: Optional[Union[str, Path]] = None) -> ScanResult:
        """Reads and scans; errors from reading propagate."""
        return self.scan_content(self.read(resolve_zshrc_path(path)))

    def scan_file(self, path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Full read-only review of one file. Read failures are reported in the
        returned dict rather than raised.
        """
        full_path = resolve_zshrc_path(path)
        try:
            content, truncated = self.read_with_status(full_path)
        except ZshmapError as e:
            logger.error(f"Error processing {full_path}: {e}")
            return self._file_error(str(full_path), type(e).__name__, str(e))

        result = self.scan_content(content)
        is_valid, issues = self.validator.validate(content)
        suggestions = self.advisor.suggest(content)

        return {
            "file_path": str(full_path),
            "success": True,
            "status": "CLEAN" if is_valid else "WARNINGS",
            "result": result,
            "issues": issues,
            "suggestions": suggestions,
            "truncated": truncated,
            "timestamp": time.time(),
        }

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregates a batch of scan_file reports."""
        if not reports:
            return {
                "total_files": 0, "successful": 0, "system_errors": 0,
                "sections": 0, "entries": 0, "issues": 0,
            }

        scanned = [r for r in reports if r.get("success")]
        return {
            "total_files": len(reports),
            "successful": len(scanned),
            "system_errors": len(reports) - len(scanned),
            "sections": sum(len(r["result"].sections) for r in scanned),
            "entries": sum(len(r["result"].entries) for r in scanned),
            "issues": sum(len(r["issues"]) for r in scanned),
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _file_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        return {
            "file_path": path, "status": status, "error": error,
            "success": False, "result": None, "issues": [], "suggestions": [],
        }
