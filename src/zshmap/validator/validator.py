#!/usr/bin/env python3
"""
ZSHMAP VALIDATOR - The Judge
----------------------------
A read-only safety pass over zshrc content before it is shown to the user:
overlong lines and a short list of dangerous command shapes.

Author: ZshMap Team
Date: 2026-10-18
"""

import logging
from typing import List, Tuple

from zshmap.core.settings import DEFAULT_MAX_LINE_LENGTH

logger = logging.getLogger("zshmap.validator")


class ContentValidator:
    """Flags content that deserves a second look. Never modifies it."""

    def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
        self.max_line_length = max_line_length

    def validate(self, content: str) -> Tuple[bool, List[str]]:
        """Returns (is_valid, errors)."""
        errors: List[str] = []

        for i, line in enumerate(content.split("\n"), 1):
            if len(line) > self.max_line_length:
                errors.append(f"Line {i} is too long ({len(line)} characters)")

        if "eval " in content and "$(curl" in content:
            errors.append("Suspicious pattern detected: eval with curl")

        if "rm -rf /" in content:
            errors.append("Dangerous command detected: rm -rf /")

        for error in errors:
            logger.debug(error)
        return not errors, errors
