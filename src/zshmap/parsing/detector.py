#!/usr/bin/env python3
"""
ZSHMAP SECTION MARKER DETECTOR
------------------------------
Decides whether a single line is a section boundary and, if so, of which
form. Candidate grammars are tried in the registry's fixed priority order
and the first match wins; later grammars are never consulted.

Author: ZshMap Team
Date: 2026-10-18
"""

from typing import Optional

from zshmap.core.models import SectionMarker
from zshmap.parsing.patterns import PatternRegistry


class SectionMarkerDetector:
    """Classifies one line as a SectionMarker or None."""

    def __init__(self, registry: Optional[PatternRegistry] = None):
        self.registry = registry or PatternRegistry()

    def detect(self, line: str, line_number: int) -> Optional[SectionMarker]:
        trimmed = line.strip()
        if not trimmed:
            return None

        found = self.registry.match_marker(trimmed)
        if found is None:
            return None

        grammar, name = found
        return SectionMarker(
            type=grammar.type,
            name=name,
            line_number=line_number,
            original_line=line,
            priority=grammar.priority,
        )


_default_detector = SectionMarkerDetector()


def detect_section_marker(line: str, line_number: int) -> Optional[SectionMarker]:
    """Detects a marker with the built-in grammars only."""
    return _default_detector.detect(line, line_number)
