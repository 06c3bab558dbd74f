#!/usr/bin/env python3
"""
ZSHMAP SECTION ADVISOR - Organization Rules
-------------------------------------------
Evaluates how a zshrc is organized and proposes improvements: long runs of
content without any section header, and files that mix many different
marker styles. Advice only; the file is never touched.

Author: ZshMap Team
Date: 2026-10-18
"""

from dataclasses import dataclass
from typing import List, Optional

from zshmap.core.models import SectionMarker
from zshmap.parsing.scanner import SectionScanner

UNLABELED_GAP_THRESHOLD = 10
MAX_MARKER_STYLES = 2


@dataclass(frozen=True)
class Suggestion:
    line_number: int
    suggestion: str
    priority: str          # "low" | "medium" | "high"


class SectionAdvisor:
    """
    Registry of organization rules run against the markers of a file.
    Each rule returns zero or more Suggestions.
    """

    def __init__(self, scanner: Optional[SectionScanner] = None,
                 gap_threshold: int = UNLABELED_GAP_THRESHOLD):
        self.scanner = scanner or SectionScanner()
        self.gap_threshold = gap_threshold
        self.active_rules = [
            self._rule_unlabeled_gaps,
            self._rule_consistent_formats,
        ]

    def suggest(self, content: str) -> List[Suggestion]:
        markers = self.scanner.markers(content)
        suggestions: List[Suggestion] = []
        for rule in self.active_rules:
            suggestions.extend(rule(markers))
        return suggestions

    def _rule_unlabeled_gaps(self, markers: List[SectionMarker]) -> List[Suggestion]:
        """Policy: long stretches between markers deserve their own header."""
        found = []
        last_marker_line = 0
        for marker in markers:
            gap = marker.line_number - last_marker_line
            if gap > self.gap_threshold:
                found.append(Suggestion(
                    line_number=last_marker_line + 1,
                    suggestion=f"Consider adding a section header for {gap} lines of unlabeled content",
                    priority="medium",
                ))
            last_marker_line = marker.line_number
        return found

    def _rule_consistent_formats(self, markers: List[SectionMarker]) -> List[Suggestion]:
        """Policy: a file should not mix more than two marker styles."""
        styles = {marker.type for marker in markers}
        if len(styles) > MAX_MARKER_STYLES:
            return [Suggestion(
                line_number=1,
                suggestion="Consider using consistent section formatting throughout the file",
                priority="low",
            )]
        return []
