#!/usr/bin/env python3
"""
ZSHMAP CLASSIFIER - Entry Parser
--------------------------------
Turns non-marker lines into typed Entries. Grammars are tried in the
registry's fixed priority order; the first one that matches decides the
kind. Lines no grammar recognizes become ``other`` entries, so every
non-empty, non-marker line is accounted for exactly once.

Author: ZshMap Team
Date: 2026-10-18
"""

from typing import Iterable, List, Optional

from zshmap.core.models import Entry, EntryKind
from zshmap.parsing.detector import SectionMarkerDetector
from zshmap.parsing.patterns import PatternRegistry
from zshmap.parsing.scanner import ScanStep, SectionScanner


class LineClassifier:
    """
    Assigns each scanned line to one entry kind.
    Multi-value statements (plugins, fpath) produce one entry per value.
    """

    def __init__(self, registry: Optional[PatternRegistry] = None):
        self.registry = registry or PatternRegistry()

    def classify(self, line: str, line_number: int, section_label: Optional[str] = None) -> List[Entry]:
        """Classifies one line. Blank lines produce nothing."""
        if not line.strip():
            return []

        matched = self.registry.match_entry(line)
        if matched is None:
            return [Entry(EntryKind.OTHER, line_number, line, section_label)]

        kind, field_sets = matched
        return [
            Entry(kind, line_number, line, section_label, details)
            for details in field_sets
        ]

    def entries_from_steps(self, steps: Iterable[ScanStep]) -> List[Entry]:
        entries: List[Entry] = []
        for step in steps:
            # Marker lines delimit sections; they are not configuration
            if step.marker is not None or step.is_blank:
                continue
            entries.extend(self.classify(step.line, step.line_number, step.before.current_section))
        return entries


def parse_zshrc(
    content: str,
    registry: Optional[PatternRegistry] = None,
) -> List[Entry]:
    """Parses a whole zshrc into its ordered entry list."""
    registry = registry or PatternRegistry()
    scanner = SectionScanner(SectionMarkerDetector(registry))
    return LineClassifier(registry).entries_from_steps(scanner.scan(content))
