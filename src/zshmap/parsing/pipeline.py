#!/usr/bin/env python3
"""
ZSHMAP SCAN PIPELINE - The Coordinator
--------------------------------------
Runs the classification engine over one zshrc in a strict order:

  1. split the raw text into lines,
  2. walk the lines once, detecting markers and threading the context,
  3. classify every non-marker line into entries,
  4. cut the same walk into logical sections.

The pipeline holds no state between runs: scanning identical content twice
yields identical results.

Author: ZshMap Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from zshmap.core.models import Entry, EntryKind, LogicalSection, SectionMarker
from zshmap.core.settings import ScanSettings
from zshmap.parsing.builder import LogicalSectionBuilder
from zshmap.parsing.classifier import LineClassifier
from zshmap.parsing.detector import SectionMarkerDetector
from zshmap.parsing.patterns import PatternRegistry
from zshmap.parsing.scanner import SectionScanner, split_lines


@dataclass
class ScanResult:
    """Everything one scan learned about a zshrc."""
    raw_text: str
    line_count: int = 0
    entries: List[Entry] = field(default_factory=list)
    sections: List[LogicalSection] = field(default_factory=list)
    markers: List[SectionMarker] = field(default_factory=list)

    def entries_of(self, kind: EntryKind) -> List[Entry]:
        return [e for e in self.entries if e.kind is kind]

    def entries_in(self, section_label: Optional[str]) -> List[Entry]:
        return [e for e in self.entries if e.section_label == section_label]

    def kind_totals(self) -> Dict[EntryKind, int]:
        totals = {kind: 0 for kind in EntryKind}
        for entry in self.entries:
            totals[entry.kind] += 1
        return totals


class ScanPipeline:
    """Orchestrates the Detector, Classifier and Builder over a single walk."""

    def __init__(self, settings: Optional[ScanSettings] = None):
        self.settings = settings or ScanSettings()
        self.registry = PatternRegistry(self.settings)
        self.scanner = SectionScanner(SectionMarkerDetector(self.registry))
        self.classifier = LineClassifier(self.registry)
        self.builder = LogicalSectionBuilder(self.registry)

    def run(self, content: str) -> ScanResult:
        lines = split_lines(content)
        steps = list(self.scanner.steps(lines))

        return ScanResult(
            raw_text=content,
            line_count=len(lines),
            entries=self.classifier.entries_from_steps(steps),
            sections=self.builder.build_from_steps(lines, steps),
            markers=[s.marker for s in steps if s.marker is not None],
        )
