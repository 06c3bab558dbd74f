#!/usr/bin/env python3
"""
ZSHMAP BUILDER - Logical Section Builder
----------------------------------------
Cuts a zshrc into closed line ranges at its section markers and
materializes one LogicalSection per range, with per-kind entry counts.

Boundary rules:
  * a start marker closes the pending range just before itself and opens a
    new range, labeled with its name, starting at the marker line;
  * an end marker closes the pending range on its own line and the next
    range starts unlabeled on the following line;
  * a function opens/closes a range only when the context tracker promotes
    it to a section (descriptive name, outermost closing brace);
  * whatever is left at end of file forms a trailing range.

Ranges that are empty or hold only blank lines are dropped, and adjacent
"Unlabeled" ranges are merged into one.

Author: ZshMap Team
Date: 2026-10-18
"""

from typing import List, Optional, Sequence

from zshmap.core.models import (
    EntryKind,
    LogicalSection,
    UNLABELED,
    count_field,
)
from zshmap.parsing.detector import SectionMarkerDetector
from zshmap.parsing.patterns import PatternRegistry
from zshmap.parsing.scanner import ScanStep, SectionScanner, split_lines


class LogicalSectionBuilder:
    """Drives the scan and delimits LogicalSection ranges."""

    def __init__(self, registry: Optional[PatternRegistry] = None):
        self.registry = registry or PatternRegistry()
        self.scanner = SectionScanner(SectionMarkerDetector(self.registry))

    def build(self, content: str) -> List[LogicalSection]:
        lines = split_lines(content)
        return self.build_from_steps(lines, self.scanner.steps(lines))

    def build_from_steps(self, lines: Sequence[str], steps) -> List[LogicalSection]:
        sections: List[LogicalSection] = []
        start = 1
        label: Optional[str] = None

        for step in steps:
            if step.marker is None:
                continue
            n = step.line_number

            if self._closes_section(step):
                self._push(sections, lines, start, n, label)
                label = None
                start = n + 1
            elif self._opens_section(step):
                self._push(sections, lines, start, n - 1, label)
                label = self._section_name(step)
                start = n

        # Tail: a file may end without closing its last section
        self._push(sections, lines, start, len(lines), label)
        return merge_unlabeled_sections(sections)

    @staticmethod
    def _opens_section(step: ScanStep) -> bool:
        if step.marker.type.is_start:
            return True
        # Function promoted by the tracker
        return len(step.after.section_stack) > len(step.before.section_stack)

    @staticmethod
    def _closes_section(step: ScanStep) -> bool:
        if step.marker.type.is_end:
            return True
        # Outermost brace of a promoted function
        return (
            not step.marker.type.is_start
            and len(step.after.section_stack) < len(step.before.section_stack)
        )

    @staticmethod
    def _section_name(step: ScanStep) -> str:
        if step.marker.type.is_start:
            return step.marker.name
        return step.after.current_section or ""

    def _push(
        self,
        sections: List[LogicalSection],
        lines: Sequence[str],
        start: int,
        end: int,
        label: Optional[str],
    ) -> None:
        if end < start:
            return
        section = self.materialize(lines, start, end, label)
        if section is not None:
            sections.append(section)

    def materialize(
        self,
        lines: Sequence[str],
        start: int,
        end: int,
        label: Optional[str],
    ) -> Optional[LogicalSection]:
        """Builds the LogicalSection for lines [start, end] (1-indexed, inclusive)."""
        chunk = lines[start - 1:end]
        non_empty = sum(1 for line in chunk if line.strip())
        if not non_empty:
            return None

        joined = "\n".join(chunk)
        counts = self.registry.count_all(joined)
        typed_total = sum(counts.values())

        return LogicalSection(
            label=(label or "").strip() or UNLABELED,
            start_line=start,
            end_line=end,
            content=joined,
            other_count=max(0, non_empty - typed_total),
            **{count_field(kind): n for kind, n in counts.items() if kind is not EntryKind.OTHER},
        )


def merge_unlabeled_sections(sections: Sequence[LogicalSection]) -> List[LogicalSection]:
    """Collapses every run of adjacent Unlabeled sections into one section."""
    merged: List[LogicalSection] = []
    for section in sections:
        if merged and merged[-1].label == UNLABELED and section.label == UNLABELED:
            merged[-1] = merged[-1].merge(section)
        else:
            merged.append(section)
    return merged


def to_logical_sections(content: str, registry: Optional[PatternRegistry] = None) -> List[LogicalSection]:
    return LogicalSectionBuilder(registry).build(content)
