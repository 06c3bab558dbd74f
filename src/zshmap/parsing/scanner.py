#!/usr/bin/env python3
"""
ZSHMAP SCANNER - The Line Walker
--------------------------------
Walks a zshrc line by line, detecting markers and threading the section
context. The walk is a finite generator that can be resumed from any
line index with a saved context, so callers may impose a line or time
budget between iterations. Both the entry parser and the section builder
are driven by it.

Author: ZshMap Team
Date: 2026-10-18
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from zshmap.core.models import MarkerType, SectionMarker
from zshmap.parsing.context import SectionContext, update_section_context
from zshmap.parsing.detector import SectionMarkerDetector

NEWLINE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ScanStep:
    """One scanned line with the context in force before and after it."""
    index: int                       # 0-based position in the line list
    line: str
    marker: Optional[SectionMarker]
    before: SectionContext
    after: SectionContext

    @property
    def line_number(self) -> int:
        return self.index + 1

    @property
    def is_blank(self) -> bool:
        return not self.line.strip()


def split_lines(content: str) -> List[str]:
    """
    Splits content on LF or CRLF after removing a UTF-8 BOM.
    A final newline terminates the last line rather than opening a new one.
    """
    text = content.lstrip("\ufeff")
    if not text:
        return []
    lines = NEWLINE.split(text)
    if lines and lines[-1] == "" and len(lines) > 1:
        lines.pop()
    return lines


class SectionScanner:
    """Produces ScanSteps for a sequence of lines."""

    def __init__(self, detector: Optional[SectionMarkerDetector] = None):
        self.detector = detector or SectionMarkerDetector()

    def steps(
        self,
        lines: Sequence[str],
        start: int = 0,
        context: Optional[SectionContext] = None,
    ) -> Iterator[ScanStep]:
        """
        Yields one step per line from ``start`` onwards. Resume an interrupted
        walk by passing the last step's index + 1 and its ``after`` context.
        """
        ctx = context or SectionContext()
        for index in range(start, len(lines)):
            line = lines[index]
            marker = self.detector.detect(line, index + 1)
            after = update_section_context(marker, ctx) if marker else ctx
            yield ScanStep(index=index, line=line, marker=marker, before=ctx, after=after)
            ctx = after

    def scan(self, content: str) -> Iterator[ScanStep]:
        return self.steps(split_lines(content))

    def markers(self, content: str) -> List[SectionMarker]:
        """Every detected marker, in source order."""
        return [step.marker for step in self.scan(content) if step.marker is not None]


def analyze_markers(content: str, scanner: Optional[SectionScanner] = None) -> List[SectionMarker]:
    return (scanner or SectionScanner()).markers(content)


@dataclass(frozen=True)
class MarkerGroup:
    """Lines from one opening marker up to the line before the next marker."""
    name: str
    start_line: int
    end_line: int
    content: str
    type: MarkerType


def _opens_group(marker: SectionMarker) -> bool:
    return marker.type.is_start or marker.type is MarkerType.FUNCTION_START


def group_content_into_sections(
    content: str,
    scanner: Optional[SectionScanner] = None,
) -> List[MarkerGroup]:
    """
    Groups lines by the marker that precedes them. Any marker closes the
    open group; only start markers (function openings included) open a new
    one. Lines before the first opening marker belong to no group.
    """
    lines = split_lines(content)
    groups: List[MarkerGroup] = []
    current: Optional[SectionMarker] = None

    def close(end_line: int) -> None:
        groups.append(MarkerGroup(
            name=current.name,
            start_line=current.line_number,
            end_line=end_line,
            content="\n".join(lines[current.line_number - 1:end_line]),
            type=current.type,
        ))

    for step in (scanner or SectionScanner()).steps(lines):
        if step.marker is None:
            continue
        if current is not None:
            close(step.line_number - 1)
        current = step.marker if _opens_group(step.marker) else None

    if current is not None:
        close(len(lines))
    return groups
