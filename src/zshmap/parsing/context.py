#!/usr/bin/env python3
"""
ZSHMAP SECTION CONTEXT
----------------------
The running parse state of a scan: which sections are open and how deep
inside function bodies the current line sits. A context is a value; the
tracker never mutates it and returns a new one for every marker consumed,
so two scans can never interfere.

Author: ZshMap Team
Date: 2026-10-18
"""

import re
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from zshmap.core.models import FUNCTION_SECTION_PREFIX, MarkerType, SectionMarker

# Any one of these qualifies a function as an organizational unit
DESCRIPTIVE_FUNCTION_PATTERNS = (
    re.compile(r"^[a-z]{3,}$", re.IGNORECASE),                  # 3+ letters
    re.compile(r"^[a-z]+(?:_[a-z]+)+$", re.IGNORECASE),         # snake_case
    re.compile(r"^[a-z]+(?:[A-Z][a-z]+)+$"),                    # camelCase
    re.compile(r"^(?:setup|init|config|install|update|clean|build|deploy)", re.IGNORECASE),
)


@dataclass(frozen=True)
class SectionContext:
    """
    Nesting state threaded line by line through a scan.

    ``current_section`` is always None or the last element of
    ``section_stack``.
    """
    section_stack: Tuple[str, ...] = ()
    function_level: int = 0

    def __post_init__(self):
        object.__setattr__(self, "section_stack", tuple(self.section_stack))

    @property
    def current_section(self) -> Optional[str]:
        return self.section_stack[-1] if self.section_stack else None

    def push(self, name: str) -> "SectionContext":
        return replace(self, section_stack=self.section_stack + (name,))

    def pop(self) -> "SectionContext":
        # Popping an empty stack is a no-op
        return replace(self, section_stack=self.section_stack[:-1])


def is_descriptive_function_name(name: str) -> bool:
    """True when a function is substantial enough to be treated as a section."""
    return any(p.search(name) for p in DESCRIPTIVE_FUNCTION_PATTERNS)


def update_section_context(marker: SectionMarker, context: SectionContext) -> SectionContext:
    """
    Applies one marker to the context.

    End markers unwind the innermost open section without checking that its
    name matches; mismatched pairs simply close the nearest section.
    """
    if marker.type.is_start:
        return context.push(marker.name)

    if marker.type.is_end:
        return context.pop()

    if marker.type is MarkerType.FUNCTION_START:
        context = replace(context, function_level=context.function_level + 1)
        if marker.name and is_descriptive_function_name(marker.name):
            context = context.push(f"{FUNCTION_SECTION_PREFIX}{marker.name}")
        return context

    if marker.type is MarkerType.FUNCTION_END:
        # Stray closing braces never drive the depth negative
        level = max(0, context.function_level - 1)
        context = replace(context, function_level=level)
        current = context.current_section
        if level == 0 and current is not None and current.startswith(FUNCTION_SECTION_PREFIX):
            context = context.pop()
        return context

    return context
