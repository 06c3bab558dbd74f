#!/usr/bin/env python3
"""
ZSHMAP CORE MODELS
------------------
Defines the fundamental data structures used across the zshmap engine.
These models represent the lowest level of zshrc abstraction: a single
classified line (Entry), a section boundary (SectionMarker) and a closed
range of the file (LogicalSection).

Author: ZshMap Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Dict, Optional, Tuple


class EntryKind(str, Enum):
    """Closed set of entry kinds, listed in classification priority order."""
    ALIAS = "alias"
    EXPORT = "export"
    EVAL = "eval"
    SETOPT = "setopt"
    PLUGIN = "plugin"
    FUNCTION = "function"
    SOURCE = "source"
    AUTOLOAD = "autoload"
    FPATH = "fpath"
    PATH = "path"
    THEME = "theme"
    COMPLETION = "completion"
    HISTORY = "history"
    KEYBINDING = "keybinding"
    OTHER = "other"


# Every kind except OTHER, in the order the classifier tries them
TYPED_KINDS: Tuple[EntryKind, ...] = tuple(k for k in EntryKind if k is not EntryKind.OTHER)


class MarkerType(str, Enum):
    """Closed set of section boundary forms."""
    CUSTOM_START = "custom_start"
    CUSTOM_END = "custom_end"
    DASHED_START = "dashed_start"
    DASHED_END = "dashed_end"
    BRACKETED = "bracketed"
    HASH = "hash"
    FUNCTION_START = "function_start"
    FUNCTION_END = "function_end"
    LABELED = "labeled"

    @property
    def is_start(self) -> bool:
        return self in START_MARKERS

    @property
    def is_end(self) -> bool:
        return self in END_MARKERS


START_MARKERS = frozenset({
    MarkerType.CUSTOM_START,
    MarkerType.DASHED_START,
    MarkerType.BRACKETED,
    MarkerType.HASH,
    MarkerType.LABELED,
})
END_MARKERS = frozenset({MarkerType.CUSTOM_END, MarkerType.DASHED_END})

UNLABELED = "Unlabeled"
FUNCTION_SECTION_PREFIX = "Function: "


@dataclass(frozen=True)
class Entry:
    """
    The atomic unit of a zshrc file.

    An Entry represents one classified statement. Kind-specific values
    (alias name, export value, plugin name...) live in ``details``.
    """
    kind: EntryKind
    line_number: int                      # 1-indexed line in the source file
    original_line: str                    # Verbatim source text
    section_label: Optional[str] = None   # Active section when the line was scanned
    details: Dict[str, str] = field(default_factory=dict, hash=False)

    def __getattr__(self, name: str) -> str:
        # Exposes kind-specific fields as attributes (entry.name, entry.command)
        try:
            return self.__dict__["details"][name]
        except KeyError:
            raise AttributeError(f"entry has no field '{name}'") from None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "kind": self.kind.value,
            "line_number": self.line_number,
            "original_line": self.original_line,
            "section_label": self.section_label,
        }
        data.update(self.details)
        return data


@dataclass(frozen=True)
class SectionMarker:
    """A detected boundary token. Ephemeral: consumed by the context tracker."""
    type: MarkerType
    name: str
    line_number: int
    original_line: str
    priority: int = 0


@dataclass(frozen=True)
class LogicalSection:
    """A contiguous, closed range of the file with per-kind entry counts."""
    label: str
    start_line: int
    end_line: int                 # Inclusive
    content: str
    alias_count: int = 0
    export_count: int = 0
    eval_count: int = 0
    setopt_count: int = 0
    plugin_count: int = 0
    function_count: int = 0
    source_count: int = 0
    autoload_count: int = 0
    fpath_count: int = 0
    path_count: int = 0
    theme_count: int = 0
    completion_count: int = 0
    history_count: int = 0
    keybinding_count: int = 0
    other_count: int = 0

    @property
    def is_labeled(self) -> bool:
        return self.label != UNLABELED

    def count(self, kind: EntryKind) -> int:
        return getattr(self, count_field(kind))

    @property
    def counts(self) -> Dict[EntryKind, int]:
        return {kind: self.count(kind) for kind in EntryKind}

    @property
    def total_count(self) -> int:
        return sum(self.counts.values())

    def merge(self, other: "LogicalSection") -> "LogicalSection":
        """Absorbs the following section: range extended, content joined, counts summed."""
        summed = {
            count_field(kind): self.count(kind) + other.count(kind)
            for kind in EntryKind
        }
        return replace(
            self,
            end_line=other.end_line,
            content=f"{self.content}\n{other.content}",
            **summed,
        )

    def to_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def count_field(kind: EntryKind) -> str:
    """Maps an entry kind to its LogicalSection counter attribute."""
    return f"{kind.value}_count"
