#!/usr/bin/env python3
"""
ZSHMAP PATTERN REGISTRY
-----------------------
Central source of truth for every recognizable textual form in a zshrc:
one grammar per entry kind and one grammar per section marker kind.
The Detector, the Classifier and the section counters all match through
this module so a form is never described twice.

Entry grammars run against the raw line (leading whitespace allowed).
Marker grammars run against the trimmed line.

Author: ZshMap Team
Date: 2026-10-18
"""

import logging
import re
from dataclasses import dataclass
from re import Match, Pattern
from typing import Callable, Dict, List, Optional, Tuple

from zshmap.core.models import EntryKind, MarkerType, TYPED_KINDS
from zshmap.core.settings import ScanSettings

logger = logging.getLogger("zshmap.patterns")

Fields = Dict[str, str]

# --- ENTRY GRAMMARS ---
# Trailing "# comment" is tolerated where a value is delimited (quotes, parens)
ALIAS = re.compile(
    r"""^\s*alias\s+(?:-[A-Za-z]+\s+)*(?P<name>[^\s=]+)="""
    r"""(?:'(?P<sq>.*)'|"(?P<dq>.*)"|(?P<bare>[^\s'"]\S*))(?:\s+#.*)?\s*$"""
)
EXPORT = re.compile(
    r"^\s*(?:export|typeset\s+-x|declare\s+-x)\s+(?P<variable>[A-Za-z_][A-Za-z0-9_]*)=(?P<value>.*?)\s*$"
)
EVAL = re.compile(r"^\s*eval\s+(?P<command>.+?)\s*$")
SETOPT = re.compile(r"^\s*setopt\s+(?P<option>.+?)\s*$")
PLUGIN = re.compile(r"^\s*plugins\s*\+?=\s*\((?P<names>[^)]*)\)\s*(?:#.*)?$")
# "name() {" or "function name {" / "function name() {"; bare "name {" is not a definition
FUNCTION = re.compile(
    r"^\s*(?:function\s+(?=[A-Za-z_])|(?=[A-Za-z_][\w.:-]*\s*\(\s*\)))"
    r"(?P<name>[A-Za-z_][\w.:-]*)\s*(?:\(\s*\))?\s*\{"
)
SOURCE = re.compile(r"^\s*(?:source|\.)\s+(?P<path>.+?)\s*$")
AUTOLOAD = re.compile(r"^\s*autoload\s+(?:[-+][A-Za-z]+\s+)*(?P<function>[A-Za-z_][\w-]*)")
FPATH = re.compile(r"^\s*fpath\s*\+?=\s*\((?P<directories>[^)]*)\)\s*(?:#.*)?$")
PATH = re.compile(r"^\s*(?:PATH|path)\s*\+?=\s*(?P<value>.+?)\s*$")
THEME = re.compile(
    r"""^\s*ZSH_THEME\s*=\s*(?:'(?P<sq>[^']*)'|"(?P<dq>[^"]*)"|(?P<bare>[^\s'"#]\S*))\s*(?:#.*)?$"""
)
COMPLETION = re.compile(
    r"""^\s*(?P<command>(?:compinit|bashcompinit|compdef)\b.*?|zstyle\s+['"]?:completion.*?)\s*$"""
)
HISTORY = re.compile(r"^\s*(?:HIST[A-Z_]*|SAVEHIST)\s*=\s*(?P<value>.+?)\s*$")
HISTORY_VARIABLE = re.compile(r"^\s*(HIST[A-Z_]*)\s*=")
KEYBINDING = re.compile(r"^\s*bindkey\s+(?P<command>.+?)\s*$")

# --- MARKER GRAMMARS ---
CUSTOM_START = re.compile(r"^#\s*@start\s+(\S.*?)\s*$")
CUSTOM_END = re.compile(r"^#\s*@end(?:\s+(.*?))?\s*$")
DASHED_END = re.compile(r"^#\s*-{3,}\s*end\b.*?-{3,}\s*#?\s*$", re.IGNORECASE)
DASHED_START = re.compile(r"^#\s*-{3,}\s*([^-\s].*?)\s*-{3,}\s*#?\s*$")
BRACKETED = re.compile(r"^#\s*\[\s*([^\]]*?\S)\s*\]\s*$")
HASH = re.compile(r"^#{2,}\s+([^#\s].*?)\s*#*\s*$")
FUNCTION_START = re.compile(
    r"^(?:function\s+(?=[A-Za-z_])|(?=[A-Za-z_][\w.:-]*\s*\(\s*\)))"
    r"([A-Za-z_][\w.:-]*)\s*(?:\(\s*\))?\s*\{\s*$"
)
FUNCTION_END = re.compile(r"^\}$")
LABELED = re.compile(r"^#\s*section\s*:\s*(\S.*?)\s*$", re.IGNORECASE)

MARKER_PRIORITIES: Dict[MarkerType, int] = {
    MarkerType.CUSTOM_START: 100,
    MarkerType.CUSTOM_END: 100,
    MarkerType.DASHED_END: 90,
    MarkerType.DASHED_START: 90,
    MarkerType.BRACKETED: 80,
    MarkerType.HASH: 70,
    MarkerType.FUNCTION_START: 60,
    MarkerType.FUNCTION_END: 60,
    MarkerType.LABELED: 50,
}
CUSTOM_PATTERN_PRIORITY = 110


def _quoted(match: Match) -> str:
    for group in ("sq", "dq", "bare"):
        value = match.group(group)
        if value is not None:
            return value
    return ""


def _tokens(raw: str) -> List[str]:
    return [token for token in raw.split() if token]


def _alias(m: Match) -> Optional[List[Fields]]:
    command = _quoted(m)
    return [{"name": m.group("name"), "command": command}] if command else None


def _export(m: Match) -> Optional[List[Fields]]:
    value = m.group("value")
    return [{"variable": m.group("variable"), "value": value}] if value else None


def _plugin(m: Match) -> Optional[List[Fields]]:
    names = _tokens(m.group("names"))
    return [{"name": name} for name in names] or None


def _fpath(m: Match) -> Optional[List[Fields]]:
    dirs = _tokens(m.group("directories"))
    return [{"directory": d} for d in dirs] or None


def _theme(m: Match) -> Optional[List[Fields]]:
    name = _quoted(m)
    return [{"name": name}] if name else None


def _history(m: Match) -> Optional[List[Fields]]:
    variable = HISTORY_VARIABLE.match(m.string)
    return [{
        "variable": variable.group(1) if variable else "HIST",
        "value": m.group("value"),
    }]


def _groups(m: Match) -> Optional[List[Fields]]:
    return [{k: v for k, v in m.groupdict().items() if v is not None}]


@dataclass(frozen=True)
class EntryGrammar:
    """One entry kind's grammar plus the extractor that turns a match into field sets."""
    kind: EntryKind
    pattern: Pattern
    extract: Callable[[Match], Optional[List[Fields]]] = _groups

    def match(self, line: str) -> Optional[List[Fields]]:
        m = self.pattern.match(line)
        if not m:
            return None
        return self.extract(m)


@dataclass(frozen=True)
class MarkerGrammar:
    """One marker kind's grammar. ``match`` returns the captured name ('' when none)."""
    type: MarkerType
    pattern: Pattern
    priority: int

    def match(self, trimmed: str) -> Optional[str]:
        m = self.pattern.match(trimmed)
        if not m:
            return None
        name = m.group(1) if self.pattern.groups else None
        return (name or "").strip()


# Fixed classification order: first grammar that yields fields wins
ENTRY_GRAMMARS: Tuple[EntryGrammar, ...] = (
    EntryGrammar(EntryKind.ALIAS, ALIAS, _alias),
    EntryGrammar(EntryKind.EXPORT, EXPORT, _export),
    EntryGrammar(EntryKind.EVAL, EVAL),
    EntryGrammar(EntryKind.SETOPT, SETOPT),
    EntryGrammar(EntryKind.PLUGIN, PLUGIN, _plugin),
    EntryGrammar(EntryKind.FUNCTION, FUNCTION),
    EntryGrammar(EntryKind.SOURCE, SOURCE),
    EntryGrammar(EntryKind.AUTOLOAD, AUTOLOAD),
    EntryGrammar(EntryKind.FPATH, FPATH, _fpath),
    EntryGrammar(EntryKind.PATH, PATH),
    EntryGrammar(EntryKind.THEME, THEME, _theme),
    EntryGrammar(EntryKind.COMPLETION, COMPLETION),
    EntryGrammar(EntryKind.HISTORY, HISTORY, _history),
    EntryGrammar(EntryKind.KEYBINDING, KEYBINDING),
)

# Fixed detection order. End forms precede the start forms they overlap with.
BUILTIN_MARKER_GRAMMARS: Tuple[MarkerGrammar, ...] = tuple(
    MarkerGrammar(marker_type, pattern, MARKER_PRIORITIES[marker_type])
    for marker_type, pattern in (
        (MarkerType.CUSTOM_START, CUSTOM_START),
        (MarkerType.CUSTOM_END, CUSTOM_END),
        (MarkerType.DASHED_END, DASHED_END),
        (MarkerType.DASHED_START, DASHED_START),
        (MarkerType.BRACKETED, BRACKETED),
        (MarkerType.HASH, HASH),
        (MarkerType.FUNCTION_START, FUNCTION_START),
        (MarkerType.FUNCTION_END, FUNCTION_END),
        (MarkerType.LABELED, LABELED),
    )
)


def compile_custom_pattern(source: Optional[str], description: str) -> Optional[Pattern]:
    """
    Validates and compiles a user-supplied marker pattern.

    The pattern is anchored at line start when it is not already, compiled
    case-insensitively, and must contain exactly one capture group. Anything
    else is logged and rejected (None); it never raises.
    """
    if not source or not source.strip():
        return None

    anchored = source if source.startswith("^") else f"^{source}"
    try:
        compiled = re.compile(anchored, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"Invalid {description} pattern {source!r}: {e}")
        return None

    if compiled.groups != 1:
        logger.warning(
            f"Custom {description} pattern {source!r} must contain exactly one "
            f"capture group, found {compiled.groups}. Pattern ignored."
        )
        return None
    return compiled


class PatternRegistry:
    """
    The active grammar set for one scan.

    Built from ScanSettings: custom marker grammars (when enabled and valid)
    are tried first, followed by the built-in marker grammars unless
    ``enable_defaults`` is off. Entry grammars are always the built-in set.
    """

    def __init__(self, settings: Optional[ScanSettings] = None):
        self.settings = settings or ScanSettings()
        self.entry_grammars: Tuple[EntryGrammar, ...] = ENTRY_GRAMMARS
        self.marker_grammars: Tuple[MarkerGrammar, ...] = self._build_marker_grammars()

    def _build_marker_grammars(self) -> Tuple[MarkerGrammar, ...]:
        s = self.settings
        custom: List[MarkerGrammar] = []

        if s.enable_custom_header_pattern:
            header = compile_custom_pattern(s.custom_header_pattern, "header")
            if header is not None:
                custom.append(MarkerGrammar(MarkerType.LABELED, header, CUSTOM_PATTERN_PRIORITY))

        if s.enable_custom_start_end_patterns:
            start = compile_custom_pattern(s.custom_start_pattern, "start")
            if start is not None:
                custom.append(MarkerGrammar(MarkerType.CUSTOM_START, start, CUSTOM_PATTERN_PRIORITY))
            end = compile_custom_pattern(s.custom_end_pattern, "end")
            if end is not None:
                custom.append(MarkerGrammar(MarkerType.CUSTOM_END, end, CUSTOM_PATTERN_PRIORITY))

        builtin = BUILTIN_MARKER_GRAMMARS if s.enable_defaults else ()
        return tuple(custom) + builtin

    def match_marker(self, trimmed: str) -> Optional[Tuple[MarkerGrammar, str]]:
        """First marker grammar that matches, with its captured name."""
        for grammar in self.marker_grammars:
            name = grammar.match(trimmed)
            if name is not None:
                return grammar, name
        return None

    def match_entry(self, line: str) -> Optional[Tuple[EntryKind, List[Fields]]]:
        """First entry grammar that matches, with one field set per produced entry."""
        for grammar in self.entry_grammars:
            found = grammar.match(line)
            if found:
                return grammar.kind, found
        return None

    def count_all(self, text: str) -> Dict[EntryKind, int]:
        """
        Counts typed statements per kind over every line of ``text``.
        A line counts once, for the first grammar it satisfies.
        """
        counts = {kind: 0 for kind in TYPED_KINDS}
        for line in text.split("\n"):
            if not line.strip():
                continue
            matched = self.match_entry(line)
            if matched:
                counts[matched[0]] += 1
        return counts
