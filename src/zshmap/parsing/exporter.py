#!/usr/bin/env python3
"""
ZSHMAP EXPORTER - Structured Round-Trip
---------------------------------------
Serializes a ScanResult to YAML so other tools can consume the section
and entry lists without re-scanning.

Author: ZshMap Team
Date: 2026-10-18
"""

import io
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.scalarstring import LiteralScalarString

from zshmap.core.models import Entry, LogicalSection
from zshmap.parsing.pipeline import ScanResult


class YamlExporter:
    """
    The Reconstructor: converts scan results into a YAML document with
    ``summary``, ``sections`` and ``entries`` keys, in that order.
    """

    def __init__(self, include_content: bool = True):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.include_content = include_content

    def _section_map(self, section: LogicalSection) -> CommentedMap:
        data = CommentedMap()
        for key, value in section.to_dict().items():
            if key == "content":
                if not self.include_content:
                    continue
                # Block scalar keeps the section readable in the export
                value = LiteralScalarString(value) if "\n" in value else value
            data[key] = value
        return data

    def _entry_map(self, entry: Entry) -> CommentedMap:
        data = CommentedMap()
        for key, value in entry.to_dict().items():
            if value is None:
                continue
            data[key] = value
        return data

    def to_document(self, result: ScanResult, source: Optional[str] = None) -> CommentedMap:
        doc = CommentedMap()
        summary: Dict[str, Any] = CommentedMap()
        if source:
            summary["source"] = source
        summary["lines"] = result.line_count
        summary["sections"] = len(result.sections)
        summary["entries"] = len(result.entries)
        doc["summary"] = summary

        doc["sections"] = CommentedSeq(self._section_map(s) for s in result.sections)
        doc["entries"] = CommentedSeq(self._entry_map(e) for e in result.entries)
        doc.yaml_set_start_comment("Generated by zshmap")
        return doc

    def export(self, result: ScanResult, source: Optional[str] = None) -> str:
        stream = io.StringIO()
        self.yaml.dump(self.to_document(result, source), stream)
        return stream.getvalue()
