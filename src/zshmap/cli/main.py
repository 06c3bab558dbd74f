#!/usr/bin/env python3
"""
ZSHMAP CLI - Section Explorer
-----------------------------
Command-line interface over the scan engine: lists the logical sections of
a zshrc, the entries found in it and the markers that shape it, reviews its
organization and exports the whole picture as YAML.

Author: ZshMap Team
Date: 2026-10-18
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from zshmap.cli.formatter import ZshFormatter
from zshmap.core.engine import ZshrcEngine, resolve_zshrc_path
from zshmap.core.errors import ZshmapError, user_friendly_message
from zshmap.core.models import EntryKind
from zshmap.core.settings import load_settings
from zshmap.parsing.exporter import YamlExporter

VERSION = "1.0.0"

console = Console()


class ZshMapCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    Every command is read-only; the zshrc is never written.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="zshmap",
            description="zshmap - Section map and entry index for your .zshrc",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ZshFormatter(console)
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-V", "--version", action="version", version=f"zshmap v{VERSION}")
        self.parser.add_argument("-c", "--config", help="YAML settings file")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        sections = subparsers.add_parser("sections", help="List logical sections")
        sections.add_argument("path", nargs="?", help="zshrc path (default: ~/.zshrc)")
        sections.add_argument("--content", action="store_true", help="Print each section's lines")

        entries = subparsers.add_parser("entries", help="List classified entries")
        entries.add_argument("path", nargs="?", help="zshrc path (default: ~/.zshrc)")
        entries.add_argument("--kind", choices=[k.value for k in EntryKind], help="Only entries of this kind")
        entries.add_argument("--search", help="Case-insensitive text filter on the source line")

        markers = subparsers.add_parser("markers", help="List detected section markers")
        markers.add_argument("path", nargs="?", help="zshrc path (default: ~/.zshrc)")

        suggest = subparsers.add_parser("suggest", help="Suggest organization improvements")
        suggest.add_argument("path", nargs="?", help="zshrc path (default: ~/.zshrc)")

        check = subparsers.add_parser("check", help="Full read-only review of a zshrc")
        check.add_argument("path", nargs="?", help="zshrc path (default: ~/.zshrc)")

        export = subparsers.add_parser("export", help="Export sections and entries as YAML")
        export.add_argument("path", nargs="?", help="zshrc path (default: ~/.zshrc)")
        export.add_argument("-o", "--output", help="Write YAML to this file instead of stdout")
        export.add_argument("--no-content", action="store_true", help="Omit section content")

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            f"[bold cyan]zshmap v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _cmd_sections(self, engine: ZshrcEngine, args: argparse.Namespace) -> int:
        result = engine.load(args.path)
        self.formatter.print_sections(result.sections, show_content=args.content)
        return 0

    def _cmd_entries(self, engine: ZshrcEngine, args: argparse.Namespace) -> int:
        result = engine.load(args.path)
        entries = result.entries
        if args.kind:
            entries = result.entries_of(EntryKind(args.kind))
        if args.search:
            needle = args.search.lower()
            entries = [e for e in entries if needle in e.original_line.lower()]
        self.formatter.print_entries(entries)
        return 0

    def _cmd_markers(self, engine: ZshrcEngine, args: argparse.Namespace) -> int:
        result = engine.load(args.path)
        self.formatter.print_markers(result.markers)
        return 0

    def _cmd_suggest(self, engine: ZshrcEngine, args: argparse.Namespace) -> int:
        content = engine.read(resolve_zshrc_path(args.path))
        self.formatter.print_suggestions(engine.advisor.suggest(content))
        return 0

    def _cmd_check(self, engine: ZshrcEngine, args: argparse.Namespace) -> int:
        report = engine.scan_file(args.path)
        if not report["success"]:
            console.print(f"[bold red]Error in {report['file_path']}:[/bold red] {report['error']}")
            return 1

        result = report["result"]
        self.formatter.print_sections(result.sections)
        self.formatter.print_issues(report["issues"])
        self.formatter.print_suggestions(report["suggestions"])

        summary = engine.generate_summary([report])
        status_color = "green" if report["status"] == "CLEAN" else "yellow"
        console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"Status:    [{status_color}]{report['status']}[/{status_color}]\n"
            f"Lines:     {result.line_count}\n"
            f"Sections:  {summary['sections']}\n"
            f"Entries:   {summary['entries']}\n"
            f"Issues:    {summary['issues']}"
            + ("\n[yellow]Content was truncated before scanning.[/yellow]" if report["truncated"] else ""),
            border_style="dim"
        ))
        return 0 if report["status"] == "CLEAN" else 1

    def _cmd_export(self, engine: ZshrcEngine, args: argparse.Namespace) -> int:
        path = resolve_zshrc_path(args.path)
        result = engine.load(path)
        text = YamlExporter(include_content=not args.no_content).export(result, source=str(path))
        if args.output:
            Path(args.output).write_text(text, encoding="utf-8")
            console.print(f"[green]Exported {len(result.sections)} sections to {args.output}[/green]")
        else:
            sys.stdout.write(text)
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("zshrc Section Explorer")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

        handlers = {
            "sections": self._cmd_sections,
            "entries": self._cmd_entries,
            "markers": self._cmd_markers,
            "suggest": self._cmd_suggest,
            "check": self._cmd_check,
            "export": self._cmd_export,
        }
        handler = handlers.get(args.command)
        if handler is None:
            self.parser.print_help()
            return 0

        engine = ZshrcEngine(load_settings(args.config))
        return handler(engine, args)


def main(argv: Optional[List[str]] = None):
    """Application entry point with interrupt and error handling."""
    try:
        code = ZshMapCLI().run(argv)
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)
    except ZshmapError as e:
        logging.getLogger("zshmap.cli").debug(f"Command failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {user_friendly_message(e)}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
