# src/zshmap/cli/formatter.py
from typing import Iterable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from zshmap.core.models import Entry, EntryKind, LogicalSection, SectionMarker
from zshmap.rules.advisor import Suggestion

console = Console()

PRIORITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "dim"}


def _entry_value(entry: Entry) -> str:
    """The most telling field of an entry, for one-column display."""
    details = entry.details
    if entry.kind is EntryKind.ALIAS:
        return f"{details['name']} = {details['command']}"
    if entry.kind in (EntryKind.EXPORT, EntryKind.HISTORY):
        return f"{details['variable']} = {details['value']}"
    if details:
        return " ".join(details.values())
    return entry.original_line.strip()


class ZshFormatter:
    """
    ZshFormatter: the visual heart of the CLI.
    Renders sections, entries, markers and review findings.
    """

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console

    def print_sections(self, sections: List[LogicalSection], show_content: bool = False):
        table = Table(title="Sections", show_header=True, header_style="bold magenta")
        table.add_column("Label", style="cyan")
        table.add_column("Lines", justify="right")
        table.add_column("Aliases", justify="right")
        table.add_column("Exports", justify="right")
        table.add_column("Functions", justify="right")
        table.add_column("Plugins", justify="right")
        table.add_column("Other", justify="right")

        for s in sections:
            label = s.label if s.is_labeled else f"[dim]{s.label}[/dim]"
            table.add_row(
                label,
                f"{s.start_line}-{s.end_line}",
                str(s.alias_count),
                str(s.export_count),
                str(s.function_count),
                str(s.plugin_count),
                str(s.other_count),
            )
        self.console.print(table)

        if show_content:
            for s in sections:
                syntax = Syntax(s.content, "bash", theme="monokai",
                                line_numbers=True, start_line=s.start_line)
                self.console.print(Panel(syntax, title=f"[bold]{s.label}[/bold]", border_style="cyan"))

    def print_entries(self, entries: Iterable[Entry]):
        table = Table(title="Entries", show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Kind", style="green")
        table.add_column("Value")
        table.add_column("Section", style="cyan")

        for e in entries:
            table.add_row(str(e.line_number), e.kind.value, _entry_value(e), e.section_label or "")
        self.console.print(table)

    def print_markers(self, markers: Iterable[SectionMarker]):
        table = Table(title="Section Markers", show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Type", style="green")
        table.add_column("Name", style="cyan")
        table.add_column("Priority", justify="right")

        for m in markers:
            table.add_row(str(m.line_number), m.type.value, m.name, str(m.priority))
        self.console.print(table)

    def print_suggestions(self, suggestions: List[Suggestion]):
        if not suggestions:
            self.console.print("[green]No organization suggestions. Nicely structured![/green]")
            return
        for s in suggestions:
            style = PRIORITY_STYLES.get(s.priority, "white")
            self.console.print(f"[{style}]{s.priority.upper():>6}[/{style}]  line {s.line_number}: {s.suggestion}")

    def print_issues(self, issues: List[str]):
        if not issues:
            self.console.print("[green]No content issues found.[/green]")
            return
        for issue in issues:
            self.console.print(f"[bold yellow]WARNING:[/bold yellow] {issue}")
