"""
Integration checks: one walk of the scanner feeding entries, sections and
markers, plus the YAML export of the result.
"""

from ruamel.yaml import YAML

from zshmap.core.models import EntryKind, MarkerType
from zshmap.core.settings import ScanSettings
from zshmap.parsing.exporter import YamlExporter
from zshmap.parsing.pipeline import ScanPipeline
from zshmap.parsing.scanner import SectionScanner, group_content_into_sections, split_lines


def test_split_lines_handles_crlf_bom_and_final_newline():
    assert split_lines("a\r\nb\n") == ["a", "b"]
    assert split_lines("\ufeffalias a='b'") == ["alias a='b'"]
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("") == []


def test_scan_can_resume_from_saved_context(sample_zshrc):
    scanner = SectionScanner()
    lines = split_lines(sample_zshrc)
    full = list(scanner.steps(lines))

    head = []
    for step in scanner.steps(lines):
        head.append(step)
        if step.index == 9:
            break
    tail = list(scanner.steps(lines, start=10, context=head[-1].after))
    assert head + tail == full


def test_pipeline_run(sample_zshrc):
    result = ScanPipeline().run(sample_zshrc)
    assert result.line_count == 21
    assert len(result.sections) == 5
    assert len(result.entries) == 13
    assert [m.type for m in result.markers] == [
        MarkerType.LABELED,
        MarkerType.HASH,
        MarkerType.DASHED_START,
        MarkerType.DASHED_END,
        MarkerType.FUNCTION_START,
        MarkerType.FUNCTION_END,
    ]
    assert [e.name for e in result.entries_of(EntryKind.PLUGIN)] == ["git", "docker", "kubectl"]
    assert result.kind_totals()[EntryKind.HISTORY] == 2


def test_entry_labels_follow_open_sections_not_ranges(sample_zshrc):
    """
    "## Aliases" is never closed: the dashed end pops only "History", so the
    trailing bindkey still carries the Aliases label while its line range is
    Unlabeled.
    """
    result = ScanPipeline().run(sample_zshrc)
    assert [e.line_number for e in result.entries_in("Aliases")] == [8, 9, 21]

    [bindkey] = result.entries_of(EntryKind.KEYBINDING)
    assert bindkey.section_label == "Aliases"
    tail = result.sections[-1]
    assert (tail.label, tail.start_line, tail.end_line) == ("Unlabeled", 20, 21)


def test_custom_start_end_patterns_drive_sections():
    settings = ScanSettings(
        enable_custom_start_end_patterns=True,
        custom_start_pattern=r"#\s*BEGIN\s+(.+)",
        custom_end_pattern=r"#\s*FINISH(.*)",
    )
    content = "# BEGIN tools\nalias t='tig'\n# FINISH\necho done\n"
    result = ScanPipeline(settings).run(content)

    assert [(s.label, s.start_line, s.end_line) for s in result.sections] == [
        ("tools", 1, 3),
        ("Unlabeled", 4, 4),
    ]
    assert result.sections[0].alias_count == 1
    by_line = {e.line_number: e for e in result.entries}
    assert by_line[2].section_label == "tools"
    assert by_line[4].section_label is None


def test_pipeline_is_deterministic(sample_zshrc):
    pipeline = ScanPipeline()
    first, second = pipeline.run(sample_zshrc), pipeline.run(sample_zshrc)
    assert first.entries == second.entries
    assert first.sections == second.sections


def test_pipeline_without_default_markers(sample_zshrc):
    result = ScanPipeline(ScanSettings(enable_defaults=False)).run(sample_zshrc)
    assert result.markers == []
    assert len(result.sections) == 1
    assert result.sections[0].label == "Unlabeled"
    # Former marker lines are now plain statements
    assert 7 in {e.line_number for e in result.entries_of(EntryKind.OTHER)}


def test_yaml_export_parses_back(sample_zshrc):
    result = ScanPipeline().run(sample_zshrc)
    text = YamlExporter().export(result, source="~/.zshrc")
    assert text.startswith("# Generated by zshmap")

    data = YAML(typ="safe").load(text)
    assert data["summary"] == {"source": "~/.zshrc", "lines": 21, "sections": 5, "entries": 13}
    assert [s["label"] for s in data["sections"]] == [
        "Oh My Zsh", "Aliases", "History", "Function: setup_env", "Unlabeled",
    ]
    assert data["sections"][1]["content"].startswith("## Aliases ##\nalias ll='ls -la'")
    assert data["entries"][0] == {
        "kind": "export",
        "line_number": 2,
        "original_line": 'export ZSH="$HOME/.oh-my-zsh"',
        "section_label": "Oh My Zsh",
        "variable": "ZSH",
        "value": '"$HOME/.oh-my-zsh"',
    }


def test_yaml_export_without_content(sample_zshrc):
    result = ScanPipeline().run(sample_zshrc)
    data = YAML(typ="safe").load(YamlExporter(include_content=False).export(result))
    assert "source" not in data["summary"]
    assert all("content" not in s for s in data["sections"])


def test_marker_groups():
    content = (
        "# --- Python Environment --- #\n"
        "export PATH=/usr/local/bin:$PATH\n"
        'alias py="python3"\n'
        "\n"
        "# --- End Python Environment --- #\n"
        "\n"
        "# [Node.js Tools]\n"
        'export NODE_PATH="/usr/local/lib/node_modules"\n'
        'alias ni="npm install"'
    )
    groups = group_content_into_sections(content)
    assert [(g.name, g.type, g.start_line, g.end_line) for g in groups] == [
        ("Python Environment", MarkerType.DASHED_START, 1, 4),
        ("Node.js Tools", MarkerType.BRACKETED, 7, 9),
    ]
    assert groups[0].content.startswith("# --- Python Environment --- #\nexport PATH")


def test_marker_groups_without_markers():
    assert group_content_into_sections('export PATH=/usr/local/bin:$PATH\nalias py="python3"') == []


def test_unclosed_marker_group_runs_to_end_of_file():
    content = '# --- Python Environment --- #\nexport PATH=/usr/local/bin:$PATH\nalias py="python3"'
    [group] = group_content_into_sections(content)
    assert group.name == "Python Environment"
    assert group.end_line == 3


def test_function_opens_a_marker_group():
    groups = group_content_into_sections("## Tools\nalias t='tig'\nx() {\n  echo\n}\nalias u='up'")
    assert [(g.name, g.type, g.start_line, g.end_line) for g in groups] == [
        ("Tools", MarkerType.HASH, 1, 2),
        ("x", MarkerType.FUNCTION_START, 3, 4),
    ]
