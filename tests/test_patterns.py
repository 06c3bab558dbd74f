import logging

import pytest

from zshmap.core.models import EntryKind, MarkerType
from zshmap.core.settings import ScanSettings
from zshmap.parsing.patterns import (
    BUILTIN_MARKER_GRAMMARS,
    CUSTOM_PATTERN_PRIORITY,
    PatternRegistry,
    compile_custom_pattern,
)


@pytest.mark.parametrize("line,kind", [
    ("alias ll='ls -la'", EntryKind.ALIAS),
    ("export EDITOR=vim", EntryKind.EXPORT),
    ('eval "$(starship init zsh)"', EntryKind.EVAL),
    ("setopt AUTO_CD", EntryKind.SETOPT),
    ("plugins=(git docker)", EntryKind.PLUGIN),
    ("function greet {", EntryKind.FUNCTION),
    ("mkcd() { mkdir -p $1 && cd $1 }", EntryKind.FUNCTION),
    ("source ~/.aliases", EntryKind.SOURCE),
    (". ~/.zsh_local", EntryKind.SOURCE),
    ("autoload -Uz compinit", EntryKind.AUTOLOAD),
    ("fpath=(~/.zfunc $fpath)", EntryKind.FPATH),
    ("PATH=$HOME/bin:$PATH", EntryKind.PATH),
    ("path+=(/opt/bin)", EntryKind.PATH),
    ('ZSH_THEME="agnoster"', EntryKind.THEME),
    ("compinit", EntryKind.COMPLETION),
    ("zstyle ':completion:*' menu select", EntryKind.COMPLETION),
    ("HISTFILE=~/.zsh_history", EntryKind.HISTORY),
    ("bindkey -v", EntryKind.KEYBINDING),
])
def test_entry_grammar_kinds(line, kind):
    matched = PatternRegistry().match_entry(line)
    assert matched is not None
    assert matched[0] is kind


@pytest.mark.parametrize("line", [
    "echo hello",
    "alias broken=",
    "export EMPTY=",
    "plugins=()",
    "ZSH_THEME=''",
    "if [[ -f ~/.fzf.zsh ]]; then",
])
def test_unrecognized_statements_have_no_kind(line):
    assert PatternRegistry().match_entry(line) is None


def test_alias_wins_over_later_grammars():
    """First grammar in priority order decides the kind."""
    kind, _ = PatternRegistry().match_entry("alias src='source ~/.zshrc'")
    assert kind is EntryKind.ALIAS


def test_count_all_counts_each_line_once():
    text = "plugins=(git docker node)\nalias a='b'\necho x\n\nexport X=1"
    counts = PatternRegistry().count_all(text)
    assert counts[EntryKind.PLUGIN] == 1
    assert counts[EntryKind.ALIAS] == 1
    assert counts[EntryKind.EXPORT] == 1
    assert EntryKind.OTHER not in counts
    assert sum(counts.values()) == 3


def test_custom_pattern_is_anchored_and_case_insensitive():
    compiled = compile_custom_pattern(r"#\s*==>\s*(.+)", "header")
    assert compiled is not None
    assert compiled.pattern.startswith("^")
    assert compiled.match("# ==> tools").group(1) == "tools"
    assert compiled.match("echo # ==> tools") is None


@pytest.mark.parametrize("source,logged", [
    (r"# (\w+) (\w+)", "must contain exactly one capture group, found 2"),
    (r"# \w+", "must contain exactly one capture group, found 0"),
    (r"# ([unclosed", "Invalid header pattern"),
])
def test_invalid_custom_patterns_are_rejected_and_logged(source, logged, caplog):
    with caplog.at_level(logging.WARNING, logger="zshmap.patterns"):
        assert compile_custom_pattern(source, "header") is None
    assert logged in caplog.text


@pytest.mark.parametrize("source", ["", "   ", None])
def test_blank_custom_pattern_is_silently_unset(source, caplog):
    with caplog.at_level(logging.WARNING, logger="zshmap.patterns"):
        assert compile_custom_pattern(source, "header") is None
    assert caplog.text == ""


def test_rejected_header_leaves_builtin_detection_intact():
    settings = ScanSettings(enable_custom_header_pattern=True, custom_header_pattern=r"# (\w+) (\w+)")
    registry = PatternRegistry(settings)
    assert registry.marker_grammars == BUILTIN_MARKER_GRAMMARS

    grammar, name = registry.match_marker("## Aliases")
    assert grammar.type is MarkerType.HASH
    assert name == "Aliases"


def test_custom_header_is_tried_first():
    settings = ScanSettings(enable_custom_header_pattern=True, custom_header_pattern=r"#\s*>>\s*(.+)")
    grammar, name = PatternRegistry(settings).match_marker("# >> Git Helpers")
    assert grammar.type is MarkerType.LABELED
    assert grammar.priority == CUSTOM_PATTERN_PRIORITY
    assert name == "Git Helpers"


def test_custom_pattern_ignored_unless_enabled():
    settings = ScanSettings(custom_header_pattern=r"#\s*>>\s*(.+)")
    assert PatternRegistry(settings).match_marker("# >> Git Helpers") is None


def test_custom_start_and_end_patterns():
    settings = ScanSettings(
        enable_custom_start_end_patterns=True,
        custom_start_pattern=r"#\s*BEGIN\s+(.+)",
        custom_end_pattern=r"#\s*FINISH(.*)",
    )
    registry = PatternRegistry(settings)

    grammar, name = registry.match_marker("# begin tools")
    assert grammar.type is MarkerType.CUSTOM_START
    assert name == "tools"

    grammar, name = registry.match_marker("# FINISH")
    assert grammar.type is MarkerType.CUSTOM_END
    assert name == ""


def test_disabling_defaults_removes_builtin_markers():
    registry = PatternRegistry(ScanSettings(enable_defaults=False))
    assert registry.marker_grammars == ()
    assert registry.match_marker("## Aliases") is None
    # Entry grammars are unaffected
    assert registry.match_entry("alias a='b'")[0] is EntryKind.ALIAS
